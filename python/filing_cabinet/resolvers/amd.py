# Copyright Rand Arete @ Ananke 2025
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================
"""AMD (RequireJS) module resolver.

Resolution follows RequireJS' module-ID-to-path rules:

1. A loader plugin prefix ('text!', 'hgn!') is stripped
2. Relative IDs ('./bar') resolve against the requiring file's directory
3. Other IDs are mapped through `paths` (longest ID-segment prefix wins,
   array values are fallbacks tried in order) and `packages`, then resolved
   against `baseUrl`
4. '.js' is appended unless the ID already ends with it

`baseUrl` is relative to the request's project directory, or to the config
file's directory when no project directory is given.

Example config:
    {
        "baseUrl": "js",
        "paths": {"jquery": "vendor/jquery-3.7.1", "lib": ["lib-cdn", "lib"]},
        "packages": [{"name": "cart", "location": "modules/cart", "main": "cart"}]
    }
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..parsing.config import load_requirejs_config
from .base import UNRESOLVED, first_existing, is_relative, strip_loaders

if TYPE_CHECKING:
    from ..core.request import ResolutionRequest

logger = logging.getLogger(__name__)


def load_config(request: ResolutionRequest) -> Dict[str, Any]:
    """Inline config if given, else the config file's contents.

    Raises:
        ConfigError: If config_path is set but cannot be loaded
    """
    if request.config is not None:
        return request.config
    if request.config_path:
        return load_requirejs_config(request.config_path)
    return {}


def base_url_directory(request: ResolutionRequest, config: Dict[str, Any]) -> str:
    """Absolute directory that baseUrl-relative module IDs resolve against."""
    if request.directory:
        root = os.path.abspath(request.directory)
    elif request.config_path:
        root = os.path.dirname(os.path.abspath(request.config_path))
    else:
        root = request.file_directory

    base_url = config.get("baseUrl") or "./"
    return os.path.normpath(os.path.join(root, base_url))


def _package_path(module_id: str, packages: List[Any]) -> Optional[str]:
    for package in packages:
        if isinstance(package, str):
            package = {"name": package}
        if not isinstance(package, dict) or not package.get("name"):
            continue

        name = package["name"]
        location = package.get("location") or name
        if module_id == name:
            main = package.get("main") or "main"
            if main.endswith(".js"):
                main = main[:-3]
            return os.path.join(location, main)
        if module_id.startswith(name + "/"):
            return os.path.join(location, module_id[len(name) + 1:])
    return None


def module_paths(module_id: str, config: Dict[str, Any]) -> List[str]:
    """Candidate paths (without extension) for a non-relative module ID."""
    paths = config.get("paths") or {}
    segments = module_id.split("/")

    for i in range(len(segments), 0, -1):
        prefix = "/".join(segments[:i])
        if prefix not in paths:
            continue
        targets = paths[prefix]
        if isinstance(targets, str):
            targets = [targets]
        rest = segments[i:]
        return [
            "/".join([target.rstrip("/")] + rest)
            for target in targets
            if isinstance(target, str) and "://" not in target
        ]

    package_path = _package_path(module_id, config.get("packages") or [])
    if package_path is not None:
        return [package_path]

    return [module_id]


def _with_extension(path: str) -> List[str]:
    if path.endswith(".js"):
        return [path]
    return [path + ".js", path]


def amd_lookup(request: ResolutionRequest) -> str:
    """Resolve an AMD module ID to an existing file.

    Returns:
        Absolute path, or "" if unresolved

    Raises:
        ConfigError: If config_path points at an unreadable config
    """
    partial = strip_loaders(request.partial)
    if not partial:
        return UNRESOLVED

    config = load_config(request)

    if is_relative(partial):
        bases = [os.path.join(request.file_directory, partial)]
    elif os.path.isabs(partial):
        bases = [partial]
    else:
        base_url = base_url_directory(request, config)
        bases = [os.path.join(base_url, path) for path in module_paths(partial, config)]

    for base in bases:
        resolved = first_existing(_with_extension(os.path.normpath(base)))
        if resolved:
            logger.debug(f"amd resolved {request.partial} to {resolved}")
            return os.path.abspath(resolved)

    logger.debug(f"Unable to resolve {request.partial} from {request.filename} with amd")
    return UNRESOLVED
