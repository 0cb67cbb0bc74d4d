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
"""webpack-aware resolver.

Reads the `resolve` section of a webpack config statically and applies it the
way webpack's resolver does:

- loader prefixes ('style!css!./a.css', '!!raw!x', '-!x') and query strings
  are stripped, leaving the resource path
- `resolve.alias` rewrites the request (object or array form; a key ending
  in '$' only matches exactly; a false target ignores the module)
- relative requests resolve against the requiring file's directory
- bare requests search `resolve.modules` (default ['node_modules']) using
  `resolve.extensions` and `resolve.mainFields`

Config files that cannot be loaded statically produce "" and a warning.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from ..core.errors import ConfigError
from ..parsing.config import load_webpack_config
from .base import UNRESOLVED, strip_loaders
from .node import NodeModuleResolver

if TYPE_CHECKING:
    from ..core.request import ResolutionRequest

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".js", ".json", ".wasm")
DEFAULT_MAIN_FIELDS = ("browser", "module", "main")
DEFAULT_MODULES = ("node_modules",)

# Alias target meaning "resolve to nothing"
IGNORED = False


@dataclass
class AliasEntry:
    """One resolve.alias rule.

    Attributes:
        name: Request prefix to match (without a trailing '$')
        target: Replacement path, or False to ignore the module
        only_module: Match the request exactly (the 'name$' form)
    """

    name: str
    target: Any
    only_module: bool = False

    def rewrite(self, request: str) -> Optional[str]:
        """Rewritten request if this rule matches, else None."""
        if request == self.name:
            return self.target
        if not self.only_module and request.startswith(self.name + "/"):
            if self.target is IGNORED:
                return self.target
            return self.target + request[len(self.name):]
        return None


@dataclass
class WebpackResolveOptions:
    """The parts of webpack's `resolve` config used for path resolution."""

    alias: List[AliasEntry] = field(default_factory=list)
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    main_fields: Tuple[str, ...] = DEFAULT_MAIN_FIELDS
    modules: Tuple[str, ...] = DEFAULT_MODULES

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "WebpackResolveOptions":
        resolve = config.get("resolve") or {}
        if not isinstance(resolve, dict):
            return cls()

        return cls(
            alias=parse_alias(resolve.get("alias")),
            extensions=_string_tuple(resolve.get("extensions"), DEFAULT_EXTENSIONS),
            main_fields=_string_tuple(resolve.get("mainFields"), DEFAULT_MAIN_FIELDS),
            modules=_string_tuple(resolve.get("modules"), DEFAULT_MODULES),
        )

    def apply_alias(self, request: str) -> Any:
        for entry in self.alias:
            rewritten = entry.rewrite(request)
            if rewritten is not None:
                logger.debug(f"webpack alias {entry.name} rewrote {request} to {rewritten}")
                return rewritten
        return request


def _string_tuple(value: Any, default: Tuple[str, ...]) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return default
    strings = tuple(item for item in value if isinstance(item, str))
    # "..." splices in webpack's defaults
    if "..." in strings:
        index = strings.index("...")
        strings = strings[:index] + default + strings[index + 1:]
    return strings


def parse_alias(alias: Any) -> List[AliasEntry]:
    """Normalize resolve.alias (object or array form) into rules."""
    entries: List[AliasEntry] = []

    if isinstance(alias, dict):
        items = [{"name": key, "alias": value} for key, value in alias.items()]
    elif isinstance(alias, list):
        items = [item for item in alias if isinstance(item, dict)]
    else:
        return entries

    for item in items:
        name = item.get("name")
        target = item.get("alias")
        if not isinstance(name, str) or not name:
            continue
        if isinstance(target, list):
            target = next((t for t in target if isinstance(t, str)), None)
        if not isinstance(target, str) and target is not IGNORED:
            continue

        only_module = bool(item.get("onlyModule"))
        if name.endswith("$"):
            name = name[:-1]
            only_module = True
        entries.append(AliasEntry(name=name, target=target, only_module=only_module))

    return entries


def webpack_lookup(request: ResolutionRequest) -> str:
    """Resolve a partial through a webpack config.

    Returns:
        Absolute path, or "" if unresolved or the config cannot be loaded
    """
    if not request.webpack_config:
        return UNRESOLVED

    config_path = os.path.abspath(request.webpack_config)
    try:
        config = load_webpack_config(config_path)
    except ConfigError as e:
        logger.warning(f"Unable to load webpack config {config_path}: {e}")
        return UNRESOLVED

    options = WebpackResolveOptions.from_config(config)

    specifier = strip_loaders(request.partial)
    if not specifier:
        return UNRESOLVED

    specifier = options.apply_alias(specifier)
    if specifier is IGNORED:
        logger.debug(f"{request.partial} is ignored by a webpack alias")
        return UNRESOLVED

    resolver = NodeModuleResolver(
        extensions=options.extensions,
        main_fields=options.main_fields,
        module_directories=options.modules,
    )
    resolved = resolver.resolve(specifier, request.file_directory)

    if resolved is None:
        logger.debug(f"Unable to resolve {request.partial} with webpack config {config_path}")
        return UNRESOLVED

    return resolved
