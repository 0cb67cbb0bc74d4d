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
"""CommonJS (require) resolver.

Resolves a partial with Node's algorithm from the directory of the file that
requires it. The request's project directory is appended to the module
search paths, so project-local bare specifiers ('subdir') resolve even
without a node_modules entry.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .base import UNRESOLVED, is_node_builtin
from .node import DEFAULT_EXTENSIONS, DEFAULT_MAIN_FIELDS, NodeModuleResolver

if TYPE_CHECKING:
    from ..core.request import ResolutionRequest

logger = logging.getLogger(__name__)


def commonjs_lookup(request: ResolutionRequest) -> str:
    """Resolve a require() partial.

    Node.js core modules have no file and resolve to "".

    Args:
        request: Resolution request; node_modules_config["entry"] selects the
            package.json field used as a package's entry point

    Returns:
        Absolute path, or "" if unresolved
    """
    partial = request.partial
    if not partial:
        return UNRESOLVED

    if is_node_builtin(partial):
        logger.debug(f"{partial} is a Node.js core module, no file to resolve")
        return UNRESOLVED

    main_fields = DEFAULT_MAIN_FIELDS
    entry = (request.node_modules_config or {}).get("entry")
    if entry:
        main_fields = (entry,) + DEFAULT_MAIN_FIELDS

    resolver = NodeModuleResolver(
        extensions=DEFAULT_EXTENSIONS,
        main_fields=main_fields,
        extra_paths=[request.project_directory],
    )
    resolved = resolver.resolve(partial, request.file_directory)

    if resolved is None:
        logger.debug(f"Unable to resolve {partial} from {request.filename} with commonjs")
        return UNRESOLVED

    logger.debug(f"commonjs resolved {partial} to {resolved}")
    return resolved
