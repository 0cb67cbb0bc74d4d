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
"""Generic ES6 import resolver.

Joins the partial onto the importing file's directory (relative partials) or
the project directory (everything else), borrowing the importing file's
extension when the partial has none. The path is only returned if the file
exists; otherwise "" tells the dispatcher to fall back to CommonJS
resolution.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from .base import UNRESOLVED, is_relative

if TYPE_CHECKING:
    from ..core.request import ResolutionRequest

logger = logging.getLogger(__name__)


def resolve_dependency_path(partial: str, filename: str, directory: str) -> str:
    """Compute (without probing) the path an ES6 import refers to."""
    if is_relative(partial):
        base = os.path.dirname(os.path.abspath(filename))
    else:
        base = os.path.abspath(directory) if directory else os.path.dirname(os.path.abspath(filename))

    path = os.path.normpath(os.path.join(base, partial))

    file_extension = os.path.splitext(filename)[1]
    if not os.path.splitext(partial)[1] and file_extension:
        path += file_extension
    return path


def es6_lookup(request: ResolutionRequest) -> str:
    """Resolve an ES6 import to an existing file, or ""."""
    if not request.partial:
        return UNRESOLVED

    path = resolve_dependency_path(request.partial, request.filename, request.directory)
    if not os.path.isfile(path):
        logger.debug(f"es6 path {path} for {request.partial} does not exist")
        return UNRESOLVED

    return path
