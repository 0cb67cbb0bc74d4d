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
"""Sass import resolver (.scss and .sass).

A partial is resolved with the extension of the importing file only, so
`.scss` files never pick up `.sass` siblings and vice versa. For an import of
'foo/bar' from `main.scss` the candidates are:

    foo/bar.scss, foo/_bar.scss, foo/bar/_index.scss, foo/bar/index.scss

searched first in the importing file's directory, then in the project
directory. A leading '~' (webpack's sass-loader convention) searches
`<directory>/node_modules` instead.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, List

from .base import UNRESOLVED, first_existing

if TYPE_CHECKING:
    from ..core.request import ResolutionRequest

logger = logging.getLogger(__name__)


def sass_candidates(partial: str, extension: str) -> List[str]:
    """Relative file names a Sass partial may refer to."""
    head, name = os.path.split(partial)

    if name.endswith(extension):
        names = [name, f"_{name}"] if not name.startswith("_") else [name]
        return [os.path.join(head, n) for n in names]

    candidates = [os.path.join(head, f"{name}{extension}")]
    if not name.startswith("_"):
        candidates.append(os.path.join(head, f"_{name}{extension}"))
    candidates.extend([
        os.path.join(partial, f"_index{extension}"),
        os.path.join(partial, f"index{extension}"),
    ])
    return candidates


def sass_lookup(request: ResolutionRequest) -> str:
    """Resolve a Sass @import/@use partial.

    Returns:
        Absolute path, or "" if unresolved
    """
    partial = request.partial
    extension = request.extension
    if not partial or not extension:
        return UNRESOLVED

    if partial.startswith("~"):
        partial = partial[1:]
        search_dirs = [os.path.join(request.project_directory, "node_modules")]
    else:
        search_dirs = [request.file_directory, request.project_directory]

    names = sass_candidates(partial, extension)
    for search_dir in search_dirs:
        resolved = first_existing(os.path.join(search_dir, name) for name in names)
        if resolved:
            return os.path.abspath(resolved)

    logger.debug(f"Unable to resolve sass partial {request.partial} from {request.filename}")
    return UNRESOLVED
