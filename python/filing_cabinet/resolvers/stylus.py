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
"""Stylus @import/@require resolver."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, List

from .base import UNRESOLVED, first_existing

if TYPE_CHECKING:
    from ..core.request import ResolutionRequest

logger = logging.getLogger(__name__)

STYLUS_EXTENSION = ".styl"


def stylus_candidates(partial: str) -> List[str]:
    # Explicit .styl / .css imports are taken as written
    if partial.endswith((STYLUS_EXTENSION, ".css")):
        return [partial]
    return [partial + STYLUS_EXTENSION, os.path.join(partial, "index" + STYLUS_EXTENSION)]


def stylus_lookup(request: ResolutionRequest) -> str:
    """Resolve a Stylus partial against the file's directory, then the project."""
    if not request.partial:
        return UNRESOLVED

    names = stylus_candidates(request.partial)
    for search_dir in (request.file_directory, request.project_directory):
        resolved = first_existing(os.path.join(search_dir, name) for name in names)
        if resolved:
            return os.path.abspath(resolved)

    logger.debug(f"Unable to resolve stylus partial {request.partial} from {request.filename}")
    return UNRESOLVED
