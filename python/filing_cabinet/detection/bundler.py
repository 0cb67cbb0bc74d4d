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
"""Bundler-config detection.

A request that names a webpack config is resolved through that config and
nothing else, regardless of what the file's syntax suggests.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..core.request import ResolutionRequest

logger = logging.getLogger(__name__)


def detect_bundler_config(request: ResolutionRequest) -> Optional[str]:
    """Absolute path of the request's webpack config, or None.

    Only the presence of the option is checked here; loading the config is
    left to the webpack resolver.
    """
    if not request.webpack_config:
        return None

    config_path = os.path.abspath(request.webpack_config)
    logger.debug(f"Using webpack config {config_path} for {request.filename}")
    return config_path
