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
"""Exceptions raised by filing_cabinet.

An unresolved partial is never an error: resolvers return an empty string.
Exceptions are reserved for caller mistakes, such as registering a
non-callable resolver or pointing a request at a config file that cannot be
read.
"""

from __future__ import annotations

from typing import Optional


class CabinetError(Exception):
    """Base class for all filing_cabinet errors."""


class ConfigError(CabinetError, ValueError):
    """A module-loader or bundler config file could not be loaded.

    Attributes:
        path: Path of the offending config file (if known)
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
