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
"""filing_cabinet: find the file a JavaScript or CSS dependency points to.

Given a partial (the module reference as written in source, e.g. './bar',
'lodash.assign' or 'hgn!resolve'), the file containing it and the project
directory, filing_cabinet picks a resolver for the file type and module
system and returns the absolute path of the dependency, or "" when it does
not resolve.

Key Components:
    - core: ResolutionRequest, ExtensionRegistry and the Cabinet dispatcher
    - detection: ES6/AMD/CommonJS classification, webpack config detection
    - resolvers: es6, amd, commonjs, webpack, sass and stylus resolvers
    - parsing: tree-sitter based static reading of JavaScript and configs

Usage:
    >>> import filing_cabinet
    >>> filing_cabinet.resolve(
    ...     partial="./bar",
    ...     filename="js/commonjs/foo.js",
    ...     directory="js/commonjs",
    ... )
    '/path/to/js/commonjs/bar.js'
    >>> filing_cabinet.register(".vue", my_vue_resolver)
    >>> filing_cabinet.supported_file_extensions()
    ['.js', '.scss', '.sass', '.styl', '.vue']
"""

from __future__ import annotations

from typing import Any, List, Optional

from .core import (
    Cabinet,
    CabinetError,
    ConfigError,
    ExtensionRegistry,
    ResolutionRequest,
)
from .detection import JSStrategy, ModuleType, classify_source
from .resolvers import Resolver

# Process-wide cabinet backing the module-level functions
default_cabinet = Cabinet()


def resolve(request: Optional[ResolutionRequest] = None, **options: Any) -> str:
    """Resolve a partial with the default cabinet."""
    return default_cabinet.resolve(request, **options)


def register(extension: str, resolver: Resolver) -> None:
    """Register a resolver for an extension on the default cabinet.

    Call during setup; registration is not synchronized with resolution.
    """
    default_cabinet.register(extension, resolver)


def supported_file_extensions() -> List[str]:
    """Extensions the default cabinet can resolve."""
    return default_cabinet.supported_file_extensions()


__all__ = [
    "Cabinet",
    "CabinetError",
    "ConfigError",
    "ExtensionRegistry",
    "ResolutionRequest",
    "JSStrategy",
    "ModuleType",
    "Resolver",
    "classify_source",
    "default_cabinet",
    "resolve",
    "register",
    "supported_file_extensions",
]

__version__ = "0.1.0"
