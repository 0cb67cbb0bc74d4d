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
"""Resolvers for JavaScript and CSS-preprocessor partials.

Each resolver is a callable taking a ResolutionRequest and returning an
absolute path, or "" when the partial does not resolve:

- es6_lookup: generic path join for ES6 imports
- amd_lookup: RequireJS baseUrl/paths/packages resolution
- commonjs_lookup: Node.js require() resolution
- webpack_lookup: webpack resolve.alias/modules resolution
- sass_lookup: Sass partials (.scss, .sass)
- stylus_lookup: Stylus imports (.styl)
"""

from __future__ import annotations

from .base import (
    NODE_BUILTIN_MODULES,
    UNRESOLVED,
    Resolver,
    is_node_builtin,
    is_relative,
    strip_loaders,
)
from .node import NodeModuleResolver
from .es6 import es6_lookup, resolve_dependency_path
from .amd import amd_lookup
from .commonjs import commonjs_lookup
from .webpack import WebpackResolveOptions, webpack_lookup
from .sass import sass_lookup
from .stylus import stylus_lookup

__all__ = [
    # Base types
    "Resolver",
    "UNRESOLVED",
    "NODE_BUILTIN_MODULES",
    "is_node_builtin",
    "is_relative",
    "strip_loaders",
    # Node resolution
    "NodeModuleResolver",
    # JavaScript family
    "es6_lookup",
    "resolve_dependency_path",
    "amd_lookup",
    "commonjs_lookup",
    "webpack_lookup",
    "WebpackResolveOptions",
    # CSS family
    "sass_lookup",
    "stylus_lookup",
]
