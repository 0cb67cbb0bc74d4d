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
"""Resolution dispatcher.

The Cabinet owns an ExtensionRegistry and the JavaScript-family strategies.
Resolving a request:

1. The extension of request.filename selects a resolver from the registry
   (no resolver -> "")
2. For .js the built-in resolver is Cabinet.js_lookup:
   a. a webpack config selects the webpack resolver exclusively
   b. otherwise the file is classified as ES6, AMD or CommonJS (ES6 with a
      RequireJS config counts as AMD)
   c. an empty ES6 result is retried once with the CommonJS resolver
3. The resolver's result is returned as is; exceptions propagate

Example:
    >>> cabinet = Cabinet()
    >>> cabinet.resolve(ResolutionRequest(
    ...     partial="./bar", filename="js/commonjs/foo.js", directory="js/commonjs"))
    '/abs/js/commonjs/bar.js'
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..detection.module_type import JSStrategy, select_js_strategy
from ..resolvers.amd import amd_lookup
from ..resolvers.base import UNRESOLVED, Resolver
from ..resolvers.commonjs import commonjs_lookup
from ..resolvers.es6 import es6_lookup
from ..resolvers.webpack import webpack_lookup
from .registry import ExtensionRegistry
from .request import ResolutionRequest

logger = logging.getLogger(__name__)


class Cabinet:
    """Selects and runs the resolver for a dependency partial.

    Attributes:
        registry: Extension -> resolver mapping
        strategies: JavaScript-family resolvers, keyed by JSStrategy

    Example:
        >>> cabinet = Cabinet()
        >>> cabinet.register(".foobar", lambda request: "/tmp/foo.foobar")
        >>> cabinet.supported_file_extensions()
        ['.js', '.scss', '.sass', '.styl', '.foobar']
    """

    def __init__(
        self,
        registry: Optional[ExtensionRegistry] = None,
        es6: Resolver = es6_lookup,
        amd: Resolver = amd_lookup,
        commonjs: Resolver = commonjs_lookup,
        webpack: Resolver = webpack_lookup,
    ) -> None:
        self.strategies: Dict[JSStrategy, Resolver] = {
            JSStrategy.ES6: es6,
            JSStrategy.AMD: amd,
            JSStrategy.COMMONJS: commonjs,
            JSStrategy.WEBPACK: webpack,
        }
        self.registry = registry if registry is not None else ExtensionRegistry.with_defaults(self.js_lookup)

    def __call__(self, request: Optional[ResolutionRequest] = None, **options: Any) -> str:
        return self.resolve(request, **options)

    def resolve(self, request: Optional[ResolutionRequest] = None, **options: Any) -> str:
        """Resolve a partial to an absolute path.

        Args:
            request: The request; alternatively pass its fields as keyword
                options (partial=..., filename=..., webpackConfig=...)

        Returns:
            Absolute path, or "" if the partial does not resolve or the file
            type has no resolver
        """
        if request is None:
            request = ResolutionRequest.from_options(**options)
        elif options:
            request = request.replace(**options)

        extension = request.extension
        resolver = self.registry.lookup(extension)
        if resolver is None:
            logger.debug(f"No resolver for extension {extension!r} of {request.filename}")
            return UNRESOLVED

        result = resolver(request)
        logger.debug(f"Resolved {request.partial} in {request.filename} to {result!r}")
        return result if result is not None else UNRESOLVED

    def js_lookup(self, request: ResolutionRequest) -> str:
        """Resolve a partial found in a JavaScript file."""
        strategy = select_js_strategy(request)
        logger.debug(f"Using {strategy.value} resolution for {request.filename}")

        result = self.strategies[strategy](request)

        if strategy is JSStrategy.ES6 and not result:
            logger.debug(f"es6 lookup of {request.partial} failed, falling back to commonjs")
            result = self.strategies[JSStrategy.COMMONJS](request)

        return result if result is not None else UNRESOLVED

    def register(self, extension: str, resolver: Resolver) -> None:
        """Bind a custom resolver to a file extension."""
        self.registry.register(extension, resolver)

    def supported_file_extensions(self) -> List[str]:
        """Extensions with a resolver, in registration order."""
        return list(self.registry.supported_file_extensions)
