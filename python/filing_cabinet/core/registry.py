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
"""Extension registry: maps file extensions to resolvers.

The registry is seeded once with the built-in resolvers and may be extended
at runtime with ``register``. It never shrinks. Registration is a setup-time
operation; concurrent ``register`` calls during resolution are not guarded.

Example:
    >>> registry = ExtensionRegistry()
    >>> registry.register("foobar", lambda request: "")
    >>> registry.supported_file_extensions
    ('.foobar',)
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Mapping, Optional, Tuple

from ..resolvers.base import Resolver

logger = logging.getLogger(__name__)


def normalize_extension(extension: str) -> str:
    """Return extension with exactly one leading dot."""
    if not extension or extension == ".":
        raise ValueError("extension must not be empty")
    return extension if extension.startswith(".") else f".{extension}"


class ExtensionRegistry:
    """Ordered mapping from file extension to resolver.

    Insertion order is preserved; re-registering an extension replaces its
    resolver in place without moving or duplicating it.
    """

    def __init__(self, resolvers: Optional[Mapping[str, Resolver]] = None) -> None:
        self._resolvers: Dict[str, Resolver] = {}
        for extension, resolver in (resolvers or {}).items():
            self.register(extension, resolver)

    @classmethod
    def with_defaults(cls, js_lookup: Resolver) -> "ExtensionRegistry":
        """Create a registry holding the built-in resolvers.

        Args:
            js_lookup: Resolver for the JavaScript family (owned by the cabinet)

        Returns:
            Registry with .js, .scss, .sass and .styl bound
        """
        from ..resolvers.sass import sass_lookup
        from ..resolvers.stylus import stylus_lookup

        return cls(
            {
                ".js": js_lookup,
                ".scss": sass_lookup,
                ".sass": sass_lookup,
                ".styl": stylus_lookup,
            }
        )

    def register(self, extension: str, resolver: Resolver) -> None:
        """Bind a resolver to an extension, replacing any previous binding.

        Args:
            extension: File extension, with or without the leading dot
            resolver: Callable taking a ResolutionRequest and returning a path
        """
        if not callable(resolver):
            raise TypeError(f"resolver for {extension!r} must be callable, got {type(resolver).__name__}")

        extension = normalize_extension(extension)
        if extension in self._resolvers:
            logger.debug(f"Replacing resolver for {extension}")
        self._resolvers[extension] = resolver

    def lookup(self, extension: str) -> Optional[Resolver]:
        """Get the resolver bound to an extension, or None."""
        if extension in ("", "."):
            return None
        return self._resolvers.get(normalize_extension(extension))

    @property
    def supported_file_extensions(self) -> Tuple[str, ...]:
        """Registered extensions in registration order."""
        return tuple(self._resolvers)

    def __contains__(self, extension: object) -> bool:
        if not isinstance(extension, str) or extension in ("", "."):
            return False
        return normalize_extension(extension) in self._resolvers

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._resolvers))

    def __len__(self) -> int:
        return len(self._resolvers)

    def __repr__(self) -> str:
        return f"ExtensionRegistry({', '.join(self._resolvers)})"
