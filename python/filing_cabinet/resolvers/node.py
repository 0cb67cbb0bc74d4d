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
"""Node.js-style module resolution.

Implements the file / directory / node_modules lookup that Node's require()
performs, parameterized so that both the CommonJS resolver and the webpack
resolver can share it:

    resolver = NodeModuleResolver(extensions=(".js", ".json"))
    resolver.resolve("./bar", basedir="/project/src")
    resolver.resolve("lodash.assign", basedir="/project/src")

References:
    - Node.js Module Resolution: https://nodejs.org/api/modules.html#all-together
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from ..parsing.config import parse_package_json
from .base import first_existing, is_path_like

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".js", ".json")
DEFAULT_MAIN_FIELDS = ("main",)
DEFAULT_MODULE_DIRECTORIES = ("node_modules",)


class NodeModuleResolver:
    """Resolves specifiers the way Node's require() does.

    Resolution order for a specifier X requested from basedir:
    1. Relative or absolute X: load X as a file, then as a directory
    2. Bare X: for each module search path, load <path>/X as a file, then
       as a directory

    Attributes:
        extensions: Extensions appended when probing files
        main_fields: package.json fields naming a package's entry point
        module_directories: Directory names searched hierarchically
            (relative names) or directly (absolute paths)
        extra_paths: Additional directories searched after module_directories
    """

    def __init__(
        self,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        main_fields: Sequence[str] = DEFAULT_MAIN_FIELDS,
        module_directories: Sequence[str] = DEFAULT_MODULE_DIRECTORIES,
        extra_paths: Iterable[str] = (),
    ) -> None:
        self.extensions = tuple(extensions)
        self.main_fields = tuple(main_fields)
        self.module_directories = tuple(module_directories)
        self.extra_paths = tuple(os.path.abspath(p) for p in extra_paths if p)

    def resolve(self, specifier: str, basedir: str) -> Optional[str]:
        """Resolve specifier from basedir.

        Args:
            specifier: Module specifier (relative, absolute or bare)
            basedir: Directory of the requesting file

        Returns:
            Absolute path of the resolved file, or None
        """
        if not specifier:
            return None

        basedir = os.path.abspath(basedir)

        if is_path_like(specifier):
            return self.load(os.path.join(basedir, specifier), directory_only=specifier.endswith("/"))

        for search_path in self.module_search_paths(basedir):
            resolved = self.load(os.path.join(search_path, specifier), directory_only=specifier.endswith("/"))
            if resolved:
                return resolved

        return None

    def load(self, target: str, directory_only: bool = False) -> Optional[str]:
        """Load target as a file, then as a directory."""
        target = os.path.normpath(target)
        resolved = None
        if not directory_only:
            resolved = self.load_as_file(target)
        if resolved is None:
            resolved = self.load_as_directory(target)
        return os.path.abspath(resolved) if resolved else None

    def load_as_file(self, target: str) -> Optional[str]:
        return first_existing([target] + [target + ext for ext in self.extensions])

    def load_as_directory(self, target: str) -> Optional[str]:
        if not os.path.isdir(target):
            return None

        package = parse_package_json(Path(target) / "package.json")
        if package is not None:
            entry = package.entry_point(self.main_fields)
            if entry:
                entry_path = os.path.normpath(os.path.join(target, entry))
                resolved = self.load_as_file(entry_path) or self.load_index(entry_path)
                if resolved:
                    return resolved
                logger.debug(f"Entry point {entry!r} of {target} does not exist, trying index")

        return self.load_index(target)

    def load_index(self, target: str) -> Optional[str]:
        return first_existing(os.path.join(target, "index" + ext) for ext in self.extensions)

    def module_search_paths(self, basedir: str) -> List[str]:
        """Directories to search for a bare specifier, nearest first."""
        paths: List[str] = []
        for name in self.module_directories:
            if os.path.isabs(name):
                paths.append(name)
                continue
            current = basedir
            while True:
                if os.path.basename(current) != name:
                    paths.append(os.path.join(current, name))
                parent = os.path.dirname(current)
                if parent == current:
                    break
                current = parent
        paths.extend(self.extra_paths)
        return paths
