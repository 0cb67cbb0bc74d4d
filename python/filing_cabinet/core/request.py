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
"""Resolution request value object.

A ResolutionRequest carries everything a resolver needs to map one partial
to a file: the partial itself, the file that contains it, the project
directory and any module-loader or bundler configuration. Requests are
immutable and are forwarded verbatim to whichever resolver handles them.

Example:
    >>> request = ResolutionRequest.from_options(
    ...     partial="./bar",
    ...     filename="js/commonjs/foo.js",
    ...     directory="js/commonjs",
    ...     webpackConfig="webpack.config.js",
    ... )
    >>> request.webpack_config
    'webpack.config.js'
    >>> request.extension
    '.js'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple

# camelCase option names used across the JavaScript tooling ecosystem
OPTION_ALIASES: Dict[str, str] = {
    "configPath": "config_path",
    "webpackConfig": "webpack_config",
    "nodeModulesConfig": "node_modules_config",
}


@dataclass(frozen=True)
class ResolutionRequest:
    """One partial to resolve.

    Attributes:
        partial: Module reference as written in the source
        filename: Path of the file containing the reference
        directory: Project root used for non-relative resolution
        config: Inline module-loader config (baseUrl, paths, packages)
        config_path: Path to a RequireJS config file (JSON or JS)
        webpack_config: Path to a webpack config file
        node_modules_config: Package entry-point options, e.g. {"entry": "module"}
        source: Contents of filename, if already read
        extra: Resolver-specific options, forwarded untouched
    """

    partial: str
    filename: str
    directory: str = ""
    config: Optional[Dict[str, Any]] = None
    config_path: Optional[str] = None
    webpack_config: Optional[str] = None
    node_modules_config: Optional[Dict[str, Any]] = None
    source: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_options(cls, **options: Any) -> "ResolutionRequest":
        """Build a request from keyword options.

        Accepts snake_case field names and their camelCase equivalents
        (configPath, webpackConfig, nodeModulesConfig). Anything that is not
        a field lands in ``extra``.
        """
        kwargs, extra = _split_options(options, {})

        if "partial" not in kwargs or "filename" not in kwargs:
            raise TypeError("a resolution request needs both 'partial' and 'filename'")

        return cls(extra=extra, **kwargs)

    @property
    def extension(self) -> str:
        """Extension of filename including the leading dot ('' if none)."""
        return os.path.splitext(self.filename)[1]

    @property
    def file_directory(self) -> str:
        """Absolute directory of the file containing the partial."""
        return os.path.dirname(os.path.abspath(self.filename))

    @property
    def project_directory(self) -> str:
        """Absolute project directory, defaulting to the file's directory."""
        if not self.directory:
            return self.file_directory
        return os.path.abspath(self.directory)

    def get(self, name: str, default: Any = None) -> Any:
        """Read a core field or an ``extra`` option."""
        name = OPTION_ALIASES.get(name, name)
        if name != "extra" and name in self.__dataclass_fields__:
            value = getattr(self, name)
            return default if value is None else value
        return self.extra.get(name, default)

    def replace(self, **changes: Any) -> "ResolutionRequest":
        """Return a copy with the given options changed.

        Options are mapped as in ``from_options``; non-field options are
        merged into a copy of ``extra``.
        """
        kwargs, extra = _split_options(changes, self.extra)
        return replace(self, extra=extra, **kwargs)


def _split_options(options: Dict[str, Any], extra: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Separate dataclass fields from ``extra`` options, resolving aliases."""
    known = {f.name for f in fields(ResolutionRequest)} - {"extra"}
    kwargs: Dict[str, Any] = {}
    merged = dict(extra)
    merged.update(options.get("extra") or {})

    for key, value in options.items():
        if key == "extra":
            continue
        name = OPTION_ALIASES.get(key, key)
        if name in known:
            kwargs[name] = value
        else:
            merged[key] = value

    return kwargs, merged
