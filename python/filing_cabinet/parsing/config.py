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
"""Static loaders for the config files resolvers depend on.

- RequireJS configs (JSON, or JavaScript calling requirejs.config(...))
- webpack configs (JSON, or JavaScript assigning module.exports)
- package.json manifests

JavaScript configs are read with the static evaluator in
``filing_cabinet.parsing.javascript``; they are never executed.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from ..core.errors import ConfigError
from .javascript import UNKNOWN, StaticEvaluator, call_arguments

logger = logging.getLogger(__name__)

REQUIREJS_CONFIG_CALLS = ("requirejs.config", "require.config", "requirejs", "require")


def _read_text(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", path=path) from e


def load_json_config(path: str) -> Any:
    """Load a JSON config file.

    Raises:
        ConfigError: If the file is missing or not valid JSON
    """
    text = _read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}", path=path) from e


def _evaluator_for(path: str) -> StaticEvaluator:
    absolute = os.path.abspath(path)
    return StaticEvaluator.from_source(
        _read_text(absolute),
        dirname=os.path.dirname(absolute),
        filename=absolute,
    )


# =============================================================================
# RequireJS
# =============================================================================


def load_requirejs_config(path: str) -> Dict[str, Any]:
    """Load a RequireJS config file into a dict.

    JavaScript configs are searched for, in order: a requirejs.config /
    require.config / requirejs / require call with an object argument, a
    top-level `var require = {...}`, and module.exports.

    Raises:
        ConfigError: If the file is missing or malformed
    """
    if path.endswith(".json"):
        config = load_json_config(path)
        if not isinstance(config, dict):
            raise ConfigError(f"RequireJS config in {path} must be an object", path=path)
        return config

    evaluator = _evaluator_for(path)

    for call in evaluator.calls(*REQUIREJS_CONFIG_CALLS):
        args = call_arguments(call)
        if args and args[0].type == "object":
            config = evaluator.evaluate(args[0])
            logger.debug(f"Read RequireJS config from {path} ({len(config)} keys)")
            return config

    for candidate in (evaluator.binding("require"), evaluator.binding("requirejs"), evaluator.module_exports()):
        if isinstance(candidate, dict):
            return candidate

    logger.warning(f"No RequireJS config found in {path}")
    return {}


# =============================================================================
# webpack
# =============================================================================


def load_webpack_config(path: str) -> Dict[str, Any]:
    """Load a webpack config file into a dict.

    Multi-compiler configs (an exported array) use their first entry.

    Raises:
        ConfigError: If the file is missing, malformed, or does not export a
            literal object (e.g. a config factory function)
    """
    if path.endswith(".json"):
        config = load_json_config(path)
    else:
        config = _evaluator_for(path).module_exports()

    if isinstance(config, list):
        config = next((entry for entry in config if isinstance(entry, dict)), UNKNOWN)

    if not isinstance(config, dict):
        raise ConfigError(
            f"webpack config {path} does not export a static object",
            path=path,
        )
    return config


# =============================================================================
# package.json
# =============================================================================


@dataclass
class PackageJson:
    """Parsed package.json manifest.

    Attributes:
        fields: The full manifest; entry points are read by field name
    """

    fields: Dict[str, Any] = field(default_factory=dict)

    def entry_point(self, field_names: Sequence[str] = ("main",)) -> Optional[str]:
        """First string-valued entry field among field_names."""
        for name in field_names:
            value = self.fields.get(name)
            if isinstance(value, str) and value:
                return value
        return None


def parse_package_json(path: Path) -> Optional[PackageJson]:
    """Parse package.json file.

    Args:
        path: Path to package.json

    Returns:
        PackageJson if successful, None if file doesn't exist or is invalid
    """
    if not path.is_file():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.debug(f"Ignoring unreadable {path}: {e}")
        return None

    if not isinstance(data, dict):
        return None

    return PackageJson(fields=data)
