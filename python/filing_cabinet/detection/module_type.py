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
"""Module-system classification for JavaScript files.

Decides which module system a JavaScript file is written against by
inspecting its syntax tree:

1. Any `import` / `export` statement -> ES6
2. `define(...)`, or `require([...], ...)` / `requirejs([...], ...)` with a
   dependency array -> AMD
3. Anything else (including `require('x')`, `module.exports`, empty or
   unparsable source) -> CommonJS

`classify_source` is a pure function of the source text. `select_js_strategy`
layers request configuration on top of it: a webpack config pre-empts
classification entirely, and ES6 syntax combined with a RequireJS config is
treated as AMD.

Example:
    >>> classify_source("import foo from './foo';")
    <ModuleType.ES6: 'es6'>
    >>> classify_source("define(['a'], function (a) {});")
    <ModuleType.AMD: 'amd'>
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from ..parsing.javascript import call_arguments, callee_name, parse_javascript, walk
from .bundler import detect_bundler_config

if TYPE_CHECKING:
    from ..core.request import ResolutionRequest

logger = logging.getLogger(__name__)

ES6_NODE_TYPES = frozenset({"import_statement", "export_statement"})
AMD_DRIVER_CALLS = frozenset({"require", "requirejs"})


class ModuleType(str, Enum):
    """Module system a source file is written against."""

    ES6 = "es6"
    AMD = "amd"
    COMMONJS = "commonjs"


class JSStrategy(str, Enum):
    """Resolver family selected for a JavaScript request."""

    WEBPACK = "webpack"
    ES6 = "es6"
    AMD = "amd"
    COMMONJS = "commonjs"


def classify_source(source: str) -> ModuleType:
    """Classify JavaScript source text by module system.

    Args:
        source: File contents

    Returns:
        ModuleType.ES6, ModuleType.AMD or ModuleType.COMMONJS
    """
    if not source or not source.strip():
        return ModuleType.COMMONJS

    tree = parse_javascript(source)
    seen_amd = False

    for node in walk(tree.root_node):
        if node.type in ES6_NODE_TYPES:
            return ModuleType.ES6
        if not seen_amd and node.type == "call_expression":
            seen_amd = _is_amd_call(node)

    return ModuleType.AMD if seen_amd else ModuleType.COMMONJS


def _is_amd_call(call) -> bool:
    name = callee_name(call)
    if name == "define":
        return True
    if name in AMD_DRIVER_CALLS:
        args = call_arguments(call)
        return bool(args) and args[0].type == "array"
    return False


def classify_file(path: str) -> ModuleType:
    """Read one file and classify it; unreadable files count as CommonJS."""
    try:
        source = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot read {path} ({e}), assuming commonjs")
        return ModuleType.COMMONJS
    return classify_source(source)


def select_js_strategy(request: ResolutionRequest) -> JSStrategy:
    """Pick the resolver family for a JavaScript request.

    Args:
        request: Resolution request for a .js file

    Returns:
        The strategy the dispatcher should invoke
    """
    if detect_bundler_config(request):
        return JSStrategy.WEBPACK

    if request.source is not None:
        module_type = classify_source(request.source)
    else:
        module_type = classify_file(request.filename)

    if module_type is ModuleType.ES6 and (request.config is not None or request.config_path):
        logger.debug(f"{request.filename} uses es6 syntax with a module loader config, treating as amd")
        return JSStrategy.AMD

    return JSStrategy(module_type.value)
