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
"""Pytest configuration for filing_cabinet tests.

Fixtures build small on-disk projects under tmp_path and chdir into them, so
requests can use the project-relative paths ('js/commonjs/foo.js') that
callers typically pass.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import pytest

from filing_cabinet import Cabinet


def write_tree(root: Path, tree: Dict[str, Any]) -> None:
    """Create files from a nested {name: contents-or-subtree} mapping."""
    for name, contents in tree.items():
        path = root / name
        if isinstance(contents, dict):
            path.mkdir(parents=True, exist_ok=True)
            write_tree(path, contents)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding="utf-8")


JS_FILES: Dict[str, Any] = {
    "js": {
        "es6": {
            "foo.js": 'import bar from "./bar";\n',
            "bar.js": "export default function () {};\n",
            "baz.js": 'import qux from "qux";\n',
        },
        "amd": {
            "foo.js": 'define(["./bar"], function (bar) {\n  return bar;\n});\n',
            "bar.js": "define({});\n",
            "foo.foobar": "",
        },
        "commonjs": {
            "foo.js": 'var bar = require("./bar");\n',
            "bar.js": "module.exports = function () {};\n",
            "index.js": "",
            "subdir": {
                "module.js": 'var entry = require("../");\n',
                "index.js": "",
            },
            "test": {
                "index.spec.js": 'var subdir = require("subdir");\n',
            },
        },
        "node_modules": {
            "lodash.assign": {
                "index.js": "module.exports = function () {};\n",
            },
            "nested": {
                "index.js": 'require("lodash.assign");\n',
                "node_modules": {
                    "lodash.assign": {
                        "index.js": "module.exports = function () {};\n",
                    },
                },
            },
        },
        "withIndex": {
            "index.js": 'var sub = require("./subdir");\n',
            "subdir": {
                "index.js": "",
            },
        },
    },
}

CSS_FILES: Dict[str, Any] = {
    "stylus": {
        "foo.styl": "",
        "bar.styl": "",
    },
    "sass": {
        "foo.scss": "",
        "bar.scss": "",
        "foo.sass": "",
        "bar.sass": "",
    },
}

WEBPACK_CONFIG = """\
const path = require('path');

module.exports = {
  entry: './index.js',
  resolve: {
    alias: {
      R: './node_modules/resolve',
    },
  },
};
"""

WEBPACK_FILES: Dict[str, Any] = {
    "index.js": "",
    "webpack.config.js": WEBPACK_CONFIG,
    "node_modules": {
        "resolve": {
            "package.json": '{"name": "resolve", "main": "index.js"}',
            "index.js": "module.exports = {};\n",
        },
    },
}


@pytest.fixture
def cabinet() -> Cabinet:
    """A fresh cabinet, isolated from the process-wide default."""
    return Cabinet()


@pytest.fixture
def js_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """JavaScript fixtures for es6, amd and commonjs resolution."""
    write_tree(tmp_path, JS_FILES)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def css_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Sass and Stylus fixtures."""
    write_tree(tmp_path, CSS_FILES)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def webpack_project(tmp_path: Path) -> Path:
    """A project with a webpack config aliasing R to the resolve package."""
    write_tree(tmp_path, WEBPACK_FILES)
    return tmp_path
