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
"""Unit tests for module-system classification and strategy selection."""

from __future__ import annotations

import pytest

from filing_cabinet import JSStrategy, ModuleType, ResolutionRequest, classify_source
from filing_cabinet.detection import classify_file, detect_bundler_config, select_js_strategy


class TestClassifySource:
    """Tests for classify_source."""

    @pytest.mark.parametrize(
        "source",
        [
            "import foo from './foo';",
            "import './side-effect';",
            "import * as ns from 'ns';",
            "export default 42;",
            "export const answer = 42;",
            "export { a } from './a';",
        ],
    )
    def test_es6(self, source: str) -> None:
        assert classify_source(source) is ModuleType.ES6

    @pytest.mark.parametrize(
        "source",
        [
            "define(['./a'], function (a) { return a; });",
            "define({});",
            "define(function (require) { var a = require('./a'); });",
            "require(['./a', './b'], function (a, b) {});",
            "requirejs(['./a'], function (a) {});",
        ],
    )
    def test_amd(self, source: str) -> None:
        assert classify_source(source) is ModuleType.AMD

    @pytest.mark.parametrize(
        "source",
        [
            "var a = require('./a');",
            "module.exports = function () {};",
            "exports.foo = 1;",
            "console.log('hello');",
        ],
    )
    def test_commonjs(self, source: str) -> None:
        assert classify_source(source) is ModuleType.COMMONJS

    @pytest.mark.parametrize("source", ["", "   \n\t", "// only a comment\n"])
    def test_empty_source_is_commonjs(self, source: str) -> None:
        assert classify_source(source) is ModuleType.COMMONJS

    def test_es6_wins_over_amd(self) -> None:
        source = "import a from './a';\ndefine(['b'], function (b) {});\n"

        assert classify_source(source) is ModuleType.ES6

    def test_unparsable_source_does_not_raise(self) -> None:
        assert classify_source("var = = ;;; {{{") in set(ModuleType)


class TestClassifyFile:
    """Tests for classify_file."""

    def test_reads_the_file(self, tmp_path) -> None:
        path = tmp_path / "foo.js"
        path.write_text("export default 1;\n", encoding="utf-8")

        assert classify_file(str(path)) is ModuleType.ES6

    def test_missing_file_is_commonjs(self, tmp_path) -> None:
        assert classify_file(str(tmp_path / "missing.js")) is ModuleType.COMMONJS


class TestDetectBundlerConfig:
    """Tests for webpack config detection."""

    def test_no_config(self) -> None:
        assert detect_bundler_config(ResolutionRequest(partial="a", filename="b.js")) is None

    def test_config_is_made_absolute(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        request = ResolutionRequest(partial="a", filename="b.js", webpack_config="webpack.config.js")

        assert detect_bundler_config(request) == str(tmp_path / "webpack.config.js")


class TestSelectJSStrategy:
    """Tests for select_js_strategy."""

    def request(self, source: str, **kwargs) -> ResolutionRequest:
        return ResolutionRequest(partial="./a", filename="foo.js", source=source, **kwargs)

    def test_webpack_preempts_classification(self) -> None:
        request = self.request("define([], function () {});", webpack_config="webpack.config.js")

        assert select_js_strategy(request) is JSStrategy.WEBPACK

    @pytest.mark.parametrize(
        "source,strategy",
        [
            ("import a from './a';", JSStrategy.ES6),
            ("define([], function () {});", JSStrategy.AMD),
            ("var a = require('./a');", JSStrategy.COMMONJS),
        ],
    )
    def test_follows_the_module_type(self, source: str, strategy: JSStrategy) -> None:
        assert select_js_strategy(self.request(source)) is strategy

    def test_es6_with_inline_config_is_amd(self) -> None:
        request = self.request("import a from './a';", config={"baseUrl": "js"})

        assert select_js_strategy(request) is JSStrategy.AMD

    def test_es6_with_empty_inline_config_is_amd(self) -> None:
        request = self.request("import a from './a';", config={})

        assert select_js_strategy(request) is JSStrategy.AMD

    def test_es6_with_config_path_is_amd(self) -> None:
        request = self.request("import a from './a';", config_path="config.js")

        assert select_js_strategy(request) is JSStrategy.AMD

    def test_commonjs_with_config_stays_commonjs(self) -> None:
        request = self.request("require('./a');", config={"baseUrl": "js"})

        assert select_js_strategy(request) is JSStrategy.COMMONJS

    def test_reads_the_file_without_source(self, tmp_path) -> None:
        path = tmp_path / "foo.js"
        path.write_text("define(function () {});\n", encoding="utf-8")
        request = ResolutionRequest(partial="./a", filename=str(path))

        assert select_js_strategy(request) is JSStrategy.AMD
