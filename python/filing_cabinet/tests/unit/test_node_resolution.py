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
"""Unit tests for the shared Node.js resolution algorithm and the CommonJS and ES6 resolvers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from filing_cabinet import ResolutionRequest
from filing_cabinet.resolvers import (
    NodeModuleResolver,
    commonjs_lookup,
    es6_lookup,
    resolve_dependency_path,
)
from filing_cabinet.resolvers.base import is_node_builtin, is_relative, strip_loaders

from ..conftest import write_tree


@pytest.fixture
def project(tmp_path: Path) -> Path:
    write_tree(
        tmp_path,
        {
            "src": {
                "app.js": "",
                "util.js": "",
                "data.json": "{}",
                "lib": {"index.js": ""},
                "pkg": {
                    "package.json": json.dumps({"main": "./dist/entry"}),
                    "dist": {"entry.js": ""},
                },
                "broken": {
                    "package.json": json.dumps({"main": "missing.js"}),
                    "index.js": "",
                },
            },
            "node_modules": {
                "dual": {
                    "package.json": json.dumps({"main": "cjs.js", "module": "esm.js"}),
                    "cjs.js": "",
                    "esm.js": "",
                },
                "plain.js": "",
            },
        },
    )
    return tmp_path


class TestHelpers:
    """Tests for partial classification helpers."""

    @pytest.mark.parametrize("partial", ["fs", "path", "fs/promises", "node:fs", "node:test"])
    def test_node_builtins(self, partial: str) -> None:
        assert is_node_builtin(partial)

    @pytest.mark.parametrize("partial", ["lodash", "./fs", "fsevents"])
    def test_not_node_builtins(self, partial: str) -> None:
        assert not is_node_builtin(partial)

    @pytest.mark.parametrize("partial", [".", "..", "./a", "../a"])
    def test_relative(self, partial: str) -> None:
        assert is_relative(partial)

    @pytest.mark.parametrize("partial", ["a", ".a", "/a", "..a"])
    def test_not_relative(self, partial: str) -> None:
        assert not is_relative(partial)

    @pytest.mark.parametrize(
        "partial,stripped",
        [
            ("hgn!resolve", "resolve"),
            ("style!css!./a.css", "./a.css"),
            ("!!raw!./a.txt?x=1", "./a.txt"),
            ("./plain", "./plain"),
        ],
    )
    def test_strip_loaders(self, partial: str, stripped: str) -> None:
        assert strip_loaders(partial) == stripped


class TestNodeModuleResolver:
    """Tests for NodeModuleResolver."""

    def test_file_with_extension_probe(self, project: Path) -> None:
        resolver = NodeModuleResolver()

        assert resolver.resolve("./util", str(project / "src")) == str(project / "src" / "util.js")
        assert resolver.resolve("./data", str(project / "src")) == str(project / "src" / "data.json")

    def test_exact_file(self, project: Path) -> None:
        assert NodeModuleResolver().resolve("./util.js", str(project / "src")) == str(project / "src" / "util.js")

    def test_directory_index(self, project: Path) -> None:
        assert NodeModuleResolver().resolve("./lib", str(project / "src")) == str(project / "src" / "lib" / "index.js")

    def test_package_main(self, project: Path) -> None:
        resolved = NodeModuleResolver().resolve("./pkg", str(project / "src"))

        assert resolved == str(project / "src" / "pkg" / "dist" / "entry.js")

    def test_missing_main_falls_back_to_index(self, project: Path) -> None:
        resolved = NodeModuleResolver().resolve("./broken", str(project / "src"))

        assert resolved == str(project / "src" / "broken" / "index.js")

    def test_node_modules_walk(self, project: Path) -> None:
        resolved = NodeModuleResolver().resolve("dual", str(project / "src" / "lib"))

        assert resolved == str(project / "node_modules" / "dual" / "cjs.js")

    def test_main_fields_order(self, project: Path) -> None:
        resolved = NodeModuleResolver(main_fields=("module", "main")).resolve("dual", str(project / "src"))

        assert resolved == str(project / "node_modules" / "dual" / "esm.js")

    def test_bare_file_in_node_modules(self, project: Path) -> None:
        assert NodeModuleResolver().resolve("plain", str(project)) == str(project / "node_modules" / "plain.js")

    def test_absolute_module_directory(self, project: Path) -> None:
        resolver = NodeModuleResolver(module_directories=(str(project / "src"),))

        assert resolver.resolve("util", "/") == str(project / "src" / "util.js")

    def test_extra_paths(self, project: Path) -> None:
        resolver = NodeModuleResolver(extra_paths=[str(project / "src")])

        assert resolver.resolve("lib", str(project)) == str(project / "src" / "lib" / "index.js")

    def test_unresolved(self, project: Path) -> None:
        assert NodeModuleResolver().resolve("nope", str(project / "src")) is None
        assert NodeModuleResolver().resolve("", str(project)) is None

    def test_search_paths_skip_module_directories(self) -> None:
        paths = NodeModuleResolver().module_search_paths("/a/node_modules/b")

        assert paths == ["/a/node_modules/b/node_modules", "/a/node_modules", "/node_modules"]


class TestCommonJSLookup:
    """Tests for commonjs_lookup."""

    def request(self, project: Path, partial: str, **kwargs) -> ResolutionRequest:
        return ResolutionRequest(
            partial=partial,
            filename=str(project / "src" / "app.js"),
            directory=str(project),
            **kwargs,
        )

    def test_relative(self, project: Path) -> None:
        assert commonjs_lookup(self.request(project, "./util")) == str(project / "src" / "util.js")

    def test_package(self, project: Path) -> None:
        assert commonjs_lookup(self.request(project, "dual")) == str(project / "node_modules" / "dual" / "cjs.js")

    def test_entry_field_from_node_modules_config(self, project: Path) -> None:
        request = self.request(project, "dual", node_modules_config={"entry": "module"})

        assert commonjs_lookup(request) == str(project / "node_modules" / "dual" / "esm.js")

    def test_project_directory_is_searched(self, project: Path) -> None:
        request = ResolutionRequest(
            partial="src/util",
            filename=str(project / "src" / "lib" / "index.js"),
            directory=str(project),
        )

        assert commonjs_lookup(request) == str(project / "src" / "util.js")

    @pytest.mark.parametrize("partial", ["fs", "node:path", "fs/promises"])
    def test_builtins_do_not_resolve(self, project: Path, partial: str) -> None:
        assert commonjs_lookup(self.request(project, partial)) == ""

    def test_missing_module(self, project: Path) -> None:
        assert commonjs_lookup(self.request(project, "nope")) == ""


class TestES6Lookup:
    """Tests for es6_lookup and resolve_dependency_path."""

    def test_relative_path_borrows_extension(self) -> None:
        path = resolve_dependency_path("./bar", "/project/src/foo.js", "/project")

        assert path == "/project/src/bar.js"

    def test_bare_path_joins_directory(self) -> None:
        assert resolve_dependency_path("lib/bar", "/project/src/foo.js", "/project") == "/project/lib/bar.js"

    def test_explicit_extension_kept(self) -> None:
        assert resolve_dependency_path("./bar.json", "/project/src/foo.js", "/project") == "/project/src/bar.json"

    def test_existing_file(self, project: Path) -> None:
        request = ResolutionRequest(partial="./util", filename=str(project / "src" / "app.js"), directory=str(project))

        assert es6_lookup(request) == str(project / "src" / "util.js")

    def test_missing_file_is_empty(self, project: Path) -> None:
        request = ResolutionRequest(partial="./nope", filename=str(project / "src" / "app.js"), directory=str(project))

        assert es6_lookup(request) == ""

    def test_package_directory_is_not_probed(self, project: Path) -> None:
        request = ResolutionRequest(partial="dual", filename=str(project / "src" / "app.js"), directory=str(project / "node_modules"))

        assert es6_lookup(request) == ""
