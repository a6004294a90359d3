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
"""Unit tests for module specifier resolution."""

import os

import pytest

from vue_macro_types.checker.resolution import resolve_module_name
from vue_macro_types.config import CompilerOptions


def _read(path):
    with open(path, encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def project(tmp_path):
    (tmp_path / "src" / "components").mkdir(parents=True)
    (tmp_path / "src" / "types.ts").write_text("export type A = string")
    (tmp_path / "src" / "models").mkdir()
    (tmp_path / "src" / "models" / "index.ts").write_text("export type M = number")
    (tmp_path / "src" / "legacy.d.ts").write_text("export type L = boolean")
    package = tmp_path / "node_modules" / "ui-kit"
    (package / "dist").mkdir(parents=True)
    (package / "package.json").write_text('{"name": "ui-kit", "types": "./dist/index.d.ts"}')
    (package / "dist" / "index.d.ts").write_text("export type Size = 'sm' | 'lg'")
    scoped = tmp_path / "node_modules" / "@types" / "lodash"
    scoped.mkdir(parents=True)
    (scoped / "index.d.ts").write_text("export type Many<T> = T | T[]")
    return tmp_path


def resolve(specifier, containing, options=CompilerOptions()):
    return resolve_module_name(specifier, str(containing), options, os.path.isfile, _read)


class TestRelative:
    def test_adds_extension(self, project):
        found = resolve("../types", project / "src" / "components" / "Card.vue.__setup.ts")
        assert found == str(project / "src" / "types.ts")

    def test_directory_index(self, project):
        assert resolve("./models", project / "src" / "App.ts") == str(project / "src" / "models" / "index.ts")

    def test_js_extension_maps_to_ts(self, project):
        assert resolve("./types.js", project / "src" / "App.ts") == str(project / "src" / "types.ts")

    def test_declaration_file(self, project):
        assert resolve("./legacy", project / "src" / "App.ts") == str(project / "src" / "legacy.d.ts")

    def test_missing(self, project):
        assert resolve("./nope", project / "src" / "App.ts") is None


class TestPathMapping:
    def test_wildcard_pattern(self, project):
        options = CompilerOptions(base_url=str(project), paths={"@/*": ["src/*"]})
        assert resolve("@/types", project / "src" / "App.ts", options) == str(project / "src" / "types.ts")

    def test_exact_pattern(self, project):
        options = CompilerOptions(base_url=str(project), paths={"models": ["src/models"]})
        assert resolve("models", project / "src" / "App.ts", options) == str(project / "src" / "models" / "index.ts")

    def test_paths_relative_to_config_dir_without_base_url(self, project):
        options = CompilerOptions(config_dir=str(project), paths={"~/*": ["./src/*"]})
        assert resolve("~/types", project / "src" / "App.ts", options) == str(project / "src" / "types.ts")

    def test_base_url(self, project):
        options = CompilerOptions(base_url=str(project / "src"))
        assert resolve("types", project / "src" / "App.ts", options) == str(project / "src" / "types.ts")


class TestNodeModules:
    def test_types_entry(self, project):
        found = resolve("ui-kit", project / "src" / "components" / "Card.ts")
        assert found == str(project / "node_modules" / "ui-kit" / "dist" / "index.d.ts")

    def test_at_types_package(self, project):
        found = resolve("lodash", project / "src" / "App.ts")
        assert found == str(project / "node_modules" / "@types" / "lodash" / "index.d.ts")

    def test_unknown_package(self, project):
        assert resolve("vue", project / "src" / "App.ts") is None
