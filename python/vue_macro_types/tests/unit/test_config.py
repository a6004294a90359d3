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
"""Unit tests for plugin options and tsconfig handling."""

import os

import pytest

from vue_macro_types.config import (
    DEFAULT_COMPILER_OPTIONS,
    CompilerOptions,
    MacroTypesOptions,
    find_config_file,
    parse_tsconfig,
    read_config_text,
    resolve_compiler_options,
)
from vue_macro_types.errors import ConfigError


class TestReadConfigText:
    """JSON with comments and trailing commas."""

    def test_comments(self):
        text = '{\n  // line\n  "a": 1, /* block */ "b": "x // not a comment"\n}'
        assert read_config_text(text) == {"a": 1, "b": "x // not a comment"}

    def test_trailing_commas(self):
        assert read_config_text('{"a": [1, 2,], "b": {"c": 3,},}') == {"a": [1, 2], "b": {"c": 3}}

    def test_escaped_quote_in_string(self):
        assert read_config_text(r'{"a": "say \"hi\", // ok"}') == {"a": 'say "hi", // ok'}

    def test_root_must_be_object(self):
        with pytest.raises(ValueError):
            read_config_text("[1, 2]")


class TestCompilerOptions:
    """Option mapping and derived settings."""

    def test_from_dict(self):
        options = CompilerOptions.from_dict(
            {"strict": True, "baseUrl": "./src", "paths": {"@/*": ["./*"]}},
            config_dir="/project",
        )
        assert options.strict
        assert options.base_url == os.path.normpath("/project/src")
        assert options.paths == {"@/*": ["./*"]}
        assert options.config_dir == "/project"

    def test_null_checks_follow_strict(self):
        assert CompilerOptions(strict=True).null_checks_enabled
        assert not CompilerOptions(strict=False).null_checks_enabled

    def test_explicit_strict_null_checks_wins(self):
        assert not CompilerOptions(strict=True, strict_null_checks=False).null_checks_enabled
        assert CompilerOptions(strict=False, strict_null_checks=True).null_checks_enabled

    def test_defaults(self):
        assert DEFAULT_COMPILER_OPTIONS.strict
        assert DEFAULT_COMPILER_OPTIONS.target == "ESNext"
        assert DEFAULT_COMPILER_OPTIONS.module == "ESNext"
        assert DEFAULT_COMPILER_OPTIONS.module_resolution == "Bundler"
        assert DEFAULT_COMPILER_OPTIONS.skip_lib_check


class TestMacroTypesOptions:
    def test_defaults(self):
        options = MacroTypesOptions()
        assert options.tsconfig is None
        assert options.function_name == "defineProps"
        assert options.virtual_suffix == ".__setup.ts"

    def test_from_dict_accepts_camel_case(self):
        options = MacroTypesOptions.from_dict({"tsconfig": "tsconfig.app.json", "functionName": "defineMyProps"})
        assert options.tsconfig == "tsconfig.app.json"
        assert options.function_name == "defineMyProps"


class TestTsconfigFiles:
    """Discovery, extends chains and fallbacks."""

    def test_find_config_walks_up(self, tmp_path):
        (tmp_path / "tsconfig.json").write_text("{}")
        nested = tmp_path / "src" / "components"
        nested.mkdir(parents=True)
        assert find_config_file(str(nested)) == str(tmp_path / "tsconfig.json")

    def test_find_config_none(self, tmp_path):
        assert find_config_file(str(tmp_path), file_exists=lambda _: False) is None

    def test_extends_chain(self, tmp_path):
        (tmp_path / "base.json").write_text('{"compilerOptions": {"strict": true, "target": "ES2020"}}')
        (tmp_path / "tsconfig.json").write_text(
            '{\n  "extends": "./base",\n  // override\n  "compilerOptions": {"target": "ESNext",},\n}'
        )
        options = parse_tsconfig(tmp_path / "tsconfig.json")
        assert options.strict
        assert options.target == "ESNext"
        assert options.config_dir == str(tmp_path)

    def test_extends_cycle_terminates(self, tmp_path):
        (tmp_path / "a.json").write_text('{"extends": "./b.json", "compilerOptions": {"strict": true}}')
        (tmp_path / "b.json").write_text('{"extends": "./a.json"}')
        assert parse_tsconfig(tmp_path / "a.json").strict

    def test_invalid_file_raises_config_error(self, tmp_path):
        path = tmp_path / "tsconfig.json"
        path.write_text("{ not json")
        with pytest.raises(ConfigError) as excinfo:
            parse_tsconfig(path)
        assert excinfo.value.path == str(path)

    def test_explicit_missing_tsconfig_raises(self, tmp_path):
        options = MacroTypesOptions(tsconfig=str(tmp_path / "missing.json"))
        with pytest.raises(ConfigError):
            resolve_compiler_options(str(tmp_path / "App.vue"), options)

    def test_discovered_tsconfig(self, tmp_path):
        (tmp_path / "tsconfig.json").write_text('{"compilerOptions": {"strict": false}}')
        options = resolve_compiler_options(str(tmp_path / "App.vue"), MacroTypesOptions())
        assert not options.strict

    def test_discovered_invalid_tsconfig_falls_back(self, tmp_path):
        (tmp_path / "tsconfig.json").write_text("{ broken")
        options = resolve_compiler_options(str(tmp_path / "App.vue"), MacroTypesOptions())
        assert options.strict
        assert options.config_dir == str(tmp_path)
