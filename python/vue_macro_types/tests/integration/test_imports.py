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
"""Types imported from real files next to the component."""

import json

import pytest

from conftest import create_sfc, extract_props_type

pytestmark = pytest.mark.integration


@pytest.fixture
def write(component_dir):
    def run(relative: str, text: str):
        path = component_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return run


class TestRelativeImports:
    def test_imported_alias(self, write, expand):
        write("types.ts", "export type BaseProps = { id: number; label: string }\n")
        script = "import type { BaseProps } from './types'\n\ntype Props = BaseProps & {\n  extra: boolean\n}\ndefineProps<Props>()"
        assert expand(script) == "{ id: number; label: string } & { extra: boolean }"

    def test_imported_interface_used_directly(self, write, expand):
        write("models/user.ts", "export interface User {\n  id: number\n  name?: string\n}\n")
        script = "import type { User } from './models/user'\ndefineProps<User>()"
        assert expand(script) == "{ id: number; name?: undefined | string }"

    def test_renamed_import(self, write, expand):
        write("types.ts", "export interface Props { size: 'sm' | 'lg' }\n")
        assert expand("import type { Props as CardProps } from './types'\ndefineProps<CardProps>()") == (
            "{ size: 'sm' | 'lg' }"
        )

    def test_namespace_import(self, write, expand):
        write("types.ts", "export type Props = { title: string }\n")
        assert expand("import * as T from './types'\ndefineProps<T.Props>()") == "{ title: string }"

    def test_reexport_through_index(self, write, expand):
        write("shared/props.ts", "export type Shared = { theme: 'light' | 'dark' }\n")
        write("shared/index.ts", "export * from './props'\n")
        assert expand("import type { Shared } from './shared'\ndefineProps<Shared>()") == "{ theme: 'light' | 'dark' }"

    def test_named_reexport(self, write, expand):
        write("inner.ts", "export type Inner = { depth: number }\n")
        write("outer.ts", "export { Inner as Outer } from './inner'\n")
        assert expand("import type { Outer } from './outer'\ndefineProps<Outer>()") == "{ depth: number }"

    def test_missing_module_gives_any(self, expand):
        assert expand("import type { Missing } from './nowhere'\ndefineProps<Missing>()") == "any"


class TestConfiguredResolution:
    def test_tsconfig_paths(self, tmp_path, component_dir, write, plugin):
        (tmp_path / "tsconfig.json").write_text(
            json.dumps({"compilerOptions": {"strict": True, "baseUrl": ".", "paths": {"@/*": ["src/*"]}}}),
            encoding="utf-8",
        )
        write("types/button.ts", "export type ButtonProps = { disabled?: boolean }\n")
        code = create_sfc("import type { ButtonProps } from '@/types/button'\ndefineProps<ButtonProps>()")
        result = plugin.transform(code, str(component_dir / "components" / "Button.vue"))
        assert extract_props_type(result) == "{ disabled?: undefined | false | true }"

    def test_non_strict_tsconfig(self, tmp_path, component_dir, plugin):
        (tmp_path / "tsconfig.json").write_text('{\n  // loose\n  "compilerOptions": { "strict": false },\n}\n', encoding="utf-8")
        code = create_sfc("type Props = { age?: number }\ndefineProps<Props>()")
        result = plugin.transform(code, str(component_dir / "Component.vue"))
        assert extract_props_type(result) == "{ age?: number }"

    def test_node_modules_types(self, tmp_path, expand):
        package = tmp_path / "node_modules" / "ui-kit"
        (package / "dist").mkdir(parents=True)
        (package / "package.json").write_text(json.dumps({"name": "ui-kit", "types": "./dist/index.d.ts"}), encoding="utf-8")
        (package / "dist" / "index.d.ts").write_text("export interface Theme { primary: string }\n", encoding="utf-8")
        assert expand("import type { Theme } from 'ui-kit'\ndefineProps<Theme>()") == "{ primary: string }"
