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
"""Built-in utility types and type operators, expanded end to end."""

import pytest

pytestmark = pytest.mark.integration


class TestUtilityTypes:
    def test_pick(self, expand):
        script = (
            "type FullUser = { id: number; name: string; email: string; age: number }\n"
            "type Props = Pick<FullUser, 'name' | 'email'>\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ name: string; email: string }"

    def test_omit(self, expand):
        script = (
            "type FullUser = { id: number; name: string; email: string }\n"
            "type Props = Omit<FullUser, 'id'>\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ name: string; email: string }"

    def test_partial(self, expand):
        script = "type User = { name: string; age: number }\ntype Props = Partial<User>\ndefineProps<Props>()"
        assert expand(script) == "{ name?: undefined | string; age?: undefined | number }"

    def test_required(self, expand):
        script = "type User = { name?: string; age?: number }\ntype Props = Required<User>\ndefineProps<Props>()"
        assert expand(script) == "{ name: string; age: number }"

    def test_readonly(self, expand):
        script = "type User = { name: string }\ntype Props = Readonly<User>\ndefineProps<Props>()"
        resolved = expand(script)
        assert "name: string" in resolved

    def test_composed(self, expand):
        script = (
            "type FullUser = { id: number; name: string; email: string; bio?: string }\n"
            "type Props = Required<Pick<FullUser, 'name' | 'bio'>>\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ name: string; bio: string }"

    def test_exclude(self, expand):
        script = (
            "type AllColors = 'red' | 'blue' | 'green' | 'yellow'\n"
            "type Props = { color: Exclude<AllColors, 'yellow'> }\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ color: 'red' | 'blue' | 'green' }"

    def test_extract(self, expand):
        script = (
            "type AllValues = string | number | boolean\n"
            "type Props = { value: Extract<AllValues, string | number> }\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ value: string | number }"

    def test_non_nullable(self, expand):
        script = (
            "type Props = {\n"
            "  value: NonNullable<string | null | undefined>\n"
            "  count: NonNullable<number | null>\n"
            "}\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ value: string; count: number }"

    def test_record_is_printed(self, expand):
        script = (
            "type Props = {\n  metadata: Record<string, unknown>\n  config: Record<string, number>\n}\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ metadata: Record<string, unknown>; config: Record<string, number> }"

    def test_record_with_literal_keys_is_expanded(self, expand):
        script = "type Props = { sizes: Record<'sm' | 'lg', number> }\ndefineProps<Props>()"
        assert expand(script) == "{ sizes: { sm: number; lg: number } }"


class TestOperators:
    def test_keyof(self, expand):
        script = (
            "type User = { id: number; name: string; email: string }\n"
            "type Props = { field: keyof User }\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ field: 'id' | 'name' | 'email' }"

    def test_indexed_access(self, expand):
        script = (
            "type User = { profile: { name: string; age: number } }\n"
            "type Props = { userProfile: User['profile'] }\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ userProfile: { name: string; age: number } }"

    def test_template_literal(self, expand):
        script = (
            "type Color = 'red' | 'blue' | 'green'\n"
            "type Size = 'sm' | 'md' | 'lg'\n"
            "type Props = { variant: `${Color}-${Size}` }\n"
            "defineProps<Props>()"
        )
        resolved = expand(script)
        assert resolved.startswith("{ variant: '")
        assert resolved.count(" | ") == 8
        assert "'red-sm'" in resolved
        assert "'green-lg'" in resolved

    def test_template_literal_prefix(self, expand):
        assert expand("type Props = { handler: `on${'a' | 'b'}` }\ndefineProps<Props>()") == "{ handler: 'ona' | 'onb' }"

    def test_tuples(self, expand):
        script = "type Props = {\n  coordinates: [number, number]\n  rgb: [number, number, number]\n}\ndefineProps<Props>()"
        assert expand(script) == "{ coordinates: [number, number]; rgb: [number, number, number] }"

    def test_readonly_properties(self, expand):
        script = "type Props = {\n  readonly id: string\n  readonly count: number\n}\ndefineProps<Props>()"
        assert expand(script) == "{ readonly id: string; readonly count: number }"

    def test_readonly_array(self, expand):
        script = "type Props = { items: ReadonlyArray<string>; numbers: readonly number[] }\ndefineProps<Props>()"
        assert expand(script) == "{ items: Array<string>; numbers: Array<number> }"

    def test_array_of_union(self, expand):
        assert expand("type Props = { items: Array<string | number> }\ndefineProps<Props>()") == (
            "{ items: Array<string | number> }"
        )

    def test_function_properties(self, expand):
        script = (
            "type Props = {\n"
            "  onClick: (event: MouseEvent) => void\n"
            "  onChange: (value: string) => number\n"
            "}\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ onClick: (event: MouseEvent) => void; onChange: (value: string) => number }"


class TestIntrinsicStringTypes:
    def test_uppercase_literal(self, expand):
        assert expand("type Props = { v: Uppercase<'a'> }\ndefineProps<Props>()") == "{ v: 'A' }"

    def test_mappings_distribute_over_unions(self, expand):
        script = (
            "type Props = {\n"
            "  lower: Lowercase<'FOO' | 'BAR'>\n"
            "  cap: Capitalize<'foo' | 'bar'>\n"
            "  uncap: Uncapitalize<'Hello'>\n"
            "}\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ lower: 'foo' | 'bar'; cap: 'Foo' | 'Bar'; uncap: 'hello' }"

    def test_key_remapping_with_capitalize(self, expand):
        script = (
            "type Events = { click: MouseEvent; focus: FocusEvent }\n"
            "type Handlers<T> = { [K in keyof T as `on${Capitalize<K & string>}`]: () => void }\n"
            "defineProps<Handlers<Events>>()"
        )
        assert expand(script) == "{ onClick: () => void; onFocus: () => void }"

    def test_mapping_of_string_is_kept(self, expand):
        assert expand("type Props = { v: Uppercase<string> }\ndefineProps<Props>()") == "{ v: Uppercase<string> }"

    def test_mapped_literal_is_assignable(self, expand):
        script = (
            "type Loud<T extends string> = Uppercase<T> extends 'HI' ? true : false\n"
            "type Props = { a: Loud<'hi'>; b: Loud<'yo'> }\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ a: true; b: false }"
