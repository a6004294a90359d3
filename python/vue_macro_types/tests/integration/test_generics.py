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
"""Generic aliases, conditional types and value-derived types."""

import pytest

pytestmark = pytest.mark.integration

SCHEMA_PRELUDE = """
type BaseSchema<TInput> = { readonly _types?: { input: TInput } }
type InferInput<TSchema extends BaseSchema<unknown>> = NonNullable<TSchema['_types']>['input']

type StringSchema = BaseSchema<string>
type NumberSchema = BaseSchema<number>
type BooleanSchema = BaseSchema<boolean>

type ObjectEntries = Record<string, BaseSchema<unknown>>
type ObjectSchema<TEntries extends ObjectEntries> = BaseSchema<{
  [K in keyof TEntries]: NonNullable<TEntries[K]['_types']>['input']
}>
"""


class TestGenericAliases:
    def test_indexed_access_through_generic(self, expand):
        script = (
            "type Schema<TInput> = { readonly _input: TInput }\n"
            "type InferInput<TSchema extends Schema<unknown>> = TSchema['_input']\n\n"
            "type UserSchema = Schema<{ name: string; age: number }>\n"
            "type Props = InferInput<UserSchema>\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ name: string; age: number }"

    def test_schema_with_mapped_entries(self, expand):
        script = SCHEMA_PRELUDE + (
            "type MySchema = ObjectSchema<{\n"
            "  name: StringSchema\n"
            "  age: NumberSchema\n"
            "  isActive: BooleanSchema\n"
            "}>\n\n"
            "type Props = InferInput<MySchema>\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ name: string; age: number; isActive: boolean }"

    def test_schema_with_optional_entry(self, expand):
        script = SCHEMA_PRELUDE + (
            "type OptionalSchema<TWrapped extends BaseSchema<unknown>> = BaseSchema<\n"
            "  NonNullable<TWrapped['_types']>['input'] | undefined\n"
            ">\n\n"
            "type MySchema = ObjectSchema<{\n"
            "  name: StringSchema\n"
            "  age: OptionalSchema<NumberSchema>\n"
            "}>\n\n"
            "type Props = InferInput<MySchema>\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ name: string; age: undefined | number }"

    def test_nested_wrappers(self, expand):
        script = (
            "type Wrapper<TValue> = { value: TValue }\n"
            "type Container<TData> = { data: Wrapper<TData> }\n"
            "type Props = Container<{ name: string; tags: string[] }>\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ data: { value: { name: string; tags: Array<string> } } }"

    def test_generic_response(self, expand):
        script = (
            "type Response<T> = {\n  data: T\n  meta: {\n    page: number\n  }\n}\n"
            "type User = {\n  id: number\n  name: string\n}\n"
            "type Props = Response<Array<User>>\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ data: Array<{ id: number; name: string }>; meta: { page: number } }"

    def test_generic_interface(self, expand):
        script = "interface Page<T> { items: T[]; total: number }\ndefineProps<Page<string>>()"
        assert expand(script) == "{ items: Array<string>; total: number }"


class TestConditionalTypes:
    def test_infer(self, expand):
        script = (
            "type ExtractProps<T> = T extends { props: infer TProps } ? TProps : never\n"
            "type Component = { props: { title: string; count: number }; emits: {} }\n"
            "type Props = ExtractProps<Component>\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ title: string; count: number }"

    def test_false_branch(self, expand):
        script = (
            "type IsString<T> = T extends string ? { text: T } : { value: T }\n"
            "defineProps<IsString<number>>()"
        )
        assert expand(script) == "{ value: number }"

    def test_distribution(self, expand):
        script = (
            "type Boxed<T> = T extends any ? { box: T } : never\n"
            "type Props = { items: Boxed<'a' | 'b'> }\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ items: { box: 'a' } | { box: 'b' } }"


class TestValueTypes:
    def test_typeof_const_object(self, expand):
        script = "const defaults = { title: 'hello', count: 42 } as const\ntype Props = typeof defaults\ndefineProps<Props>()"
        assert expand(script) == "{ title: 'hello'; count: 42 }"

    def test_typeof_config(self, expand):
        script = (
            "const config = {\n"
            "  apiUrl: 'https://api.example.com',\n"
            "  timeout: 5000,\n"
            "  retries: 3\n"
            "} as const\n\n"
            "type Props = typeof config\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ apiUrl: 'https://api.example.com'; timeout: 5000; retries: 3 }"

    def test_return_type(self, expand):
        script = (
            "function getUser() {\n"
            "  return { id: 1, name: 'Alice', role: 'admin' as const }\n"
            "}\n"
            "type Props = ReturnType<typeof getUser>\n"
            "defineProps<Props>()"
        )
        resolved = expand(script)
        assert "id: number" in resolved
        assert "name: string" in resolved
        assert "role: 'admin'" in resolved

    def test_generic_component_parameter_is_any(self, plugin, component_dir):
        code = (
            '<script setup lang="ts" generic="T extends { id: number }">\n'
            "type Props = {\n  items: Array<T>\n  onSelect: (item: T) => void\n}\n"
            "defineProps<Props>()\n"
            "</script>\n\n<template><div /></template>\n"
        )
        result = plugin.transform(code, str(component_dir / "Component.vue"))
        assert "defineProps<{ items: Array<any>; onSelect: (item: any) => void }>()" in result.code


class TestAwaited:
    def test_promise(self, expand):
        assert expand("type Props = { a: Awaited<Promise<string>> }\ndefineProps<Props>()") == "{ a: string }"

    def test_nested_promises(self, expand):
        script = "type Props = { a: Awaited<Promise<Promise<number>>>; b: Awaited<boolean> }\ndefineProps<Props>()"
        assert expand(script) == "{ a: number; b: boolean }"

    def test_async_return_type(self, expand):
        script = (
            "async function load() {\n"
            "  return { id: 1 }\n"
            "}\n"
            "type Props = Awaited<ReturnType<typeof load>>\n"
            "defineProps<Props>()"
        )
        assert expand(script) == "{ id: number }"
