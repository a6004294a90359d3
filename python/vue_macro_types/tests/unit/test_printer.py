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
"""Unit tests for printing types in checker notation."""

import pytest


class TestPrimitives:
    @pytest.mark.parametrize(
        "annotation,expected",
        [
            ("string", "string"),
            ("number", "number"),
            ("boolean", "boolean"),
            ("null", "null"),
            ("any", "any"),
            ("unknown", "unknown"),
            ("never", "never"),
            ("'a'", '"a"'),
            ("42", "42"),
            ("true", "true"),
        ],
    )
    def test_keywords_and_literals(self, print_type, annotation, expected):
        assert print_type(f"defineProps<{annotation}>()") == expected


class TestComposites:
    def test_array(self, print_type):
        assert print_type("defineProps<string[]>()") == "string[]"
        assert print_type("defineProps<Array<number>>()") == "number[]"

    def test_readonly_array(self, print_type):
        assert print_type("defineProps<readonly string[]>()") == "readonly string[]"

    def test_union_element_is_parenthesized(self, print_type):
        assert print_type("defineProps<('a' | 'b')[]>()") == '("a" | "b")[]'

    def test_literal_union(self, print_type):
        assert print_type("defineProps<'sm' | 'md' | 'lg'>()") == '"sm" | "md" | "lg"'

    def test_tuple(self, print_type):
        assert print_type("defineProps<[number, string?]>()") == "[number, string?]"

    def test_function(self, print_type):
        assert print_type("defineProps<(value: number) => string>()") == "(value: number) => string"

    def test_object_literal(self, print_type):
        printed = print_type("defineProps<{ readonly id: number; 'data-id': string }>()")
        assert printed == '{ readonly id: number; "data-id": string; }'

    def test_empty_object(self, print_type):
        assert print_type("defineProps<{}>()") == "{}"

    def test_index_signature(self, print_type):
        assert print_type("defineProps<{ [key: string]: number }>()") == "{ [x: string]: number; }"


class TestAliases:
    def test_alias_prints_by_name(self, print_type):
        assert print_type("type Props = { a: string }\ndefineProps<Props>()") == "Props"

    def test_generic_alias_prints_arguments(self, print_type):
        script = "type Box<T> = { value: T }\ndefineProps<Box<string>>()"
        assert print_type(script) == "Box<string>"

    def test_keyof_resolves_to_literals(self, print_type):
        script = "interface User { id: number; name: string }\ndefineProps<keyof User>()"
        assert print_type(script) == '"id" | "name"'
