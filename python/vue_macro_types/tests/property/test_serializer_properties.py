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
"""Property-based tests for type literal serialization."""

from __future__ import annotations

from hypothesis import HealthCheck, given, settings, strategies as st

from vue_macro_types.checker.utilities import is_identifier_text

words = st.text(alphabet="abcdefghij", min_size=1, max_size=6)
keys = st.text(alphabet=st.sampled_from(list("abcxyz_$-@ 9é")), min_size=1, max_size=8)

_SETTINGS = settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])


class TestSerializerProperties:
    @_SETTINGS
    @given(st.lists(words, min_size=1, max_size=6, unique=True))
    def test_literal_union_keeps_declaration_order(self, serialize, members):
        union = " | ".join(f"'{m}'" for m in members)
        script = f"type Props = {{ value: {union} }}\ndefineProps<Props>()"
        assert serialize(script) == "{ value: " + union + " }"

    @_SETTINGS
    @given(st.lists(keys, min_size=1, max_size=5, unique=True))
    def test_keys_quoted_only_when_needed(self, serialize, names):
        members = "; ".join(f"'{name}': number" for name in names)
        resolved = serialize(f"type Props = {{ {members} }}\ndefineProps<Props>()")
        for name in names:
            key = name if is_identifier_text(name) else '"' + name + '"'
            assert f"{key}: number" in resolved

    @_SETTINGS
    @given(st.integers(min_value=1, max_value=6))
    def test_nesting_depth_is_preserved(self, serialize, depth):
        lines = ["type L0 = { leaf: string }"]
        lines += [f"type L{i} = {{ child: L{i - 1} }}" for i in range(1, depth + 1)]
        script = "\n".join(lines) + f"\ndefineProps<L{depth}>()"
        expected = "{ leaf: string }"
        for _ in range(depth):
            expected = "{ child: " + expected + " }"
        assert serialize(script) == expected
