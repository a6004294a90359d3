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
"""Unit tests for call-site location."""

from vue_macro_types.parsing.locator import LocatedArgument, locate_call_site


class TestMatches:
    """Calls that are located."""

    def test_basic_call(self):
        script = "type Props = { name: string }\ndefineProps<Props>()\n"
        located = locate_call_site(script)
        assert located == LocatedArgument("Props", script.index("Props>"), script.index("Props>") + 5)

    def test_offsets_slice_raw_text(self):
        script = "const props = defineProps<{ a: string }>()"
        located = locate_call_site(script)
        assert located is not None
        assert script[located.start_offset:located.end_offset] == located.raw_text == "{ a: string }"

    def test_nested_in_other_call(self):
        script = "const props = withDefaults(defineProps<Props>(), { size: 'md' })"
        located = locate_call_site(script)
        assert located is not None
        assert located.raw_text == "Props"

    def test_destructured_call(self):
        script = "const { title, count = 0 } = defineProps<Props>()"
        assert locate_call_site(script).raw_text == "Props"

    def test_multiline_argument(self):
        script = "defineProps<{\n  name: string\n  age: number\n}>()"
        located = locate_call_site(script)
        assert located.raw_text == "{\n  name: string\n  age: number\n}"

    def test_custom_function_name(self):
        script = "defineEmits<Emits>()\ndefineProps<Props>()"
        assert locate_call_site(script, "defineEmits").raw_text == "Emits"

    def test_unicode_before_call(self):
        script = "const greeting = '名字 🎉'\ndefineProps<Props>()"
        located = locate_call_site(script)
        assert located is not None
        assert script[located.start_offset:located.end_offset] == "Props"


class TestFirstMatchOnly:
    """Only the first call in document order is reported."""

    def test_first_of_two(self):
        script = "defineProps<{ first: string }>()\ndefineProps<{ second: string }>()"
        assert locate_call_site(script).raw_text == "{ first: string }"

    def test_comment_is_ignored(self):
        script = "// defineProps<{ commented: string }>()\n/* defineProps<B>() */\ndefineProps<Actual>()"
        assert locate_call_site(script).raw_text == "Actual"

    def test_string_is_ignored(self):
        script = "const code = 'defineProps<{ inString: string }>()'\ndefineProps<Actual>()"
        assert locate_call_site(script).raw_text == "Actual"

    def test_template_substitution_is_ignored(self):
        script = "const s = `${defineProps<{ inTemplate: string }>()}`\ndefineProps<Actual>()"
        assert locate_call_site(script).raw_text == "Actual"


class TestNonMatches:
    """Calls and scripts that yield nothing."""

    def test_no_call(self):
        assert locate_call_site('const msg = "hello"') is None

    def test_runtime_declaration(self):
        assert locate_call_site("const props = defineProps({ name: String })") is None

    def test_two_type_arguments(self):
        assert locate_call_site("defineProps<Props, Extra>()") is None

    def test_member_call(self):
        assert locate_call_site("macros.defineProps<Props>()") is None

    def test_other_function(self):
        assert locate_call_site("defineModel<string>()") is None

    def test_syntax_error(self):
        assert locate_call_site("type Props = { name: string\ndefineProps<Props>()") is None

    def test_empty_type_arguments(self):
        assert locate_call_site("defineProps<>()") is None


class TestStatementForms:
    """Calls reached through statement and expression fields."""

    def test_inside_if_block(self):
        script = "if (ready) {\n  const props = defineProps<Props>()\n}"
        assert locate_call_site(script).raw_text == "Props"

    def test_inside_arrow_body(self):
        assert locate_call_site("const setup = () => defineProps<Props>()").raw_text == "Props"

    def test_await_and_assertion(self):
        script = "const props = (await load(), defineProps<Props>()) as Record<string, unknown>"
        assert locate_call_site(script).raw_text == "Props"

    def test_class_field_initializer(self):
        script = "class Store {\n  props = defineProps<Props>()\n}"
        assert locate_call_site(script).raw_text == "Props"

    def test_ternary_branches_in_order(self):
        script = "const props = flag ? defineProps<A>() : defineProps<B>()"
        assert locate_call_site(script).raw_text == "A"
