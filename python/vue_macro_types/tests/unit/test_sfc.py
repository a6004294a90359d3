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
"""Unit tests for single-file component block splitting."""

from vue_macro_types.sfc import parse_sfc

COMPONENT = """<script lang="ts">
export const CONSTANT = 42
</script>

<script setup lang="ts" generic="T extends { id: number }">
defineProps<Props>()
</script>

<template>
  <template v-if="ok"><div>{{ value }}</div></template>
  <script>not a block</script>
</template>

<style scoped>
.container { padding: 20px; }
</style>
"""


class TestBlocks:
    """Top-level blocks and their attributes."""

    def test_script_setup_content_and_offsets(self):
        descriptor = parse_sfc(COMPONENT, "/src/Card.vue")
        block = descriptor.script_setup
        assert block is not None
        assert block.content == "\ndefineProps<Props>()\n"
        assert COMPONENT[block.start:block.end] == block.content

    def test_attributes(self):
        block = parse_sfc(COMPONENT).script_setup
        assert block.lang == "ts"
        assert block.setup
        assert block.attrs["generic"] == "T extends { id: number }"
        assert block.attrs["setup"] is True

    def test_plain_script(self):
        descriptor = parse_sfc(COMPONENT)
        assert descriptor.script is not None
        assert not descriptor.script.setup
        assert "CONSTANT" in descriptor.script.content

    def test_nested_template_is_not_split(self):
        template = parse_sfc(COMPONENT).template
        assert template is not None
        assert '<template v-if="ok">' in template.content
        assert "<script>not a block</script>" in template.content

    def test_styles(self):
        styles = parse_sfc(COMPONENT).styles
        assert len(styles) == 1
        assert styles[0].attrs == {"scoped": True}

    def test_filename(self):
        assert parse_sfc(COMPONENT, "/src/Card.vue").filename == "/src/Card.vue"


class TestEdgeCases:
    """Inputs that are incomplete or unusual."""

    def test_no_script_setup(self):
        descriptor = parse_sfc('<script lang="ts">\nexport default {}\n</script>\n')
        assert descriptor.script_setup is None
        assert descriptor.script is not None

    def test_lang_missing(self):
        assert parse_sfc("<script setup>\nconst a = 1\n</script>").script_setup.lang is None

    def test_single_quoted_and_bare_attributes(self):
        block = parse_sfc("<script setup lang='ts' data-x=1>x</script>").script_setup
        assert block.lang == "ts"
        assert block.attrs["data-x"] == "1"

    def test_comment_blocks_are_skipped(self):
        code = "<!-- <script setup lang=\"js\">x</script> -->\n<script setup lang=\"ts\">y</script>"
        assert parse_sfc(code).script_setup.content == "y"

    def test_unclosed_block_is_reported(self):
        descriptor = parse_sfc('<script setup lang="ts">\ndefineProps<Props>()\n')
        assert descriptor.script_setup is None
        assert descriptor.errors

    def test_duplicate_script_setup_keeps_first(self):
        code = '<script setup lang="ts">a</script>\n<script setup lang="ts">b</script>'
        descriptor = parse_sfc(code)
        assert descriptor.script_setup.content == "a"
        assert len(descriptor.errors) == 1

    def test_custom_block(self):
        descriptor = parse_sfc('<i18n lang="json">{}</i18n>')
        assert descriptor.custom_blocks[0].type == "i18n"

    def test_non_ascii_offsets_are_characters(self):
        code = '<!-- 名字 🎉 -->\n<script setup lang="ts">defineProps<P>()</script>'
        block = parse_sfc(code).script_setup
        assert code[block.start:block.end] == "defineProps<P>()"
