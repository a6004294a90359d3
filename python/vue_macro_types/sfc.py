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
"""Splitting of Vue single-file components into their top-level blocks.

Only block boundaries and opening-tag attributes are read; block contents
are left untouched. ``<template>`` blocks may nest further templates, so
their end is found by depth counting. ``<script>`` and ``<style>`` end at
the first matching closing tag, as in HTML raw text elements.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

AttrValue = Union[str, bool]

_OPEN_TAG = re.compile(r"<([A-Za-z][\w-]*)((?:\s+[^\s=>/]+(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s>]+))?)*)\s*(/?)>")
_ATTRIBUTE = re.compile(r"([^\s=>/]+)(?:\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|([^\s>]+)))?")
_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)


@dataclass
class SFCBlock:
    """A top-level block of a component.

    Attributes:
        type: Tag name (``script``, ``template``, ``style`` or a custom block)
        content: Text between the opening and closing tags
        attrs: Opening-tag attributes; valueless attributes map to True
        start: Character offset of ``content`` in the component source
        end: Character offset one past ``content``
    """
    type: str
    content: str
    attrs: Dict[str, AttrValue]
    start: int
    end: int

    @property
    def lang(self) -> Optional[str]:
        lang = self.attrs.get("lang")
        return lang if isinstance(lang, str) else None

    @property
    def setup(self) -> bool:
        return "setup" in self.attrs


@dataclass
class SFCDescriptor:
    filename: str
    source: str
    template: Optional[SFCBlock] = None
    script: Optional[SFCBlock] = None
    script_setup: Optional[SFCBlock] = None
    styles: List[SFCBlock] = field(default_factory=list)
    custom_blocks: List[SFCBlock] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def _parse_attributes(text: str) -> Dict[str, AttrValue]:
    attrs: Dict[str, AttrValue] = {}
    for match in _ATTRIBUTE.finditer(text):
        name, double, single, bare = match.groups()
        value = next((v for v in (double, single, bare) if v is not None), None)
        attrs[name] = value if value is not None else True
    return attrs


def _find_template_end(code: str, position: int) -> Optional[re.Match]:
    """Closing ``</template>`` matching an already opened one."""
    depth = 1
    pattern = re.compile(r"<template\b[^>]*?(/?)>|</template\s*>", re.IGNORECASE)
    for match in pattern.finditer(code, position):
        if match.group(0).startswith("</"):
            depth -= 1
            if depth == 0:
                return match
        elif not match.group(1):
            depth += 1
    return None


def parse_sfc(code: str, filename: str = "anonymous.vue") -> SFCDescriptor:
    """Split ``code`` into its top-level blocks.

    Malformed input never raises; problems are collected in
    ``SFCDescriptor.errors`` and the blocks found so far are kept.
    """
    descriptor = SFCDescriptor(filename=filename, source=code)
    position = 0
    while position < len(code):
        start = code.find("<", position)
        if start < 0:
            break
        comment = _COMMENT.match(code, start)
        if comment is not None:
            position = comment.end()
            continue
        match = _OPEN_TAG.match(code, start)
        if match is None:
            position = start + 1
            continue

        tag = match.group(1).lower()
        attrs = _parse_attributes(match.group(2))
        if match.group(3):
            # Self-closing block: no content
            position = match.end()
            continue

        content_start = match.end()
        if tag == "template":
            closing = _find_template_end(code, content_start)
        else:
            closing = re.compile(rf"</{re.escape(tag)}\s*>", re.IGNORECASE).search(code, content_start)
        if closing is None:
            descriptor.errors.append(f"Element <{tag}> is missing end tag")
            logger.debug(f"{filename}: unclosed <{tag}> at offset {start}")
            break

        block = SFCBlock(tag, code[content_start:closing.start()], attrs, content_start, closing.start())
        _attach(descriptor, block)
        position = closing.end()
    return descriptor


def _attach(descriptor: SFCDescriptor, block: SFCBlock) -> None:
    if block.type == "script":
        slot = "script_setup" if block.setup else "script"
        if getattr(descriptor, slot) is not None:
            kind = "<script setup>" if block.setup else "<script>"
            descriptor.errors.append(f"Single file component can contain only one {kind} element")
            return
        setattr(descriptor, slot, block)
    elif block.type == "template":
        if descriptor.template is not None:
            descriptor.errors.append("Single file component can contain only one <template> element")
            return
        descriptor.template = block
    elif block.type == "style":
        descriptor.styles.append(block)
    else:
        descriptor.custom_blocks.append(block)
