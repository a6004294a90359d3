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
"""Source rewriting with source maps.

``SourceEditor`` records range replacements against an original text and
produces both the edited text and a Source Map v3 relating the two.
Offsets given to the editor are character offsets into the original.
Source map columns are counted in UTF-16 code units, which is what
JavaScript tooling consuming the maps expects.
"""

from __future__ import annotations

import base64
import bisect
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from vue_macro_types.errors import EditError
from vue_macro_types.parsing.offsets import utf16_length

logger = logging.getLogger(__name__)

_BASE64_DIGITS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

# (generated column, source index, original line, original column)
Segment = Tuple[int, int, int, int]


def encode_vlq(value: int) -> str:
    """Base64 VLQ encoding of one source map field.

    Example:
        >>> encode_vlq(0), encode_vlq(1), encode_vlq(-1), encode_vlq(16)
        ('A', 'C', 'D', 'gB')
    """
    vlq = (-value << 1) | 1 if value < 0 else value << 1
    digits = []
    while True:
        digit = vlq & 0b11111
        vlq >>= 5
        if vlq:
            digit |= 0b100000
        digits.append(_BASE64_DIGITS[digit])
        if not vlq:
            return "".join(digits)


def encode_mappings(lines: List[List[Segment]]) -> str:
    """Encode decoded segments as a ``mappings`` string."""
    previous_source = previous_line = previous_column = 0
    encoded_lines = []
    for segments in lines:
        previous_generated = 0
        encoded = []
        for generated_column, source, line, column in segments:
            encoded.append(
                encode_vlq(generated_column - previous_generated)
                + encode_vlq(source - previous_source)
                + encode_vlq(line - previous_line)
                + encode_vlq(column - previous_column)
            )
            previous_generated = generated_column
            previous_source, previous_line, previous_column = source, line, column
        encoded_lines.append(",".join(encoded))
    return ";".join(encoded_lines)


def _utf16_width(char: str) -> int:
    return 2 if ord(char) > 0xFFFF else 1


@dataclass(frozen=True)
class SourceMap:
    """A Source Map v3 document."""
    mappings: str
    sources: List[Optional[str]]
    names: List[str] = field(default_factory=list)
    file: Optional[str] = None
    sources_content: Optional[List[Optional[str]]] = None
    version: int = 3

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"version": self.version}
        if self.file is not None:
            data["file"] = self.file
        data["sources"] = list(self.sources)
        if self.sources_content is not None:
            data["sourcesContent"] = list(self.sources_content)
        data["names"] = list(self.names)
        data["mappings"] = self.mappings
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    def to_url(self) -> str:
        encoded = base64.b64encode(self.to_json().encode("utf-8")).decode("ascii")
        return "data:application/json;charset=utf-8;base64," + encoded


class _MappingBuilder:
    """Walks generated output, emitting segments against original positions."""

    def __init__(self, hires: bool) -> None:
        self.hires = hires
        self.lines: List[List[Segment]] = [[]]
        self.column = 0

    def _new_line(self) -> None:
        self.lines.append([])
        self.column = 0

    def unedited(self, text: str, line: int, column: int) -> Tuple[int, int]:
        first = True
        for char in text:
            if char == "\n":
                line += 1
                column = 0
                self._new_line()
                first = True
                continue
            if self.hires or first:
                self.lines[-1].append((self.column, 0, line, column))
                first = False
            width = _utf16_width(char)
            column += width
            self.column += width
        return line, column

    def edit(self, content: str, line: int, column: int) -> None:
        if not content:
            return
        parts = content.split("\n")
        for index, part in enumerate(parts):
            is_last = index == len(parts) - 1
            # No segment for the empty remainder after a trailing newline
            if not (is_last and index > 0 and part == ""):
                self.lines[-1].append((self.column, 0, line, column))
            self.column += utf16_length(part)
            if not is_last:
                self._new_line()


class SourceEditor:
    """Replace ranges of a text and keep track of where everything came from.

    Example:
        >>> editor = SourceEditor("defineProps<Props>()").overwrite(12, 17, "{ a: string }")
        >>> editor.to_string()
        'defineProps<{ a: string }>()'
    """

    def __init__(self, original: str) -> None:
        self.original = original
        self._edits: List[Tuple[int, int, str]] = []

    def overwrite(self, start: int, end: int, content: str) -> "SourceEditor":
        """Replace ``original[start:end]`` with ``content``.

        Raises:
            EditError: If the range is empty, out of bounds, or overlaps a
                previous edit
        """
        if not 0 <= start < end <= len(self.original):
            raise EditError(f"Edit range [{start}, {end}) is out of bounds (length {len(self.original)})")
        index = bisect.bisect_left(self._edits, (start, end, ""))
        if index > 0 and self._edits[index - 1][1] > start:
            raise EditError(f"Edit range [{start}, {end}) overlaps an earlier edit")
        if index < len(self._edits) and self._edits[index][0] < end:
            raise EditError(f"Edit range [{start}, {end}) overlaps an earlier edit")
        self._edits.insert(index, (start, end, content))
        return self

    @property
    def has_changed(self) -> bool:
        return bool(self._edits)

    def to_string(self) -> str:
        parts = []
        position = 0
        for start, end, content in self._edits:
            parts.append(self.original[position:start])
            parts.append(content)
            position = end
        parts.append(self.original[position:])
        return "".join(parts)

    def generate_map(
        self,
        source: Optional[str] = None,
        file: Optional[str] = None,
        include_content: bool = False,
        hires: bool = True,
    ) -> SourceMap:
        """Build a source map from the edited text back to the original.

        Args:
            source: Name of the original file, recorded in ``sources``
            file: Name of the generated file
            include_content: Embed the original text as ``sourcesContent``
            hires: One segment per original character instead of one per line
        """
        builder = _MappingBuilder(hires)
        line = column = 0
        position = 0
        for start, end, content in self._edits:
            line, column = builder.unedited(self.original[position:start], line, column)
            builder.edit(content, line, column)
            for char in self.original[start:end]:
                if char == "\n":
                    line, column = line + 1, 0
                else:
                    column += _utf16_width(char)
            position = end
        builder.unedited(self.original[position:], line, column)

        return SourceMap(
            mappings=encode_mappings(builder.lines),
            sources=[source],
            file=file,
            sources_content=[self.original] if include_content else None,
        )


@dataclass(frozen=True)
class RewriteResult:
    """Rewritten text and the source map back to the original."""
    code: str
    map: SourceMap


def rewrite(
    original: str,
    block_offset: int,
    arg_start: int,
    arg_end: int,
    literal: str,
    source: Optional[str] = None,
) -> RewriteResult:
    """Replace the located type argument in ``original`` with ``literal``.

    Args:
        original: Full text of the component file
        block_offset: Character offset of the script block in ``original``
        arg_start: Character offset of the argument within the block
        arg_end: Character offset one past the argument within the block
        literal: Replacement text
        source: File name recorded in the source map

    Raises:
        EditError: If the resulting range falls outside ``original``
    """
    editor = SourceEditor(original)
    editor.overwrite(block_offset + arg_start, block_offset + arg_end, literal)
    logger.debug(f"Rewrote [{block_offset + arg_start}, {block_offset + arg_end}) with {len(literal)} characters")
    return RewriteResult(code=editor.to_string(), map=editor.generate_map(source=source, hires=True))
