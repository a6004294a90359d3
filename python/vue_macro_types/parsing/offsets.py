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
"""Byte offset to character offset conversion.

tree-sitter reports positions as offsets into the UTF-8 encoding of the
source, while callers slice Python strings. The converter built here maps
every byte offset of the source, including those inside a multi-byte
sequence, to the character offset where that code point starts. Lookups
are O(1).

Two character units are supported:

- ``codepoint``: one unit per code point, the way Python indexes ``str``
- ``utf-16``: one unit per UTF-16 code unit, so code points above U+FFFF
  count twice (the unit JavaScript hosts and source maps use)
"""

from __future__ import annotations

from typing import Callable, Dict

from vue_macro_types.errors import InvalidByteOffsetError

CODEPOINT = "codepoint"
UTF16 = "utf-16"

ByteToChar = Callable[[int], int]


def _utf8_length(code_point: int) -> int:
    if code_point <= 0x7F:
        return 1
    if code_point <= 0x7FF:
        return 2
    if code_point <= 0xFFFF:
        return 3
    return 4


def create_byte_to_char_converter(text: str, unit: str = CODEPOINT) -> ByteToChar:
    """Build a converter from UTF-8 byte offsets to character offsets of ``text``.

    Args:
        text: The decoded source text
        unit: ``"codepoint"`` or ``"utf-16"``

    Returns:
        A function mapping a byte offset to a character offset. Offsets outside
        the text raise InvalidByteOffsetError.
    """
    if unit not in (CODEPOINT, UTF16):
        raise ValueError(f"Unknown character unit: {unit!r}")

    if text.isascii():
        length = len(text)

        def identity(byte_offset: int) -> int:
            if not 0 <= byte_offset <= length:
                raise InvalidByteOffsetError(byte_offset, length)
            return byte_offset

        return identity

    table: Dict[int, int] = {}
    byte_index = 0
    char_index = 0
    for char in text:
        code_point = ord(char)
        byte_length = _utf8_length(code_point)
        for i in range(byte_length):
            table[byte_index + i] = char_index
        byte_index += byte_length
        if unit == UTF16 and code_point > 0xFFFF:
            char_index += 2
        else:
            char_index += 1
    table[byte_index] = char_index

    total = byte_index

    def convert(byte_offset: int) -> int:
        try:
            return table[byte_offset]
        except KeyError:
            raise InvalidByteOffsetError(byte_offset, total) from None

    return convert


def utf16_length(text: str) -> int:
    """Length of ``text`` in UTF-16 code units."""
    return len(text) + sum(1 for char in text if ord(char) > 0xFFFF)
