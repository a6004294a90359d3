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
"""Syntax tree wrapper used by the checker.

``SyntaxNode`` wraps a tree-sitter node together with the ``SourceFile`` it
belongs to, so that positions are reported as character offsets and nodes
can be used as dictionary keys across repeated wrapper construction.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from tree_sitter import Node

from vue_macro_types.parsing.base import collect_syntax_errors, dialect_for, parse_typescript
from vue_macro_types.parsing.offsets import create_byte_to_char_converter

NodeKey = Tuple[str, str, int, int]


class SourceFile:
    """A parsed script unit.

    Attributes:
        file_name: Absolute file name the unit is known by
        text: Source text
        version: Host-reported version the text was parsed at
        is_declaration_file: True for ``.d.ts`` files
    """

    def __init__(self, file_name: str, text: str, version: str):
        self.file_name = file_name
        self.text = text
        self.version = version
        self.is_declaration_file = file_name.endswith(".d.ts")
        self._tree = parse_typescript(text, dialect_for(file_name))
        self._to_char = create_byte_to_char_converter(text)
        self.root = SyntaxNode(self._tree.root_node, self)

    @property
    def has_syntax_errors(self) -> bool:
        return self._tree.root_node.has_error

    def syntax_errors(self) -> List[str]:
        return collect_syntax_errors(self._tree.root_node)

    def char_offset(self, byte_offset: int) -> int:
        return self._to_char(byte_offset)

    def __repr__(self) -> str:
        return f"SourceFile({self.file_name!r}, version={self.version!r})"


class SyntaxNode:
    """A tree-sitter node bound to its source file."""

    __slots__ = ("_node", "file")

    def __init__(self, node: Node, file: SourceFile):
        self._node = node
        self.file = file

    @property
    def kind(self) -> str:
        return self._node.type

    @property
    def key(self) -> NodeKey:
        node = self._node
        return (self.file.file_name, node.type, node.start_byte, node.end_byte)

    @property
    def pos(self) -> int:
        return self.file.char_offset(self._node.start_byte)

    @property
    def end(self) -> int:
        return self.file.char_offset(self._node.end_byte)

    @property
    def text(self) -> str:
        return self._node.text.decode("utf-8")

    @property
    def parent(self) -> Optional["SyntaxNode"]:
        parent = self._node.parent
        return SyntaxNode(parent, self.file) if parent is not None else None

    @property
    def children(self) -> List["SyntaxNode"]:
        """Named children, comments excluded."""
        return [
            SyntaxNode(child, self.file)
            for child in self._node.named_children
            if child.type != "comment"
        ]

    def field(self, name: str) -> Optional["SyntaxNode"]:
        child = self._node.child_by_field_name(name)
        return SyntaxNode(child, self.file) if child is not None else None

    def fields(self, name: str) -> List["SyntaxNode"]:
        return [SyntaxNode(child, self.file) for child in self._node.children_by_field_name(name)]

    def first(self, *kinds: str) -> Optional["SyntaxNode"]:
        for child in self._node.named_children:
            if child.type in kinds:
                return SyntaxNode(child, self.file)
        return None

    def has_token(self, token: str) -> bool:
        """Whether an anonymous child token such as ``readonly`` or ``?`` is present."""
        return any(not child.is_named and child.type == token for child in self._node.children)

    def tokens(self) -> List[str]:
        return [child.type for child in self._node.children if not child.is_named]

    def ancestors(self) -> Iterator["SyntaxNode"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def child_containing(self, offset: int) -> Optional["SyntaxNode"]:
        """The named child whose character range contains ``offset``."""
        for child in self.children:
            if child.pos <= offset < child.end:
                return child
        return None

    def walk(self, stop_kinds: Tuple[str, ...] = ()) -> Iterator["SyntaxNode"]:
        """Pre-order walk of named descendants, not entering ``stop_kinds``."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            if node.kind not in stop_kinds:
                stack.extend(reversed(node.children))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SyntaxNode) and self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind}, {self.pos}..{self.end})"


def string_literal_value(node: SyntaxNode) -> str:
    """Decode the value of a ``string`` node (quotes and escapes removed)."""
    text = node.text
    if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
        text = text[1:-1]
    return unescape_js(text)


_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0",
}


def unescape_js(text: str) -> str:
    if "\\" not in text:
        return text
    out = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != "\\" or i + 1 >= len(text):
            out.append(char)
            i += 1
            continue
        nxt = text[i + 1]
        if nxt in _SIMPLE_ESCAPES and not (nxt == "0" and i + 2 < len(text) and text[i + 2].isdigit()):
            out.append(_SIMPLE_ESCAPES[nxt])
            i += 2
        elif nxt in "xu":
            code_point, consumed = _hex_escape(text, i)
            if code_point is None:
                out.append(nxt)
                i += 2
            else:
                out.append(chr(code_point))
                i += consumed
        elif nxt == "\n":
            i += 2
        else:
            out.append(nxt)
            i += 2
    return "".join(out)


def _hex_escape(text: str, i: int) -> Tuple[Optional[int], int]:
    """Decode ``\\xHH``, ``\\uHHHH`` or ``\\u{H...}`` at ``text[i]``."""
    kind = text[i + 1]
    if kind == "x":
        digits, consumed = text[i + 2:i + 4], 4
    elif text[i + 2:i + 3] == "{":
        close = text.find("}", i + 3)
        if close < 0:
            return None, 0
        digits, consumed = text[i + 3:close], close + 1 - i
    else:
        digits, consumed = text[i + 2:i + 6], 6
    try:
        code_point = int(digits, 16)
    except ValueError:
        return None, 0
    if code_point > 0x10FFFF:
        return None, 0
    return code_point, consumed
