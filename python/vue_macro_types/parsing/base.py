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
"""Grammar loading for the tree-sitter TypeScript parsers."""

from __future__ import annotations

import functools
from typing import List

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

TYPESCRIPT = "typescript"
TSX = "tsx"


@functools.lru_cache(maxsize=None)
def get_language(dialect: str = TYPESCRIPT) -> Language:
    if dialect == TSX:
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_typescript.language_typescript())


def dialect_for(file_name: str) -> str:
    return TSX if file_name.endswith(".tsx") else TYPESCRIPT


def parse_typescript(text: str, dialect: str = TYPESCRIPT) -> Tree:
    """Parse ``text`` as UTF-8 encoded TypeScript.

    Parsers are cheap to build and not safe to share between threads, so a
    fresh one is created per call.
    """
    parser = Parser(get_language(dialect))
    return parser.parse(text.encode("utf-8"))


def collect_syntax_errors(root: Node, limit: int = 5) -> List[str]:
    """Describe up to ``limit`` ERROR or MISSING nodes as ``line:col`` messages."""
    errors: List[str] = []
    stack = [root]
    while stack and len(errors) < limit:
        node = stack.pop()
        if not node.has_error:
            continue
        if node.type == "ERROR" or node.is_missing:
            row, column = node.start_point
            what = f"missing {node.type}" if node.is_missing else "unexpected token"
            errors.append(f"{row + 1}:{column + 1} {what}")
            continue
        stack.extend(reversed(node.children))
    return errors
