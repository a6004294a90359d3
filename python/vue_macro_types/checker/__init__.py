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
"""A TypeScript type checker for type-level declarations.

Covers what property declarations are written with: aliases, interfaces,
generics, unions and intersections, arrays and tuples, mapped and
conditional types, indexed access, ``keyof`` and ``typeof``.

- syntax: source files and syntax nodes over tree-sitter trees
- binder: symbol tables per scope and per module
- checker: type construction, instantiation and relations
- expressions: types of value expressions for ``typeof``
- printer: types in TypeScript notation
- program: programs, the document registry and the language service
- resolution: module specifier resolution
"""

from vue_macro_types.checker.checker import TypeChecker
from vue_macro_types.checker.program import DEFAULT_LIB_FILE, DocumentRegistry, LanguageService, Program
from vue_macro_types.checker.syntax import SourceFile, SyntaxNode
from vue_macro_types.checker.types import Symbol, Type, TypeFlags

__all__ = [
    "TypeChecker",
    "DEFAULT_LIB_FILE",
    "DocumentRegistry",
    "LanguageService",
    "Program",
    "SourceFile",
    "SyntaxNode",
    "Symbol",
    "Type",
    "TypeFlags",
]
