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
"""Declaration binding.

The binder builds one symbol table per scope container (a source file or a
statement block) and one export table per source file. Tables are built on
first request and cached by container node.

Declarations of the same name in one container merge into one symbol, so
an interface declared twice, or a ``const`` and a ``type`` sharing a name,
resolve through a single entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from vue_macro_types.checker.syntax import NodeKey, SourceFile, SyntaxNode, string_literal_value
from vue_macro_types.checker.types import Symbol, SymbolFlags

SymbolTable = Dict[str, Symbol]

SCOPE_CONTAINERS = frozenset({"program", "statement_block"})

_DECLARATION_FLAGS = {
    "type_alias_declaration": SymbolFlags.TYPE_ALIAS,
    "interface_declaration": SymbolFlags.INTERFACE,
    "function_declaration": SymbolFlags.FUNCTION,
    "generator_function_declaration": SymbolFlags.FUNCTION,
    "function_signature": SymbolFlags.FUNCTION,
    "class_declaration": SymbolFlags.CLASS,
    "abstract_class_declaration": SymbolFlags.CLASS,
    "enum_declaration": SymbolFlags.ENUM,
}


@dataclass
class ModuleExports:
    """Exported names of one source file.

    Attributes:
        symbols: Exported name to symbol; local re-exports and re-exports
            from other modules are ALIAS symbols
        star_sources: Module specifiers of ``export * from`` statements
    """
    symbols: SymbolTable = field(default_factory=dict)
    star_sources: List[str] = field(default_factory=list)


def _declare(table: SymbolTable, name: str, flags: SymbolFlags, declaration: SyntaxNode) -> Symbol:
    symbol = table.get(name)
    if symbol is None:
        symbol = Symbol(name, flags, [declaration])
        table[name] = symbol
    else:
        symbol.flags |= flags
        symbol.declarations.append(declaration)
    return symbol


def _alias(name: str, declaration: SyntaxNode, module: Optional[str], imported: str) -> Symbol:
    symbol = Symbol(name, SymbolFlags.ALIAS, [declaration])
    symbol.import_info = (module, imported)
    return symbol


def _module_specifier(statement: SyntaxNode) -> Optional[str]:
    source = statement.field("source")
    return string_literal_value(source) if source is not None else None


def _specifier_text(node: Optional[SyntaxNode]) -> Optional[str]:
    if node is None:
        return None
    if node.kind == "string":
        return string_literal_value(node)
    return node.text


class Binder:
    """Builds and caches symbol tables for source files and blocks."""

    def __init__(self) -> None:
        self._locals: Dict[NodeKey, SymbolTable] = {}
        self._exports: Dict[str, ModuleExports] = {}

    def get_locals(self, container: SyntaxNode) -> SymbolTable:
        key = container.key
        table = self._locals.get(key)
        if table is None:
            table = {}
            exports = self._exports_for(container)
            for statement in container.children:
                self._bind_statement(statement, table, exports)
            self._locals[key] = table
        return table

    def get_exports(self, file: SourceFile) -> ModuleExports:
        self.get_locals(file.root)
        return self._exports[file.file_name]

    def _exports_for(self, container: SyntaxNode) -> Optional[ModuleExports]:
        if container.kind != "program":
            return None
        exports = ModuleExports()
        self._exports[container.file.file_name] = exports
        return exports

    # -------------------------------------------------------------------------
    # Statements
    # -------------------------------------------------------------------------

    def _bind_statement(self, statement: SyntaxNode, table: SymbolTable, exports: Optional[ModuleExports]) -> List[Symbol]:
        kind = statement.kind

        if kind in _DECLARATION_FLAGS:
            name = statement.field("name")
            if name is None:
                return []
            return [_declare(table, name.text, _DECLARATION_FLAGS[kind], statement)]

        if kind in ("lexical_declaration", "variable_declaration"):
            declared = []
            for declarator in statement.children:
                if declarator.kind != "variable_declarator":
                    continue
                name = declarator.field("name")
                # Destructuring patterns declare nothing a type can refer to
                if name is not None and name.kind == "identifier":
                    declared.append(_declare(table, name.text, SymbolFlags.VARIABLE, declarator))
            return declared

        if kind == "ambient_declaration":
            declared = []
            for inner in statement.children:
                if inner.kind == "statement_block":
                    # declare global { ... }
                    for nested in inner.children:
                        declared.extend(self._bind_statement(nested, table, exports))
                else:
                    declared.extend(self._bind_statement(inner, table, exports))
            return declared

        if kind == "import_statement":
            self._bind_import(statement, table)
            return []

        if kind == "export_statement":
            self._bind_export(statement, table, exports)
            return []

        return []

    def _bind_import(self, statement: SyntaxNode, table: SymbolTable) -> None:
        module = _module_specifier(statement)
        clause = statement.first("import_clause")
        if module is None or clause is None:
            return
        for part in clause.children:
            if part.kind == "identifier":
                table[part.text] = _alias(part.text, part, module, "default")
            elif part.kind == "namespace_import":
                name = part.first("identifier")
                if name is not None:
                    table[name.text] = _alias(name.text, part, module, "*")
            elif part.kind == "named_imports":
                for specifier in part.children:
                    if specifier.kind != "import_specifier":
                        continue
                    imported = _specifier_text(specifier.field("name"))
                    local = specifier.field("alias") or specifier.field("name")
                    if imported is None or local is None:
                        continue
                    table[local.text] = _alias(local.text, specifier, module, imported)

    def _bind_export(self, statement: SyntaxNode, table: SymbolTable, exports: Optional[ModuleExports]) -> None:
        declaration = statement.field("declaration")
        is_default = statement.has_token("default")

        if declaration is not None:
            symbols = self._bind_statement(declaration, table, exports)
            if exports is not None:
                for symbol in symbols:
                    exports.symbols["default" if is_default else symbol.name] = symbol
            return

        if exports is None:
            return

        module = _module_specifier(statement)
        value = statement.field("value")
        if is_default and value is not None:
            if value.kind == "identifier":
                exports.symbols["default"] = _alias("default", statement, None, value.text)
            return

        clause = statement.first("export_clause")
        if clause is not None:
            for specifier in clause.children:
                if specifier.kind != "export_specifier":
                    continue
                name = _specifier_text(specifier.field("name"))
                exported = _specifier_text(specifier.field("alias")) or name
                if name is None or exported is None:
                    continue
                exports.symbols[exported] = _alias(exported, specifier, module, name)
            return

        namespace = statement.first("namespace_export")
        if namespace is not None and module is not None:
            name = namespace.first("identifier", "string")
            if name is not None:
                exported = _specifier_text(name)
                exports.symbols[exported] = _alias(exported, namespace, module, "*")
            return

        if module is not None and statement.has_token("*"):
            exports.star_sources.append(module)
