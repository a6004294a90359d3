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
"""Expression typing.

Props types often reach into value space: ``typeof config``,
``ReturnType<typeof useUser>``, ``InferInput<typeof schema>``. This module
types the expressions those queries name. It follows the declared type
where there is an annotation and otherwise infers one from the initializer,
widening literals the way a mutable location would unless the expression
sits in a ``const`` context.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from vue_macro_types.checker.syntax import NodeKey, SyntaxNode, string_literal_value
from vue_macro_types.checker.types import (
    AnonymousType,
    ArrayMapper,
    ElementFlags,
    ObjectFlags,
    ResolvedMembers,
    Symbol,
    SymbolFlags,
    Type,
    TypeFlags,
    TypeReference,
)
from vue_macro_types.checker.utilities import parse_number

_FUNCTION_EXPRESSIONS = frozenset({"arrow_function", "function_expression", "function", "generator_function"})
_FUNCTION_DECLARATIONS = frozenset({"function_declaration", "generator_function_declaration", "function_signature"})
_CLASS_DECLARATIONS = frozenset({"class_declaration", "abstract_class_declaration"})
_NESTED_SCOPES = _FUNCTION_EXPRESSIONS | _FUNCTION_DECLARATIONS | {"class_declaration", "class", "method_definition"}

_COMPARISON_OPERATORS = frozenset({
    "==", "!=", "===", "!==", "<", "<=", ">", ">=", "in", "instanceof",
})
_ARITHMETIC_OPERATORS = frozenset({
    "-", "*", "/", "%", "**", "&", "|", "^", "<<", ">>", ">>>",
})


class ExpressionChecker:
    """Types expressions for a ``TypeChecker``."""

    def __init__(self, checker) -> None:
        self._checker = checker
        self._cache: Dict[Tuple[NodeKey, bool], Type] = {}

    # -------------------------------------------------------------------------
    # Symbols
    # -------------------------------------------------------------------------

    def get_type_of_value_symbol(self, symbol: Symbol) -> Type:
        checker = self._checker
        declaration = self._value_declaration(symbol)
        if declaration is None:
            return checker.any_type

        kind = declaration.kind
        if kind == "variable_declarator":
            annotation = declaration.field("type")
            if annotation is not None:
                return checker.get_type_from_type_node(annotation)
            value = declaration.field("value")
            if value is None:
                return checker.any_type
            type = self.check_expression(value)
            if self._is_const_declaration(declaration) or not self.is_widening_expression(value):
                return type
            return checker.get_widened_literal_type(type)
        if kind in _FUNCTION_DECLARATIONS:
            return checker.get_function_type(declaration, symbol)
        if kind == "enum_declaration":
            return checker.get_enum_object_type(symbol)
        if kind in _CLASS_DECLARATIONS:
            return checker.get_constructor_type_of_class(symbol)
        return checker.any_type

    @staticmethod
    def _value_declaration(symbol: Symbol) -> Optional[SyntaxNode]:
        for declaration in symbol.declarations:
            if declaration.kind in ("variable_declarator", "enum_declaration") or declaration.kind in _FUNCTION_DECLARATIONS | _CLASS_DECLARATIONS:
                return declaration
        return None

    @staticmethod
    def _is_const_declaration(declarator: SyntaxNode) -> bool:
        statement = declarator.parent
        if statement is None or statement.kind != "lexical_declaration":
            return False
        kind = statement.field("kind")
        return kind is not None and kind.text == "const"

    def is_widening_expression(self, node: SyntaxNode, seen: Optional[set] = None) -> bool:
        """Whether the literal type of ``node`` widens in a mutable location.

        Literals written directly widen; literals reached through a type
        assertion or an annotated declaration do not.
        """
        seen = seen if seen is not None else set()
        if node.key in seen:
            return False
        seen.add(node.key)

        kind = node.kind
        if kind in ("string", "number", "true", "false", "template_string", "unary_expression"):
            return True
        if kind == "parenthesized_expression":
            return any(self.is_widening_expression(c, seen) for c in node.children)
        if kind == "ternary_expression":
            return any(
                self.is_widening_expression(n, seen)
                for n in (node.field("consequence"), node.field("alternative"))
                if n is not None
            )
        if kind == "binary_expression":
            return any(self.is_widening_expression(n, seen) for n in (node.field("left"), node.field("right")) if n is not None)
        if kind in ("identifier", "shorthand_property_identifier"):
            symbol = self._checker.resolve_name(node.text, node, SymbolFlags.VALUE)
            if symbol is None or symbol.flags & SymbolFlags.ALIAS:
                return False
            declaration = self._value_declaration(symbol)
            if declaration is None or declaration.kind != "variable_declarator" or declaration.field("type") is not None:
                return False
            value = declaration.field("value")
            return value is not None and self.is_widening_expression(value, seen)
        return False

    # -------------------------------------------------------------------------
    # Entity names in typeof queries
    # -------------------------------------------------------------------------

    def get_type_of_entity(self, node: SyntaxNode) -> Type:
        checker = self._checker
        kind = node.kind
        if kind in ("identifier", "member_expression", "subscript_expression", "call_expression"):
            return self.check_expression(node)
        if kind == "nested_identifier":
            children = node.children
            object_type = self.get_type_of_entity(children[0])
            return self._property_access(object_type, children[-1].text, node, optional=False)
        if kind == "instantiation_expression" and node.children:
            return self.check_expression(node.children[0])
        return checker.any_type

    # -------------------------------------------------------------------------
    # Expressions
    # -------------------------------------------------------------------------

    def check_expression(self, node: SyntaxNode, const_context: bool = False) -> Type:
        key = (node.key, const_context)
        type = self._cache.get(key)
        if type is None:
            type = self._check(node, const_context)
            self._cache[key] = type
        return type

    def _check(self, node: SyntaxNode, const_context: bool) -> Type:
        checker = self._checker
        kind = node.kind

        if kind == "string":
            return checker.get_string_literal_type(string_literal_value(node))
        if kind == "template_string":
            if not any(c.kind == "template_substitution" for c in node.children):
                return checker.get_string_literal_type(string_literal_value(node))
            return checker.string_type
        if kind == "number":
            return checker.get_number_literal_type(parse_number(node.text))
        if kind == "true":
            return checker.true_type
        if kind == "false":
            return checker.false_type
        if kind == "null":
            return checker.null_type
        if kind == "undefined":
            return checker.undefined_type
        if kind == "identifier":
            return self._check_identifier(node)
        if kind == "parenthesized_expression":
            children = node.children
            return self.check_expression(children[-1], const_context) if children else checker.any_type
        if kind == "object":
            return self._check_object_literal(node, const_context)
        if kind == "array":
            return self._check_array_literal(node, const_context)
        if kind == "as_expression":
            expression = node.children[0]
            if node.has_token("const"):
                return self.check_expression(expression, const_context=True)
            return checker.get_type_from_type_node(node.children[-1])
        if kind == "type_assertion":
            return checker.get_type_from_type_node(node.children[0].children[0])
        if kind == "satisfies_expression":
            return self.check_expression(node.children[0], const_context)
        if kind == "non_null_expression":
            return checker.get_non_nullable_type(self.check_expression(node.children[0]))
        if kind == "unary_expression":
            return self._check_unary(node)
        if kind == "binary_expression":
            return self._check_binary(node)
        if kind == "ternary_expression":
            return checker.get_union_type([
                self.check_expression(node.field("consequence"), const_context),
                self.check_expression(node.field("alternative"), const_context),
            ])
        if kind in _FUNCTION_EXPRESSIONS:
            return checker.get_function_type(node)
        if kind == "call_expression":
            return self._check_call(node)
        if kind == "new_expression":
            return self._check_new(node)
        if kind == "member_expression":
            object_type = self.check_expression(node.field("object"))
            optional = node.field("optional_chain") is not None or node.has_token("?.")
            return self._property_access(object_type, node.field("property").text, node, optional)
        if kind == "subscript_expression":
            return self._check_subscript(node)
        if kind == "await_expression":
            return self.get_awaited_type(self.check_expression(node.children[0]))
        if kind == "sequence_expression":
            return self.check_expression(node.children[-1], const_context)
        if kind == "assignment_expression":
            return self.check_expression(node.field("right"), const_context)
        return checker.any_type

    def _check_identifier(self, node: SyntaxNode) -> Type:
        checker = self._checker
        if node.text == "undefined":
            return checker.undefined_type
        symbol = checker.resolve_name(node.text, node, SymbolFlags.VALUE)
        if symbol is None:
            return checker.error(f"Cannot find name '{node.text}'", node)
        return checker.get_type_of_symbol(symbol)

    def _check_object_literal(self, node: SyntaxNode, const_context: bool) -> Type:
        checker = self._checker
        properties: Dict[str, Symbol] = {}
        readonly = SymbolFlags.READONLY if const_context else SymbolFlags.NONE

        for member in node.children:
            kind = member.kind
            if kind == "pair":
                name = checker.get_property_name(member.field("key"))
                value = member.field("value")
                if name is None or value is None:
                    continue
                type = self.check_expression(value, const_context)
                if not const_context and self.is_widening_expression(value):
                    type = checker.get_widened_literal_type(type)
                properties.pop(name, None)
                properties[name] = Symbol(name, SymbolFlags.PROPERTY | readonly, [member], type=type)
            elif kind == "shorthand_property_identifier":
                type = self._check_identifier(member)
                if not const_context and self.is_widening_expression(member):
                    type = checker.get_widened_literal_type(type)
                properties.pop(member.text, None)
                properties[member.text] = Symbol(member.text, SymbolFlags.PROPERTY | readonly, [member], type=type)
            elif kind == "method_definition":
                name = checker.get_property_name(member.field("name"))
                if name is not None:
                    properties.pop(name, None)
                    properties[name] = Symbol(
                        name, SymbolFlags.PROPERTY | SymbolFlags.METHOD, [member], type=checker.get_function_type(member),
                    )
            elif kind == "spread_element":
                spread = self.check_expression(member.children[0])
                for symbol in checker.get_properties_of_type(spread):
                    properties.pop(symbol.name, None)
                    properties[symbol.name] = symbol

        literal = AnonymousType(checker.next_type_id(), None, object_flags=ObjectFlags.OBJECT_LITERAL)
        literal.resolved_members = ResolvedMembers(properties=properties)
        return literal

    def _check_array_literal(self, node: SyntaxNode, const_context: bool) -> Type:
        checker = self._checker
        element_types: List[Type] = []
        element_flags: List[ElementFlags] = []
        for element in node.children:
            if element.kind == "spread_element":
                spread = self.check_expression(element.children[0], const_context)
                if checker.is_tuple_type(spread):
                    element_types.extend(spread.element_types)
                    element_flags.extend(spread.element_flags)
                else:
                    element_types.append(checker.get_element_type_of_array_like(spread) or checker.any_type)
                    element_flags.append(ElementFlags.REST)
                continue
            type = self.check_expression(element, const_context)
            if not const_context and self.is_widening_expression(element):
                type = checker.get_widened_literal_type(type)
            element_types.append(type)
            element_flags.append(ElementFlags.REQUIRED)

        if const_context:
            return checker.create_tuple_type(element_types, element_flags, readonly=True)
        if not element_types:
            return checker.create_array_type(checker.any_type)
        return checker.create_array_type(checker.get_union_type(element_types))

    def _check_unary(self, node: SyntaxNode) -> Type:
        checker = self._checker
        operator = node.field("operator")
        operator = operator.text if operator is not None else ""
        argument = node.field("argument")
        if operator == "!" or operator == "delete":
            return checker.boolean_type
        if operator == "typeof":
            return checker.string_type
        if operator == "void":
            return checker.undefined_type
        if operator == "-" and argument is not None and argument.kind == "number":
            return checker.get_number_literal_type(-parse_number(argument.text))
        if argument is not None and self.check_expression(argument).flags & TypeFlags.BIGINT_LIKE:
            return checker.bigint_type
        return checker.number_type

    def _check_binary(self, node: SyntaxNode) -> Type:
        checker = self._checker
        operator = node.field("operator")
        operator = operator.text if operator is not None else ""
        left = self.check_expression(node.field("left"))
        right = self.check_expression(node.field("right"))

        if operator in _COMPARISON_OPERATORS:
            return checker.boolean_type
        if operator == "&&":
            return right
        if operator in ("||", "??"):
            return checker.get_union_type([checker.get_non_nullable_type(left), right])
        if operator == "+":
            if (left.flags | right.flags) & TypeFlags.STRING_LIKE:
                return checker.string_type
            if left.flags & right.flags & TypeFlags.BIGINT_LIKE:
                return checker.bigint_type
            if left.flags & TypeFlags.NUMBER_LIKE and right.flags & TypeFlags.NUMBER_LIKE:
                return checker.number_type
            return checker.get_union_type([checker.string_type, checker.number_type])
        if operator in _ARITHMETIC_OPERATORS:
            if left.flags & right.flags & TypeFlags.BIGINT_LIKE:
                return checker.bigint_type
            return checker.number_type
        return checker.any_type

    def _check_call(self, node: SyntaxNode) -> Type:
        checker = self._checker
        callee = node.field("function")
        if callee is None or callee.kind == "import":
            return checker.any_type
        signatures = checker.get_signatures_of_type(self.check_expression(callee))
        if not signatures:
            return checker.any_type
        signature = signatures[0]
        return_type = checker.get_return_type_of_signature(signature)
        if not signature.type_parameters:
            return return_type

        explicit = node.field("type_arguments")
        if explicit is not None:
            arguments = [checker.get_type_from_type_node(n) for n in explicit.children]
            mapper = ArrayMapper(signature.type_parameters, arguments)
            return checker.instantiate_type(return_type, mapper)

        argument_nodes = node.field("arguments")
        argument_types = [
            checker.get_widened_literal_type(self.check_expression(a))
            for a in (argument_nodes.children if argument_nodes is not None else [])
            if a.kind != "comment"
        ]
        parameter_types = [checker.get_type_of_symbol(p) for p in signature.parameters[:len(argument_types)]]
        count = min(len(argument_types), len(parameter_types))
        inferred = checker.infer_types(
            signature.type_parameters,
            checker.create_tuple_type(argument_types[:count]),
            checker.create_tuple_type(parameter_types[:count]),
        )
        return checker.instantiate_type(return_type, ArrayMapper(signature.type_parameters, inferred))

    def _check_new(self, node: SyntaxNode) -> Type:
        checker = self._checker
        constructor = node.field("constructor")
        if constructor is None:
            return checker.any_type
        signatures = checker.get_signatures_of_type(self.check_expression(constructor), construct=True)
        if not signatures:
            return checker.any_type
        return checker.get_return_type_of_signature(signatures[0])

    def _check_subscript(self, node: SyntaxNode) -> Type:
        checker = self._checker
        object_type = self.check_expression(node.field("object"))
        index = node.field("index")
        if index is None:
            return checker.any_type
        if index.kind in ("string", "number"):
            name = checker.get_property_name(index)
            return self._property_access(object_type, name, node, optional=False)
        index_type = self.check_expression(index)
        info = checker.get_applicable_index_info(object_type, index_type)
        if info is not None:
            return info.type
        element = checker.get_element_type_of_array_like(object_type)
        return element if element is not None else checker.any_type

    def _property_access(self, object_type: Type, name: str, node: SyntaxNode, optional: bool) -> Type:
        checker = self._checker
        if object_type.flags & TypeFlags.ANY:
            return object_type
        target = checker.get_non_nullable_type(object_type) if optional else object_type
        symbol = checker.get_property_of_type(target, name)
        if symbol is not None:
            type = checker.get_type_of_symbol(symbol)
        else:
            info = checker.get_applicable_index_info(target, checker.get_string_literal_type(name))
            if info is None:
                return checker.error(f"Property '{name}' does not exist on type '{checker.type_to_string(target)}'", node)
            type = info.type
        if optional and target is not object_type:
            return checker.add_optionality(type)
        return type

    # -------------------------------------------------------------------------
    # Functions
    # -------------------------------------------------------------------------

    def infer_return_type(self, declaration: SyntaxNode) -> Type:
        """Return type of a function without a return annotation."""
        checker = self._checker
        body = declaration.field("body")
        is_async = declaration.has_token("async")
        if body is None:
            return checker.any_type
        if declaration.kind.startswith("generator") or declaration.has_token("*"):
            return checker.any_type

        if body.kind != "statement_block":
            type = self.check_expression(body)
            if self.is_widening_expression(body):
                type = checker.get_widened_literal_type(type)
        else:
            returned = []
            for node in body.walk(stop_kinds=tuple(_NESTED_SCOPES)):
                if node.kind != "return_statement":
                    continue
                expression = node.children[0] if node.children else None
                if expression is None:
                    returned.append(checker.undefined_type)
                    continue
                type = self.check_expression(expression)
                if self.is_widening_expression(expression):
                    type = checker.get_widened_literal_type(type)
                returned.append(type)
            type = checker.get_union_type(returned) if returned else checker.void_type

        if is_async:
            return self.create_promise_type(self.get_awaited_type(type))
        return type

    def create_promise_type(self, type: Type) -> Type:
        checker = self._checker
        promise = checker.get_global_type("Promise")
        if promise is None or not promise.type_parameters:
            return checker.any_type
        return checker.create_type_reference(promise, [type])

    def get_awaited_type(self, type: Type) -> Type:
        checker = self._checker
        promise = checker.get_global_type("Promise")
        seen = set()
        while isinstance(type, TypeReference) and promise is not None and type.target is promise and type.id not in seen:
            seen.add(type.id)
            type = type.type_arguments[0]
        return type
