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
"""Type printing in TypeScript's own notation.

Output follows the compiler's ``typeToString``: aliases print by name,
string literals use double quotes, ``false | true`` prints as ``boolean``,
arrays print as ``T[]`` and object members end with ``;``.
"""

from __future__ import annotations

from typing import List, Set

from vue_macro_types.checker.types import (
    ConditionalType,
    ElementFlags,
    IndexedAccessType,
    IndexType,
    IntersectionType,
    IntrinsicType,
    LiteralType,
    MappedType,
    ObjectType,
    Signature,
    StringMappingType,
    SymbolFlags,
    TemplateLiteralType,
    TupleType,
    Type,
    TypeFlags,
    TypeParameter,
    TypeReference,
    UnionType,
)
from vue_macro_types.checker.utilities import format_number, is_identifier_text, quote_double

MAX_PRINT_DEPTH = 8


class TypePrinter:
    def __init__(self, checker) -> None:
        self._checker = checker

    def type_to_string(self, type: Type) -> str:
        return self._print(type, set(), 0)

    def signature_to_string(self, signature: Signature) -> str:
        return self._signature(signature, set(), 0, arrow=True)

    # -------------------------------------------------------------------------

    def _print(self, type: Type, visiting: Set[int], depth: int) -> str:
        if type.alias_symbol is not None:
            return self._alias(type, visiting, depth)
        if isinstance(type, IntrinsicType):
            return type.intrinsic_name
        if isinstance(type, LiteralType):
            return self._literal(type)
        if isinstance(type, TypeParameter):
            return type.name
        if type.id in visiting or depth > MAX_PRINT_DEPTH:
            return "any"

        visiting.add(type.id)
        try:
            return self._print_structured(type, visiting, depth)
        finally:
            visiting.discard(type.id)

    def _print_structured(self, type: Type, visiting: Set[int], depth: int) -> str:
        checker = self._checker
        if isinstance(type, UnionType):
            return self._union(type, visiting, depth)
        if isinstance(type, IntersectionType):
            return " & ".join(self._operand(t, visiting, depth, TypeFlags.UNION) for t in type.types)
        if isinstance(type, IndexType):
            return "keyof " + self._operand(type.target, visiting, depth, TypeFlags.UNION | TypeFlags.INTERSECTION)
        if isinstance(type, IndexedAccessType):
            object_text = self._operand(type.object_type, visiting, depth, TypeFlags.UNION | TypeFlags.INTERSECTION)
            return f"{object_text}[{self._print(type.index_type, visiting, depth + 1)}]"
        if isinstance(type, ConditionalType):
            true_type, false_type = checker.get_conditional_branch_types(type)
            return (
                f"{self._print(type.check_type, visiting, depth + 1)} extends {self._print(type.extends_type, visiting, depth + 1)}"
                f" ? {self._print(true_type, visiting, depth + 1)} : {self._print(false_type, visiting, depth + 1)}"
            )
        if isinstance(type, TemplateLiteralType):
            parts = [type.texts[0]]
            for placeholder, text in zip(type.types, type.texts[1:]):
                parts.append("${" + self._print(placeholder, visiting, depth + 1) + "}")
                parts.append(text)
            return "`" + "".join(parts) + "`"
        if isinstance(type, StringMappingType):
            return f"{type.symbol.name}<{self._print(type.type, visiting, depth + 1)}>"
        if isinstance(type, TupleType):
            return self._tuple(type, visiting, depth)
        if isinstance(type, TypeReference):
            return self._reference(type, visiting, depth)
        if isinstance(type, MappedType) and checker.is_generic_mapped_type(type):
            return self._generic_mapped(type, visiting, depth)
        if isinstance(type, ObjectType):
            return self._object(type, visiting, depth)
        return "any"

    def _alias(self, type: Type, visiting: Set[int], depth: int) -> str:
        name = type.alias_symbol.name
        arguments = type.alias_type_arguments
        if not arguments:
            return name
        return f"{name}<{', '.join(self._print(t, visiting, depth + 1) for t in arguments)}>"

    @staticmethod
    def _literal(type: LiteralType) -> str:
        if type.flags & TypeFlags.STRING_LITERAL:
            return quote_double(type.value)
        if type.flags & TypeFlags.NUMBER_LITERAL:
            return format_number(type.value)
        return "true" if type.value else "false"

    def _operand(self, type: Type, visiting: Set[int], depth: int, parenthesize: TypeFlags) -> str:
        text = self._print(type, visiting, depth + 1)
        needs_parens = (
            (type.alias_symbol is None and type.flags & parenthesize and not type.flags & TypeFlags.BOOLEAN)
            or (type.alias_symbol is None and self._is_function_like(type))
            or isinstance(type, ConditionalType)
        )
        return f"({text})" if needs_parens else text

    def _union(self, type: UnionType, visiting: Set[int], depth: int) -> str:
        if type.flags & TypeFlags.BOOLEAN:
            return "boolean"
        checker = self._checker
        has_boolean = checker.false_type in type.types and checker.true_type in type.types
        parts: List[str] = []
        for member in type.types:
            if has_boolean and member.flags & TypeFlags.BOOLEAN_LITERAL:
                if "boolean" not in parts:
                    parts.append("boolean")
                continue
            parts.append(self._operand(member, visiting, depth, TypeFlags(0)))
        return " | ".join(parts)

    def _reference(self, type: TypeReference, visiting: Set[int], depth: int) -> str:
        checker = self._checker
        if checker.is_array_type(type):
            element = self._operand(type.type_arguments[0], visiting, depth, TypeFlags.UNION | TypeFlags.INTERSECTION)
            return ("readonly " if checker.is_readonly_array_type(type) else "") + element + "[]"
        name = type.symbol.name if type.symbol is not None else "any"
        arguments = type.type_arguments
        if not arguments:
            return name
        return f"{name}<{', '.join(self._print(t, visiting, depth + 1) for t in arguments)}>"

    def _tuple(self, type: TupleType, visiting: Set[int], depth: int) -> str:
        elements = []
        for element, flags, label in zip(type.element_types, type.element_flags, type.labels):
            text = self._print(element, visiting, depth + 1)
            if flags & ElementFlags.REST:
                text = "..." + (f"{label}: " if label else "") + self._operand(element, visiting, depth, TypeFlags.UNION) + "[]"
            elif label:
                text = f"{label}{'?' if flags & ElementFlags.OPTIONAL else ''}: {text}"
            elif flags & ElementFlags.OPTIONAL:
                text = self._operand(element, visiting, depth, TypeFlags.UNION) + "?"
            elements.append(text)
        return ("readonly " if type.readonly else "") + "[" + ", ".join(elements) + "]"

    def _generic_mapped(self, type: MappedType, visiting: Set[int], depth: int) -> str:
        checker = self._checker
        readonly, optional = type.modifiers()
        constraint = self._print(checker.get_constraint_type_of_mapped_type(type), visiting, depth + 1)
        template = self._print(checker.get_template_type_of_mapped_type(type), visiting, depth + 1)
        prefix = {"+": "readonly ", "-": "-readonly "}.get(readonly, "")
        suffix = {"+": "?", "-": "-?"}.get(optional, "")
        return f"{{ {prefix}[{type.type_parameter.name} in {constraint}]{suffix}: {template}; }}"

    def _is_function_like(self, type: Type) -> bool:
        return self._checker.is_function_like_type(type)

    def _object(self, type: ObjectType, visiting: Set[int], depth: int) -> str:
        checker = self._checker
        members = checker.resolve_structured_type_members(type)
        if self._is_function_like(type):
            if members.call_signatures:
                return self._signature(members.call_signatures[0], visiting, depth, arrow=True)
            return "new " + self._signature(members.construct_signatures[0], visiting, depth, arrow=True)

        parts: List[str] = []
        for info in members.index_infos:
            prefix = "readonly " if info.is_readonly else ""
            parts.append(f"{prefix}[x: {self._print(info.key_type, visiting, depth + 1)}]: {self._print(info.type, visiting, depth + 1)};")
        for signature in members.call_signatures:
            parts.append(self._signature(signature, visiting, depth, arrow=False) + ";")
        for signature in members.construct_signatures:
            parts.append("new " + self._signature(signature, visiting, depth, arrow=False) + ";")
        for symbol in members.properties.values():
            name = symbol.name if is_identifier_text(symbol.name) else quote_double(symbol.name)
            prefix = "readonly " if symbol.flags & SymbolFlags.READONLY else ""
            optional = "?" if symbol.is_optional else ""
            value = self._print(checker.get_type_of_symbol(symbol), visiting, depth + 1)
            parts.append(f"{prefix}{name}{optional}: {value};")
        if not parts:
            return "{}"
        return "{ " + " ".join(parts) + " }"

    def _signature(self, signature: Signature, visiting: Set[int], depth: int, arrow: bool) -> str:
        checker = self._checker
        type_parameters = ""
        if signature.type_parameters:
            type_parameters = "<" + ", ".join(p.name for p in signature.type_parameters) + ">"
        parameters = []
        for index, parameter in enumerate(signature.parameters):
            text = self._print(checker.get_type_of_symbol(parameter), visiting, depth + 1)
            is_rest = signature.has_rest_parameter and index == len(signature.parameters) - 1
            name = ("..." if is_rest else "") + parameter.name + ("?" if parameter.is_optional and not is_rest else "")
            parameters.append(f"{name}: {text}")
        returns = self._print(checker.get_return_type_of_signature(signature), visiting, depth + 1)
        separator = " => " if arrow else ": "
        return f"{type_parameters}({', '.join(parameters)}){separator}{returns}"
