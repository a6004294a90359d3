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
"""Serialization of resolved types into inline type literal syntax.

Object types are expanded property by property, recursively, so that a
named props type becomes a structural literal a downstream compiler can
read without type information. Shapes that have no literal form of their
own (functions, tuples, generic mapped types, index signatures) are written
in the checker's own notation.

Serialization rules, in priority order:

1. String and number literals
2. Primitive keywords
3. Unions, members joined by `` | `` in checker order, function members
   parenthesized
4. Intersections, members joined by `` & `` the same way
5. Arrays, as ``Array<T>``
6. Object types, expanded; an object already being expanded is printed
7. Everything else, printed
"""

from __future__ import annotations

from typing import List, Optional, Set

from vue_macro_types.checker.checker import TypeChecker
from vue_macro_types.checker.types import (
    IntersectionType,
    LiteralType,
    MappedType,
    ObjectType,
    Symbol,
    TupleType,
    Type,
    TypeFlags,
    TypeReference,
    UnionType,
)
from vue_macro_types.checker.utilities import format_number, is_identifier_text, quote_double

_KEYWORDS = {
    TypeFlags.STRING: "string",
    TypeFlags.NUMBER: "number",
    TypeFlags.NULL: "null",
    TypeFlags.UNDEFINED: "undefined",
    TypeFlags.VOID: "void",
    TypeFlags.ANY: "any",
    TypeFlags.UNKNOWN: "unknown",
    TypeFlags.NEVER: "never",
}


def quote_single(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _is_readonly(symbol: Symbol) -> bool:
    return any(declaration.has_token("readonly") for declaration in symbol.declarations)


def _property_key(name: str) -> str:
    return name if is_identifier_text(name) else quote_double(name)


def serialize_type(type: Type, checker: TypeChecker, seen: Optional[Set[int]] = None) -> str:
    """Serialize ``type`` as inline type literal syntax.

    Args:
        type: The type to serialize
        checker: Checker the type belongs to
        seen: Ids of object types already expanded on this call; an object
            met again is printed instead of expanded, which ends recursion
            on self-referential types

    Returns:
        Type literal source text

    Example:
        >>> serialize_type(props_type, checker)
        '{ name: string; age: number }'
    """
    if seen is None:
        seen = set()
    flags = type.flags

    if isinstance(type, LiteralType):
        if flags & TypeFlags.STRING_LITERAL:
            return quote_single(type.value)
        if flags & TypeFlags.NUMBER_LITERAL:
            return format_number(type.value)
        return checker.type_to_string(type)

    for keyword_flag, keyword in _KEYWORDS.items():
        if flags & keyword_flag:
            return keyword
    if flags & TypeFlags.BOOLEAN:
        return "boolean"

    if isinstance(type, UnionType):
        return " | ".join(_serialize_operand(t, checker, seen) for t in type.types)

    if isinstance(type, IntersectionType):
        return " & ".join(_serialize_operand(t, checker, seen) for t in type.types)

    if checker.is_array_type(type):
        arguments = checker.get_type_arguments(type)
        if len(arguments) == 1:
            return f"Array<{serialize_type(arguments[0], checker, seen)}>"

    if isinstance(type, ObjectType) and not isinstance(type, TupleType):
        return _serialize_object(type, checker, seen)

    return checker.type_to_string(type)


def _serialize_operand(type: Type, checker: TypeChecker, seen: Set[int]) -> str:
    # Function notation binds looser than `|` and `&`
    text = serialize_type(type, checker, seen)
    if type.alias_symbol is None and checker.is_function_like_type(type):
        return f"({text})"
    return text


def _serialize_object(type: ObjectType, checker: TypeChecker, seen: Set[int]) -> str:
    if type.id in seen:
        return checker.type_to_string(type)
    seen.add(type.id)

    if isinstance(type, MappedType) and checker.is_generic_mapped_type(type):
        return checker.type_to_string(type)

    properties = checker.get_properties_of_type(type)
    if not properties:
        members = checker.resolve_structured_type_members(type)
        is_generic_reference = isinstance(type, TypeReference) and bool(type.type_arguments)
        if members.is_empty and not is_generic_reference:
            return "{}"
        return checker.type_to_string(type)

    parts: List[str] = []
    for symbol in properties:
        prefix = "readonly " if _is_readonly(symbol) else ""
        optional = "?" if symbol.is_optional else ""
        value = serialize_type(checker.get_type_of_symbol(symbol), checker, seen)
        parts.append(f"{prefix}{_property_key(symbol.name)}{optional}: {value}")
    return "{ " + "; ".join(parts) + " }"
