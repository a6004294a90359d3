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
"""Type representation for the checker.

Types are created and interned by ``TypeChecker``; every type carries a
checker-unique ``id`` that orders union members the way they were first
created. Object types resolve their members lazily on first request.
"""

from __future__ import annotations

import itertools
from enum import IntFlag
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from vue_macro_types.checker.syntax import SyntaxNode


# =============================================================================
# Flags
# =============================================================================

class TypeFlags(IntFlag):
    ANY = 1 << 0
    UNKNOWN = 1 << 1
    STRING = 1 << 2
    NUMBER = 1 << 3
    BOOLEAN = 1 << 4
    BIGINT = 1 << 5
    ES_SYMBOL = 1 << 6
    STRING_LITERAL = 1 << 7
    NUMBER_LITERAL = 1 << 8
    BOOLEAN_LITERAL = 1 << 9
    BIGINT_LITERAL = 1 << 10
    VOID = 1 << 11
    UNDEFINED = 1 << 12
    NULL = 1 << 13
    NEVER = 1 << 14
    NON_PRIMITIVE = 1 << 15
    TYPE_PARAMETER = 1 << 16
    OBJECT = 1 << 17
    UNION = 1 << 18
    INTERSECTION = 1 << 19
    INDEX = 1 << 20
    INDEXED_ACCESS = 1 << 21
    CONDITIONAL = 1 << 22
    TEMPLATE_LITERAL = 1 << 23
    STRING_MAPPING = 1 << 24

    ANY_OR_UNKNOWN = ANY | UNKNOWN
    NULLABLE = UNDEFINED | NULL
    LITERAL = STRING_LITERAL | NUMBER_LITERAL | BOOLEAN_LITERAL | BIGINT_LITERAL
    UNIT = LITERAL | UNDEFINED | NULL | VOID
    STRING_LIKE = STRING | STRING_LITERAL | TEMPLATE_LITERAL | STRING_MAPPING
    NUMBER_LIKE = NUMBER | NUMBER_LITERAL
    BIGINT_LIKE = BIGINT | BIGINT_LITERAL
    BOOLEAN_LIKE = BOOLEAN | BOOLEAN_LITERAL
    PRIMITIVE = (
        STRING | NUMBER | BIGINT | BOOLEAN | ES_SYMBOL | LITERAL
        | VOID | UNDEFINED | NULL | TEMPLATE_LITERAL | STRING_MAPPING
    )
    INTRINSIC = (
        ANY | UNKNOWN | STRING | NUMBER | BIGINT | BOOLEAN | ES_SYMBOL
        | VOID | UNDEFINED | NULL | NEVER | NON_PRIMITIVE
    )
    INSTANTIABLE = TYPE_PARAMETER | INDEX | INDEXED_ACCESS | CONDITIONAL
    UNION_OR_INTERSECTION = UNION | INTERSECTION
    STRUCTURED = OBJECT | UNION | INTERSECTION


class ObjectFlags(IntFlag):
    NONE = 0
    INTERFACE = 1 << 0
    REFERENCE = 1 << 1
    TUPLE = 1 << 2
    ANONYMOUS = 1 << 3
    MAPPED = 1 << 4
    OBJECT_LITERAL = 1 << 5
    ARRAY_LITERAL = 1 << 6


class SymbolFlags(IntFlag):
    NONE = 0
    VARIABLE = 1 << 0
    PROPERTY = 1 << 1
    FUNCTION = 1 << 2
    CLASS = 1 << 3
    INTERFACE = 1 << 4
    ENUM = 1 << 5
    TYPE_ALIAS = 1 << 6
    TYPE_PARAMETER = 1 << 7
    METHOD = 1 << 8
    PARAMETER = 1 << 9
    ALIAS = 1 << 10
    NAMESPACE = 1 << 11
    OPTIONAL = 1 << 12
    READONLY = 1 << 13

    TYPE = CLASS | INTERFACE | ENUM | TYPE_ALIAS | TYPE_PARAMETER | NAMESPACE
    VALUE = VARIABLE | PROPERTY | FUNCTION | CLASS | ENUM | METHOD | PARAMETER | NAMESPACE


class ElementFlags(IntFlag):
    REQUIRED = 1 << 0
    OPTIONAL = 1 << 1
    REST = 1 << 2


# =============================================================================
# Symbols
# =============================================================================

_symbol_ids = itertools.count(1)


class Symbol:
    """A named entity: a declaration, a property, a parameter or an import.

    ``type`` is filled in lazily through ``resolver`` the first time the
    checker asks for it.
    """

    def __init__(
        self,
        name: str,
        flags: SymbolFlags,
        declarations: Optional[List[SyntaxNode]] = None,
        type: Optional["Type"] = None,
        resolver: Optional[Callable[[], "Type"]] = None,
    ):
        self.id = next(_symbol_ids)
        self.name = name
        self.flags = flags
        self.declarations: List[SyntaxNode] = list(declarations or [])
        self.type = type
        self.resolver = resolver
        # Set on ALIAS symbols: (module specifier, imported name or "*" / "default")
        self.import_info: Optional[Tuple[str, str]] = None
        # Set on NAMESPACE symbols produced by "import * as ns"
        self.module_file: Optional[str] = None

    @property
    def is_optional(self) -> bool:
        return bool(self.flags & SymbolFlags.OPTIONAL)

    @property
    def value_declaration(self) -> Optional[SyntaxNode]:
        return self.declarations[0] if self.declarations else None

    def __repr__(self) -> str:
        return f"Symbol({self.name!r}, {self.flags!r})"


# =============================================================================
# Types
# =============================================================================

class Type:
    __slots__ = ("id", "flags", "symbol", "alias_symbol", "alias_type_arguments", "__weakref__")

    def __init__(self, type_id: int, flags: TypeFlags, symbol: Optional[Symbol] = None):
        self.id = type_id
        self.flags = flags
        self.symbol = symbol
        self.alias_symbol: Optional[Symbol] = None
        self.alias_type_arguments: Optional[Tuple["Type", ...]] = None

    def is_union(self) -> bool:
        return bool(self.flags & TypeFlags.UNION)

    def is_intersection(self) -> bool:
        return bool(self.flags & TypeFlags.INTERSECTION)

    def is_string_literal(self) -> bool:
        return bool(self.flags & TypeFlags.STRING_LITERAL)

    def is_number_literal(self) -> bool:
        return bool(self.flags & TypeFlags.NUMBER_LITERAL)

    def is_literal(self) -> bool:
        return bool(self.flags & TypeFlags.LITERAL)

    def is_type_parameter(self) -> bool:
        return bool(self.flags & TypeFlags.TYPE_PARAMETER)

    def __repr__(self) -> str:
        return f"{type(self).__name__}#{self.id}"


class IntrinsicType(Type):
    __slots__ = ("intrinsic_name",)

    def __init__(self, type_id: int, flags: TypeFlags, intrinsic_name: str):
        super().__init__(type_id, flags)
        self.intrinsic_name = intrinsic_name

    def __repr__(self) -> str:
        return f"IntrinsicType({self.intrinsic_name})"


LiteralValue = Union[str, float, bool]


class LiteralType(Type):
    __slots__ = ("value",)

    def __init__(self, type_id: int, flags: TypeFlags, value: LiteralValue):
        super().__init__(type_id, flags)
        self.value = value

    def __repr__(self) -> str:
        return f"LiteralType({self.value!r})"


class UnionOrIntersectionType(Type):
    __slots__ = ("types",)

    def __init__(self, type_id: int, flags: TypeFlags, types: Sequence[Type]):
        super().__init__(type_id, flags)
        self.types: Tuple[Type, ...] = tuple(types)


class UnionType(UnionOrIntersectionType):
    __slots__ = ()


class IntersectionType(UnionOrIntersectionType):
    __slots__ = ("resolved_members",)

    def __init__(self, type_id: int, flags: TypeFlags, types: Sequence[Type]):
        super().__init__(type_id, flags, types)
        self.resolved_members: Optional["ResolvedMembers"] = None


class TypeParameter(Type):
    __slots__ = ("name", "declaration", "is_infer", "constraint", "default")

    def __init__(self, type_id: int, name: str, declaration: Optional[SyntaxNode] = None, is_infer: bool = False):
        super().__init__(type_id, TypeFlags.TYPE_PARAMETER)
        self.name = name
        self.declaration = declaration
        self.is_infer = is_infer
        # Resolved lazily by the checker; None until requested
        self.constraint: Optional[Type] = None
        self.default: Optional[Type] = None

    def __repr__(self) -> str:
        return f"TypeParameter({self.name})"


class IndexType(Type):
    """``keyof T`` for a generic ``T``."""

    __slots__ = ("target",)

    def __init__(self, type_id: int, target: Type):
        super().__init__(type_id, TypeFlags.INDEX)
        self.target = target


class IndexedAccessType(Type):
    """``T[K]`` where either side is generic."""

    __slots__ = ("object_type", "index_type")

    def __init__(self, type_id: int, object_type: Type, index_type: Type):
        super().__init__(type_id, TypeFlags.INDEXED_ACCESS)
        self.object_type = object_type
        self.index_type = index_type


class ConditionalRoot:
    """Per-declaration data shared by all instantiations of a conditional type."""

    def __init__(
        self,
        node: SyntaxNode,
        check_type: Type,
        extends_type: Type,
        is_distributive: bool,
        infer_type_parameters: List[TypeParameter],
        outer_type_parameters: List[TypeParameter],
    ):
        self.node = node
        self.check_type = check_type
        self.extends_type = extends_type
        self.is_distributive = is_distributive
        self.infer_type_parameters = infer_type_parameters
        self.outer_type_parameters = outer_type_parameters
        self.alias_symbol: Optional[Symbol] = None
        self.alias_type_arguments: Optional[Tuple[Type, ...]] = None

    @property
    def true_node(self) -> SyntaxNode:
        return self.node.field("consequence")

    @property
    def false_node(self) -> SyntaxNode:
        return self.node.field("alternative")


class ConditionalType(Type):
    """A conditional type whose check or extends type is still generic."""

    __slots__ = ("root", "mapper", "check_type", "extends_type")

    def __init__(self, type_id: int, root: ConditionalRoot, mapper: Optional["TypeMapper"], check_type: Type, extends_type: Type):
        super().__init__(type_id, TypeFlags.CONDITIONAL)
        self.root = root
        self.mapper = mapper
        self.check_type = check_type
        self.extends_type = extends_type


class TemplateLiteralType(Type):
    """A template literal type with at least one non-literal placeholder."""

    __slots__ = ("texts", "types")

    def __init__(self, type_id: int, texts: Sequence[str], types: Sequence[Type]):
        super().__init__(type_id, TypeFlags.TEMPLATE_LITERAL)
        self.texts: Tuple[str, ...] = tuple(texts)
        self.types: Tuple[Type, ...] = tuple(types)


class StringMappingType(Type):
    """``Uppercase<T>`` and its siblings over a type that is not yet a string literal.

    ``symbol`` is the intrinsic alias being applied.
    """

    __slots__ = ("type",)

    def __init__(self, type_id: int, symbol: Symbol, type: Type):
        super().__init__(type_id, TypeFlags.STRING_MAPPING, symbol)
        self.type = type


# -----------------------------------------------------------------------------
# Object types
# -----------------------------------------------------------------------------

class ObjectType(Type):
    __slots__ = ("object_flags", "resolved_members")

    def __init__(self, type_id: int, object_flags: ObjectFlags, symbol: Optional[Symbol] = None):
        super().__init__(type_id, TypeFlags.OBJECT, symbol)
        self.object_flags = object_flags
        self.resolved_members: Optional["ResolvedMembers"] = None


class TypeReference(ObjectType):
    """An instantiation of a generic interface, e.g. ``Array<string>``."""

    __slots__ = ("target", "type_arguments")

    def __init__(self, type_id: int, target: "InterfaceType", type_arguments: Sequence[Type]):
        super().__init__(type_id, ObjectFlags.REFERENCE, target.symbol)
        self.target = target
        self.type_arguments: Tuple[Type, ...] = tuple(type_arguments)


class InterfaceType(TypeReference):
    """The declared type of an interface; its own reference target."""

    __slots__ = ("type_parameters",)

    def __init__(self, type_id: int, symbol: Symbol, type_parameters: Sequence[TypeParameter]):
        ObjectType.__init__(self, type_id, ObjectFlags.INTERFACE | ObjectFlags.REFERENCE, symbol)
        self.target = self
        self.type_parameters: Tuple[TypeParameter, ...] = tuple(type_parameters)
        self.type_arguments = self.type_parameters


class TupleType(ObjectType):
    __slots__ = ("element_types", "element_flags", "labels", "readonly")

    def __init__(
        self,
        type_id: int,
        element_types: Sequence[Type],
        element_flags: Sequence[ElementFlags],
        labels: Sequence[Optional[str]],
        readonly: bool,
    ):
        super().__init__(type_id, ObjectFlags.TUPLE)
        self.element_types: Tuple[Type, ...] = tuple(element_types)
        self.element_flags: Tuple[ElementFlags, ...] = tuple(element_flags)
        self.labels: Tuple[Optional[str], ...] = tuple(labels)
        self.readonly = readonly

    @property
    def fixed_length(self) -> int:
        return sum(1 for flag in self.element_flags if not flag & ElementFlags.REST)

    @property
    def min_length(self) -> int:
        return sum(1 for flag in self.element_flags if flag & ElementFlags.REQUIRED)

    @property
    def has_rest(self) -> bool:
        return any(flag & ElementFlags.REST for flag in self.element_flags)


class AnonymousType(ObjectType):
    """An object type literal, function type or object literal expression.

    ``declaration`` is None for synthesized types whose members are supplied
    up front (object literals, spreads).
    """

    __slots__ = ("declaration", "mapper")

    def __init__(
        self,
        type_id: int,
        declaration: Optional[SyntaxNode],
        mapper: Optional["TypeMapper"] = None,
        object_flags: ObjectFlags = ObjectFlags.ANONYMOUS,
        symbol: Optional[Symbol] = None,
    ):
        super().__init__(type_id, object_flags, symbol)
        self.declaration = declaration
        self.mapper = mapper


class MappedType(ObjectType):
    """``{ [K in C as N]: T }`` with its modifiers."""

    __slots__ = ("declaration", "mapper", "type_parameter", "constraint_type", "name_type", "template_type")

    def __init__(self, type_id: int, declaration: SyntaxNode, mapper: Optional["TypeMapper"], type_parameter: TypeParameter):
        super().__init__(type_id, ObjectFlags.MAPPED)
        self.declaration = declaration
        self.mapper = mapper
        self.type_parameter = type_parameter
        # Instantiated lazily by the checker
        self.constraint_type: Optional[Type] = None
        self.name_type: Optional[Type] = None
        self.template_type: Optional[Type] = None

    @property
    def signature(self) -> SyntaxNode:
        return self.declaration.first("index_signature")

    @property
    def clause(self) -> SyntaxNode:
        return self.signature.first("mapped_type_clause")

    def modifiers(self) -> Tuple[str, str]:
        """``(readonly, optional)`` modifiers, each one of "", "+" or "-"."""
        signature = self.signature
        readonly = ""
        if signature.has_token("readonly"):
            sign = signature.field("sign")
            readonly = sign.text if sign is not None and sign.text in "+-" else "+"
        annotation = signature.field("type")
        optional = ""
        if annotation is not None:
            if annotation.kind in ("opting_type_annotation", "adding_type_annotation"):
                optional = "+"
            elif annotation.kind == "omitting_type_annotation":
                optional = "-"
        return readonly, optional


# =============================================================================
# Members
# =============================================================================

class IndexInfo:
    __slots__ = ("key_type", "type", "is_readonly", "declaration")

    def __init__(self, key_type: Type, type: Type, is_readonly: bool = False, declaration: Optional[SyntaxNode] = None):
        self.key_type = key_type
        self.type = type
        self.is_readonly = is_readonly
        self.declaration = declaration


class Signature:
    """A call or construct signature.

    Parameter and return types resolve lazily through the owning checker.
    """

    def __init__(
        self,
        declaration: Optional[SyntaxNode],
        type_parameters: Sequence[TypeParameter],
        parameters: Sequence[Symbol],
        min_argument_count: int,
        has_rest_parameter: bool,
        mapper: Optional["TypeMapper"] = None,
    ):
        self.declaration = declaration
        self.type_parameters: Tuple[TypeParameter, ...] = tuple(type_parameters)
        self.parameters: List[Symbol] = list(parameters)
        self.min_argument_count = min_argument_count
        self.has_rest_parameter = has_rest_parameter
        self.mapper = mapper
        self.resolved_return_type: Optional[Type] = None
        self.return_resolver: Optional[Callable[[], Type]] = None


class ResolvedMembers:
    __slots__ = ("properties", "call_signatures", "construct_signatures", "index_infos")

    def __init__(
        self,
        properties: Optional[Dict[str, Symbol]] = None,
        call_signatures: Optional[List[Signature]] = None,
        construct_signatures: Optional[List[Signature]] = None,
        index_infos: Optional[List[IndexInfo]] = None,
    ):
        self.properties: Dict[str, Symbol] = properties if properties is not None else {}
        self.call_signatures: List[Signature] = call_signatures or []
        self.construct_signatures: List[Signature] = construct_signatures or []
        self.index_infos: List[IndexInfo] = index_infos or []

    @property
    def is_empty(self) -> bool:
        return not (self.properties or self.call_signatures or self.construct_signatures or self.index_infos)


# =============================================================================
# Mappers
# =============================================================================

class TypeMapper:
    def map(self, type_parameter: Type) -> Type:
        raise NotImplementedError


class ArrayMapper(TypeMapper):
    """Maps each source type parameter to the target at the same position."""

    def __init__(self, sources: Sequence[Type], targets: Sequence[Type]):
        self._targets: Dict[int, Type] = {
            source.id: target for source, target in zip(sources, targets)
        }

    def map(self, type_parameter: Type) -> Type:
        return self._targets.get(type_parameter.id, type_parameter)


class MergedMapper(TypeMapper):
    """Tries ``primary`` first, then ``fallback`` for unmapped parameters."""

    def __init__(self, primary: ArrayMapper, fallback: Optional[TypeMapper]):
        self._primary = primary
        self._fallback = fallback

    def map(self, type_parameter: Type) -> Type:
        mapped = self._primary.map(type_parameter)
        if mapped is not type_parameter or self._fallback is None:
            return mapped
        return self._fallback.map(type_parameter)


class CompositeMapper(TypeMapper):
    """Applies ``first`` and instantiates the result with ``second``."""

    def __init__(self, first: TypeMapper, second: TypeMapper, instantiate: Callable[[Type, TypeMapper], Type]):
        self._first = first
        self._second = second
        self._instantiate = instantiate

    def map(self, type_parameter: Type) -> Type:
        return self._instantiate(self._first.map(type_parameter), self._second)
