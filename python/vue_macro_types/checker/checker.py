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
"""Type checker for TypeScript type declarations.

The checker turns type syntax into ``Type`` objects and answers structural
questions about them: properties, signatures, index signatures, keyof,
indexed access, assignability. It covers the part of the TypeScript type
system that component props are written in:

- primitives, literals, unions, intersections, arrays and tuples
- type aliases and interfaces, generic ones included
- object type literals, function types, index signatures
- mapped types with modifiers, ``as`` clauses and homomorphic behaviour
- conditional types with distribution and ``infer``
- template literal types
- ``typeof`` queries, ``keyof`` and indexed access

Identity matters: literal, union, intersection and reference types are
interned, and generic instantiations are cached by their type arguments,
so that recursive types instantiate to the same object on every visit.

Names that cannot be resolved produce the error type (printed ``any``) and
a diagnostic; the checker never raises on bad input.
"""

from __future__ import annotations

import functools
import itertools
import logging
import math
import re
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from vue_macro_types.checker.binder import SCOPE_CONTAINERS, Binder
from vue_macro_types.checker.syntax import NodeKey, SourceFile, SyntaxNode, string_literal_value, unescape_js
from vue_macro_types.checker.types import (
    AnonymousType,
    ArrayMapper,
    CompositeMapper,
    ConditionalRoot,
    ConditionalType,
    ElementFlags,
    IndexInfo,
    IndexType,
    IndexedAccessType,
    InterfaceType,
    IntersectionType,
    IntrinsicType,
    LiteralType,
    LiteralValue,
    MappedType,
    MergedMapper,
    ObjectType,
    ResolvedMembers,
    Signature,
    StringMappingType,
    Symbol,
    SymbolFlags,
    TemplateLiteralType,
    TupleType,
    Type,
    TypeFlags,
    TypeMapper,
    TypeParameter,
    TypeReference,
    UnionOrIntersectionType,
    UnionType,
)
from vue_macro_types.checker.utilities import format_number, parse_number

logger = logging.getLogger(__name__)

# Declarations that can introduce type parameters through a type_parameters field.
TYPE_PARAMETER_OWNERS = frozenset({
    "type_alias_declaration",
    "interface_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "function_declaration",
    "generator_function_declaration",
    "function_signature",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
    "method_signature",
    "abstract_method_signature",
    "call_signature",
    "construct_signature",
    "function_type",
    "constructor_type",
})

FUNCTION_LIKE = TYPE_PARAMETER_OWNERS - {
    "type_alias_declaration",
    "interface_declaration",
    "class_declaration",
    "abstract_class_declaration",
}

CLASS_LIKE = frozenset({"class_declaration", "abstract_class_declaration"})
INTERFACE_LIKE = CLASS_LIKE | {"interface_declaration"}
METHOD_KINDS = ("method_signature", "method_definition", "abstract_method_signature")

# Intrinsic string aliases of the default library
STRING_MAPPINGS: Dict[str, Callable[[str], str]] = {
    "Uppercase": str.upper,
    "Lowercase": str.lower,
    "Capitalize": lambda s: s[:1].upper() + s[1:],
    "Uncapitalize": lambda s: s[:1].lower() + s[1:],
}

MAX_INSTANTIATION_DEPTH = 100
MAX_CROSS_PRODUCT = 100_000


class TypeChecker:
    """Type checker bound to one ``Program``.

    Example:
        >>> checker = program.get_type_checker()
        >>> props = checker.get_type_from_type_node(node)
        >>> [p.name for p in checker.get_properties_of_type(props)]
        ['name', 'age']
    """

    def __init__(self, program) -> None:
        from vue_macro_types.checker.expressions import ExpressionChecker
        from vue_macro_types.checker.printer import TypePrinter

        self._program = program
        self._binder: Binder = program.binder
        self.strict_null_checks = program.compiler_options.null_checks_enabled
        self.diagnostics: List[str] = []
        self._ids = itertools.count(1)

        # Creation order fixes the relative order of intrinsics inside unions.
        self.any_type = self._intrinsic(TypeFlags.ANY, "any")
        self.error_type = self._intrinsic(TypeFlags.ANY, "any")
        self.unknown_type = self._intrinsic(TypeFlags.UNKNOWN, "unknown")
        self.undefined_type = self._intrinsic(TypeFlags.UNDEFINED, "undefined")
        self.null_type = self._intrinsic(TypeFlags.NULL, "null")
        self.string_type = self._intrinsic(TypeFlags.STRING, "string")
        self.number_type = self._intrinsic(TypeFlags.NUMBER, "number")
        self.bigint_type = self._intrinsic(TypeFlags.BIGINT, "bigint")
        self.false_type = LiteralType(self.next_type_id(), TypeFlags.BOOLEAN_LITERAL, False)
        self.true_type = LiteralType(self.next_type_id(), TypeFlags.BOOLEAN_LITERAL, True)
        self.boolean_type = UnionType(self.next_type_id(), TypeFlags.UNION | TypeFlags.BOOLEAN, (self.false_type, self.true_type))
        self.es_symbol_type = self._intrinsic(TypeFlags.ES_SYMBOL, "symbol")
        self.void_type = self._intrinsic(TypeFlags.VOID, "void")
        self.never_type = self._intrinsic(TypeFlags.NEVER, "never")
        self.non_primitive_type = self._intrinsic(TypeFlags.NON_PRIMITIVE, "object")
        self.empty_object_type = AnonymousType(self.next_type_id(), None)
        self.empty_object_type.resolved_members = ResolvedMembers()

        self._literal_types: Dict[Tuple[TypeFlags, LiteralValue], LiteralType] = {}
        self._union_types: Dict[tuple, Type] = {
            ((self.false_type.id, self.true_type.id), None): self.boolean_type,
        }
        self._intersection_types: Dict[tuple, Type] = {}
        self._type_references: Dict[tuple, TypeReference] = {}
        self._tuple_types: Dict[tuple, TupleType] = {}
        self._index_types: Dict[int, IndexType] = {}
        self._indexed_access_types: Dict[Tuple[int, int], IndexedAccessType] = {}
        self._template_types: Dict[tuple, TemplateLiteralType] = {}
        self._string_mapping_types: Dict[Tuple[int, int], StringMappingType] = {}
        self._node_types: Dict[NodeKey, Type] = {}
        self._declared_types: Dict[int, Type] = {}
        self._type_parameters: Dict[NodeKey, TypeParameter] = {}
        self._declared_type_parameters: Dict[NodeKey, List[TypeParameter]] = {}
        self._outer_type_parameters: Dict[NodeKey, List[TypeParameter]] = {}
        self._alias_instantiations: Dict[tuple, Type] = {}
        self._instantiations: Dict[tuple, Type] = {}
        self._conditional_roots: Dict[NodeKey, ConditionalRoot] = {}
        self._signatures: Dict[NodeKey, Signature] = {}
        self._function_types: Dict[NodeKey, AnonymousType] = {}
        self._synthetic_properties: Dict[Tuple[int, str], Optional[Symbol]] = {}
        self._enum_members: Dict[int, Dict[str, Type]] = {}
        self._resolved_aliases: Dict[int, Optional[Symbol]] = {}
        self._assignable_cache: Dict[Tuple[int, int], bool] = {}
        self._contains_type_variables: Dict[int, bool] = {}
        self._resolution_stack: List[tuple] = []
        self._relation_stack: Set[Tuple[int, int]] = set()
        self._instantiation_depth = 0

        self._keyof_any: Optional[Type] = None
        self._global_array: Optional[InterfaceType] = None
        self._global_readonly_array: Optional[InterfaceType] = None

        self.expressions = ExpressionChecker(self)
        self._printer = TypePrinter(self)

    # =========================================================================
    # Bookkeeping
    # =========================================================================

    def next_type_id(self) -> int:
        return next(self._ids)

    def _intrinsic(self, flags: TypeFlags, name: str) -> IntrinsicType:
        return IntrinsicType(self.next_type_id(), flags, name)

    def error(self, message: str, node: Optional[SyntaxNode] = None) -> Type:
        """Record a diagnostic and return the error type."""
        if node is not None:
            message = f"{node.file.file_name}:{node.pos}: {message}"
        self.diagnostics.append(message)
        logger.debug(message)
        return self.error_type

    def _push_resolution(self, key: tuple) -> bool:
        if key in self._resolution_stack:
            return False
        self._resolution_stack.append(key)
        return True

    def _pop_resolution(self) -> None:
        self._resolution_stack.pop()

    def type_to_string(self, type: Type) -> str:
        return self._printer.type_to_string(type)

    def signature_to_string(self, signature: Signature) -> str:
        return self._printer.signature_to_string(signature)

    # =========================================================================
    # Primitive Constructors
    # =========================================================================

    def get_string_literal_type(self, value: str) -> LiteralType:
        return self._literal(TypeFlags.STRING_LITERAL, value)

    def get_number_literal_type(self, value: float) -> LiteralType:
        return self._literal(TypeFlags.NUMBER_LITERAL, float(value))

    def get_boolean_literal_type(self, value: bool) -> LiteralType:
        return self.true_type if value else self.false_type

    def _literal(self, flags: TypeFlags, value: LiteralValue) -> LiteralType:
        key = (flags, value)
        literal = self._literal_types.get(key)
        if literal is None:
            literal = LiteralType(self.next_type_id(), flags, value)
            self._literal_types[key] = literal
        return literal

    def get_keyof_any(self) -> Type:
        if self._keyof_any is None:
            self._keyof_any = self.get_union_type([self.string_type, self.number_type, self.es_symbol_type])
        return self._keyof_any

    # =========================================================================
    # Unions and Intersections
    # =========================================================================

    def get_union_type(
        self,
        types: Iterable[Type],
        alias_symbol: Optional[Symbol] = None,
        alias_type_arguments: Optional[Sequence[Type]] = None,
    ) -> Type:
        members: Dict[int, Type] = {}
        includes = TypeFlags(0)
        for t in types:
            for member in (t.types if isinstance(t, UnionType) else (t,)):
                includes |= member.flags
                members[member.id] = member

        if includes & TypeFlags.ANY:
            return self.error_type if self.error_type.id in members else self.any_type
        if includes & TypeFlags.UNKNOWN:
            return self.unknown_type

        reduced = []
        for member in members.values():
            flags = member.flags
            if flags & TypeFlags.NEVER:
                continue
            if not self.strict_null_checks and flags & TypeFlags.NULLABLE and len(members) > 1:
                continue
            if flags & (TypeFlags.STRING_LITERAL | TypeFlags.TEMPLATE_LITERAL | TypeFlags.STRING_MAPPING) and includes & TypeFlags.STRING:
                continue
            if flags & TypeFlags.NUMBER_LITERAL and includes & TypeFlags.NUMBER:
                continue
            if flags & TypeFlags.BIGINT_LITERAL and includes & TypeFlags.BIGINT:
                continue
            if flags & TypeFlags.UNDEFINED and includes & TypeFlags.VOID:
                continue
            reduced.append(member)

        if not reduced:
            return self.never_type
        if len(reduced) == 1:
            return reduced[0]

        reduced.sort(key=lambda t: t.id)
        alias_key = self._alias_key(alias_symbol, alias_type_arguments)
        key = (tuple(t.id for t in reduced), alias_key)
        union = self._union_types.get(key)
        if union is None:
            flags = TypeFlags.UNION
            if len(reduced) == 2 and all(t.flags & TypeFlags.BOOLEAN_LITERAL for t in reduced):
                flags |= TypeFlags.BOOLEAN
            union = UnionType(self.next_type_id(), flags, reduced)
            self._set_alias(union, alias_symbol, alias_type_arguments)
            self._union_types[key] = union
        return union

    def get_intersection_type(
        self,
        types: Iterable[Type],
        alias_symbol: Optional[Symbol] = None,
        alias_type_arguments: Optional[Sequence[Type]] = None,
    ) -> Type:
        members: Dict[int, Type] = {}
        includes = TypeFlags(0)
        for t in types:
            for member in (t.types if isinstance(t, IntersectionType) else (t,)):
                if member.flags & TypeFlags.UNKNOWN:
                    continue
                includes |= member.flags
                members[member.id] = member

        if includes & TypeFlags.NEVER:
            return self.never_type
        if includes & TypeFlags.ANY:
            return self.error_type if self.error_type.id in members else self.any_type

        reduced = list(members.values())
        if self._has_primitive_conflict(reduced, includes):
            return self.never_type
        # A literal absorbs its own primitive: 'a' & string is 'a'
        reduced = [
            t for t in reduced
            if not (t.flags & TypeFlags.STRING and includes & TypeFlags.STRING_LITERAL)
            and not (t.flags & TypeFlags.NUMBER and includes & TypeFlags.NUMBER_LITERAL)
            and not (t.flags & TypeFlags.BIGINT and includes & TypeFlags.BIGINT_LITERAL)
        ]

        if not reduced:
            return self.unknown_type
        if len(reduced) == 1:
            return reduced[0]

        if includes & TypeFlags.UNION:
            return self._distribute_intersection(reduced, alias_symbol, alias_type_arguments)

        alias_key = self._alias_key(alias_symbol, alias_type_arguments)
        key = (tuple(t.id for t in reduced), alias_key)
        intersection = self._intersection_types.get(key)
        if intersection is None:
            intersection = IntersectionType(self.next_type_id(), TypeFlags.INTERSECTION, reduced)
            self._set_alias(intersection, alias_symbol, alias_type_arguments)
            self._intersection_types[key] = intersection
        return intersection

    def _has_primitive_conflict(self, types: List[Type], includes: TypeFlags) -> bool:
        kinds = 0
        for group in (
            TypeFlags.STRING_LIKE,
            TypeFlags.NUMBER_LIKE,
            TypeFlags.BIGINT_LIKE,
            TypeFlags.BOOLEAN_LIKE,
            TypeFlags.ES_SYMBOL,
            TypeFlags.VOID | TypeFlags.UNDEFINED,
            TypeFlags.NULL,
        ):
            if includes & group:
                kinds += 1
        if kinds > 1:
            return True
        if kinds == 1 and self.strict_null_checks and includes & TypeFlags.NULLABLE and includes & (TypeFlags.OBJECT | TypeFlags.NON_PRIMITIVE):
            return True
        literals = [t for t in types if t.flags & TypeFlags.LITERAL]
        return len({(t.flags, t.value) for t in literals}) > 1

    def _distribute_intersection(self, types: List[Type], alias_symbol, alias_type_arguments) -> Type:
        groups = [t.types if isinstance(t, UnionType) else (t,) for t in types]
        size = math.prod(len(group) for group in groups)
        if size > MAX_CROSS_PRODUCT:
            return self.error("Expression produces a union type that is too complex to represent")
        return self.get_union_type(
            (self.get_intersection_type(combination) for combination in itertools.product(*groups)),
            alias_symbol,
            alias_type_arguments,
        )

    @staticmethod
    def _alias_key(alias_symbol: Optional[Symbol], alias_type_arguments: Optional[Sequence[Type]]) -> Optional[tuple]:
        if alias_symbol is None:
            return None
        return (alias_symbol.id, tuple(t.id for t in alias_type_arguments or ()))

    @staticmethod
    def _set_alias(type: Type, alias_symbol: Optional[Symbol], alias_type_arguments: Optional[Sequence[Type]]) -> None:
        if alias_symbol is not None:
            type.alias_symbol = alias_symbol
            type.alias_type_arguments = tuple(alias_type_arguments) if alias_type_arguments else None

    def union_members(self, type: Type) -> Tuple[Type, ...]:
        return type.types if isinstance(type, UnionType) else (type,)

    def map_type(self, type: Type, mapper: Callable[[Type], Type], alias_symbol=None, alias_type_arguments=None) -> Type:
        if isinstance(type, UnionType):
            return self.get_union_type((mapper(t) for t in type.types), alias_symbol, alias_type_arguments)
        if type.flags & TypeFlags.NEVER:
            return type
        return mapper(type)

    def add_optionality(self, type: Type) -> Type:
        if not self.strict_null_checks:
            return type
        return self.get_union_type([type, self.undefined_type])

    def remove_undefined(self, type: Type) -> Type:
        if isinstance(type, UnionType):
            return self.get_union_type(t for t in type.types if not t.flags & TypeFlags.UNDEFINED)
        return type

    def get_non_nullable_type(self, type: Type) -> Type:
        if isinstance(type, UnionType):
            return self.get_union_type(t for t in type.types if not t.flags & TypeFlags.NULLABLE)
        if type.flags & TypeFlags.NULLABLE:
            return self.never_type
        return type

    # =========================================================================
    # Literal Widening
    # =========================================================================

    def get_widened_literal_type(self, type: Type) -> Type:
        if type.flags & TypeFlags.STRING_LITERAL:
            return self.string_type
        if type.flags & TypeFlags.NUMBER_LITERAL:
            return self.number_type
        if type.flags & TypeFlags.BIGINT_LITERAL:
            return self.bigint_type
        if type.flags & TypeFlags.BOOLEAN_LITERAL:
            return self.boolean_type
        if isinstance(type, UnionType) and not type.flags & TypeFlags.BOOLEAN:
            return self.get_union_type(self.get_widened_literal_type(t) for t in type.types)
        return type

    # =========================================================================
    # Arrays and Tuples
    # =========================================================================

    def get_global_type(self, name: str) -> Optional[InterfaceType]:
        symbol = self._program.get_global_symbol(name)
        if symbol is None or not symbol.flags & SymbolFlags.INTERFACE:
            return None
        return self.get_declared_type_of_interface(symbol)

    @property
    def global_array_type(self) -> Optional[InterfaceType]:
        if self._global_array is None:
            self._global_array = self.get_global_type("Array")
        return self._global_array

    @property
    def global_readonly_array_type(self) -> Optional[InterfaceType]:
        if self._global_readonly_array is None:
            self._global_readonly_array = self.get_global_type("ReadonlyArray")
        return self._global_readonly_array

    def create_array_type(self, element_type: Type, readonly: bool = False) -> Type:
        target = self.global_readonly_array_type if readonly else self.global_array_type
        if target is None:
            return self.error("Cannot find global type 'Array'")
        return self.create_type_reference(target, [element_type])

    def is_array_type(self, type: Type) -> bool:
        """Whether ``type`` is ``Array<T>`` or ``ReadonlyArray<T>``."""
        return (
            isinstance(type, TypeReference)
            and not isinstance(type, InterfaceType)
            and type.target in (self.global_array_type, self.global_readonly_array_type)
        )

    def is_readonly_array_type(self, type: Type) -> bool:
        return isinstance(type, TypeReference) and type.target is self.global_readonly_array_type and type is not type.target

    def is_tuple_type(self, type: Type) -> bool:
        return isinstance(type, TupleType)

    def get_type_arguments(self, type: TypeReference) -> Tuple[Type, ...]:
        return type.type_arguments

    def get_element_type_of_array_like(self, type: Type) -> Optional[Type]:
        if self.is_array_type(type):
            return type.type_arguments[0]
        if isinstance(type, TupleType):
            return self.get_union_type(type.element_types) if type.element_types else self.never_type
        return None

    def create_tuple_type(
        self,
        element_types: Sequence[Type],
        element_flags: Optional[Sequence[ElementFlags]] = None,
        labels: Optional[Sequence[Optional[str]]] = None,
        readonly: bool = False,
    ) -> TupleType:
        element_flags = tuple(element_flags or [ElementFlags.REQUIRED] * len(element_types))
        labels = tuple(labels or [None] * len(element_types))
        key = (tuple(t.id for t in element_types), element_flags, labels, readonly)
        tuple_type = self._tuple_types.get(key)
        if tuple_type is None:
            tuple_type = TupleType(self.next_type_id(), element_types, element_flags, labels, readonly)
            self._tuple_types[key] = tuple_type
        return tuple_type

    def _resolve_tuple_members(self, tuple_type: TupleType) -> ResolvedMembers:
        members = ResolvedMembers()
        readonly = SymbolFlags.READONLY if tuple_type.readonly else SymbolFlags.NONE
        lengths = []
        for index, (element, flags) in enumerate(zip(tuple_type.element_types, tuple_type.element_flags)):
            if flags & ElementFlags.REST:
                break
            optional = bool(flags & ElementFlags.OPTIONAL)
            if optional:
                lengths.append(index)
            symbol = Symbol(
                str(index),
                SymbolFlags.PROPERTY | readonly | (SymbolFlags.OPTIONAL if optional else SymbolFlags.NONE),
                type=self.add_optionality(element) if optional else element,
            )
            members.properties[symbol.name] = symbol
        if tuple_type.has_rest:
            length = self.number_type
        else:
            lengths.append(tuple_type.fixed_length)
            length = self.get_union_type(self.get_number_literal_type(n) for n in lengths)
        members.properties["length"] = Symbol("length", SymbolFlags.PROPERTY | readonly, type=length)
        element_union = self.get_union_type(tuple_type.element_types) if tuple_type.element_types else self.never_type
        members.index_infos.append(IndexInfo(self.number_type, element_union, tuple_type.readonly))
        return members

    # =========================================================================
    # Type References
    # =========================================================================

    def create_type_reference(self, target: InterfaceType, type_arguments: Sequence[Type]) -> TypeReference:
        type_arguments = tuple(type_arguments)
        if type_arguments == target.type_parameters:
            return target
        key = (target.id, tuple(t.id for t in type_arguments))
        reference = self._type_references.get(key)
        if reference is None:
            reference = TypeReference(self.next_type_id(), target, type_arguments)
            self._type_references[key] = reference
        return reference

    def _fill_missing_type_arguments(self, arguments: List[Type], type_parameters: Sequence[TypeParameter]) -> List[Type]:
        filled = list(arguments[:len(type_parameters)])
        for index in range(len(filled), len(type_parameters)):
            default = self.get_default_of_type_parameter(type_parameters[index])
            if default is None:
                filled.append(self.error_type)
            else:
                mapper = ArrayMapper(type_parameters[:index], filled)
                filled.append(self.instantiate_type(default, mapper))
        return filled

    # =========================================================================
    # Type Parameters
    # =========================================================================

    def get_type_parameter(self, node: SyntaxNode) -> TypeParameter:
        """The type parameter declared by a ``type_parameter``, ``infer_type`` or ``mapped_type_clause`` node."""
        key = node.key
        type_parameter = self._type_parameters.get(key)
        if type_parameter is None:
            if node.kind == "infer_type":
                name_node = node.first("type_identifier")
            else:
                name_node = node.field("name")
            name = name_node.text if name_node is not None else "?"
            type_parameter = TypeParameter(self.next_type_id(), name, node, is_infer=node.kind == "infer_type")
            type_parameter.symbol = Symbol(name, SymbolFlags.TYPE_PARAMETER, [node], type=type_parameter)
            self._type_parameters[key] = type_parameter
        return type_parameter

    def get_declared_type_parameters(self, declaration: SyntaxNode) -> List[TypeParameter]:
        key = declaration.key
        cached = self._declared_type_parameters.get(key)
        if cached is None:
            parameters = declaration.field("type_parameters")
            cached = []
            if parameters is not None:
                cached = [self.get_type_parameter(p) for p in parameters.children if p.kind == "type_parameter"]
            self._declared_type_parameters[key] = cached
        return cached

    def get_constraint_of_type_parameter(self, type_parameter: TypeParameter) -> Optional[Type]:
        if type_parameter.constraint is None:
            node = type_parameter.declaration
            constraint_node = None
            if node is None:
                pass
            elif node.kind == "type_parameter":
                constraint = node.field("constraint")
                constraint_node = constraint.children[0] if constraint is not None and constraint.children else None
            elif node.kind == "infer_type":
                children = node.children
                constraint_node = children[1] if len(children) > 1 else None
            elif node.kind == "mapped_type_clause":
                constraint_node = node.field("type")

            type_parameter.constraint = self.unknown_type
            if constraint_node is not None:
                key = ("constraint", type_parameter.id)
                if self._push_resolution(key):
                    try:
                        type_parameter.constraint = self.get_type_from_type_node(constraint_node)
                    finally:
                        self._pop_resolution()
        if type_parameter.constraint is self.unknown_type:
            return None
        return type_parameter.constraint

    def get_default_of_type_parameter(self, type_parameter: TypeParameter) -> Optional[Type]:
        node = type_parameter.declaration
        if node is None or node.kind != "type_parameter":
            return None
        if type_parameter.default is None:
            default = node.field("value")
            if default is None or not default.children:
                return None
            type_parameter.default = self.get_type_from_type_node(default.children[0])
        return type_parameter.default

    def _infer_declarations(self, conditional: SyntaxNode) -> List[SyntaxNode]:
        extends_node = conditional.field("right")
        if extends_node is None:
            return []
        found = [extends_node] if extends_node.kind == "infer_type" else []
        found.extend(n for n in extends_node.walk(stop_kinds=("conditional_type",)) if n.kind == "infer_type")
        return found

    def _type_parameters_declared_at(self, scope: SyntaxNode, previous: SyntaxNode) -> List[TypeParameter]:
        """Type parameters that ``scope`` brings into scope for its child ``previous``."""
        kind = scope.kind
        if kind in TYPE_PARAMETER_OWNERS:
            return self.get_declared_type_parameters(scope)
        if kind == "conditional_type":
            if previous in (scope.field("consequence"), scope.field("right")):
                return [self.get_type_parameter(n) for n in self._infer_declarations(scope)]
            return []
        if kind == "mapped_type_clause":
            if previous == scope.field("alias"):
                return [self.get_type_parameter(scope)]
            return []
        if kind == "index_signature" and previous.kind != "mapped_type_clause":
            clause = scope.first("mapped_type_clause")
            if clause is not None:
                return [self.get_type_parameter(clause)]
        return []

    def get_outer_type_parameters(self, node: SyntaxNode) -> List[TypeParameter]:
        """Type parameters in scope at ``node``, outermost first, excluding its own."""
        key = node.key
        cached = self._outer_type_parameters.get(key)
        if cached is None:
            scopes = []
            previous = node
            for scope in node.ancestors():
                scopes.append(self._type_parameters_declared_at(scope, previous))
                previous = scope
            cached = []
            seen: Set[int] = set()
            for parameters in reversed(scopes):
                for parameter in parameters:
                    if parameter.id not in seen:
                        seen.add(parameter.id)
                        cached.append(parameter)
            self._outer_type_parameters[key] = cached
        return cached

    # =========================================================================
    # Name Resolution
    # =========================================================================

    def resolve_name(self, name: str, location: SyntaxNode, meaning: SymbolFlags) -> Optional[Symbol]:
        """Resolve ``name`` as seen from ``location``.

        Walks enclosing scopes outwards: type parameters, block and file
        locals, then the global declarations of the default library.
        """
        previous = location
        for scope in location.ancestors():
            if meaning & SymbolFlags.TYPE:
                for parameter in self._type_parameters_declared_at(scope, previous):
                    if parameter.name == name:
                        return parameter.symbol
            if scope.kind in SCOPE_CONTAINERS:
                symbol = self._binder.get_locals(scope).get(name)
                if symbol is not None and symbol.flags & (meaning | SymbolFlags.ALIAS):
                    return symbol
            if meaning & SymbolFlags.VALUE and scope.kind in FUNCTION_LIKE and previous == scope.field("body"):
                parameter = self._find_parameter(scope, name)
                if parameter is not None:
                    return parameter
            previous = scope
        symbol = self._program.get_global_symbol(name)
        if symbol is not None and symbol.flags & meaning:
            return symbol
        return None

    def _find_parameter(self, function: SyntaxNode, name: str) -> Optional[Symbol]:
        signature = self.get_signature(function)
        for parameter in signature.parameters:
            if parameter.name == name:
                return parameter
        return None

    def resolve_alias(self, symbol: Symbol) -> Optional[Symbol]:
        """Follow an import or export alias to the symbol it names."""
        if symbol.id in self._resolved_aliases:
            return self._resolved_aliases[symbol.id]
        self._resolved_aliases[symbol.id] = None
        target = self._resolve_alias_worker(symbol)
        self._resolved_aliases[symbol.id] = target
        return target

    def _resolve_alias_worker(self, symbol: Symbol) -> Optional[Symbol]:
        module, imported = symbol.import_info
        declaration = symbol.value_declaration
        if module is None:
            target = self._binder.get_locals(declaration.file.root).get(imported)
        else:
            file = self._program.resolve_import(module, declaration.file.file_name)
            if file is None:
                self.error(f"Cannot find module '{module}'", declaration)
                return None
            if imported == "*":
                namespace = Symbol(symbol.name, SymbolFlags.NAMESPACE, [declaration])
                namespace.module_file = file.file_name
                return namespace
            target = self.get_export(file, imported)
            if target is None:
                self.error(f"Module '{module}' has no exported member '{imported}'", declaration)
                return None
        if target is not None and target.flags & SymbolFlags.ALIAS:
            return self.resolve_alias(target)
        return target

    def get_export(self, file: SourceFile, name: str, visited: Optional[Set[str]] = None) -> Optional[Symbol]:
        visited = visited if visited is not None else set()
        if file.file_name in visited:
            return None
        visited.add(file.file_name)
        exports = self._binder.get_exports(file)
        symbol = exports.symbols.get(name)
        if symbol is not None:
            return self.resolve_alias(symbol) if symbol.flags & SymbolFlags.ALIAS else symbol
        for module in exports.star_sources:
            source = self._program.resolve_import(module, file.file_name)
            if source is not None:
                symbol = self.get_export(source, name, visited)
                if symbol is not None:
                    return symbol
        return None

    def _resolve_entity_name(self, node: SyntaxNode, meaning: SymbolFlags) -> Optional[Symbol]:
        """Resolve ``a``, ``a.b`` or ``a.b.C`` as a type or namespace reference."""
        if node.kind in ("identifier", "type_identifier"):
            symbol = self.resolve_name(node.text, node, meaning | SymbolFlags.NAMESPACE)
            if symbol is not None and symbol.flags & SymbolFlags.ALIAS:
                symbol = self.resolve_alias(symbol)
            return symbol
        if node.kind in ("nested_type_identifier", "nested_identifier", "member_expression"):
            children = node.children
            namespace = self._resolve_entity_name(children[0], SymbolFlags.NAMESPACE)
            if namespace is None or namespace.module_file is None:
                return None
            file = self._program.get_source_file(namespace.module_file)
            return self.get_export(file, children[-1].text) if file is not None else None
        return None

    # =========================================================================
    # Types from Syntax
    # =========================================================================

    def get_type_from_type_node(self, node: SyntaxNode) -> Type:
        key = node.key
        type = self._node_types.get(key)
        if type is None:
            type = self._type_from_node(node)
            self._node_types[key] = type
        return type

    def _type_from_node(self, node: SyntaxNode, alias_symbol: Optional[Symbol] = None, alias_type_arguments=None) -> Type:
        kind = node.kind

        if kind in ("type_annotation", "opting_type_annotation", "omitting_type_annotation", "adding_type_annotation", "default_type", "constraint"):
            children = node.children
            return self._type_from_node(children[0], alias_symbol, alias_type_arguments) if children else self.error_type
        if kind == "parenthesized_type":
            return self._type_from_node(node.children[0], alias_symbol, alias_type_arguments)
        if kind == "predefined_type":
            return self._intrinsic_by_name(node.text.split()[-1]) or self.error_type
        if kind == "literal_type":
            return self._type_from_literal(node.children[0])
        if kind == "type_identifier":
            return self._type_from_reference(node, node, [])
        if kind == "nested_type_identifier":
            return self._type_from_reference(node, node, [])
        if kind == "generic_type":
            arguments = node.field("type_arguments")
            return self._type_from_reference(node, node.field("name"), arguments.children if arguments else [])
        if kind == "union_type":
            return self.get_union_type(
                [self.get_type_from_type_node(n) for n in self._flatten_operands(node, "union_type")],
                alias_symbol, alias_type_arguments,
            )
        if kind == "intersection_type":
            return self.get_intersection_type(
                [self.get_type_from_type_node(n) for n in self._flatten_operands(node, "intersection_type")],
                alias_symbol, alias_type_arguments,
            )
        if kind == "array_type":
            return self.create_array_type(self.get_type_from_type_node(node.children[0]))
        if kind == "readonly_type":
            return self._type_from_readonly(node.children[0])
        if kind == "tuple_type":
            return self._type_from_tuple(node, readonly=False)
        if kind in ("object_type", "interface_body"):
            return self._type_from_type_literal(node, alias_symbol, alias_type_arguments)
        if kind in ("function_type", "constructor_type"):
            return self.get_function_type(node, alias_symbol=alias_symbol, alias_type_arguments=alias_type_arguments)
        if kind == "lookup_type":
            object_node, index_node = node.children[0], node.children[-1]
            return self.get_indexed_access_type(
                self.get_type_from_type_node(object_node), self.get_type_from_type_node(index_node), node,
            )
        if kind == "index_type_query":
            return self.get_index_type(self.get_type_from_type_node(node.children[0]))
        if kind == "type_query":
            return self.expressions.get_type_of_entity(node.children[0])
        if kind == "conditional_type":
            return self._type_from_conditional(node, alias_symbol, alias_type_arguments)
        if kind == "infer_type":
            return self.get_type_parameter(node)
        if kind == "template_literal_type":
            return self._type_from_template_literal(node)
        if kind in ("type_predicate", "type_predicate_annotation"):
            return self.boolean_type
        if kind in ("asserts", "asserts_annotation"):
            return self.void_type
        if kind in ("this_type", "existential_type"):
            return self.any_type
        if kind == "optional_type":
            return self.get_type_from_type_node(node.children[0])
        return self.error(f"Unsupported type syntax '{kind}'", node)

    def _intrinsic_by_name(self, name: str) -> Optional[Type]:
        return {
            "any": self.any_type,
            "unknown": self.unknown_type,
            "string": self.string_type,
            "number": self.number_type,
            "bigint": self.bigint_type,
            "boolean": self.boolean_type,
            "symbol": self.es_symbol_type,
            "void": self.void_type,
            "undefined": self.undefined_type,
            "null": self.null_type,
            "never": self.never_type,
            "object": self.non_primitive_type,
        }.get(name)

    def _type_from_literal(self, node: SyntaxNode) -> Type:
        kind = node.kind
        if kind == "string":
            return self.get_string_literal_type(string_literal_value(node))
        if kind == "number":
            return self.get_number_literal_type(parse_number(node.text))
        if kind == "unary_expression":
            operator = node.field("operator")
            argument = node.field("argument")
            value = parse_number(argument.text)
            return self.get_number_literal_type(-value if operator is not None and operator.text == "-" else value)
        if kind == "true":
            return self.true_type
        if kind == "false":
            return self.false_type
        if kind == "null":
            return self.null_type
        if kind == "undefined":
            return self.undefined_type
        return self.error(f"Unsupported literal type '{node.text}'", node)

    @staticmethod
    def _flatten_operands(node: SyntaxNode, kind: str) -> List[SyntaxNode]:
        operands = []
        for child in node.children:
            if child.kind == kind:
                operands.extend(TypeChecker._flatten_operands(child, kind))
            else:
                operands.append(child)
        return operands

    def _type_from_readonly(self, inner: SyntaxNode) -> Type:
        if inner.kind == "array_type":
            return self.create_array_type(self.get_type_from_type_node(inner.children[0]), readonly=True)
        if inner.kind == "tuple_type":
            return self._type_from_tuple(inner, readonly=True)
        return self.get_type_from_type_node(inner)

    def _type_from_tuple(self, node: SyntaxNode, readonly: bool) -> Type:
        types: List[Type] = []
        flags: List[ElementFlags] = []
        labels: List[Optional[str]] = []
        for member in node.children:
            kind = member.kind
            label = None
            if kind in ("required_parameter", "optional_parameter"):
                name = member.field("name") or member.field("pattern")
                annotation = member.first("type_annotation") or member.field("type")
                element = self.get_type_from_type_node(annotation) if annotation is not None else self.any_type
                if name is not None and name.kind == "rest_pattern":
                    label = name.children[0].text if name.children else None
                    self._push_rest_element(types, flags, labels, element, label)
                    continue
                label = name.text if name is not None else None
                element_flag = ElementFlags.OPTIONAL if kind == "optional_parameter" else ElementFlags.REQUIRED
            elif kind == "optional_type":
                element = self.get_type_from_type_node(member.children[0])
                element_flag = ElementFlags.OPTIONAL
            elif kind == "rest_type":
                self._push_rest_element(types, flags, labels, self.get_type_from_type_node(member.children[0]), None)
                continue
            else:
                element = self.get_type_from_type_node(member)
                element_flag = ElementFlags.REQUIRED
            types.append(element)
            flags.append(element_flag)
            labels.append(label)
        return self.create_tuple_type(types, flags, labels, readonly)

    def _push_rest_element(self, types, flags, labels, rest: Type, label: Optional[str]) -> None:
        if isinstance(rest, TupleType):
            types.extend(rest.element_types)
            flags.extend(rest.element_flags)
            labels.extend(rest.labels)
            return
        element = rest.type_arguments[0] if self.is_array_type(rest) else rest
        types.append(element)
        flags.append(ElementFlags.REST)
        labels.append(label)

    def _type_from_type_literal(self, node: SyntaxNode, alias_symbol, alias_type_arguments) -> Type:
        members = node.children
        if len(members) == 1 and members[0].kind == "index_signature" and members[0].first("mapped_type_clause") is not None:
            clause = members[0].first("mapped_type_clause")
            mapped = MappedType(self.next_type_id(), node, None, self.get_type_parameter(clause))
            self._set_alias(mapped, alias_symbol, alias_type_arguments)
            return mapped
        literal = AnonymousType(self.next_type_id(), node)
        self._set_alias(literal, alias_symbol, alias_type_arguments)
        return literal

    def _type_from_template_literal(self, node: SyntaxNode) -> Type:
        text = node.text
        base = node.pos
        texts: List[str] = []
        types: List[Type] = []
        cursor = 1
        for child in node.children:
            if child.kind != "template_type":
                continue
            start = child.pos - base
            texts.append(unescape_js(text[cursor:start]))
            inner = child.children[0]
            types.append(self.get_type_from_type_node(inner))
            cursor = child.end - base
        texts.append(unescape_js(text[cursor:len(text) - 1]))
        return self.get_template_literal_type(texts, types)

    # -------------------------------------------------------------------------
    # References to declared types
    # -------------------------------------------------------------------------

    def _type_from_reference(self, node: SyntaxNode, name_node: SyntaxNode, argument_nodes: List[SyntaxNode]) -> Type:
        if name_node.kind == "nested_type_identifier":
            member = self._type_from_enum_member_reference(name_node)
            if member is not None:
                return member
            symbol = self._resolve_entity_name(name_node, SymbolFlags.TYPE)
        else:
            symbol = self.resolve_name(name_node.text, node, SymbolFlags.TYPE)
            if symbol is None:
                intrinsic = self._intrinsic_by_name(name_node.text)
                if intrinsic is not None and name_node.text in ("bigint", "symbol", "object", "undefined"):
                    return intrinsic
        if symbol is None:
            return self.error(f"Cannot find name '{name_node.text}'", name_node)
        return self._type_from_symbol_reference(symbol, node, argument_nodes)

    def _type_from_symbol_reference(self, symbol: Symbol, node: SyntaxNode, argument_nodes: List[SyntaxNode]) -> Type:
        if symbol.flags & SymbolFlags.ALIAS:
            target = self.resolve_alias(symbol)
            if target is None:
                return self.error_type
            symbol = target
        if symbol.flags & SymbolFlags.TYPE_PARAMETER:
            return symbol.type
        arguments = [self.get_type_from_type_node(n) for n in argument_nodes]
        if symbol.flags & SymbolFlags.TYPE_ALIAS:
            if self._is_intrinsic_alias(symbol):
                return self.get_string_mapping_type(symbol, arguments[0] if arguments else self.error_type)
            return self._type_from_alias_reference(symbol, arguments)
        if symbol.flags & (SymbolFlags.INTERFACE | SymbolFlags.CLASS):
            interface = self.get_declared_type_of_interface(symbol)
            if not interface.type_parameters:
                return interface
            return self.create_type_reference(interface, self._fill_missing_type_arguments(arguments, interface.type_parameters))
        if symbol.flags & SymbolFlags.ENUM:
            return self.get_declared_type_of_enum(symbol)
        return self.error(f"'{symbol.name}' refers to a value, but is being used as a type here", node)

    def _type_from_enum_member_reference(self, name_node: SyntaxNode) -> Optional[Type]:
        """``E.A`` where ``E`` is an enum, or None for any other qualified name."""
        children = name_node.children
        left = children[0]
        if left.kind != "identifier":
            return None
        symbol = self.resolve_name(left.text, left, SymbolFlags.ENUM)
        if symbol is not None and symbol.flags & SymbolFlags.ALIAS:
            symbol = self.resolve_alias(symbol)
        if symbol is None or not symbol.flags & SymbolFlags.ENUM:
            return None
        member = self.get_enum_member_types(symbol).get(children[-1].text)
        if member is None:
            return self.error(f"Enum '{symbol.name}' has no member named '{children[-1].text}'", name_node)
        return member

    def _alias_declaration(self, symbol: Symbol) -> Optional[SyntaxNode]:
        for declaration in symbol.declarations:
            if declaration.kind == "type_alias_declaration":
                return declaration
        return None

    def get_declared_type_of_alias(self, symbol: Symbol) -> Type:
        cached = self._declared_types.get(symbol.id)
        if cached is not None:
            return cached
        declaration = self._alias_declaration(symbol)
        key = ("alias", symbol.id)
        if declaration is None or not self._push_resolution(key):
            return self.error(f"Type alias '{symbol.name}' circularly references itself", declaration)
        try:
            type_parameters = self.get_declared_type_parameters(declaration)
            type = self._type_from_node(declaration.field("value"), symbol, type_parameters or None)
        finally:
            self._pop_resolution()
        self._declared_types[symbol.id] = type
        return type

    def _type_from_alias_reference(self, symbol: Symbol, arguments: List[Type]) -> Type:
        declared = self.get_declared_type_of_alias(symbol)
        declaration = self._alias_declaration(symbol)
        type_parameters = self.get_declared_type_parameters(declaration) if declaration is not None else []
        if not type_parameters:
            return declared
        arguments = self._fill_missing_type_arguments(arguments, type_parameters)
        key = (symbol.id, tuple(t.id for t in arguments))
        instantiation = self._alias_instantiations.get(key)
        if instantiation is None:
            instantiation = self.instantiate_type(declared, ArrayMapper(type_parameters, arguments), symbol, arguments)
            self._alias_instantiations[key] = instantiation
        return instantiation

    def get_declared_type_of_interface(self, symbol: Symbol) -> InterfaceType:
        """The declared type of an interface, or the instance type of a class."""
        cached = self._declared_types.get(symbol.id)
        if cached is None:
            declarations = [d for d in symbol.declarations if d.kind in INTERFACE_LIKE]
            type_parameters = self.get_declared_type_parameters(declarations[0]) if declarations else []
            cached = InterfaceType(self.next_type_id(), symbol, type_parameters)
            self._declared_types[symbol.id] = cached
        return cached

    def get_constructor_type_of_class(self, symbol: Symbol) -> Type:
        """The value side of a class: one construct signature returning the instance type."""
        declaration = next((d for d in symbol.declarations if d.kind in CLASS_LIKE), None)
        if declaration is None:
            return self.any_type
        instance = self.get_declared_type_of_interface(symbol)
        body = declaration.field("body")
        constructor = None
        if body is not None:
            constructor = next(
                (m for m in body.children if m.kind == "method_definition" and self.get_property_name(m.field("name")) == "constructor"),
                None,
            )
        if constructor is not None:
            signature = self._create_signature(constructor)
            signature.type_parameters = instance.type_parameters
        else:
            signature = Signature(declaration, instance.type_parameters, [], 0, False)
        signature.return_resolver = lambda: instance
        type = AnonymousType(self.next_type_id(), None, symbol=symbol)
        type.resolved_members = ResolvedMembers(construct_signatures=[signature])
        return type

    # -------------------------------------------------------------------------
    # Enums
    # -------------------------------------------------------------------------

    def get_enum_member_types(self, symbol: Symbol) -> Dict[str, Type]:
        """Literal type of each enum member, in declaration order.

        A member without an initializer is one more than the member before
        it, or 0 when it comes first. After a string or computed member it
        is typed ``number``.
        """
        cached = self._enum_members.get(symbol.id)
        if cached is not None:
            return cached
        cached = {}
        self._enum_members[symbol.id] = cached
        for declaration in symbol.declarations:
            body = declaration.field("body") if declaration.kind == "enum_declaration" else None
            if body is None:
                continue
            next_value: Optional[float] = 0.0
            for member in body.children:
                if member.kind == "enum_assignment":
                    name = self.get_property_name(member.field("name"))
                    value = member.field("value")
                    type = self._enum_initializer_type(value, cached) if value is not None else self.number_type
                else:
                    name = self.get_property_name(member)
                    type = self.get_number_literal_type(next_value) if next_value is not None else self.number_type
                if name is None:
                    continue
                cached[name] = type
                next_value = type.value + 1 if type.flags & TypeFlags.NUMBER_LITERAL else None
        return cached

    def _enum_initializer_type(self, value: SyntaxNode, members: Dict[str, Type]) -> Type:
        if value.kind == "identifier" and value.text in members:
            return members[value.text]
        type = self.expressions.check_expression(value)
        if type.flags & (TypeFlags.STRING_LITERAL | TypeFlags.NUMBER_LITERAL):
            return type
        if type.flags & TypeFlags.STRING_LIKE:
            return self.string_type
        return self.number_type

    def get_declared_type_of_enum(self, symbol: Symbol) -> Type:
        """The union of the member literal types, printed by the enum's name."""
        cached = self._declared_types.get(symbol.id)
        if cached is None:
            cached = self.get_union_type(self.get_enum_member_types(symbol).values(), symbol)
            self._declared_types[symbol.id] = cached
        return cached

    def get_enum_object_type(self, symbol: Symbol) -> Type:
        """The value side of an enum: one readonly property per member."""
        properties = {
            name: Symbol(name, SymbolFlags.PROPERTY | SymbolFlags.READONLY, type=type)
            for name, type in self.get_enum_member_types(symbol).items()
        }
        type = AnonymousType(self.next_type_id(), None, symbol=symbol)
        type.resolved_members = ResolvedMembers(properties=properties)
        return type

    # =========================================================================
    # Function Types and Signatures
    # =========================================================================

    def get_function_type(self, declaration: SyntaxNode, symbol: Optional[Symbol] = None, alias_symbol=None, alias_type_arguments=None) -> AnonymousType:
        """The object type carrying the signature of a function-like node."""
        key = declaration.key
        type = self._function_types.get(key)
        if type is None:
            type = AnonymousType(self.next_type_id(), declaration, symbol=symbol)
            self._set_alias(type, alias_symbol, alias_type_arguments)
            self._function_types[key] = type
        return type

    def get_signature(self, declaration: SyntaxNode, mapper: Optional[TypeMapper] = None) -> Signature:
        signature = self._signatures.get(declaration.key)
        if signature is None:
            signature = self._create_signature(declaration)
            self._signatures[declaration.key] = signature
        if mapper is not None:
            return self.instantiate_signature(signature, mapper)
        return signature

    def _create_signature(self, declaration: SyntaxNode) -> Signature:
        type_parameters = self.get_declared_type_parameters(declaration)
        parameters: List[Symbol] = []
        min_argument_count = 0
        has_rest = False

        parameter_nodes: List[SyntaxNode] = []
        formal = declaration.field("parameters")
        if formal is not None:
            parameter_nodes = [p for p in formal.children if p.kind in ("required_parameter", "optional_parameter")]
        single = declaration.field("parameter")
        if single is not None:
            parameter_nodes = [single]

        for index, node in enumerate(parameter_nodes):
            pattern = node if node.kind == "identifier" else node.field("pattern")
            if pattern is None or pattern.kind == "this":
                continue
            rest = pattern.kind == "rest_pattern"
            if pattern.kind == "identifier":
                name = pattern.text
            elif rest and pattern.children and pattern.children[0].kind == "identifier":
                name = pattern.children[0].text
            else:
                name = f"__{index}"
            optional = node.kind == "optional_parameter" or node.field("value") is not None
            flags = SymbolFlags.PARAMETER | (SymbolFlags.OPTIONAL if optional else SymbolFlags.NONE)
            symbol = Symbol(name, flags, [node])
            symbol.resolver = functools.partial(self._type_of_parameter, node, rest)
            parameters.append(symbol)
            has_rest = has_rest or rest
            if not optional and not rest:
                min_argument_count = len(parameters)

        signature = Signature(declaration, type_parameters, parameters, min_argument_count, has_rest)
        signature.return_resolver = functools.partial(self._return_type_of_declaration, declaration)
        return signature

    def _type_of_parameter(self, node: SyntaxNode, rest: bool) -> Type:
        if node.kind == "identifier":
            return self.any_type
        annotation = node.field("type")
        if annotation is not None:
            return self.get_type_from_type_node(annotation)
        value = node.field("value")
        if value is not None:
            return self.get_widened_literal_type(self.expressions.check_expression(value))
        return self.create_array_type(self.any_type) if rest else self.any_type

    def _return_type_of_declaration(self, declaration: SyntaxNode) -> Type:
        annotation = declaration.field("return_type")
        if annotation is None and declaration.kind in ("construct_signature", "constructor_type"):
            annotation = declaration.field("type")
        if annotation is not None:
            return self.get_type_from_type_node(annotation)
        if declaration.field("body") is not None:
            return self.expressions.infer_return_type(declaration)
        return self.any_type

    def get_return_type_of_signature(self, signature: Signature) -> Type:
        if signature.resolved_return_type is None:
            key = ("return", id(signature))
            if not self._push_resolution(key):
                return self.any_type
            try:
                resolved = signature.return_resolver() if signature.return_resolver is not None else self.any_type
            finally:
                self._pop_resolution()
            signature.resolved_return_type = resolved
        return signature.resolved_return_type

    def instantiate_signature(self, signature: Signature, mapper: TypeMapper) -> Signature:
        parameters = []
        for parameter in signature.parameters:
            instantiated = Symbol(parameter.name, parameter.flags, parameter.declarations)
            instantiated.resolver = functools.partial(self._instantiate_symbol_type, parameter, mapper)
            parameters.append(instantiated)
        result = Signature(
            signature.declaration,
            signature.type_parameters,
            parameters,
            signature.min_argument_count,
            signature.has_rest_parameter,
            mapper,
        )
        result.return_resolver = lambda: self.instantiate_type(self.get_return_type_of_signature(signature), mapper)
        return result

    def get_base_signature(self, signature: Signature) -> Signature:
        """``signature`` with its own type parameters replaced by their constraints, or ``unknown``."""
        type_parameters = signature.type_parameters
        if not type_parameters:
            return signature
        bases = [self.get_constraint_of_type_parameter(p) or self.unknown_type for p in type_parameters]
        erased = self.instantiate_signature(signature, ArrayMapper(type_parameters, bases))
        erased.type_parameters = ()
        return erased

    def _instantiate_symbol_type(self, symbol: Symbol, mapper: TypeMapper) -> Type:
        return self.instantiate_type(self.get_type_of_symbol(symbol), mapper)

    def get_signatures_of_type(self, type: Type, construct: bool = False) -> List[Signature]:
        members = self.resolve_structured_type_members(self.get_apparent_type(type))
        return members.construct_signatures if construct else members.call_signatures

    def is_function_like_type(self, type: Type) -> bool:
        """Whether ``type`` is a single call or construct signature and nothing else."""
        if not isinstance(type, ObjectType) or isinstance(type, (TypeReference, TupleType, MappedType)):
            return False
        members = self.resolve_structured_type_members(type)
        return (
            not members.properties
            and not members.index_infos
            and len(members.call_signatures) + len(members.construct_signatures) == 1
        )

    # =========================================================================
    # Symbols
    # =========================================================================

    def get_type_of_symbol(self, symbol: Symbol) -> Type:
        if symbol.type is not None:
            return symbol.type
        if symbol.flags & SymbolFlags.ALIAS:
            target = self.resolve_alias(symbol)
            return self.get_type_of_symbol(target) if target is not None else self.error_type
        key = ("symbol", symbol.id)
        if not self._push_resolution(key):
            return self.any_type
        try:
            if symbol.resolver is not None:
                type = symbol.resolver()
            else:
                type = self.expressions.get_type_of_value_symbol(symbol)
        finally:
            self._pop_resolution()
        symbol.type = type
        return type

    def get_property_name(self, node: Optional[SyntaxNode]) -> Optional[str]:
        """The static name of a property name node, or None if computed."""
        if node is None:
            return None
        kind = node.kind
        if kind in ("property_identifier", "identifier", "private_property_identifier", "shorthand_property_identifier", "type_identifier"):
            return node.text
        if kind == "string":
            return string_literal_value(node)
        if kind == "number":
            return format_number(parse_number(node.text))
        if kind == "computed_property_name":
            inner = node.children[0] if node.children else None
            if inner is not None and inner.kind in ("string", "number"):
                return self.get_property_name(inner)
            if inner is not None and inner.kind == "template_string" and not inner.children:
                return string_literal_value(inner)
        return None

    # =========================================================================
    # Structured Members
    # =========================================================================

    def resolve_structured_type_members(self, type: Type) -> ResolvedMembers:
        if isinstance(type, ObjectType):
            if type.resolved_members is None:
                # Placeholder breaks cycles through base types
                type.resolved_members = ResolvedMembers()
                type.resolved_members = self._resolve_object_members(type)
            return type.resolved_members
        if isinstance(type, IntersectionType):
            if type.resolved_members is None:
                type.resolved_members = ResolvedMembers()
                type.resolved_members = self._resolve_intersection_members(type)
            return type.resolved_members
        return ResolvedMembers()

    def _resolve_object_members(self, type: ObjectType) -> ResolvedMembers:
        if isinstance(type, TupleType):
            return self._resolve_tuple_members(type)
        if isinstance(type, TypeReference):
            return self._resolve_reference_members(type)
        if isinstance(type, MappedType):
            return self._resolve_mapped_members(type)
        if isinstance(type, AnonymousType) and type.declaration is not None:
            return self._resolve_anonymous_members(type)
        return ResolvedMembers()

    def _resolve_anonymous_members(self, type: AnonymousType) -> ResolvedMembers:
        declaration = type.declaration
        if declaration.kind in ("object_type", "interface_body"):
            members = ResolvedMembers()
            self._add_type_literal_members(members, declaration, type.mapper)
            return members
        signature = self.get_signature(declaration, type.mapper)
        if declaration.kind in ("constructor_type", "construct_signature"):
            return ResolvedMembers(construct_signatures=[signature])
        return ResolvedMembers(call_signatures=[signature])

    def _resolve_reference_members(self, reference: TypeReference) -> ResolvedMembers:
        target = reference.target
        mapper = None if reference is target else ArrayMapper(target.type_parameters, reference.type_arguments)
        members = ResolvedMembers()
        declarations = [d for d in target.symbol.declarations if d.kind in INTERFACE_LIKE]
        for declaration in declarations:
            body = declaration.field("body")
            if body is None:
                continue
            if declaration.kind in CLASS_LIKE:
                self._add_class_members(members, body, mapper)
            else:
                self._add_type_literal_members(members, body, mapper)
        for declaration in declarations:
            for base in self._base_types(declaration):
                base = self.instantiate_type(base, mapper)
                self._inherit_members(members, self.resolve_structured_type_members(base))
        return members

    def _base_types(self, declaration: SyntaxNode) -> List[Type]:
        """Types named by ``extends``; a class's ``implements`` contributes no members."""
        if declaration.kind not in CLASS_LIKE:
            clause = declaration.first("extends_type_clause")
            return [self.get_type_from_type_node(n) for n in clause.children] if clause is not None else []
        heritage = declaration.first("class_heritage")
        clause = heritage.first("extends_clause") if heritage is not None else None
        value = clause.field("value") if clause is not None else None
        if value is None or value.kind not in ("identifier", "member_expression"):
            return []
        if value.kind == "identifier":
            symbol = self.resolve_name(value.text, value, SymbolFlags.TYPE)
        else:
            symbol = self._resolve_entity_name(value, SymbolFlags.TYPE)
        if symbol is None:
            return [self.error(f"Cannot find name '{value.text}'", value)]
        arguments = clause.field("type_arguments")
        return [self._type_from_symbol_reference(symbol, value, arguments.children if arguments is not None else [])]

    @staticmethod
    def _inherit_members(members: ResolvedMembers, base: ResolvedMembers) -> None:
        for name, symbol in base.properties.items():
            members.properties.setdefault(name, symbol)
        if not members.call_signatures:
            members.call_signatures.extend(base.call_signatures)
        if not members.construct_signatures:
            members.construct_signatures.extend(base.construct_signatures)
        for info in base.index_infos:
            if not any(existing.key_type is info.key_type for existing in members.index_infos):
                members.index_infos.append(info)

    def _resolve_intersection_members(self, type: IntersectionType) -> ResolvedMembers:
        members = ResolvedMembers()
        for name in self._property_names_of_members(type.types):
            symbol = self.get_property_of_type(type, name)
            if symbol is not None:
                members.properties[name] = symbol
        for member in type.types:
            resolved = self.resolve_structured_type_members(self.get_apparent_type(member))
            members.call_signatures.extend(resolved.call_signatures)
            members.construct_signatures.extend(resolved.construct_signatures)
            members.index_infos.extend(resolved.index_infos)
        return members

    def _property_names_of_members(self, types: Iterable[Type]) -> List[str]:
        names: Dict[str, None] = {}
        for member in types:
            for symbol in self.get_properties_of_type(member):
                names.setdefault(symbol.name, None)
        return list(names)

    def _add_type_literal_members(self, members: ResolvedMembers, body: SyntaxNode, mapper: Optional[TypeMapper]) -> None:
        for member in body.children:
            kind = member.kind
            if kind in ("property_signature", "method_signature"):
                self._add_property(members, member, mapper)
            elif kind == "call_signature":
                members.call_signatures.append(self.get_signature(member, mapper))
            elif kind == "construct_signature":
                members.construct_signatures.append(self.get_signature(member, mapper))
            elif kind == "index_signature":
                info = self._index_info_of(member, mapper)
                if info is not None:
                    members.index_infos.append(info)

    def _add_class_members(self, members: ResolvedMembers, body: SyntaxNode, mapper: Optional[TypeMapper]) -> None:
        """Public instance members of a class body, parameter properties included."""
        for member in body.children:
            kind = member.kind
            if kind == "index_signature" and not member.has_token("static"):
                info = self._index_info_of(member, mapper)
                if info is not None:
                    members.index_infos.append(info)
                continue
            if kind not in ("public_field_definition",) + METHOD_KINDS:
                continue
            if member.has_token("static") or not _is_public(member):
                continue
            name_node = member.field("name")
            if kind == "method_definition" and self.get_property_name(name_node) == "constructor":
                self._add_parameter_properties(members, member, mapper)
                continue
            if name_node is not None and name_node.kind != "private_property_identifier":
                self._add_property(members, member, mapper)

    def _add_parameter_properties(self, members: ResolvedMembers, constructor: SyntaxNode, mapper: Optional[TypeMapper]) -> None:
        formal = constructor.field("parameters")
        for parameter in formal.children if formal is not None else ():
            if parameter.kind not in ("required_parameter", "optional_parameter"):
                continue
            if parameter.first("accessibility_modifier") is None and not parameter.has_token("readonly"):
                continue
            pattern = parameter.field("pattern")
            if _is_public(parameter) and pattern is not None and pattern.kind == "identifier":
                self._add_property(members, parameter, mapper, pattern.text)

    def _add_property(self, members: ResolvedMembers, member: SyntaxNode, mapper: Optional[TypeMapper], name: Optional[str] = None) -> None:
        if name is None:
            name = self.get_property_name(member.field("name"))
        if name is None or name in members.properties:
            return
        flags = SymbolFlags.PROPERTY
        optional = member.has_token("?")
        if optional:
            flags |= SymbolFlags.OPTIONAL
        if member.has_token("readonly"):
            flags |= SymbolFlags.READONLY
        if member.kind in METHOD_KINDS and not _is_accessor(member):
            flags |= SymbolFlags.METHOD
        symbol = Symbol(name, flags, [member])
        symbol.resolver = functools.partial(self._type_of_member, member, mapper, optional)
        members.properties[name] = symbol

    def _type_of_member(self, member: SyntaxNode, mapper: Optional[TypeMapper], optional: bool) -> Type:
        kind = member.kind
        if _is_accessor(member):
            type = self._type_of_accessor(member)
        elif kind in METHOD_KINDS:
            type = self.get_function_type(member)
        elif kind in ("required_parameter", "optional_parameter"):
            type = self._type_of_parameter(member, rest=False)
        else:
            annotation = member.field("type")
            value = member.field("value")
            if annotation is not None:
                type = self.get_type_from_type_node(annotation)
            elif value is not None:
                type = self.expressions.check_expression(value)
                if not member.has_token("readonly") and self.expressions.is_widening_expression(value):
                    type = self.get_widened_literal_type(type)
            else:
                type = self.any_type
        type = self.instantiate_type(type, mapper)
        return self.add_optionality(type) if optional else type

    def _type_of_accessor(self, member: SyntaxNode) -> Type:
        """A getter reads as its return type, a setter as its parameter type."""
        signature = self.get_signature(member)
        if member.has_token("get"):
            return self.get_return_type_of_signature(signature)
        parameters = signature.parameters
        return self.get_type_of_symbol(parameters[0]) if parameters else self.any_type

    def _index_info_of(self, member: SyntaxNode, mapper: Optional[TypeMapper]) -> Optional[IndexInfo]:
        key_node = member.field("index_type")
        if key_node is None:
            candidates = [c for c in member.children if c.kind not in ("identifier", "type_annotation")]
            key_node = candidates[0] if candidates else None
        annotation = member.field("type")
        if key_node is None or annotation is None:
            return None
        key_type = self.instantiate_type(self.get_type_from_type_node(key_node), mapper)
        value_type = self.instantiate_type(self.get_type_from_type_node(annotation), mapper)
        return IndexInfo(key_type, value_type, member.has_token("readonly"), member)

    # -------------------------------------------------------------------------
    # Property queries
    # -------------------------------------------------------------------------

    def get_apparent_type(self, type: Type) -> Type:
        seen: Set[int] = set()
        while isinstance(type, TypeParameter):
            if type.id in seen:
                return self.empty_object_type
            seen.add(type.id)
            constraint = self.get_constraint_of_type_parameter(type)
            if constraint is None:
                return self.empty_object_type
            type = constraint
        if type.flags & TypeFlags.NON_PRIMITIVE:
            return self.empty_object_type
        return type

    def get_properties_of_type(self, type: Type) -> List[Symbol]:
        """Properties of ``type`` in declaration order."""
        type = self.get_apparent_type(type)
        if isinstance(type, ObjectType):
            return list(self.resolve_structured_type_members(type).properties.values())
        if isinstance(type, IntersectionType):
            return list(self.resolve_structured_type_members(type).properties.values())
        if isinstance(type, UnionType) and not type.flags & TypeFlags.BOOLEAN:
            first, *rest = type.types
            names = [
                p.name for p in self.get_properties_of_type(first)
                if all(self.get_property_of_type(other, p.name) is not None for other in rest)
            ]
            return [self.get_property_of_type(type, name) for name in names]
        return []

    def get_property_of_type(self, type: Type, name: str) -> Optional[Symbol]:
        type = self.get_apparent_type(type)
        if isinstance(type, ObjectType):
            return self.resolve_structured_type_members(type).properties.get(name)
        if isinstance(type, UnionOrIntersectionType) and not type.flags & TypeFlags.BOOLEAN:
            key = (type.id, name)
            if key not in self._synthetic_properties:
                self._synthetic_properties[key] = None
                self._synthetic_properties[key] = self._create_synthetic_property(type, name)
            return self._synthetic_properties[key]
        return None

    def _create_synthetic_property(self, type: UnionOrIntersectionType, name: str) -> Optional[Symbol]:
        is_union = isinstance(type, UnionType)
        found: List[Symbol] = []
        for member in type.types:
            symbol = self.get_property_of_type(member, name)
            if symbol is None:
                if is_union:
                    return None
                continue
            found.append(symbol)
        if not found:
            return None
        if len(found) == 1 and not is_union:
            return found[0]
        flags = SymbolFlags.PROPERTY
        optional = any(s.is_optional for s in found) if is_union else all(s.is_optional for s in found)
        if optional:
            flags |= SymbolFlags.OPTIONAL
        if any(s.flags & SymbolFlags.READONLY for s in found):
            flags |= SymbolFlags.READONLY
        declarations = [d for s in found for d in s.declarations]
        symbol = Symbol(name, flags, declarations)
        combine = self.get_union_type if is_union else self.get_intersection_type
        symbol.resolver = lambda: combine([self.get_type_of_symbol(s) for s in found])
        return symbol

    def get_index_infos_of_type(self, type: Type) -> List[IndexInfo]:
        type = self.get_apparent_type(type)
        if isinstance(type, (ObjectType, IntersectionType)):
            return self.resolve_structured_type_members(type).index_infos
        return []

    def get_applicable_index_info(self, type: Type, key_type: Type) -> Optional[IndexInfo]:
        infos = self.get_index_infos_of_type(type)
        numeric = bool(key_type.flags & TypeFlags.NUMBER_LIKE) or (
            key_type.flags & TypeFlags.STRING_LITERAL and _is_numeric_literal_name(key_type.value)
        )
        if numeric:
            for info in infos:
                if info.key_type.flags & TypeFlags.NUMBER:
                    return info
        for info in infos:
            if info.key_type.flags & TypeFlags.STRING:
                return info
            if isinstance(info.key_type, TemplateLiteralType) and key_type.flags & TypeFlags.STRING_LITERAL:
                if self._is_template_match(key_type.value, info.key_type):
                    return info
        return None

    # =========================================================================
    # keyof and Indexed Access
    # =========================================================================

    def get_index_type(self, type: Type) -> Type:
        """``keyof type``."""
        if isinstance(type, UnionType) and not type.flags & TypeFlags.BOOLEAN:
            return self.get_intersection_type(self.get_index_type(t) for t in type.types)
        if isinstance(type, IntersectionType):
            return self.get_union_type(self.get_index_type(t) for t in type.types)
        if isinstance(type, MappedType) and self.is_generic_mapped_type(type) and type.declaration.first("index_signature") is not None:
            if self.get_mapped_name_type(type) is None:
                return self.get_constraint_type_of_mapped_type(type)
        if type.flags & TypeFlags.INSTANTIABLE or (isinstance(type, MappedType) and self.is_generic_mapped_type(type)):
            index = self._index_types.get(type.id)
            if index is None:
                index = IndexType(self.next_type_id(), type)
                self._index_types[type.id] = index
            return index
        if type.flags & TypeFlags.ANY or type.flags & TypeFlags.NEVER:
            return self.get_keyof_any()
        if type.flags & TypeFlags.UNKNOWN:
            return self.never_type
        if isinstance(type, (ObjectType, IntersectionType)):
            keys = [self._literal_type_for_name(p.name) for p in self.get_properties_of_type(type)]
            for info in self.get_index_infos_of_type(type):
                if info.key_type.flags & TypeFlags.STRING:
                    keys.extend([self.string_type, self.number_type])
                else:
                    keys.append(info.key_type)
            return self.get_union_type(keys)
        return self.never_type

    def _literal_type_for_name(self, name: str) -> Type:
        return self.get_string_literal_type(name)

    def get_indexed_access_type(self, object_type: Type, index_type: Type, node: Optional[SyntaxNode] = None) -> Type:
        """``object_type[index_type]``, deferred while either side is generic."""
        if object_type.flags & TypeFlags.ANY:
            return object_type
        if self._is_generic_object_type(object_type) or self._is_generic_index_type(index_type):
            key = (object_type.id, index_type.id)
            access = self._indexed_access_types.get(key)
            if access is None:
                access = IndexedAccessType(self.next_type_id(), object_type, index_type)
                self._indexed_access_types[key] = access
            return access
        if isinstance(index_type, UnionType) and not index_type.flags & TypeFlags.BOOLEAN:
            return self.get_union_type(self.get_indexed_access_type(object_type, t, node) for t in index_type.types)
        return self._property_type_for_index(object_type, index_type, node)

    def _property_type_for_index(self, object_type: Type, index_type: Type, node: Optional[SyntaxNode]) -> Type:
        if index_type.flags & TypeFlags.NEVER:
            return self.never_type
        if index_type.flags & (TypeFlags.STRING_LITERAL | TypeFlags.NUMBER_LITERAL):
            name = self.literal_key(index_type)
            if isinstance(object_type, UnionType) and not object_type.flags & TypeFlags.BOOLEAN:
                return self.get_union_type(self._property_type_for_index(t, index_type, node) for t in object_type.types)
            symbol = self.get_property_of_type(object_type, name)
            if symbol is not None:
                return self.get_type_of_symbol(symbol)
            if isinstance(object_type, TupleType) and object_type.has_rest and _is_numeric_literal_name(name):
                return self.get_union_type(
                    t for t, f in zip(object_type.element_types, object_type.element_flags) if f & ElementFlags.REST
                )
            info = self.get_applicable_index_info(object_type, index_type)
            if info is not None:
                return info.type
            return self.error(f"Property '{name}' does not exist on type '{self.type_to_string(object_type)}'", node)
        if index_type.flags & (TypeFlags.STRING | TypeFlags.NUMBER | TypeFlags.ES_SYMBOL | TypeFlags.TEMPLATE_LITERAL):
            if isinstance(object_type, TupleType) and index_type.flags & TypeFlags.NUMBER:
                return self.get_union_type(object_type.element_types)
            info = self.get_applicable_index_info(object_type, index_type)
            if info is not None:
                return info.type
        return self.error(f"Type '{self.type_to_string(index_type)}' cannot be used to index type '{self.type_to_string(object_type)}'", node)

    def literal_key(self, type: LiteralType) -> str:
        if type.flags & TypeFlags.NUMBER_LITERAL:
            return format_number(type.value)
        return str(type.value)

    def _is_generic_object_type(self, type: Type) -> bool:
        if isinstance(type, UnionOrIntersectionType):
            return any(self._is_generic_object_type(t) for t in type.types)
        if type.flags & TypeFlags.INSTANTIABLE:
            return True
        return isinstance(type, MappedType) and self.is_generic_mapped_type(type)

    def _is_generic_index_type(self, type: Type) -> bool:
        if isinstance(type, UnionOrIntersectionType):
            return any(self._is_generic_index_type(t) for t in type.types)
        if isinstance(type, TemplateLiteralType):
            return any(self._is_generic_index_type(t) for t in type.types)
        if isinstance(type, StringMappingType):
            return self._is_generic_index_type(type.type)
        return bool(type.flags & TypeFlags.INSTANTIABLE)

    def is_generic(self, type: Type) -> bool:
        return self._is_generic_object_type(type) or self._is_generic_index_type(type)

    # =========================================================================
    # Mapped Types
    # =========================================================================

    def _mapped_template_node(self, type: MappedType) -> Optional[SyntaxNode]:
        return type.signature.field("type")

    def get_constraint_type_of_mapped_type(self, type: MappedType) -> Type:
        if type.constraint_type is None:
            declared = self.get_type_from_type_node(type.clause.field("type"))
            type.constraint_type = self.instantiate_type(declared, type.mapper)
        return type.constraint_type

    def get_mapped_name_type(self, type: MappedType) -> Optional[Type]:
        alias = type.clause.field("alias")
        if alias is None:
            return None
        return self.get_type_from_type_node(alias)

    def get_template_type_of_mapped_type(self, type: MappedType) -> Type:
        """The property template with only the outer type parameters instantiated."""
        if type.template_type is None:
            node = self._mapped_template_node(type)
            declared = self.get_type_from_type_node(node) if node is not None else self.any_type
            type.template_type = self.instantiate_type(declared, type.mapper)
        return type.template_type

    def is_generic_mapped_type(self, type: MappedType) -> bool:
        return self._is_generic_index_type(self.get_constraint_type_of_mapped_type(type))

    def _homomorphic_type_variable(self, type: MappedType) -> Optional[TypeParameter]:
        constraint = type.clause.field("type")
        if constraint is not None and constraint.kind == "index_type_query":
            operand = self.get_type_from_type_node(constraint.children[0])
            if isinstance(operand, TypeParameter):
                return operand
        return None

    def get_modifiers_type_of_mapped_type(self, type: MappedType) -> Optional[Type]:
        """The type whose property modifiers a homomorphic mapped type copies."""
        constraint = type.clause.field("type")
        if constraint is None:
            return None
        if constraint.kind == "index_type_query":
            return self.instantiate_type(self.get_type_from_type_node(constraint.children[0]), type.mapper)
        declared = self.get_type_from_type_node(constraint)
        if isinstance(declared, TypeParameter):
            parameter_constraint = self.get_constraint_of_type_parameter(declared)
            if isinstance(parameter_constraint, IndexType):
                return self.instantiate_type(parameter_constraint.target, type.mapper)
        return None

    def _instantiate_mapped_type(self, type: MappedType, mapper: TypeMapper, alias_symbol, alias_type_arguments) -> Type:
        variable = self._homomorphic_type_variable(type)
        if variable is not None:
            mapped_variable = mapper.map(variable)
            if mapped_variable is not variable:
                def instantiate_for(t: Type) -> Type:
                    if t.flags & (TypeFlags.ANY_OR_UNKNOWN | TypeFlags.INSTANTIABLE | TypeFlags.OBJECT | TypeFlags.INTERSECTION):
                        return self._instantiate_mapped_for(type, t, MergedMapper(ArrayMapper([variable], [t]), mapper), alias_symbol, alias_type_arguments)
                    return t
                return self.map_type(mapped_variable, instantiate_for, alias_symbol, alias_type_arguments)
        return self._new_mapped_type(type, mapper, alias_symbol, alias_type_arguments)

    def _instantiate_mapped_for(self, type: MappedType, source: Type, mapper: TypeMapper, alias_symbol, alias_type_arguments) -> Type:
        if self.is_array_type(source) or isinstance(source, TupleType):
            return self._instantiate_mapped_array_like(type, source, mapper)
        return self._new_mapped_type(type, mapper, alias_symbol, alias_type_arguments)

    def _instantiate_mapped_array_like(self, type: MappedType, source: Type, mapper: TypeMapper) -> Type:
        readonly_modifier, optional_modifier = type.modifiers()
        template = self.get_type_from_type_node(self._mapped_template_node(type))

        def element_for(key: Type, optional: bool) -> Type:
            element = self.instantiate_type(template, MergedMapper(ArrayMapper([type.type_parameter], [key]), mapper))
            if optional_modifier == "+" or (optional and optional_modifier != "-"):
                return self.add_optionality(element) if optional_modifier == "+" else element
            return self.remove_undefined(element) if optional_modifier == "-" else element

        if isinstance(source, TupleType):
            flags = []
            elements = []
            for index, flag in enumerate(source.element_flags):
                optional = bool(flag & ElementFlags.OPTIONAL)
                key = self.number_type if flag & ElementFlags.REST else self.get_string_literal_type(str(index))
                elements.append(element_for(key, optional))
                if flag & ElementFlags.REST:
                    flags.append(ElementFlags.REST)
                elif optional_modifier == "+":
                    flags.append(ElementFlags.OPTIONAL)
                elif optional_modifier == "-":
                    flags.append(ElementFlags.REQUIRED)
                else:
                    flags.append(flag)
            readonly = source.readonly if readonly_modifier == "" else readonly_modifier == "+"
            return self.create_tuple_type(elements, flags, source.labels, readonly)

        readonly = self.is_readonly_array_type(source) if readonly_modifier == "" else readonly_modifier == "+"
        return self.create_array_type(element_for(self.number_type, False), readonly)

    def _new_mapped_type(self, type: MappedType, mapper: TypeMapper, alias_symbol, alias_type_arguments) -> MappedType:
        outer = self.get_outer_type_parameters(type.declaration)
        arguments = [mapper.map(p) for p in outer]
        key = ("mapped", type.declaration.key, tuple(t.id for t in arguments), self._alias_key(alias_symbol, alias_type_arguments))
        mapped = self._instantiations.get(key)
        if mapped is None:
            mapped = MappedType(self.next_type_id(), type.declaration, ArrayMapper(outer, arguments), type.type_parameter)
            self._set_alias(mapped, alias_symbol, alias_type_arguments)
            self._instantiations[key] = mapped
        return mapped

    def _resolve_mapped_members(self, type: MappedType) -> ResolvedMembers:
        members = ResolvedMembers()
        if self.is_generic_mapped_type(type):
            return members

        readonly_modifier, optional_modifier = type.modifiers()
        modifiers_type = self.get_modifiers_type_of_mapped_type(type)
        template = self.get_type_from_type_node(self._mapped_template_node(type)) if self._mapped_template_node(type) else self.any_type
        name_template = self.get_mapped_name_type(type)
        parameter = type.type_parameter

        def add_key(key_type: Type) -> None:
            key_mapper = MergedMapper(ArrayMapper([parameter], [key_type]), type.mapper)
            name_type = self.instantiate_type(name_template, key_mapper) if name_template is not None else key_type
            for name_member in self.union_members(name_type):
                if name_member.flags & (TypeFlags.STRING_LITERAL | TypeFlags.NUMBER_LITERAL):
                    name = self.literal_key(name_member)
                    if name in members.properties:
                        continue
                    source = self.get_property_of_type(modifiers_type, name) if modifiers_type is not None else None
                    optional = optional_modifier == "+" or (optional_modifier == "" and source is not None and source.is_optional)
                    readonly = readonly_modifier == "+" or (
                        readonly_modifier == "" and source is not None and bool(source.flags & SymbolFlags.READONLY)
                    )
                    flags = SymbolFlags.PROPERTY
                    if optional:
                        flags |= SymbolFlags.OPTIONAL
                    if readonly:
                        flags |= SymbolFlags.READONLY
                    symbol = Symbol(name, flags, list(source.declarations) if source is not None else [])
                    symbol.resolver = functools.partial(
                        self._mapped_property_type, template, key_mapper, optional, optional_modifier,
                    )
                    members.properties[name] = symbol
                elif name_member.flags & (TypeFlags.ANY | TypeFlags.STRING | TypeFlags.NUMBER | TypeFlags.ES_SYMBOL | TypeFlags.TEMPLATE_LITERAL):
                    index_key = self.string_type if name_member.flags & TypeFlags.ANY else name_member
                    if any(info.key_type is index_key for info in members.index_infos):
                        continue
                    value = self._mapped_property_type(template, key_mapper, optional_modifier == "+", optional_modifier)
                    members.index_infos.append(IndexInfo(index_key, value, readonly_modifier == "+"))

        constraint_node = type.clause.field("type")
        if constraint_node is not None and constraint_node.kind == "index_type_query" and modifiers_type is not None:
            for symbol in self.get_properties_of_type(modifiers_type):
                add_key(self._literal_type_for_name(symbol.name))
            for info in self.get_index_infos_of_type(modifiers_type):
                add_key(info.key_type)
        else:
            for key in self.union_members(self.get_constraint_type_of_mapped_type(type)):
                add_key(key)
        return members

    def _mapped_property_type(self, template: Type, mapper: TypeMapper, optional: bool, optional_modifier: str) -> Type:
        type = self.instantiate_type(template, mapper)
        if optional:
            return self.add_optionality(type)
        if optional_modifier == "-":
            return self.remove_undefined(type)
        return type

    # =========================================================================
    # Conditional Types
    # =========================================================================

    def _type_from_conditional(self, node: SyntaxNode, alias_symbol, alias_type_arguments) -> Type:
        root = self._get_conditional_root(node)
        return self._get_conditional_type_instantiation(root, None, alias_symbol, alias_type_arguments)

    def _get_conditional_root(self, node: SyntaxNode) -> ConditionalRoot:
        root = self._conditional_roots.get(node.key)
        if root is None:
            check_type = self.get_type_from_type_node(node.field("left"))
            infer_parameters = [self.get_type_parameter(n) for n in self._infer_declarations(node)]
            extends_type = self.get_type_from_type_node(node.field("right"))
            root = ConditionalRoot(
                node,
                check_type,
                extends_type,
                is_distributive=isinstance(check_type, TypeParameter),
                infer_type_parameters=infer_parameters,
                outer_type_parameters=self.get_outer_type_parameters(node),
            )
            self._conditional_roots[node.key] = root
        return root

    def _get_conditional_type_instantiation(self, root: ConditionalRoot, mapper: Optional[TypeMapper], alias_symbol=None, alias_type_arguments=None) -> Type:
        outer = root.outer_type_parameters
        arguments = [mapper.map(p) for p in outer] if mapper is not None else list(outer)
        key = ("conditional", root.node.key, tuple(t.id for t in arguments), self._alias_key(alias_symbol, alias_type_arguments))
        result = self._instantiations.get(key)
        if result is not None:
            return result

        new_mapper = ArrayMapper(outer, arguments) if outer else None
        check_variable = root.check_type
        distribution = new_mapper.map(check_variable) if new_mapper is not None and root.is_distributive else check_variable
        if root.is_distributive and distribution is not check_variable and distribution.flags & (TypeFlags.UNION | TypeFlags.NEVER):
            result = self.map_type(
                distribution,
                lambda t: self._get_conditional_type(root, MergedMapper(ArrayMapper([check_variable], [t]), new_mapper)),
                alias_symbol,
                alias_type_arguments,
            )
        else:
            result = self._get_conditional_type(root, new_mapper, alias_symbol, alias_type_arguments)
        self._instantiations[key] = result
        return result

    def _get_conditional_type(self, root: ConditionalRoot, mapper: Optional[TypeMapper], alias_symbol=None, alias_type_arguments=None) -> Type:
        check_type = self.instantiate_type(root.check_type, mapper)
        extends_type = self.instantiate_type(root.extends_type, mapper)
        infer_parameters = root.infer_type_parameters
        ignore = frozenset(p.id for p in infer_parameters)

        if self.could_contain_type_variables(check_type) or self.could_contain_type_variables(extends_type, ignore):
            deferred = ConditionalType(self.next_type_id(), root, mapper, check_type, extends_type)
            self._set_alias(deferred, alias_symbol, alias_type_arguments)
            return deferred

        combined = mapper
        if infer_parameters:
            inferred = self.infer_types(infer_parameters, check_type, extends_type)
            combined = MergedMapper(ArrayMapper(infer_parameters, inferred), mapper)
            extends_type = self.instantiate_type(root.extends_type, combined)

        true_type = lambda: self.instantiate_type(self.get_type_from_type_node(root.true_node), combined)
        false_type = lambda: self.instantiate_type(self.get_type_from_type_node(root.false_node), mapper)
        if check_type.flags & TypeFlags.ANY:
            return self.get_union_type([true_type(), false_type()])
        if self.is_type_assignable_to(check_type, extends_type):
            return true_type()
        return false_type()

    def get_conditional_branch_types(self, type: ConditionalType) -> Tuple[Type, Type]:
        root = type.root
        return (
            self.instantiate_type(self.get_type_from_type_node(root.true_node), type.mapper),
            self.instantiate_type(self.get_type_from_type_node(root.false_node), type.mapper),
        )

    # =========================================================================
    # Template Literal Types
    # =========================================================================

    def get_template_literal_type(self, texts: Sequence[str], types: Sequence[Type]) -> Type:
        if any(t.flags & TypeFlags.NEVER for t in types):
            return self.never_type
        if any(isinstance(t, UnionType) for t in types):
            groups = [self.union_members(t) for t in types]
            if math.prod(len(g) for g in groups) > MAX_CROSS_PRODUCT:
                return self.error("Expression produces a union type that is too complex to represent")
            return self.get_union_type(
                self.get_template_literal_type(texts, combination) for combination in itertools.product(*groups)
            )

        new_texts = [texts[0]]
        new_types: List[Type] = []
        for index, t in enumerate(types):
            following = texts[index + 1]
            if t.flags & (TypeFlags.LITERAL | TypeFlags.NULLABLE):
                new_texts[-1] += self._template_text(t) + following
            elif isinstance(t, TemplateLiteralType):
                new_texts[-1] += t.texts[0]
                new_types.extend(t.types)
                new_texts.extend(t.texts[1:])
                new_texts[-1] += following
            else:
                new_types.append(t)
                new_texts.append(following)

        if not new_types:
            return self.get_string_literal_type(new_texts[0])
        if len(new_types) == 1 and new_texts == ["", ""] and new_types[0].flags & TypeFlags.STRING:
            return self.string_type
        key = (tuple(new_texts), tuple(t.id for t in new_types))
        template = self._template_types.get(key)
        if template is None:
            template = TemplateLiteralType(self.next_type_id(), new_texts, new_types)
            self._template_types[key] = template
        return template

    def _template_text(self, type: Type) -> str:
        if type.flags & TypeFlags.UNDEFINED:
            return "undefined"
        if type.flags & TypeFlags.NULL:
            return "null"
        if type.flags & TypeFlags.BOOLEAN_LITERAL:
            return "true" if type.value else "false"
        return self.literal_key(type)

    def _is_template_match(self, value: str, template: TemplateLiteralType) -> bool:
        pattern = re.escape(template.texts[0])
        for placeholder, text in zip(template.types, template.texts[1:]):
            if placeholder.flags & TypeFlags.NUMBER:
                pattern += r"[-+]?(?:\d+\.?\d*(?:[eE][-+]?\d+)?|\.\d+|Infinity|NaN)"
            elif placeholder.flags & TypeFlags.BIGINT:
                pattern += r"-?\d+"
            else:
                pattern += r"(?s:.*?)"
            pattern += re.escape(text)
        return re.fullmatch(pattern, value) is not None

    # =========================================================================
    # String Mapping Types
    # =========================================================================

    def _is_intrinsic_alias(self, symbol: Symbol) -> bool:
        if symbol.name not in STRING_MAPPINGS:
            return False
        declaration = self._alias_declaration(symbol)
        value = declaration.field("value") if declaration is not None else None
        return value is not None and value.kind == "type_identifier" and value.text == "intrinsic"

    def get_string_mapping_type(self, symbol: Symbol, type: Type) -> Type:
        """Apply the intrinsic alias ``symbol`` to each string literal member of ``type``.

        ``string``, template literals and generic types stay wrapped until
        instantiation turns them into literals.
        """
        if isinstance(type, UnionType):
            return self.map_type(type, lambda t: self.get_string_mapping_type(symbol, t))
        if type.flags & TypeFlags.STRING_LITERAL:
            return self.get_string_literal_type(STRING_MAPPINGS[symbol.name](type.value))
        if type.flags & (TypeFlags.ANY | TypeFlags.NEVER):
            return type
        if type.flags & (TypeFlags.STRING | TypeFlags.TEMPLATE_LITERAL | TypeFlags.STRING_MAPPING) or self.is_generic(type):
            key = (symbol.id, type.id)
            mapping = self._string_mapping_types.get(key)
            if mapping is None:
                mapping = StringMappingType(self.next_type_id(), symbol, type)
                self._string_mapping_types[key] = mapping
            return mapping
        return type

    # =========================================================================
    # Instantiation
    # =========================================================================

    def combine_mappers(self, first: Optional[TypeMapper], second: Optional[TypeMapper]) -> Optional[TypeMapper]:
        if first is None:
            return second
        if second is None:
            return first
        return CompositeMapper(first, second, self.instantiate_type)

    def could_contain_type_variables(self, type: Type, ignore: FrozenSet[int] = frozenset()) -> bool:
        if not ignore and type.id in self._contains_type_variables:
            return self._contains_type_variables[type.id]
        result = self._could_contain_worker(type, ignore, set())
        if not ignore:
            self._contains_type_variables[type.id] = result
        return result

    def _could_contain_worker(self, type: Type, ignore: FrozenSet[int], visiting: Set[int]) -> bool:
        if type.id in visiting:
            return False
        visiting.add(type.id)
        if isinstance(type, TypeParameter):
            return type.id not in ignore
        if type.flags & (TypeFlags.INDEX | TypeFlags.INDEXED_ACCESS | TypeFlags.CONDITIONAL):
            return True
        if type.alias_type_arguments and any(self._could_contain_worker(t, ignore, visiting) for t in type.alias_type_arguments):
            return True
        if isinstance(type, (UnionOrIntersectionType, TemplateLiteralType)):
            return any(self._could_contain_worker(t, ignore, visiting) for t in type.types)
        if isinstance(type, StringMappingType):
            return self._could_contain_worker(type.type, ignore, visiting)
        if isinstance(type, TupleType):
            return any(self._could_contain_worker(t, ignore, visiting) for t in type.element_types)
        if isinstance(type, TypeReference):
            return any(self._could_contain_worker(t, ignore, visiting) for t in type.type_arguments)
        if isinstance(type, (AnonymousType, MappedType)) and type.declaration is not None:
            outer = self.get_outer_type_parameters(type.declaration)
            if type.mapper is None:
                return any(p.id not in ignore for p in outer)
            return any(self._could_contain_worker(type.mapper.map(p), ignore, visiting) for p in outer)
        return False

    def instantiate_type(
        self,
        type: Optional[Type],
        mapper: Optional[TypeMapper],
        alias_symbol: Optional[Symbol] = None,
        alias_type_arguments: Optional[Sequence[Type]] = None,
    ) -> Optional[Type]:
        """Apply ``mapper`` to the type parameters referenced by ``type``."""
        if type is None or mapper is None or not self.could_contain_type_variables(type):
            return type
        if self._instantiation_depth >= MAX_INSTANTIATION_DEPTH:
            return self.error("Type instantiation is excessively deep and possibly infinite")
        self._instantiation_depth += 1
        try:
            return self._instantiate_worker(type, mapper, alias_symbol, alias_type_arguments)
        finally:
            self._instantiation_depth -= 1

    def _instantiate_alias_arguments(self, type: Type, mapper: TypeMapper, alias_symbol, alias_type_arguments):
        if alias_symbol is not None:
            return alias_symbol, alias_type_arguments
        if type.alias_symbol is None:
            return None, None
        arguments = [self.instantiate_type(t, mapper) for t in type.alias_type_arguments or ()]
        return type.alias_symbol, arguments or None

    def _instantiate_worker(self, type: Type, mapper: TypeMapper, alias_symbol, alias_type_arguments) -> Type:
        if isinstance(type, TypeParameter):
            return mapper.map(type)

        if isinstance(type, TupleType):
            elements: List[Type] = []
            flags: List[ElementFlags] = []
            labels: List[Optional[str]] = []
            for element, flag, label in zip(type.element_types, type.element_flags, type.labels):
                instantiated = self.instantiate_type(element, mapper)
                if flag & ElementFlags.REST and isinstance(element, TypeParameter):
                    # A variadic element spreads whatever it is instantiated to
                    self._push_rest_element(elements, flags, labels, instantiated, label)
                else:
                    elements.append(instantiated)
                    flags.append(flag)
                    labels.append(label)
            return self.create_tuple_type(elements, flags, labels, type.readonly)

        if isinstance(type, TypeReference):
            target = type.target
            return self.create_type_reference(target, [self.instantiate_type(t, mapper) for t in type.type_arguments])

        if isinstance(type, (AnonymousType, MappedType)):
            alias_symbol, alias_type_arguments = self._instantiate_alias_arguments(type, mapper, alias_symbol, alias_type_arguments)
            return self._get_object_type_instantiation(type, mapper, alias_symbol, alias_type_arguments)

        if isinstance(type, UnionType):
            alias_symbol, alias_type_arguments = self._instantiate_alias_arguments(type, mapper, alias_symbol, alias_type_arguments)
            return self.get_union_type([self.instantiate_type(t, mapper) for t in type.types], alias_symbol, alias_type_arguments)

        if isinstance(type, IntersectionType):
            alias_symbol, alias_type_arguments = self._instantiate_alias_arguments(type, mapper, alias_symbol, alias_type_arguments)
            return self.get_intersection_type([self.instantiate_type(t, mapper) for t in type.types], alias_symbol, alias_type_arguments)

        if isinstance(type, IndexType):
            return self.get_index_type(self.instantiate_type(type.target, mapper))

        if isinstance(type, IndexedAccessType):
            return self.get_indexed_access_type(
                self.instantiate_type(type.object_type, mapper), self.instantiate_type(type.index_type, mapper),
            )

        if isinstance(type, ConditionalType):
            alias_symbol, alias_type_arguments = self._instantiate_alias_arguments(type, mapper, alias_symbol, alias_type_arguments)
            return self._get_conditional_type_instantiation(
                type.root, self.combine_mappers(type.mapper, mapper), alias_symbol, alias_type_arguments,
            )

        if isinstance(type, TemplateLiteralType):
            return self.get_template_literal_type(type.texts, [self.instantiate_type(t, mapper) for t in type.types])

        if isinstance(type, StringMappingType):
            return self.get_string_mapping_type(type.symbol, self.instantiate_type(type.type, mapper))

        return type

    def _get_object_type_instantiation(self, type, mapper: TypeMapper, alias_symbol, alias_type_arguments) -> Type:
        declaration = type.declaration
        outer = self.get_outer_type_parameters(declaration)
        if not outer:
            return type
        combined = self.combine_mappers(type.mapper, mapper)
        arguments = [combined.map(p) for p in outer]
        new_mapper = ArrayMapper(outer, arguments)

        if isinstance(type, MappedType):
            return self._instantiate_mapped_type(type, new_mapper, alias_symbol, alias_type_arguments)

        key = ("object", declaration.key, tuple(t.id for t in arguments), self._alias_key(alias_symbol, alias_type_arguments))
        instantiated = self._instantiations.get(key)
        if instantiated is None:
            instantiated = AnonymousType(self.next_type_id(), declaration, new_mapper, type.object_flags, type.symbol)
            self._set_alias(instantiated, alias_symbol, alias_type_arguments)
            self._instantiations[key] = instantiated
        return instantiated

    # =========================================================================
    # Assignability
    # =========================================================================

    def is_type_assignable_to(self, source: Type, target: Type) -> bool:
        if source is target:
            return True
        key = (source.id, target.id)
        cached = self._assignable_cache.get(key)
        if cached is not None:
            return cached
        if key in self._relation_stack:
            # Assume related while the same pair is being compared
            return True
        self._relation_stack.add(key)
        try:
            result = self._is_related(source, target)
        finally:
            self._relation_stack.discard(key)
        if not self._relation_stack:
            self._assignable_cache[key] = result
        return result

    def _is_related(self, source: Type, target: Type) -> bool:
        s, t = source.flags, target.flags
        if t & TypeFlags.ANY_OR_UNKNOWN or s & TypeFlags.NEVER:
            return True
        if s & TypeFlags.ANY:
            return not t & TypeFlags.NEVER
        if t & TypeFlags.NEVER:
            return False

        if isinstance(source, UnionType):
            return all(self.is_type_assignable_to(m, target) for m in source.types)
        if isinstance(target, UnionType):
            return any(self.is_type_assignable_to(source, m) for m in target.types)
        if isinstance(target, IntersectionType):
            return all(self.is_type_assignable_to(source, m) for m in target.types)
        if isinstance(source, IntersectionType):
            if any(self.is_type_assignable_to(m, target) for m in source.types):
                return True
            return bool(t & TypeFlags.OBJECT) and self._is_structurally_related(source, target)

        if s & TypeFlags.UNDEFINED:
            return bool(t & (TypeFlags.UNDEFINED | TypeFlags.VOID)) or not self.strict_null_checks
        if s & TypeFlags.NULL:
            return bool(t & TypeFlags.NULL) or not self.strict_null_checks
        if s & TypeFlags.STRING_LITERAL:
            if t & TypeFlags.STRING:
                return True
            if isinstance(target, TemplateLiteralType):
                return self._is_template_match(source.value, target)
        if s & TypeFlags.NUMBER_LITERAL and t & TypeFlags.NUMBER:
            return True
        if s & TypeFlags.BIGINT_LITERAL and t & TypeFlags.BIGINT:
            return True
        if s & (TypeFlags.TEMPLATE_LITERAL | TypeFlags.STRING_MAPPING) and t & TypeFlags.STRING:
            return True
        if s & TypeFlags.LITERAL and t & TypeFlags.LITERAL:
            return source is target
        for primitive in (TypeFlags.STRING, TypeFlags.NUMBER, TypeFlags.BIGINT, TypeFlags.ES_SYMBOL, TypeFlags.VOID):
            if s & primitive:
                if t & primitive:
                    return True
                break

        if isinstance(source, TypeParameter):
            constraint = self.get_constraint_of_type_parameter(source)
            return constraint is not None and self.is_type_assignable_to(constraint, target)
        if s & (TypeFlags.INDEX | TypeFlags.INDEXED_ACCESS | TypeFlags.CONDITIONAL):
            return False

        if t & TypeFlags.NON_PRIMITIVE:
            return bool(s & (TypeFlags.OBJECT | TypeFlags.NON_PRIMITIVE))
        if t & TypeFlags.OBJECT:
            if s & TypeFlags.PRIMITIVE:
                return self.resolve_structured_type_members(target).is_empty
            if s & TypeFlags.NON_PRIMITIVE:
                return self.resolve_structured_type_members(target).is_empty
            if s & TypeFlags.OBJECT:
                return self._is_structurally_related(source, target)
        return False

    def _is_structurally_related(self, source: Type, target: Type) -> bool:
        if isinstance(source, TypeReference) and isinstance(target, TypeReference) and source.target is target.target:
            return all(self.is_type_assignable_to(a, b) for a, b in zip(source.type_arguments, target.type_arguments))

        target_element = self.get_element_type_of_array_like(target)
        if target_element is not None and not isinstance(target, TupleType):
            source_element = self.get_element_type_of_array_like(source)
            if source_element is not None:
                source_readonly = self.is_readonly_array_type(source) or (isinstance(source, TupleType) and source.readonly)
                if source_readonly and not self.is_readonly_array_type(target):
                    return False
                return self.is_type_assignable_to(source_element, target_element)

        if isinstance(target, TupleType):
            if not isinstance(source, TupleType):
                return False
            if source.readonly and not target.readonly:
                return False
            if len(source.element_types) < target.min_length:
                return False
            if not target.has_rest and len(source.element_types) > len(target.element_types):
                return False
            for index, element in enumerate(source.element_types):
                if index < len(target.element_types):
                    expected = target.element_types[index]
                elif target.has_rest:
                    expected = target.element_types[-1]
                else:
                    return False
                if not self.is_type_assignable_to(element, expected):
                    return False
            return True

        for target_property in self.get_properties_of_type(target):
            source_property = self.get_property_of_type(source, target_property.name)
            if source_property is None:
                if target_property.is_optional:
                    continue
                return False
            if source_property.is_optional and not target_property.is_optional:
                return False
            if not self.is_type_assignable_to(self.get_type_of_symbol(source_property), self.get_type_of_symbol(target_property)):
                return False

        for construct in (False, True):
            target_signatures = self.get_signatures_of_type(target, construct)
            if not target_signatures:
                continue
            source_signatures = self.get_signatures_of_type(source, construct)
            if not source_signatures:
                return False
            for target_signature in target_signatures:
                if not any(self._is_signature_related(s, target_signature) for s in source_signatures):
                    return False

        for info in self.get_index_infos_of_type(target):
            source_info = self.get_applicable_index_info(source, info.key_type)
            if source_info is not None:
                if not self.is_type_assignable_to(source_info.type, info.type):
                    return False
                continue
            if not isinstance(source, (AnonymousType, MappedType, IntersectionType)):
                return False
            for prop in self.get_properties_of_type(source):
                if not self.is_type_assignable_to(self.get_type_of_symbol(prop), info.type):
                    return False
        return True

    def _is_signature_related(self, source: Signature, target: Signature) -> bool:
        target_return = self.get_return_type_of_signature(target)
        if not target_return.flags & TypeFlags.VOID:
            if not self.is_type_assignable_to(self.get_return_type_of_signature(source), target_return):
                return False
        target_count = len(target.parameters)
        if source.min_argument_count > target_count and not target.has_rest_parameter:
            return False
        for index, parameter in enumerate(source.parameters):
            if parameter.flags & SymbolFlags.PARAMETER and index >= target_count and not target.has_rest_parameter:
                break
            target_parameter = target.parameters[min(index, target_count - 1)] if target_count else None
            if target_parameter is None:
                break
            source_type = self.get_type_of_symbol(parameter)
            target_type = self.get_type_of_symbol(target_parameter)
            if target_parameter is target.parameters[-1] and target.has_rest_parameter:
                element = self.get_element_type_of_array_like(target_type)
                if element is None:
                    continue
                target_type = element
            if source_type.flags & TypeFlags.ANY or target_type.flags & TypeFlags.ANY:
                continue
            # Parameters compare bivariantly
            if not (self.is_type_assignable_to(target_type, source_type) or self.is_type_assignable_to(source_type, target_type)):
                return False
        return True

    # =========================================================================
    # Inference
    # =========================================================================

    def infer_types(self, type_parameters: Sequence[TypeParameter], source: Type, target: Type) -> List[Type]:
        """Infer ``type_parameters`` by matching ``source`` against ``target``."""
        candidates: Dict[int, List[Type]] = {p.id: [] for p in type_parameters}
        visited: Set[Tuple[int, int]] = set()

        def add_candidate(parameter: Type, candidate: Type) -> None:
            found = candidates[parameter.id]
            if candidate not in found:
                found.append(candidate)

        def infer(s: Type, t: Type) -> None:
            if not self.could_contain_type_variables(t):
                return
            if isinstance(t, TypeParameter):
                if t.id in candidates:
                    add_candidate(t, s)
                return
            key = (s.id, t.id)
            if key in visited:
                return
            visited.add(key)

            if isinstance(t, UnionType):
                naked = [m for m in t.types if m.id in candidates]
                fixed = [m for m in t.types if m.id not in candidates]
                remaining = [m for m in self.union_members(s) if not any(m is f for f in fixed)]
                for member in fixed:
                    infer(s, member)
                if naked and remaining:
                    for parameter in naked:
                        infer(self.get_union_type(remaining), parameter)
                return
            if isinstance(t, IntersectionType):
                for member in t.types:
                    infer(s, member)
                return
            if isinstance(s, UnionType) and not s.flags & TypeFlags.BOOLEAN:
                for member in s.types:
                    infer(member, t)
                return
            if isinstance(t, TemplateLiteralType) or s.flags & TypeFlags.PRIMITIVE:
                return
            if isinstance(s, TypeReference) and isinstance(t, TypeReference) and s.target is t.target:
                for a, b in zip(s.type_arguments, t.type_arguments):
                    infer(a, b)
                return
            target_element = self.get_element_type_of_array_like(t)
            if target_element is not None and not isinstance(t, TupleType):
                source_element = self.get_element_type_of_array_like(s)
                if source_element is not None:
                    infer(source_element, target_element)
                return
            if isinstance(s, TupleType) and isinstance(t, TupleType):
                for a, b in zip(s.element_types, t.element_types):
                    infer(a, b)
                return
            if isinstance(t, (ObjectType, IntersectionType)) and isinstance(s, (ObjectType, IntersectionType)):
                for target_property in self.get_properties_of_type(t):
                    source_property = self.get_property_of_type(s, target_property.name)
                    if source_property is not None:
                        infer(self.get_type_of_symbol(source_property), self.get_type_of_symbol(target_property))
                for construct in (False, True):
                    source_signatures = self.get_signatures_of_type(s, construct)
                    target_signatures = self.get_signatures_of_type(t, construct)
                    if source_signatures and target_signatures:
                        infer_signatures(source_signatures[-1], target_signatures[-1])
                for info in self.get_index_infos_of_type(t):
                    source_info = self.get_applicable_index_info(s, info.key_type)
                    if source_info is not None:
                        infer(source_info.type, info.type)

        def infer_signatures(source_signature: Signature, target_signature: Signature) -> None:
            # Infer through the erased form of a generic source
            source_signature = self.get_base_signature(source_signature)
            target_parameters = target_signature.parameters
            for index, parameter in enumerate(target_parameters):
                target_type = self.get_type_of_symbol(parameter)
                if target_signature.has_rest_parameter and index == len(target_parameters) - 1:
                    rest = source_signature.parameters[index:]
                    tuple_type = self.create_tuple_type(
                        [self.get_type_of_symbol(p) for p in rest],
                        [ElementFlags.OPTIONAL if p.is_optional else ElementFlags.REQUIRED for p in rest],
                        [p.name for p in rest],
                    )
                    infer(tuple_type, target_type)
                elif index < len(source_signature.parameters):
                    infer(self.get_type_of_symbol(source_signature.parameters[index]), target_type)
            infer(self.get_return_type_of_signature(source_signature), self.get_return_type_of_signature(target_signature))

        infer(source, target)
        inferred = []
        for parameter in type_parameters:
            found = candidates[parameter.id]
            if not found:
                inferred.append(self.unknown_type)
            else:
                inferred.append(self.get_union_type(found))
        return inferred


def _is_numeric_literal_name(name: object) -> bool:
    if not isinstance(name, str):
        return False
    try:
        return format_number(parse_number(name)) == name
    except ValueError:
        return False


def _is_accessor(member: SyntaxNode) -> bool:
    return member.kind in METHOD_KINDS and (member.has_token("get") or member.has_token("set"))


def _is_public(member: SyntaxNode) -> bool:
    modifier = member.first("accessibility_modifier")
    return modifier is None or modifier.text == "public"
