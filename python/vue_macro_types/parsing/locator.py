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
"""Call-site location for the props macro.

Finds the first ``defineProps<T>()`` style call in a script block and
reports the character range of its single type argument. Only the first
call in document order is considered; later calls are left untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from tree_sitter import Node

from vue_macro_types.config import DEFAULT_FUNCTION_NAME
from vue_macro_types.parsing.base import collect_syntax_errors, parse_typescript
from vue_macro_types.parsing.offsets import ByteToChar, create_byte_to_char_converter

logger = logging.getLogger(__name__)

# Child-holding fields per node kind, in source order. ``None`` stands for
# the unnamed named children. Kinds absent from the table (comments,
# strings, template strings, types and type declarations) are leaves.
_CHILD_FIELDS: Dict[str, Tuple[Optional[str], ...]] = {
    "program": (None,),
    "statement_block": (None,),
    "expression_statement": (None,),
    "lexical_declaration": (None,),
    "variable_declaration": (None,),
    "variable_declarator": ("name", "value"),
    "object_pattern": (None,),
    "array_pattern": (None,),
    "pair_pattern": ("value",),
    "object_assignment_pattern": ("right",),
    "assignment_pattern": ("right",),
    "export_statement": ("declaration", "value"),
    "if_statement": ("condition", "consequence", "alternative"),
    "else_clause": (None,),
    "for_statement": ("initializer", "condition", "increment", "body"),
    "for_in_statement": ("left", "right", "body"),
    "while_statement": ("condition", "body"),
    "do_statement": ("body", "condition"),
    "try_statement": ("body", "handler", "finalizer"),
    "catch_clause": ("body",),
    "finally_clause": ("body",),
    "switch_statement": ("value", "body"),
    "switch_body": (None,),
    "switch_case": ("value", "body"),
    "switch_default": ("body",),
    "labeled_statement": ("body",),
    "return_statement": (None,),
    "throw_statement": (None,),
    "function_declaration": ("body",),
    "generator_function_declaration": ("body",),
    "function_expression": ("body",),
    "generator_function": ("body",),
    "arrow_function": ("body",),
    "class_declaration": ("body",),
    "class": ("body",),
    "class_body": (None,),
    "method_definition": ("body",),
    "public_field_definition": ("value",),
    "call_expression": ("function", "arguments"),
    "new_expression": ("constructor", "arguments"),
    "arguments": (None,),
    "member_expression": ("object",),
    "subscript_expression": ("object", "index"),
    "assignment_expression": ("left", "right"),
    "augmented_assignment_expression": ("left", "right"),
    "binary_expression": ("left", "right"),
    "unary_expression": ("argument",),
    "update_expression": ("argument",),
    "ternary_expression": ("condition", "consequence", "alternative"),
    "await_expression": (None,),
    "yield_expression": (None,),
    "parenthesized_expression": (None,),
    "sequence_expression": (None,),
    "spread_element": (None,),
    "array": (None,),
    "object": (None,),
    "pair": ("value",),
    "as_expression": (None,),
    "satisfies_expression": (None,),
    "non_null_expression": (None,),
    "type_assertion": (None,),
}



@dataclass(frozen=True, slots=True)
class LocatedArgument:
    """The type argument of a located macro call.

    Attributes:
        raw_text: Source text of the type argument
        start_offset: Character offset of its first character in the script
        end_offset: Character offset one past its last character
    """
    raw_text: str
    start_offset: int
    end_offset: int


def single_type_argument(call: Node, function_name: str) -> Optional[Node]:
    """Return the type argument of ``call`` if it is ``function_name<T>(...)``."""
    if call.type != "call_expression":
        return None
    callee = call.child_by_field_name("function")
    if callee is None or callee.type != "identifier" or callee.text.decode("utf-8") != function_name:
        return None
    type_arguments = call.child_by_field_name("type_arguments")
    if type_arguments is None:
        return None
    arguments = [child for child in type_arguments.named_children if child.type != "comment"]
    if len(arguments) != 1:
        return None
    return arguments[0]


def _child_nodes(node: Node) -> List[Node]:
    fields = _CHILD_FIELDS.get(node.type)
    if fields is None:
        return []
    children: List[Node] = []
    for field in fields:
        if field is None:
            children.extend(node.named_children)
        else:
            children.extend(node.children_by_field_name(field))
    children.sort(key=lambda child: child.start_byte)
    return children


def _find_first(root: Node, function_name: str) -> Optional[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        argument = single_type_argument(node, function_name)
        if argument is not None:
            return argument
        # Reversed so that children pop in document order
        stack.extend(reversed(_child_nodes(node)))
    return None



def locate_call_site(
    script_text: str,
    function_name: str = DEFAULT_FUNCTION_NAME,
) -> Optional[LocatedArgument]:
    """Locate the type argument of the first ``function_name<T>()`` call.

    Args:
        script_text: Contents of the ``<script setup>`` block
        function_name: Name of the macro to look for

    Returns:
        The located argument, or None when the script has syntax errors or
        holds no matching call.
    """
    tree = parse_typescript(script_text)
    root = tree.root_node
    if root.has_error:
        errors = collect_syntax_errors(root)
        logger.warning(f"[vue-macro-types] Syntax errors in script block: {errors}")
        return None

    argument = _find_first(root, function_name)
    if argument is None:
        return None

    to_char: ByteToChar = create_byte_to_char_converter(script_text)
    start = to_char(argument.start_byte)
    end = to_char(argument.end_byte)
    return LocatedArgument(raw_text=script_text[start:end], start_offset=start, end_offset=end)
