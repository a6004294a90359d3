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
"""Resolution of the macro's type argument through the checker.

The locator works on its own parse of the script block; here the same
position is found again in the language service's parse of the virtual
unit, and the argument node is handed to the checker.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from vue_macro_types.checker.checker import TypeChecker
from vue_macro_types.checker.program import LanguageService
from vue_macro_types.checker.syntax import SyntaxNode
from vue_macro_types.checker.types import Type
from vue_macro_types.config import DEFAULT_FUNCTION_NAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeHandle:
    """A resolved type and the checker that can answer questions about it."""
    type: Type
    checker: TypeChecker


def _macro_type_argument(node: SyntaxNode, function_name: str) -> Optional[SyntaxNode]:
    if node.kind != "call_expression":
        return None
    callee = node.field("function")
    if callee is None or callee.kind != "identifier" or callee.text != function_name:
        return None
    type_arguments = node.field("type_arguments")
    if type_arguments is None:
        return None
    arguments = type_arguments.children
    return arguments[0] if len(arguments) == 1 else None


def resolve_type_argument(
    service: LanguageService,
    unit_name: str,
    char_offset: int,
    function_name: str = DEFAULT_FUNCTION_NAME,
) -> Optional[TypeHandle]:
    """Resolve the type argument of the macro call at ``char_offset``.

    Only nodes whose range contains ``char_offset`` are visited, so the walk
    is proportional to the depth of the tree rather than its size.

    Args:
        service: Language service holding the unit
        unit_name: Name of the virtual unit the script was registered under
        char_offset: Character offset of the type argument in the unit
        function_name: Name of the macro

    Returns:
        The resolved type, or None if the unit is unknown or no macro call
        lies on the path to ``char_offset``.
    """
    program = service.get_program()
    source_file = program.get_source_file(unit_name)
    if source_file is None:
        logger.debug(f"No source file for {unit_name}")
        return None

    node: Optional[SyntaxNode] = source_file.root
    while node is not None:
        argument = _macro_type_argument(node, function_name)
        if argument is not None:
            checker = program.get_type_checker()
            return TypeHandle(checker.get_type_from_type_node(argument), checker)
        node = node.child_containing(char_offset)
    return None
