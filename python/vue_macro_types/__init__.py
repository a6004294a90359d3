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
"""Expand the type argument of Vue's defineProps<T>() into an inline type literal.

A build-pipeline transform for single-file components: the symbolic props
type in ``<script setup lang="ts">`` is resolved with a TypeScript type
checker and written back as a structural literal, such as
``{ name: string; age?: undefined | number }``.
"""

from vue_macro_types.config import CompilerOptions, MacroTypesOptions
from vue_macro_types.errors import ConfigError, EditError, InvalidByteOffsetError, MacroTypesError
from vue_macro_types.parsing import LocatedArgument, create_byte_to_char_converter, locate_call_site
from vue_macro_types.plugin import TransformFilter, TransformResult, VueMacroTypes, vue_macro_types
from vue_macro_types.resolver import TypeHandle, resolve_type_argument
from vue_macro_types.rewriter import RewriteResult, SourceEditor, SourceMap, rewrite
from vue_macro_types.serializer import serialize_type
from vue_macro_types.service import SessionManager, VirtualUnit
from vue_macro_types.sfc import SFCBlock, SFCDescriptor, parse_sfc

__version__ = "0.1.0"

__all__ = [
    "CompilerOptions",
    "MacroTypesOptions",
    "ConfigError",
    "EditError",
    "InvalidByteOffsetError",
    "MacroTypesError",
    "LocatedArgument",
    "create_byte_to_char_converter",
    "locate_call_site",
    "TransformFilter",
    "TransformResult",
    "VueMacroTypes",
    "vue_macro_types",
    "TypeHandle",
    "resolve_type_argument",
    "RewriteResult",
    "SourceEditor",
    "SourceMap",
    "rewrite",
    "serialize_type",
    "SessionManager",
    "VirtualUnit",
    "SFCBlock",
    "SFCDescriptor",
    "parse_sfc",
]
