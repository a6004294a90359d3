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
"""tree-sitter TypeScript parsing helpers.

- base: grammar loading and syntax error collection
- offsets: byte offset to character offset conversion
- locator: call-site location of the props macro
"""

from vue_macro_types.parsing.base import parse_typescript, collect_syntax_errors
from vue_macro_types.parsing.offsets import create_byte_to_char_converter
from vue_macro_types.parsing.locator import LocatedArgument, locate_call_site

__all__ = [
    "parse_typescript",
    "collect_syntax_errors",
    "create_byte_to_char_converter",
    "LocatedArgument",
    "locate_call_site",
]
