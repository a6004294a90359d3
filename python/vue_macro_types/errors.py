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
"""Exception hierarchy for vue-macro-types.

Only usage errors and explicit configuration errors are raised. Everything
that can go wrong while transforming a component (syntax errors, missing
calls, unresolvable names) degrades to a no-op at the plugin boundary.
"""

from __future__ import annotations

from typing import Optional


class MacroTypesError(Exception):
    """Base class for all vue-macro-types errors."""


class InvalidByteOffsetError(MacroTypesError, ValueError):
    """A byte offset fell outside the text it was converted against."""

    def __init__(self, offset: int, length: Optional[int] = None):
        self.offset = offset
        self.length = length
        detail = f" (text is {length} bytes)" if length is not None else ""
        super().__init__(f"[vue-macro-types] Invalid byte offset: {offset}{detail}")


class ConfigError(MacroTypesError):
    """An explicitly configured tsconfig.json could not be loaded."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"Failed to load '{path}': {message}")


class EditError(MacroTypesError, ValueError):
    """An edit range is out of bounds or overlaps an earlier edit."""
