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
"""Build-pipeline entry point.

``VueMacroTypes.transform`` takes a component's source and id and returns
the rewritten source with a source map, or None when there is nothing to
do. It never raises: any failure is logged and the component passes
through unchanged.

Example:
    >>> plugin = VueMacroTypes()
    >>> plugin.build_start()
    >>> result = plugin.transform(code, "/src/components/Card.vue")
    >>> result.code if result else code
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Optional, Pattern

from vue_macro_types.config import MacroTypesOptions
from vue_macro_types.errors import MacroTypesError
from vue_macro_types.parsing.locator import locate_call_site
from vue_macro_types.resolver import resolve_type_argument
from vue_macro_types.rewriter import SourceMap, rewrite
from vue_macro_types.serializer import serialize_type
from vue_macro_types.service.session import SessionManager
from vue_macro_types.sfc import parse_sfc

logger = logging.getLogger(__name__)

PLUGIN_NAME = "vue-macro-types"
WARMUP_FILE_NAME = "__warmup__.ts"


@dataclass(frozen=True)
class TransformResult:
    code: str
    map: SourceMap


@dataclass(frozen=True)
class TransformFilter:
    """Cheap pre-checks a host can run before calling ``transform``.

    Attributes:
        id: Matched against the module id
        code: Matched against the module source
    """
    id: Pattern[str] = field(default_factory=lambda: re.compile(r"\.vue$"))
    code: Pattern[str] = field(default_factory=lambda: re.compile(r"defineProps\s*<"))

    def matches(self, code: str, id: str) -> bool:
        return bool(self.id.search(id) and self.code.search(code))


class VueMacroTypes:
    """Expands the type argument of ``defineProps<T>()`` into a type literal.

    Attributes:
        name: Plugin name reported to the host
        order: Runs before other transforms of the same module
        filter: Pre-filters for module ids and sources
        sessions: The type-checking session shared by every transform
    """

    name = PLUGIN_NAME
    order = "pre"

    def __init__(self, options: Optional[MacroTypesOptions] = None, sessions: Optional[SessionManager] = None) -> None:
        self.options = options or MacroTypesOptions()
        self.sessions = sessions or SessionManager(self.options)
        self.filter = TransformFilter(code=re.compile(re.escape(self.options.function_name) + r"\s*<"))

    def build_start(self) -> None:
        """Build the session ahead of the first transform."""
        try:
            self.sessions.get_session(os.path.join(os.getcwd(), WARMUP_FILE_NAME))
        except MacroTypesError as e:
            logger.warning(f"[{PLUGIN_NAME}] Failed to start type-checking session: {e}")

    def transform(self, code: str, id: str) -> Optional[TransformResult]:
        """Rewrite the macro's type argument in the component ``id``.

        Returns:
            The rewritten code and its source map, or None when the
            component has no ``<script setup lang="ts">`` block, no matching
            call, or anything goes wrong on the way
        """
        try:
            return self._transform(code, id)
        except Exception as e:
            logger.warning(f"[{PLUGIN_NAME}] Failed to transform {id}: {e}")
            logger.debug("Transform failure", exc_info=True)
            return None

    def _transform(self, code: str, id: str) -> Optional[TransformResult]:
        descriptor = parse_sfc(code, id)
        script_setup = descriptor.script_setup
        if script_setup is None or script_setup.lang != "ts":
            return None

        function_name = self.options.function_name
        located = locate_call_site(script_setup.content, function_name)
        if located is None:
            return None

        unit_name = os.path.normpath(id + self.options.virtual_suffix)
        with self.sessions.lock:
            self.sessions.upsert_unit(unit_name, script_setup.content)
            service = self.sessions.get_session(id)
            handle = resolve_type_argument(service, unit_name, located.start_offset, function_name)
            if handle is None:
                return None
            literal = serialize_type(handle.type, handle.checker)

        logger.debug(f"{id}: {located.raw_text} -> {literal}")
        result = rewrite(code, script_setup.start, located.start_offset, located.end_offset, literal, source=id)
        return TransformResult(code=result.code, map=result.map)


def vue_macro_types(options: Optional[MacroTypesOptions] = None) -> VueMacroTypes:
    """Create a plugin instance with its own type-checking session."""
    return VueMacroTypes(options)
