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
"""The type-checking session shared by one plugin instance.

The session is built on first use: compiler options are resolved once from
the first context path seen, and every later call returns the same language
service. Virtual units are updated through ``upsert_unit``; the language
service picks the new versions up on its next ``get_program``.

All access goes through ``SessionManager.lock``, a re-entrant lock, so a
caller can hold it across "update, resolve, serialize" while the methods
below take it again.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Optional

from vue_macro_types.checker.program import DocumentRegistry, LanguageService
from vue_macro_types.config import MacroTypesOptions, resolve_compiler_options
from vue_macro_types.service.host import ScriptRegistry, ServiceHost, VirtualUnit

logger = logging.getLogger(__name__)


class SessionManager:
    """Owns the registry of virtual units and the lazily built language service.

    Example:
        >>> manager = SessionManager()
        >>> manager.upsert_unit("/src/App.vue.__setup.ts", "const a = 1")
        VirtualUnit(name='/src/App.vue.__setup.ts', content='const a = 1', version=0)
        >>> service = manager.get_session("/src/App.vue")
    """

    def __init__(self, options: Optional[MacroTypesOptions] = None) -> None:
        self.options = options or MacroTypesOptions()
        self.lock = threading.RLock()
        self.registry = ScriptRegistry()
        self._documents = DocumentRegistry()
        self._service: Optional[LanguageService] = None

    @property
    def has_session(self) -> bool:
        return self._service is not None

    def get_session(self, context_path: str) -> LanguageService:
        """Return the language service, building it on the first call.

        Raises:
            ConfigError: If an explicitly configured tsconfig cannot be loaded
        """
        with self.lock:
            if self._service is None:
                compiler_options = resolve_compiler_options(context_path, self.options)
                host = ServiceHost(self.registry, compiler_options, os.getcwd())
                self._service = LanguageService(host, self._documents)
                logger.debug(f"Created type-checking session for {context_path}")
            return self._service

    def upsert_unit(self, name: str, content: str) -> VirtualUnit:
        with self.lock:
            unit = self.registry.upsert(os.path.normpath(name), content)
            logger.debug(f"Updated virtual unit {unit.name} to version {unit.version}")
            return unit

    def reset(self) -> None:
        """Drop the session and every virtual unit."""
        with self.lock:
            self.registry = ScriptRegistry()
            self._documents = DocumentRegistry()
            self._service = None
