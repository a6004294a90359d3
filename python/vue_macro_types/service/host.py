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
"""Virtual script units and the language service host serving them.

The host answers the language service's questions from the registry of
virtual units first and from the real filesystem otherwise. Only the
registry is ever written to.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from vue_macro_types.checker.program import DEFAULT_LIB_FILE
from vue_macro_types.config import CompilerOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VirtualUnit:
    """An in-memory script unit.

    Attributes:
        name: Absolute file name the unit is registered under
        content: Script text
        version: Bumped on every content replacement, starting at 0
    """
    name: str
    content: str
    version: int = 0

    def replace(self, content: str) -> "VirtualUnit":
        """A new unit holding ``content``, one version later, even if unchanged."""
        return VirtualUnit(self.name, content, self.version + 1)


@dataclass
class ScriptRegistry:
    """Virtual units by name, with a cached list of their names.

    Attributes:
        entries: Name to unit
        cached_names: Unit names as of the last recomputation
        is_stale: Set when a name is added; cleared on recomputation
    """
    entries: Dict[str, VirtualUnit] = field(default_factory=dict)
    cached_names: Tuple[str, ...] = ()
    is_stale: bool = True

    def get(self, name: str) -> Optional[VirtualUnit]:
        return self.entries.get(name)

    def upsert(self, name: str, content: str) -> VirtualUnit:
        existing = self.entries.get(name)
        if existing is None:
            unit = VirtualUnit(name, content)
            self.is_stale = True
        else:
            unit = existing.replace(content)
        self.entries[name] = unit
        return unit

    def script_file_names(self) -> Tuple[str, ...]:
        if self.is_stale:
            self.cached_names = tuple(self.entries)
            self.is_stale = False
        return self.cached_names

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def __len__(self) -> int:
        return len(self.entries)


class ServiceHost:
    """Language service host backed by a ``ScriptRegistry`` and the filesystem."""

    def __init__(
        self,
        registry: ScriptRegistry,
        compiler_options: CompilerOptions,
        current_directory: Optional[str] = None,
        default_lib_file: str = DEFAULT_LIB_FILE,
    ) -> None:
        self.registry = registry
        self.compiler_options = compiler_options
        self.current_directory = current_directory or os.getcwd()
        self.default_lib_file = default_lib_file

    def get_script_file_names(self) -> Tuple[str, ...]:
        return self.registry.script_file_names()

    def get_script_version(self, file_name: str) -> str:
        unit = self.registry.get(file_name)
        return str(unit.version) if unit is not None else "0"

    def get_script_snapshot(self, file_name: str) -> Optional[str]:
        return self.read_file(file_name)

    def get_compilation_settings(self) -> CompilerOptions:
        return self.compiler_options

    def get_current_directory(self) -> str:
        return self.current_directory

    def get_default_lib_file_name(self) -> str:
        return self.default_lib_file

    def file_exists(self, file_name: str) -> bool:
        return file_name in self.registry or os.path.isfile(file_name)

    def read_file(self, file_name: str) -> Optional[str]:
        unit = self.registry.get(file_name)
        if unit is not None:
            return unit.content
        try:
            return Path(file_name).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Cannot read {file_name}: {e}")
            return None
