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
"""Programs, the document registry and the language service.

A ``Program`` is an immutable snapshot of the script units a host reports,
plus every file reached through their imports. The ``LanguageService``
hands out the same program for as long as the host's names and versions
are unchanged, and builds a new one otherwise. Parsed files are shared
between programs through a ``DocumentRegistry`` so an edit to one unit
reparses only that unit.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from vue_macro_types.checker.binder import Binder
from vue_macro_types.checker.resolution import resolve_module_name
from vue_macro_types.checker.syntax import SourceFile
from vue_macro_types.checker.types import Symbol
from vue_macro_types.config import CompilerOptions

logger = logging.getLogger(__name__)

DEFAULT_LIB_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "lib", "lib.d.ts")


class LanguageServiceHost(Protocol):
    """What a program needs from its environment."""

    def get_script_file_names(self) -> Sequence[str]: ...

    def get_script_version(self, file_name: str) -> str: ...

    def get_script_snapshot(self, file_name: str) -> Optional[str]: ...

    def get_compilation_settings(self) -> CompilerOptions: ...

    def get_current_directory(self) -> str: ...

    def get_default_lib_file_name(self) -> str: ...

    def file_exists(self, file_name: str) -> bool: ...

    def read_file(self, file_name: str) -> Optional[str]: ...


class DocumentRegistry:
    """Parsed source files shared across programs, keyed by file name.

    A file is reparsed only when its version or text differs from the copy
    already held.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, SourceFile] = {}

    def acquire(self, file_name: str, version: str, text: str) -> SourceFile:
        existing = self._documents.get(file_name)
        if existing is not None and existing.version == version and existing.text == text:
            return existing
        logger.debug(f"Parsing {file_name} (version {version})")
        document = SourceFile(file_name, text, version)
        self._documents[file_name] = document
        return document

    def release(self, file_name: str) -> None:
        self._documents.pop(file_name, None)

    def __len__(self) -> int:
        return len(self._documents)


class Program:
    """A consistent set of source files and the options to check them with."""

    def __init__(self, host: LanguageServiceHost, registry: DocumentRegistry) -> None:
        self._host = host
        self._registry = registry
        self.compiler_options: CompilerOptions = host.get_compilation_settings()
        self.binder = Binder()
        self.root_names: Tuple[str, ...] = tuple(os.path.normpath(n) for n in host.get_script_file_names())
        self._files: Dict[str, Optional[SourceFile]] = {}
        self._resolutions: Dict[Tuple[str, str], Optional[str]] = {}
        self._checker = None

        for name in self.root_names:
            self._load(name)
        self._lib_file_name = os.path.normpath(host.get_default_lib_file_name())
        self._lib = self._load(self._lib_file_name)
        if self._lib is None:
            logger.warning(f"[vue-macro-types] Default library {self._lib_file_name} could not be read")

    def _load(self, file_name: str) -> Optional[SourceFile]:
        if file_name in self._files:
            return self._files[file_name]
        text = self._host.get_script_snapshot(file_name)
        if text is None:
            self._files[file_name] = None
            return None
        document = self._registry.acquire(file_name, self._host.get_script_version(file_name), text)
        self._files[file_name] = document
        return document

    def get_source_file(self, file_name: str) -> Optional[SourceFile]:
        file_name = os.path.normpath(file_name)
        if file_name in self._files:
            return self._files[file_name]
        if not self._host.file_exists(file_name):
            return None
        return self._load(file_name)

    def get_source_files(self) -> List[SourceFile]:
        return [f for f in self._files.values() if f is not None]

    def resolve_import(self, module: str, from_file_name: str) -> Optional[SourceFile]:
        """Source file ``module`` names when imported from ``from_file_name``.

        Files outside the root set are loaded on first import.
        """
        key = (os.path.dirname(from_file_name), module)
        if key not in self._resolutions:
            self._resolutions[key] = resolve_module_name(
                module,
                from_file_name,
                self.compiler_options,
                self._host.file_exists,
                self._host.read_file,
            )
        resolved = self._resolutions[key]
        return self.get_source_file(resolved) if resolved is not None else None

    def get_global_symbol(self, name: str) -> Optional[Symbol]:
        if self._lib is None:
            return None
        return self.binder.get_locals(self._lib.root).get(name)

    def get_type_checker(self):
        if self._checker is None:
            from vue_macro_types.checker.checker import TypeChecker

            self._checker = TypeChecker(self)
        return self._checker

    def __repr__(self) -> str:
        return f"Program(roots={len(self.root_names)}, files={len(self.get_source_files())})"


class LanguageService:
    """Hands out an up-to-date ``Program`` for a host.

    Example:
        >>> service = LanguageService(host)
        >>> program = service.get_program()
        >>> service.get_program() is program
        True
    """

    def __init__(self, host: LanguageServiceHost, registry: Optional[DocumentRegistry] = None) -> None:
        self._host = host
        self._registry = registry if registry is not None else DocumentRegistry()
        self._program: Optional[Program] = None
        self._program_key: Optional[tuple] = None

    @property
    def host(self) -> LanguageServiceHost:
        return self._host

    def _snapshot_key(self) -> tuple:
        names = tuple(self._host.get_script_file_names())
        return (
            names,
            tuple(self._host.get_script_version(n) for n in names),
            self._host.get_compilation_settings(),
        )

    def get_program(self) -> Program:
        key = self._snapshot_key()
        if self._program is None or key != self._program_key:
            self._program = Program(self._host, self._registry)
            self._program_key = key
            logger.debug(f"Built {self._program!r}")
        return self._program
