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
"""Unit tests for programs, the document registry and the language service."""

from vue_macro_types.checker.program import DEFAULT_LIB_FILE, DocumentRegistry, LanguageService
from vue_macro_types.config import DEFAULT_COMPILER_OPTIONS
from vue_macro_types.service.host import ScriptRegistry, ServiceHost


def _service(files):
    registry = ScriptRegistry()
    for name, text in files.items():
        registry.upsert(name, text)
    return LanguageService(ServiceHost(registry, DEFAULT_COMPILER_OPTIONS, "/virtual")), registry


class TestDocumentRegistry:
    def test_reuses_unchanged_document(self):
        documents = DocumentRegistry()
        first = documents.acquire("/a.ts", "0", "type A = 1")
        assert documents.acquire("/a.ts", "0", "type A = 1") is first
        assert len(documents) == 1

    def test_new_version_reparses(self):
        documents = DocumentRegistry()
        first = documents.acquire("/a.ts", "0", "type A = 1")
        second = documents.acquire("/a.ts", "1", "type A = 1")
        assert second is not first
        assert second.version == "1"

    def test_changed_text_reparses(self):
        documents = DocumentRegistry()
        first = documents.acquire("/a.ts", "0", "type A = 1")
        assert documents.acquire("/a.ts", "0", "type A = 2") is not first

    def test_release(self):
        documents = DocumentRegistry()
        first = documents.acquire("/a.ts", "0", "type A = 1")
        documents.release("/a.ts")
        assert len(documents) == 0
        assert documents.acquire("/a.ts", "0", "type A = 1") is not first


class TestLanguageService:
    def test_program_reused_while_unchanged(self):
        service, _ = _service({"/virtual/a.ts": "type A = 1"})
        assert service.get_program() is service.get_program()

    def test_new_program_after_update(self):
        service, registry = _service({"/virtual/a.ts": "type A = 1"})
        program = service.get_program()
        registry.upsert("/virtual/a.ts", "type A = 2")
        updated = service.get_program()
        assert updated is not program
        assert updated.get_source_file("/virtual/a.ts").text == "type A = 2"

    def test_unchanged_units_share_documents(self):
        service, registry = _service({"/virtual/a.ts": "type A = 1", "/virtual/b.ts": "type B = 2"})
        before = service.get_program().get_source_file("/virtual/b.ts")
        registry.upsert("/virtual/a.ts", "type A = 3")
        assert service.get_program().get_source_file("/virtual/b.ts") is before

    def test_new_unit_is_picked_up(self):
        service, registry = _service({"/virtual/a.ts": "type A = 1"})
        service.get_program()
        registry.upsert("/virtual/b.ts", "type B = 2")
        assert service.get_program().get_source_file("/virtual/b.ts") is not None


class TestProgram:
    def test_missing_file(self):
        service, _ = _service({"/virtual/a.ts": "type A = 1"})
        assert service.get_program().get_source_file("/virtual/missing.ts") is None

    def test_globals_come_from_default_library(self):
        service, _ = _service({"/virtual/a.ts": "type A = 1"})
        program = service.get_program()
        for name in ("Array", "ReadonlyArray", "Promise", "Partial", "Pick", "Omit", "Record"):
            assert program.get_global_symbol(name) is not None
        assert program.get_global_symbol("A") is None

    def test_default_library_declares_dom_and_collections(self):
        service, _ = _service({"/virtual/a.ts": "type A = 1"})
        program = service.get_program()
        lib = program.get_source_file(DEFAULT_LIB_FILE)
        assert lib is not None
        assert not lib.has_syntax_errors, lib.syntax_errors()
        names = (
            "Event", "MouseEvent", "KeyboardEvent", "HTMLElement", "HTMLInputElement",
            "Date", "Map", "Set", "WeakMap", "Uppercase", "Capitalize",
        )
        for name in names:
            assert program.get_global_symbol(name) is not None, name

    def test_imports_load_files_lazily(self, tmp_path):
        (tmp_path / "types.ts").write_text("export type Size = 'sm' | 'lg'", encoding="utf-8")
        unit = str(tmp_path / "App.vue.__setup.ts")
        service, _ = _service({unit: "import type { Size } from './types'"})
        program = service.get_program()
        assert len(program.get_source_files()) == 2
        imported = program.resolve_import("./types", unit)
        assert imported is not None
        assert imported.file_name == str(tmp_path / "types.ts")
        assert len(program.get_source_files()) == 3

    def test_checker_is_cached(self):
        service, _ = _service({"/virtual/a.ts": "type A = 1"})
        program = service.get_program()
        assert program.get_type_checker() is program.get_type_checker()
