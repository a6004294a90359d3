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
"""Unit tests for virtual units, the service host and the session manager."""

import os
import threading

import pytest

from vue_macro_types.checker.program import DEFAULT_LIB_FILE, LanguageService
from vue_macro_types.config import DEFAULT_COMPILER_OPTIONS, MacroTypesOptions
from vue_macro_types.errors import ConfigError
from vue_macro_types.service.host import ScriptRegistry, ServiceHost, VirtualUnit
from vue_macro_types.service.session import SessionManager


class TestVirtualUnit:
    def test_replace_bumps_version(self):
        unit = VirtualUnit("/a.ts", "x")
        assert unit.version == 0
        assert unit.replace("y") == VirtualUnit("/a.ts", "y", 1)

    def test_replace_with_identical_content_still_bumps(self):
        assert VirtualUnit("/a.ts", "x", 3).replace("x").version == 4


class TestScriptRegistry:
    def test_first_insert_is_version_zero(self):
        registry = ScriptRegistry()
        assert registry.upsert("/a.ts", "x").version == 0
        assert registry.upsert("/a.ts", "x").version == 1
        assert registry.upsert("/a.ts", "y").version == 2
        assert len(registry) == 1

    def test_names_recomputed_only_when_stale(self):
        registry = ScriptRegistry()
        registry.upsert("/a.ts", "x")
        assert registry.is_stale
        names = registry.script_file_names()
        assert names == ("/a.ts",)
        assert not registry.is_stale

        registry.upsert("/a.ts", "y")
        assert not registry.is_stale
        assert registry.script_file_names() is names

        registry.upsert("/b.ts", "z")
        assert registry.is_stale
        assert registry.script_file_names() == ("/a.ts", "/b.ts")


class TestServiceHost:
    @pytest.fixture
    def host(self):
        registry = ScriptRegistry()
        registry.upsert("/virtual/App.vue.__setup.ts", "defineProps<P>()")
        return ServiceHost(registry, DEFAULT_COMPILER_OPTIONS, "/virtual")

    def test_versions(self, host):
        host.registry.upsert("/virtual/App.vue.__setup.ts", "defineProps<Q>()")
        assert host.get_script_version("/virtual/App.vue.__setup.ts") == "1"
        assert host.get_script_version("/elsewhere/types.ts") == "0"

    def test_registry_before_filesystem(self, host):
        assert host.file_exists("/virtual/App.vue.__setup.ts")
        assert host.get_script_snapshot("/virtual/App.vue.__setup.ts") == "defineProps<P>()"

    def test_filesystem_fallback(self, host, tmp_path):
        path = tmp_path / "types.ts"
        path.write_text("export type A = 1", encoding="utf-8")
        assert host.file_exists(str(path))
        assert host.read_file(str(path)) == "export type A = 1"
        assert host.read_file(str(tmp_path / "missing.ts")) is None
        assert not host.file_exists(str(tmp_path / "missing.ts"))

    def test_settings(self, host):
        assert host.get_compilation_settings() is DEFAULT_COMPILER_OPTIONS
        assert host.get_current_directory() == "/virtual"
        assert host.get_default_lib_file_name() == DEFAULT_LIB_FILE
        assert os.path.isfile(host.get_default_lib_file_name())


class TestSessionManager:
    def test_session_is_built_once(self, tmp_path):
        manager = SessionManager()
        assert not manager.has_session
        first = manager.get_session(str(tmp_path / "A.vue"))
        second = manager.get_session(str(tmp_path / "other" / "B.vue"))
        assert isinstance(first, LanguageService)
        assert first is second

    def test_upsert_normalizes_names(self):
        manager = SessionManager()
        unit = manager.upsert_unit("/src/./components/../App.vue.__setup.ts", "x")
        assert unit.name == "/src/App.vue.__setup.ts"
        assert manager.upsert_unit("/src/App.vue.__setup.ts", "x").version == 1

    def test_reset(self, tmp_path):
        manager = SessionManager()
        manager.upsert_unit("/a.ts", "x")
        service = manager.get_session(str(tmp_path / "A.vue"))
        manager.reset()
        assert not manager.has_session
        assert len(manager.registry) == 0
        assert manager.get_session(str(tmp_path / "A.vue")) is not service

    def test_explicit_tsconfig_error_propagates(self, tmp_path):
        manager = SessionManager(MacroTypesOptions(tsconfig=str(tmp_path / "missing.json")))
        with pytest.raises(ConfigError):
            manager.get_session(str(tmp_path / "A.vue"))

    def test_lock_is_reentrant(self, tmp_path):
        manager = SessionManager()
        with manager.lock:
            manager.upsert_unit("/a.ts", "x")
            manager.get_session(str(tmp_path / "A.vue"))

    def test_concurrent_upserts(self):
        manager = SessionManager()

        def worker():
            for _ in range(50):
                manager.upsert_unit("/shared.ts", "x")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert manager.registry.get("/shared.ts").version == 199
