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
"""Tests for the command-line entry point."""

import json

import pytest

from conftest import create_sfc
from vue_macro_types.__main__ import main

pytestmark = pytest.mark.integration


@pytest.fixture
def component(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "Card.vue"
    path.write_text(create_sfc("type Props = { title: string }\ndefineProps<Props>()"), encoding="utf-8")
    return path


class TestMain:
    def test_prints_transformed_source(self, component, capsys):
        assert main([str(component)]) == 0
        assert "defineProps<{ title: string }>()" in capsys.readouterr().out
        assert not (component.parent / "Card.vue.map").exists()

    def test_writes_source_map(self, component, capsys):
        assert main([str(component), "--sourcemap"]) == 0
        document = json.loads((component.parent / "Card.vue.map").read_text(encoding="utf-8"))
        assert document["version"] == 3
        assert document["sources"] == [str(component)]

    def test_unchanged_source_is_echoed(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "Plain.vue"
        source = create_sfc("const msg = 'hello'")
        path.write_text(source, encoding="utf-8")
        assert main([str(path)]) == 0
        assert capsys.readouterr().out == source

    def test_missing_file(self, component, capsys):
        assert main([str(component.parent / "Missing.vue"), str(component)]) == 1
        captured = capsys.readouterr()
        assert "Missing.vue" in captured.err
        assert "defineProps<{ title: string }>()" in captured.out

    def test_function_name(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "Slots.vue"
        path.write_text(create_sfc("type S = { header: string }\ndefineSlots<S>()"), encoding="utf-8")
        assert main([str(path), "--function-name", "defineSlots"]) == 0
        assert "defineSlots<{ header: string }>()" in capsys.readouterr().out

    def test_requires_files(self):
        with pytest.raises(SystemExit):
            main([])
