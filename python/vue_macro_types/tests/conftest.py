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
"""Pytest configuration for vue-macro-types tests.

Sets up the import path so the tests run from a source checkout without an
install, and provides component builders and a fresh plugin per test.
"""

import re
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

python_dir = Path(__file__).parent.parent.parent
if str(python_dir) not in sys.path:
    sys.path.insert(0, str(python_dir))

from vue_macro_types.checker.program import LanguageService
from vue_macro_types.config import DEFAULT_COMPILER_OPTIONS, CompilerOptions
from vue_macro_types.plugin import TransformResult, VueMacroTypes
from vue_macro_types.resolver import TypeHandle, resolve_type_argument
from vue_macro_types.service.host import ScriptRegistry, ServiceHost
from vue_macro_types.serializer import serialize_type

_PROPS_PATTERN = re.compile(r"defineProps<([\s\S]+?)>\(\)")


def create_sfc(script: str, lang: str = "ts") -> str:
    """Wrap ``script`` in a component with a ``<script setup>`` block."""
    return f'<script setup lang="{lang}">\n{script}\n</script>\n\n<template>\n  <div></div>\n</template>\n'


def extract_props_type(result: TransformResult) -> Optional[str]:
    match = _PROPS_PATTERN.search(result.code)
    return match.group(1).strip() if match else None


@pytest.fixture
def component_dir(tmp_path):
    """Directory holding the component under test, free of any tsconfig.json."""
    directory = tmp_path / "src"
    directory.mkdir()
    return directory


@pytest.fixture
def plugin():
    return VueMacroTypes()


@pytest.fixture
def transform_script(plugin, component_dir) -> Callable[..., Optional[TransformResult]]:
    """Transform ``script`` as the setup block of ``Component.vue``."""

    def transform(script: str, lang: str = "ts", name: str = "Component.vue") -> Optional[TransformResult]:
        return plugin.transform(create_sfc(script, lang), str(component_dir / name))

    return transform


@pytest.fixture
def expand(transform_script) -> Callable[[str], Optional[str]]:
    """Transform ``script`` and return the expanded ``defineProps`` argument."""

    def run(script: str) -> Optional[str]:
        result = transform_script(script)
        return extract_props_type(result) if result is not None else None

    return run


def resolve_script(script: str, options: CompilerOptions = DEFAULT_COMPILER_OPTIONS, directory: str = "/virtual") -> TypeHandle:
    """Resolve the ``defineProps`` type argument of ``script`` directly."""
    registry = ScriptRegistry()
    name = f"{directory}/unit.ts"
    registry.upsert(name, script)
    service = LanguageService(ServiceHost(registry, options, directory))
    offset = script.index("defineProps<") + len("defineProps<")
    handle = resolve_type_argument(service, name, offset)
    assert handle is not None
    return handle


@pytest.fixture
def serialize() -> Callable[..., str]:
    """Serialize the ``defineProps`` type argument of ``script``."""

    def run(script: str, options: CompilerOptions = DEFAULT_COMPILER_OPTIONS) -> str:
        handle = resolve_script(script, options)
        return serialize_type(handle.type, handle.checker)

    return run


@pytest.fixture
def print_type() -> Callable[..., str]:
    """Print the ``defineProps`` type argument of ``script`` in checker notation."""

    def run(script: str, options: CompilerOptions = DEFAULT_COMPILER_OPTIONS) -> str:
        handle = resolve_script(script, options)
        return handle.checker.type_to_string(handle.type)

    return run

