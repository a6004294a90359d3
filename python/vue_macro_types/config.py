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
"""Plugin options and compiler option resolution.

Compiler options are read once per session from, in order of preference:

1. The ``tsconfig.json`` named explicitly in ``MacroTypesOptions.tsconfig``
2. The nearest ``tsconfig.json`` found walking up from the component
3. ``DEFAULT_COMPILER_OPTIONS``

``tsconfig.json`` files are JSON with comments and trailing commas, and may
``extends`` another config by relative path.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from vue_macro_types.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_FUNCTION_NAME = "defineProps"
DEFAULT_VIRTUAL_SUFFIX = ".__setup.ts"
CONFIG_FILE_NAME = "tsconfig.json"

# Upper bound on "extends" hops; protects against cycles between configs.
MAX_EXTENDS_DEPTH = 16


# =============================================================================
# Plugin Options
# =============================================================================

@dataclass(frozen=True)
class MacroTypesOptions:
    """Options accepted by the plugin.

    Attributes:
        tsconfig: Explicit path to a tsconfig.json; discovered when None
        function_name: Name of the macro whose type argument is expanded
        virtual_suffix: Suffix appended to a component id to name its
            virtual script unit
    """
    tsconfig: Optional[str] = None
    function_name: str = DEFAULT_FUNCTION_NAME
    virtual_suffix: str = DEFAULT_VIRTUAL_SUFFIX

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MacroTypesOptions":
        return cls(
            tsconfig=data.get("tsconfig"),
            function_name=data.get("functionName", data.get("function_name", DEFAULT_FUNCTION_NAME)),
            virtual_suffix=data.get("virtualSuffix", data.get("virtual_suffix", DEFAULT_VIRTUAL_SUFFIX)),
        )


# =============================================================================
# Compiler Options
# =============================================================================

@dataclass(frozen=True)
class CompilerOptions:
    """The compiler options the checker honours.

    Attributes:
        strict: Enables the strict family of checks
        strict_null_checks: Overrides ``strict`` for null checking when set
        target: ECMAScript target version
        module: Module system
        module_resolution: Module resolution strategy
        skip_lib_check: Skip checking declaration files
        base_url: Base directory for non-relative module names
        paths: Path alias mappings, relative to ``base_url``
        config_dir: Directory of the tsconfig.json the options came from
    """
    strict: bool = False
    strict_null_checks: Optional[bool] = None
    target: str = "ESNext"
    module: str = "ESNext"
    module_resolution: str = "Bundler"
    skip_lib_check: bool = False
    base_url: Optional[str] = None
    paths: Dict[str, List[str]] = field(default_factory=dict)
    config_dir: Optional[str] = None

    @property
    def null_checks_enabled(self) -> bool:
        if self.strict_null_checks is not None:
            return self.strict_null_checks
        return self.strict

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config_dir: Optional[str] = None) -> "CompilerOptions":
        """Build options from a ``compilerOptions`` mapping."""
        base_url = data.get("baseUrl")
        if base_url is not None and config_dir is not None:
            base_url = os.path.normpath(os.path.join(config_dir, base_url))
        return cls(
            strict=bool(data.get("strict", False)),
            strict_null_checks=data.get("strictNullChecks"),
            target=data.get("target", "ESNext"),
            module=data.get("module", "ESNext"),
            module_resolution=data.get("moduleResolution", "Bundler"),
            skip_lib_check=bool(data.get("skipLibCheck", False)),
            base_url=base_url,
            paths=dict(data.get("paths", {})),
            config_dir=config_dir,
        )


DEFAULT_COMPILER_OPTIONS = CompilerOptions(
    strict=True,
    target="ESNext",
    module="ESNext",
    module_resolution="Bundler",
    skip_lib_check=True,
)


# =============================================================================
# tsconfig.json Reading
# =============================================================================

def _strip_json_comments(text: str) -> str:
    """Strip ``//`` and ``/* */`` comments outside of JSON strings."""
    result = []
    i = 0
    in_string = False
    escape_next = False

    while i < len(text):
        char = text[i]

        if escape_next:
            result.append(char)
            escape_next = False
            i += 1
            continue

        if char == '\\' and in_string:
            result.append(char)
            escape_next = True
            i += 1
            continue

        if char == '"':
            in_string = not in_string
            result.append(char)
            i += 1
            continue

        if not in_string and char == '/' and i + 1 < len(text):
            if text[i + 1] == '/':
                while i < len(text) and text[i] != '\n':
                    i += 1
                continue
            if text[i + 1] == '*':
                i += 2
                while i + 1 < len(text) and not (text[i] == '*' and text[i + 1] == '/'):
                    i += 1
                i += 2
                continue

        result.append(char)
        i += 1

    return ''.join(result)


def _strip_trailing_commas(text: str) -> str:
    """Drop commas that directly precede ``}`` or ``]``."""
    result = []
    in_string = False
    escape_next = False
    pending_comma: Optional[int] = None

    for char in text:
        if in_string:
            result.append(char)
            if escape_next:
                escape_next = False
            elif char == '\\':
                escape_next = True
            elif char == '"':
                in_string = False
            continue

        if char == ',':
            pending_comma = len(result)
            result.append(char)
            continue

        if char in '}]' and pending_comma is not None:
            del result[pending_comma]
        if not char.isspace():
            pending_comma = None
        if char == '"':
            in_string = True
        result.append(char)

    return ''.join(result)


def read_config_text(text: str) -> Dict[str, Any]:
    """Parse the contents of a tsconfig.json.

    Raises:
        ValueError: If the text is not a JSON object once comments and
            trailing commas are removed
    """
    data = json.loads(_strip_trailing_commas(_strip_json_comments(text)))
    if not isinstance(data, dict):
        raise ValueError("tsconfig root must be an object")
    return data


def _read_compiler_options(path: Path, depth: int = 0) -> Dict[str, Any]:
    """Read ``compilerOptions`` from ``path`` with its ``extends`` chain merged."""
    data = read_config_text(path.read_text(encoding="utf-8"))
    options: Dict[str, Any] = {}

    extends = data.get("extends")
    if isinstance(extends, str) and depth < MAX_EXTENDS_DEPTH:
        parent = (path.parent / extends)
        if parent.suffix != ".json":
            parent = parent.with_name(parent.name + ".json")
        if parent.exists():
            options.update(_read_compiler_options(parent, depth + 1))
        else:
            # Package-style extends ("@vue/tsconfig/...") needs node_modules lookup
            logger.debug(f"Ignoring unresolved tsconfig extends '{extends}' in {path}")

    options.update(data.get("compilerOptions") or {})
    return options


def parse_tsconfig(path: Path) -> CompilerOptions:
    """Load compiler options from a tsconfig.json.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        raw = _read_compiler_options(path)
    except (OSError, ValueError) as e:
        raise ConfigError(str(path), str(e)) from e
    return CompilerOptions.from_dict(raw, config_dir=str(path.parent))


def find_config_file(
    search_path: str,
    file_exists: Callable[[str], bool] = os.path.isfile,
    config_name: str = CONFIG_FILE_NAME,
) -> Optional[str]:
    """Walk up from ``search_path`` looking for ``config_name``."""
    directory = os.path.abspath(search_path)
    while True:
        candidate = os.path.join(directory, config_name)
        if file_exists(candidate):
            return candidate
        parent = os.path.dirname(directory)
        if parent == directory:
            return None
        directory = parent


def resolve_compiler_options(context_path: str, options: MacroTypesOptions) -> CompilerOptions:
    """Resolve the compiler options for a session.

    An explicitly configured tsconfig that fails to load raises
    ``ConfigError``; a discovered one falls back to the defaults.
    """
    if options.tsconfig:
        logger.debug(f"Using configured tsconfig {options.tsconfig}")
        return parse_tsconfig(Path(options.tsconfig))

    found = find_config_file(os.path.dirname(os.path.abspath(context_path)))
    if found is None:
        logger.debug("No tsconfig.json found, using default compiler options")
        return DEFAULT_COMPILER_OPTIONS

    try:
        return parse_tsconfig(Path(found))
    except ConfigError as e:
        logger.warning(f"[vue-macro-types] {e}; using default compiler options")
        return replace(DEFAULT_COMPILER_OPTIONS, config_dir=os.path.dirname(found))
