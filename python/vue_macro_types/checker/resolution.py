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
"""Module specifier resolution.

Resolution order for an ``import ... from "<specifier>"``:

1. Relative (``./``, ``../``) and absolute specifiers, from the importing file
2. ``compilerOptions.paths`` patterns, relative to ``baseUrl``
3. ``baseUrl`` itself
4. ``node_modules`` packages (``types``/``typings`` entry, ``@types``)

Each candidate path is tried with the TypeScript extensions first, then as a
directory with an ``index`` file.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Callable, Optional

from vue_macro_types.config import CompilerOptions

logger = logging.getLogger(__name__)

EXTENSIONS = (".ts", ".tsx", ".d.ts", ".js", ".jsx", ".mjs", ".cjs")

# Written with a JS extension, resolved to the TS source next to it.
_JS_TO_TS = {".js": (".ts", ".tsx", ".d.ts"), ".mjs": (".mts", ".d.mts"), ".cjs": (".cts", ".d.cts")}


def _is_relative(specifier: str) -> bool:
    return specifier.startswith("./") or specifier.startswith("../") or specifier in (".", "..")


def _try_file(path: str, file_exists: Callable[[str], bool]) -> Optional[str]:
    stem, ext = os.path.splitext(path)
    if ext in (".ts", ".tsx", ".d.ts", ".mts", ".cts") and file_exists(path):
        return path
    for replacement in _JS_TO_TS.get(ext, ()):
        if file_exists(stem + replacement):
            return stem + replacement
    for extension in EXTENSIONS:
        if file_exists(path + extension):
            return path + extension
    for extension in EXTENSIONS:
        candidate = os.path.join(path, "index" + extension)
        if file_exists(candidate):
            return candidate
    return None


def _match_path_pattern(pattern: str, specifier: str) -> Optional[str]:
    """Return the text matched by ``*`` in ``pattern``, or None."""
    if "*" not in pattern:
        return "" if pattern == specifier else None
    prefix, _, suffix = pattern.partition("*")
    if specifier.startswith(prefix) and specifier.endswith(suffix) and len(specifier) >= len(prefix) + len(suffix):
        return specifier[len(prefix):len(specifier) - len(suffix)]
    return None


def _package_name(specifier: str) -> str:
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) > 1:
        return "/".join(parts[:2])
    return parts[0]


def _resolve_node_module(
    specifier: str,
    containing_dir: str,
    file_exists: Callable[[str], bool],
    read_file: Callable[[str], Optional[str]],
) -> Optional[str]:
    package = _package_name(specifier)
    subpath = specifier[len(package):].lstrip("/")
    directory = containing_dir
    while True:
        for package_dir in (
            os.path.join(directory, "node_modules", package),
            os.path.join(directory, "node_modules", "@types", package.lstrip("@").replace("/", "__")),
        ):
            if subpath:
                found = _try_file(os.path.join(package_dir, subpath), file_exists)
                if found is not None:
                    return found
                continue
            manifest = os.path.join(package_dir, "package.json")
            if file_exists(manifest):
                entry = _types_entry(read_file(manifest))
                if entry is not None:
                    found = _try_file(os.path.normpath(os.path.join(package_dir, entry)), file_exists)
                    if found is not None:
                        return found
            found = _try_file(os.path.join(package_dir, "index"), file_exists)
            if found is not None:
                return found
        parent = os.path.dirname(directory)
        if parent == directory:
            return None
        directory = parent


def _types_entry(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    try:
        manifest = json.loads(text)
    except ValueError:
        return None
    if not isinstance(manifest, dict):
        return None
    entry = manifest.get("types") or manifest.get("typings") or manifest.get("main")
    return entry if isinstance(entry, str) else None


def resolve_module_name(
    specifier: str,
    containing_file: str,
    options: CompilerOptions,
    file_exists: Callable[[str], bool],
    read_file: Callable[[str], Optional[str]],
) -> Optional[str]:
    """Resolve ``specifier`` imported from ``containing_file`` to a file name."""
    containing_dir = os.path.dirname(containing_file)

    if _is_relative(specifier) or os.path.isabs(specifier):
        return _try_file(os.path.normpath(os.path.join(containing_dir, specifier)), file_exists)

    base = options.base_url or options.config_dir
    if options.paths and base is not None:
        for pattern, targets in options.paths.items():
            matched = _match_path_pattern(pattern, specifier)
            if matched is None:
                continue
            for target in targets:
                candidate = os.path.normpath(os.path.join(base, target.replace("*", matched)))
                found = _try_file(candidate, file_exists)
                if found is not None:
                    return found

    if options.base_url is not None:
        found = _try_file(os.path.normpath(os.path.join(options.base_url, specifier)), file_exists)
        if found is not None:
            return found

    found = _resolve_node_module(specifier, containing_dir, file_exists, read_file)
    if found is None:
        logger.debug(f"Could not resolve module '{specifier}' from {containing_file}")
    return found