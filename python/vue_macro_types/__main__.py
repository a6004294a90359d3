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
"""Run the props type expansion over Vue components.

Usage:
    python -m vue_macro_types src/components/Card.vue
    python -m vue_macro_types src/**/*.vue --tsconfig tsconfig.app.json --sourcemap

Each file's transformed source is printed to stdout, or its unchanged
source when there is nothing to expand. With --sourcemap, a FILE.vue.map
is written next to every transformed file.
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from vue_macro_types.config import DEFAULT_FUNCTION_NAME, MacroTypesOptions
from vue_macro_types.plugin import VueMacroTypes

logger = logging.getLogger("vue_macro_types")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="vue_macro_types",
        description="Expand defineProps<T>() type arguments into type literals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE.vue",
        help="Components to transform",
    )
    parser.add_argument(
        "--tsconfig",
        type=str,
        default=None,
        help="tsconfig.json to use instead of the nearest one",
    )
    parser.add_argument(
        "--function-name",
        type=str,
        default=DEFAULT_FUNCTION_NAME,
        help="Macro whose type argument is expanded",
    )
    parser.add_argument(
        "--sourcemap",
        action="store_true",
        help="Write FILE.vue.map next to each transformed file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log session and cache events",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    plugin = VueMacroTypes(MacroTypesOptions(tsconfig=args.tsconfig, function_name=args.function_name))
    plugin.build_start()

    status = 0
    for name in args.files:
        path = Path(name).resolve()
        try:
            code = path.read_text(encoding="utf-8")
        except OSError as e:
            print(f"{name}: {e}", file=sys.stderr)
            status = 1
            continue

        result = plugin.transform(code, str(path)) if plugin.filter.matches(code, str(path)) else None
        if result is None:
            logger.info(f"{name}: unchanged")
            sys.stdout.write(code)
            continue

        sys.stdout.write(result.code)
        if args.sourcemap:
            map_path = path.with_name(path.name + ".map")
            map_path.write_text(result.map.to_json(), encoding="utf-8")
            logger.info(f"Wrote {os.path.relpath(map_path)}")
    return status


if __name__ == "__main__":
    sys.exit(main())
