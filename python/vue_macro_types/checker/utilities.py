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
"""JavaScript-compatible number and identifier helpers."""

from __future__ import annotations

import json
import math

_ID_JOINERS = ("‌", "‍")


def parse_number(text: str) -> float:
    """Value of a JavaScript numeric literal.

    Handles separators (``1_000``), hex/octal/binary prefixes, and BigInt
    suffixes, which are read as plain numbers.

    Raises:
        ValueError: If ``text`` is not a numeric literal
    """
    cleaned = text.strip().replace("_", "")
    negative = cleaned.startswith("-")
    if cleaned[:1] in "+-":
        cleaned = cleaned[1:]
    if cleaned.endswith("n"):
        cleaned = cleaned[:-1]
    prefix = cleaned[:2].lower()
    if prefix in ("0x", "0o", "0b"):
        value = float(int(cleaned[2:], {"0x": 16, "0o": 8, "0b": 2}[prefix]))
    elif cleaned in ("Infinity", "NaN"):
        value = float(cleaned.lower().replace("infinity", "inf"))
    else:
        value = float(cleaned)
    return -value if negative else value


def format_number(value: float) -> str:
    """Format ``value`` the way JavaScript's ``Number.prototype.toString`` does.

    Example:
        >>> format_number(1.0), format_number(0.5), format_number(1e21), format_number(1e-7)
        ('1', '0.5', '1e+21', '1e-7')
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value < 0:
        return "-" + format_number(-value)
    if value.is_integer() and value < 1e21:
        return str(int(value))

    mantissa, _, exponent = repr(value).partition("e")
    integer_part, _, fraction = mantissa.partition(".")
    combined = integer_part + fraction
    stripped = combined.lstrip("0")
    digits = stripped.rstrip("0") or "0"
    point = len(integer_part) - (len(combined) - len(stripped)) + int(exponent or 0)
    count = len(digits)

    if count <= point <= 21:
        return digits + "0" * (point - count)
    if 0 < point <= 21:
        return digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return "0." + "0" * -point + digits
    power = point - 1
    sign = "+" if power >= 0 else "-"
    head = digits if count == 1 else digits[0] + "." + digits[1:]
    return f"{head}e{sign}{abs(power)}"


def is_identifier_text(name: str) -> bool:
    """Whether ``name`` can be written as a bare JavaScript identifier."""
    if not name:
        return False
    normalized = name.replace("$", "_")
    head, tail = normalized[0], normalized[1:]
    for joiner in _ID_JOINERS:
        tail = tail.replace(joiner, "_")
    return (head + tail).isidentifier()


def quote_double(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)
