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
"""Unit tests for number formatting and identifier checks."""

import math

import pytest

from vue_macro_types.checker.utilities import format_number, is_identifier_text, parse_number, quote_double


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (1.0, "1"),
            (0.0, "0"),
            (-0.0, "0"),
            (-3.0, "-3"),
            (0.5, "0.5"),
            (123.456, "123.456"),
            (0.000015, "0.000015"),
            (1e-7, "1e-7"),
            (1e21, "1e+21"),
            (1.5e300, "1.5e+300"),
            (float("inf"), "Infinity"),
            (float("-inf"), "-Infinity"),
            (float("nan"), "NaN"),
        ],
    )
    def test_matches_javascript(self, value, expected):
        assert format_number(value) == expected


class TestParseNumber:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("42", 42.0),
            ("1_000", 1000.0),
            ("0xFF", 255.0),
            ("0o17", 15.0),
            ("0b101", 5.0),
            ("10n", 10.0),
            ("-2.5", -2.5),
            (".5", 0.5),
            ("1e3", 1000.0),
        ],
    )
    def test_literals(self, text, expected):
        assert parse_number(text) == expected

    def test_special_values(self):
        assert math.isinf(parse_number("Infinity"))
        assert math.isnan(parse_number("NaN"))

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_number("abc")


class TestIdentifierText:
    @pytest.mark.parametrize("name", ["name", "_private", "$el", "camelCase2", "über", "名前"])
    def test_identifiers(self, name):
        assert is_identifier_text(name)

    @pytest.mark.parametrize("name", ["", "data-id", "with space", "2fast", "@special", "a.b"])
    def test_not_identifiers(self, name):
        assert not is_identifier_text(name)

    def test_quote_double(self):
        assert quote_double('say "hi"') == '"say \\"hi\\""'
        assert quote_double("名前-x") == '"名前-x"'
