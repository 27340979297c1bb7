"""Tests for value kinds (core/kinds.py).

Every kind is a pure text <-> value codec — no registry involved.
"""

from __future__ import annotations

import pytest

from clparams.core.kinds import ValueKind
from clparams.exceptions import InvalidValueTextError


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParse:
    @pytest.mark.parametrize("text", ["true", "TRUE", "1", "yes", "on"])
    def test_bool_true_words(self, text: str) -> None:
        assert ValueKind.BOOL.parse(text) is True

    @pytest.mark.parametrize("text", ["false", "False", "0", "no", "off"])
    def test_bool_false_words(self, text: str) -> None:
        assert ValueKind.BOOL.parse(text) is False

    @pytest.mark.parametrize("text", ["", "maybe", "2", "truthy", " true", "yes\n"])
    def test_bool_rejects(self, text: str) -> None:
        with pytest.raises(InvalidValueTextError):
            ValueKind.BOOL.parse(text)

    def test_int_accepts_sign(self) -> None:
        assert ValueKind.INT.parse("-12") == -12
        assert ValueKind.INT.parse("+7") == 7

    @pytest.mark.parametrize(
        "text",
        ["", "abc", "1.5", "0x10", "1,2", " 7 ", "7\n", "1_000", "\u0663", "\uff17"],
    )
    def test_int_rejects(self, text: str) -> None:
        with pytest.raises(InvalidValueTextError):
            ValueKind.INT.parse(text)

    def test_uint_rejects_negative(self) -> None:
        assert ValueKind.UINT.parse("42") == 42
        with pytest.raises(InvalidValueTextError):
            ValueKind.UINT.parse("-1")

    @pytest.mark.parametrize("text", [" 42", "4_2", "\u0664\u0662"])
    def test_uint_rejects_non_canonical(self, text: str) -> None:
        assert not ValueKind.UINT.is_valid(text)

    def test_float(self) -> None:
        assert ValueKind.FLOAT.parse("0.85") == 0.85
        assert ValueKind.FLOAT.parse("1e-3") == 0.001
        assert ValueKind.FLOAT.parse("3") == 3.0
        assert ValueKind.FLOAT.parse(".5") == 0.5
        assert ValueKind.FLOAT.parse("-2.") == -2.0

    def test_float_rejects_text(self) -> None:
        with pytest.raises(InvalidValueTextError, match="not a valid float"):
            ValueKind.FLOAT.parse("fast")

    @pytest.mark.parametrize(
        "text",
        [" 0.5", "0.5\n", "1_000.0", "\u0663.5", "nan", "inf", "-Infinity", "1e999", ".", "e3"],
    )
    def test_float_rejects_non_canonical(self, text: str) -> None:
        with pytest.raises(InvalidValueTextError):
            ValueKind.FLOAT.parse(text)

    def test_str_is_verbatim(self) -> None:
        assert ValueKind.STR.parse(" spaced ") == " spaced "
        assert ValueKind.STR.parse("") == ""


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormat:
    def test_bool_canonical(self) -> None:
        assert ValueKind.BOOL.format(True) == "true"
        assert ValueKind.BOOL.format(False) == "false"

    def test_bool_rejects_int(self) -> None:
        with pytest.raises(InvalidValueTextError):
            ValueKind.BOOL.format(1)

    def test_int_rejects_bool_and_float(self) -> None:
        with pytest.raises(InvalidValueTextError):
            ValueKind.INT.format(True)
        with pytest.raises(InvalidValueTextError):
            ValueKind.INT.format(2.5)

    def test_uint_rejects_negative(self) -> None:
        with pytest.raises(InvalidValueTextError, match="negative"):
            ValueKind.UINT.format(-3)

    def test_float_accepts_int(self) -> None:
        assert ValueKind.FLOAT.format(2) == "2.0"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_float_rejects_non_finite(self, value: float) -> None:
        with pytest.raises(InvalidValueTextError, match="not finite"):
            ValueKind.FLOAT.format(value)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(5, "5"), (2.5, "2.5"), (True, "True"), (None, "None")],
    )
    def test_str_formats_any_value(self, value: object, expected: str) -> None:
        assert ValueKind.STR.format(value) == expected

    def test_text_is_validated(self) -> None:
        assert ValueKind.INT.format("17") == "17"
        with pytest.raises(InvalidValueTextError):
            ValueKind.INT.format("seventeen")

    @pytest.mark.parametrize(
        ("kind", "value"),
        [
            (ValueKind.BOOL, True),
            (ValueKind.BOOL, False),
            (ValueKind.INT, -40),
            (ValueKind.UINT, 2**40),
            (ValueKind.FLOAT, 0.1),
            (ValueKind.FLOAT, -1.5e300),
            (ValueKind.STR, "a b,c"),
        ],
    )
    def test_canonical_text_parses_back(self, kind: ValueKind, value: object) -> None:
        assert kind.parse(kind.format(value)) == value


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestCoerceAndInfer:
    @pytest.mark.parametrize(
        ("spec", "expected"),
        [
            (bool, ValueKind.BOOL),
            (int, ValueKind.INT),
            (float, ValueKind.FLOAT),
            (str, ValueKind.STR),
            ("uint", ValueKind.UINT),
            ("unsigned int", ValueKind.UINT),
            ("FLOAT", ValueKind.FLOAT),
            (ValueKind.INT, ValueKind.INT),
        ],
    )
    def test_coerce(self, spec: object, expected: ValueKind) -> None:
        assert ValueKind.coerce(spec) is expected  # type: ignore[arg-type]

    def test_coerce_unknown_type(self) -> None:
        with pytest.raises(TypeError):
            ValueKind.coerce(list)

    def test_coerce_unknown_name(self) -> None:
        with pytest.raises(ValueError):
            ValueKind.coerce("complex")

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ValueKind.STR),
            ("x", ValueKind.STR),
            (True, ValueKind.BOOL),
            (3, ValueKind.INT),
            (3.0, ValueKind.FLOAT),
        ],
    )
    def test_infer(self, value: object, expected: ValueKind) -> None:
        assert ValueKind.infer(value) is expected

    def test_display_normalises_bool(self) -> None:
        assert ValueKind.BOOL.display("0") == "false"
        assert ValueKind.BOOL.display("yes") == "true"
        assert ValueKind.BOOL.display("") == ""
        assert ValueKind.INT.display("08") == "08"

    def test_type_names(self) -> None:
        assert [k.type_name for k in ValueKind] == [
            "bool",
            "int",
            "unsigned int",
            "float",
            "string",
        ]
