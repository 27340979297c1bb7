"""Value kinds — the closed set of types a parameter can hold.

Values live in the registry as text.  Each :class:`ValueKind` member knows
how to turn its canonical text back into a Python value (:meth:`parse`),
how to encode a Python value as canonical text (:meth:`format`), and
whether a piece of text is acceptable at all (:meth:`is_valid`).

Canonical encodings
-------------------
* ``BOOL``  — ``"true"`` / ``"false"``; parsing also accepts ``1/0``,
  ``yes/no`` and ``on/off`` in any case.
* ``INT``   — ASCII base-10 integer, optional sign.
* ``UINT``  — ASCII base-10 non-negative integer.
* ``FLOAT`` — ``repr()`` of a finite float, so round-trips are exact;
  parsing accepts ASCII decimal and exponent notation only.
* ``STR``   — the text itself; non-text values are formatted with ``str()``.

Surrounding whitespace is never accepted for non-text kinds.
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any

from clparams.exceptions import InvalidValueTextError

_TRUE_WORDS: frozenset[str] = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS: frozenset[str] = frozenset({"false", "0", "no", "off"})

_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
_UINT_RE = re.compile(r"\+?\d+", re.ASCII)
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class ValueKind(Enum):
    """Supported parameter value types."""

    BOOL = "bool"
    INT = "int"
    UINT = "unsigned int"
    FLOAT = "float"
    STR = "string"

    @property
    def type_name(self) -> str:
        """Name shown in help text and diagnostics."""
        return self.value

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def coerce(cls, kind: ValueKind | type | str) -> ValueKind:
        """Accept a member, a Python type, or a member name/type name."""
        if isinstance(kind, ValueKind):
            return kind
        if isinstance(kind, type):
            for member, py_type in _PYTHON_TYPES.items():
                if kind is py_type and member is not cls.UINT:
                    return member
            raise TypeError(f"No value kind for Python type {kind.__name__!r}")
        if isinstance(kind, str):
            lowered = kind.strip().lower()
            for member in cls:
                if lowered in (member.name.lower(), member.value):
                    return member
            raise ValueError(f"Unknown value kind {kind!r}")
        raise TypeError(f"Cannot interpret {kind!r} as a value kind")

    @classmethod
    def infer(cls, value: object) -> ValueKind:
        """Pick the kind of a Python value; ``None`` and text map to ``STR``."""
        if value is None or isinstance(value, str):
            return cls.STR
        # bool before int: bool is an int subclass.
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, int):
            return cls.INT
        if isinstance(value, float):
            return cls.FLOAT
        raise TypeError(f"Cannot infer a value kind from {type(value).__name__}")

    # ------------------------------------------------------------------
    # Text <-> value
    # ------------------------------------------------------------------

    def parse(self, text: str) -> Any:
        """Parse canonical (or accepted) *text* into a Python value.

        Raises
        ------
        InvalidValueTextError
            If *text* is not valid for this kind.
        """
        if self is ValueKind.STR:
            return text
        if self is ValueKind.BOOL:
            lowered = text.lower()
            if lowered in _TRUE_WORDS:
                return True
            if lowered in _FALSE_WORDS:
                return False
        elif self is ValueKind.INT:
            if _INT_RE.fullmatch(text):
                return int(text)
        elif self is ValueKind.UINT:
            if _UINT_RE.fullmatch(text):
                return int(text)
        elif self is ValueKind.FLOAT:
            if _FLOAT_RE.fullmatch(text):
                value = float(text)
                if math.isfinite(value):
                    return value
        raise InvalidValueTextError(
            f"{text!r} is not a valid {self.type_name}",
        )

    def is_valid(self, text: str) -> bool:
        """Return ``True`` when :meth:`parse` would accept *text*."""
        try:
            self.parse(text)
        except InvalidValueTextError:
            return False
        return True

    def format(self, value: object) -> str:
        """Encode *value* as canonical text for this kind.

        Text is accepted as-is after validation, so callers may pass
        either a typed value or its text form.

        Raises
        ------
        InvalidValueTextError
            If *value* has the wrong type or is out of range.
        """
        if isinstance(value, str):
            if not self.is_valid(value):
                raise InvalidValueTextError(
                    f"{value!r} is not a valid {self.type_name}",
                )
            return value
        if self is ValueKind.BOOL and isinstance(value, bool):
            return "true" if value else "false"
        if self in (ValueKind.INT, ValueKind.UINT) and _is_int(value):
            if self is ValueKind.UINT and value < 0:  # type: ignore[operator]
                raise InvalidValueTextError(
                    f"{value!r} is negative, {self.type_name} expected",
                )
            return str(value)
        if self is ValueKind.FLOAT and (_is_int(value) or isinstance(value, float)):
            number = float(value)  # type: ignore[arg-type]
            if not math.isfinite(number):
                raise InvalidValueTextError(
                    f"{value!r} is not finite, {self.type_name} expected",
                )
            return repr(number)
        if self is ValueKind.STR:
            return str(value)
        raise InvalidValueTextError(
            f"Cannot format {type(value).__name__} value {value!r} as {self.type_name}",
        )

    def display(self, text: str) -> str:
        """Render stored *text* for help output.

        Booleans are normalised to ``true``/``false``; everything else
        is shown verbatim.
        """
        if self is ValueKind.BOOL and text:
            try:
                return self.format(self.parse(text))
            except InvalidValueTextError:
                return text
        return text


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_PYTHON_TYPES: dict[ValueKind, type] = {
    ValueKind.BOOL: bool,
    ValueKind.INT: int,
    ValueKind.UINT: int,
    ValueKind.FLOAT: float,
    ValueKind.STR: str,
}
