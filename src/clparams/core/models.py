"""Domain models for clparams.

:class:`DeclSite` and :class:`ParameterSpec` are **frozen** dataclasses —
the declaration of a parameter never changes after registration.  The
mutable part (current value, default-usage flag) is owned by the
registry and is only reachable through it by name.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import IntFlag

from clparams.core.kinds import ValueKind
from clparams.exceptions import InvalidArityError


# ---------------------------------------------------------------------------
# Arity flags
# ---------------------------------------------------------------------------

class Arity(IntFlag):
    """How a parameter may be supplied.

    A complete arity holds exactly one flag from each group:

    * argument presence — ``NO_ARGUMENT``, ``REQUIRED_ARGUMENT``,
      ``OPTIONAL_ARGUMENT``
    * multiplicity — ``SINGLE_VALUE``, ``MULTI_VALUE``
    * requiredness — ``REQUIRED_PARAMETER``, ``OPTIONAL_PARAMETER``
    """

    NO_ARGUMENT = 0x01
    REQUIRED_ARGUMENT = 0x02
    OPTIONAL_ARGUMENT = 0x04

    SINGLE_VALUE = 0x20
    MULTI_VALUE = 0x40

    REQUIRED_PARAMETER = 0x100
    OPTIONAL_PARAMETER = 0x200


ARGUMENT_GROUP: Arity = Arity.NO_ARGUMENT | Arity.REQUIRED_ARGUMENT | Arity.OPTIONAL_ARGUMENT
MULTIPLICITY_GROUP: Arity = Arity.SINGLE_VALUE | Arity.MULTI_VALUE
REQUIREDNESS_GROUP: Arity = Arity.REQUIRED_PARAMETER | Arity.OPTIONAL_PARAMETER


def _bit_count(flags: int) -> int:
    return bin(flags).count("1")


def normalize_arity(name: str, arity: Arity | int, kind: ValueKind) -> Arity:
    """Validate *arity* and fill in any group left unset.

    Missing groups default to ``SINGLE_VALUE`` and ``OPTIONAL_PARAMETER``;
    the argument group defaults to ``OPTIONAL_ARGUMENT`` for booleans (so
    ``--flag`` alone means true) and ``REQUIRED_ARGUMENT`` otherwise.

    Raises
    ------
    InvalidArityError
        If a group has more than one flag set, or unknown bits are set.
    """
    flags = Arity(int(arity) & int(ARGUMENT_GROUP | MULTIPLICITY_GROUP | REQUIREDNESS_GROUP))
    if int(flags) != int(arity):
        raise InvalidArityError(
            f"Parameter {name} has unknown arity bits {int(arity):#x}",
        )

    for group in (ARGUMENT_GROUP, MULTIPLICITY_GROUP, REQUIREDNESS_GROUP):
        if _bit_count(int(flags & group)) > 1:
            raise InvalidArityError(
                f"Parameter {name} sets conflicting arity flags {flags & group!r}",
                hint="Pick exactly one flag from each arity group.",
            )

    if not flags & ARGUMENT_GROUP:
        flags |= Arity.OPTIONAL_ARGUMENT if kind is ValueKind.BOOL else Arity.REQUIRED_ARGUMENT
    if not flags & MULTIPLICITY_GROUP:
        flags |= Arity.SINGLE_VALUE
    if not flags & REQUIREDNESS_GROUP:
        flags |= Arity.OPTIONAL_PARAMETER
    return flags


# ---------------------------------------------------------------------------
# Declaration site
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DeclSite:
    """Source location a parameter was declared from."""

    file: str
    line: int

    @classmethod
    def from_caller(cls, depth: int = 1) -> DeclSite:
        """Capture the site *depth* frames above the caller of this method."""
        frame = sys._getframe(depth + 1)
        return cls(frame.f_code.co_filename, frame.f_lineno)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


# ---------------------------------------------------------------------------
# Parameter declaration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """The declared shape of one parameter."""

    name: str
    """Unique key; addressed on the command line as ``--name``."""

    arity: Arity
    """Normalised arity — one flag from each group."""

    kind: ValueKind
    """Declared value kind."""

    default: str
    """Text-encoded default value (``""`` when there is none)."""

    description: str
    """Free text shown in help output."""

    site: DeclSite
    """Where the declaration came from."""

    @property
    def takes_argument(self) -> bool:
        return not self.arity & Arity.NO_ARGUMENT

    @property
    def argument_required(self) -> bool:
        return bool(self.arity & Arity.REQUIRED_ARGUMENT)

    @property
    def is_multi_value(self) -> bool:
        return bool(self.arity & Arity.MULTI_VALUE)

    @property
    def is_required(self) -> bool:
        return bool(self.arity & Arity.REQUIRED_PARAMETER)

    @property
    def label(self) -> str:
        """``name(file:line)`` — the prefix used by scan diagnostics."""
        return f"{self.name}({self.site})"
