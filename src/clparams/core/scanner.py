"""Command-line scanning — fill a registry from process arguments.

The scanner follows the GNU long-option convention:

* ``--name value`` — only for ``REQUIRED_ARGUMENT`` parameters, which
  always consume the next token.
* ``--name=value`` — for required- and optional-argument parameters.
* ``--name`` — for no-argument and optional-argument parameters.
* Unambiguous prefixes (``--thr`` for ``--threads``) are accepted unless
  abbreviation is disabled; an exact name always wins.
* With ``long_only=True`` a single dash works too (``-name``).
* Tokens that are not options are collected as operands; ``--`` ends
  option processing and everything after it is an operand.

Every recognised occurrence goes through the commit pipeline:

1. take the raw argument (empty when none was supplied);
2. a boolean with no argument becomes ``"true"``;
3. single-value — reject text containing a comma, warn on repeats and
   keep the latest value;
4. multi-value — append repeats to the previous value with a comma,
   warning as it happens;
5. validate the result against the parameter's kind;
6. commit through :meth:`~clparams.core.registry.ParameterRegistry.set`.

Problems are reported as diagnostics and the occurrence is skipped;
scanning always continues to the end of the argument vector.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from clparams.core.kinds import ValueKind
from clparams.core.models import Arity, ParameterSpec
from clparams.diagnostics import Diagnostic, DiagnosticCode, Severity

if TYPE_CHECKING:
    from clparams.core.registry import ParameterRegistry

TERMINATOR: str = "--"


class ArgumentMode(IntEnum):
    """Whether an option takes an argument (mirrors ``getopt``'s ``has_arg``)."""

    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2

    @classmethod
    def from_arity(cls, arity: Arity) -> ArgumentMode:
        if arity & Arity.NO_ARGUMENT:
            return cls.NONE
        if arity & Arity.REQUIRED_ARGUMENT:
            return cls.REQUIRED
        return cls.OPTIONAL


@dataclass(frozen=True, slots=True)
class OptionEntry:
    """One row of the option table."""

    option_id: int
    name: str
    mode: ArgumentMode


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of one :meth:`CommandLineScanner.scan` call."""

    operands: tuple[str, ...]
    """Non-option tokens, in order, including everything after ``--``."""

    diagnostics: tuple[Diagnostic, ...]
    """Every finding reported during the scan, in order."""

    committed: tuple[str, ...]
    """Names of parameters assigned, one per committed occurrence."""

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if d.is_error)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(d for d in self.diagnostics if not d.is_error)

    @property
    def ok(self) -> bool:
        """``True`` when no error diagnostic was produced."""
        return not self.errors


class CommandLineScanner:
    """Scan argument vectors into a :class:`ParameterRegistry`.

    Parameters
    ----------
    registry:
        Registry providing the declared options and receiving the values.
    long_only:
        Also accept long options introduced by a single dash.
    allow_abbrev:
        Accept unambiguous prefixes of option names.
    """

    def __init__(
        self,
        registry: ParameterRegistry,
        *,
        long_only: bool = False,
        allow_abbrev: bool = True,
    ) -> None:
        self._registry = registry
        self._long_only = long_only
        self._allow_abbrev = allow_abbrev

    # ------------------------------------------------------------------
    # Option table
    # ------------------------------------------------------------------

    def option_table(self) -> tuple[OptionEntry, ...]:
        """Build the option table: lexicographic names, ids from 1."""
        return tuple(
            OptionEntry(option_id=index, name=spec.name, mode=ArgumentMode.from_arity(spec.arity))
            for index, spec in enumerate(self._registry.specs(), start=1)
        )

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def scan(self, argv: Sequence[str]) -> ScanResult:
        """Scan *argv* (program name excluded) left to right.

        Never raises for malformed input; see :class:`ScanResult` for
        what was found.
        """
        table = self.option_table()
        by_id = {entry.option_id: entry for entry in table}
        operands: list[str] = []
        diagnostics: list[Diagnostic] = []
        committed: list[str] = []

        index = 0
        while index < len(argv):
            token = argv[index]
            index += 1

            if token == TERMINATOR:
                operands.extend(argv[index:])
                break

            body = self._option_body(token)
            if body is None:
                operands.append(token)
                continue

            key, has_inline, inline = body.partition("=")
            option_id = self._resolve(key, table, token, diagnostics)
            if option_id is None:
                continue
            entry = by_id[option_id]
            shown = f"--{entry.name}"

            raw: str | None = None
            if entry.mode is ArgumentMode.NONE:
                if has_inline:
                    diagnostics.append(
                        self._error(
                            DiagnosticCode.UNEXPECTED_ARGUMENT,
                            f"Error : Option '{shown}' doesn't allow an argument.",
                            entry.name,
                        )
                    )
                    continue
            elif has_inline:
                raw = inline
            elif entry.mode is ArgumentMode.REQUIRED:
                if index >= len(argv):
                    diagnostics.append(
                        self._error(
                            DiagnosticCode.MISSING_ARGUMENT,
                            f"Error : Option '{shown}' requires an argument.",
                            entry.name,
                        )
                    )
                    continue
                raw = argv[index]
                index += 1

            if self._commit(self._registry.spec(entry.name), raw, diagnostics):
                committed.append(entry.name)

        return ScanResult(
            operands=tuple(operands),
            diagnostics=tuple(diagnostics),
            committed=tuple(committed),
        )

    def unclaimed_tokens(self, argv: Sequence[str]) -> tuple[str, ...]:
        """Return the tokens before ``--`` that no declared option claims.

        A token is claimed when it names a declared option or is the value
        a ``REQUIRED_ARGUMENT`` option consumes.  Nothing is committed or
        reported.
        """
        table = self.option_table()
        unclaimed: list[str] = []

        index = 0
        while index < len(argv):
            token = argv[index]
            index += 1

            if token == TERMINATOR:
                break

            body = self._option_body(token)
            if body is None:
                unclaimed.append(token)
                continue

            key, has_inline, _ = body.partition("=")
            matches = self._match(key, table)
            if len(matches) != 1:
                unclaimed.append(token)
                continue
            if matches[0].mode is ArgumentMode.REQUIRED and not has_inline:
                index += 1

        return tuple(unclaimed)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _option_body(self, token: str) -> str | None:
        """Strip the option prefix from *token*; ``None`` for operands."""
        if token.startswith("--") and len(token) > 2:
            return token[2:]
        if self._long_only and token.startswith("-") and len(token) > 1:
            return token[1:]
        return None

    def _match(self, key: str, table: tuple[OptionEntry, ...]) -> list[OptionEntry]:
        """Entries *key* could name: the exact match, else every prefix match."""
        for entry in table:
            if entry.name == key:
                return [entry]
        if not (self._allow_abbrev and key):
            return []
        return [e for e in table if e.name.startswith(key)]

    def _resolve(
        self,
        key: str,
        table: tuple[OptionEntry, ...],
        token: str,
        diagnostics: list[Diagnostic],
    ) -> int | None:
        """Map an option name (or prefix) to its option id."""
        matches = self._match(key, table)
        if len(matches) == 1:
            return matches[0].option_id

        shown = token.partition("=")[0]
        if matches:
            candidates = " ".join(f"'--{e.name}'" for e in matches)
            diagnostics.append(
                self._error(
                    DiagnosticCode.AMBIGUOUS_OPTION,
                    f"Error : Option '{shown}' is ambiguous; possibilities: {candidates}",
                )
            )
        else:
            diagnostics.append(
                self._error(
                    DiagnosticCode.UNRECOGNIZED_OPTION,
                    f"Error : Unrecognized option '{shown}'.",
                )
            )
        return None

    def _commit(
        self,
        spec: ParameterSpec,
        raw: str | None,
        diagnostics: list[Diagnostic],
    ) -> bool:
        """Run one occurrence through the commit pipeline."""
        argument = raw if raw is not None else ""
        if spec.kind is ValueKind.BOOL and argument == "":
            argument = "true"

        explicitly_set = not self._registry.uses_default(spec.name)
        if spec.is_multi_value:
            if explicitly_set:
                diagnostics.append(
                    self._warning(
                        DiagnosticCode.REPEATED_OPTION,
                        f"Warning : Parameter {spec.label} specified more than once, "
                        f"latter value {argument} is appended to previous ones.",
                        spec.name,
                    )
                )
                argument = f"{self._registry.get(spec.name)},{argument}"
            elements = argument.split(",")
        else:
            if "," in argument:
                diagnostics.append(
                    self._error(
                        DiagnosticCode.SINGLE_VALUE_VIOLATION,
                        f"Error : Parameter {spec.label} only takes single argument.",
                        spec.name,
                    )
                )
                return False
            if explicitly_set:
                diagnostics.append(
                    self._warning(
                        DiagnosticCode.REPEATED_OPTION,
                        f"Warning : Parameter {spec.label} specified more than once, "
                        f"only latter value {argument} is effective.",
                        spec.name,
                    )
                )
            elements = [argument]

        if not all(spec.kind.is_valid(element) for element in elements):
            diagnostics.append(
                self._error(
                    DiagnosticCode.INVALID_VALUE_TEXT,
                    f"Error : Parameter {spec.label} only takes in "
                    f"{spec.kind.type_name}, argument {argument} is invalid.",
                    spec.name,
                )
            )
            return False

        self._registry.set(spec.name, argument)
        return True

    def _error(self, code: DiagnosticCode, message: str, name: str | None = None) -> Diagnostic:
        return self._registry.report(code, Severity.ERROR, message, name)

    def _warning(self, code: DiagnosticCode, message: str, name: str | None = None) -> Diagnostic:
        return self._registry.report(code, Severity.WARNING, message, name)
