"""The parameter registry — single source of truth for declared parameters.

Lifecycle
---------
1. **Registration** — the host declares every parameter with
   :meth:`ParameterRegistry.register`.
2. **Parsing** (optional) — :meth:`ParameterRegistry.parse_command_line`
   runs a :class:`~clparams.core.scanner.CommandLineScanner` over the
   process arguments and commits validated values.
3. **Consumption** — the host reads values back with :meth:`get`,
   :meth:`get_typed` or :meth:`get_list`.

Values are stored as text and converted on read, so a parameter's
:class:`~clparams.core.kinds.ValueKind` governs validation and coercion
but never the storage format.

The registry is not thread-safe.  Hosts that register, parse and read
from several threads must synchronise externally.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import IO, Any

from clparams.core.help import format_help, print_help
from clparams.core.kinds import ValueKind
from clparams.core.models import Arity, DeclSite, ParameterSpec, normalize_arity
from clparams.core.protocols import DiagnosticReporter
from clparams.core.scanner import CommandLineScanner, ScanResult
from clparams.diagnostics import ConsoleReporter, Diagnostic, DiagnosticCode, Severity
from clparams.exceptions import (
    DuplicateDeclarationError,
    InvalidNoArgumentKindError,
    InvalidValueTextError,
    UnknownParameterError,
)

DEFAULT_SUMMARY: str = "<program> [optional arguments]"


@dataclass(slots=True)
class _Entry:
    """Registry-private record pairing a declaration with its state."""

    spec: ParameterSpec
    value: str
    uses_default: bool = True


class ParameterRegistry:
    """Owns every declared parameter and its current text value.

    Parameters
    ----------
    summary:
        First line of the generated help text.
    trace:
        When ``True``, every assignment emits ``Parameter <name> <- <value>``
        through the reporter.
    reporter:
        Receives diagnostics and trace lines.  Defaults to a
        :class:`~clparams.diagnostics.ConsoleReporter` writing to stderr.
    """

    def __init__(
        self,
        summary: str = DEFAULT_SUMMARY,
        *,
        trace: bool = False,
        reporter: DiagnosticReporter | None = None,
    ) -> None:
        self.summary: str = summary
        self._trace: bool = trace
        self._reporter: DiagnosticReporter = (
            reporter if reporter is not None else ConsoleReporter()
        )
        self._entries: dict[str, _Entry] = {}

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def trace(self) -> bool:
        return self._trace

    @property
    def reporter(self) -> DiagnosticReporter:
        return self._reporter

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def names(self) -> list[str]:
        """Return every declared name in lexicographic order."""
        return sorted(self._entries)

    def specs(self) -> list[ParameterSpec]:
        """Return every declaration in lexicographic name order."""
        return [self._entries[name].spec for name in self.names()]

    def spec(self, name: str) -> ParameterSpec:
        """Return the declaration of *name*."""
        return self._entry(name).spec

    def uses_default(self, name: str) -> bool:
        """Return ``True`` while *name* has never been explicitly assigned."""
        return self._entry(name).uses_default

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        name: str,
        arity: Arity | int = Arity(0),
        default: object = None,
        description: str = "",
        kind: ValueKind | type | str | None = None,
        *,
        site: DeclSite | None = None,
    ) -> None:
        """Declare a parameter.

        *default* may be text or a typed Python value; typed values are
        formatted with the kind's formatter.  When *kind* is omitted it is
        inferred from *default* (text and ``None`` mean ``STR``).  When
        *site* is omitted the caller's file and line are recorded.

        Declaring the same name again from the same site is accepted and
        resets the entry to its default.

        Raises
        ------
        InvalidArityError
            If *arity* sets two flags of the same group.
        InvalidNoArgumentKindError
            If ``NO_ARGUMENT`` is requested for a non-boolean kind.
        DuplicateDeclarationError
            If *name* was already declared from a different site.
        """
        if site is None:
            site = DeclSite.from_caller()
        value_kind = ValueKind.infer(default) if kind is None else ValueKind.coerce(kind)
        flags = normalize_arity(name, arity, value_kind)

        if flags & Arity.NO_ARGUMENT and value_kind is not ValueKind.BOOL:
            raise InvalidNoArgumentKindError(
                f"NO_ARGUMENT can only be applied to bool parameter, "
                f"but {name} is {value_kind.type_name}",
                hint=f"Declared at {site}.",
            )

        existing = self._entries.get(name)
        if existing is not None and existing.spec.site != site:
            raise DuplicateDeclarationError(
                f"Parameter {name} has been defined before, {existing.spec.site}",
                hint=f"Conflicting declaration at {site}.",
            )

        if default is None:
            default_text = ""
        elif isinstance(default, str):
            default_text = default
        else:
            default_text = value_kind.format(default)

        if flags & Arity.NO_ARGUMENT and _is_true(default_text):
            self.report(
                DiagnosticCode.NO_EFFECT_DEFAULT,
                Severity.WARNING,
                f"Warning: Bool parameter {name}({site}) with NO_ARGUMENT "
                f"and true default value, has no effect",
                name,
            )

        spec = ParameterSpec(
            name=name,
            arity=flags,
            kind=value_kind,
            default=default_text,
            description=description,
            site=site,
        )
        self._entries[name] = _Entry(spec=spec, value=default_text)

    # ------------------------------------------------------------------
    # Assignment
    # ------------------------------------------------------------------

    def set(self, name: str, value: object) -> None:
        """Assign *value* to *name* and mark it explicitly set.

        Text is stored verbatim; any other value goes through
        :meth:`set_typed`.

        Raises
        ------
        UnknownParameterError
            If *name* was never declared.
        """
        if not isinstance(value, str):
            self.set_typed(name, value)
            return
        entry = self._entry(name)
        if self._trace:
            self._reporter.trace(f"Parameter {name} <- {value}")
        entry.value = value
        entry.uses_default = False

    def set_typed(self, name: str, value: object) -> None:
        """Format *value* with the parameter's kind and assign it.

        Raises
        ------
        UnknownParameterError
            If *name* was never declared.
        InvalidValueTextError
            If *value* cannot be encoded as the parameter's kind.
        """
        kind = self._entry(name).spec.kind
        self.set(name, kind.format(value))

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    def get(self, name: str) -> str:
        """Return the current text value of *name*.

        Raises
        ------
        UnknownParameterError
            If *name* was never declared.
        """
        return self._entry(name).value

    def get_typed(self, name: str, kind: ValueKind | type | str | None = None) -> Any:
        """Return the current value of *name* parsed as *kind*.

        *kind* defaults to the declared kind of the parameter.

        Raises
        ------
        UnknownParameterError
            If *name* was never declared.
        InvalidValueTextError
            If the stored text is not valid for *kind*.
        """
        entry = self._entry(name)
        value_kind = entry.spec.kind if kind is None else ValueKind.coerce(kind)
        try:
            return value_kind.parse(entry.value)
        except InvalidValueTextError as exc:
            raise InvalidValueTextError(
                f"Parameter {name} holds {entry.value!r}, "
                f"which is not a valid {value_kind.type_name}",
            ) from exc

    def get_list(self, name: str, kind: ValueKind | type | str | None = None) -> list[Any]:
        """Split a comma-separated value of *name* and parse every element.

        An empty value yields an empty list.

        Raises
        ------
        UnknownParameterError
            If *name* was never declared.
        InvalidValueTextError
            If any element is not valid for *kind*.
        """
        entry = self._entry(name)
        value_kind = entry.spec.kind if kind is None else ValueKind.coerce(kind)
        if entry.value == "":
            return []
        items: list[Any] = []
        for part in entry.value.split(","):
            try:
                items.append(value_kind.parse(part))
            except InvalidValueTextError as exc:
                raise InvalidValueTextError(
                    f"Parameter {name} holds element {part!r}, "
                    f"which is not a valid {value_kind.type_name}",
                ) from exc
        return items

    def list_values(self) -> dict[str, str]:
        """Snapshot of every current value, keyed by name."""
        return {name: self._entries[name].value for name in self.names()}

    # ------------------------------------------------------------------
    # Auditing
    # ------------------------------------------------------------------

    def check_required(self) -> list[Diagnostic]:
        """Report every required parameter whose value is empty.

        Findings are delivered to the reporter and returned.  This never
        raises: deciding whether missing parameters are fatal is left to
        the caller.
        """
        missing: list[Diagnostic] = []
        for spec in self.specs():
            if not spec.is_required or self._entries[spec.name].value != "":
                continue
            missing.append(
                self.report(
                    DiagnosticCode.MISSING_REQUIRED,
                    Severity.ERROR,
                    f"Error : Required parameter {spec.label} is not present.",
                    spec.name,
                )
            )
        return missing

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    def parse_command_line(
        self,
        argv: Sequence[str],
        *,
        long_only: bool = False,
        allow_abbrev: bool = True,
    ) -> ScanResult:
        """Scan *argv* (program name excluded) into this registry."""
        scanner = CommandLineScanner(self, long_only=long_only, allow_abbrev=allow_abbrev)
        return scanner.scan(argv)

    def format_help(self) -> str:
        return format_help(self)

    def print_help(self, file: IO[str] | None = None) -> None:
        print_help(self, file=file)

    def report(
        self,
        code: DiagnosticCode,
        severity: Severity,
        message: str,
        name: str | None = None,
    ) -> Diagnostic:
        """Build a diagnostic, hand it to the reporter and return it."""
        diagnostic = Diagnostic(code=code, severity=severity, message=message, name=name)
        self._reporter.report(diagnostic)
        return diagnostic

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _entry(self, name: str) -> _Entry:
        entry = self._entries.get(name)
        if entry is None:
            raise UnknownParameterError(f"Parameter {name} has not been defined")
        return entry


def _is_true(text: str) -> bool:
    return ValueKind.BOOL.is_valid(text) and ValueKind.BOOL.parse(text) is True
