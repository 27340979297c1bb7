"""Host-facing entry points: parse a registry from ``sys.argv`` and guard ``main``.

A typical host::

    registry = ParameterRegistry("mytool [optional arguments]")
    registry.register("threads", Arity.REQUIRED_ARGUMENT, 4, "Worker threads")

    def main() -> int:
        code = parse_command_line(registry, strict=True)
        if code != exit_codes.SUCCESS:
            return code
        run(registry.get_typed("threads"))
        return exit_codes.SUCCESS

    if __name__ == "__main__":
        cli(main)

Architecture notes
------------------
* No parsing logic lives here — scanning and auditing are delegated to
  the core registry.
* :func:`cli` is the only place that translates between the clparams
  error world and the OS process exit code.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence

from clparams.cli import exit_codes
from clparams.cli.console import console
from clparams.core.registry import ParameterRegistry
from clparams.core.scanner import CommandLineScanner
from clparams.exceptions import ClparamsError

HELP_FLAGS: frozenset[str] = frozenset({"--help", "-h"})


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _wants_help(
    registry: ParameterRegistry,
    args: Sequence[str],
    *,
    long_only: bool,
    allow_abbrev: bool,
) -> bool:
    """Return ``True`` when *args* ask for help the host did not declare.

    Values consumed by declared options (``--name -h``) are not requests.
    """
    if "help" in registry:
        return False
    scanner = CommandLineScanner(registry, long_only=long_only, allow_abbrev=allow_abbrev)
    return any(arg in HELP_FLAGS for arg in scanner.unclaimed_tokens(args))


def parse_command_line(
    registry: ParameterRegistry,
    argv: Sequence[str] | None = None,
    *,
    strict: bool = False,
    long_only: bool = False,
    allow_abbrev: bool = True,
) -> int:
    """Fill *registry* from the command line and audit required parameters.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    strict:
        When ``False`` (default) scanning and the required-parameter audit
        only report, and the result is always :data:`exit_codes.SUCCESS`.
        When ``True`` any error diagnostic makes the result
        :data:`exit_codes.USAGE_ERROR`.

    Returns
    -------
    int
        OS process exit code.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    if _wants_help(registry, args, long_only=long_only, allow_abbrev=allow_abbrev):
        registry.print_help()
        return exit_codes.SUCCESS

    result = registry.parse_command_line(args, long_only=long_only, allow_abbrev=allow_abbrev)
    missing = registry.check_required()

    if strict and (result.errors or missing):
        console.print("Run with --help to list accepted parameters.", style="yellow")
        return exit_codes.USAGE_ERROR
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(main: Callable[[], int]) -> None:
    """Top-level error boundary for a host's console-script entry point.

    Runs *main* and exits with its return code, guaranteeing the process
    never exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ClparamsError as exc:
        console.print(f"Error: {exc}", style="bold red")
        if exc.hint:
            console.print(f"Hint: {exc.hint}", style="yellow")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\nAborted by user.", style="yellow")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "Unexpected error. Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}",
            style="bold red",
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
