"""CLI layer — host-facing parsing helpers, console and error boundary.

This package is the outermost layer.  It may import from ``core``, but
``core`` never imports from ``cli`` (the console proxy is reached only
through :mod:`clparams.diagnostics`, and only when a diagnostic is
printed).
"""

from clparams.cli.app import cli, parse_command_line

__all__ = ["cli", "parse_command_line"]
