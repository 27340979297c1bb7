"""Human-readable help text generated from a registry.

Layout::

    <summary>

    Required arguments:
    --name : <kind>, default = <value>
    	<description>

    Optional arguments:
    --name : <kind>, default = <value>
    	<description>

A section is omitted when no parameter belongs to it.
"""

from __future__ import annotations

import sys
from typing import IO, TYPE_CHECKING

from clparams.core.models import ParameterSpec

if TYPE_CHECKING:
    from clparams.core.registry import ParameterRegistry


def format_entry(spec: ParameterSpec) -> str:
    """Render one parameter as its two help lines."""
    default = spec.kind.display(spec.default)
    return (
        f"--{spec.name} : {spec.kind.type_name}, default = {default}\n"
        f"\t{spec.description}"
    )


def format_help(registry: ParameterRegistry) -> str:
    """Return the full help text for *registry*, newline-terminated."""
    lines: list[str] = [registry.summary]
    specs = registry.specs()
    sections = (
        ("Required arguments:", [s for s in specs if s.is_required]),
        ("Optional arguments:", [s for s in specs if not s.is_required]),
    )
    for title, members in sections:
        if not members:
            continue
        lines.append("")
        lines.append(title)
        lines.extend(format_entry(spec) for spec in members)
    return "\n".join(lines) + "\n"


def print_help(registry: ParameterRegistry, file: IO[str] | None = None) -> None:
    """Write the help text for *registry* to *file* (stdout by default)."""
    (file or sys.stdout).write(format_help(registry))
