"""Shared pytest fixtures and configuration for the clparams test suite.

Guidelines
----------
* Diagnostics are asserted through a ``CollectingReporter`` — console
  output is only inspected by the tests that target the console.
* Declaration sites are passed explicitly wherever duplicate detection
  matters, so tests never depend on source line numbers.
"""

from __future__ import annotations

import pytest

from clparams.core.registry import ParameterRegistry
from clparams.diagnostics import CollectingReporter


@pytest.fixture()
def reporter() -> CollectingReporter:
    return CollectingReporter()


@pytest.fixture()
def registry(reporter: CollectingReporter) -> ParameterRegistry:
    return ParameterRegistry("demo [optional arguments]", reporter=reporter)
