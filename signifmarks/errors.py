"""Error and diagnostic types for annotation generation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConfigurationError(ValueError):
    """Invalid options or a malformed observation table.

    Raised before any comparison is run.
    """


class DiagnosticKind(Enum):
    INSUFFICIENT_DATA = "insufficient_data"      # < 2 values on one side
    COMPUTATION_FAILURE = "computation_failure"  # test gave no usable p-value


@dataclass(frozen=True)
class Diagnostic:
    """A skipped (facet, comparison) and the reason it was skipped."""
    kind: DiagnosticKind
    facet: object
    group_a: object
    group_b: object
    message: str

    def __str__(self) -> str:
        return f"[{self.facet}] {self.group_a} vs {self.group_b}: {self.message}"
