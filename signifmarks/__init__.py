"""Pairwise significance brackets for grouped / faceted plots."""

from .annotations import AnnotationResult, AnnotationRow, generate_signif_data
from .config import AnnotationConfig, LabelFormat, PAdjustMethod
from .errors import ConfigurationError, Diagnostic, DiagnosticKind
from .formatting import format_p_value, make_label, signif_label

__all__ = [
    "AnnotationConfig",
    "AnnotationResult",
    "AnnotationRow",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticKind",
    "LabelFormat",
    "PAdjustMethod",
    "format_p_value",
    "generate_signif_data",
    "make_label",
    "signif_label",
]

__version__ = "0.1.0"
