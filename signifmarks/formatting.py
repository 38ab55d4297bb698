"""Turn p-values into bracket labels."""

from __future__ import annotations

import pandas as pd

from .config import LabelFormat, parse_label_format


def _is_missing(p: float | None) -> bool:
    return p is None or bool(pd.isna(p))


def signif_label(p: float | None) -> str:
    """Return the significance symbol for *p*.

    Thresholds are strict: p=0.001 is ``"**"``, p=0.05 is ``"ns"``.
    """
    if _is_missing(p):
        return "NA"
    if p < 0.001:
        return "***"
    if p < 0.01:
        return "**"
    if p < 0.05:
        return "*"
    return "ns"


def format_p_value(p: float | None) -> str:
    """Format a p-value for display next to a bracket."""
    if _is_missing(p):
        return "NA"
    if p < 0.001:
        return "< 0.001"
    if p < 0.01:
        return f"{p:.3f}"
    return f"{p:.2f}"


def _format_p_raw(p: float | None) -> str:
    if _is_missing(p):
        return "NA"
    return repr(float(p))


def _format_p_scientific(p: float | None) -> str:
    """Format a p-value for scientific notation display."""
    if _is_missing(p):
        return "NA"
    if p < 0.0001:
        return "p<0.0001"
    return f"p={p:.2e}"


_FORMATTERS = {
    LabelFormat.SIGNIF: signif_label,
    LabelFormat.NUMERIC: format_p_value,
    LabelFormat.RAW: _format_p_raw,
    LabelFormat.SCIENTIFIC: _format_p_scientific,
}


def make_label(p: float | None, label_format: LabelFormat | str = LabelFormat.SIGNIF) -> str:
    """Render *p* in the requested *label_format*."""
    return _FORMATTERS[parse_label_format(label_format)](p)
