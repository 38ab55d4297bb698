"""Build significance bracket tables for faceted bar/box plots.

The output of :func:`generate_signif_data` is plain geometry: for every facet
and requested comparison, the two group labels spanned by the bracket, the
bracket height and its text.  Drawing is left to the plotting layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import Sequence

import pandas as pd

from .config import AnnotationConfig
from .data_handler import Columns, DataHandler
from .errors import ConfigurationError, Diagnostic, DiagnosticKind
from .formatting import make_label
from .stats_engine import ComparisonFailed, PairResult, StatsEngine, adjust_p_values

logger = logging.getLogger(__name__)

_MIN_N = 2
ANNOTATION_COLUMNS = ["start", "end", "y", "label"]


# ------------------------------------------------------------------
# Result container
# ------------------------------------------------------------------

@dataclass
class AnnotationRow:
    """One bracket: *group_a* to *group_b* at height *y* inside *facet*."""
    facet: object
    group_a: object
    group_b: object
    y: float
    label: str
    p_value: float
    test_name: str


@dataclass
class AnnotationResult:
    """Annotation rows plus the comparisons that were skipped."""
    facet_col: str
    rows: list[AnnotationRow] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def to_dataframe(self, include_stats: bool = False) -> pd.DataFrame:
        """Return ``[facet_col, start, end, y, label]`` (plus ``p``, ``test``)."""
        columns = [self.facet_col] + ANNOTATION_COLUMNS
        if include_stats:
            columns += ["p", "test"]
        records = []
        for r in self.rows:
            rec = [r.facet, r.group_a, r.group_b, r.y, r.label]
            if include_stats:
                rec += [r.p_value, r.test_name]
            records.append(rec)
        return pd.DataFrame(records, columns=columns)

    @property
    def warnings(self) -> list[str]:
        return [str(d) for d in self.diagnostics]


# Internal: a successful comparison waiting for its label
@dataclass
class _Pending:
    facet: object
    index: int
    ceiling: float
    pair: PairResult


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _check_comparisons(comparisons) -> list[tuple] | None:
    if comparisons is None:
        return None
    if isinstance(comparisons, (str, bytes)):
        raise ConfigurationError("comparisons must be a sequence of (group_a, group_b) pairs.")
    checked = []
    for comp in comparisons:
        if isinstance(comp, (str, bytes)) or not hasattr(comp, "__len__") or len(comp) != 2:
            raise ConfigurationError(
                f"Each comparison must be a (group_a, group_b) pair, got {comp!r}."
            )
        checked.append((comp[0], comp[1]))
    return checked


def _auto_pairs(groups: list, control) -> list[tuple]:
    """All pairwise combinations of *groups*, optionally only vs *control*."""
    pairs = list(combinations(groups, 2))
    if control is not None:
        pairs = [p for p in pairs if control in p]
    return pairs


def _skip(diagnostics: list, kind: DiagnosticKind, facet, a, b, message: str) -> None:
    diag = Diagnostic(kind=kind, facet=facet, group_a=a, group_b=b, message=message)
    logger.warning("Skipping comparison %s", diag)
    diagnostics.append(diag)


# ------------------------------------------------------------------
# Generator
# ------------------------------------------------------------------

def generate_signif_data(
    data: pd.DataFrame,
    comparisons: Sequence[tuple] | None = None,
    group_col: str | None = None,
    facet_col: str | None = None,
    value_col: str | None = None,
    config: AnnotationConfig | None = None,
) -> AnnotationResult:
    """Compute significance brackets for each facet of *data*.

    Parameters
    ----------
    data
        Long-format observations: one row per measurement.
    comparisons
        Ordered ``(group_a, group_b)`` pairs.  ``None`` compares every pair
        of groups present in each facet (restricted to pairs with
        ``config.control_group`` when set); an empty list yields no rows.
    group_col, facet_col, value_col
        Column names.  Omit all three to use the first three columns of
        *data* as group, facet and value.
    config
        Test, label and placement options.

    Returns
    -------
    AnnotationResult whose ``rows`` follow facet first-appearance order, then
    comparison order.  Comparisons with fewer than two values on a side, or
    for which the test fails, are left out and listed in ``diagnostics``.

    Raises
    ------
    ConfigurationError
        For malformed tables, column names or comparisons.  Raised before any
        test is run.
    """
    cfg = config or AnnotationConfig()
    requested = _check_comparisons(comparisons)
    names_given = any(c is not None for c in (group_col, facet_col, value_col))
    if data.shape[1] == 0 and not names_given:
        return AnnotationResult(facet_col="facet")
    cols = DataHandler.resolve_columns(data, group_col, facet_col, value_col)
    result = AnnotationResult(facet_col=cols.facet)

    if data.empty:
        return result

    df = DataHandler.clean(data, cols)
    engine = StatsEngine(cfg)
    pending: list[_Pending] = []

    for facet in DataHandler.facets(df, cols.facet):
        facet_df = df[df[cols.facet] == facet]
        pending.extend(
            _run_facet(facet, facet_df, cols, requested, cfg, engine, result.diagnostics)
        )

    # Adjustment spans every comparison of the run
    raw = [item.pair.p_value for item in pending]
    adjusted = adjust_p_values(raw, cfg.p_adjust)

    for item, p in zip(pending, adjusted):
        y = item.ceiling * cfg.y_offset_multiplier * (1 + item.index * cfg.stagger_step)
        result.rows.append(AnnotationRow(
            facet=item.facet,
            group_a=item.pair.group_a,
            group_b=item.pair.group_b,
            y=float(y),
            label=make_label(p, cfg.label_format),
            p_value=p,
            test_name=item.pair.test_name,
        ))

    return result


def _run_facet(
    facet,
    facet_df: pd.DataFrame,
    cols: Columns,
    requested: list[tuple] | None,
    cfg: AnnotationConfig,
    engine: StatsEngine,
    diagnostics: list[Diagnostic],
) -> list[_Pending]:
    ceilings = DataHandler.group_ceilings(facet_df, cols)
    if requested is None:
        pairs = _auto_pairs(DataHandler.group_names(facet_df, cols.group), cfg.control_group)
    else:
        pairs = requested

    out: list[_Pending] = []
    for i, (a, b) in enumerate(pairs):
        a_vals = DataHandler.group_values(facet_df, cols, a)
        b_vals = DataHandler.group_values(facet_df, cols, b)

        if cfg.paired and len(a_vals) >= _MIN_N and len(b_vals) >= _MIN_N:
            try:
                a_vals, b_vals = DataHandler.paired_values(facet_df, cols, a, b)
            except ValueError as exc:
                _skip(
                    diagnostics, DiagnosticKind.COMPUTATION_FAILURE, facet, a, b,
                    f"test failed: {exc}",
                )
                continue

        if len(a_vals) < _MIN_N or len(b_vals) < _MIN_N:
            _skip(
                diagnostics, DiagnosticKind.INSUFFICIENT_DATA, facet, a, b,
                f"not enough data (n={len(a_vals)} and n={len(b_vals)}, need {_MIN_N} each)",
            )
            continue

        try:
            pair = engine.compare(a, b, a_vals, b_vals)
        except (ComparisonFailed, ValueError, FloatingPointError) as exc:
            _skip(
                diagnostics, DiagnosticKind.COMPUTATION_FAILURE, facet, a, b,
                f"test failed: {exc}",
            )
            continue

        out.append(_Pending(
            facet=facet,
            index=i,
            ceiling=max(ceilings[a], ceilings[b]),
            pair=pair,
        ))
    return out
