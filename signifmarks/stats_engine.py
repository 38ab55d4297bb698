"""Two-sample comparisons and multiple-comparison adjustment."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy import stats
from statsmodels.stats.multitest import multipletests

from .config import AnnotationConfig, PAdjustMethod


# ------------------------------------------------------------------
# Result container
# ------------------------------------------------------------------

class ComparisonFailed(Exception):
    """The test could not produce a p-value for this pair."""


@dataclass
class PairResult:
    """Result for one pairwise comparison."""
    group_a: str
    group_b: str
    test_name: str
    statistic: float
    p_value: float
    n_a: int
    n_b: int


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _is_constant(values: np.ndarray) -> bool:
    return len(values) > 0 and np.ptp(values) == 0


# ------------------------------------------------------------------
# Engine
# ------------------------------------------------------------------

class StatsEngine:
    """Run two-sample location tests on value vectors."""

    def __init__(self, config: AnnotationConfig | None = None) -> None:
        self.config = config or AnnotationConfig()

    def compare(
        self,
        group_a: str,
        group_b: str,
        a_vals: np.ndarray,
        b_vals: np.ndarray,
    ) -> PairResult:
        """Compare two value vectors (NaNs already removed).

        Independent samples use Welch's t-test, paired samples use the
        paired t-test on values in input order.  Two constant samples
        holding the same value give p=1.0; any other degenerate input
        raises ``ComparisonFailed``.
        """
        a_vals = np.asarray(a_vals, dtype=float)
        b_vals = np.asarray(b_vals, dtype=float)

        if self.config.paired:
            if len(a_vals) != len(b_vals):
                raise ComparisonFailed(
                    f"paired test needs equal sizes, got {len(a_vals)} and {len(b_vals)}"
                )
            test_name = "Paired t-test"
            diffs = a_vals - b_vals
            if _is_constant(diffs):
                if diffs[0] == 0:
                    return self._no_difference(group_a, group_b, test_name, a_vals, b_vals)
                raise ComparisonFailed("paired differences are constant")
            stat, p = stats.ttest_rel(a_vals, b_vals)
        else:
            test_name = "Welch's t-test"
            if _is_constant(a_vals) and _is_constant(b_vals):
                if a_vals[0] == b_vals[0]:
                    return self._no_difference(group_a, group_b, test_name, a_vals, b_vals)
                raise ComparisonFailed("data are essentially constant")
            stat, p = stats.ttest_ind(a_vals, b_vals, equal_var=False)

        stat, p = float(stat), float(p)
        if not np.isfinite(p):
            raise ComparisonFailed(f"{test_name} returned p={p}")

        return PairResult(
            group_a=group_a,
            group_b=group_b,
            test_name=test_name,
            statistic=stat,
            p_value=p,
            n_a=len(a_vals),
            n_b=len(b_vals),
        )

    @staticmethod
    def _no_difference(group_a, group_b, test_name, a_vals, b_vals) -> PairResult:
        return PairResult(
            group_a=group_a,
            group_b=group_b,
            test_name=test_name,
            statistic=0.0,
            p_value=1.0,
            n_a=len(a_vals),
            n_b=len(b_vals),
        )


def adjust_p_values(p_values: list[float], method: PAdjustMethod) -> list[float]:
    """Apply a multiple-comparison correction across one run's p-values."""
    if method == PAdjustMethod.NONE or not p_values:
        return list(p_values)
    _, p_adj, _, _ = multipletests(p_values, method=method.value)
    return [float(p) for p in p_adj]
