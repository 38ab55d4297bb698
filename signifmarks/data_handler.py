"""Resolve, validate and reshape observation tables."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from .errors import ConfigurationError


@dataclass(frozen=True)
class Columns:
    """Names of the group, facet and value columns of an observation table."""
    group: str
    facet: str
    value: str


class DataHandler:
    """Prepare long-format observation tables for annotation."""

    @staticmethod
    def resolve_columns(
        df: pd.DataFrame,
        group_col: str | None = None,
        facet_col: str | None = None,
        value_col: str | None = None,
    ) -> Columns:
        """Return the columns to use.

        Explicit names always win.  When all three are ``None`` the first
        three columns of *df* are taken as group, facet and value, in that
        order.  Naming only some of them is an error.
        """
        given = [group_col, facet_col, value_col]
        if all(c is None for c in given):
            if df.shape[1] < 3:
                raise ConfigurationError(
                    f"Cannot infer group/facet/value columns from a table "
                    f"with {df.shape[1]} column(s); need at least 3."
                )
            return Columns(*df.columns[:3])
        if any(c is None for c in given):
            raise ConfigurationError(
                "group_col, facet_col and value_col must be given together "
                "(or all omitted to infer them from column order)."
            )
        missing = [c for c in given if c not in df.columns]
        if missing:
            raise ConfigurationError(
                f"Column(s) not found in observations: {', '.join(map(str, missing))}."
            )
        if len(set(given)) < 3:
            raise ConfigurationError("group, facet and value columns must be distinct.")
        return Columns(group_col, facet_col, value_col)

    @staticmethod
    def clean(df: pd.DataFrame, cols: Columns) -> pd.DataFrame:
        """Keep the three resolved columns and coerce values to numeric.

        Non-numeric values become NaN; rows keep their original order.
        """
        out = df[[cols.group, cols.facet, cols.value]].copy()
        out[cols.value] = pd.to_numeric(out[cols.value], errors="coerce")
        return out.reset_index(drop=True)

    @staticmethod
    def facets(df: pd.DataFrame, facet_col: str) -> list:
        """Return facet labels in order of first appearance."""
        return list(pd.unique(df[facet_col].dropna()))

    @staticmethod
    def group_names(df: pd.DataFrame, group_col: str) -> list:
        """Return group labels in order of first appearance."""
        return list(pd.unique(df[group_col].dropna()))

    @staticmethod
    def group_values(df: pd.DataFrame, cols: Columns, group, dropna: bool = True) -> np.ndarray:
        """Return values of *group* within *df*, in row order.

        With ``dropna=False`` missing values keep their positions, which
        paired comparisons rely on.
        """
        vals = df.loc[df[cols.group] == group, cols.value]
        if dropna:
            vals = vals.dropna()
        return vals.to_numpy(dtype=float)

    @staticmethod
    def paired_values(
        df: pd.DataFrame, cols: Columns, group_a, group_b
    ) -> tuple[np.ndarray, np.ndarray]:
        """Return the complete pairs of *group_a* and *group_b*.

        The i-th row of each group forms a pair; pairs with a missing value
        on either side are dropped.  Raises ``ValueError`` when the groups
        have different numbers of rows.
        """
        a_all = DataHandler.group_values(df, cols, group_a, dropna=False)
        b_all = DataHandler.group_values(df, cols, group_b, dropna=False)
        if len(a_all) != len(b_all):
            raise ValueError(
                f"paired test needs equal sizes, got {len(a_all)} and {len(b_all)} rows"
            )
        complete = ~(np.isnan(a_all) | np.isnan(b_all))
        return a_all[complete], b_all[complete]

    @staticmethod
    def group_ceilings(df: pd.DataFrame, cols: Columns) -> dict:
        """Return {group: max non-missing value} for groups in *df*."""
        valid = df.dropna(subset=[cols.value])
        return valid.groupby(cols.group, sort=False)[cols.value].max().to_dict()

    @staticmethod
    def wide_to_long(
        df: pd.DataFrame,
        facet_col: str,
        group_col: str = "Group",
        value_col: str = "Value",
    ) -> pd.DataFrame:
        """Convert a wide table (one column per group plus *facet_col*) to the
        long ``[group_col, facet_col, value_col]`` layout, dropping NaN values.
        """
        if facet_col not in df.columns:
            raise ConfigurationError(f"Facet column {facet_col!r} not found.")
        long = df.melt(id_vars=[facet_col], var_name=group_col, value_name=value_col)
        long[value_col] = pd.to_numeric(long[value_col], errors="coerce")
        long = long.dropna(subset=[value_col]).reset_index(drop=True)
        return long[[group_col, facet_col, value_col]]
