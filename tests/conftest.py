"""Shared test fixtures for signifmarks."""

import numpy as np
import pandas as pd
import pytest

from signifmarks.config import AnnotationConfig


def _long(records: dict, group="treatment", facet="cell_types", value="expression"):
    """Build a long table from {(facet, group): values}."""
    rows = []
    for (f, g), vals in records.items():
        rows.extend({group: g, facet: f, value: v} for v in vals)
    return pd.DataFrame(rows, columns=[group, facet, value])


@pytest.fixture
def drug_data() -> pd.DataFrame:
    """Two facets; T1 differs strongly, T2 is identical between groups."""
    return _long({
        ("T1", "Ctrl"): [1.0, 2.0, 3.0],
        ("T1", "Drug"): [10.0, 11.0, 12.0],
        ("T2", "Ctrl"): [1.0, 1.0, 1.0],
        ("T2", "Drug"): [1.0, 1.0, 1.0],
    })


@pytest.fixture
def three_group_data() -> pd.DataFrame:
    """Three groups in two facets, each group topping out at 10."""
    rng = np.random.default_rng(42)
    records = {}
    for facet in ("Liver", "Kidney"):
        for group, mean in (("A", 5.0), ("B", 6.0), ("C", 8.0)):
            vals = list(np.round(rng.normal(mean, 0.5, size=5), 3))
            vals[0] = 10.0
            records[(facet, group)] = vals
    return _long(records)


@pytest.fixture
def sparse_data() -> pd.DataFrame:
    """Group A has a single observation; B and C have plenty."""
    return _long({
        ("F1", "A"): [4.0],
        ("F1", "B"): [5.0, 6.0, 7.0, 6.5],
        ("F1", "C"): [9.0, 8.0, 8.5, 9.5],
    })


@pytest.fixture
def paired_data() -> pd.DataFrame:
    """Paired measurements (before/after) on the same subjects."""
    rng = np.random.default_rng(42)
    baseline = rng.normal(50, 5, size=10)
    after = baseline + rng.normal(5, 2, size=10)
    return _long({
        ("S1", "Before"): list(baseline),
        ("S1", "After"): list(after),
    })


@pytest.fixture
def default_config() -> AnnotationConfig:
    return AnnotationConfig()
