"""Command-line entry point.

Usage:
    signifmarks <data.csv> <out.csv> [A:B,A:C] [settings.json]

The first three columns of *data.csv* are taken as group, facet and value.
Without a comparison list every pair of groups in each facet is compared.
Skipped comparisons are reported on stderr.  Group and facet labels are read
as text, so numeric-looking labels such as `1` match `1:2`.  An invalid
settings file stops the run with an error.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd


def _parse_comparisons(arg: str) -> list[tuple[str, str]]:
    pairs = []
    for item in arg.split(","):
        item = item.strip()
        if not item:
            continue
        a, sep, b = item.partition(":")
        if not sep or not a.strip() or not b.strip():
            raise SystemExit(f"Bad comparison {item!r}; expected GROUP_A:GROUP_B")
        pairs.append((a.strip(), b.strip()))
    return pairs


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        raise SystemExit(
            "Usage: signifmarks <data.csv> <out.csv> [A:B,A:C] [settings.json]"
        )

    data_path = Path(args[0].strip().strip('"').strip("'"))
    out_path = Path(args[1].strip().strip('"').strip("'"))
    comparisons = _parse_comparisons(args[2]) if len(args) > 2 and args[2] else None

    from .annotations import generate_signif_data
    from .config import AnnotationConfig
    from .errors import ConfigurationError

    # Group and facet labels are compared as text, like the argv comparisons
    header = pd.read_csv(data_path, nrows=0).columns
    data = pd.read_csv(data_path, dtype={c: str for c in header[:2]})
    try:
        if len(args) > 3:
            config = AnnotationConfig.load(Path(args[3]), strict=True)
        else:
            config = AnnotationConfig()
        result = generate_signif_data(data, comparisons, config=config)
    except ConfigurationError as exc:
        raise SystemExit(f"Error: {exc}") from exc

    result.to_dataframe().to_csv(out_path, index=False)
    for msg in result.warnings:
        print(f"Warning: {msg}", file=sys.stderr)


if __name__ == "__main__":
    main()
