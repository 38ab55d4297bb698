"""Tests for the command-line entry point."""

import json

import pandas as pd
import pytest

from signifmarks.cli import _parse_comparisons, main


class TestParseComparisons:
    def test_pairs(self):
        assert _parse_comparisons("Ctrl:Drug, Ctrl:Vehicle") == [
            ("Ctrl", "Drug"), ("Ctrl", "Vehicle"),
        ]

    def test_bad_pair(self):
        with pytest.raises(SystemExit):
            _parse_comparisons("CtrlDrug")


class TestMain:
    def test_writes_annotation_csv(self, tmp_path, drug_data):
        src = tmp_path / "data.csv"
        out = tmp_path / "out.csv"
        drug_data.to_csv(src, index=False)

        main([str(src), str(out), "Ctrl:Drug"])

        df = pd.read_csv(out)
        assert list(df.columns) == ["cell_types", "start", "end", "y", "label"]
        assert list(df["label"]) == ["***", "ns"]

    def test_settings_file(self, tmp_path, drug_data):
        src = tmp_path / "data.csv"
        out = tmp_path / "out.csv"
        settings = tmp_path / "settings.json"
        drug_data.to_csv(src, index=False)
        settings.write_text(json.dumps({"label_format": "numeric"}))

        main([str(src), str(out), "Ctrl:Drug", str(settings)])

        df = pd.read_csv(out, dtype={"label": str})
        assert list(df["label"]) == ["< 0.001", "1.00"]

    def test_warnings_to_stderr(self, tmp_path, sparse_data, capsys):
        src = tmp_path / "data.csv"
        sparse_data.to_csv(src, index=False)

        main([str(src), str(tmp_path / "out.csv"), "A:B,B:C"])

        assert "A vs B" in capsys.readouterr().err

    def test_unknown_label_format_in_settings(self, tmp_path, drug_data):
        src = tmp_path / "data.csv"
        out = tmp_path / "out.csv"
        settings = tmp_path / "settings.json"
        drug_data.to_csv(src, index=False)
        settings.write_text(json.dumps({"label_format": "stars"}))

        with pytest.raises(SystemExit, match="label format"):
            main([str(src), str(out), "Ctrl:Drug", str(settings)])
        assert not out.exists()

    def test_numeric_group_labels(self, tmp_path):
        src = tmp_path / "data.csv"
        out = tmp_path / "out.csv"
        pd.DataFrame({
            "dose": [1, 1, 1, 2, 2, 2],
            "plate": [7, 7, 7, 7, 7, 7],
            "signal": [1.0, 2.0, 3.0, 10.0, 11.0, 12.0],
        }).to_csv(src, index=False)

        main([str(src), str(out), "1:2"])

        df = pd.read_csv(out, dtype=str)
        assert list(df.columns) == ["plate", "start", "end", "y", "label"]
        assert list(df["start"]) == ["1"]
        assert list(df["end"]) == ["2"]
        assert list(df["label"]) == ["***"]

    def test_usage(self):
        with pytest.raises(SystemExit, match="Usage"):
            main([])
