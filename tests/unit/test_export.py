# File: tests/unit/test_export.py
"""
Unit tests for tabular export of results
"""

import pytest
import pandas as pd
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from pipe_flow_analyzer.analysis.export import (
    summary_frame,
    profile_frame,
    candidates_frame,
    system_curve_frame,
    export_result_csv,
)


class TestFrames:

    def test_summary(self, example_result):
        df = summary_frame(example_result, ["DN100"])
        assert len(df) == 1
        row = df.iloc[0]
        assert row["Name"] == "DN100"
        assert row["Q(L/s)"] == pytest.approx(15.0)
        assert row["Regime"] == "Turbulent"
        assert row["h_L(m)"] == pytest.approx(example_result.h_L)
        assert row["P_motor(kW)"] == pytest.approx(example_result.power.motor / 1000)

    def test_summary_several_results(self, example_result):
        df = summary_frame([example_result, example_result])
        assert len(df) == 2

    def test_summary_name_mismatch(self, example_result):
        with pytest.raises(ValueError):
            summary_frame([example_result], ["a", "b"])

    def test_profile(self, example_result):
        df = profile_frame(example_result)
        assert len(df) == len(example_result.profile)
        assert df["h_total(m)"].iloc[-1] == pytest.approx(example_result.h_L)
        assert df["P(kPa)"].iloc[0] == pytest.approx(0.0, abs=1e-9)

    def test_candidates(self, example_result, pump_catalog):
        df = candidates_frame(example_result)
        assert len(df) == len(pump_catalog)
        assert df["Selected"].sum() == 1
        assert set(df["Status"]) <= {"accepted", "screened_out", "head_shortfall",
                                     "numerical_failure"}

    def test_system_curve(self, example_result):
        df = system_curve_frame(example_result)
        assert len(df) == 50
        assert df["Q(L/s)"].iloc[-1] == pytest.approx(22.5)


class TestCsv:

    def test_writes_all_tables(self, example_result, tmp_path):
        paths = export_result_csv(example_result, tmp_path / "out", stem="dn100")
        assert set(paths) == {"summary", "profile", "candidates", "system_curve"}
        for path in paths.values():
            assert path.exists()
        summary = pd.read_csv(paths["summary"])
        assert summary["Name"].iloc[0] == "dn100"
