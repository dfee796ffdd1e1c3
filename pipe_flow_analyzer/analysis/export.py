# File: pipe_flow_analyzer/analysis/export.py
"""
Tabular views of analysis results (pandas)

Engineering units (L/s, kPa, kW) are used for display columns only.
"""

from pathlib import Path
from typing import Iterable, Union
import pandas as pd

from ..core.constants import G
from .aggregator import ResultRecord


def summary_row(result: ResultRecord, name: str = "") -> dict:
    """One-line summary of a result"""
    op = result.operating_point
    return {
        "Name": name,
        "Q(L/s)": result.flow.Q * 1000.0,
        "V(m/s)": result.flow.V,
        "Re": result.flow.Re,
        "Regime": str(result.friction.regime),
        "f": result.friction.f,
        "h_f(m)": result.h_f,
        "K_total": result.K_total,
        "h_m(m)": result.h_m,
        "h_L(m)": result.h_L,
        "dP(kPa)": result.dP_total / 1000.0,
        "h_pump(m)": result.h_pump,
        "Pump": op.pump_name,
        "Q_op(L/s)": op.Q * 1000.0,
        "H_op(m)": op.H,
        "Eff(%)": op.efficiency * 100.0,
        "Fallback": op.fallback,
        "P_hyd(kW)": result.power.hydraulic / 1000.0,
        "P_shaft(kW)": result.power.shaft / 1000.0,
        "P_motor(kW)": result.power.motor / 1000.0,
    }


def summary_frame(results: Union[ResultRecord, Iterable[ResultRecord]], names=None) -> pd.DataFrame:
    """Summary table, one row per result"""
    if isinstance(results, ResultRecord):
        results = [results]
    results = list(results)
    names = list(names) if names is not None else [""] * len(results)
    if len(names) != len(results):
        raise ValueError("names must match the number of results")
    return pd.DataFrame([summary_row(r, n) for r, n in zip(results, names)])


def profile_frame(result: ResultRecord) -> pd.DataFrame:
    """Loss profile, energy lines and static pressure along the pipe"""
    profile = result.profile
    lines = result.energy_lines
    return pd.DataFrame({
        "x(m)": profile.x,
        "h_friction(m)": profile.h_friction,
        "h_minor(m)": profile.h_minor,
        "h_total(m)": profile.h_total,
        "EGL(m)": lines.EGL,
        "HGL(m)": lines.HGL,
        "z(m)": lines.elevation,
        "P(kPa)": lines.pressure_head * result.flow.rho * G / 1000.0,
    })


def candidates_frame(result: ResultRecord) -> pd.DataFrame:
    """Per-pump screening and scoring outcome"""
    rows = [
        {
            "Pump": c.pump_name,
            "Status": str(c.status),
            "Reason": c.reason,
            "Q_op(L/s)": c.Q * 1000.0,
            "H_op(m)": c.H,
            "Eff(%)": c.efficiency * 100.0,
            "Score": c.score,
            "Selected": c.pump_name == result.operating_point.pump_name,
        }
        for c in result.operating_point.candidates
    ]
    return pd.DataFrame(rows)


def system_curve_frame(result: ResultRecord) -> pd.DataFrame:
    curve = result.system_curve
    return pd.DataFrame({"Q(L/s)": curve.Q * 1000.0, "H(m)": curve.H})


def export_result_csv(result: ResultRecord, directory: Union[str, Path], stem: str = "run") -> dict:
    """
    Write summary, profile, candidates and system curve CSV files

    Returns:
        dict mapping table name to written path
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    tables = {
        "summary": summary_frame(result, [stem]),
        "profile": profile_frame(result),
        "candidates": candidates_frame(result),
        "system_curve": system_curve_frame(result),
    }

    paths = {}
    for key, df in tables.items():
        path = directory / f"{stem}_{key}.csv"
        df.to_csv(path, index=False)
        paths[key] = path

    return paths
