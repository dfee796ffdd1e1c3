#!/usr/bin/env python3
"""
Run script for the example pipe case

Usage:
    $ python run.py [case.yml] [--plot] [--csv OUTDIR]

This script:
  1. Loads the case file (bundled DN100 example by default)
  2. Runs the full loss analysis and pump selection
  3. Prints a performance summary and the pump candidate table
"""

import sys
import os
import argparse
import matplotlib.pyplot as plt

# --------------------------------------------------------------------------- #
# Ensure project root is in path
# --------------------------------------------------------------------------- #
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pipe_flow_analyzer.analysis.aggregator import LossAggregator
from pipe_flow_analyzer.analysis.case import load_case, EXAMPLE_CASE_FILE
from pipe_flow_analyzer.analysis.export import (
    summary_frame,
    candidates_frame,
    export_result_csv,
)
from pipe_flow_analyzer.catalogs.pumps import load_pump_catalog
from pipe_flow_analyzer.visualization.plotting import (
    plot_moody_diagram,
    plot_system_pump_curves,
    plot_egl_hgl_profile,
    plot_pressure_profile,
)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Pipe flow loss analysis and pump selection")
    parser.add_argument("case", nargs="?", default=str(EXAMPLE_CASE_FILE), help="YAML case file")
    parser.add_argument("--plot", action="store_true", help="show charts")
    parser.add_argument("--csv", metavar="OUTDIR", help="write result tables to OUTDIR")
    args = parser.parse_args(argv)

    case = load_case(args.case)
    catalog = load_pump_catalog()

    print("\n" + "=" * 90)
    print(f" RUNNING CASE: {case.name}")
    print("=" * 90)
    print(f"   Pipe: D={case.pipe.diameter * 1000:.1f} mm, L={case.pipe.length:.1f} m, "
          f"ε={case.pipe.roughness * 1000:.4f} mm ({case.pipe.material_name or 'custom'})")
    print(f"   Fittings: {len(case.fittings)}")
    print(f"   Flow: Q={case.flow.Q * 1000:.2f} L/s, ρ={case.flow.rho:.1f} kg/m³, "
          f"μ={case.flow.mu:.3e} Pa·s")

    # ----------------------------------------------------------------------- #
    # Analysis
    # ----------------------------------------------------------------------- #
    result = LossAggregator(catalog).compute(case.pipe, case.fittings, case.flow, case.boundary)

    print(f"\n✓ Re = {result.flow.Re:.0f} ({result.regime}), f = {result.f:.5f}")
    if not result.friction.converged:
        print("   ! friction factor did not converge")
    print(f"✓ h_f = {result.h_f:.3f} m, h_m = {result.h_m:.3f} m, h_L = {result.h_L:.3f} m")
    print(f"✓ Required pump head = {result.h_pump:.3f} m")

    op = result.operating_point
    marker = "!" if op.fallback else "✓"
    print(f"{marker} Pump {op.pump_name}: Q={op.Q * 1000:.2f} L/s, H={op.H:.2f} m, "
          f"η={op.efficiency * 100:.1f}%")
    print(f"✓ Motor power = {result.power.motor / 1000:.2f} kW")

    # ----------------------------------------------------------------------- #
    # Summary tables
    # ----------------------------------------------------------------------- #
    print("\n" + "=" * 90)
    print(" SUMMARY")
    print("=" * 90)
    df = summary_frame(result, [case.name]).T
    print(df.to_string(header=False))

    print("\n" + "=" * 90)
    print(" PUMP CANDIDATES")
    print("=" * 90)
    print(candidates_frame(result).to_string(
        index=False, justify="center", float_format=lambda x: f"{x:.3f}"
    ))

    if args.csv:
        paths = export_result_csv(result, args.csv, stem="case")
        for path in paths.values():
            print(f"✓ Results saved to: {path}")

    if args.plot:
        plot_moody_diagram(result)
        plot_system_pump_curves(result, catalog)
        plot_egl_hgl_profile(result)
        plot_pressure_profile(result)
        plt.show()

    print("=" * 90)
    print("✓ ANALYSIS COMPLETE")
    print("=" * 90)
    return result


if __name__ == "__main__":
    main()
