import warnings
import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from typing import Optional, Sequence, Tuple

from ..analysis.aggregator import ResultRecord
from ..analysis.pump_selection import pump_head_curve
from ..catalogs.pumps import PumpCurveRecord
from ..core.constants import P_ATM, RE_LAMINAR_MAX
from ..core.correlations import FrictionFactorSolver
from ..core.exceptions import FrictionRangeWarning, ConvergenceWarning

MOODY_EPS_D = (
    0.0, 1e-6, 5e-6, 1e-5, 5e-5, 1e-4, 2e-4, 4e-4, 6e-4, 1e-3,
    2e-3, 4e-3, 6e-3, 0.01, 0.015, 0.02, 0.03, 0.04, 0.05,
)


def plot_moody_diagram(
    result: Optional[ResultRecord] = None,
    eps_D_values: Sequence[float] = MOODY_EPS_D,
    solver: Optional[FrictionFactorSolver] = None,
    figsize: Tuple[int, int] = (10, 7),
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Moody chart generated from the friction factor solver.

    Parameters:
    -----------
    result : ResultRecord, optional
        If given, its (Re, f) operating point is marked
    eps_D_values : sequence of float
        Relative roughness curves to draw
    solver : FrictionFactorSolver, optional
        Solver used for the sweep (default settings if None)
    figsize : tuple
        Figure size (width, height)

    Returns:
    --------
    fig, ax : matplotlib figure and axes
    """
    solver = solver or FrictionFactorSolver()
    Re_range = np.logspace(2.5, 8, 200)

    fig, ax = plt.subplots(figsize=figsize)
    colors = matplotlib.colormaps["jet"](np.linspace(0, 1, len(eps_D_values)))

    # The sweep crosses the laminar band where f > F_MAX by construction
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", FrictionRangeWarning)
        warnings.simplefilter("ignore", ConvergenceWarning)
        for color, eps_D in zip(colors, eps_D_values):
            f_values = np.array([solver.solve(Re, eps_D).f for Re in Re_range])
            if eps_D == 0:
                ax.plot(Re_range, f_values, 'k-', linewidth=1.5, label='Smooth')
            else:
                ax.plot(Re_range, f_values, color=color, linewidth=1.2, label=f'ε/D={eps_D:g}')

    Re_laminar = np.logspace(2.5, np.log10(RE_LAMINAR_MAX), 50)
    ax.plot(Re_laminar, 64.0 / Re_laminar, 'b--', linewidth=2, label='Laminar 64/Re')

    if result is not None:
        Re_op, f_op = result.flow.Re, result.f
        ax.plot(Re_op, f_op, 'ro', markersize=10, zorder=10)
        ax.annotate(
            f'Operating point\nRe = {Re_op:.0f}\nf = {f_op:.4f}',
            xy=(Re_op, f_op), xytext=(Re_op * 1.3, f_op * 1.2),
            fontsize=9, color='red',
            bbox=dict(boxstyle='round', facecolor='white', edgecolor='red'),
        )

    ax.set_xscale('log')
    ax.set_yscale('log')
    ax.set_xlabel('Reynolds number $Re$ [-]')
    ax.set_ylabel('Darcy friction factor $f$ [-]')
    ax.set_title('Moody Diagram')
    ax.grid(True, which='both', alpha=0.3)
    ax.legend(loc='upper right', fontsize=7, ncol=2)

    plt.tight_layout()
    return fig, ax


def plot_system_pump_curves(
    result: ResultRecord,
    catalog: Optional[Sequence[PumpCurveRecord]] = None,
    figsize: Tuple[int, int] = (10, 7),
) -> Tuple[plt.Figure, plt.Axes]:
    """
    System curve, selected pump curve and operating point.

    Parameters:
    -----------
    result : ResultRecord
        Completed analysis
    catalog : sequence of PumpCurveRecord, optional
        Other catalog pumps, drawn faintly for comparison
    figsize : tuple
        Figure size (width, height)

    Returns:
    --------
    fig, ax : matplotlib figure and axes
    """
    curve = result.system_curve
    op = result.operating_point
    selected = op.pump

    fig, ax = plt.subplots(figsize=figsize)

    if catalog is not None:
        for pump in catalog:
            if pump.name == selected.name:
                continue
            ax.plot(pump.Q * 1000, pump.H, color='gray', alpha=0.3, linewidth=1)

    ax.plot(curve.Q * 1000, curve.H, 'b-', linewidth=2.5, label='System curve')

    Q_fine = np.linspace(selected.Q_min, selected.Q_max, 200)
    ax.plot(Q_fine * 1000, pump_head_curve(selected)(Q_fine), 'r-', linewidth=2.5,
            label=f'Pump {selected.name}')
    ax.plot(selected.Q * 1000, selected.H, 'rs', markersize=5, markerfacecolor='white')

    label = 'Operating point (approx.)' if op.fallback else 'Operating point'
    ax.scatter([op.Q * 1000], [op.H], s=150, c='green', marker='*',
               edgecolor='black', linewidth=1.5, zorder=10,
               label=f'{label}: {op.Q * 1000:.2f} L/s, {op.H:.2f} m, η={op.efficiency:.0%}')

    ax.plot(curve.Q_design * 1000, result.h_pump, 'ko', markersize=8,
            markerfacecolor='yellow', label=f'Design point ({result.h_pump:.2f} m)')
    ax.axhline(curve.H_static, color='k', linestyle=':', linewidth=1,
               label=f'Static head ({curve.H_static:.2f} m)')

    ax.set_xlabel('$Q$ [L/s]')
    ax.set_ylabel('$H$ [m]')
    ax.set_title('System and Pump Curves')
    ax.set_xlim(left=0)
    ax.set_ylim(bottom=min(0.0, curve.H_static))
    ax.grid(True, alpha=0.3)
    ax.legend(loc='best', frameon=True, fancybox=True, shadow=True)

    plt.tight_layout()
    return fig, ax


def plot_egl_hgl_profile(
    result: ResultRecord,
    figsize: Tuple[int, int] = (12, 7),
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Energy and hydraulic grade lines with fitting drops.

    Returns:
    --------
    fig, ax : matplotlib figure and axes
    """
    lines = result.energy_lines
    x = lines.x

    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(x, lines.EGL, 'b-', linewidth=2.5, label='EGL')
    ax.plot(x, lines.HGL, 'r-', linewidth=2.5, label='HGL')
    ax.plot(x, lines.elevation, 'k-', linewidth=2, label='Pipe centreline')
    ax.fill_between(x, lines.elevation, lines.HGL, color='red', alpha=0.08)

    for fitting in result.fittings:
        ax.axvline(fitting.position, color='gray', linestyle=':', linewidth=0.8)

    drops = result.profile.drop_indices
    if len(drops) > 0:
        ax.plot(x[drops], lines.EGL[drops], 'bo', markersize=5, label='Fitting drop')

    ax.annotate(
        f'$V^2/2g$ = {lines.velocity_head:.3f} m',
        xy=(0.02, 0.05), xycoords='axes fraction', fontsize=10,
        bbox=dict(boxstyle='round', facecolor='white', alpha=0.8),
    )

    ax.set_xlabel('$x$ [m]')
    ax.set_ylabel('Head [m]')
    ax.set_title(f'Energy and Hydraulic Grade Lines (h_L = {result.h_L:.2f} m)')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='upper right')

    plt.tight_layout()
    return fig, ax


def plot_pressure_profile(
    result: ResultRecord,
    absolute: bool = False,
    figsize: Tuple[int, int] = (10, 7),
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Static pressure along the pipe with atmospheric reference.

    Parameters:
    -----------
    result : ResultRecord
        Completed analysis
    absolute : bool
        True if the boundary pressures were given as absolute; the
        atmospheric line is then drawn at 101.325 kPa instead of 0 kPa(g)
    figsize : tuple
        Figure size (width, height)

    Returns:
    --------
    fig, ax : matplotlib figure and axes
    """
    x = result.energy_lines.x
    P_kPa = result.energy_lines.pressure(result.flow.rho) / 1000.0
    P_ref = P_ATM / 1000.0 if absolute else 0.0

    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(x, P_kPa, 'b-', linewidth=2.5, label='Static pressure')
    ax.fill_between(x, P_kPa, P_ref, color='blue', alpha=0.15)

    drops = result.profile.drop_indices
    for i in drops:
        ax.plot([x[i], x[i]], [P_kPa[i - 1], P_kPa[i]], 'r-', linewidth=3)
    if len(drops) > 0:
        ax.plot(x[drops], P_kPa[drops], 'ro', markersize=7, label='Fitting locations')

    ax.plot(x[0], P_kPa[0], 'go', markersize=11, label=f'Inlet ({P_kPa[0]:.1f} kPa)')
    ax.plot(x[-1], P_kPa[-1], 'rD', markersize=9, label=f'Outlet ({P_kPa[-1]:.1f} kPa)')

    ref_label = f'Atmospheric ({P_ref:.1f} kPa)' if absolute else 'Atmospheric (0 kPa gauge)'
    ax.axhline(P_ref, color='k', linestyle='--', linewidth=1.5, label=ref_label)
    if np.min(P_kPa) < P_ref:
        ax.text(x[-1] / 2, P_ref, 'Pressure below atmospheric', color='red',
                ha='center', va='bottom', fontweight='bold')

    unit = 'kPa' if absolute else 'kPa(g)'
    ax.set_xlabel('$x$ [m]')
    ax.set_ylabel(f'$P$ [{unit}]')
    ax.set_title(f'Pressure Profile ($\\Delta P$ = {result.dP_total / 1000.0:.1f} kPa)')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='best')

    plt.tight_layout()
    return fig, ax
