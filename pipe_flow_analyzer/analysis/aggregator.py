# File: pipe_flow_analyzer/analysis/aggregator.py
"""
Loss aggregation - the main calculation engine

Turns pipe, fitting, flow and boundary data into a ResultRecord:

1. Flow properties (V, Re, ε/D)
2. Friction factor (Colebrook-White)
3. Major loss, Darcy-Weisbach:   h_f = f·(L/D)·V²/(2g)
4. Minor losses, K-factor:       h_m = ΣK·V²/(2g)
5. Distributed loss profile
6. Required pump head, extended Bernoulli:  h_pump = Δz + ΔP/(ρg) + h_L
7. System curve and pump selection
8. Power (hydraulic, shaft, motor)
9. EGL / HGL

ALL QUANTITIES SI (m, m³/s, Pa, W)
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from ..catalogs.pumps import PumpCurveRecord
from ..core.constants import (
    G,
    DEFAULT_PUMP_EFFICIENCY,
    MIN_PUMP_EFFICIENCY,
    MOTOR_MARGIN,
)
from ..core.correlations import FrictionFactorSolver, FrictionFactorResult
from ..core.exceptions import DomainError
from ..core.flow import FlowInput, FlowState
from ..core.geometry import PipeSpec, Fitting, BoundaryCondition, total_K
from ..losses.energy_lines import EnergyLines, calculate_energy_lines
from ..losses.profile import LossProfile, build_loss_profile
from .pump_selection import OperatingPoint, PumpOperatingPointSelector
from .system_curve import SystemCurve, build_system_curve


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True)
class MinorLossDetail:
    """Contribution of one fitting"""
    name: str
    code: str
    position: float              # (m)
    K: float
    h: float                     # Head loss K·V²/(2g) (m)


@dataclass(frozen=True)
class PowerRequirement:
    """Power figures in W"""
    hydraulic: float             # ρ·g·Q·h_pump
    shaft: float                 # hydraulic / η
    motor: float                 # shaft · 1.15
    efficiency_used: float       # η actually applied to the shaft power


@dataclass(frozen=True)
class ResultRecord:
    """
    Complete result of one analysis

    Consumed unchanged by the export and plotting modules.
    """
    # Echoed inputs
    pipe: PipeSpec
    fittings: Tuple[Fitting, ...]
    boundary: BoundaryCondition

    # Flow and friction
    flow: FlowState
    friction: FrictionFactorResult

    # Major losses
    h_f: float                   # Friction head loss (m)
    dP_f: float                  # Friction pressure drop (Pa)

    # Minor losses
    K_total: float
    h_m: float                   # Minor head loss (m)
    dP_m: float                  # Minor pressure drop (Pa)
    minor_losses: Tuple[MinorLossDetail, ...]

    # Totals
    h_L: float                   # h_f + h_m (m)
    dP_total: float              # (Pa)

    # Pump requirement and selection
    h_pump: float                # Required pump head (m)
    system_curve: SystemCurve
    operating_point: OperatingPoint
    power: PowerRequirement

    # Spatial data
    profile: LossProfile
    energy_lines: EnergyLines

    @property
    def f(self) -> float:
        return self.friction.f

    @property
    def regime(self):
        return self.friction.regime

    @property
    def H_static(self) -> float:
        return self.system_curve.H_static


# ============================================================================
# AGGREGATOR
# ============================================================================

class LossAggregator:
    """
    Orchestrates a full pipe-flow analysis

    The pump catalog is injected once and shared read-only; compute() keeps
    no state between calls.

    Example:
        >>> catalog = load_pump_catalog()
        >>> aggregator = LossAggregator(catalog)
        >>> result = aggregator.compute(pipe, fittings, flow, boundary)
        >>> result.operating_point.pump_name
    """

    def __init__(
        self,
        catalog: Sequence[PumpCurveRecord],
        solver: Optional[FrictionFactorSolver] = None,
        selector: Optional[PumpOperatingPointSelector] = None,
    ):
        self.catalog = catalog
        self.solver = solver or FrictionFactorSolver()
        self.selector = selector or PumpOperatingPointSelector()

    def compute(
        self,
        pipe: PipeSpec,
        fittings: Sequence[Fitting],
        flow: Union[FlowInput, FlowState],
        boundary: BoundaryCondition,
    ) -> ResultRecord:
        """
        Run the analysis

        Args:
            pipe: Pipe geometry and roughness
            fittings: Fittings along the pipe (any order)
            flow: FlowInput (Q, ρ, μ) or an already derived FlowState
            boundary: Elevations and pressures at inlet and outlet

        Returns:
            ResultRecord

        Raises:
            DomainError: Q <= 0 or Re <= 0
            ValueError: fitting beyond the pipe outlet

        Warns:
            PumpSelectionWarning: no pump head required (h_pump <= 0) or no
                catalog pump accepted
        """
        fittings = tuple(fittings)
        pipe.check_fittings(fittings)

        # ════════════════════════════════════════════════════════════════
        # FLOW PROPERTIES
        # ════════════════════════════════════════════════════════════════
        if isinstance(flow, FlowState):
            state = flow
            if not state.Q > 0:
                raise DomainError(f"Design flow must be positive, got Q={state.Q}")
        else:
            state = FlowState.from_input(pipe, flow)

        rho = state.rho
        V = state.V
        velocity_head = V**2 / (2.0 * G)

        # ════════════════════════════════════════════════════════════════
        # FRICTION FACTOR
        # ════════════════════════════════════════════════════════════════
        friction = self.solver.solve(state.Re, pipe.relative_roughness)
        state = state.with_regime(friction.regime)

        # ════════════════════════════════════════════════════════════════
        # MAJOR LOSSES (DARCY-WEISBACH)
        # ════════════════════════════════════════════════════════════════
        h_f = friction.f * (pipe.length / pipe.diameter) * velocity_head
        dP_f = rho * G * h_f

        # ════════════════════════════════════════════════════════════════
        # MINOR LOSSES (K-FACTOR)
        # ════════════════════════════════════════════════════════════════
        K_sum = total_K(fittings)
        h_m = K_sum * velocity_head
        dP_m = rho * G * h_m
        details = tuple(
            MinorLossDetail(
                name=fitting.name or fitting.code,
                code=fitting.code,
                position=fitting.position,
                K=fitting.K,
                h=fitting.K * velocity_head,
            )
            for fitting in fittings
        )

        h_L = h_f + h_m
        dP_total = dP_f + dP_m

        # ════════════════════════════════════════════════════════════════
        # DISTRIBUTED LOSS PROFILE
        # ════════════════════════════════════════════════════════════════
        profile = build_loss_profile(pipe, fittings, V, friction.f)

        # ════════════════════════════════════════════════════════════════
        # PUMP REQUIREMENT (EXTENDED BERNOULLI)
        # ════════════════════════════════════════════════════════════════
        H_static = boundary.static_head(rho)
        h_pump = H_static + h_L

        # ════════════════════════════════════════════════════════════════
        # SYSTEM CURVE AND PUMP SELECTION
        # ════════════════════════════════════════════════════════════════
        system_curve = build_system_curve(h_L, state.Q, H_static)
        operating_point = self.selector.select(self.catalog, system_curve, h_pump, state.Q)

        # ════════════════════════════════════════════════════════════════
        # POWER
        # ════════════════════════════════════════════════════════════════
        power = power_requirement(rho, state.Q, h_pump, operating_point.efficiency)

        # ════════════════════════════════════════════════════════════════
        # EGL / HGL
        # ════════════════════════════════════════════════════════════════
        energy_lines = calculate_energy_lines(profile, pipe, boundary, V, rho)

        return ResultRecord(
            pipe=pipe,
            fittings=fittings,
            boundary=boundary,
            flow=state,
            friction=friction,
            h_f=h_f,
            dP_f=dP_f,
            K_total=K_sum,
            h_m=h_m,
            dP_m=dP_m,
            minor_losses=details,
            h_L=h_L,
            dP_total=dP_total,
            h_pump=h_pump,
            system_curve=system_curve,
            operating_point=operating_point,
            power=power,
            profile=profile,
            energy_lines=energy_lines,
        )


def power_requirement(
    rho: float,
    Q: float,
    h_pump: float,
    efficiency: float,
    motor_margin: float = MOTOR_MARGIN,
) -> PowerRequirement:
    """
    Hydraulic, shaft and motor power (W)

    An efficiency at or below 1% is treated as unknown and replaced by 70%.
    """
    hydraulic = rho * G * Q * h_pump
    eff = efficiency if efficiency > MIN_PUMP_EFFICIENCY else DEFAULT_PUMP_EFFICIENCY
    shaft = hydraulic / eff
    return PowerRequirement(
        hydraulic=hydraulic,
        shaft=shaft,
        motor=shaft * motor_margin,
        efficiency_used=eff,
    )


def compute_losses(
    pipe: PipeSpec,
    fittings: Sequence[Fitting],
    flow: Union[FlowInput, FlowState],
    boundary: BoundaryCondition,
    catalog: Sequence[PumpCurveRecord],
) -> ResultRecord:
    """
    Convenience function for a single analysis

    Example:
        >>> result = compute_losses(pipe, fittings, flow, boundary, load_pump_catalog())
        >>> print(f"h_L = {result.h_L:.2f} m")
    """
    return LossAggregator(catalog).compute(pipe, fittings, flow, boundary)
