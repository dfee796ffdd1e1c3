# File: pipe_flow_analyzer/analysis/pump_selection.py
"""
Pump operating point and catalog selection

For every catalog pump:
1. Screen out pumps that cannot plausibly serve the duty point
2. Interpolate pump head (monotone cubic, PCHIP) and system head (linear)
   on a common grid spanning the overlap of both flow ranges
3. Take the grid point minimising |H_pump - H_sys| as the operating point
4. Score it (lower is better) and accept it only if it delivers at least
   95% of the required head

The accepted candidate with the lowest score wins. When nothing is
accepted the pump with the highest shutoff head is returned with an
approximate operating point and a PumpSelectionWarning.
"""

import math
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple
import numpy as np
from scipy.interpolate import PchipInterpolator, make_interp_spline

from ..catalogs.pumps import PumpCurveRecord
from ..core.constants import DEFAULT_PUMP_EFFICIENCY
from ..core.exceptions import DomainError, PumpSelectionWarning
from .system_curve import SystemCurve


# ============================================================================
# DATA STRUCTURES
# ============================================================================

class CandidateStatus(str, Enum):
    ACCEPTED = "accepted"
    SCREENED_OUT = "screened_out"            # failed the head/flow screen
    HEAD_SHORTFALL = "head_shortfall"        # H_op below tolerance
    NUMERICAL_FAILURE = "numerical_failure"  # no overlap / non-finite curves

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SelectionWeights:
    """
    Score weights (lower score is better)

    Efficiency dominates, then distance from the design flow and from the
    best-efficiency point; head margin matters least.
    """
    flow: float = 1.0
    efficiency: float = 2.0
    head: float = 0.5
    bep: float = 1.5


@dataclass(frozen=True)
class CandidateOutcome:
    """Evaluation of one catalog pump"""
    pump_name: str
    status: CandidateStatus
    reason: str = ""
    Q: float = math.nan                  # Operating flow (m³/s)
    H: float = math.nan                  # Operating head (m)
    efficiency: float = math.nan
    score: float = math.nan

    @property
    def accepted(self) -> bool:
        return self.status is CandidateStatus.ACCEPTED


@dataclass(frozen=True)
class OperatingPoint:
    """Selected pump and its operating point"""
    pump: PumpCurveRecord
    Q: float                             # Operating flow (m³/s)
    H: float                             # Operating head (m)
    efficiency: float                    # Efficiency at the operating point (-)
    score: float = math.nan
    fallback: bool = False               # True if no candidate was accepted
    candidates: Tuple[CandidateOutcome, ...] = field(default_factory=tuple)

    @property
    def pump_name(self) -> str:
        return self.pump.name

    def outcome_for(self, pump_name: str) -> Optional[CandidateOutcome]:
        for outcome in self.candidates:
            if outcome.pump_name == pump_name:
                return outcome
        return None


# ============================================================================
# HELPERS
# ============================================================================

def selection_score(
    Q_op: float,
    H_op: float,
    efficiency: float,
    h_required: float,
    Q_design: float,
    Q_BEP: float,
    weights: SelectionWeights = SelectionWeights(),
) -> float:
    """
    score = w_flow·|Q_op-Q_d|/Q_d + w_eff·(1-η) + w_head·|H_op-h|/|h| + w_bep·|Q_op-Q_BEP|/Q_BEP
    """
    flow_deviation = abs(Q_op - Q_design) / Q_design
    efficiency_penalty = 1.0 - efficiency
    # h <= 0 for gravity-driven or pressure-driven duties
    if h_required != 0:
        head_margin = (H_op - h_required) / abs(h_required)
    else:
        head_margin = 0.0
    bep_deviation = abs(Q_op - Q_BEP) / Q_BEP

    return (weights.flow * flow_deviation
            + weights.efficiency * efficiency_penalty
            + weights.head * abs(head_margin)
            + weights.bep * bep_deviation)


def pump_head_curve(pump: PumpCurveRecord) -> PchipInterpolator:
    return PchipInterpolator(pump.Q, pump.H, extrapolate=True)


def pump_efficiency_curve(pump: PumpCurveRecord) -> PchipInterpolator:
    return PchipInterpolator(pump.Q, pump.efficiency, extrapolate=True)


def system_head_curve(system_curve: SystemCurve):
    """Piecewise-linear system head, extrapolated linearly past the samples"""
    return make_interp_spline(system_curve.Q, system_curve.H, k=1)


# ============================================================================
# SELECTOR
# ============================================================================

class PumpOperatingPointSelector:
    """
    Select the best-matched catalog pump for a system curve

    Example:
        >>> selector = PumpOperatingPointSelector()
        >>> op = selector.select(catalog, system_curve, h_required=12.0, Q_design=0.015)
        >>> op.pump_name, op.Q, op.H
    """

    def __init__(
        self,
        weights: SelectionWeights = SelectionWeights(),
        grid_points: int = 500,
        head_screen: float = 0.9,
        flow_screen: float = 1.5,
        head_tolerance: float = 0.95,
        fallback_head_margin: float = 1.1,
        fallback_efficiency: float = DEFAULT_PUMP_EFFICIENCY,
        efficiency_bounds: Tuple[float, float] = (0.01, 1.0),
    ):
        if grid_points < 2:
            raise ValueError(f"grid_points must be at least 2, got {grid_points}")
        self.weights = weights
        self.grid_points = grid_points
        self.head_screen = head_screen
        self.flow_screen = flow_screen
        self.head_tolerance = head_tolerance
        self.fallback_head_margin = fallback_head_margin
        self.fallback_efficiency = fallback_efficiency
        self.efficiency_bounds = efficiency_bounds

    # ========================================================================
    # PUBLIC API
    # ========================================================================

    def select(
        self,
        catalog: Sequence[PumpCurveRecord],
        system_curve: SystemCurve,
        h_required: float,
        Q_design: float,
    ) -> OperatingPoint:
        """
        Best pump and its operating point

        Args:
            catalog: Candidate pumps (evaluated in order; ties go to the first)
            system_curve: Sampled system curve
            h_required: Required pump head at the design flow (m)
            Q_design: Design flow (m³/s)

        Returns:
            OperatingPoint (fallback=True if no candidate was accepted)

        Warns:
            PumpSelectionWarning: if h_required <= 0 (the system needs no
                pump head) or no candidate is accepted

        Raises:
            DomainError: if Q_design <= 0
            ValueError: if the catalog is empty
        """
        if not Q_design > 0:
            raise DomainError(f"Design flow must be positive, got {Q_design}")
        if len(catalog) == 0:
            raise ValueError("Pump catalog is empty")
        if h_required <= 0:
            warnings.warn(
                f"System requires no pump head ({h_required:.2f} m at "
                f"{Q_design * 1000:.2f} L/s); flow is driven by static head",
                PumpSelectionWarning,
                stacklevel=2,
            )

        outcomes = [
            self.evaluate(pump, system_curve, h_required, Q_design)
            for pump in catalog
        ]

        best_idx = None
        for i, outcome in enumerate(outcomes):
            if not outcome.accepted:
                continue
            if best_idx is None or outcome.score < outcomes[best_idx].score:
                best_idx = i

        if best_idx is not None:
            best = outcomes[best_idx]
            return OperatingPoint(
                pump=catalog[best_idx],
                Q=best.Q,
                H=best.H,
                efficiency=best.efficiency,
                score=best.score,
                fallback=False,
                candidates=tuple(outcomes),
            )

        return self._fallback(catalog, h_required, Q_design, outcomes)

    def evaluate(
        self,
        pump: PumpCurveRecord,
        system_curve: SystemCurve,
        h_required: float,
        Q_design: float,
    ) -> CandidateOutcome:
        """Screen, intersect and score a single pump"""
        if pump.H_max < self.head_screen * h_required:
            return CandidateOutcome(
                pump.name, CandidateStatus.SCREENED_OUT,
                f"max head {pump.H_max:.2f} m below {self.head_screen:.0%} of required "
                f"{h_required:.2f} m",
            )
        if pump.Q_min > self.flow_screen * Q_design:
            return CandidateOutcome(
                pump.name, CandidateStatus.SCREENED_OUT,
                f"minimum flow {pump.Q_min:.4g} m³/s above {self.flow_screen}x design flow",
            )

        Q_lo = max(pump.Q_min, system_curve.Q_min)
        Q_hi = min(pump.Q_max, system_curve.Q_max)
        if not Q_hi > Q_lo:
            return CandidateOutcome(
                pump.name, CandidateStatus.NUMERICAL_FAILURE,
                "pump and system flow ranges do not overlap",
            )

        Q_grid = np.linspace(Q_lo, Q_hi, self.grid_points)
        H_pump = pump_head_curve(pump)(Q_grid)
        H_sys = system_head_curve(system_curve)(Q_grid)

        if not (np.all(np.isfinite(H_pump)) and np.all(np.isfinite(H_sys))):
            return CandidateOutcome(
                pump.name, CandidateStatus.NUMERICAL_FAILURE,
                "non-finite values in interpolated curves",
            )

        idx = int(np.argmin(np.abs(H_pump - H_sys)))
        Q_op = float(Q_grid[idx])
        H_op = float(H_pump[idx])

        eff_lo, eff_hi = self.efficiency_bounds
        eff_op = float(pump_efficiency_curve(pump)(Q_op))
        if not math.isfinite(eff_op):
            return CandidateOutcome(
                pump.name, CandidateStatus.NUMERICAL_FAILURE,
                "non-finite efficiency at operating point", Q=Q_op, H=H_op,
            )
        eff_op = min(max(eff_op, eff_lo), eff_hi)

        if not pump.Q_BEP > 0:
            return CandidateOutcome(
                pump.name, CandidateStatus.NUMERICAL_FAILURE,
                "best-efficiency flow is zero", Q=Q_op, H=H_op, efficiency=eff_op,
            )

        score = selection_score(
            Q_op, H_op, eff_op, h_required, Q_design, pump.Q_BEP, self.weights
        )

        if H_op >= self.head_tolerance * h_required:
            return CandidateOutcome(
                pump.name, CandidateStatus.ACCEPTED,
                Q=Q_op, H=H_op, efficiency=eff_op, score=score,
            )

        return CandidateOutcome(
            pump.name, CandidateStatus.HEAD_SHORTFALL,
            f"operating head {H_op:.2f} m below {self.head_tolerance:.0%} of required "
            f"{h_required:.2f} m",
            Q=Q_op, H=H_op, efficiency=eff_op, score=score,
        )

    # ========================================================================
    # INTERNAL
    # ========================================================================

    def _fallback(
        self,
        catalog: Sequence[PumpCurveRecord],
        h_required: float,
        Q_design: float,
        outcomes: List[CandidateOutcome],
    ) -> OperatingPoint:
        """Highest shutoff head pump at an approximate duty point"""
        pump = catalog[0]
        for candidate in catalog:
            if candidate.H_shutoff > pump.H_shutoff:
                pump = candidate

        warnings.warn(
            f"No suitable pump found meeting {h_required:.2f} m at "
            f"{Q_design * 1000:.2f} L/s; selecting highest-head pump {pump.name}",
            PumpSelectionWarning,
            stacklevel=3,
        )

        return OperatingPoint(
            pump=pump,
            Q=Q_design,
            H=h_required * self.fallback_head_margin,
            efficiency=self.fallback_efficiency,
            score=math.nan,
            fallback=True,
            candidates=tuple(outcomes),
        )


def find_operating_point(
    catalog: Sequence[PumpCurveRecord],
    system_curve: SystemCurve,
    h_required: float,
    Q_design: float,
) -> OperatingPoint:
    """Convenience function using a default PumpOperatingPointSelector"""
    return PumpOperatingPointSelector().select(catalog, system_curve, h_required, Q_design)
