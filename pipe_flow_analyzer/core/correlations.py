# File: pipe_flow_analyzer/core/correlations.py
"""
Darcy friction factor from the Colebrook-White relation (Moody chart method)

Laminar (Re < 2300):
    f = 64 / Re
Turbulent (Re > 4000):
    1/√f = -2 log₁₀(ε/D/3.7 + 2.51/(Re√f))   [Colebrook-White]
Transitional (2300 <= Re <= 4000):
    linear blend between f(2300, laminar) and f(4000, turbulent)

References:
    Colebrook, C.F. (1939). Journal of ICE, 11(4), 133-156.
    Swamee, P.K. & Jain, A.K. (1976). J. Hydraulics Div. ASCE, 102(5), 657-664.
"""

import math
import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .constants import (
    RE_LAMINAR_MAX,
    RE_TURBULENT_MIN,
    COLEBROOK_MAX_ITER,
    COLEBROOK_TOLERANCE,
    F_MIN,
    F_MAX,
    RE_DIAGNOSTIC_MIN,
    RE_DIAGNOSTIC_MAX,
    RE_RANGE_CHECK_MAX,
)
from .exceptions import DomainError, ConvergenceWarning, FrictionRangeWarning


class FlowRegime(str, Enum):
    """Flow regime classified by Reynolds number"""
    LAMINAR = "Laminar"
    TRANSITIONAL = "Transitional"
    TURBULENT = "Turbulent"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FrictionFactorResult:
    """
    Outcome of a friction factor solve

    converged is False only when the Newton-Raphson loop ran out of
    iterations; clamped records that the last iterate was pinned to
    [F_MIN, F_MAX], in which case f may not satisfy Colebrook-White.
    """
    f: float
    regime: FlowRegime
    converged: bool = True
    iterations: int = 0
    clamped: bool = False

    def __iter__(self):
        # Allows ``f, regime = solver.solve(...)``
        return iter((self.f, self.regime))


def _in_diagnostic_window(Re: float) -> bool:
    """Diagnostics are suppressed for extreme Re (e.g. Moody chart sweeps)"""
    return RE_DIAGNOSTIC_MIN < Re < RE_DIAGNOSTIC_MAX


def colebrook_residual(f: float, Re: float, eps_D: float) -> float:
    """F(f) = 1/√f + 2 log₁₀(ε/D/3.7 + 2.51/(Re√f)); zero at the solution"""
    f_sqrt = math.sqrt(f)
    return 1.0 / f_sqrt + 2.0 * math.log10(eps_D / 3.7 + 2.51 / (Re * f_sqrt))


def swamee_jain(Re: float, eps_D: float) -> float:
    """Explicit Swamee-Jain approximation used as the Newton-Raphson start"""
    if eps_D == 0:
        return 0.25 / math.log10(5.74 / Re**0.9) ** 2
    return 0.25 / math.log10(eps_D / 3.7 + 5.74 / Re**0.9) ** 2


class FrictionFactorSolver:
    """
    Colebrook-White friction factor solver

    Stateless; one instance can be shared by any number of analyses.

    Example:
        >>> solver = FrictionFactorSolver()
        >>> result = solver.solve(1e5, 0.00046)
        >>> round(result.f, 4)
        0.0202
    """

    def __init__(
        self,
        max_iter: int = COLEBROOK_MAX_ITER,
        tolerance: float = COLEBROOK_TOLERANCE,
        f_min: float = F_MIN,
        f_max: float = F_MAX,
    ):
        self.max_iter = max_iter
        self.tolerance = tolerance
        self.f_min = f_min
        self.f_max = f_max

    def solve(self, Re: float, eps_D: float) -> FrictionFactorResult:
        """
        Classify regime and return the Darcy friction factor

        Args:
            Re: Reynolds number (must be > 0)
            eps_D: Relative roughness ε/D (must be >= 0)

        Returns:
            FrictionFactorResult

        Raises:
            DomainError: if Re <= 0 or eps_D < 0
        """
        if not Re > 0:
            raise DomainError(f"Reynolds number must be positive, got {Re}")
        if eps_D < 0:
            raise DomainError(f"Relative roughness must be non-negative, got {eps_D}")

        if Re < RE_LAMINAR_MAX:
            result = FrictionFactorResult(f=64.0 / Re, regime=FlowRegime.LAMINAR)

        elif Re <= RE_TURBULENT_MIN:
            f_lam = 64.0 / RE_LAMINAR_MAX
            turb = self._solve_colebrook(RE_TURBULENT_MIN, eps_D)
            weight = (Re - RE_LAMINAR_MAX) / (RE_TURBULENT_MIN - RE_LAMINAR_MAX)
            result = FrictionFactorResult(
                f=f_lam + (turb.f - f_lam) * weight,
                regime=FlowRegime.TRANSITIONAL,
                converged=turb.converged,
                iterations=turb.iterations,
                clamped=turb.clamped,
            )

        else:
            result = self._solve_colebrook(Re, eps_D)

        # Observational only, the value is returned unchanged
        if (result.f < self.f_min or result.f > self.f_max) and Re < RE_RANGE_CHECK_MAX:
            if _in_diagnostic_window(Re):
                warnings.warn(
                    f"Friction factor f={result.f:.4f} is outside typical range "
                    f"[{self.f_min}, {self.f_max}]",
                    FrictionRangeWarning,
                    stacklevel=2,
                )

        return result

    def _solve_colebrook(self, Re: float, eps_D: float) -> FrictionFactorResult:
        """Newton-Raphson on F(f) = 0 starting from Swamee-Jain"""
        f = swamee_jain(Re, eps_D)
        clamped = False

        for iteration in range(1, self.max_iter + 1):
            f_sqrt = math.sqrt(f)
            term = eps_D / 3.7 + 2.51 / (Re * f_sqrt)
            F = 1.0 / f_sqrt + 2.0 * math.log10(term)
            # dF/df, with d(term)/df = -1.255 / (Re f^1.5)
            dF = -0.5 * f**-1.5 - (2.0 / (math.log(10.0) * term)) * (1.255 / (Re * f**1.5))

            f_new = f - F / dF

            if abs(f_new - f) < self.tolerance:
                return FrictionFactorResult(
                    f=f_new,
                    regime=FlowRegime.TURBULENT,
                    converged=True,
                    iterations=iteration,
                )

            # Keep the next iterate inside the physical band
            clamped = not (self.f_min <= f_new <= self.f_max)
            f = min(max(f_new, self.f_min), self.f_max)

        if _in_diagnostic_window(Re):
            warnings.warn(
                f"Colebrook-White iteration did not converge after {self.max_iter} "
                f"iterations (Re={Re:.0f}, eps/D={eps_D:.2e})",
                ConvergenceWarning,
                stacklevel=3,
            )

        return FrictionFactorResult(
            f=f,
            regime=FlowRegime.TURBULENT,
            converged=False,
            iterations=self.max_iter,
            clamped=clamped,
        )


_DEFAULT_SOLVER = FrictionFactorSolver()


def friction_factor(Re: float, eps_D: float) -> Tuple[float, FlowRegime]:
    """
    Darcy friction factor and regime, ``(f, regime)``

    Convenience wrapper around a default FrictionFactorSolver.
    """
    result = _DEFAULT_SOLVER.solve(Re, eps_D)
    return result.f, result.regime
