# File: pipe_flow_analyzer/analysis/system_curve.py
"""
System curve H_sys(Q) = H_static + K_sys·Q²

K_sys is fixed by the losses at the design point, K_sys = h_L / Q_design².
"""

from dataclasses import dataclass
import numpy as np

from ..core.constants import SYSTEM_CURVE_POINTS, SYSTEM_CURVE_SPAN
from ..core.exceptions import DomainError


@dataclass(frozen=True)
class SystemCurve:
    """Sampled system curve"""
    Q: np.ndarray                # Flow samples (m³/s), ascending from 0
    H: np.ndarray                # Required head (m)
    K_sys: float                 # Loss coefficient (s²/m⁵)
    H_static: float              # Static head Δz + ΔP/(ρg) (m)
    Q_design: float              # Design flow (m³/s)

    def head_at(self, Q):
        """Analytic head H_static + K_sys·Q² at any flow"""
        return self.H_static + self.K_sys * np.asarray(Q, dtype=float) ** 2

    @property
    def Q_min(self) -> float:
        return float(self.Q[0])

    @property
    def Q_max(self) -> float:
        return float(self.Q[-1])


def build_system_curve(
    h_L: float,
    Q_design: float,
    H_static: float,
    n_points: int = SYSTEM_CURVE_POINTS,
    span: float = SYSTEM_CURVE_SPAN,
) -> SystemCurve:
    """
    Sample the system curve on [0, span·Q_design]

    Args:
        h_L: Total head loss at the design flow (m)
        Q_design: Design flow (m³/s)
        H_static: Static head (m)
        n_points: Number of samples
        span: Upper end of the sampled range as a multiple of Q_design

    Raises:
        DomainError: if Q_design <= 0 (K_sys would be undefined)
    """
    if not Q_design > 0:
        raise DomainError(f"Design flow must be positive to build a system curve, got {Q_design}")
    if n_points < 2:
        raise ValueError(f"System curve needs at least 2 points, got {n_points}")

    K_sys = h_L / Q_design**2
    Q = np.linspace(0.0, span * Q_design, n_points)
    H = H_static + K_sys * Q**2

    return SystemCurve(Q=Q, H=H, K_sys=K_sys, H_static=H_static, Q_design=Q_design)
