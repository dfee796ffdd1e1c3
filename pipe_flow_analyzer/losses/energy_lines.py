# File: pipe_flow_analyzer/losses/energy_lines.py
"""
Energy Grade Line (EGL) and Hydraulic Grade Line (HGL)

    EGL = P/(ρg) + V²/(2g) + z     total head
    HGL = P/(ρg) + z               piezometric head
    EGL = HGL + V²/(2g)

Reference: White, F.M. (2011). Fluid Mechanics (8th ed.). McGraw-Hill.
"""

from dataclasses import dataclass
import numpy as np

from ..core.constants import G
from ..core.geometry import PipeSpec, BoundaryCondition
from .profile import LossProfile


@dataclass(frozen=True)
class EnergyLines:
    """EGL/HGL sampled at the loss-profile positions"""
    x: np.ndarray                # Position (m)
    EGL: np.ndarray              # Energy grade line (m)
    HGL: np.ndarray              # Hydraulic grade line (m)
    elevation: np.ndarray        # Pipe centreline elevation (m)
    velocity_head: float         # V²/(2g), constant along the pipe (m)

    @property
    def pressure_head(self) -> np.ndarray:
        """HGL - z (m)"""
        return self.HGL - self.elevation

    def pressure(self, rho: float) -> np.ndarray:
        """Static pressure along the pipe, ρg(HGL - z) (Pa)"""
        return self.pressure_head * rho * G


def calculate_energy_lines(
    profile: LossProfile,
    pipe: PipeSpec,
    boundary: BoundaryCondition,
    V: float,
    rho: float,
) -> EnergyLines:
    """
    Energy and hydraulic grade lines from a loss profile

    Elevation varies linearly from z_inlet to z_outlet; EGL falls from the
    inlet total head by the cumulative loss, including the fitting drops.
    """
    x = profile.x
    elevation = boundary.z_inlet + (boundary.z_outlet - boundary.z_inlet) * (x / pipe.length)

    velocity_head = V**2 / (2.0 * G)
    H_in_total = boundary.P_inlet / (rho * G) + velocity_head + boundary.z_inlet

    EGL = H_in_total - profile.h_total
    HGL = EGL - velocity_head

    return EnergyLines(
        x=x.copy(),
        EGL=EGL,
        HGL=HGL,
        elevation=elevation,
        velocity_head=velocity_head,
    )
