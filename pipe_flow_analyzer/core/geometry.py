# File: pipe_flow_analyzer/core/geometry.py
"""
Pipe, fitting and boundary-condition definitions

All quantities SI: metres, pascals.
"""

import math
from dataclasses import dataclass
from typing import Sequence, List

from .constants import G
from .exceptions import DomainError


@dataclass(frozen=True)
class PipeSpec:
    """
    Straight, constant-diameter pipe
    """
    diameter: float              # Internal diameter D (m)
    length: float                # Length L (m)
    roughness: float             # Absolute roughness ε (m)
    material: str = ""           # Catalog code, if the roughness came from one
    material_name: str = ""

    def __post_init__(self):
        if not self.diameter > 0:
            raise DomainError(f"Pipe diameter must be positive, got {self.diameter}")
        if not self.length > 0:
            raise DomainError(f"Pipe length must be positive, got {self.length}")
        if self.roughness < 0:
            raise ValueError(f"Pipe roughness must be non-negative, got {self.roughness}")

    @property
    def area(self) -> float:
        """Flow cross-section πD²/4 (m²)"""
        return math.pi * self.diameter**2 / 4.0

    @property
    def relative_roughness(self) -> float:
        """ε/D (-)"""
        return self.roughness / self.diameter

    def check_fittings(self, fittings: Sequence["Fitting"]) -> None:
        """Raise ValueError if any fitting sits beyond the pipe outlet"""
        for fitting in fittings:
            if fitting.position > self.length:
                raise ValueError(
                    f"Fitting {fitting.name or fitting.code!r} at {fitting.position} m "
                    f"lies beyond pipe length {self.length} m"
                )


@dataclass(frozen=True)
class Fitting:
    """Minor-loss element located along the pipe"""
    code: str                    # Fitting type code
    K: float                     # Loss coefficient (-)
    position: float              # Distance from inlet (m)
    name: str = ""

    def __post_init__(self):
        if self.K < 0:
            raise ValueError(f"Loss coefficient K must be non-negative, got {self.K}")
        if self.position < 0:
            raise ValueError(f"Fitting position must be non-negative, got {self.position}")


@dataclass(frozen=True)
class BoundaryCondition:
    """Inlet/outlet elevations (m) and pressures (Pa, gauge or absolute but consistent)"""
    z_inlet: float = 0.0
    z_outlet: float = 0.0
    P_inlet: float = 0.0
    P_outlet: float = 0.0

    @property
    def delta_z(self) -> float:
        return self.z_outlet - self.z_inlet

    @property
    def delta_P(self) -> float:
        return self.P_outlet - self.P_inlet

    def static_head(self, rho: float) -> float:
        """H_static = Δz + ΔP/(ρg)"""
        return self.delta_z + self.delta_P / (rho * G)


def total_K(fittings: Sequence[Fitting]) -> float:
    """Sum of fitting loss coefficients"""
    return float(sum(fitting.K for fitting in fittings))


def sort_fittings(fittings: Sequence[Fitting]) -> List[Fitting]:
    """Fittings ordered by position; equal positions keep their input order"""
    return sorted(fittings, key=lambda fitting: fitting.position)
