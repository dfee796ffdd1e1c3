# File: pipe_flow_analyzer/core/flow.py
"""
Flow specification and derived flow state

FlowInput is what a caller knows (Q, ρ, μ). FlowState adds the derived
velocity, Reynolds number, relative roughness and regime for a given pipe.
Unit conversions (L/s, kPa, mm H2O) live here and nowhere in the solver.
"""

import math
from dataclasses import dataclass
from typing import Optional

from .constants import G
from .correlations import FlowRegime
from .exceptions import DomainError
from .geometry import PipeSpec


def lps_to_m3s(Q_lps: float) -> float:
    """L/s -> m³/s"""
    return Q_lps / 1000.0


def m3s_to_lps(Q: float) -> float:
    """m³/s -> L/s"""
    return Q * 1000.0


def pa_to_kpa(P: float) -> float:
    return P / 1000.0


def kpa_to_pa(P_kpa: float) -> float:
    return P_kpa * 1000.0


@dataclass(frozen=True)
class FlowInput:
    """Volumetric flow and fluid properties supplied by the caller"""
    Q: float                             # Volumetric flow (m³/s)
    rho: float                           # Density (kg/m³)
    mu: float                            # Dynamic viscosity (Pa·s)
    temperature: float = math.nan        # Fluid temperature (°C), informational
    method: str = "flow_rate"            # How Q was obtained

    def __post_init__(self):
        if not self.rho > 0:
            raise ValueError(f"Density must be positive, got {self.rho}")
        if not self.mu > 0:
            raise ValueError(f"Viscosity must be positive, got {self.mu}")


@dataclass(frozen=True)
class FlowState:
    """Flow in a specific pipe"""
    Q: float                             # Volumetric flow (m³/s)
    V: float                             # Mean velocity (m/s)
    rho: float                           # Density (kg/m³)
    mu: float                            # Dynamic viscosity (Pa·s)
    Re: float                            # Reynolds number (-)
    relative_roughness: float            # ε/D (-)
    regime: Optional[FlowRegime] = None  # Set once the friction factor is solved
    temperature: float = math.nan
    method: str = "flow_rate"

    @property
    def velocity_head(self) -> float:
        """V²/(2g) (m)"""
        return self.V**2 / (2.0 * G)

    @classmethod
    def from_input(cls, pipe: PipeSpec, flow: FlowInput) -> "FlowState":
        """
        A = πD²/4, V = Q/A, Re = ρVD/μ

        Raises:
            DomainError: if Q <= 0
        """
        if not flow.Q > 0:
            raise DomainError(f"Design flow must be positive, got Q={flow.Q}")

        V = flow.Q / pipe.area
        Re = flow.rho * V * pipe.diameter / flow.mu
        return cls(
            Q=flow.Q,
            V=V,
            rho=flow.rho,
            mu=flow.mu,
            Re=Re,
            relative_roughness=pipe.relative_roughness,
            temperature=flow.temperature,
            method=flow.method,
        )

    def with_regime(self, regime: FlowRegime) -> "FlowState":
        return FlowState(
            Q=self.Q,
            V=self.V,
            rho=self.rho,
            mu=self.mu,
            Re=self.Re,
            relative_roughness=self.relative_roughness,
            regime=regime,
            temperature=self.temperature,
            method=self.method,
        )


# ============================================================================
# Flow-specification helpers
# ============================================================================

def flow_from_rate(Q: float, rho: float, mu: float, temperature: float = math.nan) -> FlowInput:
    """Flow given directly as Q (m³/s)"""
    return FlowInput(Q=Q, rho=rho, mu=mu, temperature=temperature, method="flow_rate")


def flow_from_velocity(
    pipe: PipeSpec, V: float, rho: float, mu: float, temperature: float = math.nan
) -> FlowInput:
    """Flow given as mean velocity V (m/s): Q = V·A"""
    return FlowInput(Q=V * pipe.area, rho=rho, mu=mu, temperature=temperature, method="velocity")


def velocity_from_manometer(h_mm: float, rho: float) -> float:
    """
    Pitot-static velocity from a water-column reading

    ΔP = ρ·g·h, V = √(2ΔP/ρ)

    Args:
        h_mm: Manometer reading (mm H2O)
        rho: Fluid density (kg/m³)
    """
    if h_mm < 0:
        raise ValueError(f"Manometer reading must be non-negative, got {h_mm}")
    dP = rho * G * (h_mm / 1000.0)
    return math.sqrt(2.0 * dP / rho)


def flow_from_manometer(
    pipe: PipeSpec, h_mm: float, rho: float, mu: float, temperature: float = math.nan
) -> FlowInput:
    """Flow from a pitot-tube manometer reading (mm H2O)"""
    V = velocity_from_manometer(h_mm, rho)
    return FlowInput(Q=V * pipe.area, rho=rho, mu=mu, temperature=temperature, method="pitot")
