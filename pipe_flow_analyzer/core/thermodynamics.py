# File: pipe_flow_analyzer/core/thermodynamics.py
"""
Liquid property providers (temperature -> density, viscosity)

Fluid wraps CoolProp; TabulatedWater interpolates a fixed table of water
properties at atmospheric pressure for when CoolProp is not wanted.
"""

import math
from dataclasses import dataclass, field
import numpy as np
import CoolProp.CoolProp as CP

from .constants import P_ATM


class ThermoException(Exception):
    """Exception raised when a fluid property calculation fails"""
    pass


@dataclass(frozen=True)
class LiquidProperties:
    """
    Transport and thermal properties of a liquid at (T, P)
    """
    T: float = math.nan          # Temperature (°C)
    P: float = math.nan          # Pressure (Pa)
    rho: float = math.nan        # Density (kg/m³)
    mu: float = math.nan         # Dynamic viscosity (Pa·s)
    cp: float = math.nan         # Specific heat capacity (J/kg·K)
    k: float = math.nan          # Thermal conductivity (W/m·K)
    source: str = field(default="", compare=False)

    @property
    def is_valid(self) -> bool:
        """Check if density and viscosity are set"""
        return not (math.isnan(self.rho) or math.isnan(self.mu))

    @property
    def nu(self) -> float:
        """Kinematic viscosity (m²/s)"""
        return self.mu / self.rho


class Fluid:
    """
    Liquid property calculator using CoolProp

    Example:
        >>> water = Fluid("Water")
        >>> props = water.properties(20.0)
        >>> round(props.rho, 1)
        998.2
    """

    def __init__(self, fluid_name: str = "Water"):
        """
        Args:
            fluid_name: CoolProp fluid identifier (e.g. "Water")
        """
        self.name = fluid_name

        try:
            CP.PropsSI('M', fluid_name)
        except ValueError as e:
            raise ValueError(f"Fluid '{fluid_name}' not available in CoolProp") from e

    def properties(self, T_celsius: float, P: float = P_ATM) -> LiquidProperties:
        """
        Properties at temperature T (°C) and pressure P (Pa)

        Raises:
            ThermoException: if CoolProp cannot evaluate the state
        """
        T = T_celsius + 273.15
        try:
            return LiquidProperties(
                T=T_celsius,
                P=P,
                rho=CP.PropsSI('D', 'T', T, 'P', P, self.name),
                mu=CP.PropsSI('V', 'T', T, 'P', P, self.name),
                cp=CP.PropsSI('Cpmass', 'T', T, 'P', P, self.name),
                k=CP.PropsSI('L', 'T', T, 'P', P, self.name),
                source="CoolProp",
            )
        except ValueError as e:
            raise ThermoException(
                f"Property calculation failed for {self.name} at T={T_celsius} °C, P={P} Pa: {e}"
            ) from e

    def __repr__(self) -> str:
        return f"Fluid({self.name!r})"


# [T(°C), rho(kg/m³), mu(Pa·s), cp(J/kg·K), k(W/m·K)] at 101.325 kPa
# White, F.M. (2011). Fluid Mechanics, 8th ed.; ASHRAE Handbook (2021)
WATER_TABLE = np.array([
    [0,    999.8,  1.787e-3,  4217,  0.561],
    [5,    999.9,  1.519e-3,  4205,  0.571],
    [10,   999.7,  1.307e-3,  4195,  0.580],
    [15,   999.1,  1.139e-3,  4186,  0.589],
    [20,   998.2,  1.002e-3,  4182,  0.598],
    [25,   997.0,  8.90e-4,   4179,  0.607],
    [30,   995.7,  7.98e-4,   4178,  0.615],
    [35,   994.0,  7.20e-4,   4178,  0.623],
    [40,   992.2,  6.53e-4,   4179,  0.630],
    [45,   990.2,  5.94e-4,   4180,  0.637],
    [50,   988.0,  5.47e-4,   4181,  0.644],
    [55,   985.7,  5.04e-4,   4183,  0.651],
    [60,   983.2,  4.67e-4,   4185,  0.659],
    [65,   980.5,  4.36e-4,   4186,  0.666],
    [70,   977.8,  4.04e-4,   4187,  0.673],
    [75,   974.8,  3.77e-4,   4189,  0.680],
    [80,   971.8,  3.55e-4,   4191,  0.688],
    [85,   968.6,  3.34e-4,   4193,  0.695],
    [90,   965.3,  3.15e-4,   4196,  0.702],
    [95,   961.9,  2.98e-4,   4197,  0.709],
    [100,  958.4,  2.82e-4,   4199,  0.716],
])

# Lower bounds applied after extrapolation
_WATER_FLOORS = (900.0, 1e-4, 4000.0, 0.5)


def _interp_extrap(x: float, xp: np.ndarray, fp: np.ndarray) -> float:
    """Linear interpolation, extended linearly beyond the table ends"""
    if x < xp[0]:
        slope = (fp[1] - fp[0]) / (xp[1] - xp[0])
        return float(fp[0] + slope * (x - xp[0]))
    if x > xp[-1]:
        slope = (fp[-1] - fp[-2]) / (xp[-1] - xp[-2])
        return float(fp[-1] + slope * (x - xp[-1]))
    return float(np.interp(x, xp, fp))


class TabulatedWater:
    """Water properties from WATER_TABLE, same interface as Fluid"""

    name = "Water"

    def properties(self, T_celsius: float, P: float = P_ATM) -> LiquidProperties:
        T_col = WATER_TABLE[:, 0]
        values = [
            max(_interp_extrap(T_celsius, T_col, WATER_TABLE[:, i]), floor)
            for i, floor in zip(range(1, 5), _WATER_FLOORS)
        ]
        rho, mu, cp, k = values
        return LiquidProperties(T=T_celsius, P=P, rho=rho, mu=mu, cp=cp, k=k, source="table")

    def __repr__(self) -> str:
        return "TabulatedWater()"
