# File: pipe_flow_analyzer/losses/profile.py
"""
Distributed head-loss profile along the pipe

Friction accumulates linearly with distance at dh/dx = f/D · V²/(2g).
Each fitting adds its minor loss K·V²/(2g) as an instantaneous drop,
encoded as two samples at the same x: the first carries friction up to
the fitting, the second adds the fitting's minor loss.

ALL LOSSES IN METRES OF FLUID
"""

from dataclasses import dataclass
from typing import Sequence
import numpy as np

from ..core.constants import G
from ..core.geometry import PipeSpec, Fitting, sort_fittings


@dataclass(frozen=True)
class LossProfile:
    """
    Cumulative head loss sampled along the pipe

    x is non-decreasing; repeated x values mark a fitting drop.
    """
    x: np.ndarray                # Position from inlet (m)
    h_friction: np.ndarray       # Cumulative friction loss (m)
    h_minor: np.ndarray          # Cumulative minor loss (m)
    h_total: np.ndarray          # h_friction + h_minor (m)

    def __len__(self) -> int:
        return len(self.x)

    @property
    def total_loss(self) -> float:
        """Cumulative loss at the outlet (m)"""
        return float(self.h_total[-1])

    @property
    def drop_indices(self) -> np.ndarray:
        """Indices i where sample i is the post-fitting half of a drop pair"""
        return np.flatnonzero(np.diff(self.x) == 0) + 1


def friction_gradient(f: float, diameter: float, V: float) -> float:
    """Friction head loss per metre of pipe (m/m)"""
    return f / diameter * V**2 / (2.0 * G)


def build_loss_profile(
    pipe: PipeSpec,
    fittings: Sequence[Fitting],
    V: float,
    f: float,
) -> LossProfile:
    """
    Build the cumulative friction/minor/total loss profile

    Args:
        pipe: Pipe geometry
        fittings: Fittings in any order; processed by position, ties keep input order
        V: Mean velocity (m/s)
        f: Darcy friction factor

    Returns:
        LossProfile starting at x=0 and ending at x=L
    """
    ordered = sort_fittings(fittings)
    pipe.check_fittings(ordered)

    dh_dx = friction_gradient(f, pipe.diameter, V)
    velocity_head = V**2 / (2.0 * G)

    # inlet + two samples per fitting + outlet
    n_max = 2 + 2 * len(ordered)
    x = np.zeros(n_max)
    h_fric = np.zeros(n_max)
    h_minor = np.zeros(n_max)

    idx = 0
    current_pos = 0.0

    for fitting in ordered:
        pos = fitting.position

        # Point just before the fitting: friction up to here
        idx += 1
        x[idx] = pos
        h_fric[idx] = h_fric[idx - 1] + dh_dx * (pos - current_pos)
        h_minor[idx] = h_minor[idx - 1]

        # Point just after the fitting: same x, minor loss added
        idx += 1
        x[idx] = pos
        h_fric[idx] = h_fric[idx - 1]
        h_minor[idx] = h_minor[idx - 1] + fitting.K * velocity_head

        current_pos = pos

    if pipe.length > current_pos:
        idx += 1
        x[idx] = pipe.length
        h_fric[idx] = h_fric[idx - 1] + dh_dx * (pipe.length - current_pos)
        h_minor[idx] = h_minor[idx - 1]

    n = idx + 1
    x = x[:n]
    h_fric = h_fric[:n]
    h_minor = h_minor[:n]

    return LossProfile(x=x, h_friction=h_fric, h_minor=h_minor, h_total=h_fric + h_minor)
