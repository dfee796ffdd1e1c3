# File: pipe_flow_analyzer/losses/__init__.py

"""
Distributed loss and energy-line calculations

Exports:
- build_loss_profile / LossProfile: cumulative friction + fitting losses along x
- calculate_energy_lines / EnergyLines: EGL and HGL from a loss profile
"""

from .profile import LossProfile, build_loss_profile, friction_gradient
from .energy_lines import EnergyLines, calculate_energy_lines

__all__ = [
    'LossProfile',
    'build_loss_profile',
    'friction_gradient',
    'EnergyLines',
    'calculate_energy_lines',
]
