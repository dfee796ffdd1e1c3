"""
Matplotlib charts for analysis results
"""

from .plotting import (
    plot_moody_diagram,
    plot_system_pump_curves,
    plot_egl_hgl_profile,
    plot_pressure_profile,
)

__all__ = [
    'plot_moody_diagram',
    'plot_system_pump_curves',
    'plot_egl_hgl_profile',
    'plot_pressure_profile',
]
