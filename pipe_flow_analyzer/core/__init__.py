# File: pipe_flow_analyzer/core/__init__.py

"""
Core utilities for pipe-flow calculations

This module provides:
- Pipe, fitting and boundary-condition definitions
- Flow state (velocity, Reynolds number) and flow-specification helpers
- Liquid properties from CoolProp or a built-in water table
- Colebrook-White friction factor solver
- Error types and warning categories

Usage:
    from pipe_flow_analyzer.core import PipeSpec, FlowState, FrictionFactorSolver

    pipe = PipeSpec(diameter=0.1, length=50.0, roughness=4.6e-5)
    flow = flow_from_rate(0.015, rho=998.2, mu=1.002e-3)
    state = FlowState.from_input(pipe, flow)
    result = FrictionFactorSolver().solve(state.Re, pipe.relative_roughness)
"""

# ============================================================================
# Errors and warnings - from exceptions.py
# ============================================================================
from .exceptions import (
    HydraulicsError,
    DomainError,
    InvalidCodeError,
    ConvergenceWarning,
    FrictionRangeWarning,
    PumpSelectionWarning,
)

# ============================================================================
# Geometry and boundary conditions - from geometry.py
# ============================================================================
from .geometry import (
    PipeSpec,
    Fitting,
    BoundaryCondition,
    total_K,
    sort_fittings,
)

# ============================================================================
# Correlations - from correlations.py
# ============================================================================
from .correlations import (
    FlowRegime,
    FrictionFactorResult,
    FrictionFactorSolver,
    friction_factor,
    colebrook_residual,
    swamee_jain,
)

# ============================================================================
# Flow - from flow.py
# ============================================================================
from .flow import (
    FlowInput,
    FlowState,
    flow_from_rate,
    flow_from_velocity,
    flow_from_manometer,
    velocity_from_manometer,
    lps_to_m3s,
    m3s_to_lps,
    pa_to_kpa,
    kpa_to_pa,
)

# ============================================================================
# Thermodynamics - from thermodynamics.py
# ============================================================================
from .thermodynamics import (
    LiquidProperties,
    Fluid,
    TabulatedWater,
    ThermoException,
)

# ============================================================================
# Public API
# ============================================================================
__all__ = [
    # Errors
    'HydraulicsError',
    'DomainError',
    'InvalidCodeError',
    'ConvergenceWarning',
    'FrictionRangeWarning',
    'PumpSelectionWarning',

    # Geometry
    'PipeSpec',
    'Fitting',
    'BoundaryCondition',
    'total_K',
    'sort_fittings',

    # Correlations
    'FlowRegime',
    'FrictionFactorResult',
    'FrictionFactorSolver',
    'friction_factor',
    'colebrook_residual',
    'swamee_jain',

    # Flow
    'FlowInput',
    'FlowState',
    'flow_from_rate',
    'flow_from_velocity',
    'flow_from_manometer',
    'velocity_from_manometer',
    'lps_to_m3s',
    'm3s_to_lps',
    'pa_to_kpa',
    'kpa_to_pa',

    # Thermodynamics
    'LiquidProperties',
    'Fluid',
    'TabulatedWater',
    'ThermoException',
]

# ============================================================================
# Package metadata
# ============================================================================
__version__ = '0.1.0'
__description__ = 'Core utilities for pipe-flow loss and pump-sizing analysis'
