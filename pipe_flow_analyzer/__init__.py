# File: pipe_flow_analyzer/__init__.py
"""
Pipe flow analyzer: friction and minor losses, energy lines and pump selection
"""

__version__ = "0.1.0"

from pipe_flow_analyzer.core.geometry import PipeSpec, Fitting, BoundaryCondition
from pipe_flow_analyzer.core.flow import FlowInput, FlowState, flow_from_rate
from pipe_flow_analyzer.core.correlations import (
    FlowRegime,
    FrictionFactorResult,
    FrictionFactorSolver,
    friction_factor,
)
from pipe_flow_analyzer.core.thermodynamics import Fluid, TabulatedWater, ThermoException
from pipe_flow_analyzer.core.exceptions import (
    HydraulicsError,
    DomainError,
    InvalidCodeError,
)
from pipe_flow_analyzer.catalogs.pumps import PumpCurveRecord, load_pump_catalog
from pipe_flow_analyzer.analysis.pump_selection import PumpOperatingPointSelector
from pipe_flow_analyzer.analysis.aggregator import LossAggregator, ResultRecord, compute_losses

__all__ = [
    # Core
    "PipeSpec",
    "Fitting",
    "BoundaryCondition",
    "FlowInput",
    "FlowState",
    "flow_from_rate",
    "Fluid",
    "TabulatedWater",

    # Errors
    "HydraulicsError",
    "DomainError",
    "InvalidCodeError",
    "ThermoException",

    # Correlations
    "FlowRegime",
    "FrictionFactorResult",
    "FrictionFactorSolver",
    "friction_factor",

    # Pumps and analysis
    "PumpCurveRecord",
    "load_pump_catalog",
    "PumpOperatingPointSelector",
    "LossAggregator",
    "ResultRecord",
    "compute_losses",
]
