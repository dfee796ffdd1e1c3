"""
Analysis tools for pipe systems

Includes:
- System curve
- Pump operating point and selection
- Loss aggregation (full analysis)
- Case files and tabular export
"""

from .system_curve import SystemCurve, build_system_curve
from .pump_selection import (
    CandidateStatus,
    CandidateOutcome,
    SelectionWeights,
    OperatingPoint,
    PumpOperatingPointSelector,
    find_operating_point,
    selection_score,
)
from .aggregator import (
    MinorLossDetail,
    PowerRequirement,
    ResultRecord,
    LossAggregator,
    compute_losses,
    power_requirement,
)
from .case import AnalysisCase, build_case, load_case, EXAMPLE_CASE_FILE
from .export import (
    summary_frame,
    profile_frame,
    candidates_frame,
    system_curve_frame,
    export_result_csv,
)

__all__ = [
    'SystemCurve',
    'build_system_curve',
    'CandidateStatus',
    'CandidateOutcome',
    'SelectionWeights',
    'OperatingPoint',
    'PumpOperatingPointSelector',
    'find_operating_point',
    'selection_score',
    'MinorLossDetail',
    'PowerRequirement',
    'ResultRecord',
    'LossAggregator',
    'compute_losses',
    'power_requirement',
    'AnalysisCase',
    'build_case',
    'load_case',
    'EXAMPLE_CASE_FILE',
    'summary_frame',
    'profile_frame',
    'candidates_frame',
    'system_curve_frame',
    'export_result_csv',
]
