"""
Read-only catalogs: pipe materials, fitting types and pumps
"""

from .pipe_data import (
    Material,
    FittingType,
    PipeMaterialCatalog,
    FittingCatalog,
    DATA_DIR,
    CATALOG_FILE,
)
from .pumps import (
    PumpCurveRecord,
    PumpCatalog,
    load_pump_catalog,
    PUMP_DATABASE_FILE,
)

__all__ = [
    'Material',
    'FittingType',
    'PipeMaterialCatalog',
    'FittingCatalog',
    'DATA_DIR',
    'CATALOG_FILE',
    'PumpCurveRecord',
    'PumpCatalog',
    'load_pump_catalog',
    'PUMP_DATABASE_FILE',
]
