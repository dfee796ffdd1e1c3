# File: tests/unit/conftest.py
"""
Shared fixtures: the DN100 commercial steel example
(D=100 mm, L=50 m, ε=0.046 mm, Q=15 L/s, 10 m lift, ΣK=17.5)
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from pipe_flow_analyzer.core.geometry import PipeSpec, Fitting, BoundaryCondition
from pipe_flow_analyzer.core.flow import flow_from_rate
from pipe_flow_analyzer.catalogs.pumps import load_pump_catalog
from pipe_flow_analyzer.analysis.aggregator import LossAggregator

# Water near 25 °C (μ = 8.9106e-4 Pa·s); these reproduce Re ≈ 213,952.
# The bundled example case at 20 °C gives Re ≈ 190,000 through CoolProp.
T_DOC = 25.0
RHO_DOC = 998.2
MU_DOC = 8.9106e-4


@pytest.fixture
def example_pipe():
    return PipeSpec(diameter=0.1, length=50.0, roughness=0.046e-3, material="A",
                    material_name="Commercial Steel")


@pytest.fixture
def example_fittings():
    return [
        Fitting("L", 0.5, 0.0, "Sharp Entrance"),
        Fitting("I", 2.0, 1.0, "Check Valve"),
        Fitting("G", 10.0, 2.0, "Globe Valve (Open)"),
        Fitting("A", 0.9, 15.0, "90° Standard Elbow"),
        Fitting("E", 1.8, 25.0, "Tee - Branch Flow"),
        Fitting("C", 0.4, 35.0, "45° Elbow"),
        Fitting("A", 0.9, 45.0, "90° Standard Elbow"),
        Fitting("N", 1.0, 50.0, "Exit"),
    ]


@pytest.fixture
def example_flow():
    return flow_from_rate(0.015, RHO_DOC, MU_DOC, T_DOC)


@pytest.fixture
def lift_boundary():
    return BoundaryCondition(z_inlet=0.0, z_outlet=10.0)


@pytest.fixture(scope="session")
def pump_catalog():
    return load_pump_catalog()


@pytest.fixture
def example_result(example_pipe, example_fittings, example_flow, lift_boundary, pump_catalog):
    return LossAggregator(pump_catalog).compute(
        example_pipe, example_fittings, example_flow, lift_boundary
    )
