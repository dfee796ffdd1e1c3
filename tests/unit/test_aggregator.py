# File: tests/unit/test_aggregator.py
"""
Unit tests for the loss aggregator (full analysis)

Reference: DN100 commercial steel, 50 m, 15 L/s, ΣK=17.5, 10 m lift
"""

import pytest
import math
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from pipe_flow_analyzer.analysis.aggregator import (
    LossAggregator,
    compute_losses,
    power_requirement,
    ResultRecord,
)
from pipe_flow_analyzer.analysis.pump_selection import PumpOperatingPointSelector
from pipe_flow_analyzer.core.correlations import FlowRegime, FrictionFactorSolver
from pipe_flow_analyzer.core.exceptions import DomainError, PumpSelectionWarning
from pipe_flow_analyzer.core.flow import FlowInput, FlowState
from pipe_flow_analyzer.core.geometry import PipeSpec, BoundaryCondition, Fitting

G = 9.81


class TestExampleCase:

    def test_flow(self, example_result):
        assert example_result.flow.V == pytest.approx(1.909859, rel=1e-6)
        assert example_result.flow.Re == pytest.approx(213952, rel=1e-4)
        assert example_result.flow.regime is FlowRegime.TURBULENT

    def test_friction_factor(self, example_result):
        assert example_result.f == pytest.approx(0.0186, abs=5e-4)
        assert example_result.regime is FlowRegime.TURBULENT
        assert example_result.friction.converged

    def test_major_loss(self, example_result):
        vh = example_result.flow.velocity_head
        assert example_result.h_f == pytest.approx(example_result.f * 500.0 * vh)
        assert example_result.dP_f == pytest.approx(998.2 * G * example_result.h_f)

    def test_minor_loss(self, example_result):
        assert example_result.K_total == pytest.approx(17.5)
        assert example_result.h_m == pytest.approx(17.5 * 0.185910, rel=1e-5)
        assert len(example_result.minor_losses) == 8
        assert sum(d.h for d in example_result.minor_losses) == pytest.approx(example_result.h_m)

    def test_total_loss(self, example_result):
        assert example_result.h_L == pytest.approx(4.98, abs=0.05)
        assert example_result.h_L == pytest.approx(example_result.h_f + example_result.h_m)
        assert example_result.dP_total == pytest.approx(998.2 * G * example_result.h_L)

    def test_required_pump_head(self, example_result):
        assert example_result.H_static == pytest.approx(10.0)
        assert example_result.h_pump == pytest.approx(10.0 + example_result.h_L)

    def test_system_curve(self, example_result):
        curve = example_result.system_curve
        assert curve.K_sys == pytest.approx(example_result.h_L / 0.015**2)
        assert curve.head_at(0.015) == pytest.approx(example_result.h_pump)

    def test_power(self, example_result):
        power = example_result.power
        op = example_result.operating_point
        assert power.hydraulic == pytest.approx(998.2 * G * 0.015 * example_result.h_pump)
        assert power.shaft == pytest.approx(power.hydraulic / op.efficiency)
        assert power.motor == pytest.approx(1.15 * power.shaft)

    def test_inputs_echoed(self, example_result, example_pipe):
        assert example_result.pipe == example_pipe
        assert isinstance(example_result.fittings, tuple)


class TestPowerRequirement:

    def test_efficiency_used(self):
        power = power_requirement(1000.0, 0.01, 10.0, 0.5)
        assert power.hydraulic == pytest.approx(981.0)
        assert power.shaft == pytest.approx(1962.0)
        assert power.efficiency_used == 0.5

    @pytest.mark.parametrize("eff", [0.0, 0.01, -0.2])
    def test_unknown_efficiency_defaults(self, eff):
        power = power_requirement(1000.0, 0.01, 10.0, eff)
        assert power.efficiency_used == 0.70
        assert power.shaft == pytest.approx(981.0 / 0.70)


class TestAggregatorInputs:

    def test_zero_flow_raises(self, example_pipe, example_fittings, lift_boundary, pump_catalog):
        flow = FlowInput(Q=0.0, rho=998.2, mu=1.002e-3)
        with pytest.raises(DomainError):
            LossAggregator(pump_catalog).compute(example_pipe, example_fittings, flow, lift_boundary)

    def test_zero_flow_state_raises(self, example_pipe, lift_boundary, pump_catalog):
        state = FlowState(Q=0.0, V=0.0, rho=998.2, mu=1e-3, Re=0.0, relative_roughness=4.6e-4)
        with pytest.raises(DomainError):
            LossAggregator(pump_catalog).compute(example_pipe, [], state, lift_boundary)

    def test_fitting_beyond_pipe_raises(self, example_pipe, example_flow, lift_boundary, pump_catalog):
        with pytest.raises(ValueError):
            LossAggregator(pump_catalog).compute(
                example_pipe, [Fitting("A", 0.9, 60.0)], example_flow, lift_boundary
            )

    @pytest.mark.parametrize("boundary", [
        BoundaryCondition(z_inlet=30.0, z_outlet=0.0),
        BoundaryCondition(P_inlet=200e3),
    ], ids=["downhill", "pressurised_inlet"])
    def test_no_pump_head_required(self, example_pipe, example_flow, pump_catalog, boundary):
        with pytest.warns(PumpSelectionWarning, match="no pump head"):
            result = LossAggregator(pump_catalog).compute(example_pipe, [], example_flow, boundary)
        assert isinstance(result, ResultRecord)
        assert result.H_static < 0
        assert result.h_pump == pytest.approx(result.H_static + result.h_L)
        assert result.h_pump < 0
        assert result.power.hydraulic < 0
        assert result.power.motor == pytest.approx(1.15 * result.power.shaft)
        assert result.operating_point.pump_name in pump_catalog.names

    def test_accepts_flow_state(self, example_pipe, example_fittings, example_flow,
                                lift_boundary, pump_catalog):
        state = FlowState.from_input(example_pipe, example_flow)
        result = LossAggregator(pump_catalog).compute(
            example_pipe, example_fittings, state, lift_boundary
        )
        assert result.flow.Re == pytest.approx(state.Re)
        assert result.flow.regime is FlowRegime.TURBULENT

    def test_laminar_pipe(self, pump_catalog, lift_boundary):
        pipe = PipeSpec(diameter=0.05, length=10.0, roughness=0.0)
        # Oil-like viscosity keeps Re below 2300
        flow = FlowInput(Q=0.001, rho=900.0, mu=0.1)
        result = LossAggregator(pump_catalog).compute(pipe, [], flow, lift_boundary)
        assert result.regime is FlowRegime.LAMINAR
        assert result.f == pytest.approx(64.0 / result.flow.Re)
        assert result.h_m == 0.0

    def test_injected_collaborators(self, example_pipe, example_fittings, example_flow,
                                    lift_boundary, pump_catalog):
        solver = FrictionFactorSolver()
        selector = PumpOperatingPointSelector(grid_points=100)
        aggregator = LossAggregator(pump_catalog, solver=solver, selector=selector)
        assert aggregator.solver is solver
        assert aggregator.selector is selector
        result = aggregator.compute(example_pipe, example_fittings, example_flow, lift_boundary)
        assert result.h_L == pytest.approx(4.98, abs=0.05)

    def test_compute_is_repeatable(self, example_pipe, example_fittings, example_flow,
                                   lift_boundary, pump_catalog):
        aggregator = LossAggregator(pump_catalog)
        first = aggregator.compute(example_pipe, example_fittings, example_flow, lift_boundary)
        second = aggregator.compute(example_pipe, example_fittings, example_flow, lift_boundary)
        assert first.h_pump == second.h_pump
        assert first.operating_point.pump_name == second.operating_point.pump_name

    def test_compute_losses(self, example_pipe, example_fittings, example_flow,
                            lift_boundary, pump_catalog):
        result = compute_losses(example_pipe, example_fittings, example_flow,
                                lift_boundary, pump_catalog)
        assert math.isfinite(result.h_pump)
