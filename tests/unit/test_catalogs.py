# File: tests/unit/test_catalogs.py
"""
Unit tests for material, fitting and pump catalogs
"""

import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from pipe_flow_analyzer.catalogs.pipe_data import PipeMaterialCatalog, FittingCatalog
from pipe_flow_analyzer.catalogs.pumps import (
    PumpCurveRecord,
    PumpCatalog,
    load_pump_catalog,
)
from pipe_flow_analyzer.core.exceptions import InvalidCodeError


@pytest.fixture(scope="module")
def materials():
    return PipeMaterialCatalog.from_yaml()


@pytest.fixture(scope="module")
def fittings():
    return FittingCatalog.from_yaml()


def make_pump(name="P1", Q=(0.0, 0.01, 0.02), H=(20.0, 15.0, 5.0), eff=(0.0, 0.7, 0.5)):
    return PumpCurveRecord(name=name, type="Test", power_hp=1.0, power_kW=0.75,
                           Q=np.array(Q), H=np.array(H), efficiency=np.array(eff))


class TestMaterials:

    def test_six_materials(self, materials):
        assert len(materials) == 6

    def test_commercial_steel(self, materials):
        steel = materials.get("A")
        assert steel.roughness == pytest.approx(4.6e-5)
        assert steel.name == "Commercial Steel"

    def test_lookup_is_case_insensitive(self, materials):
        assert materials.get("c") == materials.get("C")
        assert materials.roughness(" b ") == pytest.approx(1.5e-6)
        assert "f" in materials

    def test_unknown_code(self, materials):
        with pytest.raises(InvalidCodeError) as exc_info:
            materials.get("Z")
        assert "Invalid material code" in str(exc_info.value)
        assert "A-F" in str(exc_info.value)

    def test_unknown_code_is_key_error(self, materials):
        with pytest.raises(KeyError):
            materials.get("Q")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PipeMaterialCatalog.from_yaml(tmp_path / "missing.yml")


class TestFittings:

    def test_fourteen_fittings(self, fittings):
        assert len(fittings) == 14

    @pytest.mark.parametrize("code,K", [("A", 0.9), ("G", 10.0), ("H", 0.05), ("n", 1.0)])
    def test_K_values(self, fittings, code, K):
        assert fittings.get(code).K == pytest.approx(K)

    def test_make_fitting(self, fittings):
        fitting = fittings.make_fitting("g", 2.0)
        assert fitting.code == "G"
        assert fitting.K == 10.0
        assert fitting.position == 2.0
        assert "Globe" in fitting.name

    def test_unknown_code(self, fittings):
        with pytest.raises(InvalidCodeError, match="Invalid fitting code"):
            fittings.make_fitting("Z", 1.0)


class TestPumpCurveRecord:

    def test_derived_values(self):
        pump = make_pump()
        assert pump.Q_BEP == pytest.approx(0.01)
        assert pump.H_BEP == pytest.approx(15.0)
        assert pump.efficiency_BEP == pytest.approx(0.7)
        assert pump.H_shutoff == 20.0
        assert pump.H_max == 20.0
        assert pump.Q_min == 0.0
        assert pump.Q_max == pytest.approx(0.02)

    def test_specific_speed(self):
        pump = make_pump()
        assert pump.specific_speed == pytest.approx(1750 * np.sqrt(10.0) / 15.0**0.75)

    def test_arrays_are_read_only(self):
        pump = make_pump()
        with pytest.raises(ValueError):
            pump.H[0] = 99.0

    def test_caller_array_not_aliased(self):
        H = np.array([20.0, 15.0, 5.0])
        pump = make_pump(H=H)
        H[0] = 99.0
        assert pump.H_shutoff == 20.0
        assert pump.H[0] == 20.0

    def test_non_increasing_flow_raises(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            make_pump(Q=(0.0, 0.02, 0.01))

    def test_mismatched_lengths_raise(self):
        with pytest.raises(ValueError):
            make_pump(H=(20.0, 15.0))

    def test_single_point_raises(self):
        with pytest.raises(ValueError):
            make_pump(Q=(0.01,), H=(10.0,), eff=(0.5,))

    def test_from_catalog_entry_converts_units(self):
        pump = PumpCurveRecord.from_catalog_entry({
            "name": "X", "type": "T", "power_hp": 1.0, "power_kW": 0.75,
            "curve": [[0.0, 10.0, 0.0], [5.0, 8.0, 60.0], [10.0, 4.0, 40.0]],
        })
        assert pump.Q_BEP == pytest.approx(0.005)
        assert pump.efficiency_BEP == pytest.approx(0.60)


class TestPumpCatalog:

    def test_bundled_catalog(self, pump_catalog):
        assert len(pump_catalog) == 10
        assert pump_catalog[0].name == "FPX-1510"
        assert "FPX-5060" in pump_catalog.names

    def test_fpx_2030(self, pump_catalog):
        pump = pump_catalog.by_name("FPX-2030")
        assert pump.Q_BEP == pytest.approx(0.020)
        assert pump.efficiency_BEP == pytest.approx(0.82)
        assert pump.H_BEP == pytest.approx(26.0)
        assert pump.H_shutoff == pytest.approx(38.0)
        assert pump.Q_max == pytest.approx(0.035)

    def test_all_records_valid(self, pump_catalog):
        for pump in pump_catalog:
            assert np.all(np.diff(pump.Q) > 0)
            assert 0.0 < pump.efficiency_BEP <= 1.0
            assert pump.H_shutoff == pump.H_max

    def test_unknown_pump(self, pump_catalog):
        with pytest.raises(KeyError):
            pump_catalog.by_name("NOPE")

    def test_empty_catalog_rejected(self):
        with pytest.raises(ValueError):
            PumpCatalog([])

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="unique"):
            PumpCatalog([make_pump("A"), make_pump("A")])

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_pump_catalog(tmp_path / "nope.yml")
