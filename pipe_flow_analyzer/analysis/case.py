# File: pipe_flow_analyzer/analysis/case.py
"""
Analysis case files

A case is a YAML document describing one pipe run:

    name: DN100 commercial steel
    pipe:
      material: A            # catalog code, or give roughness_mm directly
      diameter_mm: 100
      length_m: 50
    fittings:
      - {code: L, position_m: 0}
      - {code: A, position_m: 12.5}
    flow:
      temperature_C: 20
      flow_rate_lps: 15      # or velocity_ms / manometer_mm
    system:
      z_inlet_m: 0
      z_outlet_m: 0
      P_inlet_kPa: 0
      P_outlet_kPa: 0

Units in the file are the engineering ones above; everything is converted to
SI here before it reaches the calculation engine.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union
import yaml

from ..catalogs.pipe_data import PipeMaterialCatalog, FittingCatalog, DATA_DIR
from ..core.flow import (
    FlowInput,
    flow_from_rate,
    flow_from_velocity,
    flow_from_manometer,
    lps_to_m3s,
    kpa_to_pa,
)
from ..core.geometry import PipeSpec, Fitting, BoundaryCondition
from ..core.thermodynamics import Fluid

EXAMPLE_CASE_FILE = DATA_DIR / "example_case.yml"


@dataclass(frozen=True)
class AnalysisCase:
    """Inputs of one analysis run, in SI"""
    name: str
    pipe: PipeSpec
    fittings: Tuple[Fitting, ...]
    flow: FlowInput
    boundary: BoundaryCondition
    description: str = field(default="", compare=False)


def _require(section: dict, key: str, where: str):
    if key not in section:
        raise ValueError(f"Case file: missing '{key}' in '{where}'")
    return section[key]


def build_case(
    data: dict,
    materials: Optional[PipeMaterialCatalog] = None,
    fitting_catalog: Optional[FittingCatalog] = None,
    fluid=None,
) -> AnalysisCase:
    """
    Build an AnalysisCase from a parsed case document

    Args:
        data: Parsed YAML mapping
        materials: Material catalog (bundled one if None)
        fitting_catalog: Fitting catalog (bundled one if None)
        fluid: Property provider with .properties(T_celsius); CoolProp water if None

    Raises:
        ValueError: missing or contradictory fields
        InvalidCodeError: unknown material or fitting code
    """
    materials = materials or PipeMaterialCatalog.from_yaml()
    fitting_catalog = fitting_catalog or FittingCatalog.from_yaml()

    # --- Pipe ---
    pipe_data = _require(data, "pipe", "root")
    diameter = float(_require(pipe_data, "diameter_mm", "pipe")) / 1000.0
    length = float(_require(pipe_data, "length_m", "pipe"))

    if "material" in pipe_data:
        material = materials.get(pipe_data["material"])
        pipe = PipeSpec(
            diameter=diameter,
            length=length,
            roughness=material.roughness,
            material=material.code,
            material_name=material.name,
        )
    elif "roughness_mm" in pipe_data:
        pipe = PipeSpec(
            diameter=diameter,
            length=length,
            roughness=float(pipe_data["roughness_mm"]) / 1000.0,
            material_name=pipe_data.get("material_name", ""),
        )
    else:
        raise ValueError("Case file: pipe needs either 'material' or 'roughness_mm'")

    # --- Fittings ---
    fittings = []
    for entry in data.get("fittings") or []:
        position = float(_require(entry, "position_m", "fittings"))
        if "code" in entry:
            fitting = fitting_catalog.make_fitting(entry["code"], position)
            if "K" in entry:
                fitting = Fitting(fitting.code, float(entry["K"]), position, fitting.name)
        else:
            fitting = Fitting(
                code=entry.get("name", "custom"),
                K=float(_require(entry, "K", "fittings")),
                position=position,
                name=entry.get("name", ""),
            )
        fittings.append(fitting)

    # --- Flow ---
    flow_data = _require(data, "flow", "root")
    temperature = float(flow_data.get("temperature_C", 20.0))
    if "rho" in flow_data and "mu" in flow_data:
        rho, mu = float(flow_data["rho"]), float(flow_data["mu"])
    else:
        props = (fluid or Fluid("Water")).properties(temperature)
        rho, mu = props.rho, props.mu

    given = [k for k in ("flow_rate_lps", "velocity_ms", "manometer_mm") if k in flow_data]
    if len(given) != 1:
        raise ValueError(
            "Case file: flow needs exactly one of flow_rate_lps, velocity_ms, manometer_mm"
        )
    if given[0] == "flow_rate_lps":
        flow = flow_from_rate(lps_to_m3s(float(flow_data["flow_rate_lps"])), rho, mu, temperature)
    elif given[0] == "velocity_ms":
        flow = flow_from_velocity(pipe, float(flow_data["velocity_ms"]), rho, mu, temperature)
    else:
        flow = flow_from_manometer(pipe, float(flow_data["manometer_mm"]), rho, mu, temperature)

    # --- Boundary ---
    system = data.get("system") or {}
    boundary = BoundaryCondition(
        z_inlet=float(system.get("z_inlet_m", 0.0)),
        z_outlet=float(system.get("z_outlet_m", 0.0)),
        P_inlet=kpa_to_pa(float(system.get("P_inlet_kPa", 0.0))),
        P_outlet=kpa_to_pa(float(system.get("P_outlet_kPa", 0.0))),
    )

    return AnalysisCase(
        name=data.get("name", "Unnamed"),
        pipe=pipe,
        fittings=tuple(fittings),
        flow=flow,
        boundary=boundary,
        description=data.get("description", ""),
    )


def load_case(path: Union[str, Path, None] = None, fluid=None) -> AnalysisCase:
    """
    Load a case from YAML (the bundled example case if path is None)

    Pass fluid=TabulatedWater() to avoid CoolProp lookups.
    """
    path = Path(path or EXAMPLE_CASE_FILE)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return build_case(data, fluid=fluid)
