# File: pipe_flow_analyzer/catalogs/pumps.py
"""
Pump catalog

Curves are stored in the YAML file in L/s and percent and converted to
m³/s and fractions on load. Records and their arrays are read-only; build
the catalog once and pass it to every analysis.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Union
import numpy as np
import yaml

from .pipe_data import DATA_DIR

PUMP_DATABASE_FILE = DATA_DIR / "pump_database.yml"

N_RPM_REFERENCE = 1750.0     # Speed used for the catalog specific speed


def _frozen_array(values) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class PumpCurveRecord:
    """
    Catalog pump with its head and efficiency curves

    Q (m³/s) must be strictly increasing; efficiency is a fraction 0-1.
    """
    name: str
    type: str
    power_hp: float
    power_kW: float
    Q: np.ndarray
    H: np.ndarray
    efficiency: np.ndarray

    # Derived in __post_init__
    Q_BEP: float = field(init=False)
    H_BEP: float = field(init=False)
    efficiency_BEP: float = field(init=False)
    H_shutoff: float = field(init=False)
    Q_max: float = field(init=False)
    specific_speed: float = field(init=False)

    def __post_init__(self):
        Q = _frozen_array(self.Q)
        H = _frozen_array(self.H)
        eff = _frozen_array(self.efficiency)

        if not (Q.ndim == H.ndim == eff.ndim == 1):
            raise ValueError(f"Pump {self.name}: curves must be one-dimensional")
        if not (len(Q) == len(H) == len(eff)):
            raise ValueError(f"Pump {self.name}: Q, H and efficiency must have equal length")
        if len(Q) < 2:
            raise ValueError(f"Pump {self.name}: at least two curve points are required")
        if np.any(np.diff(Q) <= 0):
            raise ValueError(f"Pump {self.name}: flow samples must be strictly increasing")

        # Frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, "Q", Q)
        object.__setattr__(self, "H", H)
        object.__setattr__(self, "efficiency", eff)

        idx_bep = int(np.argmax(eff))
        object.__setattr__(self, "Q_BEP", float(Q[idx_bep]))
        object.__setattr__(self, "H_BEP", float(H[idx_bep]))
        object.__setattr__(self, "efficiency_BEP", float(eff[idx_bep]))
        object.__setattr__(self, "H_shutoff", float(H[0]))
        object.__setattr__(self, "Q_max", float(Q[-1]))

        # Ns = N·√Q / H^(3/4), Q in L/s as catalogued
        if self.H_BEP > 0:
            Ns = N_RPM_REFERENCE * np.sqrt(self.Q_BEP * 1000.0) / self.H_BEP**0.75
        else:
            Ns = 0.0
        object.__setattr__(self, "specific_speed", float(Ns))

    @property
    def H_max(self) -> float:
        return float(self.H.max())

    @property
    def Q_min(self) -> float:
        return float(self.Q.min())

    @classmethod
    def from_catalog_entry(cls, entry: dict) -> "PumpCurveRecord":
        """Build from a YAML entry with curve rows [Q (L/s), H (m), eff (%)]"""
        curve = np.array(entry["curve"], dtype=float)
        if curve.ndim != 2 or curve.shape[1] != 3:
            raise ValueError(f"Pump {entry.get('name')}: curve rows must be [Q, H, efficiency]")
        return cls(
            name=entry["name"],
            type=entry.get("type", ""),
            power_hp=float(entry.get("power_hp", float("nan"))),
            power_kW=float(entry.get("power_kW", float("nan"))),
            Q=curve[:, 0] / 1000.0,
            H=curve[:, 1],
            efficiency=curve[:, 2] / 100.0,
        )

    def __repr__(self) -> str:
        return (
            f"PumpCurveRecord(name={self.name!r}, type={self.type!r}, "
            f"Q_BEP={self.Q_BEP * 1000:.1f} L/s, H_BEP={self.H_BEP:.1f} m, "
            f"eff_BEP={self.efficiency_BEP:.0%})"
        )


class PumpCatalog(Sequence[PumpCurveRecord]):
    """Immutable, ordered collection of PumpCurveRecord"""

    def __init__(self, pumps: Iterable[PumpCurveRecord]):
        self._pumps = tuple(pumps)
        if not self._pumps:
            raise ValueError("Pump catalog must contain at least one pump")
        names = [p.name for p in self._pumps]
        if len(set(names)) != len(names):
            raise ValueError("Pump names in a catalog must be unique")

    def __getitem__(self, index):
        return self._pumps[index]

    def __len__(self) -> int:
        return len(self._pumps)

    def __iter__(self) -> Iterator[PumpCurveRecord]:
        return iter(self._pumps)

    def by_name(self, name: str) -> PumpCurveRecord:
        for pump in self._pumps:
            if pump.name == name:
                return pump
        raise KeyError(f"Pump '{name}' not in catalog")

    @property
    def names(self):
        return [p.name for p in self._pumps]


def load_pump_catalog(path: Optional[Union[str, Path]] = None) -> PumpCatalog:
    """
    Read the pump catalog from YAML

    Args:
        path: Catalog file, defaults to the bundled data/pump_database.yml

    Returns:
        PumpCatalog
    """
    path = Path(path or PUMP_DATABASE_FILE)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        entries = yaml.safe_load(f)

    return PumpCatalog(PumpCurveRecord.from_catalog_entry(entry) for entry in entries)
