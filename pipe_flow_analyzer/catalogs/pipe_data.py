# File: pipe_flow_analyzer/catalogs/pipe_data.py
"""
Pipe material and fitting catalogs

Both are read once from data/catalogs.yml and looked up by a single-letter,
case-insensitive code. Unknown codes raise InvalidCodeError.
"""

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union
import yaml

from ..core.exceptions import InvalidCodeError
from ..core.geometry import Fitting

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
CATALOG_FILE = DATA_DIR / "catalogs.yml"


@dataclass(frozen=True)
class Material:
    code: str
    name: str
    roughness: float             # Absolute roughness (m)


@dataclass(frozen=True)
class FittingType:
    code: str
    name: str
    K: float


def _read_yaml(path: Union[str, Path]) -> dict:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _code_range(codes) -> str:
    codes = sorted(codes)
    return f"{codes[0]}-{codes[-1]}" if len(codes) > 1 else codes[0]


class PipeMaterialCatalog:
    """
    Material code -> absolute roughness

    Example:
        >>> materials = PipeMaterialCatalog.from_yaml()
        >>> materials.roughness("a")
        4.6e-05
    """

    def __init__(self, materials: Mapping[str, Material]):
        self._materials = MappingProxyType({k.upper(): v for k, v in materials.items()})

    @classmethod
    def from_yaml(cls, path: Optional[Union[str, Path]] = None) -> "PipeMaterialCatalog":
        data = _read_yaml(path or CATALOG_FILE)["materials"]
        return cls({
            str(code).upper(): Material(
                code=str(code).upper(),
                name=entry["name"],
                roughness=float(entry["roughness_mm"]) / 1000.0,
            )
            for code, entry in data.items()
        })

    def get(self, code: str) -> Material:
        key = str(code).strip().upper()
        try:
            return self._materials[key]
        except KeyError:
            raise InvalidCodeError("material", code, _code_range(self._materials)) from None

    def roughness(self, code: str) -> float:
        """Absolute roughness (m) for a material code"""
        return self.get(code).roughness

    def __contains__(self, code) -> bool:
        return str(code).strip().upper() in self._materials

    def __iter__(self):
        return iter(self._materials.values())

    def __len__(self) -> int:
        return len(self._materials)


class FittingCatalog:
    """
    Fitting code -> (K, name)

    Example:
        >>> fittings = FittingCatalog.from_yaml()
        >>> fittings.get("G").K
        10.0
    """

    def __init__(self, fittings: Mapping[str, FittingType]):
        self._fittings = MappingProxyType({k.upper(): v for k, v in fittings.items()})

    @classmethod
    def from_yaml(cls, path: Optional[Union[str, Path]] = None) -> "FittingCatalog":
        data = _read_yaml(path or CATALOG_FILE)["fittings"]
        return cls({
            str(code).upper(): FittingType(
                code=str(code).upper(),
                name=entry["name"],
                K=float(entry["K"]),
            )
            for code, entry in data.items()
        })

    def get(self, code: str) -> FittingType:
        key = str(code).strip().upper()
        try:
            return self._fittings[key]
        except KeyError:
            raise InvalidCodeError("fitting", code, _code_range(self._fittings)) from None

    def make_fitting(self, code: str, position: float) -> Fitting:
        """Fitting of catalog type `code` placed at `position` (m)"""
        fitting_type = self.get(code)
        return Fitting(
            code=fitting_type.code,
            K=fitting_type.K,
            position=position,
            name=fitting_type.name,
        )

    def __contains__(self, code) -> bool:
        return str(code).strip().upper() in self._fittings

    def __iter__(self):
        return iter(self._fittings.values())

    def __len__(self) -> int:
        return len(self._fittings)
