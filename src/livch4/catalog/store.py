"""
Enteric fermentation reference catalog.

The catalog maps an animal-type key (e.g. "dairy_cattle", "bull_") to one
or more reference records. A trailing underscore marks an alternate variant
of the same species (older age bracket, reproducing animals, other sex).
Legacy catalogs may also store the variants of one key as a list.

Values are parsed once, at load time, into typed records:
- Numbers stay numbers
- "400-600" and "0-6 months" become ranges (en-dash accepted)
- "6 months" and "365 days" become fixed values carrying their unit
- "none"/"null" (or a YAML null) mean "no reference value"

The loaded catalog is read-only and can be shared between cohorts.

Data source:
-----------
Danish national inventory, agriculture sector report (Aarhus University,
DCE), normative feed intake and gross energy per feed unit.
"""

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

import yaml

from livch4.core.errors import CatalogError, UnknownAnimalType
from livch4.core.units import is_known_unit, normalize_unit

CATALOG_SECTION = "enteric_fermentation_EFs"
BUNDLED_CATALOG = "enteric_fermentation.yaml"

ABSENT_SENTINELS = {"none", "null", ""}

# "<low>[-<high>] [unit]"; the first ";"-separated segment wins
_BASIS_PATTERN = re.compile(
    r"^\s*(?P<low>\d+(?:\.\d+)?)\s*(?:[-–]\s*(?P<high>\d+(?:\.\d+)?))?\s*(?P<unit>[A-Za-z]+)?\s*$"
)


class BasisKind(Enum):
    """Shape of a reference weight or age."""

    ABSENT = "absent"
    FIXED = "fixed"
    RANGE = "range"


@dataclass(frozen=True)
class Basis:
    """A parsed reference weight or age."""

    kind: BasisKind
    low: float | None = None
    high: float | None = None
    unit: str | None = None

    @property
    def is_absent(self) -> bool:
        return self.kind is BasisKind.ABSENT

    @property
    def value(self) -> float | None:
        """The fixed value, or None for ranges and absent bases."""
        return self.low if self.kind is BasisKind.FIXED else None

    def mean(self) -> float | None:
        """Midpoint of a range, the value itself for a fixed basis."""
        if self.kind is BasisKind.RANGE:
            return (self.low + self.high) / 2
        return self.value

    def upper(self) -> float | None:
        """Upper bound of a range, the value itself for a fixed basis."""
        if self.kind is BasisKind.RANGE:
            return self.high
        return self.value

    def __str__(self) -> str:
        if self.kind is BasisKind.ABSENT:
            return "none"
        text = f"{self.low:g}" if self.kind is BasisKind.FIXED else f"{self.low:g}-{self.high:g}"
        return f"{text} {self.unit}" if self.unit else text


ABSENT = Basis(BasisKind.ABSENT)


def is_absent_value(value: Any) -> bool:
    """Check for the "no reference value" sentinels."""
    return value is None or (isinstance(value, str) and value.strip().lower() in ABSENT_SENTINELS)


def parse_basis(value: Any) -> Basis:
    """
    Parse a catalog weight/age value into a Basis.

    Args:
        value: Number, range string, value-with-unit string, or sentinel

    Returns:
        Parsed Basis

    Raises:
        ValueError: If the value cannot be interpreted
    """
    if isinstance(value, Basis):
        return value
    if is_absent_value(value):
        return ABSENT
    if isinstance(value, bool):
        raise ValueError(f"Boolean is not a valid basis: {value!r}")
    if isinstance(value, int | float):
        return Basis(BasisKind.FIXED, low=float(value))
    if not isinstance(value, str):
        raise ValueError(f"Unsupported basis type: {type(value).__name__}")

    # Compound entries like "6.7–31; 15–31" list sub-classes; use the first
    segment = value.split(";")[0]
    match = _BASIS_PATTERN.match(segment)
    if match is None:
        raise ValueError(f"Cannot parse basis: {value!r}")

    unit = match.group("unit")
    if unit is not None:
        if not is_known_unit(unit):
            raise ValueError(f"Unknown unit {unit!r} in basis {value!r}")
        unit = normalize_unit(unit)

    low = float(match.group("low"))
    if match.group("high") is None:
        return Basis(BasisKind.FIXED, low=low, unit=unit)
    return Basis(BasisKind.RANGE, low=low, high=float(match.group("high")), unit=unit)


def _parse_number(value: Any, field: str, key: str) -> float | None:
    if is_absent_value(value):
        return None
    if isinstance(value, bool):
        raise CatalogError(f"{key}: field '{field}' must be numeric, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise CatalogError(f"{key}: field '{field}' must be numeric, got {value!r}") from e


def _parse_flag(value: Any, field: str, key: str) -> bool | None:
    if is_absent_value(value):
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise CatalogError(f"{key}: field '{field}' must be true/false, got {value!r}")


def _parse_gender(value: Any, key: str) -> str | None:
    if is_absent_value(value):
        return None
    gender = str(value).strip().lower()
    if gender not in ("male", "female"):
        raise CatalogError(f"{key}: gender must be 'male' or 'female', got {value!r}")
    return gender


@dataclass(frozen=True)
class ReferenceRecord:
    """
    One reference parameter set for an animal type.

    Units follow the catalog convention: feed units/yr, MJ per feed unit,
    % of gross energy, kg CH4/head/yr.
    """

    key: str
    weight_basis: Basis = ABSENT
    age_basis: Basis = ABSENT
    reproduction: bool | None = None
    gender: str | None = None
    organic: bool | None = None
    housing_period_flag: bool | None = None
    feed_intake_ref: float | None = None
    gross_energy_winter: float | None = None
    gross_energy_summer: float | None = None
    methane_conversion_rate: float | None = None
    implied_emission_factor: float | None = None
    # Share of feeding days on grass (%)
    grass_feeding_share: float | None = None

    @property
    def has_seasonal_parameters(self) -> bool:
        """True for records taking part in the Tier 2 seasonal computation."""
        return (
            self.feed_intake_ref is not None
            and self.gross_energy_winter is not None
            and self.gross_energy_summer is not None
        )

    @property
    def grass_fraction(self) -> float | None:
        """Grass share of feeding days as a 0-1 fraction."""
        if self.grass_feeding_share is None:
            return None
        return self.grass_feeding_share / 100

    def discriminators(self) -> dict[str, object]:
        """Discrete attributes declared by this record (absent ones omitted)."""
        values = {
            "reproduction": self.reproduction,
            "gender": self.gender,
            "organic": self.organic,
            "housing_period_flag": self.housing_period_flag,
        }
        return {k: v for k, v in values.items() if v is not None}


def parse_record(key: str, data: Mapping[str, Any]) -> ReferenceRecord:
    """
    Build a ReferenceRecord from one raw catalog mapping.

    Accepts both the historical "implified_emission_factor" spelling and
    "implied_emission_factor"; "hpr" is the housing-period flag.
    """
    if not isinstance(data, Mapping):
        raise CatalogError(f"{key}: record must be a mapping, got {type(data).__name__}")

    try:
        weight_basis = parse_basis(data.get("weight"))
        age_basis = parse_basis(data.get("age"))
    except ValueError as e:
        raise CatalogError(f"{key}: {e}") from e

    emission_factor = data.get("implied_emission_factor", data.get("implified_emission_factor"))
    conversion_rate = data.get("methane_conversion_rate", data.get("methane_conversion_factor"))

    return ReferenceRecord(
        key=key,
        weight_basis=weight_basis,
        age_basis=age_basis,
        reproduction=_parse_flag(data.get("reproduction"), "reproduction", key),
        gender=_parse_gender(data.get("gender"), key),
        organic=_parse_flag(data.get("organic"), "organic", key),
        housing_period_flag=_parse_flag(data.get("hpr"), "hpr", key),
        feed_intake_ref=_parse_number(data.get("feed_intake"), "feed_intake", key),
        gross_energy_winter=_parse_number(data.get("GE_winter"), "GE_winter", key),
        gross_energy_summer=_parse_number(data.get("GE_summer"), "GE_summer", key),
        methane_conversion_rate=_parse_number(conversion_rate, "methane_conversion_factor", key),
        implied_emission_factor=_parse_number(emission_factor, "implied_emission_factor", key),
        grass_feeding_share=_parse_number(data.get("feed_grass"), "feed_grass", key),
    )


class Catalog:
    """Read-only mapping from animal type to its reference record variants."""

    def __init__(self, entries: Mapping[str, tuple[ReferenceRecord, ...]]):
        self._entries = MappingProxyType({k: tuple(v) for k, v in entries.items()})

    def __contains__(self, animal_type: object) -> bool:
        return animal_type in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Catalog({len(self)} animal types)"

    def variants(self, animal_type: str) -> tuple[ReferenceRecord, ...]:
        """
        Get all reference records for an animal type.

        Raises:
            UnknownAnimalType: If the catalog has no entry for the type
        """
        try:
            return self._entries[animal_type]
        except KeyError:
            raise UnknownAnimalType(animal_type, "not found in emission factor data") from None

    def record(self, animal_type: str) -> ReferenceRecord:
        """Get the first (or only) reference record for an animal type."""
        return self.variants(animal_type)[0]


def parse_catalog(data: Mapping[str, Any]) -> Catalog:
    """
    Build a Catalog from a parsed YAML/JSON mapping.

    The records may sit under an "enteric_fermentation_EFs" section or at
    the top level. Each key maps to one record or a list of variants.
    """
    if not isinstance(data, Mapping):
        raise CatalogError("Catalog must be a mapping of animal types")
    if CATALOG_SECTION in data:
        data = data[CATALOG_SECTION]
        if not isinstance(data, Mapping):
            raise CatalogError(f"'{CATALOG_SECTION}' section must be a mapping")

    entries: dict[str, tuple[ReferenceRecord, ...]] = {}
    for key, value in data.items():
        key = str(key)
        raw_records = value if isinstance(value, list) else [value]
        if not raw_records:
            raise CatalogError(f"{key}: empty variant list")
        entries[key] = tuple(parse_record(key, raw) for raw in raw_records)

    return Catalog(entries)


def load_catalog(path: Path | str | None = None) -> Catalog:
    """
    Load a catalog from a YAML file.

    Args:
        path: Catalog file; defaults to the catalog bundled with the package

    Returns:
        Parsed, read-only Catalog
    """
    if path is None:
        text = resources.files("livch4.catalog").joinpath("data").joinpath(BUNDLED_CATALOG).read_text(encoding="utf-8")
        source = BUNDLED_CATALOG
    else:
        path = Path(path)
        if not path.exists():
            raise CatalogError(f"Catalog file not found: {path}")
        text = path.read_text(encoding="utf-8")
        source = str(path)

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CatalogError(f"Failed to parse {source}: {e}") from e

    if data is None:
        raise CatalogError(f"Catalog {source} is empty")
    return parse_catalog(data)


@lru_cache
def default_catalog() -> Catalog:
    """Get the bundled catalog (loaded once per process)."""
    return load_catalog()
