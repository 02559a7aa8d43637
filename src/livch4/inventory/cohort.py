"""
Cohort input for an inventory run.

A cohort is a group of animals of one type kept under the same regime:
head count, body characteristics, manure excretion, housing/grazing split
and diet. Validation happens on construction (pydantic); parameters left
unset fall back to the global manure parameters in settings.

Example:
    cohort = CohortInput(
        animal_type="dairy_cattle",
        animal_number=100,
        manure_excretion=21900,
        manure_cn=15,
        fraction_housing=0.8,
        fraction_grazing=0.2,
        fraction_diet_grass=0.3,
        fraction_diet_beet=0.05,
    )
"""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from livch4.catalog.store import Catalog
from livch4.core.config import Settings
from livch4.core.errors import UnknownAnimalType
from livch4.enteric.matching import SubjectAttributes
from livch4.enteric.tiers import Tier, base_type, classify, is_dairy, variant_type


class CohortInput(BaseModel):
    """Validated description of one livestock cohort."""

    model_config = ConfigDict(extra="forbid")

    animal_type: str
    animal_number: float = Field(gt=0, description="Number of animals (head/yr)")

    # Animal characteristics (optional, depend on the animal type)
    weight: float | None = Field(None, gt=0, description="Live weight (kg)")
    age: float | None = Field(None, ge=0, description="Age, in the unit of the catalog record")
    reproduction: bool | None = None
    gender: Literal["male", "female"] | None = None
    organic: bool | None = None
    housing_period_flag: bool | None = None

    # Feed intake scaling; None scales whenever weight/age is given
    scale_by_weight: bool | None = None
    scale_by_age: bool | None = None

    # Manure
    manure_excretion: float = Field(gt=0, description="Manure excreted (kg/(head.yr))")
    manure_cn: float = Field(gt=0, description="C:N ratio of manure")

    # Housing/grazing split
    fraction_housing: float = Field(ge=0, le=1)
    fraction_grazing: float = Field(ge=0, le=1)
    fraction_actual_grass: float | None = Field(None, ge=0, le=1, description="Actual share of days on grass")

    # Diet
    feed_intake: float | None = Field(None, gt=0, description="Feed intake (feed units/(head.yr))")
    fraction_diet_grass: float | None = Field(None, ge=0, le=1)
    fraction_diet_beet: float | None = Field(None, ge=0, le=1)

    # Volatile solids parameters (default: settings)
    fraction_ash: float | None = Field(None, ge=0, le=1)
    fraction_dm_vs: float | None = Field(None, ge=0, le=1)
    straw_amount: float = Field(0.0, ge=0, description="Bedding straw (kg/(head.yr))")
    straw_dm: float | None = Field(None, ge=0, le=1)
    max_manure_ch4: float | None = Field(None, ge=0, description="B0 (m3 CH4/kg VS)")
    # Manure MCF (%); default: the catalog record's methane conversion factor
    methane_conversion_factor: float | None = Field(None, ge=0, le=100)

    @field_validator("animal_type")
    @classmethod
    def known_animal_type(cls, v: str) -> str:
        try:
            classify(v)
        except UnknownAnimalType as e:
            raise ValueError(str(e)) from e
        return v

    @model_validator(mode="after")
    def check_fractions(self) -> "CohortInput":
        if self.fraction_housing + self.fraction_grazing > 1.0:
            raise ValueError("fraction_housing + fraction_grazing must not exceed 1")
        if is_dairy(self.animal_type) and self.fraction_diet_beet is None:
            raise ValueError("fraction_diet_beet is required for dairy cattle")
        if self.fraction_actual_grass is None:
            self.fraction_actual_grass = self.fraction_grazing
        return self

    @property
    def tier(self) -> Tier:
        return classify(self.animal_type)

    def subject_attributes(self) -> SubjectAttributes:
        """Build the emission factor query for this cohort."""
        scale_weight = self.weight is not None if self.scale_by_weight is None else self.scale_by_weight
        scale_age = self.age is not None if self.scale_by_age is None else self.scale_by_age
        return SubjectAttributes(
            weight=self.weight,
            age=self.age,
            reproduction=self.reproduction,
            gender=self.gender,
            organic=self.organic,
            housing_period_flag=self.housing_period_flag,
            scale_by_weight=scale_weight,
            scale_by_age=scale_age,
        )


@dataclass(frozen=True)
class ManureParameters:
    """Volatile solids and manure CH4 parameters with defaults applied."""

    dm_manure: float
    fraction_ash: float
    fraction_dm_vs: float
    straw_dm: float
    fraction_ash_straw: float
    max_manure_ch4: float


def manure_parameters(cohort: CohortInput, settings: Settings) -> ManureParameters:
    """Fill unset cohort manure parameters from settings."""

    def pick(value: float | None, default: float) -> float:
        return default if value is None else value

    return ManureParameters(
        dm_manure=settings.dm_manure,
        fraction_ash=pick(cohort.fraction_ash, settings.fraction_ash),
        fraction_dm_vs=pick(cohort.fraction_dm_vs, settings.fraction_dm_vs),
        straw_dm=pick(cohort.straw_dm, settings.dm_straw),
        fraction_ash_straw=settings.fraction_ash_straw,
        max_manure_ch4=pick(cohort.max_manure_ch4, settings.max_manure_ch4),
    )


def resolve_catalog_key(animal_type: str, catalog: Catalog) -> str:
    """
    Find the catalog key for an animal type.

    A key missing from the catalog falls back to its base key, then to its
    variant key ("bull_" -> "bull" -> "bull_").

    Raises:
        UnknownAnimalType: If none of the keys is in the catalog
    """
    for key in (animal_type, base_type(animal_type), variant_type(animal_type)):
        if key in catalog:
            return key
    raise UnknownAnimalType(animal_type, "not found in emission factor data")
