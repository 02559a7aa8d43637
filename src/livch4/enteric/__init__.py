"""Enteric fermentation - tiers, record matching, scaling and emission factors."""

from livch4.enteric.factors import (
    AnnualEmissionFactor,
    SeasonalEmissionFactors,
    compute_enteric_ch4,
    record_seasonal_emission_factors,
    resolve_emission_factor,
    seasonal_emission_factors,
)
from livch4.enteric.matching import RecordMatch, SubjectAttributes, match_record
from livch4.enteric.scaling import scale_by_age, scale_by_weight, scale_record_feed_intake
from livch4.enteric.tiers import Tier, classify, known_animal_types

__all__ = [
    "Tier",
    "classify",
    "known_animal_types",
    "SubjectAttributes",
    "RecordMatch",
    "match_record",
    "scale_by_weight",
    "scale_by_age",
    "scale_record_feed_intake",
    "AnnualEmissionFactor",
    "SeasonalEmissionFactors",
    "resolve_emission_factor",
    "seasonal_emission_factors",
    "record_seasonal_emission_factors",
    "compute_enteric_ch4",
]
