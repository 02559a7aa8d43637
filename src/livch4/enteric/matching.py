"""
Reference record matching.

Selects the catalog record that describes a cohort. A key holding a single
record is handled as a one-element variant list, so one set of rules covers
both catalog shapes:

1. Attributes required by the animal type must be present (checked before
   the catalog is read).
2. A record passes when every discriminating attribute present in both the
   record and the query is equal. Attributes a record leaves out match
   anything.
3. When an age is given, a record whose fixed reference age equals it wins.
   Otherwise the first passing record is the baseline and the caller is told
   that linear age scaling is needed.
4. Several equally good records are a catalog problem and are reported,
   never resolved by picking one.
"""

import logging
from dataclasses import dataclass, fields

from livch4.catalog.store import Catalog, ReferenceRecord
from livch4.core.errors import AmbiguousMatch, AttributeMismatch, MissingParameter, NoMatchingRecord
from livch4.enteric.tiers import required_attributes

logger = logging.getLogger(__name__)

DISCRIMINATING_ATTRIBUTES = ("reproduction", "gender", "organic", "housing_period_flag")


@dataclass(frozen=True)
class SubjectAttributes:
    """
    Query describing one cohort.

    Attributes:
        weight: Live weight (kg)
        age: Age, in the unit of the catalog record (days for poultry, months for cattle)
        reproduction: Animals kept for reproduction
        gender: "male" or "female"
        organic: Organic production (broilers)
        housing_period_flag: Housing-period regime (laying hens, catalog "hpr")
        scale_by_weight: Rescale the reference feed intake to `weight`
        scale_by_age: Rescale the reference feed intake to `age`
    """

    weight: float | None = None
    age: float | None = None
    reproduction: bool | None = None
    gender: str | None = None
    organic: bool | None = None
    housing_period_flag: bool | None = None
    scale_by_weight: bool = False
    scale_by_age: bool = False

    def supplied(self) -> dict[str, object]:
        """Attributes given by the caller (scaling directives excluded)."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if not f.name.startswith("scale_by_") and getattr(self, f.name) is not None
        }

    def discriminators(self) -> dict[str, object]:
        """Supplied discriminating attributes."""
        return {name: getattr(self, name) for name in DISCRIMINATING_ATTRIBUTES if getattr(self, name) is not None}


@dataclass(frozen=True)
class RecordMatch:
    """Outcome of matching a query against the catalog."""

    record: ReferenceRecord
    # Record's reference age equals the queried age
    exact_age: bool = False
    # Age given, no exact record; the baseline needs linear age scaling
    age_scaling_required: bool = False


def check_required_attributes(animal_type: str, attributes: SubjectAttributes) -> None:
    """
    Raise MissingParameter for the first required attribute not supplied.

    Raises:
        MissingParameter: Naming the missing attribute
    """
    for name in required_attributes(animal_type):
        if getattr(attributes, name) is None:
            raise MissingParameter(name, animal_type)


def find_conflicts(record: ReferenceRecord, attributes: SubjectAttributes) -> list[tuple[str, object, object]]:
    """
    List attributes on which record and query disagree.

    Returns:
        List of (attribute, expected, given) tuples; empty when compatible
    """
    declared = record.discriminators()
    conflicts = []
    for name, given in attributes.discriminators().items():
        if name in declared and declared[name] != given:
            conflicts.append((name, declared[name], given))
    return conflicts


def match_record(catalog: Catalog, animal_type: str, attributes: SubjectAttributes) -> RecordMatch:
    """
    Select the catalog record describing a cohort.

    Args:
        catalog: Loaded reference catalog
        animal_type: Catalog key
        attributes: Cohort query

    Returns:
        RecordMatch with the selected record and the age-scaling signal

    Raises:
        MissingParameter: A required attribute is absent
        UnknownAnimalType: The catalog has no entry for the type
        AttributeMismatch: The only record conflicts with the query
        NoMatchingRecord: No variant is compatible with the query
        AmbiguousMatch: More than one variant fits equally well
    """
    check_required_attributes(animal_type, attributes)

    variants = catalog.variants(animal_type)
    candidates = [record for record in variants if not find_conflicts(record, attributes)]

    if not candidates:
        if len(variants) == 1:
            name, expected, given = find_conflicts(variants[0], attributes)[0]
            raise AttributeMismatch(animal_type, attributes.supplied(), name, expected, given)
        raise NoMatchingRecord(animal_type, attributes.supplied())

    if attributes.age is not None:
        exact = [record for record in candidates if record.age_basis.value == attributes.age]
        if len(exact) > 1:
            raise AmbiguousMatch(animal_type, attributes.supplied(), [f"{r.key} (age {r.age_basis})" for r in exact])
        if exact:
            return RecordMatch(exact[0], exact_age=True)

        baseline = candidates[0]
        needs_scaling = not baseline.age_basis.is_absent
        if needs_scaling:
            logger.debug(
                "%s: no record with age %s, baseline age %s",
                animal_type,
                attributes.age,
                baseline.age_basis,
            )
        return RecordMatch(baseline, age_scaling_required=needs_scaling)

    if len(candidates) > 1:
        raise AmbiguousMatch(
            animal_type,
            attributes.supplied(),
            [f"{r.key}[{i}]" for i, r in enumerate(candidates)],
        )
    return RecordMatch(candidates[0])
