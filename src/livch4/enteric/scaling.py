"""
Allometric and linear scaling of reference values.

Feed intake in the catalog belongs to a reference animal. When a cohort is
heavier, lighter, older or younger, the reference value is rescaled:

- Weight: metabolic body size, scaled = original * (W / W_ref) ** 0.75
  (Kleiber's law, as used for maintenance energy in IPCC 2019 Eq. 10.3)
- Age: linear, scaled = original * (age / age_ref)

The implied emission factor follows the feed intake by the same ratio.

Reference basis resolution:
- Weight range "400-600" -> midpoint (500)
- Age range "0-6 months" -> upper bound (6)
- "6 months", "365 days" -> numeric part
- "none" -> default (600 kg, 12 months)
"""

import logging
from dataclasses import dataclass
from typing import Any

from livch4.catalog.store import Basis, ReferenceRecord, parse_basis
from livch4.core.errors import InvalidScalingBasis

logger = logging.getLogger(__name__)

WEIGHT_EXPONENT = 0.75
DEFAULT_REFERENCE_WEIGHT = 600.0  # kg
DEFAULT_REFERENCE_AGE = 12.0  # months


def _as_basis(reference: Any, label: str) -> Basis:
    try:
        return parse_basis(reference)
    except ValueError as e:
        raise InvalidScalingBasis(f"Unparseable reference {label}: {reference!r}") from e


def _check_target(target: float, label: str) -> float:
    try:
        target = float(target)
    except (TypeError, ValueError) as e:
        raise InvalidScalingBasis(f"Target {label} must be numeric, got {target!r}") from e
    if target <= 0:
        raise InvalidScalingBasis(f"Target {label} must be positive, got {target}")
    return target


def resolve_reference_weight(reference: Any, default: float = DEFAULT_REFERENCE_WEIGHT) -> float:
    """
    Resolve a catalog weight to a single reference weight (kg).

    Args:
        reference: Basis, number, "lo-hi" range or "none"
        default: Weight used when the reference is absent

    Raises:
        InvalidScalingBasis: Zero, negative or unparseable reference
    """
    basis = _as_basis(reference, "weight")
    weight = default if basis.is_absent else basis.mean()
    if weight is None or weight <= 0:
        raise InvalidScalingBasis(f"Reference weight must be positive, got {reference!r}")
    return float(weight)


def resolve_reference_age(reference: Any, default: float = DEFAULT_REFERENCE_AGE) -> float:
    """
    Resolve a catalog age to a single reference age.

    Ranges use their upper bound; values with a unit use their numeric part.

    Raises:
        InvalidScalingBasis: Zero, negative or unparseable reference
    """
    basis = _as_basis(reference, "age")
    age = default if basis.is_absent else basis.upper()
    if age is None or age <= 0:
        raise InvalidScalingBasis(f"Reference age must be positive, got {reference!r}")
    return float(age)


def scale_by_weight(
    original: float,
    reference_weight: Any,
    new_weight: float,
    reference_weight_default: float = DEFAULT_REFERENCE_WEIGHT,
) -> float:
    """
    Scale a value by metabolic body weight.

    scaled = original * (new_weight / reference_weight) ** 0.75

    Args:
        original: Reference value (feed units/yr or kg CH4/head/yr)
        reference_weight: Catalog weight (number, range, "none")
        new_weight: Cohort live weight (kg)
        reference_weight_default: Used when the catalog weight is absent

    Returns:
        Scaled value

    Raises:
        InvalidScalingBasis: Invalid reference weight, or a target weight that is not positive
    """
    ref = resolve_reference_weight(reference_weight, reference_weight_default)
    target = _check_target(new_weight, "weight")
    return original * (target / ref) ** WEIGHT_EXPONENT


def scale_by_age(
    original: float,
    reference_age: Any,
    new_age: float,
    reference_age_default: float = DEFAULT_REFERENCE_AGE,
) -> float:
    """
    Scale a value linearly by age.

    scaled = original * (new_age / reference_age)

    Args:
        original: Reference value
        reference_age: Catalog age ("0-6 months", "140 days", number, "none")
        new_age: Cohort age, same unit as the catalog
        reference_age_default: Used when the catalog age is absent

    Returns:
        Scaled value

    Raises:
        InvalidScalingBasis: Invalid reference age, or a target age that is not positive
    """
    ref = resolve_reference_age(reference_age, reference_age_default)
    target = _check_target(new_age, "age")
    return original * (target / ref)


def scale_emission_factor(reference_ef: float, reference_feed_intake: float, scaled_feed_intake: float) -> float:
    """
    Carry a feed intake change over to the emission factor.

    scaled_EF = reference_EF * (scaled_feed_intake / reference_feed_intake)
    """
    if scaled_feed_intake == reference_feed_intake:
        return reference_ef
    if reference_feed_intake <= 0:
        raise InvalidScalingBasis(f"Reference feed intake must be positive, got {reference_feed_intake}")
    return reference_ef * (scaled_feed_intake / reference_feed_intake)


@dataclass(frozen=True)
class FeedIntakeScaling:
    """Reference feed intake of a record and its value after scaling."""

    reference: float
    scaled: float
    by_weight: bool = False
    by_age: bool = False

    @property
    def ratio(self) -> float:
        if self.reference == 0:
            return 1.0
        return self.scaled / self.reference

    @property
    def applied(self) -> bool:
        return self.by_weight or self.by_age


def scale_record_feed_intake(
    record: ReferenceRecord,
    weight: float | None = None,
    age: float | None = None,
    scale_weight: bool = False,
    scale_age: bool = False,
    reference_weight_default: float = DEFAULT_REFERENCE_WEIGHT,
    reference_age_default: float = DEFAULT_REFERENCE_AGE,
    scale_absent_basis: bool = False,
) -> FeedIntakeScaling | None:
    """
    Rescale a record's reference feed intake to a cohort.

    Weight scaling runs first; age scaling is applied to its result. A step
    is skipped when it was not requested, no target was given, or the record
    has no reference basis (unless `scale_absent_basis` is set, in which case
    the defaults stand in for the missing basis).

    Returns:
        FeedIntakeScaling, or None if the record has no feed intake
    """
    if record.feed_intake_ref is None:
        return None

    feed_intake = record.feed_intake_ref
    by_weight = by_age = False

    if scale_weight and weight is not None:
        if not record.weight_basis.is_absent or scale_absent_basis:
            feed_intake = scale_by_weight(feed_intake, record.weight_basis, weight, reference_weight_default)
            by_weight = True
        else:
            logger.debug("%s: no reference weight, weight scaling skipped", record.key)

    if scale_age and age is not None:
        if not record.age_basis.is_absent or scale_absent_basis:
            feed_intake = scale_by_age(feed_intake, record.age_basis, age, reference_age_default)
            by_age = True
        else:
            logger.debug("%s: no reference age, age scaling skipped", record.key)

    return FeedIntakeScaling(
        reference=record.feed_intake_ref,
        scaled=feed_intake,
        by_weight=by_weight,
        by_age=by_age,
    )
