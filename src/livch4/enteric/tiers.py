"""IPCC methodology tier per animal type, and the attributes each type must be queried with."""

from enum import IntEnum

from livch4.core.errors import UnknownAnimalType


class Tier(IntEnum):
    """IPCC methodology tier for enteric fermentation."""

    TIER_1 = 1  # flat implied emission factor (poultry, fur animals)
    TIER_2 = 2  # feed/energy based seasonal emission factors


# Poultry and fur animals
TIER1_ANIMALS = frozenset(
    {
        "pheasant",
        "laying_hens",
        "laying_hens_",
        "broilers",
        "broilers_",
        "fur_animals",
        "fur_animals_",
    }
)

TIER2_ANIMALS = frozenset(
    {
        "dairy_cattle",
        "calf",
        "calf_",
        "suckling_cattle",
        "bull",
        "bull_",
        "sheep",
        "fattening_pigs",
        "sows",
        "piglets",
        "deer",
        "goats",
        "horses",
        "turkeys",
        "turkeys_",
    }
)

DAIRY_CATTLE = "dairy_cattle"

# Attributes that must be supplied before the catalog is consulted
REQUIRED_ATTRIBUTES: dict[str, tuple[str, ...]] = {
    "turkeys": ("gender",),
    "turkeys_": ("gender",),
    "laying_hens": ("age", "housing_period_flag"),
    "laying_hens_": ("age", "housing_period_flag"),
    "broilers": ("age", "organic"),
    "broilers_": ("age", "organic"),
}


def classify(animal_type: str) -> Tier:
    """
    Determine the enteric fermentation tier for an animal type.

    Args:
        animal_type: Catalog key, e.g. "dairy_cattle" or "laying_hens_"

    Returns:
        Tier.TIER_1 or Tier.TIER_2 (compare equal to 1 and 2)

    Raises:
        UnknownAnimalType: If the type belongs to neither tier
    """
    if animal_type in TIER1_ANIMALS:
        return Tier.TIER_1
    if animal_type in TIER2_ANIMALS:
        return Tier.TIER_2
    raise UnknownAnimalType(animal_type)


def known_animal_types() -> list[str]:
    """All animal types with a tier, sorted."""
    return sorted(TIER1_ANIMALS | TIER2_ANIMALS)


def required_attributes(animal_type: str) -> tuple[str, ...]:
    """Attributes the given animal type must be queried with."""
    return REQUIRED_ATTRIBUTES.get(animal_type, ())


def base_type(animal_type: str) -> str:
    """Strip the variant marker: "bull_" -> "bull"."""
    return animal_type.rstrip("_")


def variant_type(animal_type: str) -> str:
    """The alternate variant key: "bull" -> "bull_"."""
    return base_type(animal_type) + "_"


def is_dairy(animal_type: str) -> bool:
    """Dairy cattle use the beet/grass split in the winter ration."""
    return base_type(animal_type) == DAIRY_CATTLE
