"""Typed failures raised while resolving emission factors.

Every error is local to one cohort calculation; none of them is retryable.
"""


class EmissionFactorError(Exception):
    """Base class for emission factor resolution failures."""

    pass


class CatalogError(EmissionFactorError):
    """Raised when a catalog file or mapping cannot be parsed."""

    pass


class UnknownAnimalType(EmissionFactorError):
    """Raised when an animal type has no tier or no catalog entry."""

    def __init__(self, animal_type: str, reason: str | None = None):
        self.animal_type = animal_type
        message = f"Unknown animal type: {animal_type}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MissingParameter(EmissionFactorError):
    """Raised when a discriminating attribute required by an animal type is absent."""

    def __init__(self, name: str, animal_type: str):
        self.name = name
        self.animal_type = animal_type
        super().__init__(f"Parameter '{name}' is required for animal type '{animal_type}'")


def _format_attributes(attributes: dict) -> str:
    if not attributes:
        return "(none)"
    return ", ".join(f"{k}={v}" for k, v in attributes.items())


class NoMatchingRecord(EmissionFactorError):
    """Raised when no catalog record matches the supplied attributes."""

    def __init__(self, animal_type: str, attributes: dict, message: str | None = None):
        self.animal_type = animal_type
        self.attributes = dict(attributes)
        if message is None:
            message = (
                f"No emission factor found for {animal_type} with parameters: {_format_attributes(self.attributes)}"
            )
        super().__init__(message)


class AttributeMismatch(NoMatchingRecord):
    """Raised when a single-record entry conflicts with a supplied attribute."""

    def __init__(self, animal_type: str, attributes: dict, name: str, expected: object, given: object):
        self.name = name
        self.expected = expected
        self.given = given
        super().__init__(
            animal_type,
            attributes,
            f"Parameter mismatch for {animal_type}: {name} expected {expected} but got {given}",
        )


class AmbiguousMatch(EmissionFactorError):
    """Raised when several catalog records match equally well."""

    def __init__(self, animal_type: str, attributes: dict, candidates: list[str]):
        self.animal_type = animal_type
        self.attributes = dict(attributes)
        self.candidates = list(candidates)
        super().__init__(
            f"Ambiguous catalog match for {animal_type} with parameters: "
            f"{_format_attributes(self.attributes)} (candidates: {', '.join(self.candidates)})"
        )


class InvalidScalingBasis(EmissionFactorError):
    """Raised when a reference or target weight/age is zero, negative or unparseable."""

    pass
