"""Catalog module - enteric fermentation reference records."""

from livch4.catalog.store import (
    Basis,
    BasisKind,
    Catalog,
    ReferenceRecord,
    default_catalog,
    load_catalog,
    parse_basis,
    parse_catalog,
    parse_record,
)

__all__ = [
    "Basis",
    "BasisKind",
    "Catalog",
    "ReferenceRecord",
    "default_catalog",
    "load_catalog",
    "parse_basis",
    "parse_catalog",
    "parse_record",
]
