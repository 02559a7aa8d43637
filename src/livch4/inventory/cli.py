"""Command-line interface for livestock CH4 inventories.

Usage:
    livch4 types
    livch4 factor bull_ --weight 500 --scale-weight
    livch4 factor laying_hens_ --age 200 --hpr
    livch4 run cohorts.yaml
    livch4 run cohorts.yaml --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from livch4.catalog.store import Catalog, load_catalog
from livch4.core.config import settings
from livch4.core.errors import EmissionFactorError
from livch4.core.units import ch4_to_co2eq, format_ch4, format_emission_factor, get_mass_unit
from livch4.enteric.factors import resolve_emission_factor
from livch4.enteric.matching import SubjectAttributes
from livch4.enteric.tiers import classify, known_animal_types, required_attributes
from livch4.inventory.cohort import CohortInput
from livch4.inventory.inventory import InventoryResult, catalog_from_settings, run_inventories

# =============================================================================
# Helpers
# =============================================================================


def _catalog(args: argparse.Namespace) -> Catalog:
    if args.catalog:
        return load_catalog(args.catalog)
    return catalog_from_settings(settings)


def load_cohorts(path: Path) -> list[CohortInput]:
    """
    Load cohorts from a YAML or JSON file.

    The file holds a list of cohort mappings, or a mapping with a "cohorts"
    list.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if isinstance(data, dict):
        data = data.get("cohorts", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of cohorts")
    return [CohortInput(**item) for item in data]


def print_result(result: InventoryResult) -> None:
    """Print the inventory of one cohort."""
    ef = result.emission_factors
    print(f"\n{result.animal_type} ({result.animal_number:g} head, tier {int(result.tier)})")
    print("-" * 60)
    if result.catalog_key != result.animal_type:
        print(f"  Catalog entry:      {result.catalog_key}")
    print(f"  Resolved EF:        {format_emission_factor(ef.resolved.value)}")
    if ef.winter is not None:
        print(f"  Winter EF:          {format_emission_factor(ef.winter)}")
        print(f"  Summer EF:          {format_emission_factor(ef.summer)}")
    print(f"  Annual EF:          {format_emission_factor(ef.annual)}")
    print(f"  Enteric CH4:        {format_ch4(result.emissions.enteric)}")
    print(f"  Manure CH4 housing: {format_ch4(result.emissions.manure.housing)}")
    print(f"  Manure CH4 grass:   {format_ch4(result.emissions.manure.grass)}")
    print(f"  Total CH4:          {format_ch4(result.ch4_total)}")
    print(f"  CO2-eq:             {format_ch4(result.co2eq).replace('CH4', 'CO2-eq')}")
    for note in result.notes:
        print(f"  * {note}")


def result_to_dict(result: InventoryResult) -> dict:
    ef = result.emission_factors
    return {
        "animal_type": result.animal_type,
        "catalog_key": result.catalog_key,
        "tier": int(result.tier),
        "animal_number": result.animal_number,
        "emission_factors": {
            "resolved": ef.resolved.value,
            "winter": ef.winter,
            "summer": ef.summer,
            "annual": ef.annual,
        },
        "volatile_solids": {
            "manure": result.volatile_solids.manure,
            "straw": result.volatile_solids.straw,
            "grass": result.volatile_solids.grass,
            "housing": result.volatile_solids.housing,
        },
        "emissions": {
            "ch4_enteric": result.emissions.enteric,
            "ch4_manure": {
                "housing": result.emissions.manure.housing,
                "grass": result.emissions.manure.grass,
                "total": result.emissions.manure.total,
            },
            "ch4_total": result.ch4_total,
        },
        "co2eq": result.co2eq,
        "notes": result.notes,
    }


# =============================================================================
# Commands
# =============================================================================


def cmd_types(args: argparse.Namespace) -> int:
    catalog = _catalog(args)
    print(f"{'Animal type':<18} {'Tier':>4}  {'Catalog':<8} Required")
    print("-" * 60)
    for animal_type in known_animal_types():
        in_catalog = "yes" if animal_type in catalog else "-"
        required = ", ".join(required_attributes(animal_type)) or "-"
        print(f"{animal_type:<18} {int(classify(animal_type)):>4}  {in_catalog:<8} {required}")
    return 0


def cmd_factor(args: argparse.Namespace) -> int:
    catalog = _catalog(args)
    attributes = SubjectAttributes(
        weight=args.weight,
        age=args.age,
        reproduction=args.reproduction,
        gender=args.gender,
        organic=args.organic,
        housing_period_flag=args.hpr,
        scale_by_weight=args.scale_weight,
        scale_by_age=args.scale_age,
    )
    ef = resolve_emission_factor(
        catalog,
        args.animal_type,
        attributes,
        reference_weight_default=settings.reference_weight_default,
        reference_age_default=settings.reference_age_default,
        scale_absent_basis=settings.scale_absent_basis,
    )

    print(f"Animal type:      {ef.animal_type} (tier {int(ef.tier)})")
    print(f"Catalog record:   {ef.record_key}")
    print(f"Reference EF:     {format_emission_factor(ef.reference_value)}")
    print(f"Emission factor:  {format_emission_factor(ef.value)}")
    if ef.scaling_factor != 1.0:
        print(f"Scaling factor:   {ef.scaling_factor:.4f}")
    if ef.feed_intake is not None:
        print(f"Feed intake:      {ef.feed_intake:.2f} FU/(head.yr)")
    if ef.notes:
        print(f"Notes:            {ef.notes}")
    if args.head_count is not None:
        total = args.head_count * ef.value
        print(f"Enteric CH4:      {format_ch4(total)} ({args.head_count:g} head)")
        print(f"CO2-eq:           {format_ch4(ch4_to_co2eq(total)).replace('CH4', 'CO2-eq')}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    catalog = _catalog(args)
    cohorts = load_cohorts(args.cohorts)
    run = run_inventories(cohorts, catalog, settings)

    if args.json:
        output = {
            "results": [result_to_dict(r) for r in run.results],
            "failures": [{"index": f.index, "animal_type": f.animal_type, "error": str(f.error)} for f in run.failures],
            "ch4_total": run.ch4_total,
            "co2eq_total": run.co2eq_total,
        }
        print(json.dumps(output, indent=2))
        return 0 if run.ok else 1

    print("=" * 60)
    print("Livestock CH4 Inventory")
    print("=" * 60)
    for result in run.results:
        print_result(result)

    if run.failures:
        print(f"\nFailed cohorts ({len(run.failures)}):")
        for failure in run.failures:
            print(f"  [{failure.index}] {failure.animal_type}: {failure.error}")

    print()
    print("=" * 60)
    print(f"Total CH4:    {format_ch4(run.ch4_total)}")
    print(f"Total CO2-eq: {format_ch4(run.co2eq_total).replace('CH4', 'CO2-eq')}")
    print(f"(display unit: {get_mass_unit()})")
    return 0 if run.ok else 1


# =============================================================================
# CLI Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="livch4",
        description="Livestock CH4 emissions (IPCC Tier 1/Tier 2)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  livch4 types                                   List animal types and tiers
  livch4 factor dairy_cattle                     Catalog emission factor
  livch4 factor bull_ --weight 500 --scale-weight
  livch4 factor laying_hens_ --age 200 --hpr     Age-scaled Tier 1 factor
  livch4 run cohorts.yaml                        Inventory report
""",
    )
    parser.add_argument("--catalog", type=Path, help="Emission factor catalog (YAML); default: bundled")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log resolution details")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("types", help="List known animal types")

    factor_parser = subparsers.add_parser("factor", help="Resolve an enteric emission factor")
    factor_parser.add_argument("animal_type", help="Catalog key, e.g. dairy_cattle or bull_")
    factor_parser.add_argument("--weight", type=float, help="Live weight (kg)")
    factor_parser.add_argument("--age", type=float, help="Age, in the unit of the catalog record")
    factor_parser.add_argument("--reproduction", action=argparse.BooleanOptionalAction, default=None)
    factor_parser.add_argument("--gender", choices=["male", "female"])
    factor_parser.add_argument("--organic", action=argparse.BooleanOptionalAction, default=None)
    factor_parser.add_argument("--hpr", action=argparse.BooleanOptionalAction, default=None, help="Housing period regime")
    factor_parser.add_argument("--scale-weight", action="store_true", help="Scale feed intake by weight")
    factor_parser.add_argument("--scale-age", action="store_true", help="Scale feed intake by age")
    factor_parser.add_argument("--head-count", type=float, help="Also report enteric CH4 for this many head")

    run_parser = subparsers.add_parser("run", help="Run an inventory from a cohort file")
    run_parser.add_argument("cohorts", type=Path, help="YAML/JSON file with a list of cohorts")
    run_parser.add_argument("--json", action="store_true", help="Output as JSON")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    commands = {
        "types": cmd_types,
        "factor": cmd_factor,
        "run": cmd_run,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    try:
        return command(args)
    except EmissionFactorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print(f"Invalid cohort: {e}", file=sys.stderr)
        return 2
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
