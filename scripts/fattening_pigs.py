"""CH4 inventory for Danish fattening pigs."""

from livch4.inventory.cli import print_result
from livch4.inventory.cohort import CohortInput
from livch4.inventory.inventory import run_inventory


def main():
    cohort = CohortInput(
        animal_type="fattening_pigs",
        animal_number=1000,
        weight=70,  # average over 30-110 kg
        manure_excretion=470,
        manure_cn=8,
        fraction_housing=1.0,
        fraction_grazing=0.0,
        feed_intake=800,
        fraction_diet_grass=0.0,
        max_manure_ch4=0.45,
    )

    result = run_inventory(cohort)
    print("=== Danish Fattening Pigs ===")
    print_result(result)
    print(f"\nTotal CH4 per head: {result.per_head(result.ch4_total):.3f} kg CH4/(head.yr)")


if __name__ == "__main__":
    main()
