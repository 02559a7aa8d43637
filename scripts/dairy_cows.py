"""CH4 inventory for a Danish dairy herd."""

from livch4.inventory.cli import print_result
from livch4.inventory.cohort import CohortInput
from livch4.inventory.inventory import run_inventory


def main():
    cohort = CohortInput(
        animal_type="dairy_cattle",
        animal_number=100,
        weight=650,
        manure_excretion=21900,  # kg/(head.yr), Danish standard value
        manure_cn=15,
        fraction_housing=0.8,
        fraction_grazing=0.2,
        fraction_actual_grass=0.15,  # days actually on grass in the Danish climate
        feed_intake=7300,  # FU/(head.yr), high-yielding cows
        fraction_diet_grass=0.3,
        fraction_diet_beet=0.05,
        max_manure_ch4=0.24,
    )

    result = run_inventory(cohort)
    print("=== Danish Dairy Cattle ===")
    print_result(result)

    print("\nPer head:")
    print(f"  Enteric CH4: {result.per_head(result.emissions.enteric):.2f} kg CH4/(head.yr)")
    print(f"  Manure CH4:  {result.per_head(result.emissions.manure.total):.2f} kg CH4/(head.yr)")
    print(f"  Total CH4:   {result.per_head(result.ch4_total):.2f} kg CH4/(head.yr)")
    per_kg_manure = result.ch4_total / (cohort.manure_excretion * cohort.animal_number)
    print(f"  CH4 per kg manure: {per_kg_manure:.4f} kg CH4/kg")


if __name__ == "__main__":
    main()
