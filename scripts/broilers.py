"""CH4 inventory for a Danish broiler unit (Tier 1)."""

from livch4.inventory.cli import print_result
from livch4.inventory.cohort import CohortInput
from livch4.inventory.inventory import run_inventory


def main():
    cohort = CohortInput(
        animal_type="broilers",
        animal_number=50000,
        weight=2.1,  # kg at slaughter
        age=42,  # days, conventional rotation
        organic=False,
        manure_excretion=10.5,
        manure_cn=8,
        fraction_housing=1.0,
        fraction_grazing=0.0,
        fraction_diet_grass=0.0,
        max_manure_ch4=0.36,
        methane_conversion_factor=1.5,  # poultry manure with litter, IPCC 2019 Table 10.17
    )

    result = run_inventory(cohort)
    print("=== Danish Broilers ===")
    print_result(result)

    print("\nPer head:")
    print(f"  Enteric CH4: {result.per_head(result.emissions.enteric):.4e} kg CH4/(head.yr)")
    print(f"  Total CH4:   {result.per_head(result.ch4_total):.4e} kg CH4/(head.yr)")

    # Organic birds are kept longer; the 91-day record applies
    organic = cohort.model_copy(update={"age": 91, "organic": True})
    result = run_inventory(organic)
    print("\n=== Organic Broilers ===")
    print_result(result)


if __name__ == "__main__":
    main()
