"""CH4 inventory for Danish sows, with and without piglets as a second cohort."""

from livch4.inventory.cli import print_result
from livch4.inventory.cohort import CohortInput
from livch4.inventory.inventory import run_inventories


def main():
    sows = CohortInput(
        animal_type="sows",
        animal_number=500,
        weight=200,
        # Catalog weight is the piglet range; keep the reference feed intake
        scale_by_weight=False,
        manure_excretion=5800,
        manure_cn=9,
        fraction_housing=1.0,
        fraction_grazing=0.0,
        feed_intake=1400,
        fraction_diet_grass=0.0,
        max_manure_ch4=0.45,
    )
    piglets = CohortInput(
        animal_type="piglets",
        animal_number=6000,
        manure_excretion=150,
        manure_cn=9,
        fraction_housing=1.0,
        fraction_grazing=0.0,
        max_manure_ch4=0.45,
    )

    run = run_inventories([sows, piglets])
    print("=== Danish Sow Unit ===")
    for result in run.results:
        print_result(result)
    for failure in run.failures:
        print(f"Failed: {failure.animal_type}: {failure.error}")

    print(f"\nUnit total: {run.ch4_total:.2f} kg CH4/yr ({run.co2eq_total:.0f} kg CO2-eq/yr)")


if __name__ == "__main__":
    main()
