from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# .env file sits in the project root (parent of src/)
# Only use if it exists (CI uses environment variables directly)
# Path: core/config.py -> livch4 -> src -> project root -> .env
_ENV_FILE = Path(__file__).parent.parent.parent.parent / ".env"
_ENV_FILE = _ENV_FILE if _ENV_FILE.exists() else None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LIVCH4_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Alternative enteric fermentation catalog (YAML)
    # If not set, the catalog bundled with the package is used
    catalog_path: Path | None = None

    # Fallback reference bases when a catalog record has none (kg, months)
    reference_weight_default: float = 600.0
    reference_age_default: float = 12.0

    # Scale records without a reference weight/age against the defaults above
    # instead of skipping the scaling step
    scale_absent_basis: bool = False

    # Energy content of methane (MJ/kg CH4)
    # Non-dairy winter rations use 55.6 in the Danish inventory tables
    ch4_energy_content: float = 55.65
    ch4_energy_content_winter_other: float = 55.6

    # Global manure parameters
    dm_manure: float = 0.15  # dry matter fraction of manure
    dm_straw: float = 0.85  # dry matter fraction of straw
    fraction_ash: float = 0.2  # ash fraction of manure dry matter
    fraction_ash_straw: float = 0.045  # ash fraction of straw
    fraction_dm_vs: float = 0.8  # volatile solids share of dry matter
    max_manure_ch4: float = 0.24  # B0, m3 CH4/kg VS

    # Global Warming Potential of CH4 (100-year, AR5)
    ch4_gwp: float = 28.0

    # Display units for CLI output ("kg" or "t" of CH4)
    display_mass: Literal["kg", "t"] = "kg"


settings = Settings()
