"""All settings, loaded from the environment or the .env file."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    app_name: str = "SupplyMatch"
    app_version: str = "0.4.0"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: str = ""

    # Matching defaults
    default_region_scope: str = "EU-27"
    default_max_results: int = 50
    bom_max_results: int = 5
    synonyms_path: str = ""

    # Weighting panel defaults (UI sliders, 0-50 each, need not add to 100)
    weight_price: float = 25
    weight_quality: float = 30
    weight_delivery: float = 20
    weight_certifications: float = 15
    weight_capacity: float = 10

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_default: str = "240/minute"
    rate_limit_storage_uri: str = "memory://"

    # Uploads
    max_upload_size_mb: int = 10


@lru_cache
def get_settings() -> Settings:
    return Settings()
