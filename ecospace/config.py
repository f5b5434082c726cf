"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ecospace.air_quality_service import DEFAULT_DATA_SOURCE_LABEL
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the EcoSpace service."""
    model_config = SettingsConfigDict(env_prefix="ECOSPACE_", extra="ignore")

    api_key: str | None = None
    random_seed: int | None = None  # fixed seed makes every response reproducible
    data_source_label: str = DEFAULT_DATA_SOURCE_LABEL
    log_level: str = "INFO"
    service_name: str = "ecospace"

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lower-case level names from the environment."""
        return str(v).strip().upper()


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
