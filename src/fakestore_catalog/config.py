"""Configuration management for Fakestore Catalog."""

import json
import os
from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from . import CONFIG_FILE, FILES_DIR, LOG_FILE, LOGS_DIR


class CatalogConfig(BaseModel):
    """Configuration for a catalog run."""

    base_url: str = "https://fakestoreapi.com"
    cache_ttl_minutes: float = Field(default=5, gt=0)
    retry_count: int = Field(default=3, ge=1)
    min_discount: int = Field(default=5, ge=0, le=100)
    max_discount: int = Field(default=20, ge=0, le=100)
    min_stock: int = Field(default=0, ge=0)
    max_stock: int = Field(default=100, ge=0)
    file_name: str = Field(default="grouped_products", min_length=1)
    output_dir: str = FILES_DIR
    log_file: str = f"{LOGS_DIR}/{LOG_FILE}"

    @model_validator(mode="after")
    def _check_ranges(self) -> "CatalogConfig":
        if self.min_discount > self.max_discount:
            raise ValueError("min_discount must not exceed max_discount")
        if self.min_stock > self.max_stock:
            raise ValueError("min_stock must not exceed max_stock")
        return self

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(minutes=self.cache_ttl_minutes)


# Environment variable -> config field
ENV_OVERRIDES = {
    "FAKESTORE_BASE_URL": "base_url",
    "FAKESTORE_CACHE_TTL_MINUTES": "cache_ttl_minutes",
    "FAKESTORE_RETRY_COUNT": "retry_count",
    "FAKESTORE_OUTPUT_DIR": "output_dir",
    "FAKESTORE_FILE_NAME": "file_name",
}


def get_config_path(project_root: Path) -> Path:
    """Get the config file path."""
    return project_root / CONFIG_FILE


def load_config(project_root: Path) -> CatalogConfig:
    """Build the run configuration.

    Values come from defaults, then ``fakestore.json`` in the project root
    (if present), then ``FAKESTORE_*`` environment variables.

    Raises:
        ValueError: If the file is not JSON or a value fails validation
        OSError: If the file exists but cannot be read
    """
    config_path = get_config_path(project_root)
    data = json.loads(config_path.read_text()) if config_path.exists() else {}

    if not isinstance(data, dict):
        raise ValueError(f"{config_path.name} must contain a JSON object")

    # Strings from the environment are coerced by validation
    data.update(
        {field: value for env, field in ENV_OVERRIDES.items() if (value := os.environ.get(env))}
    )
    return CatalogConfig.model_validate(data)
