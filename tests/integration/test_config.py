"""Tests for configuration loading."""

import json
from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from fakestore_catalog.config import CatalogConfig, get_config_path, load_config


class TestCatalogConfig:
    def test_defaults(self):
        config = CatalogConfig()

        assert config.base_url == "https://fakestoreapi.com"
        assert config.cache_ttl == timedelta(minutes=5)
        assert config.retry_count == 3
        assert (config.min_discount, config.max_discount) == (5, 20)
        assert (config.min_stock, config.max_stock) == (0, 100)
        assert config.file_name == "grouped_products"
        assert config.output_dir == "files"
        assert config.log_file == "logs/log.txt"

    def test_rejects_inverted_ranges(self):
        with pytest.raises(ValidationError):
            CatalogConfig(min_discount=30, max_discount=10)
        with pytest.raises(ValidationError):
            CatalogConfig(min_stock=5, max_stock=1)

    def test_rejects_zero_retries(self):
        with pytest.raises(ValidationError):
            CatalogConfig(retry_count=0)


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("FAKESTORE_BASE_URL", raising=False)
        assert load_config(tmp_path) == CatalogConfig()

    def test_reads_config_file(self, tmp_path: Path):
        get_config_path(tmp_path).write_text(json.dumps({"retry_count": 5, "file_name": "catalog"}))

        config = load_config(tmp_path)

        assert config.retry_count == 5
        assert config.file_name == "catalog"

    def test_env_overrides(self, tmp_path: Path, monkeypatch):
        get_config_path(tmp_path).write_text(json.dumps({"retry_count": 5}))
        monkeypatch.setenv("FAKESTORE_BASE_URL", "http://localhost:8000")
        monkeypatch.setenv("FAKESTORE_RETRY_COUNT", "2")
        monkeypatch.setenv("FAKESTORE_CACHE_TTL_MINUTES", "0.5")

        config = load_config(tmp_path)

        assert config.base_url == "http://localhost:8000"
        assert config.retry_count == 2
        assert config.cache_ttl == timedelta(seconds=30)

    def test_invalid_env_value(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("FAKESTORE_RETRY_COUNT", "many")
        with pytest.raises(ValidationError):
            load_config(tmp_path)

    def test_config_file_must_be_an_object(self, tmp_path: Path):
        get_config_path(tmp_path).write_text("[1, 2]")
        with pytest.raises(ValueError):
            load_config(tmp_path)
