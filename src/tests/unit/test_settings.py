"""Unit tests for config/settings.py"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from dominion_picker.config import settings as settings_module
from dominion_picker.config.settings import CatalogSettings, reload_settings


def test_settings_import():
    """Test that the global settings instance exists."""
    assert isinstance(settings_module.settings, CatalogSettings)


def test_settings_defaults(monkeypatch):
    """Test default settings values."""
    monkeypatch.delenv("DP_DATA_DIR", raising=False)
    monkeypatch.delenv("DP_LOGS_DIR", raising=False)

    config = CatalogSettings()

    assert config.data_dir == Path.home() / ".dominion_picker"
    assert config.db_filename == "cards.db"
    assert config.resources_dir is None
    assert config.check_identities is True
    assert config.db_wal_mode is True
    assert config.log_level == "INFO"
    assert config.log_to_file is False
    assert config.logs_dir == Path("logs")


def test_db_path(tmp_path):
    config = CatalogSettings(data_dir=tmp_path, db_filename="other.db")

    assert config.db_path == tmp_path / "other.db"


def test_settings_env_var_override(monkeypatch, tmp_path):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("DP_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DP_CHECK_IDENTITIES", "false")
    monkeypatch.setenv("DP_RESOURCES_DIR", str(tmp_path))

    config = CatalogSettings()

    assert config.log_level == "DEBUG"
    assert config.check_identities is False
    assert config.resources_dir == tmp_path


def test_home_is_expanded():
    config = CatalogSettings(data_dir="~/cards")

    assert config.data_dir == Path.home() / "cards"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        CatalogSettings(log_level="CHATTY")


def test_empty_db_filename():
    with pytest.raises(ValidationError):
        CatalogSettings(db_filename="")


def test_reload_settings(monkeypatch, tmp_path):
    """Test that reload_settings picks up environment changes."""
    original = settings_module.settings
    monkeypatch.setattr(settings_module, "settings", original)
    monkeypatch.setenv("DP_DATA_DIR", str(tmp_path / "reloaded"))

    reloaded = reload_settings()

    assert reloaded.data_dir == tmp_path / "reloaded"
    assert settings_module.settings is reloaded
