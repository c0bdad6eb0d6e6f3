"""
Tests for configuration loading
"""

import pytest
import yaml
from pydantic import ValidationError

from common.enums import DitherMode
from config import (
    EngineConfig,
    Settings,
    StorageConfig,
    SystemConfig,
    get_settings,
    reload_settings,
)


class TestSettingsDefaults:
    """Test default values"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("IFX_CONFIG_FILE", raising=False)
        settings = Settings()

        assert settings.engine.max_history is None
        assert settings.engine.dither_mode == DitherMode.TRUNCATE
        assert settings.storage.default_format == ".png"
        assert settings.api.thumbnail_width == 320
        assert settings.system.log_level == "INFO"
        assert settings.environment == "production"

    def test_to_dict_is_json_safe(self):
        data = Settings().to_dict()

        assert data["engine"]["dither_mode"] == "truncate"
        assert "config_file" not in data


class TestSettingsValidation:
    """Test field validators"""

    def test_log_level_normalized(self):
        assert SystemConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            SystemConfig(log_level="chatty")

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="moon")

    def test_default_format_normalized(self):
        assert StorageConfig(default_format="JPG").default_format == ".jpg"

    def test_unsupported_default_format(self):
        with pytest.raises(ValidationError):
            StorageConfig(default_format="gif")

    def test_max_history_must_be_positive(self):
        with pytest.raises(ValidationError):
            EngineConfig(max_history=0)


class TestSettingsSources:
    """Test environment variables and YAML files"""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("IFX_ENGINE_MAX_HISTORY", "5")
        monkeypatch.setenv("IFX_ENGINE_DITHER_MODE", "threshold")

        engine = EngineConfig()

        assert engine.max_history == 5
        assert engine.dither_mode == DitherMode.THRESHOLD

    def test_yaml_file(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            yaml.dump({"engine": {"max_history": 3}, "environment": "development"})
        )

        settings = Settings(config_file=str(config_path))

        assert settings.engine.max_history == 3
        assert settings.environment == "development"

    def test_yaml_file_from_env(self, tmp_path, monkeypatch):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.dump({"environment": "staging"}))
        monkeypatch.setenv("IFX_CONFIG_FILE", str(config_path))

        assert Settings().environment == "staging"

    def test_missing_yaml_file_ignored(self, tmp_path):
        settings = Settings(config_file=str(tmp_path / "absent.yaml"))

        assert settings.environment == "production"

    def test_save_to_file(self, tmp_path):
        path = tmp_path / "saved.yaml"
        Settings(engine={"max_history": 7}).save_to_file(str(path))

        saved = yaml.safe_load(path.read_text())

        assert saved["engine"]["max_history"] == 7
        assert Settings(config_file=str(path)).engine.max_history == 7

    def test_reload_settings_clears_cache(self):
        first = get_settings()

        assert get_settings() is first
        assert reload_settings() is not first
