"""Tests for Pydantic config schema validation and the config loader."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from token_registry import config as config_module
from token_registry.config import get, get_validated_config, load_config, set_config_value
from token_registry.config_schema import (
    AppConfig,
    load_validated_config,
    validate_config_dict,
)


class TestValidConfig:
    """Test that valid configs are accepted."""

    def test_empty_config_uses_defaults(self) -> None:
        """Empty config should use all defaults."""
        config = validate_config_dict({})
        assert config.registry.name == "Token Registry"
        assert config.registry.symbol == "TKN"
        assert config.registry.owner == "deployer"
        assert config.logging.level == "INFO"
        assert config.logging.enabled is True

    def test_partial_config_merges_defaults(self) -> None:
        """Partial config should merge with defaults."""
        config = validate_config_dict({
            "registry": {"symbol": "GAL"}
        })
        assert config.registry.symbol == "GAL"
        assert config.registry.name == "Token Registry"  # Default

    def test_full_config_loads(self) -> None:
        """Shipped config file should load without errors."""
        config = load_validated_config(Path(__file__).parent.parent / "config" / "config.yaml")
        assert config.registry.owner != ""
        assert config.logging.default_recent > 0

    def test_empty_file_is_valid(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_validated_config(path) == AppConfig()


class TestInvalidConfig:
    """Test that invalid configs are rejected with clear errors."""

    def test_typo_in_key_rejected(self) -> None:
        """Typos in config keys should be rejected (extra='forbid')."""
        with pytest.raises(ValidationError) as exc_info:
            validate_config_dict({
                "regsitry": {"name": "x"}  # Typo: regsitry instead of registry
            })
        assert "regsitry" in str(exc_info.value)

    @pytest.mark.parametrize("field", ["name", "symbol", "owner"])
    def test_blank_registry_values_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_config_dict({"registry": {field: "   "}})
        assert field in str(exc_info.value)

    def test_empty_symbol_rejected(self) -> None:
        with pytest.raises(ValidationError):
            validate_config_dict({"registry": {"symbol": ""}})

    def test_bad_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_config_dict({"logging": {"level": "LOUD"}})
        assert "level" in str(exc_info.value)

    def test_default_recent_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            validate_config_dict({"logging": {"default_recent": 0}})

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_validated_config(tmp_path / "nope.yaml")


class TestConfigLoader:
    """Tests for the module-level config cache."""

    def test_load_and_get(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("registry:\n  name: Gallery\n")

        load_config(path)

        assert get("registry.name") == "Gallery"
        assert get_validated_config().registry.name == "Gallery"

    def test_get_falls_back_to_defaults(self, tmp_path: Path) -> None:
        """Keys absent from the YAML resolve to schema defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("registry:\n  name: Gallery\n")

        load_config(path)

        assert get("registry.symbol") == "TKN"
        assert get("logging.default_recent") == 50
        assert get("no.such.key", "fallback") == "fallback"

    def test_missing_default_file_uses_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")

        load_config()

        assert get_validated_config() == AppConfig()

    def test_set_config_value_revalidates(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        load_config(path)

        set_config_value("registry.owner", "curator")
        assert get_validated_config().registry.owner == "curator"

        with pytest.raises(ValidationError):
            set_config_value("logging.level", "LOUD")
