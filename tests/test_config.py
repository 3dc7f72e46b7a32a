"""Tests for environment configuration."""
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from titanhunt.config import EngineConfig, configure_logging, load_config
from titanhunt.errors import ConfigurationError
from titanhunt.hex import HexCoord

ENV_VARS = [
    "TITANHUNT_DATA_PATH",
    "TITANHUNT_LOG_LEVEL",
    "TITANHUNT_HEX_SIZE",
    "TITANHUNT_VALIDATE_PATHS",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear engine variables and restore the environment after the test."""
    for name in ENV_VARS:
        # setenv first so monkeypatch also removes anything load_dotenv adds
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self, clean_env, tmp_path):
        config = load_config(tmp_path / "missing.env")
        assert config == EngineConfig()
        assert config.data_path == Path("data")
        assert config.log_level == "INFO"
        assert config.hex_size == 60.0
        assert not config.validate_paths

    def test_from_environment(self, clean_env, tmp_path):
        clean_env.setenv("TITANHUNT_DATA_PATH", "/srv/titanhunt")
        clean_env.setenv("TITANHUNT_LOG_LEVEL", "debug")
        clean_env.setenv("TITANHUNT_HEX_SIZE", "32.5")
        clean_env.setenv("TITANHUNT_VALIDATE_PATHS", "yes")

        config = load_config(tmp_path / "missing.env")

        assert config.data_path == Path("/srv/titanhunt")
        assert config.log_level == "DEBUG"
        assert config.hex_size == 32.5
        assert config.validate_paths

    def test_from_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TITANHUNT_HEX_SIZE=48\nTITANHUNT_VALIDATE_PATHS=true\n")

        config = load_config(env_file)

        assert config.hex_size == 48.0
        assert config.validate_paths

    def test_environment_beats_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TITANHUNT_HEX_SIZE=48\n")
        clean_env.setenv("TITANHUNT_HEX_SIZE", "20")
        assert load_config(env_file).hex_size == 20.0

    @pytest.mark.parametrize("name, value", [
        ("TITANHUNT_HEX_SIZE", "huge"),
        ("TITANHUNT_HEX_SIZE", "-4"),
        ("TITANHUNT_VALIDATE_PATHS", "maybe"),
        ("TITANHUNT_LOG_LEVEL", "LOUD"),
    ])
    def test_malformed_values(self, clean_env, tmp_path, name, value):
        clean_env.setenv(name, value)
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.env")


class TestEngineConfig:
    """Tests for the helpers driven by configured values."""

    def test_scenario_path(self):
        config = EngineConfig(data_path=Path("/srv/th"))
        assert config.scenario_path("skirmish") == Path("/srv/th/scenarios/skirmish.yaml")
        assert config.scenario_path("duel.yml") == Path("/srv/th/scenarios/duel.yml")

    def test_pixel_helpers_use_hex_size(self):
        small = EngineConfig(hex_size=10.0)
        large = EngineConfig(hex_size=40.0)
        coord = HexCoord(3, 2)

        x, y = small.hex_to_pixel(coord)
        assert (x * 4, y * 4) == pytest.approx(large.hex_to_pixel(coord))
        assert small.pixel_to_hex(x, y) == coord
        # The same point is a different hex at another size
        assert large.pixel_to_hex(x, y) != coord

    def test_hex_size_from_environment(self, clean_env, tmp_path):
        clean_env.setenv("TITANHUNT_HEX_SIZE", "20")
        config = load_config(tmp_path / "missing.env")
        assert config.hex_to_pixel(HexCoord(0, 2)) == pytest.approx(HexCoord(0, 2).to_pixel(20.0))


class TestConfigureLogging:
    def test_uses_configured_level(self):
        with patch("logging.basicConfig") as basic_config:
            configure_logging(EngineConfig(log_level="WARNING"))
        basic_config.assert_called_once()
        assert basic_config.call_args.kwargs["level"] == "WARNING"

    def test_level_names_are_valid(self):
        assert isinstance(logging.getLevelName(EngineConfig().log_level), int)
