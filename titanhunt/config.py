"""
Engine configuration read from the environment.

A .env file next to the working directory (or an explicit env_file) is
loaded first; variables already set in the process environment win.

    TITANHUNT_DATA_PATH       data directory; scenarios live in its scenarios/ (default: data)
    TITANHUNT_LOG_LEVEL       logging level name (default: INFO)
    TITANHUNT_HEX_SIZE        hex radius in pixels for picking (default: 60)
    TITANHUNT_VALIDATE_PATHS  check every step of Move paths (default: false)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from .errors import ConfigurationError
from .hex import DEFAULT_HEX_SIZE, HexCoord, hex_to_pixel, pixel_to_hex

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass
class EngineConfig:
    data_path: Path = field(default_factory=lambda: Path("data"))
    log_level: str = "INFO"
    hex_size: float = DEFAULT_HEX_SIZE
    validate_paths: bool = False  # Passed to every GameState the loader builds

    def scenario_path(self, name: str) -> Path:
        """Scenario file for a bare name such as "skirmish"."""
        path = Path(name)
        if not path.suffix:
            path = path.with_suffix(".yaml")
        return self.data_path / "scenarios" / path

    def hex_to_pixel(self, coord: HexCoord) -> tuple[float, float]:
        return hex_to_pixel(coord, self.hex_size)

    def pixel_to_hex(self, x: float, y: float) -> HexCoord:
        """Hex under a screen position, at the configured hex size."""
        return pixel_to_hex(x, y, self.hex_size)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean", context={"value": raw})


def _parse_hex_size(raw: str) -> float:
    try:
        size = float(raw)
    except ValueError:
        raise ConfigurationError(
            "TITANHUNT_HEX_SIZE must be a number", context={"value": raw}
        ) from None
    if size <= 0:
        raise ConfigurationError("TITANHUNT_HEX_SIZE must be positive", context={"value": raw})
    return size


def load_config(env_file: Optional[Union[str, Path]] = None) -> EngineConfig:
    """Build an EngineConfig from .env and the process environment."""
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    config = EngineConfig()

    data_path = os.environ.get("TITANHUNT_DATA_PATH")
    if data_path:
        config.data_path = Path(data_path)

    log_level = os.environ.get("TITANHUNT_LOG_LEVEL")
    if log_level:
        level = log_level.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(
                "TITANHUNT_LOG_LEVEL is not a logging level", context={"value": log_level}
            )
        config.log_level = level

    hex_size = os.environ.get("TITANHUNT_HEX_SIZE")
    if hex_size:
        config.hex_size = _parse_hex_size(hex_size)

    validate_paths = os.environ.get("TITANHUNT_VALIDATE_PATHS")
    if validate_paths is not None:
        config.validate_paths = _parse_bool("TITANHUNT_VALIDATE_PATHS", validate_paths)

    return config


def configure_logging(config: EngineConfig):
    """Set up root logging for a host process."""
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
