"""
Scenario loading for the Titan Hunt rules engine.

Translates host-side names and codes (sprite keys, player numbers,
terrain names, facing indices) into engine types and builds a ready
GameState from a YAML scenario file.

Scenario format:

    scenario:
      name: Skirmish at Hive Tertius
    map:
      width: 20
      height: 20
      tiles:
        - {q: 5, r: 5, terrain: woods, elevation: 1}
    units:
      - {id: 1, type: Reaver_Titan, player: 1, q: 2, r: 3, facing: 0}
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .config import EngineConfig
from .errors import (
    DataLoadError, InvalidPlayerError, TitanHuntError, UnknownTerrainError,
    UnknownUnitTypeError,
)
from .hex import Facing, HexCoord
from .map import GameMap, TerrainType
from .turn import GameState
from .units import Player, UnitType

logger = logging.getLogger(__name__)

_UNIT_TYPES_BY_KEY = {unit_type.sprite_key: unit_type for unit_type in UnitType}
_TERRAIN_BY_NAME = {terrain.value: terrain for terrain in TerrainType}


def parse_unit_type(name: str) -> UnitType:
    """Unit type for a sprite key such as "Reaver_Titan"."""
    if not isinstance(name, str):
        raise UnknownUnitTypeError(name)
    unit_type = _UNIT_TYPES_BY_KEY.get(name)
    if unit_type is None:
        raise UnknownUnitTypeError(name)
    return unit_type


def parse_player(code: Any) -> Player:
    """Player for code 1 or 2."""
    if isinstance(code, bool) or code not in (1, 2):
        raise InvalidPlayerError(code)
    return Player(code)


def parse_terrain(name: str) -> TerrainType:
    terrain = _TERRAIN_BY_NAME.get(str(name).lower())
    if terrain is None:
        raise UnknownTerrainError(name)
    return terrain


def parse_facing(index: Any) -> Facing:
    return Facing.from_index(index)


def _require(data: dict, key: str, where: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise DataLoadError(f"Missing '{key}' in {where}")
    return data[key]


def _coord(data: dict, where: str) -> HexCoord:
    q = _require(data, "q", where)
    r = _require(data, "r", where)
    if not isinstance(q, int) or not isinstance(r, int):
        raise DataLoadError(f"Coordinates in {where} must be integers", context={"q": q, "r": r})
    return HexCoord(q, r)


def load_map_data(data: dict) -> GameMap:
    """Build a GameMap from the 'map' section of a scenario."""
    width = _require(data, "width", "map")
    height = _require(data, "height", "map")
    if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
        raise DataLoadError(
            "Map width and height must be positive integers",
            context={"width": width, "height": height},
        )

    game_map = GameMap(width, height)
    for i, tile in enumerate(data.get("tiles") or []):
        where = f"map.tiles[{i}]"
        coord = _coord(tile, where)
        terrain = parse_terrain(tile.get("terrain", TerrainType.CLEAR.value))
        elevation = tile.get("elevation")
        if elevation is not None and (isinstance(elevation, bool) or not isinstance(elevation, int)):
            raise DataLoadError(f"Elevation in {where} must be an integer", context={"elevation": elevation})
        game_map.set_terrain(coord, terrain, elevation)

    return game_map


def load_scenario_data(data: dict, validate_paths: bool = False) -> GameState:
    """Build a GameState in deployment from an already-parsed scenario dict."""
    if not isinstance(data, dict):
        raise DataLoadError("Scenario must be a mapping")

    game_map = load_map_data(_require(data, "map", "scenario"))
    state = GameState(game_map, validate_paths=validate_paths)

    for i, entry in enumerate(data.get("units") or []):
        where = f"units[{i}]"
        coord = _coord(entry, where)
        if not game_map.is_valid(coord):
            raise DataLoadError(
                f"Unit in {where} is off the map", context={"q": coord.q, "r": coord.r}
            )
        unit_id = _require(entry, "id", where)
        if isinstance(unit_id, bool) or not isinstance(unit_id, int):
            raise DataLoadError(f"Unit id in {where} must be an integer", context={"id": unit_id})
        state.create_unit(
            unit_id=unit_id,
            unit_type=parse_unit_type(_require(entry, "type", where)),
            owner=parse_player(_require(entry, "player", where)),
            position=coord,
            facing=parse_facing(entry.get("facing", 0)),
        )

    return state


def load_scenario(
    name_or_path: Union[str, Path],
    validate_paths: Optional[bool] = None,
    config: Optional[EngineConfig] = None,
) -> GameState:
    """Load a YAML scenario file into a GameState in deployment.

    With a config, a bare name such as "skirmish" is looked up under
    config.data_path and validate_paths defaults to config.validate_paths.
    An explicit validate_paths always wins.
    """
    path = Path(name_or_path)
    if config is not None and len(path.parts) == 1 and not path.exists():
        path = config.scenario_path(str(name_or_path))
    if validate_paths is None:
        validate_paths = config.validate_paths if config is not None else False

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise DataLoadError(f"Cannot read scenario: {path}", context={"error": str(e)}) from e
    except yaml.YAMLError as e:
        raise DataLoadError(f"Malformed scenario: {path}", context={"error": str(e)}) from e

    try:
        state = load_scenario_data(data, validate_paths=validate_paths)
    except DataLoadError:
        raise
    except TitanHuntError as e:
        raise DataLoadError(f"Invalid scenario: {path}", context={"cause": str(e)}) from e

    meta = data.get("scenario")
    name = meta.get("name", path.stem) if isinstance(meta, dict) else path.stem
    logger.info(f"Loaded scenario '{name}': {len(state.units)} units on {state.map.width}x{state.map.height} map")
    return state
