"""
Titan Hunt: turn-based hex wargame rules engine.

Core modules:
- hex: Axial coordinates, facings and pixel conversion
- map: Terrain and the fixed playable coordinate set
- units: Unit types and per-unit state
- movement: Reachability and pathfinding
- turn: Phases, commands, events and the authoritative game state
- loader: YAML scenario files for host processes
- config: Environment configuration and logging setup
"""

from .hex import (
    Facing, CubeCoord, HexCoord, hex_round, hex_corners, hex_to_pixel,
    pixel_to_hex, generate_rect_map,
)
from .map import GameMap, Tile, TerrainType
from .units import Player, UnitType, UnitTypeStats, Unit, UnitSummary
from .movement import (
    MovementPath, MovementResult, find_reachable, find_path, path_cost,
    plan_move, plot_movement, suggest_facing, is_blocked, can_pass_through,
)
from .turn import (
    GameState, Phase, MoveCommand, EndPhase, EndTurn,
    UnitMoved, PhaseChanged, TurnChanged, UnitDestroyed,
)
from .loader import load_scenario, load_map_data
from .config import EngineConfig, load_config, configure_logging
from .errors import TitanHuntError, CommandRejectedError, InvalidInputError, DataLoadError

__all__ = [
    # Hex geometry
    "Facing", "CubeCoord", "HexCoord", "hex_round", "hex_corners", "hex_to_pixel",
    "pixel_to_hex", "generate_rect_map",
    # Map
    "GameMap", "Tile", "TerrainType",
    # Units
    "Player", "UnitType", "UnitTypeStats", "Unit", "UnitSummary",
    # Movement
    "MovementPath", "MovementResult", "find_reachable", "find_path", "path_cost",
    "plan_move", "plot_movement", "suggest_facing", "is_blocked", "can_pass_through",
    # Turn Management
    "GameState", "Phase", "MoveCommand", "EndPhase", "EndTurn",
    "UnitMoved", "PhaseChanged", "TurnChanged", "UnitDestroyed",
    # Data and configuration
    "load_scenario", "load_map_data", "EngineConfig", "load_config", "configure_logging",
    # Errors
    "TitanHuntError", "CommandRejectedError", "InvalidInputError", "DataLoadError",
]
