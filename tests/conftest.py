"""Pytest configuration and shared fixtures for testing."""
import pytest

from titanhunt.hex import Facing, HexCoord
from titanhunt.map import GameMap
from titanhunt.turn import GameState
from titanhunt.units import Player, Unit, UnitType


@pytest.fixture
def clear_map():
    """Create a 20x20 map of clear terrain."""
    return GameMap(20, 20)


@pytest.fixture
def state(clear_map):
    """Create an empty game state on a clear map, still in deployment."""
    return GameState(clear_map)


@pytest.fixture
def strict_state(clear_map):
    """Create a game state that checks every step of Move paths."""
    return GameState(clear_map, validate_paths=True)


@pytest.fixture
def shadowsword():
    """Create a player 1 Shadowsword (movement 5) at (4, 10)."""
    return Unit(id=1, unit_type=UnitType.SHADOWSWORD, owner=Player.PLAYER1, position=HexCoord(4, 10))


@pytest.fixture
def reaver():
    """Create a player 1 Reaver Titan at (2, 3)."""
    return Unit(id=2, unit_type=UnitType.REAVER_TITAN, owner=Player.PLAYER1, position=HexCoord(2, 3))


@pytest.fixture
def enemy_warlord():
    """Create a player 2 Warlord Titan at (10, 10) facing west."""
    return Unit(
        id=10,
        unit_type=UnitType.WARLORD_TITAN,
        owner=Player.PLAYER2,
        position=HexCoord(10, 10),
        facing=Facing.WEST,
    )


@pytest.fixture
def skirmish(state, shadowsword, reaver, enemy_warlord):
    """Game state with two player 1 units and one player 2 unit, in movement."""
    state.add_unit(shadowsword)
    state.add_unit(reaver)
    state.add_unit(enemy_warlord)
    state.start_game()
    return state
