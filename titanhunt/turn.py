"""
Turn sequencing and command processing for the Titan Hunt rules engine.

Phase cycle: deployment → movement → combat → end → movement → ...
Reaching END closes the turn: the turn counter advances, the active
player flips and every unit is refreshed.

process_command() is the only way to change authoritative state. A command
is validated in full before anything is touched; a rejected command raises
and leaves the state exactly as it was.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .errors import (
    CommandRejectedError, DestinationOccupiedError, DuplicateUnitError, EmptyPathError,
    IllegalPathError, InvalidDestinationError, NotActivePlayerError,
    UnitAlreadyMovedError, UnitNotFoundError, WrongPhaseError,
)
from .hex import Facing, HexCoord
from .map import GameMap
from .movement import MovementPath, path_cost
from .units import Player, Unit, UnitSummary, UnitType

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Game phases in turn order."""
    DEPLOYMENT = "deployment"  # Initial deployment, only once
    MOVEMENT = "movement"
    COMBAT = "combat"
    END = "end"  # End of turn cleanup

    def next(self) -> "Phase":
        return _NEXT_PHASE[self]

    def is_movement(self) -> bool:
        return self is Phase.MOVEMENT

    def is_combat(self) -> bool:
        return self is Phase.COMBAT


_NEXT_PHASE = {
    Phase.DEPLOYMENT: Phase.MOVEMENT,
    Phase.MOVEMENT: Phase.COMBAT,
    Phase.COMBAT: Phase.END,
    Phase.END: Phase.MOVEMENT,  # New turn starts with movement
}


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class MoveCommand:
    """Move a unit along a path, ending with the given facing."""
    unit_id: int
    path: tuple[HexCoord, ...]
    final_facing: Facing

    def __post_init__(self):
        object.__setattr__(self, "path", tuple(self.path))

    @classmethod
    def from_path(cls, unit_id: int, movement: MovementPath) -> "MoveCommand":
        return cls(unit_id=unit_id, path=tuple(movement.path), final_facing=movement.final_facing)


@dataclass(frozen=True)
class EndPhase:
    """End the current phase."""


@dataclass(frozen=True)
class EndTurn:
    """End the current turn, whatever the phase."""


Command = Union[MoveCommand, EndPhase, EndTurn]


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class UnitMoved:
    unit_id: int
    from_hex: HexCoord
    to_hex: HexCoord
    facing: Facing


@dataclass(frozen=True)
class PhaseChanged:
    from_phase: Phase
    to_phase: Phase


@dataclass(frozen=True)
class TurnChanged:
    turn: int


@dataclass(frozen=True)
class UnitDestroyed:
    unit_id: int


GameEvent = Union[UnitMoved, PhaseChanged, TurnChanged, UnitDestroyed]


class GameState:
    """
    Authoritative state of one game: map, units, turn, phase and event log.

    The state exclusively owns its map and units. With validate_paths the
    Move command also checks every step of the supplied path; otherwise
    only the destination is checked and the caller is trusted to have
    planned the path with find_path or find_reachable.
    """

    def __init__(self, game_map: GameMap, validate_paths: bool = False):
        self.map = game_map
        self.units: list[Unit] = []
        self.current_turn = 1
        self.current_phase = Phase.DEPLOYMENT
        self.active_player = Player.PLAYER1
        self.selected_unit: Optional[int] = None
        self.events: list[GameEvent] = []
        self.game_over = False
        self.winner: Optional[Player] = None
        self.validate_paths = validate_paths

        self._reported_destroyed: set[int] = set()

    # Setup
    def add_unit(self, unit: Unit):
        """Add a unit. Ids must be unique within the game."""
        if self.get_unit(unit.id) is not None:
            raise DuplicateUnitError(unit.id)
        self.units.append(unit)

    def create_unit(
        self,
        unit_id: int,
        unit_type: UnitType,
        owner: Player,
        position: HexCoord,
        facing: Facing = Facing.EAST,
    ) -> Unit:
        unit = Unit(id=unit_id, unit_type=unit_type, owner=owner, position=position, facing=facing)
        self.add_unit(unit)
        return unit

    def start_game(self) -> bool:
        """Leave deployment for the first movement phase. Only works once."""
        if self.current_phase != Phase.DEPLOYMENT:
            return False
        self.current_phase = Phase.MOVEMENT
        logger.info(f"Game started: {len(self.units)} units, {self.active_player.name} to move")
        return True

    # Query methods
    def get_unit(self, unit_id: int) -> Optional[Unit]:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None

    def unit_at(self, position: HexCoord) -> Optional[Unit]:
        """Living unit occupying position, if any."""
        for unit in self.units:
            if unit.position == position and not unit.is_destroyed():
                return unit
        return None

    def player_units(self, player: Player) -> list[Unit]:
        return [u for u in self.units if u.owner == player and not u.is_destroyed()]

    def unit_summaries(self) -> list[UnitSummary]:
        return [u.summary() for u in self.units]

    def map_size(self) -> tuple[int, int]:
        return self.map.size()

    def select_unit(self, unit_id: Optional[int]):
        self.selected_unit = unit_id

    def selected(self) -> Optional[Unit]:
        if self.selected_unit is None:
            return None
        return self.get_unit(self.selected_unit)

    # Command processing
    def process_command(self, command: Command) -> list[GameEvent]:
        """Validate and apply a command, returning the events it produced.

        Raises a CommandRejectedError subclass if the command is illegal;
        the state is unchanged in that case.
        """
        try:
            if isinstance(command, MoveCommand):
                events = self._process_move(command)
            elif isinstance(command, EndPhase):
                events = self._process_end_phase()
            elif isinstance(command, EndTurn):
                events = self._process_end_turn()
            else:
                raise TypeError(f"Unknown command: {command!r}")
        except CommandRejectedError as e:
            logger.warning(f"Command rejected: {e}")
            raise

        self.events.extend(events)
        return events

    def _validate_move(self, command: MoveCommand) -> Unit:
        if self.current_phase != Phase.MOVEMENT:
            raise WrongPhaseError(
                "Cannot move outside of movement phase",
                context={"phase": self.current_phase.value},
            )

        unit = self.get_unit(command.unit_id)
        if unit is None:
            raise UnitNotFoundError(command.unit_id)

        if unit.owner != self.active_player:
            raise NotActivePlayerError(
                "Cannot move opponent's unit",
                context={"unit_id": unit.id, "owner": unit.owner.value},
            )

        if unit.has_moved:
            raise UnitAlreadyMovedError(
                "Unit has already moved this turn", context={"unit_id": unit.id}
            )

        if not command.path:
            raise EmptyPathError("Path is empty", context={"unit_id": unit.id})

        start = unit.position
        end = command.path[-1]

        if not self.map.is_valid(end):
            raise InvalidDestinationError(
                "Invalid destination", context={"q": end.q, "r": end.r}
            )

        if end != start and self.unit_at(end) is not None:
            raise DestinationOccupiedError(
                "Destination occupied", context={"q": end.q, "r": end.r}
            )

        if self.validate_paths:
            cost = path_cost(self, unit, list(command.path))
            if cost is None:
                raise IllegalPathError("Path is not walkable", context={"unit_id": unit.id})
            if cost > unit.movement_remaining:
                raise IllegalPathError(
                    "Path exceeds remaining movement",
                    context={"unit_id": unit.id, "cost": cost, "remaining": unit.movement_remaining},
                )

        return unit

    def _process_move(self, command: MoveCommand) -> list[GameEvent]:
        unit = self._validate_move(command)

        start = unit.position
        end = command.path[-1]

        unit.position = end
        unit.facing = command.final_facing
        unit.has_moved = True
        # Any move spends the whole remaining budget
        unit.movement_remaining = 0

        logger.debug(f"Unit {unit.id} moved {start} -> {end} facing {command.final_facing.name}")
        return [UnitMoved(unit_id=unit.id, from_hex=start, to_hex=end, facing=command.final_facing)]

    def _process_end_phase(self) -> list[GameEvent]:
        events: list[GameEvent] = []
        old_phase = self.current_phase
        self.current_phase = self.current_phase.next()

        if self.current_phase == Phase.END:
            self._end_turn()
            events.append(TurnChanged(turn=self.current_turn))

        events.append(PhaseChanged(from_phase=old_phase, to_phase=self.current_phase))
        logger.debug(f"Phase {old_phase.value} -> {self.current_phase.value}")
        return events

    def _process_end_turn(self) -> list[GameEvent]:
        old_phase = self.current_phase
        self._end_turn()
        return [
            PhaseChanged(from_phase=old_phase, to_phase=Phase.MOVEMENT),
            TurnChanged(turn=self.current_turn),
        ]

    def _end_turn(self):
        """Advance the turn counter, flip the active player and refresh all units."""
        self.current_turn += 1
        self.current_phase = Phase.MOVEMENT
        self.active_player = self.active_player.opponent()

        for unit in self.units:
            unit.reset_for_turn()

        logger.info(f"Turn {self.current_turn}: {self.active_player.name} to move")

    # Victory
    def check_victory(self) -> list[GameEvent]:
        """Report newly destroyed units and decide the winner if one side is wiped out.

        A simultaneous wipe ends nothing and names no winner.
        """
        events: list[GameEvent] = []
        for unit in self.units:
            if unit.is_destroyed() and unit.id not in self._reported_destroyed:
                self._reported_destroyed.add(unit.id)
                events.append(UnitDestroyed(unit_id=unit.id))

        was_over = self.game_over
        p1_alive = len(self.player_units(Player.PLAYER1))
        p2_alive = len(self.player_units(Player.PLAYER2))

        if p1_alive == 0 and p2_alive > 0:
            self.game_over = True
            self.winner = Player.PLAYER2
        elif p2_alive == 0 and p1_alive > 0:
            self.game_over = True
            self.winner = Player.PLAYER1

        if self.game_over and not was_over:
            logger.info(f"Game over: {self.winner.name} wins on turn {self.current_turn}")

        self.events.extend(events)
        return events

    def get_stats(self) -> dict:
        """Get game statistics."""
        return {
            "turn": self.current_turn,
            "phase": self.current_phase.value,
            "active_player": self.active_player.value,
            "units_by_player": {
                player.value: len(self.player_units(player)) for player in Player
            },
            "destroyed_units": sum(1 for u in self.units if u.is_destroyed()),
            "events": len(self.events),
            "game_over": self.game_over,
            "winner": self.winner.value if self.winner else None,
        }
