"""
Unit definitions for the Titan Hunt rules engine.

Handles the static unit-type stat tables and the mutable per-unit state:
position, facing, resource pools and per-turn flags.
"""

from dataclasses import dataclass, field
from enum import Enum

from .hex import Facing, HexCoord


class Player(Enum):
    PLAYER1 = 1
    PLAYER2 = 2

    def opponent(self) -> "Player":
        return Player.PLAYER2 if self is Player.PLAYER1 else Player.PLAYER1


class UnitType(Enum):
    """Unit classes, valued by their sprite atlas key."""
    # Titans
    REAVER_TITAN = "Reaver_Titan"
    WARLORD_TITAN = "Warlord_Titan"
    # Super-heavy tanks
    SHADOWSWORD = "shadowsword"
    SHADOWSWORD2 = "shadowsword2"
    SHADOWSWORD3 = "shadowsword3"

    @property
    def stats(self) -> "UnitTypeStats":
        return UNIT_TYPE_STATS[self]

    @property
    def sprite_key(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.stats.display_name

    @property
    def base_movement(self) -> int:
        return self.stats.movement

    @property
    def base_armor(self) -> int:
        return self.stats.armor

    @property
    def base_structure(self) -> int:
        return self.stats.structure

    @property
    def void_shields(self) -> int:
        return self.stats.void_shields

    @property
    def is_titan(self) -> bool:
        return self.stats.is_titan


@dataclass(frozen=True)
class UnitTypeStats:
    """Base stats for a unit class."""
    display_name: str
    movement: int
    armor: int
    structure: int  # Hit points
    void_shields: int
    is_titan: bool


UNIT_TYPE_STATS: dict[UnitType, UnitTypeStats] = {
    UnitType.REAVER_TITAN: UnitTypeStats("Reaver Titan", 6, 12, 10, 2, True),
    UnitType.WARLORD_TITAN: UnitTypeStats("Warlord Titan", 4, 16, 14, 4, True),
    UnitType.SHADOWSWORD: UnitTypeStats("Shadowsword", 5, 8, 6, 0, False),
    UnitType.SHADOWSWORD2: UnitTypeStats("Shadowsword Mk II", 5, 8, 6, 0, False),
    UnitType.SHADOWSWORD3: UnitTypeStats("Shadowsword Mk III", 5, 8, 6, 0, False),
}


@dataclass
class UnitSummary:
    """Display snapshot of a unit for the host layer."""
    id: int
    unit_type: UnitType
    sprite_key: str
    display_name: str
    sprite_frame: str
    owner: Player
    position: HexCoord
    facing: Facing
    armor: int
    max_armor: int
    structure: int
    max_structure: int
    void_shields: int
    max_void_shields: int
    movement_remaining: int
    max_movement: int
    has_moved: bool
    has_attacked: bool
    is_destroyed: bool
    is_titan: bool


@dataclass
class Unit:
    """A unit on the battlefield. Resource pools start at the type's base stats."""
    id: int
    unit_type: UnitType
    owner: Player
    position: HexCoord
    facing: Facing = Facing.EAST
    armor: int = field(init=False)
    structure: int = field(init=False)
    void_shields: int = field(init=False)
    movement_remaining: int = field(init=False)
    has_moved: bool = False
    has_attacked: bool = False

    def __post_init__(self):
        stats = self.unit_type.stats
        self.armor = stats.armor
        self.structure = stats.structure
        self.void_shields = stats.void_shields
        self.movement_remaining = stats.movement

    def is_destroyed(self) -> bool:
        return self.structure <= 0

    def effective_movement(self) -> int:
        """Movement budget available for searches this turn."""
        return self.movement_remaining

    def reset_for_turn(self):
        """Restore movement and clear per-turn flags."""
        self.movement_remaining = self.unit_type.base_movement
        self.has_moved = False
        self.has_attacked = False

    def sprite_frame(self) -> str:
        return f"{self.unit_type.sprite_key}_{self.facing.sprite_direction}_0000"

    def summary(self) -> UnitSummary:
        unit_type = self.unit_type
        return UnitSummary(
            id=self.id,
            unit_type=unit_type,
            sprite_key=unit_type.sprite_key,
            display_name=unit_type.display_name,
            sprite_frame=self.sprite_frame(),
            owner=self.owner,
            position=self.position,
            facing=self.facing,
            armor=self.armor,
            max_armor=unit_type.base_armor,
            structure=self.structure,
            max_structure=unit_type.base_structure,
            void_shields=self.void_shields,
            max_void_shields=unit_type.void_shields,
            movement_remaining=self.movement_remaining,
            max_movement=unit_type.base_movement,
            has_moved=self.has_moved,
            has_attacked=self.has_attacked,
            is_destroyed=self.is_destroyed(),
            is_titan=unit_type.is_titan,
        )
