"""
Hex grid coordinate system for the Titan Hunt rules engine.

Uses axial coordinates (q, r) with a redundant cube form (x + y + z = 0)
for distance and rounding arithmetic. Neighbors run E, NE, NW, W, SW, SE;
pixel positions use screen axes (y grows downward).
"""

import math
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidFacingError

SQRT3 = math.sqrt(3)

# Pixels, center to corner
DEFAULT_HEX_SIZE = 60.0

# Axial direction vectors indexed by Facing
AXIAL_DIRECTIONS: list[tuple[int, int]] = [
    (1, 0),   # East
    (1, -1),  # Northeast
    (0, -1),  # Northwest
    (-1, 0),  # West
    (-1, 1),  # Southwest
    (0, 1),   # Southeast
]


class Facing(Enum):
    """Six hex facings, counter-clockwise from East."""
    EAST = 0
    NORTHEAST = 1
    NORTHWEST = 2
    WEST = 3
    SOUTHWEST = 4
    SOUTHEAST = 5

    @classmethod
    def from_index(cls, index: int) -> "Facing":
        """Get facing from index (0-5). Raises InvalidFacingError otherwise."""
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 5:
            raise InvalidFacingError(index)
        return cls(index)

    @property
    def index(self) -> int:
        return self.value

    @property
    def sprite_direction(self) -> str:
        return _SPRITE_DIRECTIONS[self]

    def opposite(self) -> "Facing":
        return Facing((self.value + 3) % 6)

    def rotate(self, steps: int) -> "Facing":
        """Rotate by a signed step count; positive is counter-clockwise."""
        return Facing((self.value + steps) % 6)

    def rotate_ccw(self, steps: int = 1) -> "Facing":
        return self.rotate(steps)

    def rotate_cw(self, steps: int = 1) -> "Facing":
        return self.rotate(-steps)

    def to_radians(self) -> float:
        """Angle of this facing (0 = East, counter-clockwise)."""
        return self.value * math.pi / 3

    def is_in_front_arc(self, observer: "HexCoord", target: "HexCoord") -> bool:
        """True if target lies in the 3-direction cone ahead of observer.

        The observer's own hex always counts as in front.
        """
        direction = observer.direction_to(target)
        if direction is None:
            return True
        diff = (direction.value - self.value) % 6
        return diff <= 1 or diff >= 5


_SPRITE_DIRECTIONS = {
    Facing.EAST: "E",
    Facing.NORTHEAST: "NE",
    Facing.NORTHWEST: "NW",
    Facing.WEST: "W",
    Facing.SOUTHWEST: "SW",
    Facing.SOUTHEAST: "SE",
}


@dataclass(frozen=True)
class CubeCoord:
    """Cube coordinate for hex arithmetic (x + y + z = 0)."""
    x: int
    y: int
    z: int

    def __post_init__(self):
        if self.x + self.y + self.z != 0:
            raise ValueError(f"Cube coordinates must sum to 0: ({self.x}, {self.y}, {self.z})")

    def to_axial(self) -> "HexCoord":
        return HexCoord(self.x, self.z)


@dataclass(frozen=True, order=True)
class HexCoord:
    """Axial hex coordinate (q, r). Ordering is (q, r) for deterministic tie-breaks."""
    q: int
    r: int

    @classmethod
    def origin(cls) -> "HexCoord":
        return cls(0, 0)

    @property
    def s(self) -> int:
        """Third cube coordinate (q + r + s = 0)."""
        return -self.q - self.r

    def to_cube(self) -> CubeCoord:
        return CubeCoord(x=self.q, y=-self.q - self.r, z=self.r)

    def __add__(self, other: "HexCoord") -> "HexCoord":
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: "HexCoord") -> "HexCoord":
        return HexCoord(self.q - other.q, self.r - other.r)

    def neighbors(self) -> list["HexCoord"]:
        """All 6 adjacent hexes in E, NE, NW, W, SW, SE order."""
        return [HexCoord(self.q + dq, self.r + dr) for dq, dr in AXIAL_DIRECTIONS]

    def neighbor(self, facing: Facing) -> "HexCoord":
        dq, dr = AXIAL_DIRECTIONS[facing.value]
        return HexCoord(self.q + dq, self.r + dr)

    def distance_to(self, other: "HexCoord") -> int:
        a = self.to_cube()
        b = other.to_cube()
        return (abs(a.x - b.x) + abs(a.y - b.y) + abs(a.z - b.z)) // 2

    def is_adjacent(self, other: "HexCoord") -> bool:
        return self.distance_to(other) == 1

    def line_to(self, target: "HexCoord") -> list["HexCoord"]:
        """All hexes on a straight line to target, both endpoints included."""
        n = self.distance_to(target)
        if n == 0:
            return [self]

        results = []
        for i in range(n + 1):
            t = i / n
            q = self.q + (target.q - self.q) * t
            r = self.r + (target.r - self.r) * t
            results.append(hex_round(q, r))
        return results

    def direction_to(self, target: "HexCoord") -> Facing | None:
        """Nearest facing from this hex toward target, None if identical."""
        if self == target:
            return None

        x, y = (target - self).to_pixel(1.0)
        # Screen y grows downward; flip it so angles run counter-clockwise.
        angle = math.atan2(-y, x)
        normalized = (angle + 2 * math.pi) % (2 * math.pi)
        index = int(normalized / (math.pi / 3) + 0.5) % 6
        return Facing(index)

    def to_pixel(self, hex_size: float) -> tuple[float, float]:
        """Center of this hex in pixels, origin hex at (0, 0)."""
        x = hex_size * (SQRT3 * self.q + SQRT3 / 2 * self.r)
        y = hex_size * (3 / 2 * self.r)
        return (x, y)

    @classmethod
    def from_pixel(cls, x: float, y: float, hex_size: float) -> "HexCoord":
        """Hex containing the pixel position."""
        q = (SQRT3 / 3 * x - 1 / 3 * y) / hex_size
        r = (2 / 3 * y) / hex_size
        return hex_round(q, r)

    def __repr__(self) -> str:
        return f"HexCoord({self.q}, {self.r})"


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def hex_round(q: float, r: float) -> HexCoord:
    """Round fractional axial coordinates to the nearest hex."""
    s = -q - r
    rq, rr, rs = _round_half_away(q), _round_half_away(r), _round_half_away(s)

    q_diff = abs(rq - q)
    r_diff = abs(rr - r)
    s_diff = abs(rs - s)

    if q_diff > r_diff and q_diff > s_diff:
        rq = -rr - rs
    elif r_diff > s_diff:
        rr = -rq - rs

    return HexCoord(int(rq), int(rr))


def hex_to_pixel(coord: HexCoord, hex_size: float = DEFAULT_HEX_SIZE) -> tuple[float, float]:
    return coord.to_pixel(hex_size)


def pixel_to_hex(x: float, y: float, hex_size: float = DEFAULT_HEX_SIZE) -> HexCoord:
    return HexCoord.from_pixel(x, y, hex_size)


def hex_corners(center_x: float, center_y: float, size: float) -> list[tuple[float, float]]:
    """The 6 corner points of a hex in the to_pixel layout, for renderers."""
    corners = []
    for i in range(6):
        angle = math.pi / 3 * i - math.pi / 6
        corners.append((center_x + size * math.cos(angle), center_y + size * math.sin(angle)))
    return corners


def generate_rect_map(width: int, height: int) -> list[HexCoord]:
    """Playable coordinate set: row r spans q from -(r // 2) to width - 1 - (r // 2)."""
    hexes = []
    for r in range(height):
        r_offset = r // 2
        for q in range(-r_offset, width - r_offset):
            hexes.append(HexCoord(q, r))
    return hexes
