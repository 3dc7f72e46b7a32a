"""
Hex grid map for the Titan Hunt rules engine.

The playable region is a skewed rectangle of axial coordinates generated
once at construction. Tile contents may be edited afterwards; the
coordinate set never changes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import InvalidCoordinateError
from .hex import HexCoord, generate_rect_map


class TerrainType(Enum):
    CLEAR = "clear"
    ROUGH = "rough"
    WOODS = "woods"
    WATER = "water"
    RUINS = "ruins"
    IMPASSABLE = "impassable"

    @property
    def movement_cost(self) -> Optional[int]:
        """Movement points to enter a hex of this terrain, None if it cannot be entered."""
        return TERRAIN_MOVEMENT_COST[self]


TERRAIN_MOVEMENT_COST: dict[TerrainType, Optional[int]] = {
    TerrainType.CLEAR: 1,
    TerrainType.ROUGH: 2,
    TerrainType.WOODS: 2,
    TerrainType.WATER: 3,
    TerrainType.RUINS: 2,
    TerrainType.IMPASSABLE: None,
}


@dataclass
class Tile:
    """A single map hex. Elevation is carried for future line-of-sight rules."""
    terrain: TerrainType = TerrainType.CLEAR
    elevation: int = 0


class GameMap:
    """
    Finite, sparse map of tiles keyed by (q, r).

    Width and height are shape hints; is_valid() against the generated
    coordinate set is the boundary check.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.tiles: dict[tuple[int, int], Tile] = {
            (coord.q, coord.r): Tile() for coord in generate_rect_map(width, height)
        }

    def get_tile(self, coord: HexCoord) -> Optional[Tile]:
        return self.tiles.get((coord.q, coord.r))

    def is_valid(self, coord: HexCoord) -> bool:
        return (coord.q, coord.r) in self.tiles

    def all_hexes(self) -> list[HexCoord]:
        return [HexCoord(q, r) for q, r in self.tiles]

    def terrain_at(self, coord: HexCoord) -> TerrainType:
        """Terrain at coord; anything off the map reads as impassable."""
        tile = self.get_tile(coord)
        if tile is None:
            return TerrainType.IMPASSABLE
        return tile.terrain

    def movement_cost(self, coord: HexCoord) -> Optional[int]:
        """Cost to enter coord, None if it cannot be entered."""
        tile = self.get_tile(coord)
        if tile is None:
            return None
        return tile.terrain.movement_cost

    def set_terrain(self, coord: HexCoord, terrain: TerrainType, elevation: Optional[int] = None):
        """Edit the contents of an existing tile."""
        tile = self.get_tile(coord)
        if tile is None:
            raise InvalidCoordinateError(
                "Coordinate is not on the map", context={"q": coord.q, "r": coord.r}
            )
        tile.terrain = terrain
        if elevation is not None:
            tile.elevation = elevation

    def neighbors_of(self, coord: HexCoord) -> list[HexCoord]:
        """Adjacent hexes that are on the map."""
        return [n for n in coord.neighbors() if self.is_valid(n)]

    def hexes_in_radius(self, center: HexCoord, radius: int) -> list[HexCoord]:
        """All on-map hexes within radius of center."""
        hexes = []
        for dq in range(-radius, radius + 1):
            for dr in range(max(-radius, -dq - radius), min(radius, -dq + radius) + 1):
                coord = HexCoord(center.q + dq, center.r + dr)
                if self.is_valid(coord):
                    hexes.append(coord)
        return hexes

    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def get_stats(self) -> dict:
        """Get map statistics."""
        terrain_counts = {}
        for tile in self.tiles.values():
            terrain = tile.terrain.value
            terrain_counts[terrain] = terrain_counts.get(terrain, 0) + 1

        return {
            "width": self.width,
            "height": self.height,
            "total_hexes": len(self.tiles),
            "terrain_distribution": terrain_counts,
        }
