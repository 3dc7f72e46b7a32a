"""Tests for the hex map and terrain."""
import pytest

from titanhunt.errors import InvalidCoordinateError
from titanhunt.hex import HexCoord
from titanhunt.map import GameMap, TerrainType, Tile


class TestTerrain:
    """Tests for terrain movement costs."""

    def test_costs(self):
        assert TerrainType.CLEAR.movement_cost == 1
        assert TerrainType.ROUGH.movement_cost == 2
        assert TerrainType.WOODS.movement_cost == 2
        assert TerrainType.WATER.movement_cost == 3
        assert TerrainType.RUINS.movement_cost == 2
        assert TerrainType.IMPASSABLE.movement_cost is None


class TestGameMap:
    """Tests for GameMap."""

    def test_generated_clear(self, clear_map):
        """New maps hold width * height clear tiles at elevation 0."""
        assert len(clear_map.tiles) == 400
        assert all(tile == Tile() for tile in clear_map.tiles.values())
        assert clear_map.size() == (20, 20)

    def test_validity(self, clear_map):
        assert clear_map.is_valid(HexCoord(0, 0))
        assert clear_map.is_valid(HexCoord(-9, 19))
        assert not clear_map.is_valid(HexCoord(-1, 0))
        assert not clear_map.is_valid(HexCoord(20, 0))
        assert not clear_map.is_valid(HexCoord(0, 20))

    def test_off_map_reads_impassable(self, clear_map):
        off = HexCoord(-5, 0)
        assert clear_map.get_tile(off) is None
        assert clear_map.terrain_at(off) == TerrainType.IMPASSABLE
        assert clear_map.movement_cost(off) is None

    def test_set_terrain(self, clear_map):
        coord = HexCoord(5, 5)
        clear_map.set_terrain(coord, TerrainType.WOODS, elevation=2)
        assert clear_map.terrain_at(coord) == TerrainType.WOODS
        assert clear_map.get_tile(coord).elevation == 2
        assert clear_map.movement_cost(coord) == 2

        clear_map.set_terrain(coord, TerrainType.WATER)
        assert clear_map.get_tile(coord).elevation == 2
        assert clear_map.movement_cost(coord) == 3

    def test_set_terrain_off_map(self, clear_map):
        """The coordinate set is fixed; editing outside it fails."""
        with pytest.raises(InvalidCoordinateError):
            clear_map.set_terrain(HexCoord(50, 50), TerrainType.ROUGH)
        assert len(clear_map.tiles) == 400

    def test_neighbors_of_corner(self, clear_map):
        assert set(clear_map.neighbors_of(HexCoord(0, 0))) == {HexCoord(1, 0), HexCoord(0, 1)}

    def test_neighbors_of_interior(self, clear_map):
        assert len(clear_map.neighbors_of(HexCoord(4, 10))) == 6

    def test_hexes_in_radius(self, clear_map):
        center = HexCoord(4, 10)
        hexes = clear_map.hexes_in_radius(center, 2)
        assert len(hexes) == 19
        assert all(center.distance_to(h) <= 2 for h in hexes)

    def test_hexes_in_radius_clipped(self, clear_map):
        """Only on-map hexes are returned near an edge."""
        hexes = clear_map.hexes_in_radius(HexCoord(0, 0), 1)
        assert set(hexes) == {HexCoord(0, 0), HexCoord(1, 0), HexCoord(0, 1)}

    def test_all_hexes(self):
        game_map = GameMap(3, 2)
        assert sorted(game_map.all_hexes()) == [
            HexCoord(0, 0), HexCoord(0, 1), HexCoord(1, 0),
            HexCoord(1, 1), HexCoord(2, 0), HexCoord(2, 1),
        ]

    def test_get_stats(self, clear_map):
        clear_map.set_terrain(HexCoord(1, 1), TerrainType.RUINS)
        clear_map.set_terrain(HexCoord(2, 1), TerrainType.RUINS)
        stats = clear_map.get_stats()
        assert stats["total_hexes"] == 400
        assert stats["terrain_distribution"] == {"clear": 398, "ruins": 2}
