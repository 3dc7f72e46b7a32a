"""Tests for unit types and unit state."""
from titanhunt.hex import Facing, HexCoord
from titanhunt.units import UNIT_TYPE_STATS, Player, Unit, UnitType


class TestUnitType:
    """Tests for the unit type stat table."""

    def test_every_type_has_stats(self):
        assert set(UNIT_TYPE_STATS) == set(UnitType)

    def test_titans(self):
        assert UnitType.REAVER_TITAN.is_titan
        assert UnitType.WARLORD_TITAN.is_titan
        assert not UnitType.SHADOWSWORD.is_titan

    def test_stats(self):
        assert UnitType.REAVER_TITAN.base_movement == 6
        assert UnitType.WARLORD_TITAN.base_structure == 14
        assert UnitType.WARLORD_TITAN.void_shields == 4
        assert UnitType.SHADOWSWORD3.base_armor == 8

    def test_sprite_keys(self):
        assert UnitType.REAVER_TITAN.sprite_key == "Reaver_Titan"
        assert UnitType.SHADOWSWORD2.sprite_key == "shadowsword2"
        assert UnitType.SHADOWSWORD2.display_name == "Shadowsword Mk II"


class TestPlayer:
    def test_opponent(self):
        assert Player.PLAYER1.opponent() == Player.PLAYER2
        assert Player.PLAYER2.opponent() == Player.PLAYER1


class TestUnit:
    """Tests for Unit."""

    def test_starts_at_base_stats(self, reaver):
        assert reaver.armor == 12
        assert reaver.structure == 10
        assert reaver.void_shields == 2
        assert reaver.movement_remaining == 6
        assert reaver.effective_movement() == 6
        assert reaver.facing == Facing.EAST
        assert not reaver.has_moved
        assert not reaver.has_attacked

    def test_destroyed(self, shadowsword):
        assert not shadowsword.is_destroyed()
        shadowsword.structure = 0
        assert shadowsword.is_destroyed()
        shadowsword.structure = -3
        assert shadowsword.is_destroyed()

    def test_reset_for_turn(self, shadowsword):
        shadowsword.movement_remaining = 0
        shadowsword.has_moved = True
        shadowsword.has_attacked = True
        shadowsword.reset_for_turn()
        assert shadowsword.movement_remaining == 5
        assert not shadowsword.has_moved
        assert not shadowsword.has_attacked

    def test_sprite_frame(self):
        unit = Unit(
            id=7,
            unit_type=UnitType.SHADOWSWORD,
            owner=Player.PLAYER2,
            position=HexCoord(3, 3),
            facing=Facing.SOUTHWEST,
        )
        assert unit.sprite_frame() == "shadowsword_SW_0000"

    def test_summary(self, enemy_warlord):
        enemy_warlord.structure = 9
        enemy_warlord.movement_remaining = 0
        summary = enemy_warlord.summary()
        assert summary.id == 10
        assert summary.owner == Player.PLAYER2
        assert summary.sprite_frame == "Warlord_Titan_W_0000"
        assert summary.structure == 9
        assert summary.max_structure == 14
        assert summary.movement_remaining == 0
        assert summary.max_movement == 4
        assert summary.is_titan
        assert not summary.is_destroyed
