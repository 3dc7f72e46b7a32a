"""
Movement rules and pathfinding for the Titan Hunt rules engine.

Two searches share one passability model:
- find_reachable: uniform-cost flood from a unit's position within its budget
- find_path: A* to a single target hex under a budget

Units may pass through friendly units but never end a move on any other
unit. Entry cost depends only on the destination tile's terrain.
"""

import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .hex import Facing, HexCoord
from .map import GameMap, TerrainType
from .units import Unit

if TYPE_CHECKING:
    from .turn import GameState

logger = logging.getLogger(__name__)


@dataclass
class MovementPath:
    """A planned move: hexes from start to end, facing on arrival, total cost."""
    path: list[HexCoord]
    final_facing: Facing
    total_cost: int

    def is_valid(self) -> bool:
        return bool(self.path)

    @property
    def start(self) -> Optional[HexCoord]:
        return self.path[0] if self.path else None

    @property
    def end(self) -> Optional[HexCoord]:
        return self.path[-1] if self.path else None


@dataclass
class MovementResult:
    """Movement range plus, optionally, the path to one requested hex."""
    reachable: dict[HexCoord, int] = field(default_factory=dict)
    path: Optional[list[HexCoord]] = None
    path_cost: int = 0


def movement_cost(game_map: GameMap, from_hex: HexCoord, to_hex: HexCoord) -> Optional[int]:
    """Cost of stepping from from_hex into the adjacent to_hex, None if impassable."""
    return game_map.movement_cost(to_hex)


def is_blocked(state: "GameState", coord: HexCoord, moving_unit_id: int) -> bool:
    """True if the moving unit cannot end its move on coord."""
    if not state.map.is_valid(coord):
        return True
    if state.map.terrain_at(coord) == TerrainType.IMPASSABLE:
        return True

    occupant = state.unit_at(coord)
    if occupant is not None and occupant.id != moving_unit_id:
        return True
    return False


def can_pass_through(state: "GameState", coord: HexCoord, moving_unit: Unit) -> bool:
    """True if the moving unit may enter coord on its way somewhere else."""
    if not state.map.is_valid(coord):
        return False
    if state.map.terrain_at(coord) == TerrainType.IMPASSABLE:
        return False

    occupant = state.unit_at(coord)
    if occupant is None or occupant.id == moving_unit.id:
        return True
    # Friendly units can be moved through, enemies cannot
    return occupant.owner == moving_unit.owner


def find_reachable(state: "GameState", unit: Unit) -> dict[HexCoord, int]:
    """Every hex the unit can stop on, mapped to the movement points left there."""
    start = unit.position
    budget = unit.effective_movement()

    reachable: dict[HexCoord, int] = {}
    visited: set[HexCoord] = set()
    frontier = [(0, start)]

    while frontier:
        cost, current = heapq.heappop(frontier)
        if current in visited:
            continue
        visited.add(current)
        reachable[current] = max(0, budget - cost)

        for neighbor in current.neighbors():
            if neighbor in visited:
                continue
            if not can_pass_through(state, neighbor, unit):
                continue

            step = movement_cost(state.map, current, neighbor)
            if step is None:
                continue

            new_cost = cost + step
            if new_cost <= budget:
                heapq.heappush(frontier, (new_cost, neighbor))

    # Hexes held by friendly units were only reachable to pass through
    result = {
        coord: remaining
        for coord, remaining in reachable.items()
        if coord == start or not is_blocked(state, coord, unit.id)
    }
    logger.debug(f"Unit {unit.id}: {len(result)} reachable hexes with budget {budget}")
    return result


def find_path(
    state: "GameState",
    unit: Unit,
    target: HexCoord,
    max_cost: Optional[int] = None,
) -> Optional[tuple[list[HexCoord], int]]:
    """Cheapest path from the unit to target using A*.

    Returns (path, cost) with both endpoints in the path, or None when the
    target cannot be reached within the budget. The budget defaults to the
    unit's remaining movement.
    """
    start = unit.position
    budget = unit.effective_movement() if max_cost is None else max_cost

    if start == target:
        return [start], 0

    if is_blocked(state, target, unit.id):
        return None

    open_set = [(start.distance_to(target), 0, start)]
    came_from: dict[HexCoord, HexCoord] = {}
    g_score: dict[HexCoord, int] = {start: 0}

    while open_set:
        _, cost, current = heapq.heappop(open_set)

        if current == target:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return path, g_score[target]

        if cost > g_score[current]:
            continue

        for neighbor in current.neighbors():
            if not can_pass_through(state, neighbor, unit):
                continue

            step = movement_cost(state.map, current, neighbor)
            if step is None:
                continue

            tentative_g = cost + step
            if tentative_g > budget:
                continue

            if neighbor not in g_score or tentative_g < g_score[neighbor]:
                came_from[neighbor] = current
                g_score[neighbor] = tentative_g
                f_score = tentative_g + neighbor.distance_to(target)
                heapq.heappush(open_set, (f_score, tentative_g, neighbor))

    return None


def path_cost(state: "GameState", unit: Unit, path: list[HexCoord]) -> Optional[int]:
    """Cost of walking a caller-supplied path, or None if any step is illegal.

    The path must start on the unit's hex and advance one adjacent,
    passable hex at a time.
    """
    if not path or path[0] != unit.position:
        return None

    total = 0
    for current, nxt in zip(path, path[1:]):
        if not current.is_adjacent(nxt):
            return None
        if not can_pass_through(state, nxt, unit):
            return None
        step = movement_cost(state.map, current, nxt)
        if step is None:
            return None
        total += step
    return total


def suggest_facing(from_hex: HexCoord, to_hex: HexCoord) -> Facing:
    """Facing for a unit after stepping from from_hex to to_hex."""
    return from_hex.direction_to(to_hex) or Facing.EAST


def plan_move(state: "GameState", unit: Unit, target: HexCoord) -> Optional[MovementPath]:
    """Shortest legal move to target, facing along the last step."""
    found = find_path(state, unit, target)
    if found is None:
        return None

    path, cost = found
    if len(path) > 1:
        facing = suggest_facing(path[-2], path[-1])
    else:
        facing = unit.facing
    return MovementPath(path=path, final_facing=facing, total_cost=cost)


def plot_movement(state: "GameState", unit: Unit, target: Optional[HexCoord] = None) -> MovementResult:
    """Movement range for the unit, plus the path to target if one is given."""
    result = MovementResult(reachable=find_reachable(state, unit))
    if target is not None:
        found = find_path(state, unit, target)
        if found is not None:
            result.path, result.path_cost = found
    return result
