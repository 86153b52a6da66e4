"""Board state representation and mutation helpers."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

import numpy as np

from salvo.game.core.catalog import ShipCatalog
from salvo.game.core.models import (
    EMPTY_GLYPH,
    HIT_GLYPH,
    MISS_GLYPH,
    AttackOutcome,
    Direction,
    Point,
    ShotResult,
    step,
)

EMPTY_CELL = -1
BLOCKED_CELL = -2

SHOT_NONE = 0
SHOT_MISS = 1
SHOT_HIT = 2


@dataclass(slots=True)
class Board:
    """Numpy-backed board state.

    ``ships`` holds a ship id per occupied cell, ``EMPTY_CELL`` for open water and
    ``BLOCKED_CELL`` for cells masked during a placement search. ``ship_health``
    only lists ships that still have a live segment.
    """

    catalog: ShipCatalog
    ships: np.ndarray = field(init=False)
    shots: np.ndarray = field(init=False)
    ship_health: dict[int, int] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        shape = (self.catalog.rows, self.catalog.cols)
        self.ships = np.full(shape, EMPTY_CELL, dtype=np.int16)
        self.shots = np.zeros(shape, dtype=np.int8)

    @property
    def rows(self) -> int:
        return self.catalog.rows

    @property
    def cols(self) -> int:
        return self.catalog.cols

    def in_bounds(self, point: Point) -> bool:
        """Return whether the coordinate is in board bounds."""
        return self.catalog.in_bounds(point)

    def clear(self) -> None:
        """Reset the board to open water with no shots taken."""
        self.ships.fill(EMPTY_CELL)
        self.shots.fill(SHOT_NONE)
        self.ship_health.clear()

    def block(self, rng: random.Random, probability: float = 0.5) -> int:
        """Mask random open cells so a placement search sees them as occupied."""
        blocked = 0
        for row in range(self.rows):
            for col in range(self.cols):
                if self.ships[row, col] != EMPTY_CELL:
                    continue
                if rng.random() < probability:
                    self.ships[row, col] = BLOCKED_CELL
                    blocked += 1
        return blocked

    def unblock(self) -> None:
        """Drop every placement mask, leaving placed ships alone."""
        self.ships[self.ships == BLOCKED_CELL] = EMPTY_CELL

    def is_placed(self, ship_id: int) -> bool:
        return ship_id in self.ship_health

    def placed_count(self) -> int:
        return len(self.ship_health)

    def health(self, ship_id: int) -> int:
        """Remaining live segments, 0 for ships that are destroyed or absent."""
        return self.ship_health.get(ship_id, 0)

    def total_health(self) -> int:
        return sum(self.ship_health.values())

    def _extent(self, anchor: Point, ship_id: int, direction: Direction) -> list[Point] | None:
        if not self.catalog.has_ship(ship_id):
            return None
        if not self.in_bounds(anchor):
            return None
        length = self.catalog.ship(ship_id).length
        cells = [step(anchor, direction, offset) for offset in range(length)]
        if not self.in_bounds(cells[-1]):
            return None
        return cells

    def can_place(self, anchor: Point, ship_id: int, direction: Direction) -> bool:
        """Return whether a placement is valid and non-overlapping."""
        if self.is_placed(ship_id):
            return False
        cells = self._extent(anchor, ship_id, direction)
        if cells is None:
            return False
        return all(self.ships[cell.row, cell.col] == EMPTY_CELL for cell in cells)

    def place_ship(self, anchor: Point, ship_id: int, direction: Direction) -> bool:
        """Place a ship from its anchor, returning False without mutating on rejection."""
        if not self.can_place(anchor, ship_id, direction):
            return False
        length = self.catalog.ship(ship_id).length
        for offset in range(length):
            cell = step(anchor, direction, offset)
            self.ships[cell.row, cell.col] = ship_id
        self.ship_health[ship_id] = length
        return True

    def unplace_ship(self, anchor: Point, ship_id: int, direction: Direction) -> bool:
        """Remove a ship placed from exactly this anchor and direction."""
        cells = self._extent(anchor, ship_id, direction)
        if cells is None or not self.is_placed(ship_id):
            return False
        for cell in cells:
            if self.ships[cell.row, cell.col] != ship_id:
                return False
            if self.shots[cell.row, cell.col] != SHOT_NONE:
                return False
        for cell in cells:
            self.ships[cell.row, cell.col] = EMPTY_CELL
        del self.ship_health[ship_id]
        return True

    def was_attacked(self, point: Point) -> bool:
        """Return whether this cell was previously targeted."""
        return self.shots[point.row, point.col] != SHOT_NONE

    def attack(self, point: Point) -> AttackOutcome:
        """Apply a shot and report what it struck."""
        if not self.in_bounds(point):
            return AttackOutcome(ShotResult.INVALID)
        if self.was_attacked(point):
            return AttackOutcome(ShotResult.REPEAT)

        ship_id = int(self.ships[point.row, point.col])
        if ship_id < 0:
            self.shots[point.row, point.col] = SHOT_MISS
            return AttackOutcome(ShotResult.MISS)

        self.shots[point.row, point.col] = SHOT_HIT
        self.ship_health[ship_id] -= 1
        if self.ship_health[ship_id] == 0:
            del self.ship_health[ship_id]
            return AttackOutcome(ShotResult.DESTROYED, ship_id)
        return AttackOutcome(ShotResult.HIT, ship_id)

    def all_destroyed(self) -> bool:
        """Return whether no placed ship has a live segment left.

        A board nobody placed ships on is vacuously destroyed.
        """
        return not self.ship_health

    def snapshot(self, *, shots_only: bool = False) -> list[list[str]]:
        """Glyph grid for rendering; ``shots_only`` hides unhit ship segments."""
        grid: list[list[str]] = []
        for row in range(self.rows):
            line: list[str] = []
            for col in range(self.cols):
                shot = self.shots[row, col]
                occupant = int(self.ships[row, col])
                if shot == SHOT_HIT:
                    line.append(HIT_GLYPH)
                elif shot == SHOT_MISS:
                    line.append(MISS_GLYPH)
                elif occupant < 0 or shots_only:
                    line.append(EMPTY_GLYPH)
                else:
                    line.append(self.catalog.ship(occupant).symbol)
            grid.append(line)
        return grid

    def render(self, *, shots_only: bool = False) -> str:
        """Text rendering with row and column indices."""
        header = "  " + "".join(str(col) for col in range(self.cols))
        lines = [header]
        for row, cells in enumerate(self.snapshot(shots_only=shots_only)):
            lines.append(f"{row} " + "".join(cells))
        return "\n".join(lines)
