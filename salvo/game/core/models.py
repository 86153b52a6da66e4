"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

MAX_ROWS = 10
MAX_COLS = 10

EMPTY_GLYPH = "."
MISS_GLYPH = "o"
HIT_GLYPH = "X"
RESERVED_GLYPHS: frozenset[str] = frozenset({EMPTY_GLYPH, MISS_GLYPH, HIT_GLYPH})


class Direction(StrEnum):
    """Ship direction measured from its anchor."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class ShotResult(StrEnum):
    """Result of a single attack."""

    MISS = "MISS"
    HIT = "HIT"
    DESTROYED = "DESTROYED"
    REPEAT = "REPEAT"
    INVALID = "INVALID"


@dataclass(frozen=True, slots=True)
class Point:
    """Board coordinate."""

    row: int
    col: int


@dataclass(frozen=True, slots=True)
class ShipDef:
    """Catalog entry for one ship."""

    ship_id: int
    length: int
    symbol: str
    name: str


@dataclass(frozen=True, slots=True)
class AttackOutcome:
    """What an attack did to a board.

    ``ship_id`` is set whenever a ship segment was struck, so a destroyed ship can
    be reported by name.
    """

    result: ShotResult
    ship_id: int | None = None

    @property
    def valid(self) -> bool:
        return self.result not in (ShotResult.INVALID, ShotResult.REPEAT)

    @property
    def hit(self) -> bool:
        return self.result in (ShotResult.HIT, ShotResult.DESTROYED)

    @property
    def destroyed(self) -> bool:
        return self.result is ShotResult.DESTROYED


def step(point: Point, direction: Direction, offset: int) -> Point:
    """Return the point ``offset`` cells away from ``point`` along ``direction``."""
    if direction is Direction.HORIZONTAL:
        return Point(point.row, point.col + offset)
    return Point(point.row + offset, point.col)


def orthogonal_neighbors(point: Point) -> tuple[Point, Point, Point, Point]:
    """Up, down, left, right neighbors, in that order."""
    return (
        Point(point.row - 1, point.col),
        Point(point.row + 1, point.col),
        Point(point.row, point.col - 1),
        Point(point.row, point.col + 1),
    )


class MatchPhase(StrEnum):
    """Lifecycle of a match."""

    AWAITING_PLACEMENT = "AWAITING_PLACEMENT"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"
