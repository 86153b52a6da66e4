"""Player strategy interface shared by computer and human players."""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from enum import StrEnum

import numpy as np

from salvo.game.core.board import Board
from salvo.game.core.catalog import ShipCatalog
from salvo.game.core.errors import report_inconsistency
from salvo.game.core.models import AttackOutcome, Point

UNKNOWN = 0
MISS = 1
HIT = 2
QUEUED = 3


class TargetingState(StrEnum):
    """Hunt/exploit targeting state."""

    SEARCH = "SEARCH"
    EXPLOIT = "EXPLOIT"


class PlayerStrategy(ABC):
    """Placement, targeting and feedback behavior for one side of a match.

    A strategy only ever receives its own board for placement; attacks go through
    the match, which owns the opponent board.
    """

    is_human = False

    def __init__(self, name: str, catalog: ShipCatalog) -> None:
        self._name = name
        self._catalog = catalog

    @property
    def name(self) -> str:
        return self._name

    @property
    def catalog(self) -> ShipCatalog:
        return self._catalog

    @abstractmethod
    def place_ships(self, board: Board) -> bool:
        """Place the whole catalog on ``board``; False if that was not possible."""

    @abstractmethod
    def recommend_attack(self) -> Point:
        """Return next point to attack."""

    @abstractmethod
    def record_attack_result(self, point: Point, outcome: AttackOutcome) -> None:
        """Update strategy state with the result of its own attack."""

    def record_opponent_attack(self, point: Point) -> None:
        """Observe an attack on this player's board."""
        _ = point


class ComputerStrategy(PlayerStrategy):
    """Computer player with an unshot-point pool and a shot history grid."""

    def __init__(self, name: str, catalog: ShipCatalog, rng: random.Random) -> None:
        super().__init__(name, catalog)
        self._rng = rng
        self._logger = logging.getLogger(type(self).__module__)
        self._remaining: set[Point] = set(catalog.points())
        self._history = np.full((catalog.rows, catalog.cols), UNKNOWN, dtype=np.int8)

    @property
    def remaining(self) -> frozenset[Point]:
        return frozenset(self._remaining)

    def history_at(self, point: Point) -> int:
        return int(self._history[point.row, point.col])

    def _is_unknown(self, point: Point) -> bool:
        return self._catalog.in_bounds(point) and self.history_at(point) == UNKNOWN

    def _random_remaining(self) -> Point:
        if not self._remaining:
            raise report_inconsistency(self._logger, f"{self._name} has no unattacked points left")
        point = self._rng.choice(sorted(self._remaining, key=lambda p: (p.row, p.col)))
        self._remaining.discard(point)
        return point

    def _record_shot(self, point: Point, outcome: AttackOutcome) -> bool:
        """Mark the history grid; False when the shot should never have happened."""
        if not outcome.valid or not self._catalog.in_bounds(point):
            self._logger.error(
                "invalid_shot_reported player=%s point=(%d, %d) result=%s",
                self._name,
                point.row,
                point.col,
                outcome.result.value,
            )
            return False
        self._remaining.discard(point)
        self._history[point.row, point.col] = HIT if outcome.hit else MISS
        return True
