"""Cluster strategy: fixed placement and a deterministic sweep."""

from __future__ import annotations

import random

from salvo.game.ai.strategy import ComputerStrategy
from salvo.game.core.board import Board
from salvo.game.core.catalog import ShipCatalog
from salvo.game.core.fleet import place_cluster
from salvo.game.core.models import AttackOutcome, Point


class ClusterStrategy(ComputerStrategy):
    """Weakest opponent: ships packed on the left edge, attacks sweep bottom-up."""

    def __init__(self, name: str, catalog: ShipCatalog, rng: random.Random) -> None:
        super().__init__(name, catalog, rng)
        self._cursor = Point(0, 0)

    def place_ships(self, board: Board) -> bool:
        return place_cluster(board, self._catalog) is not None

    def recommend_attack(self) -> Point:
        # Walks right to left, bottom row first, wrapping from (0, 0) to the
        # bottom-right corner.
        row, col = self._cursor.row, self._cursor.col
        if col > 0:
            col -= 1
        else:
            col = self._catalog.cols - 1
            row = row - 1 if row > 0 else self._catalog.rows - 1
        self._cursor = Point(row, col)
        return self._cursor

    def record_attack_result(self, point: Point, outcome: AttackOutcome) -> None:
        self._record_shot(point, outcome)
