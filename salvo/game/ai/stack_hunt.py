"""Stack hunt strategy: random placement and a frontier stack seeded by hits."""

from __future__ import annotations

import random

from salvo.game.ai.strategy import QUEUED, ComputerStrategy, TargetingState
from salvo.game.core.board import Board
from salvo.game.core.catalog import ShipCatalog
from salvo.game.core.errors import report_inconsistency
from salvo.game.core.fleet import DEFAULT_RANDOM_ATTEMPTS, random_fleet
from salvo.game.core.models import AttackOutcome, Point, orthogonal_neighbors


class StackHuntStrategy(ComputerStrategy):
    """Strongest built-in opponent.

    Every hit pushes the unattacked orthogonal neighbors of the hit cell; the
    strategy keeps popping that stack and only goes back to random search once it
    is empty. Queued cells are marked so none is pushed twice.
    """

    def __init__(
        self,
        name: str,
        catalog: ShipCatalog,
        rng: random.Random,
        placement_attempts: int = DEFAULT_RANDOM_ATTEMPTS,
    ) -> None:
        super().__init__(name, catalog, rng)
        self._placement_attempts = placement_attempts
        self._state = TargetingState.SEARCH
        self._frontier: list[Point] = []

    @property
    def state(self) -> TargetingState:
        return self._state

    @property
    def frontier(self) -> tuple[Point, ...]:
        return tuple(self._frontier)

    def place_ships(self, board: Board) -> bool:
        return random_fleet(board, self._catalog, self._rng, self._placement_attempts) is not None

    def recommend_attack(self) -> Point:
        if self._state is TargetingState.SEARCH:
            return self._random_remaining()
        if not self._frontier:
            raise report_inconsistency(self._logger, f"{self._name} exploiting with an empty frontier")
        point = self._frontier.pop()
        self._remaining.discard(point)
        return point

    def record_attack_result(self, point: Point, outcome: AttackOutcome) -> None:
        if not self._record_shot(point, outcome):
            return
        if outcome.hit:
            self._queue_neighbors(point)
        self._state = TargetingState.EXPLOIT if self._frontier else TargetingState.SEARCH

    def _queue_neighbors(self, point: Point) -> None:
        for neighbor in orthogonal_neighbors(point):
            if not self._is_unknown(neighbor):
                continue
            self._history[neighbor.row, neighbor.col] = QUEUED
            self._frontier.append(neighbor)
