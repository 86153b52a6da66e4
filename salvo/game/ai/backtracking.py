"""Backtracking strategy: masked packing search plus a random hunt/exploit targeter."""

from __future__ import annotations

import random

from salvo.game.ai.strategy import ComputerStrategy, TargetingState
from salvo.game.core.board import Board
from salvo.game.core.catalog import ShipCatalog
from salvo.game.core.fleet import DEFAULT_SEARCH_ATTEMPTS, backtracking_fleet
from salvo.game.core.models import AttackOutcome, Point

EXPLOIT_REACH = 4


class BacktrackingStrategy(ComputerStrategy):
    """Mid-strength opponent.

    After a hit that does not destroy a ship it shoots at random among unattacked
    cells up to four steps away along the row and column of that hit, until the
    list runs out or some ship goes down.
    """

    def __init__(
        self,
        name: str,
        catalog: ShipCatalog,
        rng: random.Random,
        placement_attempts: int = DEFAULT_SEARCH_ATTEMPTS,
    ) -> None:
        super().__init__(name, catalog, rng)
        self._placement_attempts = placement_attempts
        self._state = TargetingState.SEARCH
        self._last_hit: Point | None = None
        self._candidates: list[Point] = []
        self._needs_rebuild = False

    @property
    def state(self) -> TargetingState:
        return self._state

    @property
    def candidates(self) -> tuple[Point, ...]:
        return tuple(self._candidates)

    def place_ships(self, board: Board) -> bool:
        placements = backtracking_fleet(board, self._catalog, self._rng, self._placement_attempts)
        return placements is not None

    def recommend_attack(self) -> Point:
        if self._state is TargetingState.EXPLOIT:
            if self._needs_rebuild and self._last_hit is not None:
                self._rebuild_candidates(self._last_hit)
            self._candidates = [point for point in self._candidates if point in self._remaining]
            if self._candidates:
                point = self._rng.choice(self._candidates)
                self._candidates.remove(point)
                self._remaining.discard(point)
                if not self._candidates:
                    self._state = TargetingState.SEARCH
                return point
            self._state = TargetingState.SEARCH
        return self._random_remaining()

    def record_attack_result(self, point: Point, outcome: AttackOutcome) -> None:
        if not self._record_shot(point, outcome):
            return
        if self._state is TargetingState.SEARCH:
            if outcome.hit and not outcome.destroyed:
                self._state = TargetingState.EXPLOIT
                self._last_hit = point
                self._needs_rebuild = True
        elif outcome.destroyed:
            self._state = TargetingState.SEARCH

    def _rebuild_candidates(self, origin: Point) -> None:
        self._candidates = []
        for distance in range(1, EXPLOIT_REACH + 1):
            for point in (
                Point(origin.row - distance, origin.col),
                Point(origin.row + distance, origin.col),
                Point(origin.row, origin.col - distance),
                Point(origin.row, origin.col + distance),
            ):
                if self._is_unknown(point):
                    self._candidates.append(point)
        self._needs_rebuild = False
