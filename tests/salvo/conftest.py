from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Iterator

import pytest

from salvo.game.ai.strategy import PlayerStrategy
from salvo.game.core.board import Board
from salvo.game.core.catalog import ShipCatalog, standard_catalog
from salvo.game.core.models import AttackOutcome, Direction, Point
from salvo.game.infra.logging import shutdown_logging


class ScriptedRandom(random.Random):
    """Random source whose ``random()`` replays a fixed cycle of values."""

    def __init__(self, values: Iterable[float]) -> None:
        super().__init__(0)
        self._values = list(values)
        self._index = 0

    def random(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value


class ScriptedPlayer(PlayerStrategy):
    """Player with a fixed fleet layout and a fixed list of shots."""

    def __init__(
        self,
        name: str,
        catalog: ShipCatalog,
        layout: list[tuple[Point, Direction]],
        shots: list[Point],
        *,
        human: bool = False,
        placement_ok: bool = True,
    ) -> None:
        super().__init__(name, catalog)
        self.is_human = human
        self._layout = layout
        self._shots = list(shots)
        self._placement_ok = placement_ok
        self.results: list[tuple[Point, AttackOutcome]] = []
        self.incoming: list[Point] = []

    def place_ships(self, board: Board) -> bool:
        for ship_id, (anchor, direction) in enumerate(self._layout):
            board.place_ship(anchor, ship_id, direction)
        return self._placement_ok

    def recommend_attack(self) -> Point:
        return self._shots.pop(0)

    def record_attack_result(self, point: Point, outcome: AttackOutcome) -> None:
        self.results.append((point, outcome))

    def record_opponent_attack(self, point: Point) -> None:
        self.incoming.append(point)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def catalog() -> ShipCatalog:
    return standard_catalog()


@pytest.fixture
def rowboat_catalog() -> ShipCatalog:
    small = ShipCatalog(2, 3)
    assert small.add_ship(2, "R", "rowboat")
    return small


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture
def scripted_player():
    return ScriptedPlayer


@pytest.fixture
def isolated_logging(monkeypatch, tmp_path) -> Iterator[logging.Logger]:
    """Point app data at a temp dir and restore root logging afterwards."""
    monkeypatch.setenv("SALVO_APP_DATA_DIR", str(tmp_path / "appdata"))
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    shutdown_logging()
    root.handlers[:] = handlers
    root.setLevel(level)
