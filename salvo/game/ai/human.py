"""Human player driven through an input port."""

from __future__ import annotations

from typing import Protocol

from salvo.game.ai.strategy import PlayerStrategy
from salvo.game.core.board import Board
from salvo.game.core.catalog import ShipCatalog
from salvo.game.core.models import AttackOutcome, Direction, Point, ShipDef


class HumanInput(Protocol):
    """Prompts a person for placement and targeting choices."""

    def show(self, message: str) -> None: ...

    def choose_direction(self, ship: ShipDef) -> Direction: ...

    def choose_anchor(self, ship: ShipDef, direction: Direction) -> Point: ...

    def choose_target(self) -> Point: ...


class HumanStrategy(PlayerStrategy):
    """Relays choices from a person; the board does all the validation."""

    is_human = True

    def __init__(self, name: str, catalog: ShipCatalog, human_input: HumanInput) -> None:
        super().__init__(name, catalog)
        self._input = human_input

    def place_ships(self, board: Board) -> bool:
        total = len(self._catalog)
        for ship in self._catalog:
            left = total - ship.ship_id
            self._input.show(f"{self._name} must place {left} ship{'s' if left > 1 else ''}.")
            self._input.show(board.render())
            direction = self._input.choose_direction(ship)
            while not board.place_ship(self._input.choose_anchor(ship, direction), ship.ship_id, direction):
                self._input.show("The ship cannot be placed there.")
        return True

    def recommend_attack(self) -> Point:
        return self._input.choose_target()

    def record_attack_result(self, point: Point, outcome: AttackOutcome) -> None:
        _ = (point, outcome)
