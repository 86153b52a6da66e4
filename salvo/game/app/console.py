"""Console adapter: text prompts for human players and turn rendering."""

from __future__ import annotations

import re
from collections.abc import Callable

from salvo.game.app.services.battle import TurnEvent
from salvo.game.core.models import Direction, Point, ShipDef

POINT_RE = re.compile(r"^\s*(-?\d+)\s+(-?\d+)\s*$")


def parse_point(text: str) -> Point | None:
    """Parse ``"row col"`` into a point, or None when malformed."""
    match = POINT_RE.match(text)
    if match is None:
        return None
    return Point(int(match.group(1)), int(match.group(2)))


def parse_direction(text: str) -> Direction | None:
    value = text.strip().lower()
    if value == "h":
        return Direction.HORIZONTAL
    if value == "v":
        return Direction.VERTICAL
    return None


class ConsoleInput:
    """Human input over line-oriented read/write callables."""

    def __init__(
        self,
        read_line: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ) -> None:
        self._read_line = read_line
        self._write = write

    def show(self, message: str) -> None:
        self._write(message)

    def choose_direction(self, ship: ShipDef) -> Direction:
        while True:
            reply = self._read_line(f"Enter h or v for direction of {ship.name} (length {ship.length}): ")
            direction = parse_direction(reply)
            if direction is not None:
                return direction
            self._write("Direction must be h or v.")

    def choose_anchor(self, ship: ShipDef, direction: Direction) -> Point:
        end = "topmost" if direction is Direction.VERTICAL else "leftmost"
        return self._read_point(f"Enter row and column of {end} cell (e.g. 3 5): ")

    def choose_target(self) -> Point:
        return self._read_point("Enter the row and column to attack (e.g. 3 5): ")

    def _read_point(self, prompt: str) -> Point:
        while True:
            point = parse_point(self._read_line(prompt))
            if point is not None:
                return point
            self._write("You must enter two integers.")


class ConsoleRenderer:
    """Prints each resolved turn, optionally waiting for enter in between."""

    def __init__(
        self,
        write: Callable[[str], None] = print,
        pause: Callable[[str], str] | None = None,
    ) -> None:
        self._write = write
        self._pause = pause

    def __call__(self, event: TurnEvent) -> None:
        self._write(f"{event.attacker}'s turn. Board for {event.defender}:")
        self._write(event.message)
        self._write(event.board_view)
        if self._pause is not None:
            self._pause("Press enter to continue: ")
