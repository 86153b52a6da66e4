"""Board dimensions and the ordered ship roster for a match."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from salvo.game.core.models import MAX_COLS, MAX_ROWS, RESERVED_GLYPHS, Point, ShipDef

logger = logging.getLogger(__name__)

STANDARD_SHIPS: tuple[tuple[int, str, str], ...] = (
    (5, "A", "aircraft carrier"),
    (4, "B", "battleship"),
    (3, "D", "destroyer"),
    (3, "S", "submarine"),
    (2, "P", "patrol boat"),
)


class ShipCatalog:
    """Read-mostly catalog shared by boards and strategies.

    Ship ids are assigned densely in registration order; that order is also the
    order strategies place ships in.
    """

    def __init__(self, rows: int, cols: int) -> None:
        if not 1 <= rows <= MAX_ROWS:
            raise ValueError(f"Number of rows must be >= 1 and <= {MAX_ROWS}, got {rows}.")
        if not 1 <= cols <= MAX_COLS:
            raise ValueError(f"Number of columns must be >= 1 and <= {MAX_COLS}, got {cols}.")
        self._rows = rows
        self._cols = cols
        self._ships: list[ShipDef] = []

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def ships(self) -> tuple[ShipDef, ...]:
        return tuple(self._ships)

    @property
    def total_cells(self) -> int:
        """Sum of all registered ship lengths."""
        return sum(ship.length for ship in self._ships)

    def __len__(self) -> int:
        return len(self._ships)

    def __iter__(self) -> Iterator[ShipDef]:
        return iter(self._ships)

    def ship(self, ship_id: int) -> ShipDef:
        if not 0 <= ship_id < len(self._ships):
            raise IndexError(f"unknown ship id {ship_id}")
        return self._ships[ship_id]

    def has_ship(self, ship_id: int) -> bool:
        return 0 <= ship_id < len(self._ships)

    def in_bounds(self, point: Point) -> bool:
        """Return whether the point lies on the board."""
        return 0 <= point.row < self._rows and 0 <= point.col < self._cols

    def points(self) -> list[Point]:
        """Every board point in row-major order."""
        return [Point(r, c) for r in range(self._rows) for c in range(self._cols)]

    def validate_ship(self, length: int, symbol: str) -> tuple[bool, str]:
        """Check whether a ship could be registered."""
        if length < 1:
            return False, f"Bad ship length {length}; it must be >= 1."
        if length > self._rows and length > self._cols:
            return False, f"Bad ship length {length}; it won't fit on the board."
        if len(symbol) != 1 or not symbol.isascii() or not symbol.isprintable():
            return False, f"Unprintable ship symbol {symbol!r} must not be used."
        if symbol in RESERVED_GLYPHS:
            return False, f"Character {symbol} must not be used as a ship symbol."
        if any(ship.symbol == symbol for ship in self._ships):
            return False, f"Ship symbol {symbol} must not be used for more than one ship."
        if self.total_cells + length > self._rows * self._cols:
            return False, "Board is too small to fit all ships."
        return True, ""

    def add_ship(self, length: int, symbol: str, name: str) -> bool:
        """Register a ship, returning False with a logged reason if it is rejected."""
        valid, reason = self.validate_ship(length, symbol)
        if not valid:
            logger.warning("ship_rejected name=%s reason=%s", name, reason)
            return False
        self._ships.append(ShipDef(len(self._ships), length, symbol, name))
        return True


def standard_catalog(rows: int = MAX_ROWS, cols: int = MAX_COLS) -> ShipCatalog:
    """Create a catalog holding the classic five-ship fleet."""
    catalog = ShipCatalog(rows, cols)
    for length, symbol, name in STANDARD_SHIPS:
        if not catalog.add_ship(length, symbol, name):
            raise ValueError(f"Standard fleet does not fit a {rows}x{cols} board.")
    return catalog


def fitted_standard_catalog(rows: int, cols: int) -> ShipCatalog:
    """Create a catalog with as many standard ships as the board accepts."""
    catalog = ShipCatalog(rows, cols)
    for length, symbol, name in STANDARD_SHIPS:
        if catalog.validate_ship(length, symbol)[0]:
            catalog.add_ship(length, symbol, name)
    return catalog
