"""Fleet placement routines used by the computer strategies."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from salvo.game.core.board import Board
from salvo.game.core.catalog import ShipCatalog
from salvo.game.core.models import Direction, Point, step

logger = logging.getLogger(__name__)

PLACEMENT_DIRECTIONS: tuple[Direction, Direction] = (Direction.HORIZONTAL, Direction.VERTICAL)
DEFAULT_SEARCH_ATTEMPTS = 50
DEFAULT_RANDOM_ATTEMPTS = 200


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship."""

    ship_id: int
    anchor: Point
    direction: Direction


def cells_for_placement(placement: ShipPlacement, length: int) -> list[Point]:
    """Compute occupied cells for a ship placement."""
    return [step(placement.anchor, placement.direction, offset) for offset in range(length)]


def _place_first_fit(board: Board, anchor: Point, ship_id: int) -> ShipPlacement | None:
    for direction in PLACEMENT_DIRECTIONS:
        if board.place_ship(anchor, ship_id, direction):
            return ShipPlacement(ship_id, anchor, direction)
    return None


def _rollback(board: Board, placements: list[ShipPlacement]) -> None:
    while placements:
        last = placements.pop()
        board.unplace_ship(last.anchor, last.ship_id, last.direction)


def place_cluster(board: Board, catalog: ShipCatalog) -> list[ShipPlacement] | None:
    """Stack ships horizontally down the left edge, ship k on row k."""
    placements: list[ShipPlacement] = []
    for ship in catalog:
        anchor = Point(ship.ship_id, 0)
        if not board.place_ship(anchor, ship.ship_id, Direction.HORIZONTAL):
            _rollback(board, placements)
            return None
        placements.append(ShipPlacement(ship.ship_id, anchor, Direction.HORIZONTAL))
    return placements


def search_packing(board: Board, catalog: ShipCatalog) -> list[ShipPlacement] | None:
    """Pack every catalog ship with a row-major backtracking scan.

    The committed placements double as the decision stack: running off the end of
    the grid pops the most recent ship and resumes one cell past its anchor. The
    search fails once it has to backtrack with nothing committed.
    """
    total = catalog.rows * catalog.cols
    placements: list[ShipPlacement] = []
    ship_id = 0
    position = 0
    while ship_id < len(catalog):
        if position >= total:
            if not placements:
                return None
            last = placements.pop()
            board.unplace_ship(last.anchor, last.ship_id, last.direction)
            ship_id = last.ship_id
            position = last.anchor.row * catalog.cols + last.anchor.col + 1
            continue
        anchor = Point(*divmod(position, catalog.cols))
        placement = _place_first_fit(board, anchor, ship_id)
        if placement is None:
            position += 1
            continue
        placements.append(placement)
        ship_id += 1
        position = 0
    return placements


def backtracking_fleet(
    board: Board,
    catalog: ShipCatalog,
    rng: random.Random,
    attempts: int = DEFAULT_SEARCH_ATTEMPTS,
) -> list[ShipPlacement] | None:
    """Run the packing search behind a fresh random block mask per attempt."""
    for attempt in range(1, attempts + 1):
        board.block(rng)
        try:
            placements = search_packing(board, catalog)
        finally:
            board.unblock()
        if placements is not None:
            logger.debug("packing_found attempt=%d", attempt)
            return placements
    logger.info("packing_failed attempts=%d", attempts)
    return None


def random_fleet(
    board: Board,
    catalog: ShipCatalog,
    rng: random.Random,
    attempts: int = DEFAULT_RANDOM_ATTEMPTS,
) -> list[ShipPlacement] | None:
    """Drop each ship on a random unused anchor, horizontal first.

    A ship that fits nowhere rolls the whole attempt back.
    """
    for _ in range(attempts):
        anchors = catalog.points()
        placements: list[ShipPlacement] = []
        for ship in catalog:
            rng.shuffle(anchors)
            placement = None
            for anchor in anchors:
                placement = _place_first_fit(board, anchor, ship.ship_id)
                if placement is not None:
                    anchors.remove(anchor)
                    break
            if placement is None:
                _rollback(board, placements)
                break
            placements.append(placement)
        else:
            return placements
    logger.info("random_fleet_failed attempts=%d", attempts)
    return None
