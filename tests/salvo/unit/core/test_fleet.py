import logging
import random

import numpy as np

from salvo.game.core.board import BLOCKED_CELL, EMPTY_CELL, Board
from salvo.game.core.catalog import ShipCatalog, fitted_standard_catalog
from salvo.game.core.fleet import (
    ShipPlacement,
    backtracking_fleet,
    cells_for_placement,
    place_cluster,
    random_fleet,
    search_packing,
)
from salvo.game.core.models import Direction, Point


def _center_blocked_board(scripted_random) -> tuple[Board, ShipCatalog]:
    catalog = fitted_standard_catalog(3, 3)
    board = Board(catalog)
    board.block(scripted_random([0.9] * 4 + [0.0] + [0.9] * 4))
    assert board.ships[1, 1] == BLOCKED_CELL
    return board, catalog


def test_cells_for_placement() -> None:
    placement = ShipPlacement(0, Point(2, 1), Direction.VERTICAL)
    assert cells_for_placement(placement, 3) == [Point(2, 1), Point(3, 1), Point(4, 1)]


def test_place_cluster_stacks_ships_on_left_edge(catalog) -> None:
    board = Board(catalog)
    placements = place_cluster(board, catalog)
    assert placements is not None
    assert [p.anchor for p in placements] == [Point(k, 0) for k in range(len(catalog))]
    assert all(p.direction is Direction.HORIZONTAL for p in placements)
    assert board.placed_count() == len(catalog)


def test_place_cluster_rolls_back_when_rows_run_out() -> None:
    catalog = ShipCatalog(2, 5)
    for symbol in "ABC":
        catalog.add_ship(1, symbol, symbol)
    board = Board(catalog)
    assert place_cluster(board, catalog) is None
    assert board.placed_count() == 0
    assert np.all(board.ships == EMPTY_CELL)


def test_search_packing_backtracks_past_a_dead_end() -> None:
    catalog = ShipCatalog(3, 2)
    catalog.add_ship(2, "M", "medium")
    catalog.add_ship(3, "L", "long")
    board = Board(catalog)
    placements = search_packing(board, catalog)
    assert placements == [
        ShipPlacement(0, Point(0, 1), Direction.VERTICAL),
        ShipPlacement(1, Point(0, 0), Direction.VERTICAL),
    ]
    assert board.placed_count() == 2


def test_search_packing_reports_infeasible_board(scripted_random) -> None:
    board, catalog = _center_blocked_board(scripted_random)
    assert search_packing(board, catalog) is None
    assert board.placed_count() == 0


def test_backtracking_fleet_without_blocks_is_deterministic(catalog, scripted_random) -> None:
    board = Board(catalog)
    placements = backtracking_fleet(board, catalog, scripted_random([0.9]))
    assert placements is not None
    assert placements[0] == ShipPlacement(0, Point(0, 0), Direction.HORIZONTAL)
    assert placements[1] == ShipPlacement(1, Point(0, 5), Direction.HORIZONTAL)
    assert board.placed_count() == len(catalog)
    assert not np.any(board.ships == BLOCKED_CELL)


def test_backtracking_fleet_gives_up_with_clean_board(catalog, scripted_random, caplog) -> None:
    board = Board(catalog)
    with caplog.at_level(logging.INFO, logger="salvo.game.core.fleet"):
        assert backtracking_fleet(board, catalog, scripted_random([0.0]), attempts=3) is None
    assert np.all(board.ships == EMPTY_CELL)
    assert "packing_failed attempts=3" in caplog.text


def test_backtracking_fleet_with_seeded_blocks(catalog, seeded_rng) -> None:
    board = Board(catalog)
    placements = backtracking_fleet(board, catalog, seeded_rng)
    assert placements is not None
    assert int(np.count_nonzero(board.ships >= 0)) == catalog.total_cells
    assert not np.any(board.ships == BLOCKED_CELL)


def test_random_fleet_places_every_ship(catalog) -> None:
    board = Board(catalog)
    placements = random_fleet(board, catalog, random.Random(7))
    assert placements is not None
    assert [p.ship_id for p in placements] == list(range(len(catalog)))
    assert board.total_health() == catalog.total_cells
    anchors = [p.anchor for p in placements]
    assert len(set(anchors)) == len(anchors)


def test_random_fleet_gives_up_after_attempts(scripted_random) -> None:
    board, catalog = _center_blocked_board(scripted_random)
    assert random_fleet(board, catalog, random.Random(3), attempts=5) is None
    assert board.placed_count() == 0


def test_search_packing_results_are_always_legal() -> None:
    catalog = fitted_standard_catalog(8, 8)
    rng = random.Random(2024)
    found = 0
    for _ in range(25):
        board = Board(catalog)
        board.block(rng, probability=0.3)
        placements = search_packing(board, catalog)
        board.unblock()
        if placements is None:
            assert board.placed_count() == 0
            continue
        found += 1
        cells = [
            cell
            for placement in placements
            for cell in cells_for_placement(placement, catalog.ship(placement.ship_id).length)
        ]
        assert len(cells) == len(set(cells)) == catalog.total_cells
        assert all(catalog.in_bounds(cell) for cell in cells)
        assert board.placed_count() == len(catalog)
    assert found > 0
