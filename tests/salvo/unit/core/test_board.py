import numpy as np
import pytest

from salvo.game.core.board import BLOCKED_CELL, EMPTY_CELL, Board
from salvo.game.core.catalog import ShipCatalog
from salvo.game.core.models import Direction, Point, ShotResult


def _copy(board: Board) -> tuple[np.ndarray, np.ndarray, dict[int, int]]:
    return board.ships.copy(), board.shots.copy(), dict(board.ship_health)


def _assert_unchanged(board: Board, before: tuple[np.ndarray, np.ndarray, dict[int, int]]) -> None:
    ships, shots, health = before
    assert np.array_equal(board.ships, ships)
    assert np.array_equal(board.shots, shots)
    assert board.ship_health == health


def test_place_ship_marks_cells_and_health(catalog) -> None:
    board = Board(catalog)
    assert board.place_ship(Point(2, 3), 1, Direction.VERTICAL)
    assert [int(board.ships[r, 3]) for r in range(2, 6)] == [1, 1, 1, 1]
    assert board.health(1) == 4
    assert board.is_placed(1)


@pytest.mark.parametrize(
    ("anchor", "ship_id", "direction"),
    [
        (Point(0, 0), -1, Direction.HORIZONTAL),
        (Point(0, 0), 5, Direction.HORIZONTAL),
        (Point(-1, 0), 0, Direction.HORIZONTAL),
        (Point(0, 10), 4, Direction.HORIZONTAL),
        (Point(0, 6), 0, Direction.HORIZONTAL),
        (Point(6, 0), 0, Direction.VERTICAL),
    ],
)
def test_place_ship_rejections_leave_board_untouched(catalog, anchor, ship_id, direction) -> None:
    board = Board(catalog)
    before = _copy(board)
    assert not board.place_ship(anchor, ship_id, direction)
    _assert_unchanged(board, before)


def test_place_ship_rejects_already_placed_ship(catalog) -> None:
    board = Board(catalog)
    assert board.place_ship(Point(0, 0), 4, Direction.HORIZONTAL)
    assert not board.place_ship(Point(5, 5), 4, Direction.HORIZONTAL)


def test_overlapping_placement_is_rejected(catalog) -> None:
    board = Board(catalog)
    assert board.place_ship(Point(4, 2), 0, Direction.HORIZONTAL)
    after_first = _copy(board)
    assert not board.place_ship(Point(2, 4), 1, Direction.VERTICAL)
    _assert_unchanged(board, after_first)


def test_unplace_round_trip_restores_board(catalog) -> None:
    board = Board(catalog)
    board.place_ship(Point(9, 0), 4, Direction.HORIZONTAL)
    before = _copy(board)
    assert board.place_ship(Point(3, 3), 2, Direction.VERTICAL)
    assert board.unplace_ship(Point(3, 3), 2, Direction.VERTICAL)
    _assert_unchanged(board, before)


def test_unplace_requires_exact_anchor_and_direction(catalog) -> None:
    board = Board(catalog)
    board.place_ship(Point(3, 3), 2, Direction.HORIZONTAL)
    assert not board.unplace_ship(Point(3, 4), 2, Direction.HORIZONTAL)
    assert not board.unplace_ship(Point(3, 3), 2, Direction.VERTICAL)
    assert not board.unplace_ship(Point(3, 3), 1, Direction.HORIZONTAL)
    assert not board.unplace_ship(Point(3, 9), 2, Direction.HORIZONTAL)
    assert board.is_placed(2)


def test_unplace_rejects_ship_that_was_hit(catalog) -> None:
    board = Board(catalog)
    board.place_ship(Point(0, 0), 4, Direction.HORIZONTAL)
    board.attack(Point(0, 1))
    assert not board.unplace_ship(Point(0, 0), 4, Direction.HORIZONTAL)


def test_attack_miss_hit_destroy_and_repeat(catalog) -> None:
    board = Board(catalog)
    board.place_ship(Point(1, 1), 4, Direction.HORIZONTAL)

    miss = board.attack(Point(0, 0))
    assert miss.result is ShotResult.MISS and miss.ship_id is None
    repeat = board.attack(Point(0, 0))
    assert repeat.result is ShotResult.REPEAT and not repeat.valid

    hit = board.attack(Point(1, 1))
    assert hit.result is ShotResult.HIT and hit.ship_id == 4
    assert board.health(4) == 1
    sunk = board.attack(Point(1, 2))
    assert sunk.result is ShotResult.DESTROYED and sunk.ship_id == 4
    assert not board.is_placed(4)
    assert board.all_destroyed()
    assert board.attack(Point(1, 2)).result is ShotResult.REPEAT


@pytest.mark.parametrize("point", [Point(10, 10), Point(-1, 0), Point(0, -1), Point(10, 0)])
def test_attack_outside_board_fails_without_mutation(catalog, point) -> None:
    board = Board(catalog)
    board.place_ship(Point(0, 0), 0, Direction.HORIZONTAL)
    before = _copy(board)
    outcome = board.attack(point)
    assert outcome.result is ShotResult.INVALID
    assert outcome.ship_id is None
    _assert_unchanged(board, before)


def test_attack_checks_columns_against_column_count() -> None:
    # A column bound taken from the row count would reject (0, 5) on the wide
    # board and let (0, 3) through on the tall one.
    wide = ShipCatalog(3, 6)
    wide.add_ship(2, "P", "patrol boat")
    board = Board(wide)
    assert board.attack(Point(0, 5)).valid
    assert board.attack(Point(0, 6)).result is ShotResult.INVALID
    assert board.attack(Point(3, 0)).result is ShotResult.INVALID

    tall = ShipCatalog(6, 3)
    tall.add_ship(2, "P", "patrol boat")
    board = Board(tall)
    assert board.attack(Point(5, 0)).valid
    assert board.attack(Point(0, 3)).result is ShotResult.INVALID


def test_total_health_drops_by_one_per_hit(catalog) -> None:
    board = Board(catalog)
    for ship_id in range(len(catalog)):
        assert board.place_ship(Point(ship_id * 2, 0), ship_id, Direction.HORIZONTAL)
    health = board.total_health()
    assert health == catalog.total_cells
    for row in range(board.rows):
        for col in range(board.cols):
            outcome = board.attack(Point(row, col))
            if outcome.hit:
                assert board.total_health() == health - 1
                health -= 1
                assert board.is_placed(outcome.ship_id) != outcome.destroyed
            else:
                assert board.total_health() == health
    assert health == 0
    assert board.all_destroyed()


def test_empty_board_is_vacuously_destroyed(catalog) -> None:
    assert Board(catalog).all_destroyed()


def test_render_masks_unhit_segments(catalog) -> None:
    board = Board(catalog)
    board.place_ship(Point(0, 0), 4, Direction.HORIZONTAL)
    board.attack(Point(0, 0))
    board.attack(Point(1, 0))
    assert board.snapshot()[0][:3] == ["X", "P", "."]
    assert board.snapshot(shots_only=True)[0][:3] == ["X", ".", "."]
    assert board.snapshot()[1][0] == "o"
    lines = board.render().splitlines()
    assert lines[0] == "  0123456789"
    assert lines[1] == "0 XP........"
    assert board.render(shots_only=True).splitlines()[1] == "0 X........."


def test_block_and_unblock_leave_ships_alone(catalog, scripted_random) -> None:
    board = Board(catalog)
    board.place_ship(Point(0, 0), 0, Direction.HORIZONTAL)
    before = _copy(board)
    blocked = board.block(scripted_random([0.0]))
    assert blocked == board.rows * board.cols - 5
    assert np.all(board.ships[0, :5] == 0)
    assert not board.place_ship(Point(5, 5), 4, Direction.HORIZONTAL)
    board.unblock()
    _assert_unchanged(board, before)
    assert not np.any(board.ships == BLOCKED_CELL)


def test_block_marks_roughly_half(catalog, seeded_rng) -> None:
    board = Board(catalog)
    blocked = board.block(seeded_rng)
    assert 20 < blocked < 80
    assert int(np.count_nonzero(board.ships == BLOCKED_CELL)) == blocked


def test_clear_resets_everything(catalog) -> None:
    board = Board(catalog)
    board.place_ship(Point(0, 0), 0, Direction.HORIZONTAL)
    board.attack(Point(0, 0))
    board.clear()
    assert np.all(board.ships == EMPTY_CELL)
    assert not np.any(board.shots)
    assert board.placed_count() == 0
