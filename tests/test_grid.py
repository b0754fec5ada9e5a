from __future__ import annotations

import pytest

from block_drop.game import pieces
from block_drop.game.grid import COL_COUNT, HIDDEN_ROW_COUNT, ROW_COUNT, Board
from block_drop.game.pieces import TileType


O = TileType.O


@pytest.fixture
def board() -> Board:
    b = Board()
    b.clear()
    return b


def fill_row(board: Board, row: int, kind: TileType = O) -> None:
    for col in range(COL_COUNT):
        board.set_tile(col, row, kind)


def test_dimensions(board):
    assert board.width == 10
    assert board.height == 22
    assert ROW_COUNT - HIDDEN_ROW_COUNT == 20


@pytest.mark.parametrize("kind", list(TileType))
def test_empty_board_accepts_every_inside_position(board, kind):
    dim = pieces.dimension(kind)
    for rotation in range(4):
        left = pieces.left_inset(kind, rotation)
        right = pieces.right_inset(kind, rotation)
        top = pieces.top_inset(kind, rotation)
        bottom = pieces.bottom_inset(kind, rotation)
        for col in range(-left, COL_COUNT - dim + right + 1):
            for row in range(-top, ROW_COUNT - dim + bottom + 1):
                assert board.is_valid_and_empty(kind, col, row, rotation)
        assert not board.is_valid_and_empty(kind, -left - 1, 5, rotation)
        assert not board.is_valid_and_empty(kind, COL_COUNT - dim + right + 1, 5, rotation)
        assert not board.is_valid_and_empty(kind, 3, ROW_COUNT - dim + bottom + 1, rotation)


def test_empty_board_accepts_piece(board):
    assert board.is_valid_and_empty(O, 4, 0, 0)


def test_invalid_column_is_rejected(board):
    assert not board.is_valid_and_empty(O, -1, 0, 0)
    assert not board.is_valid_and_empty(O, COL_COUNT - 1, 0, 0)


def test_rows_above_top_are_tolerated(board):
    assert board.is_valid_and_empty(O, 0, -3, 0)


def test_row_below_bottom_is_rejected(board):
    assert not board.is_valid_and_empty(O, 0, ROW_COUNT - 1, 0)


def test_add_piece_occupies_tiles(board):
    board.add_piece(O, 0, 0, 0)
    assert not board.is_valid_and_empty(O, 0, 0, 0)
    assert board.get_tile(1, 1) is O
    assert board.is_occupied(0, 0)


def test_clear_empties_board(board):
    board.add_piece(O, 0, 0, 0)
    board.clear()
    assert board.is_valid_and_empty(O, 0, 0, 0)
    assert board.get_tile(0, 0) is None


def test_add_piece_skips_cells_above_top(board):
    board.add_piece(O, 3, -1, 0)
    assert board.get_tile(3, 0) is O
    assert board.get_tile(4, 0) is O
    assert int((board.clone_state() != 0).sum()) == 2


def test_occupied_cell_above_landing_spot_blocks(board):
    board.set_tile(5, 10, TileType.Z)
    assert not board.is_valid_and_empty(O, 4, 9, 0)
    assert board.is_valid_and_empty(O, 4, 11, 0)


def test_empty_board_has_zero_cleared_lines(board):
    assert board.check_lines() == 0


def test_full_line_gets_cleared(board):
    fill_row(board, 5)
    assert board.check_lines() == 1
    assert all(board.get_tile(col, 5) is None for col in range(COL_COUNT))


def test_rows_above_shift_down(board):
    board.set_tile(3, 4, TileType.T)
    fill_row(board, 5)
    assert board.check_lines() == 1
    assert board.get_tile(3, 5) is TileType.T
    assert board.get_tile(3, 4) is None


def test_non_adjacent_rows_clear_in_one_pass(board):
    fill_row(board, 21)
    fill_row(board, 19)
    board.set_tile(0, 20, TileType.J)
    board.set_tile(1, 18, TileType.L)
    assert board.check_lines() == 2
    assert board.get_tile(0, 21) is TileType.J
    assert board.get_tile(1, 20) is TileType.L
    assert int((board.clone_state() != 0).sum()) == 2


def test_hidden_rows_are_never_counted(board):
    fill_row(board, 0)
    assert board.check_lines() == 0
    assert board.get_tile(0, 0) is O


def test_hidden_rows_shift_into_view(board):
    board.set_tile(2, 1, TileType.S)
    fill_row(board, ROW_COUNT - 1)
    assert board.check_lines() == 1
    assert board.get_tile(2, 2) is TileType.S


def test_visible_rows_is_read_only(board):
    rows = board.visible_rows()
    assert rows.shape == (20, COL_COUNT)
    with pytest.raises(ValueError):
        rows[0, 0] = 1


@pytest.mark.parametrize("col, row", [(0, -1), (-1, 0), (COL_COUNT, 0), (0, ROW_COUNT)])
def test_cell_accessors_reject_out_of_range(board, col, row):
    with pytest.raises(IndexError):
        board.get_tile(col, row)
    with pytest.raises(IndexError):
        board.is_occupied(col, row)
    with pytest.raises(IndexError):
        board.set_tile(col, row, O)
    assert int((board.clone_state() != 0).sum()) == 0
