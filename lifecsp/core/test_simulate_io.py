"""
Tests for the reference simulation and board text IO.
"""

import io

import numpy as np

from lifecsp.core.board_io import (
    BoardFormatError,
    activations_of,
    parse_tokens,
    read_activations,
    read_board,
)
from lifecsp.core.grid_types import border_mask, cell_index, format_board, index_to_cell, interior_cells
from lifecsp.core.simulate import life_step, neighbor_counts


BLINKER_H = np.array([
    [0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0],
    [0, 1, 1, 1, 0],
    [0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0],
], dtype=int)


def test_neighbor_counts():
    counts = neighbor_counts(BLINKER_H)
    assert counts[2, 2] == 2
    assert counts[1, 2] == 3 and counts[3, 2] == 3
    assert counts[2, 1] == 1
    assert counts[0, 0] == 0


def test_life_step_blinker_and_border():
    nxt = life_step(BLINKER_H)
    expected = np.zeros((5, 5), dtype=int)
    expected[1:4, 2] = 1
    assert np.array_equal(nxt, expected), f"\n{nxt}"
    assert np.array_equal(life_step(nxt), BLINKER_H)

    # A live border is treated as dead before counting
    noisy = BLINKER_H.copy()
    noisy[0, :] = 1
    assert np.array_equal(life_step(noisy), expected)


def test_life_step_period_two():
    board = BLINKER_H
    for _ in range(4):
        board = life_step(board)
    assert np.array_equal(board, BLINKER_H)
    assert board is not BLINKER_H


def test_read_activations():
    text = "0 0 0 0 0\n0 0 0 0 0\n0 1 1 1 0\n0 0 0 0 0\n0 0 0 0 0\n"
    assert read_activations(io.StringIO(text), 5) == [(2, 1), (2, 2), (2, 3)]
    assert read_activations(io.StringIO("1 0 0 7 trailing"), 2) == [(0, 0), (1, 1)]
    assert activations_of(BLINKER_H) == [(2, 1), (2, 2), (2, 3)]


def test_read_board_normalizes_values():
    board = read_board(io.StringIO("0 2\n-1 0\n9"), 2)
    assert board.shape == (2, 2)
    assert board.tolist() == [[0, 1], [1, 0]]

    try:
        read_board(io.StringIO("1 0 1"), 2)
        raise AssertionError("Expected BoardFormatError for a short board")
    except BoardFormatError as e:
        print(f"  ✓ Caught expected error: {e}")


def test_board_format_errors():
    for text in ("0 1 0", "0 x 0 0"):
        try:
            parse_tokens(text, 2)
            raise AssertionError(f"Expected BoardFormatError for {text!r}")
        except BoardFormatError as e:
            print(f"  ✓ Caught expected error: {e}")


def test_grid_helpers():
    assert cell_index(2, 3, 5) == 13
    assert index_to_cell(13, 5) == (2, 3)
    assert list(interior_cells(3)) == [(1, 1)]
    assert list(interior_cells(2)) == []
    assert border_mask(3).sum() == 8
    assert format_board(np.array([[1]])) == ">> [BOARD] <------\n1"


if __name__ == "__main__":
    test_neighbor_counts()
    test_life_step_blinker_and_border()
    test_life_step_period_two()
    test_read_activations()
    test_read_board_normalizes_values()
    test_board_format_errors()
    test_grid_helpers()
    print("\n✓ ALL TESTS PASSED")
