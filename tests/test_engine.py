"""
Unit tests for the m,n,k engine.

Covers:
- Board and move set bookkeeping (ordering, retraction, invalid input)
- Win detection (full scan, incremental scan, their equivalence)
- Outcome queries
- Heuristic table and window evaluation
- Alpha-beta search (exhaustive and depth-limited, tie-breaking, state restore)
"""

import random
from collections.abc import Sequence

import pytest

from mnkengine import GameEngine, IllegalMoveError, Outcome, Symbol, UNBOUNDED
from mnkengine.core.board import Board, MoveSet, MoveSetView, iter_lines
from mnkengine.core.evaluator import build_heuristic_table
from mnkengine.core.search import SearchResult
from mnkengine.core.utils import format_info

X, O = Symbol.X, Symbol.O


def make_engine(rows, run, me=X, opponent=O):
    """Build an engine from strings like 'XO.'; moves are applied row by row."""
    engine = GameEngine(len(rows), run, me, opponent)
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            if ch in "XO":
                engine.apply_move(r, c, Symbol[ch])
    return engine


def snapshot(engine):
    board = engine.board
    return [list(row) for row in board.cells], list(board.moves), board.last_move


# ════════════════════════════════════════════════════════════════════════════
#  BOARD & MOVE SET
# ════════════════════════════════════════════════════════════════════════════

class TestBoard:
    def test_initial_moves_row_major(self):
        engine = GameEngine(3, 3, X, O)
        assert list(engine.legal_moves()) == [(r, c) for r in range(3) for c in range(3)]

    def test_apply_removes_move(self):
        engine = GameEngine(3, 3, X, O)
        engine.apply_move(1, 1, X)
        assert (1, 1) not in engine.legal_moves()
        assert len(engine.legal_moves()) == 8
        assert engine.board.cell(1, 1) == X
        assert engine.board.last_move == (1, 1, X)

    def test_move_count_plus_occupied_is_area(self):
        engine = GameEngine(4, 3, X, O)
        rng = random.Random(7)
        symbol = X
        for _ in range(16):
            r, c = rng.choice(list(engine.legal_moves()))
            engine.apply_move(r, c, symbol)
            symbol = O if symbol == X else X
            assert len(engine.legal_moves()) + engine.board.occupied_count() == 16

    def test_out_of_range_raises(self):
        engine = GameEngine(3, 3, X, O)
        with pytest.raises(IllegalMoveError):
            engine.apply_move(3, 0, X)
        with pytest.raises(IllegalMoveError):
            engine.apply_move(0, -1, X)

    def test_illegal_move_is_value_error(self):
        engine = GameEngine(3, 3, X, O)
        with pytest.raises(ValueError):
            engine.apply_move(5, 5, O)

    def test_occupied_cell_raises(self):
        engine = GameEngine(3, 3, X, O)
        engine.apply_move(0, 0, X)
        with pytest.raises(IllegalMoveError):
            engine.apply_move(0, 0, O)
        # a rejected move leaves the board untouched
        assert engine.board.cell(0, 0) == X
        assert len(engine.legal_moves()) == 8

    def test_empty_symbol_raises(self):
        engine = GameEngine(3, 3, X, O)
        with pytest.raises(IllegalMoveError):
            engine.apply_move(0, 0, Symbol.EMPTY)

    def test_invalid_sizes(self):
        with pytest.raises(ValueError):
            Board(0, 1)
        with pytest.raises(ValueError):
            Board(3, 0)

    def test_run_longer_than_board_accepted(self):
        board = Board(3, 5)
        assert board.required_run == 5

    def test_retract_restores_order(self):
        board = Board(3, 3)
        board.apply_move(0, 0, X)
        before = list(board.moves)
        previous = board.last_move
        row, col = board.play_index(3, O)
        assert (row, col) == before[3]
        assert board.last_move == (row, col, O)
        board.retract_move(row, col, 3, previous)
        assert list(board.moves) == before
        assert board.cells[row][col] == Symbol.EMPTY
        assert board.last_move == previous

    def test_apply_returns_index(self):
        board = Board(3, 3)
        assert board.apply_move(1, 0, X) == 3
        assert board.apply_move(0, 0, O) == 0

    def test_move_set_insert_at_index(self):
        moves = MoveSet(2)
        index = moves.remove((0, 1))
        assert list(moves) == [(0, 0), (1, 0), (1, 1)]
        moves.insert(index, (0, 1))
        assert list(moves) == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_legal_moves_view_restartable(self):
        engine = GameEngine(3, 3, X, O)
        view = engine.legal_moves()
        assert isinstance(view, Sequence)
        assert isinstance(view, MoveSetView)
        assert list(view) == list(view)
        assert view[0] == (0, 0)
        assert (2, 2) in view

    def test_legal_moves_view_tracks_board(self):
        engine = GameEngine(3, 3, X, O)
        view = engine.legal_moves()
        engine.apply_move(0, 0, X)
        assert (0, 0) not in view
        assert len(view) == 8

    def test_render(self):
        engine = make_engine(["X.O", "...", "..X"], 3)
        assert engine.board.render() == "X . O\n. . .\n. . X"


# ════════════════════════════════════════════════════════════════════════════
#  LINE GEOMETRY
# ════════════════════════════════════════════════════════════════════════════

class TestLines:
    def test_line_count_all_lengths(self):
        lines = list(iter_lines(6))
        # 6 rows + 6 columns + 11 diagonals per direction
        assert len(lines) == 6 + 6 + 11 + 11

    def test_every_cell_on_four_lines(self):
        counts = {}
        for line in iter_lines(5):
            for cell in line:
                counts[cell] = counts.get(cell, 0) + 1
        assert all(v == 4 for v in counts.values())
        assert len(counts) == 25

    @pytest.mark.parametrize("size,run", [(3, 3), (5, 4), (6, 4), (7, 5)])
    def test_long_diagonals_only(self, size, run):
        lines = list(iter_lines(size, run))
        diagonals = lines[2 * size:]
        assert all(len(line) >= run for line in diagonals)
        assert len(diagonals) == 2 * (2 * (size - run) + 1)

    def test_diagonals_are_contiguous(self):
        for line in list(iter_lines(5))[10:]:
            for (r1, c1), (r2, c2) in zip(line, line[1:]):
                assert r2 - r1 == 1
                assert abs(c2 - c1) == 1


# ════════════════════════════════════════════════════════════════════════════
#  WIN DETECTION
# ════════════════════════════════════════════════════════════════════════════

class TestWinDetection:
    def test_row_win(self):
        engine = make_engine([".....", ".XXXX", ".....", ".....", "....."], 4)
        assert engine.has_won_full_scan(X)
        assert not engine.has_won_full_scan(O)

    def test_column_win(self):
        engine = make_engine(["O....", "O....", "O....", "O....", "....."], 4)
        assert engine.has_won_full_scan(O)

    def test_off_main_diagonal_win(self):
        engine = make_engine([".....", "X....", ".X...", "..X..", "...X."], 4)
        assert engine.has_won_full_scan(X)

    def test_off_main_anti_diagonal_win(self):
        engine = make_engine(["...X.", "..X..", ".X...", "X....", "....."], 4)
        assert engine.has_won_full_scan(X)

    def test_broken_run_not_a_win(self):
        engine = make_engine(["XXOXX", ".....", ".....", ".....", "....."], 4)
        assert not engine.has_won_full_scan(X)

    def test_short_diagonal_not_a_win(self):
        engine = make_engine(["..X..", ".X...", "X....", ".....", "....."], 4)
        assert not engine.has_won_full_scan(X)

    def test_longer_run_counts(self):
        engine = make_engine(["XXXXX", ".....", ".....", ".....", "....."], 4)
        assert engine.has_won_full_scan(X)

    def test_incremental_sentinel(self):
        engine = GameEngine(3, 3, X, O)
        assert engine.has_won_at(-1, -1, Symbol.EMPTY) is False

    def test_incremental_diagonal_both_directions(self):
        engine = make_engine(["X....", ".X...", ".....", "...X.", "....X"], 4)
        engine.apply_move(2, 2, X)
        assert engine.has_won_at(2, 2, X)

    def test_incremental_anti_diagonal(self):
        engine = make_engine(["....X", "...X.", ".....", ".X...", "....."], 4)
        engine.apply_move(2, 2, X)
        assert engine.has_won_at(2, 2, X)

    def test_run_longer_than_board_never_wins(self):
        engine = make_engine(["XXX", "...", "..."], 4)
        assert not engine.has_won_full_scan(X)
        assert not engine.has_won_at(0, 2, X)

    @pytest.mark.parametrize(
        "size,run,seed",
        [(3, 3, s) for s in range(10)]
        + [(4, 3, s) for s in range(8)]
        + [(5, 4, s) for s in range(8)]
        + [(6, 4, s) for s in range(6)]
        + [(6, 5, s) for s in range(4)]
        + [(4, 5, 0), (3, 1, 0), (2, 2, 0)],
    )
    def test_incremental_matches_full_scan(self, size, run, seed):
        rng = random.Random(seed)
        engine = GameEngine(size, run, X, O)
        symbol = X
        while len(engine.legal_moves()):
            r, c = rng.choice(list(engine.legal_moves()))
            engine.apply_move(r, c, symbol)
            won = engine.has_won_full_scan(symbol)
            assert engine.has_won_at(r, c, symbol) == won
            if won:
                break
            symbol = O if symbol == X else X


# ════════════════════════════════════════════════════════════════════════════
#  OUTCOME
# ════════════════════════════════════════════════════════════════════════════

class TestOutcome:
    def test_not_over_initially(self):
        assert GameEngine(3, 3, X, O).outcome() == Outcome.NOT_OVER

    def test_x_wins(self):
        engine = make_engine(["XX.", "OO.", "..."], 3)
        engine.apply_move(0, 2, X)
        assert engine.outcome() == Outcome.X_WINS

    def test_o_wins(self):
        engine = make_engine(["XX.", "OO.", "X.."], 3)
        engine.apply_move(1, 2, O)
        assert engine.outcome() == Outcome.O_WINS

    def test_draw_on_full_board(self):
        engine = make_engine(["XOX", "XOO", "OXX"], 3)
        assert engine.outcome() == Outcome.DRAW

    def test_single_cell_board(self):
        engine = GameEngine(1, 1, X, O)
        engine.apply_move(0, 0, O)
        assert engine.outcome() == Outcome.O_WINS

    def test_unwinnable_board_ends_in_draw(self):
        engine = GameEngine(2, 3, X, O)
        for (r, c), s in zip([(0, 0), (0, 1), (1, 0), (1, 1)], [X, O, X, O]):
            assert engine.outcome() == Outcome.NOT_OVER
            engine.apply_move(r, c, s)
        assert engine.outcome() == Outcome.DRAW

    def test_outcome_does_not_mutate(self):
        engine = make_engine(["X..", ".O.", "..."], 3)
        before = snapshot(engine)
        engine.outcome()
        assert snapshot(engine) == before


# ════════════════════════════════════════════════════════════════════════════
#  HEURISTIC
# ════════════════════════════════════════════════════════════════════════════

class TestHeuristic:
    def test_table_values(self):
        table = build_heuristic_table(4)
        assert [table[i][0] for i in range(5)] == [0, 1, 10, 100, 1000]
        assert [table[0][i] for i in range(5)] == [0, -1, -10, -100, -1000]
        assert table[1][1] == 0
        assert table[2][1] == 0
        assert table[1][3] == 0

    def test_table_is_immutable(self):
        table = build_heuristic_table(3)
        with pytest.raises(TypeError):
            table[1][0] = 5

    def test_win_and_loss_scores(self):
        engine = GameEngine(5, 4, X, O)
        assert engine.evaluator.win_score == 1000
        assert engine.evaluator.loss_score == -1000

    def test_empty_board_scores_zero(self):
        assert GameEngine(5, 4, X, O).evaluate() == 0

    def test_three_in_a_window(self):
        engine = make_engine(["XXX..", ".....", ".....", ".....", "....."], 4)
        window = [(0, 0), (0, 1), (0, 2), (0, 3)]
        assert engine.evaluator.score_window(window) == engine.evaluator.table[3][0] == 100

    def test_three_in_a_row_full_board_value(self):
        engine = make_engine(["XXX..", ".....", ".....", ".....", "....."], 4)
        # row 0: 100 + 10, columns 0-2: 1 each, main diagonal: 1, diagonal from (0,1): 1
        assert engine.evaluate() == 115

    def test_blocked_window_is_zero(self):
        engine = make_engine(["XXXO.", ".....", ".....", ".....", "....."], 4)
        assert engine.evaluator.score_window([(0, 0), (0, 1), (0, 2), (0, 3)]) == 0

    def test_opponent_window_negative(self):
        engine = make_engine(["OO...", ".....", ".....", ".....", "....."], 4)
        assert engine.evaluator.score_window([(0, 0), (0, 1), (0, 2), (0, 3)]) == -10

    def test_window_count(self):
        engine = GameEngine(5, 4, X, O)
        # 10 row + 10 column windows, 4 per diagonal direction
        assert len(engine.evaluator._windows) == 28

    def test_no_windows_when_run_exceeds_size(self):
        engine = make_engine(["XX", "O."], 3)
        assert engine.evaluate() == 0

    @pytest.mark.parametrize("seed", range(6))
    def test_swapping_symbols_negates(self, seed):
        rng = random.Random(seed)
        mine = GameEngine(6, 4, X, O)
        theirs = GameEngine(6, 4, O, X)
        symbol = X
        for _ in range(rng.randint(3, 20)):
            r, c = rng.choice(list(mine.legal_moves()))
            mine.apply_move(r, c, symbol)
            theirs.apply_move(r, c, symbol)
            symbol = O if symbol == X else X
        assert mine.evaluate() == -theirs.evaluate()

    def test_evaluate_does_not_mutate(self):
        engine = make_engine(["XO...", ".X...", ".....", "..O..", "....."], 4)
        before = snapshot(engine)
        engine.evaluate()
        assert snapshot(engine) == before


# ════════════════════════════════════════════════════════════════════════════
#  SEARCH
# ════════════════════════════════════════════════════════════════════════════

class TestSearch:
    def test_result_unpacks(self):
        score, row, col = SearchResult(3, 1, 2)
        assert (score, row, col) == (3, 1, 2)
        assert SearchResult(0).move == (-1, -1)

    def test_depth_zero_returns_evaluation(self):
        engine = make_engine(["XXX..", ".O...", ".....", ".....", "....."], 4)
        result = engine.search(0)
        assert result.score == engine.evaluate()
        assert (result.row, result.col) == (-1, -1)

    def test_full_board_search_is_draw_leaf(self):
        engine = make_engine(["XOX", "XOO", "OXX"], 3)
        assert tuple(engine.search(UNBOUNDED)) == (0, -1, -1)
        assert engine.next_move(UNBOUNDED) == (-1, -1)
        assert engine.next_move(3) == (-1, -1)

    def test_terminal_root_exhaustive(self):
        engine = make_engine(["XX.", "OO.", "..."], 3, me=O, opponent=X)
        engine.apply_move(0, 2, X)
        assert tuple(engine.search(UNBOUNDED)) == (-1, -1, -1)

    def test_terminal_root_depth_limited(self):
        engine = make_engine(["XX.", "OO.", "..."], 3, me=O, opponent=X)
        engine.apply_move(0, 2, X)
        assert tuple(engine.search(2)) == (-100, -1, -1)

    def test_takes_immediate_win(self):
        engine = make_engine(["XX.", "OO.", "..."], 3)
        result = engine.search(UNBOUNDED)
        assert tuple(result) == (1, 0, 2)

    def test_blocks_threat(self):
        engine = GameEngine(3, 3, O, X)
        engine.apply_move(0, 0, X)
        engine.apply_move(0, 2, O)
        engine.apply_move(1, 1, X)
        assert engine.next_move(UNBOUNDED) == (2, 2)

    def test_depth_limited_win_uses_table_extreme(self):
        engine = make_engine(["OO..", ".O..", "....", "XXX."], 4)
        assert tuple(engine.search(2)) == (1000, 3, 3)

    def test_center_reply_is_first_corner(self):
        engine = GameEngine(3, 3, O, X)
        engine.apply_move(1, 1, X)
        assert engine.next_move(UNBOUNDED) == (0, 0)

    def test_next_move_does_not_apply(self):
        engine = GameEngine(3, 3, X, O)
        engine.next_move(UNBOUNDED)
        assert len(engine.legal_moves()) == 9
        assert engine.outcome() == Outcome.NOT_OVER

    @pytest.mark.parametrize("depth", [UNBOUNDED, 1, 2])
    def test_search_restores_state(self, depth):
        engine = make_engine(["X..", ".O.", "..."], 3)
        before = snapshot(engine)
        engine.search(depth)
        assert snapshot(engine) == before

    def test_depth_limited_restores_state_large_board(self):
        engine = make_engine(["X....", ".O...", "..X..", ".....", "....O"], 4)
        before = snapshot(engine)
        engine.search(2)
        assert snapshot(engine) == before

    def test_deterministic(self):
        engine = make_engine(["X.....", "..O...", "......", "...X..", "......", "......"], 4)
        first = engine.next_move(2)
        second = engine.next_move(2)
        assert first == second

    def test_negative_and_none_depth_are_unbounded(self):
        engine = GameEngine(3, 3, O, X)
        engine.apply_move(1, 1, X)
        assert engine.next_move(None) == engine.next_move(-7) == engine.next_move(UNBOUNDED)

    def test_counts_nodes(self):
        engine = GameEngine(3, 3, X, O)
        engine.apply_move(0, 0, O)
        engine.search(1)
        assert engine.search_engine.nodes == 1 + 8

    def test_suggested_move_is_legal(self):
        engine = make_engine(["X.....", "..O...", "......", "...X..", "......", "......"], 4)
        assert engine.next_move(1) in engine.legal_moves()


# ════════════════════════════════════════════════════════════════════════════
#  GAME ENGINE
# ════════════════════════════════════════════════════════════════════════════

class TestGameEngine:
    def test_rejects_same_symbols(self):
        with pytest.raises(ValueError):
            GameEngine(3, 3, X, X)

    def test_rejects_empty_symbol(self):
        with pytest.raises(ValueError):
            GameEngine(3, 3, Symbol.EMPTY, O)

    def test_properties(self):
        engine = GameEngine(5, 4, X, O)
        assert engine.size == 5
        assert engine.required_run == 4

    def test_print_board(self, capsys):
        engine = make_engine(["X.", ".O"], 2)
        engine.print_board()
        assert capsys.readouterr().out == "X .\n. O\n"

    def test_format_info(self):
        line = format_info(None, 1, 500, 100.0, 0, 2)
        assert line == "info depth full score 1 nodes 500 nps 5000 time 100 move 0,2"
        assert format_info(3, -10, 0, 0, -1, -1).endswith("move -")
