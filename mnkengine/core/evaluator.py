from typing import Iterable, List, Tuple

from mnkengine.core.board import Board, Coord, Symbol, iter_lines


def build_heuristic_table(required_run: int) -> Tuple[Tuple[int, ...], ...]:
    """table[m][o] for a window holding m own and o opponent symbols.

    Pure windows are worth 10**(count - 1), positive for own symbols and
    negative for the opponent's. Mixed or empty windows are worth nothing.
    """
    table = [[0] * (required_run + 1) for _ in range(required_run + 1)]
    for i in range(1, required_run + 1):
        value = 10 ** (i - 1)
        table[i][0] = value
        table[0][i] = -value
    return tuple(tuple(row) for row in table)


class Evaluator:
    def __init__(self, board: Board, my_symbol: Symbol, opponent_symbol: Symbol):
        self.board = board
        self.my_symbol = my_symbol
        self.opponent_symbol = opponent_symbol
        self.table = build_heuristic_table(board.required_run)
        # windows never change for a given board size, only their contents do
        self._windows: List[Tuple[Coord, ...]] = list(self._iter_windows())

    @property
    def win_score(self) -> int:
        k = self.board.required_run
        return self.table[k][0]

    @property
    def loss_score(self) -> int:
        k = self.board.required_run
        return self.table[0][k]

    def _iter_windows(self):
        k = self.board.required_run
        for line in iter_lines(self.board.size, k):
            for start in range(len(line) - k + 1):
                yield tuple(line[start:start + k])

    def score_window(self, window: Iterable[Coord]) -> int:
        cells = self.board.cells
        mine = 0
        theirs = 0
        for row, col in window:
            value = cells[row][col]
            if value == self.my_symbol:
                mine += 1
            elif value == self.opponent_symbol:
                theirs += 1
        return self.table[mine][theirs]

    def evaluate(self) -> int:
        """Sum the table score of every length-K window on every row, column and diagonal."""
        return sum(self.score_window(window) for window in self._windows)
