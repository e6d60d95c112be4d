import logging
import time
from dataclasses import dataclass
from typing import Optional

from mnkengine.core.board import Board
from mnkengine.core.evaluator import Evaluator
from mnkengine.core.utils import format_info

logger = logging.getLogger(__name__)

INF = float("inf")
UNBOUNDED = -1

WIN = 1
LOSS = -1
DRAW = 0


@dataclass
class SearchResult:
    score: int
    row: int = -1
    col: int = -1

    @property
    def move(self):
        return self.row, self.col

    def __iter__(self):
        return iter((self.score, self.row, self.col))


def is_unbounded(depth: Optional[int]) -> bool:
    return depth is None or depth < 0


class SearchEngine:
    """Minimax with alpha-beta pruning over a board it mutates in place.

    With an unbounded depth the tree is searched to the end of the game and
    leaves score +1/-1/0. With a finite depth, nodes at depth 0 are scored by
    the evaluator and wins/losses take the heuristic table's extreme entries.
    """

    def __init__(self, board: Board, evaluator: Evaluator):
        self.board = board
        self.evaluator = evaluator
        self.my_symbol = evaluator.my_symbol
        self.opponent_symbol = evaluator.opponent_symbol
        self.nodes = 0

    def search(self, depth: Optional[int] = UNBOUNDED) -> SearchResult:
        self.nodes = 0
        start_time = time.time()

        if is_unbounded(depth):
            result = self._alphabeta(None, self.my_symbol, -INF, INF, WIN, LOSS)
        else:
            result = self._alphabeta(
                depth, self.my_symbol, -INF, INF, self.evaluator.win_score, self.evaluator.loss_score
            )

        elapsed = (time.time() - start_time) * 1000
        logger.debug(format_info(depth, result.score, self.nodes, elapsed, result.row, result.col))
        return result

    def _last_mover_won(self) -> bool:
        row, col, symbol = self.board.last_move
        return self.board.has_won_at(row, col, symbol)

    def _alphabeta(self, depth, symbol, alpha, beta, win, loss) -> SearchResult:
        self.nodes += 1
        board = self.board

        if self._last_mover_won():
            last_symbol = board.last_move[2]
            return SearchResult(win if last_symbol == self.my_symbol else loss)
        if board.is_full():
            return SearchResult(DRAW)
        if depth == 0:
            return SearchResult(self.evaluator.evaluate())

        maximizing = symbol == self.my_symbol
        other = self.opponent_symbol if maximizing else self.my_symbol
        child_depth = None if depth is None else depth - 1
        previous = board.last_move
        best_row = -1
        best_col = -1

        for index in range(len(board.moves)):
            row, col = board.play_index(index, symbol)
            score = self._alphabeta(child_depth, other, alpha, beta, win, loss).score
            board.retract_move(row, col, index, previous)

            # strict comparison keeps the first move reaching the best score
            if maximizing:
                if score > alpha:
                    alpha = score
                    best_row, best_col = row, col
            elif score < beta:
                beta = score
                best_row, best_col = row, col

            if alpha >= beta:
                break

        return SearchResult(alpha if maximizing else beta, best_row, best_col)
