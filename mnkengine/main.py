from enum import Enum
from typing import Optional, Tuple

from mnkengine.core.board import Board, MoveSetView, Symbol
from mnkengine.core.evaluator import Evaluator
from mnkengine.core.search import UNBOUNDED, SearchEngine, SearchResult


class Outcome(Enum):
    X_WINS = "x_wins"
    O_WINS = "o_wins"
    DRAW = "draw"
    NOT_OVER = "not_over"


WIN_OUTCOMES = {Symbol.X: Outcome.X_WINS, Symbol.O: Outcome.O_WINS}


class GameEngine:
    """The engine a front-end talks to.

    Owns the board, the move set, the heuristic table and the search. The
    caller applies both players' moves; ``next_move`` only suggests one.
    """

    def __init__(self, size: int, required_run: int, engine_symbol: Symbol, human_symbol: Symbol):
        if Symbol.EMPTY in (engine_symbol, human_symbol) or engine_symbol == human_symbol:
            raise ValueError("Engine and human need two distinct, non-empty symbols")
        self.board = Board(size, required_run)
        self.engine_symbol = engine_symbol
        self.human_symbol = human_symbol
        self.evaluator = Evaluator(self.board, engine_symbol, human_symbol)
        self.search_engine = SearchEngine(self.board, self.evaluator)
        self._legal_view = MoveSetView(self.board.moves)

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def required_run(self) -> int:
        return self.board.required_run

    def apply_move(self, row: int, col: int, symbol: Symbol):
        self.board.apply_move(row, col, symbol)

    def legal_moves(self) -> MoveSetView:
        return self._legal_view

    def outcome(self) -> Outcome:
        row, col, symbol = self.board.last_move
        if self.board.has_won_at(row, col, symbol):
            return WIN_OUTCOMES[symbol]
        if self.board.is_full():
            return Outcome.DRAW
        return Outcome.NOT_OVER

    def has_won_full_scan(self, symbol: Symbol) -> bool:
        return self.board.has_won_full_scan(symbol)

    def has_won_at(self, row: int, col: int, symbol: Symbol) -> bool:
        return self.board.has_won_at(row, col, symbol)

    def evaluate(self) -> int:
        return self.evaluator.evaluate()

    def search(self, depth: Optional[int] = UNBOUNDED) -> SearchResult:
        return self.search_engine.search(depth)

    def next_move(self, depth: Optional[int] = UNBOUNDED) -> Tuple[int, int]:
        """Best move for the engine's symbol; ``(-1, -1)`` when none is left to play."""
        result = self.search(depth)
        return result.row, result.col

    def print_board(self):
        print(self.board.render())
