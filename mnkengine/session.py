"""Human-vs-engine game flow shared by the terminal and desktop front-ends."""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from mnkengine.config import CONFIG, Config
from mnkengine.core.board import Symbol
from mnkengine.main import GameEngine, Outcome

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    outcome: Outcome
    header: str
    message: str


class GameSession:
    """One game between a human and the engine.

    X always moves first: the human plays X when moving first, O otherwise.
    Board size picks the required run and search depth from the configured
    presets.
    """

    def __init__(self, size: int, human_first: bool = True, config: Optional[Config] = None):
        cfg = config or CONFIG
        self.required_run, self.depth = cfg.search.preset_for(size)
        if human_first:
            self.human_symbol, self.engine_symbol = Symbol.X, Symbol.O
        else:
            self.human_symbol, self.engine_symbol = Symbol.O, Symbol.X
        self.engine = GameEngine(size, self.required_run, self.engine_symbol, self.human_symbol)
        self.to_move = Symbol.X
        logger.info(
            "New %dx%d game, %d in a row, depth %s, human plays %s",
            size, size, self.required_run, self.depth, self.human_symbol.name,
        )

    @property
    def size(self) -> int:
        return self.engine.size

    @property
    def is_over(self) -> bool:
        return self.engine.outcome() != Outcome.NOT_OVER

    @property
    def engine_to_move(self) -> bool:
        return not self.is_over and self.to_move == self.engine_symbol

    def start(self) -> Optional[Tuple[int, int]]:
        """Let the engine open the game when it plays X."""
        if self.engine_to_move and self.engine.board.occupied_count() == 0:
            return self.engine_reply()
        return None

    def apply_human(self, row: int, col: int):
        if self.is_over:
            raise RuntimeError("The game is already over")
        if self.to_move != self.human_symbol:
            raise RuntimeError("It is not the human's turn")
        self.engine.apply_move(row, col, self.human_symbol)
        self.to_move = self.engine_symbol
        logger.info("Human plays %s at (%d, %d)", self.human_symbol.name, row, col)

    def think(self) -> Tuple[int, int]:
        """Run the search without touching the board; safe to run off the UI thread."""
        return self.engine.next_move(self.depth)

    def apply_engine(self, row: int, col: int):
        self.engine.apply_move(row, col, self.engine_symbol)
        self.to_move = self.human_symbol
        logger.info("Engine plays %s at (%d, %d)", self.engine_symbol.name, row, col)

    def engine_reply(self) -> Tuple[int, int]:
        row, col = self.think()
        self.apply_engine(row, col)
        return row, col

    def play_human(self, row: int, col: int) -> Optional[Tuple[int, int]]:
        """Apply the human move, then the engine's answer unless the game just ended."""
        self.apply_human(row, col)
        if self.is_over:
            return None
        return self.engine_reply()

    def result(self) -> Optional[GameResult]:
        outcome = self.engine.outcome()
        if outcome == Outcome.NOT_OVER:
            return None
        if outcome == Outcome.DRAW:
            return GameResult(outcome, "Keep calm...", "It's a Draw!")
        human_won = (outcome == Outcome.X_WINS) == (self.human_symbol == Symbol.X)
        if human_won:
            return GameResult(outcome, "Congratulations!", "You Win!")
        return GameResult(outcome, "The game you just can't win.", "You Lose!")
