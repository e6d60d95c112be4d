"""m,n,k game engine: board bookkeeping, win detection and alpha-beta search."""

from mnkengine.core.board import IllegalMoveError, Symbol
from mnkengine.core.search import UNBOUNDED, SearchResult
from mnkengine.main import GameEngine, Outcome

__all__ = ["GameEngine", "IllegalMoveError", "Outcome", "SearchResult", "Symbol", "UNBOUNDED"]
