"""Core engine components: board, heuristic evaluator and alpha-beta search."""

from .board import Board, IllegalMoveError, MoveSet, MoveSetView, Symbol
from .evaluator import Evaluator, build_heuristic_table
from .search import UNBOUNDED, SearchEngine, SearchResult
