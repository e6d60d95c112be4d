"""Widget package: re-exports the grid board and the game window."""

from gui.widgets.board import GridBoardWidget
from gui.widgets.game_window import GameWindow

__all__ = [
    "GridBoardWidget",
    "GameWindow",
]
