"""Clickable N x N grid painted with QPainter."""

from typing import List, Optional, Tuple

from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QPoint, QRect, Signal
from PySide6.QtGui import QPainter, QBrush, QPen, QFont, QMouseEvent, QPaintEvent

from mnkengine.core.board import Board, Symbol
from gui.helpers import (
    CONFIG,
    CELL_BG,
    CELL_HOVER,
    CELL_LAST_MOVE,
    GRID_LINE,
    BOARD_FRAME,
    SYMBOL_COLORS,
    MIN_CELL_PX,
)


class GridBoardWidget(QWidget):
    """Paints a snapshot of a board and reports clicks on empty cells.

    The widget never reads the engine's board directly: a search running on
    the worker thread mutates that board while it explores, so the window
    copies the cells with ``sync`` only between moves.
    """

    cell_clicked = Signal(int, int)

    def __init__(self, size: int, parent=None):
        super().__init__(parent)
        self.size_n = size
        self.cells: List[List[Symbol]] = [[Symbol.EMPTY] * size for _ in range(size)]
        self.last_move: Tuple[int, int] = (-1, -1)
        self.locked = False
        self._hover: Optional[Tuple[int, int]] = None
        self.setMinimumSize(MIN_CELL_PX * size, MIN_CELL_PX * size)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMouseTracking(True)

    def sync(self, board: Board):
        """Copy the board's cells; call only while no search is running."""
        self.cells = [list(row) for row in board.cells]
        self.last_move = board.last_move[:2]
        self.update()

    # ── Geometry ────────────────────────────────────────────

    @property
    def cell_size(self) -> int:
        return min(self.width(), self.height()) // self.size_n

    @property
    def origin(self) -> QPoint:
        sz = self.cell_size * self.size_n
        return QPoint((self.width() - sz) // 2, (self.height() - sz) // 2)

    def _cell_rect(self, row: int, col: int) -> QRect:
        o, sz = self.origin, self.cell_size
        return QRect(o.x() + col * sz, o.y() + row * sz, sz, sz)

    def _px_cell(self, pos: QPoint) -> Optional[Tuple[int, int]]:
        sz = self.cell_size
        if sz <= 0:
            return None
        o = self.origin
        col = (pos.x() - o.x()) // sz
        row = (pos.y() - o.y()) // sz
        if 0 <= row < self.size_n and 0 <= col < self.size_n:
            return row, col
        return None

    # ── Painting ────────────────────────────────────────────

    def paintEvent(self, event: QPaintEvent):
        pr = QPainter(self)
        pr.setRenderHint(QPainter.Antialiasing)
        self._paint_cells(pr)
        self._paint_symbols(pr)
        self._paint_grid(pr)
        pr.end()

    def _paint_cells(self, pr: QPainter):
        pr.setPen(Qt.NoPen)
        last_row, last_col = self.last_move
        for r in range(self.size_n):
            for c in range(self.size_n):
                rect = self._cell_rect(r, c)
                pr.fillRect(rect, QBrush(CELL_BG))
                if (r, c) == (last_row, last_col):
                    pr.fillRect(rect, QBrush(CELL_LAST_MOVE))
                elif (r, c) == self._hover and not self.locked and self.cells[r][c] == Symbol.EMPTY:
                    pr.fillRect(rect, QBrush(CELL_HOVER))

    def _paint_symbols(self, pr: QPainter):
        font = QFont(CONFIG.ui.cell_font)
        font.setPixelSize(max(CONFIG.ui.cell_font_size, int(self.cell_size * 0.55)))
        pr.setFont(font)
        for r in range(self.size_n):
            for c in range(self.size_n):
                symbol = self.cells[r][c]
                if symbol == Symbol.EMPTY:
                    continue
                pr.setPen(QPen(SYMBOL_COLORS[symbol.name]))
                pr.drawText(self._cell_rect(r, c), Qt.AlignCenter, symbol.name)

    def _paint_grid(self, pr: QPainter):
        o, sz, n = self.origin, self.cell_size, self.size_n
        pr.setPen(QPen(GRID_LINE, 1))
        for i in range(1, n):
            pr.drawLine(o.x() + i * sz, o.y(), o.x() + i * sz, o.y() + n * sz)
            pr.drawLine(o.x(), o.y() + i * sz, o.x() + n * sz, o.y() + i * sz)
        pr.setPen(QPen(BOARD_FRAME, 2))
        pr.setBrush(Qt.NoBrush)
        pr.drawRect(o.x(), o.y(), n * sz, n * sz)

    # ── Mouse ───────────────────────────────────────────────

    def mouseMoveEvent(self, ev: QMouseEvent):
        cell = self._px_cell(ev.position().toPoint())
        if cell != self._hover:
            self._hover = cell
            self.update()

    def mousePressEvent(self, ev: QMouseEvent):
        if ev.button() != Qt.LeftButton or self.locked:
            return
        cell = self._px_cell(ev.position().toPoint())
        if cell is None:
            return
        row, col = cell
        # only empty cells accept input, so the engine never sees an occupied move
        if self.cells[row][col] != Symbol.EMPTY:
            return
        self.cell_clicked.emit(row, col)

    def leaveEvent(self, ev):
        self._hover = None
        self.update()
