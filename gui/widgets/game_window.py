"""Game window: one human-vs-engine game on an N x N grid."""

import logging
from concurrent.futures import Future
from typing import Optional

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QMessageBox
from PySide6.QtCore import QTimer, Signal

from mnkengine.session import GameSession
from gui.helpers import CONFIG, POLL_MS, EngineWorker
from gui.widgets.board import GridBoardWidget

logger = logging.getLogger(__name__)


class GameWindow(QWidget):
    """Owns a GameSession; searches run on the worker and land back here via polling."""

    finished = Signal(str)

    def __init__(self, size: int, human_first: bool, parent=None):
        super().__init__(parent)
        self.session = GameSession(size, human_first)
        self.worker = EngineWorker()
        self.worker.start()
        self._future: Optional[Future] = None

        self.setWindowTitle(f"{CONFIG.ui.window_title} ({size}x{size}, {self.session.required_run} in a row)")
        self.setMinimumSize(CONFIG.ui.min_window_px, CONFIG.ui.min_window_px)
        self._build_ui()

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._poll)
        self._timer.start(POLL_MS)

        if self.session.engine_to_move:
            self._start_engine()
        else:
            self._set_status("Your move")

    # ── UI construction ─────────────────────────────────────

    def _build_ui(self):
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(6)

        bar = QHBoxLayout()
        self.lbl_status = QLabel()
        self.lbl_status.setObjectName("status")
        bar.addWidget(self.lbl_status)
        bar.addStretch()
        self._thinking_lbl = QLabel("Engine thinking…")
        self._thinking_lbl.setObjectName("thinking")
        self._thinking_lbl.hide()
        bar.addWidget(self._thinking_lbl)
        root.addLayout(bar)

        self.bw = GridBoardWidget(self.session.size)
        self.bw.cell_clicked.connect(self._human_move)
        root.addWidget(self.bw, stretch=1)

    def _set_status(self, text: str):
        symbol = self.session.human_symbol.name
        self.lbl_status.setText(f"{text}  ·  you are {symbol}")

    # ── Game logic ──────────────────────────────────────────

    def _human_move(self, row: int, col: int):
        if self._future is not None or self.session.is_over:
            return
        self.session.apply_human(row, col)
        self.bw.sync(self.session.engine.board)
        if self._check_game_over():
            return
        self._start_engine()

    def _start_engine(self):
        future = self.worker.submit(self.session.think)
        if future is None:
            self._set_status("Engine unavailable")
            return
        self._future = future
        self.bw.locked = True
        self._thinking_lbl.show()

    def _poll(self):
        """Pick up a finished search on the UI thread."""
        if self._future is None or not self._future.done():
            return
        future, self._future = self._future, None
        self.bw.locked = False
        self._thinking_lbl.hide()
        try:
            row, col = future.result()
        except Exception as exc:
            logger.exception("Engine search failed")
            self._set_status(f"Engine error: {exc}")
            return
        self.session.apply_engine(row, col)
        self.bw.sync(self.session.engine.board)
        if not self._check_game_over():
            self._set_status("Your move")

    def _check_game_over(self) -> bool:
        result = self.session.result()
        if result is None:
            return False
        self._set_status("Game over")
        box = QMessageBox(self)
        box.setIcon(QMessageBox.Information)
        box.setWindowTitle(CONFIG.ui.window_title)
        box.setText(result.header)
        box.setInformativeText(result.message)
        box.exec()
        self.finished.emit(result.outcome.value)
        self.close()
        return True

    def closeEvent(self, event):
        self._timer.stop()
        self.worker.shutdown()
        super().closeEvent(event)
