"""Shared helpers for the desktop front-end: theme and the engine worker."""

import os
import sys
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from PySide6.QtGui import QColor

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from mnkengine.config import CONFIG

# ── Board colors ────────────────────────────────────────────
CELL_BG = QColor("#f4f1ea")
CELL_HOVER = QColor("#e6e0d2")
CELL_LAST_MOVE = QColor(246, 246, 105, 130)
GRID_LINE = QColor("#3c3a36")
BOARD_FRAME = QColor("#1b1a18")

SYMBOL_COLORS = {
    "X": QColor(CONFIG.ui.x_color),
    "O": QColor(CONFIG.ui.o_color),
}

MIN_CELL_PX = CONFIG.ui.min_cell_px
POLL_MS = 50

# ── QSS Stylesheet ──────────────────────────────────────────
QSS = """
QWidget { background: #262522; color: #c3c1bf; font-size: 13px; }

QPushButton {
    background: qlineargradient(x1:0,y1:0,x2:0,y2:1,
        stop:0 #8ece52, stop:1 #73a83e);
    color: #ffffff; border: none;
    padding: 10px 22px; border-radius: 6px;
    font-size: 13px; font-weight: bold;
}
QPushButton:hover {
    background: qlineargradient(x1:0,y1:0,x2:0,y2:1,
        stop:0 #9ddb62, stop:1 #81b64c);
}
QPushButton:pressed { background: #6a9a3c; }

QLineEdit {
    background: #3c3a36; color: #ffffff;
    border: 1px solid #48463f; border-radius: 5px; padding: 6px 8px;
}
QLineEdit:focus { border-color: #81b64c; }

QCheckBox { spacing: 8px; }

QLabel#status { color: #ffffff; font-size: 14px; font-weight: bold; }
QLabel#thinking { color: #f0c15c; font-size: 12px; }
"""


# ── Engine worker ───────────────────────────────────────────
class EngineWorker:
    """Single-thread executor so at most one search touches the engine at a time."""

    def __init__(self):
        self.pool: Optional[ThreadPoolExecutor] = None

    def start(self):
        self.pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mnk-search")

    def submit(self, fn: Callable, *args) -> Optional[Future]:
        if self.pool:
            return self.pool.submit(fn, *args)
        return None

    def shutdown(self):
        if self.pool:
            self.pool.shutdown(wait=False, cancel_futures=True)
            self.pool = None
