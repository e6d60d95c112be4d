import os
import sys
from typing import List

# To ensure we can import from the mnkengine package
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from PySide6.QtWidgets import (
    QApplication,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QCheckBox,
    QPushButton,
)
from PySide6.QtGui import QIntValidator

from mnkengine.config import CONFIG, setup_logging
from gui.helpers import QSS
from gui.widgets import GameWindow

MAX_SIZE = 15


class StartWindow(QWidget):
    """Board size field, first-move checkbox and a start button."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle(CONFIG.ui.window_title)
        self.setMinimumSize(300, 300)
        self._games: List[GameWindow] = []

        root = QVBoxLayout(self)
        root.setContentsMargins(24, 24, 24, 24)
        root.setSpacing(12)
        root.addStretch()

        row = QHBoxLayout()
        row.addWidget(QLabel("Board size:"))
        self.size_field = QLineEdit(str(CONFIG.ui.default_size))
        self.size_field.setValidator(QIntValidator(1, MAX_SIZE, self))
        self.size_field.returnPressed.connect(self.start_game)
        row.addWidget(self.size_field)
        root.addLayout(row)

        self.first_move_box = QCheckBox("I move first")
        self.first_move_box.setChecked(True)
        root.addWidget(self.first_move_box)

        self.start_button = QPushButton("Start")
        self.start_button.clicked.connect(self.start_game)
        root.addWidget(self.start_button)
        root.addStretch()

    def start_game(self):
        text = self.size_field.text().strip()
        if not text:
            return
        size = int(text)
        if size < 1:
            return
        game = GameWindow(size, self.first_move_box.isChecked())
        game.finished.connect(lambda _outcome, g=game: self._forget(g))
        self._games.append(game)
        game.show()

    def _forget(self, game: GameWindow):
        if game in self._games:
            self._games.remove(game)


def main() -> int:
    setup_logging()
    app = QApplication(sys.argv)
    app.setStyleSheet(QSS)
    window = StartWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
