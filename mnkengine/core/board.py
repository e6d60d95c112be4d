"""Board state for an m,n,k game: cells, ordered move set and win detection."""

from collections.abc import Sequence
from enum import IntEnum
from typing import Iterator, List, Tuple

Coord = Tuple[int, int]
LastMove = Tuple[int, int, "Symbol"]

# directions walked by the incremental check: down-right and down-left
DIAGONALS = ((1, 1), (1, -1))


class Symbol(IntEnum):
    EMPTY = 0
    X = 1
    O = 2

    @property
    def char(self) -> str:
        return "." if self is Symbol.EMPTY else self.name


class IllegalMoveError(ValueError):
    """Raised when a move targets a cell outside the board or an occupied cell."""


class MoveSet:
    """Ordered list of empty cells.

    Starts in row-major order. A coordinate removed at index ``i`` and later
    reinserted at ``i`` restores the exact previous order, so search always
    visits moves in the same sequence for the same position.
    """

    def __init__(self, size: int):
        self._moves: List[Coord] = [(r, c) for r in range(size) for c in range(size)]

    def remove(self, coord: Coord) -> int:
        index = self._moves.index(coord)
        del self._moves[index]
        return index

    def pop(self, index: int) -> Coord:
        return self._moves.pop(index)

    def insert(self, index: int, coord: Coord):
        self._moves.insert(index, coord)

    def __getitem__(self, index):
        return self._moves[index]

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self._moves)

    def __contains__(self, coord) -> bool:
        return coord in self._moves


class MoveSetView(Sequence):
    """Read-only view handed out to callers; iterating it never copies."""

    def __init__(self, moves: MoveSet):
        self._moves = moves

    def __getitem__(self, index):
        return self._moves[index]

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[Coord]:
        return iter(self._moves)

    def __contains__(self, coord) -> bool:
        return coord in self._moves

    def __repr__(self) -> str:
        return f"MoveSetView({list(self._moves)!r})"


def iter_lines(size: int, min_length: int = 1) -> Iterator[List[Coord]]:
    """Yield every row, column and diagonal (both directions) as coordinate lists.

    Each maximal line is produced exactly once. Diagonals shorter than
    ``min_length`` are skipped.
    """
    for i in range(size):
        yield [(i, c) for c in range(size)]
        yield [(r, i) for r in range(size)]

    # diagonals are keyed by their start cell on the top row or the side column
    starts = [(0, c) for c in range(size)] + [(r, 0) for r in range(1, size)]
    for r0, c0 in starts:
        length = size - max(r0, c0)
        if length >= min_length:
            yield [(r0 + i, c0 + i) for i in range(length)]

    starts = [(0, c) for c in range(size)] + [(r, size - 1) for r in range(1, size)]
    for r0, c0 in starts:
        length = min(size - r0, c0 + 1)
        if length >= min_length:
            yield [(r0 + i, c0 - i) for i in range(length)]


class Board:
    NO_MOVE: LastMove = (-1, -1, Symbol.EMPTY)

    def __init__(self, size: int, required_run: int):
        if size < 1:
            raise ValueError(f"Board size must be at least 1, got {size}")
        if required_run < 1:
            raise ValueError(f"Required run must be at least 1, got {required_run}")
        self.size = size
        self.required_run = required_run
        self.cells: List[List[Symbol]] = [[Symbol.EMPTY] * size for _ in range(size)]
        self.moves = MoveSet(size)
        self.last_move: LastMove = self.NO_MOVE

    def cell(self, row: int, col: int) -> Symbol:
        self._check_bounds(row, col)
        return self.cells[row][col]

    def _check_bounds(self, row: int, col: int):
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IllegalMoveError(f"({row}, {col}) is outside a {self.size}x{self.size} board")

    def apply_move(self, row: int, col: int, symbol: Symbol) -> int:
        """Place ``symbol`` and return the index the cell held in the move set."""
        self._check_bounds(row, col)
        if symbol == Symbol.EMPTY:
            raise IllegalMoveError("Cannot play the empty symbol")
        if self.cells[row][col] != Symbol.EMPTY:
            raise IllegalMoveError(f"Cell ({row}, {col}) is already taken by {self.cells[row][col].char}")
        self.cells[row][col] = symbol
        index = self.moves.remove((row, col))
        self.last_move = (row, col, symbol)
        return index

    def play_index(self, index: int, symbol: Symbol) -> Coord:
        """Fast path for search: play the move stored at ``index`` of the move set."""
        row, col = self.moves.pop(index)
        self.cells[row][col] = symbol
        self.last_move = (row, col, symbol)
        return row, col

    def retract_move(self, row: int, col: int, index: int, previous: LastMove):
        """Undo a move made by ``apply_move``/``play_index``.

        ``previous`` is the last move of the parent ply; it becomes the last
        move again so incremental win checks at that ply stay correct.
        """
        self.cells[row][col] = Symbol.EMPTY
        self.moves.insert(index, (row, col))
        self.last_move = previous

    def occupied_count(self) -> int:
        return self.size * self.size - len(self.moves)

    def is_full(self) -> bool:
        return len(self.moves) == 0

    # ── Win detection ───────────────────────────────────────

    def _has_run(self, line, symbol: Symbol) -> bool:
        counter = 0
        for row, col in line:
            if self.cells[row][col] == symbol:
                counter += 1
                if counter >= self.required_run:
                    return True
            else:
                counter = 0
        return False

    def has_won_full_scan(self, symbol: Symbol) -> bool:
        """Scan every line on the board for ``required_run`` consecutive ``symbol`` cells."""
        if self.required_run > self.size:
            return False
        return any(self._has_run(line, symbol) for line in iter_lines(self.size, self.required_run))

    def has_won_at(self, row: int, col: int, symbol: Symbol) -> bool:
        """Check only the lines through the cell just played.

        Row and column are scanned end to end; each diagonal is walked outward
        from the cell in both directions. A row of -1 means nothing has been
        played yet.
        """
        if row == -1:
            return False
        size = self.size
        k = self.required_run

        if self._has_run(((row, c) for c in range(size)), symbol):
            return True
        if self._has_run(((r, col) for r in range(size)), symbol):
            return True

        for dr, dc in DIAGONALS:
            count = 1 if self.cells[row][col] == symbol else 0
            if count == 0:
                continue
            for sign in (1, -1):
                r, c = row + sign * dr, col + sign * dc
                while 0 <= r < size and 0 <= c < size and self.cells[r][c] == symbol:
                    count += 1
                    r += sign * dr
                    c += sign * dc
            if count >= k:
                return True
        return False

    def render(self) -> str:
        """ASCII grid, one row per line."""
        return "\n".join(" ".join(cell.char for cell in row) for row in self.cells)

    def __str__(self):
        return self.render()
