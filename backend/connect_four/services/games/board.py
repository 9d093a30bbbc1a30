from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List

from .errors import ColumnFull, ColumnOutOfRange

ROWS = 6
COLS = 7


class Cell(str, enum.Enum):
    """State of a single board cell.

    The values are the colour names clients render, so a cell serializes
    as-is. ``PLAYER_A`` always belongs to the first player to join.
    """
    EMPTY = 'blank'
    PLAYER_A = 'blue'
    PLAYER_B = 'red'

    @property
    def opponent(self) -> 'Cell':
        if self is Cell.PLAYER_A:
            return Cell.PLAYER_B
        if self is Cell.PLAYER_B:
            return Cell.PLAYER_A
        raise ValueError('An empty cell has no opponent')


MARKERS = (Cell.PLAYER_A, Cell.PLAYER_B)


@dataclass
class Board:
    rows: int = ROWS
    cols: int = COLS
    # grid[0] is the top row, grid[rows - 1] the row pieces land on first
    grid: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError('Board needs at least one row and one column')
        if not self.grid:
            self.grid = [[Cell.EMPTY for _ in range(self.cols)] for _ in range(self.rows)]
        elif len(self.grid) != self.rows or any(len(row) != self.cols for row in self.grid):
            raise ValueError(f'Grid must be {self.rows}x{self.cols}')

    def cell(self, row: int, col: int) -> Cell:
        return self.grid[row][col]

    def has_room(self, column: int) -> bool:
        return self.grid[0][column] is Cell.EMPTY

    def is_full(self) -> bool:
        return all(c is not Cell.EMPTY for c in self.grid[0])

    def check_column(self, column) -> int:
        """Validate a column index without touching the board.

        Raises ColumnOutOfRange or ColumnFull; returns the column as an int.
        """
        # bool is an int subclass but never a meaningful column
        if isinstance(column, bool) or not isinstance(column, int):
            raise ColumnOutOfRange(f'Column must be an integer in [0, {self.cols}), got {column!r}')
        if column < 0 or column >= self.cols:
            raise ColumnOutOfRange(f'Column must be in [0, {self.cols}), got {column}')
        if not self.has_room(column):
            raise ColumnFull(f'Column {column} is full')
        return column

    def drop(self, column, marker: Cell) -> int:
        """Drop ``marker`` into ``column`` and return the row it lands on."""
        if marker not in MARKERS:
            raise ValueError(f'Cannot drop {marker!r}')
        c = self.check_column(column)
        # check_column guarantees an empty cell; gravity puts the piece in the lowest one
        row = next(r for r in range(self.rows - 1, -1, -1) if self.grid[r][c] is Cell.EMPTY)
        self.grid[row][c] = marker
        return row

    def to_rows(self) -> List[List[str]]:
        return [[cell.value for cell in row] for row in self.grid]


def empty_board(rows: int = ROWS, cols: int = COLS) -> Board:
    return Board(rows, cols)
