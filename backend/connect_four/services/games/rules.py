from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .board import Board, Cell

CONNECT_N = 4

Coord = Tuple[int, int]  # (row, col)

# (row step, col step) in scan order: horizontal, vertical, down-right, down-left
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


class OutcomeKind(str, enum.Enum):
    ONGOING = 'ongoing'
    WIN = 'win'
    DRAW = 'draw'


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    winner: Optional[Cell] = None
    line: Tuple[Coord, ...] = ()

    @classmethod
    def ongoing(cls) -> 'Outcome':
        return cls(OutcomeKind.ONGOING)

    @classmethod
    def draw(cls) -> 'Outcome':
        return cls(OutcomeKind.DRAW)

    @classmethod
    def win(cls, winner: Cell, line: Tuple[Coord, ...]) -> 'Outcome':
        return cls(OutcomeKind.WIN, winner, line)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not OutcomeKind.ONGOING

    def to_dict(self) -> dict:
        return {
            'kind': self.kind.value,
            'winner': self.winner.value if self.winner else None,
            'line': [list(coord) for coord in self.line],
        }


def _run(row: int, col: int, step: Tuple[int, int], length: int) -> List[Coord]:
    dr, dc = step
    return [(row + i * dr, col + i * dc) for i in range(length)]


def _in_bounds(board: Board, coord: Coord) -> bool:
    r, c = coord
    return 0 <= r < board.rows and 0 <= c < board.cols


def iter_lines(board: Board, connect_n: int = CONNECT_N) -> Iterator[List[Coord]]:
    """Yield every in-bounds run of ``connect_n`` cells.

    Runs come out direction by direction (horizontal, vertical, down-right,
    down-left) and within a direction row-major by starting cell, so the
    first winning run found is the same on every call.
    """
    for step in DIRECTIONS:
        for r in range(board.rows):
            for c in range(board.cols):
                run = _run(r, c, step, connect_n)
                if _in_bounds(board, run[-1]):
                    yield run


def find_winner(board: Board, connect_n: int = CONNECT_N) -> Optional[Tuple[Cell, List[Coord]]]:
    for run in iter_lines(board, connect_n):
        first = board.cell(*run[0])
        if first is Cell.EMPTY:
            continue
        if all(board.cell(r, c) is first for r, c in run[1:]):
            return first, run
    return None


def evaluate(board: Board, connect_n: int = CONNECT_N) -> Outcome:
    """Classify the board as ongoing, won or drawn.

    A win is looked for before a draw, since the move that fills the last
    open cell can also complete a line.
    """
    if connect_n < 1:
        raise ValueError('connect_n must be positive')
    found = find_winner(board, connect_n)
    if found is not None:
        winner, line = found
        return Outcome.win(winner, tuple(line))
    if board.is_full():
        return Outcome.draw()
    return Outcome.ongoing()
