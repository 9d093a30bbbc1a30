import enum
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional

from connect_four.services.games.board import Board, Cell, MARKERS, empty_board
from connect_four.services.games.errors import GameFull
from connect_four.services.games.rules import CONNECT_N, Outcome

MAX_PLAYERS = 2


class SessionStatus(str, enum.Enum):
    LOBBY = 'lobby'
    IN_PROGRESS = 'in_progress'
    FINISHED = 'finished'


@dataclass(frozen=True)
class PlayerSlot:
    handle: str
    marker: Cell

    def to_dict(self):
        # connection handles stay server side
        return {'color': self.marker.value}


@dataclass
class GameSession:
    """One match between at most two connections.

    The first player admitted plays ``Cell.PLAYER_A`` and moves first; the
    second plays ``Cell.PLAYER_B``. Mutations go through the registry and the
    turn coordinator, which hold ``lock`` while they check and write.
    """
    name: str
    board: Board = field(default_factory=empty_board)
    connect_n: int = CONNECT_N
    players: List[PlayerSlot] = field(default_factory=list)
    current_turn: Cell = Cell.PLAYER_A
    status: SessionStatus = SessionStatus.LOBBY
    outcome: Outcome = field(default_factory=Outcome.ongoing)
    move_count: int = 0
    created_at: float = field(default_factory=time.time)
    finished_at: Optional[float] = None
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def is_open(self) -> bool:
        return len(self.players) < MAX_PLAYERS

    @property
    def is_finished(self) -> bool:
        return self.status is SessionStatus.FINISHED

    @property
    def handles(self) -> List[str]:
        return [slot.handle for slot in self.players]

    def slot_for(self, handle: str) -> Optional[PlayerSlot]:
        for slot in self.players:
            if slot.handle == handle:
                return slot
        return None

    def add_player(self, handle: str) -> PlayerSlot:
        if not self.is_open:
            raise GameFull(f'Game {self.name!r} already has {MAX_PLAYERS} players')
        slot = PlayerSlot(handle=handle, marker=MARKERS[len(self.players)])
        self.players.append(slot)
        if len(self.players) == MAX_PLAYERS:
            self.status = SessionStatus.IN_PROGRESS
        return slot

    def finish(self, outcome: Outcome) -> None:
        self.outcome = outcome
        self.status = SessionStatus.FINISHED
        self.finished_at = time.time()

    def to_dict(self):
        return {
            'name': self.name,
            'status': self.status.value,
            'current_turn': self.current_turn.value,
            'players': [slot.to_dict() for slot in self.players],
            'board': self.board.to_rows(),
            'rows': self.board.rows,
            'cols': self.board.cols,
            'connect_n': self.connect_n,
            'move_count': self.move_count,
            'outcome': self.outcome.to_dict(),
            'created_at': self.created_at,
            'finished_at': self.finished_at,
        }
