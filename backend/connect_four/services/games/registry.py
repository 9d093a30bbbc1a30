import logging
import threading
from typing import Dict, List, Optional

from connect_four.models import GameSession, PlayerSlot
from .board import COLS, ROWS, Board
from .errors import AlreadyInGame, GameNotFound, InvalidGameName, NameTaken
from .rules import CONNECT_N

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Catalog of named game sessions for one server process.

    The name -> session map and the handle -> session-name index are guarded
    by the registry lock; per-session state is guarded by each session's own
    lock. Session names are matched exactly (case-sensitive).
    """

    def __init__(
        self,
        rows: int = ROWS,
        cols: int = COLS,
        connect_n: int = CONNECT_N,
        max_name_length: int = 64,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self.connect_n = connect_n
        self.max_name_length = max_name_length
        self._sessions: Dict[str, GameSession] = {}
        self._seats: Dict[str, str] = {}  # handle -> session name
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, name) -> bool:
        return self._lookup(name) is not None

    def _validate_name(self, name) -> str:
        if not isinstance(name, str) or not name:
            raise InvalidGameName('Game name must be a non-empty string')
        if len(name) > self.max_name_length:
            raise InvalidGameName(f'Game name must be at most {self.max_name_length} characters')
        return name

    def _lookup(self, name) -> Optional[GameSession]:
        # payloads are arbitrary JSON; only strings can name a game
        if not isinstance(name, str):
            return None
        return self._sessions.get(name)

    def get(self, name: str) -> GameSession:
        with self._lock:
            session = self._lookup(name)
        if session is None:
            raise GameNotFound(f'No game named {name!r}')
        return session

    def list_open_games(self) -> List[str]:
        with self._lock:
            return [name for name, session in self._sessions.items() if session.is_open]

    def create_game(self, name) -> GameSession:
        name = self._validate_name(name)
        with self._lock:
            if name in self._sessions:
                raise NameTaken(f'A game named {name!r} already exists')
            session = GameSession(
                name=name,
                board=Board(self.rows, self.cols),
                connect_n=self.connect_n,
            )
            self._sessions[name] = session
        logger.info(f"[create] game={name!r} board={self.rows}x{self.cols} connect={self.connect_n}")
        return session

    def session_for(self, handle: str, include_finished: bool = False) -> Optional[GameSession]:
        """Return the session ``handle`` is seated in, if any.

        Finished sessions only count when ``include_finished`` is set; a seat in
        a finished game does not stop the handle from joining another.
        """
        with self._lock:
            name = self._seats.get(handle)
            session = self._sessions.get(name) if name is not None else None
        if session is None or (session.is_finished and not include_finished):
            return None
        return session

    def join_game(self, name, handle: str) -> PlayerSlot:
        with self._lock:
            session = self._lookup(name)
            if session is None:
                raise GameNotFound(f'No game named {name!r}')
            current = self.session_for(handle)
            if current is not None:
                raise AlreadyInGame(f'Already playing in game {current.name!r}')
            with session.lock:
                slot = session.add_player(handle)
            self._seats[handle] = session.name
        logger.info(f"[join] game={session.name!r} color={slot.marker.value} players={len(session.players)}")
        return slot

    def evict(self, name: str) -> Optional[GameSession]:
        with self._lock:
            session = self._sessions.pop(name, None)
            if session is None:
                return None
            for handle in session.handles:
                if self._seats.get(handle) == name:
                    del self._seats[handle]
        logger.info(f"[evict] game={name!r} status={session.status.value}")
        return session

