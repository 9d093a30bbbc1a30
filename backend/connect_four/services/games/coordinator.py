import logging
from dataclasses import dataclass
from typing import List

from connect_four.models import GameSession, SessionStatus
from .board import Cell
from .errors import GameNotFound, NotInProgress, NotYourTurn
from .registry import SessionRegistry
from .rules import Outcome, evaluate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    session: GameSession
    row: int
    column: int
    marker: Cell
    next_turn: Cell
    outcome: Outcome
    # board as sent to clients, captured while the session lock was held
    game_state: List[List[str]]

    @property
    def terminal(self) -> bool:
        return self.outcome.is_terminal


class TurnCoordinator:
    """Validate and apply moves against the registry's sessions.

    The board held by the session is authoritative; the only client input a
    move consumes is the column index.
    """

    def __init__(self, registry: SessionRegistry) -> None:
        self.registry = registry

    def apply_move(self, session_name: str, handle: str, column) -> MoveResult:
        session = self.registry.get(session_name) if session_name is not None else None
        if session is None:
            raise GameNotFound('You are not seated in any game')

        with session.lock:
            if session.status is not SessionStatus.IN_PROGRESS:
                raise NotInProgress(f'Game {session.name!r} is {session.status.value}')

            slot = session.slot_for(handle)
            if slot is None or slot.marker is not session.current_turn:
                raise NotYourTurn(f'It is {session.current_turn.value}\'s turn')

            board = session.board
            column = board.check_column(column)
            row = board.drop(column, slot.marker)
            session.move_count += 1
            session.current_turn = slot.marker.opponent

            outcome = evaluate(board, session.connect_n)
            if outcome.is_terminal:
                session.finish(outcome)
                logger.info(
                    f"[finish] game={session.name!r} outcome={outcome.kind.value} "
                    f"winner={outcome.winner.value if outcome.winner else None} moves={session.move_count}"
                )
            return MoveResult(
                session=session,
                row=row,
                column=column,
                marker=slot.marker,
                next_turn=session.current_turn,
                outcome=outcome,
                game_state=board.to_rows(),
            )
