import logging
from typing import Any, Callable, Dict, Optional, Type

from connect_four.intents import CreateGame, Intent, JoinGame, ListOpenGames, Move, intent_type, parse_intent
from connect_four.models import GameSession
from connect_four.services.games.coordinator import MoveResult, TurnCoordinator
from connect_four.services.games.errors import GameError
from connect_four.services.games.registry import SessionRegistry
from connect_four.services.games.retention import RetentionScheduler


class IntentDispatcher:
    """Route client intents to the registry and coordinator.

    Every handler validates before it mutates, so a ``GameError`` leaves
    shared state untouched; it is turned into a single failure event for
    the requesting connection. Anything else propagates.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        gateway,
        coordinator: Optional[TurnCoordinator] = None,
        retention: Optional[RetentionScheduler] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.registry = registry
        self.gateway = gateway
        self.coordinator = coordinator or TurnCoordinator(registry)
        self.retention = retention
        self.logger = logger or logging.getLogger(__name__)
        self._handlers: Dict[Type[Intent], Callable[[str, Any], None]] = {
            ListOpenGames: self._list_open_games,
            CreateGame: self._create_game,
            JoinGame: self._join_game,
            Move: self._move,
        }

    def handle_event(self, handle: str, event: str, payload: Any = None) -> bool:
        """Parse a raw inbound event and dispatch it. Returns True on success."""
        try:
            intent = parse_intent(event, payload)
        except GameError as exc:
            self._reject(handle, intent_type(event), exc)
            return False
        return self.dispatch(handle, intent)

    def dispatch(self, handle: str, intent: Intent) -> bool:
        handler = self._handlers[type(intent)]
        try:
            handler(handle, intent)
        except GameError as exc:
            self._reject(handle, type(intent), exc)
            return False
        return True

    def _reject(self, handle: str, kind: Type[Intent], exc: GameError) -> None:
        self.logger.info(f"[reject] event={kind.event} reason={exc.code} handle={handle} msg={exc}")
        if kind.failure_event:
            self.gateway.send(handle, kind.failure_event, exc.to_payload())

    # ---- payloads ----

    def open_games_payload(self) -> dict:
        return {'openGameNames': self.registry.list_open_games()}

    def broadcast_open_games(self) -> None:
        self.gateway.broadcast('displayListOfGames', self.open_games_payload())

    def _notify_players(self, session: GameSession, event: str, payload: dict) -> None:
        for handle in session.handles:
            self.gateway.send(handle, event, payload)

    # ---- handlers ----

    def _list_open_games(self, handle: str, intent: ListOpenGames) -> None:
        self.gateway.send(handle, 'displayListOfGames', self.open_games_payload())

    def _create_game(self, handle: str, intent: CreateGame) -> None:
        session = self.registry.create_game(intent.name)
        self.gateway.send(handle, 'gameCreated', {'gameName': session.name})
        self.broadcast_open_games()

    def _join_game(self, handle: str, intent: JoinGame) -> None:
        slot = self.registry.join_game(intent.name, handle)
        session = self.registry.get(intent.name)
        self.gateway.send(handle, 'playerAddedToGame', {
            'playerColor': slot.marker.value,
            'gameName': session.name,
        })
        if not session.is_open:
            self.logger.info(f"[start] game={session.name!r} first={session.current_turn.value}")
            self._notify_players(session, 'gameStarted', {'currentTurnColor': session.current_turn.value})
            # A full game drops off every lobby list
            self.broadcast_open_games()

    def _move(self, handle: str, intent: Move) -> None:
        session = self.registry.session_for(handle, include_finished=True)
        result = self.coordinator.apply_move(session.name if session else None, handle, intent.column)
        self._notify_players(result.session, 'gameStateUpdate', {
            'currentTurnColor': result.next_turn.value,
            'gameState': result.game_state,
        })
        if result.terminal:
            self._notify_players(result.session, 'gameOver', self.game_over_payload(result))
            if self.retention is not None:
                self.retention.schedule(result.session.name)

    @staticmethod
    def game_over_payload(result: MoveResult) -> dict:
        outcome = result.outcome
        return {
            'winnerColor': outcome.winner.value if outcome.winner else None,
            'isDraw': outcome.winner is None,
            'winningCells': [list(coord) for coord in outcome.line],
        }
