"""Inbound client intents.

Each socket.io event a client may send maps to one intent type. Parsing the
payload into an intent is the only place the wire format is interpreted; the
dispatcher works on intents alone.
"""
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Optional, Type

from connect_four.services.games.errors import InvalidPayload


@dataclass(frozen=True)
class Intent:
    event: ClassVar[str] = ''
    # Event sent back to the requester when the intent is rejected
    failure_event: ClassVar[Optional[str]] = None

    @classmethod
    def from_payload(cls, payload: Any) -> 'Intent':
        raise NotImplementedError


def _game_name(payload: Any) -> Any:
    # Older clients send the bare name, newer ones {"gameName": ...}
    if isinstance(payload, dict):
        if 'gameName' not in payload:
            raise InvalidPayload('Missing gameName')
        return payload['gameName']
    return payload


@dataclass(frozen=True)
class ListOpenGames(Intent):
    event: ClassVar[str] = 'getListOfOpenGames'

    @classmethod
    def from_payload(cls, payload: Any) -> 'ListOpenGames':
        return cls()


@dataclass(frozen=True)
class CreateGame(Intent):
    event: ClassVar[str] = 'createNewGame'
    failure_event: ClassVar[Optional[str]] = 'failedToCreateGame'
    name: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> 'CreateGame':
        return cls(name=_game_name(payload))


@dataclass(frozen=True)
class JoinGame(Intent):
    event: ClassVar[str] = 'addPlayerToGame'
    failure_event: ClassVar[Optional[str]] = 'failedToAddPlayer'
    name: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> 'JoinGame':
        return cls(name=_game_name(payload))


@dataclass(frozen=True)
class Move(Intent):
    event: ClassVar[str] = 'playerMove'
    failure_event: ClassVar[Optional[str]] = 'playerNotAllowedToMove'
    column: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> 'Move':
        if isinstance(payload, dict):
            # A board snapshot from the client is never trusted; only the column counts.
            if 'column' not in payload:
                raise InvalidPayload('Moves must name a column')
            return cls(column=payload['column'])
        if payload is None:
            raise InvalidPayload('Moves must name a column')
        return cls(column=payload)


INBOUND_EVENTS: Dict[str, Type[Intent]] = {
    intent.event: intent for intent in (ListOpenGames, CreateGame, JoinGame, Move)
}


def intent_type(event: str) -> Type[Intent]:
    try:
        return INBOUND_EVENTS[event]
    except KeyError:
        raise InvalidPayload(f'Unknown event {event!r}') from None


def parse_intent(event: str, payload: Any = None) -> Intent:
    return intent_type(event).from_payload(payload)
