"""Recoverable game errors.

Every error carries a stable ``code`` that is sent to the requesting client
as the ``reason`` of its failure event. None of them are fatal to the server
and none are raised after shared state has been mutated.
"""


class GameError(Exception):
    code = 'game_error'

    def to_payload(self) -> dict:
        return {'reason': self.code, 'message': str(self)}


class InvalidPayload(GameError):
    code = 'invalid_payload'


class InvalidGameName(GameError):
    code = 'invalid_game_name'


class NameTaken(GameError):
    code = 'name_taken'


class GameNotFound(GameError):
    code = 'not_found'


class GameFull(GameError):
    code = 'game_full'


class AlreadyInGame(GameError):
    code = 'already_in_game'


class NotInProgress(GameError):
    code = 'not_in_progress'


class NotYourTurn(GameError):
    code = 'not_your_turn'


class ColumnOutOfRange(GameError):
    code = 'column_out_of_range'


class ColumnFull(GameError):
    code = 'column_full'
