import pytest

from connect_four.models import SessionStatus
from connect_four.services.games.board import Cell
from connect_four.services.games.coordinator import TurnCoordinator
from connect_four.services.games.errors import (
    ColumnFull,
    ColumnOutOfRange,
    GameNotFound,
    NotInProgress,
    NotYourTurn,
)
from connect_four.services.games.rules import OutcomeKind


@pytest.fixture()
def coordinator(registry):
    return TurnCoordinator(registry)


@pytest.fixture()
def started(registry):
    session = registry.create_game('g1')
    registry.join_game('g1', 'alice')
    registry.join_game('g1', 'bob')
    return session


def test_move_drops_piece_and_toggles_turn(coordinator, started):
    result = coordinator.apply_move('g1', 'alice', 3)
    assert (result.row, result.column) == (5, 3)
    assert result.marker is Cell.PLAYER_A
    assert result.next_turn is Cell.PLAYER_B
    assert started.current_turn is Cell.PLAYER_B
    assert started.board.cell(5, 3) is Cell.PLAYER_A
    assert started.move_count == 1
    assert not result.terminal


def test_unknown_session(coordinator):
    with pytest.raises(GameNotFound):
        coordinator.apply_move('missing', 'alice', 0)
    with pytest.raises(GameNotFound):
        coordinator.apply_move(None, 'alice', 0)


def test_lobby_session_rejects_moves(coordinator, registry):
    registry.create_game('lobby')
    registry.join_game('lobby', 'alice')
    with pytest.raises(NotInProgress):
        coordinator.apply_move('lobby', 'alice', 0)


def test_wrong_player_leaves_state_unchanged(coordinator, started):
    before = started.board.to_rows()
    with pytest.raises(NotYourTurn):
        coordinator.apply_move('g1', 'bob', 0)
    assert started.board.to_rows() == before
    assert started.current_turn is Cell.PLAYER_A
    assert started.move_count == 0


def test_spectator_cannot_move(coordinator, started):
    with pytest.raises(NotYourTurn):
        coordinator.apply_move('g1', 'mallory', 0)


def test_turn_is_checked_before_column(coordinator, started):
    with pytest.raises(NotYourTurn):
        coordinator.apply_move('g1', 'bob', 99)


@pytest.mark.parametrize('column', [-1, 7, '3', None, True])
def test_bad_column_keeps_turn(coordinator, started, column):
    with pytest.raises(ColumnOutOfRange):
        coordinator.apply_move('g1', 'alice', column)
    assert started.current_turn is Cell.PLAYER_A


def test_full_column_keeps_turn(coordinator, started):
    players = ['alice', 'bob']
    for i in range(6):
        coordinator.apply_move('g1', players[i % 2], 0)
    with pytest.raises(ColumnFull):
        coordinator.apply_move('g1', 'alice', 0)
    assert started.current_turn is Cell.PLAYER_A
    assert started.move_count == 6


def test_winning_move_finishes_session(coordinator, started):
    # alice fills row 5 columns 0..3, bob stacks on column 6
    for col in range(3):
        coordinator.apply_move('g1', 'alice', col)
        coordinator.apply_move('g1', 'bob', 6)
    result = coordinator.apply_move('g1', 'alice', 3)
    assert result.terminal
    assert result.outcome.kind is OutcomeKind.WIN
    assert result.outcome.winner is Cell.PLAYER_A
    assert started.status is SessionStatus.FINISHED
    assert started.finished_at is not None
    with pytest.raises(NotInProgress):
        coordinator.apply_move('g1', 'bob', 5)


def test_filling_the_board_is_a_draw(coordinator, registry):
    registry.create_game('draw')
    registry.join_game('draw', 'alice')
    registry.join_game('draw', 'bob')
    # Column pairs in this order never line up four of a kind
    order = [0, 1, 0, 1, 0, 1, 1, 0, 1, 0, 1, 0,
             2, 3, 2, 3, 2, 3, 3, 2, 3, 2, 3, 2,
             4, 5, 4, 5, 4, 5, 5, 4, 5, 4, 5, 4,
             6, 6, 6, 6, 6, 6]
    players = ['alice', 'bob']
    result = None
    for i, col in enumerate(order):
        result = coordinator.apply_move('draw', players[i % 2], col)
        if result.terminal:
            break
    assert i == len(order) - 1
    assert result.outcome.kind is OutcomeKind.DRAW
    assert registry.get('draw').status is SessionStatus.FINISHED


def test_scripted_game_ends_with_horizontal_win(coordinator, started):
    # Column 3 alternates A,B,A,B,A from the bottom without a winner.
    moves = [('alice', 3), ('bob', 3), ('alice', 3), ('bob', 3), ('alice', 3),
             ('bob', 6), ('alice', 0), ('bob', 6), ('alice', 1), ('bob', 5)]
    for handle, col in moves:
        assert not coordinator.apply_move('g1', handle, col).terminal
    column3 = [started.board.cell(r, 3) for r in range(5, 0, -1)]
    assert column3 == [Cell.PLAYER_A, Cell.PLAYER_B] * 2 + [Cell.PLAYER_A]
    result = coordinator.apply_move('g1', 'alice', 2)
    assert result.outcome.winner is Cell.PLAYER_A
    assert result.outcome.line == ((5, 0), (5, 1), (5, 2), (5, 3))
    assert started.status is SessionStatus.FINISHED


def test_result_keeps_board_as_of_the_move(coordinator, started):
    result = coordinator.apply_move('g1', 'alice', 3)
    # the opponent moves before the first result is sent out
    coordinator.apply_move('g1', 'bob', 3)
    assert result.game_state[4][3] == 'blank'
    assert result.game_state[5][3] == 'blue'
    assert started.board.to_rows()[4][3] == 'red'
