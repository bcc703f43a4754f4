"""Tests for board derivation and the per-observer view."""

import pytest

from conftest import BLUE_PLAYER, RED_PLAYER, SPECTATOR, state_wire, team_wire
from teamwordle.board.colors import LetterColor
from teamwordle.board.derive import (
    BLANK_ROW,
    STATUS_GAME_OVER,
    STATUS_ON_TEAM,
    STATUS_SPECTATING,
    Board,
    derive_board,
    derive_view,
)
from teamwordle.board.visibility import ObserverRole
from teamwordle.core.models import MAX_GUESSES, WORD_LENGTH, ContractViolation, GameState, Guess

D, A, C = LetterColor.DISPLACED, LetterColor.ABSENT, LetterColor.CORRECT


def _guess(word, codes):
    return Guess(word=tuple(word), color_codes=tuple(codes))


def _letters(row):
    return "".join(cell.letter for cell in row.cells)


def _colors(row):
    return [cell.color for cell in row.cells]


# ------------------------------------------------------------------
# derive_board
# ------------------------------------------------------------------

class TestDeriveBoard:
    @pytest.mark.parametrize("count", range(MAX_GUESSES + 1))
    def test_always_six_rows(self, count):
        board = derive_board([_guess("CRANE", [0] * 5)] * count, reveal=True)
        assert len(board.rows) == MAX_GUESSES
        assert all(len(row.cells) == WORD_LENGTH for row in board.rows)
        assert board.guesses_used == count

    def test_empty_board_is_blank(self):
        board = derive_board([], reveal=True)
        assert all(row == BLANK_ROW for row in board.rows)
        assert all(row.is_blank for row in board.rows)
        assert not any(cell.filled for row in board.rows for cell in row.cells)

    def test_revealed_row(self):
        board = derive_board([_guess("CRANE", [0, 1, -1, 0, 0])], reveal=True)
        assert _letters(board.rows[0]) == "CRANE"
        assert _colors(board.rows[0]) == [A, C, D, A, A]

    def test_hidden_row_keeps_colors(self):
        board = derive_board([_guess("CRANE", [0, 1, -1, 0, 0])], reveal=False)
        row = board.rows[0]
        assert _letters(row) == ""
        assert _colors(row) == [A, C, D, A, A]
        assert all(cell.filled for cell in row.cells)
        assert not row.is_blank

    def test_oldest_guess_first(self):
        board = derive_board(
            [_guess("CRANE", [0] * 5), _guess("SAUTE", [1] * 5)], reveal=True
        )
        assert [_letters(r) for r in board.rows[:2]] == ["CRANE", "SAUTE"]

    def test_more_than_six_guesses_fails_loudly(self):
        with pytest.raises(ContractViolation):
            derive_board([_guess("CRANE", [0] * 5)] * (MAX_GUESSES + 1), reveal=True)

    def test_idempotent(self):
        guesses = (_guess("CRANE", [0, 1, -1, 0, 0]), _guess("SAUTE", [1] * 5))
        assert derive_board(guesses, reveal=False) == derive_board(guesses, reveal=False)

    def test_frozen(self):
        board = derive_board([], reveal=True)
        with pytest.raises(AttributeError):
            board.rows = ()


# ------------------------------------------------------------------
# derive_view: end-to-end scenarios
# ------------------------------------------------------------------

class TestDeriveView:
    def test_opposing_team_sees_colors_only(self, two_guess_state):
        state = GameState.from_wire(two_guess_state)
        view = derive_view(state, BLUE_PLAYER, game_over=False)

        red = view.team_one
        assert [_letters(r) for r in red.rows[:2]] == ["", ""]
        assert _colors(red.rows[0]) == [A, C, D, A, A]
        assert _colors(red.rows[1]) == [C] * 5
        assert all(r.is_blank for r in red.rows[2:])
        assert all(r.is_blank for r in view.team_two.rows)
        assert len(view.team_two.rows) == MAX_GUESSES

    def test_game_over_reveals_to_opposing_team(self, two_guess_state):
        state = GameState.from_wire(two_guess_state)
        view = derive_view(state, BLUE_PLAYER, game_over=True)
        assert [_letters(r) for r in view.team_one.rows[:2]] == ["CRANE", "SAUTE"]

    def test_spectator_sees_both(self):
        state = GameState.from_wire(
            state_wire(
                team_one=team_wire([RED_PLAYER], [("CRANE", [0, 1, -1, 0, 0])]),
                team_two=team_wire([BLUE_PLAYER], [("SLATE", [0, 0, 1, 0, 1])]),
            )
        )
        view = derive_view(state, SPECTATOR, game_over=False)
        assert _letters(view.team_one.rows[0]) == "CRANE"
        assert _letters(view.team_two.rows[0]) == "SLATE"

    def test_own_team_letters_visible(self, two_guess_state):
        state = GameState.from_wire(two_guess_state)
        view = derive_view(state, RED_PLAYER, game_over=False)
        assert _letters(view.team_one.rows[0]) == "CRANE"

    def test_absent_teams_give_blank_boards(self):
        view = derive_view(GameState(), SPECTATOR, game_over=False)
        assert view.team_one == view.team_two
        assert all(r.is_blank for r in view.team_one.rows)
        assert isinstance(view.team_one, Board)

    def test_idempotent(self, two_guess_state):
        state = GameState.from_wire(two_guess_state)
        assert derive_view(state, BLUE_PLAYER, False) == derive_view(state, BLUE_PLAYER, False)

    def test_player_on_both_rosters(self):
        state = GameState.from_wire(
            state_wire(team_one=team_wire(["dup"]), team_two=team_wire(["dup"]))
        )
        with pytest.raises(ContractViolation):
            derive_view(state, "dup", game_over=False)


class TestViewStatus:
    def test_spectator(self, two_guess_state):
        view = derive_view(GameState.from_wire(two_guess_state), SPECTATOR, False)
        assert view.role is ObserverRole.SPECTATOR
        assert view.status == STATUS_SPECTATING
        assert view.input_enabled is False

    def test_team_member(self, two_guess_state):
        view = derive_view(GameState.from_wire(two_guess_state), RED_PLAYER, False)
        assert view.role is ObserverRole.TEAM_ONE
        assert view.status == STATUS_ON_TEAM
        assert view.input_enabled is True

    def test_game_over(self, two_guess_state):
        view = derive_view(GameState.from_wire(two_guess_state), BLUE_PLAYER, True)
        assert view.status == STATUS_GAME_OVER
        assert view.input_enabled is False
