"""Fixed-size grids built from a game snapshot.

Each team board is always MAX_GUESSES rows of WORD_LENGTH cells. Rows with a
guess show its colors, and its letters only when revealed; the remaining
rows are blank. Derivation is pure: the same snapshot always yields an
equal view.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from teamwordle.board.colors import LetterColor, color_for_code
from teamwordle.board.visibility import ObserverRole, decide_visibility, observer_role
from teamwordle.core.models import (
    MAX_GUESSES,
    WORD_LENGTH,
    ContractViolation,
    GameState,
    Guess,
)

STATUS_GAME_OVER = "Game Over"
STATUS_SPECTATING = "You are Spectating!"
STATUS_ON_TEAM = "You are on a team!"


@dataclass(frozen=True)
class Cell:
    """One letter slot. ``color`` is None only for unplayed cells."""

    letter: str = ""
    color: LetterColor | None = None

    @property
    def filled(self) -> bool:
        return self.color is not None


BLANK_CELL = Cell()


@dataclass(frozen=True)
class BoardRow:
    cells: tuple[Cell, ...]

    @property
    def is_blank(self) -> bool:
        return not any(c.filled for c in self.cells)


BLANK_ROW = BoardRow(cells=(BLANK_CELL,) * WORD_LENGTH)


@dataclass(frozen=True)
class Board:
    rows: tuple[BoardRow, ...]

    @property
    def guesses_used(self) -> int:
        return sum(1 for row in self.rows if not row.is_blank)


@dataclass(frozen=True)
class BoardView:
    """Everything the display needs for one observer and one snapshot."""

    team_one: Board
    team_two: Board
    role: ObserverRole
    game_over: bool

    @property
    def status(self) -> str:
        if self.game_over:
            return STATUS_GAME_OVER
        if self.role is ObserverRole.SPECTATOR:
            return STATUS_SPECTATING
        return STATUS_ON_TEAM

    @property
    def input_enabled(self) -> bool:
        """Only team members may type guesses, and only while the game runs."""
        return self.role is not ObserverRole.SPECTATOR and not self.game_over


def _derive_row(guess: Guess, reveal: bool) -> BoardRow:
    if len(guess.word) != WORD_LENGTH or len(guess.color_codes) != WORD_LENGTH:
        raise ContractViolation(
            f"guess {guess.text!r} does not have {WORD_LENGTH} letters and codes"
        )
    return BoardRow(
        cells=tuple(
            Cell(letter=letter if reveal else "", color=color_for_code(code))
            for letter, code in zip(guess.word, guess.color_codes)
        )
    )


def derive_board(guesses: Sequence[Guess], reveal: bool) -> Board:
    """Build a team's grid, oldest guess in the top row."""
    if len(guesses) > MAX_GUESSES:
        raise ContractViolation(
            f"{len(guesses)} guesses do not fit a {MAX_GUESSES}-row board"
        )
    rows = [_derive_row(g, reveal) for g in guesses]
    rows.extend([BLANK_ROW] * (MAX_GUESSES - len(rows)))
    return Board(rows=tuple(rows))


def derive_view(state: GameState, observer_id: str, game_over: bool) -> BoardView:
    one = state.team_one_members
    two = state.team_two_members
    visibility = decide_visibility(observer_id, one, two, game_over)
    return BoardView(
        team_one=derive_board(state.team_one_guesses, visibility.team_one),
        team_two=derive_board(state.team_two_guesses, visibility.team_two),
        role=observer_role(observer_id, one, two),
        game_over=game_over,
    )
