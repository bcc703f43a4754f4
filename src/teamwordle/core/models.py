"""Game snapshot data model.

Snapshots are owned by the server. The client parses each one into frozen
dataclasses and never mutates it; the next poll replaces it wholesale.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import jsonschema

from teamwordle.core.schemas import game_state_schema

WORD_LENGTH = 5
MAX_GUESSES = 6
VALID_COLOR_CODES = (-1, 0, 1)


class ContractViolation(Exception):
    """The server and client disagree about the data model.

    This is a defect, not a runtime condition: it is never defaulted away.
    """


class GameKind(Enum):
    """Game types a conversation area can host."""

    WORDLE = "Wordle"


@dataclass(frozen=True)
class GameSessionDescriptor:
    """Identifies one active game instance: town, session and area."""

    town_id: str
    session_token: str
    area_label: str

    def to_wire(self) -> dict[str, str]:
        return {
            "coveyTownID": self.town_id,
            "sessionToken": self.session_token,
            "conversationAreaLabel": self.area_label,
        }


@dataclass(frozen=True)
class Guess:
    """One submitted word and its per-letter color codes."""

    word: tuple[str, ...]
    color_codes: tuple[int, ...]

    def __post_init__(self):
        if len(self.word) != WORD_LENGTH:
            raise ContractViolation(
                f"guess {''.join(self.word)!r} has {len(self.word)} letters, "
                f"expected {WORD_LENGTH}"
            )
        if len(self.color_codes) != len(self.word):
            raise ContractViolation(
                f"guess {''.join(self.word)!r} has {len(self.color_codes)} "
                f"color codes for {len(self.word)} letters"
            )
        for code in self.color_codes:
            if type(code) is not int or code not in VALID_COLOR_CODES:
                raise ContractViolation(f"color code {code!r} outside {{-1, 0, 1}}")

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Guess:
        return cls(word=tuple(data["word"]), color_codes=tuple(data["guessResult"]))

    @property
    def text(self) -> str:
        return "".join(self.word)


@dataclass(frozen=True)
class TeamState:
    """Roster and chronological guesses for one team."""

    members: frozenset[str]
    guesses: tuple[Guess, ...] = ()

    def __post_init__(self):
        if len(self.guesses) > MAX_GUESSES:
            raise ContractViolation(
                f"team has {len(self.guesses)} guesses, maximum is {MAX_GUESSES}"
            )

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> TeamState:
        return cls(
            members=frozenset(data["teamMembers"]),
            guesses=tuple(Guess.from_wire(g) for g in data["guesses"]),
        )

    def __contains__(self, player_id: str) -> bool:
        return player_id in self.members


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of both teams. A team is None before the game
    starts or while it has no players."""

    team_one: TeamState | None = None
    team_two: TeamState | None = None

    @classmethod
    def from_wire(cls, data: Any) -> GameState:
        """Validate and parse the ``state`` payload of a state response."""
        try:
            jsonschema.validate(data, game_state_schema())
        except jsonschema.ValidationError as e:
            raise ContractViolation(f"game state schema: {e.message}") from e

        one = data.get("teamOneState")
        two = data.get("teamTwoState")
        return cls(
            team_one=TeamState.from_wire(one) if one is not None else None,
            team_two=TeamState.from_wire(two) if two is not None else None,
        )

    @property
    def team_one_members(self) -> frozenset[str]:
        return self.team_one.members if self.team_one else frozenset()

    @property
    def team_two_members(self) -> frozenset[str]:
        return self.team_two.members if self.team_two else frozenset()

    @property
    def team_one_guesses(self) -> tuple[Guess, ...]:
        return self.team_one.guesses if self.team_one else ()

    @property
    def team_two_guesses(self) -> tuple[Guess, ...]:
        return self.team_two.guesses if self.team_two else ()
