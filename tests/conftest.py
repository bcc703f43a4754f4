"""Shared test fixtures for teamwordle."""

import pytest

from teamwordle.core.models import GameSessionDescriptor
from teamwordle.core.session import GameSessionClient
from teamwordle.core.transport import MockTransport

RED_PLAYER = "red-1"
BLUE_PLAYER = "blue-1"
SPECTATOR = "watcher"


def ok(response=None):
    return {"isOK": True, "response": response}


def fail(message):
    return {"isOK": False, "message": message}


def team_wire(members, guesses=()):
    return {
        "teamMembers": list(members),
        "guesses": [{"word": w, "guessResult": list(r)} for w, r in guesses],
    }


def state_wire(team_one=None, team_two=None):
    return {"teamOneState": team_one, "teamTwoState": team_two}


@pytest.fixture
def descriptor():
    return GameSessionDescriptor(
        town_id="town-1", session_token="tok-1", area_label="Wordle Corner"
    )


@pytest.fixture
def two_guess_state():
    """Red has CRANE and SAUTE, blue has not guessed yet."""
    return state_wire(
        team_one=team_wire(
            [RED_PLAYER, "red-2"],
            [("CRANE", [0, 1, -1, 0, 0]), ("SAUTE", [1, 1, 1, 1, 1])],
        ),
        team_two=team_wire([BLUE_PLAYER, "blue-2"]),
    )


@pytest.fixture
def make_client():
    """Build a client over a MockTransport driven by ``handler``."""

    def _make(handler):
        transport = MockTransport(handler)
        return GameSessionClient(transport), transport

    return _make
