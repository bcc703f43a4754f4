"""Which team's letters an observer may see.

Letters of team X are revealed to observer P iff P is not on the team
opposing X, or the game is over. Colors are never gated. A spectator is on
neither team and therefore sees both boards in full.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum

from teamwordle.core.models import ContractViolation


class ObserverRole(Enum):
    SPECTATOR = "spectator"
    TEAM_ONE = "team_one"
    TEAM_TWO = "team_two"


@dataclass(frozen=True)
class Visibility:
    """Per-team letter reveal decision for one observer."""

    team_one: bool
    team_two: bool


def observer_role(
    observer_id: str,
    team_one_members: Collection[str],
    team_two_members: Collection[str],
) -> ObserverRole:
    on_one = observer_id in team_one_members
    on_two = observer_id in team_two_members
    if on_one and on_two:
        raise ContractViolation(f"player {observer_id!r} is on both team rosters")
    if on_one:
        return ObserverRole.TEAM_ONE
    if on_two:
        return ObserverRole.TEAM_TWO
    return ObserverRole.SPECTATOR


def decide_visibility(
    observer_id: str,
    team_one_members: Collection[str],
    team_two_members: Collection[str],
    game_over: bool,
) -> Visibility:
    role = observer_role(observer_id, team_one_members, team_two_members)
    return Visibility(
        team_one=game_over or role is not ObserverRole.TEAM_TWO,
        team_two=game_over or role is not ObserverRole.TEAM_ONE,
    )
