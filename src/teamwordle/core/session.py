"""GameSessionClient — game operations for one conversation area.

Thin layer over a Transport: builds request bodies, routes each operation
to its endpoint, and turns the state payload into a GameState. All failures
surface as RequestError (or ContractViolation for a malformed snapshot).
"""

from __future__ import annotations

import logging
from typing import Any

from teamwordle.core.models import GameKind, GameSessionDescriptor, GameState
from teamwordle.core.transport import RequestError, Transport

logger = logging.getLogger(__name__)

TEAM_NUMBERS = (1, 2)


class GameSessionClient:
    """Create, join, play and observe a game hosted in a conversation area."""

    def __init__(self, transport: Transport):
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    def create_game(self, descriptor: GameSessionDescriptor, game_kind: GameKind) -> None:
        self._ack(descriptor, "games", gameID=game_kind.value)

    def join_team(
        self,
        descriptor: GameSessionDescriptor,
        player_id: str,
        team_number: int,
    ) -> None:
        if team_number not in TEAM_NUMBERS:
            raise ValueError(f"team_number must be 1 or 2, got {team_number!r}")
        self._ack(descriptor, "joingameteam", playerID=player_id, teamNumber=team_number)

    def leave_team(self, descriptor: GameSessionDescriptor, player_id: str) -> None:
        """Remove a player from their team. Not idempotent: the server
        rejects players who are not on a team."""
        self._ack(descriptor, "removeplayerfromteam", playerID=player_id)

    def start_game(self, descriptor: GameSessionDescriptor) -> None:
        self._ack(descriptor, "startGame")

    def submit_action(self, descriptor: GameSessionDescriptor, action: dict[str, Any]) -> None:
        """Submit an opaque, game-specific action (e.g. a guessed word)."""
        self._ack(descriptor, "updategame", gameAction=action)

    def fetch_state(self, descriptor: GameSessionDescriptor) -> GameState:
        """Read-only snapshot of the game in the descriptor's area."""
        payload = self._transport.request(
            self._path(descriptor, "gamestate"), descriptor.to_wire()
        )
        if not isinstance(payload, dict) or "state" not in payload:
            raise RequestError("game state response has no 'state' field")
        return GameState.from_wire(payload["state"])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _path(descriptor: GameSessionDescriptor, endpoint: str) -> str:
        return f"/towns/{descriptor.town_id}/{endpoint}"

    def _ack(self, descriptor: GameSessionDescriptor, endpoint: str, **fields: Any) -> None:
        body = descriptor.to_wire()
        body.update(fields)
        self._transport.request(self._path(descriptor, endpoint), body, ignore_response=True)
        logger.info("%s ok in area %s", endpoint, descriptor.area_label)
