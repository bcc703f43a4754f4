"""Client configuration loader."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from teamwordle.core.models import GameSessionDescriptor


@dataclass
class ServiceConfig:
    url: str
    timeout_s: float = 10.0


@dataclass
class SessionConfig:
    town_id: str
    player_id: str
    area_label: str
    session_token: str | None = None
    session_token_env: str | None = None  # env var name for the token


@dataclass
class DisplayConfig:
    poll_interval_s: float = 1.0
    refresh_per_second: int = 4


@dataclass
class ClientConfig:
    service: ServiceConfig
    session: SessionConfig
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def session_token(self) -> str:
        """Inline token, else the one named by ``session_token_env``."""
        if self.session.session_token:
            return self.session.session_token
        env = self.session.session_token_env
        if env and os.environ.get(env):
            return os.environ[env]
        raise ValueError(
            "no session token: set session.session_token or the env var "
            f"named by session.session_token_env ({env or 'unset'})"
        )

    def descriptor(self) -> GameSessionDescriptor:
        return GameSessionDescriptor(
            town_id=self.session.town_id,
            session_token=self.session_token(),
            area_label=self.session.area_label,
        )


def load_config(path: Path) -> ClientConfig:
    """Load client config from YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    svc = raw.get("service") or {}
    sess = raw.get("session") or {}
    disp = raw.get("display") or {}

    return ClientConfig(
        service=ServiceConfig(
            url=svc["url"],
            timeout_s=svc.get("timeout_s", 10.0),
        ),
        session=SessionConfig(
            town_id=sess["town_id"],
            player_id=sess["player_id"],
            area_label=sess["area_label"],
            session_token=sess.get("session_token"),
            session_token_env=sess.get("session_token_env"),
        ),
        display=DisplayConfig(
            poll_interval_s=disp.get("poll_interval_s", 1.0),
            refresh_per_second=disp.get("refresh_per_second", 4),
        ),
    )
