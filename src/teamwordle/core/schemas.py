"""Schema loading utility."""

import json
from functools import lru_cache
from pathlib import Path

SCHEMAS_DIR = Path(__file__).resolve().parent


def load_schema(path: Path) -> dict:
    """Load a JSON Schema file and return as dict."""
    with open(path) as f:
        return json.load(f)


@lru_cache(maxsize=None)
def game_state_schema() -> dict:
    """Structural schema for the ``state`` payload of a game state response."""
    return load_schema(SCHEMAS_DIR / "game_state.schema.json")
