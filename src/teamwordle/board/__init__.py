"""Pure derivation from a game snapshot to what one observer may see."""

from .colors import LetterColor, color_for_code
from .derive import Board, BoardRow, BoardView, Cell, derive_board, derive_view
from .visibility import ObserverRole, Visibility, decide_visibility, observer_role

__all__ = [
    "Board",
    "BoardRow",
    "BoardView",
    "Cell",
    "LetterColor",
    "ObserverRole",
    "Visibility",
    "color_for_code",
    "decide_visibility",
    "derive_board",
    "derive_view",
    "observer_role",
]
