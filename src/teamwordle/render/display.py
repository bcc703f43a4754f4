"""Terminal rendering of a BoardView with rich.

Red board on the left, blue board on the right, status line and any
request notice below.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from teamwordle.board.colors import LetterColor
from teamwordle.board.derive import Board, BoardRow, BoardView, Cell

TEAM_COLORS = {
    "team_one": "red",
    "team_two": "blue",
}

CELL_STYLES = {
    LetterColor.CORRECT: "bold white on green",
    LetterColor.DISPLACED: "bold black on yellow",
    LetterColor.ABSENT: "bold white on grey37",
}
BLANK_STYLE = "dim"


def _cell_text(cell: Cell) -> Text:
    if not cell.filled:
        return Text("[ ]", style=BLANK_STYLE)
    return Text(f" {cell.letter or ' '} ", style=CELL_STYLES[cell.color])


def _row_text(row: BoardRow) -> Text:
    text = Text()
    for i, cell in enumerate(row.cells):
        if i:
            text.append(" ")
        text.append_text(_cell_text(cell))
    return text


def build_board_panel(board: Board, title: str, border_style: str) -> Panel:
    """One team's six rows."""
    lines = Text("\n").join(_row_text(row) for row in board.rows)
    return Panel(
        Align.center(lines),
        title=f"[bold]{title}[/bold]",
        subtitle=f"{board.guesses_used}/{len(board.rows)}",
        border_style=border_style,
        padding=(0, 1),
    )


def build_header() -> Panel:
    return Panel(
        Align.center(Text("Wordle", style="bold bright_white")),
        border_style="bright_white",
    )


def build_footer(view: BoardView | None, notice: str | None) -> Text:
    text = Text(justify="center")
    if view is None:
        text.append("Waiting for game state...", style="yellow")
    else:
        text.append(view.status, style="bold red" if view.game_over else "bold")
        if not view.input_enabled and not view.game_over:
            text.append("  (guessing disabled)", style="dim")
    if notice:
        text.append(f"\n{notice}", style="bold red")
    return text


def render(view: BoardView | None, notice: str | None = None) -> Group:
    """Full screen for the latest view and notice."""
    parts = [build_header()]
    if view is not None:
        layout = Table(show_header=False, show_edge=False, padding=(0, 1), expand=True)
        layout.add_column("one", ratio=1)
        layout.add_column("two", ratio=1)
        layout.add_row(
            build_board_panel(view.team_one, "Red Board", TEAM_COLORS["team_one"]),
            build_board_panel(view.team_two, "Blue Board", TEAM_COLORS["team_two"]),
        )
        parts.append(layout)
    parts.append(build_footer(view, notice))
    return Group(*parts)
