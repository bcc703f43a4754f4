"""CLI entry point: python -m teamwordle <config.yaml> <command>"""

import argparse
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.live import Live

from teamwordle.board.visibility import ObserverRole, observer_role
from teamwordle.config import load_config
from teamwordle.core.models import ContractViolation, GameKind
from teamwordle.core.session import GameSessionClient
from teamwordle.core.transport import HttpTransport, RequestError
from teamwordle.render.display import render
from teamwordle.render.loop import Poller, RenderLoop


def _watch(client, config, console: Console, game_over: bool) -> int:
    """Live board until Ctrl-C."""
    if game_over:
        # Review mode reveals every letter, so it is for spectators only
        state = client.fetch_state(config.descriptor())
        role = observer_role(
            config.session.player_id, state.team_one_members, state.team_two_members
        )
        if role is not ObserverRole.SPECTATOR:
            console.print(
                "[bold red]--game-over is a spectator review mode;[/bold red] "
                "leave your team first"
            )
            return 1

    live = Live(render(None), console=console, refresh_per_second=config.display.refresh_per_second, screen=True)
    loop = RenderLoop(
        client,
        config.descriptor(),
        config.session.player_id,
        on_render=lambda view, notice: live.update(render(view, notice)),
        game_over=game_over,
    )
    poller = Poller(loop, interval_s=config.display.poll_interval_s)

    with live:
        poller.start()
        try:
            while poller.running:
                time.sleep(0.2)
        except KeyboardInterrupt:
            pass
        finally:
            poller.stop(timeout_s=2.0)
            loop.close()

    if isinstance(poller.error, ContractViolation):
        console.print(f"[bold red]Game state is malformed:[/bold red] {poller.error}")
        return 2
    if poller.error is not None:
        console.print(f"[bold red]Display failed:[/bold red] {poller.error}")
        return 1
    if loop.view is not None:
        console.print(render(loop.view, loop.notice))
    return 0


def _guess(client, config, console: Console, word: str) -> int:
    loop = RenderLoop(client, config.descriptor(), config.session.player_id)
    if not loop.submit_guess(word):
        console.print(f"[bold red]Guess rejected:[/bold red] {loop.notice}")
        return 1
    console.print(render(loop.view, loop.notice))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="teamwordle",
        description="Two-team Wordle in a town conversation area",
    )
    parser.add_argument(
        "config",
        type=Path,
        help="Path to client YAML config file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Log requests and loop transitions to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    watch = sub.add_parser("watch", help="Live view of both boards")
    watch.add_argument(
        "--game-over",
        action="store_true",
        default=False,
        help="Spectator review mode: reveal every letter (refused for team members)",
    )
    guess = sub.add_parser("guess", help="Submit a guess for your team")
    guess.add_argument("word")
    join = sub.add_parser("join", help="Join team 1 (red) or 2 (blue)")
    join.add_argument("team", type=int, choices=[1, 2])
    sub.add_parser("leave", help="Leave your team")
    sub.add_parser("start", help="Start the game")
    sub.add_parser("create", help="Create a Wordle game in the area")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()

    if not args.config.exists():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    config = load_config(args.config)
    console = Console()
    transport = HttpTransport(config.service.url, timeout_s=config.service.timeout_s)
    client = GameSessionClient(transport)
    player_id = config.session.player_id

    try:
        descriptor = config.descriptor()
        if args.command == "watch":
            code = _watch(client, config, console, args.game_over)
        elif args.command == "guess":
            code = _guess(client, config, console, args.word)
        else:
            if args.command == "join":
                client.join_team(descriptor, player_id, args.team)
            elif args.command == "leave":
                client.leave_team(descriptor, player_id)
            elif args.command == "start":
                client.start_game(descriptor)
            elif args.command == "create":
                client.create_game(descriptor, GameKind.WORDLE)
            console.print(f"[green]{args.command}: ok[/green]")
            code = 0
    except RequestError as e:
        console.print(f"[bold red]{args.command} failed:[/bold red] {e.message}")
        code = 1
    except ContractViolation as e:
        console.print(f"[bold red]Game state is malformed:[/bold red] {e}")
        code = 2
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 1
    finally:
        transport.close()

    sys.exit(code)


if __name__ == "__main__":
    main()
