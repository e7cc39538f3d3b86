"""Command-line interface for running a tournament from a JSON save file.

Every command loads the save file, performs one controller operation and
writes the file back. ``chesstourney shell`` opens an interactive session
with autocomplete over the same commands.
"""

# Chess Tourney
# Copyright (C) 2025  Chess Tourney developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import shlex
import sys
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from chesstourney import __version__
from chesstourney.cache import InMemoryCache
from chesstourney.constants import DEFAULT_DATA_FILE
from chesstourney.exceptions import ChessTourneyException
from chesstourney.models import (
    ChessPlatform,
    PairingSet,
    RegistrationStatus,
    TournamentConfig,
)
from chesstourney.store import JsonFileStore
from chesstourney.tournament import TournamentController, TournamentQueries
from chesstourney.utils import setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


COMMANDS = {
    "register": {
        "description": "Register a player (pending approval)",
        "options": {
            "--rating": "Rating (default: 0)",
            "--phone": "Phone number",
            "--department": "Department",
            "--username": "Online username",
            "--platform": "Chess.com or Lichess",
        },
    },
    "approve": {"description": "Approve a registration", "options": {}},
    "reject": {"description": "Reject a registration", "options": {}},
    "remove": {"description": "Delete a player and their matches", "options": {}},
    "players": {
        "description": "List players",
        "options": {"--status": "PENDING, APPROVED or REJECTED"},
    },
    "pair": {
        "description": "Generate Swiss pairings for a round",
        "options": {"--round": "Round to pair (default: current round)"},
    },
    "round-robin": {"description": "Generate a full round-robin schedule", "options": {}},
    "match": {"description": "Add a board by hand: WHITE BLACK ROUND", "options": {}},
    "result": {"description": "Record a result: MATCH_ID 1-0|0-1|1/2-1/2|none", "options": {}},
    "matches": {"description": "List matches", "options": {"--round": "Only this round"}},
    "advance": {"description": "Score this round and pair the next", "options": {}},
    "finish": {"description": "Score this round and end the tournament", "options": {}},
    "reset": {"description": "Delete all matches and zero all scores", "options": {}},
    "standings": {"description": "Recalculate and show standings", "options": {}},
    "rescore": {"description": "Rebuild all scores from recorded results", "options": {}},
    "status": {"description": "Show the tournament state", "options": {}},
}


# ========== Output ==========


def print_pairings(pairing_set: PairingSet, queries: TournamentQueries) -> None:
    names = {p.id: p.full_name for p in queries.get_players()}
    if pairing_set.is_empty:
        print(f"{Colors.WARNING}Not enough approved players to pair{Colors.ENDC}")
        return
    print(f"{Colors.BOLD}Round {pairing_set.round_number}{Colors.ENDC}")
    for pairing in pairing_set:
        print(
            f"  Board {pairing.table:>3}: {names.get(pairing.white_id, pairing.white_id)}"
            f" - {names.get(pairing.black_id, pairing.black_id)}"
        )
    if pairing_set.bye_player_id:
        print(f"  Bye: {names.get(pairing_set.bye_player_id, pairing_set.bye_player_id)}")


# ========== Commands ==========


def cmd_register(args, controller, queries) -> int:
    platform = ChessPlatform(args.platform) if args.platform else None
    player = controller.register_player(
        args.name,
        rating=args.rating,
        phone_number=args.phone,
        department=args.department,
        chess_username=args.username,
        platform=platform,
    )
    print(f"Registered {player.full_name} as {player.id}")
    return 0


def cmd_approve(args, controller, queries) -> int:
    player = controller.set_player_status(args.player_id, RegistrationStatus.APPROVED)
    print(f"Approved {player.full_name}")
    return 0


def cmd_reject(args, controller, queries) -> int:
    player = controller.set_player_status(args.player_id, RegistrationStatus.REJECTED)
    print(f"Rejected {player.full_name}")
    return 0


def cmd_remove(args, controller, queries) -> int:
    controller.delete_player(args.player_id)
    print(f"Deleted {args.player_id}")
    return 0


def cmd_players(args, controller, queries) -> int:
    players = queries.get_players()
    if args.status:
        status = RegistrationStatus(args.status)
        players = [p for p in players if p.status is status]
    for player in players:
        rank = f"#{player.rank}" if player.rank else "--"
        print(
            f"{rank:>4} {player.full_name:<28} {player.rating:>5} "
            f"{player.score:>5.1f} {player.status.value:<9} {player.id}"
        )
    return 0


def cmd_pair(args, controller, queries) -> int:
    round_number = args.round
    if round_number is None:
        round_number = controller.get_state().current_round
    print_pairings(controller.generate_swiss_pairings_for_round(round_number), queries)
    return 0


def cmd_round_robin(args, controller, queries) -> int:
    schedule = controller.generate_round_robin_schedule()
    if schedule.is_empty:
        print(f"{Colors.WARNING}Not enough approved players to schedule{Colors.ENDC}")
        return 0
    for pairing_set in schedule.rounds:
        print_pairings(pairing_set, queries)
    return 0


def cmd_match(args, controller, queries) -> int:
    match = controller.create_match(args.white, args.black, args.round)
    print(f"Created match {match.id} on board {match.table}")
    return 0


def cmd_result(args, controller, queries) -> int:
    result = None if args.result.lower() == "none" else args.result
    match = controller.record_result(args.match_id, result)
    print(f"Match {match.id}: {match.result.value if match.result else 'unplayed'}")
    return 0


def cmd_matches(args, controller, queries) -> int:
    names = {p.id: p.full_name for p in queries.get_players()}
    for match in queries.get_matches(args.round):
        white = names.get(match.white_id, match.white_id or "BYE")
        black = names.get(match.black_id, match.black_id or "BYE")
        result = match.result.value if match.result else ("bye" if match.is_bye else "-")
        print(
            f"R{match.round_number:<3} T{match.table or '-':<4} {white:<24} {black:<24} "
            f"{result:<8} {match.id}"
        )
    return 0


def cmd_advance(args, controller, queries) -> int:
    state = controller.advance_round()
    if state.is_finished:
        print(f"{Colors.OKGREEN}Tournament finished{Colors.ENDC}")
    else:
        print(f"Now playing round {state.current_round} of {state.total_rounds}")
    return 0


def cmd_finish(args, controller, queries) -> int:
    controller.finish_tournament()
    print(f"{Colors.OKGREEN}Tournament finished{Colors.ENDC}")
    return 0


def cmd_reset(args, controller, queries) -> int:
    controller.reset_tournament()
    print("Tournament reset to round 1")
    return 0


def cmd_standings(args, controller, queries) -> int:
    for standing in controller.recalculate_standings():
        player = standing.player
        print(
            f"{standing.rank:>3}. {player.full_name:<28} {player.score:>5.1f} "
            f"BH {standing.buchholz:>5.1f} {player.rating:>5}"
        )
    return 0


def cmd_rescore(args, controller, queries) -> int:
    scores = controller.recompute_scores()
    print(f"Recomputed scores for {len(scores)} players")
    return 0


def cmd_status(args, controller, queries) -> int:
    state = controller.get_state()
    print(
        f"Round {state.current_round} of {state.total_rounds} "
        f"({state.pairing_system.value}, {state.status.value})"
    )
    return 0


# ========== Parsers ==========


def create_main_parser() -> argparse.ArgumentParser:
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="chesstourney",
        description="Run a Swiss or round-robin chess tournament",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chesstourney register "Ama Mensah" --rating 1540
  chesstourney approve Player-1a2b...
  chesstourney pair --round 1
  chesstourney result Match-9f8e... 1-0
  chesstourney advance
  chesstourney standings
  chesstourney shell
        """,
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--data", default=DEFAULT_DATA_FILE, help="Tournament save file (JSON)"
    )
    parser.add_argument("--config", help="Tournament configuration file (JSON)")
    parser.add_argument("--seed", type=int, help="Random seed for pairings")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    reg = subparsers.add_parser("register", help=COMMANDS["register"]["description"])
    reg.add_argument("name")
    reg.add_argument("--rating", default=None)
    reg.add_argument("--phone")
    reg.add_argument("--department")
    reg.add_argument("--username")
    reg.add_argument("--platform", choices=[p.value for p in ChessPlatform])
    reg.set_defaults(func=cmd_register)

    for name, func in (
        ("approve", cmd_approve),
        ("reject", cmd_reject),
        ("remove", cmd_remove),
    ):
        sub = subparsers.add_parser(name, help=COMMANDS[name]["description"])
        sub.add_argument("player_id")
        sub.set_defaults(func=func)

    players = subparsers.add_parser("players", help=COMMANDS["players"]["description"])
    players.add_argument("--status", choices=[s.value for s in RegistrationStatus])
    players.set_defaults(func=cmd_players)

    pair = subparsers.add_parser("pair", help=COMMANDS["pair"]["description"])
    pair.add_argument("--round", type=int)
    pair.set_defaults(func=cmd_pair)

    rr = subparsers.add_parser("round-robin", help=COMMANDS["round-robin"]["description"])
    rr.set_defaults(func=cmd_round_robin)

    match = subparsers.add_parser("match", help=COMMANDS["match"]["description"])
    match.add_argument("white")
    match.add_argument("black")
    match.add_argument("round", type=int)
    match.set_defaults(func=cmd_match)

    result = subparsers.add_parser("result", help=COMMANDS["result"]["description"])
    result.add_argument("match_id")
    result.add_argument("result")
    result.set_defaults(func=cmd_result)

    matches = subparsers.add_parser("matches", help=COMMANDS["matches"]["description"])
    matches.add_argument("--round", type=int)
    matches.set_defaults(func=cmd_matches)

    for name, func in (
        ("advance", cmd_advance),
        ("finish", cmd_finish),
        ("reset", cmd_reset),
        ("standings", cmd_standings),
        ("rescore", cmd_rescore),
        ("status", cmd_status),
    ):
        sub = subparsers.add_parser(name, help=COMMANDS[name]["description"])
        sub.set_defaults(func=func)

    shell = subparsers.add_parser("shell", help="Interactive session")
    shell.set_defaults(func=None)

    return parser


def build_controller(args: argparse.Namespace):
    """Create the controller and query layer for the chosen save file."""
    config = (
        TournamentConfig.from_file(args.config) if args.config else TournamentConfig()
    )
    if args.seed is not None:
        config.seed = args.seed
    store = JsonFileStore(args.data)
    cache = InMemoryCache()
    controller = TournamentController(store, config=config, cache=cache)
    return controller, TournamentQueries(store, cache)


def run_command(args: argparse.Namespace, controller, queries) -> int:
    try:
        return args.func(args, controller, queries)
    except ChessTourneyException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        logger.debug("Command failed", exc_info=True)
        return 1


# ========== Interactive ==========


def create_completer() -> NestedCompleter:
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd, info in COMMANDS.items():
        completions[cmd] = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
    completions["help"] = None
    completions["exit"] = None
    return NestedCompleter.from_nested_dict(completions)


def print_commands_list() -> None:
    print(f"\n{Colors.BOLD}Commands:{Colors.ENDC}")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:<12}{Colors.ENDC} {info['description']}")
    print("  exit         Leave the shell\n")


def run_interactive_mode(
    parser: argparse.ArgumentParser, controller, queries
) -> int:
    """Run commands in a prompt with autocomplete until exit."""
    style = Style.from_dict({"prompt": "#00aa00 bold"})
    session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )
    print_commands_list()

    while True:
        try:
            user_input = session.prompt("chesstourney> ").strip()
        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
            continue
        except EOFError:
            break

        if not user_input:
            continue
        if user_input in ("exit", "quit", "q"):
            break
        if user_input in ("help", "?"):
            print_commands_list()
            continue

        try:
            args = parser.parse_args(shlex.split(user_input))
        except ValueError as e:
            # unbalanced quotes
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            continue
        except SystemExit:
            # argparse exits on bad input
            continue
        if args.command not in COMMANDS:
            print(f"{Colors.FAIL}Unknown command: {args.command}{Colors.ENDC}")
            continue
        run_command(args, controller, queries)

    print(f"{Colors.OKGREEN}Goodbye!{Colors.ENDC}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the chesstourney CLI."""
    parser = create_main_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        controller, queries = build_controller(args)
    except ChessTourneyException as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1

    if args.command == "shell":
        return run_interactive_mode(parser, controller, queries)
    return run_command(args, controller, queries)


if __name__ == "__main__":
    sys.exit(main())
