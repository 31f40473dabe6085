#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--difficulty {easy,medium,hard}] [--seed N]
    python main.py play --rows R --cols C --mines M
    python main.py demo [--games N] [--delay S]
"""
import argparse
import logging
import time
from typing import Optional

import numpy as np

from src.minefield.board import BoardConfig, DIFFICULTIES, GameState
from src.minefield.environment import MinesweeperEnv
from src.minefield.errors import MinefieldError
from src.minefield.render import render_board, render_header
from src.minefield.session import GameSession

logger = logging.getLogger(__name__)

HELP_TEXT = "Commands: r ROW COL (reveal), f ROW COL (flag), c ROW COL (chord), n (new game), q (quit)"


def build_config(args: argparse.Namespace) -> Optional[BoardConfig]:
    """Explicit configuration from --rows/--cols/--mines, if any were given."""
    if args.rows is None and args.cols is None and args.mines is None:
        return None
    preset = DIFFICULTIES[args.difficulty]
    return BoardConfig(
        rows=args.rows if args.rows is not None else preset.rows,
        cols=args.cols if args.cols is not None else preset.cols,
        mine_count=args.mines if args.mines is not None else preset.mine_count,
    )


def print_session(session: GameSession) -> None:
    status = session.status()
    print()
    print(render_header(status.mines_remaining, session.elapsed_seconds))
    print(render_board(session.board))


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    session = GameSession(
        config=build_config(args), difficulty=args.difficulty, seed=args.seed
    )
    print(HELP_TEXT)
    print_session(session)

    while True:
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break
        if not line:
            continue

        command, *coords = line.split()
        if command == "q":
            break
        if command == "n":
            session.new_game()
            print_session(session)
            continue
        if command not in ("r", "f", "c") or len(coords) != 2:
            print(HELP_TEXT)
            continue

        try:
            row, col = int(coords[0]), int(coords[1])
            if command == "r":
                session.reveal(row, col)
            elif command == "f":
                session.toggle_flag(row, col)
            else:
                session.chord(row, col)
        except ValueError:
            print("Row and column must be integers")
            continue
        except MinefieldError as exc:
            print(exc)
            continue

        print_session(session)
        phase = session.status().phase
        if phase == GameState.WON:
            print(f"\n*** You win! ({session.elapsed_seconds}s) ***")
        elif phase == GameState.LOST:
            print("\n*** Game over ***")
        if phase.is_terminal:
            print("Type n for a new game or q to quit.")


def demo(args: argparse.Namespace) -> None:
    """Watch a random player try its luck through the gymnasium env."""
    config = build_config(args) or DIFFICULTIES[args.difficulty]
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)

    wins = 0
    for game in range(args.games):
        obs, info = env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        step = 0

        while not done:
            action = rng.choice(np.flatnonzero(env.get_action_mask()))
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1
            if args.delay:
                time.sleep(args.delay)

        print(f"=== Game {game + 1}/{args.games} | {step} steps | {info['phase']} ===")
        print(env.render())
        if info["phase"] == GameState.WON.name:
            wins += 1

    print(f"\n=== Final: {wins}/{args.games} wins ===")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--difficulty",
        choices=sorted(DIFFICULTIES),
        default="easy",
        help="Preset board size",
    )
    parser.add_argument("--rows", type=int, default=None, help="Custom row count")
    parser.add_argument("--cols", type=int, default=None, help="Custom column count")
    parser.add_argument("--mines", type=int, default=None, help="Custom mine count")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minefield - terminal mine-clearing game")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    demo_parser = subparsers.add_parser("demo", help="Watch a random player")
    add_board_arguments(demo_parser)
    demo_parser.add_argument("--games", type=int, default=5, help="Number of games")
    demo_parser.add_argument(
        "--delay", type=float, default=0.0, help="Delay between moves"
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        if args.command == "play":
            play(args)
        elif args.command == "demo":
            demo(args)
        else:
            parser.print_help()
    except MinefieldError as exc:
        logger.error("%s", exc)
        raise SystemExit(2) from exc


if __name__ == "__main__":
    main()
