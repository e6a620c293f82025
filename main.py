#!/usr/bin/env python3
"""
Mines - Main entry point.

Usage:
    python main.py play [--rows N] [--cols N] [--mines-percent P]
    python main.py demo [--games N] [--delay S] [--seed N]
"""
import argparse
import time
from typing import Optional, Tuple

import numpy as np

from src.mines.environment import MinesweeperEnv
from src.mines.minefield import GameState, Minefield, MinefieldConfig
from src.mines.render import render_text


HELP_TEXT = (
    "Commands: u ROW COL (uncover), f ROW COL (flag), "
    "r (new game), q (quit)"
)


def parse_command(line: str) -> Tuple[str, Optional[Tuple[int, int]]]:
    """
    Split a command line into its verb and optional (row, col).

    Raises:
        ValueError: If the command is malformed.
    """
    parts = line.split()
    if not parts:
        raise ValueError("empty command")

    verb = parts[0].lower()
    if verb in ("r", "q"):
        return verb, None
    if verb in ("u", "f") and len(parts) == 3:
        return verb, (int(parts[1]), int(parts[2]))
    raise ValueError(f"unknown command: {line.strip()}")


def print_board(minefield: Minefield, tile_width: int) -> None:
    print(render_text(minefield, tile_width=tile_width, with_axes=True))
    print(f"Mines left: {minefield.mines_remaining}")


def play(args: argparse.Namespace, config: MinefieldConfig) -> None:
    """Play an interactive game in the terminal."""
    minefield = Minefield.from_config(config, seed=args.seed)
    print(f"Game with {config.rows} x {config.cols}, {config.num_mines} mines")
    print(HELP_TEXT)
    print_board(minefield, args.tile_width)

    while True:
        try:
            line = input("> ")
        except EOFError:
            break

        try:
            verb, position = parse_command(line)
        except ValueError as e:
            print(f"Invalid command ({e}). {HELP_TEXT}")
            continue

        if verb == "q":
            break
        if verb == "r":
            minefield.reset()
        else:
            try:
                index = minefield.index_of(*position)
            except IndexError as e:
                print(e)
                continue
            if verb == "u":
                minefield.uncover_tile(index)
            else:
                minefield.flag_tile(index)

        print_board(minefield, args.tile_width)
        if minefield.state == GameState.LOST:
            print("*** LOST (hit mine) *** - 'r' for a new game")
        elif minefield.state == GameState.WON:
            print("*** WIN! *** - 'r' for a new game")


def demo(args: argparse.Namespace, config: MinefieldConfig) -> None:
    """Watch random moves play out in the environment."""
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)
    wins = 0

    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        obs, info = env.reset(seed=seed)
        done = False
        step = 0

        while not done:
            valid_actions = np.where(env.get_action_mask())[0]
            action = int(rng.choice(valid_actions))
            row, col = env.minefield.position_of(action)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
            print(f"Last move: ({row}, {col}) reward {reward:+.1f}\n")
            print(env.render())
            time.sleep(args.delay)

        if info["game_state"] == "WON":
            wins += 1
            print("\n*** WIN! ***")
        else:
            print("\n*** LOST (hit mine) ***")

    print(f"\n=== Final: {wins}/{args.games} wins ===")


def build_config(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> MinefieldConfig:
    """Validate board options, reporting problems through the parser."""
    try:
        return MinefieldConfig(args.rows, args.cols, args.mines_percent)
    except ValueError as e:
        parser.error(str(e))


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="A mines clone for the terminal"
    )
    parser.add_argument("-r", "--rows", type=int, default=16, help="Number of rows")
    parser.add_argument("-c", "--cols", type=int, default=30, help="Number of columns")
    parser.add_argument(
        "-m", "--mines-percent", type=float, default=20.0,
        help="Percentage of tiles holding a mine",
    )
    parser.add_argument(
        "--tile-width", type=int, default=2, help="Characters per tile"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine placement"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("play", help="Play in the terminal")

    demo_parser = subparsers.add_parser("demo", help="Watch random moves")
    demo_parser.add_argument(
        "--games", type=int, default=3, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.3, help="Delay between moves"
    )

    args = parser.parse_args()
    config = build_config(parser, args)

    if args.command == "play":
        play(args, config)
    elif args.command == "demo":
        demo(args, config)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
