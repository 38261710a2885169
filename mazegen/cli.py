#!/usr/bin/env python3
"""
Command Line Interface for mazegen

Generates a validated maze from command line options and/or a configuration
file and prints it as plain text or JSON. Escalation decisions are made by a
fixed policy chosen on the command line, never by prompting.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from pydantic import ValidationError

from mazegen.algorithms import MazeAlgorithm
from mazegen.config import MazeConfig, load_config_file, merge_configs
from mazegen.controller import EscalationAction, GeneratedMaze, RegenerationController, make_operator
from mazegen.core.grid import MAX_SIZE, MIN_SIZE, CellState
from mazegen.utils.exceptions import GenerationAborted
from mazegen.utils.logging import configure_logging

CELL_CHARS = {
    CellState.WALL: "#",
    CellState.PATH: " ",
    CellState.EXIT: "E",
    CellState.BONUS: ".",
}
ENTRANCE_CHAR = "S"


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the ``mazegen`` command.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="mazegen",
        description="mazegen: generate a random, validated grid maze",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    maze_group = parser.add_argument_group("Maze Configuration")
    maze_group.add_argument(
        "--size", type=int, default=None, help=f"Odd maze dimension between {MIN_SIZE} and {MAX_SIZE}"
    )
    maze_group.add_argument("--seed", type=int, default=None, help="Seed of the first attempt (default: time-based)")
    maze_group.add_argument(
        "--algorithm",
        choices=[a.value for a in MazeAlgorithm],
        default=None,
        help="Construction algorithm",
    )
    maze_group.add_argument("--no-bonuses", action="store_true", help="Do not scatter bonus cells")
    maze_group.add_argument("--config", type=str, default=None, help="JSON or YAML configuration file")

    retry_group = parser.add_argument_group("Retry Policy")
    retry_group.add_argument(
        "--max-auto-retries", type=int, default=None, help="Consecutive failures before escalation"
    )
    retry_group.add_argument(
        "--on-escalation",
        choices=[a.value for a in EscalationAction],
        default=EscalationAction.ABORT.value,
        help="Decision taken when automatic retries are exhausted",
    )
    retry_group.add_argument(
        "--fallback-algorithm",
        choices=[a.value for a in MazeAlgorithm],
        default=MazeAlgorithm.PRIM.value,
        help="Algorithm used by --on-escalation change_algorithm",
    )
    retry_group.add_argument(
        "--max-escalations", type=int, default=3, help="Escalations answered before aborting anyway"
    )

    output_group = parser.add_argument_group("Output")
    output_group.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    output_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity (logs go to stderr)",
    )
    output_group.add_argument("--no-color", action="store_true", help="Disable coloured log output")
    output_group.add_argument("--log-file", type=str, default=None, help="Also write logs to this file")

    return parser


def args_to_config(args: argparse.Namespace) -> MazeConfig:
    """
    Build a validated configuration from parsed arguments.

    File values are used as the base and explicit command line options
    override them.
    """
    base: dict[str, Any] = load_config_file(args.config) if args.config else {}
    overrides = {
        "size": args.size,
        "seed": args.seed,
        "algorithm": args.algorithm,
        "max_auto_retries": args.max_auto_retries,
    }
    if args.no_bonuses:
        overrides["place_bonuses"] = False
    return MazeConfig(**merge_configs(base, overrides))


def render_rows(maze: GeneratedMaze) -> list[str]:
    """One string per grid row, one character per cell, entrance marked ``S``."""
    lines = []
    for row in range(maze.size):
        chars = []
        for col in range(maze.size):
            if (row, col) == maze.entrance and maze.entrance != maze.exit_cell:
                chars.append(ENTRANCE_CHAR)
            else:
                chars.append(CELL_CHARS[maze.get(row, col)])
        lines.append("".join(chars))
    return lines


def format_text(maze: GeneratedMaze) -> str:
    return "\n".join(render_rows(maze))


def format_json(maze: GeneratedMaze) -> str:
    payload = {
        "size": maze.size,
        "seed": maze.seed,
        "algorithm": maze.algorithm.value,
        "entrance": list(maze.entrance),
        "exit": list(maze.exit_cell),
        "attempts": maze.attempts,
        "bonuses": maze.bonuses,
        "rows": render_rows(maze),
    }
    return json.dumps(payload, indent=2)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point. Returns the process exit status."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file, use_colors=not args.no_color)

    try:
        config = args_to_config(args)
    except (ValidationError, ValueError, FileNotFoundError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    operator = make_operator(args.on_escalation, args.fallback_algorithm, max_escalations=args.max_escalations)

    try:
        maze = RegenerationController(config, operator=operator).run()
    except GenerationAborted as e:
        print(f"Maze generation aborted: {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(format_json(maze))
    else:
        print(format_text(maze))
    return 0


if __name__ == "__main__":
    sys.exit(main())
