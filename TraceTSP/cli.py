from __future__ import annotations

import argparse
import json
import logging
import pathlib
import sys
from typing import Iterable

import numpy as np

from TraceTSP.config import ConfigError, load_config
from TraceTSP.core import TraceTSP
from TraceTSP.export import summarise, write_events_jsonl
from TraceTSP.graph import generate_cities
from TraceTSP.logging_utils import setup_logger
from TraceTSP.playback import play
from TraceTSP.solvers import SourceNotFoundError
from TraceTSP.trace import format_cost


def parse_args(raw_args: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tracetsp", description="Solve a TSP instance exactly and record the search trace.")
    sub = parser.add_subparsers(dest="command", required=True)

    solve = sub.add_parser("solve", help="Run branch and bound on one instance.")
    source_group = solve.add_mutually_exclusive_group(required=True)
    source_group.add_argument(
        "--problem",
        type=pathlib.Path,
        help="JSON file with 'distance_matrix' or 'coordinates' (optional 'ids', 'source').",
    )
    source_group.add_argument("--random", type=int, metavar="N", help="Generate N cities on a spiral layout.")
    solve.add_argument("--seed", type=int, default=42, help="Random seed for --random (default: 42).")
    solve.add_argument("--source", default=None, help="Id of the city the tour starts and ends at.")
    solve.add_argument("--config", type=pathlib.Path, default=None, help="YAML config file.")
    solve.add_argument("--time-limit", type=float, default=None, help="Stop the search after this many seconds.")
    solve.add_argument("--events", type=pathlib.Path, default=None, help="Destination JSONL file for the event trace.")
    solve.add_argument("--summary", type=pathlib.Path, default=None, help="Destination CSV file for per-level counts.")
    solve.add_argument("--play", action="store_true", help="Replay the trace on the console after solving.")
    solve.add_argument("--log-file", type=pathlib.Path, default=None)
    solve.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(raw_args)


def load_problem(args: argparse.Namespace) -> dict:
    if args.problem is not None:
        with args.problem.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    rng = np.random.default_rng(args.seed)
    cities = generate_cities(args.random, rng)
    return {
        "coordinates": [[city.x, city.y] for city in cities],
        "ids": [city.label for city in cities],
    }


def run_solve(args: argparse.Namespace) -> int:
    config = load_config(str(args.config) if args.config else None).with_overrides(
        time_limit=args.time_limit,
        log_level=args.log_level,
    )
    logger = setup_logger("TraceTSP", args.log_file, level=getattr(logging, config.log_level))

    problem = load_problem(args)
    try:
        result = TraceTSP(config).solve(problem, source=args.source)
    except SourceNotFoundError as exc:
        logger.error("%s", exc)
        return 2

    if args.events is not None:
        count = write_events_jsonl(result.events, args.events)
        logger.info("Wrote %d events to %s", count, args.events)
    if args.summary is not None:
        args.summary.parent.mkdir(parents=True, exist_ok=True)
        summarise(result.events).to_csv(args.summary, index=False)
        logger.info("Wrote summary to %s", args.summary)
    if args.play:
        play(
            result.events,
            speed=config.playback_speed,
            on_batch=lambda batch, state: logger.info(
                "[%d/%d] %s", state.current_step, state.total_steps, batch[-1].message
            ),
        )

    tour = result.best_tour
    if tour is None:
        print(f"status={result.status.value} no tour explored={result.explored_count} events={len(result.events)}")
    else:
        print(
            f"status={result.status.value} cost={format_cost(tour.total_cost)} "
            f"tour={'->'.join(tour.city_ids)} explored={result.explored_count} events={len(result.events)}"
        )
    return 0


def main(raw_args: Iterable[str] | None = None) -> int:
    args = parse_args(raw_args)
    try:
        if args.command == "solve":
            return run_solve(args)
    except ConfigError as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        print(f"Invalid problem: {exc}", file=sys.stderr)
        return 2
    return 1


if __name__ == "__main__":
    sys.exit(main())
