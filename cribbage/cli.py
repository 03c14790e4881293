"""Command-line front end.

Usage:
    cribbage score 2H 3H 5H TH 5C
    cribbage enumerate --out scores.csv --max-records 1000
    cribbage simulate --hands 100000 --seed 42
    cribbage discard --deals 10000
    cribbage distribution --workers 4 --out distribution.png

The last card given to `score` is the cut. Card codes are rank + suit,
ranks A 2-9 T(or 0) J Q K, suits H S D C.
"""

from __future__ import annotations

import argparse
import sys
import time

import matplotlib

matplotlib.use("Agg")  # must be set before any other matplotlib imports

from cribbage.analysis.distribution import (
    distribution_summary,
    plot_score_distribution,
    score_distribution,
)
from cribbage.analysis.export import write_csv
from cribbage.analysis.simulator import (
    DEFAULT_N_HANDS,
    DEFAULT_SEED,
    compare_strategies,
    default_strategies,
    simulate_hands,
)
from cribbage.engine.hand import HELD_SIZE, hand_from_codes
from cribbage.engine.scoring import score_breakdown
from cribbage.solvers.enumeration import TOTAL_HANDS, build_table, enumerate_hands

EXIT_USAGE: int = 2


def _cmd_score(args: argparse.Namespace) -> int:
    hand = hand_from_codes(args.cards[:HELD_SIZE], args.cards[HELD_SIZE])
    breakdown = score_breakdown(hand)
    print(f"Hand: {hand}")
    print(breakdown)
    print(breakdown.total)
    return 0


def _cmd_enumerate(args: argparse.Namespace) -> int:
    start = time.perf_counter()
    n_rows = write_csv(
        args.out,
        enumerate_hands(),
        max_records=args.max_records,
        progress=not args.no_progress,
        total=TOTAL_HANDS,
    )
    elapsed = time.perf_counter() - start
    print(f"Wrote {n_rows:,} rows to {args.out} in {elapsed:.1f}s")
    return 0


def _cmd_simulate(args: argparse.Namespace) -> int:
    print(f"Simulating {args.hands:,} random hands (seed={args.seed})")
    print(simulate_hands(n_hands=args.hands, seed=args.seed))
    return 0


def _cmd_discard(args: argparse.Namespace) -> int:
    print(f"Comparing discard strategies over {args.deals:,} deals (seed={args.seed})")
    results = compare_strategies(default_strategies(args.seed), n_deals=args.deals, seed=args.seed)
    for name, result in results.items():
        print(f"{name:<10} {result}")
    return 0


def _cmd_distribution(args: argparse.Namespace) -> int:
    start = time.perf_counter()
    table = build_table(n_workers=args.workers, progress=not args.no_progress)
    counts = score_distribution(table.scores)
    print(f"Scored {len(table):,} hands in {time.perf_counter() - start:.1f}s")
    print(distribution_summary(counts))
    for points, n in enumerate(counts):
        print(f"{points:>3} {n:>10,}")
    if args.out:
        fig = plot_score_distribution(counts, log_scale=args.log)
        fig.savefig(args.out, dpi=120)
        print(f"Saved histogram to {args.out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cribbage", description="Cribbage hand scorer")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("score", help="Score one hand (4 held cards then the cut)")
    p.add_argument("cards", nargs=HELD_SIZE + 1, metavar="CARD", help="Card code, e.g. 5H")
    p.set_defaults(func=_cmd_score)

    p = sub.add_parser("enumerate", help="Write every hand and its score to CSV")
    p.add_argument("--out", type=str, default="scores.csv", help="Output CSV path")
    p.add_argument("--max-records", type=int, default=None, help="Stop after this many rows")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    p.set_defaults(func=_cmd_enumerate)

    p = sub.add_parser("simulate", help="Score random hands")
    p.add_argument("--hands", type=int, default=DEFAULT_N_HANDS, help="Number of hands")
    p.add_argument("--seed", type=int, default=DEFAULT_SEED, help="RNG seed")
    p.set_defaults(func=_cmd_simulate)

    p = sub.add_parser("discard", help="Compare discard strategies")
    p.add_argument("--deals", type=int, default=10_000, help="Number of deals per strategy")
    p.add_argument("--seed", type=int, default=DEFAULT_SEED, help="RNG seed")
    p.set_defaults(func=_cmd_discard)

    p = sub.add_parser("distribution", help="Build the full table and summarise scores")
    p.add_argument("--workers", type=int, default=1, help="Worker processes")
    p.add_argument("--out", type=str, default=None, help="Save a histogram PNG here")
    p.add_argument("--log", action="store_true", help="Log-scale histogram y-axis")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    p.set_defaults(func=_cmd_distribution)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run one subcommand and return its exit code.

    Bad card codes, invalid hands and out-of-range option values raise
    ValueError below this point; they are reported on stderr with exit code 2.
    """
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
