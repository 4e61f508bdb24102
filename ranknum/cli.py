"""Command line tool: rank every column of a value table and summarize."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional, TextIO

import matplotlib

from ._types import RankingPolicy
from .aggregate import aggregate
from .exceptions import RankingError
from .io import load_table
from .utils import setup_logger

_POLICY_MENU = """\
  P | Ranking type        | Ties get ... rank | V = [1 2 2 4] -> R =
 ---+---------------------+-------------------+----------------------
  1 | Dense (default)     | same              | 1  2   2   3
  2 | Ordinal             | consecutive       | 1  2   3   4
  3 | Competition         | same minimum      | 1  2   2   4
  4 | Modified competition| same maximum      | 1  3   3   4
  5 | Fractional          | same average      | 1 2.5 2.5  4
"""


def prompt_policy(
    input_fn: Callable[[str], str] = input,
    out: TextIO = sys.stdout,
) -> RankingPolicy:
    """Ask once for a ranking policy code; an empty answer selects Dense."""
    out.write(_POLICY_MENU)
    answer = input_fn("Enter number of ranking type [1-5]: ").strip()
    if not answer:
        return RankingPolicy.DENSE
    return RankingPolicy.coerce(answer)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ranknum-tool",
        description=(
            "Rank each column of a value table and report the mean and "
            "standard deviation of ranks per configuration row."
        ),
    )
    parser.add_argument("table", type=Path, help="Path to the value table")
    parser.add_argument(
        "--policy",
        default=None,
        help="Ranking policy code 1-5 or name; prompted for when omitted",
    )
    parser.add_argument(
        "--descending",
        action="store_true",
        help="Give rank 1 to the largest value instead of the smallest",
    )
    parser.add_argument("--tol", type=float, default=0.0, help="Tie tolerance")
    parser.add_argument(
        "--ddof", type=int, default=1, help="Delta degrees of freedom for the std"
    )
    parser.add_argument("--columns", type=int, default=None, help="Expected value columns")
    parser.add_argument("--rows", type=int, default=None, help="Expected data rows")
    parser.add_argument("--plot", type=Path, default=None, help="Save the chart here")
    parser.add_argument("--log-file", type=Path, default=None, help="Also log to this file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def format_summary(summary) -> str:
    lines = [f"{'parameter':>12}  {'mean rank':>10}  {'std':>10}"]
    params = summary.parameters
    for i, (m, s) in enumerate(zip(summary.mean, summary.std)):
        p = f"{params[i]:g}" if params is not None else str(i + 1)
        marker = "  <- best" if i == summary.best_index else ""
        lines.append(f"{p:>12}  {m:>10.4f}  {s:>10.4f}{marker}")
    lines.append(f"threshold (best mean + std): {summary.threshold:.4f}")
    return "\n".join(lines)


def main(
    argv: Optional[list[str]] = None,
    input_fn: Callable[[str], str] = input,
    out: TextIO = sys.stdout,
) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logger(
        "ranknum",
        log_file=args.log_file,
        level=getattr(logging, args.log_level),
    )

    try:
        if args.policy is None:
            policy = prompt_policy(input_fn=input_fn, out=out)
        else:
            policy = RankingPolicy.coerce(args.policy)
        logger.info("Ranking policy: %s", policy.name)

        table = load_table(args.table, n_columns=args.columns, n_rows=args.rows)
        logger.info(
            "Loaded %d rows x %d columns from %s", *table.shape, args.table
        )
        _, summary = aggregate(
            table,
            policy,
            descending=args.descending,
            tol=args.tol,
            ddof=args.ddof,
        )
    except EOFError:
        logger.error("No ranking policy given; pass --policy or answer the prompt")
        return 2
    except (RankingError, ValueError) as exc:
        logger.error("%s", exc)
        return 2
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.table, exc)
        return 1

    out.write(format_summary(summary) + "\n")

    if args.plot is not None:
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from .plot import plot_summary

        try:
            ax = plot_summary(summary, path=args.plot)
        except (OSError, ValueError) as exc:
            plt.close("all")
            logger.error("Cannot save plot to %s: %s", args.plot, exc)
            return 1
        plt.close(ax.figure)

    return 0


if __name__ == "__main__":
    sys.exit(main())
