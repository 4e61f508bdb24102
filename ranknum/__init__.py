"""ranknum: rank numbers with explicit tie handling, and rank aggregation.

Modules
------------------
- ``ranknum.core`` computes rank numbers under the five tie conventions
  (dense, ordinal, competition, modified competition, fractional).
- ``ranknum.aggregate`` ranks the columns of a value matrix and summarizes
  the ranks per row (mean, standard deviation, best row, threshold).
- ``ranknum.io`` reads value tables from text.
- ``ranknum.plot`` draws the aggregated summary as an error-bar chart.
- ``ranknum.cli`` is the command line tool built from the modules above.
- ``ranknum.utils`` provides score-ranking and logging helpers.

Examples
--------
>>> from ranknum import ranknum, RankingPolicy
>>> ranknum([1, 2, 2, 4], RankingPolicy.COMPETITION).tolist()
[1.0, 2.0, 2.0, 4.0]
>>> ranknum([1, 2, 2, 4], "fractional").tolist()
[1.0, 2.5, 2.5, 4.0]
"""

__version__ = "0.1.0"

from . import aggregate, core, io, utils
from ._types import RankingPolicy
from .aggregate import RankSummary, rank_matrix, summarize
from .core import competition_rank, rank_all, ranknum
from .exceptions import (
    InvalidInputTypeError,
    InvalidPolicyError,
    RankingError,
    ShapeMismatchError,
)
from .io import RankTable, load_table, parse_table

__all__ = [
    "aggregate",
    "core",
    "io",
    "utils",
    "RankingPolicy",
    "ranknum",
    "rank_all",
    "competition_rank",
    "rank_matrix",
    "summarize",
    "RankSummary",
    "RankTable",
    "load_table",
    "parse_table",
    "RankingError",
    "InvalidPolicyError",
    "InvalidInputTypeError",
    "ShapeMismatchError",
]
