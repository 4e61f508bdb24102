"""
Aggregation of repeated rankings.

A value matrix of shape ``(M, N)`` holds, for each of ``N`` independent
datasets (columns), one measurement per configuration (rows, e.g. a sample
count). Each column is ranked on its own, giving a rank matrix of the same
shape, and every row is summarized by the mean and standard deviation of its
ranks across the columns. The row with the smallest mean rank is the most
stable configuration; its ``mean + std`` is reported as a threshold.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from ._types import RankingPolicy
from .core import ranknum
from .exceptions import ShapeMismatchError

if TYPE_CHECKING:
    from .io import RankTable

logger = logging.getLogger(__name__)


@dataclass
class RankSummary:
    """Per-row statistics of a rank matrix."""

    mean: np.ndarray
    std: np.ndarray
    best_index: int
    threshold: float
    parameters: np.ndarray | None = None

    @property
    def best_parameter(self) -> float | None:
        """Configuration parameter of the row with the smallest mean rank."""
        if self.parameters is None:
            return None
        return float(self.parameters[self.best_index])


def rank_matrix(
    values,
    policy: RankingPolicy | int | str = RankingPolicy.DENSE,
    *,
    descending: bool = False,
    tol: float = 0.0,
) -> np.ndarray:
    """
    Rank every column of a 2D value matrix independently.

    Args:
        values: Array-like of shape ``(M, N)``.
        policy: Ranking policy, see :func:`ranknum.ranknum`.
        descending: If ``True``, the largest value in a column gets rank 1.
        tol: Tie tolerance, see :func:`ranknum.ranknum`.

    Returns:
        Rank matrix of shape ``(M, N)``.

    Raises:
        ShapeMismatchError: If ``values`` is not two-dimensional.
    """
    policy = RankingPolicy.coerce(policy)
    V = np.asarray(values)
    if V.ndim != 2:
        raise ShapeMismatchError(
            f"values must be a 2D matrix of shape (M, N), got shape {V.shape}"
        )

    logger.debug(
        "Ranking %d columns of %d rows with %s policy", V.shape[1], V.shape[0], policy.name
    )
    return ranknum(V, policy, descending=descending, tol=tol, axis=0)


def summarize(ranks, parameters=None, ddof: int = 1) -> RankSummary:
    """
    Summarize a rank matrix row by row.

    Args:
        ranks: Rank matrix of shape ``(M, N)``; ``NaN`` entries are ignored.
        parameters: Optional configuration parameter per row, shape ``(M,)``.
        ddof: Delta degrees of freedom of the standard deviation. The
            default ``1`` gives the sample standard deviation.

    Returns:
        :class:`RankSummary` with per-row ``mean`` and ``std``, the first row
        with minimal mean and ``threshold = mean[best] + std[best]``.

    Raises:
        ShapeMismatchError: If ``ranks`` is not 2D or ``parameters`` does not
            have one entry per row.
        ValueError: If ``ddof`` is negative or no row holds a ranked value.
    """
    R = np.asarray(ranks, dtype=float)
    if R.ndim != 2:
        raise ShapeMismatchError(
            f"ranks must be a 2D matrix of shape (M, N), got shape {R.shape}"
        )
    if ddof < 0:
        raise ValueError(f"ddof must be >= 0, got {ddof}")

    if parameters is not None:
        parameters = np.asarray(parameters, dtype=float).reshape(-1)
        if parameters.shape[0] != R.shape[0]:
            raise ShapeMismatchError(
                f"parameters must have one entry per row: got {parameters.shape[0]} "
                f"for {R.shape[0]} rows"
            )

    counts = np.sum(~np.isnan(R), axis=1)
    if not np.any(counts):
        raise ValueError("ranks contain no ranked values to summarize")

    with warnings.catch_warnings():
        # Rows without enough ranked values yield NaN; handled below.
        warnings.simplefilter("ignore", RuntimeWarning)
        mean = np.nanmean(R, axis=1)
        std = np.nanstd(R, axis=1, ddof=ddof)

    # A single observation has no spread.
    std = np.where((counts > 0) & (counts <= ddof), 0.0, std)

    best_index = int(np.nanargmin(mean))
    threshold = float(mean[best_index] + std[best_index])
    logger.debug(
        "Best row %d: mean rank %.4g, std %.4g", best_index, mean[best_index], std[best_index]
    )
    return RankSummary(
        mean=mean,
        std=std,
        best_index=best_index,
        threshold=threshold,
        parameters=parameters,
    )


def aggregate(
    table: "RankTable",
    policy: RankingPolicy | int | str = RankingPolicy.DENSE,
    *,
    descending: bool = False,
    tol: float = 0.0,
    ddof: int = 1,
) -> tuple[np.ndarray, RankSummary]:
    """
    Rank every column of ``table`` and summarize the result.

    Returns:
        Tuple ``(ranks, summary)``.
    """
    ranks = rank_matrix(table.values, policy, descending=descending, tol=tol)
    return ranks, summarize(ranks, parameters=table.parameters, ddof=ddof)


__all__ = [
    "RankSummary",
    "rank_matrix",
    "summarize",
    "aggregate",
]
