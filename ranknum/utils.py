import logging
import sys
from pathlib import Path
from typing import Optional

import numpy as np

from ._types import RankingPolicy
from .core import rank_all

_VARIANT_KEYS = {
    "competition": RankingPolicy.COMPETITION,
    "competition_max": RankingPolicy.MODIFIED_COMPETITION,
    "dense": RankingPolicy.DENSE,
    "avg": RankingPolicy.FRACTIONAL,
    "ordinal": RankingPolicy.ORDINAL,
}


def rank_variants(scores_in_id_order, tol=1e-12):
    """
    Rank scores (higher is better) with confidence tolerance

    Args:
        scores_in_id_order (list or np.ndarray): Scores aligned by ID order.
        tol (float): Tolerance threshold for treating scores as equal.

    Returns:
        dict: {
            "competition": np.ndarray of ranks (min-rank competition),
            "competition_max": np.ndarray of ranks (max-rank competition),
            "dense": np.ndarray of ranks (dense ranking),
            "avg": np.ndarray of ranks (average/fractional ranking),
            "ordinal": np.ndarray of ranks (ties numbered in ID order)
        }
    """
    scores = np.asarray(scores_in_id_order, dtype=float)
    if scores.ndim != 1:
        raise ValueError(f"scores must be a 1D sequence, got shape {scores.shape}")

    ranks = rank_all(scores, descending=True, tol=tol)
    return {key: ranks[policy] for key, policy in _VARIANT_KEYS.items()}


def setup_logger(
    name: str = "ranknum",
    log_file: Optional[Path] = None,
    level: int = logging.INFO,
) -> logging.Logger:
    """Send ``name`` records to stderr and, when given, to ``log_file``."""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Replace handlers from an earlier call; close them so log files are released.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


__all__ = [
    "rank_variants",
    "setup_logger",
]
