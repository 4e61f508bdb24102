"""
Reading value tables.

The text format is a header row of ``N`` column labels followed by ``M``
rows, each a numeric configuration parameter and ``N`` numeric values::

    A     B     C
    10    0.81  0.77  0.90
    20    0.84  0.79  0.88

Tokens may be separated by whitespace, commas, or both. Blank lines are
skipped and ``nan`` marks a missing value.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .exceptions import InvalidInputTypeError, ShapeMismatchError

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[,\s]+")


@dataclass
class RankTable:
    """Column labels, per-row parameters and an ``(M, N)`` value matrix."""

    labels: list[str]
    parameters: np.ndarray
    values: np.ndarray

    @property
    def shape(self) -> tuple[int, int]:
        return self.values.shape


def _tokens(line: str) -> list[str]:
    return [tok for tok in _SEPARATORS.split(line.strip()) if tok]


def _parse_number(token: str, lineno: int) -> float:
    try:
        return float(token)
    except ValueError:
        raise InvalidInputTypeError(
            f"line {lineno}: expected a number, got {token!r}"
        ) from None


def parse_table(
    text: str,
    n_columns: int | None = None,
    n_rows: int | None = None,
) -> RankTable:
    """
    Parse a value table from text.

    Args:
        text: Table text (header row, then data rows).
        n_columns: Expected number of value columns ``N``, if known.
        n_rows: Expected number of data rows ``M``, if known.

    Returns:
        :class:`RankTable` with ``values`` of shape ``(M, N)``.

    Raises:
        ShapeMismatchError: If the header is missing, a row has the wrong
            number of values, or the counts differ from ``n_columns`` or
            ``n_rows``.
        InvalidInputTypeError: If a data token is not a number.
    """
    lines = [(i, line) for i, line in enumerate(text.splitlines(), start=1) if line.strip()]
    if not lines:
        raise ShapeMismatchError("table is empty: expected a header row of labels")

    _, header = lines[0]
    labels = _tokens(header)
    N = len(labels)
    if n_columns is not None and N != n_columns:
        raise ShapeMismatchError(
            f"header has {N} labels but {n_columns} columns were declared"
        )

    parameters = []
    rows = []
    for lineno, line in lines[1:]:
        tokens = _tokens(line)
        if len(tokens) != N + 1:
            raise ShapeMismatchError(
                f"line {lineno}: expected a parameter and {N} values, "
                f"got {len(tokens)} tokens"
            )
        parameters.append(_parse_number(tokens[0], lineno))
        rows.append([_parse_number(tok, lineno) for tok in tokens[1:]])

    if n_rows is not None and len(rows) != n_rows:
        raise ShapeMismatchError(
            f"table has {len(rows)} data rows but {n_rows} rows were declared"
        )

    values = np.array(rows, dtype=float).reshape(len(rows), N)
    logger.debug("Parsed table with %d rows and %d columns", *values.shape)
    return RankTable(labels=labels, parameters=np.array(parameters, dtype=float), values=values)


def load_table(
    path: str | Path,
    n_columns: int | None = None,
    n_rows: int | None = None,
) -> RankTable:
    """Read and parse a value table from ``path``; see :func:`parse_table`."""
    path = Path(path)
    logger.debug("Loading table from %s", path)
    return parse_table(path.read_text(encoding="utf-8"), n_columns=n_columns, n_rows=n_rows)


__all__ = [
    "RankTable",
    "parse_table",
    "load_table",
]
