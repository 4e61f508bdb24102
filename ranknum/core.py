r"""
Rank numbers under the five standard tie-handling conventions.

Every policy is derived from a single primitive, the *competition rank* of a
sorted sequence:

\[
c_k = 1 + \#\{ j < k : w_j \ne w_k \}, \qquad w_1 \le w_2 \le \dots \le w_n
\]

so tied items share the smallest position of their tie-group. The other
conventions are transforms of \( c \):

- Dense: the number of distinct values up to and including \( w_k \).
- Ordinal: the position \( k \) itself (stable sort, so exact ties keep
  their original index order).
- Modified competition: \( n + 1 - c' \) where \( c' \) is the competition
  rank of the reversed sequence, i.e. the largest position of the group.
- Fractional: the mean of the competition and modified competition ranks.

Missing entries (``NaN`` or ``None``) are set aside before sorting and come
back as ``NaN`` at their original positions; they never consume a rank.

"""

import numpy as np

from ._base import validate_values
from ._types import RankingPolicy


def _group_starts(sorted_values: np.ndarray, tol: float = 0.0) -> np.ndarray:
    """Boolean mask marking the first element of every tie-group."""
    n = sorted_values.shape[0]
    starts = np.ones(n, dtype=bool)
    if n < 2:
        return starts
    if tol == 0.0:
        starts[1:] = np.asarray(sorted_values[1:] != sorted_values[:-1], dtype=bool)
        return starts

    # Compare against the group's first value so near-values do not chain.
    w = sorted_values.tolist()
    anchor = w[0]
    for i in range(1, n):
        if w[i] == anchor or abs(w[i] - anchor) <= tol:
            starts[i] = False
        else:
            anchor = w[i]
    return starts


def _competition_from_starts(starts: np.ndarray) -> np.ndarray:
    positions = np.arange(1, starts.shape[0] + 1, dtype=float)
    if starts.size == 0:
        return positions
    # Carry the position of each group start forward over its tied members.
    return np.maximum.accumulate(np.where(starts, positions, 0.0))


def competition_rank(sorted_values: np.ndarray, tol: float = 0.0) -> np.ndarray:
    """
    Standard competition ranks ("1224") of an already sorted 1D array.

    Args:
        sorted_values: 1D array sorted in the ranking direction, without
            missing entries.
        tol: Values within ``tol`` of the first value of a tie-group join
            that group.

    Returns:
        Float array of ranks aligned with ``sorted_values``.

    Examples:
        >>> competition_rank(np.array([1.0, 2.0, 2.0, 4.0])).tolist()
        [1.0, 2.0, 2.0, 4.0]
    """
    return _competition_from_starts(_group_starts(np.asarray(sorted_values), tol))


def _ranks_in_sorted_order(starts: np.ndarray, policy: RankingPolicy) -> np.ndarray:
    n = starts.shape[0]
    if policy is RankingPolicy.DENSE:
        return np.cumsum(starts).astype(float)
    if policy is RankingPolicy.ORDINAL:
        return np.arange(1, n + 1, dtype=float)

    competition = _competition_from_starts(starts)
    if policy is RankingPolicy.COMPETITION:
        return competition

    # Group ends, read backwards, are the group starts of the reversed sequence.
    ends = np.ones(n, dtype=bool)
    ends[:-1] = starts[1:]
    modified = (n + 1 - _competition_from_starts(ends[::-1]))[::-1]
    if policy is RankingPolicy.MODIFIED_COMPETITION:
        return modified

    # Only differs from the competition ranks inside tie-groups.
    return (competition + modified) / 2.0


def _sort_order(x: np.ndarray, descending: bool) -> np.ndarray:
    if not descending:
        return np.argsort(x, kind="stable")
    # Stable descending sort without negation (unsigned and object keys);
    # tied items keep their original index order.
    n = x.shape[0]
    return (n - 1 - np.argsort(x[::-1], kind="stable"))[::-1]


def _rank_1d(
    v: np.ndarray,
    missing: np.ndarray,
    policies: list[RankingPolicy],
    descending: bool,
    tol: float,
) -> dict[RankingPolicy, np.ndarray]:
    present = ~missing
    out = {policy: np.full(v.shape, np.nan) for policy in policies}
    if not present.any():
        return out

    x = v[present]
    order = _sort_order(x, descending)
    starts = _group_starts(x[order], tol)

    for policy in policies:
        ranks = np.empty(x.shape[0])
        ranks[order] = _ranks_in_sorted_order(starts, policy)
        out[policy][present] = ranks
    return out


def _rank_array(
    values,
    policies: list[RankingPolicy],
    descending: bool,
    tol: float,
    axis: int | None,
) -> dict[RankingPolicy, np.ndarray]:
    tol = float(tol)
    if not np.isfinite(tol) or tol < 0.0:
        raise ValueError(f"tol must be a finite value >= 0, got {tol}")

    V, missing = validate_values(values)

    if axis is None:
        flat = _rank_1d(V.reshape(-1), missing.reshape(-1), policies, descending, tol)
        return {policy: ranks.reshape(V.shape) for policy, ranks in flat.items()}

    moved = np.moveaxis(V, axis, -1)
    if moved.size == 0:
        return {policy: np.full(V.shape, np.nan) for policy in policies}

    rows = moved.reshape(-1, moved.shape[-1])
    missing_rows = np.moveaxis(missing, axis, -1).reshape(rows.shape)
    ranked_rows = [
        _rank_1d(row, row_missing, policies, descending, tol)
        for row, row_missing in zip(rows, missing_rows)
    ]
    out = {}
    for policy in policies:
        stacked = np.stack([r[policy] for r in ranked_rows]).reshape(moved.shape)
        out[policy] = np.moveaxis(stacked, -1, axis)
    return out


def ranknum(
    values,
    policy: RankingPolicy | int | str = RankingPolicy.DENSE,
    *,
    descending: bool = False,
    tol: float = 0.0,
    axis: int | None = None,
) -> np.ndarray:
    """
    Compute the rank numbers of ``values`` under a tie-handling policy.

    Method context:
        Values are ranked smallest first by default (rank 1 is the smallest
        value); pass ``descending=True`` to give rank 1 to the largest value.
        Missing entries are ignored and keep ``NaN`` in the output. String
        input is ranked alphabetically.

    Args:
        values: Array-like of numbers or strings, any shape. ``NaN`` (and
            ``None`` in object input) marks a missing entry.
        policy: A :class:`RankingPolicy`, its integer code ``1..5``, or its
            name (e.g. ``"fractional"``, ``"competition_max"``).
        descending: If ``True``, the largest value receives rank 1.
        tol: A sorted value within ``tol`` of the first value of the current
            tie-group joins that group. ``0`` means exact ties only.
        axis: If ``None`` (default), all elements are ranked jointly.
            Otherwise each 1D slice along ``axis`` is ranked independently.

    Returns:
        ``float64`` array with the shape of ``values``. Ranks are integral
        except under ``FRACTIONAL``, where tied items may share a
        half-integer rank.

    Raises:
        InvalidPolicyError: If ``policy`` is not one of the five conventions.
        InvalidInputTypeError: If ``values`` are neither all numeric nor all
            strings.

    Examples:
        >>> import numpy as np
        >>> from ranknum import ranknum, RankingPolicy
        >>> V = [5, 0, 5, 1, np.inf, np.nan, 1]
        >>> ranknum(V).tolist()
        [3.0, 1.0, 3.0, 2.0, 4.0, nan, 2.0]
        >>> ranknum(V, RankingPolicy.FRACTIONAL).tolist()
        [4.5, 1.0, 4.5, 2.5, 6.0, nan, 2.5]
        >>> ranknum([["C", "A", "C"], ["A", "X", "D"]]).tolist()
        [[2.0, 1.0, 2.0], [1.0, 4.0, 3.0]]

    Notes:
        Under ``ORDINAL`` exact ties are numbered in their original index
        order (flattened C order when ``axis`` is ``None``).
    """
    policy = RankingPolicy.coerce(policy)
    return _rank_array(values, [policy], descending, tol, axis)[policy]


def rank_all(
    values,
    *,
    descending: bool = False,
    tol: float = 0.0,
    axis: int | None = None,
) -> dict[RankingPolicy, np.ndarray]:
    """
    Rank ``values`` under all five policies with a single sort.

    Args:
        values: Same as :func:`ranknum`.
        descending: Same as :func:`ranknum`.
        tol: Same as :func:`ranknum`.
        axis: Same as :func:`ranknum`.

    Returns:
        Mapping from each :class:`RankingPolicy` to its rank array.
    """
    return _rank_array(values, list(RankingPolicy), descending, tol, axis)


__all__ = [
    "ranknum",
    "rank_all",
    "competition_rank",
]
