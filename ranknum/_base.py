"""
Base utilities for the ranker.

This module turns caller input into an array the ranking code can sort plus
a mask of missing entries: numeric input keeps its own dtype (integers are
never routed through floats), categorical (string) input is replaced by
ordinal codes that preserve alphabetical order.
"""

import numbers

import numpy as np

from .exceptions import InvalidInputTypeError


def _is_missing(x) -> bool:
    if x is None:
        return True
    return isinstance(x, (float, np.floating)) and np.isnan(x)


def ordinal_codes(labels: np.ndarray) -> np.ndarray:
    """
    Map categorical labels to ordinal codes preserving lexicographic order.

    Args:
        labels: 1D array of strings.

    Returns:
        Integer array of the same length with codes ``0..K-1`` where ``K``
        is the number of distinct labels.

    Examples:
        >>> ordinal_codes(np.array(["C", "A", "C", "X"])).tolist()
        [1, 0, 1, 2]
    """
    _, codes = np.unique(labels, return_inverse=True)
    return codes.reshape(-1)


def _numeric_array(present: list) -> np.ndarray:
    if all(isinstance(x, numbers.Integral) for x in present):
        # int64/uint64 when they fit, Python ints in an object array otherwise.
        try:
            arr = np.array(present)
        except OverflowError:
            arr = np.array(present, dtype=object)
        if arr.dtype.kind in "biuO":
            return arr
    return np.array(present, dtype=float)


def validate_values(values) -> tuple[np.ndarray, np.ndarray]:
    """
    Validate values and split off the missing entries.

    Args:
        values: Array-like of real numbers (``NaN`` marks missing), of
            strings, or an object array mixing one of those with ``None``
            or ``NaN`` missing markers. Any shape is accepted.

    Returns:
        Tuple ``(V, missing)`` of arrays with the shape of ``values``.
        ``V`` holds sortable keys: integer input keeps its integer dtype,
        float input stays float, strings become ordinal codes. Entries of
        ``V`` where ``missing`` is ``True`` are placeholders.

    Raises:
        InvalidInputTypeError: If the values are complex, mix numbers with
            strings, contain unorderable objects, or do not form a regular
            array.
    """
    try:
        V = np.asarray(values)
        if V.dtype.kind in "US" and not isinstance(values, np.ndarray):
            # Lists mixing numbers and strings coerce to strings; inspect each element.
            V = np.asarray(values, dtype=object)
    except ValueError as exc:
        raise InvalidInputTypeError(
            f"values must form a regular array: {exc}"
        ) from exc

    kind = V.dtype.kind
    if kind == "b":
        return V.astype(np.int8), np.zeros(V.shape, dtype=bool)

    if kind in "iu":
        return V, np.zeros(V.shape, dtype=bool)

    if kind == "f":
        return V, np.isnan(V)

    if kind in "US":
        codes = ordinal_codes(V.reshape(-1)).reshape(V.shape)
        return codes, np.zeros(V.shape, dtype=bool)

    if kind != "O":
        raise InvalidInputTypeError(
            f"values must be numeric, strings, or missing markers, got dtype {V.dtype}"
        )

    flat = V.reshape(-1)
    missing = np.fromiter((_is_missing(x) for x in flat), dtype=bool, count=flat.size)
    present = [x for x, m in zip(flat, missing) if not m]

    if all(isinstance(x, str) for x in present):
        keys = ordinal_codes(np.array(present, dtype=str)) if present else np.zeros(0, dtype=int)
    elif all(
        isinstance(x, (numbers.Real, np.bool_)) and not isinstance(x, str)
        for x in present
    ):
        keys = _numeric_array(present)
    else:
        kinds = sorted({type(x).__name__ for x in present})
        raise InvalidInputTypeError(
            "values must all be numeric or all be strings, "
            f"got element types {kinds}"
        )

    out = np.zeros(flat.shape, dtype=keys.dtype)
    out[~missing] = keys
    return out.reshape(V.shape), missing.reshape(V.shape)


__all__ = [
    "validate_values",
    "ordinal_codes",
]
