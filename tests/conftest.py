from __future__ import annotations

from dataclasses import dataclass

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@dataclass
class RankAssertionHelper:
    def assert_ranking(
        self, ranking: np.ndarray, values, min_is_one: bool = True
    ) -> None:
        arr = np.asarray(ranking, dtype=float)
        V = np.asarray(values, dtype=float)
        assert arr.shape == V.shape

        missing = np.isnan(V)
        assert np.all(np.isnan(arr[missing]))

        present = arr[~missing]
        if present.size == 0:
            return
        assert np.all(np.isfinite(present))
        if min_is_one:
            assert float(np.min(present)) == pytest.approx(1.0)
        assert np.all(present >= 1.0)
        assert np.all(present <= float(present.size))

    def assert_order_consistent(
        self, ranking: np.ndarray, values, descending: bool = False
    ) -> None:
        arr = np.asarray(ranking, dtype=float).reshape(-1)
        V = np.asarray(values, dtype=float).reshape(-1)
        keep = ~np.isnan(V)
        arr, V = arr[keep], V[keep]
        sign = -1.0 if descending else 1.0
        for i in range(V.shape[0]):
            for j in range(V.shape[0]):
                if sign * V[i] < sign * V[j]:
                    assert arr[i] <= arr[j]


@pytest.fixture(scope="session")
def rank_assertions() -> RankAssertionHelper:
    return RankAssertionHelper()


@pytest.fixture(scope="session")
def reference_values() -> list[float]:
    return [5, 0, 5, 1, np.inf, np.nan, 1]


@pytest.fixture(scope="session")
def tie_heavy_values() -> np.ndarray:
    rng = np.random.default_rng(20260214)
    V = rng.integers(0, 6, size=40).astype(float)
    V[rng.choice(40, size=5, replace=False)] = np.nan
    return V


@pytest.fixture(scope="session")
def accuracy_matrix() -> tuple[np.ndarray, np.ndarray, list[str]]:
    rng = np.random.default_rng(20260215)
    parameters = np.arange(10, 110, 10, dtype=float)
    labels = [f"set{j}" for j in range(6)]
    values = np.round(rng.uniform(0.5, 1.0, size=(parameters.size, len(labels))), 3)
    return parameters, values, labels


@pytest.fixture
def accuracy_table_text(
    accuracy_matrix: tuple[np.ndarray, np.ndarray, list[str]],
) -> str:
    parameters, values, labels = accuracy_matrix
    lines = ["  ".join(labels)]
    for p, row in zip(parameters, values):
        lines.append("  ".join([f"{p:g}"] + [f"{v:g}" for v in row]))
    return "\n".join(lines) + "\n"
