from __future__ import annotations

import numpy as np
import pytest

from ranknum import (
    InvalidPolicyError,
    RankingPolicy,
    RankTable,
    ShapeMismatchError,
    rank_matrix,
    summarize,
)
from ranknum.aggregate import aggregate


class TestRankMatrix:
    def test_each_column_ranked_independently(self) -> None:
        values = [[1, 4], [2, 5], [3, 3]]
        ranks = rank_matrix(values, RankingPolicy.COMPETITION)
        np.testing.assert_array_equal(ranks, [[1, 2], [2, 3], [3, 1]])

    def test_descending(self) -> None:
        values = [[1, 4], [2, 5], [3, 3]]
        ranks = rank_matrix(values, "competition", descending=True)
        np.testing.assert_array_equal(ranks, [[3, 2], [2, 1], [1, 3]])

    def test_columns_match_single_column_calls(
        self, accuracy_matrix: tuple[np.ndarray, np.ndarray, list[str]]
    ) -> None:
        from ranknum import ranknum

        _, values, _ = accuracy_matrix
        ranks = rank_matrix(values, RankingPolicy.FRACTIONAL)
        for j in range(values.shape[1]):
            np.testing.assert_array_equal(
                ranks[:, j], ranknum(values[:, j], RankingPolicy.FRACTIONAL)
            )

    @pytest.mark.parametrize("shape", [(4,), (2, 2, 2)])
    def test_non_matrix_raises(self, shape: tuple[int, ...]) -> None:
        with pytest.raises(ShapeMismatchError, match="2D matrix"):
            rank_matrix(np.zeros(shape))

    def test_invalid_policy_propagates(self) -> None:
        with pytest.raises(InvalidPolicyError):
            rank_matrix([[1, 2], [3, 4]], 0)


class TestSummarize:
    def test_mean_std_best_and_threshold(self) -> None:
        ranks = np.array([[1, 2], [2, 3], [3, 1]], dtype=float)
        summary = summarize(ranks)
        np.testing.assert_allclose(summary.mean, [1.5, 2.5, 2.0])
        np.testing.assert_allclose(summary.std, [np.sqrt(0.5), np.sqrt(0.5), np.sqrt(2.0)])
        assert summary.best_index == 0
        assert summary.threshold == pytest.approx(1.5 + np.sqrt(0.5))
        assert summary.best_parameter is None

    def test_population_std_with_ddof_zero(self) -> None:
        ranks = np.array([[1, 3]], dtype=float)
        assert summarize(ranks, ddof=0).std[0] == pytest.approx(1.0)
        assert summarize(ranks, ddof=1).std[0] == pytest.approx(np.sqrt(2.0))

    def test_first_minimum_wins(self) -> None:
        ranks = np.array([[2, 2], [1, 1], [1, 1]], dtype=float)
        assert summarize(ranks).best_index == 1

    def test_single_column_has_zero_std(self) -> None:
        summary = summarize(np.array([[2.0], [1.0], [3.0]]))
        np.testing.assert_array_equal(summary.std, [0.0, 0.0, 0.0])
        assert summary.best_index == 1
        assert summary.threshold == pytest.approx(1.0)

    def test_missing_ranks_ignored(self) -> None:
        ranks = np.array([[1.0, np.nan, 3.0], [np.nan, np.nan, np.nan], [2.0, 2.0, 2.0]])
        summary = summarize(ranks)
        assert summary.mean[0] == pytest.approx(2.0)
        assert np.isnan(summary.mean[1])
        assert summary.std[2] == pytest.approx(0.0)
        assert summary.best_index == 0

    def test_parameters_give_best_parameter(self) -> None:
        ranks = np.array([[3, 3], [1, 2], [2, 1]], dtype=float)
        summary = summarize(ranks, parameters=[10, 20, 30])
        assert summary.best_index == 1
        assert summary.best_parameter == pytest.approx(20.0)

    def test_parameter_length_mismatch(self) -> None:
        with pytest.raises(ShapeMismatchError, match="one entry per row"):
            summarize(np.ones((3, 2)), parameters=[1, 2])

    def test_non_matrix_raises(self) -> None:
        with pytest.raises(ShapeMismatchError):
            summarize(np.ones(3))

    def test_all_missing_raises(self) -> None:
        with pytest.raises(ValueError, match="no ranked values"):
            summarize(np.full((2, 2), np.nan))

    def test_negative_ddof_raises(self) -> None:
        with pytest.raises(ValueError, match="ddof"):
            summarize(np.ones((2, 2)), ddof=-1)


def test_aggregate_table(
    accuracy_matrix: tuple[np.ndarray, np.ndarray, list[str]],
) -> None:
    parameters, values, labels = accuracy_matrix
    table = RankTable(labels=labels, parameters=parameters, values=values)

    ranks, summary = aggregate(table, RankingPolicy.COMPETITION, descending=True)

    assert ranks.shape == values.shape
    np.testing.assert_allclose(summary.mean, ranks.mean(axis=1))
    np.testing.assert_allclose(summary.std, ranks.std(axis=1, ddof=1))
    assert summary.best_index == int(np.argmin(ranks.mean(axis=1)))
    assert summary.best_parameter == parameters[summary.best_index]
    # Every column is a full ranking of the rows.
    for j in range(values.shape[1]):
        assert ranks[:, j].min() == 1
        assert ranks[:, j].max() <= values.shape[0]
