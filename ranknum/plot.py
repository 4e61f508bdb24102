"""Error-bar chart of an aggregated rank summary."""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from .aggregate import RankSummary

logger = logging.getLogger(__name__)


def plot_summary(
    summary: RankSummary,
    parameters=None,
    ax=None,
    title: str = "Mean rank per configuration",
    xlabel: str = "Number of elements",
    ylabel: str = "Mean rank",
    path: str | Path | None = None,
):
    """
    Draw mean rank with standard-deviation error bars for every row.

    A horizontal line at ``summary.threshold`` runs from the first
    configuration to the best one.

    Args:
        summary: Output of :func:`ranknum.aggregate.summarize`.
        parameters: x-axis values per row. Defaults to
            ``summary.parameters``, then to ``1..M``.
        ax: Existing matplotlib ``Axes`` to draw on. A new figure is
            created when omitted.
        title: Axes title.
        xlabel: x-axis label.
        ylabel: y-axis label.
        path: If given, the figure is saved there.

    Returns:
        The matplotlib ``Axes`` holding the chart.
    """
    mean = np.asarray(summary.mean, dtype=float)
    if parameters is None:
        parameters = summary.parameters
    if parameters is None:
        x = np.arange(1, mean.shape[0] + 1, dtype=float)
    else:
        x = np.asarray(parameters, dtype=float).reshape(-1)
    if x.shape != mean.shape:
        raise ValueError(
            f"parameters must have one entry per row: got {x.shape[0]} for {mean.shape[0]} rows"
        )

    if ax is None:
        _, ax = plt.subplots(figsize=(10, 6))

    ax.errorbar(
        x,
        mean,
        yerr=summary.std,
        fmt="-s",
        markersize=10,
        markeredgecolor="red",
        markerfacecolor="red",
        label="mean rank",
    )
    ax.hlines(
        summary.threshold,
        xmin=float(np.nanmin(x)),
        xmax=float(x[summary.best_index]),
        colors="g",
        linewidth=2,
        label=f"threshold = {summary.threshold:.3g}",
    )
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.grid(True)
    ax.legend(loc="best")

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        ax.figure.savefig(path, dpi=150, bbox_inches="tight")
        logger.info("Saved chart to %s", path)

    return ax


__all__ = ["plot_summary"]
