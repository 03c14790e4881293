"""Score distribution counts, summary statistics, and a histogram plot.

    score_distribution(scores)       — counts per score 0..29
    distribution_summary(counts)     — mean / std / mode / share of zero hands
    plot_score_distribution(counts)  — matplotlib bar chart

Scores 19, 25, 26 and 27 are impossible in cribbage, so their bars are
always empty for a full table.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import matplotlib.figure
import matplotlib.pyplot as plt
import numpy as np

from cribbage.engine.scoring import MAX_SCORE

_N_BINS: int = MAX_SCORE + 1
_BAR_COLOR: str = "#1f77b4"
_EMPTY_COLOR: str = "#cccccc"


@dataclass
class DistributionSummary:
    """Summary statistics of a score distribution.

    Attributes:
        n_hands:       Number of hands counted.
        mean:          Mean score.
        std:           Population standard deviation.
        mode:          Most frequent score (lowest on ties).
        zero_fraction: Share of hands scoring 0.
    """

    n_hands: int
    mean: float
    std: float
    mode: int
    zero_fraction: float

    def __str__(self) -> str:
        return (
            f"Hands: {self.n_hands:,} | Mean: {self.mean:.4f} | Std: {self.std:.4f} | "
            f"Mode: {self.mode} | Zero: {self.zero_fraction * 100:.2f}%"
        )


def score_distribution(scores: np.ndarray) -> np.ndarray:
    """Count hands per score.

    Args:
        scores: Array of hand scores.

    Returns:
        int64 array of length 30; index = score.

    Raises:
        ValueError: If any score lies outside 0..29.
    """
    scores = np.asarray(scores, dtype=np.int64)
    if scores.size and (scores.min() < 0 or scores.max() > MAX_SCORE):
        raise ValueError(f"Scores must lie within 0..{MAX_SCORE}")
    return np.bincount(scores, minlength=_N_BINS)


def distribution_summary(counts: np.ndarray) -> DistributionSummary:
    """Summarise a score histogram produced by score_distribution().

    Raises:
        ValueError: If the histogram is empty.
    """
    counts = np.asarray(counts, dtype=np.int64)
    n = int(counts.sum())
    if n == 0:
        raise ValueError("Cannot summarise an empty distribution.")
    points = np.arange(len(counts))
    mean = float((points * counts).sum() / n)
    var = float((counts * (points - mean) ** 2).sum() / n)
    return DistributionSummary(
        n_hands=n,
        mean=mean,
        std=math.sqrt(var),
        mode=int(np.argmax(counts)),
        zero_fraction=float(counts[0] / n),
    )


def plot_score_distribution(
    counts: np.ndarray,
    title: str = "Cribbage hand score distribution",
    log_scale: bool = False,
) -> matplotlib.figure.Figure:
    """Render a bar chart of hands per score.

    Args:
        counts:    Histogram from score_distribution().
        title:     Figure title.
        log_scale: Use a log y-axis so rare high scores stay visible.

    Returns:
        matplotlib Figure with one Axes.
    """
    counts = np.asarray(counts, dtype=np.int64)
    fig, ax = plt.subplots(figsize=(10, 4))
    colors = [_BAR_COLOR if c else _EMPTY_COLOR for c in counts]
    ax.bar(np.arange(len(counts)), counts, color=colors)
    ax.set_xticks(np.arange(len(counts)))
    ax.set_xlabel("Score")
    ax.set_ylabel("Hands")
    ax.set_title(title)
    if log_scale:
        ax.set_yscale("log")
    fig.tight_layout()
    return fig
