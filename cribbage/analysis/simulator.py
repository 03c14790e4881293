"""
Monte Carlo simulation of random cribbage hands and discard strategies.

simulate_hands()     — deal 4 held + 1 cut from a fresh deck, score, repeat.
simulate_discards()  — deal 6, let a strategy keep 4, cut from the other 46.
compare_strategies() — simulate_discards() for several named strategies,
                       each run from the same seed so they see the same deals.

Every hand uses a fresh 52-card deck.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from cribbage.analysis.distribution import score_distribution
from cribbage.engine.deck import create_deck, deal_card, deal_cards
from cribbage.engine.hand import make_hand, random_hand
from cribbage.engine.scoring import score
from cribbage.solvers.strategy import (
    DEALT_SIZE,
    DiscardStrategy,
    make_max_score_strategy,
    make_random_strategy,
)

DEFAULT_N_HANDS: int = 100_000
DEFAULT_SEED: int = 42

# ─── Result type ──────────────────────────────────────────────────────────────


@dataclass
class SimulationResult:
    """Aggregate statistics from a simulation run.

    Attributes:
        n_hands:     Number of hands simulated.
        mean_score:  Mean hand score.
        std_score:   Sample standard deviation (0.0 for a single hand).
        ci_95_low:   Lower bound of the 95% confidence interval for the mean.
        ci_95_high:  Upper bound of the 95% confidence interval for the mean.
        max_score:   Highest score seen.
        counts:      Hands per score, length 30.
    """

    n_hands: int
    mean_score: float
    std_score: float
    ci_95_low: float
    ci_95_high: float
    max_score: int
    counts: np.ndarray

    def __str__(self) -> str:
        return (
            f"Hands: {self.n_hands:,} | "
            f"Mean: {self.mean_score:.4f} | "
            f"95% CI: [{self.ci_95_low:.4f}, {self.ci_95_high:.4f}] | "
            f"Max: {self.max_score}"
        )


def _summarise(scores: np.ndarray) -> SimulationResult:
    n = len(scores)
    mean = float(np.mean(scores))
    std = float(np.std(scores, ddof=1)) if n > 1 else 0.0
    ci_margin = 1.96 * std / math.sqrt(n)
    return SimulationResult(
        n_hands=n,
        mean_score=mean,
        std_score=std,
        ci_95_low=mean - ci_margin,
        ci_95_high=mean + ci_margin,
        max_score=int(scores.max()),
        counts=score_distribution(scores),
    )


def _check_n(n: int) -> None:
    if n < 1:
        raise ValueError(f"Need at least one hand to simulate, got {n}")


# ─── Simulation loops ─────────────────────────────────────────────────────────


def simulate_hands(
    n_hands: int = DEFAULT_N_HANDS,
    seed: int | None = DEFAULT_SEED,
) -> SimulationResult:
    """Score n_hands random hands.

    Args:
        n_hands: Number of hands.
        seed:    RNG seed; None for a non-deterministic run.

    Raises:
        ValueError: If n_hands < 1.
    """
    _check_n(n_hands)
    rng = np.random.default_rng(seed)
    scores = np.fromiter(
        (score(random_hand(rng)) for _ in range(n_hands)),
        dtype=np.int64,
        count=n_hands,
    )
    return _summarise(scores)


def simulate_discards(
    strategy: DiscardStrategy,
    n_deals: int = 10_000,
    seed: int | None = DEFAULT_SEED,
) -> SimulationResult:
    """Deal 6 cards, keep 4 with strategy, cut from the remaining deck, score.

    Raises:
        ValueError: If n_deals < 1.
    """
    _check_n(n_deals)
    rng = np.random.default_rng(seed)
    scores = np.empty(n_deals, dtype=np.int64)
    for i in range(n_deals):
        deck = create_deck()
        dealt = deal_cards(deck, rng, DEALT_SIZE)
        held = strategy(dealt)
        cut = deal_card(deck, rng)
        scores[i] = score(make_hand(held, cut))
    return _summarise(scores)


def compare_strategies(
    strategies: dict[str, DiscardStrategy],
    n_deals: int = 10_000,
    seed: int | None = DEFAULT_SEED,
) -> dict[str, SimulationResult]:
    """Run simulate_discards() for each named strategy with the same seed."""
    return {
        name: simulate_discards(strategy, n_deals=n_deals, seed=seed)
        for name, strategy in strategies.items()
    }


def strategy_seed(seed: int | None) -> np.random.SeedSequence:
    """Derive a seed for strategy RNGs from the dealing seed.

    The child sequence yields a bit stream unrelated to default_rng(seed),
    so a random strategy never replays the dealer's draws.
    """
    return np.random.SeedSequence(seed).spawn(1)[0]


def default_strategies(seed: int | None = DEFAULT_SEED) -> dict[str, DiscardStrategy]:
    return {
        "random": make_random_strategy(strategy_seed(seed)),
        "max_score": make_max_score_strategy(),
    }


# ─── __main__ ─────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    print("Cribbage Monte Carlo — 100,000 random hands\n")
    print(simulate_hands())
    print("\nDiscard strategies — 10,000 deals each\n")
    for name, result in compare_strategies(default_strategies()).items():
        print(f"{name:<10} {result}")
