"""Base interface for pair selection strategies.

A strategy looks at the session state and proposes the next pair of movies
to compare, or returns ``EXHAUSTED`` when no legal pair remains.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

from ..models import Exhausted, Pair, RatedMovie, SessionState


class SelectionStrategy(ABC):
    """Abstract base class for pair selection strategies.

    Strategies never mutate the session state; the session records the
    proposed pair. Randomness comes from the strategy's own
    ``random.Random`` instance, which can be seeded or replaced for
    deterministic tests.

    Available strategies:
    - ExhaustiveSelector: every unordered pair exactly once, in random order
    - AdaptiveSelector: uncertain movies against their nearest-rated opponents
    - FewestMatchesSelector: least compared movie against a random opponent
    """

    # Whether proposed pairs are never repeated within a session.
    avoids_repeats: bool = True

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        """Initialize the strategy.

        Args:
            seed: Seed for a private random generator.
            rng: Random generator to use instead (takes precedence over seed).
        """
        self._rng = rng if rng is not None else random.Random(seed)

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the strategy's name identifier."""
        ...

    @abstractmethod
    def select_next(self, state: SessionState) -> Pair | Exhausted:
        """Choose the next pair to compare.

        Args:
            state: Current session state (read only).

        Returns:
            The next Pair, or EXHAUSTED if no legal pair remains.
        """
        ...

    def orient(self, movie_a: RatedMovie, movie_b: RatedMovie) -> Pair:
        """Build a Pair, flipping a fair coin for display order."""
        if self._rng.random() < 0.5:
            movie_a, movie_b = movie_b, movie_a
        return Pair(first=movie_a, second=movie_b)
