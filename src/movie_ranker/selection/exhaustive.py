"""Exhaustive random pairing.

Every unordered pair is compared exactly once, in uniformly random order.
"""

from __future__ import annotations

import logging

from ..models import EXHAUSTED, Exhausted, Pair, RatedMovie, SessionState
from .base import SelectionStrategy

logger = logging.getLogger(__name__)


class ExhaustiveSelector(SelectionStrategy):
    """Pick uniformly among all pairs not yet compared.

    Example:
        ```python
        selector = ExhaustiveSelector(seed=7)
        pair = selector.select_next(state)
        if pair is EXHAUSTED:
            ...  # every pair has been compared
        ```
    """

    @property
    def name(self) -> str:
        """Return the strategy's name."""
        return "exhaustive"

    def remaining_pairs(self, state: SessionState) -> list[tuple[RatedMovie, RatedMovie]]:
        """All pairs (i, j), i < j by id (compared as strings), not compared yet.

        The enumeration does not depend on the order movies were supplied, so
        a seeded selector draws the same pairs for any input order.
        """
        movies = sorted(state.items.values(), key=lambda movie: str(movie.id))
        return [
            (a, b)
            for i, a in enumerate(movies)
            for b in movies[i + 1 :]
            if not state.has_compared(a.id, b.id)
        ]

    def select_next(self, state: SessionState) -> Pair | Exhausted:
        """Choose a random pair among those not compared yet."""
        if state.size < 2:
            return EXHAUSTED

        available = self.remaining_pairs(state)
        if not available:
            logger.debug("All pairs compared")
            return EXHAUSTED

        movie_a, movie_b = self._rng.choice(available)
        logger.debug(f"Selected {movie_a.id} vs {movie_b.id} from {len(available)} remaining pairs")
        return self.orient(movie_a, movie_b)
