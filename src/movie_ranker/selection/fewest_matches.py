"""Fewest-matches-first pairing.

Keeps comparison counts balanced: the least compared movie always plays
next, against a random opponent. Pairs may repeat, so sessions using this
strategy stop on a comparison budget.
"""

from __future__ import annotations

import logging

from ..models import EXHAUSTED, Exhausted, Pair, SessionState
from .base import SelectionStrategy

logger = logging.getLogger(__name__)


class FewestMatchesSelector(SelectionStrategy):
    """Least compared movie against a uniformly random opponent."""

    avoids_repeats = False

    @property
    def name(self) -> str:
        """Return the strategy's name."""
        return "fewest-matches"

    def select_next(self, state: SessionState) -> Pair | Exhausted:
        """Choose the next pair; only exhausted with fewer than two movies."""
        if state.size < 2:
            return EXHAUSTED

        movies = list(state.items.values())
        fewest = min(movie.matches for movie in movies)
        first = self._rng.choice([movie for movie in movies if movie.matches == fewest])
        opponent = self._rng.choice([movie for movie in movies if movie.id != first.id])

        logger.debug(f"Selected {first.id} ({first.matches} matches) vs {opponent.id}")
        return self.orient(first, opponent)
