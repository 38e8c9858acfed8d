"""Uncertainty-driven adaptive pairing.

The most uncertain movies are matched against the closest-rated opponent
they have not met yet, so each comparison is as informative as possible.
"""

from __future__ import annotations

import logging
import math
import random

from ..models import EXHAUSTED, Exhausted, Pair, PairKey, RatedMovie, SessionState, pair_key
from ..scorer.uncertainty import UNCERTAIN_BELOW_MATCHES, uncertainties
from .base import SelectionStrategy

logger = logging.getLogger(__name__)


class AdaptiveSelector(SelectionStrategy):
    """Pair uncertain movies with their nearest-rated unseen opponents.

    Selection steps:
    1. Score every movie's uncertainty.
    2. Keep the top ``candidate_fraction`` of movies (ceiling, at least one)
       as candidates; ties are broken at random.
    3. For each candidate, propose the unseen opponent with the closest
       rating, within ``rating_window`` points.
    4. Pick one proposal uniformly at random.

    Example:
        ```python
        selector = AdaptiveSelector(rating_window=400, candidate_fraction=0.3)
        pair = selector.select_next(state)
        ```
    """

    def __init__(
        self,
        rating_window: int = 400,
        candidate_fraction: float = 0.3,
        min_matches: int = UNCERTAIN_BELOW_MATCHES,
        seed: int | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize the selector.

        Args:
            rating_window: Maximum rating difference between paired movies.
            candidate_fraction: Share of most uncertain movies considered first.
            min_matches: Movies with fewer comparisons are fully uncertain.
            seed: Seed for a private random generator.
            rng: Random generator to use instead of a seeded one.
        """
        super().__init__(seed=seed, rng=rng)
        self.rating_window = rating_window
        self.candidate_fraction = candidate_fraction
        self.min_matches = min_matches

    @property
    def name(self) -> str:
        """Return the strategy's name."""
        return "adaptive"

    def candidates(self, state: SessionState) -> list[RatedMovie]:
        """Most uncertain movies, highest uncertainty first."""
        movies = list(state.items.values())
        scores = uncertainties(movies, self.min_matches)
        count = max(1, math.ceil(len(movies) * self.candidate_fraction))

        # shuffle first so the stable sort breaks ties at random
        pool = list(movies)
        self._rng.shuffle(pool)
        pool.sort(key=lambda movie: scores[movie.id], reverse=True)
        return pool[:count]

    def nearest_opponent(self, state: SessionState, movie: RatedMovie) -> RatedMovie | None:
        """Closest-rated movie within the window that ``movie`` has not met."""
        best: RatedMovie | None = None
        best_diff = None
        for other in state.items.values():
            if other.id == movie.id or state.has_compared(movie.id, other.id):
                continue
            diff = abs(other.rating - movie.rating)
            if diff > self.rating_window:
                continue
            if best_diff is None or diff < best_diff:
                best, best_diff = other, diff
        return best

    def proposals(self, state: SessionState) -> list[tuple[RatedMovie, RatedMovie]]:
        """One proposed pair per candidate, without duplicate pairs."""
        proposed: dict[PairKey, tuple[RatedMovie, RatedMovie]] = {}
        for candidate in self.candidates(state):
            opponent = self.nearest_opponent(state, candidate)
            if opponent is None:
                continue
            proposed.setdefault(pair_key(candidate.id, opponent.id), (candidate, opponent))
        return list(proposed.values())

    def select_next(self, state: SessionState) -> Pair | Exhausted:
        """Choose a random pair among the candidates' proposals."""
        if state.size < 2:
            return EXHAUSTED

        proposals = self.proposals(state)
        if not proposals:
            logger.debug("No unseen opponent within the rating window")
            return EXHAUSTED

        candidate, opponent = self._rng.choice(proposals)
        logger.debug(
            f"Selected {candidate.id} ({candidate.rating}) vs "
            f"{opponent.id} ({opponent.rating}) from {len(proposals)} proposals"
        )
        return self.orient(candidate, opponent)
