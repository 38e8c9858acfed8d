"""Rating state for a ranking session.

``RatingStore`` creates the session state and applies comparison outcomes to
it. It holds configuration only (baseline rating and K-factor); the state
itself is a ``SessionState`` owned by the caller and passed to every call.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .exceptions import InvalidInputError, ItemNotFoundError
from .models import BASELINE_RATING, Movie, RatedMovie, SessionState
from .scorer import ELO

logger = logging.getLogger(__name__)


class RatingStore:
    """Initializes and updates movie ratings.

    Example:
        ```python
        store = RatingStore()
        state = store.initialize([{"id": 1, "title": "Alien"}, {"id": 2, "title": "Heat"}])
        store.apply_outcome(state, winner_id=1, loser_id=2)
        [m.rating for m in store.snapshot(state)]  # [1416, 1384]
        ```
    """

    def __init__(
        self,
        initial_rating: int = BASELINE_RATING,
        k: int = ELO.DEFAULT_K,
    ):
        """Initialize the store.

        Args:
            initial_rating: Rating every movie starts with (default 1400).
            k: K-factor for rating updates (default 32).
        """
        self.initial_rating = initial_rating
        self.k = k

    def initialize(self, items: Iterable[Movie | Mapping[str, Any]]) -> SessionState:
        """Create session state for a list of movies.

        Args:
            items: Movies or plain dicts with at least an ``id`` key.

        Returns:
            Fresh SessionState with every rating at the baseline and no matches.

        Raises:
            InvalidInputError: If fewer than two movies are given or ids repeat.
        """
        movies = [item if isinstance(item, Movie) else Movie.model_validate(item) for item in items]

        if len(movies) < 2:
            raise InvalidInputError(
                f"at least 2 movies are required to rank, got {len(movies)}",
                field="items",
            )

        state = SessionState()
        seen: set[str] = set()
        for movie in movies:
            # pair keys compare ids as strings, so 1 and "1" collide
            if str(movie.id) in seen:
                raise InvalidInputError(f"duplicate movie id '{movie.id}'", field="items")
            seen.add(str(movie.id))
            data = movie.model_dump()
            data.update(rating=self.initial_rating, matches=0)
            state.items[movie.id] = RatedMovie.model_validate(data)

        logger.debug(f"Initialized ranking state with {state.size} movies")
        return state

    def get(self, state: SessionState, item_id: str | int) -> RatedMovie:
        """Look up a movie by id.

        Raises:
            ItemNotFoundError: If the id is not part of the session.
        """
        try:
            return state.items[item_id]
        except KeyError:
            raise ItemNotFoundError(item_id) from None

    def apply_outcome(
        self,
        state: SessionState,
        winner_id: str | int,
        loser_id: str | int,
    ) -> tuple[RatedMovie, RatedMovie]:
        """Apply a comparison outcome to the session state.

        Both movies are looked up before anything changes, so a failed call
        leaves the state untouched.

        Args:
            state: Session state to mutate.
            winner_id: Id of the preferred movie.
            loser_id: Id of the other movie.

        Returns:
            Tuple of (winner, loser) after the update.

        Raises:
            ItemNotFoundError: If either id is not part of the session.
            InvalidInputError: If winner and loser are the same movie.
        """
        winner = self.get(state, winner_id)
        loser = self.get(state, loser_id)
        if winner is loser:
            raise InvalidInputError("a movie cannot be compared with itself", field="loser_id")

        new_winner, new_loser = ELO.update(winner.rating, loser.rating, self.k)
        logger.debug(
            f"{winner.id} beat {loser.id}: "
            f"{winner.rating} -> {new_winner}, {loser.rating} -> {new_loser}"
        )

        winner.rating = new_winner
        loser.rating = new_loser
        winner.matches += 1
        loser.matches += 1
        state.comparisons += 1

        return winner, loser

    def snapshot(self, state: SessionState) -> list[RatedMovie]:
        """Get all movies ranked by rating, highest first.

        The sort is stable, so movies with equal ratings keep the order in
        which they were supplied. Returns copies; the state is not mutated.
        """
        return [
            movie.model_copy()
            for movie in sorted(state.items.values(), key=lambda m: m.rating, reverse=True)
        ]
