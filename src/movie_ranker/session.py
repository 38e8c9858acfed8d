"""Ranking session for Movie Ranker.

This module provides the primary entry point of the package. A
``RankingSession`` owns the state of one ranking run and walks it through
its lifecycle::

    initializing -> awaiting_comparison <-> updating -> complete

The caller asks for a pair, reports which movie won, and repeats until the
session completes and emits the final ranking.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from .config import ProgressCallback, RankerConfig, RankingConfig
from .convergence import ConvergenceMonitor
from .exceptions import InvalidInputError, InvalidStateError
from .models import (
    EXHAUSTED,
    Exhausted,
    Movie,
    OutcomeResult,
    Pair,
    Progress,
    RankingResult,
    RatedMovie,
    SessionState,
    SessionStatus,
    StopReason,
    pair_key,
)
from .selection import SelectionStrategy, get_selector
from .store import RatingStore

logger = logging.getLogger(__name__)

# Given the pair on screen, return the id of the preferred movie.
Chooser = Callable[[Pair], Any]


class RankingSession:
    """Ranks a set of movies through pairwise comparisons.

    Example:
        ```python
        from movie_ranker import RankingSession

        session = RankingSession(movies)
        while True:
            pair = session.get_next_pair()
            if pair is EXHAUSTED:
                break
            outcome = session.submit_outcome(pair.first.id, pair.second.id)
            if outcome.complete:
                break
        print(session.result.ranking)
        ```
    """

    def __init__(
        self,
        movies: Iterable[Movie | Mapping[str, Any]],
        config: RankingConfig | None = None,
        selector: SelectionStrategy | None = None,
        monitor: ConvergenceMonitor | None = None,
        progress_callback: ProgressCallback | None = None,
    ):
        """Start a ranking session.

        Args:
            movies: Movies to rank (at least two, unique ids).
            config: Optional configuration. Uses defaults if not provided.
            selector: Pair selection strategy (defaults to ``config.strategy``).
            monitor: Stopping rules (defaults to the strategy's rules).
            progress_callback: Called with a Progress after every outcome.

        Raises:
            InvalidInputError: If fewer than two movies are given or ids repeat.
        """
        self.config = config or RankingConfig()
        self.selector = selector or get_selector(self.config.strategy, **self.config.selector_kwargs())
        self.store = RatingStore(initial_rating=self.config.initial_rating, k=self.config.k_factor)
        self.monitor = monitor or ConvergenceMonitor.for_strategy(self.selector, self.config)
        self.result: RankingResult | None = None
        self._progress_callback = progress_callback

        self._state: SessionState | None = self.store.initialize(movies)
        self._state.status = SessionStatus.AWAITING_COMPARISON
        logger.debug(
            f"Ranking session started: {self._state.size} movies, strategy={self.selector.name}"
        )

    @classmethod
    def from_config(cls, path: str | Path, **kwargs: Any) -> RankingSession:
        """Create a session from a YAML configuration file.

        Args:
            path: Path to the YAML configuration file.
            **kwargs: Extra arguments passed to the constructor.

        Returns:
            RankingSession for the movies listed in the file.
        """
        ranker_config = RankerConfig.from_yaml(path)
        return cls(ranker_config.movies, config=ranker_config.ranking, **kwargs)

    @property
    def status(self) -> SessionStatus:
        """Current lifecycle state."""
        if self._state is None:
            return SessionStatus.COMPLETE
        return self._state.status

    @property
    def is_complete(self) -> bool:
        """Whether the final ranking has been emitted."""
        return self.result is not None

    @property
    def comparisons(self) -> int:
        """Number of comparisons made so far."""
        if self.result is not None:
            return self.result.comparisons
        return self._active_state("read comparisons").comparisons

    def _active_state(self, operation: str) -> SessionState:
        """Return the state, raising if the session already completed."""
        if self._state is None:
            raise InvalidStateError(operation, SessionStatus.COMPLETE.value)
        return self._state

    def get_next_pair(self) -> Pair | Exhausted:
        """Get the pair to show next.

        Returns the pair still awaiting an outcome if there is one. When the
        strategy has no legal pair left the session completes and
        ``EXHAUSTED`` is returned; the ranking is then in ``self.result``.

        Returns:
            Pair to compare, or EXHAUSTED.
        """
        if self._state is None:
            return EXHAUSTED
        state = self._state

        if state.current_pair is not None:
            return state.current_pair.snapshot()

        pair = self.selector.select_next(state)
        if pair is EXHAUSTED:
            target = self.monitor.target(state)
            if state.comparisons < target:
                logger.warning(
                    f"No pairs left after {state.comparisons} of {target} comparisons; "
                    f"finishing with the current ratings"
                )
            self._finalize(StopReason.EXHAUSTED)
            return EXHAUSTED

        state.compared_pairs.add(pair.key)
        state.current_pair = pair
        return pair.snapshot()

    def submit_outcome(self, winner_id: str | int, loser_id: str | int) -> OutcomeResult:
        """Report which movie of a pair the user preferred.

        Args:
            winner_id: Id of the preferred movie.
            loser_id: Id of the other movie.

        Returns:
            OutcomeResult with both updated movies and, once the session is
            complete, the final ranking.

        Raises:
            InvalidStateError: If the session is complete, the outcome does
                not name the pair awaiting comparison, or it repeats a pair
                the strategy never compares twice.
            ItemNotFoundError: If either id is not part of the session.
            InvalidInputError: If winner and loser are the same movie.
        """
        state = self._active_state("submit an outcome")

        self.store.get(state, winner_id)
        self.store.get(state, loser_id)
        if winner_id == loser_id:
            raise InvalidInputError("a movie cannot be compared with itself", field="loser_id")

        current = state.current_pair
        if current is not None and not current.matches_outcome(winner_id, loser_id):
            raise InvalidStateError(
                "submit an outcome",
                state.status.value,
                f"Expected an outcome for {current.first.id} vs {current.second.id}",
            )
        if current is None and self.selector.avoids_repeats and state.has_compared(winner_id, loser_id):
            raise InvalidStateError(
                "submit an outcome",
                state.status.value,
                f"{winner_id} vs {loser_id} has already been compared",
            )

        state.status = SessionStatus.UPDATING
        winner, loser = self.store.apply_outcome(state, winner_id, loser_id)
        state.compared_pairs.add(pair_key(winner_id, loser_id))
        state.current_pair = None

        outcome = OutcomeResult(
            winner=winner.model_copy(),
            loser=loser.model_copy(),
            comparisons=state.comparisons,
        )

        reason = self.monitor.check(state)
        if reason is not None:
            outcome.complete = True
            outcome.result = self._finalize(reason)
        else:
            state.status = SessionStatus.AWAITING_COMPARISON

        if self._progress_callback:
            self._progress_callback(self.progress())

        return outcome

    def ranking(self) -> list[RatedMovie]:
        """Current ranking, highest rated first.

        Available at any point; after completion this is the final ranking.
        """
        if self.result is not None:
            return list(self.result.ranking)
        return self.store.snapshot(self._active_state("read the ranking"))

    def finish(self) -> RankingResult:
        """End the session now and emit the ranking as it stands.

        Calling this on a completed session returns the existing result.
        """
        if self.result is not None:
            return self.result
        return self._finalize(StopReason.STOPPED)

    def progress(self) -> Progress:
        """Share of the comparison target reached so far."""
        if self.result is not None:
            return Progress(
                stage="complete",
                percent=100.0,
                message=f"Ranked after {self.result.comparisons} comparisons",
            )

        state = self._active_state("read progress")
        target = self.monitor.target(state)
        fraction = min(state.comparisons / target, 1.0) if target > 0 else 1.0
        return Progress(
            stage="ranking",
            percent=fraction * 100,
            message=f"{state.comparisons} of {target} comparisons",
        )

    def run(self, choose: Chooser, max_steps: int | None = None) -> RankingResult:
        """Drive the session to completion with a chooser function.

        Args:
            choose: Called with each pair; returns the id of the preferred movie.
            max_steps: Optional safety limit; the session is finished early
                when it is reached.

        Returns:
            The final RankingResult.

        Raises:
            InvalidInputError: If ``choose`` returns an id not in the pair.
        """
        steps = 0
        while self.result is None:
            if max_steps is not None and steps >= max_steps:
                return self.finish()

            pair = self.get_next_pair()
            if pair is EXHAUSTED:
                break

            winner_id = choose(pair)
            if winner_id not in pair.ids:
                raise InvalidInputError(
                    f"chooser returned {winner_id!r}, expected one of {pair.ids}",
                    field="choose",
                )
            loser_id = pair.second.id if winner_id == pair.first.id else pair.first.id
            self.submit_outcome(winner_id, loser_id)
            steps += 1

        return self.result

    def _finalize(self, reason: StopReason) -> RankingResult:
        """Emit the final ranking and drop the session state."""
        state = self._active_state("finalize")
        state.current_pair = None
        state.status = SessionStatus.COMPLETE

        self.result = RankingResult(
            ranking=self.store.snapshot(state),
            comparisons=state.comparisons,
            stop_reason=reason,
        )
        self._state = None

        logger.info(
            f"Ranking complete after {self.result.comparisons} comparisons "
            f"({reason.value}); top movie: {self.result.winner.id}"
        )
        return self.result
