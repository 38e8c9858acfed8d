"""Core data models for Movie Ranker.

This module defines the primary data structures used throughout the package:
- Movie / RatedMovie: an item to rank and its rating state
- Pair: two movies presented together for a comparison
- SessionState: everything a single ranking run owns
- Result types: OutcomeResult, RankingResult and Progress
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

ItemId = str | int
PairKey = tuple[str, str]

BASELINE_RATING = 1400


def pair_key(id_a: ItemId, id_b: ItemId) -> PairKey:
    """Build the order-independent key for an unordered pair of ids.

    Example:
        ```python
        pair_key(2, 1)  # ("1", "2")
        pair_key("a-b", "c")  # ("a-b", "c")
        ```
    """
    low, high = sorted([str(id_a), str(id_b)])
    return low, high


class SessionStatus(str, Enum):
    """Lifecycle states of a ranking session."""

    INITIALIZING = "initializing"
    AWAITING_COMPARISON = "awaiting_comparison"
    UPDATING = "updating"
    COMPLETE = "complete"


class StopReason(str, Enum):
    """Why a ranking session stopped asking for comparisons."""

    PAIR_COVERAGE = "pair_coverage"
    COMPARISON_BUDGET = "comparison_budget"
    CONFIDENCE = "confidence"
    EXHAUSTED = "exhausted"
    STOPPED = "stopped"


class Exhausted:
    """Signal that no legal pair remains to be compared.

    Not an error: the caller routes it to completion. Use the module level
    ``EXHAUSTED`` instance and compare with ``is``.
    """

    def __repr__(self) -> str:
        return "EXHAUSTED"


EXHAUSTED = Exhausted()


class Movie(BaseModel):
    """A movie supplied by the caller.

    Only ``id`` is used by the ranking algorithm. Display metadata and any
    extra keys pass through untouched to the final ranking.

    Attributes:
        id: Unique identifier (TMDB id or any string).
        title: Display title.
        year: Release year as shown to the user.
        poster: Poster image URL.
    """

    model_config = ConfigDict(extra="allow")

    id: str | int
    title: str = ""
    year: str = ""
    poster: str = ""

    @field_validator("year", mode="before")
    @classmethod
    def coerce_year(cls, v: object) -> object:
        """Accept numeric years (e.g. from YAML or CSV) as strings."""
        if isinstance(v, int):
            return str(v)
        return v


class RatedMovie(Movie):
    """A movie with its current rating and number of comparisons.

    Attributes:
        rating: Current ELO rating (integer, baseline 1400).
        matches: Number of comparisons this movie took part in.
    """

    rating: int = BASELINE_RATING
    matches: int = Field(default=0, ge=0)


class Pair(BaseModel):
    """Two distinct movies presented together for a comparison.

    The order of ``first`` and ``second`` is presentation only; rating math
    never depends on it.
    """

    first: RatedMovie
    second: RatedMovie

    @property
    def key(self) -> PairKey:
        """Order-independent pair key."""
        return pair_key(self.first.id, self.second.id)

    @property
    def ids(self) -> tuple[ItemId, ItemId]:
        """Ids in presentation order."""
        return self.first.id, self.second.id

    def matches_outcome(self, winner_id: ItemId, loser_id: ItemId) -> bool:
        """Check whether an outcome names exactly this pair."""
        return pair_key(winner_id, loser_id) == self.key

    def snapshot(self) -> Pair:
        """Return a copy detached from the live session state."""
        return Pair(first=self.first.model_copy(), second=self.second.model_copy())


class SessionState(BaseModel):
    """Mutable state owned by a single ranking run.

    Attributes:
        items: Movies keyed by id, in the order they were supplied.
        compared_pairs: Keys of every pair already presented.
        comparisons: Number of outcomes applied so far.
        current_pair: Pair awaiting an outcome, if any.
        status: Lifecycle state.
    """

    items: dict[str | int, RatedMovie] = Field(default_factory=dict)
    compared_pairs: set[PairKey] = Field(default_factory=set)
    comparisons: int = 0
    current_pair: Pair | None = None
    status: SessionStatus = SessionStatus.INITIALIZING

    @property
    def size(self) -> int:
        """Number of movies in the session."""
        return len(self.items)

    @property
    def total_pairs(self) -> int:
        """Number of distinct unordered pairs, n(n-1)/2."""
        n = len(self.items)
        return n * (n - 1) // 2

    def has_compared(self, id_a: ItemId, id_b: ItemId) -> bool:
        """Whether the pair has already been presented."""
        return pair_key(id_a, id_b) in self.compared_pairs


class OutcomeResult(BaseModel):
    """The result of submitting one comparison outcome.

    Attributes:
        winner: Winner after the rating update.
        loser: Loser after the rating update.
        comparisons: Comparisons made so far, including this one.
        complete: Whether the session reached completion.
        result: The final ranking when ``complete`` is True.
    """

    winner: RatedMovie
    loser: RatedMovie
    comparisons: int = 0
    complete: bool = False
    result: RankingResult | None = None


class RankingResult(BaseModel):
    """The final ranking emitted when a session completes.

    Attributes:
        ranking: Movies sorted by rating, highest first (stable on ties).
        comparisons: Number of comparisons that were made.
        stop_reason: Rule that ended the session.
    """

    ranking: list[RatedMovie] = Field(default_factory=list)
    comparisons: int = 0
    stop_reason: StopReason = StopReason.EXHAUSTED

    @property
    def winner(self) -> RatedMovie | None:
        """Highest rated movie."""
        return self.ranking[0] if self.ranking else None

    def ordered(self, descending: bool = True) -> list[RatedMovie]:
        """Return the ranking in the requested rating order."""
        if descending:
            return list(self.ranking)
        return sorted(self.ranking, key=lambda movie: movie.rating)


class Progress(BaseModel):
    """Progress information for a ranking session.

    Attributes:
        stage: Current stage name.
        percent: Completion percentage (0-100).
        message: Optional status message.
    """

    stage: str
    percent: float = 0.0
    message: str = ""


OutcomeResult.model_rebuild()
