"""Uncertainty scores for adaptive pair selection and stopping.

A movie is fully uncertain (1.0) until it has taken part in a few
comparisons. After that its uncertainty shrinks as its rating moves away
from the rest of the field: ``min(1, 100 / avg_abs_diff)``.

When every other movie has exactly the same rating the average difference
is zero and the ratio is undefined; such a movie is treated as maximally
uncertain.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..models import RatedMovie

UNCERTAIN_BELOW_MATCHES = 3
SPREAD_SCALE = 100.0


def average_rating_difference(movie: RatedMovie, others: Iterable[RatedMovie]) -> float:
    """Mean absolute rating difference between ``movie`` and ``others``.

    Returns 0.0 when there are no other movies.
    """
    diffs = [abs(movie.rating - other.rating) for other in others if other.id != movie.id]
    if not diffs:
        return 0.0
    return sum(diffs) / len(diffs)


def uncertainty(
    movie: RatedMovie,
    field: Iterable[RatedMovie],
    min_matches: int = UNCERTAIN_BELOW_MATCHES,
) -> float:
    """Uncertainty of a movie's rating relative to the field, in [0, 1].

    Args:
        movie: Movie to score.
        field: All movies in the session (``movie`` itself is skipped).
        min_matches: Below this many comparisons the score is always 1.0.

    Returns:
        Uncertainty score, 1.0 meaning nothing is known yet.
    """
    if movie.matches < min_matches:
        return 1.0

    avg_diff = average_rating_difference(movie, field)
    if avg_diff <= 0:
        return 1.0
    return min(1.0, SPREAD_SCALE / avg_diff)


def uncertainties(
    movies: list[RatedMovie],
    min_matches: int = UNCERTAIN_BELOW_MATCHES,
) -> dict[str | int, float]:
    """Uncertainty for every movie, keyed by id."""
    return {movie.id: uncertainty(movie, movies, min_matches) for movie in movies}


def mean_confidence(
    movies: list[RatedMovie],
    min_matches: int = UNCERTAIN_BELOW_MATCHES,
) -> float:
    """Mean of ``1 - uncertainty`` across all movies (0.0 for an empty list)."""
    if not movies:
        return 0.0
    scores = uncertainties(movies, min_matches)
    return sum(1.0 - score for score in scores.values()) / len(scores)
