"""ELO rating update for pairwise movie comparisons.

Every comparison has a winner and a loser; there are no draws. The update is
symmetric and zero-sum before rounding, so the total rating mass drifts by at
most one point per comparison.
"""

from __future__ import annotations


class ELO:
    """ELO rating system for pairwise comparisons.

    Ratings are rounded to integers with Python's built-in ``round``
    (round half to even), applied independently to both new ratings.

    Example:
        ```python
        # Two fresh movies, the first one wins
        new_winner, new_loser = ELO.update(1400, 1400)
        # (1416, 1384)

        # Upset: the lower rated movie wins and gains more
        new_winner, new_loser = ELO.update(1300, 1500)
        # (1324, 1476)
        ```
    """

    DEFAULT_K = 32
    RATING_SCALE = 400

    @staticmethod
    def expected_score(rating_a: float, rating_b: float) -> float:
        """Calculate expected score for movie A against movie B.

        Args:
            rating_a: ELO rating of movie A.
            rating_b: ELO rating of movie B.

        Returns:
            Probability between 0 and 1 that A is preferred.

        Example:
            ```python
            ELO.expected_score(1400, 1400)  # 0.5
            ELO.expected_score(1600, 1400)  # ~0.76
            ```
        """
        return 1 / (1 + 10 ** ((rating_b - rating_a) / ELO.RATING_SCALE))

    @staticmethod
    def update(
        winner_elo: int | float,
        loser_elo: int | float,
        k: int = DEFAULT_K,
    ) -> tuple[int, int]:
        """Update ELO ratings after a comparison.

        The winner scores 1.0 and the loser 0.0. A win against a much
        stronger movie moves both ratings a lot; an expected win barely
        moves them.

        Args:
            winner_elo: Current ELO rating of the winner.
            loser_elo: Current ELO rating of the loser.
            k: K-factor determining rating volatility (default 32).

        Returns:
            Tuple of (new_winner_elo, new_loser_elo).
        """
        expected_winner = ELO.expected_score(winner_elo, loser_elo)
        expected_loser = 1 - expected_winner

        new_winner = round(winner_elo + k * (1.0 - expected_winner))
        new_loser = round(loser_elo + k * (0.0 - expected_loser))

        return new_winner, new_loser

    @staticmethod
    def gain(
        winner_elo: int | float,
        loser_elo: int | float,
        k: int = DEFAULT_K,
    ) -> float:
        """Unrounded number of points the winner takes from the loser."""
        return k * (1.0 - ELO.expected_score(winner_elo, loser_elo))
