"""Scoring module for Movie Ranker.

Components:
    - ELO: rating update applied after every comparison
    - uncertainty helpers used by adaptive selection and the confidence stop rule

Example:
    ```python
    from movie_ranker.scorer import ELO

    new_winner, new_loser = ELO.update(1400, 1400)  # (1416, 1384)
    ```
"""

from .elo import ELO
from .uncertainty import average_rating_difference, mean_confidence, uncertainties, uncertainty

__all__ = [
    "ELO",
    "average_rating_difference",
    "mean_confidence",
    "uncertainties",
    "uncertainty",
]
