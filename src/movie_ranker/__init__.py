"""Movie Ranker - Rank movies through pairwise ELO comparisons.

Pick a handful of movies, answer "which one do you prefer?" for a series of
pairs, and get back an ordered list.

Example:
    ```python
    from movie_ranker import EXHAUSTED, RankingSession

    session = RankingSession([
        {"id": 1, "title": "Alien", "year": "1979"},
        {"id": 2, "title": "Heat", "year": "1995"},
    ])
    pair = session.get_next_pair()
    outcome = session.submit_outcome(winner_id=1, loser_id=2)
    print(outcome.result.ranking)  # Alien 1416, Heat 1384
    ```
"""

from .config import ProgressCallback, RankerConfig, RankingConfig
from .convergence import (
    ComparisonBudgetRule,
    ConfidenceRule,
    ConvergenceMonitor,
    PairCoverageRule,
    StopRule,
    comparison_budget,
)
from .exceptions import (
    ConfigError,
    InvalidInputError,
    InvalidStateError,
    ItemNotFoundError,
    MovieRankerError,
)
from .models import (
    EXHAUSTED,
    Exhausted,
    Movie,
    OutcomeResult,
    Pair,
    PairKey,
    Progress,
    RankingResult,
    RatedMovie,
    SessionState,
    SessionStatus,
    StopReason,
    pair_key,
)
from .reporter import TextReporter, print_results
from .scorer import ELO
from .selection import (
    AdaptiveSelector,
    ExhaustiveSelector,
    FewestMatchesSelector,
    SelectionStrategy,
    get_selector,
)
from .session import RankingSession
from .store import RatingStore

__version__ = "0.1.0"

__all__ = [
    # Main entry point
    "RankingSession",
    # Configuration
    "RankingConfig",
    "RankerConfig",
    "ProgressCallback",
    # Core models
    "Movie",
    "RatedMovie",
    "Pair",
    "PairKey",
    "SessionState",
    "SessionStatus",
    "StopReason",
    "Exhausted",
    "EXHAUSTED",
    "pair_key",
    # Result models
    "OutcomeResult",
    "RankingResult",
    "Progress",
    # Engine components
    "RatingStore",
    "ELO",
    "SelectionStrategy",
    "ExhaustiveSelector",
    "AdaptiveSelector",
    "FewestMatchesSelector",
    "get_selector",
    "ConvergenceMonitor",
    "StopRule",
    "PairCoverageRule",
    "ComparisonBudgetRule",
    "ConfidenceRule",
    "comparison_budget",
    # Reporter
    "TextReporter",
    "print_results",
    # Exceptions
    "MovieRankerError",
    "InvalidInputError",
    "ItemNotFoundError",
    "InvalidStateError",
    "ConfigError",
]
