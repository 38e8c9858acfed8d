"""Stopping rules for ranking sessions.

After every applied outcome the session asks its ``ConvergenceMonitor``
whether enough comparisons have been made. Rules are combined with OR
semantics: the first satisfied rule ends the session and names the reason.

Rules:
    - PairCoverageRule: every unordered pair has been compared
    - ComparisonBudgetRule: a comparison count derived from collection size
    - ConfidenceRule: ratings have separated enough to trust the order
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

from .models import SessionState, StopReason
from .scorer.uncertainty import UNCERTAIN_BELOW_MATCHES, mean_confidence

if TYPE_CHECKING:
    from .config import RankingConfig
    from .selection import SelectionStrategy

logger = logging.getLogger(__name__)

SMALL_COLLECTION_THRESHOLD = 10


def total_pairs(n: int) -> int:
    """Number of unordered pairs among ``n`` movies."""
    return n * (n - 1) // 2


def nlogn_budget(n: int) -> int:
    """``ceil(n * log2(n))`` comparisons (0 for fewer than two movies)."""
    if n < 2:
        return 0
    return math.ceil(n * math.log2(n))


def tiered_budget(n: int) -> int:
    """Comparison targets in steps by collection size."""
    if n <= 10:
        return total_pairs(n)
    if n <= 20:
        return 3 * n
    if n <= 50:
        return 2 * n + 20
    return nlogn_budget(n)


BUDGETS: dict[str, Callable[[int], int]] = {
    "nlogn": nlogn_budget,
    "tiered": tiered_budget,
}


def comparison_budget(
    n: int,
    mode: str = "nlogn",
    small_collection_threshold: int = SMALL_COLLECTION_THRESHOLD,
    cap_at_pairs: bool = True,
) -> int:
    """Target number of comparisons for ``n`` movies.

    Small collections compare every pair. Budgets for strategies that never
    repeat a pair are capped at the number of pairs.

    Raises:
        ValueError: If the budget mode is not recognized.
    """
    if mode not in BUDGETS:
        raise ValueError(f"Unknown budget '{mode}'. Valid budgets: {list(BUDGETS)}")

    if n <= small_collection_threshold:
        return total_pairs(n)

    target = BUDGETS[mode](n)
    if cap_at_pairs:
        target = min(target, total_pairs(n))
    return target


class StopRule(ABC):
    """A single stopping condition."""

    reason: StopReason

    @abstractmethod
    def is_satisfied(self, state: SessionState) -> bool:
        """Whether the session may stop now."""
        ...

    def target(self, state: SessionState) -> int | None:
        """Comparison count this rule is aiming for, if it has one."""
        return None


class PairCoverageRule(StopRule):
    """Stop once every unordered pair has been compared."""

    reason = StopReason.PAIR_COVERAGE

    def is_satisfied(self, state: SessionState) -> bool:
        return state.current_pair is None and len(state.compared_pairs) >= state.total_pairs

    def target(self, state: SessionState) -> int | None:
        return state.total_pairs


class ComparisonBudgetRule(StopRule):
    """Stop once a fixed number of comparisons has been made.

    Args:
        budget: Either a fixed count or a function of the collection size.
    """

    reason = StopReason.COMPARISON_BUDGET

    def __init__(self, budget: int | Callable[[int], int]):
        self.budget = budget

    def target(self, state: SessionState) -> int | None:
        if callable(self.budget):
            return self.budget(state.size)
        return self.budget

    def is_satisfied(self, state: SessionState) -> bool:
        return state.comparisons >= self.target(state)


class ConfidenceRule(StopRule):
    """Stop when every movie has enough comparisons and ratings have separated.

    Args:
        threshold: Minimum mean ``1 - uncertainty`` across all movies.
        min_matches: Minimum comparisons every movie must have.
        uncertain_below_matches: Matches below which a movie is fully uncertain.
    """

    reason = StopReason.CONFIDENCE

    def __init__(
        self,
        threshold: float = 0.85,
        min_matches: int = 3,
        uncertain_below_matches: int = UNCERTAIN_BELOW_MATCHES,
    ):
        self.threshold = threshold
        self.min_matches = min_matches
        self.uncertain_below_matches = uncertain_below_matches

    def is_satisfied(self, state: SessionState) -> bool:
        movies = list(state.items.values())
        if not movies or any(movie.matches < self.min_matches for movie in movies):
            return False
        return mean_confidence(movies, self.uncertain_below_matches) >= self.threshold


class ConvergenceMonitor:
    """Decides when a ranking session is complete.

    Example:
        ```python
        monitor = ConvergenceMonitor([PairCoverageRule()])
        reason = monitor.check(state)
        if reason is not None:
            ...  # emit the final ranking
        ```
    """

    def __init__(self, rules: list[StopRule]):
        """Initialize with the rules to evaluate, in priority order."""
        self.rules = rules

    @classmethod
    def for_strategy(
        cls,
        strategy: SelectionStrategy,
        config: RankingConfig,
    ) -> ConvergenceMonitor:
        """Build the default rules for a selection strategy.

        - Strategies that never repeat a pair stop on full pair coverage.
        - The adaptive strategy also stops on its comparison budget or when
          ratings are confident enough.
        - Strategies that may repeat pairs stop on a comparison budget only.
        - ``config.max_comparisons`` adds a hard budget to any strategy.
        """
        rules: list[StopRule] = []
        repeats = not strategy.avoids_repeats

        if not repeats:
            rules.append(PairCoverageRule())

        if repeats or strategy.name == "adaptive":
            rules.append(
                ComparisonBudgetRule(
                    lambda n: comparison_budget(
                        n,
                        mode=config.budget,
                        small_collection_threshold=config.small_collection_threshold,
                        cap_at_pairs=not repeats,
                    )
                )
            )

        if strategy.name == "adaptive":
            rules.append(
                ConfidenceRule(
                    threshold=config.confidence_threshold,
                    min_matches=config.min_matches,
                    uncertain_below_matches=config.uncertain_below_matches,
                )
            )

        if config.max_comparisons is not None:
            rules.append(ComparisonBudgetRule(config.max_comparisons))

        return cls(rules)

    def check(self, state: SessionState) -> StopReason | None:
        """Return the reason of the first satisfied rule, or None to continue."""
        if state.size < 2:
            return StopReason.EXHAUSTED

        for rule in self.rules:
            if rule.is_satisfied(state):
                logger.debug(f"Stop rule satisfied: {rule.reason.value} after {state.comparisons} comparisons")
                return rule.reason
        return None

    def target(self, state: SessionState) -> int:
        """Smallest comparison target among the rules, for progress reporting."""
        targets = [t for t in (rule.target(state) for rule in self.rules) if t is not None]
        if not targets:
            return state.total_pairs
        return min(targets)
