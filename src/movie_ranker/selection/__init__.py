"""Pair selection strategies.

Provides interchangeable strategies for choosing the next comparison:
- ExhaustiveSelector: every pair once, random order
- AdaptiveSelector: uncertainty-driven, nearest-rated opponents
- FewestMatchesSelector: least compared movie first

Example:
    ```python
    from movie_ranker.selection import get_selector

    selector = get_selector("adaptive", seed=42)
    pair = selector.select_next(state)
    ```
"""

from .adaptive import AdaptiveSelector
from .base import SelectionStrategy
from .exhaustive import ExhaustiveSelector
from .fewest_matches import FewestMatchesSelector

SELECTORS: dict[str, type[SelectionStrategy]] = {
    "exhaustive": ExhaustiveSelector,
    "adaptive": AdaptiveSelector,
    "fewest-matches": FewestMatchesSelector,
}


def get_selector(name: str, **kwargs) -> SelectionStrategy:
    """Factory function to get a selection strategy by name.

    Args:
        name: Strategy name. One of "exhaustive", "adaptive", "fewest-matches".
        **kwargs: Additional arguments passed to the strategy constructor.

    Returns:
        Initialized strategy instance.

    Raises:
        ValueError: If the strategy name is not recognized.
    """
    if name not in SELECTORS:
        valid = list(SELECTORS.keys())
        raise ValueError(f"Unknown strategy '{name}'. Valid strategies: {valid}")

    return SELECTORS[name](**kwargs)


__all__ = [
    "SelectionStrategy",
    "ExhaustiveSelector",
    "AdaptiveSelector",
    "FewestMatchesSelector",
    "SELECTORS",
    "get_selector",
]
