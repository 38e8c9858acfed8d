"""Configuration for Movie Ranker.

This module provides the RankingConfig class for tuning the ranking engine
(selection strategy, rating constants and stopping rules) and RankerConfig
for loading a complete session definition from YAML.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigError
from .models import Movie, Progress


class RankingConfig(BaseModel):
    """Configuration for a ranking session.

    Attributes:
        strategy: Pair selection strategy.
        initial_rating: Rating every movie starts with.
        k_factor: K-factor for ELO rating updates.
        rating_window: Max rating difference for adaptive pairing.
        candidate_fraction: Share of most uncertain movies considered first.
        uncertain_below_matches: Movies with fewer comparisons are fully uncertain.
        small_collection_threshold: Collections this small compare every pair.
        budget: How the comparison budget grows with collection size.
        max_comparisons: Hard cap on comparisons for any strategy.
        confidence_threshold: Mean confidence that ends an adaptive session.
        min_matches: Comparisons every movie needs before confidence counts.
        seed: Random seed for reproducible pair selection.
    """

    # Pair selection
    # Options: "exhaustive", "adaptive", "fewest-matches"
    strategy: str = "exhaustive"
    rating_window: int = Field(default=400, ge=1)
    candidate_fraction: float = Field(default=0.3, gt=0.0, le=1.0)
    uncertain_below_matches: int = Field(default=3, ge=0)

    # Rating
    initial_rating: int = 1400
    k_factor: int = Field(default=32, ge=1, le=100)

    # Stopping
    small_collection_threshold: int = Field(default=10, ge=2)
    budget: str = "nlogn"
    max_comparisons: int | None = Field(default=None, ge=1)
    confidence_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    min_matches: int = Field(default=3, ge=0)

    seed: int | None = None

    @field_validator("strategy")
    @classmethod
    def validate_strategy(cls, v: str) -> str:
        """Validate the strategy name is supported."""
        valid = {"exhaustive", "adaptive", "fewest-matches"}
        if v not in valid:
            raise ValueError(f"Invalid strategy '{v}'. Must be one of: {', '.join(sorted(valid))}")
        return v

    @field_validator("budget")
    @classmethod
    def validate_budget(cls, v: str) -> str:
        """Validate the budget mode is supported."""
        valid = {"nlogn", "tiered"}
        if v not in valid:
            raise ValueError(f"Invalid budget '{v}'. Must be one of: {', '.join(sorted(valid))}")
        return v

    def selector_kwargs(self) -> dict[str, Any]:
        """Constructor arguments for the configured selection strategy."""
        kwargs: dict[str, Any] = {"seed": self.seed}
        if self.strategy == "adaptive":
            kwargs.update(
                rating_window=self.rating_window,
                candidate_fraction=self.candidate_fraction,
                min_matches=self.uncertain_below_matches,
            )
        return kwargs


class RankerConfig(BaseModel):
    """Full session definition, typically loaded from YAML.

    Example YAML:
        ```yaml
        movies:
          - {id: 1, title: Alien, year: "1979"}
          - {id: 2, title: Heat, year: "1995"}
        ranking:
          strategy: adaptive
          seed: 42
        ```

    Attributes:
        movies: Movies to rank.
        ranking: Engine settings (maps to RankingConfig).
        output: Free-form output settings.
    """

    movies: list[Movie] = Field(default_factory=list)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    output: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: str | Path) -> RankerConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            RankerConfig instance.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ConfigError: If the YAML is not a mapping or fails validation.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ConfigError(f"expected a mapping, got {type(data).__name__}", field=str(path))

        if "movies" in data:
            movies = data["movies"] or []
            if not isinstance(movies, list):
                raise ConfigError("must be a list of movies", field="movies")
            for movie in movies:
                if not isinstance(movie, dict):
                    raise ConfigError(f"invalid movie entry: {movie}", field="movies")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(str(e)) from e


# Type alias for progress callback
ProgressCallback = Callable[[Progress], None]
