"""Tests for pair selection strategies."""

import random

import pytest

from movie_ranker import (
    EXHAUSTED,
    AdaptiveSelector,
    ExhaustiveSelector,
    FewestMatchesSelector,
    Pair,
    RatedMovie,
    RatingStore,
    SelectionStrategy,
    SessionState,
    get_selector,
    pair_key,
)


class ScriptedRandom:
    """Random stand-in: fixed coin flips, first element on choice, no shuffling."""

    def __init__(self, flip: float = 0.9):
        self.flip = flip

    def random(self) -> float:
        return self.flip

    def choice(self, seq):
        return seq[0]

    def shuffle(self, seq) -> None:
        pass


def make_state(count: int) -> SessionState:
    """Fresh state with ``count`` movies, ids 1..count."""
    return RatingStore().initialize([{"id": i, "title": f"Movie {i}"} for i in range(1, count + 1)])


def make_rated_state(*movies: RatedMovie) -> SessionState:
    """State holding the given movies as-is."""
    return SessionState(items={movie.id: movie for movie in movies})


def drain(selector: SelectionStrategy, state: SessionState, limit: int = 1000) -> list[str]:
    """Select and record pairs until the selector is exhausted."""
    keys = []
    for _ in range(limit):
        pair = selector.select_next(state)
        if pair is EXHAUSTED:
            break
        keys.append(pair.key)
        state.compared_pairs.add(pair.key)
    return keys


# ============================================================================
# Factory Tests
# ============================================================================


class TestGetSelector:
    """Tests for the get_selector factory."""

    def test_known_names(self) -> None:
        """Each name maps to its strategy class."""
        assert isinstance(get_selector("exhaustive"), ExhaustiveSelector)
        assert isinstance(get_selector("adaptive"), AdaptiveSelector)
        assert isinstance(get_selector("fewest-matches"), FewestMatchesSelector)

    def test_unknown_name(self) -> None:
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown strategy"):
            get_selector("swiss")

    def test_kwargs_passed(self) -> None:
        """Constructor arguments are forwarded."""
        selector = get_selector("adaptive", rating_window=250)
        assert selector.rating_window == 250

    def test_names(self) -> None:
        """Strategies report their names."""
        assert ExhaustiveSelector().name == "exhaustive"
        assert AdaptiveSelector().name == "adaptive"
        assert FewestMatchesSelector().name == "fewest-matches"

    def test_repeat_policy(self) -> None:
        """Only fewest-matches may repeat pairs."""
        assert ExhaustiveSelector.avoids_repeats
        assert AdaptiveSelector.avoids_repeats
        assert not FewestMatchesSelector.avoids_repeats


# ============================================================================
# Coin Flip Tests
# ============================================================================


class TestOrient:
    """Tests for display order randomization."""

    def test_flip_low_reverses(self) -> None:
        """A flip below 0.5 swaps the pair."""
        selector = ExhaustiveSelector(rng=ScriptedRandom(flip=0.2))
        pair = selector.select_next(make_state(2))
        assert pair.ids == (2, 1)

    def test_flip_high_keeps_order(self) -> None:
        """A flip of 0.5 or more keeps the pair as selected."""
        selector = ExhaustiveSelector(rng=ScriptedRandom(flip=0.5))
        pair = selector.select_next(make_state(2))
        assert pair.ids == (1, 2)

    def test_both_orders_occur(self) -> None:
        """Over many draws both display orders show up."""
        selector = ExhaustiveSelector(seed=1)
        state = make_state(2)
        orders = {selector.select_next(state).ids for _ in range(50)}
        assert orders == {(1, 2), (2, 1)}


# ============================================================================
# Exhaustive Tests
# ============================================================================


class TestExhaustiveSelector:
    """Tests for exhaustive random pairing."""

    def test_every_pair_once(self) -> None:
        """Four movies yield exactly the six pairs, no repeats."""
        keys = drain(ExhaustiveSelector(seed=3), make_state(4))
        assert len(keys) == 6
        assert set(keys) == {pair_key(a, b) for a in range(1, 5) for b in range(a + 1, 5)}

    def test_remaining_pairs(self) -> None:
        """Compared pairs are excluded, the rest listed in id order."""
        state = make_state(3)
        state.compared_pairs.add(pair_key(1, 2))
        remaining = ExhaustiveSelector().remaining_pairs(state)
        assert [(a.id, b.id) for a, b in remaining] == [(1, 3), (2, 3)]

    def test_remaining_pairs_in_id_order(self) -> None:
        """Supplied order does not change the enumeration."""
        state = RatingStore().initialize([{"id": 3}, {"id": 1}, {"id": 2}])
        remaining = ExhaustiveSelector().remaining_pairs(state)
        assert [(a.id, b.id) for a, b in remaining] == [(1, 2), (1, 3), (2, 3)]

    def test_hyphenated_ids(self) -> None:
        """Ids containing dashes still yield every pair."""
        state = RatingStore().initialize([{"id": name} for name in ["a", "b-c", "a-b", "c"]])
        keys = drain(ExhaustiveSelector(seed=1), state)
        assert len(keys) == 6
        assert len(set(keys)) == 6

    def test_exhausted_when_all_compared(self) -> None:
        """No remaining pair signals EXHAUSTED."""
        state = make_state(3)
        state.compared_pairs.update({pair_key(1, 2), pair_key(1, 3), pair_key(2, 3)})
        assert ExhaustiveSelector().select_next(state) is EXHAUSTED

    def test_fewer_than_two(self) -> None:
        """A single movie cannot be paired."""
        state = make_rated_state(RatedMovie(id=1))
        assert ExhaustiveSelector().select_next(state) is EXHAUSTED

    def test_uniform_over_remaining(self) -> None:
        """All remaining pairs can be drawn."""
        selector = ExhaustiveSelector(seed=11)
        state = make_state(4)
        seen = {selector.select_next(state).key for _ in range(200)}
        assert len(seen) == 6

    def test_does_not_mutate_state(self) -> None:
        """Selection leaves the state alone."""
        state = make_state(3)
        ExhaustiveSelector().select_next(state)
        assert state.compared_pairs == set()
        assert state.current_pair is None


# ============================================================================
# Adaptive Tests
# ============================================================================


class TestAdaptiveSelector:
    """Tests for uncertainty-driven pairing."""

    @pytest.fixture
    def spread_state(self) -> SessionState:
        """A is new; B, C, D have settled ratings."""
        return make_rated_state(
            RatedMovie(id="A", rating=1400, matches=0),
            RatedMovie(id="B", rating=1410, matches=5),
            RatedMovie(id="C", rating=1600, matches=5),
            RatedMovie(id="D", rating=1200, matches=5),
        )

    def test_candidates_most_uncertain_first(self, spread_state) -> None:
        """ceil(4 * 0.3) = 2 candidates: A (new) then B (closest to the field)."""
        candidates = AdaptiveSelector(rng=ScriptedRandom()).candidates(spread_state)
        assert [movie.id for movie in candidates] == ["A", "B"]

    def test_at_least_one_candidate(self) -> None:
        """Small fractions still yield one candidate."""
        state = make_state(2)
        selector = AdaptiveSelector(candidate_fraction=0.01, rng=ScriptedRandom())
        assert len(selector.candidates(state)) == 1

    def test_nearest_opponent(self, spread_state) -> None:
        """Candidates meet the closest-rated movie."""
        pair = AdaptiveSelector(seed=0).select_next(spread_state)
        assert pair.key == pair_key("A", "B")

    def test_skips_compared_opponents(self, spread_state) -> None:
        """Already compared opponents are skipped."""
        spread_state.compared_pairs.add(pair_key("A", "B"))
        selector = AdaptiveSelector(rng=ScriptedRandom())

        proposals = selector.proposals(spread_state)
        assert {pair_key(a.id, b.id) for a, b in proposals} == {pair_key("A", "C"), pair_key("B", "C")}

    def test_rating_window(self) -> None:
        """Opponents further than the window are never proposed."""
        state = make_rated_state(
            RatedMovie(id=1, rating=1000, matches=4),
            RatedMovie(id=2, rating=1500, matches=4),
        )
        assert AdaptiveSelector(seed=0).select_next(state) is EXHAUSTED
        assert AdaptiveSelector(seed=0, rating_window=500).select_next(state) is not EXHAUSTED

    def test_never_repeats(self) -> None:
        """Draining the selector never offers a pair twice."""
        keys = drain(AdaptiveSelector(seed=5), make_state(6))
        assert len(keys) == len(set(keys))
        assert len(keys) > 0

    def test_fewer_than_two(self) -> None:
        """A single movie cannot be paired."""
        state = make_rated_state(RatedMovie(id=1))
        assert AdaptiveSelector().select_next(state) is EXHAUSTED

    def test_returns_pair(self) -> None:
        """Selections are Pair instances of distinct movies."""
        pair = AdaptiveSelector(seed=2).select_next(make_state(5))
        assert isinstance(pair, Pair)
        assert pair.first.id != pair.second.id


# ============================================================================
# Fewest Matches Tests
# ============================================================================


class TestFewestMatchesSelector:
    """Tests for fewest-matches-first pairing."""

    def test_least_compared_movie_plays(self) -> None:
        """The movie with fewest matches is always in the pair."""
        state = make_rated_state(
            RatedMovie(id=1, matches=2),
            RatedMovie(id=2, matches=0),
            RatedMovie(id=3, matches=2),
        )
        selector = FewestMatchesSelector(seed=4)
        for _ in range(20):
            assert 2 in selector.select_next(state).ids

    def test_ignores_compared_pairs(self) -> None:
        """Pairs may repeat; the selector is never exhausted."""
        state = make_state(2)
        state.compared_pairs.add(pair_key(1, 2))
        pair = FewestMatchesSelector(seed=0).select_next(state)
        assert pair.key == pair_key(1, 2)

    def test_scripted_choice(self) -> None:
        """First tied movie against the first other movie."""
        state = make_state(4)
        pair = FewestMatchesSelector(rng=ScriptedRandom(flip=0.9)).select_next(state)
        assert pair.ids == (1, 2)

    def test_fewer_than_two(self) -> None:
        """A single movie cannot be paired."""
        state = make_rated_state(RatedMovie(id=1))
        assert FewestMatchesSelector().select_next(state) is EXHAUSTED


class TestSeeding:
    """Seeded selectors are reproducible."""

    def test_same_seed_same_sequence(self) -> None:
        """Two selectors with the same seed drain identically."""
        first = drain(ExhaustiveSelector(seed=42), make_state(5))
        second = drain(ExhaustiveSelector(seed=42), make_state(5))
        assert first == second

    def test_supplied_order_does_not_matter(self) -> None:
        """Same seed, shuffled input: same pairs drawn."""
        movies = [{"id": i} for i in range(1, 6)]
        first = drain(ExhaustiveSelector(seed=42), RatingStore().initialize(movies))
        second = drain(ExhaustiveSelector(seed=42), RatingStore().initialize(movies[::-1]))
        assert first == second

    def test_injected_rng(self) -> None:
        """A supplied Random instance is used as-is."""
        rng = random.Random(9)
        selector = ExhaustiveSelector(rng=rng)
        assert selector._rng is rng
