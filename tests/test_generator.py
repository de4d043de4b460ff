import random

import pytest

from markovgen.analytics.generator import RandomSource, generate, random_state
from markovgen.analytics.markov import TransitionTable, build_table
from markovgen.core.errors import ConfigurationError


class MaxWeight:
    def choose_index(self, weights):
        return max(range(len(weights)), key=lambda i: weights[i])


class First:
    def choose_index(self, weights):
        return 0


def test_scenario_highest_count():
    t = build_table(["a", "b", "a", "b", "a", "c"], 1)
    assert generate(t, ["a"], 1, MaxWeight()) == ["b"]


def test_scenario_empty_table():
    t = TransitionTable(2)
    assert generate(t, ["x", "y"], 10, MaxWeight()) == []


def test_early_termination():
    t = build_table("a b c".split(), 1)
    out = generate(t, ["a"], 10, MaxWeight())
    assert out == ["b", "c"]
    assert generate(t, ["zzz"], 5, MaxWeight()) == []


def test_exact_length_and_zero():
    t = build_table("a b a b a b".split(), 1)
    assert generate(t, ["a"], 7, MaxWeight()) == ["b", "a", "b", "a", "b", "a", "b"]
    assert generate(t, ["a"], 0, MaxWeight()) == []
    with pytest.raises(ConfigurationError):
        generate(t, ["a"], -1)


def test_seed_equal_and_longer_than_state():
    t = build_table("one two three four".split(), 2)
    assert generate(t, ["one", "two"], 5, MaxWeight()) == ["three", "four"]
    assert generate(t, ["zero", "two", "three"], 5, MaxWeight()) == ["four"]


def test_short_seed_reject():
    t = build_table("one two three four".split(), 2)
    with pytest.raises(ConfigurationError):
        generate(t, ["two"], 5, MaxWeight())
    with pytest.raises(ConfigurationError):
        generate(t, ["two"], 5, MaxWeight(), short_seed="pad")


def test_short_seed_match():
    t = build_table("one two three four".split(), 2)
    assert generate(t, ["two"], 5, First(), short_seed="match") == ["three", "four"]
    assert generate(t, ["nope"], 5, First(), short_seed="match") == []
    assert generate(t, [], 5, First(), short_seed="match") == ["three", "four"]


def test_weighted_sampling_bias():
    t = TransitionTable(1)
    t.record(["s"], "A", 3)
    t.record(["s"], "B", 1)
    t.record(["A"], "s")
    t.record(["B"], "s")
    rng = RandomSource(12345)
    n = 20000
    hits = sum(generate(t, ["s"], 1, rng)[0] == "A" for _ in range(n))
    assert abs(hits / n - 0.75) < 0.02


def test_random_source_accepts_random_instance():
    src = RandomSource(random.Random(1))
    assert src.choose_index([0, 5, 0]) == 1
    with pytest.raises(ValueError):
        src.choose_index([0, 0])


def test_seeded_generation_reproducible():
    t = build_table("a b a c a b a d a b".split(), 1)
    assert generate(t, ["a"], 20, RandomSource(7)) == generate(t, ["a"], 20, RandomSource(7))


def test_random_state():
    t = build_table("a b c".split(), 1)
    assert random_state(t, First()) == ("a",)
    assert random_state(TransitionTable(1), First()) is None
