r"""Unit tests for BackoffPolicy."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from fluentry.backoff import BackoffPolicy, ExponentialBackoff, MonotonicClock
from tests.helpers import FakeClock

#################################
#     Tests for construction    #
#################################


def test_backoff_policy_defaults() -> None:
    policy = BackoffPolicy()
    assert policy.initial_interval == 0.5
    assert policy.multiplier == 1.5
    assert policy.randomization_factor == 0.5
    assert policy.max_interval == 60.0
    assert policy.max_elapsed_time == 900.0
    assert isinstance(policy.clock, MonotonicClock)


def test_backoff_policy_is_immutable() -> None:
    policy = BackoffPolicy()
    with pytest.raises(AttributeError):
        policy.multiplier = 3.0  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"multiplier": 0.5},
        {"randomization_factor": 1.5},
        {"initial_interval": -1.0},
        {"max_interval": -1.0},
        {"max_elapsed_time": 0.0},
    ],
)
def test_backoff_policy_invalid(kwargs: dict[str, float]) -> None:
    with pytest.raises(ValueError, match=r"must be"):
        BackoffPolicy(**kwargs)


def test_backoff_policy_strategy() -> None:
    strategy = BackoffPolicy(initial_interval=2.0, multiplier=3.0, max_interval=50.0).strategy
    assert isinstance(strategy, ExponentialBackoff)
    assert strategy.calculate(2) == 18.0


def test_backoff_policy_merge() -> None:
    clock = FakeClock()
    policy = BackoffPolicy()
    merged = policy.merge(multiplier=2.0, clock=clock)
    assert merged.multiplier == 2.0
    assert merged.clock is clock
    assert policy.multiplier == 1.5


def test_backoff_policy_merge_validates() -> None:
    with pytest.raises(ValueError, match=r"multiplier must be >= 1"):
        BackoffPolicy().merge(multiplier=0.1)


###############################
#     Tests for base_delay    #
###############################


def test_backoff_policy_base_delay() -> None:
    policy = BackoffPolicy(initial_interval=1.0, multiplier=2.0, max_interval=10.0)
    assert [policy.base_delay(i) for i in range(6)] == [1.0, 2.0, 4.0, 8.0, 10.0, 10.0]


##############################
#     Tests for randomize    #
##############################


def test_backoff_policy_randomize_without_factor() -> None:
    policy = BackoffPolicy(randomization_factor=0.0)
    with patch("random.uniform") as uniform:
        assert policy.randomize(4.0) == 4.0
    uniform.assert_not_called()


def test_backoff_policy_randomize_samples_uniform_range() -> None:
    policy = BackoffPolicy(randomization_factor=0.25)
    with patch("random.uniform", return_value=3.5) as uniform:
        assert policy.randomize(4.0) == 3.5
    uniform.assert_called_once_with(3.0, 5.0)


@pytest.mark.parametrize("factor", [0.1, 0.5, 1.0])
def test_backoff_policy_randomize_within_bounds(factor: float) -> None:
    policy = BackoffPolicy(randomization_factor=factor)
    for _ in range(200):
        delay = policy.randomize(2.0)
        assert 2.0 * (1 - factor) <= delay <= 2.0 * (1 + factor)


def test_backoff_policy_randomize_never_exceeds_max_interval() -> None:
    policy = BackoffPolicy(initial_interval=1.0, randomization_factor=0.5, max_interval=1.0)
    for attempt in range(10):
        for _ in range(50):
            delay = policy.next_delay(attempt)
            assert 0.5 <= delay <= 1.0


def test_backoff_policy_randomize_upper_bound_is_capped() -> None:
    policy = BackoffPolicy(randomization_factor=0.5, max_interval=10.0)
    with patch("random.uniform", return_value=15.0):
        assert policy.randomize(10.0) == 10.0


###############################
#     Tests for next_delay    #
###############################


def test_backoff_policy_next_delay_deterministic() -> None:
    policy = BackoffPolicy(initial_interval=0.5, multiplier=1.5, randomization_factor=0.0)
    assert policy.next_delay(0) == 0.5
    assert policy.next_delay(1) == 0.75
    assert policy.next_delay(2) == 1.125


def test_backoff_policy_next_delay_mean_non_decreasing() -> None:
    policy = BackoffPolicy(initial_interval=0.5, multiplier=1.5, randomization_factor=0.5)
    means = [sum(policy.next_delay(i) for _ in range(400)) / 400 for i in range(5)]
    for previous, current in zip(means, means[1:]):
        assert current >= previous * 0.9


#################################
#     Tests for would_exceed    #
#################################


def test_backoff_policy_would_exceed() -> None:
    policy = BackoffPolicy(max_elapsed_time=10.0)
    assert not policy.would_exceed(elapsed=5.0, delay=4.0)
    assert not policy.would_exceed(elapsed=5.0, delay=5.0)
    assert policy.would_exceed(elapsed=5.0, delay=5.1)


def test_backoff_policy_would_exceed_without_bound() -> None:
    policy = BackoffPolicy(max_elapsed_time=None)
    assert not policy.would_exceed(elapsed=1e9, delay=1e9)
