from __future__ import annotations

import pytest

from fluentry.core.validation import (
    validate_backoff_params,
    validate_max_retries,
    validate_timeout,
)

######################################
#     Tests for validate_timeout     #
######################################


@pytest.mark.parametrize("timeout", [None, 0.1, 1, 30.0])
def test_validate_timeout_valid(timeout: float | None) -> None:
    validate_timeout(timeout)


@pytest.mark.parametrize("timeout", [0, -1, -0.5])
def test_validate_timeout_invalid(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        validate_timeout(timeout)


##########################################
#     Tests for validate_max_retries     #
##########################################


@pytest.mark.parametrize("max_retries", [0, 1, 10])
def test_validate_max_retries_valid(max_retries: int) -> None:
    validate_max_retries(max_retries)


def test_validate_max_retries_negative() -> None:
    with pytest.raises(ValueError, match=r"max_retries must be >= 0, got -1"):
        validate_max_retries(-1)


#############################################
#     Tests for validate_backoff_params     #
#############################################


def _params(**overrides: object) -> dict[str, object]:
    params = {
        "initial_interval": 0.5,
        "multiplier": 1.5,
        "randomization_factor": 0.5,
        "max_interval": 60.0,
        "max_elapsed_time": 900.0,
    }
    params.update(overrides)
    return params


def test_validate_backoff_params_valid() -> None:
    validate_backoff_params(**_params())


@pytest.mark.parametrize(
    "overrides",
    [
        {"initial_interval": 0.0},
        {"multiplier": 1.0},
        {"randomization_factor": 0.0},
        {"randomization_factor": 1.0},
        {"max_elapsed_time": None},
    ],
)
def test_validate_backoff_params_boundaries(overrides: dict[str, object]) -> None:
    validate_backoff_params(**_params(**overrides))


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"initial_interval": -0.1}, r"initial_interval must be >= 0"),
        ({"multiplier": 0.9}, r"multiplier must be >= 1"),
        ({"randomization_factor": -0.1}, r"randomization_factor must be in \[0, 1\]"),
        ({"randomization_factor": 1.1}, r"randomization_factor must be in \[0, 1\]"),
        ({"max_interval": 0}, r"max_interval must be > 0"),
        ({"max_elapsed_time": 0}, r"max_elapsed_time must be > 0"),
    ],
)
def test_validate_backoff_params_invalid(overrides: dict[str, object], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        validate_backoff_params(**_params(**overrides))
