"""Tests for validation helpers and logging of unphysical fields."""

import logging

import jax.numpy as jnp
import pytest

from jax_cx.input_validation import (
    ValidationError,
    MissingConfigurationError,
    validate_positive,
    require_number,
    require_bool,
    count_unphysical,
    report_unphysical,
)


def test_validate_positive():
    validate_positive(1.0, "x")
    with pytest.raises(ValidationError, match="x must be positive"):
        validate_positive(0.0, "x")


def test_missing_configuration_is_validation_error():
    assert issubclass(MissingConfigurationError, ValidationError)
    assert issubclass(MissingConfigurationError, ValueError)


def test_require_number():
    assert require_number({"a": 3}, "a", "s") == 3.0
    with pytest.raises(MissingConfigurationError, match="s.b"):
        require_number({"a": 3}, "b", "s")


def test_require_bool():
    assert require_bool({}, "diagnose", False, "s") is False
    assert require_bool({"diagnose": True}, "diagnose", False, "s") is True
    with pytest.raises(ValidationError):
        require_bool({"diagnose": "yes"}, "diagnose", False, "s")
    with pytest.raises(ValidationError):
        require_bool({"diagnose": 1}, "diagnose", False, "s")


def test_count_unphysical():
    field = jnp.array([1.0, 0.0, -2.0, jnp.nan, jnp.inf, 3.0])
    assert count_unphysical(field) == 4


def test_report_unphysical_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="jax_cx.input_validation"):
        n_bad = report_unphysical(jnp.array([1.0, 0.0]), "h", "density")
    assert n_bad == 1
    assert "h density" in caplog.text


def test_report_unphysical_quiet_for_valid_fields(caplog):
    with caplog.at_level(logging.WARNING, logger="jax_cx.input_validation"):
        assert report_unphysical(jnp.ones(5), "h", "density") == 0
    assert caplog.text == ""
