"""Tests for normalization utilities."""

import math

import jax.numpy as jnp
import pytest

from jax_cx.constants import QE, MI
from jax_cx.input_validation import MissingConfigurationError, ValidationError
from jax_cx.units.normalization import (
    Normalization,
    rate_coefficient_to_normalized,
    rate_coefficient_cm3_to_normalized,
    to_normalized_species,
    to_physical_sources,
)


def test_from_config_reads_units():
    config = {"units": {"eV": 50.0, "inv_meters_cubed": 1e19, "seconds": 2e-8}}
    norm = Normalization.from_config(config)

    assert norm.Tnorm == 50.0
    assert norm.Nnorm == 1e19
    assert norm.FreqNorm == pytest.approx(5e7)


def test_integer_scales_accepted():
    norm = Normalization.from_config({"units": {"eV": 10, "inv_meters_cubed": 10**19, "seconds": 1}})
    assert isinstance(norm.Tnorm, float)


def test_missing_units_section():
    with pytest.raises(MissingConfigurationError, match="units"):
        Normalization.from_config({})


@pytest.mark.parametrize("key", ["eV", "inv_meters_cubed", "seconds"])
def test_missing_scale(key):
    units = {"eV": 50.0, "inv_meters_cubed": 1e19, "seconds": 1e-8}
    del units[key]
    with pytest.raises(MissingConfigurationError, match=key):
        Normalization.from_config({"units": units})


@pytest.mark.parametrize("value", ["100", None, True, [1.0]])
def test_wrong_type_scale(value):
    units = {"eV": value, "inv_meters_cubed": 1e19, "seconds": 1e-8}
    with pytest.raises(MissingConfigurationError):
        Normalization.from_config({"units": units})


@pytest.mark.parametrize("value", [0.0, -1.0, float("inf"), float("nan")])
def test_non_positive_scale(value):
    units = {"eV": 50.0, "inv_meters_cubed": value, "seconds": 1e-8}
    with pytest.raises(MissingConfigurationError):
        Normalization.from_config({"units": units})


def test_direct_construction_validated():
    with pytest.raises(ValidationError):
        Normalization(Tnorm=-1.0, Nnorm=1e19, seconds=1e-8)


def test_is_immutable():
    norm = Normalization(Tnorm=100.0, Nnorm=1e19, seconds=1e-8)
    with pytest.raises(AttributeError):
        norm.Tnorm = 1.0


def test_sound_speed():
    norm = Normalization(Tnorm=100.0, Nnorm=1e19, seconds=1e-8)
    assert norm.Cs0 == pytest.approx(math.sqrt(QE * 100.0 / MI))


def test_rate_coefficient_conversion():
    norm = Normalization(Tnorm=100.0, Nnorm=1e19, seconds=1e-8)
    # <sigma v> * Nnorm * seconds
    assert rate_coefficient_to_normalized(1e-14, norm) == pytest.approx(1e-14 * 1e19 * 1e-8)
    assert rate_coefficient_cm3_to_normalized(1e-8, norm) == pytest.approx(1e-14 * 1e19 * 1e-8)


def test_species_and_source_conversion_consistent():
    """A normalized source built from normalized inputs maps back to SI."""
    norm = Normalization(Tnorm=20.0, Nnorm=1e18, seconds=1e-6)
    n, v, T = to_normalized_species(norm, jnp.array(2e18), jnp.array(1e4), jnp.array(5.0))
    assert n == pytest.approx(2.0)
    assert v == pytest.approx(1e4 / norm.Cs0)
    assert T == pytest.approx(0.25)

    # Momentum density rate m*n*v*nu with nu = 1/seconds
    S_n, S_mom, S_E = to_physical_sources(norm, n, n * v, n * T)
    assert S_n == pytest.approx(2e18 / 1e-6)
    assert S_mom == pytest.approx(MI * 2e18 * 1e4 / 1e-6)
    assert S_E == pytest.approx(QE * 5.0 * 2e18 / 1e-6)
