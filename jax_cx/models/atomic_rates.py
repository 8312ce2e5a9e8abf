"""Charge exchange rate coefficients for hydrogen isotopes.

p + H(1s) -> H(1s) + p, AMJUEL H.2 reaction 3.1.8 (Amjuel p43).

The fit is for a proton-hydrogen system. Other isotope combinations and
finite neutral temperatures are handled with the effective temperature

    T_eff = (M/M_1) T_1 + (M/M_2) T_2

where M is the reference mass of the fitted system (Amjuel p43).
All functions are JIT-compatible.
"""

from typing import Optional

import jax.numpy as jnp
from jax import jit, Array

from jax_cx.constants import (
    AMJUEL_CX_3_1_8,
    CM3_TO_M3,
    CX_FIT_TEMPERATURE_MAX,
    CX_FIT_TEMPERATURE_MIN,
    CX_REFERENCE_MASS,
    TEMPERATURE_FLOOR,
)


def floor_field(field: Array, floor: float) -> Array:
    """Replace non-finite values and values below `floor` with `floor`."""
    return jnp.where(jnp.isfinite(field), jnp.maximum(field, floor), floor)


@jit
def effective_temperature(
    T1: Array, A1: float, T2: Array, A2: float,
    reference_mass: float = CX_REFERENCE_MASS,
    floor: Optional[float] = TEMPERATURE_FLOOR,
) -> Array:
    """Mass-weighted temperature for rate coefficient lookup.

    T_eff = (M/A1) * T1 + (M/A2) * T2

    Args:
        T1: Temperature of the first (atom) population
        A1: Mass of the first population [proton masses]
        T2: Temperature of the second (ion) population
        A2: Mass of the second population [proton masses]
        reference_mass: M, mass of the fitted system [proton masses]
        floor: Positive floor applied to T1 and T2 (non-finite -> floor);
            None if the caller has already floored them

    Returns:
        Effective temperature, in the units of T1 and T2
    """
    if floor is not None:
        T1 = floor_field(T1, floor)
        T2 = floor_field(T2, floor)
    return (reference_mass / A1) * T1 + (reference_mass / A2) * T2


def clamp_to_fit_domain(T_eV: Array) -> Array:
    """Clamp temperatures to the validated range of the fit.

    Non-finite values map to the lower bound.
    """
    T_clamped = jnp.clip(T_eV, CX_FIT_TEMPERATURE_MIN, CX_FIT_TEMPERATURE_MAX)
    return jnp.where(jnp.isnan(T_eV), CX_FIT_TEMPERATURE_MIN, T_clamped)


def count_out_of_fit_domain(T_eV: Array) -> int:
    """Number of points outside the fit range (clamped on evaluation)."""
    outside = ~((T_eV >= CX_FIT_TEMPERATURE_MIN) & (T_eV <= CX_FIT_TEMPERATURE_MAX))
    return int(jnp.sum(outside))


def log_polynomial(lnT: Array, coefficients) -> Array:
    """Evaluate sum_n b_n * lnT^n by Horner's rule."""
    result = jnp.zeros_like(lnT)
    for b in reversed(coefficients):
        result = result * lnT + b
    return result


@jit
def charge_exchange_rate_coefficient(T_eff: Array) -> Array:
    """Hydrogen charge exchange <sigma*v>(T_eff) [m^3/s].

    Reference: AMJUEL H.2 3.1.8, Janev et al. (1987) fit.

    ln<sigma*v> = sum_{n=0}^{8} b_n (ln T)^n   [cm^3/s]

    Args:
        T_eff: Effective temperature [eV]; clamped to the fit range
            [0.1 eV, 20 keV] before evaluation

    Returns:
        Rate coefficient [m^3/s], strictly positive
    """
    lnT = jnp.log(clamp_to_fit_domain(T_eff))
    ln_sigma_v = log_polynomial(lnT, AMJUEL_CX_3_1_8)
    return jnp.exp(ln_sigma_v) * CM3_TO_M3


@jit
def normalized_charge_exchange_rate(T_eff: Array, rate_scale: float) -> Array:
    """Charge exchange <sigma*v> in normalized units.

    Args:
        T_eff: Effective temperature [eV]
        rate_scale: Nnorm / FreqNorm, see Normalization.rate_coefficient

    Returns:
        Normalized rate coefficient
    """
    return charge_exchange_rate_coefficient(T_eff) * rate_scale
