"""Unit normalization utilities."""

from jax_cx.units.normalization import (
    Normalization,
    rate_coefficient_to_normalized,
    rate_coefficient_cm3_to_normalized,
    to_normalized_species,
    to_physical_sources,
)

__all__ = [
    "Normalization",
    "rate_coefficient_to_normalized",
    "rate_coefficient_cm3_to_normalized",
    "to_normalized_species",
    "to_physical_sources",
]
