"""Normalization helpers for dimensionless units.

Fields handed to the charge exchange components are normalized to

- temperature: Tnorm [eV]
- density: Nnorm [m^-3]
- time: seconds [s], so frequencies are in units of FreqNorm = 1/seconds
- velocity: Cs0 = sqrt(e * Tnorm / m_p) [m/s]
- mass: proton masses
"""

from dataclasses import dataclass
from typing import Any, Mapping
import logging
import math

from jax_cx.constants import QE, MI, CM3_TO_M3
from jax_cx.input_validation import MissingConfigurationError, require_number, validate_positive

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Normalization:
    """Base scales converting physical to normalized units."""

    Tnorm: float    # [eV]
    Nnorm: float    # [m^-3]
    seconds: float  # [s]

    def __post_init__(self):
        validate_positive(self.Tnorm, "Tnorm")
        validate_positive(self.Nnorm, "Nnorm")
        validate_positive(self.seconds, "seconds")

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "Normalization":
        """Read the `units` section of a configuration.

        Expects `units.eV`, `units.inv_meters_cubed` and `units.seconds`.

        Raises:
            MissingConfigurationError: If the section or any scale is absent,
                non-numeric, or not positive
        """
        units = config.get("units")
        if not isinstance(units, Mapping):
            raise MissingConfigurationError("Missing 'units' section in configuration")

        norm = cls(
            Tnorm=require_number(units, "eV", "units"),
            Nnorm=require_number(units, "inv_meters_cubed", "units"),
            seconds=require_number(units, "seconds", "units"),
        )
        log.debug("Normalization: Tnorm=%g eV, Nnorm=%g m^-3, t=%g s",
                  norm.Tnorm, norm.Nnorm, norm.seconds)
        return norm

    @property
    def FreqNorm(self) -> float:
        return 1.0 / self.seconds

    @property
    def Cs0(self) -> float:
        return math.sqrt(QE * self.Tnorm / MI)

    @property
    def rate_coefficient(self) -> float:
        """Scale from <sigma*v> in m^3/s to normalized units."""
        return self.Nnorm / self.FreqNorm

    @property
    def density_source(self) -> float:
        """Physical value of a unit density source [m^-3 s^-1]."""
        return self.Nnorm * self.FreqNorm

    @property
    def momentum_source(self) -> float:
        """Physical value of a unit momentum source [N m^-3]."""
        return MI * self.Nnorm * self.Cs0 * self.FreqNorm

    @property
    def energy_source(self) -> float:
        """Physical value of a unit energy source [W m^-3]."""
        return QE * self.Tnorm * self.Nnorm * self.FreqNorm


def rate_coefficient_to_normalized(sigma_v, norm: Normalization):
    """Convert <sigma*v> [m^3/s] to normalized units."""
    return sigma_v * norm.rate_coefficient


def rate_coefficient_cm3_to_normalized(sigma_v_cm3, norm: Normalization):
    """Convert <sigma*v> [cm^3/s] to normalized units."""
    return sigma_v_cm3 * CM3_TO_M3 * norm.rate_coefficient


def to_normalized_species(norm: Normalization, density, velocity, temperature):
    """Convert SI density [m^-3], velocity [m/s], temperature [eV] to normalized."""
    return density / norm.Nnorm, velocity / norm.Cs0, temperature / norm.Tnorm


def to_physical_sources(norm: Normalization, density_source, momentum_source, energy_source):
    """Convert normalized sources to [m^-3/s], [N/m^3], [W/m^3]."""
    return (
        density_source * norm.density_source,
        momentum_source * norm.momentum_source,
        energy_source * norm.energy_source,
    )
