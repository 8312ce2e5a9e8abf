"""JAX-CX: hydrogen isotope charge exchange sources for edge fluid models."""

__version__ = "0.1.0"

# Core classes
from jax_cx.core.state import SpeciesState, PlasmaState
from jax_cx.units.normalization import Normalization
from jax_cx.diagnostics.output import DiagnosticOutput

# Constants
from jax_cx.constants import QE, MI, ISOTOPES, ISOTOPE_MASS

# Errors
from jax_cx.input_validation import (
    ValidationError,
    MissingConfigurationError,
    MissingSpeciesError,
)

# Components
from jax_cx.models.charge_exchange import (
    HydrogenChargeExchange,
    HydrogenChargeExchangeIsotope,
    ReactionChannels,
)
from jax_cx.models.registry import (
    ComponentRegistry,
    default_registry,
    build_components,
    apply_components,
)

# Submodules for qualified imports
from jax_cx import models
from jax_cx import units
from jax_cx import config

__all__ = [
    # Core classes
    "SpeciesState",
    "PlasmaState",
    "Normalization",
    "DiagnosticOutput",
    # Constants
    "QE",
    "MI",
    "ISOTOPES",
    "ISOTOPE_MASS",
    # Errors
    "ValidationError",
    "MissingConfigurationError",
    "MissingSpeciesError",
    # Components
    "HydrogenChargeExchange",
    "HydrogenChargeExchangeIsotope",
    "ReactionChannels",
    "ComponentRegistry",
    "default_registry",
    "build_components",
    "apply_components",
    # Submodules
    "models",
    "units",
    "config",
]
