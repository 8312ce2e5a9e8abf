"""Input validation and error types for charge exchange components.

Configuration problems and missing species are fatal and raise. Unphysical
field values are not: the rate kernels floor them, and the helpers here
only report how many grid points were affected so the anomaly shows up in
the log.
"""

import logging
from numbers import Real
from typing import Any, Mapping

import jax.numpy as jnp
from jax import Array

log = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


class MissingConfigurationError(ValidationError):
    """Raised when a required configuration value is absent or malformed."""
    pass


class MissingSpeciesError(KeyError):
    """Raised when a species required by a reaction is not in the state."""

    def __init__(self, name: str, available=()):
        self.name = name
        self.available = tuple(available)
        super().__init__(name)

    def __str__(self) -> str:
        return (
            f"Species '{self.name}' not found in state "
            f"(available: {', '.join(self.available) or 'none'})"
        )


def validate_positive(value: float, name: str) -> None:
    """Validate that a value is strictly positive.

    Args:
        value: The value to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If value <= 0
    """
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")


def require_number(section: Mapping[str, Any], key: str, section_name: str) -> float:
    """Read a required positive real number from a configuration section.

    Args:
        section: Configuration mapping
        key: Key to read
        section_name: Section name for error messages

    Returns:
        The value as a float

    Raises:
        MissingConfigurationError: If the key is absent, not a real number,
            or not strictly positive and finite
    """
    if key not in section:
        raise MissingConfigurationError(f"Missing '{section_name}.{key}' in configuration")

    value = section[key]
    # bool is a Real subclass but never a valid scale
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MissingConfigurationError(
            f"'{section_name}.{key}' must be a number, got {type(value).__name__}"
        )

    value = float(value)
    if not (value > 0 and value != float("inf")):
        raise MissingConfigurationError(
            f"'{section_name}.{key}' must be positive and finite, got {value}"
        )
    return value


def require_bool(section: Mapping[str, Any], key: str, default: bool, section_name: str) -> bool:
    """Read an optional boolean flag from a configuration section.

    Raises:
        ValidationError: If the value is present but not a bool
    """
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise ValidationError(
            f"'{section_name}.{key}' must be true or false, got {value!r}"
        )
    return value


def count_unphysical(field: Array) -> int:
    """Number of grid points that are non-positive or non-finite."""
    bad = ~(jnp.isfinite(field) & (field > 0))
    return int(jnp.sum(bad))


def report_unphysical(field: Array, species: str, quantity: str) -> int:
    """Log a warning if a field has non-positive or non-finite points.

    Args:
        field: Field to check
        species: Species name for the log message
        quantity: Field name for the log message

    Returns:
        Number of offending points
    """
    n_bad = count_unphysical(field)
    if n_bad:
        log.warning(
            "%s %s has %d non-positive or non-finite point(s); floored",
            species, quantity, n_bad,
        )
    return n_bad
