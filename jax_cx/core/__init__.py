"""Core state containers."""

from jax_cx.core.state import SpeciesState, PlasmaState

__all__ = ["SpeciesState", "PlasmaState"]
