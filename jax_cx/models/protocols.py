"""Protocols for components that add source terms to the plasma state."""

from typing import Protocol

from jax_cx.core.state import PlasmaState


class Component(Protocol):
    """A physics component applied once per timestep.

    Implementations read species fields from the state and return a new
    state with their contributions ADDED to the species' density, momentum
    and energy sources. They must not overwrite sources set by other
    components, so components can run in any order.
    """

    def transform(self, state: PlasmaState) -> PlasmaState:
        """Apply this component's sources for the current state.

        Args:
            state: Current plasma state

        Returns:
            New state with updated sources
        """
        ...
