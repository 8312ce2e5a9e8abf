"""Species and plasma state containers."""

from dataclasses import dataclass, field
from typing import Dict, Optional
import jax.numpy as jnp
from jax import Array
import jax

from jax_cx.constants import ISOTOPE_MASS
from jax_cx.input_validation import MissingSpeciesError


@dataclass(frozen=True)
class SpeciesState:
    """State of one fluid species in normalized units.

    `AA`, `density`, `velocity` and `temperature` are inputs to the
    reaction components; the three `*_source` fields accumulate their
    contributions and are read by the fluid solver.
    """

    AA: float             # Atomic mass number [proton masses]
    density: Array        # Number density
    velocity: Array       # Parallel flow velocity
    temperature: Array    # Temperature

    density_source: Optional[Array] = None
    momentum_source: Optional[Array] = None
    energy_source: Optional[Array] = None

    def __post_init__(self):
        # Frozen dataclass: fill missing sources through object.__setattr__
        for name in ("density_source", "momentum_source", "energy_source"):
            if getattr(self, name) is None:
                object.__setattr__(self, name, jnp.zeros_like(self.density))

    @classmethod
    def uniform(cls, shape, AA: float, density: float, velocity: float = 0.0,
                temperature: float = 1.0) -> "SpeciesState":
        """Create a species with spatially uniform fields."""
        return cls(
            AA=AA,
            density=jnp.full(shape, density),
            velocity=jnp.full(shape, velocity),
            temperature=jnp.full(shape, temperature),
        )

    def replace(self, **kwargs) -> "SpeciesState":
        """Return new SpeciesState with specified fields replaced."""
        from dataclasses import replace as dc_replace
        return dc_replace(self, **kwargs)

    def add_sources(self, density: Optional[Array] = None,
                    momentum: Optional[Array] = None,
                    energy: Optional[Array] = None) -> "SpeciesState":
        """Return new SpeciesState with the given values added to its sources."""
        updates = {}
        if density is not None:
            updates["density_source"] = self.density_source + density
        if momentum is not None:
            updates["momentum_source"] = self.momentum_source + momentum
        if energy is not None:
            updates["energy_source"] = self.energy_source + energy
        return self.replace(**updates)

    def zero_sources(self) -> "SpeciesState":
        """Return new SpeciesState with all sources reset to zero."""
        zeros = jnp.zeros_like(self.density)
        return self.replace(density_source=zeros, momentum_source=zeros,
                            energy_source=zeros)


# Register SpeciesState as JAX pytree; AA is static
def _species_state_flatten(state):
    children = (state.density, state.velocity, state.temperature,
                state.density_source, state.momentum_source, state.energy_source)
    aux_data = state.AA
    return children, aux_data


def _species_state_unflatten(aux_data, children):
    density, velocity, temperature, density_source, momentum_source, energy_source = children
    return SpeciesState(AA=aux_data, density=density, velocity=velocity,
                        temperature=temperature, density_source=density_source,
                        momentum_source=momentum_source, energy_source=energy_source)


jax.tree_util.register_pytree_node(
    SpeciesState, _species_state_flatten, _species_state_unflatten
)


@dataclass(frozen=True)
class PlasmaState:
    """All species at a single time, keyed by symbol ("h", "h+", "d", ...)."""

    species: Dict[str, SpeciesState] = field(default_factory=dict)
    time: float = 0.0
    step: int = 0

    @classmethod
    def hydrogenic(cls, shape, density: float = 1.0, velocity: float = 0.0,
                   temperature: float = 1.0, isotopes=("h", "d", "t")) -> "PlasmaState":
        """Create uniform atom and ion species for the given isotopes."""
        species = {}
        for isotope in isotopes:
            AA = ISOTOPE_MASS[isotope]
            for name in (isotope, isotope + "+"):
                species[name] = SpeciesState.uniform(
                    shape, AA, density, velocity, temperature)
        return cls(species=species)

    def __contains__(self, name: str) -> bool:
        return name in self.species

    def get_species(self, name: str) -> SpeciesState:
        """Look up a species by symbol.

        Raises:
            MissingSpeciesError: If the species is not present
        """
        try:
            return self.species[name]
        except KeyError:
            raise MissingSpeciesError(name, sorted(self.species)) from None

    def with_species(self, name: str, species: SpeciesState) -> "PlasmaState":
        """Return new PlasmaState with one species added or replaced."""
        return self.replace(species={**self.species, name: species})

    def zero_sources(self) -> "PlasmaState":
        """Return new PlasmaState with every species' sources reset."""
        return self.replace(
            species={name: s.zero_sources() for name, s in self.species.items()})

    def replace(self, **kwargs) -> "PlasmaState":
        """Return new PlasmaState with specified fields replaced."""
        from dataclasses import replace as dc_replace
        return dc_replace(self, **kwargs)


def _plasma_state_flatten(state):
    names = tuple(sorted(state.species))
    children = (tuple(state.species[n] for n in names), state.time, state.step)
    aux_data = names
    return children, aux_data


def _plasma_state_unflatten(aux_data, children):
    species, time, step = children
    return PlasmaState(species=dict(zip(aux_data, species)), time=time, step=step)


jax.tree_util.register_pytree_node(
    PlasmaState, _plasma_state_flatten, _plasma_state_unflatten
)
