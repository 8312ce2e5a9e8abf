"""Conservation invariants - summed sources over participating species."""
import jax.numpy as jnp
from tests.invariants import Invariant, InvariantResult, source_increment

class SourceConservation(Invariant):
    """Source increments summed over species vanish at every point.

    The residual at each point is measured relative to the sum of the
    magnitudes of the individual contributions there.
    """

    def __init__(self, quantity: str, species: tuple, rtol: float = 1e-12):
        self.quantity = quantity
        self.species = tuple(dict.fromkeys(species))
        self.rtol = rtol

    @property
    def name(self) -> str:
        return f"{self.quantity.capitalize()}Conservation"

    def check(self, state_before, state_after) -> InvariantResult:
        increments = [source_increment(state_before, state_after, s, self.quantity)
                      for s in self.species]
        total = sum(increments)
        scale = sum(jnp.abs(d) for d in increments)

        rel = jnp.where(scale > 0, jnp.abs(total) / jnp.where(scale > 0, scale, 1.0), 0.0)
        worst = float(jnp.max(rel))

        return InvariantResult(
            passed=worst <= self.rtol,
            name=self.name,
            value=worst,
            tolerance=self.rtol,
            message=f"max |sum|/sum|.| = {worst:.2e} over {', '.join(self.species)}"
        )

class SourceUnchanged(Invariant):
    """A source field of one species is left exactly as it was."""

    def __init__(self, quantity: str, species: str):
        self.quantity = quantity
        self.species = species

    @property
    def name(self) -> str:
        return f"{self.quantity.capitalize()}SourceUnchanged({self.species})"

    def check(self, state_before, state_after) -> InvariantResult:
        delta = source_increment(state_before, state_after, self.species, self.quantity)
        worst = float(jnp.max(jnp.abs(delta)))

        return InvariantResult(
            passed=worst == 0.0,
            name=self.name,
            value=worst,
            tolerance=0.0,
            message=f"max |d{self.quantity}_source| = {worst:.2e}"
        )
