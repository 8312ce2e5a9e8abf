"""Invariant checking infrastructure for source-term components."""
from dataclasses import dataclass
from abc import ABC, abstractmethod

from jax_cx.core.state import PlasmaState

@dataclass
class InvariantResult:
    """Result of an invariant check."""
    passed: bool
    name: str
    value: float
    tolerance: float
    message: str

class Invariant(ABC):
    """Base class for all invariants.

    Invariants compare the state before and after one or more component
    transforms; only the source fields differ between the two.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this invariant."""
        pass

    @abstractmethod
    def check(self, state_before: PlasmaState, state_after: PlasmaState) -> InvariantResult:
        """Check if invariant holds between two states."""
        pass

def source_increment(state_before: PlasmaState, state_after: PlasmaState,
                     species: str, quantity: str):
    """Change of one species' `<quantity>_source` between two states."""
    attr = f"{quantity}_source"
    return (getattr(state_after.get_species(species), attr)
            - getattr(state_before.get_species(species), attr))

def format_failure(result: InvariantResult, reaction: str) -> str:
    """Format a failed invariant result for display."""
    return (
        f"Invariant '{result.name}' violated for {reaction}:\n"
        f"  {result.message}\n"
        f"  Value: {result.value:.2e}, Tolerance: {result.tolerance:.2e}"
    )

def format_failures(failures: list[tuple[str, InvariantResult]]) -> str:
    """Format multiple failures for display."""
    return "\n\n".join(format_failure(r, s) for s, r in failures)
