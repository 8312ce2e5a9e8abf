"""Pytest fixtures for charge exchange tests."""
import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tests.invariants import Invariant, InvariantResult
from tests.utils.plasma import make_config, make_random_state
from jax_cx.units.normalization import Normalization

@pytest.fixture
def invariant_checker():
    """Returns a function that checks all invariants and collects failures."""
    def check_all(
        invariants: list[Invariant],
        state_before,
        state_after,
        reaction: str
    ) -> tuple[list[InvariantResult], list[tuple[str, InvariantResult]]]:
        results = [inv.check(state_before, state_after) for inv in invariants]
        failures = [(reaction, r) for r in results if not r.passed]
        return results, failures
    return check_all


@pytest.fixture
def config():
    """Configuration with diagnostics enabled for every reaction."""
    return make_config(diagnose=True)


@pytest.fixture
def norm(config):
    return Normalization.from_config(config)


@pytest.fixture
def random_state():
    return make_random_state(seed=42)
