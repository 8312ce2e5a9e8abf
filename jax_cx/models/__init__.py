"""Charge exchange physics models."""

from jax_cx.models.atomic_rates import (
    effective_temperature,
    charge_exchange_rate_coefficient,
    normalized_charge_exchange_rate,
)
from jax_cx.models.charge_exchange import (
    ReactionChannels,
    transfer_channels,
    HydrogenChargeExchange,
    HydrogenChargeExchangeIsotope,
    diagnostic_names,
    reaction_label,
)
from jax_cx.models.protocols import Component
from jax_cx.models.registry import (
    ComponentRegistry,
    register_charge_exchange,
    default_registry,
    build_components,
    apply_components,
)

__all__ = [
    # Rate coefficients
    "effective_temperature",
    "charge_exchange_rate_coefficient",
    "normalized_charge_exchange_rate",
    # Transfer channels
    "ReactionChannels",
    "transfer_channels",
    "HydrogenChargeExchange",
    "HydrogenChargeExchangeIsotope",
    "diagnostic_names",
    "reaction_label",
    # Registry
    "Component",
    "ComponentRegistry",
    "register_charge_exchange",
    "default_registry",
    "build_components",
    "apply_components",
]
