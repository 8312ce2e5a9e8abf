"""Component registry and construction from configuration."""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
import logging

from jax_cx.constants import ISOTOPES
from jax_cx.core.state import PlasmaState
from jax_cx.diagnostics.output import DiagnosticOutput
from jax_cx.input_validation import ValidationError
from jax_cx.models.charge_exchange import HydrogenChargeExchangeIsotope, reaction_label
from jax_cx.models.protocols import Component

log = logging.getLogger(__name__)

ComponentFactory = Callable[[str, Mapping[str, Any], DiagnosticOutput], Component]


class ComponentRegistry:
    """Maps component names to factories, in registration order."""

    def __init__(self):
        self._factories: Dict[str, ComponentFactory] = {}

    def register(self, name: str, factory: ComponentFactory) -> None:
        if name in self._factories:
            raise ValueError(f"Component '{name}' is already registered")
        self._factories[name] = factory

    def create(self, name: str, config: Mapping[str, Any],
               output: DiagnosticOutput) -> Component:
        """Instantiate a registered component."""
        if name not in self._factories:
            raise KeyError(
                f"Unknown component: {name!r}. Available: {', '.join(self._factories)}")
        return self._factories[name](name, config, output)

    def names(self) -> List[str]:
        return list(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories


def _isotope_factory(isotope1: str, isotope2: str) -> ComponentFactory:
    def factory(name, config, output):
        return HydrogenChargeExchangeIsotope(name, isotope1, isotope2, config, output)
    return factory


def register_charge_exchange(registry: ComponentRegistry) -> ComponentRegistry:
    """Register the nine hydrogen isotope charge exchange reactions.

    Same-isotope reactions come first, then each cross-isotope pair
    followed by its mirror:

        h + h+ -> h+ + h, d + d+ -> d+ + d, t + t+ -> t+ + t,
        h + d+ -> h+ + d, d + h+ -> d+ + h, ...
    """
    pairs = [(i, i) for i in ISOTOPES]
    for n, i1 in enumerate(ISOTOPES):
        for i2 in ISOTOPES[n + 1:]:
            pairs += [(i1, i2), (i2, i1)]

    for i1, i2 in pairs:
        registry.register(reaction_label(i1, i2), _isotope_factory(i1, i2))
    return registry


def default_registry() -> ComponentRegistry:
    """A new registry holding all charge exchange reactions."""
    return register_charge_exchange(ComponentRegistry())


def build_components(config: Mapping[str, Any],
                     output: Optional[DiagnosticOutput] = None,
                     registry: Optional[ComponentRegistry] = None) -> List[Component]:
    """Create the components listed in `config["components"]`.

    All registered components are created if the list is absent. Every
    component registers its diagnostics in the shared `output`, so a
    duplicated name anywhere raises at construction.
    """
    registry = registry if registry is not None else default_registry()
    output = output if output is not None else DiagnosticOutput()

    names = config.get("components")
    if names is None:
        names = registry.names()
    elif isinstance(names, str) or not isinstance(names, Iterable):
        raise ValidationError("'components' must be a list of component names")

    components = [registry.create(name, config, output) for name in names]
    log.info("Built %d component(s)", len(components))
    return components


def apply_components(components: Iterable[Component], state: PlasmaState) -> PlasmaState:
    """Run each component's transform in turn."""
    for component in components:
        state = component.transform(state)
    return state
