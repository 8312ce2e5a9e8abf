"""Hydrogen isotope charge exchange between atom and ion fluids.

    atom   +   ion     ->   ion      +    atom
    I1     +   I2+     ->   I1+      +    I2

The reacting atom1 population hands its particles, momentum and energy to
ion2 (same isotope, now ionized) and ion1 hands its share to atom2. Each
channel is computed once and applied with opposite signs to donor and
receiver, so particles, momentum and energy are conserved pointwise.

If this is included then ion-neutral collisions should probably be
disabled elsewhere, to avoid double-counting.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple
import logging

import jax
from jax import Array, jit

from jax_cx.config.loader import get_section
from jax_cx.constants import DENSITY_FLOOR, ISOTOPES, TEMPERATURE_FLOOR
from jax_cx.core.state import PlasmaState
from jax_cx.diagnostics.output import DiagnosticOutput
from jax_cx.input_validation import ValidationError, report_unphysical, require_bool
from jax_cx.models.atomic_rates import (
    count_out_of_fit_domain,
    effective_temperature,
    floor_field,
    normalized_charge_exchange_rate,
)
from jax_cx.units.normalization import Normalization

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReactionChannels:
    """Transfer channels of one charge exchange reaction (normalized).

    R            Reaction rate; transfer of particles for different isotopes
    atom_mom     Momentum removed from atom1, added to ion2
    ion_mom      Momentum removed from ion1, added to atom2
    atom_energy  Energy removed from atom1, added to ion2
    ion_energy   Energy removed from ion1, added to atom2
    T_eff        Effective temperature [eV] before clamping to the fit range
    """
    R: Array
    atom_mom: Array
    ion_mom: Array
    atom_energy: Array
    ion_energy: Array
    T_eff: Array


def _channels_flatten(channels):
    children = (channels.R, channels.atom_mom, channels.ion_mom,
                channels.atom_energy, channels.ion_energy, channels.T_eff)
    aux_data = None
    return children, aux_data


def _channels_unflatten(aux_data, children):
    return ReactionChannels(*children)


jax.tree_util.register_pytree_node(
    ReactionChannels, _channels_flatten, _channels_unflatten
)


@jit
def transfer_channels(
    A_atom: float, n_atom: Array, v_atom: Array, T_atom: Array,
    A_ion: float, n_ion: Array, v_ion: Array, T_ion: Array,
    Tnorm: float, rate_scale: float,
) -> ReactionChannels:
    """Reaction rate and momentum/energy channels for atom1 + ion1.

    Args:
        A_atom, n_atom, v_atom, T_atom: Mass, density, velocity and
            temperature of the reacting atoms (normalized)
        A_ion, n_ion, v_ion, T_ion: Same for the reacting ions
        Tnorm: Temperature normalization [eV]
        rate_scale: Nnorm / FreqNorm

    Returns:
        ReactionChannels with
          R           = n_atom * n_ion * <sigma*v>(T_eff)
          atom_mom    = R * A_atom * v_atom
          ion_mom     = R * A_ion * v_ion
          atom_energy = R * (3/2 T_atom + 1/2 A_atom v_atom^2)
          ion_energy  = R * (3/2 T_ion + 1/2 A_ion v_ion^2)
    """
    T_atom = floor_field(T_atom, TEMPERATURE_FLOOR)
    T_ion = floor_field(T_ion, TEMPERATURE_FLOOR)

    T_eff = effective_temperature(T_atom, A_atom, T_ion, A_ion, floor=None) * Tnorm
    sigma_v = normalized_charge_exchange_rate(T_eff, rate_scale)

    n_atom = floor_field(n_atom, DENSITY_FLOOR)
    n_ion = floor_field(n_ion, DENSITY_FLOOR)

    R = n_atom * n_ion * sigma_v

    atom_mom = R * A_atom * v_atom
    ion_mom = R * A_ion * v_ion

    atom_energy = R * (1.5 * T_atom + 0.5 * A_atom * v_atom**2)
    ion_energy = R * (1.5 * T_ion + 0.5 * A_ion * v_ion**2)

    return ReactionChannels(R=R, atom_mom=atom_mom, ion_mom=ion_mom,
                            atom_energy=atom_energy, ion_energy=ion_energy,
                            T_eff=T_eff)


def reaction_label(isotope1: str, isotope2: str) -> str:
    """Registry name of a reaction, e.g. "h + d+ -> h+ + d"."""
    return f"{isotope1} + {isotope2}+ -> {isotope1}+ + {isotope2}"


def diagnostic_names(isotope1: str, isotope2: str) -> dict:
    """Output names of the diagnostics of one isotope pair.

    F<I1><I2>+_cx  Momentum added to I1 atoms by CX with I2 ions
    E<I1><I2>+_cx  Energy added to I1 atoms by CX with I2 ions
    For different isotopes also
    F<I2>+<I1>_cx  Momentum source for I2 ions, sink for I2 atoms
    E<I2>+<I1>_cx  Energy source for I2 ions, sink for I2 atoms
    S<I1><I2>+_cx  Source of I1 atoms
    """
    names = {
        "F": f"F{isotope1}{isotope2}+_cx",
        "E": f"E{isotope1}{isotope2}+_cx",
    }
    if isotope1 != isotope2:
        names["F2"] = f"F{isotope2}+{isotope1}_cx"
        names["E2"] = f"E{isotope2}+{isotope1}_cx"
        names["S"] = f"S{isotope1}{isotope2}+_cx"
    return names


class HydrogenChargeExchange:
    """Charge exchange rates and transfers for a generic atom/ion pair.

    Holds the normalization; `calculate_rates` works on any four species
    names so the isotope-specific subclass only has to pick them.
    """

    def __init__(self, config: Mapping[str, Any], validate: bool = True):
        self.norm = Normalization.from_config(config)
        self.validate = validate

    def calculate_rates(
        self, state: PlasmaState, atom1: str, ion1: str, atom2: str, ion2: str
    ) -> Tuple[PlasmaState, ReactionChannels]:
        """Charge exchange atom1 + ion1 -> atom2 + ion2.

        Transfers mass, momentum and energy from atom1 -> ion2 and
        ion1 -> atom2. Density sources are only touched when atom1 and
        atom2 are different species.

        Args:
            state: Current plasma state
            atom1, ion1: Reacting species
            atom2, ion2: Product species

        Returns:
            (new_state, channels); `state` itself is not modified

        Raises:
            MissingSpeciesError: If any of the four species is absent
            ValidationError: If product masses do not match the reactants
        """
        # Resolve everything up front so a missing species leaves no partial update
        a1 = state.get_species(atom1)
        i1 = state.get_species(ion1)
        a2 = state.get_species(atom2)
        i2 = state.get_species(ion2)

        if i2.AA != a1.AA or a2.AA != i1.AA:
            raise ValidationError(
                f"Inconsistent masses in {atom1} + {ion1} -> {ion2} + {atom2}: "
                f"{atom1}={a1.AA}, {ion2}={i2.AA}, {ion1}={i1.AA}, {atom2}={a2.AA}"
            )

        if self.validate:
            for name, sp in ((atom1, a1), (ion1, i1)):
                report_unphysical(sp.density, name, "density")
                report_unphysical(sp.temperature, name, "temperature")

        channels = transfer_channels(
            a1.AA, a1.density, a1.velocity, a1.temperature,
            i1.AA, i1.density, i1.velocity, i1.temperature,
            self.norm.Tnorm, self.norm.rate_coefficient,
        )

        if self.validate:
            n_out = count_out_of_fit_domain(channels.T_eff)
            if n_out:
                log.warning(
                    "%s + %s: effective temperature outside fit range at %d "
                    "point(s); clamped", atom1, ion1, n_out,
                )

        R = channels.R
        species = dict(state.species)

        def add(name, **sources):
            species[name] = species[name].add_sources(**sources)

        if atom1 != atom2 or ion1 != ion2:
            # Transfer particles atom1 -> ion2, ion1 -> atom2
            add(atom1, density=-R)
            add(ion2, density=R)
            add(ion1, density=-R)
            add(atom2, density=R)
        # Same isotope swapping places: no particle transfer

        add(atom1, momentum=-channels.atom_mom, energy=-channels.atom_energy)
        add(ion2, momentum=channels.atom_mom, energy=channels.atom_energy)
        add(ion1, momentum=-channels.ion_mom, energy=-channels.ion_energy)
        add(atom2, momentum=channels.ion_mom, energy=channels.ion_energy)

        return state.replace(species=species), channels


class HydrogenChargeExchangeIsotope(HydrogenChargeExchange):
    """Charge exchange for one ordered pair of hydrogen isotopes.

        I1 + I2+ -> I1+ + I2

    Reads `config[name]["diagnose"]` (default False). When set, the
    diagnostics listed in `diagnostic_names` are registered in `output`
    and refreshed on every `transform`.

    Args:
        name: Component name, also the configuration section
        isotope1: Isotope of the initial atom ("h", "d" or "t")
        isotope2: Isotope of the initial ion
        config: Full configuration, must contain `units`
        output: Diagnostic output to register with; a private one is
            created if None
    """

    def __init__(self, name: str, isotope1: str, isotope2: str,
                 config: Mapping[str, Any],
                 output: Optional[DiagnosticOutput] = None):
        for isotope in (isotope1, isotope2):
            if isotope not in ISOTOPES:
                raise ValidationError(
                    f"Unknown isotope '{isotope}', expected one of {ISOTOPES}")

        options = get_section(config, name)
        super().__init__(
            config, validate=require_bool(options, "validate", True, name))

        self.name = name
        self.isotope1 = isotope1
        self.isotope2 = isotope2
        self.diagnose = require_bool(options, "diagnose", False, name)
        self.output = output if output is not None else DiagnosticOutput()
        self.names = diagnostic_names(isotope1, isotope2)

        if self.diagnose:
            docs = self._diagnostic_docs()
            for key, field_name in self.names.items():
                self.output.add_repeat(field_name, docs[key])

        log.info("Created %s (diagnose=%s)", self.reaction, self.diagnose)

    @property
    def reaction(self) -> str:
        return reaction_label(self.isotope1, self.isotope2)

    @property
    def same_isotope(self) -> bool:
        return self.isotope1 == self.isotope2

    @property
    def species_names(self) -> Tuple[str, str, str, str]:
        """(atom1, ion1, atom2, ion2), e.g. ("h", "d+", "d", "h+")."""
        i1, i2 = self.isotope1, self.isotope2
        return i1, i2 + "+", i2, i1 + "+"

    def transform(self, state: PlasmaState) -> PlasmaState:
        """Apply this reaction's sources to `state` and update diagnostics.

        Not traceable when `diagnose` is set, since diagnostics are stored
        in `output`; jit `transform_with_diagnostics` instead and pass its
        fields to `update_diagnostics`.
        """
        state, fields = self.transform_with_diagnostics(state)
        if self.diagnose:
            if any(isinstance(v, jax.core.Tracer) for v in fields.values()):
                raise ValidationError(
                    f"{self.reaction}: transform stores diagnostics and cannot be "
                    "traced; use transform_with_diagnostics under jax.jit")
            self.update_diagnostics(fields)
        return state

    def transform_with_diagnostics(self, state: PlasmaState) -> Tuple[PlasmaState, dict]:
        """Apply this reaction's sources without side effects.

        Returns:
            (new_state, fields) where fields maps diagnostic output names to
            values; empty unless `diagnose` is set
        """
        atom1, ion1, atom2, ion2 = self.species_names
        state, channels = self.calculate_rates(state, atom1, ion1, atom2, ion2)
        log.debug("Applied %s", self.reaction)

        if not self.diagnose:
            return state, {}
        fields = {self.names[key]: value
                  for key, value in self.diagnostics(channels).items()}
        return state, fields

    def update_diagnostics(self, fields: Mapping[str, Array]) -> None:
        """Store fields from `transform_with_diagnostics` in `output`."""
        for name, value in fields.items():
            self.output.set(name, value)

    def diagnostics(self, channels: ReactionChannels) -> dict:
        """Diagnostic fields keyed by "F", "E" (and "F2", "E2", "S")."""
        if self.same_isotope:
            # No net particle source; atoms lose atom_mom and gain ion_mom
            return {
                "F": channels.ion_mom - channels.atom_mom,
                "E": channels.ion_energy - channels.atom_energy,
            }
        return {
            "S": -channels.R,
            "F": -channels.atom_mom,
            "F2": -channels.ion_mom,
            "E": -channels.atom_energy,
            "E2": -channels.ion_energy,
        }

    def _diagnostic_docs(self) -> dict:
        i1, i2 = self.isotope1, self.isotope2
        docs = {
            "F": f"Momentum transfer to {i1} atoms due to CX with {i2}+ ions",
            "E": f"Energy transfer to {i1} atoms due to CX with {i2}+ ions",
        }
        if not self.same_isotope:
            docs["F2"] = f"Momentum transfer to {i2}+ ions due to CX with {i1} atoms"
            docs["E2"] = f"Energy transfer to {i2}+ ions due to CX with {i1} atoms"
            docs["S"] = f"Source of {i1} atoms due to CX with {i2}+ ions"
        return docs
