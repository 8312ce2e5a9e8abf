"""Physical constants and atomic data for hydrogen charge exchange.

All values are from CODATA 2018 recommended values unless otherwise noted.
SI units are used throughout.
"""

from typing import Final

# Particle properties
QE: Final[float] = 1.602176634e-19  # Elementary charge [C]
MI: Final[float] = 1.67262192369e-27  # Proton mass [kg]

# =============================================================================
# Hydrogen isotopes
# =============================================================================

ISOTOPES: Final[tuple] = ("h", "d", "t")

# Atomic mass numbers used by the fluid equations (proton masses)
ISOTOPE_MASS: Final[dict] = {
    "h": 1.0,
    "d": 2.0,
    "t": 3.0,
}

# =============================================================================
# Charge exchange rate coefficient data
# =============================================================================

# AMJUEL H.2 reaction 3.1.8, p + H(1s) -> H(1s) + p (Amjuel p43)
# ln<sigma*v> = sum_n b_n * (ln T)^n, T in eV, <sigma*v> in cm^3/s
AMJUEL_CX_3_1_8: Final[tuple] = (
    -1.850280000000e01,
    3.708409000000e-01,
    7.949876000000e-03,
    -6.143769000000e-04,
    -4.698969000000e-04,
    -4.096807000000e-04,
    1.440382000000e-04,
    -1.514243000000e-05,
    5.122435000000e-07,
)

# Fit is for the p + H system, so effective temperatures are referred to
# the proton mass
CX_REFERENCE_MASS: Final[float] = 1.0

# Effective temperatures are clamped to this range before evaluation [eV]
CX_FIT_TEMPERATURE_MIN: Final[float] = 0.1
CX_FIT_TEMPERATURE_MAX: Final[float] = 2.0e4

CM3_TO_M3: Final[float] = 1.0e-6

# =============================================================================
# Floors for normalized fields
# =============================================================================

DENSITY_FLOOR: Final[float] = 1.0e-5
TEMPERATURE_FLOOR: Final[float] = 1.0e-10
