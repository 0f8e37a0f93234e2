"""Standard rating selection for generator circuit breakers.

Takes the system-source and generator-source fault results, applies the
design margin, and maps the governing values onto standard ratings:

    Continuous current:      I_n = S / (√3 · V), next 500 A step
    Symmetrical breaking:    first standard value ≥ margin-applied current
    Asymmetrical breaking:   I_sc × 1.732
    Peak making:             I_sc × 2.74

Asymmetrical and peak selections are derived rather than looked up, so
they can fall short of the margin-applied calculation. Callers should
check find_sizing_deficiencies() before accepting a selection.
"""

import logging
import math
from dataclasses import dataclass
from typing import List

import numpy as np

from gcb_sizing.equipment.specs import GeneratorSpec
from gcb_sizing.faults.solver import FaultResult
from gcb_sizing.ratings.standards import (
    ASYMMETRICAL_FACTOR,
    CONTINUOUS_CURRENT_STEP_A,
    PEAK_FACTOR,
    STANDARD_BREAKING_CURRENTS_KA,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingValue:
    """One rated parameter.

    Attributes:
        calculated: Value from the fault study
        margin_applied: Calculated value including design margin
        selected: Standard or derived rating
    """
    calculated: float
    margin_applied: float
    selected: float

    @property
    def is_adequate(self) -> bool:
        return self.selected >= self.margin_applied


@dataclass(frozen=True)
class RatingSelection:
    """GCB rating selection.

    Attributes:
        continuous_current_a: Rated normal current (A)
        symmetrical_ka: Symmetrical short-circuit breaking current (kA)
        asymmetrical_ka: Asymmetrical breaking current (kA)
        peak_ka: Peak making (closing and latching) current (kA)
        margin_pct: Design margin applied (%)
        table_exhausted: Margin-applied symmetrical current exceeds the
            largest standard rating; selection needs engineering review
    """
    continuous_current_a: RatingValue
    symmetrical_ka: RatingValue
    asymmetrical_ka: RatingValue
    peak_ka: RatingValue
    margin_pct: float
    table_exhausted: bool = False

    def as_dict(self) -> dict:
        return {
            'continuous_current_a': self.continuous_current_a,
            'symmetrical_ka': self.symmetrical_ka,
            'asymmetrical_ka': self.asymmetrical_ka,
            'peak_ka': self.peak_ka,
        }


def margin_factor(margin_pct: float) -> float:
    """Multiplier for a percentage design margin."""
    if not margin_pct >= 0:
        raise ValueError(f"Design margin must be >= 0 %, got {margin_pct!r}")
    return 1.0 + margin_pct / 100.0


def rated_continuous_current_a(generator: GeneratorSpec) -> float:
    """Generator rated current I_n = S / (√3 · V) (A)."""
    return (generator.rated_power_mva * 1000.0) / (np.sqrt(3) * generator.rated_voltage_kv)


def round_up_continuous_current(current_a: float) -> float:
    """Smallest multiple of 500 A at or above current_a."""
    return math.ceil(current_a / CONTINUOUS_CURRENT_STEP_A) * CONTINUOUS_CURRENT_STEP_A


def exceeds_standard_table(current_ka: float) -> bool:
    return current_ka > STANDARD_BREAKING_CURRENTS_KA[-1]


def select_standard_breaking_current(current_ka: float) -> float:
    """First standard breaking current ≥ current_ka.

    Falls back to the largest standard value when none qualifies; use
    exceeds_standard_table() to detect that case.
    """
    for rating in STANDARD_BREAKING_CURRENTS_KA:
        if rating >= current_ka:
            return rating
    return STANDARD_BREAKING_CURRENTS_KA[-1]


def select_ratings(
    system_result: FaultResult,
    generator_result: FaultResult,
    generator: GeneratorSpec,
    margin_pct: float,
) -> RatingSelection:
    """Select GCB ratings from both fault sources.

    Args:
        system_result: System-source fault result
        generator_result: Generator-source fault result
        generator: Generator nameplate
        margin_pct: Design margin (%)

    Returns:
        RatingSelection with calculated, margin-applied and selected values
    """
    factor = margin_factor(margin_pct)

    # Continuous current
    continuous_a = float(rated_continuous_current_a(generator))
    continuous_margin_a = continuous_a * factor
    continuous_selected_a = round_up_continuous_current(continuous_margin_a)

    # Governing fault currents
    sym_ka = max(system_result.symmetrical_current_ka, generator_result.symmetrical_current_ka)
    asym_ka = max(system_result.asymmetrical_current_ka, generator_result.asymmetrical_current_ka)
    peak_ka = max(system_result.peak_current_ka, generator_result.peak_current_ka)

    sym_margin_ka = sym_ka * factor
    sym_selected_ka = select_standard_breaking_current(sym_margin_ka)

    table_exhausted = exceeds_standard_table(sym_margin_ka)
    if table_exhausted:
        logger.warning(
            f"Margin-applied symmetrical current {sym_margin_ka:.2f} kA exceeds the "
            f"largest standard rating {STANDARD_BREAKING_CURRENTS_KA[-1]} kA; "
            f"manual engineering review required"
        )

    return RatingSelection(
        continuous_current_a=RatingValue(
            calculated=continuous_a,
            margin_applied=continuous_margin_a,
            selected=continuous_selected_a,
        ),
        symmetrical_ka=RatingValue(
            calculated=sym_ka,
            margin_applied=sym_margin_ka,
            selected=sym_selected_ka,
        ),
        asymmetrical_ka=RatingValue(
            calculated=asym_ka,
            margin_applied=asym_ka * factor,
            selected=sym_selected_ka * ASYMMETRICAL_FACTOR,
        ),
        peak_ka=RatingValue(
            calculated=peak_ka,
            margin_applied=peak_ka * factor,
            selected=sym_selected_ka * PEAK_FACTOR,
        ),
        margin_pct=margin_pct,
        table_exhausted=table_exhausted,
    )


def find_sizing_deficiencies(selection: RatingSelection) -> List[str]:
    """List rated parameters that do not cover the margin-applied value.

    Args:
        selection: Rating selection to verify

    Returns:
        Parameter names, e.g. ['symmetrical_ka', 'peak_ka']; empty if adequate
    """
    # An exhausted table always leaves the symmetrical rating short
    return [
        name for name, value in selection.as_dict().items()
        if not value.is_adequate
    ]
