"""GCB rating selection.

Maps calculated fault and load currents onto standard breaker ratings
with a design margin.
"""

from .standards import (
    STANDARD_BREAKING_CURRENTS_KA,
    CONTINUOUS_CURRENT_STEP_A,
    ASYMMETRICAL_FACTOR,
    PEAK_FACTOR,
)

from .selector import (
    RatingValue,
    RatingSelection,
    select_ratings,
    select_standard_breaking_current,
    round_up_continuous_current,
    rated_continuous_current_a,
    exceeds_standard_table,
    find_sizing_deficiencies,
)

__all__ = [
    # Standard values
    'STANDARD_BREAKING_CURRENTS_KA',
    'CONTINUOUS_CURRENT_STEP_A',
    'ASYMMETRICAL_FACTOR',
    'PEAK_FACTOR',
    # Selection
    'RatingValue',
    'RatingSelection',
    'select_ratings',
    'select_standard_breaking_current',
    'round_up_continuous_current',
    'rated_continuous_current_a',
    'exceeds_standard_table',
    'find_sizing_deficiencies',
]
