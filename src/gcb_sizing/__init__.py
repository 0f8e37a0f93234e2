"""GCB Sizing Framework.

Generator circuit breaker sizing per IEC/IEEE 62271-37-013: fault
currents from the system and generator sources, standard rating
selection, and fault current waveforms.
"""

__version__ = "0.1.0"

from gcb_sizing.equipment import (
    GeneratorSpec,
    TransformerSpec,
    UatSpec,
    SystemSpec,
)
from gcb_sizing.faults import (
    FaultSource,
    FaultResult,
    WaveformSample,
    solve_system_source_fault,
    solve_generator_source_fault,
    sample_waveform,
)
from gcb_sizing.ratings import RatingSelection, select_ratings, find_sizing_deficiencies
from gcb_sizing.sizing_study import SizingConfig, GCBSizingStudy

__all__ = [
    "GeneratorSpec",
    "TransformerSpec",
    "UatSpec",
    "SystemSpec",
    "FaultSource",
    "FaultResult",
    "WaveformSample",
    "solve_system_source_fault",
    "solve_generator_source_fault",
    "sample_waveform",
    "RatingSelection",
    "select_ratings",
    "find_sizing_deficiencies",
    "SizingConfig",
    "GCBSizingStudy",
]
