"""Short-circuit current models for generator circuit breaker duty.

This module provides the fault current path from nameplate data to
breaker duty, including:
- Impedance referral and R/X combination per fault path
- Symmetrical, asymmetrical and peak fault currents
- DC time constant and delayed current zeros
- Time-domain waveform sampling
"""

from .impedance import (
    split_impedance,
    system_impedance_ohm,
    transformer_impedance_ohm,
    resolve_system_path_impedance,
    resolve_generator_path_impedance,
)

from .solver import (
    FaultSource,
    FaultResult,
    PeakMethod,
    NOMINAL_FREQUENCY_HZ,
    angular_frequency,
    dc_component_pct,
    solve_fault,
    solve_system_source_fault,
    solve_generator_source_fault,
)

from .waveform import (
    WaveformSample,
    WaveformTrace,
    sample_waveform,
    first_current_zero_ms,
)

__all__ = [
    # Impedance
    'split_impedance',
    'system_impedance_ohm',
    'transformer_impedance_ohm',
    'resolve_system_path_impedance',
    'resolve_generator_path_impedance',
    # Solver
    'FaultSource',
    'FaultResult',
    'PeakMethod',
    'NOMINAL_FREQUENCY_HZ',
    'angular_frequency',
    'dc_component_pct',
    'solve_fault',
    'solve_system_source_fault',
    'solve_generator_source_fault',
    # Waveform
    'WaveformSample',
    'WaveformTrace',
    'sample_waveform',
    'first_current_zero_ms',
]
