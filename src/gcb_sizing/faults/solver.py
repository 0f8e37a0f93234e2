"""Fault current solver for system-source and generator-source faults.

Computes the currents a generator circuit breaker must make and break
for a three-phase fault, from a resolved R + jX path impedance.

Key equations:
    I_sym  = V / (√3 · |Z|)                      (kA, V in kV, Z in Ω)
    τ      = X / (ω · R)
    DC%    = 100 · exp(-t_cp / τ)
    I_dc   = √2 · I_sym · DC% / 100
    I_asym = sqrt(I_sym² + I_dc²)

Peak (making) current:
    System source:     i_p = √2 · I_sym · (1 + exp(-10 ms / τ))
    Generator source:  i_p = √2 · I_sym · 2

The generator path keeps the undamped maximum because its time constant
is long compared to the first half-cycle.

Standards:
    IEC/IEEE 62271-37-013: AC generator circuit-breakers
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum

from gcb_sizing.equipment.specs import GeneratorSpec, SystemSpec, TransformerSpec
from gcb_sizing.faults.impedance import (
    resolve_generator_path_impedance,
    resolve_system_path_impedance,
)


NOMINAL_FREQUENCY_HZ = 60.0
HALF_CYCLE_MS = 10.0  # Making instant used by the system-source peak estimate
RESULT_DECIMALS = 2


class FaultSource(Enum):
    """Origin of the fault current flowing through the GCB."""
    SYSTEM = "System"
    GENERATOR = "Generator"


class PeakMethod(Enum):
    """Peak making current approximation."""
    HALF_CYCLE_DECAY = "half_cycle_decay"
    UNDAMPED = "undamped"


@dataclass(frozen=True)
class FaultResult:
    """Fault currents for one source at contact parting.

    Attributes:
        source: Fault current source
        symmetrical_current_ka: AC symmetrical RMS current (kA)
        dc_component_pct: DC component at contact parting (% of AC peak)
        peak_current_ka: Peak making current (kA)
        asymmetrical_current_ka: Total asymmetrical breaking current (kA)
        time_constant_ms: DC time constant (ms)
        current_zeros_skipped: Delayed current zeros expected
    """
    source: FaultSource
    symmetrical_current_ka: float
    dc_component_pct: float
    peak_current_ka: float
    asymmetrical_current_ka: float
    time_constant_ms: float
    current_zeros_skipped: bool = False

    @property
    def breaking_capacity_required_ka(self) -> float:
        return self.asymmetrical_current_ka

    @property
    def dc_exceeds_model_range(self) -> bool:
        """DC above 100% is outside this model's validity range."""
        return self.dc_component_pct > 100.0


def angular_frequency(frequency_hz: float) -> float:
    """ω = 2πf (rad/s)."""
    if not frequency_hz > 0:
        raise ValueError(f"Frequency must be > 0 Hz, got {frequency_hz!r}")
    return 2 * np.pi * frequency_hz


def dc_component_pct(contact_parting_time_ms: float, time_constant_ms: float) -> float:
    """DC component remaining at contact parting (% of AC peak)."""
    return 100.0 * np.exp(-contact_parting_time_ms / time_constant_ms)


def solve_fault(
    r_ohm: float,
    x_ohm: float,
    base_kv: float,
    contact_parting_time_ms: float,
    omega: float,
    source: FaultSource,
    peak_method: PeakMethod,
) -> FaultResult:
    """Solve fault currents for one path impedance.

    Args:
        r_ohm: Path resistance (Ω)
        x_ohm: Path reactance (Ω)
        base_kv: Pre-fault voltage at the GCB (kV, line-to-line)
        contact_parting_time_ms: Contact parting time after fault inception (ms)
        omega: Angular frequency (rad/s)
        source: Source tag for the result
        peak_method: Peak making current approximation

    Returns:
        FaultResult rounded for presentation
    """
    if not r_ohm > 0:
        raise ValueError(
            f"Path resistance must be > 0 Ω (time constant undefined), got {r_ohm!r}"
        )
    if not x_ohm > 0:
        raise ValueError(f"Path reactance must be > 0 Ω, got {x_ohm!r}")
    if not base_kv > 0:
        raise ValueError(f"Base voltage must be > 0 kV, got {base_kv!r}")
    if not omega > 0:
        raise ValueError(f"Angular frequency must be > 0, got {omega!r}")
    # Negative parting times are accepted; they drive DC% above 100
    if not np.isfinite(contact_parting_time_ms):
        raise ValueError(
            f"Contact parting time must be finite, got {contact_parting_time_ms!r}"
        )

    z_ohm = np.sqrt(r_ohm**2 + x_ohm**2)
    i_sym = base_kv / (np.sqrt(3) * z_ohm)

    tau_ms = (x_ohm / (omega * r_ohm)) * 1000.0
    dc_pct = dc_component_pct(contact_parting_time_ms, tau_ms)

    i_dc = np.sqrt(2) * i_sym * (dc_pct / 100.0)
    i_asym = np.sqrt(i_sym**2 + i_dc**2)

    if peak_method is PeakMethod.HALF_CYCLE_DECAY:
        i_peak = np.sqrt(2) * i_sym * (1 + np.exp(-HALF_CYCLE_MS / tau_ms))
    else:
        i_peak = np.sqrt(2) * i_sym * 2

    dc_pct = round(float(dc_pct), RESULT_DECIMALS)
    zeros_skipped = source is FaultSource.GENERATOR and dc_pct > 100.0

    return FaultResult(
        source=source,
        symmetrical_current_ka=round(float(i_sym), RESULT_DECIMALS),
        dc_component_pct=dc_pct,
        peak_current_ka=round(float(i_peak), RESULT_DECIMALS),
        asymmetrical_current_ka=round(float(i_asym), RESULT_DECIMALS),
        time_constant_ms=round(float(tau_ms), RESULT_DECIMALS),
        current_zeros_skipped=bool(zeros_skipped),
    )


def solve_system_source_fault(
    generator: GeneratorSpec,
    transformer: TransformerSpec,
    system: SystemSpec,
    contact_parting_time_ms: float,
    frequency_hz: float = NOMINAL_FREQUENCY_HZ,
) -> FaultResult:
    """Fault current fed from the grid through the GSU.

    Args:
        generator: Generator nameplate
        transformer: GSU transformer nameplate
        system: Upstream grid equivalent
        contact_parting_time_ms: Contact parting time (ms)
        frequency_hz: System frequency (Hz)

    Returns:
        System-source FaultResult
    """
    r_ohm, x_ohm = resolve_system_path_impedance(generator, transformer, system)
    return solve_fault(
        r_ohm,
        x_ohm,
        transformer.secondary_voltage_kv,
        contact_parting_time_ms,
        angular_frequency(frequency_hz),
        FaultSource.SYSTEM,
        PeakMethod.HALF_CYCLE_DECAY,
    )


def solve_generator_source_fault(
    generator: GeneratorSpec,
    contact_parting_time_ms: float,
    frequency_hz: float = NOMINAL_FREQUENCY_HZ,
) -> FaultResult:
    """Fault current fed by the generator itself.

    Args:
        generator: Generator nameplate
        contact_parting_time_ms: Contact parting time (ms)
        frequency_hz: System frequency (Hz)

    Returns:
        Generator-source FaultResult
    """
    r_ohm, x_ohm = resolve_generator_path_impedance(generator)
    return solve_fault(
        r_ohm,
        x_ohm,
        generator.rated_voltage_kv,
        contact_parting_time_ms,
        angular_frequency(frequency_hz),
        FaultSource.GENERATOR,
        PeakMethod.UNDAMPED,
    )
