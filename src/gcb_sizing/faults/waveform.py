"""Time-domain fault current waveform for visualization.

Worst-case short-circuit current as a symmetrical AC term plus a
decaying DC offset:

    i_ac(t) = √2 · I_sym · sin(ωt)
    i_dc(t) = √2 · I_sym · exp(-t/τ)
    i(t)    = i_ac(t) + i_dc(t)

Samples are produced on demand at 1 ms resolution over five cycles.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np
import pandas as pd
from scipy.optimize import brentq

from gcb_sizing.faults.solver import NOMINAL_FREQUENCY_HZ


WAVEFORM_CYCLES = 5
SAMPLE_STEP_MS = 1.0
ZERO_SEARCH_STEP_MS = 0.1


def _dc_decay(t_ms, time_constant_ms):
    """exp(-t/τ); τ = 0 means the DC offset has already decayed."""
    t_ms = np.asarray(t_ms, dtype=float)
    if time_constant_ms == 0:
        return np.zeros_like(t_ms)
    return np.exp(-t_ms / time_constant_ms)


@dataclass(frozen=True)
class WaveformSample:
    """Fault current at one instant (kA)."""
    time_ms: float
    current_ka: float
    dc_ka: float
    envelope_pos_ka: float
    envelope_neg_ka: float


class WaveformTrace:
    """Finite, restartable sequence of WaveformSample.

    Samples are computed lazily on each iteration; nothing is cached, so
    the trace can be iterated any number of times.
    """

    def __init__(
        self,
        symmetrical_current_ka: float,
        time_constant_ms: float,
        frequency_hz: float = NOMINAL_FREQUENCY_HZ,
    ):
        """Initialize waveform trace.

        Args:
            symmetrical_current_ka: AC symmetrical RMS current (kA)
            time_constant_ms: DC time constant (ms), 0 for no DC offset
            frequency_hz: System frequency (Hz)
        """
        if not symmetrical_current_ka >= 0:
            raise ValueError(
                f"Symmetrical current must be >= 0 kA, got {symmetrical_current_ka!r}"
            )
        if not time_constant_ms >= 0:
            raise ValueError(f"Time constant must be >= 0 ms, got {time_constant_ms!r}")
        if not frequency_hz > 0:
            raise ValueError(f"Frequency must be > 0 Hz, got {frequency_hz!r}")

        self.symmetrical_current_ka = symmetrical_current_ka
        self.time_constant_ms = time_constant_ms
        self.frequency_hz = frequency_hz

        self.omega = 2 * np.pi * frequency_hz
        self.ac_peak_ka = np.sqrt(2) * symmetrical_current_ka
        self.duration_ms = WAVEFORM_CYCLES * (1000.0 / frequency_hz)

    def __len__(self) -> int:
        return int(math.floor(self.duration_ms / SAMPLE_STEP_MS)) + 1

    def __iter__(self) -> Iterator[WaveformSample]:
        for index in range(len(self)):
            yield self.sample_at(index * SAMPLE_STEP_MS)

    def __getitem__(self, index: int) -> WaveformSample:
        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError("waveform sample index out of range")
        return self.sample_at(index * SAMPLE_STEP_MS)

    def sample_at(self, time_ms: float) -> WaveformSample:
        """Compute the waveform at one instant.

        Args:
            time_ms: Time after fault inception (ms)
        """
        ac = self.ac_peak_ka * np.sin(self.omega * time_ms / 1000.0)
        dc = self.ac_peak_ka * _dc_decay(time_ms, self.time_constant_ms)
        return WaveformSample(
            time_ms=float(time_ms),
            current_ka=float(ac + dc),
            dc_ka=float(dc),
            envelope_pos_ka=float(dc + self.ac_peak_ka),
            envelope_neg_ka=float(dc - self.ac_peak_ka),
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Vectorised trace as a DataFrame indexed by time (ms)."""
        t_ms = np.arange(len(self)) * SAMPLE_STEP_MS
        ac = self.ac_peak_ka * np.sin(self.omega * t_ms / 1000.0)
        dc = self.ac_peak_ka * _dc_decay(t_ms, self.time_constant_ms)

        df = pd.DataFrame({
            'time_ms': t_ms,
            'current_ka': ac + dc,
            'dc_ka': dc,
            'envelope_pos_ka': dc + self.ac_peak_ka,
            'envelope_neg_ka': dc - self.ac_peak_ka,
        })
        return df.set_index('time_ms')


def sample_waveform(
    symmetrical_current_ka: float,
    time_constant_ms: float,
    frequency_hz: float = NOMINAL_FREQUENCY_HZ,
) -> WaveformTrace:
    """Sample the worst-case fault current over five cycles.

    Args:
        symmetrical_current_ka: AC symmetrical RMS current (kA)
        time_constant_ms: DC time constant (ms)
        frequency_hz: System frequency (Hz)

    Returns:
        WaveformTrace with floor(5 · 1000/f) + 1 samples, 1 ms apart
    """
    return WaveformTrace(symmetrical_current_ka, time_constant_ms, frequency_hz)


def first_current_zero_ms(
    time_constant_ms: float,
    frequency_hz: float = NOMINAL_FREQUENCY_HZ,
    dc_offset_pct: float = 100.0,
    horizon_ms: Optional[float] = None,
) -> Optional[float]:
    """Find the first current zero of the AC + DC waveform.

    Works on the waveform normalised to the AC peak:

        f(t) = sin(ωt) + (DC%/100) · exp(-t/τ)

    A sign change is bracketed on a 0.1 ms grid and refined with
    Brent's method.

    Args:
        time_constant_ms: DC time constant (ms)
        frequency_hz: System frequency (Hz)
        dc_offset_pct: Initial DC offset (% of AC peak)
        horizon_ms: Search window (ms), default five cycles

    Returns:
        Time of the first current zero (ms), or None if the current does
        not cross zero within the horizon (delayed current zero)
    """
    if not time_constant_ms >= 0:
        raise ValueError(f"Time constant must be >= 0 ms, got {time_constant_ms!r}")
    if not frequency_hz > 0:
        raise ValueError(f"Frequency must be > 0 Hz, got {frequency_hz!r}")
    if not dc_offset_pct >= 0:
        raise ValueError(f"DC offset must be >= 0 %, got {dc_offset_pct!r}")

    if horizon_ms is None:
        horizon_ms = WAVEFORM_CYCLES * (1000.0 / frequency_hz)

    omega = 2 * np.pi * frequency_hz
    offset = dc_offset_pct / 100.0

    def normalised_current(t_ms):
        return np.sin(omega * t_ms / 1000.0) + offset * _dc_decay(t_ms, time_constant_ms)

    # Start one step in so a pure AC waveform does not report t = 0
    t_grid = np.arange(ZERO_SEARCH_STEP_MS, horizon_ms + ZERO_SEARCH_STEP_MS, ZERO_SEARCH_STEP_MS)
    values = normalised_current(t_grid)

    exact = np.flatnonzero(values == 0.0)
    crossings = np.flatnonzero(np.sign(values[:-1]) * np.sign(values[1:]) < 0)

    candidates = []
    if exact.size:
        candidates.append(float(t_grid[exact[0]]))
    if crossings.size:
        i = crossings[0]
        candidates.append(float(brentq(normalised_current, t_grid[i], t_grid[i + 1])))

    if not candidates:
        return None
    return min(candidates)
