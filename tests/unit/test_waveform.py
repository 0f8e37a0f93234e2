"""
Unit tests for the fault current waveform sampler
"""

import math

import numpy as np
import pandas as pd
import pytest

from gcb_sizing.faults.waveform import (
    WaveformSample,
    WaveformTrace,
    sample_waveform,
    first_current_zero_ms,
)


class TestSampleWaveform:
    """Test the five-cycle, 1 ms waveform trace."""

    @pytest.fixture
    def trace(self):
        return sample_waveform(20.0, 50.0, 60.0)

    def test_sample_count_60hz(self, trace):
        """floor(5 · 1000/60) + 1 = 84 samples"""
        assert len(trace) == 84
        assert len(list(trace)) == 84

    def test_sample_count_50hz(self):
        """Boundary sample at exactly 100 ms is included"""
        trace = sample_waveform(20.0, 50.0, 50.0)
        assert len(trace) == 101
        assert list(trace)[-1].time_ms == 100.0

    def test_one_ms_spacing(self, trace):
        times = [s.time_ms for s in trace]
        assert times[0] == 0.0
        assert np.allclose(np.diff(times), 1.0)

    def test_first_sample_fully_offset(self, trace):
        """At t = 0 the DC term equals the AC peak and the AC term is zero"""
        first = trace[0]
        assert isinstance(first, WaveformSample)
        assert first.dc_ka == pytest.approx(math.sqrt(2) * 20.0)
        assert first.current_ka == pytest.approx(first.dc_ka)

    def test_envelope_symmetric_about_dc(self, trace):
        peak = math.sqrt(2) * 20.0
        for s in trace:
            assert s.envelope_pos_ka - s.dc_ka == pytest.approx(peak)
            assert s.dc_ka - s.envelope_neg_ka == pytest.approx(peak)
            assert s.envelope_neg_ka - 1e-9 <= s.current_ka <= s.envelope_pos_ka + 1e-9

    def test_restartable(self, trace):
        """Iterating twice gives identical samples"""
        assert list(trace) == list(trace)

    def test_negative_index(self, trace):
        assert trace[-1] == list(trace)[-1]
        with pytest.raises(IndexError):
            trace[84]

    def test_dataframe_matches_samples(self, trace):
        df = trace.to_dataframe()
        assert isinstance(df, pd.DataFrame)
        assert len(df) == len(trace)
        sample = trace[37]
        row = df.loc[37.0]
        assert row['current_ka'] == pytest.approx(sample.current_ka)
        assert row['dc_ka'] == pytest.approx(sample.dc_ka)

    def test_zero_current_gives_flat_trace(self):
        trace = sample_waveform(0.0, 50.0, 60.0)
        assert all(s.current_ka == 0.0 for s in trace)

    @pytest.mark.parametrize("i_sym, tau, f", [(-1.0, 50.0, 60.0), (20.0, -1.0, 60.0), (20.0, 50.0, 0.0)])
    def test_rejects_invalid_inputs(self, i_sym, tau, f):
        with pytest.raises(ValueError):
            WaveformTrace(i_sym, tau, f)

    def test_zero_time_constant_has_no_dc(self):
        """τ = 0: DC offset already decayed, pure AC trace"""
        trace = sample_waveform(20.0, 0.0, 60.0)
        assert len(trace) == 84
        assert all(s.dc_ka == 0.0 for s in trace)
        assert trace[0].current_ka == pytest.approx(0.0)
        df = trace.to_dataframe()
        assert (df["dc_ka"] == 0.0).all()
        assert df["envelope_pos_ka"].iloc[0] == pytest.approx(math.sqrt(2) * 20.0)


class TestFirstCurrentZero:
    """Test delayed current zero search."""

    def test_fully_offset_zero_in_first_cycle(self):
        """With 100% DC the first zero lies between T/2 and 3T/4"""
        t0 = first_current_zero_ms(50.0, 60.0)
        assert t0 is not None
        assert 1000.0 / 120.0 < t0 < 750.0 / 60.0

    def test_root_is_a_zero(self):
        tau = 50.0
        t0 = first_current_zero_ms(tau, 60.0)
        omega = 2 * math.pi * 60.0
        value = math.sin(omega * t0 / 1000.0) + math.exp(-t0 / tau)
        assert value == pytest.approx(0.0, abs=1e-9)

    def test_symmetrical_current_zero_at_half_cycle(self):
        """No DC offset: first zero at T/2"""
        t0 = first_current_zero_ms(50.0, 50.0, dc_offset_pct=0.0)
        assert t0 == pytest.approx(10.0, abs=1e-6)

    def test_zero_time_constant_gives_half_cycle(self):
        t0 = first_current_zero_ms(0.0, 60.0)
        assert t0 == pytest.approx(1000.0 / 120.0, abs=1e-6)

    def test_delayed_zero_returns_none(self):
        """DC offset above the AC peak with slow decay: no zero in five cycles"""
        assert first_current_zero_ms(1000.0, 60.0, dc_offset_pct=300.0) is None

    def test_longer_time_constant_delays_zero(self):
        fast = first_current_zero_ms(20.0, 60.0)
        slow = first_current_zero_ms(200.0, 60.0)
        assert slow > fast
