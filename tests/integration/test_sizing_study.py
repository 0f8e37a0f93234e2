"""
End-to-end GCB sizing study tests

Runs the reference unit (100 MVA, 13.8 kV generator behind a 120 MVA
GSU on a 10 GVA grid) through fault calculation, rating selection,
waveform sampling, reporting and persistence.
"""

import dataclasses

import pandas as pd
import pytest

from gcb_sizing import GCBSizingStudy, SizingConfig, FaultSource
from gcb_sizing.utils import ProjectStore


class TestReferenceStudy:
    """Reference unit at 50 ms contact parting, 10% margin, 60 Hz."""

    @pytest.fixture
    def study(self, sizing_config):
        return GCBSizingStudy(sizing_config)

    def test_default_config_matches_reference(self, sizing_config):
        default = SizingConfig()
        assert default.generator == sizing_config.generator
        assert default.gsu == sizing_config.gsu
        assert default.system == sizing_config.system
        assert default.contact_parting_time_ms == 50.0
        assert default.margin_pct == 10.0

    def test_system_source_governs(self, study):
        assert study.governing_source() is FaultSource.SYSTEM

    def test_selected_ratings(self, study):
        ratings = study.ratings()
        assert ratings.continuous_current_a.selected == 5000.0
        assert ratings.symmetrical_ka.selected == 50.0
        assert ratings.asymmetrical_ka.selected == pytest.approx(86.6)
        assert ratings.peak_ka.selected == pytest.approx(137.0)

    def test_waveform_uses_generator_result(self, study):
        trace = study.waveform()
        gen = study.generator_fault()
        assert trace.symmetrical_current_ka == gen.symmetrical_current_ka
        assert trace.time_constant_ms == gen.time_constant_ms
        assert len(trace) == 84

    def test_fault_table(self, study):
        df = study.fault_table()
        assert isinstance(df, pd.DataFrame)
        assert list(df.index) == ["System", "Generator"]
        assert df.loc["Generator", "symmetrical_ka"] == study.generator_fault().symmetrical_current_ka
        assert not df["dc_exceeds_model_range"].any()

    def test_rating_table(self, study):
        df = study.rating_table()
        assert list(df.index) == ["continuous_current_a", "symmetrical_ka", "asymmetrical_ka", "peak_ka"]
        assert bool(df["adequate"].all())

    def test_full_report(self, study):
        report = study.generate_full_report()
        assert report["project"] == "Unit 1"
        assert report["governing_source"] == "System"
        assert report["deficiencies"] == []
        assert report["table_exhausted"] is False
        assert report["dc_exceeds_model_range"] == []
        assert report["inputs"]["gsu_turns_ratio"] == pytest.approx(154.0 / 13.8)
        assert report["first_current_zero_ms"] is not None
        assert report["system_source"] == study.system_fault()

    def test_recomputation_is_deterministic(self, study):
        assert study.generate_full_report() == study.generate_full_report()

    def test_plot_waveform(self, study):
        fig = study.plot_waveform()
        ax = fig.axes[0]
        assert len(ax.lines) >= 4
        assert ax.get_xlabel() == "Time (ms)"


class TestOversizedUnit:
    """Large unit on a stiff grid exceeds the standard breaking table."""

    def test_table_exhaustion_reported(self, sizing_config):
        from gcb_sizing.equipment.specs import SystemSpec, TransformerSpec

        config = dataclasses.replace(
            sizing_config,
            gsu=TransformerSpec(1500.0, 12.0, 60.0, 500.0, 24.0),
            system=SystemSpec(short_circuit_capacity_mva=60000.0, xr_ratio=30.0),
        )
        report = GCBSizingStudy(config).generate_full_report()

        assert report["table_exhausted"] is True
        assert report["ratings"].symmetrical_ka.selected == 200.0
        assert "symmetrical_ka" in report["deficiencies"]


class TestDelayedCurrentZeroStudy:
    """Parting before fault inception drives DC above 100%."""

    @pytest.fixture
    def study(self, sizing_config):
        return GCBSizingStudy(dataclasses.replace(sizing_config, contact_parting_time_ms=-5.0))

    def test_generator_zero_skipping_reported(self, study, caplog):
        with caplog.at_level("WARNING", logger="gcb_sizing.sizing_study"):
            report = study.generate_full_report()

        assert report["generator_source"].current_zeros_skipped is True
        assert report["system_source"].current_zeros_skipped is False
        assert report["dc_exceeds_model_range"] == ["System", "Generator"]
        assert "delayed current zeros expected" in caplog.text

    def test_fault_table_marks_both_sources(self, study):
        df = study.fault_table()
        assert bool(df.loc["Generator", "current_zeros_skipped"])
        assert not bool(df.loc["System", "current_zeros_skipped"])
        assert bool(df["dc_exceeds_model_range"].all())


class TestNegligibleTimeConstant:
    """Generator X/R so low that τ rounds to 0 ms."""

    @pytest.fixture
    def study(self, sizing_config):
        from gcb_sizing.equipment.specs import GeneratorSpec

        generator = GeneratorSpec(100.0, 13.8, 15.0, 0.001)
        return GCBSizingStudy(dataclasses.replace(sizing_config, generator=generator))

    def test_time_constant_rounds_to_zero(self, study):
        assert study.generator_fault().time_constant_ms == 0.0

    def test_waveform_has_no_dc(self, study):
        trace = study.waveform()
        assert len(trace) == 84
        assert all(s.dc_ka == 0.0 for s in trace)

    def test_report_and_plot(self, study):
        report = study.generate_full_report()
        assert report["first_current_zero_ms"] == pytest.approx(1000.0 / 120.0, abs=1e-6)
        fig = study.plot_waveform()
        assert len(fig.axes[0].lines) >= 4


class TestConfigValidation:

    def test_rejects_negative_margin(self):
        with pytest.raises(ValueError):
            SizingConfig(margin_pct=-1.0)

    def test_accepts_negative_parting_time(self):
        assert SizingConfig(contact_parting_time_ms=-10.0).contact_parting_time_ms == -10.0

    def test_rejects_non_finite_parting_time(self):
        with pytest.raises(ValueError):
            SizingConfig(contact_parting_time_ms=float("nan"))

    def test_rejects_zero_frequency(self):
        with pytest.raises(ValueError):
            SizingConfig(frequency_hz=0.0)


def test_save_load_recompute(tmp_path, sizing_config):
    """Saved project reproduces the same report"""
    store = ProjectStore(directory=str(tmp_path))
    store.save(sizing_config)

    restored = GCBSizingStudy(store.load("Unit 1"))
    original = GCBSizingStudy(sizing_config)

    assert restored.config == original.config
    assert restored.generate_full_report() == original.generate_full_report()
