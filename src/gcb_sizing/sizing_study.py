"""GCB Sizing Study Configuration and Orchestration.

Ties the equipment data, fault current solver, rating selector and
waveform sampler into one study:

    Nameplates  →  Impedance paths  →  Fault results (System, Generator)
                                          ├──→  Rating selection
                                          └──→  Waveform (generator source)

Every result is recomputed from the immutable configuration on request.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Optional

import pandas as pd

from gcb_sizing.equipment.specs import (
    GeneratorSpec, TransformerSpec, UatSpec, SystemSpec,
    GENERATOR_100MVA_13_8KV, GSU_120MVA_154KV_13_8KV,
    UAT_10MVA_4_16KV, GRID_10000MVA,
)
from gcb_sizing.faults.solver import (
    FaultResult, FaultSource, NOMINAL_FREQUENCY_HZ,
    solve_system_source_fault, solve_generator_source_fault,
)
from gcb_sizing.faults.waveform import WaveformTrace, sample_waveform, first_current_zero_ms
from gcb_sizing.ratings.selector import (
    RatingSelection, select_ratings, find_sizing_deficiencies,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Study Configuration
# =============================================================================

@dataclass(frozen=True)
class SizingConfig:
    """Complete GCB sizing study input.

    Attributes:
        name: Project name/identifier
        generator: Generator nameplate
        gsu: Generator step-up transformer nameplate
        uat: Unit auxiliary transformer nameplate
        system: Upstream grid equivalent
        contact_parting_time_ms: Breaker contact parting time (ms)
        margin_pct: Design margin on calculated currents (%)
        frequency_hz: System frequency (Hz)
    """
    name: str = "GCB Sizing Project - 001"
    generator: GeneratorSpec = field(default=GENERATOR_100MVA_13_8KV)
    gsu: TransformerSpec = field(default=GSU_120MVA_154KV_13_8KV)
    uat: UatSpec = field(default=UAT_10MVA_4_16KV)
    system: SystemSpec = field(default=GRID_10000MVA)
    contact_parting_time_ms: float = 50.0
    margin_pct: float = 10.0
    frequency_hz: float = NOMINAL_FREQUENCY_HZ

    def __post_init__(self):
        if not math.isfinite(self.contact_parting_time_ms):
            raise ValueError(
                f"Contact parting time must be finite, got {self.contact_parting_time_ms!r}"
            )
        if not self.margin_pct >= 0:
            raise ValueError(f"Design margin must be >= 0 %, got {self.margin_pct!r}")
        if not self.frequency_hz > 0:
            raise ValueError(f"Frequency must be > 0 Hz, got {self.frequency_hz!r}")


class GCBSizingStudy:
    """Generator circuit breaker sizing study.

    Evaluates:
    - System-source fault (grid through GSU)
    - Generator-source fault
    - Standard rating selection with margin
    - Generator-source current waveform

    Usage:
        study = GCBSizingStudy(SizingConfig(name="Unit 1"))
        report = study.generate_full_report()
    """

    def __init__(self, config: SizingConfig):
        """Initialize study.

        Args:
            config: Study configuration
        """
        self.config = config

    def system_fault(self) -> FaultResult:
        c = self.config
        return solve_system_source_fault(
            c.generator, c.gsu, c.system, c.contact_parting_time_ms, c.frequency_hz
        )

    def generator_fault(self) -> FaultResult:
        c = self.config
        return solve_generator_source_fault(
            c.generator, c.contact_parting_time_ms, c.frequency_hz
        )

    def ratings(self) -> RatingSelection:
        return select_ratings(
            self.system_fault(),
            self.generator_fault(),
            self.config.generator,
            self.config.margin_pct,
        )

    def waveform(self) -> WaveformTrace:
        """Generator-source current waveform over five cycles."""
        result = self.generator_fault()
        return sample_waveform(
            result.symmetrical_current_ka,
            result.time_constant_ms,
            self.config.frequency_hz,
        )

    def governing_source(self) -> FaultSource:
        """Source with the higher symmetrical current (system on a tie)."""
        sys_result = self.system_fault()
        gen_result = self.generator_fault()
        if gen_result.symmetrical_current_ka > sys_result.symmetrical_current_ka:
            return FaultSource.GENERATOR
        return FaultSource.SYSTEM

    def fault_table(self) -> pd.DataFrame:
        """Fault results per source, one row each."""
        rows = []
        for result in (self.system_fault(), self.generator_fault()):
            rows.append({
                'source': result.source.value,
                'symmetrical_ka': result.symmetrical_current_ka,
                'dc_component_pct': result.dc_component_pct,
                'asymmetrical_ka': result.asymmetrical_current_ka,
                'peak_ka': result.peak_current_ka,
                'time_constant_ms': result.time_constant_ms,
                'current_zeros_skipped': result.current_zeros_skipped,
                'dc_exceeds_model_range': result.dc_exceeds_model_range,
            })
        return pd.DataFrame(rows).set_index('source')

    def rating_table(self) -> pd.DataFrame:
        """Calculated, margin-applied and selected values per parameter."""
        selection = self.ratings()
        rows = []
        for name, value in selection.as_dict().items():
            rows.append({
                'parameter': name,
                'calculated': value.calculated,
                'margin_applied': value.margin_applied,
                'selected': value.selected,
                'adequate': value.is_adequate,
            })
        return pd.DataFrame(rows).set_index('parameter')

    def generate_full_report(self) -> Dict:
        """Generate the complete study report."""
        c = self.config
        sys_result = self.system_fault()
        gen_result = self.generator_fault()
        selection = select_ratings(sys_result, gen_result, c.generator, c.margin_pct)
        deficiencies = find_sizing_deficiencies(selection)
        dc_out_of_range = [
            r.source.value for r in (sys_result, gen_result) if r.dc_exceeds_model_range
        ]

        if dc_out_of_range:
            logger.warning(
                f"{c.name}: DC component above 100% for {', '.join(dc_out_of_range)} "
                f"source; outside the exponential decay model"
            )
        if gen_result.current_zeros_skipped:
            logger.warning(
                f"{c.name}: generator-source DC component {gen_result.dc_component_pct:.2f}% "
                f"exceeds 100%; delayed current zeros expected"
            )
        if deficiencies:
            logger.warning(f"{c.name}: sizing deficiencies in {', '.join(deficiencies)}")

        return {
            'project': c.name,
            'inputs': {
                'generator_mva': c.generator.rated_power_mva,
                'generator_kv': c.generator.rated_voltage_kv,
                'xd_subtransient_pct': c.generator.subtransient_reactance_pct,
                'gsu_mva': c.gsu.rated_power_mva,
                'gsu_impedance_pct': c.gsu.impedance_pct,
                'gsu_turns_ratio': c.gsu.turns_ratio,
                'uat_mva': c.uat.rated_power_mva,
                'grid_sc_mva': c.system.short_circuit_capacity_mva,
                'contact_parting_time_ms': c.contact_parting_time_ms,
                'margin_pct': c.margin_pct,
                'frequency_hz': c.frequency_hz,
            },
            'system_source': sys_result,
            'generator_source': gen_result,
            'governing_source': self.governing_source().value,
            'ratings': selection,
            'first_current_zero_ms': first_current_zero_ms(
                gen_result.time_constant_ms, c.frequency_hz
            ),
            'dc_exceeds_model_range': dc_out_of_range,
            'table_exhausted': selection.table_exhausted,
            'deficiencies': deficiencies,
        }

    def plot_waveform(self, ax: Optional["matplotlib.axes.Axes"] = None):
        """Plot the generator-source waveform with DC and envelope curves.

        Args:
            ax: Axes to draw on; a new figure is created if None

        Returns:
            matplotlib Figure
        """
        import matplotlib.pyplot as plt

        df = self.waveform().to_dataframe()
        if ax is None:
            fig, ax = plt.subplots(figsize=(10, 5))
        else:
            fig = ax.figure

        ax.plot(df.index, df['current_ka'], color='#2563eb', linewidth=2, label='Total current')
        ax.plot(df.index, df['dc_ka'], color='#dc2626', linestyle='--', label='DC component')
        ax.plot(df.index, df['envelope_pos_ka'], color='#94a3b8', linestyle=':', label='Envelope')
        ax.plot(df.index, df['envelope_neg_ka'], color='#94a3b8', linestyle=':')
        ax.axhline(0.0, color='black', linewidth=0.8)

        ax.set_xlabel('Time (ms)')
        ax.set_ylabel('Current (kA)')
        ax.set_title(f'{self.config.name}: generator-source fault current')
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right')
        return fig
