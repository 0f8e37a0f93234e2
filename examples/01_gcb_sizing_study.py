#!/usr/bin/env python3
"""Example: GCB Sizing for a 100 MVA Generating Unit.

This example demonstrates how to size a generator circuit breaker for
a 100 MVA, 13.8 kV unit connected to a 154 kV grid through a 120 MVA
step-up transformer.

Key outputs:
- System-source and generator-source fault currents
- Selected standard ratings with 10% margin
- Generator-source current waveform
- Saved project for later recomputation
"""

import dataclasses
import sys
sys.path.insert(0, 'src')

import matplotlib
matplotlib.use('Agg')

from gcb_sizing import GCBSizingStudy, SizingConfig, GeneratorSpec
from gcb_sizing.utils import ProjectStore, EngineeringAssessor, gemini_text_generator


def analyze_unit(config: SizingConfig):
    """Run and print a sizing study.

    Args:
        config: Study configuration
    """
    print(f"\n{'='*60}")
    print(f"GCB Sizing Study: {config.name}")
    print(f"{'='*60}")
    print(f"Generator: {config.generator.rated_power_mva} MVA, "
          f"{config.generator.rated_voltage_kv} kV, "
          f"Xd'' = {config.generator.subtransient_reactance_pct}%")
    print(f"Contact parting time: {config.contact_parting_time_ms} ms")
    print(f"Margin: {config.margin_pct}%  |  Frequency: {config.frequency_hz} Hz")
    print(f"{'='*60}\n")

    study = GCBSizingStudy(config)
    report = study.generate_full_report()

    print("Fault currents:")
    print(study.fault_table().to_string())

    print("\nRatings:")
    print(study.rating_table().to_string(float_format=lambda v: f"{v:.1f}"))

    print(f"\nGoverning source: {report['governing_source']}")
    if report['first_current_zero_ms'] is not None:
        print(f"First current zero (generator source): {report['first_current_zero_ms']:.1f} ms")

    if report['table_exhausted']:
        print("\n[WARNING] Breaking current exceeds the standard table, manual review required!")
    if report['deficiencies']:
        print(f"\n[WARNING] Sizing deficiencies: {', '.join(report['deficiencies'])}")
    else:
        print("\n[OK] Selected ratings cover all margin-applied duties")

    fig = study.plot_waveform()
    fig.savefig("gcb_waveform.png", dpi=150, bbox_inches='tight')
    print("Waveform saved to gcb_waveform.png")

    return study


def compare_parting_times(config: SizingConfig):
    """Compare breaking duty across contact parting times."""
    print("\n" + "="*60)
    print("Contact Parting Time Comparison")
    print("="*60)

    print(f"\n{'t_cp (ms)':<10} {'Source':<10} {'DC (%)':<8} {'I_asym (kA)':<12}")
    print("-" * 42)
    for t_cp in [30.0, 50.0, 75.0, 100.0]:
        study = GCBSizingStudy(dataclasses.replace(config, contact_parting_time_ms=t_cp))
        for result in (study.system_fault(), study.generator_fault()):
            print(f"{t_cp:<10.0f} {result.source.value:<10} "
                  f"{result.dc_component_pct:<8.1f} {result.asymmetrical_current_ka:<12.2f}")


if __name__ == "__main__":
    config = SizingConfig(
        name="GCB Sizing Project - 001",
        generator=GeneratorSpec(
            rated_power_mva=100.0,
            rated_voltage_kv=13.8,
            subtransient_reactance_pct=15.0,
            xr_ratio=30.0,
        ),
    )

    # Example 1: Size the reference unit
    study = analyze_unit(config)

    # Example 2: Sensitivity to contact parting time
    compare_parting_times(config)

    # Example 3: Save the project
    store = ProjectStore("data/projects")
    path = store.save(config)
    print(f"\nProject saved: {path}")

    # Example 4: Optional narrative assessment (requires GOOGLE_API_KEY)
    try:
        assessor = EngineeringAssessor(gemini_text_generator())
        print("\n" + assessor.assess(study.system_fault(), study.generator_fault(), config.generator))
    except (ImportError, ValueError) as e:
        print(f"\n[INFO] Engineering assessment skipped: {e}")

    print("\n" + "="*60)
    print("Analysis complete!")
    print("="*60)
