"""GCB Breaking Duty Sweep

Sweeps contact parting time and generator X/R ratio for the reference
100 MVA / 13.8 kV unit and records the resulting breaking duty.

Scenario:
- 100 MVA, 13.8 kV generator, Xd'' = 15%
- 120 MVA, 10% GSU on a 10 GVA, X/R 15 grid
- Contact parting time 20-150 ms
- Generator X/R 10-120
- 60 Hz and 50 Hz
"""

import dataclasses
import sys
from pathlib import Path

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gcb_sizing import GCBSizingStudy, SizingConfig
from gcb_sizing.faults import first_current_zero_ms

# =============================================================================
# Simulation Parameters
# =============================================================================

PARTING_TIMES_MS = np.arange(20.0, 155.0, 5.0)
GENERATOR_XR_RATIOS = [10.0, 30.0, 60.0, 120.0]
FREQUENCIES_HZ = [60.0, 50.0]
MARGIN_PCT = 10.0

# Output directory
OUTPUT_DIR = Path(__file__).parent / "output"
OUTPUT_DIR.mkdir(exist_ok=True)

print("="*80)
print("GCB BREAKING DUTY SWEEP")
print("100 MVA / 13.8 kV unit | 120 MVA GSU | 10 GVA grid")
print("="*80)

# =============================================================================
# Phase 1: Sweep
# =============================================================================

print("\n[1/3] Sweeping parting time and generator X/R...")

base = SizingConfig(name="Duty sweep", margin_pct=MARGIN_PCT)
rows = []

for f_hz in FREQUENCIES_HZ:
    for xr in GENERATOR_XR_RATIOS:
        generator = dataclasses.replace(base.generator, xr_ratio=xr)
        for t_cp in PARTING_TIMES_MS:
            config = dataclasses.replace(
                base, generator=generator,
                contact_parting_time_ms=float(t_cp), frequency_hz=f_hz,
            )
            study = GCBSizingStudy(config)
            sys_result = study.system_fault()
            gen_result = study.generator_fault()
            ratings = study.ratings()

            rows.append({
                'frequency_hz': f_hz,
                'generator_xr': xr,
                'parting_time_ms': float(t_cp),
                'sys_dc_pct': sys_result.dc_component_pct,
                'sys_asym_ka': sys_result.asymmetrical_current_ka,
                'gen_dc_pct': gen_result.dc_component_pct,
                'gen_asym_ka': gen_result.asymmetrical_current_ka,
                'gen_tau_ms': gen_result.time_constant_ms,
                'sym_rating_ka': ratings.symmetrical_ka.selected,
                'asym_adequate': ratings.asymmetrical_ka.is_adequate,
            })

df = pd.DataFrame(rows)

print(f"  ✓ {len(df)} cases evaluated")
print(f"  ✓ Max generator DC component: {df['gen_dc_pct'].max():.1f}%")
print(f"  ✓ Cases with inadequate derived asymmetrical rating: {(~df['asym_adequate']).sum()}")

# =============================================================================
# Phase 2: First current zero vs generator X/R
# =============================================================================

print("\n[2/3] Locating first current zeros...")

zero_rows = []
for f_hz in FREQUENCIES_HZ:
    for xr in GENERATOR_XR_RATIOS:
        tau_ms = xr / (2 * np.pi * f_hz) * 1000.0
        zero_rows.append({
            'frequency_hz': f_hz,
            'generator_xr': xr,
            'tau_ms': tau_ms,
            'first_zero_ms': first_current_zero_ms(tau_ms, f_hz),
        })

zeros = pd.DataFrame(zero_rows)
for _, row in zeros.iterrows():
    print(f"  ✓ {row['frequency_hz']:.0f} Hz, X/R {row['generator_xr']:>5.0f}: "
          f"τ = {row['tau_ms']:6.1f} ms, first zero at {row['first_zero_ms']:.2f} ms")

# =============================================================================
# Phase 3: Outputs
# =============================================================================

print("\n[3/3] Writing results...")

df.to_csv(OUTPUT_DIR / "gcb_duty_sweep.csv", index=False)

fig, axes = plt.subplots(1, 2, figsize=(16, 6))

for xr in GENERATOR_XR_RATIOS:
    case = df[(df['frequency_hz'] == 60.0) & (df['generator_xr'] == xr)]
    axes[0].plot(case['parting_time_ms'], case['gen_dc_pct'], linewidth=2, label=f'X/R = {xr:.0f}')
    axes[1].plot(case['parting_time_ms'], case['gen_asym_ka'], linewidth=2, label=f'X/R = {xr:.0f}')

sys_case = df[(df['frequency_hz'] == 60.0) & (df['generator_xr'] == GENERATOR_XR_RATIOS[0])]
axes[1].plot(sys_case['parting_time_ms'], sys_case['sys_asym_ka'], 'k--', linewidth=2, label='System source')

axes[0].set_xlabel('Contact parting time (ms)', fontsize=12, fontweight='bold')
axes[0].set_ylabel('DC component (%)', fontsize=12, fontweight='bold')
axes[0].set_title('Generator-Source DC Component (60 Hz)', fontsize=14, fontweight='bold')
axes[1].set_xlabel('Contact parting time (ms)', fontsize=12, fontweight='bold')
axes[1].set_ylabel('Asymmetrical current (kA)', fontsize=12, fontweight='bold')
axes[1].set_title('Asymmetrical Breaking Current (60 Hz)', fontsize=14, fontweight='bold')
for ax in axes:
    ax.grid(True, alpha=0.3)
    ax.legend(fontsize=11)

fig.tight_layout()
fig.savefig(OUTPUT_DIR / "gcb_duty_sweep.png", dpi=150)

print(f"  ✓ Results saved to: {OUTPUT_DIR}")
print("\n" + "="*80)
print("SWEEP COMPLETE")
print("="*80)
