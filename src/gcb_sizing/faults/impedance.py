"""Impedance network resolver for GCB fault paths.

Converts nameplate data into ohmic impedances referred to the
generator-side voltage and combines them per fault path.

Key equations:
    Z_sys = V_base² / S_sc
    Z_t   = (Z% / 100) × V_base² / S_t
    θ = atan(X/R),  R = |Z|·cos θ,  X = |Z|·sin θ
    Z_path = Σ (R + jX)

The generator path works the other way round: nameplate Xd'' gives the
reactance directly and the resistance is back-derived from X/R.
"""

import numpy as np
from typing import Tuple

from gcb_sizing.equipment.specs import GeneratorSpec, SystemSpec, TransformerSpec


def split_impedance(z_ohm: float, xr_ratio: float) -> complex:
    """Split an impedance magnitude into R + jX using its X/R ratio.

    Args:
        z_ohm: Impedance magnitude (Ω)
        xr_ratio: X/R ratio

    Returns:
        Complex impedance R + jX (Ω)
    """
    if not z_ohm > 0:
        raise ValueError(f"Impedance magnitude must be > 0, got {z_ohm!r}")
    if not xr_ratio > 0:
        raise ValueError(f"X/R ratio must be > 0, got {xr_ratio!r}")

    theta = np.arctan(xr_ratio)
    return complex(z_ohm * np.cos(theta), z_ohm * np.sin(theta))


def system_impedance_ohm(system: SystemSpec, base_kv: float) -> float:
    """Grid equivalent impedance referred to base_kv (Ω).

    Referring V_grid² / S_sc through the turns ratio squared leaves
    V_base² / S_sc, so the grid voltage drops out.
    """
    return base_kv**2 / system.short_circuit_capacity_mva


def transformer_impedance_ohm(transformer: TransformerSpec, base_kv: float) -> float:
    """Transformer impedance referred to base_kv (Ω)."""
    return (transformer.impedance_pct / 100.0) * (base_kv**2 / transformer.rated_power_mva)


def resolve_system_path_impedance(
    generator: GeneratorSpec,
    transformer: TransformerSpec,
    system: SystemSpec,
) -> Tuple[float, float]:
    """Resolve the grid-fed fault path seen from the GCB.

    The grid equivalent and the GSU are in series; their R and X
    components are summed separately.

    Args:
        generator: Generator nameplate (does not contribute to this path)
        transformer: GSU transformer nameplate
        system: Upstream grid equivalent

    Returns:
        R_total: Path resistance (Ω)
        X_total: Path reactance (Ω)
    """
    base_kv = transformer.secondary_voltage_kv

    z_sys = split_impedance(system_impedance_ohm(system, base_kv), system.xr_ratio)
    z_gsu = split_impedance(transformer_impedance_ohm(transformer, base_kv), transformer.xr_ratio)

    z_total = z_sys + z_gsu
    return z_total.real, z_total.imag


def resolve_generator_path_impedance(generator: GeneratorSpec) -> Tuple[float, float]:
    """Resolve the generator-fed fault path from subtransient data.

    Args:
        generator: Generator nameplate

    Returns:
        R: Armature resistance equivalent (Ω)
        X: Subtransient reactance Xd'' (Ω)
    """
    x_ohm = (generator.subtransient_reactance_pct / 100.0) * generator.base_impedance_ohm
    r_ohm = x_ohm / generator.xr_ratio
    return r_ohm, x_ohm
