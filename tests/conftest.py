"""
Pytest configuration and shared fixtures for GCB sizing tests.
"""

import sys
import os
import pytest
import matplotlib

matplotlib.use('Agg')

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from gcb_sizing.equipment.specs import (  # noqa: E402
    GeneratorSpec, TransformerSpec, UatSpec, SystemSpec,
)


@pytest.fixture
def generator():
    """100 MVA, 13.8 kV generator, Xd'' = 15%, X/R = 30"""
    return GeneratorSpec(
        rated_power_mva=100.0,
        rated_voltage_kv=13.8,
        subtransient_reactance_pct=15.0,
        xr_ratio=30.0,
        power_factor=0.85,
    )


@pytest.fixture
def gsu():
    """120 MVA, 154/13.8 kV step-up transformer, Z = 10%, X/R = 40"""
    return TransformerSpec(
        rated_power_mva=120.0,
        impedance_pct=10.0,
        xr_ratio=40.0,
        primary_voltage_kv=154.0,
        secondary_voltage_kv=13.8,
    )


@pytest.fixture
def uat():
    """10 MVA unit auxiliary transformer"""
    return UatSpec(
        rated_power_mva=10.0,
        impedance_pct=8.0,
        xr_ratio=15.0,
        secondary_voltage_kv=4.16,
    )


@pytest.fixture
def grid():
    """10 GVA grid equivalent, X/R = 15"""
    return SystemSpec(short_circuit_capacity_mva=10000.0, xr_ratio=15.0)


@pytest.fixture
def sizing_config(generator, gsu, uat, grid):
    """Reference sizing study configuration"""
    from gcb_sizing.sizing_study import SizingConfig
    return SizingConfig(
        name="Unit 1",
        generator=generator,
        gsu=gsu,
        uat=uat,
        system=grid,
        contact_parting_time_ms=50.0,
        margin_pct=10.0,
        frequency_hz=60.0,
    )
