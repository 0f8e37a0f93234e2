"""Equipment nameplate data for GCB sizing studies.

Nameplate records for the machines and networks on either side of a
generator circuit breaker:

    HV grid  →  GSU transformer  →  GCB  →  Generator
                                      └──→  UAT (unit auxiliary)

Values are entered the way they are normally published: MVA, kV,
percent impedance on the equipment's own base, and X/R ratio.

Standards:
    IEC/IEEE 62271-37-013: AC generator circuit-breakers
"""

from dataclasses import dataclass


def _require_positive(owner: str, **values: float) -> None:
    for field_name, value in values.items():
        if not value > 0:
            raise ValueError(
                f"{owner}.{field_name} must be > 0, got {value!r}"
            )


@dataclass(frozen=True)
class GeneratorSpec:
    """Synchronous generator nameplate data.

    Attributes:
        rated_power_mva: Rated apparent power (MVA)
        rated_voltage_kv: Rated terminal voltage (kV, line-to-line)
        subtransient_reactance_pct: Xd'' in percent of the machine base
        xr_ratio: X/R ratio of the subtransient circuit
        power_factor: Rated power factor (0-1]
    """
    rated_power_mva: float
    rated_voltage_kv: float
    subtransient_reactance_pct: float
    xr_ratio: float
    power_factor: float = 0.85

    def __post_init__(self):
        _require_positive(
            "GeneratorSpec",
            rated_power_mva=self.rated_power_mva,
            rated_voltage_kv=self.rated_voltage_kv,
            subtransient_reactance_pct=self.subtransient_reactance_pct,
            xr_ratio=self.xr_ratio,
        )
        if not 0 < self.power_factor <= 1:
            raise ValueError(
                f"GeneratorSpec.power_factor must be in (0, 1], "
                f"got {self.power_factor!r}"
            )

    @property
    def base_impedance_ohm(self) -> float:
        """Impedance base on the machine rating (Ω)."""
        return self.rated_voltage_kv**2 / self.rated_power_mva


@dataclass(frozen=True)
class TransformerSpec:
    """Generator step-up (GSU) transformer nameplate data.

    The secondary (generator-side) voltage is the common reference
    voltage for referring network impedances to the GCB location.

    Attributes:
        rated_power_mva: Rated apparent power (MVA)
        impedance_pct: Short-circuit impedance (%)
        xr_ratio: X/R ratio
        primary_voltage_kv: Grid-side voltage (kV)
        secondary_voltage_kv: Generator-side voltage (kV)
    """
    rated_power_mva: float
    impedance_pct: float
    xr_ratio: float
    primary_voltage_kv: float
    secondary_voltage_kv: float

    def __post_init__(self):
        _require_positive(
            "TransformerSpec",
            rated_power_mva=self.rated_power_mva,
            impedance_pct=self.impedance_pct,
            xr_ratio=self.xr_ratio,
            primary_voltage_kv=self.primary_voltage_kv,
            secondary_voltage_kv=self.secondary_voltage_kv,
        )

    @property
    def turns_ratio(self) -> float:
        return self.primary_voltage_kv / self.secondary_voltage_kv


@dataclass(frozen=True)
class UatSpec:
    """Unit auxiliary transformer nameplate data.

    Tapped off the generator bus between the GCB and the GSU. Carried
    with the project for reporting; it does not feed fault current
    through the breaker in this model.
    """
    rated_power_mva: float
    impedance_pct: float
    xr_ratio: float
    secondary_voltage_kv: float

    def __post_init__(self):
        _require_positive(
            "UatSpec",
            rated_power_mva=self.rated_power_mva,
            impedance_pct=self.impedance_pct,
            xr_ratio=self.xr_ratio,
            secondary_voltage_kv=self.secondary_voltage_kv,
        )


@dataclass(frozen=True)
class SystemSpec:
    """Upstream grid as an infinite-bus Thevenin equivalent.

    Attributes:
        short_circuit_capacity_mva: Three-phase fault level at the GSU HV terminals (MVA)
        xr_ratio: X/R ratio of the grid equivalent
    """
    short_circuit_capacity_mva: float
    xr_ratio: float

    def __post_init__(self):
        _require_positive(
            "SystemSpec",
            short_circuit_capacity_mva=self.short_circuit_capacity_mva,
            xr_ratio=self.xr_ratio,
        )


# =============================================================================
# Reference Unit (100 MVA / 13.8 kV generator on a 154 kV grid)
# =============================================================================

GENERATOR_100MVA_13_8KV = GeneratorSpec(
    rated_power_mva=100.0,
    rated_voltage_kv=13.8,
    subtransient_reactance_pct=15.0,
    xr_ratio=30.0,
    power_factor=0.85,
)

GSU_120MVA_154KV_13_8KV = TransformerSpec(
    rated_power_mva=120.0,
    impedance_pct=10.0,
    xr_ratio=40.0,
    primary_voltage_kv=154.0,
    secondary_voltage_kv=13.8,
)

UAT_10MVA_4_16KV = UatSpec(
    rated_power_mva=10.0,
    impedance_pct=8.0,
    xr_ratio=15.0,
    secondary_voltage_kv=4.16,
)

GRID_10000MVA = SystemSpec(
    short_circuit_capacity_mva=10000.0,
    xr_ratio=15.0,
)
