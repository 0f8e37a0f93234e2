"""Standard GCB rating values.

Standards:
    IEC/IEEE 62271-37-013: AC generator circuit-breakers
"""

# Rated short-circuit breaking currents, ascending (kA)
STANDARD_BREAKING_CURRENTS_KA = (
    31.5, 40.0, 50.0, 63.0, 72.0, 80.0, 90.0,
    100.0, 120.0, 140.0, 160.0, 190.0, 200.0,
)

# Rated continuous currents are selected in 500 A steps
CONTINUOUS_CURRENT_STEP_A = 500.0

# Derived ratings from the selected symmetrical breaking current
ASYMMETRICAL_FACTOR = 1.732
PEAK_FACTOR = 2.74
