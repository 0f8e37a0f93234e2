"""Equipment nameplate models.

Immutable nameplate records for the generator, step-up transformer,
unit auxiliary transformer and upstream grid equivalent.
"""

from .specs import (
    GeneratorSpec,
    TransformerSpec,
    UatSpec,
    SystemSpec,
    GENERATOR_100MVA_13_8KV,
    GSU_120MVA_154KV_13_8KV,
    UAT_10MVA_4_16KV,
    GRID_10000MVA,
)

__all__ = [
    'GeneratorSpec',
    'TransformerSpec',
    'UatSpec',
    'SystemSpec',
    'GENERATOR_100MVA_13_8KV',
    'GSU_120MVA_154KV_13_8KV',
    'UAT_10MVA_4_16KV',
    'GRID_10000MVA',
]
