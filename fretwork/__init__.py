from fretwork.base import (
    ArithmeticInvariantError,
    ConfigurationRangeError,
    PositionRangeError,
    RangeError,
)
from fretwork.family import FamilyKind, StringFamily
from fretwork.harmonics import generate_nodes, harmonic_pairs, node_count
from fretwork.pitch import Pitch, frequency_of, name_of, number_of, transpose
from fretwork.strings import Instrument, OpenString, StringFactory
from fretwork.touch import (
    FrettedPosition,
    HarmonicNode,
    StoppedPosition,
    TouchKind,
    TouchPoint,
)

__all__ = [
    "ArithmeticInvariantError",
    "ConfigurationRangeError",
    "FamilyKind",
    "FrettedPosition",
    "HarmonicNode",
    "Instrument",
    "OpenString",
    "Pitch",
    "PositionRangeError",
    "RangeError",
    "StoppedPosition",
    "StringFactory",
    "StringFamily",
    "TouchKind",
    "TouchPoint",
    "frequency_of",
    "generate_nodes",
    "harmonic_pairs",
    "name_of",
    "node_count",
    "number_of",
    "transpose",
]
