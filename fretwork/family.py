"""Instrument family configuration.

A StringFamily holds everything that distinguishes one kind of string from
another: whether it is fretted or bowed, how many frets (or semitone stops)
and harmonic orders it may have, and its standard tuning. Families are plain
values handed to a StringFactory, so several configurations can coexist.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto, unique
from typing import Dict, Optional, Tuple

from fretwork.base import ConfigurationRangeError, MatchException
from fretwork.pitch import name_of, number_of


@unique
class FamilyKind(Enum):
    """How touch points are laid out on strings of a family."""

    Fretted = auto()  # Frets plus harmonic nodes on every fret
    Bowed = auto()  # Semitone stops over a single range, no harmonics

    @property
    def has_harmonics(self) -> bool:
        if self == FamilyKind.Fretted:
            return True
        elif self == FamilyKind.Bowed:
            return False
        else:
            raise MatchException(self)

    @property
    def count_name(self) -> str:
        """Name of the position count parameter, used in error messages."""
        if self == FamilyKind.Fretted:
            return "fret_count"
        elif self == FamilyKind.Bowed:
            return "semitone_count"
        else:
            raise MatchException(self)


@dataclass(frozen=True)
class StringFamily:
    """Bounds and defaults shared by every string of an instrument family.

    All bounds are inclusive. Harmonic fields are None for families without
    harmonics.
    """

    name: str
    kind: FamilyKind
    min_count: int  # Fewest frets or semitone stops
    max_count: int  # Most frets or semitone stops
    default_count: int
    max_strings: int
    standard_tuning: Tuple[int, ...]  # Semitone numbers, lowest string first
    min_harmonic_order: Optional[int] = None
    max_harmonic_order: Optional[int] = None
    default_harmonic_order: Optional[int] = None

    def __post_init__(self) -> None:
        if not (self.min_count <= self.default_count <= self.max_count):
            raise ConfigurationRangeError(
                "default_count", self.default_count, self.min_count, self.max_count
            )
        if not (1 <= len(self.standard_tuning) <= self.max_strings):
            raise ConfigurationRangeError(
                "standard_tuning", len(self.standard_tuning), 1, self.max_strings
            )
        harmonic = (
            self.min_harmonic_order,
            self.max_harmonic_order,
            self.default_harmonic_order,
        )
        if self.kind.has_harmonics:
            if any(x is None for x in harmonic):
                raise ValueError(f"Family {self.name} requires harmonic order bounds")
            assert self.min_harmonic_order is not None
            assert self.max_harmonic_order is not None
            assert self.default_harmonic_order is not None
            if not (
                self.min_harmonic_order
                <= self.default_harmonic_order
                <= self.max_harmonic_order
            ):
                raise ConfigurationRangeError(
                    "default_harmonic_order",
                    self.default_harmonic_order,
                    self.min_harmonic_order,
                    self.max_harmonic_order,
                )
        elif any(x is not None for x in harmonic):
            raise ValueError(f"Family {self.name} does not support harmonics")

    @property
    def has_harmonics(self) -> bool:
        return self.kind.has_harmonics

    @property
    def standard_tuning_names(self) -> Tuple[str, ...]:
        return tuple(name_of(n) for n in self.standard_tuning)


def tuning_from_names(*names: str) -> Tuple[int, ...]:
    """Convert note names such as ``"E2"`` into a tuning tuple."""
    return tuple(number_of(n) for n in names)


GUITAR = StringFamily(
    name="guitar",
    kind=FamilyKind.Fretted,
    min_count=0,
    max_count=36,
    default_count=22,
    max_strings=44,
    standard_tuning=tuning_from_names("E2", "A2", "D3", "G3", "B3", "E4"),
    min_harmonic_order=2,
    max_harmonic_order=12,
    default_harmonic_order=7,
)
"""The generic guitar with standard tuning."""

ACOUSTIC_GUITAR = StringFamily(
    name="acoustic_guitar",
    kind=FamilyKind.Fretted,
    min_count=0,
    max_count=36,
    default_count=20,
    max_strings=44,
    standard_tuning=GUITAR.standard_tuning,
    min_harmonic_order=2,
    max_harmonic_order=12,
    default_harmonic_order=9,
)

ELECTRIC_GUITAR = StringFamily(
    name="electric_guitar",
    kind=FamilyKind.Fretted,
    min_count=0,
    max_count=36,
    default_count=22,
    max_strings=44,
    standard_tuning=GUITAR.standard_tuning,
    min_harmonic_order=2,
    max_harmonic_order=12,
    default_harmonic_order=9,
)

NYLON_GUITAR = StringFamily(
    name="nylon_guitar",
    kind=FamilyKind.Fretted,
    min_count=0,
    max_count=36,
    default_count=18,
    max_strings=44,
    standard_tuning=GUITAR.standard_tuning,
    min_harmonic_order=2,
    max_harmonic_order=12,
    default_harmonic_order=7,
)

VIOLIN = StringFamily(
    name="violin",
    kind=FamilyKind.Bowed,
    min_count=4,
    max_count=12,
    default_count=10,
    max_strings=6,
    standard_tuning=tuning_from_names("G3", "D4", "A4", "E5"),
)

CELLO = StringFamily(
    name="cello",
    kind=FamilyKind.Bowed,
    min_count=4,
    max_count=12,
    default_count=10,
    max_strings=6,
    standard_tuning=tuning_from_names("C2", "G2", "D3", "A3"),
)

FAMILY_LOOKUP: Dict[str, StringFamily] = {
    f.name: f
    for f in [GUITAR, ACOUSTIC_GUITAR, ELECTRIC_GUITAR, NYLON_GUITAR, VIOLIN, CELLO]
}
"""Families by name."""
