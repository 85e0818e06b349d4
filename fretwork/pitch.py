"""Twelve-tone equal-tempered pitch space.

Semitone numbers follow the MIDI convention: 60 is C4 (middle C) and 69 is
A4, tuned to 440 Hz. Every integer is a valid semitone number, so naming and
transposition are total; only MIDI rendering restricts the range.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Dict, Tuple

A4_NUMBER = 69
"""Semitone number of the tuning reference A4."""

A4_FREQUENCY = 440.0
"""Frequency of A4 in Hz."""

MAX_NOTES = 12
"""Number of distinct note names in the chromatic scale."""

CENTS_PER_SEMITONE = 100
"""Cents in one equal-tempered semitone."""

DEFAULT_OCTAVE = 4
"""Octave assumed when a note name is given without one."""


@unique
class NoteName(Enum):
    """The twelve chromatic note names, valued by semitone offset from C.

    Accidentals are spelled with sharps.
    """

    C = 0
    Cs = 1
    D = 2
    Ds = 3
    E = 4
    F = 5
    Fs = 6
    G = 7
    Gs = 8
    A = 9
    As = 10
    B = 11

    @property
    def display_name(self) -> str:
        """The conventional spelling, e.g. ``C#`` for ``Cs``."""
        return self.name.replace("s", "#")

    def add_steps(self, steps: int) -> NoteName:
        """Add semitone steps to this note name, wrapping around the octave.

        Args:
            steps: Number of semitones to add (can be negative).

        Returns:
            The resulting note name after adding the steps.
        """
        return NOTE_LOOKUP[(self.value + steps) % MAX_NOTES]


def _build_note_lookup() -> Dict[int, NoteName]:
    d: Dict[int, NoteName] = {}
    for n in NoteName:
        d[n.value] = n
    assert len(d) == MAX_NOTES
    return d


NOTE_LOOKUP = _build_note_lookup()
"""Lookup table from semitone offset (0-11) to NoteName."""

_LETTER_TO_SEMITONE: Dict[str, int] = {
    "c": 0,
    "d": 2,
    "e": 4,
    "f": 5,
    "g": 7,
    "a": 9,
    "b": 11,
}


def name_and_octave_from_number(number: int) -> Tuple[NoteName, int]:
    """Split a semitone number into its note name and scientific octave.

    Args:
        number: Semitone number (any integer).

    Returns:
        Tuple of (note_name, octave) where 60 is C4.
    """
    return NOTE_LOOKUP[number % MAX_NOTES], number // MAX_NOTES - 1


def name_of(number: int) -> str:
    """Name a semitone number, e.g. ``40 -> "E2"`` and ``61 -> "C#4"``."""
    note_name, octave = name_and_octave_from_number(number)
    return f"{note_name.display_name}{octave}"


def number_of(name: str) -> int:
    """Parse a note name with an optional octave into a semitone number.

    Parsing is case-insensitive and accepts a single ``#`` or ``b``
    accidental. Without an octave, DEFAULT_OCTAVE is used.

    Examples:
        "E2"  -> 40
        "a4"  -> 69
        "Eb3" -> 51
        "c#"  -> 61
        "C-1" -> 0

    Raises:
        ValueError: If the name is not a valid note name.
    """
    note_str = name.strip().lower()
    if len(note_str) < 1 or note_str[0] not in _LETTER_TO_SEMITONE:
        raise ValueError(f"Invalid note name: {name}")

    semitone = _LETTER_TO_SEMITONE[note_str[0]]
    pos = 1

    if pos < len(note_str):
        if note_str[pos] == "#":
            semitone += 1
            pos += 1
        elif note_str[pos] == "b":
            semitone -= 1
            pos += 1

    if pos < len(note_str):
        octave_str = note_str[pos:]
        if octave_str.lstrip("-").isdigit() and octave_str.count("-") <= 1:
            octave = int(octave_str)
        else:
            raise ValueError(f"Invalid octave in note: {name}")
    else:
        octave = DEFAULT_OCTAVE

    return (octave + 1) * MAX_NOTES + semitone


def frequency_of(number: float) -> float:
    """Equal-tempered frequency in Hz of a (possibly fractional) semitone number."""
    return A4_FREQUENCY * 2.0 ** ((number - A4_NUMBER) / MAX_NOTES)


@dataclass(frozen=True)
class Pitch:
    """A symbolic pitch: a semitone number plus a cent adjustment.

    The adjustment is the residual left after rounding a microtonal interval
    to the nearest semitone, so it lies in [-50, 50] for pitches produced by
    this package.
    """

    number: int
    """Semitone number, 69 = A4."""
    cents: int = 0
    """Signed deviation from the named semitone in cents."""

    @property
    def note_name(self) -> NoteName:
        return name_and_octave_from_number(self.number)[0]

    @property
    def octave(self) -> int:
        return name_and_octave_from_number(self.number)[1]

    @property
    def name(self) -> str:
        """Note name with octave, ignoring the cent adjustment."""
        return name_of(self.number)

    @property
    def frequency(self) -> float:
        """Frequency in Hz including the cent adjustment."""
        return frequency_of(self.number + self.cents / CENTS_PER_SEMITONE)

    def transpose(self, steps: int) -> Pitch:
        """Shift by whole semitones, keeping the cent adjustment."""
        return Pitch(self.number + steps, self.cents)

    def with_cents(self, cents: int) -> Pitch:
        return Pitch(self.number, cents)

    @staticmethod
    def parse(name: str) -> Pitch:
        """Parse a note name into an unadjusted pitch."""
        return Pitch(number_of(name))

    def __str__(self) -> str:
        if self.cents == 0:
            return self.name
        else:
            return f"{self.name}{self.cents:+d}c"


def transpose(pitch: Pitch, steps: int) -> Pitch:
    """Shift a pitch by whole semitones."""
    return pitch.transpose(steps)
