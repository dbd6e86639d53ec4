"""The fixed table of framerates that a CDP can advertise."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction


@dataclass(frozen=True, kw_only=True)
class Framerate:
    """A framerate as identified by the cdp_frame_rate nibble of a CDP header."""

    id: int
    numer: int
    denom: int

    @property
    def fraction(self) -> Fraction:
        """Frames per second."""
        return Fraction(self.numer, self.denom)

    @classmethod
    def from_id(cls, id: int) -> Framerate | None:
        """Look up the framerate for a cdp_frame_rate value; None if it is reserved."""
        return FRAMERATES.get(id)

    def __str__(self) -> str:
        return f"{self.numer}/{self.denom}"


# SMPTE 334-2-2007 Table 3 - cdp_frame_rate
# Value 0x0 is forbidden and 0x9 through 0xF are reserved.
FRAMERATES: dict[int, Framerate] = {
    f.id: f
    for f in [
        Framerate(id=0x1, numer=24000, denom=1001),
        Framerate(id=0x2, numer=24, denom=1),
        Framerate(id=0x3, numer=25, denom=1),
        Framerate(id=0x4, numer=30000, denom=1001),
        Framerate(id=0x5, numer=30, denom=1),
        Framerate(id=0x6, numer=50, denom=1),
        Framerate(id=0x7, numer=60000, denom=1001),
        Framerate(id=0x8, numer=60, denom=1),
    ]
}
