"""CEA-608 compatibility byte pairs carried in cc_data."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .base import ValidationError


# The cc_type value of a cc_data triple carrying CEA-608 data is the line 21 field number.
# CEA-708-E Section 4.4 / Table 3 - cc_type values
class Cea608Field(IntEnum):
    FIELD_1 = 0x0
    FIELD_2 = 0x1


@dataclass(frozen=True, kw_only=True)
class Cea608:
    """A single CEA-608 byte pair, tagged with the field it belongs to.

    The bytes are kept exactly as transmitted, including the odd parity bit.
    """

    field: Cea608Field
    byte_0: int
    byte_1: int

    @classmethod
    def field_1(cls, byte_0: int, byte_1: int) -> Cea608:
        return cls(field=Cea608Field.FIELD_1, byte_0=byte_0, byte_1=byte_1)

    @classmethod
    def field_2(cls, byte_0: int, byte_1: int) -> Cea608:
        return cls(field=Cea608Field.FIELD_2, byte_0=byte_0, byte_1=byte_1)

    def validate(self) -> str | None:
        if not 0 <= self.byte_0 <= 0xFF or not 0 <= self.byte_1 <= 0xFF:
            return "CEA-608 bytes must each fit in a single byte."
        return None

    def to_binary(self) -> bytes:
        validation_message = self.validate()
        if validation_message is not None:
            raise ValidationError(validation_message)
        return bytes([self.byte_0, self.byte_1])
