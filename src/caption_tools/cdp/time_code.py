"""Model class for the CDP time code section."""

from __future__ import annotations

import ctypes
from dataclasses import dataclass

from .base import InvalidFixedBitsError, SectionID, ValidationError, WrongMagicError
from .binary_types import _TimeCodeBinaryFields

SECTION_SIZE = ctypes.sizeof(_TimeCodeBinaryFields)


# Time code section
# SMPTE 334-2-2007 Section 5.2 - time_code_section()
# Also see SMPTE 12M
# Important notes:
#  - All time values are stored as binary-coded decimal: a tens digit and a units digit.
#  - Reading does not range check the digits; only the fixed bits are verified.  Writing requires
#    a time that fits in the available bits.
#  - The maximum frame number depends on the framerate, which this section does not know about.
@dataclass(frozen=True, kw_only=True)
class TimeCode:
    hours: int
    minutes: int
    seconds: int
    frames: int
    field: bool  # tc_field_flag
    drop_frame: bool

    def validate(self) -> str | None:
        if self.hours < 0 or self.hours > 23:
            return "The hours value is out of range."
        if self.minutes < 0 or self.minutes > 59:
            return "The minutes value is out of range."
        if self.seconds < 0 or self.seconds > 59:
            return "The seconds value is out of range."
        if self.frames < 0 or self.frames > 29:
            return "The frames value is out of range."
        return None

    def format_time_str(self) -> str:
        separator = ";" if self.drop_frame else ":"
        return f"{self.hours:02}:{self.minutes:02}:{self.seconds:02}{separator}{self.frames:02}"

    @classmethod
    def parse_binary(cls, section_bytes: bytes) -> TimeCode:
        """Create a new time code by parsing the 5 byte section, including the section ID."""
        assert len(section_bytes) == SECTION_SIZE
        bin = _TimeCodeBinaryFields.from_buffer_copy(section_bytes)
        if bin.time_code_section_id != SectionID.TIME_CODE:
            raise WrongMagicError("Time code section has the wrong section ID.")
        if bin.reserved_0 != 0x3:
            raise InvalidFixedBitsError("Reserved bits before the time code hours are not set.")
        if bin.reserved_1 != 0x1:
            raise InvalidFixedBitsError("Reserved bit before the time code minutes is not set.")
        if bin.zero != 0x0:
            raise InvalidFixedBitsError("Zero bit before the time code frames is set.")
        return cls(
            hours=bin.tc_10hrs * 10 + bin.tc_1hrs,
            minutes=bin.tc_10min * 10 + bin.tc_1min,
            seconds=bin.tc_10sec * 10 + bin.tc_1sec,
            frames=bin.tc_10fr * 10 + bin.tc_1fr,
            field=bin.tc_field_flag == 1,
            drop_frame=bin.drop_frame_flag == 1,
        )

    def to_binary(self) -> bytes:
        validation_message = self.validate()
        if validation_message is not None:
            raise ValidationError(validation_message)
        bin = _TimeCodeBinaryFields(
            time_code_section_id=SectionID.TIME_CODE,
            reserved_0=0x3,
            tc_10hrs=self.hours // 10,
            tc_1hrs=self.hours % 10,
            reserved_1=0x1,
            tc_10min=self.minutes // 10,
            tc_1min=self.minutes % 10,
            tc_field_flag=self.field,
            tc_10sec=self.seconds // 10,
            tc_1sec=self.seconds % 10,
            drop_frame_flag=self.drop_frame,
            zero=0x0,
            tc_10fr=self.frames // 10,
            tc_1fr=self.frames % 10,
        )
        return bytes(bin)
