"""CEA-708 code space: splitting service block data into individual codes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

import caption_tools.data_util as du

from .base import ParserError, ValidationError

# CEA-708-E Section 7.1 - Code space organization
EXT1 = 0x10
MUSIC_NOTE = 0x7F


class CodeSet(Enum):
    C0 = auto()  # 0x00-0x1F: miscellaneous control codes
    G0 = auto()  # 0x20-0x7F: ASCII, with a music note at 0x7F
    C1 = auto()  # 0x80-0x9F: caption/window commands
    G1 = auto()  # 0xA0-0xFF: ISO 8859-1 (latin-1)
    # The extended sets are all prefixed by EXT1.
    C2 = auto()
    G2 = auto()
    C3 = auto()
    G3 = auto()


# Number of parameter bytes that follow each C1 command byte.
# CEA-708-E Section 8.10.5 - Caption commands
_C1_PARAMETER_COUNT = {
    **{cw: 0 for cw in range(0x80, 0x88)},  # CW0-CW7 set current window
    0x88: 1,  # CLW clear windows
    0x89: 1,  # DSW display windows
    0x8A: 1,  # HDW hide windows
    0x8B: 1,  # TGW toggle windows
    0x8C: 1,  # DLW delete windows
    0x8D: 1,  # DLY delay
    0x8E: 0,  # DLC delay cancel
    0x8F: 0,  # RST reset
    0x90: 2,  # SPA set pen attributes
    0x91: 3,  # SPC set pen color
    0x92: 2,  # SPL set pen location
    **{reserved: 0 for reserved in range(0x93, 0x97)},
    0x97: 4,  # SWA set window attributes
    **{df: 6 for df in range(0x98, 0xA0)},  # DF0-DF7 define window
}


def code_set(data: bytes) -> CodeSet:
    """Classify the first code in the given bytes."""
    first = data[0]
    if first == EXT1:
        ext = data[1]
        if ext < 0x20:
            return CodeSet.C2
        if ext < 0x80:
            return CodeSet.G2
        if ext < 0xA0:
            return CodeSet.C3
        return CodeSet.G3
    if first < 0x20:
        return CodeSet.C0
    if first < 0x80:
        return CodeSet.G0
    if first < 0xA0:
        return CodeSet.C1
    return CodeSet.G1


def code_length(data: bytes, pos: int = 0) -> int:
    """Return the number of bytes used by the code starting at data[pos].

    Raises ParserError if the code runs past the end of the data.
    """
    first = data[pos]
    length = 1
    if first == EXT1:
        if pos + 1 >= len(data):
            raise ParserError("Extended code is missing the byte after EXT1.")
        ext = data[pos + 1]
        # CEA-708-E Section 7.1.7 - 7.1.10: lengths of the C2 and C3 code sets are implied by
        # their code range.
        if ext < 0x08:
            length = 2
        elif ext < 0x10:
            length = 3
        elif ext < 0x18:
            length = 4
        elif ext < 0x20:
            length = 5
        elif ext < 0x80:
            length = 2
        elif ext < 0x88:
            length = 6
        elif ext < 0x90:
            length = 7
        elif ext < 0xA0:
            # variable length command: the next byte holds the length in its low 6 bits
            if pos + 2 >= len(data):
                raise ParserError("Variable length code is missing its length byte.")
            length = 3 + (data[pos + 2] & 0x3F)
        else:
            length = 2
    elif first < 0x10:
        length = 1
    elif first < 0x18:
        length = 2
    elif first < 0x20:
        length = 3
    elif 0x80 <= first < 0xA0:
        length = 1 + _C1_PARAMETER_COUNT[first]

    if pos + length > len(data):
        raise ParserError(
            f"Code {du.hex_int(first, 2)} needs {length} bytes but only "
            f"{len(data) - pos} remain."
        )
    return length


@dataclass(frozen=True, kw_only=True)
class Code:
    """A single CEA-708 code, kept as its raw bytes (command byte plus any parameters)."""

    data: bytes

    def validate(self) -> str | None:
        if not self.data:
            return "A code must contain at least one byte."
        try:
            length = code_length(self.data)
        except ParserError as e:
            return str(e)
        if length != len(self.data):
            return f"Code bytes {du.hex_bytes(self.data)} do not form exactly one code."
        return None

    @property
    def code_set(self) -> CodeSet:
        return code_set(self.data)

    @property
    def char(self) -> str | None:
        """The printable character for G0/G1 codes, or None for everything else."""
        match self.code_set:
            case CodeSet.G0:
                return "♪" if self.data[0] == MUSIC_NOTE else chr(self.data[0])
            case CodeSet.G1:
                # latin-1 code points are identical to their byte values
                return chr(self.data[0])
            case _:
                return None

    @classmethod
    def from_char(cls, char: str) -> Code:
        if char == "♪":
            return cls(data=bytes([MUSIC_NOTE]))
        value = ord(char)
        if 0x20 <= value < 0x7F or 0xA0 <= value <= 0xFF:
            return cls(data=bytes([value]))
        raise ValidationError(f"Character {char!r} is not in the G0 or G1 code sets.")


def parse_codes(data: bytes) -> list[Code]:
    """Split service block data into its individual codes."""
    codes = []
    pos = 0
    while pos < len(data):
        length = code_length(data, pos)
        codes.append(Code(data=bytes(data[pos : pos + length])))
        pos += length
    return codes
