"""Errors and identifiers shared by the CDP parser and writer."""

from __future__ import annotations

from enum import IntEnum

# General comment about validation: CDPs are produced by broadcast equipment and are not expected
# to contain errors, so any violation of SMPTE 334-2 rejects the entire packet.  Nothing is
# repaired or skipped.

# SMPTE 334-2-2007 Section 5.1 - cdp_identifier
MAGIC = bytes([0x96, 0x69])

# Smallest possible CDP: header (7 bytes) + footer (4 bytes)
MIN_PACKET_SIZE = 11


# Section identifiers
# SMPTE 334-2-2007 Table 2 - Section ID values
class SectionID(IntEnum):
    TIME_CODE = 0x71
    CC_DATA = 0x72
    SVC_INFO = 0x73
    FOOTER = 0x74

    # Sections reserved for future use occupy the whole range [FUTURE_FIRST, FUTURE_LAST].  They
    # can only be skipped over using their length byte.
    FUTURE_FIRST = 0x75
    FUTURE_LAST = 0xEF


class ParserError(ValueError):
    pass


class LengthMismatchError(ParserError):
    """The data is too short for a structure, or disagrees with an advertised length."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"The length of the data ({actual}) does not match the advertised expected "
            f"({expected}) length."
        )
        self.expected = expected
        self.actual = actual


class WrongMagicError(ParserError):
    def __init__(self, message: str = "Some magic byte/s do not have the correct value.") -> None:
        super().__init__(message)


class UnknownFramerateError(ParserError):
    def __init__(self, framerate_id: int) -> None:
        super().__init__(f"The framerate ID {framerate_id:#x} is not known.")
        self.framerate_id = framerate_id


class InvalidFixedBitsError(ParserError):
    def __init__(self, message: str = "Some fixed bits did not have the correct value.") -> None:
        super().__init__(message)


class Cea608AfterCea708Error(ParserError):
    def __init__(self) -> None:
        super().__init__("CEA-608 compatibility bytes were found after CEA-708 bytes.")


class ChecksumFailedError(ParserError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"The computed checksum value {expected:#04x} does not match the stored checksum "
            f"value {actual:#04x}."
        )
        self.expected = expected
        self.actual = actual


class SequenceCountMismatchError(ParserError):
    """Usually indicates that the packet was spliced together incorrectly."""

    def __init__(self, header: int, footer: int) -> None:
        super().__init__(
            f"The sequence count differs between the header ({header:#06x}) and the footer "
            f"({footer:#06x})."
        )
        self.header = header
        self.footer = footer


class ServiceNumberMismatchError(ParserError):
    def __init__(self) -> None:
        super().__init__("The service descriptor has different service numbers.")


class InvalidServiceNumberError(ParserError):
    def __init__(self) -> None:
        super().__init__("The service number is not valid.")


class ServiceFlagsMismatchedError(ParserError):
    def __init__(self) -> None:
        super().__init__("The service descriptor contains a different set of flags to the CDP.")


class WriterError(ValueError):
    pass


class WouldOverflowError(WriterError):
    def __init__(self, overflow: int) -> None:
        super().__init__(f"Writing would overflow by {overflow} item(s).")
        self.overflow = overflow


class ValidationError(ValueError):
    pass
