"""Errors shared by the CEA-708 cc_data classes."""

from __future__ import annotations


class ParserError(ValueError):
    pass


class LengthMismatchError(ParserError):
    """The cc_data buffer is shorter than its cc_count says it should be."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"The length of the data ({actual}) does not match the advertised expected "
            f"({expected}) length."
        )
        self.expected = expected
        self.actual = actual


class Cea608AfterCea708Error(ParserError):
    """CEA-608 compatibility bytes were found after CEA-708 bytes."""

    def __init__(self, byte_pos: int) -> None:
        super().__init__(
            f"CEA-608 compatibility bytes were found after CEA-708 bytes at position {byte_pos}."
        )
        self.byte_pos = byte_pos


class WriterError(ValueError):
    pass


class WouldOverflowError(WriterError):
    """Adding the item would exceed the available space by the given number of bytes."""

    def __init__(self, overflow: int) -> None:
        super().__init__(f"Writing would overflow by {overflow} byte(s).")
        self.overflow = overflow


class ValidationError(ValueError):
    pass
