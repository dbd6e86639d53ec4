"""Contains model classes for the CEA-708 cc_data() payload carried inside a CDP."""

from caption_tools.cea708.base import (
    Cea608AfterCea708Error,
    LengthMismatchError,
    ParserError,
    ValidationError,
    WouldOverflowError,
    WriterError,
)
from caption_tools.cea708.cc_data import (
    CCDataParser,
    CCDataWriter,
    CCType,
    max_cc_count,
)
from caption_tools.cea708.cea608 import Cea608, Cea608Field
from caption_tools.cea708.packet import DTVCCPacket, Service
from caption_tools.cea708.tables import Code, CodeSet, code_length, parse_codes

__all__ = [
    "CCDataParser",
    "CCDataWriter",
    "CCType",
    "Cea608",
    "Cea608AfterCea708Error",
    "Cea608Field",
    "Code",
    "CodeSet",
    "code_length",
    "DTVCCPacket",
    "LengthMismatchError",
    "max_cc_count",
    "parse_codes",
    "ParserError",
    "Service",
    "ValidationError",
    "WouldOverflowError",
    "WriterError",
]
