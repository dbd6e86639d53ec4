"""Contains model classes for reading and writing Caption Distribution Packets (SMPTE 334-2)."""

from caption_tools.cdp.base import (
    MAGIC,
    MIN_PACKET_SIZE,
    Cea608AfterCea708Error,
    ChecksumFailedError,
    InvalidFixedBitsError,
    InvalidServiceNumberError,
    LengthMismatchError,
    ParserError,
    SectionID,
    SequenceCountMismatchError,
    ServiceFlagsMismatchedError,
    ServiceNumberMismatchError,
    UnknownFramerateError,
    ValidationError,
    WouldOverflowError,
    WriterError,
    WrongMagicError,
)
from caption_tools.cdp.flags import Flags
from caption_tools.cdp.framerate import FRAMERATES, Framerate
from caption_tools.cdp.parser import CDPParser
from caption_tools.cdp.service import (
    DigitalServiceEntry,
    Field,
    FieldOrService,
    ServiceEntry,
    ServiceInfo,
)
from caption_tools.cdp.time_code import TimeCode
from caption_tools.cdp.writer import CDPWriter

__all__ = [
    "CDPParser",
    "CDPWriter",
    "Cea608AfterCea708Error",
    "ChecksumFailedError",
    "DigitalServiceEntry",
    "Field",
    "FieldOrService",
    "Flags",
    "Framerate",
    "FRAMERATES",
    "InvalidFixedBitsError",
    "InvalidServiceNumberError",
    "LengthMismatchError",
    "MAGIC",
    "MIN_PACKET_SIZE",
    "ParserError",
    "SectionID",
    "SequenceCountMismatchError",
    "ServiceEntry",
    "ServiceFlagsMismatchedError",
    "ServiceInfo",
    "ServiceNumberMismatchError",
    "TimeCode",
    "UnknownFramerateError",
    "ValidationError",
    "WouldOverflowError",
    "WriterError",
    "WrongMagicError",
]
