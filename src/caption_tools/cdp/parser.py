"""Parsing of complete CDPs."""

from __future__ import annotations

import ctypes
import logging

import caption_tools.cea708 as cea708
import caption_tools.data_util as du
from caption_tools.cea708.cc_data import TRIPLE_SIZE

from . import service as svc
from . import time_code as tc
from .base import (
    MAGIC,
    MIN_PACKET_SIZE,
    Cea608AfterCea708Error,
    ChecksumFailedError,
    InvalidFixedBitsError,
    LengthMismatchError,
    SectionID,
    SequenceCountMismatchError,
    ServiceFlagsMismatchedError,
    UnknownFramerateError,
    WrongMagicError,
)
from .binary_types import (
    _CCDataBinaryFields,
    _FooterBinaryFields,
    _FutureSectionBinaryFields,
    _HeaderBinaryFields,
)
from .flags import Flags
from .framerate import Framerate

logger = logging.getLogger(__name__)

HEADER_SIZE = ctypes.sizeof(_HeaderBinaryFields)
CC_DATA_HEADER_SIZE = ctypes.sizeof(_CCDataBinaryFields)
FUTURE_SECTION_HEADER_SIZE = ctypes.sizeof(_FutureSectionBinaryFields)
FOOTER_SIZE = ctypes.sizeof(_FooterBinaryFields)


class CDPParser:
    """Parses CDPs one complete packet at a time.

    The time code, framerate, sequence count and service information of the last successfully
    parsed packet are available as properties.  A packet that fails to parse leaves all of them
    untouched.

    The caption data of each packet is handed to a CEA-708 cc_data parser, which collects DTVCC
    packets across CDPs.  Use pop_packet() to retrieve them and cea608() to get the CEA-608 pairs
    of the last packet.
    """

    def __init__(self) -> None:
        self._cc_data_parser = cea708.CCDataParser()
        self._time_code: tc.TimeCode | None = None
        self._framerate: Framerate | None = None
        self._sequence = 0
        self._service_info: svc.ServiceInfo | None = None
        self._caption_service_active = False
        self._cea608: list[cea708.Cea608] = []

    @property
    def time_code(self) -> tc.TimeCode | None:
        return self._time_code

    @property
    def framerate(self) -> Framerate | None:
        return self._framerate

    @property
    def sequence(self) -> int:
        return self._sequence

    @property
    def service_info(self) -> svc.ServiceInfo | None:
        return self._service_info.copy() if self._service_info is not None else None

    @property
    def caption_service_active(self) -> bool:
        return self._caption_service_active

    def parse(self, data: bytes) -> None:
        """Parse one complete CDP.

        Raises a ParserError subclass describing the first problem found.
        """
        logger.debug("Parsing CDP %s", du.hex_bytes(data, " "))

        # SMPTE 334-2-2007 Section 5.1 - cdp_header()
        if len(data) < MIN_PACKET_SIZE:
            raise LengthMismatchError(expected=MIN_PACKET_SIZE, actual=len(data))
        if data[0 : len(MAGIC)] != MAGIC:
            raise WrongMagicError("CDP does not start with the CDP identifier.")
        header = _HeaderBinaryFields.from_buffer_copy(data, 0)
        if header.cdp_length != len(data):
            raise LengthMismatchError(expected=header.cdp_length, actual=len(data))
        framerate = Framerate.from_id(header.cdp_frame_rate)
        if framerate is None:
            raise UnknownFramerateError(header.cdp_frame_rate)
        flags = Flags.parse_binary(header.flags)
        sequence = header.cdp_hdr_sequence_cntr
        idx = HEADER_SIZE

        time_code = None
        if flags.time_code:
            logger.debug("Parsing time code section")
            _check_length(data, idx + tc.SECTION_SIZE)
            time_code = tc.TimeCode.parse_binary(data[idx : idx + tc.SECTION_SIZE])
            idx += tc.SECTION_SIZE

        cc_data = None
        if flags.cc_data:
            logger.debug("Parsing cc_data section")
            _check_length(data, idx + CC_DATA_HEADER_SIZE)
            cc_header = _CCDataBinaryFields.from_buffer_copy(data, idx)
            if cc_header.ccdata_id != SectionID.CC_DATA:
                raise WrongMagicError("cc_data section has the wrong section ID.")
            if cc_header.marker_bits != 0x7:
                raise InvalidFixedBitsError("Marker bits before cc_count are not set.")
            idx += CC_DATA_HEADER_SIZE
            triples_len = cc_header.cc_count * TRIPLE_SIZE
            _check_length(data, idx + triples_len)
            # Give the CEA-708 parser its own cc_data() header: process_em_data_flag,
            # process_cc_data_flag, cc_count, then an em_data byte.
            cc_data_header = bytes([0x80 | 0x40 | cc_header.cc_count, 0xFF])
            cc_data = cc_data_header + data[idx : idx + triples_len]
            idx += triples_len

        service_info = None
        if flags.svc_info:
            logger.debug("Parsing service information section")
            _check_length(data, idx + svc.HEADER_SIZE)
            if data[idx] != SectionID.SVC_INFO:
                raise WrongMagicError("Service information section has the wrong section ID.")
            svc_count = data[idx + 1] & 0x0F
            svc_size = svc.HEADER_SIZE + svc.ENTRY_SIZE * svc_count
            _check_length(data, idx + svc_size)
            service_info = svc.ServiceInfo.parse_binary(data[idx : idx + svc_size])
            if (
                service_info.start != flags.svc_info_start
                or service_info.change != flags.svc_info_change
                or service_info.complete != flags.svc_info_complete
            ):
                raise ServiceFlagsMismatchedError()
            idx += svc_size

        # SMPTE 334-2-2007 Section 5.6 - future_section()
        _check_length(data, idx + FUTURE_SECTION_HEADER_SIZE)
        while data[idx] != SectionID.FOOTER:
            section = _FutureSectionBinaryFields.from_buffer_copy(data, idx)
            if not SectionID.FUTURE_FIRST <= section.future_section_id <= SectionID.FUTURE_LAST:
                raise WrongMagicError(
                    f"Unknown section ID {du.hex_int(section.future_section_id, 2)}."
                )
            logger.debug(
                "Skipping future section %s with %d bytes",
                du.hex_int(section.future_section_id, 2),
                section.length_of_data,
            )
            idx += FUTURE_SECTION_HEADER_SIZE + section.length_of_data
            _check_length(data, idx + FUTURE_SECTION_HEADER_SIZE)

        # SMPTE 334-2-2007 Section 5.7 - cdp_footer()
        # The footer must be the last thing in the packet.
        if idx + FOOTER_SIZE != len(data):
            raise LengthMismatchError(expected=idx + FOOTER_SIZE, actual=len(data))
        footer = _FooterBinaryFields.from_buffer_copy(data, idx)
        if footer.cdp_ftr_sequence_cntr != sequence:
            raise SequenceCountMismatchError(header=sequence, footer=footer.cdp_ftr_sequence_cntr)
        checksum = du.checksum(data[:-1])
        if checksum != footer.packet_checksum:
            raise ChecksumFailedError(expected=checksum, actual=footer.packet_checksum)

        cea608: list[cea708.Cea608] = []
        if cc_data is not None:
            try:
                self._cc_data_parser.push(cc_data)
            except cea708.LengthMismatchError as e:
                raise LengthMismatchError(expected=e.expected, actual=e.actual) from e
            except cea708.Cea608AfterCea708Error as e:
                raise Cea608AfterCea708Error() from e
            cea608 = self._cc_data_parser.cea608()

        self._time_code = time_code
        self._framerate = framerate
        self._sequence = sequence
        self._service_info = service_info
        self._caption_service_active = flags.caption_service_active
        self._cea608 = cea608

    def pop_packet(self) -> cea708.DTVCCPacket | None:
        """Pop the oldest complete DTVCC packet, or None if there are none."""
        return self._cc_data_parser.pop_packet()

    def cea608(self) -> list[cea708.Cea608]:
        """The CEA-608 pairs contained in the last parsed packet."""
        return list(self._cea608)

    def flush(self) -> None:
        """Forget everything, including partially received DTVCC packets."""
        self._cc_data_parser.flush()
        self._time_code = None
        self._framerate = None
        self._sequence = 0
        self._service_info = None
        self._caption_service_active = False
        self._cea608 = []


def _check_length(data: bytes, expected: int) -> None:
    if len(data) < expected:
        raise LengthMismatchError(expected=expected, actual=len(data))
