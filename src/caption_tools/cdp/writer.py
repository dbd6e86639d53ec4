"""Writing of complete CDPs."""

from __future__ import annotations

import ctypes
import io
from typing import BinaryIO

import caption_tools.cea708 as cea708
import caption_tools.data_util as du

from . import service as svc
from . import time_code as tc
from .base import MAGIC, SectionID, ValidationError
from .binary_types import _CCDataBinaryFields, _FooterBinaryFields, _HeaderBinaryFields
from .flags import Flags
from .framerate import Framerate

HEADER_SIZE = ctypes.sizeof(_HeaderBinaryFields)
FOOTER_SIZE = ctypes.sizeof(_FooterBinaryFields)
CC_DATA_HEADER_SIZE = ctypes.sizeof(_CCDataBinaryFields)


class CDPWriter:
    """Writes one CDP per video frame.

    DTVCC packets and CEA-608 pairs are queued with push_packet() and push_cea608(), and sent over
    as many frames as the framerate allows.  The time code, service information and sequence count
    are written with every packet until they are changed or flush() is called.
    """

    def __init__(self) -> None:
        self._cc_data_writer = cea708.CCDataWriter(output_padding=True, output_cea608_padding=True)
        self._time_code: tc.TimeCode | None = None
        self._service_info: svc.ServiceInfo | None = None
        self._sequence_count = 0
        self.caption_service_active = True

    @property
    def time_code(self) -> tc.TimeCode | None:
        return self._time_code

    @time_code.setter
    def time_code(self, time_code: tc.TimeCode | None) -> None:
        if time_code is not None:
            validation_message = time_code.validate()
            if validation_message is not None:
                raise ValidationError(validation_message)
        self._time_code = time_code

    @property
    def service_info(self) -> svc.ServiceInfo | None:
        """A copy of the service information written with every packet."""
        return self._service_info.copy() if self._service_info is not None else None

    @service_info.setter
    def service_info(self, service_info: svc.ServiceInfo | None) -> None:
        if service_info is not None:
            validation_message = service_info.validate()
            if validation_message is not None:
                raise ValidationError(validation_message)
            service_info = service_info.copy()
        self._service_info = service_info

    @property
    def sequence_count(self) -> int:
        return self._sequence_count

    @sequence_count.setter
    def sequence_count(self, sequence_count: int) -> None:
        if sequence_count < 0 or sequence_count > 0xFFFF:
            raise ValidationError(f"Sequence count {sequence_count} does not fit in 16 bits.")
        self._sequence_count = sequence_count

    def push_packet(self, packet: cea708.DTVCCPacket) -> None:
        self._cc_data_writer.push_packet(packet)

    def push_cea608(self, cea608: cea708.Cea608) -> None:
        self._cc_data_writer.push_cea608(cea608)

    def flush(self) -> None:
        """Drop all queued caption data and reset the time code, service info and sequence count."""
        self._cc_data_writer.flush()
        self._time_code = None
        self._service_info = None
        self._sequence_count = 0

    def write(self, framerate: Framerate, file: BinaryIO) -> None:
        """Write a single CDP for one frame at the given framerate."""
        cc_data = io.BytesIO()
        self._cc_data_writer.write(framerate.fraction, cc_data)
        cc_data_section = bytearray(cc_data.getvalue())
        # Replace the cc_data() header with the CDP section header.
        cc_data_section[0:CC_DATA_HEADER_SIZE] = bytes(
            _CCDataBinaryFields(
                ccdata_id=SectionID.CC_DATA,
                marker_bits=0x7,
                cc_count=cc_data_section[0] & 0x1F,
            )
        )

        time_code_section = self._time_code.to_binary() if self._time_code is not None else b""
        service_info = self._service_info
        svc_info_section = service_info.to_binary() if service_info is not None else b""

        length = (
            HEADER_SIZE
            + len(time_code_section)
            + len(cc_data_section)
            + len(svc_info_section)
            + FOOTER_SIZE
        )
        # At most 31 triples and 15 services can be queued, which always fits.
        assert length <= 0xFF

        flags = Flags(
            time_code=self._time_code is not None,
            cc_data=True,
            svc_info=service_info is not None,
            svc_info_start=service_info is not None and service_info.start,
            svc_info_change=service_info is not None and service_info.change,
            svc_info_complete=service_info is not None and service_info.complete,
            caption_service_active=self.caption_service_active,
        )
        header = _HeaderBinaryFields(
            cdp_identifier=int.from_bytes(MAGIC, byteorder="big"),
            cdp_length=length,
            cdp_frame_rate=framerate.id,
            reserved=0xF,
            flags=flags.to_binary(),
            cdp_hdr_sequence_cntr=self._sequence_count,
        )
        packet = bytearray(bytes(header))
        packet += time_code_section
        packet += cc_data_section
        packet += svc_info_section

        footer = _FooterBinaryFields(
            cdp_footer_id=SectionID.FOOTER,
            cdp_ftr_sequence_cntr=self._sequence_count,
        )
        packet += bytes(footer)[:-1]
        packet.append(du.checksum(packet))
        assert len(packet) == length
        file.write(packet)
