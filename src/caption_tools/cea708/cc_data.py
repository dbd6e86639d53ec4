"""Reading and writing cc_data(): the triples that carry CEA-608 pairs and DTVCC packets."""

from __future__ import annotations

import ctypes
import logging
from collections import deque
from enum import IntEnum
from fractions import Fraction
from typing import BinaryIO

import caption_tools.data_util as du

from .base import Cea608AfterCea708Error, LengthMismatchError
from .binary_types import _CCDataHeaderBinaryFields, _TripleBinaryFields
from .cea608 import Cea608, Cea608Field
from .packet import DTVCCPacket

logger = logging.getLogger(__name__)


# CEA-708-E Section 4.4 / Table 3 - cc_type values
class CCType(IntEnum):
    NTSC_CC_FIELD_1 = 0x0
    NTSC_CC_FIELD_2 = 0x1
    DTVCC_PACKET_DATA = 0x2
    DTVCC_PACKET_START = 0x3


# The entire cc_data() bandwidth is 9600 bits per second, sent as 16-bit pairs.
CC_DATA_TRIPLES_PER_SECOND = 600


def max_cc_count(framerate: Fraction) -> int:
    """Maximum number of cc_data triples that may be sent with one frame."""
    return int(CC_DATA_TRIPLES_PER_SECOND / framerate)


HEADER_SIZE = ctypes.sizeof(_CCDataHeaderBinaryFields)
TRIPLE_SIZE = ctypes.sizeof(_TripleBinaryFields)


def _triple(cc_valid: bool, cc_type: CCType, cc_data_1: int, cc_data_2: int) -> bytes:
    return bytes(
        _TripleBinaryFields(
            marker_bits=0x1F,
            cc_valid=1 if cc_valid else 0,
            cc_type=cc_type,
            cc_data_1=cc_data_1,
            cc_data_2=cc_data_2,
        )
    )


class CCDataParser:
    """Incrementally parses cc_data() buffers.

    DTVCC packets may be split over multiple cc_data() buffers; a partially received packet is kept
    until the rest of it is pushed.  Complete packets are queued until popped.  CEA-608 pairs are
    only kept for the most recently pushed buffer.
    """

    def __init__(self) -> None:
        self._pending_packet: bytearray | None = None
        self._packets: deque[DTVCCPacket] = deque()
        self._cea608: list[Cea608] = []

    def push(self, data: bytes) -> None:
        """Parse one complete cc_data() buffer: header byte, em_data byte, then cc_count triples.

        The buffer is checked fully before any internal state is changed.
        """
        if len(data) < HEADER_SIZE:
            raise LengthMismatchError(expected=HEADER_SIZE, actual=len(data))
        header = _CCDataHeaderBinaryFields.from_buffer_copy(data, 0)
        expected = HEADER_SIZE + header.cc_count * TRIPLE_SIZE
        if len(data) < expected:
            raise LengthMismatchError(expected=expected, actual=len(data))

        triples = [
            _TripleBinaryFields.from_buffer_copy(data, HEADER_SIZE + i * TRIPLE_SIZE)
            for i in range(header.cc_count)
        ]
        # CEA-708-E Section 4.4: all CEA-608 pairs must come before any DTVCC data.
        seen_dtvcc = False
        for i, triple in enumerate(triples):
            if triple.cc_type in (CCType.DTVCC_PACKET_DATA, CCType.DTVCC_PACKET_START):
                seen_dtvcc = True
            elif triple.cc_valid and seen_dtvcc:
                raise Cea608AfterCea708Error(byte_pos=HEADER_SIZE + i * TRIPLE_SIZE)

        self._cea608 = []
        if not header.process_cc_data_flag:
            return

        for triple in triples:
            if not triple.cc_valid:
                continue
            match CCType(triple.cc_type):
                case CCType.NTSC_CC_FIELD_1 | CCType.NTSC_CC_FIELD_2:
                    self._cea608.append(
                        Cea608(
                            field=Cea608Field(triple.cc_type),
                            byte_0=triple.cc_data_1,
                            byte_1=triple.cc_data_2,
                        )
                    )
                case CCType.DTVCC_PACKET_START:
                    if self._pending_packet is not None:
                        logger.debug(
                            "Dropping incomplete DTVCC packet %s",
                            du.hex_bytes(self._pending_packet),
                        )
                    self._pending_packet = bytearray([triple.cc_data_1, triple.cc_data_2])
                    self._complete_pending_packet()
                case CCType.DTVCC_PACKET_DATA:
                    if self._pending_packet is None:
                        logger.debug("Ignoring DTVCC packet data without a packet start.")
                        continue
                    self._pending_packet += bytes([triple.cc_data_1, triple.cc_data_2])
                    self._complete_pending_packet()
                case _:
                    assert False

    def _complete_pending_packet(self) -> None:
        assert self._pending_packet is not None
        packet_len = DTVCCPacket.packet_len(self._pending_packet[0])
        if len(self._pending_packet) < packet_len:
            return
        packet = DTVCCPacket.parse_binary(bytes(self._pending_packet[:packet_len]))
        if packet is not None:
            self._packets.append(packet)
        self._pending_packet = None

    def pop_packet(self) -> DTVCCPacket | None:
        """Pop the oldest complete DTVCC packet, or None if there are none."""
        return self._packets.popleft() if self._packets else None

    def cea608(self) -> list[Cea608]:
        """The CEA-608 pairs contained in the most recently pushed buffer."""
        return list(self._cea608)

    def flush(self) -> None:
        self._pending_packet = None
        self._packets.clear()
        self._cea608 = []


class CCDataWriter:
    """Produces one cc_data() buffer per video frame from queued DTVCC packets and CEA-608 pairs.

    Queued data that does not fit in the bandwidth of one frame stays queued for the next write.
    """

    def __init__(self, *, output_padding: bool = False, output_cea608_padding: bool = False):
        # Pad the buffer with invalid DTVCC triples up to the maximum for the framerate.
        self.output_padding = output_padding
        # Send invalid CEA-608 pairs for each field that has nothing queued.
        self.output_cea608_padding = output_cea608_padding
        self._cea608: dict[Cea608Field, deque[Cea608]] = {
            Cea608Field.FIELD_1: deque(),
            Cea608Field.FIELD_2: deque(),
        }
        self._dtvcc_triples: deque[bytes] = deque()

    def push_packet(self, packet: DTVCCPacket) -> None:
        data = packet.to_binary()
        for i in range(0, len(data), 2):
            self._dtvcc_triples.append(
                _triple(
                    True,
                    CCType.DTVCC_PACKET_START if i == 0 else CCType.DTVCC_PACKET_DATA,
                    data[i],
                    data[i + 1],
                )
            )

    def push_cea608(self, cea608: Cea608) -> None:
        cea608.to_binary()  # validation
        self._cea608[cea608.field].append(cea608)

    def flush(self) -> None:
        for queue in self._cea608.values():
            queue.clear()
        self._dtvcc_triples.clear()

    def write(self, framerate: Fraction, file: BinaryIO) -> None:
        max_count = max_cc_count(framerate)
        triples: list[bytes] = []
        for field, queue in self._cea608.items():
            if queue:
                pair = queue.popleft()
                triples.append(_triple(True, CCType(field), pair.byte_0, pair.byte_1))
            elif self.output_cea608_padding:
                triples.append(_triple(False, CCType(field), 0x80, 0x80))
        while len(triples) < max_count and self._dtvcc_triples:
            triples.append(self._dtvcc_triples.popleft())
        if self.output_padding:
            while len(triples) < max_count:
                triples.append(_triple(False, CCType.DTVCC_PACKET_DATA, 0x00, 0x00))
        assert len(triples) <= 0x1F

        header = _CCDataHeaderBinaryFields(
            process_em_data_flag=1,
            process_cc_data_flag=1,
            additional_data_flag=0,
            cc_count=len(triples),
            em_data=0xFF,
        )
        file.write(bytes([*bytes(header), *b"".join(triples)]))
