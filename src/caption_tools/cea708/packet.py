"""DTVCC packets and the caption service blocks they contain."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import ClassVar

import caption_tools.data_util as du

from .base import ParserError, ValidationError, WouldOverflowError
from .binary_types import (
    _ExtendedServiceBlockHeaderBinaryFields,
    _PacketHeaderBinaryFields,
    _ServiceBlockHeaderBinaryFields,
)
from .tables import Code, parse_codes

logger = logging.getLogger(__name__)


# Caption service block
# CEA-708-E Section 6.2 - Service Blocks
# Important notes:
#  - Service numbers 1 through 6 fit in the standard one byte header.  Service numbers 7 through 63
#    put 7 in the standard header and follow it with an extended header byte.
#  - A header byte of 0x00 is the null service block, used as padding at the end of a packet.
@dataclass(kw_only=True)
class Service:
    number: int
    codes: list[Code] = dataclasses.field(default_factory=list)

    MAX_BLOCK_SIZE: ClassVar[int] = 31
    MAX_STANDARD_SERVICE_NUMBER: ClassVar[int] = 6
    MAX_SERVICE_NUMBER: ClassVar[int] = 63

    def block_size(self) -> int:
        return sum(len(code.data) for code in self.codes)

    def header_len(self) -> int:
        return 1 if self.number <= self.MAX_STANDARD_SERVICE_NUMBER else 2

    def byte_len(self) -> int:
        return self.header_len() + self.block_size()

    def push_code(self, code: Code) -> None:
        validation_message = code.validate()
        if validation_message is not None:
            raise ValidationError(validation_message)
        overflow = self.block_size() + len(code.data) - self.MAX_BLOCK_SIZE
        if overflow > 0:
            raise WouldOverflowError(overflow)
        self.codes.append(code)

    def validate(self) -> str | None:
        if self.number < 1 or self.number > self.MAX_SERVICE_NUMBER:
            return f"Service number {self.number} is out of range."
        if self.block_size() > self.MAX_BLOCK_SIZE:
            return f"Service block for service {self.number} is larger than 31 bytes."
        for code in self.codes:
            validation_message = code.validate()
            if validation_message is not None:
                return validation_message
        return None

    def to_binary(self) -> bytes:
        validation_message = self.validate()
        if validation_message is not None:
            raise ValidationError(validation_message)
        extended = self.number > self.MAX_STANDARD_SERVICE_NUMBER
        header = bytes(
            _ServiceBlockHeaderBinaryFields(
                service_number=0x7 if extended else self.number,
                block_size=self.block_size(),
            )
        )
        if extended:
            header += bytes(
                _ExtendedServiceBlockHeaderBinaryFields(
                    null_fill=0x0, extended_service_number=self.number
                )
            )
        return header + b"".join(code.data for code in self.codes)


# DTVCC transport layer packet
# CEA-708-E Section 5 - DTVCC Packet Layer
@dataclass(kw_only=True)
class DTVCCPacket:
    sequence_no: int
    services: list[Service] = dataclasses.field(default_factory=list)

    MAX_DATA_SIZE: ClassVar[int] = 127

    @staticmethod
    def packet_len(header_byte: int) -> int:
        """Total packet length in bytes (header included) as announced by its header byte."""
        size_code = header_byte & 0x3F
        return 128 if size_code == 0 else size_code * 2

    def data_len(self) -> int:
        return sum(service.byte_len() for service in self.services)

    def push_service(self, service: Service) -> None:
        validation_message = service.validate()
        if validation_message is not None:
            raise ValidationError(validation_message)
        overflow = self.data_len() + service.byte_len() - self.MAX_DATA_SIZE
        if overflow > 0:
            raise WouldOverflowError(overflow)
        self.services.append(service)

    def validate(self) -> str | None:
        if self.sequence_no < 0 or self.sequence_no > 3:
            return f"DTVCC packet sequence number {self.sequence_no} is out of range."
        if self.data_len() > self.MAX_DATA_SIZE:
            return "DTVCC packet data is larger than 127 bytes."
        for service in self.services:
            validation_message = service.validate()
            if validation_message is not None:
                return validation_message
        return None

    def to_binary(self) -> bytes:
        validation_message = self.validate()
        if validation_message is not None:
            raise ValidationError(validation_message)
        data = b"".join(service.to_binary() for service in self.services)
        # Packets are sent as byte pairs, so the data after the header must have an odd length.
        # Pad with a null service block header.
        if len(data) % 2 == 0:
            data += b"\x00"
        size_code = (len(data) + 1) // 2
        header = _PacketHeaderBinaryFields(
            sequence_number=self.sequence_no,
            packet_size_code=0 if size_code == 64 else size_code,
        )
        b = bytes(header) + data
        assert len(b) == self.packet_len(b[0])
        return b

    @classmethod
    def parse_binary(cls, packet_bytes: bytes) -> DTVCCPacket | None:
        """Create a new packet from a complete reassembled DTVCC packet.

        Malformed service blocks cause None to be returned, so the packet can be discarded.
        """
        assert len(packet_bytes) == cls.packet_len(packet_bytes[0])
        header = _PacketHeaderBinaryFields.from_buffer_copy(packet_bytes, 0)
        packet = cls(sequence_no=header.sequence_number)

        data = packet_bytes[1:]
        pos = 0
        while pos < len(data):
            block_header = _ServiceBlockHeaderBinaryFields.from_buffer_copy(data, pos)
            if block_header.service_number == 0:
                if block_header.block_size != 0:
                    logger.debug("Null service block with non-zero size in DTVCC packet.")
                    return None
                # null service block: the remainder of the packet is padding
                break
            number = block_header.service_number
            header_len = 1
            if number == 0x7:
                if pos + 1 >= len(data):
                    logger.debug("Extended service block header is truncated.")
                    return None
                extended = _ExtendedServiceBlockHeaderBinaryFields.from_buffer_copy(data, pos + 1)
                number = extended.extended_service_number
                header_len = 2
                if number == 0:
                    logger.debug("Extended service block header has service number 0.")
                    return None
            block_start = pos + header_len
            block_end = block_start + block_header.block_size
            if block_end > len(data):
                logger.debug(
                    "Service block for service %d runs past the end of the DTVCC packet.", number
                )
                return None
            try:
                codes = parse_codes(data[block_start:block_end])
            except ParserError as e:
                logger.debug("Discarding DTVCC packet %s: %s", du.hex_bytes(packet_bytes), e)
                return None
            packet.services.append(Service(number=number, codes=codes))
            pos = block_end
        return packet
