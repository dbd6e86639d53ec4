"""Model classes for the caption service information section of a CDP."""

from __future__ import annotations

import ctypes
import dataclasses
import logging
from dataclasses import dataclass
from typing import ClassVar, TypeAlias

import caption_tools.data_util as du

from .base import (
    InvalidFixedBitsError,
    InvalidServiceNumberError,
    LengthMismatchError,
    SectionID,
    ServiceNumberMismatchError,
    ValidationError,
    WouldOverflowError,
    WrongMagicError,
)
from .binary_types import (
    _ServiceDescriptorBinaryFields,
    _ServiceInfoBinaryFields,
    _ServiceNumber,
    _ServiceNumberSmall,
)

logger = logging.getLogger(__name__)

HEADER_SIZE = ctypes.sizeof(_ServiceInfoBinaryFields)
DESCRIPTOR_SIZE = ctypes.sizeof(_ServiceDescriptorBinaryFields)
ENTRY_SIZE = ctypes.sizeof(_ServiceNumber) + DESCRIPTOR_SIZE


@dataclass(frozen=True, kw_only=True)
class Field:
    """A CEA-608 line 21 field."""

    field_1: bool  # True for field 1, False for field 2


@dataclass(frozen=True, kw_only=True)
class DigitalServiceEntry:
    """A CEA-708 caption service."""

    service: int
    easy_reader: bool = False
    wide_aspect_ratio: bool = False

    MAX_SERVICE_NUMBER: ClassVar[int] = 31


FieldOrService: TypeAlias = Field | DigitalServiceEntry


# Caption service entry
# ATSC A/65:2013 Section 6.9.2 / Table 6.26 - Caption Service Descriptor
# Important notes:
#  - The language is an ISO 639.2/B code encoded in ISO 8859-1.  It is not checked against any
#    list of real languages.
#  - easy_reader and wide_aspect_ratio are only defined for digital services.  They are written as
#    0 for CEA-608 fields and ignored when reading them.
@dataclass(frozen=True, kw_only=True)
class ServiceEntry:
    language: bytes  # always 3 bytes
    service: FieldOrService

    @property
    def language_str(self) -> str:
        return self.language.decode("latin-1")

    @property
    def service_number(self) -> int:
        """Service number used in the CDP service entry header; 0 for CEA-608 fields."""
        match self.service:
            case Field():
                return 0
            case DigitalServiceEntry(service=service):
                return service
            case _:
                assert False

    def validate(self) -> str | None:
        if len(self.language) != 3:
            return "The service language must be exactly 3 bytes."
        match self.service:
            case Field():
                pass
            case DigitalServiceEntry(service=service):
                if service < 1 or service > DigitalServiceEntry.MAX_SERVICE_NUMBER:
                    return f"Digital service number {service} is out of range."
            case _:
                assert False
        return None

    @classmethod
    def parse_binary(cls, descriptor_bytes: bytes) -> ServiceEntry:
        """Parse the 6 byte ATSC caption service descriptor entry."""
        assert len(descriptor_bytes) == DESCRIPTOR_SIZE
        bin = _ServiceDescriptorBinaryFields.from_buffer_copy(descriptor_bytes)
        if bin.reserved_0 != 0x1:
            raise InvalidFixedBitsError("Reserved bit in the caption service entry is not set.")
        service: FieldOrService
        if bin.digital_cc == 1:
            if bin.caption_service_number == 0:
                raise InvalidServiceNumberError()
            service = DigitalServiceEntry(
                service=bin.caption_service_number,
                easy_reader=bin.easy_reader == 1,
                wide_aspect_ratio=bin.wide_aspect_ratio == 1,
            )
        else:
            if bin.caption_service_number & 0x3E != 0x3E:
                raise InvalidFixedBitsError("Reserved bits before line21_field are not set.")
            service = Field(field_1=bin.caption_service_number & 0x01 == 0)
        if bin.reserved_1 != 0x3F or bin.reserved_2 != 0xFF:
            raise InvalidFixedBitsError("Reserved bits at the end of a service entry are not set.")
        return cls(language=bytes(bin.language), service=service)

    def to_binary(self) -> bytes:
        """Convert to the 6 byte ATSC caption service descriptor entry."""
        validation_message = self.validate()
        if validation_message is not None:
            raise ValidationError(validation_message)
        bin = _ServiceDescriptorBinaryFields(
            language=(ctypes.c_uint8 * 3)(*self.language),
            reserved_0=0x1,
            reserved_1=0x3F,
            reserved_2=0xFF,
        )
        match self.service:
            case Field(field_1=field_1):
                bin.digital_cc = 0
                bin.caption_service_number = 0x3E if field_1 else 0x3F
            case DigitalServiceEntry() as digital:
                bin.digital_cc = 1
                bin.caption_service_number = digital.service
                bin.easy_reader = digital.easy_reader
                bin.wide_aspect_ratio = digital.wide_aspect_ratio
            case _:
                assert False
        return bytes(bin)


# Caption service information section
# SMPTE 334-2-2007 Section 5.4 - ccsvcinfo_section()
# Important notes:
#  - A complete set of service information may be spread across multiple CDPs.  start, change and
#    complete describe where this section sits in that sequence.
#  - change can only be set together with start.  set_change() keeps this consistent, but parsed
#    data is taken as is.
#  - The CDP header flags repeat start/change/complete; the parser checks that they agree.
@dataclass(kw_only=True)
class ServiceInfo:
    start: bool = False
    change: bool = False
    complete: bool = False
    services: list[ServiceEntry] = dataclasses.field(default_factory=list)

    MAX_SERVICES: ClassVar[int] = 15

    def set_change(self, change: bool) -> None:
        """Set the change flag.  Setting it also sets the start flag."""
        self.change = change
        if change:
            self.start = True

    def add_service(self, service: ServiceEntry) -> None:
        if len(self.services) >= self.MAX_SERVICES:
            raise WouldOverflowError(1)
        validation_message = service.validate()
        if validation_message is not None:
            raise ValidationError(validation_message)
        self.services.append(service)

    def clear_services(self) -> None:
        self.services.clear()

    def copy(self) -> ServiceInfo:
        """Copy that shares no mutable state with this instance."""
        return dataclasses.replace(self, services=list(self.services))

    def byte_len(self) -> int:
        return HEADER_SIZE + ENTRY_SIZE * len(self.services)

    def validate(self) -> str | None:
        if len(self.services) > self.MAX_SERVICES:
            return f"At most {self.MAX_SERVICES} services can be described in one CDP."
        if self.change and not self.start:
            return "The change flag can only be set together with the start flag."
        for service in self.services:
            validation_message = service.validate()
            if validation_message is not None:
                return validation_message
        return None

    @classmethod
    def parse_binary(cls, section_bytes: bytes) -> ServiceInfo:
        """Create a new instance by parsing the section, including the section ID.

        The input must be exactly as long as the service count in the section says.
        """
        if len(section_bytes) < HEADER_SIZE:
            raise LengthMismatchError(expected=HEADER_SIZE, actual=len(section_bytes))
        bin = _ServiceInfoBinaryFields.from_buffer_copy(section_bytes, 0)
        if bin.ccsvcinfo_id != SectionID.SVC_INFO:
            raise WrongMagicError("Service information section has the wrong section ID.")
        if bin.reserved != 0x1:
            raise InvalidFixedBitsError("Reserved bit in the service info header is not set.")
        expected = HEADER_SIZE + ENTRY_SIZE * bin.svc_count
        if len(section_bytes) != expected:
            raise LengthMismatchError(expected=expected, actual=len(section_bytes))

        info = cls(
            start=bin.svc_info_start == 1,
            change=bin.svc_info_change == 1,
            complete=bin.svc_info_complete == 1,
        )
        for index in range(bin.svc_count):
            entry_start = HEADER_SIZE + ENTRY_SIZE * index
            entry_bytes = section_bytes[entry_start : entry_start + ENTRY_SIZE]
            logger.debug("Parsing service entry %s", du.hex_bytes(entry_bytes))
            number = _ServiceNumber.from_buffer_copy(entry_bytes, 0)
            if number.small.reserved != 0x1:
                raise InvalidFixedBitsError("Reserved bit in the service entry header is not set.")
            if number.small.csn_size == 1:
                if number.large.reserved_1 != 0x1:
                    raise InvalidFixedBitsError(
                        "Reserved bit in the large service entry header is not set."
                    )
                service_number = number.large.caption_service_number
            else:
                service_number = number.small.caption_service_number

            service = ServiceEntry.parse_binary(entry_bytes[1:])
            if service.service_number != service_number:
                raise ServiceNumberMismatchError()
            info.services.append(service)
        return info

    def to_binary(self) -> bytes:
        validation_message = self.validate()
        if validation_message is not None:
            raise ValidationError(validation_message)
        header = _ServiceInfoBinaryFields(
            ccsvcinfo_id=SectionID.SVC_INFO,
            reserved=0x1,
            svc_info_start=self.start,
            svc_info_change=self.change,
            svc_info_complete=self.complete,
            svc_count=len(self.services),
        )
        b = bytearray(bytes(header))
        for service in self.services:
            # Service numbers are at most 31, so they always fit in the small layout.
            number = _ServiceNumber(
                small=_ServiceNumberSmall(
                    reserved=0x1, csn_size=0x0, caption_service_number=service.service_number
                )
            )
            b += bytes(number)
            b += service.to_binary()
        assert len(b) == self.byte_len()
        return bytes(b)
