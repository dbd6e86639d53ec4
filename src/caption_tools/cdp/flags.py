from __future__ import annotations

from dataclasses import dataclass

from .binary_types import _FlagsBinaryFields


# CDP header flags
# SMPTE 334-2-2007 Section 5.1 - cdp_header()
# Important notes:
#  - Only used while reading or writing the header byte; the parser and writer keep the
#    information in their own fields.
#  - The last bit is reserved and always written as 1.  Its value is recorded when reading but
#    nothing depends on it.
@dataclass(frozen=True, kw_only=True)
class Flags:
    time_code: bool = False
    cc_data: bool = False
    svc_info: bool = False
    svc_info_start: bool = False
    svc_info_change: bool = False
    svc_info_complete: bool = False
    caption_service_active: bool = False
    reserved: bool = True

    @classmethod
    def parse_binary(cls, value: int) -> Flags:
        bin = _FlagsBinaryFields.from_buffer_copy(bytes([value]))
        return cls(
            time_code=bin.time_code_present == 1,
            cc_data=bin.ccdata_present == 1,
            svc_info=bin.svcinfo_present == 1,
            svc_info_start=bin.svc_info_start == 1,
            svc_info_change=bin.svc_info_change == 1,
            svc_info_complete=bin.svc_info_complete == 1,
            caption_service_active=bin.caption_service_active == 1,
            reserved=bin.reserved == 1,
        )

    def to_binary(self) -> int:
        bin = _FlagsBinaryFields(
            time_code_present=self.time_code,
            ccdata_present=self.cc_data,
            svcinfo_present=self.svc_info,
            svc_info_start=self.svc_info_start,
            svc_info_change=self.svc_info_change,
            svc_info_complete=self.svc_info_complete,
            caption_service_active=self.caption_service_active,
            reserved=0x1,
        )
        return bytes(bin)[0]
