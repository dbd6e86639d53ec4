import ctypes
from typing import ClassVar


# SMPTE 334-2-2007 Section 5.1 - cdp_header()
class _HeaderBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("cdp_identifier", ctypes.c_uint16),
        ("cdp_length", ctypes.c_uint8),
        ("cdp_frame_rate", ctypes.c_uint8, 4),
        ("reserved", ctypes.c_uint8, 4),  # always 0xF
        ("flags", ctypes.c_uint8),
        ("cdp_hdr_sequence_cntr", ctypes.c_uint16),
    ]


# SMPTE 334-2-2007 Section 5.1 - cdp_header() flags byte
class _FlagsBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("time_code_present", ctypes.c_uint8, 1),
        ("ccdata_present", ctypes.c_uint8, 1),
        ("svcinfo_present", ctypes.c_uint8, 1),
        ("svc_info_start", ctypes.c_uint8, 1),
        ("svc_info_change", ctypes.c_uint8, 1),
        ("svc_info_complete", ctypes.c_uint8, 1),
        ("caption_service_active", ctypes.c_uint8, 1),
        ("reserved", ctypes.c_uint8, 1),  # always 1
    ]


# SMPTE 334-2-2007 Section 5.2 - time_code_section()
class _TimeCodeBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("time_code_section_id", ctypes.c_uint8, 8),
        ("reserved_0", ctypes.c_uint8, 2),  # always 0x3
        ("tc_10hrs", ctypes.c_uint8, 2),
        ("tc_1hrs", ctypes.c_uint8, 4),
        ("reserved_1", ctypes.c_uint8, 1),  # always 1
        ("tc_10min", ctypes.c_uint8, 3),
        ("tc_1min", ctypes.c_uint8, 4),
        ("tc_field_flag", ctypes.c_uint8, 1),
        ("tc_10sec", ctypes.c_uint8, 3),
        ("tc_1sec", ctypes.c_uint8, 4),
        ("drop_frame_flag", ctypes.c_uint8, 1),
        ("zero", ctypes.c_uint8, 1),  # always 0
        ("tc_10fr", ctypes.c_uint8, 2),
        ("tc_1fr", ctypes.c_uint8, 4),
    ]


# SMPTE 334-2-2007 Section 5.3 - ccdata_section()
class _CCDataBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("ccdata_id", ctypes.c_uint8, 8),
        ("marker_bits", ctypes.c_uint8, 3),  # always 0x7
        ("cc_count", ctypes.c_uint8, 5),
    ]


# SMPTE 334-2-2007 Section 5.4 - ccsvcinfo_section()
class _ServiceInfoBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("ccsvcinfo_id", ctypes.c_uint8, 8),
        ("reserved", ctypes.c_uint8, 1),  # always 1
        ("svc_info_start", ctypes.c_uint8, 1),
        ("svc_info_change", ctypes.c_uint8, 1),
        ("svc_info_complete", ctypes.c_uint8, 1),
        ("svc_count", ctypes.c_uint8, 4),
    ]


# The leading byte of each service entry has two alternative layouts, chosen by csn_size.
class _ServiceNumberSmall(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("reserved", ctypes.c_uint8, 1),  # always 1
        ("csn_size", ctypes.c_uint8, 1),  # 0 for this layout
        ("caption_service_number", ctypes.c_uint8, 6),
    ]


class _ServiceNumberLarge(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("reserved_0", ctypes.c_uint8, 1),  # always 1
        ("csn_size", ctypes.c_uint8, 1),  # 1 for this layout
        ("reserved_1", ctypes.c_uint8, 1),  # always 1
        ("caption_service_number", ctypes.c_uint8, 5),
    ]


class _ServiceNumber(ctypes.BigEndianUnion):
    _pack_ = 1
    _fields_: ClassVar = [
        ("small", _ServiceNumberSmall),
        ("large", _ServiceNumberLarge),
    ]


# One caption service entry of a caption service descriptor
# ATSC A/65:2013 Section 6.9.2 / Table 6.26 - Caption Service Descriptor
class _ServiceDescriptorBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("language", ctypes.c_uint8 * 3),
        ("digital_cc", ctypes.c_uint8, 1),
        ("reserved_0", ctypes.c_uint8, 1),  # always 1
        # For digital_cc == 0, this is 5 reserved bits (always 0x1F) followed by line21_field.
        ("caption_service_number", ctypes.c_uint8, 6),
        ("easy_reader", ctypes.c_uint8, 1),
        ("wide_aspect_ratio", ctypes.c_uint8, 1),
        ("reserved_1", ctypes.c_uint8, 6),  # always 0x3F
        ("reserved_2", ctypes.c_uint8, 8),  # always 0xFF
    ]


# SMPTE 334-2-2007 Section 5.6 - future_section()
class _FutureSectionBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("future_section_id", ctypes.c_uint8, 8),
        ("length_of_data", ctypes.c_uint8, 8),
    ]


# SMPTE 334-2-2007 Section 5.7 - cdp_footer()
class _FooterBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("cdp_footer_id", ctypes.c_uint8),
        ("cdp_ftr_sequence_cntr", ctypes.c_uint16),
        ("packet_checksum", ctypes.c_uint8),
    ]
