import ctypes
from typing import ClassVar


# CEA-708-E Section 4.4 / Table 2 - cc_data() structure
class _CCDataHeaderBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("process_em_data_flag", ctypes.c_uint8, 1),
        ("process_cc_data_flag", ctypes.c_uint8, 1),
        ("additional_data_flag", ctypes.c_uint8, 1),
        ("cc_count", ctypes.c_uint8, 5),
        ("em_data", ctypes.c_uint8, 8),
    ]


class _TripleBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("marker_bits", ctypes.c_uint8, 5),  # always 0x1F
        ("cc_valid", ctypes.c_uint8, 1),
        ("cc_type", ctypes.c_uint8, 2),
        ("cc_data_1", ctypes.c_uint8, 8),
        ("cc_data_2", ctypes.c_uint8, 8),
    ]


# CEA-708-E Section 5 - DTVCC Packet Layer
class _PacketHeaderBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("sequence_number", ctypes.c_uint8, 2),
        ("packet_size_code", ctypes.c_uint8, 6),
    ]


# CEA-708-E Section 6.2.1 - Service Block Header
class _ServiceBlockHeaderBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("service_number", ctypes.c_uint8, 3),
        ("block_size", ctypes.c_uint8, 5),
    ]


# CEA-708-E Section 6.2.2 - Extended Service Block Header
class _ExtendedServiceBlockHeaderBinaryFields(ctypes.BigEndianStructure):
    _pack_ = 1
    _fields_: ClassVar = [
        ("null_fill", ctypes.c_uint8, 2),  # always 0
        ("extended_service_number", ctypes.c_uint8, 6),
    ]
