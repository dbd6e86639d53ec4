from typing import Iterable


def hex_int(int_value: int, digits: int, skip_prefix: bool = False) -> str:
    return f"0x{int_value:0{digits}X}" if not skip_prefix else f"{int_value:0{digits}X}"


def hex_bytes(bytes_value: Iterable[int], separator: str = "") -> str:
    return "0x" + separator.join([hex_int(b, 2, skip_prefix=True) for b in bytes_value])


def checksum(data: bytes) -> int:
    """Return the byte that brings the unsigned 8-bit sum of data plus itself to zero."""
    total = 0
    for b in data:
        total = (total + b) & 0xFF
    # two's complement negation in the 8-bit domain: (~sum) + 1
    return ((~total) + 1) & 0xFF
