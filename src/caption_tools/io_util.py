from typing import BinaryIO, Iterator, TextIO

# magic (2 bytes) followed by the cdp_length byte
CDP_PREFIX_SIZE = 3


def read_file_bytes(file: BinaryIO, chunk_size: int) -> bytearray:
    """Read exactly chunk_size bytes or until EOF"""

    rv = bytearray([])
    while len(rv) < chunk_size:
        remaining = chunk_size - len(rv)
        next_read = file.read(remaining)
        if len(next_read) == 0:
            return rv
        rv += next_read

    return bytearray(rv)


def read_cdp_packets(file: BinaryIO) -> Iterator[bytes]:
    """Split a stream of concatenated binary CDPs using each packet's own length byte.

    Nothing is validated here: a packet with a bad magic or an impossible length is still yielded
    so that the parser can report it.  A truncated final packet is yielded as-is.
    """
    while True:
        prefix = read_file_bytes(file, CDP_PREFIX_SIZE)
        if len(prefix) < CDP_PREFIX_SIZE:
            if prefix:
                yield bytes(prefix)
            return
        remainder = read_file_bytes(file, max(prefix[2] - CDP_PREFIX_SIZE, 0))
        yield bytes(prefix + remainder)


def read_hex_lines(file: TextIO) -> Iterator[str]:
    """Read one hex encoded CDP per line, skipping blank lines and lines starting with #.

    The lines are not decoded, so that a bad line can be reported without ending the iteration.
    Use bytes.fromhex to decode them; whitespace between bytes is allowed.
    """
    for line in file:
        line = line.strip()
        if line and not line.startswith("#"):
            yield line
