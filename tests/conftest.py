from pathlib import Path
from typing import Callable

import pytest

CDPFileWriter = Callable[[list[str], bool], Path]


# Fixtures shared by the file reading and command line tests.  They must be in the root tests
# directory so that every test package can use them.
@pytest.fixture
def cdp_file(tmp_path: Path) -> CDPFileWriter:
    """Write hex encoded CDPs to a temporary file, either as hex text lines or as raw binary."""

    def write(packets: list[str], hex: bool) -> Path:
        if hex:
            path = tmp_path / "packets.txt"
            path.write_text("".join(f"{packet}\n" for packet in packets))
        else:
            path = tmp_path / "packets.bin"
            path.write_bytes(b"".join(bytes.fromhex(packet) for packet in packets))
        return path

    return write
