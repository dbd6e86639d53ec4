import sys
from pathlib import Path

import pytest

import caption_tools.cdp as cdp
import caption_tools.cdp_dump as cdp_dump
from tests.cdp.util import (
    ENG_DIGITAL_1,
    ENG_FIELD_1,
    FULL_CDP,
    MINIMAL_CDP,
    SERVICE_INFO_CDP,
    TIME_CODE_CDP,
)
from tests.conftest import CDPFileWriter


def run_dump(monkeypatch: pytest.MonkeyPatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["cdp_dump", *args])
    cdp_dump.main()


@pytest.mark.parametrize("hex", [False, True], ids=["binary", "hex"])
def test_dump(
    cdp_file: CDPFileWriter,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    hex: bool,
) -> None:
    path = cdp_file([TIME_CODE_CDP, FULL_CDP, SERVICE_INFO_CDP], hex)
    args = [str(path), "--hex"] if hex else [str(path)]
    run_dump(monkeypatch, *args)

    out = capsys.readouterr().out
    assert "17:59:57;18" in out
    assert "25/1 fps" in out
    assert "seq 0x1234" in out
    assert "DTVCC seq 0 1:'A'" in out
    assert "CEA-608 field 1 0x2041" in out
    assert "CEA-608 field 2 0x4243" in out
    assert "[SF] eng:field1" in out
    assert "--:--:--:--" in out


def test_dump_rewrite(
    cdp_file: CDPFileWriter,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = cdp_file([TIME_CODE_CDP, FULL_CDP, SERVICE_INFO_CDP, MINIMAL_CDP], True)
    run_dump(monkeypatch, str(path), "--hex", "--rewrite")

    out = capsys.readouterr().out
    assert out.count("Rewrite matches") == 4
    assert "Rewrite does not match" not in out


def test_dump_parse_failure(
    cdp_file: CDPFileWriter,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    # the checksum of the second packet is wrong
    path = cdp_file([MINIMAL_CDP, MINIMAL_CDP[:-2] + "B7", SERVICE_INFO_CDP], True)
    with pytest.raises(SystemExit) as exc_info:
        run_dump(monkeypatch, str(path), "--hex")
    assert exc_info.value.code == 1

    out = capsys.readouterr().out
    assert "ChecksumFailedError" in out
    # parsing continues after a failure
    assert "[SF] eng:field1" in out


def test_format_service_info() -> None:
    assert cdp_dump.format_service_info(cdp.ServiceInfo()) == "[]"
    assert (
        cdp_dump.format_service_info(
            cdp.ServiceInfo(start=True, change=True, services=[ENG_FIELD_1, ENG_DIGITAL_1])
        )
        == "[SC] eng:field1 eng:service1W"
    )
    easy_reader = cdp.ServiceEntry(
        language=b"spa",
        service=cdp.DigitalServiceEntry(service=2, easy_reader=True, wide_aspect_ratio=True),
    )
    assert cdp_dump.format_service_entry(easy_reader) == "spa:service2EW"


def test_dump_invalid_hex_line(
    cdp_file: CDPFileWriter,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = cdp_file([MINIMAL_CDP, "zz", SERVICE_INFO_CDP], True)
    with pytest.raises(SystemExit) as exc_info:
        run_dump(monkeypatch, str(path), "--hex")
    assert exc_info.value.code == 1

    out = capsys.readouterr().out
    assert "Invalid hex line" in out
    assert "(zz)" in out
    # the packets after the bad line are still dumped
    assert "[SF] eng:field1" in out


def test_dump_sample_file(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    sample = Path(__file__).parent / "data" / "sample_cdps.txt"
    run_dump(monkeypatch, str(sample), "--hex", "--rewrite")

    out = capsys.readouterr().out
    assert out.count("Rewrite matches") == 5
