import io
from dataclasses import dataclass, field

import pytest

import caption_tools.cdp as cdp
import caption_tools.cea708 as cea708
from tests.cdp.util import (
    ENG_DIGITAL_1,
    ENG_FIELD_1,
    SINGLE_CODE_PACKET,
    TIME_CODE_17_59_57_18,
)

PAL = cdp.FRAMERATES[0x3]
NTSC = cdp.FRAMERATES[0x4]
P60 = cdp.FRAMERATES[0x8]

# CEA-608 padding for both fields
CEA608_PADDING = "F8 80 80 F9 80 80"
# SINGLE_CODE_PACKET as cc_data triples
SINGLE_CODE_TRIPLES = "FF 02 21 FE 41 00"


def dtvcc_padding(count: int) -> str:
    return " ".join(["FA 00 00"] * count)


def write_packet(writer: cdp.CDPWriter, framerate: cdp.Framerate) -> bytes:
    output = io.BytesIO()
    writer.write(framerate, output)
    return output.getvalue()


@dataclass
class WriterTestCase:
    name: str
    framerate: cdp.Framerate
    output: str
    sequence_count: int = 0
    time_code: cdp.TimeCode | None = None
    service_info: cdp.ServiceInfo | None = None
    caption_service_active: bool = True
    packets: list[cea708.DTVCCPacket] = field(default_factory=list)
    cea608: list[cea708.Cea608] = field(default_factory=list)


@pytest.mark.parametrize(
    "tc",
    [
        WriterTestCase(
            name="time code and DTVCC packet",
            framerate=PAL,
            sequence_count=0x1234,
            time_code=TIME_CODE_17_59_57_18,
            packets=[SINGLE_CODE_PACKET],
            output="96 69 5A 3F C3 12 34 "
            "71 D7 D9 D7 98 "
            f"72 F8 {CEA608_PADDING} {SINGLE_CODE_TRIPLES} {dtvcc_padding(20)} "
            "74 12 34 D1",
        ),
        WriterTestCase(
            name="DTVCC packet only",
            framerate=PAL,
            sequence_count=0x3412,
            packets=[SINGLE_CODE_PACKET],
            output="96 69 55 3F 43 34 12 "
            f"72 F8 {CEA608_PADDING} {SINGLE_CODE_TRIPLES} {dtvcc_padding(20)} "
            "74 34 12 E6",
        ),
        WriterTestCase(
            name="everything",
            framerate=NTSC,
            sequence_count=3,
            time_code=cdp.TimeCode(
                hours=1, minutes=2, seconds=3, frames=4, field=True, drop_frame=False
            ),
            service_info=cdp.ServiceInfo(
                start=True, complete=True, services=[ENG_FIELD_1, ENG_DIGITAL_1]
            ),
            packets=[SINGLE_CODE_PACKET],
            cea608=[cea708.Cea608.field_1(0x41, 0x80)],
            output="96 69 5E 4F F7 00 03 "
            "71 C1 82 83 04 "
            f"72 F4 FC 41 80 F9 80 80 {SINGLE_CODE_TRIPLES} {dtvcc_padding(16)} "
            "73 D2 80 65 6E 67 7E 3F FF 81 65 6E 67 C1 7F FF "
            "74 00 03 D6",
        ),
        WriterTestCase(
            name="nothing queued",
            framerate=P60,
            output=f"96 69 2B 8F 43 00 00 72 EA {CEA608_PADDING} {dtvcc_padding(8)} 74 00 00 73",
        ),
    ],
    ids=lambda tc: tc.name,
)
def test_write(tc: WriterTestCase) -> None:
    writer = cdp.CDPWriter()
    writer.sequence_count = tc.sequence_count
    writer.time_code = tc.time_code
    writer.service_info = tc.service_info
    writer.caption_service_active = tc.caption_service_active
    for packet in tc.packets:
        writer.push_packet(packet)
    for pair in tc.cea608:
        writer.push_cea608(pair)

    output = write_packet(writer, tc.framerate)
    assert output == bytes.fromhex(tc.output)
    # the checksum makes the sum of all bytes zero
    assert sum(output) % 256 == 0

    parser = cdp.CDPParser()
    parser.parse(output)
    assert parser.framerate == tc.framerate
    assert parser.sequence == tc.sequence_count
    assert parser.time_code == tc.time_code
    assert parser.service_info == tc.service_info
    assert parser.caption_service_active == tc.caption_service_active
    assert parser.cea608() == tc.cea608
    packets = []
    while (packet := parser.pop_packet()) is not None:
        packets.append(packet)
    assert packets == tc.packets


def test_write_caption_service_inactive() -> None:
    writer = cdp.CDPWriter()
    writer.caption_service_active = False
    output = write_packet(writer, P60)
    assert output[4] == 0x41
    assert sum(output) % 256 == 0


@pytest.mark.parametrize("framerate", list(cdp.FRAMERATES.values()), ids=str)
def test_write_round_trip_every_framerate(framerate: cdp.Framerate) -> None:
    writer = cdp.CDPWriter()
    writer.sequence_count = 0xFFFF
    writer.time_code = TIME_CODE_17_59_57_18
    writer.service_info = cdp.ServiceInfo(start=True, services=[ENG_DIGITAL_1])
    writer.push_packet(SINGLE_CODE_PACKET)
    writer.push_cea608(cea708.Cea608.field_2(0x94, 0x2C))

    output = write_packet(writer, framerate)
    assert len(output) == output[2]
    assert sum(output) % 256 == 0
    # cc_count is the maximum for the framerate
    assert output[13] == 0xE0 | cea708.max_cc_count(framerate.fraction)

    parser = cdp.CDPParser()
    parser.parse(output)
    assert parser.framerate == framerate
    assert parser.sequence == 0xFFFF
    assert parser.time_code == TIME_CODE_17_59_57_18
    assert parser.service_info == cdp.ServiceInfo(start=True, services=[ENG_DIGITAL_1])
    assert parser.pop_packet() == SINGLE_CODE_PACKET
    assert parser.cea608() == [cea708.Cea608.field_2(0x94, 0x2C)]


def test_write_keeps_time_code_and_service_info() -> None:
    writer = cdp.CDPWriter()
    writer.time_code = TIME_CODE_17_59_57_18
    writer.service_info = cdp.ServiceInfo(complete=True, services=[ENG_FIELD_1])
    writer.sequence_count = 7
    first = write_packet(writer, PAL)
    second = write_packet(writer, PAL)
    assert first == second

    parser = cdp.CDPParser()
    parser.parse(second)
    assert parser.time_code == TIME_CODE_17_59_57_18
    assert parser.service_info == cdp.ServiceInfo(complete=True, services=[ENG_FIELD_1])
    assert parser.sequence == 7


def test_write_service_info_is_copied() -> None:
    writer = cdp.CDPWriter()
    service_info = cdp.ServiceInfo(start=True, services=[ENG_FIELD_1])
    writer.service_info = service_info
    service_info.add_service(ENG_DIGITAL_1)
    assert writer.service_info == cdp.ServiceInfo(start=True, services=[ENG_FIELD_1])


def test_write_service_info_getter_returns_copy() -> None:
    writer = cdp.CDPWriter()
    writer.service_info = cdp.ServiceInfo(start=True, services=[ENG_FIELD_1])
    expected = write_packet(writer, PAL)

    service_info = writer.service_info
    assert service_info is not None
    service_info.start = False
    service_info.change = True
    service_info.services.append(ENG_DIGITAL_1)

    assert writer.service_info == cdp.ServiceInfo(start=True, services=[ENG_FIELD_1])
    assert write_packet(writer, PAL) == expected


def test_write_packet_spans_frames() -> None:
    # 20 codes for service 1: 1 byte service header, 20 bytes of codes and 1 byte packet header,
    # which is 11 triples.  At 60 fps, only 8 triples are left after the CEA-608 padding.
    service = cea708.Service(number=1)
    for _ in range(20):
        service.push_code(cea708.Code.from_char("A"))
    packet = cea708.DTVCCPacket(sequence_no=2, services=[service])

    writer = cdp.CDPWriter()
    writer.push_packet(packet)
    parser = cdp.CDPParser()

    parser.parse(write_packet(writer, P60))
    assert parser.pop_packet() is None
    parser.parse(write_packet(writer, P60))
    assert parser.pop_packet() == packet


def test_write_cea608_one_pair_per_field_per_frame() -> None:
    writer = cdp.CDPWriter()
    writer.push_cea608(cea708.Cea608.field_1(0x14, 0x20))
    writer.push_cea608(cea708.Cea608.field_1(0x14, 0x2C))
    writer.push_cea608(cea708.Cea608.field_2(0x15, 0x20))
    parser = cdp.CDPParser()

    parser.parse(write_packet(writer, NTSC))
    assert parser.cea608() == [
        cea708.Cea608.field_1(0x14, 0x20),
        cea708.Cea608.field_2(0x15, 0x20),
    ]
    parser.parse(write_packet(writer, NTSC))
    assert parser.cea608() == [cea708.Cea608.field_1(0x14, 0x2C)]
    parser.parse(write_packet(writer, NTSC))
    assert parser.cea608() == []


def test_write_flush() -> None:
    writer = cdp.CDPWriter()
    writer.time_code = TIME_CODE_17_59_57_18
    writer.service_info = cdp.ServiceInfo(start=True, services=[ENG_FIELD_1])
    writer.sequence_count = 0x1234
    writer.push_packet(SINGLE_CODE_PACKET)
    writer.push_cea608(cea708.Cea608.field_1(0x20, 0x41))
    writer.flush()

    assert writer.time_code is None
    assert writer.service_info is None
    assert writer.sequence_count == 0
    assert write_packet(writer, P60) == bytes.fromhex(
        f"96 69 2B 8F 43 00 00 72 EA {CEA608_PADDING} {dtvcc_padding(8)} 74 00 00 73"
    )


def test_write_validation() -> None:
    writer = cdp.CDPWriter()
    with pytest.raises(cdp.ValidationError, match="does not fit in 16 bits"):
        writer.sequence_count = 0x10000
    with pytest.raises(cdp.ValidationError, match="does not fit in 16 bits"):
        writer.sequence_count = -1
    with pytest.raises(cdp.ValidationError, match="hours value is out of range"):
        writer.time_code = cdp.TimeCode(
            hours=24, minutes=0, seconds=0, frames=0, field=False, drop_frame=False
        )
    with pytest.raises(cdp.ValidationError, match="change flag"):
        writer.service_info = cdp.ServiceInfo(change=True)
    assert writer.sequence_count == 0
    assert writer.time_code is None
    assert writer.service_info is None

    with pytest.raises(cea708.ValidationError):
        writer.push_cea608(cea708.Cea608.field_1(0x100, 0x00))


def test_write_set_change_sets_start() -> None:
    service_info = cdp.ServiceInfo(services=[ENG_FIELD_1])
    service_info.set_change(True)
    writer = cdp.CDPWriter()
    writer.service_info = service_info
    output = write_packet(writer, PAL)
    flags = cdp.Flags.parse_binary(output[4])
    assert flags.svc_info
    assert flags.svc_info_start
    assert flags.svc_info_change
    assert not flags.svc_info_complete
