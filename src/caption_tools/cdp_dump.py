import argparse
import io
import logging
import sys
from typing import Iterator

from colorama import Fore, Style, just_fix_windows_console

import caption_tools.cdp as cdp
import caption_tools.cea708 as cea708
import caption_tools.data_util as du
import caption_tools.io_util as io_util


class CDPDumpArgs(argparse.Namespace):
    input_file: list[str]
    hex: bool
    rewrite: bool
    verbose: bool


def parse_args() -> CDPDumpArgs:
    parser = argparse.ArgumentParser(
        prog="cdp_dump",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description="Parse and summarize Caption Distribution Packets (SMPTE 334-2).",
    )
    parser.add_argument(
        "input_file",
        type=str,
        nargs=1,
        help="Input file of concatenated binary CDPs.  It must not be in any kind of container.",
    )
    parser.add_argument(
        "--hex",
        action="store_true",
        help="The input file is text with one hex encoded CDP per line.  Blank lines and lines "
        "starting with # are ignored.",
    )
    parser.add_argument(
        "--rewrite",
        action="store_true",
        help="Write every parsed packet again and check that it parses back to the same values.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every parsing step.",
    )

    return parser.parse_args(namespace=CDPDumpArgs())


def read_packets(input_filename: str, hex: bool) -> Iterator[bytes | str]:
    """Yield binary CDPs, or the undecoded lines of a hex file."""
    if hex:
        with open(input_filename, mode="rt") as text_file:
            yield from io_util.read_hex_lines(text_file)
    else:
        with open(input_filename, mode="rb") as binary_file:
            yield from io_util.read_cdp_packets(binary_file)


def format_service_entry(entry: cdp.ServiceEntry) -> str:
    match entry.service:
        case cdp.Field(field_1=field_1):
            return f"{entry.language_str}:field{1 if field_1 else 2}"
        case cdp.DigitalServiceEntry() as digital:
            attributes = ""
            if digital.easy_reader:
                attributes += "E"
            if digital.wide_aspect_ratio:
                attributes += "W"
            return f"{entry.language_str}:service{digital.service}{attributes}"
        case _:
            assert False


def format_service_info(service_info: cdp.ServiceInfo) -> str:
    flags = "".join(
        letter
        for letter, value in [
            ("S", service_info.start),
            ("C", service_info.change),
            ("F", service_info.complete),
        ]
        if value
    )
    entries = " ".join(format_service_entry(entry) for entry in service_info.services)
    return f"[{flags}] {entries}".rstrip()


def format_packet_text(packet: cea708.DTVCCPacket) -> str:
    services = []
    for service in packet.services:
        text = "".join(code.char or "." for code in service.codes)
        services.append(f"{service.number}:{text!r}")
    return f"DTVCC seq {packet.sequence_no} " + " ".join(services)


def dump_packet(index: int, parser: cdp.CDPParser) -> list[cea708.DTVCCPacket]:
    framerate = parser.framerate
    assert framerate is not None
    time_code = parser.time_code
    service_info = parser.service_info
    time_code_str = time_code.format_time_str() if time_code is not None else "--:--:--:--"
    line = (
        f"{index:6} seq {du.hex_int(parser.sequence, 4)} {framerate!s:>10} fps "
        f"{Fore.CYAN}{time_code_str}{Style.RESET_ALL}"
    )
    if service_info is not None:
        line += f" {Fore.MAGENTA}{format_service_info(service_info)}{Style.RESET_ALL}"
    print(line)

    packets = []
    while (packet := parser.pop_packet()) is not None:
        packets.append(packet)
        print(f"       {Fore.GREEN}{format_packet_text(packet)}{Style.RESET_ALL}")
    for pair in parser.cea608():
        print(
            f"       {Fore.YELLOW}CEA-608 field {pair.field.value + 1} "
            f"{du.hex_bytes([pair.byte_0, pair.byte_1])}{Style.RESET_ALL}"
        )
    return packets


def rewrite_packet(parser: cdp.CDPParser, packets: list[cea708.DTVCCPacket]) -> bool:
    """Write the parsed values as a new CDP and check that they survive a round trip."""
    framerate = parser.framerate
    assert framerate is not None

    writer = cdp.CDPWriter()
    writer.time_code = parser.time_code
    writer.service_info = parser.service_info
    writer.sequence_count = parser.sequence
    writer.caption_service_active = parser.caption_service_active
    for packet in packets:
        writer.push_packet(packet)
    for pair in parser.cea608():
        writer.push_cea608(pair)
    output = io.BytesIO()
    writer.write(framerate, output)

    check = cdp.CDPParser()
    check.parse(output.getvalue())
    return (
        check.framerate == parser.framerate
        and check.time_code == parser.time_code
        and check.sequence == parser.sequence
        and check.service_info == parser.service_info
        and check.caption_service_active == parser.caption_service_active
    )


def main() -> None:
    just_fix_windows_console()
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    input_filename = args.input_file[0]
    assert input_filename is not None

    parser = cdp.CDPParser()
    failures = 0
    for index, packet_data in enumerate(read_packets(input_filename, args.hex)):
        if isinstance(packet_data, str):
            try:
                data = bytes.fromhex(packet_data)
            except ValueError as e:
                failures += 1
                print(
                    f"{index:6} {Fore.RED}Invalid hex line: {e} ({packet_data}){Style.RESET_ALL}"
                )
                continue
        else:
            data = packet_data
        try:
            parser.parse(data)
        except cdp.ParserError as e:
            failures += 1
            print(
                f"{index:6} {Fore.RED}{type(e).__name__}: {e} "
                f"({du.hex_bytes(data, ' ')}){Style.RESET_ALL}"
            )
            continue
        packets = dump_packet(index, parser)

        if args.rewrite:
            try:
                matched = rewrite_packet(parser, packets)
            except (cdp.ValidationError, cea708.ValidationError, cdp.ParserError) as e:
                print(f"       {Fore.RED}Rewrite failed: {e}{Style.RESET_ALL}")
                failures += 1
                continue
            if matched:
                print(f"       {Fore.GREEN}Rewrite matches{Style.RESET_ALL}")
            else:
                print(f"       {Fore.RED}Rewrite does not match{Style.RESET_ALL}")
                failures += 1

    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
