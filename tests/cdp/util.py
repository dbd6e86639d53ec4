import caption_tools.cdp as cdp
import caption_tools.cea708 as cea708

# A DTVCC packet with sequence number 0 carrying the letter "A" for service 1.  On the wire this
# is the packet 02 21 41 00, sent as the cc_data triples FF 02 21 and FE 41 00.
SINGLE_CODE_PACKET = cea708.DTVCCPacket(
    sequence_no=0,
    services=[cea708.Service(number=1, codes=[cea708.Code(data=b"A")])],
)

TIME_CODE_17_59_57_18 = cdp.TimeCode(
    hours=17, minutes=59, seconds=57, frames=18, field=True, drop_frame=True
)

ENG_FIELD_1 = cdp.ServiceEntry(language=b"eng", service=cdp.Field(field_1=True))
ENG_DIGITAL_1 = cdp.ServiceEntry(
    language=b"eng",
    service=cdp.DigitalServiceEntry(service=1, easy_reader=False, wide_aspect_ratio=True),
)

# header, time code, cc_data with SINGLE_CODE_PACKET, footer
TIME_CODE_CDP = (
    "96 69 18 3F C1 12 34 "
    "71 D7 D9 D7 98 "
    "72 E2 FF 02 21 FE 41 00 "
    "74 12 34 A4"
)

# Same as TIME_CODE_CDP, but with a future section between the cc_data and the footer.
FUTURE_SECTION_CDP = (
    "96 69 1C 3F C1 12 34 "
    "71 D7 D9 D7 98 "
    "72 E2 FF 02 21 FE 41 00 "
    "75 02 45 67 "
    "74 12 34 7D"
)

# Everything: time code, CEA-608 for both fields, a DTVCC packet and a service descriptor.
FULL_CDP = (
    "96 69 27 3F F7 12 34 "
    "71 D7 D9 D7 98 "
    "72 E4 FC 20 41 FD 42 43 FF 02 21 FE 41 00 "
    "73 D1 80 65 6E 67 7E 3F FF "
    "74 12 34 C4"
)

# A service descriptor and nothing else.
SERVICE_INFO_CDP = "96 69 14 3F 35 12 34 73 D1 80 65 6E 67 7E 3F FF 74 12 34 BF"

# The smallest possible CDP: header and footer only.
MINIMAL_CDP = "96 69 0B 3F 01 12 34 74 12 34 B6"
