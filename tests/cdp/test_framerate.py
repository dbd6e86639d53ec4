from fractions import Fraction

import pytest

import caption_tools.cdp as cdp


@pytest.mark.parametrize(
    "id,fraction",
    [
        (0x1, Fraction(24000, 1001)),
        (0x2, Fraction(24)),
        (0x3, Fraction(25)),
        (0x4, Fraction(30000, 1001)),
        (0x5, Fraction(30)),
        (0x6, Fraction(50)),
        (0x7, Fraction(60000, 1001)),
        (0x8, Fraction(60)),
    ],
)
def test_framerate_lookup(id: int, fraction: Fraction) -> None:
    framerate = cdp.Framerate.from_id(id)
    assert framerate is not None
    assert framerate.id == id
    assert framerate.fraction == fraction
    assert cdp.FRAMERATES[id] is framerate


@pytest.mark.parametrize("id", [0x0, 0x9, 0xF, 0x10])
def test_framerate_lookup_invalid(id: int) -> None:
    assert cdp.Framerate.from_id(id) is None


def test_framerate_values() -> None:
    assert cdp.Framerate.from_id(0x3) == cdp.Framerate(id=0x3, numer=25, denom=1)
    assert str(cdp.Framerate.from_id(0x4)) == "30000/1001"
    assert len(cdp.FRAMERATES) == 8
