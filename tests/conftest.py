import pytest

from qoicodec import Pixel


def body(encoded: bytes) -> bytes:
    """Opcode stream of an encoded file, without header and end marker."""
    return encoded[14:-8]


@pytest.fixture
def gradient():
    width, height = 16, 8
    pixels = [
        Pixel((x * 3) % 256, (y * 5) % 256, (x + y) % 256, 255)
        for y in range(height)
        for x in range(width)
    ]
    return pixels, width, height
