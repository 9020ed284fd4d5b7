import numpy as np
import pytest

from qoicodec import Channels, Colorspace, Pixel, decode, encode
from qoicodec.decoder import OpKind, classify, read_opcode

from .conftest import body


def roundtrip(pixels, width, height, channels=Channels.RGBA, colorspace=Colorspace.SRGB):
    decoded = decode(encode(pixels, width, height, channels, colorspace))
    assert decoded == (pixels, width, height, channels, colorspace)
    return decoded


def opcodes(encoded):
    stream = body(encoded)
    ops = []
    pos = 0
    while pos < len(stream):
        op, pos = read_opcode(stream, pos, len(stream))
        ops.append(op)
    return ops


def test_empty():
    roundtrip([], 0, 0)


def test_single_pixel():
    roundtrip([Pixel(12, 34, 56, 78)], 1, 1)


@pytest.mark.parametrize("count", [1, 61, 62, 63, 124, 125, 200])
def test_solid_color(count):
    roundtrip([Pixel(40, 80, 120, 255)] * count, count, 1)


def test_run_never_exceeds_cap():
    pixels = [Pixel(40, 80, 120, 255)] * 500
    for op in opcodes(encode(pixels, 500, 1)):
        if op.kind is OpKind.RUN:
            assert op.payload[0] <= 62


def test_gradient(gradient):
    pixels, width, height = gradient
    roundtrip(pixels, width, height, Channels.RGB)
    kinds = {op.kind for op in opcodes(encode(pixels, width, height))}
    assert OpKind.DIFF in kinds or OpKind.LUMA in kinds


def test_repeated_non_adjacent_colors():
    palette = [Pixel(10, 20, 30, 255), Pixel(200, 100, 50, 255), Pixel(7, 250, 3, 255)]
    pixels = [palette[i % 3] for i in range(30)]
    roundtrip(pixels, 6, 5)
    kinds = [op.kind for op in opcodes(encode(pixels, 6, 5))]
    assert kinds.count(OpKind.INDEX) == 27


def test_colliding_colors():
    a = Pixel(10, 20, 30, 255)
    c = Pixel(74, 20, 30, 255)
    assert a.index_position() == c.index_position()
    roundtrip([a, c, a, c, a, a, c], 7, 1)


def test_alpha_variation():
    pixels = [Pixel(100, 100, 100, alpha) for alpha in range(0, 256, 5)]
    roundtrip(pixels, len(pixels), 1)
    kinds = [op.kind for op in opcodes(encode(pixels, len(pixels), 1))]
    assert all(kind in (OpKind.RGBA, OpKind.INDEX) for kind in kinds)


def test_alpha_change_never_uses_rgb_ops():
    rng = np.random.default_rng(7)
    values = rng.integers(0, 256, size=(300, 4))
    values[:, 3] = rng.choice([0, 128, 255], size=300)
    pixels = [Pixel(*px) for px in values.tolist()]
    encoded = encode(pixels, 20, 15)
    roundtrip(pixels, 20, 15)

    prev = Pixel.opaque_black()
    decoded, *_ = decode(encoded)
    pos = 0
    stream = body(encoded)
    i = 0
    while pos < len(stream):
        op, pos = read_opcode(stream, pos, len(stream))
        count = op.payload[0] if op.kind is OpKind.RUN else 1
        px = decoded[i]
        if px.alpha != prev.alpha:
            assert op.kind in (OpKind.RGBA, OpKind.INDEX)
        i += count
        prev = decoded[i - 1]


def test_random_noise():
    rng = np.random.default_rng(1234)
    values = rng.integers(0, 256, size=(32 * 24, 4))
    pixels = [Pixel(*px) for px in values.tolist()]
    roundtrip(pixels, 32, 24, Channels.RGBA, Colorspace.LINEAR)


def test_small_deltas_with_wraparound():
    rng = np.random.default_rng(99)
    steps = rng.integers(-3, 3, size=(400, 3))
    pixels = []
    r, g, b = 0, 255, 1
    for dr, dg, db in steps.tolist():
        r, g, b = (r + dr) % 256, (g + dg) % 256, (b + db) % 256
        pixels.append(Pixel(r, g, b, 255))
    roundtrip(pixels, 20, 20)


def test_unknown_tags_roundtrip():
    roundtrip([Pixel(1, 2, 3)], 1, 1, Channels.UNKNOWN, Colorspace.UNKNOWN)


def test_decode_encode_decode_is_stable(gradient):
    pixels, width, height = gradient
    first = decode(encode(pixels, width, height))
    second = decode(encode(*first))
    assert second == first


def test_classification_is_total():
    for byte in range(256):
        assert classify(byte) in OpKind
