from typing import NamedTuple

from .constants import QOI_CACHE_SIZE


class Pixel(NamedTuple):
    """A single RGBA pixel with 8-bit channels."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    @classmethod
    def opaque_black(cls) -> "Pixel":
        return cls(0, 0, 0, 255)

    @classmethod
    def transparent_black(cls) -> "Pixel":
        return cls(0, 0, 0, 0)

    def index_position(self) -> int:
        """Slot of this pixel in the 64-entry color cache."""
        return color_hash(self.red, self.green, self.blue, self.alpha)


OPAQUE_BLACK = Pixel.opaque_black()
TRANSPARENT_BLACK = Pixel.transparent_black()


def color_hash(r: int, g: int, b: int, a: int) -> int:
    """Calculates the index position for the color array."""
    return (r * 3 + g * 5 + b * 7 + a * 11) % QOI_CACHE_SIZE


def sub(a: int, b: int) -> int:
    """
    Difference of two channel values, reduced by a truncating remainder of 256.

    Unlike Python's ``%``, the result keeps the sign of ``a - b``, so
    ``sub(0, 255)`` is ``-255`` and not ``1``.
    """
    diff = a - b
    if diff < 0:
        return -(-diff % 256)
    return diff % 256


def wrapping_add(value: int, delta: int) -> int:
    return (value + delta) & 0xFF


def new_cache() -> list:
    """Index array: 64 pixels, initialized to (0, 0, 0, 0)."""
    return [TRANSPARENT_BLACK] * QOI_CACHE_SIZE
