import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .decoder import QOIDecoder
from .encoder import QOIEncoder
from .header import Channels, Colorspace
from .pixel import OPAQUE_BLACK, Pixel
from .utils import array_to_pixels, pixels_to_array

logger = logging.getLogger(__name__)


@dataclass
class QOIImage:
    """
    A QOI image in encoded form, decoded form, or both.

    The two forms are not kept in sync: ``decode()`` and ``encode()`` each
    return a new container built from the one they are called on.
    """

    encoded: Optional[bytes] = None
    pixels: list = field(default_factory=list, repr=False)
    width: int = 0
    height: int = 0
    channels: Channels = Channels.UNKNOWN
    colorspace: Colorspace = Colorspace.UNKNOWN

    @classmethod
    def from_bytes(cls, data: bytes) -> "QOIImage":
        return cls(encoded=bytes(data))

    @classmethod
    def load_from_file(cls, path) -> "QOIImage":
        with open(path, "rb") as f:
            content = f.read()
        logger.debug("Read %d bytes from %s", len(content), path)
        return cls.from_bytes(content)

    @classmethod
    def from_pixels(
        cls,
        pixels,
        width: int,
        height: int,
        channels: Channels = Channels.RGBA,
        colorspace: Colorspace = Colorspace.SRGB,
    ) -> "QOIImage":
        pixels = [px if isinstance(px, Pixel) else Pixel(*px) for px in pixels]
        if len(pixels) != width * height:
            raise ValueError("QOIImage: The length of pixels is incorrect")
        return cls(
            pixels=pixels,
            width=width,
            height=height,
            channels=Channels.from_byte(int(channels)),
            colorspace=Colorspace.from_byte(int(colorspace)),
        )

    @classmethod
    def from_array(cls, array: np.ndarray, colorspace: Colorspace = Colorspace.SRGB) -> "QOIImage":
        """Build an image from a (height, width, 3|4) uint8 array."""
        pixels = array_to_pixels(array)
        height, width, channels = np.shape(array)
        return cls.from_pixels(pixels, width, height, Channels.from_byte(channels), colorspace)

    def decode(self) -> "QOIImage":
        if self.encoded is None:
            raise ValueError("QOIImage: There is no encoded data to decode")

        pixels, width, height, channels, colorspace = QOIDecoder.decode(self.encoded)
        return QOIImage(
            encoded=self.encoded,
            pixels=pixels,
            width=width,
            height=height,
            channels=channels,
            colorspace=colorspace,
        )

    def encode(self) -> "QOIImage":
        encoded = QOIEncoder.encode(
            self.pixels, self.width, self.height, self.channels, self.colorspace
        )
        return QOIImage(
            encoded=encoded,
            pixels=list(self.pixels),
            width=self.width,
            height=self.height,
            channels=self.channels,
            colorspace=self.colorspace,
        )

    def get(self, x: int, y: int) -> Pixel:
        """Pixel at column x, row y; opaque black when out of range."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return OPAQUE_BLACK

        idx = y * self.width + x
        if idx >= len(self.pixels):
            return OPAQUE_BLACK
        return self.pixels[idx]

    def to_array(self) -> np.ndarray:
        channels = 3 if self.channels == Channels.RGB else 4
        return pixels_to_array(self.pixels, self.width, self.height, channels)

    def save(self, path) -> int:
        if self.encoded is None:
            raise ValueError("QOIImage: Encode the image before saving it")

        with open(path, "wb") as f:
            f.write(self.encoded)
        return len(self.encoded)
