import enum
import logging
import struct
from dataclasses import dataclass

from .constants import QOI_HEADER_SIZE, QOI_MAGIC, QOI_MAX_DIMENSION
from .errors import HeaderTooShortError, InvalidMagicError

logger = logging.getLogger(__name__)

# QOI Header is 14 bytes:
# magic(4), width(4), height(4), channels(1), colorspace(1)
# > : Big Endian
# 4s: 4-byte string (magic)
# I : unsigned int (4 bytes)
# B : unsigned char (1 byte)
HEADER_FORMAT = ">4sIIBB"


class Channels(enum.IntEnum):
    RGB = 3
    RGBA = 4
    UNKNOWN = 1

    @classmethod
    def from_byte(cls, value: int) -> "Channels":
        if value == 3:
            return cls.RGB
        if value == 4:
            return cls.RGBA
        return cls.UNKNOWN


class Colorspace(enum.IntEnum):
    SRGB = 0
    LINEAR = 1
    UNKNOWN = 2

    @classmethod
    def from_byte(cls, value: int) -> "Colorspace":
        if value == 0:
            return cls.SRGB
        if value == 1:
            return cls.LINEAR
        return cls.UNKNOWN


@dataclass(frozen=True)
class QOIHeader:
    width: int
    height: int
    channels: Channels = Channels.RGBA
    colorspace: Colorspace = Colorspace.SRGB

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def pack(self) -> bytes:
        if not (0 <= self.width <= QOI_MAX_DIMENSION):
            raise ValueError("QOI.encode: Invalid description.width")

        if not (0 <= self.height <= QOI_MAX_DIMENSION):
            raise ValueError("QOI.encode: Invalid description.height")

        return struct.pack(
            HEADER_FORMAT,
            QOI_MAGIC,
            self.width,
            self.height,
            Channels.from_byte(int(self.channels)),
            Colorspace.from_byte(int(self.colorspace)),
        )

    @classmethod
    def unpack(cls, data: bytes) -> "QOIHeader":
        if len(data) < QOI_HEADER_SIZE:
            raise HeaderTooShortError("QOI.decode: File too short for header")

        magic, width, height, channels, colorspace = struct.unpack(
            HEADER_FORMAT, bytes(data[:QOI_HEADER_SIZE])
        )

        if magic != QOI_MAGIC:
            raise InvalidMagicError(
                "QOI.decode: The signature of the QOI file is invalid: %r"
                % magic.decode("ascii", errors="replace")
            )

        header = cls(
            width, height, Channels.from_byte(channels), Colorspace.from_byte(colorspace)
        )
        logger.debug("Parsed QOI header %s", header)
        return header
