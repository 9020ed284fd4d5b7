from .decoder import QOIDecoder, decode
from .encoder import QOIEncoder, encode
from .errors import (
    HeaderTooShortError,
    InvalidMagicError,
    MalformedHeaderError,
    PaddingMismatchError,
    PixelCountMismatchError,
    QOIError,
    TruncatedStreamError,
    UnrecognizedOpcodeError,
)
from .header import Channels, Colorspace, QOIHeader
from .image import QOIImage
from .pixel import OPAQUE_BLACK, TRANSPARENT_BLACK, Pixel
from .utils import load_image

__all__ = [
    "QOIEncoder",
    "QOIDecoder",
    "QOIImage",
    "QOIHeader",
    "Pixel",
    "Channels",
    "Colorspace",
    "OPAQUE_BLACK",
    "TRANSPARENT_BLACK",
    "encode",
    "decode",
    "load_image",
    "QOIError",
    "HeaderTooShortError",
    "MalformedHeaderError",
    "InvalidMagicError",
    "TruncatedStreamError",
    "UnrecognizedOpcodeError",
    "PaddingMismatchError",
    "PixelCountMismatchError",
]
