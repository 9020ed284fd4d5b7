import enum
import logging
from typing import NamedTuple

from .constants import (
    QOI_END_MARKER,
    QOI_HEADER_SIZE,
    QOI_MASK_2,
    QOI_MASK_6,
    QOI_OP_DIFF,
    QOI_OP_INDEX,
    QOI_OP_LUMA,
    QOI_OP_RGB,
    QOI_OP_RGBA,
    QOI_OP_RUN,
)
from .errors import (
    PaddingMismatchError,
    PixelCountMismatchError,
    TruncatedStreamError,
    UnrecognizedOpcodeError,
)
from .header import Channels, Colorspace, QOIHeader
from .pixel import OPAQUE_BLACK, Pixel, new_cache, wrapping_add

logger = logging.getLogger(__name__)

DecodedImage = tuple[list[Pixel], int, int, Channels, Colorspace]


class OpKind(enum.Enum):
    INDEX = "index"
    DIFF = "diff"
    LUMA = "luma"
    RUN = "run"
    RGB = "rgb"
    RGBA = "rgba"


class Opcode(NamedTuple):
    """One decoded unit of the opcode stream: its kind plus the fields it carries."""

    kind: OpKind
    payload: tuple[int, ...]


# Bytes following the tag byte
_EXTRA_BYTES = {
    OpKind.INDEX: 0,
    OpKind.DIFF: 0,
    OpKind.LUMA: 1,
    OpKind.RUN: 0,
    OpKind.RGB: 3,
    OpKind.RGBA: 4,
}

_TAGS_2BIT = {
    QOI_OP_INDEX: OpKind.INDEX,
    QOI_OP_DIFF: OpKind.DIFF,
    QOI_OP_LUMA: OpKind.LUMA,
    QOI_OP_RUN: OpKind.RUN,
}


def classify(byte: int) -> OpKind:
    # The 8-bit tags must be checked before the 2-bit ones: 0xFE and 0xFF
    # also carry the RUN prefix.
    if byte == QOI_OP_RGB:
        return OpKind.RGB
    if byte == QOI_OP_RGBA:
        return OpKind.RGBA
    if 0 <= byte <= 0xFF:
        return _TAGS_2BIT[byte & QOI_MASK_2]
    raise UnrecognizedOpcodeError("QOI.decode: Unrecognized opcode 0x%x" % byte)


def read_opcode(data, pos: int, end: int) -> tuple[Opcode, int]:
    """
    Read the opcode starting at ``data[pos]``.

    ``end`` is the offset of the end marker; no opcode may reach into it.
    Returns the opcode and the offset just past it.
    """
    b1 = data[pos]
    kind = classify(b1)
    next_pos = pos + 1 + _EXTRA_BYTES[kind]
    if next_pos > end:
        raise TruncatedStreamError(
            "QOI.decode: %s opcode at offset %d runs past the end of the stream"
            % (kind.name, pos)
        )

    if kind is OpKind.RGB or kind is OpKind.RGBA:
        payload = tuple(data[pos + 1 : next_pos])

    elif kind is OpKind.INDEX:
        payload = (b1 & QOI_MASK_6,)

    elif kind is OpKind.DIFF:
        # 2-bit differences with a bias of 2
        payload = (
            ((b1 >> 4) & 0x03) - 2,
            ((b1 >> 2) & 0x03) - 2,
            (b1 & 0x03) - 2,
        )

    elif kind is OpKind.LUMA:
        b2 = data[pos + 1]
        payload = (
            (b1 & QOI_MASK_6) - 32,
            ((b2 >> 4) & 0x0F) - 8,
            (b2 & 0x0F) - 8,
        )

    else:
        payload = ((b1 & QOI_MASK_6) + 1,)

    return Opcode(kind, payload), next_pos


def _apply_rgb(payload, prev: Pixel, index: list) -> Pixel:
    r, g, b = payload
    return Pixel(r, g, b, prev.alpha)


def _apply_rgba(payload, prev: Pixel, index: list) -> Pixel:
    return Pixel(*payload)


def _apply_index(payload, prev: Pixel, index: list) -> Pixel:
    return index[payload[0]]


def _apply_diff(payload, prev: Pixel, index: list) -> Pixel:
    dr, dg, db = payload
    return Pixel(
        wrapping_add(prev.red, dr),
        wrapping_add(prev.green, dg),
        wrapping_add(prev.blue, db),
        prev.alpha,
    )


def _apply_luma(payload, prev: Pixel, index: list) -> Pixel:
    dg, dr_dg, db_dg = payload
    return Pixel(
        wrapping_add(prev.red, dr_dg + dg),
        wrapping_add(prev.green, dg),
        wrapping_add(prev.blue, db_dg + dg),
        prev.alpha,
    )


_APPLY = {
    OpKind.RGB: _apply_rgb,
    OpKind.RGBA: _apply_rgba,
    OpKind.INDEX: _apply_index,
    OpKind.DIFF: _apply_diff,
    OpKind.LUMA: _apply_luma,
}


class QOIDecoder:
    """
    A class to decode QOI (Quite OK Image) files into a pixel sequence.
    """

    @staticmethod
    def decode(
        file_data: bytes,
        byte_offset: int = 0,
        byte_length: int = None,
    ) -> DecodedImage:
        """
        Decode a QOI file given as a bytes/bytearray object.

        :param file_data: Bytes containing the QOI file.
        :param byte_offset: Offset to the start of the QOI file in file_data.
        :param byte_length: Length of the QOI file in bytes.
        :return: Tuple of (pixels, width, height, channels, colorspace).
        """
        if byte_length is None:
            byte_length = len(file_data) - byte_offset

        data = file_data[byte_offset : byte_offset + byte_length]

        header = QOIHeader.unpack(data)

        pixels: list[Pixel] = []
        index = new_cache()
        prev = OPAQUE_BLACK

        read_pos = QOI_HEADER_SIZE
        chunks_end = len(data) - len(QOI_END_MARKER)

        while read_pos < chunks_end:
            op, read_pos = read_opcode(data, read_pos, chunks_end)

            if op.kind is OpKind.RUN:
                pixels.extend([prev] * op.payload[0])
                continue

            px = _APPLY[op.kind](op.payload, prev, index)
            index[px.index_position()] = px
            pixels.append(px)
            prev = px

        if bytes(data[read_pos:]) != QOI_END_MARKER:
            raise PaddingMismatchError("QOI.decode: Missing or corrupted end marker")

        if len(pixels) != header.pixel_count:
            raise PixelCountMismatchError(
                "QOI.decode: Expected %d pixels, stream holds %d"
                % (header.pixel_count, len(pixels))
            )

        logger.debug(
            "Decoded %dx%d image from %d bytes", header.width, header.height, len(data)
        )
        return pixels, header.width, header.height, header.channels, header.colorspace


decode = QOIDecoder.decode
