import logging
from typing import Sequence

from .constants import (
    QOI_END_MARKER,
    QOI_MAX_RUN,
    QOI_OP_DIFF,
    QOI_OP_INDEX,
    QOI_OP_LUMA,
    QOI_OP_RGB,
    QOI_OP_RGBA,
    QOI_OP_RUN,
)
from .header import Channels, Colorspace, QOIHeader
from .pixel import OPAQUE_BLACK, Pixel, new_cache, sub

logger = logging.getLogger(__name__)


class QOIEncoder:
    @staticmethod
    def encode(
        pixels: Sequence[Pixel],
        width: int,
        height: int,
        channels: Channels = Channels.RGBA,
        colorspace: Colorspace = Colorspace.SRGB,
    ) -> bytes:
        """
        Encode a pixel sequence into a QOI file.

        :param pixels: Sequence of Pixel in row-major order, width * height long.
        :param width: Image width.
        :param height: Image height.
        :param channels: Channel tag stored in the header (RGB, RGBA or UNKNOWN).
        :param colorspace: Colorspace tag stored in the header, carried through as is.
        :return: bytes object containing the QOI file content.
        """
        # --- Validation ---
        if len(pixels) != width * height:
            raise ValueError("QOI.encode: The length of pixels is incorrect")

        # Write Header
        result = bytearray(QOIHeader(width, height, channels, colorspace).pack())

        # Encoding State
        index = new_cache()
        prev = OPAQUE_BLACK
        run = 0

        # --- Pixel Loop ---
        for px in pixels:
            if not isinstance(px, Pixel):
                px = Pixel(*px)

            # Check for run
            if px == prev:
                run += 1
                if run == QOI_MAX_RUN:
                    result.append(QOI_OP_RUN | (run - 1))
                    run = 0
                continue

            # If we were in a run, end it before processing the new pixel
            if run > 0:
                result.append(QOI_OP_RUN | (run - 1))
                run = 0

            index_pos = px.index_position()

            if index[index_pos] == px:
                result.append(QOI_OP_INDEX | index_pos)
            else:
                index[index_pos] = px
                _emit_pixel(result, px, prev)

            prev = px

        if run > 0:
            result.append(QOI_OP_RUN | (run - 1))

        # --- End Marker ---
        result.extend(QOI_END_MARKER)

        logger.debug(
            "Encoded %dx%d image (%d pixels) into %d bytes",
            width,
            height,
            len(pixels),
            len(result),
        )
        return bytes(result)


def _emit_pixel(out: bytearray, px: Pixel, prev: Pixel) -> None:
    """Append the cheapest of DIFF, LUMA, RGB or RGBA for a pixel not found in the cache."""
    r, g, b, a = px

    if a != prev.alpha:
        out.append(QOI_OP_RGBA)
        out.extend((r, g, b, a))
        return

    vr = sub(r, prev.red)
    vg = sub(g, prev.green)
    vb = sub(b, prev.blue)

    # QOI_OP_DIFF
    if -2 <= vr <= 1 and -2 <= vg <= 1 and -2 <= vb <= 1:
        out.append(QOI_OP_DIFF | ((vr + 2) << 4) | ((vg + 2) << 2) | (vb + 2))
        return

    # QOI_OP_LUMA
    vg_r = vr - vg
    vg_b = vb - vg
    if -32 <= vg <= 31 and -8 <= vg_r <= 7 and -8 <= vg_b <= 7:
        out.append(QOI_OP_LUMA | (vg + 32))
        out.append(((vg_r + 8) << 4) | (vg_b + 8))
        return

    out.append(QOI_OP_RGB)
    out.extend((r, g, b))


encode = QOIEncoder.encode
