from typing import Sequence

import numpy as np
from PIL import Image

from .header import Channels
from .pixel import Pixel

RAW_EXTENSIONS = ("dng", "cr2", "nef", "arw", "raw")


def load_image(filepath: str) -> tuple[np.ndarray, dict]:
    """Load an image and return pixel data as numpy array + description."""

    ext = str(filepath).lower().split(".")[-1]

    if ext in RAW_EXTENSIONS:
        # RAW formats - requires rawpy
        import rawpy

        with rawpy.imread(str(filepath)) as raw:
            rgb = raw.postprocess()
        img = Image.fromarray(rgb)
    else:
        # Standard formats (PNG, JPEG, etc.)
        img = Image.open(filepath)

    # Convert to RGB or RGBA
    if img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info:
        img = img.convert("RGBA")
        channels = Channels.RGBA
    else:
        img = img.convert("RGB")
        channels = Channels.RGB

    return np.array(img), {
        "width": img.size[0],
        "height": img.size[1],
        "channels": channels,
        "colorspace": 0,
    }


def array_to_pixels(array: np.ndarray) -> list[Pixel]:
    """Flatten an (height, width, 3|4) uint8 array into row-major pixels."""
    array = np.asarray(array, dtype=np.uint8)
    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ValueError(
            "Expected an array of shape (height, width, 3|4), got %s" % (array.shape,)
        )

    flat = array.reshape(-1, array.shape[2])
    if flat.shape[1] == 3:
        alpha = np.full((flat.shape[0], 1), 255, dtype=np.uint8)
        flat = np.hstack([flat, alpha])

    return [Pixel(*px) for px in flat.tolist()]


def pixels_to_array(pixels: Sequence[Pixel], width: int, height: int, channels: int = 4) -> np.ndarray:
    array = np.array(pixels, dtype=np.uint8).reshape(height, width, 4)
    if channels == Channels.RGB:
        return array[:, :, :3].copy()
    return array


def pixels_from_bytes(raw: bytes, channels: int) -> list[Pixel]:
    """Split interleaved RGB or RGBA bytes into pixels, alpha defaults to 255."""
    if channels not in (3, 4):
        raise ValueError("Invalid channels, must be 3 or 4")
    if len(raw) % channels:
        raise ValueError("The length of raw pixel data is not a multiple of channels")

    if channels == 4:
        return [Pixel(*raw[i : i + 4]) for i in range(0, len(raw), 4)]
    return [Pixel(raw[i], raw[i + 1], raw[i + 2]) for i in range(0, len(raw), 3)]


def pixels_to_bytes(pixels: Sequence[Pixel], channels: int) -> bytes:
    result = bytearray()
    for px in pixels:
        if channels == Channels.RGB:
            result.extend(px[:3])
        else:
            result.extend(px)
    return bytes(result)
