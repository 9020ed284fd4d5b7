import logging

from PIL import Image

from .header import Channels, Colorspace
from .image import QOIImage
from .utils import load_image, pixels_from_bytes, pixels_to_bytes

logger = logging.getLogger(__name__)


def png_to_qoi(png_path, qoi_path, colorspace: Colorspace = Colorspace.SRGB) -> QOIImage:
    """Convert any image Pillow (or rawpy) can read into a QOI file."""
    pixel_data, desc = load_image(png_path)

    image = QOIImage.from_pixels(
        pixels_from_bytes(pixel_data.tobytes(), desc["channels"]),
        desc["width"],
        desc["height"],
        desc["channels"],
        colorspace,
    ).encode()
    image.save(qoi_path)

    logger.info("Converted %s to %s", png_path, qoi_path)
    return image


def qoi_to_png(qoi_path, png_path) -> QOIImage:
    image = QOIImage.load_from_file(qoi_path).decode()

    if image.width == 0 or image.height == 0:
        raise ValueError(
            f"Cannot write {qoi_path} as PNG: image is {image.width}x{image.height}"
        )

    if image.channels == Channels.RGB:
        mode, channels = "RGB", 3
    else:
        mode, channels = "RGBA", 4

    img = Image.frombytes(
        mode, (image.width, image.height), pixels_to_bytes(image.pixels, channels)
    )
    img.save(png_path)

    logger.info("Converted %s to %s", qoi_path, png_path)
    return image
