"""PNG image sink.

Writes the rendered image as an 8-bit RGBA PNG via Pillow. The file carries
a source gamma of 1/2.2 (gAMA) and sRGB primaries (cHRM) so viewers
interpret the linear-mapped bytes consistently.

Example:
    >>> from stratray.output.png import PngSink
    >>> sink = PngSink("result.png")
    >>> # hand the sink to a Renderer, which opens, writes and closes it
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage
from PIL import PngImagePlugin

from stratray.output.sink import ImageSink

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "result.png"

# Source gamma 1/2.2, scaled by 100000 as PNG stores it
SOURCE_GAMMA = 45455

# (x, y) chromaticities of white point, red, green and blue
SOURCE_CHROMATICITIES = (
    (0.31270, 0.32900),
    (0.64000, 0.33000),
    (0.30000, 0.60000),
    (0.15000, 0.06000),
)


def _png_info() -> PngImagePlugin.PngInfo:
    info = PngImagePlugin.PngInfo()
    info.add(b"gAMA", struct.pack(">I", SOURCE_GAMMA))
    values = [round(c * 100000) for point in SOURCE_CHROMATICITIES for c in point]
    info.add(b"cHRM", struct.pack(">8I", *values))
    return info


class PngSink(ImageSink):
    """Sink that saves the finished image as a PNG file.

    The file is only written on close(), once every pixel is present, so an
    interrupted render never leaves a truncated image behind.

    Attributes:
        filepath: Destination path.
        color_metadata: Whether to write the gAMA and cHRM chunks.
    """

    def __init__(self, filepath: str | Path = DEFAULT_OUTPUT, *, color_metadata: bool = True) -> None:
        super().__init__()
        self.filepath = Path(filepath)
        self.color_metadata = color_metadata

    def _on_open(self) -> None:
        logger.info("Rendering %dx%d image to %s", self.width, self.height, self.filepath)

    def _finish(self, image: npt.NDArray[np.uint8]) -> None:
        pil_image = PILImage.fromarray(image)
        if self.color_metadata:
            pil_image.save(self.filepath, format="PNG", pnginfo=_png_info())
        else:
            pil_image.save(self.filepath, format="PNG")
        logger.info("Saved %s", self.filepath)
