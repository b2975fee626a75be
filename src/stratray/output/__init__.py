"""Output module for image sinks.

Components:
    sink: ImageSink three-call contract (open, write_pixel, close) and an
        in-memory sink
    png: PNG file sink (Pillow) with gamma and chromaticity metadata
"""

from .png import DEFAULT_OUTPUT, PngSink
from .sink import RGBA, ImageSink, MemorySink

__all__ = [
    "ImageSink",
    "MemorySink",
    "PngSink",
    "RGBA",
    "DEFAULT_OUTPUT",
]
