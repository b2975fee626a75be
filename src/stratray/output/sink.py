"""Image sink contract for streamed pixel output.

A sink receives a rendered image through exactly three kinds of calls:

    sink.open(width, height)      # once, before any pixel
    sink.write_pixel((r, g, b, a))  # width * height times, row-major
    sink.close()                  # once, after the last pixel

Pixels arrive top row first, left to right, as 8-bit RGBA tuples. The sink
tracks the write cursor and rejects calls that break the contract.

Example:
    >>> from stratray.output.sink import MemorySink
    >>> sink = MemorySink()
    >>> sink.open(1, 1)
    >>> sink.write_pixel((255, 0, 0, 255))
    >>> sink.close()
    >>> sink.image.shape
    (1, 1, 4)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
import numpy.typing as npt

# Type alias for an 8-bit RGBA pixel
RGBA = tuple[int, int, int, int]


class ImageSink(ABC):
    """Base class for sinks that buffer pixels until the image is complete.

    Subclasses implement _finish(), which receives the complete image as a
    (height, width, 4) uint8 array when close() is called.
    """

    def __init__(self) -> None:
        self._width = 0
        self._height = 0
        self._cursor = 0
        self._buffer: npt.NDArray[np.uint8] | None = None
        self._is_open = False
        self._closed = False

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def pixels_written(self) -> int:
        """Number of pixels written since open()."""
        return self._cursor

    @property
    def position(self) -> tuple[int, int]:
        """(row, col) of the next pixel to be written."""
        if self._width == 0:
            return (0, 0)
        return divmod(self._cursor, self._width)

    def open(self, width: int, height: int) -> None:
        """Prepare the sink for a width x height image.

        Raises:
            ValueError: If either dimension is less than 1.
            RuntimeError: If the sink was already opened.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Image dimensions must be at least 1x1, got {width}x{height}")
        if self._is_open or self._closed:
            raise RuntimeError("Sink has already been opened")
        self._width = width
        self._height = height
        self._cursor = 0
        self._buffer = np.zeros((height, width, 4), dtype=np.uint8)
        self._is_open = True
        self._on_open()

    def write_pixel(self, rgba: RGBA) -> None:
        """Write the next pixel in row-major order.

        Args:
            rgba: Four integers in [0, 255].

        Raises:
            RuntimeError: If the sink is not open or the image is full.
            ValueError: If rgba is not four 8-bit values.
        """
        if not self._is_open or self._buffer is None:
            raise RuntimeError("Sink is not open")
        if self._cursor >= self._width * self._height:
            raise RuntimeError(
                f"Image is complete; cannot write more than {self._width * self._height} pixels"
            )
        if len(rgba) != 4 or any(not 0 <= int(c) <= 255 for c in rgba):
            raise ValueError(f"Pixel must be four values in [0, 255], got {rgba!r}")

        row, col = divmod(self._cursor, self._width)
        self._buffer[row, col] = rgba
        self._cursor += 1

    def close(self) -> None:
        """Finish the image.

        Raises:
            RuntimeError: If the sink is not open or pixels are missing.
        """
        if not self._is_open or self._buffer is None:
            raise RuntimeError("Sink is not open")
        expected = self._width * self._height
        if self._cursor != expected:
            raise RuntimeError(
                f"Cannot close sink: {self._cursor} of {expected} pixels written"
            )
        self._is_open = False
        self._closed = True
        self._finish(self._buffer)

    def _on_open(self) -> None:
        """Hook called after open(); no-op by default."""

    @abstractmethod
    def _finish(self, image: npt.NDArray[np.uint8]) -> None:
        """Consume the completed (height, width, 4) image."""


class MemorySink(ImageSink):
    """Sink that keeps the finished image in memory.

    Attributes:
        image: The (height, width, 4) uint8 array, set on close().
    """

    def __init__(self) -> None:
        super().__init__()
        self.image: npt.NDArray[np.uint8] | None = None

    def _finish(self, image: npt.NDArray[np.uint8]) -> None:
        self.image = image
