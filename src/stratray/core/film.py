"""Film: per-pixel sample accumulation and ordered emission to a sink.

The film walks the image in row-major order (top row first, left to right)
and hands out one PixelAccumulator at a time. An accumulator collects the
radiance samples of its pixel and, when finalized, averages them, maps the
mean to 8-bit RGBA and writes it to the image sink.

Accumulators are context managers. Leaving the ``with`` block finalizes the
pixel exactly once, on normal completion and on early exit alike. An early
exit before the first sample re-raises the original error and leaves the
pixel unwritten. The film refuses to hand out the next pixel until the
current one is finalized. This keeps writes to the sink sequential and in order.

Example:
    >>> from stratray.core.film import Film
    >>> from stratray.core.vector import Vec3
    >>> from stratray.output.sink import MemorySink
    >>> film = Film(2, 2, MemorySink())
    >>> film.open()
    >>> for pixel in film.pixels():
    ...     with pixel:
    ...         pixel.add_sample(Vec3(0.5, 0.5, 0.5))
    >>> film.close()
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from types import TracebackType

from stratray.core.vector import Vec3
from stratray.output.sink import RGBA, ImageSink

# Fixed opaque alpha appended to every pixel
OPAQUE_ALPHA = 255


def to_rgba8(color: Vec3, gamma: float = 1.0) -> RGBA:
    """Map a linear color to an 8-bit RGBA tuple.

    Each channel is optionally gamma encoded (c^(1/gamma)), scaled by 256,
    truncated toward zero and clamped to [0, 255]. Alpha is always 255.

    Args:
        color: The color, nominally in [0, 1] per channel.
        gamma: Display gamma; 1.0 leaves the channels linear.

    Returns:
        The (r, g, b, a) tuple.

    Raises:
        ValueError: If a channel is not finite.
    """
    channels = []
    for c in color:
        if not math.isfinite(c):
            raise ValueError(f"Cannot map non-finite color channel {c} to 8 bits")
        if gamma != 1.0:
            c = max(c, 0.0) ** (1.0 / gamma)
        channels.append(min(max(int(c * 256.0), 0), 255))
    return (channels[0], channels[1], channels[2], OPAQUE_ALPHA)


class PixelAccumulator:
    """Running sum of the samples of one pixel.

    Attributes:
        row: Pixel row (0 = top).
        col: Pixel column (0 = left).
        u: Base horizontal coordinate of the pixel footprint.
        v: Base vertical coordinate of the pixel footprint.
    """

    def __init__(self, film: Film, row: int, col: int, u: float, v: float) -> None:
        self.row = row
        self.col = col
        self.u = u
        self.v = v
        self._film = film
        self._sum = Vec3.zero()
        self._count = 0
        self._finalized = False

    @property
    def sample_count(self) -> int:
        return self._count

    @property
    def finalized(self) -> bool:
        return self._finalized

    def add_sample(self, color: Vec3) -> None:
        """Add one radiance sample.

        Raises:
            RuntimeError: If the pixel was already finalized.
        """
        if self._finalized:
            raise RuntimeError(f"Pixel ({self.row}, {self.col}) is already finalized")
        self._sum = self._sum + color
        self._count += 1

    def mean(self) -> Vec3:
        """Average of the samples added so far.

        Raises:
            RuntimeError: If no sample was added.
        """
        if self._count == 0:
            raise RuntimeError(f"Pixel ({self.row}, {self.col}) has no samples")
        return self._sum / self._count

    def finalize(self) -> RGBA:
        """Average the samples and write the pixel to the film's sink.

        Returns:
            The RGBA tuple that was written.

        Raises:
            RuntimeError: If the pixel has no samples or was already
                finalized.
        """
        if self._finalized:
            raise RuntimeError(f"Pixel ({self.row}, {self.col}) is already finalized")
        mean = self.mean()
        # Mark before writing so a failing sink write is never retried
        self._finalized = True
        rgba = to_rgba8(mean, self._film.gamma)
        self._film._emit(self, rgba)
        return rgba

    def __enter__(self) -> PixelAccumulator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._finalized:
            return
        # An empty pixel cannot be emitted; let the original error through
        if exc_type is not None and self._count == 0:
            return
        self.finalize()

    def __repr__(self) -> str:
        return f"PixelAccumulator(row={self.row}, col={self.col}, samples={self._count})"


class Film:
    """Row-major pixel grid bound to an image sink.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        sink: The sink receiving finalized pixels.
        gamma: Display gamma applied in to_rgba8.
    """

    def __init__(self, width: int, height: int, sink: ImageSink, gamma: float = 1.0) -> None:
        """Create the film.

        Raises:
            ValueError: If a dimension is less than 1 or gamma is not positive.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Image dimensions must be at least 1x1, got {width}x{height}")
        if gamma <= 0.0:
            raise ValueError(f"gamma must be positive, got {gamma}")
        self.width = width
        self.height = height
        self.sink = sink
        self.gamma = gamma
        self._next_index = 0
        self._current: PixelAccumulator | None = None
        self._started = False

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def pixels_done(self) -> int:
        """Number of pixels finalized and written so far."""
        return self._next_index

    def pixel_uv(self, row: int, col: int) -> tuple[float, float]:
        """Base (u, v) of a pixel; row 0 is the top of the image."""
        return (col / self.width, (self.height - 1 - row) / self.height)

    def open(self) -> None:
        """Open the sink for this film's dimensions."""
        self.sink.open(self.width, self.height)

    def close(self) -> None:
        """Close the sink after the last pixel."""
        self.sink.close()

    def pixels(self) -> Iterator[PixelAccumulator]:
        """Iterate one accumulator per pixel in row-major order.

        A film is walked once; a second call raises.

        Raises:
            RuntimeError: If the film was already iterated, or the consumer
                asks for the next pixel before the previous one was finalized.
        """
        if self._started:
            raise RuntimeError("Film pixels can only be iterated once")
        self._started = True
        return self._iter_pixels()

    def _iter_pixels(self) -> Iterator[PixelAccumulator]:
        for row in range(self.height):
            for col in range(self.width):
                if self._current is not None and not self._current.finalized:
                    raise RuntimeError(
                        f"Pixel ({self._current.row}, {self._current.col}) "
                        "was not finalized before the next pixel"
                    )
                u, v = self.pixel_uv(row, col)
                self._current = PixelAccumulator(self, row, col, u, v)
                yield self._current

    def _emit(self, pixel: PixelAccumulator, rgba: RGBA) -> None:
        expected = divmod(self._next_index, self.width)
        if (pixel.row, pixel.col) != expected:
            raise RuntimeError(
                f"Pixel ({pixel.row}, {pixel.col}) written out of order; expected {expected}"
            )
        self.sink.write_pixel(rgba)
        self._next_index += 1
