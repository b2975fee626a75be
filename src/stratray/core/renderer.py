"""Renderer driving the full pixel loop.

For every pixel of the film the camera yields its S^2 sample rays, the scene
evaluates the radiance of each, and the pixel accumulator averages them and
writes the result to the image sink. Rendering is single-threaded and
streams pixels to the sink in row-major order.

Example:
    >>> from stratray.camera.camera import CameraConfig
    >>> from stratray.core.renderer import Renderer, RenderSettings
    >>> from stratray.output.png import PngSink
    >>> from stratray.scene.presets import create_sphere_row_scene
    >>>
    >>> renderer = Renderer(400, 225, create_sphere_row_scene(), CameraConfig(samples=4))
    >>> renderer.render(PngSink("result.png"))
    >>> print(f"Time: {renderer.elapsed * 1000:.0f} ms")
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from stratray.camera.camera import Camera, CameraConfig
from stratray.core.film import Film
from stratray.core.integrator import DEFAULT_MAX_BOUNCES, SHADING_MODES, ShadingMode
from stratray.output.sink import ImageSink, MemorySink
from stratray.scene.scene import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (pixels_done, pixels_total)
ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class RenderSettings:
    """Settings fixed for the duration of a render.

    Attributes:
        max_bounces: Bounce budget per camera ray. Default 4.
        gamma: Display gamma applied when mapping to 8 bits. Default 1.0
            (no gamma encoding).
        shading: "diffuse", "normals" or "albedo". Default "diffuse".
        albedo_tint: Multiply each bounce by the material albedo.
        seed: Seed for the bounce sampler; None draws fresh entropy.

    Raises:
        ValueError: If a setting is out of range.
    """

    max_bounces: int = DEFAULT_MAX_BOUNCES
    gamma: float = 1.0
    shading: ShadingMode = "diffuse"
    albedo_tint: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.max_bounces, bool) or not isinstance(self.max_bounces, int):
            raise ValueError(f"max_bounces must be an integer, got {self.max_bounces!r}")
        if self.max_bounces < 1:
            raise ValueError(f"max_bounces must be at least 1, got {self.max_bounces}")
        if self.gamma <= 0.0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")
        if self.shading not in SHADING_MODES:
            raise ValueError(f"Unknown shading mode: {self.shading}")


class Renderer:
    """Renders a scene through a camera into an image sink.

    Attributes:
        scene: The scene to render. Read-only during rendering.
        camera: The camera built for this image size.
        settings: The render settings.
    """

    def __init__(
        self,
        width: int,
        height: int,
        scene: Scene,
        camera_config: CameraConfig | None = None,
        settings: RenderSettings | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            width: Image width in pixels (>= 1).
            height: Image height in pixels (>= 1).
            scene: The scene to render.
            camera_config: Camera configuration; defaults to CameraConfig().
            settings: Render settings; defaults to RenderSettings().

        Raises:
            ValueError: If the dimensions or configuration are invalid.
        """
        self._width = width
        self._height = height
        self.scene = scene
        self.camera = Camera(camera_config or CameraConfig(), width, height)
        self.settings = settings or RenderSettings()
        self._elapsed = 0.0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def elapsed(self) -> float:
        """Wall-clock seconds spent in the most recent render."""
        return self._elapsed

    def render_progressive(self, sink: ImageSink) -> Generator[tuple[int, int], None, None]:
        """Render the image, yielding progress after each finalized pixel.

        The sink is opened before the first pixel and closed after the last.
        An exception (for example a failing sink write) aborts the render and
        propagates; the sink is then left unclosed.

        Args:
            sink: The sink receiving the image.

        Yields:
            Tuple of (pixels_done, pixels_total).
        """
        settings = self.settings
        scene = self.scene
        camera = self.camera
        rng = np.random.default_rng(settings.seed)
        film = Film(self._width, self._height, sink, gamma=settings.gamma)

        logger.debug(
            "Rendering %dx%d, %d samples/pixel, %d bounces, %d objects",
            self._width,
            self._height,
            camera.samples_per_pixel,
            settings.max_bounces,
            len(scene),
        )
        start = time.perf_counter()
        film.open()
        try:
            for pixel in film.pixels():
                with pixel:
                    for ray in camera.rays_for_pixel(pixel.u, pixel.v):
                        pixel.add_sample(
                            scene.radiance(
                                ray,
                                settings.max_bounces,
                                rng,
                                shading=settings.shading,
                                albedo_tint=settings.albedo_tint,
                            )
                        )
                yield (film.pixels_done, film.pixel_count)
            film.close()
        finally:
            self._elapsed = time.perf_counter() - start
        logger.debug("Render finished in %.3fs", self._elapsed)

    def render(self, sink: ImageSink, callback: ProgressCallback | None = None) -> None:
        """Render the image into the sink.

        Args:
            sink: The sink receiving the image.
            callback: Optional callback called after each finalized pixel
                with (pixels_done, pixels_total).

        Example:
            >>> def progress(done, total):
            ...     print(f"{done / total * 100:.3f}%")
            >>> renderer.render(sink, callback=progress)
        """
        for done, total in self.render_progressive(sink):
            if callback is not None:
                callback(done, total)

    def render_array(self, callback: ProgressCallback | None = None) -> npt.NDArray[np.uint8]:
        """Render into memory.

        Returns:
            NumPy array of shape (height, width, 4) with dtype uint8.
        """
        sink = MemorySink()
        self.render(sink, callback)
        assert sink.image is not None
        return sink.image

    def __repr__(self) -> str:
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples={self.camera.samples_per_pixel}, bounces={self.settings.max_bounces})"
        )
