"""Camera model for stratified primary ray generation.

The camera maps a pixel's base (u, v) coordinate to a fixed S x S grid of
sample rays covering the pixel footprint. There is no random jitter: the
same (u, v) always yields bit-identical rays, so all stochastic behavior is
confined to the surface bounces.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points opposite the viewing direction
- u: points right in the image plane
- v: points up in the image plane

Normalized image coordinates:
    u in [0, 1): left to right across image
    v in [0, 1): bottom to top across image

Example:
    >>> from stratray.camera.camera import Camera, CameraConfig
    >>> camera = Camera(CameraConfig(samples=2), image_width=400, image_height=225)
    >>> rays = camera.rays_for_pixel(0.5, 0.5)
    >>> len(rays)
    4
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import overload

import numpy as np

from stratray.core.ray import Ray
from stratray.core.vector import Vec3

# =============================================================================
# Camera Configuration
# =============================================================================


@dataclass(frozen=True)
class CameraConfig:
    """Configuration for the camera.

    Attributes:
        forward: The direction the camera is facing. Default +z.
        viewport_width: Width of the viewport in scene units. Default 2.0.
        focal_length: Distance from the origin to the viewport. Default 1.0.
        origin: Camera position in world space. Default the world origin.
        up: Up direction for camera orientation. Default world-up (+y).
        samples: Samples per pixel axis S; each pixel gets S^2 rays.
            Default 4.

    Raises:
        ValueError: If a numeric parameter is not positive and finite,
            samples is not an integer, or forward/up are zero or parallel.
    """

    forward: tuple[float, float, float] = (0.0, 0.0, 1.0)
    viewport_width: float = 2.0
    focal_length: float = 1.0
    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)
    samples: int = 4

    def __post_init__(self) -> None:
        if not (math.isfinite(self.viewport_width) and self.viewport_width > 0.0):
            raise ValueError(f"viewport_width must be positive and finite, got {self.viewport_width}")
        if not (math.isfinite(self.focal_length) and self.focal_length > 0.0):
            raise ValueError(f"focal_length must be positive and finite, got {self.focal_length}")
        if isinstance(self.samples, bool) or not isinstance(self.samples, int):
            raise ValueError(f"samples must be an integer, got {self.samples!r}")
        if self.samples < 1:
            raise ValueError(f"samples must be at least 1, got {self.samples}")

        forward = np.array(self.forward, dtype=np.float64)
        up = np.array(self.up, dtype=np.float64)
        if not (np.all(np.isfinite(forward)) and np.all(np.isfinite(up))):
            raise ValueError("forward and up vectors must be finite")
        if not np.all(np.isfinite(np.array(self.origin, dtype=np.float64))):
            raise ValueError(f"origin must be finite, got {self.origin}")
        if np.linalg.norm(forward) == 0.0:
            raise ValueError("forward direction must be non-zero")
        if np.linalg.norm(up) == 0.0:
            raise ValueError("up vector must be non-zero")
        if np.linalg.norm(np.cross(forward, up)) < 1e-12:
            raise ValueError("forward and up vectors must not be parallel")


# =============================================================================
# Sample Ray Sequence
# =============================================================================


class PixelRays(Sequence[Ray]):
    """The S^2 sample rays of one pixel.

    Rays are computed on access, so the sequence can be iterated any number
    of times and always yields the same rays. Sample k uses grid cell
    (k // S, k % S) along (u, v).
    """

    def __init__(self, camera: Camera, u: float, v: float) -> None:
        self._camera = camera
        self._u = u
        self._v = v

    def __len__(self) -> int:
        return self._camera.samples_per_pixel

    @overload
    def __getitem__(self, index: int) -> Ray: ...

    @overload
    def __getitem__(self, index: slice) -> list[Ray]: ...

    def __getitem__(self, index: int | slice) -> Ray | list[Ray]:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("sample index out of range")
        camera = self._camera
        s = camera.samples
        sub_u = self._u + camera.u_step * (index // s)
        sub_v = self._v + camera.v_step * (index % s)
        return camera.get_ray(sub_u, sub_v)

    def __iter__(self) -> Iterator[Ray]:
        for k in range(len(self)):
            yield self[k]


# =============================================================================
# Camera
# =============================================================================


class Camera:
    """A pinhole camera with a fixed stratified sampling grid.

    All viewport geometry is computed once at construction.

    Attributes:
        origin: Camera position.
        horizontal: Vector spanning the full viewport width.
        vertical: Vector spanning the full viewport height.
        lower_left_corner: World-space lower-left corner of the viewport.
        viewport_width: Viewport width in scene units.
        viewport_height: Viewport height, derived from the image aspect ratio.
        samples: Samples per axis S.
        u_step: U offset between neighboring samples of a pixel.
        v_step: V offset between neighboring samples of a pixel.
    """

    def __init__(self, config: CameraConfig, image_width: int, image_height: int) -> None:
        """Compute the camera basis and viewport.

        Args:
            config: The camera configuration.
            image_width: Output image width in pixels (>= 1).
            image_height: Output image height in pixels (>= 1).

        Raises:
            ValueError: If an image dimension is less than 1.
        """
        if image_width < 1 or image_height < 1:
            raise ValueError(
                f"Image dimensions must be at least 1x1, got {image_width}x{image_height}"
            )

        self.config = config
        self.image_width = image_width
        self.image_height = image_height
        self.samples = config.samples

        aspect_ratio = image_width / image_height
        self.viewport_width = config.viewport_width
        self.viewport_height = config.viewport_width / aspect_ratio

        origin = np.array(config.origin, dtype=np.float64)
        forward = np.array(config.forward, dtype=np.float64)
        vup = np.array(config.up, dtype=np.float64)

        # w points opposite the viewing direction
        w = -forward / np.linalg.norm(forward)

        # u points right (perpendicular to w and vup)
        u = np.cross(vup, w)
        u = u / np.linalg.norm(u)

        # v points up in the camera's frame
        v = np.cross(w, u)

        horizontal = self.viewport_width * u
        vertical = self.viewport_height * v
        lower_left = origin - horizontal / 2.0 - vertical / 2.0 - w * config.focal_length

        self.origin = Vec3.from_iterable(origin)
        self.horizontal = Vec3.from_iterable(horizontal)
        self.vertical = Vec3.from_iterable(vertical)
        self.lower_left_corner = Vec3.from_iterable(lower_left)

        # The S x S grid subdivides one pixel
        self.u_step = 1.0 / (image_width * self.samples)
        self.v_step = 1.0 / (image_height * self.samples)

    @property
    def samples_per_pixel(self) -> int:
        """Total number of rays cast per pixel (S^2)."""
        return self.samples * self.samples

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate the ray through normalized viewport coordinates (u, v).

        Args:
            u: Horizontal coordinate (0 = left edge).
            v: Vertical coordinate (0 = bottom edge).

        Returns:
            A Ray from the camera origin through the viewport point. The
            direction is not normalized.
        """
        direction = (
            self.lower_left_corner + self.horizontal * u + self.vertical * v - self.origin
        )
        return Ray(origin=self.origin, direction=direction)

    def rays_for_pixel(self, u: float, v: float) -> PixelRays:
        """Return the S^2 stratified sample rays of a pixel.

        Args:
            u: The pixel's base U coordinate in [0, 1).
            v: The pixel's base V coordinate in [0, 1).

        Returns:
            A restartable sequence of sample rays.
        """
        return PixelRays(self, u, v)

    def get_camera_info(self) -> dict[str, tuple[float, float, float]]:
        """Get the camera vectors for debugging."""
        return {
            "origin": self.origin.to_tuple(),
            "horizontal": self.horizontal.to_tuple(),
            "vertical": self.vertical.to_tuple(),
            "lower_left": self.lower_left_corner.to_tuple(),
        }

    def __repr__(self) -> str:
        return (
            f"Camera(image={self.image_width}x{self.image_height}, "
            f"samples={self.samples}x{self.samples})"
        )
