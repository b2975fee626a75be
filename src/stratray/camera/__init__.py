"""Camera module for primary ray generation.

Components:
    camera: Pinhole camera with stratified S x S super-sampling

Camera responsibilities:
    - Derive the viewport from forward direction, up vector, viewport width,
      focal length and image aspect ratio
    - Map a pixel's (u, v) coordinate to its S^2 sample rays
"""

from .camera import Camera, CameraConfig, PixelRays

__all__ = [
    "Camera",
    "CameraConfig",
    "PixelRays",
]
