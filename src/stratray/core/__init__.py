"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Vec3 value type and unit-sphere sampling
    ray: Ray value type
    integrator: Radiance evaluation with a bounce-depth cutoff
    film: Per-pixel sample accumulation and ordered emission
    renderer: The render loop tying camera, scene and film together

Rendering is single-threaded: every ray cast and intersection test runs to
completion before the next begins.
"""

from .ray import Ray
from .vector import Vec3, random_in_unit_sphere

# Note: integrator, film and renderer are NOT imported here to avoid circular
# imports. Import them directly from stratray.core.<module> when needed.

__all__ = [
    "Ray",
    "Vec3",
    "random_in_unit_sphere",
]
