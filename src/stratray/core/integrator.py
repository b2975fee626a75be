"""Radiance integrator for stochastic diffuse ray tracing.

This module evaluates the radiance carried back along a ray: it finds the
nearest surface, bounces a new ray off it according to the surface material
and repeats until the ray escapes to the sky or the bounce budget runs out.

The recursion of the classic formulation

    radiance(ray, n) = attenuation(hit) * radiance(bounce(hit), n - 1)

is evaluated iteratively by carrying the product of attenuations as a
throughput, so the Python stack depth does not grow with the bounce count.

Key features:
    - Fixed bounce-depth cutoff guaranteeing termination
    - Sky gradient for rays that escape the scene
    - Debug shading modes (surface normals, flat albedo)

Example:
    >>> import numpy as np
    >>> from stratray.core.integrator import radiance
    >>> rng = np.random.default_rng(42)
    >>> color = radiance(scene, ray, remaining_bounces=4, rng=rng)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np

from stratray.core.ray import Ray
from stratray.core.vector import Vec3

if TYPE_CHECKING:
    from stratray.scene.scene import Scene

# Type alias for shading options
ShadingMode = Literal["diffuse", "normals", "albedo"]

SHADING_MODES: tuple[str, ...] = ("diffuse", "normals", "albedo")

# =============================================================================
# Rendering Constants
# =============================================================================

# Bounce budget used when none is given
DEFAULT_MAX_BOUNCES = 4

# Radiance returned once the bounce budget is exhausted (energy floor)
BOUNCE_FLOOR_COLOR = Vec3(0.0, 1.0, 0.0)

# Sky gradient endpoints: horizon/below (t=0) and zenith (t=1)
SKY_BOTTOM_COLOR = Vec3(1.0, 1.0, 1.0)
SKY_TOP_COLOR = Vec3(0.5, 0.7, 1.0)

_default_rng = np.random.default_rng()


def background(ray: Ray) -> Vec3:
    """Radiance for a ray that strikes no geometry.

    Linear interpolation between SKY_BOTTOM_COLOR and SKY_TOP_COLOR keyed on
    the vertical component of the normalized direction, mapped from [-1, 1]
    to [0, 1].

    Args:
        ray: The escaping ray.

    Returns:
        The sky color seen along the ray.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return SKY_BOTTOM_COLOR * (1.0 - t) + SKY_TOP_COLOR * t


def normal_color(normal: Vec3) -> Vec3:
    """Map a unit normal from [-1, 1]^3 to an RGB color in [0, 1]^3."""
    return (normal + Vec3(1.0, 1.0, 1.0)) * 0.5


def radiance(
    scene: Scene,
    ray: Ray,
    remaining_bounces: int,
    rng: np.random.Generator | None = None,
    *,
    shading: ShadingMode = "diffuse",
    albedo_tint: bool = False,
) -> Vec3:
    """Evaluate the radiance arriving along a ray.

    With no bounces left, BOUNCE_FLOOR_COLOR is returned without testing the
    scene at all. Otherwise the nearest hit is resolved; a miss returns the
    sky gradient and a hit bounces a new ray whose radiance is scaled by the
    material's bounce attenuation (and, with albedo_tint, by its albedo
    component-wise).

    Args:
        scene: The scene to trace against.
        ray: The ray to evaluate.
        remaining_bounces: How many more surface interactions are allowed.
        rng: Generator for bounce sampling. Defaults to a module-level one.
        shading: "diffuse" for the bounce model, "normals" or "albedo" to
            shade the first hit directly for debugging.
        albedo_tint: Multiply each bounce by the material albedo.

    Returns:
        The RGB radiance (unbounded above; clamped later when emitted).

    Raises:
        ValueError: If remaining_bounces is negative or shading is unknown.
    """
    if remaining_bounces < 0:
        raise ValueError(f"remaining_bounces must be non-negative, got {remaining_bounces}")
    if shading not in SHADING_MODES:
        raise ValueError(f"Unknown shading mode: {shading}")
    if rng is None:
        rng = _default_rng

    throughput = Vec3(1.0, 1.0, 1.0)
    for _ in range(remaining_bounces):
        hit = scene.closest_hit(ray)
        if hit is None:
            return throughput * background(ray)

        material = hit.material
        if shading == "normals":
            return normal_color(hit.normal)
        if shading == "albedo":
            return material.color()

        throughput = throughput * material.bounce_attenuation()
        if albedo_tint:
            throughput = throughput * material.color()
        ray = hit.bounce(rng)

    return throughput * BOUNCE_FLOOR_COLOR
