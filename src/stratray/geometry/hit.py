"""Hit record produced by ray-geometry intersection tests.

A HitRecord lives only for the duration of one radiance step. The geometry
fills in the geometric fields; the scene attaches the material paired with
the struck geometry.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

import numpy as np

from stratray.core.ray import Ray
from stratray.core.vector import Vec3, random_in_unit_sphere

if TYPE_CHECKING:
    from stratray.geometry.base import Geometry
    from stratray.materials.material import Material


@dataclass(frozen=True)
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        geometry: The geometry that was struck.
        point: The world-space point where the ray met the surface.
        normal: Unit surface normal, flipped so that it always faces the
            incoming ray (dot(ray.direction, normal) <= 0).
        front_face: True if the ray approached from outside the surface,
            i.e. the outward normal and the face-forward normal agree.
        t: The ray parameter of the intersection (strictly positive).
        distance: Euclidean distance from the ray origin to the hit point.
        material: The material paired with the geometry, attached by the
            scene; None when the geometry was tested on its own.
    """

    geometry: Geometry
    point: Vec3
    normal: Vec3
    front_face: bool
    t: float
    distance: float
    material: Material | None = None

    def with_material(self, material: Material) -> HitRecord:
        """Return a copy of this record with the given material attached."""
        return replace(self, material=material)

    def normal_ray(self) -> Ray:
        """Ray leaving the hit point along the surface normal."""
        return Ray(origin=self.point, direction=self.normal)

    def bounce(self, rng: np.random.Generator) -> Ray:
        """Sample a diffuse bounce ray leaving the hit point.

        The direction is the normal plus a uniform point inside the unit
        sphere, which skews the distribution towards the normal. A degenerate
        (near-zero) sum falls back to the normal itself.

        Args:
            rng: The NumPy generator that drives the sampling.

        Returns:
            A new ray with origin at the hit point.
        """
        direction = self.normal + random_in_unit_sphere(rng)
        if direction.near_zero():
            direction = self.normal
        return Ray(origin=self.point, direction=direction)
