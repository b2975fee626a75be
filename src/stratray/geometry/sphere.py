"""Sphere primitive with ray-sphere intersection.

The intersection solves ``|O + tD - C|^2 = r^2`` using the half-b form of
the quadratic formula:

    a      = dot(D, D)
    half_b = dot(O - C, D)
    c      = dot(O - C, O - C) - r^2
    discriminant = half_b^2 - a*c

Only the nearer root is considered. If it lies behind the ray origin (or
within T_MIN of it) the ray does not hit the sphere, even when the farther
root is in front. A ray starting inside a sphere therefore never sees its
inner surface.

Example:
    >>> from stratray.core.ray import Ray
    >>> from stratray.core.vector import Vec3
    >>> from stratray.geometry.sphere import Sphere
    >>> sphere = Sphere(center=Vec3(0.0, 0.0, 2.0), radius=0.5)
    >>> hit = sphere.intersect(Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0)))
    >>> hit.point
    Vec3(x=0.0, y=0.0, z=1.5)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from stratray.core.ray import Ray
from stratray.core.vector import Vec3
from stratray.geometry.base import T_MIN, Geometry
from stratray.geometry.hit import HitRecord


@dataclass(frozen=True)
class Sphere(Geometry):
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere. A zero radius is allowed and simply
            never produces a hit.

    Raises:
        ValueError: If the radius is negative or not finite, or the center
            is not finite.
    """

    center: Vec3
    radius: float

    kind = "sphere"

    def __post_init__(self) -> None:
        if not math.isfinite(self.radius) or self.radius < 0.0:
            raise ValueError(f"Sphere radius must be finite and non-negative, got {self.radius}")
        if not all(math.isfinite(c) for c in self.center):
            raise ValueError(f"Sphere center must be finite, got {self.center}")

    def intersect(self, ray: Ray, t_min: float = T_MIN) -> HitRecord | None:
        """Test for ray-sphere intersection.

        Args:
            ray: The probe ray. The direction need not be normalized.
            t_min: Minimum accepted ray parameter.

        Returns:
            A HitRecord for the nearer intersection, or None when the ray
            misses, is degenerate, or the nearer root is not in front of the
            origin.
        """
        if self.radius == 0.0:
            return None

        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        if a == 0.0:
            return None
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        if not discriminant >= 0.0:
            return None

        t = (-half_b - math.sqrt(discriminant)) / a
        if not t > t_min:
            return None

        point = ray.at(t)
        # point - center points outward; dividing by radius makes it unit length
        outward_normal = (point - self.center) / self.radius
        front_face = ray.direction.dot(outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal

        return HitRecord(
            geometry=self,
            point=point,
            normal=normal,
            front_face=front_face,
            t=t,
            distance=t * math.sqrt(a),
        )

    def to_config(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "center": list(self.center.to_tuple()),
            "radius": self.radius,
        }
