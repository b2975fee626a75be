"""Ray value type.

A ray is a half-line ``origin + t * direction`` for ``t >= 0``. Rays are
created fresh for every camera sample and every bounce and never mutated.

Example:
    >>> from stratray.core.ray import Ray
    >>> from stratray.core.vector import Vec3
    >>> ray = Ray(origin=Vec3(0.0, 0.0, 0.0), direction=Vec3(0.0, 0.0, 1.0))
    >>> ray.at(5.0)
    Vec3(x=0.0, y=0.0, z=5.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from stratray.core.vector import Vec3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            normalized; camera rays and bounce rays generally are not.
    """

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + direction * t.
        """
        return self.origin + self.direction * t
