"""Abstract geometry interface.

Every shape variant implements ``intersect(ray) -> HitRecord | None``. New
shapes add their own intersection formula; the contract does not change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from stratray.core.ray import Ray
from stratray.geometry.hit import HitRecord

# Minimum accepted ray parameter; rejects self-intersection at t ~ 0
T_MIN = 1e-4


class Geometry(ABC):
    """A shape that can be tested for intersection with a ray."""

    #: Name used in scene configuration dictionaries
    kind: str = ""

    @abstractmethod
    def intersect(self, ray: Ray, t_min: float = T_MIN) -> HitRecord | None:
        """Test the ray against this shape.

        Args:
            ray: The probe ray.
            t_min: Hits with t <= t_min are rejected.

        Returns:
            The hit record, or None if the ray misses.
        """

    @abstractmethod
    def to_config(self) -> dict[str, Any]:
        """Export the shape parameters as a plain dictionary."""
