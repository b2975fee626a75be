"""Abstract material interface.

A material describes how a surface responds when a ray bounces off it. The
renderer asks every material for two things:

    color()               -> the base (albedo) color of the surface
    bounce_attenuation()  -> scalar in [0, 1] applied to the bounced radiance
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from stratray.core.vector import Vec3


class Material(ABC):
    """A surface response model paired 1:1 with a geometry in the scene."""

    #: Name used in scene configuration dictionaries
    kind: str = ""

    @abstractmethod
    def color(self) -> Vec3:
        """Return the base color of the surface."""

    @abstractmethod
    def bounce_attenuation(self) -> float:
        """Return the fraction of bounced radiance that survives, in [0, 1]."""

    @abstractmethod
    def to_config(self) -> dict[str, Any]:
        """Export the material parameters as a plain dictionary."""
