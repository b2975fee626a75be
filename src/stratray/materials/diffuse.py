"""Diffuse material implementation.

The diffuse material scatters rays around the surface normal (see
HitRecord.bounce) and attenuates the bounced radiance by a constant factor.
The albedo is exposed through color(); the integrator only multiplies it in
when albedo tinting is enabled.

Example:
    >>> from stratray.core.vector import Vec3
    >>> from stratray.materials.diffuse import Diffuse
    >>> red = Diffuse(albedo=Vec3(1.0, 0.0, 0.0))
    >>> red.bounce_attenuation()
    0.5
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from stratray.core.vector import Vec3
from stratray.materials.material import Material

# Fraction of radiance carried by each diffuse bounce
DEFAULT_ATTENUATION = 0.5


@dataclass(frozen=True)
class Diffuse(Material):
    """Diffuse material properties.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
        attenuation: The scalar bounce attenuation, in [0, 1].

    Raises:
        ValueError: If any albedo component or the attenuation is outside
            [0, 1].
    """

    albedo: Vec3
    attenuation: float = DEFAULT_ATTENUATION

    kind = "diffuse"

    def __post_init__(self) -> None:
        for i, component in enumerate(self.albedo):
            if component < 0.0 or component > 1.0:
                raise ValueError(
                    f"Albedo component {i} = {component} is outside [0, 1]. "
                    "This would violate energy conservation."
                )
        if self.attenuation < 0.0 or self.attenuation > 1.0:
            raise ValueError(f"Bounce attenuation {self.attenuation} is outside [0, 1]")

    def color(self) -> Vec3:
        return self.albedo

    def bounce_attenuation(self) -> float:
        return self.attenuation

    def to_config(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "albedo": list(self.albedo.to_tuple()),
            "attenuation": self.attenuation,
        }
