"""Materials module for surface response models.

Components:
    material: Abstract Material interface (color, bounce attenuation)
    diffuse: Diffuse material with constant bounce attenuation

Only a single diffuse bounce model is provided; there are no metal,
dielectric or emissive materials.
"""

from .diffuse import DEFAULT_ATTENUATION, Diffuse
from .material import Material

__all__ = [
    "Material",
    "Diffuse",
    "DEFAULT_ATTENUATION",
]
