"""Geometry module for shape primitives.

Components:
    base: Abstract Geometry interface and the T_MIN hit threshold
    hit: HitRecord produced by intersection tests
    sphere: Sphere primitive with ray-sphere intersection

Intersection is a linear scan over the scene; there is no acceleration
structure. Each primitive answers a single query:

    hit = shape.intersect(ray)  # HitRecord or None
"""

from .base import T_MIN, Geometry
from .hit import HitRecord
from .sphere import Sphere

__all__ = [
    "Geometry",
    "HitRecord",
    "Sphere",
    "T_MIN",
]
