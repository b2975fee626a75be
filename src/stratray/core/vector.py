"""3-component vector value type and random sampling helpers.

Vec3 is used for positions, directions and RGB colors alike. It is an
immutable value: every operation returns a new vector.

Example:
    >>> from stratray.core.vector import Vec3
    >>> a = Vec3(1.0, 2.0, 3.0)
    >>> b = Vec3(0.0, 1.0, 0.0)
    >>> (a + b).length_squared()
    19.0
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vec3:
    """An immutable triple of floats.

    Attributes:
        x: First component (red when used as a color).
        y: Second component (green when used as a color).
        z: Third component (blue when used as a color).
    """

    x: float
    y: float
    z: float

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> Vec3:
        """Build a vector from any 3-element iterable (tuple, list, ndarray).

        Raises:
            ValueError: If the iterable does not hold exactly 3 values.
        """
        items = [float(v) for v in values]
        if len(items) != 3:
            raise ValueError(f"Expected 3 components, got {len(items)}")
        return cls(items[0], items[1], items[2])

    @classmethod
    def zero(cls) -> Vec3:
        return cls(0.0, 0.0, 0.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: float | Vec3) -> Vec3:
        # Vec3 * Vec3 is the component-wise (Hadamard) product used for colors
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:
        return self.__mul__(other)

    def __truediv__(self, t: float) -> Vec3:
        return Vec3(self.x / t, self.y / t, self.z / t)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Squared Euclidean length; avoids the square root for comparisons."""
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vec3:
        """Return a unit vector in the same direction.

        A zero-length vector is returned unchanged.
        """
        length = self.length()
        if length == 0.0:
            return self
        return self / length

    def near_zero(self, eps: float = 1e-8) -> bool:
        """Check if all components are within eps of zero."""
        return abs(self.x) < eps and abs(self.y) < eps and abs(self.z) < eps

    def to_numpy(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random point inside the unit sphere.

    Uses rejection sampling over the [-1, 1] cube so the points are uniformly
    distributed within the sphere.

    Args:
        rng: The NumPy generator that drives the sampling.

    Returns:
        A random point with length_squared() <= 1.
    """
    while True:
        x, y, z = rng.uniform(-1.0, 1.0, 3)
        p = Vec3(float(x), float(y), float(z))
        if p.length_squared() <= 1.0:
            return p
