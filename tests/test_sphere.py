"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere or pointing away (no hit)
- Hit point lies on the surface; normal faces the ray
- No self-intersection for rays leaving the surface
- Degenerate spheres and rays
"""

import math

import pytest

from stratray.core.ray import Ray
from stratray.core.vector import Vec3
from stratray.geometry.base import T_MIN
from stratray.geometry.sphere import Sphere


class TestSphereBasics:
    """Tests for Sphere construction."""

    def test_create_sphere(self):
        """Test sphere attributes."""
        sphere = Sphere(center=Vec3(1.0, 2.0, 3.0), radius=0.5)
        assert sphere.center == Vec3(1.0, 2.0, 3.0)
        assert sphere.radius == 0.5

    def test_negative_radius_rejected(self):
        """Test that a negative radius raises ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            Sphere(center=Vec3.zero(), radius=-1.0)

    @pytest.mark.parametrize("radius", [math.nan, math.inf])
    def test_non_finite_radius_rejected(self, radius):
        """Test that NaN and infinite radii raise ValueError."""
        with pytest.raises(ValueError, match="radius"):
            Sphere(center=Vec3.zero(), radius=radius)

    def test_non_finite_center_rejected(self):
        """Test that a NaN center component raises ValueError."""
        with pytest.raises(ValueError, match="center"):
            Sphere(center=Vec3(0.0, math.nan, 2.0), radius=0.5)

    def test_to_config(self):
        """Test export of sphere parameters."""
        config = Sphere(center=Vec3(0.0, 0.0, 2.0), radius=0.5).to_config()
        assert config == {"type": "sphere", "center": [0.0, 0.0, 2.0], "radius": 0.5}


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_direct_hit(self):
        """Test ray hitting sphere head-on from outside."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 0.0), radius=1.0)
        ray = Ray(origin=Vec3(0.0, 0.0, 5.0), direction=Vec3(0.0, 0.0, -1.0))

        hit = sphere.intersect(ray)

        assert hit is not None
        # Should hit at z=1 (front of sphere), so t=4
        assert abs(hit.t - 4.0) < 1e-12
        assert abs(hit.distance - 4.0) < 1e-12
        assert hit.point == Vec3(0.0, 0.0, 1.0)
        # Outward normal (0, 0, 1) already faces the ray
        assert hit.normal == Vec3(0.0, 0.0, 1.0)
        assert hit.front_face
        assert hit.geometry is sphere
        assert hit.material is None

    def test_miss(self):
        """Test ray missing sphere entirely."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 0.0), radius=1.0)
        ray = Ray(origin=Vec3(5.0, 0.0, 0.0), direction=Vec3(0.0, 0.0, -1.0))
        assert sphere.intersect(ray) is None

    def test_sphere_behind_ray(self):
        """Test ray pointing away from the sphere."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 0.0), radius=1.0)
        ray = Ray(origin=Vec3(0.0, 0.0, 5.0), direction=Vec3(0.0, 0.0, 1.0))
        assert sphere.intersect(ray) is None

    def test_origin_inside_sphere_is_not_a_hit(self):
        """Test that the farther root is not used when the nearer one is behind."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 0.0), radius=1.0)
        ray = Ray(origin=Vec3(0.0, 0.0, 0.0), direction=Vec3(0.0, 0.0, 1.0))
        assert sphere.intersect(ray) is None

    def test_unnormalized_direction(self):
        """Test t and distance with a non-unit direction."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 2.0), radius=0.5)
        ray = Ray(origin=Vec3.zero(), direction=Vec3(0.0, 0.0, 2.0))

        hit = sphere.intersect(ray)

        assert hit is not None
        assert abs(hit.t - 0.75) < 1e-12
        assert abs(hit.distance - 1.5) < 1e-12
        assert hit.point == Vec3(0.0, 0.0, 1.5)
        assert hit.normal == Vec3(0.0, 0.0, -1.0)

    def test_tangent_ray_hits(self):
        """Test that a ray grazing the sphere (zero discriminant) counts as a hit."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 0.0), radius=1.0)
        ray = Ray(origin=Vec3(1.0, 0.0, -5.0), direction=Vec3(0.0, 0.0, 1.0))

        hit = sphere.intersect(ray)

        assert hit is not None
        assert hit.point == Vec3(1.0, 0.0, 0.0)

    def test_zero_radius_never_hits(self):
        """Test that a degenerate sphere is never intersected."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 2.0), radius=0.0)
        ray = Ray(origin=Vec3.zero(), direction=Vec3(0.0, 0.0, 1.0))
        assert sphere.intersect(ray) is None

    def test_zero_direction_never_hits(self):
        """Test that a zero-length direction is treated as a miss."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 2.0), radius=0.5)
        ray = Ray(origin=Vec3.zero(), direction=Vec3.zero())
        assert sphere.intersect(ray) is None

    def test_nan_direction_never_hits(self):
        """Test that a ray with a NaN direction is treated as a miss."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 2.0), radius=0.5)
        ray = Ray(origin=Vec3.zero(), direction=Vec3(0.0, math.nan, 1.0))
        assert sphere.intersect(ray) is None


class TestSphereHitProperties:
    """Property-style checks over a spread of rays."""

    @staticmethod
    def _rays_toward(center: Vec3):
        origins = [
            Vec3(0.0, 0.0, 0.0),
            Vec3(3.0, 1.0, -2.0),
            Vec3(-4.0, 5.0, 6.0),
            Vec3(0.1, -7.0, 2.0),
        ]
        for origin in origins:
            yield Ray(origin=origin, direction=center - origin)
            yield Ray(origin=origin, direction=(center - origin).normalize() * 3.0)

    def test_hit_point_on_surface(self):
        """Test |hit.point - center| == radius for rays aimed at the center."""
        center = Vec3(0.5, 0.25, 3.0)
        sphere = Sphere(center=center, radius=0.75)
        for ray in self._rays_toward(center):
            hit = sphere.intersect(ray)
            assert hit is not None
            assert abs((hit.point - center).length() - 0.75) < 1e-9

    def test_normal_faces_ray_and_is_unit(self):
        """Test dot(direction, normal) <= 0 and |normal| == 1 for accepted hits."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 2.0), radius=0.5)
        for i in range(-5, 6):
            for j in range(-5, 6):
                ray = Ray(origin=Vec3.zero(), direction=Vec3(i * 0.05, j * 0.05, 1.0))
                hit = sphere.intersect(ray)
                if hit is None:
                    continue
                assert ray.direction.dot(hit.normal) <= 0.0
                assert abs(hit.normal.length() - 1.0) < 1e-9

    def test_no_self_intersection_along_normal(self):
        """Test that a ray leaving the hit point along its normal does not re-hit."""
        center = Vec3(0.0, 0.0, 2.0)
        sphere = Sphere(center=center, radius=0.5)
        for ray in self._rays_toward(center):
            hit = sphere.intersect(ray)
            assert hit is not None
            again = sphere.intersect(hit.normal_ray())
            assert again is None or again.t > T_MIN

    def test_no_self_intersection_for_grazing_bounce(self, rng):
        """Test bounce rays from the surface never re-hit at t ~ 0."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 2.0), radius=0.5)
        hit = sphere.intersect(Ray(origin=Vec3.zero(), direction=Vec3(0.1, 0.2, 1.0)))
        assert hit is not None
        for _ in range(200):
            again = sphere.intersect(hit.bounce(rng))
            assert again is None or again.t > T_MIN


class TestHitRecordBounce:
    """Tests for the diffuse bounce ray."""

    def test_bounce_leaves_from_hit_point(self, rng):
        """Test the bounce origin and that it stays in the normal's hemisphere-ish."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 2.0), radius=0.5)
        hit = sphere.intersect(Ray(origin=Vec3.zero(), direction=Vec3(0.0, 0.0, 1.0)))
        assert hit is not None
        for _ in range(100):
            bounce = hit.bounce(rng)
            assert bounce.origin == hit.point
            # normal + point in unit sphere never points strictly backwards
            assert bounce.direction.dot(hit.normal) >= 0.0

    def test_bounce_distance_matches_radius(self):
        """Test the normal ray of a hit starts on the surface."""
        sphere = Sphere(center=Vec3(0.0, 0.0, 2.0), radius=0.5)
        hit = sphere.intersect(Ray(origin=Vec3.zero(), direction=Vec3(0.0, 0.0, 1.0)))
        assert hit is not None
        normal_ray = hit.normal_ray()
        assert math.isclose((normal_ray.origin - sphere.center).length(), 0.5)
        assert normal_ray.direction == hit.normal
