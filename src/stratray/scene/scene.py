"""Scene container and nearest-hit resolution.

A Scene is an append-only list of (geometry, material) pairs. It is built
once during setup and only read while rendering. Insertion order does not
affect the rendered image: the nearest hit is chosen by distance along the
ray, with exact ties going to the object scanned first.

Example:
    >>> from stratray.core.vector import Vec3
    >>> from stratray.scene.scene import Scene
    >>> scene = Scene()
    >>> scene.add_sphere(center=(0.0, 0.0, 2.0), radius=0.5, albedo=(1.0, 0.0, 0.0))
    0
    >>> color = scene.radiance(ray, remaining_bounces=4)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import numpy as np

from stratray.core.integrator import ShadingMode, radiance
from stratray.core.ray import Ray
from stratray.core.vector import Vec3
from stratray.geometry.base import Geometry
from stratray.geometry.hit import HitRecord
from stratray.geometry.sphere import Sphere
from stratray.materials.diffuse import DEFAULT_ATTENUATION, Diffuse
from stratray.materials.material import Material
from stratray.scene.config import SceneConfig, make_geometry, make_material

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SceneObject:
    """A geometry paired with the material it is rendered with.

    Attributes:
        geometry: The shape.
        material: The surface response of the shape.
    """

    geometry: Geometry
    material: Material


class Scene:
    """Collection of scene objects answering ray queries.

    Attributes:
        objects: The (geometry, material) pairs in insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.objects: list[SceneObject] = []

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[SceneObject]:
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self.objects)})"

    def clear(self) -> None:
        """Remove every object from the scene."""
        self.objects.clear()

    # =========================================================================
    # Scene Construction
    # =========================================================================

    def add(self, geometry: Geometry, material: Material) -> int:
        """Add a geometry with its material.

        Args:
            geometry: The shape to add.
            material: The material the shape is rendered with.

        Returns:
            The index of the new object.
        """
        self.objects.append(SceneObject(geometry=geometry, material=material))
        return len(self.objects) - 1

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        albedo: tuple[float, float, float],
        attenuation: float = DEFAULT_ATTENUATION,
    ) -> int:
        """Add a sphere with a diffuse material in one call.

        Args:
            center: The center of the sphere.
            radius: The radius of the sphere.
            albedo: The diffuse color as (R, G, B), each in [0, 1].
            attenuation: The bounce attenuation, in [0, 1].

        Returns:
            The index of the new object.

        Raises:
            ValueError: If the radius is negative or the material parameters
                are outside [0, 1].
        """
        return self.add(
            Sphere(center=Vec3.from_iterable(center), radius=float(radius)),
            Diffuse(albedo=Vec3.from_iterable(albedo), attenuation=float(attenuation)),
        )

    def add_entries(
        self,
        entries: list[tuple[str, dict[str, Any], str, dict[str, Any]]],
    ) -> None:
        """Add objects from (shape-kind, shape-params, material-kind,
        material-params) tuples.

        Raises:
            ValueError: If a kind is unknown or its parameters are invalid.
        """
        for shape_kind, shape_params, material_kind, material_params in entries:
            self.add(
                make_geometry(shape_kind, shape_params),
                make_material(material_kind, material_params),
            )

    # =========================================================================
    # Ray Queries
    # =========================================================================

    def closest_hit(self, ray: Ray) -> HitRecord | None:
        """Find the nearest surface struck by the ray.

        Every object is tested (linear scan). Misses are discarded and the hit
        with the smallest distance from the ray origin wins; on an exact tie
        the object scanned first is kept.

        Args:
            ray: The probe ray.

        Returns:
            The nearest hit with its material attached, or None.
        """
        closest: HitRecord | None = None
        closest_material: Material | None = None
        for obj in self.objects:
            hit = obj.geometry.intersect(ray)
            if hit is None:
                continue
            if closest is None or hit.distance < closest.distance:
                closest = hit
                closest_material = obj.material

        if closest is None or closest_material is None:
            return None
        return closest.with_material(closest_material)

    def radiance(
        self,
        ray: Ray,
        remaining_bounces: int,
        rng: np.random.Generator | None = None,
        *,
        shading: ShadingMode = "diffuse",
        albedo_tint: bool = False,
    ) -> Vec3:
        """Evaluate the radiance arriving along a ray.

        See stratray.core.integrator.radiance for the full description.
        """
        return radiance(
            self,
            ray,
            remaining_bounces,
            rng,
            shading=shading,
            albedo_tint=albedo_tint,
        )

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object.

        Each object gets its own material entry, referenced by material_id.
        """
        config = SceneConfig()
        for material_id, obj in enumerate(self.objects):
            config.materials.append(obj.material.to_config())
            shape_config = obj.geometry.to_config()
            shape_config["material_id"] = material_id
            config.spheres.append(shape_config)
        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene and loads the configuration.

        Args:
            config: The scene configuration to load.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()

        materials = [
            make_material(mat_config.get("type", ""), mat_config)
            for mat_config in config.materials
        ]

        for sphere_config in config.spheres:
            material_id = sphere_config.get("material_id", 0)
            if not 0 <= material_id < len(materials):
                raise ValueError(f"Invalid material_id: {material_id}")
            shape_kind = sphere_config.get("type", Sphere.kind)
            self.add(make_geometry(shape_kind, sphere_config), materials[material_id])

        logger.debug("Loaded scene with %d objects", len(self.objects))

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "materials": config.materials,
            "spheres": config.spheres,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary with 'materials' and 'spheres' keys."""
        config = SceneConfig(
            materials=data.get("materials", []),
            spheres=data.get("spheres", []),
        )
        self.from_config(config)
