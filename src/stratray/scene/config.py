"""Literal scene data and the factories that turn it into objects.

Shape and material parameters are plain dictionaries so that scenes can be
written by hand or loaded from JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from stratray.core.vector import Vec3
from stratray.geometry.base import Geometry
from stratray.geometry.sphere import Sphere
from stratray.materials.diffuse import DEFAULT_ATTENUATION, Diffuse
from stratray.materials.material import Material


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations.
        spheres: List of sphere configurations; each refers to a material by
            its index in ``materials`` through ``material_id``.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)


def _vec3_param(params: dict[str, Any], name: str, default: list[float]) -> Vec3:
    try:
        return Vec3.from_iterable(params.get(name, default))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid '{name}' parameter: {params.get(name)!r}") from e


def make_geometry(kind: str, params: dict[str, Any]) -> Geometry:
    """Build a geometry from its kind name and parameters.

    Args:
        kind: The shape kind ("sphere").
        params: Shape parameters, e.g. {"center": [0, 0, 2], "radius": 0.5}.

    Returns:
        The geometry instance.

    Raises:
        ValueError: If the kind is unknown or a parameter is invalid.
    """
    kind = kind.lower()
    if kind == Sphere.kind:
        center = _vec3_param(params, "center", [0.0, 0.0, 0.0])
        radius = float(params.get("radius", 1.0))
        return Sphere(center=center, radius=radius)
    raise ValueError(f"Unknown geometry type: {kind}")


def make_material(kind: str, params: dict[str, Any]) -> Material:
    """Build a material from its kind name and parameters.

    Args:
        kind: The material kind ("diffuse").
        params: Material parameters, e.g. {"albedo": [1, 0, 0]}.

    Returns:
        The material instance.

    Raises:
        ValueError: If the kind is unknown or a parameter is invalid.
    """
    kind = kind.lower()
    if kind == Diffuse.kind:
        albedo = _vec3_param(params, "albedo", [0.5, 0.5, 0.5])
        attenuation = float(params.get("attenuation", DEFAULT_ATTENUATION))
        return Diffuse(albedo=albedo, attenuation=attenuation)
    raise ValueError(f"Unknown material type: {kind}")
