"""Ready-made scenes.

The sphere row is three slightly overlapping red diffuse spheres of radius
0.5 placed two units in front of a camera at the origin looking down +z.
"""

from __future__ import annotations

from stratray.scene.scene import Scene

SPHERE_ROW_CENTERS: tuple[tuple[float, float, float], ...] = (
    (0.0, 0.0, 2.0),
    (0.9, 0.0, 2.0),
    (-0.9, 0.0, 2.0),
)
SPHERE_ROW_RADIUS = 0.5
SPHERE_ROW_ALBEDO = (1.0, 0.0, 0.0)


def create_sphere_row_scene() -> Scene:
    """Create the three-sphere scene.

    Returns:
        A new Scene holding the three spheres.
    """
    scene = Scene()
    for center in SPHERE_ROW_CENTERS:
        scene.add_sphere(center, SPHERE_ROW_RADIUS, SPHERE_ROW_ALBEDO)
    return scene
