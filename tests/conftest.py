"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: a seeded random
generator for bounce sampling and a few small scenes.
"""

import numpy as np
import pytest

from stratray.scene.scene import Scene


@pytest.fixture
def rng():
    """Seeded generator so stochastic tests are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def empty_scene():
    """A scene with no objects; every ray sees the sky."""
    return Scene()


@pytest.fixture
def red_sphere_scene():
    """One red diffuse sphere of radius 0.5 two units down +z."""
    scene = Scene()
    scene.add_sphere(center=(0.0, 0.0, 2.0), radius=0.5, albedo=(1.0, 0.0, 0.0))
    return scene
