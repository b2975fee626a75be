"""Integration tests for the end-to-end rendering pipeline.

This module tests the complete pipeline from scene creation through final
image output. It verifies that camera, scene, integrator, film and sinks work
together and that the output meets basic quality criteria.

Tests are designed to be fast (low resolution, few samples) while still
exercising the full pipeline.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from stratray.camera.camera import CameraConfig
from stratray.core.renderer import Renderer, RenderSettings
from stratray.output.png import PngSink
from stratray.output.sink import MemorySink
from stratray.scene.presets import create_sphere_row_scene

# Sky seen along (1, 0, 1): halfway between white and (0.5, 0.7, 1.0)
HORIZON_PIXEL = (192, 217, 255, 255)


class TestSinglePixelHit:
    """A 2x2 image of one red sphere where only one pixel sees the sphere."""

    def render(self, scene, max_bounces: int, seed: int = 7) -> np.ndarray:
        renderer = Renderer(
            2,
            2,
            scene,
            CameraConfig(samples=1),
            RenderSettings(max_bounces=max_bounces, seed=seed),
        )
        return renderer.render_array()

    def test_one_bounce(self, red_sphere_scene):
        """Test the hit pixel is the attenuated floor color after one bounce."""
        image = self.render(red_sphere_scene, max_bounces=1)

        assert tuple(image[0, 1]) == (0, 128, 0, 255)
        assert tuple(image[0, 0]) == HORIZON_PIXEL
        assert tuple(image[1, 0]) == (228, 239, 255, 255)
        assert tuple(image[1, 1]) == (237, 244, 255, 255)

    def test_multiple_bounces(self, red_sphere_scene):
        """Test the bounce escapes to the sky and is halved once."""
        image = self.render(red_sphere_scene, max_bounces=4)

        r, g, b, a = (int(c) for c in image[0, 1])
        # The sky has full blue, halved by one bounce
        assert b == 128
        assert 64 <= r <= 128
        assert 89 <= g <= 128
        assert a == 255
        assert tuple(image[0, 0]) == HORIZON_PIXEL

    def test_bounce_count_only_changes_hit_pixel(self, red_sphere_scene):
        """Test sky pixels do not depend on the bounce budget."""
        one = self.render(red_sphere_scene, max_bounces=1)
        many = self.render(red_sphere_scene, max_bounces=4)
        assert not np.array_equal(one[0, 1], many[0, 1])
        np.testing.assert_array_equal(one[1], many[1])
        np.testing.assert_array_equal(one[0, 0], many[0, 0])


class TestSphereRowRender:
    """Tests rendering the preset scene to disk."""

    def test_png_end_to_end(self, tmp_path):
        """Test a small preset render produces a valid PNG."""
        path = tmp_path / "result.png"
        renderer = Renderer(
            16,
            9,
            create_sphere_row_scene(),
            CameraConfig(samples=2),
            RenderSettings(seed=0),
        )
        renderer.render(PngSink(path))

        assert path.exists()
        with Image.open(path) as image:
            assert image.mode == "RGBA"
            assert image.size == (16, 9)
            pixels = np.asarray(image)

        assert np.all(pixels[:, :, 3] == 255)
        # Sky pixels keep full blue; anything that bounced at least once is
        # at most half as bright
        assert pixels[0, 0, 2] == 255
        assert pixels[4, 8, 2] <= 128

    def test_normals_shading(self):
        """Test the normals mode shades the forward-facing center as blue-dominant."""
        renderer = Renderer(
            16,
            9,
            create_sphere_row_scene(),
            CameraConfig(samples=1),
            RenderSettings(shading="normals"),
        )
        image = renderer.render_array()
        r, g, b, _ = (int(c) for c in image[4, 8])
        # Normal near (0, 0, -1) maps to roughly (0.5, 0.5, 0.0)
        assert b < 64
        assert 96 <= r <= 160
        assert 96 <= g <= 160

    def test_memory_and_png_agree(self, tmp_path):
        """Test the same seeded render gives the same bytes in memory and on disk."""
        config = CameraConfig(samples=2)
        settings = RenderSettings(seed=5)
        scene = create_sphere_row_scene()

        memory = MemorySink()
        Renderer(8, 5, scene, config, settings).render(memory)

        path = tmp_path / "same.png"
        Renderer(8, 5, scene, config, settings).render(PngSink(path))
        with Image.open(path) as image:
            np.testing.assert_array_equal(np.asarray(image), memory.image)
