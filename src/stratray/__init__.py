"""Stochastic ray tracer for static scenes of geometric primitives.

For every output pixel the camera casts an S x S grid of sample rays; each
ray bounces off diffuse surfaces until it escapes to the sky or runs out of
bounces, and the averaged radiance is streamed to an image sink.

Subpackages:
    core: Vectors, rays, integrator, film accumulation and render loop
    geometry: Shape primitives and intersection
    materials: Surface response models
    scene: Scene container, literal scene data and presets
    camera: Camera with stratified ray generation
    output: Image sinks (memory, PNG)
"""

__version__ = "0.1.0"
