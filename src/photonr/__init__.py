"""Offline Monte Carlo path tracer.

This package renders sphere scenes by tracing randomly sampled light paths on
the CPU, with support for:
- Lambertian and (fuzzy) metal materials
- Jittered multi-sample anti-aliasing
- Row-parallel rendering over worker processes with reproducible seeding
- Gamma-corrected RGB8 output and PNG export

Subpackages:
    core: Rays, vector utilities and the path tracing integrator
    geometry: Shape primitives and intersection algorithms
    materials: Material models and scattering dispatch
    scene: World container, scene descriptions and JSON loading
    camera: Camera set-up, ray generation and the render loop
    preview: Tone mapping and image export
"""

__version__ = "0.1.0"
