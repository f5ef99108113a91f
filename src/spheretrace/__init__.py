"""CPU path tracer for scenes of analytic spheres.

This package renders still images by stochastic recursive ray tracing, with
support for:
- Diffuse, metal and dielectric materials
- A thin-lens camera with depth of field
- Multi-threaded rendering in row bands with ordered reassembly

Subpackages:
    core: Vectors, rays, random generators, the integrator and the renderer
    geometry: The sphere primitive and its intersection test
    materials: Scattering models
    camera: Camera model with ray generation
    scene: Preset scenes
    preview: Image output
"""

__version__ = "0.1.0"
