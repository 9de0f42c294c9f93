"""A small Monte Carlo path tracer.

This package renders scenes of spheres with diffuse, metal and glass
materials under a sky gradient, with support for:
- Path tracing with a fixed bounce budget
- Lambertian, fuzzy metal and dielectric (Snell + Schlick) materials
- Pinhole and thin-lens cameras
- Jittered supersampling and progressive accumulation
- Plain-text PPM and PNG output

Subpackages:
    core: Ray and vector utilities, integrator, and progressive rendering
    geometry: Sphere primitive and intersection
    materials: Scattering models
    scene: Meshes, scene management and built-in scenes
    camera: Camera model with ray generation
    preview: Image export and preview utilities
"""

__version__ = "0.1.0"
