"""Unified scene manager coordinating primitives and materials.

This module provides a high-level scene building API. Materials are
registered once and receive a material_id; spheres then reference a
material by id. Once the scene is assembled, build_meshes() freezes it
into the immutable tuple of meshes the renderer consumes.

The SceneManager maintains:
- A unified material_id space across all material types
- High-level methods for adding objects with materials in one call
- Scene serialization to and from plain dictionaries (JSON friendly)

Example:
    >>> from pathtracer.scene.manager import SceneManager
    >>> scene = SceneManager()
    >>> mat_id = scene.add_lambertian_material(albedo=(0.8, 0.3, 0.3))
    >>> scene.add_sphere(center=(0, 0, -1), radius=0.5, material_id=mat_id)
    0
    >>> meshes = scene.build_meshes()
"""

import operator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from pathtracer.core.ray import as_vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials import (
    DielectricMaterial,
    LambertianMaterial,
    Material,
    MetalMaterial,
)
from pathtracer.scene.intersection import Mesh


class MaterialType(IntEnum):
    """Enumeration of supported material types."""

    LAMBERTIAN = 0
    METAL = 1
    DIELECTRIC = 2


def get_material_type(material: Material) -> MaterialType:
    """Get the MaterialType tag of a material instance.

    Raises:
        TypeError: If the material is not one of the supported variants.
    """
    if isinstance(material, LambertianMaterial):
        return MaterialType.LAMBERTIAN
    elif isinstance(material, MetalMaterial):
        return MaterialType.METAL
    elif isinstance(material, DielectricMaterial):
        return MaterialType.DIELECTRIC
    raise TypeError(f"Unsupported material: {type(material).__name__}")


def material_from_dict(data: dict[str, Any]) -> Material:
    """Build a material from a descriptor such as ``{"type": "metal", ...}``.

    Args:
        data: Descriptor with a ``type`` key (lambertian, metal or dielectric)
            and the parameters of that type.

    Returns:
        The material instance.

    Raises:
        ValueError: If the type is unknown or a parameter is invalid.
    """
    mat_type = str(data.get("type", "")).lower()
    if mat_type == "lambertian":
        return LambertianMaterial(albedo=data.get("albedo", [0.5, 0.5, 0.5]))
    elif mat_type == "metal":
        return MetalMaterial(
            albedo=data.get("albedo", [0.8, 0.8, 0.8]),
            fuzz=data.get("fuzz", 0.0),
        )
    elif mat_type == "dielectric":
        return DielectricMaterial(ior=data.get("ior", 1.5))
    raise ValueError(f"Unknown material type: {mat_type}")


def material_to_dict(material: Material) -> dict[str, Any]:
    """Export a material to a JSON-friendly descriptor."""
    mat_type = get_material_type(material)
    result: dict[str, Any] = {"type": mat_type.name.lower()}
    if mat_type == MaterialType.DIELECTRIC:
        result["ior"] = material.ior
    else:
        result["albedo"] = [float(c) for c in material.albedo]
    if mat_type == MaterialType.METAL:
        result["fuzz"] = material.fuzz
    return result


@dataclass
class MaterialInfo:
    """Information about a registered material.

    Attributes:
        material_id: The unified material ID.
        material_type: The type of material (Lambertian, Metal, Dielectric).
        material: The material instance.
    """

    material_id: int
    material_type: MaterialType
    material: Material


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index of the sphere (and of its mesh) in the scene.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID assigned to the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material descriptors.
        spheres: List of sphere configurations.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)


class SceneManager:
    """Unified scene manager coordinating primitives and materials.

    Attributes:
        materials: List of MaterialInfo for all registered materials.
        spheres: List of SphereInfo for all spheres in the scene.

    Example:
        >>> scene = SceneManager()
        >>> red_diffuse = scene.add_lambertian_material(albedo=(0.8, 0.1, 0.1))
        >>> gold_metal = scene.add_metal_material(albedo=(0.8, 0.6, 0.2), fuzz=0.3)
        >>> glass = scene.add_dielectric_material(ior=1.5)
        >>> scene.add_sphere((0, 0, -1), 0.5, red_diffuse)
        0
        >>> scene.add_sphere((1, 0, -1), 0.5, gold_metal)
        1
        >>> scene.add_sphere((-1, 0, -1), 0.5, glass)
        2
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.materials: list[MaterialInfo] = []
        self.spheres: list[SphereInfo] = []

    def clear(self) -> None:
        """Clear the entire scene (primitives and materials)."""
        self.materials.clear()
        self.spheres.clear()

    # =========================================================================
    # Material Management
    # =========================================================================

    def add_material(self, material: Material) -> int:
        """Register a material instance.

        Returns:
            The unified material ID for this material.
        """
        material_id = len(self.materials)
        self.materials.append(
            MaterialInfo(
                material_id=material_id,
                material_type=get_material_type(material),
                material=material,
            )
        )
        return material_id

    def add_lambertian_material(self, albedo: tuple[float, float, float]) -> int:
        """Add a Lambertian (diffuse) material to the scene.

        Raises:
            ValueError: If any albedo component is outside [0, 1].
        """
        return self.add_material(LambertianMaterial(albedo=albedo))

    def add_metal_material(
        self,
        albedo: tuple[float, float, float],
        fuzz: float = 0.0,
    ) -> int:
        """Add a metal material to the scene.

        Args:
            albedo: The reflective color as (R, G, B), each in [0, 1].
            fuzz: Reflection perturbation, clamped to [0, 1]. Default 0 (mirror).

        Raises:
            ValueError: If any albedo component is outside [0, 1].
        """
        return self.add_material(MetalMaterial(albedo=albedo, fuzz=fuzz))

    def add_dielectric_material(self, ior: float = 1.5) -> int:
        """Add a dielectric (glass/water) material to the scene.

        Raises:
            ValueError: If ior is not positive.
        """
        return self.add_material(DielectricMaterial(ior=ior))

    def get_material_count(self) -> int:
        """Get the number of registered materials."""
        return len(self.materials)

    def get_material_info(self, material_id: int) -> MaterialInfo | None:
        """Get information about a material, or None for an unknown id.

        Only integer ids are valid; floats and booleans are unknown ids.
        """
        if isinstance(material_id, bool):
            return None
        try:
            index = operator.index(material_id)
        except TypeError:
            return None
        if 0 <= index < len(self.materials):
            return self.materials[index]
        return None

    # =========================================================================
    # Primitive Management
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere that uses a registered material.

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If material_id is unknown or radius is not positive.
        """
        info = self.get_material_info(material_id)
        if info is None:
            raise ValueError(f"Invalid material_id: {material_id!r}")
        if not radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")

        sphere_index = len(self.spheres)
        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=tuple(float(c) for c in as_vec3(center)),
                radius=float(radius),
                material_id=info.material_id,
            )
        )
        return sphere_index

    def add_sphere_with_material(
        self,
        center: tuple[float, float, float],
        radius: float,
        material: Material,
    ) -> tuple[int, int]:
        """Register a material and add a sphere using it.

        Returns:
            Tuple of (sphere_index, material_id).
        """
        material_id = self.add_material(material)
        return self.add_sphere(center, radius, material_id), material_id

    def add_lambertian_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        albedo: tuple[float, float, float],
    ) -> tuple[int, int]:
        """Add a sphere with a new Lambertian material."""
        return self.add_sphere_with_material(center, radius, LambertianMaterial(albedo=albedo))

    def add_metal_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        albedo: tuple[float, float, float],
        fuzz: float = 0.0,
    ) -> tuple[int, int]:
        """Add a sphere with a new metal material."""
        return self.add_sphere_with_material(center, radius, MetalMaterial(albedo=albedo, fuzz=fuzz))

    def add_dielectric_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        ior: float = 1.5,
    ) -> tuple[int, int]:
        """Add a sphere with a new dielectric material."""
        return self.add_sphere_with_material(center, radius, DielectricMaterial(ior=ior))

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return len(self.spheres)

    # =========================================================================
    # Render Snapshot
    # =========================================================================

    def build_meshes(self) -> tuple[Mesh, ...]:
        """Freeze the scene into the immutable mesh sequence used for rendering.

        Mesh i corresponds to sphere index i.
        """
        return tuple(
            Mesh(
                geometry=Sphere(center=as_vec3(info.center), radius=info.radius),
                material=self.materials[info.material_id].material,
            )
            for info in self.spheres
        )

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig()
        for mat in self.materials:
            config.materials.append(material_to_dict(mat.material))
        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "material_id": sphere.material_id,
                }
            )
        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        Clears the current scene first. A sphere either references a material
        by ``material_id`` or carries an inline ``material`` descriptor.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        self.clear()

        # Load materials first (needed for primitives)
        for mat_config in config.materials:
            self.add_material(material_from_dict(mat_config))

        for sphere_config in config.spheres:
            center = sphere_config.get("center", [0.0, 0.0, 0.0])
            radius = sphere_config.get("radius", 1.0)
            if "material" in sphere_config:
                material = material_from_dict(sphere_config["material"])
                self.add_sphere_with_material(center, radius, material)
            else:
                self.add_sphere(center, radius, sphere_config.get("material_id", 0))

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
