"""Render configuration loaded from JSON.

A render configuration bundles everything needed for one render: image
settings, camera parameters and the scene description.

Example document:

    {
      "image": {"width": 200, "height": 100, "samples_per_pixel": 10,
                "max_depth": 50, "gamma": 2.0, "seed": 42},
      "camera": {"lookfrom": [3, -0.1, 0.2], "lookat": [0, 0, -1],
                 "vup": [0, 1, 0], "vfov": 30, "aperture": 0.0,
                 "focus_dist": null},
      "materials": [{"type": "lambertian", "albedo": [0.1, 0.2, 0.5]}],
      "spheres": [{"center": [0, 0, -1], "radius": 0.5, "material_id": 0}]
    }

A missing or null ``focus_dist`` focuses on ``lookat``.
"""

import json
import os
from dataclasses import dataclass
from typing import Any

from pathtracer.camera.pinhole import PinholeCamera
from pathtracer.core.integrator import RenderSettings
from pathtracer.scene.manager import SceneManager

_IMAGE_KEYS = (
    "width",
    "height",
    "samples_per_pixel",
    "max_depth",
    "gamma",
    "t_min",
    "sky_scale",
    "seed",
)


@dataclass
class RenderConfig:
    """Everything needed for one render.

    Attributes:
        settings: Image and integrator settings.
        camera: Camera configuration. Its aspect ratio follows the image.
        scene: The scene description.
    """

    settings: RenderSettings
    camera: PinholeCamera
    scene: SceneManager

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RenderConfig":
        """Build a configuration from a parsed JSON document.

        Raises:
            ValueError: If a section is malformed or a value is invalid.
        """
        image = data.get("image", {})
        unknown = set(image) - set(_IMAGE_KEYS)
        if unknown:
            raise ValueError(f"Unknown image settings: {sorted(unknown)}")
        settings = RenderSettings(**image)

        cam = data.get("camera", {})
        try:
            camera = PinholeCamera(
                lookfrom=tuple(cam.get("lookfrom", (0.0, 0.0, 0.0))),
                lookat=tuple(cam.get("lookat", (0.0, 0.0, -1.0))),
                vup=tuple(cam.get("vup", (0.0, 1.0, 0.0))),
                vfov=float(cam.get("vfov", 90.0)),
                aspect_ratio=settings.aspect_ratio,
                aperture=float(cam.get("aperture", 0.0)),
                focus_dist=cam.get("focus_dist"),
            )
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Invalid camera section: {e}") from e

        scene = SceneManager()
        scene.from_dict(data)
        return cls(settings=settings, camera=camera, scene=scene)

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration to a JSON-friendly dictionary."""
        image = {key: getattr(self.settings, key) for key in _IMAGE_KEYS}
        return {
            "image": image,
            "camera": {
                "lookfrom": list(self.camera.lookfrom),
                "lookat": list(self.camera.lookat),
                "vup": list(self.camera.vup),
                "vfov": self.camera.vfov,
                "aperture": self.camera.aperture,
                "focus_dist": self.camera.focus_dist,
            },
            **self.scene.to_dict(),
        }


def load_config(filepath: str | os.PathLike) -> RenderConfig:
    """Load a render configuration from a JSON file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or the configuration is invalid.
    """
    with open(filepath, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("Render configuration must be a JSON object")
    return RenderConfig.from_dict(data)


def save_config(config: RenderConfig, filepath: str | os.PathLike) -> None:
    """Write a render configuration to a JSON file."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
