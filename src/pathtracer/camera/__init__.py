"""Camera module for view and ray generation.

Components:
    pinhole: Perspective camera with optional thin-lens depth of field

Camera responsibilities:
    - Transform (s, t) image coordinates to world-space rays
    - Apply anti-aliasing jitter for sub-pixel sampling
    - Support look-at positioning with up vector
    - Jitter ray origins over the lens disk for depth of field

Ray generation uses normalized coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .pinhole import (
    Camera,
    PinholeCamera,
    get_ray,
    get_ray_jittered,
    setup_camera,
)

__all__ = [
    "Camera",
    "PinholeCamera",
    "setup_camera",
    "get_ray",
    "get_ray_jittered",
]
