"""Preview module for output and visualization.

Components:
    display: Matplotlib-based preview display
    export: PPM/PNG image export utilities

Example:
    >>> from pathtracer.preview import save_image, show_preview
    >>> save_image(image, "image.ppm", gamma=2.0)
    >>> show_preview(image, gamma=2.0)
"""

from pathtracer.preview.display import apply_gamma, show_preview
from pathtracer.preview.export import (
    format_ppm,
    image_to_uint8,
    save_image,
    save_png,
    save_png_from_array,
    save_ppm,
    save_ppm_from_array,
    write_ppm,
)

__all__ = [
    # Display functions
    "show_preview",
    "apply_gamma",
    # Export functions
    "image_to_uint8",
    "format_ppm",
    "write_ppm",
    "save_ppm",
    "save_ppm_from_array",
    "save_png",
    "save_png_from_array",
    "save_image",
]
