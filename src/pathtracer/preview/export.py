"""Image export utilities for rendered images.

This module provides functions for saving rendered images to files with
gamma correction.

Supported formats:
    - PPM (plain-text "P3" netpbm)
    - PNG (8-bit RGB via Pillow)

Every channel is quantized as floor(value^(1/gamma) * 255.99) after
clamping the linear value to [0, 1].

Example:
    >>> from pathtracer.preview.export import save_ppm_from_array
    >>> save_ppm_from_array(image, "image.ppm", gamma=2.0)
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from pathtracer.core.progressive import ProgressiveRenderer

PPM_MAX_VALUE = 255


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 2.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to gamma-corrected 8-bit channels.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma correction value (default 2.0).

    Returns:
        8-bit image array of shape (H, W, 3) with dtype uint8.
    """
    clamped = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0)
    corrected = np.power(clamped, 1.0 / gamma)
    return np.floor(corrected * 255.99).astype(np.uint8)


def format_ppm(pixels: npt.NDArray[np.uint8]) -> str:
    """Format 8-bit pixels as a plain-text PPM document.

    The header is ``P3``, ``<width> <height>`` and ``255`` on separate lines,
    followed by one ``R G B`` line per pixel, row by row from the top.

    Args:
        pixels: Array of shape (H, W, 3), top row first.

    Returns:
        The PPM text, ending with a newline.
    """
    height, width = pixels.shape[0], pixels.shape[1]
    lines = ["P3", f"{width} {height}", str(PPM_MAX_VALUE)]
    for r, g, b in pixels.reshape(-1, 3):
        lines.append(f"{int(r)} {int(g)} {int(b)}")
    return "\n".join(lines) + "\n"


def write_ppm(pixels: npt.NDArray[np.uint8], filepath: str | os.PathLike) -> None:
    """Write 8-bit pixels to a PPM file.

    Raises:
        OSError: If the file cannot be created or written.
    """
    with open(filepath, "w", encoding="ascii") as f:
        f.write(format_ppm(pixels))


def save_ppm_from_array(
    image: npt.NDArray[np.floating],
    filepath: str | os.PathLike,
    *,
    gamma: float = 2.0,
) -> None:
    """Save a linear float image as a PPM file."""
    write_ppm(image_to_uint8(image, gamma=gamma), filepath)


def save_ppm(
    renderer: ProgressiveRenderer,
    filepath: str | os.PathLike,
    *,
    gamma: float | None = None,
) -> None:
    """Save the current state of a progressive render as a PPM file.

    Args:
        renderer: The ProgressiveRenderer instance to save.
        filepath: Output file path.
        gamma: Gamma correction value. Defaults to the renderer's setting.
    """
    write_ppm(renderer.get_image_uint8(gamma=gamma), filepath)


def save_png_from_array(
    image: npt.NDArray[np.floating],
    filepath: str | os.PathLike,
    *,
    gamma: float = 2.0,
) -> None:
    """Save a linear float image as an 8-bit PNG file.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value (default 2.0).
    """
    pil_image = PILImage.fromarray(image_to_uint8(image, gamma=gamma))
    pil_image.save(filepath)


def save_png(
    renderer: ProgressiveRenderer,
    filepath: str | os.PathLike,
    *,
    gamma: float | None = None,
) -> None:
    """Save the current state of a progressive render as a PNG file."""
    pil_image = PILImage.fromarray(renderer.get_image_uint8(gamma=gamma))
    pil_image.save(filepath)


def save_image(
    image: npt.NDArray[np.floating],
    filepath: str | os.PathLike,
    *,
    gamma: float = 2.0,
) -> None:
    """Save a linear float image, choosing the format from the extension.

    ``.ppm`` writes plain-text PPM; anything else goes through Pillow.
    """
    if str(filepath).lower().endswith(".ppm"):
        save_ppm_from_array(image, filepath, gamma=gamma)
    else:
        save_png_from_array(image, filepath, gamma=gamma)
