"""Matplotlib-based preview display for rendered images.

Example:
    >>> from pathtracer.preview.display import show_preview
    >>> show_preview(image, gamma=2.0, title="Demo scene")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from matplotlib.figure import Figure


def apply_gamma(
    image: npt.NDArray[np.floating],
    gamma: float = 2.0,
) -> npt.NDArray[np.float64]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma value (default 2.0).

    Returns:
        Gamma corrected image in [0, 1].
    """
    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0)
    if gamma == 1.0:
        return image
    return np.power(image, 1.0 / gamma)


def show_preview(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 2.0,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 4),
    block: bool = True,
) -> Figure:
    """Display a rendered image as a Matplotlib figure.

    Args:
        image: Linear image array of shape (H, W, 3), top row first.
        gamma: Gamma correction value (default 2.0).
        title: Figure title (default "Render Preview").
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until figure is closed.

    Returns:
        The Matplotlib figure.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(apply_gamma(image, gamma))
    ax.axis("off")
    ax.set_title(title if title is not None else "Render Preview")

    plt.tight_layout()
    plt.show(block=block)
    return fig
