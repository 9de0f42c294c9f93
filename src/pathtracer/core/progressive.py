"""Progressive renderer for iterative sample accumulation.

This module provides a wrapper around the core integrator that supports:
- Progressive rendering that refines over time
- Batch rendering (multiple SPP in one call)
- Progress callbacks and a generator interface
- Easy reset and re-render functionality

Each pass traces one jittered sample per pixel and folds it into a running
average, so after N passes the image equals the N-sample supersampled
render.

Example:
    >>> from pathtracer.camera.pinhole import setup_camera
    >>> from pathtracer.core.integrator import RenderSettings
    >>> from pathtracer.core.progressive import ProgressiveRenderer
    >>> from pathtracer.scene.presets import create_demo_scene
    >>>
    >>> scene, camera_config = create_demo_scene(aspect_ratio=2.0)
    >>> settings = RenderSettings(width=200, height=100, seed=7)
    >>> renderer = ProgressiveRenderer(setup_camera(camera_config), scene.build_meshes(), settings)
    >>> renderer.render(10)
    >>> image = renderer.get_image_numpy()
"""

from collections.abc import Callable, Generator, Sequence

import numpy as np
import numpy.typing as npt

from pathtracer.camera.pinhole import Camera
from pathtracer.core.integrator import RenderSettings, render_sample_pass
from pathtracer.core.ray import make_rng
from pathtracer.scene.intersection import Mesh

# Type alias for progress callback
# Callback receives (current_samples, total_target_samples)
ProgressCallback = Callable[[int, int], None]


class ProgressiveRenderer:
    """A progressive renderer that accumulates samples over time.

    The renderer owns its color buffer and random generator; the camera and
    meshes are shared read-only.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(
        self,
        camera: Camera,
        meshes: Sequence[Mesh],
        settings: RenderSettings,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Initialize the progressive renderer.

        Args:
            camera: The camera state.
            meshes: The scene meshes.
            settings: Render settings (image size, depth, gamma, seed).
            rng: Random generator. Defaults to make_rng(settings.seed).
        """
        self._camera = camera
        self._meshes = tuple(meshes)
        self._settings = settings
        self._rng = rng if rng is not None else make_rng(settings.seed)
        self._color_buffer = np.zeros((settings.height, settings.width, 3), dtype=np.float64)
        self._sample_count = 0

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._settings.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._settings.height

    @property
    def settings(self) -> RenderSettings:
        """Get the render settings."""
        return self._settings

    @property
    def sample_count(self) -> int:
        """Get the current number of accumulated samples per pixel."""
        return self._sample_count

    def reset(self) -> None:
        """Reset the accumulator for a new render.

        Clears the color buffer and sample count. The random generator keeps
        its state, so a reset render draws fresh samples.
        """
        self._color_buffer.fill(0.0)
        self._sample_count = 0

    def _render_pass(self) -> None:
        """Trace one sample per pixel and fold it into the running average."""
        sample = render_sample_pass(self._camera, self._meshes, self._settings, self._rng)
        self._sample_count += 1
        # Running average: avg_n = avg_{n-1} + (x_n - avg_{n-1}) / n
        self._color_buffer += (sample - self._color_buffer) / self._sample_count

    def render(
        self,
        num_samples: int = 1,
        batch_size: int = 1,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render samples progressively with optional progress callback.

        Accumulates the specified number of samples into the existing buffer.
        Can be called multiple times to continue refining the image.

        Args:
            num_samples: Total number of samples to add.
            batch_size: Number of samples to render before each callback.
            callback: Optional callback function called after each batch.
                Receives (current_total_samples, target_total_samples).
        """
        for current, target in self.render_progressive(num_samples, batch_size):
            if callback is not None:
                callback(current, target)

    def render_progressive(
        self,
        num_samples: int = 1,
        batch_size: int = 1,
    ) -> Generator[tuple[int, int], None, None]:
        """Render samples progressively, yielding progress after each batch.

        Args:
            num_samples: Total number of samples to add.
            batch_size: Number of samples to render before each yield.

        Yields:
            Tuple of (current_total_samples, target_total_samples).
        """
        if num_samples <= 0:
            return
        batch_size = max(batch_size, 1)

        target_samples = self.sample_count + num_samples

        remaining = num_samples
        while remaining > 0:
            batch = min(batch_size, remaining)
            for _ in range(batch):
                self._render_pass()
            remaining -= batch
            yield (self.sample_count, target_samples)

    def get_image_numpy(self, gamma: float = 1.0) -> npt.NDArray[np.float64]:
        """Get the rendered image as a NumPy array.

        Args:
            gamma: Gamma correction value. Default 1.0 (linear).

        Returns:
            Array of shape (height, width, 3), top row first, clamped to [0, 1].
        """
        image = np.clip(self._color_buffer, 0.0, 1.0)
        if gamma != 1.0:
            image = np.power(image, 1.0 / gamma)
        return image

    def get_image_uint8(self, gamma: float | None = None) -> npt.NDArray[np.uint8]:
        """Get the rendered image as 8-bit channels.

        Args:
            gamma: Gamma correction value. Defaults to settings.gamma.
        """
        from pathtracer.preview.export import image_to_uint8

        if gamma is None:
            gamma = self._settings.gamma
        return image_to_uint8(self._color_buffer, gamma=gamma)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"ProgressiveRenderer(width={self.width}, height={self.height}, "
            f"samples={self.sample_count})"
        )
