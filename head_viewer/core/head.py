"""
Time-series point cloud of a head.

Binds the loaded head data to sphere nodes in a scene graph and keeps their
colors and scales in sync with the playback timestep.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .config import ViewerConfig
from .mapping import ValueRange, compute_value_range, map_values
from .playback import PlaybackController

logger = logging.getLogger(__name__)


@dataclass
class HeadPoint:
    """One vertex of the head with its scalar series and sphere node."""
    vertex: np.ndarray
    series: np.ndarray
    node: object


class HeadModel:
    """
    Owns the head root node, its points and the playback controller.

    Args:
        scene: Scene graph providing ``create_node`` and ``create_sphere``.
        data: Parsed ``HeadData``.
        config: ``ViewerConfig``; defaults are used when omitted.
    """

    def __init__(self, scene, data, config=None):
        self.config = config or ViewerConfig()
        self.scene = scene
        self.data = data

        self.root = scene.create_node("Head")
        self.points = []
        for vertex, series in zip(data.vertices, data.values):
            node = scene.create_sphere(vertex * self.config.position_scale, parent=self.root)
            self.points.append(HeadPoint(vertex=vertex, series=series, node=node))

        # Face the camera
        self.root.set_rotation(*self.config.base_rotation)

        self.value_range: ValueRange = compute_value_range(data.values)
        logger.info(
            "Value range: [%g, %g] over %d points", self.value_range.min,
            self.value_range.max, len(self.points),
        )

        self._label_listeners = []
        self.playback = PlaybackController(data.n_times, self.config.advance_interval)
        self.playback.add_listener(self._on_time_changed)
        self.playback.set_time(0)

    @property
    def current_time(self):
        return self.playback.current_time

    @property
    def time_label(self):
        return f"Current Time: {self.current_time}"

    def add_label_listener(self, callback):
        """Register ``callback(text)`` to receive the time label on every change."""
        self._label_listeners.append(callback)
        callback(self.time_label)

    def tick(self, dt):
        """Per-frame update: spin the head and let playback auto-advance."""
        self.root.rotate(0.0, 0.0, self.config.spin_per_frame)
        self.playback.tick(dt)

    def _on_time_changed(self, t):
        self.apply_timestep(t)
        for callback in self._label_listeners:
            callback(self.time_label)

    def apply_timestep(self, t):
        """Color and scale every point by its value at timestep ``t``."""
        colors, scales = map_values(self.data.values[:, t], self.value_range)
        for point, color, scale in zip(self.points, colors, scales):
            point.node.set_color(color)
            point.node.set_local_scale(scale)
