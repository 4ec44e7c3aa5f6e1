"""
Orbit camera.

Consumes rendercanvas-style event dicts (``pointer_down``, ``pointer_up``,
``pointer_move``, ``wheel``) so the Qt viewport and a bare rendercanvas can
drive it the same way.
"""

import numpy as np
import pyrr


class Camera:
    """Orbits a target point. Left drag orbits, right drag pans, wheel zooms."""

    def __init__(self, canvas=None, distance=12.0, target=(0.0, 0.0, 0.0)):
        self.canvas = canvas
        self.distance = distance
        self.target = np.array(target, dtype=np.float32)
        self.azimuth = 0.0  # degrees
        self.elevation = 0.0  # degrees

        self.orbit_speed = 0.3
        self.pan_speed = 0.01
        self.zoom_speed = 0.001
        self.min_distance = 1.0
        self.max_distance = 100.0

        self._drag_button = 0
        self._last_pos = None

    @property
    def position(self):
        az = np.radians(self.azimuth)
        el = np.radians(self.elevation)
        offset = np.array([
            np.cos(el) * np.sin(az),
            np.sin(el),
            np.cos(el) * np.cos(az),
        ], dtype=np.float32)
        return self.target + self.distance * offset

    def get_view_matrix(self):
        return pyrr.matrix44.create_look_at(
            self.position, self.target, np.array([0.0, 1.0, 0.0], dtype=np.float32)
        ).astype(np.float32)

    def handle_event(self, event):
        event_type = event["event_type"]

        if event_type == "pointer_down":
            self._drag_button = event.get("button", 1)
            self._last_pos = (event["x"], event["y"])

        elif event_type == "pointer_up":
            self._drag_button = 0
            self._last_pos = None

        elif event_type == "pointer_move":
            if not self._drag_button or self._last_pos is None:
                return
            dx = event["x"] - self._last_pos[0]
            dy = event["y"] - self._last_pos[1]
            self._last_pos = (event["x"], event["y"])
            if self._drag_button == 1:
                self.azimuth -= dx * self.orbit_speed
                self.elevation = float(np.clip(self.elevation + dy * self.orbit_speed, -89.0, 89.0))
            else:
                self._pan(dx, dy)

        elif event_type == "wheel":
            factor = 1.0 + event["dy"] * self.zoom_speed
            self.distance = float(np.clip(self.distance * factor, self.min_distance, self.max_distance))

    def _pan(self, dx, dy):
        forward = self.target - self.position
        forward /= np.linalg.norm(forward)
        right = np.cross(forward, np.array([0.0, 1.0, 0.0], dtype=np.float32))
        norm = np.linalg.norm(right)
        if norm == 0:
            return
        right /= norm
        up = np.cross(right, forward)
        scale = self.pan_speed * self.distance / 10.0
        self.target = (self.target - right * dx * scale + up * dy * scale).astype(np.float32)
