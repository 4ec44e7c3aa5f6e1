"""
Playback controller for the shared timestep.

Two states, Paused (initial) and Playing. While playing, ``tick(dt)``
accumulates frame time and advances one timestep each time the accumulator
reaches the advance interval. Every timestep change is reported to the
registered listeners.
"""

import logging

from .state import PlaybackState

logger = logging.getLogger(__name__)


class PlaybackController:
    """
    Steps a timestep index through ``[0, n_times)`` with wraparound.

    Args:
        n_times: Series length shared by every point.
        advance_interval: Seconds of play time per auto-advance.
    """

    def __init__(self, n_times, advance_interval=0.25):
        if n_times < 1:
            raise ValueError(f"n_times must be positive, got {n_times}")
        self.n_times = n_times
        self.advance_interval = advance_interval
        self.state = PlaybackState()
        self._listeners = []

    @property
    def current_time(self):
        return self.state.current_time

    @property
    def is_playing(self):
        return self.state.is_playing

    @property
    def last_time(self):
        return self.n_times - 1

    def add_listener(self, callback):
        """Register ``callback(t)`` to run on every timestep change."""
        self._listeners.append(callback)

    # ─────────────────────────────────────────────────────────────────────────
    # Play / Pause
    # ─────────────────────────────────────────────────────────────────────────

    def play(self):
        self.state.is_playing = True
        self.state.change_timer = 0.0
        logger.debug("Playback started at t=%d", self.current_time)

    def pause(self):
        self.state.is_playing = False
        logger.debug("Playback paused at t=%d", self.current_time)

    def toggle(self):
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def tick(self, dt):
        """Advance the play clock by ``dt`` seconds. No-op while paused."""
        if not self.state.is_playing:
            return
        self.state.change_timer += dt
        if self.state.change_timer >= self.advance_interval:
            self.step_forward()
            self.state.change_timer = 0.0

    # ─────────────────────────────────────────────────────────────────────────
    # Stepping
    # ─────────────────────────────────────────────────────────────────────────

    def step_forward(self):
        if self.current_time < self.last_time:
            self.set_time(self.current_time + 1)
        else:
            self.set_time(0)

    def step_backward(self):
        if self.current_time > 0:
            self.set_time(self.current_time - 1)
        else:
            self.set_time(self.last_time)

    def set_time(self, t):
        """Jump to timestep ``t`` and notify listeners."""
        if not 0 <= t < self.n_times:
            raise IndexError(f"timestep {t} outside [0, {self.n_times})")
        self.state.current_time = int(t)
        for callback in self._listeners:
            callback(self.state.current_time)
