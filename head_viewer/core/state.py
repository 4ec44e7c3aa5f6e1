from dataclasses import dataclass

@dataclass
class PlaybackState:
    """
    Holds the runtime playback state of the viewer.
    Independent of UI or Rendering backend.
    """
    # Timestep shared by every point
    current_time: int = 0

    # Animation State
    is_playing: bool = False
    change_timer: float = 0.0  # seconds accumulated since the last auto-advance
