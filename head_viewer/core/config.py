import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


@dataclass(frozen=True)
class ViewerConfig:
    """
    Static settings for the head viewer.
    Independent of UI or Rendering backend.
    """
    # Input files
    shape_path: Path = Path("data/head_shape.csv")
    data_path: Path = Path("data/data.csv")

    # Head layout
    position_scale: float = 5.0
    base_rotation: Tuple[float, float, float] = (-90.0, 90.0, 0.0)  # Euler degrees
    spin_per_frame: float = 0.5  # degrees about local Z

    # Playback
    advance_interval: float = 0.25  # seconds between auto-play steps
    frame_interval_ms: int = 16  # ~60 FPS

    @classmethod
    def from_env(cls):
        """
        Build a config, taking input paths from the environment when set.

        HEAD_VIEWER_SHAPE and HEAD_VIEWER_DATA override the shape and data
        paths. Relative paths, including the defaults, resolve against the
        current working directory, so run from the repository root or set
        absolute paths.
        """
        defaults = cls()
        return cls(
            shape_path=Path(os.environ.get("HEAD_VIEWER_SHAPE", defaults.shape_path)),
            data_path=Path(os.environ.get("HEAD_VIEWER_DATA", defaults.data_path)),
        )
