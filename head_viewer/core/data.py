"""
Head data loading.

Reads the head shape (one ``x,y,z`` vertex per line) and the per-vertex
scalar time series (one comma-separated row per vertex) from CSV text files.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .config import ViewerConfig

logger = logging.getLogger(__name__)


class HeadDataError(ValueError):
    """Raised when a head shape or data file cannot be parsed."""


@dataclass(frozen=True)
class HeadData:
    """
    Parsed input for one head.

    Attributes:
        vertices (np.ndarray): Vertex positions. Shape: (n_points, 3).
        values (np.ndarray): Scalar series per vertex. Shape: (n_points, n_times).
    """
    vertices: np.ndarray
    values: np.ndarray

    @property
    def n_points(self) -> int:
        return self.vertices.shape[0]

    @property
    def n_times(self) -> int:
        return self.values.shape[1]


def _read_lines(path):
    # FileNotFoundError propagates unchanged
    with open(path, "r", encoding="utf-8") as f:
        return f.read().splitlines()


def _parse_fields(fields, path, line_no):
    try:
        row = [float(field) for field in fields]
    except ValueError as e:
        raise HeadDataError(f"{path}:{line_no}: {e}") from e
    if not all(math.isfinite(v) for v in row):
        raise HeadDataError(f"{path}:{line_no}: non-finite value")
    return row


def load_shape(path) -> np.ndarray:
    """Read head vertices from a CSV file with three fields per line."""
    lines = _read_lines(path)
    vertices = []
    for line_no, line in enumerate(lines, start=1):
        fields = line.split(",")
        if len(fields) != 3:
            raise HeadDataError(
                f"{path}:{line_no}: expected 3 fields (x,y,z), got {len(fields)}"
            )
        vertices.append(_parse_fields(fields, path, line_no))

    if not vertices:
        raise HeadDataError(f"{path}: no vertices")
    return np.array(vertices, dtype=np.float64)


def load_values(path, n_points) -> np.ndarray:
    """
    Read one scalar series per vertex from a CSV file.

    The last field of every line is dropped, so ``1,3,`` yields ``[1, 3]``.

    Args:
        path: Data file path.
        n_points: Number of vertices; the file must have exactly this many lines.

    Returns:
        np.ndarray: Series array. Shape: (n_points, n_fields - 1).
    """
    lines = _read_lines(path)
    if len(lines) != n_points:
        raise HeadDataError(
            f"{path}: expected {n_points} lines to match the head shape, got {len(lines)}"
        )

    rows = []
    dropped = 0
    for line_no, line in enumerate(lines, start=1):
        fields = line.split(",")
        if len(fields) < 2:
            raise HeadDataError(
                f"{path}:{line_no}: expected at least 2 fields, got {len(fields)}"
            )
        if fields[-1].strip():
            dropped += 1
        row = _parse_fields(fields[:-1], path, line_no)
        if rows and len(row) != len(rows[0]):
            raise HeadDataError(
                f"{path}:{line_no}: expected {len(rows[0])} values, got {len(row)}"
            )
        rows.append(row)

    if dropped:
        logger.warning(
            "%s: dropped a non-empty trailing field on %d of %d lines",
            path, dropped, len(lines),
        )
    return np.array(rows, dtype=np.float64)


def load_head_data(shape_path=None, data_path=None) -> HeadData:
    """Load the head shape and its scalar series, failing on any malformed input."""
    config = ViewerConfig()
    shape_path = Path(shape_path or config.shape_path)
    data_path = Path(data_path or config.data_path)

    logger.info("Loading head shape from %s", shape_path)
    vertices = load_shape(shape_path)

    logger.info("Loading head data from %s", data_path)
    values = load_values(data_path, len(vertices))

    logger.info("Loaded %d points x %d timesteps", values.shape[0], values.shape[1])
    return HeadData(vertices=vertices, values=values)
