"""
Signal helpers: turn camera, screen and selection state into the
normalized inputs of an ImportanceSignal.

All functions are pure and work on plain sequences of floats, so the
caller can feed them whatever vector type its renderer uses.
"""

import math
from typing import Iterable, Optional, Sequence

import numpy as np

from common.types import ImportanceSignal


def _vec(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between *a* and *b*; 0.0 if either is zero."""
    va, vb = _vec(a), _vec(b)
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0
    return float(va @ vb) / denom


def camera_distance(camera_position: Sequence[float], point: Sequence[float]) -> float:
    return float(np.linalg.norm(_vec(point) - _vec(camera_position)))


def center_proximity(screen_x: float, screen_y: float, width: float, height: float) -> float:
    """
    1.0 at the viewport center, 0.0 at a corner or beyond.

    Screen coordinates are in pixels from the top-left corner.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"viewport must have a positive size, got {width}x{height}")
    cx, cy = width / 2.0, height / 2.0
    offset = math.hypot(screen_x - cx, screen_y - cy)
    max_offset = math.hypot(cx, cy)
    return 1.0 - min(offset / max_offset, 1.0)


def view_alignment(point: Sequence[float], camera_direction: Sequence[float]) -> float:
    """|cos| between the point's direction from the origin and the camera's view."""
    return abs(cosine_similarity(point, camera_direction))


def max_similarity(point: Sequence[float], selected_points: Iterable[Sequence[float]]) -> Optional[float]:
    """Highest |cosine| between *point* and any selected point; None if none are selected."""
    best = None
    for other in selected_points:
        similarity = abs(cosine_similarity(point, other))
        if best is None or similarity > best:
            best = similarity
    return best


def build_signal(
    point: Sequence[float],
    camera_position: Sequence[float],
    camera_direction: Sequence[float],
    screen_position: Optional[Sequence[float]],
    viewport: Sequence[float],
    selected_points: Iterable[Sequence[float]] = (),
) -> ImportanceSignal:
    """
    Assemble the importance inputs for one point.

    Args:
        point: The item's 3-D position.
        camera_position: Camera position in the same space.
        camera_direction: Camera forward vector.
        screen_position: Projected (x, y) in pixels, or None when the
            point is off-screen (center proximity is then 0).
        viewport: (width, height) in pixels.
        selected_points: Positions of the currently selected items.
    """
    if screen_position is None:
        proximity = 0.0
    else:
        proximity = center_proximity(screen_position[0], screen_position[1], viewport[0], viewport[1])

    return ImportanceSignal(
        distance=camera_distance(camera_position, point),
        center_proximity=proximity,
        view_alignment=view_alignment(point, camera_direction),
        similarity=max_similarity(point, selected_points),
    )
