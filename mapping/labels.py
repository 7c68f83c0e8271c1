"""Greedy, importance-ordered label placement without overlaps."""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Union

from common.config import config
from common.types import ImportanceScore

# Rough glyph metrics at label scale 1.0, in pixels
CHAR_WIDTH = 8.0
CHAR_HEIGHT = 16.0

MIN_LABELS = 1
MAX_LABELS = 50


@dataclass(frozen=True)
class ScreenRect:
    """Axis-aligned rectangle in screen pixels, (x, y) at the top-left."""
    x: float
    y: float
    width: float
    height: float


def label_bounds(
    text: str,
    screen_x: float,
    screen_y: float,
    scale: float = 1.0,
    padding: Optional[float] = None,
) -> ScreenRect:
    """Estimate the padded rectangle of a label centered on (screen_x, screen_y)."""
    if padding is None:
        padding = float(config.get("lod.label_collision_padding"))
    width = len(text) * CHAR_WIDTH * scale + padding
    height = CHAR_HEIGHT * scale + padding
    return ScreenRect(
        x=screen_x - width / 2.0,
        y=screen_y - height / 2.0,
        width=width,
        height=height,
    )


def rects_overlap(a: ScreenRect, b: ScreenRect) -> bool:
    """True if the rectangles intersect; shared edges count as overlap."""
    return not (
        a.x + a.width < b.x
        or b.x + b.width < a.x
        or a.y + a.height < b.y
        or b.y + b.height < a.y
    )


def _value(score: Union[float, ImportanceScore]) -> float:
    return score.score if isinstance(score, ImportanceScore) else float(score)


def select_labels(
    scores: Mapping[str, Union[float, ImportanceScore]],
    bounds: Mapping[str, Optional[ScreenRect]],
    max_labels: Optional[int] = None,
    min_score: Optional[float] = None,
) -> List[str]:
    """
    Choose which labels to show.

    Items are visited from highest to lowest score (ties keep input
    order).  An item is skipped when its score is under *min_score*,
    when it has no bounds (off-screen or behind the camera) or when its
    rectangle overlaps one already accepted.  Selection stops once
    *max_labels* labels are accepted.

    Returns:
        Ids of visible labels, most important first.
    """
    if max_labels is None:
        max_labels = int(config.get("lod.max_labels"))
    max_labels = max(MIN_LABELS, min(max_labels, MAX_LABELS))
    if min_score is None:
        min_score = float(config.get("lod.thresholds.minimal"))

    ranked = sorted(scores.items(), key=lambda item: -_value(item[1]))

    visible: List[str] = []
    occupied: List[ScreenRect] = []
    for item_id, item_score in ranked:
        if len(visible) >= max_labels:
            break
        if _value(item_score) < min_score:
            continue
        rect = bounds.get(item_id)
        if rect is None:
            continue
        if any(rects_overlap(rect, other) for other in occupied):
            continue
        visible.append(item_id)
        occupied.append(rect)

    return visible


def label_visibility(visible: List[str], item_ids) -> Dict[str, bool]:
    """Expand a visible-id list into an id -> shown flag for every item."""
    shown = set(visible)
    return {item_id: item_id in shown for item_id in item_ids}
