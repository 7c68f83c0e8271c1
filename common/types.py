"""
Domain types for vectorscape.

Lightweight NewType aliases, enums and frozen dataclasses shared by the
reducer and the importance scorer.  Every value here is plain data owned
by the caller; nothing holds state between calls.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, NewType, Optional, Sequence, Tuple

# ---------------------------------------------------------------------------
# Scalar type aliases
# ---------------------------------------------------------------------------

ItemID = NewType("ItemID", str)
"""Identifier of one embedded item, unique within a batch."""

Embedding = Sequence[float]
"""Fixed-length vector of D floats (D constant within one batch)."""

Coordinates = Tuple[float, ...]
"""Reduced coordinates, one float per extracted component."""

EmbeddingBatch = Mapping[str, Optional[Embedding]]
"""Item id -> vector; None marks an item with no embedding."""

ProjectedBatch = Dict[str, Coordinates]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Tier(str, Enum):
    """Visibility tier, ordered from most to least prominent."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    MINIMAL = "minimal"

    @property
    def rank(self) -> int:
        """0 for HIGH up to 3 for MINIMAL."""
        return TIER_ORDER.index(self)


TIER_ORDER: Tuple[Tier, ...] = (Tier.HIGH, Tier.MEDIUM, Tier.LOW, Tier.MINIMAL)


# ---------------------------------------------------------------------------
# Composite data records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ImportanceSignal:
    """
    Per-item runtime inputs to the importance scorer.

    Recomputed by the caller every frame.  ``similarity`` is None when
    nothing is selected.
    """
    distance: float
    center_proximity: float
    view_alignment: float
    similarity: Optional[float] = None


@dataclass(frozen=True)
class ImportanceScore:
    """A composite score in [0, 100] and the tier it maps to."""
    score: float
    tier: Tier


@dataclass(frozen=True)
class TierVisuals:
    """Multipliers a renderer applies to an item in a given tier."""
    vector_opacity: float
    cone_scale: float
    label_opacity: float
    label_scale: float
