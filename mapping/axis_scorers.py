"""Built-in importance scorer implementations."""

import math
from typing import Optional

from common.config import config
from common.errors import ConfigError
from common.types import ImportanceScore, ImportanceSignal
from mapping.protocols import ImportanceScorer
from mapping.tiers import TierThresholds
from mapping.weights import WeightConfig

MAX_SCORE = 100.0


def _unit(value: float) -> float:
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def distance_falloff(distance: float, max_distance: float) -> float:
    """1 at the camera, falling linearly to 0 at *max_distance* and beyond."""
    if math.isnan(distance):
        return 0.0
    return 1.0 - min(max(distance, 0.0) / max_distance, 1.0)


class WeightedImportanceScorer(ImportanceScorer):
    """
    Level-of-detail importance as a weighted sum of per-item signals.

        score = W_distance   * falloff(distance)
              + W_center     * center_proximity
              + W_similarity * (similarity or neutral_similarity)
              + W_view_angle * view_alignment

    Each signal is clamped to [0, 1] and the sum to [0, 100].  A missing
    similarity (nothing selected) counts as the neutral midpoint rather
    than zero, so items are not all penalized when there is no
    selection.  The scorer keeps no per-item state.

    Args:
        weights: Signal weights (default: ``lod.weights.*``).
        thresholds: Tier bounds (default: ``lod.thresholds.*``).
        max_distance: Camera distance at which the distance term reaches 0.
        neutral_similarity: Stand-in for an absent similarity.
        selected_score: Fixed score for selected items.
        hovered_score: Fixed score for the hovered item.
    """

    def __init__(
        self,
        weights: Optional[WeightConfig] = None,
        thresholds: Optional[TierThresholds] = None,
        max_distance: Optional[float] = None,
        neutral_similarity: Optional[float] = None,
        selected_score: Optional[float] = None,
        hovered_score: Optional[float] = None,
    ):
        self.weights = weights or WeightConfig.from_config()
        self.thresholds = thresholds or TierThresholds.from_config()
        self.max_distance = float(config.get("lod.max_distance") if max_distance is None else max_distance)
        self.neutral_similarity = float(
            config.get("lod.neutral_similarity") if neutral_similarity is None else neutral_similarity
        )
        self.selected_score = float(config.get("lod.selected_score") if selected_score is None else selected_score)
        self.hovered_score = float(config.get("lod.hovered_score") if hovered_score is None else hovered_score)

        if not self.max_distance > 0:
            raise ConfigError("lod.max_distance", reason=f"must be > 0, got {self.max_distance}")
        if not 0.0 <= self.neutral_similarity <= 1.0:
            raise ConfigError(
                "lod.neutral_similarity", reason=f"must be in [0, 1], got {self.neutral_similarity}"
            )

    @property
    def name(self) -> str:
        return "weighted"

    def raw_score(self, signal: ImportanceSignal) -> float:
        """Weighted sum clamped to [0, 100], before tier mapping."""
        w = self.weights
        similarity = self.neutral_similarity if signal.similarity is None else _unit(signal.similarity)

        total = (
            w.distance * distance_falloff(signal.distance, self.max_distance)
            + w.center * _unit(signal.center_proximity)
            + w.similarity * similarity
            + w.view_angle * _unit(signal.view_alignment)
        )
        return min(max(total, 0.0), MAX_SCORE)

    def compute(self, signal: ImportanceSignal) -> ImportanceScore:
        value = self.raw_score(signal)
        return ImportanceScore(score=value, tier=self.thresholds.tier_for(value))

    def compute_with_state(
        self,
        signal: ImportanceSignal,
        selected: bool = False,
        hovered: bool = False,
    ) -> ImportanceScore:
        if selected:
            value = self.selected_score
        elif hovered:
            value = self.hovered_score
        else:
            return self.compute(signal)
        return ImportanceScore(score=value, tier=self.thresholds.tier_for(value))


def score(signal: ImportanceSignal, weights: Optional[WeightConfig] = None) -> ImportanceScore:
    """Score one signal with *weights* and the configured thresholds."""
    return WeightedImportanceScorer(weights=weights).compute(signal)
