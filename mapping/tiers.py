"""Score thresholds and the tier -> visuals table."""

from dataclasses import dataclass
from typing import Dict, Optional

from common.config import Config, config
from common.errors import ConfigError
from common.types import Tier, TierVisuals


@dataclass(frozen=True)
class TierThresholds:
    """Lower score bounds per tier, evaluated from HIGH down; first match wins."""
    high: float = 80.0
    medium: float = 60.0
    low: float = 40.0
    minimal: float = 20.0

    def __post_init__(self):
        if not (self.high >= self.medium >= self.low >= self.minimal):
            raise ConfigError(
                "lod.thresholds",
                reason=f"thresholds must descend, got {self.high}/{self.medium}/{self.low}/{self.minimal}",
            )

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> "TierThresholds":
        cfg = cfg or config
        return cls(
            high=float(cfg.get("lod.thresholds.high")),
            medium=float(cfg.get("lod.thresholds.medium")),
            low=float(cfg.get("lod.thresholds.low")),
            minimal=float(cfg.get("lod.thresholds.minimal")),
        )

    def tier_for(self, score: float) -> Tier:
        if score >= self.high:
            return Tier.HIGH
        if score >= self.medium:
            return Tier.MEDIUM
        if score >= self.low:
            return Tier.LOW
        # Below the minimal bound is still MINIMAL; see is_hidden()
        return Tier.MINIMAL

    def is_hidden(self, score: float) -> bool:
        """True when *score* falls under even the MINIMAL bound."""
        return score < self.minimal


DEFAULT_THRESHOLDS = TierThresholds()

TIER_VISUALS: Dict[Tier, TierVisuals] = {
    Tier.HIGH: TierVisuals(vector_opacity=1.0, cone_scale=1.0, label_opacity=1.0, label_scale=1.0),
    Tier.MEDIUM: TierVisuals(vector_opacity=0.85, cone_scale=0.9, label_opacity=0.8, label_scale=0.85),
    Tier.LOW: TierVisuals(vector_opacity=0.6, cone_scale=0.75, label_opacity=0.5, label_scale=0.7),
    Tier.MINIMAL: TierVisuals(vector_opacity=0.4, cone_scale=0.6, label_opacity=0.3, label_scale=0.6),
}


def tier_for_score(score: float, thresholds: TierThresholds = DEFAULT_THRESHOLDS) -> Tier:
    return thresholds.tier_for(score)


def visuals_for(tier: Tier) -> TierVisuals:
    return TIER_VISUALS[tier]
