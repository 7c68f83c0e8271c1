"""Importance weight configuration."""

import math
import numbers
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from common.config import Config, config
from common.errors import WeightConfigError
from common.logging.logger import get_logger

logger = get_logger("lod")

# Weights conventionally sum to 100 so scores land in [0, 100]
_EXPECTED_TOTAL = 100.0
_TOTAL_TOLERANCE = 10.0


@dataclass(frozen=True)
class WeightConfig:
    """
    Relative weight of each importance signal.

    Weights are validated when the config is built, never while scoring:
    a negative or non-finite weight raises WeightConfigError here.  A
    total far from 100 is only logged, since scores are clamped anyway.
    """
    distance: float = 50.0
    center: float = 30.0
    similarity: float = 20.0
    view_angle: float = 10.0

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise WeightConfigError(f.name, value)
            if not math.isfinite(value) or value < 0:
                raise WeightConfigError(f.name, value)
            # numpy scalars are accepted but stored as plain floats
            object.__setattr__(self, f.name, float(value))

        if abs(self.total - _EXPECTED_TOTAL) > _TOTAL_TOLERANCE:
            logger.warning(
                f"Importance weights sum to {self.total:.1f} "
                f"(expected ~{_EXPECTED_TOTAL:.0f})"
            )

    @property
    def total(self) -> float:
        return self.distance + self.center + self.similarity + self.view_angle

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "WeightConfig":
        """
        Build from a mapping such as ``{"DISTANCE": 50, "CENTER": 30}``.

        Keys are case-insensitive; missing keys keep their defaults and
        unknown keys or a field given twice raise WeightConfigError.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            name = key.lower()
            if name not in known:
                raise WeightConfigError(key, value)
            if name in kwargs:
                raise WeightConfigError(key, value)
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> "WeightConfig":
        """Load ``lod.weights.*`` from configuration."""
        cfg = cfg or config
        return cls(
            distance=cfg.get("lod.weights.distance"),
            center=cfg.get("lod.weights.center"),
            similarity=cfg.get("lod.weights.similarity"),
            view_angle=cfg.get("lod.weights.view_angle"),
        )
