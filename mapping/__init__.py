"""
Mapping module for vectorscape.

Computes display coordinates and per-frame level of detail:
- Semantic projection (power-iteration PCA to 3D)
- Importance scoring (weighted camera/selection signals -> tiers)
- Label selection (importance-ordered, collision-free)
"""

from mapping.protocols import Projector, ImportanceScorer
from mapping.pipeline import MappingPipeline
from mapping.registry import ComponentRegistry
from mapping.projectors import PowerIterationProjector
from mapping.reducer import reduce, scale_for_model
from mapping.axis_scorers import WeightedImportanceScorer, score
from mapping.weights import WeightConfig
from mapping.tiers import TierThresholds, TIER_VISUALS, tier_for_score, visuals_for
from mapping.labels import ScreenRect, select_labels

__all__ = [
    # Protocols
    'Projector',
    'ImportanceScorer',
    # Pipeline
    'MappingPipeline',
    'ComponentRegistry',
    # Reduction
    'PowerIterationProjector',
    'reduce',
    'scale_for_model',
    # Importance
    'WeightedImportanceScorer',
    'WeightConfig',
    'TierThresholds',
    'TIER_VISUALS',
    'score',
    'tier_for_score',
    'visuals_for',
    # Labels
    'ScreenRect',
    'select_labels',
]
