"""Mapping pipeline — orchestrates projection, importance scoring and labels."""

from typing import Dict, Iterable, List, Mapping, Optional

from common.logging.logger import get_logger
from common.types import EmbeddingBatch, ImportanceScore, ImportanceSignal, ProjectedBatch
from mapping.axis_scorers import WeightedImportanceScorer
from mapping.labels import ScreenRect, select_labels
from mapping.projectors import PowerIterationProjector
from mapping.protocols import ImportanceScorer, Projector
from mapping.reducer import reduce

logger = get_logger("mapper")


class MappingPipeline:
    """
    Orchestrates the mapping flow: project -> score -> pick labels.

    Each component can be swapped independently.

    Args:
        projector: Dimensionality reduction strategy (default: power-iteration PCA).
        scorer: Importance scoring strategy (default: weighted signals).
        scale: Display scale applied to projected coordinates
            (default: ``reduction.default_scale``).
    """

    def __init__(
        self,
        projector: Optional[Projector] = None,
        scorer: Optional[ImportanceScorer] = None,
        scale: Optional[float] = None,
    ):
        self.projector = projector or PowerIterationProjector()
        self.scorer = scorer or WeightedImportanceScorer()
        self.scale = scale

    def project(
        self,
        vectors: EmbeddingBatch,
        scale: Optional[float] = None,
    ) -> ProjectedBatch:
        """Project embeddings to display coordinates (refits every call)."""
        return reduce(
            vectors,
            scale=scale if scale is not None else self.scale,
            projector=self.projector,
        )

    def score_items(
        self,
        signals: Mapping[str, ImportanceSignal],
        selected: Iterable[str] = (),
        hovered: Optional[str] = None,
    ) -> Dict[str, ImportanceScore]:
        """Score every item for the current frame."""
        selected_ids = set(selected)
        return {
            item_id: self.scorer.compute_with_state(
                signal,
                selected=item_id in selected_ids,
                hovered=item_id == hovered,
            )
            for item_id, signal in signals.items()
        }

    def visible_labels(
        self,
        scores: Mapping[str, ImportanceScore],
        bounds: Mapping[str, Optional[ScreenRect]],
        max_labels: Optional[int] = None,
    ) -> List[str]:
        """Pick the non-overlapping labels to show, most important first."""
        visible = select_labels(scores, bounds, max_labels=max_labels)
        logger.debug(f"Showing {len(visible)} of {len(scores)} labels")
        return visible
