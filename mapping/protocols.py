"""Abstract base classes for the mapping system."""

from abc import ABC, abstractmethod

import numpy as np

from common.types import ImportanceScore, ImportanceSignal


class Projector(ABC):
    """Protocol for dimensionality reduction to display coordinates."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique projector name (e.g. 'power_iteration')."""
        ...

    @property
    def n_components(self) -> int:
        return 3

    @abstractmethod
    def fit(self, embeddings: np.ndarray, **kwargs) -> None:
        """Fit the model on *embeddings*."""
        ...

    @abstractmethod
    def transform(self, embeddings: np.ndarray) -> np.ndarray:
        """Project *embeddings* to low-dimensional space."""
        ...

    def fit_transform(self, embeddings: np.ndarray, **kwargs) -> np.ndarray:
        """Convenience: fit then transform."""
        self.fit(embeddings, **kwargs)
        return self.transform(embeddings)


class ImportanceScorer(ABC):
    """Protocol for computing a per-item level-of-detail importance score."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def compute(self, signal: ImportanceSignal) -> ImportanceScore:
        """Return a score in [0, 100] and its visibility tier."""
        ...

    def compute_with_state(
        self,
        signal: ImportanceSignal,
        selected: bool = False,
        hovered: bool = False,
    ) -> ImportanceScore:
        """Score with selection/hover taken into account (default: ignored)."""
        return self.compute(signal)
