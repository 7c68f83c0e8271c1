"""Built-in projector implementations."""

import time
from typing import Optional

import numpy as np

from common.config import config
from common.errors import DimensionError
from common.logging.logger import get_logger
from mapping.protocols import Projector

logger = get_logger("mapper")


def as_matrix(embeddings) -> np.ndarray:
    """
    Coerce *embeddings* to a finite (N, D) float64 matrix with D >= 1.

    Raises:
        DimensionError: On ragged rows, wrong rank, D == 0 or NaN/inf values.
    """
    try:
        matrix = np.asarray(embeddings, dtype=np.float64)
    except ValueError as exc:
        raise DimensionError(f"rows are not of uniform length ({exc})") from exc

    if matrix.ndim != 2:
        raise DimensionError(f"expected a 2-D matrix, got {matrix.ndim}-D")
    if matrix.shape[1] == 0:
        raise DimensionError("vectors must have at least one dimension")
    if not np.isfinite(matrix).all():
        raise DimensionError("vectors contain NaN or infinite values")
    return matrix


class PowerIterationProjector(Projector):
    """
    Variance-maximizing linear projection (PCA) via power iteration.

    Each component is the dominant eigenvector of the current residual's
    covariance, found by repeated ``R^T (R v)`` steps from a random start.
    The residual is then deflated by that component so the next run sees
    only the remaining, orthogonal variance.

    Components carry no canonical sign, and runs without a *seed* may
    differ between calls.  When the residual is exhausted (all rows
    identical, or more components than the data's rank) the component
    is left as the zero vector and contributes 0 to every coordinate.

    The convergence threshold is absolute, so a batch whose spread is
    tiny (e.g. embeddings scaled by 1e-6) reads as exhausted and every
    coordinate comes out 0.  Normalize such embeddings before fitting.

    Args:
        n_components: Number of directions to extract (default: config).
        max_iterations: Power-iteration cap per component (default: config).
        convergence_threshold: Norm below which the residual is treated
            as having no variance left (default: config).
        seed: Seed for the random starting vectors; None is non-deterministic.
    """

    def __init__(
        self,
        n_components: Optional[int] = None,
        max_iterations: Optional[int] = None,
        convergence_threshold: Optional[float] = None,
        seed: Optional[int] = None,
    ):
        self._n_components = int(config.get("reduction.num_components") if n_components is None else n_components)
        self._max_iterations = int(config.get("reduction.max_iterations") if max_iterations is None else max_iterations)
        self._threshold = float(config.get("reduction.convergence_threshold") if convergence_threshold is None else convergence_threshold)
        self._seed = seed

        if self._n_components < 1:
            raise DimensionError(f"n_components must be >= 1, got {self._n_components}")
        if self._max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self._max_iterations}")

        self.mean_: Optional[np.ndarray] = None
        self.components_: Optional[np.ndarray] = None
        self.explained_variance_: Optional[np.ndarray] = None

    @property
    def name(self) -> str:
        return "power_iteration"

    @property
    def n_components(self) -> int:
        return self._n_components

    def fit(self, embeddings: np.ndarray, **kwargs) -> None:
        matrix = as_matrix(embeddings)
        n_rows, dim = matrix.shape
        if n_rows == 0:
            raise DimensionError("cannot fit on an empty matrix")

        logger.info(
            f"Fitting power-iteration PCA on {n_rows} vectors "
            f"(dim={dim}, components={self._n_components})..."
        )
        start = time.time()
        rng = np.random.default_rng(kwargs.get("seed", self._seed))

        self.mean_ = matrix.mean(axis=0)
        centered = matrix - self.mean_
        residual = centered.copy()

        components = np.zeros((self._n_components, dim))
        for index in range(self._n_components):
            component = self._power_iterate(residual, rng, index)
            components[index] = component
            # Deflate: drop this direction from every residual row
            residual -= np.outer(residual @ component, component)

        self.components_ = components
        projected = centered @ components.T
        self.explained_variance_ = (projected ** 2).sum(axis=0) / max(n_rows - 1, 1)

        logger.info(f"Power-iteration fit complete in {time.time() - start:.3f}s")

    def _power_iterate(self, residual: np.ndarray, rng: np.random.Generator, index: int) -> np.ndarray:
        vector = rng.random(residual.shape[1]) - 0.5
        converged_steps = 0

        for _ in range(self._max_iterations):
            candidate = residual.T @ (residual @ vector)
            norm = float(np.linalg.norm(candidate))
            if norm < self._threshold:
                logger.debug(
                    f"Component {index}: residual variance exhausted "
                    f"after {converged_steps} steps (norm={norm:.3e})"
                )
                break
            vector = candidate / norm
            converged_steps += 1

        if converged_steps == 0:
            # The random start never left the null space of the residual
            return np.zeros(residual.shape[1])
        return vector

    def transform(self, embeddings: np.ndarray) -> np.ndarray:
        if self.components_ is None:
            raise RuntimeError("Projector not fitted. Call fit() first.")

        matrix = as_matrix(embeddings)
        if matrix.shape[1] != self.mean_.shape[0]:
            raise DimensionError(
                f"expected vectors of dimension {self.mean_.shape[0]}, "
                f"got {matrix.shape[1]}"
            )
        projected = (matrix - self.mean_) @ self.components_.T
        return np.nan_to_num(projected, nan=0.0, posinf=0.0, neginf=0.0)
