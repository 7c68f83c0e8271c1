"""
Reduce a batch of embeddings to display coordinates.

``reduce`` is the entry point callers use: it filters missing vectors,
handles the empty and single-vector batches, runs a projector over the
rest and applies a uniform visual scale.  The scale normally depends on
the embedding model (some models cluster more tightly than others); use
``scale_for_model`` to look it up from configuration and pass it in.
"""

import math
from typing import List, Optional, Tuple

import numpy as np

from common.config import config
from common.errors import DimensionError
from common.logging.logger import get_logger
from common.types import Coordinates, Embedding, EmbeddingBatch, ItemID, ProjectedBatch
from mapping.projectors import PowerIterationProjector, as_matrix
from mapping.protocols import Projector

logger = get_logger("mapper")


def scale_for_model(model_key: Optional[str]) -> float:
    """Return the configured display scale for *model_key*, or the default."""
    table = config.get("reduction.model_scaling") or {}
    if model_key is not None and model_key in table:
        return float(table[model_key])
    if model_key is not None:
        logger.debug(f"No scale configured for model '{model_key}', using default")
    return float(config.get("reduction.default_scale"))


def single_point(num_components: int, scale: float) -> Coordinates:
    """Fixed placement for a batch holding exactly one vector.

    Variance is undefined for one sample, so the point is put on the
    first axis at a fraction of the scale instead of being projected.
    """
    fraction = float(config.get("reduction.single_point_fraction"))
    return (fraction * scale,) + (0.0,) * (num_components - 1)


def _collect(vectors: EmbeddingBatch) -> Tuple[List[ItemID], List[Embedding]]:
    ids: List[ItemID] = []
    rows: List[Embedding] = []
    expected_dim = None

    for item_id, vector in vectors.items():
        if vector is None:
            continue
        dim = len(vector)
        if dim == 0:
            raise DimensionError(f"vector for '{item_id}' is empty")
        if expected_dim is None:
            expected_dim = dim
        elif dim != expected_dim:
            raise DimensionError(
                f"vector for '{item_id}' has dimension {dim}, expected {expected_dim}"
            )
        ids.append(ItemID(item_id))
        rows.append(vector)

    return ids, rows


def reduce(
    vectors: EmbeddingBatch,
    num_components: Optional[int] = None,
    scale: Optional[float] = None,
    seed: Optional[int] = None,
    projector: Optional[Projector] = None,
) -> ProjectedBatch:
    """
    Project embeddings onto their top directions of maximal variance.

    Args:
        vectors: Item id -> D-dimensional vector.  ``None`` entries are
            dropped and do not appear in the result.
        num_components: Output dimensionality (default: config, 3).
            Ignored when *projector* is given.
        scale: Uniform multiplier applied to every coordinate
            (default: ``reduction.default_scale``).
        seed: Seed for the power-iteration start vectors.
        projector: Projector to use instead of a fresh
            PowerIterationProjector.

    Returns:
        Item id -> tuple of coordinates.  Empty when no vectors remain.

    Raises:
        DimensionError: On ragged or empty vectors, non-finite values or
            a component count below 1.
        ValueError: On a non-positive or non-finite scale.
    """
    if scale is None:
        scale = float(config.get("reduction.default_scale"))
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError(f"scale must be a positive finite number, got {scale!r}")

    if projector is None:
        projector = PowerIterationProjector(n_components=num_components, seed=seed)
    k = projector.n_components

    ids, rows = _collect(vectors)
    dropped = len(vectors) - len(ids)
    if dropped:
        logger.debug(f"Skipping {dropped} items without a vector")

    if not ids:
        return {}

    matrix = as_matrix(rows)

    if len(ids) == 1:
        logger.debug(f"Single vector '{ids[0]}': using fixed placement")
        return {ids[0]: single_point(k, scale)}

    coords = projector.fit_transform(matrix) * scale
    coords = np.nan_to_num(coords, nan=0.0, posinf=0.0, neginf=0.0)

    return {
        item_id: tuple(float(value) for value in row)
        for item_id, row in zip(ids, coords)
    }
