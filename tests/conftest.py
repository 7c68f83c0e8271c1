"""
Shared pytest fixtures for vectorscape tests.

The conftest points the logger at a temp directory and installs an empty
Config singleton before anything imports common.config, so every test
sees the CONFIG_SCHEMA defaults regardless of a local config.json.
"""

import sys
import tempfile
from pathlib import Path

# Ensure project root is on sys.path so imports work from tests/
sys.path.insert(0, str(Path(__file__).parent.parent))

# Keep test logs out of the working tree
import common.logging.logger as _logger_module

_logger_module._log_dir = Path(tempfile.gettempdir()) / "vectorscape_test_logs"

from common.config import Config

_test_config = Config.__new__(Config)
_test_config._config = {}
Config._instance = _test_config

import common.config as _config_module

_config_module.config = _test_config

# Now it's safe to import the mapping package
import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def clustered_vectors(rng):
    """Three well-separated Gaussian clusters in 64-D, 10 points each.

    Returns (vectors, labels) where vectors maps id -> list of floats.
    """
    dim = 64
    centers = np.zeros((3, dim))
    centers[0, 0] = 10.0
    centers[1, 1] = 10.0
    centers[2, 2] = 10.0

    vectors = {}
    labels = {}
    for cluster, center in enumerate(centers):
        for i in range(10):
            item_id = f"c{cluster}_{i}"
            vectors[item_id] = list(center + rng.normal(scale=0.3, size=dim))
            labels[item_id] = cluster
    return vectors, labels
