import json
from pathlib import Path
from typing import Dict, Any

from common.errors import ConfigError
from common.logging.logger import get_logger

logger = get_logger("config")

# Centralized default values for all config keys used across the codebase.
# Each entry: (type, default_value)
# Types: str, int, float, bool, None (any)
CONFIG_SCHEMA: Dict[str, tuple] = {
    # Paths
    "paths.logs_dir":                       (str,   "logs"),

    # Reduction (power-iteration PCA)
    "reduction.num_components":             (int,   3),
    "reduction.max_iterations":             (int,   50),
    "reduction.convergence_threshold":      (float, 1e-10),
    "reduction.default_scale":              (float, 5.0),
    "reduction.single_point_fraction":      (float, 0.6),
    # Embedding models cluster with different tightness; spread them accordingly
    "reduction.model_scaling":              (None,  {
        "minilm": 5.0,
        "e5small": 8.0,
        "bgesmall": 9.0,
    }),

    # LOD importance weights (sum to ~100)
    "lod.weights.distance":                 (float, 50.0),
    "lod.weights.center":                   (float, 30.0),
    "lod.weights.similarity":               (float, 20.0),
    "lod.weights.view_angle":               (float, 10.0),

    # LOD tier thresholds
    "lod.thresholds.high":                  (float, 80.0),
    "lod.thresholds.medium":                (float, 60.0),
    "lod.thresholds.low":                   (float, 40.0),
    "lod.thresholds.minimal":               (float, 20.0),

    # LOD scoring
    "lod.max_distance":                     (float, 20.0),
    "lod.neutral_similarity":               (float, 0.5),
    "lod.selected_score":                   (float, 100.0),
    "lod.hovered_score":                    (float, 90.0),

    # Labels
    "lod.max_labels":                       (int,   10),
    "lod.label_collision_padding":          (float, 10.0),
}


class Config:
    _instance = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        config_path = Path("config.json")
        if not config_path.exists():
            self._config = {}
            return

        with open(config_path, "r") as f:
            self._config = json.load(f)
        logger.info("Loaded configuration from config.json")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Gets a config value by dot-separated key.

        Lookup order:
        1. Value from config.json (if present and not None)
        2. Caller-provided default (if not None)
        3. Schema default from CONFIG_SCHEMA
        4. None
        """
        value = self._get_raw(key)

        # If found in config, return it
        if value is not None:
            return value

        # If caller provided an explicit default, use it
        if default is not None:
            return default

        # Fall back to schema default
        schema_entry = CONFIG_SCHEMA.get(key)
        if schema_entry is not None:
            return schema_entry[1]

        return None

    def validate(self) -> list:
        """
        Validates the loaded config against CONFIG_SCHEMA.

        Returns a list of warning strings for type mismatches.
        Does NOT raise -- config.json values always take precedence.
        """
        warnings = []
        for key, (expected_type, _default) in CONFIG_SCHEMA.items():
            if expected_type is None:
                continue
            value = self._get_raw(key)
            if value is None:
                continue
            # JSON has no float/int distinction for whole numbers
            if expected_type is float and isinstance(value, int) and not isinstance(value, bool):
                continue
            if not isinstance(value, expected_type):
                warnings.append(
                    f"Config '{key}': expected {expected_type.__name__}, "
                    f"got {type(value).__name__} ({value!r})"
                )
        if warnings:
            for w in warnings:
                logger.warning(w)
        return warnings

    def _get_raw(self, key: str) -> Any:
        """Gets value from config.json without schema fallback."""
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return None
            if value is None:
                return None
        return value

    def require(self, key: str) -> Any:
        """
        Requires a config value to be explicitly set in config.json.

        Raises ConfigError if missing.
        """
        value = self._get_raw(key)
        if value is None:
            logger.error(f"Missing required config key: {key}")
            raise ConfigError(key)
        return value


# Global accessor
config = Config()
