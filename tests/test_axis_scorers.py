"""Tests for mapping/axis_scorers.py, mapping/weights.py and mapping/tiers.py."""

import numpy as np
import pytest

from common.errors import ConfigError, WeightConfigError
from common.types import ImportanceSignal, Tier
from mapping.axis_scorers import WeightedImportanceScorer, distance_falloff, score
from mapping.tiers import DEFAULT_THRESHOLDS, TIER_VISUALS, TierThresholds, tier_for_score, visuals_for
from mapping.weights import WeightConfig


@pytest.fixture
def scorer():
    return WeightedImportanceScorer()


def _signal(distance=5.0, center=0.5, view=0.5, similarity=None):
    return ImportanceSignal(
        distance=distance,
        center_proximity=center,
        view_alignment=view,
        similarity=similarity,
    )


# ── WeightConfig ──────────────────────────────────────────────

class TestWeightConfig:
    def test_defaults(self):
        w = WeightConfig()
        assert (w.distance, w.center, w.similarity, w.view_angle) == (50.0, 30.0, 20.0, 10.0)

    def test_from_config_matches_defaults(self):
        assert WeightConfig.from_config() == WeightConfig()

    @pytest.mark.parametrize("field", ["distance", "center", "similarity", "view_angle"])
    def test_negative_weight_rejected(self, field):
        with pytest.raises(WeightConfigError) as excinfo:
            WeightConfig(**{field: -1.0})
        assert excinfo.value.name == field

    def test_nan_weight_rejected(self):
        with pytest.raises(WeightConfigError):
            WeightConfig(center=float("nan"))

    def test_non_numeric_weight_rejected(self):
        with pytest.raises(WeightConfigError):
            WeightConfig(center="30")

    def test_from_dict_uppercase_keys(self):
        w = WeightConfig.from_dict({"DISTANCE": 40, "CENTER": 30, "SIMILARITY": 20, "VIEW_ANGLE": 10})
        assert w.total == 100

    def test_from_dict_unknown_key(self):
        with pytest.raises(WeightConfigError):
            WeightConfig.from_dict({"BRIGHTNESS": 10})

    def test_numpy_scalars_accepted(self):
        w = WeightConfig(distance=np.float32(50.0), center=np.int64(30), similarity=20.0, view_angle=10.0)
        assert w.total == 110.0
        assert type(w.distance) is float
        assert type(w.center) is float

    def test_negative_numpy_scalar_rejected(self):
        with pytest.raises(WeightConfigError):
            WeightConfig(center=np.float64(-0.5))

    def test_from_dict_duplicate_field(self):
        with pytest.raises(WeightConfigError) as excinfo:
            WeightConfig.from_dict({"distance": 1, "DISTANCE": 2})
        assert excinfo.value.name == "DISTANCE"

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            WeightConfig(distance=-5)


# ── Tiers ─────────────────────────────────────────────────────

class TestTiers:
    @pytest.mark.parametrize("value,tier", [
        (100.0, Tier.HIGH),
        (80.0, Tier.HIGH),
        (79.999, Tier.MEDIUM),
        (60.0, Tier.MEDIUM),
        (59.99, Tier.LOW),
        (40.0, Tier.LOW),
        (39.9, Tier.MINIMAL),
        (20.0, Tier.MINIMAL),
        (0.0, Tier.MINIMAL),
    ])
    def test_boundaries(self, value, tier):
        assert tier_for_score(value) is tier

    def test_hidden_below_minimal(self):
        assert DEFAULT_THRESHOLDS.is_hidden(19.99)
        assert not DEFAULT_THRESHOLDS.is_hidden(20.0)

    def test_thresholds_must_descend(self):
        with pytest.raises(ConfigError):
            TierThresholds(high=50.0, medium=60.0)

    def test_every_tier_has_visuals(self):
        assert set(TIER_VISUALS) == set(Tier)

    def test_visuals_shrink_with_tier(self):
        ordered = [visuals_for(t) for t in (Tier.HIGH, Tier.MEDIUM, Tier.LOW, Tier.MINIMAL)]
        opacities = [v.vector_opacity for v in ordered]
        assert opacities == sorted(opacities, reverse=True)
        assert visuals_for(Tier.HIGH).label_opacity == 1.0

    def test_tier_rank(self):
        assert Tier.HIGH.rank < Tier.MEDIUM.rank < Tier.LOW.rank < Tier.MINIMAL.rank


# ── Scoring ───────────────────────────────────────────────────

class TestWeightedImportanceScorer:
    def test_name(self, scorer):
        assert scorer.name == "weighted"

    def test_distance_falloff(self):
        assert distance_falloff(0.0, 20.0) == 1.0
        assert distance_falloff(10.0, 20.0) == 0.5
        assert distance_falloff(50.0, 20.0) == 0.0

    def test_known_value(self, scorer):
        # 50*0.75 + 30*0.5 + 20*0.5 (neutral) + 10*0.5
        result = scorer.compute(_signal(distance=5.0, center=0.5, view=0.5))
        assert result.score == pytest.approx(67.5)
        assert result.tier is Tier.MEDIUM

    def test_clamped_to_100(self, scorer):
        result = scorer.compute(_signal(distance=0.0, center=1.0, view=1.0, similarity=1.0))
        assert result.score == 100.0
        assert result.tier is Tier.HIGH

    def test_exact_high_boundary(self):
        s = WeightedImportanceScorer(weights=WeightConfig(distance=0, center=80, similarity=0, view_angle=0))
        result = s.compute(_signal(center=1.0))
        assert result.score == 80.0
        assert result.tier is Tier.HIGH

    def test_out_of_range_signals_are_clamped(self, scorer):
        wild = scorer.compute(_signal(distance=-3.0, center=2.0, view=-1.0, similarity=5.0))
        tame = scorer.compute(_signal(distance=0.0, center=1.0, view=0.0, similarity=1.0))
        assert wild == tame

    @pytest.mark.parametrize("field", ["center", "view", "similarity"])
    def test_monotone_in_positive_signals(self, scorer, field):
        scores = [
            scorer.compute(_signal(distance=8.0, **{field: value})).score
            for value in np.linspace(0.0, 1.0, 11)
        ]
        assert all(a <= b for a, b in zip(scores, scores[1:]))

    def test_monotone_decreasing_in_distance(self, scorer):
        scores = [
            scorer.compute(_signal(distance=d, similarity=0.2)).score
            for d in np.linspace(0.0, 30.0, 31)
        ]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_missing_similarity_is_neutral(self, scorer):
        absent = scorer.compute(_signal(similarity=None))
        neutral = scorer.compute(_signal(similarity=0.5))
        assert absent.score == pytest.approx(neutral.score, abs=1e-12)

    def test_missing_similarity_beats_zero(self, scorer):
        absent = scorer.compute(_signal(similarity=None))
        zero = scorer.compute(_signal(similarity=0.0))
        assert absent.score > zero.score

    def test_idempotent(self, scorer):
        signal = _signal(distance=3.3, center=0.71, view=0.2, similarity=0.9)
        assert scorer.compute(signal) == scorer.compute(signal)

    def test_selected_overrides(self, scorer):
        result = scorer.compute_with_state(_signal(distance=100.0, center=0.0, view=0.0), selected=True)
        assert result.score == 100.0
        assert result.tier is Tier.HIGH

    def test_hovered_overrides(self, scorer):
        result = scorer.compute_with_state(_signal(distance=100.0, center=0.0, view=0.0), hovered=True)
        assert result.score == 90.0
        assert result.tier is Tier.HIGH

    def test_no_state_matches_compute(self, scorer):
        signal = _signal()
        assert scorer.compute_with_state(signal) == scorer.compute(signal)

    def test_invalid_max_distance(self):
        with pytest.raises(ConfigError):
            WeightedImportanceScorer(max_distance=0.0)

    def test_invalid_neutral_similarity(self):
        with pytest.raises(ConfigError):
            WeightedImportanceScorer(neutral_similarity=1.5)


class TestScoreFunction:
    def test_default_weights(self):
        assert score(_signal()) == WeightedImportanceScorer().compute(_signal())

    def test_custom_weights(self):
        result = score(_signal(center=1.0), WeightConfig(distance=0, center=100, similarity=0, view_angle=0))
        assert result.score == 100.0
