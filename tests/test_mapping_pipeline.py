"""Tests for the modular mapping pipeline, protocols, and components."""

import numpy as np
import pytest

from common.types import ImportanceScore, ImportanceSignal, Tier
from mapping.axis_scorers import WeightedImportanceScorer
from mapping.labels import ScreenRect
from mapping.pipeline import MappingPipeline
from mapping.projectors import PowerIterationProjector
from mapping.protocols import ImportanceScorer, Projector
from mapping.registry import ComponentRegistry


# ── Fake Components ────────────────────────────────────────────

class FakeProjector(Projector):
    """Returns first 3 columns of input as coordinates."""

    @property
    def name(self):
        return "fake"

    def fit(self, embeddings, **kwargs):
        pass

    def transform(self, embeddings):
        return embeddings[:, :3]


class FakeScorer(ImportanceScorer):
    """Returns a fixed importance score."""

    @property
    def name(self):
        return "fake"

    def compute(self, signal):
        return ImportanceScore(score=75.0, tier=Tier.MEDIUM)


def _signal():
    return ImportanceSignal(distance=30.0, center_proximity=0.0, view_alignment=0.0)


# ── MappingPipeline ────────────────────────────────────────────

class TestMappingPipeline:
    def test_defaults(self):
        pipe = MappingPipeline()
        assert isinstance(pipe.projector, PowerIterationProjector)
        assert isinstance(pipe.scorer, WeightedImportanceScorer)

    def test_project_with_fake(self):
        pipe = MappingPipeline(projector=FakeProjector())
        coords = pipe.project({"a": [1, 2, 3, 4], "b": [5, 6, 7, 8]}, scale=2.0)
        assert coords == {"a": (2.0, 4.0, 6.0), "b": (10.0, 12.0, 14.0)}

    def test_project_uses_pipeline_scale(self):
        pipe = MappingPipeline(projector=FakeProjector(), scale=3.0)
        coords = pipe.project({"a": [1, 1, 1, 1], "b": [0, 0, 0, 0]})
        assert coords["a"] == (3.0, 3.0, 3.0)

    def test_project_real_projector(self):
        pipe = MappingPipeline(projector=PowerIterationProjector(seed=0))
        data = np.random.default_rng(0).normal(size=(12, 20))
        coords = pipe.project({str(i): list(row) for i, row in enumerate(data)})
        assert len(coords) == 12
        assert all(len(c) == 3 for c in coords.values())

    def test_score_items_with_fake(self):
        pipe = MappingPipeline(scorer=FakeScorer())
        scores = pipe.score_items({"a": _signal(), "b": _signal()}, selected=["a"])
        # The fake ignores selection
        assert scores["a"].score == 75.0
        assert scores["b"].score == 75.0

    def test_score_items_selection_and_hover(self):
        pipe = MappingPipeline()
        scores = pipe.score_items(
            {"sel": _signal(), "hov": _signal(), "other": _signal()},
            selected=["sel"],
            hovered="hov",
        )
        assert scores["sel"].score == 100.0
        assert scores["hov"].score == 90.0
        assert scores["other"].tier is Tier.MINIMAL

    def test_full_pipeline_with_fakes(self):
        pipe = MappingPipeline(projector=FakeProjector(), scorer=FakeScorer())
        coords = pipe.project({"a": [1, 0, 0], "b": [0, 1, 0]}, scale=1.0)
        scores = pipe.score_items({k: _signal() for k in coords})
        bounds = {"a": ScreenRect(0, 0, 10, 10), "b": ScreenRect(5, 5, 10, 10)}
        visible = pipe.visible_labels(scores, bounds)
        assert visible == ["a"]


# ── ComponentRegistry ──────────────────────────────────────────

class TestComponentRegistry:
    def test_register_projector(self):
        reg = ComponentRegistry()
        reg.register(FakeProjector())
        assert reg.get_projector("fake") is not None
        assert "fake" in reg.projector_names

    def test_register_scorer(self):
        reg = ComponentRegistry()
        reg.register(WeightedImportanceScorer())
        assert reg.get_scorer("weighted") is not None
        assert reg.scorer_names == ["weighted"]

    def test_replaces_same_name(self):
        reg = ComponentRegistry()
        first, second = FakeScorer(), FakeScorer()
        reg.register(first)
        reg.register(second)
        assert reg.get_scorer("fake") is second

    def test_lookup_missing(self):
        reg = ComponentRegistry()
        assert reg.get_projector("nonexistent") is None

    def test_register_unknown_type(self):
        reg = ComponentRegistry()
        with pytest.raises(TypeError):
            reg.register("not_a_component")
