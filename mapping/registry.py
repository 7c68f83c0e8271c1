"""Component registry for mapping strategies."""

from typing import Dict, Optional, Union

from mapping.protocols import ImportanceScorer, Projector

Component = Union[Projector, ImportanceScorer]


class ComponentRegistry:
    """Register and look up mapping components by name."""

    def __init__(self):
        self._projectors: Dict[str, Projector] = {}
        self._scorers: Dict[str, ImportanceScorer] = {}

    def register(self, component: Component) -> None:
        """Register a component (replaces existing with same name)."""
        if isinstance(component, Projector):
            self._projectors[component.name] = component
        elif isinstance(component, ImportanceScorer):
            self._scorers[component.name] = component
        else:
            raise TypeError(f"Unknown component type: {type(component)}")

    def get_projector(self, name: str) -> Optional[Projector]:
        return self._projectors.get(name)

    def get_scorer(self, name: str) -> Optional[ImportanceScorer]:
        return self._scorers.get(name)

    @property
    def projector_names(self):
        return list(self._projectors.keys())

    @property
    def scorer_names(self):
        return list(self._scorers.keys())
