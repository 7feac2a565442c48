"""Result aggregation for expansion runs.

The aggregator accumulates every transformed value in completion order,
groups values by layer, and merges the mappings returned by the optional
collection hooks. RunState bundles the aggregator with the bookkeeping one
run needs.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set


class ResultAggregator:
    """Accumulates produced values for one run.

    ``all`` and ``by_layer`` always hold the same values; only the grouping
    differs.
    """

    def __init__(self):
        """Initialize aggregator with empty state."""
        self.reset()

    def reset(self):
        """Reset collected values and maps."""
        self.all: List[Any] = []
        self.by_layer: Dict[int, List[Any]] = {}
        self.transformed_data_map: Dict[Any, Any] = {}
        self.requeue_terms_map: Dict[Any, Any] = {}

    def collect(self, value: Any, layer: int) -> None:
        """Record one transformed value produced at ``layer``."""
        self.all.append(value)
        self.by_layer.setdefault(layer, []).append(value)

    def merge_transformed_data(self, data: Optional[Mapping]) -> None:
        self._merge(self.transformed_data_map, data, 'collect_transformed_data')

    def merge_requeue_data(self, data: Optional[Mapping]) -> None:
        self._merge(self.requeue_terms_map, data, 'collect_requeue_data')

    @staticmethod
    def _merge(target: Dict[Any, Any], data: Optional[Mapping], hook_name: str) -> None:
        # A hook returning None contributes nothing
        if data is None:
            return
        if not isinstance(data, Mapping):
            raise TypeError(f"{hook_name} must return a mapping, got {type(data).__name__}")
        target.update(data)

    def __len__(self) -> int:
        return len(self.all)

    def get_result(self) -> Dict[str, Any]:
        """Get a snapshot of everything collected so far.

        Only non-empty entries are included. The returned containers are
        copies, so later mutation of the aggregator does not show through.

        Returns:
            Dictionary with some of the keys ``all``, ``by_layer``,
            ``transformed_data_map`` and ``requeue_terms_map``
        """
        result: Dict[str, Any] = {}
        if self.all:
            result['all'] = list(self.all)
        if self.by_layer:
            result['by_layer'] = {layer: list(values) for layer, values in self.by_layer.items()}
        if self.transformed_data_map:
            result['transformed_data_map'] = dict(self.transformed_data_map)
        if self.requeue_terms_map:
            result['requeue_terms_map'] = dict(self.requeue_terms_map)
        return result


def empty_result() -> Dict[str, Any]:
    """Result returned when a run is defined to produce nothing."""
    return {'all': [], 'by_layer': {}}


@dataclass
class RunState:
    """Mutable state exclusively owned by one ``begin()`` call."""

    live: Set[Any] = field(default_factory=set)
    admitted: int = 0
    results: ResultAggregator = field(default_factory=ResultAggregator)
    resolved: bool = False
