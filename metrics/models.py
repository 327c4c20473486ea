"""Metric data models"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping
from enum import Enum


METRIC_PREFIX = "varnish"


class MetricType(Enum):
    """Prometheus metric types"""
    COUNTER = "counter"
    GAUGE = "gauge"


@dataclass
class Metric:
    """A single varnishstat counter mapped onto a Prometheus time series.

    ``node`` is the counter's record from the varnishstat document
    (``description``, ``flag``, ``value``). It is borrowed, never modified.
    """
    category: str
    name: str
    labels: Dict[str, str]
    node: Mapping[str, Any]

    def __post_init__(self):
        # Ensure labels is never None
        if self.labels is None:
            self.labels = {}

    @property
    def full_name(self) -> str:
        return f"{METRIC_PREFIX}_{self.category}_{self.name}"

    @property
    def description(self) -> str:
        value = self._field("description")
        return value if isinstance(value, str) else ""

    @property
    def metric_type(self) -> MetricType:
        if self._field("flag") == "g":
            return MetricType.GAUGE
        return MetricType.COUNTER

    @property
    def sample_value(self) -> int:
        """Counter value as an integer, 0 when missing or not integral"""
        value = self._field("value")
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return 0

    def _field(self, key: str) -> Any:
        if isinstance(self.node, Mapping):
            return self.node.get(key)
        return None


@dataclass
class Decomposition:
    """Outcome of one pass over a counters document"""
    metrics: List[Metric] = field(default_factory=list)
    unrecognized: List[str] = field(default_factory=list)
    malformed: List[str] = field(default_factory=list)
    active_revision: str = ""
