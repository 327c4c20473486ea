"""Decompose varnishstat counter keys into Prometheus metrics"""
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional
from .models import Metric, Decomposition


RESERVED_KEYS = frozenset({"version"})
BACKEND_PREFIX = "VBE"


class KeyRule(NamedTuple):
    """How one first segment of a counter key maps onto a metric"""
    category: str
    min_segments: int
    name_index: int
    label_name: Optional[str] = None
    label_index: int = 1
    label_transform: Optional[Callable[[str], str]] = None

    def labels(self, segments: List[str]) -> Dict[str, str]:
        if self.label_name is None:
            return {}
        value = segments[self.label_index]
        if self.label_transform is not None:
            value = self.label_transform(value)
        return {self.label_name: value}


# VBE.<vcl>.<backend>.<counter>
KEY_RULES: Dict[str, KeyRule] = {
    BACKEND_PREFIX: KeyRule("backend", 4, 3, "name", 2),
    "MEMPOOL": KeyRule("mempool", 3, 2, "name"),
    "SMA": KeyRule("sma", 3, 2, "type", label_transform=str.lower),
    "LCK": KeyRule("lock", 3, 2, "target"),
    "SMF": KeyRule("smf", 3, 2, "type"),
    "MAIN": KeyRule("main", 2, 1),
    "MGT": KeyRule("mgt", 2, 1),
}


def decompose(counters: Mapping[str, Any], active_revision: str = "") -> Decomposition:
    """Turn a flat counters document into metrics of the active VCL.

    Keys are visited in the document's own order. When ``active_revision``
    is empty, the VCL of the first backend counter becomes the active one
    and backend counters of any other VCL are dropped.
    """
    result = Decomposition(active_revision=active_revision or "")

    for key, node in counters.items():
        if key in RESERVED_KEYS:
            continue

        segments = key.split(".")
        if len(segments) < 2:
            continue

        rule = KEY_RULES.get(segments[0])
        if rule is None:
            result.unrecognized.append(key)
            continue

        if len(segments) < rule.min_segments:
            result.malformed.append(key)
            continue

        if segments[0] == BACKEND_PREFIX:
            vcl = segments[1]
            if not result.active_revision:
                result.active_revision = vcl
            if vcl != result.active_revision:
                continue

        result.metrics.append(Metric(
            category=rule.category,
            name=segments[rule.name_index],
            labels=rule.labels(segments),
            node=node,
        ))

    return result
