"""Prometheus text exposition format exporter"""
from typing import Any, Iterable, List, Mapping
from ..models import Metric, MetricType, METRIC_PREFIX
from ..transformer import decompose


CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"
ACTIVE_VCL_METRIC = f"{METRIC_PREFIX}_active_vcl"


def escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\"", "\\\"").replace("\n", "\\n")


def escape_help(text: str) -> str:
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def format_label(labels: Mapping[str, str]) -> str:
    """Render a label set as ``{k1="v1",k2="v2"}``, or "" when empty"""
    if not labels:
        return ""
    label_pairs = [f'{k}="{escape_label_value(str(v))}"' for k, v in labels.items()]
    return "{" + ",".join(label_pairs) + "}"


class PrometheusExporter:
    """Render metrics in Prometheus text exposition format"""

    def export_metrics(self, metrics: Iterable[Metric], active_revision: str) -> str:
        lines: List[str] = []

        for metric in metrics:
            lines.extend(self._metric_lines(metric))

        lines.extend(self._active_vcl_lines(active_revision))

        # Every line, including the last one, ends with a newline
        return "".join(f"{line}\n" for line in lines)

    def _metric_lines(self, metric: Metric) -> List[str]:
        name = metric.full_name
        return [
            f"# HELP {name} {escape_help(metric.description)}",
            f"# TYPE {name} {metric.metric_type.value}",
            f"{name}{format_label(metric.labels)} {metric.sample_value}",
        ]

    def _active_vcl_lines(self, active_revision: str) -> List[str]:
        return [
            f"# HELP {ACTIVE_VCL_METRIC} vcl version",
            f"# TYPE {ACTIVE_VCL_METRIC} {MetricType.GAUGE.value}",
            f"{ACTIVE_VCL_METRIC}{format_label({'version': active_revision})} 1",
        ]


def generate(counters: Mapping[str, Any], active_revision: str = "") -> str:
    """Render a varnishstat counters document for the given active VCL"""
    result = decompose(counters, active_revision)
    return PrometheusExporter().export_metrics(result.metrics, result.active_revision)
