"""varnishstat counters collector"""
import json
from typing import Any, Dict, List
from .base import BaseCollector
from config import Config
from errors import CommandError, StatsUnavailable


class VarnishStatCollector(BaseCollector):
    """Collect the flat counters document from ``varnishstat -j``"""

    def __init__(self, config: Config):
        super().__init__(config, "varnishstat", "Varnish counters snapshot")

    def command(self) -> List[str]:
        return self.config.varnishstat_command()

    def collect(self) -> Dict[str, Any]:
        try:
            raw = self.run_command()
        except CommandError as e:
            raise StatsUnavailable(str(e)) from e
        return parse_stats(raw)


def parse_stats(raw: str) -> Dict[str, Any]:
    """Decode varnishstat JSON into a flat ``key -> counter`` mapping"""
    try:
        document = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise StatsUnavailable(f"varnishstat output is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise StatsUnavailable(f"varnishstat output is a {type(document).__name__}, expected an object")

    # Varnish 6.5+ nests counters: {"version": 1, "timestamp": ..., "counters": {...}}
    counters = document.get("counters")
    if isinstance(counters, dict):
        return counters

    return document
