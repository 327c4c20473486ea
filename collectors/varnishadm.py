"""varnishadm VCL list collector"""
from typing import List
from .base import BaseCollector
from config import Config
from errors import CommandError, RevisionResolutionFailed
from metrics.revision import parse_vcl_list


class VclListCollector(BaseCollector):
    """Resolve the active VCL name from ``varnishadm vcl.list -j``"""

    def __init__(self, config: Config):
        super().__init__(config, "varnishadm", "Active VCL resolution")

    def command(self) -> List[str]:
        return self.config.varnishadm_command()

    def collect(self) -> str:
        if self.config.no_admin:
            return ""

        try:
            raw = self.run_command()
        except CommandError as e:
            raise RevisionResolutionFailed(str(e)) from e
        return parse_vcl_list(raw, self.config.vcl_list_header_entries)
