"""Exceptions raised while collecting Varnish metrics"""
from typing import Optional, Sequence


class ExporterError(Exception):
    """Base class for collection failures"""


class CommandError(ExporterError):
    """An external command failed, timed out or could not be started"""

    def __init__(self, command: Sequence[str], message: str,
                 returncode: Optional[int] = None, output: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        super().__init__(f"{' '.join(self.command)}: {message}")


class StatsUnavailable(ExporterError):
    """varnishstat failed or returned undecodable data"""


class RevisionResolutionFailed(ExporterError):
    """The active VCL could not be determined"""


class NoActiveRevision(RevisionResolutionFailed):
    """vcl.list has no entry with status 'active'"""


class MalformedInput(RevisionResolutionFailed):
    """vcl.list output is not a list of VCL records"""
