"""Active VCL resolution from ``varnishadm vcl.list -j`` output"""
import json
from errors import MalformedInput, NoActiveRevision


# CLI protocol version, argv echo and timestamp precede the VCL records
VCL_LIST_HEADER_ENTRIES = 3
ACTIVE_STATUS = "active"


def parse_vcl_list(raw: str, header_entries: int = VCL_LIST_HEADER_ENTRIES) -> str:
    """Return the name of the first active VCL in a vcl.list JSON document"""
    try:
        entries = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedInput(f"vcl.list output is not valid JSON: {e}") from e

    if not isinstance(entries, list):
        raise MalformedInput(f"vcl.list output is a {type(entries).__name__}, expected a list")
    if len(entries) < header_entries:
        raise MalformedInput(
            f"vcl.list output has {len(entries)} entries, expected at least {header_entries}"
        )

    for record in entries[header_entries:]:
        if not isinstance(record, dict):
            raise MalformedInput(f"Unexpected vcl.list record: {record!r}")
        if record.get("status") == ACTIVE_STATUS:
            name = record.get("name")
            return name if isinstance(name, str) else ""

    raise NoActiveRevision("No active VCL found")
