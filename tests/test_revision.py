"""Tests for active VCL resolution"""
import json
import pytest

from errors import MalformedInput, NoActiveRevision, RevisionResolutionFailed
from metrics.revision import parse_vcl_list


HEADER = [2, ["vcl.list", "-j"], 1700000000.123]


def vcl(name, status):
    return {"status": status, "state": "auto", "temperature": "warm", "busy": 0, "name": name}


class TestParseVclList:
    """Test parsing of varnishadm vcl.list -j output"""

    def test_active_vcl_found(self):
        """Test the active record after the header entries is returned"""
        raw = json.dumps(HEADER + [vcl("boot", "active")])

        assert parse_vcl_list(raw) == "boot"

    def test_first_active_wins(self):
        raw = json.dumps(HEADER + [vcl("old", "available"), vcl("boot", "active"), vcl("other", "active")])

        assert parse_vcl_list(raw) == "boot"

    def test_no_active_vcl(self):
        """Test a list without active status fails"""
        raw = json.dumps(HEADER + [vcl("boot", "available"), vcl("cold", "discarded")])

        with pytest.raises(NoActiveRevision):
            parse_vcl_list(raw)

    def test_header_only(self):
        with pytest.raises(NoActiveRevision):
            parse_vcl_list(json.dumps(HEADER))

    def test_header_entries_are_not_records(self):
        """Test header entries are skipped even when they look like records"""
        raw = json.dumps([vcl("fake", "active"), 1, 2, vcl("boot", "active")])

        assert parse_vcl_list(raw) == "boot"

    def test_custom_header_size(self):
        raw = json.dumps([vcl("boot", "active")])

        assert parse_vcl_list(raw, header_entries=0) == "boot"

    @pytest.mark.parametrize("raw", [
        "not json",
        "",
        '{"status": "active"}',
        "[1, 2]",
        json.dumps(HEADER + ["boot active"]),
    ])
    def test_malformed_input(self, raw):
        """Test undecodable or wrongly shaped output fails"""
        with pytest.raises(MalformedInput):
            parse_vcl_list(raw)

    def test_errors_are_resolution_failures(self):
        """Test both failure kinds abort revision resolution"""
        assert issubclass(NoActiveRevision, RevisionResolutionFailed)
        assert issubclass(MalformedInput, RevisionResolutionFailed)
