"""Unit tests for member selection and content filtering."""

import re
import signal
import zipfile
from unittest.mock import patch

import pytest

from zipupdate.exceptions import FilterError
from zipupdate.filtering import compile_pattern, filter_bytes, member_matches


class TestFilterBytes:
    def test_returns_command_output(self):
        assert filter_bytes(b"<a/>", "tr a-z A-Z") == b"<A/>"

    def test_identity_filter_returns_same_bytes(self):
        assert filter_bytes(b"hello\n", "cat") == b"hello\n"

    def test_empty_output_is_success(self):
        assert filter_bytes(b"hello", "cat >/dev/null") == b""

    def test_binary_content_passes_through(self):
        data = bytes(range(256)) * 16
        assert filter_bytes(data, "cat") == data

    def test_non_zero_exit_raises(self):
        with pytest.raises(FilterError) as excinfo:
            filter_bytes(b"<a/>", "exit 1")
        assert excinfo.value.exit_code == 1
        assert excinfo.value.command == "exit 1"
        assert "status 1" in str(excinfo.value)

    def test_output_discarded_on_failure(self):
        with pytest.raises(FilterError):
            filter_bytes(b"hello", "cat; exit 2")

    def test_missing_program_raises(self):
        with pytest.raises(FilterError) as excinfo:
            filter_bytes(b"x", "zipupdate-no-such-program-here 2>/dev/null")
        assert excinfo.value.exit_code == 127

    def test_killed_by_signal_raises(self):
        with pytest.raises(FilterError) as excinfo:
            filter_bytes(b"x", "kill -KILL $$")
        assert excinfo.value.exit_code == -signal.SIGKILL
        assert "signal" in str(excinfo.value)

    def test_spawn_failure_raises(self):
        with patch(
            "zipupdate.filtering.spawn_shell", side_effect=OSError("no shell")
        ):
            with pytest.raises(FilterError) as excinfo:
                filter_bytes(b"x", "cat")
        assert excinfo.value.exit_code is None
        assert "Could not start" in str(excinfo.value)

    def test_output_larger_than_pipe_buffer_before_input_is_read(self):
        """Command writes megabytes before it starts consuming stdin."""
        cmd = "head -c 3000000 /dev/zero; cat >/dev/null"
        out = filter_bytes(b"y" * 3_000_000, cmd)
        assert out == b"\0" * 3_000_000


class TestPatterns:
    @pytest.mark.parametrize("pattern", [None, ""])
    def test_empty_pattern_matches_all(self, pattern):
        assert compile_pattern(pattern) is None
        assert member_matches(zipfile.ZipInfo("any/file.bin"), None)

    def test_directories_never_match(self):
        assert not member_matches(zipfile.ZipInfo("doc/"), None)
        assert not member_matches(zipfile.ZipInfo("doc/"), compile_pattern("doc"))

    def test_pattern_is_searched_in_full_path(self):
        pattern = compile_pattern(r"\.xml")
        assert member_matches(zipfile.ZipInfo("x.xml"), pattern)
        assert member_matches(zipfile.ZipInfo("deep/dir/x.xml"), pattern)
        assert not member_matches(zipfile.ZipInfo("y.txt"), pattern)

    def test_pattern_sees_directory_components(self):
        pattern = compile_pattern(r"^data/.*\.xml$")
        assert member_matches(zipfile.ZipInfo("data/x.xml"), pattern)
        assert member_matches(zipfile.ZipInfo("data/sub/x.xml"), pattern)
        assert not member_matches(zipfile.ZipInfo("other/x.xml"), pattern)
        assert not member_matches(zipfile.ZipInfo("x.xml"), pattern)

    def test_invalid_pattern_raises(self):
        with pytest.raises(re.error):
            compile_pattern("(unclosed")
