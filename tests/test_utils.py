"""Tests for core path and ssh config helpers."""

import os

from wwsync.core.utils import list_ssh_hosts, normalize_path


class TestListSshHosts:

    def test_concrete_hosts_sorted(self, tmp_path):
        config = tmp_path / "config"
        config.write_text(
            "Host staging\n"
            "    HostName 10.0.0.6\n"
            "Host *.internal !bastion\n"
            "    User ops\n"
            "Host prod web-?\n"
            "    HostName 10.0.0.5\n",
            encoding="utf-8",
        )
        assert list_ssh_hosts(str(config)) == ["prod", "staging"]

    def test_missing_file(self, tmp_path):
        assert list_ssh_hosts(str(tmp_path / "missing")) == []


class TestNormalizePath:

    def test_case_and_trailing_separator_ignored(self):
        assert normalize_path("/Home/Dev/Site/") == normalize_path("/home/dev/site")

    def test_dot_segments_collapsed(self):
        assert normalize_path("/home/dev/../dev/site") == os.path.normpath("/home/dev/site")
