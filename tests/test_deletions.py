"""Tests for dry-run deletion parsing."""

from wwsync.domain.sync import analyze_trial, parse_deletions

DRY_RUN_OUTPUT = """\
sending incremental file list
deleting old/file.txt
./
index.html
          1,024 100%    0.00kB/s    0:00:00 (xfr#1, to-chk=0/3)

sent 120 bytes  received 35 bytes  310.00 bytes/sec
total size is 1,024  speedup is 6.61 (DRY RUN)
"""


class TestParseDeletions:
    """Tests for parse_deletions."""

    def test_single_deletion(self):
        assert parse_deletions("deleting a/b.txt") == ["a/b.txt"]

    def test_realistic_output(self):
        assert parse_deletions(DRY_RUN_OUTPUT) == ["old/file.txt"]

    def test_no_deletions(self):
        text = "sending incremental file list\n./\nsent 120 bytes  received 35 bytes\n"
        assert parse_deletions(text) == []

    def test_empty(self):
        assert parse_deletions("") == []

    def test_order_and_duplicates_preserved(self):
        text = "deleting z.txt\ndeleting a.txt\ndeleting z.txt\n"
        assert parse_deletions(text) == ["z.txt", "a.txt", "z.txt"]

    def test_surrounding_whitespace_and_crlf(self):
        text = "   deleting logs/app.log  \r\n\tdeleting cache/\r\n"
        assert parse_deletions(text) == ["logs/app.log", "cache/"]

    def test_prefix_must_start_the_line(self):
        text = "not deleting this.txt\ndeletingnospace.txt\nDeleting Upper.txt\n"
        assert parse_deletions(text) == []

    def test_path_keeps_inner_prefix_text(self):
        assert parse_deletions("deleting deleting .txt") == ["deleting .txt"]

    def test_idempotent(self):
        assert parse_deletions(DRY_RUN_OUTPUT) == parse_deletions(DRY_RUN_OUTPUT)


class TestAnalyzeTrial:
    """Tests for analyze_trial."""

    def test_destructive(self):
        result = analyze_trial(DRY_RUN_OUTPUT)
        assert result.deletions == ("old/file.txt",)
        assert result.is_destructive

    def test_not_destructive(self):
        assert not analyze_trial("sent 1 bytes").is_destructive
