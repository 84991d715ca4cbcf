"""Tests for the console output channel."""

import io

from rich.console import Console

from wwsync.adapters.cli.output import RichOutputSink


class TestRichOutputSink:

    def test_progress_redraws_kept(self):
        buffer = io.StringIO()
        sink = RichOutputSink(Console(file=buffer))

        sink.write("  32768  50%\r")
        sink.write("  65536 100%\n")

        assert buffer.getvalue() == "  32768  50%\r  65536 100%\n"

    def test_markup_not_interpreted(self):
        buffer = io.StringIO()
        sink = RichOutputSink(Console(file=buffer))

        sink.write_line("[bold]deleting [old].txt[/bold]")

        assert buffer.getvalue() == "[bold]deleting [old].txt[/bold]\n"
