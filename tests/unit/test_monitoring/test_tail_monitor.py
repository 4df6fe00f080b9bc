"""
Unit tests for the polling tail monitor.
"""

import logging

import pytest

from tease.models import ChildStatus, TeaseConfig
from tease.monitoring import TailMonitor
from tease.system import CLEAR_LINE, TerminalWriter


def make_monitor(store, terminal, window_size=500):
    return TailMonitor(store, terminal, window_size=window_size, poll_interval=0.0,
                       sleep=lambda _: None)


@pytest.mark.unit
class TestTailMonitorPoll:
    """Test cases for TailMonitor.poll_once."""

    def test_renders_on_growth(self, test_utils, terminal, terminal_buffer):
        """Growth renders the last line after the erase/return sequence."""
        store = test_utils["FakeStore"](b"compiling a.c\ncompiling b.c\n")
        monitor = make_monitor(store, terminal)

        assert monitor.poll_once() is True
        assert terminal_buffer.getvalue() == CLEAR_LINE + b"compiling b.c"
        assert monitor.printed_something is True
        assert monitor.last_size == len(store.data)

    def test_no_render_without_growth(self, test_utils, terminal, terminal_buffer):
        """A second poll with unchanged size renders nothing."""
        store = test_utils["FakeStore"](b"line\n")
        monitor = make_monitor(store, terminal)
        monitor.poll_once()
        written = terminal_buffer.getvalue()

        assert monitor.poll_once() is False
        assert terminal_buffer.getvalue() == written

    def test_empty_store_renders_nothing(self, test_utils, terminal, terminal_buffer):
        """An empty store leaves the terminal untouched."""
        monitor = make_monitor(test_utils["FakeStore"](), terminal)

        assert monitor.poll_once() is False
        assert terminal_buffer.getvalue() == b""
        assert monitor.printed_something is False

    def test_shrink_is_a_no_op(self, test_utils, terminal, terminal_buffer):
        """A smaller size than last seen is ignored and last_size is kept."""
        store = test_utils["FakeStore"](b"0123456789\n")
        monitor = make_monitor(store, terminal)
        monitor.poll_once()
        written = terminal_buffer.getvalue()

        store.reported_size = 3
        assert monitor.poll_once() is False
        assert monitor.last_size == 11
        assert terminal_buffer.getvalue() == written

    def test_window_bounds_the_fragment(self, test_utils, terminal, terminal_buffer):
        """A long line without newlines is cut to the configured window."""
        store = test_utils["FakeStore"](b"a" * 50 + b"b" * 10)
        monitor = make_monitor(store, terminal, window_size=10)

        monitor.poll_once()
        assert terminal_buffer.getvalue() == CLEAR_LINE + b"b" * 10

    def test_follows_new_output(self, test_utils, terminal, terminal_buffer):
        """Each growth replaces the displayed fragment."""
        store = test_utils["FakeStore"](b"one\n")
        monitor = make_monitor(store, terminal)
        monitor.poll_once()
        store.append(b"two\n")
        monitor.poll_once()

        assert monitor.current_fragment == b"two"
        assert terminal_buffer.getvalue() == CLEAR_LINE + b"one" + CLEAR_LINE + b"two"

    def test_stat_failure_is_logged_and_skipped(self, test_utils, terminal, caplog):
        """A failing size() is a PollError: logged, no render, no raise."""
        store = test_utils["FakeStore"](b"data\n")
        store.fail_size = True
        monitor = make_monitor(store, terminal)

        with caplog.at_level(logging.WARNING):
            assert monitor.poll_once() is False

        assert "Polling the scratch file failed" in caplog.text
        assert monitor.last_size == 0

    def test_recovers_after_read_failure(self, test_utils, terminal, terminal_buffer):
        """The next successful poll renders normally after a failed read."""
        store = test_utils["FakeStore"](b"data\n")
        store.fail_read_at = 0
        monitor = make_monitor(store, terminal)
        assert monitor.poll_once() is False

        store.fail_read_at = None
        assert monitor.poll_once() is True
        assert terminal_buffer.getvalue() == CLEAR_LINE + b"data"


@pytest.mark.unit
class TestTailMonitorRun:
    """Test cases for TailMonitor.run and finish_line."""

    def test_returns_terminal_status(self, test_utils, terminal):
        """run() polls until the supervisor reports a terminal state."""
        store = test_utils["FakeStore"]()
        supervisor = test_utils["FakeSupervisor"](
            [ChildStatus.running(), ChildStatus.running(), ChildStatus.exited(3)]
        )
        monitor = make_monitor(store, terminal)

        status = monitor.run(supervisor)

        assert status == ChildStatus.exited(3)
        assert supervisor.polls == 3
        assert monitor.poll_count == 3

    def test_sleeps_one_quantum_per_iteration(self, test_utils, terminal):
        """Every iteration sleeps the configured poll interval."""
        sleeps = []
        store = test_utils["FakeStore"]()
        supervisor = test_utils["FakeSupervisor"]([ChildStatus.running(), ChildStatus.exited(0)])
        monitor = TailMonitor(store, terminal, poll_interval=0.25, sleep=sleeps.append)

        monitor.run(supervisor)

        assert sleeps == [0.25, 0.25]

    def test_final_output_is_rendered(self, test_utils, terminal):
        """Output written before exit is rendered in the last iteration."""
        store = test_utils["FakeStore"]()

        def write_then_exit(poll_index):
            if poll_index == 1:
                store.append(b"final line\n")

        supervisor = test_utils["FakeSupervisor"](
            [ChildStatus.running(), ChildStatus.exited(0)], on_poll=write_then_exit
        )
        monitor = make_monitor(store, terminal)
        monitor.run(supervisor)

        assert monitor.current_fragment == b"final line"

    def test_finish_line_after_render(self, test_utils, terminal, terminal_buffer):
        """One newline is owed once something was printed."""
        monitor = make_monitor(test_utils["FakeStore"](b"x\n"), terminal)
        monitor.poll_once()

        assert monitor.finish_line() is True
        assert terminal_buffer.getvalue().endswith(b"x\n")
        assert terminal_buffer.getvalue().count(b"\n") == 1

    def test_finish_line_without_render(self, test_utils, terminal, terminal_buffer):
        """Nothing is printed when no fragment was ever shown."""
        monitor = make_monitor(test_utils["FakeStore"](), terminal)

        assert monitor.finish_line() is False
        assert terminal_buffer.getvalue() == b""

    def test_from_config(self, test_utils, terminal):
        """from_config copies the window size and poll interval."""
        config = TeaseConfig(poll_interval=0.5, window_size=42)
        monitor = TailMonitor.from_config(test_utils["FakeStore"](), terminal, config)

        assert monitor.window_size == 42
        assert monitor.poll_interval == 0.5


@pytest.mark.unit
class TestTailMonitorTerminalFailure:
    """A terminal that stops accepting writes must not end the run."""

    def test_write_failure_is_logged_and_rendering_stops(self, test_utils, caplog):
        stream = test_utils["BrokenPipeStream"]()
        store = test_utils["FakeStore"](b"first\n")
        monitor = make_monitor(store, TerminalWriter(stream))

        with caplog.at_level(logging.WARNING):
            assert monitor.poll_once() is False

        assert monitor.terminal_failed is True
        assert "Writing the progress line failed" in caplog.text

        store.append(b"second\n")
        assert monitor.poll_once() is False
        assert stream.failed_writes == 1
        assert monitor.finish_line() is False

    def test_run_still_waits_for_the_child(self, test_utils):
        """The loop keeps polling the child after the terminal is gone."""
        stream = test_utils["BrokenPipeStream"]()
        store = test_utils["FakeStore"](b"output\n")
        supervisor = test_utils["FakeSupervisor"](
            [ChildStatus.running(), ChildStatus.running(), ChildStatus.exited(5)]
        )
        monitor = make_monitor(store, TerminalWriter(stream))

        assert monitor.run(supervisor) == ChildStatus.exited(5)
        assert supervisor.polls == 3

    def test_failed_newline_is_reported(self, test_utils, caplog):
        """finish_line reports a write failure instead of raising."""
        stream = test_utils["BrokenPipeStream"](ok_writes=1)
        monitor = make_monitor(test_utils["FakeStore"](b"x\n"), TerminalWriter(stream))
        assert monitor.poll_once() is True

        with caplog.at_level(logging.WARNING):
            assert monitor.finish_line() is False
        assert "Writing the progress line failed" in caplog.text
