"""Tests for threaded line sources."""

import threading
import time

import pytest

from logalizer.sources import LineSource


def wait_for(predicate, timeout=5.0):
    """Poll predicate until it is true or timeout expires."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


class Collector:
    """Thread-safe on_line callback."""

    def __init__(self):
        self.lines = []
        self._lock = threading.Lock()

    def __call__(self, text):
        with self._lock:
            self.lines.append(text)

    def snapshot(self):
        with self._lock:
            return list(self.lines)


@pytest.fixture
def collector():
    return Collector()


class TestReadToEnd:
    """Tests for the default mode, which stops at end of input."""

    def test_reads_all_lines(self, tmp_path, collector):
        path = tmp_path / "app.log"
        path.write_text("first\n\nsecond\r\nthird")

        source = LineSource(path, on_line=collector)
        source.start()

        assert source.join(timeout=5.0)
        assert collector.snapshot() == ["first", "second", "third"]
        assert source.lines_read == 3

    def test_invalid_utf8_replaced(self, tmp_path, collector):
        path = tmp_path / "bin.log"
        path.write_bytes(b"ok \xff\xfe bytes\n")

        source = LineSource(path, on_line=collector)
        source.start()
        source.join(timeout=5.0)

        assert collector.snapshot() == ["ok \ufffd\ufffd bytes"]

    def test_missing_file_ends_source(self, tmp_path, collector, caplog):
        source = LineSource(tmp_path / "missing.log", on_line=collector)
        source.start()

        assert source.join(timeout=5.0)
        assert collector.snapshot() == []
        assert "Cannot open" in caplog.text

    def test_join_before_start(self, tmp_path, collector):
        assert LineSource(tmp_path / "x.log", on_line=collector).join(timeout=0.1)

    def test_callback_error_ends_source(self, tmp_path, caplog):
        path = tmp_path / "app.log"
        path.write_text("a\nb\n")

        def broken(text):
            raise RuntimeError("model rejected line")

        source = LineSource(path, on_line=broken)
        source.start()

        assert source.join(timeout=5.0)
        assert "failed" in caplog.text


class TestFollow:
    """Tests for follow mode, which keeps polling at end of input."""

    def test_picks_up_appended_lines(self, tmp_path, collector):
        path = tmp_path / "app.log"
        path.write_text("one\n")
        stop = threading.Event()

        source = LineSource(path, on_line=collector, stop=stop, follow=True, poll_interval=0.01)
        source.start()
        assert wait_for(lambda: collector.snapshot() == ["one"])

        with path.open("a") as f:
            f.write("two\n")
        assert wait_for(lambda: collector.snapshot() == ["one", "two"])
        assert source.running

        source.stop()
        assert source.join(timeout=5.0)
        assert stop.is_set()

    def test_partial_line_held_until_complete(self, tmp_path, collector):
        path = tmp_path / "app.log"
        path.write_text("")
        source = LineSource(path, on_line=collector, follow=True, poll_interval=0.01)
        source.start()

        with path.open("a") as f:
            f.write("hel")
            f.flush()
            time.sleep(0.1)
            assert collector.snapshot() == []
            f.write("lo\n")

        assert wait_for(lambda: collector.snapshot() == ["hello"])
        source.stop()
        assert source.join(timeout=5.0)

    def test_truncated_file_reread(self, tmp_path, collector):
        path = tmp_path / "app.log"
        path.write_text("old line one\nold line two\n")
        source = LineSource(path, on_line=collector, follow=True, poll_interval=0.01)
        source.start()
        assert wait_for(lambda: len(collector.snapshot()) == 2)

        path.write_text("new\n")

        assert wait_for(lambda: collector.snapshot()[-1:] == ["new"])
        source.stop()
        assert source.join(timeout=5.0)

    def test_shared_stop_token(self, tmp_path, collector):
        stop = threading.Event()
        sources = []
        for name in ("a.log", "b.log"):
            path = tmp_path / name
            path.write_text(f"{name}\n")
            sources.append(
                LineSource(path, on_line=collector, stop=stop, follow=True, poll_interval=0.01)
            )
        for source in sources:
            source.start()
        assert wait_for(lambda: len(collector.snapshot()) == 2)

        stop.set()

        assert all(source.join(timeout=5.0) for source in sources)
