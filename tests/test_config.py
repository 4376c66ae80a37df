"""Tests for option parsing, settings and model wiring."""

import threading

import pytest

from logalizer.config import (
    CommandBinding,
    FilterSpec,
    Settings,
    ViewerConfig,
    build_model,
)
from logalizer.errors import ConfigurationError

from conftest import StubCommandRunner, collect_visible


class TestFilterSpec:
    """Tests for "name:regex" parsing."""

    def test_parse(self):
        spec = FilterSpec.parse("KERNEL:.*kernel.*")

        assert spec.name == "KERNEL"
        assert spec.pattern == ".*kernel.*"

    def test_pattern_may_contain_colons(self):
        spec = FilterSpec.parse("time:.*\\d\\d:\\d\\d.*")

        assert spec.name == "time"
        assert spec.pattern == ".*\\d\\d:\\d\\d.*"

    def test_missing_separator(self):
        with pytest.raises(ConfigurationError, match="name"):
            FilterSpec.parse("no-separator")

    def test_empty_name(self):
        with pytest.raises(ConfigurationError):
            FilterSpec.parse(":.*x.*")


class TestCommandBinding:
    """Tests for "name:command" parsing."""

    def test_parse(self):
        binding = CommandBinding.parse("hello:echo greeting:")

        assert binding.name == "hello"
        assert binding.command == "echo greeting:"

    def test_empty_command(self):
        with pytest.raises(ConfigurationError):
            CommandBinding.parse("hello:")


class TestSettings:
    """Tests for environment-based settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOGALIZER_COMMAND_TIMEOUT", raising=False)
        settings = Settings()

        assert settings.command_timeout is None
        assert settings.show_comments is True
        assert settings.tab_name_width == 16

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("LOGALIZER_COMMAND_TIMEOUT", "5")
        monkeypatch.setenv("LOGALIZER_SHOW_COMMENTS", "false")

        settings = Settings()

        assert settings.command_timeout == 5.0
        assert settings.show_comments is False


class TestBuildModel:
    """Tests for wiring a model and its sources from a config."""

    def test_filters_registered_before_sources(self):
        config = ViewerConfig(
            inputs=["a.log", "b.log"],
            filters=[FilterSpec(name="err", pattern=".*ERROR.*")],
        )

        session = build_model(config, runner=StubCommandRunner())
        tabs = session.model.get_tabs()

        assert [tab.name for tab in tabs] == ["err", "a.log", "b.log"]
        assert [tab.is_filter for tab in tabs] == [True, False, False]
        assert len(session.sources) == 2

    def test_unknown_binding_is_reported_not_fatal(self):
        config = ViewerConfig(
            inputs=["a.log"],
            filters=[FilterSpec(name="err", pattern=".*ERROR.*")],
            commands=[
                CommandBinding(name="err", command="echo"),
                CommandBinding(name="warn", command="echo"),
            ],
        )

        session = build_model(config, runner=StubCommandRunner())

        assert [b.name for b in session.unbound] == ["warn"]

    def test_invalid_pattern_raises(self):
        config = ViewerConfig(
            inputs=["a.log"],
            filters=[FilterSpec(name="bad", pattern="(")],
        )

        with pytest.raises(ConfigurationError):
            build_model(config, runner=StubCommandRunner())

    def test_sources_share_stop_token(self):
        stop = threading.Event()
        config = ViewerConfig(inputs=["a.log", "b.log"], follow=True)

        session = build_model(config, runner=StubCommandRunner(), stop=stop)

        assert session.stop is stop
        assert all(source.follow for source in session.sources)

    def test_session_reads_inputs_into_model(self, tmp_path):
        first = tmp_path / "first.log"
        second = tmp_path / "second.log"
        first.write_text("boot ok\nERROR disk\n")
        second.write_text("hello world\n")
        config = ViewerConfig(
            inputs=[str(first), str(second)],
            filters=[
                FilterSpec(name="err", pattern=".*ERROR.*"),
                FilterSpec(name="hello", pattern=".*hello.*"),
            ],
            commands=[CommandBinding(name="hello", command="annotate")],
        )
        runner = StubCommandRunner(output="greeting")

        session = build_model(config, runner=runner)
        session.start()
        for source in session.sources:
            assert source.join(timeout=5.0)
        stuck = session.shutdown(timeout=1.0)

        model = session.model
        assert stuck == []
        assert model.get_line_count() == 3
        assert model.get_tab(0).count == 1  # err
        assert model.get_tab(1).count == 1  # hello
        assert model.get_tab(2).count == 1  # first.log
        assert model.get_tab(3).count == 0  # second.log
        assert sorted(collect_visible(model)) == ["ERROR disk", "boot ok", "hello world"]
        assert runner.calls == [("annotate", "hello world")]
