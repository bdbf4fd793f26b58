import logging

from fieldpath import config


def test_trace_level_registered():
    assert logging.getLevelName(config.TRACE) == "TRACE"
    assert hasattr(logging.getLogger("fieldpath"), "trace")


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("FIELDPATH_X", "0.5")
    assert config._env_float("FIELDPATH_X", 1.0) == 0.5
    monkeypatch.setenv("FIELDPATH_X", "fast")
    assert config._env_float("FIELDPATH_X", 1.0) == 1.0
    monkeypatch.setenv("FIELDPATH_X", "off")
    assert config._env_bool("FIELDPATH_X", True) is False
    monkeypatch.delenv("FIELDPATH_X")
    assert config._env_bool("FIELDPATH_X", True) is True


def test_configure_logging_accepts_level_names(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    config.configure_logging("debug")
    config.configure_logging("nonsense")
    config.configure_logging(config.TRACE)
    assert [c["level"] for c in calls] == [logging.DEBUG, logging.INFO, config.TRACE]
