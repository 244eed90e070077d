import logging

from compliance_checker import logging_setup


def test_configure_logging_writes_fresh_file_and_caps_http_loggers(monkeypatch, tmp_path):
    monkeypatch.setattr(logging_setup, "DEFAULT_LOG_DIR", tmp_path / "logs")
    stale = tmp_path / "logs" / logging_setup.DEFAULT_LOG_FILE
    stale.parent.mkdir()
    stale.write_text("previous run\n", encoding="utf-8")

    path = logging_setup.configure_logging("debug")

    assert path == stale
    assert "previous run" not in path.read_text(encoding="utf-8")
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("openai").level == logging.WARNING


def test_normalise_level_accepts_names_numbers_and_falls_back():
    assert logging_setup._normalise_level("warning") == logging.WARNING
    assert logging_setup._normalise_level("10") == 10
    assert logging_setup._normalise_level(logging.ERROR) == logging.ERROR
    assert logging_setup._normalise_level("chatty") == logging.INFO
    assert logging_setup._normalise_level(None) == logging.INFO
