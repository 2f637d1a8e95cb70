import json
import logging
from memberdir_core.logger import get_logger


def test_logger_writes_json_lines(tmp_path):
    path = tmp_path / "logs" / "memberdir.log"
    log = get_logger("memberdir.test.file", to_file=str(path))
    log.info("admitted")
    for h in log.handlers:
        h.flush()

    record = json.loads(path.read_text().splitlines()[0])
    assert record["level"] == "INFO"
    assert record["name"] == "memberdir.test.file"
    assert record["msg"] == "admitted"


def test_logger_handlers_not_duplicated():
    first = get_logger("memberdir.test.once")
    second = get_logger("memberdir.test.once")
    assert first is second
    assert len(second.handlers) == 1


def test_logger_keeps_json_valid_with_quotes_and_exceptions(tmp_path):
    path = tmp_path / "quotes.log"
    log = get_logger("memberdir.test.quotes", to_file=str(path))
    log.info('error "Newer entry already exists"')
    try:
        raise RuntimeError("disk on fire")
    except RuntimeError:
        log.exception("sweep failed")
    for h in log.handlers:
        h.flush()

    first, second = [json.loads(line) for line in path.read_text().splitlines()]
    assert first["msg"] == 'error "Newer entry already exists"'
    assert "exc" not in first
    assert second["level"] == "ERROR"
    assert "RuntimeError: disk on fire" in second["exc"]


def test_logger_level_from_env(monkeypatch):
    monkeypatch.setenv("MEMBERDIR_LOG_LEVEL", "warning")
    log = get_logger("memberdir.test.envlevel")
    assert log.level == logging.WARNING
