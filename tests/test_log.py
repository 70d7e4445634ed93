import logging

import pytest

import td_jobs
from td_jobs import Job, RequestFailed
from td_jobs import log as td_log

from tests.conftest import SECRET, make_response


@pytest.fixture
def package_logger(monkeypatch):
    """The td_jobs logger stripped of handlers, restored afterwards."""
    pkg = logging.getLogger("td_jobs")
    level, handlers = pkg.level, pkg.handlers[:]
    pkg.handlers = []
    monkeypatch.setattr(td_log, "_configured", False)
    yield pkg
    for handler in pkg.handlers:
        handler.close()
    pkg.handlers = handlers
    pkg.setLevel(level)


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


class TestGetLogger:
    def test_level_comes_from_environment(self, monkeypatch, package_logger):
        monkeypatch.setenv("TD_JOBS_LOG_LEVEL", "debug")
        monkeypatch.delenv("TD_JOBS_LOG_DIR", raising=False)

        logger = td_log.get_logger("td_jobs.something")

        assert logger.name == "td_jobs.something"
        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1
        assert package_logger.handlers[0].level == logging.DEBUG
        assert _file_handlers(package_logger) == []

    def test_unknown_level_falls_back_to_warning(self, monkeypatch, package_logger):
        monkeypatch.setenv("TD_JOBS_LOG_LEVEL", "chatty")
        monkeypatch.delenv("TD_JOBS_LOG_DIR", raising=False)
        td_log.get_logger("td_jobs")
        assert package_logger.level == logging.WARNING

    def test_log_dir_adds_a_dated_file_handler(self, monkeypatch, tmp_path, package_logger):
        log_dir = tmp_path / "logs"
        monkeypatch.setenv("TD_JOBS_LOG_DIR", str(log_dir))
        monkeypatch.delenv("TD_JOBS_LOG_LEVEL", raising=False)

        td_log.get_logger("td_jobs")

        (handler,) = _file_handlers(package_logger)
        assert handler.level == logging.DEBUG
        files = list(log_dir.glob("td_jobs_*.log"))
        assert len(files) == 1
        assert handler.baseFilename == str(files[0])

    def test_configures_only_once(self, monkeypatch, package_logger):
        monkeypatch.delenv("TD_JOBS_LOG_DIR", raising=False)
        td_log.get_logger("td_jobs.a")
        td_log.get_logger("td_jobs.b")
        assert len(package_logger.handlers) == 1


def test_secret_never_reaches_the_logs(caplog, http):
    caplog.set_level(logging.DEBUG, logger="td_jobs")
    td_jobs.configure(application_secret=SECRET)

    http.return_value = make_response(200, {"id": 1, "name": "job"})
    Job.find(1)
    http.return_value = make_response(500, {"error": "BOOM"})
    with pytest.raises(RequestFailed):
        Job.find(2)

    assert caplog.records
    assert all(SECRET not in record.getMessage() for record in caplog.records)
