import logging

import pytest

from common.app_setup import LOGFILE_ENV, print_and_log, print_error, setup_logging


@pytest.fixture
def root_handlers():
    root = logging.getLogger()
    saved, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()
    for h in saved:
        root.addHandler(h)
    root.setLevel(level)


def read(path):
    with open(path) as f:
        return f.read()


def test_print_and_log_reaches_logfile(tmp_path, capsys, root_handlers):
    logfile = tmp_path / "projinfo.log"
    setup_logging(logfile=str(logfile))
    print_and_log("Visited 3 projects")
    assert "Visited 3 projects" in capsys.readouterr().out
    assert "INFO" in read(logfile) and "Visited 3 projects" in read(logfile)


def test_print_error_goes_to_stderr(tmp_path, capsys, root_handlers):
    logfile = tmp_path / "projinfo.log"
    setup_logging(logfile=str(logfile))
    print_error("Pass aborted")
    assert "Pass aborted" in capsys.readouterr().err
    assert "ERROR" in read(logfile)


def test_logfile_from_environment(tmp_path, monkeypatch, root_handlers):
    logfile = tmp_path / "env.log"
    monkeypatch.setenv(LOGFILE_ENV, str(logfile))
    logger = setup_logging(loglevel=logging.DEBUG)
    assert len(logger.handlers) == 1
    assert "Logger initialized for projinfo" in read(logfile)
