import logging

import pytest

from glamora_api.app.core.logging_config import (
    CONSOLE_HANDLER,
    FILE_HANDLER,
    UVICORN_LOGGERS,
    setup_logging,
)


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def named(root, name):
    return [h for h in root.handlers if h.get_name() == name]


def test_repeated_setup_installs_one_console_handler(root_logger):
    setup_logging("INFO")
    setup_logging("INFO")
    assert len(named(root_logger, CONSOLE_HANDLER)) == 1


def test_level_name_is_applied(root_logger):
    setup_logging("debug")
    assert root_logger.level == logging.DEBUG
    setup_logging("nonsense")
    assert root_logger.level == logging.INFO


def test_uvicorn_records_share_the_app_format(root_logger, tmp_path):
    logging.getLogger("uvicorn.access").addHandler(logging.NullHandler())
    logging.getLogger("uvicorn").propagate = False

    logfile = tmp_path / "glamora.log"
    setup_logging("INFO", str(logfile))

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        assert server_logger.handlers == []
        assert server_logger.propagate

    logging.getLogger("uvicorn.error").info("Started server process")
    logging.getLogger("glamora_api.app.main").info("Glamora API ready")
    for handler in named(root_logger, FILE_HANDLER):
        handler.flush()

    lines = logfile.read_text(encoding="utf-8").splitlines()
    assert lines[0].endswith("[INFO] uvicorn.error: Started server process")
    assert lines[1].endswith("[INFO] glamora_api.app.main: Glamora API ready")


def test_file_handler_follows_new_path(root_logger, tmp_path):
    setup_logging("INFO", str(tmp_path / "first.log"))
    setup_logging("INFO", str(tmp_path / "second.log"))
    handlers = named(root_logger, FILE_HANDLER)
    assert len(handlers) == 1
    assert handlers[0].baseFilename == str((tmp_path / "second.log").resolve())
