"""Tests for verbose logging."""

import logging

from metatesting.verbose import setup_logger


def test_logger_creates_debug_log(tmp_path):
    debug_file = tmp_path / "logs" / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    assert not logger.disabled
    assert logger.level == logging.DEBUG
    assert debug_file.exists()


def test_logger_writes_to_file(tmp_path):
    debug_file = tmp_path / "debug.log"
    logger = setup_logger(debug_file=debug_file, verbose=False)

    logger.debug("test message")

    content = debug_file.read_text()
    assert "test message" in content
    assert "[" in content  # timestamp


def test_library_loggers_reach_the_debug_log(tmp_path):
    debug_file = tmp_path / "debug.log"
    setup_logger(debug_file=debug_file)

    logging.getLogger("metatesting.testset").debug("from a submodule")

    assert "from a submodule" in debug_file.read_text()


def test_verbose_mode_adds_stderr_handler(tmp_path):
    logger = setup_logger(debug_file=tmp_path / "debug.log", verbose=True)

    handler_types = [type(h).__name__ for h in logger.handlers]
    assert handler_types == ["FileHandler", "StreamHandler"]


def test_no_debug_file_and_not_verbose_has_no_handlers():
    logger = setup_logger()
    assert logger.handlers == []


def test_setup_twice_replaces_handlers(tmp_path):
    setup_logger(debug_file=tmp_path / "one.log", verbose=True)
    logger = setup_logger(debug_file=tmp_path / "two.log", verbose=False)
    assert len(logger.handlers) == 1


def test_records_do_not_propagate_to_root(caplog):
    logger = setup_logger()

    with caplog.at_level(logging.DEBUG):
        logging.getLogger("metatesting.testset").error("kept quiet")

    assert not logger.propagate
    assert "kept quiet" not in caplog.text
