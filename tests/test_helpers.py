import logging

import structlog

from evm_chest.utils.helpers import Timer, setup_logging


def test_setup_logging_with_file(tmp_path):
    root = logging.getLogger()
    previous_level = root.level
    previous_handlers = list(root.handlers)
    log_file = tmp_path / "logs" / "chest.log"

    try:
        setup_logging("DEBUG", log_file=str(log_file), structured=False)
        logging.getLogger("evm_chest.test").debug("hello chest")

        assert root.level == logging.DEBUG
        assert logging.getLogger("web3").level == logging.WARNING
        assert "hello chest" in log_file.read_text()
    finally:
        for handler in root.handlers:
            if handler not in previous_handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(previous_level)


def test_setup_logging_configures_structlog():
    try:
        setup_logging("INFO", structured=True)
        assert structlog.is_configured()
    finally:
        structlog.reset_defaults()


def test_timer_measures_duration():
    with Timer("noop") as timer:
        pass
    assert timer.duration >= 0.0
