import logging

from skillmark.core.log_config import HANDLER_NAME, configure_logging


def test_configure_logging_adds_one_named_handler():
    root = logging.getLogger()
    configure_logging("DEBUG")
    configure_logging("INFO")

    named = [h for h in root.handlers if h.get_name() == HANDLER_NAME]
    assert len(named) == 1
    assert root.level == logging.INFO
