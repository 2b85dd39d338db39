import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "skillmark"


def configure_logging(level: str = "INFO"):
    """Install a single console handler on the root logger."""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # Re-running (tests, reloads) must not stack handlers
    if any(handler.get_name() == HANDLER_NAME for handler in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(handler)
