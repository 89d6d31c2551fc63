"""
Logging setup
"""
import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Install a single console handler on the root logger"""
    global _configured

    root = logging.getLogger()
    root.setLevel(level.upper())
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True
