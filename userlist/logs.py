"""
Design (logs.py)
- Purpose: Logging setup for the app and a handler that mirrors log records into
           the screen's Logs panel.
- Inputs: Level for configure_logging(); a sink(line) callable for LogPanelHandler.
- Outputs: None.
- Side effects: Configures the root logger; the handler calls sink from whatever
                thread emitted the record (the sink must marshal to the UI thread).
- Thread-safety: logging.Handler serializes emit() with its own lock.
"""

import logging
from typing import Callable

from .config import LOG_DATE_FORMAT, LOG_FORMAT


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    # requests/urllib3 chatter is not useful in the panel
    logging.getLogger("urllib3").setLevel(logging.WARNING)


class LogPanelHandler(logging.Handler):
    """Formats each record as one line and hands it to sink."""

    def __init__(self, sink: Callable[[str], None], level: int = logging.INFO):
        super().__init__(level)
        self.sink = sink
        self.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
            self.sink(line + "\n")
        except Exception:
            self.handleError(record)
