"""
Log Bridge.

Forwards WARNING and ERROR log records to the debug channel through the
same encoding as node values. The bridge is a plain logging.Handler; the
application decides which logger it is attached to.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .events import DebugContext
from .publisher import DebugPublisher

FORWARDED_LEVELS = frozenset({logging.WARNING, logging.ERROR})


class DebugLogHandler(logging.Handler):
    """
    Logging handler publishing warnings and errors as debug messages.

    Only WARNING and ERROR records are forwarded: DEBUG, INFO and
    CRITICAL are ignored. Records logged while a record is being
    published (e.g. a failing comms reporting its failure) are dropped.

    Records may carry ``node_id`` / ``node_name`` extras identifying the
    flow node that logged them:

        logger.warning("bad input", extra={"node_id": "n1", "node_name": "parse"})

    Example:
        handler = DebugLogHandler(publisher)
        logging.getLogger().addHandler(handler)
    """

    def __init__(self, publisher: DebugPublisher, level: int = logging.WARNING):
        """
        Initialize the handler.

        Args:
            publisher: Publisher shared with the debug nodes
            level: Handler threshold
        """
        super().__init__(level)
        self.publisher = publisher
        self._local = threading.local()

    def emit(self, record: logging.LogRecord) -> None:
        """Publish a record if its level is forwarded."""
        if record.levelno not in FORWARDED_LEVELS:
            return
        if getattr(self._local, "publishing", False):
            return

        self._local.publishing = True
        try:
            value = record.msg if isinstance(record.msg, BaseException) else record.getMessage()
            context = DebugContext(
                id=getattr(record, "node_id", None) or record.name,
                name=getattr(record, "node_name", None) or record.name,
            )
            self.publisher.publish(value, context, level=record.levelname.lower())
        except Exception:
            self.handleError(record)
        finally:
            self._local.publishing = False


def install_log_bridge(
    publisher: DebugPublisher,
    logger: Optional[logging.Logger] = None,
) -> DebugLogHandler:
    """
    Attach a DebugLogHandler to a logger.

    Args:
        publisher: Publisher to forward records to
        logger: Logger to attach to (root logger if None)

    Returns:
        The installed handler, for later removal
    """
    target = logger if logger is not None else logging.getLogger()
    handler = DebugLogHandler(publisher)
    target.addHandler(handler)
    return handler
