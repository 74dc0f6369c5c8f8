import functools
import time
import logging

logger = logging.getLogger(__name__)

SENSITIVE_KEYS = {"api_key", "private_key", "authorization", "password", "token", "bearer", "secret"}
MAX_REDACT_DEPTH = 10


def _redact(value, depth=0):
    """Recursively redact sensitive keys in nested structures."""
    if depth > MAX_REDACT_DEPTH:
        return "..."
    try:
        if isinstance(value, dict):
            return {k: ("***" if str(k).lower() in SENSITIVE_KEYS else _redact(v, depth + 1)) for k, v in value.items()}
        if isinstance(value, list):
            return [_redact(v, depth + 1) for v in value]
        if isinstance(value, tuple):
            return tuple(_redact(v, depth + 1) for v in value)
    except Exception:
        # If anything goes wrong during redaction, fallback to original value
        return value
    return value


def node_telemetry(func):
    qualname = func.__qualname__.split('.')[0]

    @functools.wraps(func)
    def wrapper(self, msg, *args, **kwargs):
        debug = self.get_debug()
        start_time = time.monotonic()
        logger.debug("Executing %s:%s...", qualname, self.node_id)
        if debug:
            logger.debug("Node %s:%s input: %s", qualname, self.node_id, _redact(msg))
        try:
            return func(self, msg, *args, **kwargs)
        finally:
            execution_time = time.monotonic() - start_time
            if debug:
                logger.debug("%s:%s execution time: %.4f seconds", qualname, self.node_id, execution_time)

    return wrapper
