"""
Debug Value Encoding.

Turns a classified value into an EncodedValue: a format tag plus a
bounded, display-safe string. Encoding never raises; every category has
a defined fallback.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from itertools import islice
from typing import Any, Optional

from flow_debug.util.safe_text import NOT_PRINTABLE, safe_str, truncate_text

from .classify import PLAIN_OBJECT_NAME, classify, resolve_type_name
from .config import DebugConfig, default_config
from .events import EncodedValue, ValueCategory
from .transform import Redactor

logger = logging.getLogger(__name__)

UNDEFINED_PLACEHOLDER = "(undefined)"

# Format tags used when an encoder branch fails part way
FALLBACK_FORMATS = {
    ValueCategory.BINARY: "buffer",
    ValueCategory.ERROR_LIKE: PLAIN_OBJECT_NAME,
    ValueCategory.PLAIN_OBJECT: PLAIN_OBJECT_NAME,
    ValueCategory.OPAQUE_OBJECT: PLAIN_OBJECT_NAME,
}


def _compact_json(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=safe_str)


def _read_field(value: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an object; None when absent or unreadable."""
    try:
        if isinstance(value, Mapping):
            return value.get(name)
        return getattr(value, name, None)
    except Exception:
        return None


class DebugEncoder:
    """
    Encode values for the debug channel.

    Every truncation decision uses ``config.max_length``. Output only
    depends on the value and the configuration, so encoding the same
    value twice yields identical results.

    Example:
        encoder = DebugEncoder(DebugConfig(max_length=1000))
        encoder.encode("x" * 5000)
        # EncodedValue(format="string[5000]", payload="xxx...x...")
    """

    def __init__(self, config: Optional[DebugConfig] = None):
        """
        Initialize the encoder.

        Args:
            config: Debug configuration (uses defaults if None)
        """
        self.config = config or default_config()
        self.redactor = Redactor(
            max_length=self.config.max_length,
            internal_keys=self.config.internal_keys,
        )

    @property
    def max_length(self) -> int:
        return self.config.max_length

    def encode(self, value: Any) -> EncodedValue:
        """
        Classify and encode a value.

        Args:
            value: Any runtime value

        Returns:
            The encoded value
        """
        try:
            category = classify(value)
        except Exception as e:
            # isinstance() consults a user-defined __class__, which may raise
            logger.debug("Could not classify value: %s", e)
            return EncodedValue(format=PLAIN_OBJECT_NAME, payload=NOT_PRINTABLE)
        return self.encode_category(category, value)

    def encode_category(self, category: ValueCategory, value: Any) -> EncodedValue:
        """
        Encode a value of a known category.

        Args:
            category: Category returned by classify()
            value: The value itself

        Returns:
            The encoded value
        """
        try:
            return self._encode(category, value)
        except Exception as e:
            logger.debug("Encoding %s value failed: %s", category.value, e)
            return EncodedValue(format=self._fallback_format(category), payload=NOT_PRINTABLE)

    def _encode(self, category: ValueCategory, value: Any) -> EncodedValue:
        if category is ValueCategory.ERROR:
            return EncodedValue(format="error", payload=self._encode_error(value))

        if category is ValueCategory.BINARY:
            data = bytes(value)
            # Character based: a cut can split the last byte pair
            return EncodedValue(
                format=f"buffer[{len(data)}]",
                payload=data.hex()[:self.max_length],
            )

        if category is ValueCategory.ERROR_LIKE:
            fields = {}
            for name in ("name", "message"):
                field_value = _read_field(value, name)
                if field_value is not None:
                    fields[name] = field_value
            return EncodedValue(format=resolve_type_name(value), payload=_compact_json(self.redactor.redact(fields)))

        if category is ValueCategory.ARRAY:
            length = len(value)
            items = list(islice(value, self.max_length))
            return EncodedValue(format=f"array[{length}]", payload=self._encode_structured(items, value))

        if category is ValueCategory.PLAIN_OBJECT:
            entries = dict(islice(value.items(), self.max_length))
            return EncodedValue(format=resolve_type_name(value), payload=self._encode_structured(entries, value))

        if category is ValueCategory.OPAQUE_OBJECT:
            return EncodedValue(format=resolve_type_name(value), payload=self._best_effort_text(value))

        if category is ValueCategory.BOOLEAN:
            return EncodedValue(format="boolean", payload="true" if value else "false")

        if category is ValueCategory.NUMBER:
            return EncodedValue(format="number", payload=self._best_effort_text(value))

        if category is ValueCategory.NULL:
            return EncodedValue(format="null", payload=UNDEFINED_PLACEHOLDER)

        if category is ValueCategory.UNDEFINED:
            return EncodedValue(format="undefined", payload=UNDEFINED_PLACEHOLDER)

        return EncodedValue(format=f"string[{len(value)}]", payload=truncate_text(value, self.max_length))

    def _encode_error(self, error: BaseException) -> str:
        fields = {"name": type(error).__name__}
        message = _read_field(error, "message")
        fields["message"] = message if message is not None else safe_str(error)
        return _compact_json(self.redactor.redact(fields))

    def _encode_structured(self, data: Any, original: Any) -> str:
        """
        JSON-encode a redacted array or plain object.

        Yields "[Type not printable]" when encoding fails; the string form
        of the value still holds the redacted fields.
        """
        try:
            redacted = self.redactor.redact(data, original=original)
            return json.dumps(redacted, indent=" ", ensure_ascii=False, allow_nan=False, default=safe_str)
        except (TypeError, ValueError, RecursionError) as e:
            logger.debug("JSON encoding failed: %s", e)
            return NOT_PRINTABLE

    def _best_effort_text(self, value: Any) -> str:
        text = safe_str(value, fallback=None)
        if text is None:
            return NOT_PRINTABLE
        return truncate_text(text, self.max_length)

    def _fallback_format(self, category: ValueCategory) -> str:
        return FALLBACK_FORMATS.get(category, category.value)


def encode(value: Any, config: Optional[DebugConfig] = None) -> EncodedValue:
    """Encode a value with a one-off encoder."""
    return DebugEncoder(config).encode(value)
