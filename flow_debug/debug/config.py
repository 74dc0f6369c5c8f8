"""
Debug Configuration.

This module provides the process-wide settings of the debug pipeline:
the size bound applied to every truncation decision and whether console
output is coloured.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

DEFAULT_MAX_LENGTH = 1000

# Framework-injected request/response handles, never serialised
INTERNAL_KEYS = frozenset({"_req", "_res"})


@dataclass(frozen=True)
class DebugConfig:
    """
    Configuration for the debug pipeline.

    Attributes:
        max_length: Size bound for strings, arrays and binary payloads
        use_colors: Colour the console echo of debug nodes
        internal_keys: Object keys whose values are replaced by "[internal]"
    """

    max_length: int = DEFAULT_MAX_LENGTH
    use_colors: bool = False
    internal_keys: FrozenSet[str] = field(default=INTERNAL_KEYS)

    def __post_init__(self):
        if isinstance(self.max_length, bool) or not isinstance(self.max_length, int):
            raise ValueError(f"max_length must be an integer, got {self.max_length!r}")
        if self.max_length <= 0:
            raise ValueError(f"max_length must be positive, got {self.max_length}")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DebugConfig":
        """
        Create a DebugConfig from a settings dictionary.

        Both the camelCase names used in flow settings files and the
        snake_case attribute names are accepted:

        ```json
        {"debugMaxLength": 2000, "debugUseColors": true}
        {"maxLength": 2000, "useColors": true}
        ```

        Args:
            data: Dictionary with configuration values

        Returns:
            DebugConfig instance
        """
        if not data:
            return cls()

        def pick(*names, default):
            for name in names:
                if data.get(name) is not None:
                    return data[name]
            return default

        max_length = pick("max_length", "maxLength", "debugMaxLength", default=DEFAULT_MAX_LENGTH)
        use_colors = pick("use_colors", "useColors", "debugUseColors", default=False)
        internal_keys = pick("internal_keys", "internalKeys", default=INTERNAL_KEYS)

        return cls(
            max_length=max_length,
            use_colors=bool(use_colors),
            internal_keys=frozenset(internal_keys),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "max_length": self.max_length,
            "use_colors": self.use_colors,
            "internal_keys": sorted(self.internal_keys),
        }


def default_config() -> DebugConfig:
    """Get the default debug configuration."""
    return DebugConfig()
