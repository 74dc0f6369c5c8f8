"""Human readable rendering of values for console output."""

from typing import Any, Optional

from rich.console import Console
from rich.pretty import Pretty, pretty_repr

from flow_debug.util.safe_text import safe_str

CONSOLE_WIDTH = 120


def inspect_value(value: Any, colors: bool = False, max_depth: Optional[int] = None) -> str:
    """
    Pretty-print a value the way it is echoed to the console.

    Circular references are shown as ``...``. ANSI colours are only
    emitted when ``colors`` is set. Rendering problems fall back to
    ``str(value)``.
    """
    try:
        if not colors:
            return pretty_repr(value, max_width=CONSOLE_WIDTH, max_depth=max_depth)
        console = Console(force_terminal=True, color_system="standard", no_color=False, width=CONSOLE_WIDTH)
        with console.capture() as capture:
            console.print(Pretty(value, max_depth=max_depth), end="")
        return capture.get()
    except Exception:
        return safe_str(value)
