"""Read-only inspection of the terminal environment.

Nothing in here is cached or mutated: every call consults the environment again, so
that tests and callers can control rendering through environment variables or by
passing explicit widths to :meth:`optkit.AnsiMessage.wrap`.
"""

from __future__ import annotations

import os
import shutil
import sys
from typing import Any, Callable, Literal, TypeVar

T = TypeVar("T")


def read_option(str_name: str, typ: Callable[[str], T], default: Any) -> T | Any:
    """Read an environment variable, converting it with `typ`. Empty or
    unconvertible values fall back to the default."""
    value = os.environ.get(str_name, "")
    if value == "":
        return default
    try:
        return typ(value)
    except ValueError:
        return default


def stream_width(stream: Literal["stdout", "stderr"]) -> int:
    """Get the column count of a standard stream.

    Returns zero when the stream is not a terminal, which disables wrapping. The
    `FORCE_WIDTH` environment variable overrides the detected value."""
    forced = read_option("FORCE_WIDTH", int, None)
    if forced is not None:
        return max(0, forced)
    target = sys.stdout if stream == "stdout" else sys.stderr
    try:
        is_tty = target.isatty()
    except (AttributeError, ValueError):
        is_tty = False
    if not is_tty:
        return 0
    return shutil.get_terminal_size().columns


def omit_styles(width: int) -> bool:
    """Check whether styles should be omitted from messages rendered at some width.

    `FORCE_COLOR` always enables styles. Otherwise, `NO_COLOR`, a dumb terminal, or a
    width of zero (not a terminal) disable them."""
    if os.environ.get("FORCE_COLOR"):
        return False
    if os.environ.get("NO_COLOR") or os.environ.get("TERM") == "dumb":
        return True
    return width == 0
