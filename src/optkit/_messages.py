"""Builders for error and warning messages."""

from __future__ import annotations

from typing import Any, Mapping

from ._enums import ErrorItem
from ._fmtlib import ErrorMessage, FormattingFlags, TerminalString
from .conf._confstruct import ValidatorConfig


def format_message(
    config: ValidatorConfig,
    kind: ErrorItem,
    args: Mapping[str, Any] | None = None,
    flags: FormattingFlags | None = None,
) -> TerminalString:
    """Create a message from the phrase of some kind of error or warning. The message
    always ends with a single line break."""
    result = TerminalString().seq(config.styles.text)
    return result.format(config, config.phrase(kind), args, flags).line_break()


def error_message(
    config: ValidatorConfig,
    kind: ErrorItem,
    args: Mapping[str, Any] | None = None,
    flags: FormattingFlags | None = None,
) -> ErrorMessage:
    return ErrorMessage(format_message(config, kind, args, flags))
