"""_fmtlib is optkit's internal API for rendering ANSI-formatted text.

Text is collected into :class:`TerminalString` buffers: lists of words, each one
paired with its visible length (control sequences excluded). Nothing is laid out
until a message is wrapped to a target width, so the same buffers can be rendered
with or without styles, at any width.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from typing_extensions import Literal

from . import _settings, _strings
from ._enums import ConnectiveWord
from ._sequences import CLEAR, Style, cs, fg, seq, style, tf

FormatCallback = Callable[[str], None]
"""Processes a format specifier found while splitting text."""

DEFAULT_CONNECTIVES: Dict[ConnectiveWord, str] = {
    ConnectiveWord.and_: "and",
    ConnectiveWord.or_: "or",
    ConnectiveWord.not_: "not",
    ConnectiveWord.no: "no",
    ConnectiveWord.equals: "==",
    ConnectiveWord.not_equals: "!=",
    ConnectiveWord.option_alt: "|",
    ConnectiveWord.option_sep: ",",
    ConnectiveWord.string_sep: ",",
    ConnectiveWord.number_sep: ",",
    ConnectiveWord.string_quote: "'",
    ConnectiveWord.array_sep: ",",
    ConnectiveWord.array_open: "[",
    ConnectiveWord.array_close: "]",
    ConnectiveWord.object_sep: ",",
    ConnectiveWord.object_open: "{",
    ConnectiveWord.object_close: "}",
    ConnectiveWord.value_sep: ":",
    ConnectiveWord.value_open: "<",
    ConnectiveWord.value_close: ">",
    ConnectiveWord.expr_open: "(",
    ConnectiveWord.expr_close: ")",
}


@dataclasses.dataclass(frozen=True)
class MessageStyles:
    """Styles of the values that appear in error, warning and help messages."""

    boolean: Style = style(fg.yellow)
    string: Style = style(fg.green)
    number: Style = style(fg.yellow)
    regex: Style = style(fg.red)
    option: Style = style(fg.bright_magenta)
    """Style of option names."""
    value: Style = style(fg.bright_black)
    """Style of values of unknown type."""
    url: Style = style(fg.bright_black)
    text: Style = style(tf.clear)
    """Style of general text."""


@dataclasses.dataclass(frozen=True)
class MessageConfig:
    """Styles and connective words shared by every message builder."""

    styles: MessageStyles = MessageStyles()
    connectives: Mapping[ConnectiveWord, str] = dataclasses.field(
        default_factory=lambda: dict(DEFAULT_CONNECTIVES)
    )

    def connective(self, word: ConnectiveWord) -> str:
        return self.connectives.get(word, DEFAULT_CONNECTIVES[word])


@dataclasses.dataclass(frozen=True)
class FormattingFlags:
    alt: Optional[int] = None
    """Index of the phrase alternative to select, if any."""
    sep: Optional[str] = None
    """Element delimiter for sequence values. Overrides the connective words."""
    open: Optional[str] = None
    close: Optional[str] = None
    merge_prev: bool = True
    """Whether the delimiter is merged with the previous element."""
    merge_next: bool = False
    """Whether the delimiter is merged with the next element."""
    custom: Optional[Callable[[Any], None]] = None
    """Formats each element of a sequence, instead of the default formatting."""


class TerminalString:
    """An ordered list of words and control sequences that can be printed on a terminal.

    Args:
        indent: Starting column of the string. Negative values are replaced by zero.
        breaks: Initial number of line breaks.
        righty: Whether the string should be right-aligned to the terminal width.
        def_style: Default style, restored after each styled word.
    """

    def __init__(
        self,
        indent: int = 0,
        breaks: int = 0,
        righty: bool = False,
        def_style: Style = "",
    ) -> None:
        self.indent = indent
        self.righty = righty
        self.def_style = def_style
        self.merge = False
        """Whether the next word should be merged with the last word."""
        self._strings: List[str] = []
        self._lengths: List[int] = []
        self._merge_first = False
        self.line_break(breaks).seq(def_style)

    @property
    def strings(self) -> List[str]:
        return self._strings

    @property
    def lengths(self) -> List[int]:
        return self._lengths

    @property
    def count(self) -> int:
        return len(self._strings)

    @property
    def length(self) -> int:
        """Visible length of the string if printed on a single line."""
        words = sum(1 for n in self._lengths if n)
        return sum(self._lengths) + max(0, words - 1)

    def copy(self) -> TerminalString:
        out = TerminalString(self.indent, 0, self.righty, "")
        out.def_style = self.def_style
        out.merge = self.merge
        out._strings = list(self._strings)
        out._lengths = list(self._lengths)
        out._merge_first = self._merge_first
        return out

    def pop(self, count: int = 1) -> TerminalString:
        """Remove strings from the end of the list."""
        if count > 0:
            size = max(0, len(self._strings) - count)
            del self._strings[size:]
            del self._lengths[size:]
        return self

    def other(self, other: TerminalString) -> TerminalString:
        """Append the strings of another terminal string, preserving its merge state."""
        if other.count:
            self.merge = self.merge or other._merge_first
            self.add(other._strings[0], other._lengths[0])
            self._strings.extend(other._strings[1:])
            self._lengths.extend(other._lengths[1:])
            self.merge = other.merge
        return self

    def open(self, word: str, pos: Optional[int] = None) -> TerminalString:
        """Append a word that will be merged with the next word, or prepend it to a
        previously added word, if a position is given."""
        if pos is not None and 0 <= pos < self.count:
            self._strings[pos] = word + self._strings[pos]
            self._lengths[pos] += len(word)
        elif word:
            self.word(word)
            self.merge = True
        return self

    def close(self, word: str) -> TerminalString:
        """Append a word that is merged with the last word."""
        if word:
            self.merge = True
            self.word(word)
        return self

    def word(self, word: str) -> TerminalString:
        """Append a word, which should not contain control sequences."""
        return self.add(word, len(word))

    def styled(self, word_style: Style, word: str, revert: Optional[Style] = None) -> TerminalString:
        """Append a word with a style. The style is then reverted to the default style,
        unless another revert sequence is given."""
        if not word_style:
            return self.word(word)
        if revert is None:
            revert = CLEAR + self.def_style
        return self.add(word_style + word + revert, len(word))

    def line_break(self, count: int = 1) -> TerminalString:
        return self.add("\n" * count, 0) if count > 0 else self

    def seq(self, sequence: str) -> TerminalString:
        """Append a control sequence, which has no visible length."""
        return self.add(sequence, 0)

    def clear(self) -> TerminalString:
        """Append an SGR reset sequence."""
        return self.add(CLEAR, 0)

    def add(self, text: str, length: int) -> TerminalString:
        """Append a text that may contain control sequences, given its visible length."""
        if text:
            strings = self._strings
            if not strings:
                self._merge_first = self.merge
                index = 0
            else:
                index = len(strings) - (1 if self.merge else 0)
            if index < len(strings):
                strings[index] += text
                self._lengths[index] += length
            else:
                strings.append(text)
                self._lengths.append(length)
        self.merge = False
        return self

    def split(self, text: str, format: Optional[FormatCallback] = None) -> TerminalString:
        """Split a text into paragraphs, list items and words, and append them.

        Args:
            text: The text to be split. May contain SGR sequences.
            format: Called with each format specifier found in the text, if given.
        """
        paragraphs = _strings.PARAGRAPH_PATTERN.split(text)
        for i, para in enumerate(paragraphs):
            _split_paragraph(self, para, format)
            if i < len(paragraphs) - 1:
                self.line_break(2)
        return self

    def format(
        self,
        config: MessageConfig,
        phrase: str,
        args: Optional[Mapping[str, Any]] = None,
        flags: Optional[FormattingFlags] = None,
    ) -> TerminalString:
        """Append a phrase, replacing format specifiers by formatted arguments.

        Arguments are keyed by the specifier without its percent sign, e.g. `s1` for
        `%s1`. The specifier's letter selects the formatting function."""
        if flags is None:
            flags = FormattingFlags()
        if flags.alt is not None:
            phrase = _strings.select_alternative(phrase, flags.alt)
        if args is None:
            return self.split(phrase)

        def format_spec(spec: str) -> None:
            key = spec[1:]
            if key in args:
                format_arg(key[0], args[key], config, self, flags)

        return self.split(phrase, format_spec)

    def wrap(self, result: List[str], column: int, width: int, emit_styles: bool) -> int:
        """Wrap the strings to fit in a terminal width.

        Args:
            result: The list of printable strings to append to.
            column: The current terminal column.
            width: The terminal width, or zero to avoid wrapping.
            emit_styles: Whether control sequences should be emitted.

        Returns:
            The updated terminal column.
        """
        strings, lengths = self._strings, self._lengths
        if not strings:
            return column
        column = max(0, column)
        width = max(0, width)
        start = max(0, self.indent)
        need_to_align = width > 0 and self.righty
        largest_fits = not width or width >= start + max(lengths)
        if not largest_fits:
            # Wrap to the first column instead.
            start = 0

        if column != start and not strings[0].startswith("\n"):
            if not largest_fits or column > start:
                result.append("\n")
                column = 0
            elif emit_styles:
                result.append(seq(cs.cha, start + 1))
                column = start
            else:
                result.append(" " * (start - column))
                column = start

        if start:
            indent = seq(cs.cha, start + 1) if emit_styles else " " * start
        else:
            indent = ""
        # Index of the first word of the current line, for right-alignment.
        line_start = len(result)

        def align() -> None:
            nonlocal column
            if need_to_align and line_start < len(result) and column < width:
                rem = width - column
                pad = seq(cs.cuf, rem) if emit_styles else " " * rem
                result.insert(line_start, pad)
                column = width

        for text, length in zip(strings, lengths):
            if text.startswith("\n"):
                align()
                result.append(text)
                line_start = len(result)
                column = 0
                continue
            if not column and indent:
                result.append(indent)
                line_start = len(result)
                column = start
            if not length:
                if emit_styles:
                    result.append(text)
                continue
            if not emit_styles:
                text = _strings.strip_styles(text)
            if column == start:
                result.append(text)
                column += length
            elif not width or column + 1 + length <= width:
                result.append(" " + text)
                column += 1 + length
            else:
                align()
                result.append("\n" + indent)
                line_start = len(result)
                result.append(text)
                column = start + length
        align()
        return column


def _split_paragraph(
    result: TerminalString, para: str, format: Optional[FormatCallback]
) -> None:
    count = result.count
    for i, item in enumerate(_strings.LIST_ITEM_PATTERN.split(para)):
        if i % 2 == 0:
            _split_item(result, item, format)
        else:
            # A list marker: start a new line, unless this is the first word.
            if result.count > count:
                result.line_break()
            result.word(item)


def _split_item(
    result: TerminalString, item: str, format: Optional[FormatCallback]
) -> None:
    for word in _strings.WORD_PATTERN.split(item):
        if not word:
            continue
        if format is not None:
            parts = _strings.FORMAT_SPEC_PATTERN.split(word)
            if len(parts) > 1:
                result.open(parts[0])
                for i in range(1, len(parts), 2):
                    format(parts[i])
                    result.close(parts[i + 1])
                    result.merge = True
                result.merge = False
                continue
        result.add(word, _strings.visible_length(word))


# Formatting functions, selected by the letter of a format specifier.

FormatFunction = Callable[[Any, MessageConfig, TerminalString, FormattingFlags], None]


def _number_to_str(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_boolean(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    result.styled(config.styles.boolean, str(value))


def _format_string(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    quote = config.connective(ConnectiveWord.string_quote)
    result.styled(config.styles.string, f"{quote}{value}{quote}")


def _format_number(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    result.styled(config.styles.number, _number_to_str(value))


def _format_regex(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    pattern = value.pattern if isinstance(value, re.Pattern) else str(value)
    result.styled(config.styles.regex, pattern)


def _format_option(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    result.styled(config.styles.option, str(value))


def _format_url(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    result.styled(config.styles.url, str(value))


def _format_text(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    if isinstance(value, TerminalString):
        result.other(value)
    else:
        result.split(str(value))


def _format_custom(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    if flags.custom is not None:
        flags.custom(value)


def _format_sequence(
    values: Sequence[Any],
    config: MessageConfig,
    result: TerminalString,
    flags: FormattingFlags,
    element_fn: FormatFunction,
    open: str = "",
    close: str = "",
) -> None:
    sep = flags.sep if flags.sep is not None else config.connective(ConnectiveWord.array_sep)
    result.open(open)
    for i, val in enumerate(values):
        element_fn(val, config, result, flags)
        if sep and i < len(values) - 1:
            result.merge = flags.merge_prev
            result.word(sep)
            result.merge = flags.merge_next
    result.close(close)


def _format_array(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    open = flags.open if flags.open is not None else config.connective(ConnectiveWord.array_open)
    close = flags.close if flags.close is not None else config.connective(ConnectiveWord.array_close)
    element_fn = _format_custom if flags.custom is not None else _format_value
    _format_sequence(list(value), config, result, flags, element_fn, open, close)


def _format_object(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    value_sep = config.connective(ConnectiveWord.value_sep)

    def format_entry(entry: Any) -> None:
        key, val = entry
        key = str(key)
        if _strings.IDENTIFIER_PATTERN.match(key):
            result.word(key)
        else:
            _format_string(key, config, result, flags)
        result.close(value_sep)
        _format_value(val, config, result, flags)

    new_flags = dataclasses.replace(
        flags,
        sep=flags.sep if flags.sep is not None else config.connective(ConnectiveWord.object_sep),
        open=flags.open if flags.open is not None else config.connective(ConnectiveWord.object_open),
        close=flags.close if flags.close is not None else config.connective(ConnectiveWord.object_close),
        custom=format_entry,
    )
    _format_array(list(value.items()), config, result, new_flags)


def _describe(value: Any) -> str:
    if callable(value) and hasattr(value, "__name__"):
        return value.__name__
    return str(value)


def _format_value(value: Any, config: MessageConfig, result: TerminalString, flags: FormattingFlags) -> None:
    """Format a value of any type, dispatching on its type."""
    if isinstance(value, TerminalString):
        result.other(value)
    elif isinstance(value, bool):
        _format_boolean(value, config, result, flags)
    elif isinstance(value, (int, float)):
        _format_number(value, config, result, flags)
    elif isinstance(value, str):
        _format_string(value, config, result, flags)
    elif isinstance(value, re.Pattern):
        _format_regex(value, config, result, flags)
    elif isinstance(value, (list, tuple)):
        _format_array(value, config, result, flags)
    elif isinstance(value, Mapping):
        _format_object(value, config, result, flags)
    else:
        value_style = config.styles.value
        if value_style:
            result.seq(value_style)
            result.merge = True
        result.open(config.connective(ConnectiveWord.value_open))
        result.split(_describe(value))
        result.close(config.connective(ConnectiveWord.value_close))
        if value_style:
            result.merge = True
            result.clear()
            result.merge = True
            result.seq(result.def_style)


_FORMAT_FUNCTIONS: Dict[str, FormatFunction] = {
    "b": _format_boolean,
    "s": _format_string,
    "n": _format_number,
    "r": _format_regex,
    "o": _format_option,
    "u": _format_url,
    "t": _format_text,
    "p": _format_text,
    "c": _format_custom,
    "a": _format_array,
    "v": _format_value,
}


def format_arg(
    spec: str,
    value: Any,
    config: MessageConfig,
    result: TerminalString,
    flags: FormattingFlags,
) -> None:
    """Format one argument with the function selected by a specifier letter.

    Sequences given to scalar specifiers are formatted element-wise, separated by the
    flags' delimiter; no brackets are added."""
    fn = _FORMAT_FUNCTIONS.get(spec, _format_value)
    if fn in (_format_value, _format_custom, _format_array, _format_text):
        fn(value, config, result, flags)
    elif isinstance(value, (list, tuple)):
        _format_sequence(value, config, result, flags, fn)
    else:
        fn(value, config, result, flags)


# Messages.


class AnsiMessage(list):
    """A list of terminal strings that form a message. Rendering is deferred until
    the message is wrapped to a width."""

    def wrap(self, width: int = 0, emit_styles: Optional[bool] = None) -> str:
        """Wrap the message to a width.

        Args:
            width: The terminal width, or zero to avoid wrapping.
            emit_styles: Whether control sequences should be emitted. Defaults to the
                environment's preference for the given width.
        """
        if emit_styles is None:
            emit_styles = not _settings.omit_styles(width)
        result: List[str] = []
        column = 0
        for string in self:
            column = string.wrap(result, column, width, emit_styles)
        if emit_styles:
            result.append(CLEAR)
        return "".join(result)

    def _stream(self) -> Literal["stdout", "stderr"]:
        return "stdout"

    def __str__(self) -> str:
        return self.wrap(_settings.stream_width(self._stream()))

    @property
    def message(self) -> str:
        return str(self)


HelpMessage = AnsiMessage


class WarnMessage(AnsiMessage):
    """A message that is printed on the standard error."""

    def _stream(self) -> Literal["stdout", "stderr"]:
        return "stderr"


class ErrorMessage(Exception):
    """An error with a terminal message. The message is only wrapped when converted
    to a string."""

    def __init__(self, string: TerminalString) -> None:
        super().__init__()
        self.msg = WarnMessage([string])

    def __str__(self) -> str:
        return str(self.msg)

    @property
    def message(self) -> str:
        return str(self)
