"""Formatting of help messages.

Each visible option becomes a help entry with three columns: names, parameter and
description. Entries are formatted once, when the formatter is created; column
widths are then computed over all entries, so that entries in every group align.
"""

from __future__ import annotations

import dataclasses
import math
import re
from typing import Any, Callable, Dict, List, Mapping, Sequence

from ._enums import ConnectiveWord, HelpItem
from ._fmtlib import (
    AnsiMessage,
    FormattingFlags,
    MessageConfig,
    TerminalString,
    format_arg,
)
from ._options import (
    BooleanOption,
    CommandOption,
    FlagOption,
    FunctionOption,
    HelpOption,
    NumberOption,
    NumbersOption,
    Option,
    Options,
    ParamOption,
    Requires,
    RequiresAll,
    RequiresNot,
    RequiresOne,
    StringOption,
    StringsOption,
    ValuedOption,
    get_option_names,
    get_param_count,
    is_array,
    is_number,
    is_string,
)
from ._sequences import Style
from ._strings import visible_length
from ._validator import OptionValidator
from .conf._confstruct import (
    DEFAULT_SECTIONS,
    HEADING_STYLE,
    FormatterConfig,
    HelpGroups,
    HelpSection,
    HelpText,
    HelpUsage,
)

_ELLIPSIS = "..."


@dataclasses.dataclass(frozen=True)
class HelpEntry:
    """The formatted columns of one option."""

    names: List[TerminalString]
    """One string per name, or per name slot when names are aligned by slot."""
    param: TerminalString
    descr: TerminalString
    param_len: int
    """Visible length of the parameter column."""


class HelpFormatter:
    """Formats help messages for a set of option definitions.

    Options are rendered in declaration order, grouped by their group labels.

    Args:
        validator: The validator of the option definitions. Provides the message
            styles, connective words and preferred option names.
        config: The formatter configuration.
    """

    def __init__(self, validator: OptionValidator, config: FormatterConfig | None = None) -> None:
        self._validator = validator
        self._config = config if config is not None else FormatterConfig()
        self._options = validator.options
        self._groups: Dict[str, List[HelpEntry]] = {}

        cfg = self._config
        name_widths: List[int] | int
        if cfg.names.hidden:
            name_widths = 0
        elif cfg.names.align == "slot":
            name_widths = _get_name_widths(self._options)
        else:
            name_widths = _get_max_names_width(self._options)

        param_width = 0
        for option in self._options.values():
            if option.hide or _exclude_option(option, cfg.filters):
                continue
            entry = self._format_entry(option, name_widths)
            self._groups.setdefault(option.group or "", []).append(entry)
            param_width = max(param_width, entry.param_len)
        self._adjust_entries(name_widths, param_width)

    @property
    def groups(self) -> Mapping[str, List[HelpEntry]]:
        return self._groups

    def format_help(self) -> AnsiMessage:
        """Format the entries of the default group."""
        message = self.format_group()
        return message if message is not None else AnsiMessage()

    def format_group(self, name: str = "") -> AnsiMessage | None:
        """Format the entries of a group, if the group exists."""
        entries = self._groups.get(name)
        return _format_entries(entries) if entries is not None else None

    def format_groups(self) -> Dict[str, AnsiMessage]:
        """Format the entries of every group, keyed by group name."""
        return {group: _format_entries(entries) for group, entries in self._groups.items()}

    def format_sections(self, sections: Sequence[HelpSection], prog_name: str = "") -> AnsiMessage:
        """Format a complete help message made of sections.

        Args:
            sections: The help sections, in order.
            prog_name: The program name, shown at the start of usage sections.
        """
        result = AnsiMessage()
        for section in sections:
            self._format_section(section, prog_name, result)
        return result

    # Entries.

    def _format_entry(self, option: Option, name_widths: List[int] | int) -> HelpEntry:
        cfg = self._config
        styles = self._validator.config.styles
        names: List[TerminalString] = []
        if not cfg.names.hidden and option.names:
            names_style = _first_style(option.styles.names, cfg.styles.names, styles.option)
            names = _format_name_slots(cfg, option.names, name_widths, names_style)
        param = TerminalString()
        param_len = 0
        if not cfg.param.hidden:
            param_len = _format_param(
                option, self._validator.config, param, cfg.param.breaks, cfg.styles.param
            )
        descr = self._format_description(option)
        return HelpEntry(names, param, descr, param_len)

    def _format_description(self, option: Option) -> TerminalString:
        """Format the description column. It always ends with a single line break."""
        cfg = self._config
        if cfg.descr.hidden or not cfg.items:
            return TerminalString().line_break()
        styles = self._validator.config.styles
        descr_style = _first_style(option.styles.descr, cfg.styles.descr, styles.text)
        result = TerminalString(0, cfg.descr.breaks, cfg.descr.align == "right", descr_style)
        count = result.count
        for item in cfg.items:
            _HELP_ITEM_FUNCTIONS[item](option, cfg.phrase(item), self._validator, result)
        if result.count == count:
            # No words were added.
            return result.pop(count).line_break()
        return result.clear().line_break()

    def _adjust_entries(self, name_widths: List[int] | int, param_width: int) -> None:
        """Move each entry's parameter and description to their starting columns."""
        cfg = self._config
        if isinstance(name_widths, list):
            names_width = sum(w + 2 for w in name_widths) - 2 if name_widths else 0
        else:
            names_width = name_widths
        names_indent = max(0, cfg.names.indent)
        if cfg.param.absolute:
            param_indent = max(0, cfg.param.indent)
        else:
            param_indent = names_indent + names_width + cfg.param.indent
        if cfg.descr.absolute:
            descr_indent = max(0, cfg.descr.indent)
        else:
            descr_indent = param_indent + param_width + cfg.descr.indent
        align_left = cfg.param.align != "right"
        for entries in self._groups.values():
            for entry in entries:
                entry.param.indent = param_indent + (0 if align_left else param_width - entry.param_len)
                entry.descr.indent = descr_indent

    # Sections.

    def _format_section(self, section: HelpSection, prog_name: str, result: AnsiMessage) -> None:
        styles = self._validator.config.styles
        breaks = section.breaks if section.breaks is not None else (2 if result else 0)
        if isinstance(section, HelpGroups):
            self._format_groups_section(section, breaks, result)
            return
        if section.title:
            heading_style = section.style if section.style is not None else HEADING_STYLE
            result.append(_format_text(section.title, heading_style, 0, breaks, section.no_wrap))
            breaks = 2
        if isinstance(section, HelpUsage):
            indent = section.indent
            if prog_name:
                result.append(_format_text(prog_name, styles.text, indent, breaks, True))
                indent = max(0, indent) + len(prog_name) + 1
                breaks = 0
            result.append(self._format_usage(section, indent, breaks))
        elif isinstance(section, HelpText) and section.text:
            result.append(
                _format_text(section.text, styles.text, section.indent, breaks, section.no_wrap)
            )

    def _format_groups_section(self, section: HelpGroups, breaks: int, result: AnsiMessage) -> None:
        groups = set(section.filter) if section.filter is not None else None
        heading_style = section.style if section.style is not None else HEADING_STYLE
        for group, entries in self._groups.items():
            if groups is not None and (group in groups) == section.exclude:
                continue
            title = group or section.title
            if title:
                heading = _format_text(
                    title, heading_style, 0, breaks, section.no_wrap, section.phrase
                ).line_break(2)
            else:
                heading = TerminalString(0, breaks)
            result.append(heading)
            result.extend(_format_entries(entries))
            # Remove the trailing break, without changing the entry itself.
            result[-1] = result[-1].copy().pop()
            breaks = 2

    def _format_usage(self, section: HelpUsage, indent: int, breaks: int) -> TerminalString:
        config = self._validator.config
        result = TerminalString(indent, breaks).seq(config.styles.text)
        count = result.count
        options = self._options
        if section.filter is not None and not section.exclude:
            # Listed in the order of the filter.
            required = set(section.required)
            for key in dict.fromkeys(section.filter):
                if key in options:
                    self._format_usage_option(options[key], result, key in required)
        else:
            excluded = set(section.filter or ())
            for key, option in options.items():
                if not option.hide and key not in excluded:
                    self._format_usage_option(option, result)
        if section.comment:
            result.split(section.comment)
        if result.count == count:
            return TerminalString()
        return result.clear()

    def _format_usage_option(
        self, option: Option, result: TerminalString, required: bool | None = None
    ) -> None:
        config = self._validator.config
        if required is None:
            required = isinstance(option, ValuedOption) and option.required
        if not required:
            result.open("[")
        names = get_option_names(option)
        if names:
            positional = isinstance(option, ParamOption) and option.positional
            if positional:
                result.open("[")
            if len(names) > 1:
                sep = config.connective(ConnectiveWord.option_alt)
                flags = FormattingFlags(sep=sep, merge_next=True)
                result.format(config, "(%o)", {"o": names}, flags)
            else:
                format_arg("o", names[0], config, result, FormattingFlags())
            if positional:
                result.close("]")
        _format_param(option, config, result, column_style=self._config.styles.param)
        if not required:
            result.close("]")


def format_help_message(
    validator: OptionValidator,
    help_option: HelpOption,
    prog_name: str = "",
    filters: Sequence[str] = (),
) -> AnsiMessage:
    """Format the help message of a help option, with its own configuration and
    sections.

    Args:
        validator: The validator of the option set that contains the help option.
        help_option: The help option.
        prog_name: The program name.
        filters: Patterns given on the command line after the help option. Only used if
            the option has `use_filter` set; matched case-insensitively.
    """
    config = help_option.format if help_option.format is not None else FormatterConfig()
    if help_option.use_filter and filters:
        patterns = tuple(re.compile(f, re.IGNORECASE) for f in filters)
        config = dataclasses.replace(config, filters=patterns)
    sections = help_option.sections if help_option.sections is not None else DEFAULT_SECTIONS
    return HelpFormatter(validator, config).format_sections(sections, prog_name)


def _first_style(*styles: Style | None) -> Style:
    """The first style that is set. The last one always is."""
    return next(s for s in styles if s is not None)


def _exclude_option(option: Option, filters: Sequence[re.Pattern]) -> bool:
    if not filters:
        return False
    env_var = option.env_var if isinstance(option, ValuedOption) else None
    texts = [name for name in option.names if name] + [
        text for text in (option.desc, env_var) if text
    ]
    return not any(f.search(text) for f in filters for text in texts)


def _get_name_widths(options: Options) -> List[int]:
    """Width of each name slot."""
    result: List[int] = []
    for option in options.values():
        if option.hide:
            continue
        for i, name in enumerate(option.names):
            if i == len(result):
                result.append(0)
            result[i] = max(result[i], len(name or ""))
    return result


def _get_max_names_width(options: Options) -> int:
    """Maximum width of the names of an option, joined by separators."""
    result = 0
    for option in options.values():
        if option.hide:
            continue
        names = [name for name in option.names if name]
        result = max(result, sum(len(name) for name in names) + 2 * max(0, len(names) - 1))
    return result


def _format_name_slots(
    config: FormatterConfig,
    names: Sequence[str | None],
    name_widths: List[int] | int,
    names_style: Style,
) -> List[TerminalString]:
    slotted = isinstance(name_widths, list)
    result: List[TerminalString] = []
    current: TerminalString | None = None
    indent = max(0, config.names.indent)
    breaks = config.names.breaks
    length = 0
    for i, name in enumerate(names):
        if name:
            if current is not None:
                current.close(",")
                length += 2
            if current is None or slotted:
                current = TerminalString(indent, breaks)
                result.append(current)
                breaks = 0  # break only before the first name
            current.styled(names_style, name)
            length += len(name)
        elif slotted:
            current = None
        if isinstance(name_widths, list):
            indent += name_widths[i] + 2
    if current is not None and isinstance(name_widths, int) and config.names.align == "right":
        current.indent += name_widths - length
    return result


def _format_entries(entries: Sequence[HelpEntry]) -> AnsiMessage:
    result = AnsiMessage()
    for entry in entries:
        result.extend(entry.names)
        result.append(entry.param)
        result.append(entry.descr)
    return result


def _format_text(
    text: str,
    def_style: Style,
    indent: int = 0,
    breaks: int = 0,
    no_wrap: bool = False,
    phrase: str | None = None,
) -> TerminalString:
    """Format a heading or the text of a section, optionally inside a phrase."""
    result = TerminalString(indent, breaks).seq(def_style)

    def format_text(spec: str = "") -> None:
        if no_wrap:
            # May be wider than the terminal.
            result.add(text, visible_length(text))
        else:
            result.split(text)

    if phrase:
        result.split(phrase, format_text)
    else:
        format_text()
    return result.clear()


def _value_spec(option: Option) -> str:
    if isinstance(option, (FlagOption, BooleanOption)):
        return "b"
    if is_string(option):
        return "s"
    if is_number(option):
        return "n"
    return "v"


def _format_param(
    option: Option,
    config: MessageConfig,
    result: TerminalString,
    breaks: int = 0,
    column_style: Style | None = None,
) -> int:
    """Format the parameter of an option: its example value, or a placeholder that
    reflects the parameter count.

    Returns:
        The visible length of the parameter.
    """
    if isinstance(option, ParamOption) and option.example is not None:
        result.line_break(breaks)
        return _format_example(option, config, result)
    param_style = _first_style(option.styles.param, column_style, config.styles.value)
    if isinstance(option, CommandOption):
        result.line_break(breaks).styled(param_style, _ELLIPSIS)
        return len(_ELLIPSIS)
    lo, hi = get_param_count(option)
    if not hi:
        return 0
    assert isinstance(option, ParamOption)
    param_name = option.param_name
    if param_name:
        param = param_name if "<" in param_name else f"<{param_name}>"
    elif isinstance(option, FunctionOption):
        param = "<param>"
    else:
        param = f"<{option.kind}>"
    if hi > 1:
        param += _ELLIPSIS
    if lo <= 0:
        param = f"[{param}]"
    result.line_break(breaks).styled(param_style, param)
    return len(param)


def _format_example(option: ParamOption, config: MessageConfig, result: TerminalString) -> int:
    example = option.example
    start = result.length
    separator = getattr(option, "separator", None)
    if separator and isinstance(example, (list, tuple)):
        sep = separator if isinstance(separator, str) else separator.pattern
        joined = sep.join(str(v) for v in example)
        result.format(config, "%s", {"s": joined})
    else:
        # Array values are listed as they would be typed on the command line.
        spec = _value_spec(option)
        result.format(config, f"%{spec}", {spec: example}, FormattingFlags(sep=""))
    return result.length - start


# Description items. Each one is a no-op when its attribute is absent.

HelpItemFunction = Callable[[Option, str, OptionValidator, TerminalString], None]


def _format_synopsis(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if option.desc:
        result.format(validator.config, phrase, {"t": option.desc})


def _format_negation(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, FlagOption) and option.negation_names:
        names = [name for name in option.negation_names if name]
        if names:
            result.format(validator.config, phrase, {"o": names})


def _format_separator(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    separator = option.separator if isinstance(option, (StringsOption, NumbersOption)) else None
    if separator:
        spec, alt = ("s", 0) if isinstance(separator, str) else ("r", 1)
        result.format(validator.config, phrase, {spec: separator}, FormattingFlags(alt=alt))


def _format_param_count(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    lo, hi = get_param_count(option)
    if hi <= 1:
        return
    value: Any = None
    if lo == hi:
        alt, value = 1, lo  # exactly
    elif lo <= 0:
        alt, value = (2, hi) if math.isfinite(hi) else (0, None)  # at most, or multiple
    elif math.isfinite(hi):
        alt, value = 4, (lo, hi)  # between
    elif lo > 1:
        alt, value = 3, lo  # at least
    else:
        alt = 0
    sep = validator.config.connective(ConnectiveWord.and_)
    flags = FormattingFlags(alt=alt, sep=sep, merge_prev=False)
    result.format(validator.config, phrase, {"n": value}, flags)


def _format_positional(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    positional = option.positional if isinstance(option, ParamOption) else False
    if positional is True:
        result.format(validator.config, phrase, {}, FormattingFlags(alt=0))
    elif positional:
        result.format(validator.config, phrase, {"o": positional}, FormattingFlags(alt=1))


def _format_append(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, (StringsOption, NumbersOption)) and option.append:
        result.split(phrase)


def _format_trim(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, (StringOption, StringsOption)) and option.trim:
        result.split(phrase)


def _format_case(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, (StringOption, StringsOption)) and option.case:
        alt = 0 if option.case == "lower" else 1
        result.format(validator.config, phrase, {}, FormattingFlags(alt=alt))


def _format_conv(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, (NumberOption, NumbersOption)) and option.conv:
        result.format(validator.config, phrase, {"t": option.conv})


def _format_enums(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if not isinstance(option, (StringOption, StringsOption, NumberOption, NumbersOption)):
        return
    if option.enums is not None:
        config = validator.config
        if is_string(option):
            spec, alt, sep = "s", 0, config.connective(ConnectiveWord.string_sep)
        else:
            spec, alt, sep = "n", 1, config.connective(ConnectiveWord.number_sep)
        result.format(config, phrase, {spec: list(option.enums)}, FormattingFlags(alt=alt, sep=sep))


def _format_regex(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, (StringOption, StringsOption)) and option.regex is not None:
        result.format(validator.config, phrase, {"r": option.regex})


def _format_range(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, (NumberOption, NumbersOption)) and option.range is not None:
        sep = validator.config.connective(ConnectiveWord.number_sep)
        result.format(validator.config, phrase, {"n": option.range}, FormattingFlags(sep=sep))


def _format_unique(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, (StringsOption, NumbersOption)) and option.unique:
        result.split(phrase)


def _format_limit(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, (StringsOption, NumbersOption)) and option.limit is not None:
        result.format(validator.config, phrase, {"n": option.limit})


def _format_requires(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, ValuedOption) and option.requires is not None:
        requires = option.requires
        result.split(phrase, lambda spec: _format_requirements(validator, requires, result))


def _format_required(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, ValuedOption) and option.required:
        result.split(phrase)


def _format_default(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, ValuedOption) and option.default is not None:
        _format_value(option, phrase, validator.config, result, option.default)


def _format_deprecated(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if option.deprecated:
        result.format(validator.config, phrase, {"t": option.deprecated})


def _format_link(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if option.link:
        result.format(validator.config, phrase, {"u": option.link})


def _format_env_var(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, ValuedOption) and option.env_var:
        result.format(validator.config, phrase, {"o": option.env_var})


def _format_required_if(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, ValuedOption) and option.required_if is not None:
        required_if = option.required_if
        result.split(phrase, lambda spec: _format_requirements(validator, required_if, result))


def _format_cluster_letters(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if option.cluster_letters:
        result.format(validator.config, phrase, {"s": option.cluster_letters})


def _format_fallback(option: Option, phrase: str, validator: OptionValidator, result: TerminalString) -> None:
    if isinstance(option, ParamOption) and option.fallback is not None:
        _format_value(option, phrase, validator.config, result, option.fallback)


def _format_value(
    option: Option, phrase: str, config: MessageConfig, result: TerminalString, value: Any
) -> None:
    """Format a default or fallback value, selecting the phrase alternative by type."""
    if callable(value):
        spec, alt = "v", 5
    elif isinstance(value, bool):
        spec, alt = "b", 0
    elif isinstance(value, str):
        spec, alt = "s", 1
    elif isinstance(value, (int, float)):
        spec, alt = "n", 2
    elif isinstance(option, StringsOption):
        spec, alt = "s", 3
    elif isinstance(option, NumbersOption):
        spec, alt = "n", 4
    else:
        spec, alt = "v", 5
    sep = config.connective(ConnectiveWord.array_sep)
    result.format(config, phrase, {spec: value}, FormattingFlags(alt=alt, sep=sep))


_HELP_ITEM_FUNCTIONS: Dict[HelpItem, HelpItemFunction] = {
    HelpItem.synopsis: _format_synopsis,
    HelpItem.negation: _format_negation,
    HelpItem.separator: _format_separator,
    HelpItem.param_count: _format_param_count,
    HelpItem.positional: _format_positional,
    HelpItem.append: _format_append,
    HelpItem.trim: _format_trim,
    HelpItem.case: _format_case,
    HelpItem.conv: _format_conv,
    HelpItem.enums: _format_enums,
    HelpItem.regex: _format_regex,
    HelpItem.range: _format_range,
    HelpItem.unique: _format_unique,
    HelpItem.limit: _format_limit,
    HelpItem.requires: _format_requires,
    HelpItem.required: _format_required,
    HelpItem.default: _format_default,
    HelpItem.deprecated: _format_deprecated,
    HelpItem.link: _format_link,
    HelpItem.env_var: _format_env_var,
    HelpItem.required_if: _format_required_if,
    HelpItem.cluster_letters: _format_cluster_letters,
    HelpItem.fallback: _format_fallback,
}


# Requirements.


def _format_requirements(
    validator: OptionValidator, requires: Requires, result: TerminalString, negate: bool = False
) -> None:
    """Format a requirement expression. Assumes that the options were validated."""
    config = validator.config
    if isinstance(requires, str):
        if negate:
            result.word(config.connective(ConnectiveWord.no))
        format_arg("o", validator.preferred_name(requires), config, result, FormattingFlags())
    elif isinstance(requires, RequiresNot):
        _format_requirements(validator, requires.item, result, not negate)
    elif isinstance(requires, (RequiresAll, RequiresOne)):
        # De Morgan: a negated conjunction is a disjunction of negations.
        if isinstance(requires, RequiresAll) == negate:
            op = config.connective(ConnectiveWord.or_)
        else:
            op = config.connective(ConnectiveWord.and_)
        _format_requirement_list(
            validator,
            requires.items,
            op,
            result,
            lambda item: _format_requirements(validator, item, result, negate),
        )
    elif isinstance(requires, Mapping):
        # The entries form a conjunction.
        op = config.connective(ConnectiveWord.or_ if negate else ConnectiveWord.and_)
        _format_requirement_list(
            validator,
            list(requires.items()),
            op,
            result,
            lambda entry: _format_required_value(validator, entry[0], entry[1], result, negate),
        )
    else:
        if negate:
            result.word(config.connective(ConnectiveWord.not_))
        format_arg("v", requires, config, result, FormattingFlags())


def _format_requirement_list(
    validator: OptionValidator,
    items: Sequence[Any],
    op: str,
    result: TerminalString,
    format_item: Callable[[Any], None],
) -> None:
    """Format items joined by a connective, in parentheses if there is more than one."""
    config = validator.config
    grouped = len(items) > 1
    if grouped:
        result.open(config.connective(ConnectiveWord.expr_open))
    for i, item in enumerate(items):
        format_item(item)
        if i < len(items) - 1:
            result.word(op)
    if grouped:
        result.close(config.connective(ConnectiveWord.expr_close))


def _format_required_value(
    validator: OptionValidator, key: str, value: Any, result: TerminalString, negate: bool
) -> None:
    config = validator.config
    # A value of None requires the option to be absent.
    if value is None and not negate:
        result.word(config.connective(ConnectiveWord.no))
    format_arg("o", validator.preferred_name(key), config, result, FormattingFlags())
    if value is not None:
        connective = ConnectiveWord.not_equals if negate else ConnectiveWord.equals
        option = validator.options.get(key)
        spec = _value_spec(option) if option is not None else "v"
        phrase = f"[%{spec}]" if option is not None and is_array(option) else f"%{spec}"
        sep = config.connective(ConnectiveWord.array_sep)
        result.word(config.connective(connective))
        result.format(config, phrase, {spec: value}, FormattingFlags(sep=sep))
