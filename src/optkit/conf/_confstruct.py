from __future__ import annotations

import dataclasses
import re
from typing import ClassVar, Dict, Mapping, Sequence, Tuple, Union

from typing_extensions import Literal, TypeAlias

from .._enums import ErrorItem, HelpItem
from .._fmtlib import MessageConfig
from .._options import OptionStyles
from .._sequences import Style, style, tf

DEFAULT_ERROR_PHRASES: Dict[ErrorItem, str] = {
    ErrorItem.parse_error: "Did you mean to specify an option name instead of %o?(| Similar names are: %o1.)",
    ErrorItem.unknown_option: "Unknown option (%o|%o1).(| Similar names are: %o2.)",
    ErrorItem.unsatisfied_requirement: "Option %o requires %p.",
    ErrorItem.missing_required_option: "Option %o is required.",
    ErrorItem.missing_parameter: "Missing parameter to %o.",
    ErrorItem.empty_positional_marker: "Option %o has empty positional marker.",
    ErrorItem.unnamed_option: "Non-positional option %o has no name.",
    ErrorItem.invalid_option_name: "Option %o has invalid name %s.",
    ErrorItem.invalid_version_definition: "Option %o has empty version.",
    ErrorItem.invalid_self_requirement: "Option %o requires itself.",
    ErrorItem.unknown_required_option: "Unknown option %o in requirement.",
    ErrorItem.invalid_required_option: "Invalid option %o in requirement.",
    ErrorItem.invalid_required_value: "Invalid required value for option %o. Option is always required or has a default value.",
    ErrorItem.incompatible_required_value: "Incompatible required value %v for option %o. Should be of type %s.",
    ErrorItem.empty_enums_definition: "Option %o has zero-length enumeration.",
    ErrorItem.duplicate_option_name: "Option %o has duplicate name %s.",
    ErrorItem.duplicate_positional_option: "Duplicate positional option %o1: previous was %o2.",
    ErrorItem.duplicate_enum_value: "Option %o has duplicate enumerator (%s|%n).",
    ErrorItem.enums_constraint_violation: "Invalid parameter to %o: (%s1|%n1). Possible values are {(%s2|%n2)}.",
    ErrorItem.regex_constraint_violation: "Invalid parameter to %o: %s. Value must match the regex %r.",
    ErrorItem.range_constraint_violation: "Invalid parameter to %o: %n1. Value must be in the range [%n2].",
    ErrorItem.limit_constraint_violation: "Option %o has too many values (%n1). Should have at most %n2.",
    ErrorItem.deprecated_option: "Option %o is deprecated and may be removed in future releases.",
    ErrorItem.unsatisfied_cond_requirement: "Option %o is required if %p.",
    ErrorItem.duplicate_cluster_letter: "Option %o has duplicate cluster letter %s.",
    ErrorItem.invalid_cluster_option: "Option letter %o must be the last in a cluster.",
    ErrorItem.invalid_cluster_letter: "Option %o has invalid cluster letter %s.",
    ErrorItem.too_similar_option_names: "%o: Option name %s1 has too similar names: %s2.",
    ErrorItem.mixed_naming_convention: "%o: Name slot %n has mixed naming conventions: %s.",
    ErrorItem.invalid_numeric_range: "Option %o has invalid numeric range [%n].",
    ErrorItem.invalid_param_count: "Option %o has invalid parameter count [%n].",
    ErrorItem.variadic_with_cluster_letter: "Variadic option %o may only appear as the last option in a cluster.",
}

DEFAULT_HELP_PHRASES: Dict[HelpItem, str] = {
    HelpItem.synopsis: "%t",
    HelpItem.negation: "Can be negated with %o.",
    HelpItem.separator: "Values are delimited by (%s|%r).",
    HelpItem.param_count: "Accepts (multiple|%n|at most %n|at least %n|between %n) parameters.",
    HelpItem.positional: "Accepts positional parameters(| that may be preceded by %o).",
    HelpItem.append: "May be specified multiple times.",
    HelpItem.trim: "Values will be trimmed.",
    HelpItem.case: "Values will be converted to (lowercase|uppercase).",
    HelpItem.conv: "Values will be converted with math.%t.",
    HelpItem.enums: "Values must be one of {(%s|%n)}.",
    HelpItem.regex: "Values must match the regex %r.",
    HelpItem.range: "Values must be in the range [%n].",
    HelpItem.unique: "Duplicate values will be removed.",
    HelpItem.limit: "Value count is limited to %n.",
    HelpItem.requires: "Requires %p.",
    HelpItem.required: "Always required.",
    HelpItem.default: "Defaults to (%b|%s|%n|[%s]|[%n]|%v).",
    HelpItem.deprecated: "Deprecated for %t.",
    HelpItem.link: "Refer to %u for details.",
    HelpItem.env_var: "Can be specified through the %o environment variable.",
    HelpItem.required_if: "Required if %p.",
    HelpItem.cluster_letters: "Can be clustered with %s.",
    HelpItem.fallback: "Falls back to (%b|%s|%n|[%s]|[%n]|%v) if specified without parameter.",
}


@dataclasses.dataclass(frozen=True)
class ValidatorConfig(MessageConfig):
    """Configuration for :class:`optkit.OptionValidator`.

    Phrases and connective words that are not given fall back to the defaults, one
    entry at a time."""

    phrases: Mapping[ErrorItem, str] = dataclasses.field(default_factory=dict)
    """Phrase templates for errors and warnings, keyed by kind."""
    similarity_threshold: float = 0.6
    """Minimum similarity of the names suggested for an unknown option."""
    naming_threshold: float = 0.8
    """Minimum similarity of two declared names to be reported as too similar."""

    def phrase(self, kind: ErrorItem) -> str:
        return self.phrases.get(kind, DEFAULT_ERROR_PHRASES[kind])


@dataclasses.dataclass(frozen=True)
class ValidationFlags:
    detect_naming_issues: bool = False
    """Whether to warn about similar option names and mixed naming conventions."""


@dataclasses.dataclass(frozen=True)
class ColumnConfig:
    """Layout of one column of help entries: names, parameter or description."""

    align: Literal["left", "right", "slot"] = "left"
    """Text alignment. Only the names column accepts `"slot"`, which aligns each name
    slot separately."""
    indent: int = 2
    """Indentation level, relative to the end of the previous column unless
    `absolute` is set. Negative values are allowed in relative columns."""
    breaks: int = 0
    """Line breaks inserted before each entry in this column."""
    hidden: bool = False
    absolute: bool = False
    """Whether `indent` is relative to the beginning of the line. Ignored by the
    names column."""

    def __post_init__(self) -> None:
        assert self.align in ("left", "right", "slot"), f"Invalid alignment: {self.align}"


@dataclasses.dataclass(frozen=True)
class FormatterConfig:
    """Configuration for :class:`optkit.HelpFormatter`."""

    names: ColumnConfig = ColumnConfig()
    param: ColumnConfig = ColumnConfig()
    descr: ColumnConfig = ColumnConfig()
    items: Tuple[HelpItem, ...] = tuple(HelpItem)
    """Description items to render, in order."""
    phrases: Mapping[HelpItem, str] = dataclasses.field(default_factory=dict)
    """Phrase templates of the description items. Missing entries use the defaults.

    Items with a value place it with a format specifier such as `%s`. Items with
    alternatives group them in parentheses, e.g. `(lowercase|uppercase)`."""
    filters: Tuple[re.Pattern, ...] = ()
    """Only options whose names, synopsis or environment variable match one of
    these patterns are shown. No filters means all options are shown."""
    styles: OptionStyles = OptionStyles()
    """Styles of the help columns. An option's own styles take precedence; unset
    columns use the message styles of the validator."""

    def phrase(self, item: HelpItem) -> str:
        return self.phrases.get(item, DEFAULT_HELP_PHRASES[item])


# Help sections.


@dataclasses.dataclass(frozen=True)
class HelpText:
    """A section with free text."""

    kind: ClassVar[str] = "text"

    text: str | None = None
    """Section content. May contain inline styles."""
    title: str | None = None
    """Section heading. May contain inline styles."""
    indent: int = 0
    breaks: int | None = None
    """Line breaks before the section. Defaults to zero for the first section, or two
    otherwise."""
    no_wrap: bool = False
    """Whether the title and text are kept as single words, not split."""
    style: Style | None = None
    """Style of the heading. Defaults to bold."""


@dataclasses.dataclass(frozen=True)
class HelpUsage:
    """A section with the usage line of the program."""

    kind: ClassVar[str] = "usage"

    title: str | None = None
    indent: int = 0
    breaks: int | None = None
    no_wrap: bool = False
    style: Style | None = None
    filter: Tuple[str, ...] | None = None
    """Keys of the options to list, in that order. All visible options are listed if
    not given."""
    exclude: bool = False
    """Whether the filter lists options to leave out instead."""
    required: Tuple[str, ...] = ()
    """Keys of options to show as required, when listed by the filter."""
    comment: str | None = None
    """Text appended to the usage line."""


@dataclasses.dataclass(frozen=True)
class HelpGroups:
    """A section with the help entries of each option group."""

    kind: ClassVar[str] = "groups"

    title: str | None = None
    """Heading of the default group. Other groups are headed by their names."""
    breaks: int | None = None
    no_wrap: bool = False
    style: Style | None = None
    phrase: str | None = None
    """Phrase template for group headings, where `%t` is the group name."""
    filter: Tuple[str, ...] | None = None
    """Names of the groups to include."""
    exclude: bool = False
    """Whether the filter lists groups to leave out instead."""


HelpSection: TypeAlias = Union[HelpText, HelpUsage, HelpGroups]

DEFAULT_SECTIONS: Sequence[HelpSection] = (HelpGroups(),)

HEADING_STYLE: Style = style(tf.bold)
