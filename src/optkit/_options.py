"""Option descriptors and requirement expressions.

Each option kind is a frozen dataclass. Attributes shared by several kinds live in
base classes, which double as the categories used by the validator and formatter:

- :class:`MessageOption`: niladic options that produce a message (help, version).
- :class:`ValuedOption`: options that have a value, and may be required.
- :class:`ParamOption`: valued options that take parameters from the command line.
"""

from __future__ import annotations

import dataclasses
import math
import re
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Mapping,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)

from typing_extensions import Literal, TypeAlias

from ._sequences import Style

if TYPE_CHECKING:
    from .conf._confstruct import FormatterConfig, HelpSection

T = TypeVar("T")

Range: TypeAlias = Tuple[float, float]
"""A closed numeric interval. The upper bound may be infinite."""


# Requirement expressions.


@dataclasses.dataclass(frozen=True)
class RequiresAll:
    """Requires all of the items to be satisfied."""

    items: Tuple["Requires", ...]


@dataclasses.dataclass(frozen=True)
class RequiresOne:
    """Requires at least one of the items to be satisfied."""

    items: Tuple["Requires", ...]


@dataclasses.dataclass(frozen=True)
class RequiresNot:
    """Requires the item not to be satisfied."""

    item: "Requires"


RequirementCallback: TypeAlias = Callable[[Mapping[str, Any]], bool]
"""A predicate over the parsed values. Opaque to validation."""

Requires: TypeAlias = Union[
    str, Mapping[str, Any], RequiresAll, RequiresOne, RequiresNot, RequirementCallback
]
"""A requirement expression.

- A bare option key requires the option to be present.
- A mapping from option keys to values requires each option to have that value, or
  to be absent if the value is `None`.
- The `RequiresAll`, `RequiresOne` and `RequiresNot` nodes combine sub-expressions.
- A callable is evaluated against the parsed values.
"""


def all_of(*items: Requires) -> RequiresAll:
    """Create a requirement that is satisfied when all of the items are."""
    return RequiresAll(items)


def one_of(*items: Requires) -> RequiresOne:
    """Create a requirement that is satisfied when at least one of the items is."""
    return RequiresOne(items)


def not_(item: Requires) -> RequiresNot:
    """Create a requirement that is satisfied when the item is not."""
    return RequiresNot(item)


def visit_requirements(
    requires: Requires,
    on_key: Callable[[str], T],
    on_not: Callable[[RequiresNot], T],
    on_all: Callable[[RequiresAll], T],
    on_one: Callable[[RequiresOne], T],
    on_values: Callable[[Mapping[str, Any]], T],
    on_callback: Callable[[RequirementCallback], T],
) -> T:
    """Dispatch on the shape of a requirement expression."""
    if isinstance(requires, str):
        return on_key(requires)
    if isinstance(requires, RequiresNot):
        return on_not(requires)
    if isinstance(requires, RequiresAll):
        return on_all(requires)
    if isinstance(requires, RequiresOne):
        return on_one(requires)
    if isinstance(requires, Mapping):
        return on_values(requires)
    return on_callback(requires)


# Option descriptors.


@dataclasses.dataclass(frozen=True)
class OptionStyles:
    """Styles used to display an option in help messages."""

    names: Style | None = None
    param: Style | None = None
    descr: Style | None = None


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class Option:
    """Attributes common to every option kind."""

    kind: ClassVar[str] = ""

    names: Tuple[str | None, ...] = ()
    """Option names. Absent entries keep the slot, so that names align in columns."""
    desc: str | None = None
    """Synopsis shown in help messages. May contain paragraphs and list items."""
    group: str | None = None
    """Group label in help messages. Options without one go to the default group."""
    hide: bool = False
    """Whether the option is omitted from help messages."""
    styles: OptionStyles = OptionStyles()
    deprecated: str | None = None
    """A deprecation notice."""
    link: str | None = None
    """A URL with more information about the option."""
    cluster_letters: str | None = None
    """Letters that can be combined behind a single dash, e.g. `-abc`."""


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class MessageOption(Option):
    """An option that produces a message instead of a value."""


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class HelpOption(MessageOption):
    kind: ClassVar[str] = "help"

    format: FormatterConfig | None = None
    """Formatter configuration for this option's help message."""
    sections: Sequence[HelpSection] | None = None
    """Help sections. Defaults to a single groups section."""
    use_filter: bool = False
    """Whether remaining arguments filter the options shown."""
    use_nested: bool = False
    """Whether the next argument may name a command whose help is shown instead.
    Read by the argument parser; the formatter always renders the given options."""


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class VersionOption(MessageOption):
    kind: ClassVar[str] = "version"

    version: str | None = None
    resolve: Callable[[], str] | None = None
    """Resolves the version lazily, when `version` is not given. Called by the
    argument parser when the option is specified; validation does not call it."""


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class ValuedOption(Option):
    """An option whose value ends up in the parse result."""

    required: bool = False
    default: Any = None
    """A default value, or a callable that computes it lazily."""
    requires: Requires | None = None
    """Options that must be present (or absent) when this option is present."""
    required_if: Requires | None = None
    """A condition under which this option is required."""
    env_var: str | None = None
    """An environment variable to read the value from, when absent on the command line."""


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class CommandOption(ValuedOption):
    kind: ClassVar[str] = "command"

    options: Mapping[str, Option] | Callable[[], Mapping[str, Option]] | None = None
    """The nested option set, or a callable that returns it."""

    def resolve_options(self) -> Mapping[str, Option] | None:
        options = self.options
        return options() if callable(options) else options


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class FlagOption(ValuedOption):
    kind: ClassVar[str] = "flag"

    negation_names: Tuple[str, ...] | None = None
    """Names that set the flag to false."""


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class ParamOption(ValuedOption):
    """An option that takes parameters."""

    param_name: str | None = None
    """Parameter placeholder in help messages."""
    positional: bool | str = False
    """Whether the option accepts positional arguments, or a marker string after which
    all arguments are positional."""
    example: Any = None
    """An example value, shown as the parameter placeholder in help messages."""
    fallback: Any = None
    """Value used when the option is given without parameters."""


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class FunctionOption(ParamOption):
    kind: ClassVar[str] = "function"

    param_count: int | Range = 0
    """Number of parameters: exact, negative for any number, or a `(min, max)` pair."""


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class BooleanOption(ParamOption):
    kind: ClassVar[str] = "boolean"

    truth_names: Tuple[str, ...] | None = None
    falsity_names: Tuple[str, ...] | None = None
    case_sensitive: bool = False


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class _StringConstraints:
    enums: Tuple[str, ...] | None = None
    regex: re.Pattern | None = None
    trim: bool = False
    case: Literal["lower", "upper"] | None = None


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class _NumberConstraints:
    enums: Tuple[float, ...] | None = None
    range: Range | None = None
    conv: Literal["trunc", "floor", "ceil", "round"] | None = None


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class _ArrayConstraints:
    unique: bool = False
    append: bool = False
    """Whether repeated occurrences append to the previous values."""
    separator: str | re.Pattern | None = None
    """Splits a single parameter into several values."""
    limit: int | None = None
    """Maximum number of values."""


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class StringOption(_StringConstraints, ParamOption):
    kind: ClassVar[str] = "string"


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class NumberOption(_NumberConstraints, ParamOption):
    kind: ClassVar[str] = "number"


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class StringsOption(_ArrayConstraints, _StringConstraints, ParamOption):
    kind: ClassVar[str] = "strings"


@dataclasses.dataclass(frozen=True, kw_only=True, eq=False)
class NumbersOption(_ArrayConstraints, _NumberConstraints, ParamOption):
    kind: ClassVar[str] = "numbers"


Options: TypeAlias = Mapping[str, Option]
"""An option set, keyed by option key, in declaration order."""

ArrayOption: TypeAlias = Union[StringsOption, NumbersOption]

VALUE_TYPE_NAMES: Mapping[type, str] = {
    FlagOption: "boolean",
    BooleanOption: "boolean",
    StringOption: "string",
    NumberOption: "number",
    StringsOption: "array",
    NumbersOption: "array",
}
"""Names of the value types, as shown in messages."""


def is_array(option: Option) -> bool:
    return isinstance(option, (StringsOption, NumbersOption))


def is_string(option: Option) -> bool:
    return isinstance(option, (StringOption, StringsOption))


def is_number(option: Option) -> bool:
    return isinstance(option, (NumberOption, NumbersOption))


def is_unknown_valued(option: Option) -> bool:
    """Function and command options have values of unknown type."""
    return isinstance(option, (FunctionOption, CommandOption))


def get_option_names(option: Option) -> list[str]:
    """Get every name of an option: its names, negation names and positional marker."""
    names = [name for name in option.names if name]
    if isinstance(option, FlagOption) and option.negation_names:
        names.extend(name for name in option.negation_names if name)
    if isinstance(option, ParamOption) and isinstance(option.positional, str):
        if option.positional:
            names.append(option.positional)
    return names


def get_param_count(option: Option) -> Range:
    """Get the minimum and maximum number of parameters of an option."""
    if not isinstance(option, ParamOption):
        return (0, 0)
    if isinstance(option, FunctionOption):
        count = option.param_count
        if isinstance(count, tuple):
            return count
        return (0, math.inf) if count < 0 else (count, count)
    lo = 0 if option.fallback is not None else 1
    hi = math.inf if is_array(option) and not getattr(option, "separator", None) else 1
    return (lo, hi)
