"""Validation of option definitions, and normalization of option values.

Definitions are checked once, before any argument is parsed. The same normalization
functions are used for values given on the command line, so a definition whose
default, example or fallback would be rejected at parse time is rejected here."""

from __future__ import annotations

import dataclasses
import math
import warnings
from typing import Any, Dict, List, Mapping, Sequence

from ._enums import ConnectiveWord, ErrorItem
from ._fmtlib import ErrorMessage, FormattingFlags, TerminalString, WarnMessage
from ._messages import error_message, format_message
from ._options import (
    BooleanOption,
    CommandOption,
    FlagOption,
    FunctionOption,
    MessageOption,
    NumberOption,
    NumbersOption,
    Option,
    Options,
    ParamOption,
    Range,
    Requires,
    RequiresAll,
    RequiresNot,
    RequiresOne,
    StringOption,
    StringsOption,
    ValuedOption,
    VersionOption,
    get_param_count,
    is_unknown_valued,
    visit_requirements,
)
from ._registry import NameRegistry, PositionalInfo, check_names
from ._similarity import NAMING_CONVENTIONS, find_similar_names, match_naming_rules
from ._warnings import OptkitWarning
from .conf._confstruct import ValidationFlags, ValidatorConfig

_CONVERSIONS = {
    "trunc": math.trunc,
    "floor": math.floor,
    "ceil": math.ceil,
    "round": lambda x: math.floor(x + 0.5),
}

_PRESENT = object()
"""Required value of a bare option key."""


@dataclasses.dataclass(frozen=True)
class ValidationResult:
    """The outcome of a successful validation."""

    warnings: WarnMessage
    """Non-fatal problems, in the order they were detected. Empty if there were none."""

    def emit_warnings(self, stacklevel: int = 2) -> None:
        """Forward each warning through :func:`warnings.warn`, as an
        :class:`optkit.OptkitWarning`."""
        for warning in self.warnings:
            text = WarnMessage([warning]).wrap(0, emit_styles=False).rstrip("\n")
            warnings.warn(text, category=OptkitWarning, stacklevel=stacklevel + 1)


@dataclasses.dataclass(frozen=True)
class _ValidationContext:
    config: ValidatorConfig
    options: Options
    flags: ValidationFlags
    warnings: WarnMessage
    visited: Dict[int, Options]
    """Nested option sets already validated, by identity. Values keep them alive."""
    prefix: str
    """Dotted key prefix of the nested option set."""


class OptionValidator:
    """Validates a set of option definitions, and normalizes option values.

    Args:
        options: The option definitions, in declaration order.
        config: Message configuration. Defaults to :class:`optkit.conf.ValidatorConfig`.
    """

    def __init__(self, options: Options, config: ValidatorConfig | None = None) -> None:
        self.options = options
        self.config = config if config is not None else ValidatorConfig()
        self.registry = NameRegistry(options)

    @property
    def names(self) -> Mapping[str, str]:
        """Option names mapped to option keys."""
        return self.registry.names

    @property
    def letters(self) -> Mapping[str, str]:
        """Cluster letters mapped to option keys."""
        return self.registry.letters

    @property
    def positional(self) -> PositionalInfo | None:
        return self.registry.positional

    def preferred_name(self, key: str) -> str:
        return self.registry.preferred_name(key)

    def validate(self, flags: ValidationFlags | None = None) -> ValidationResult | ErrorMessage:
        """Validate the option definitions, including nested command options.

        Returns:
            The validation result, with any warnings. If a definition is invalid, the
            error describing the first problem found is returned instead.
        """
        context = _ValidationContext(
            config=self.config,
            options=self.options,
            flags=flags if flags is not None else ValidationFlags(),
            warnings=WarnMessage(),
            visited={},
            prefix="",
        )
        try:
            _validate(context)
        except ErrorMessage as e:
            return e
        return ValidationResult(context.warnings)

    def normalize(self, option: Option, name: str, value: Any) -> Any:
        """Normalize an option value and check it against the option's constraints.

        Strings are trimmed and case-converted, numbers are converted, and sequences are
        normalized element-wise, deduplicated and checked against the limit. Values of
        other types are returned unchanged.

        Raises:
            ErrorMessage: If the value violates an enumeration, regex, range or limit
                constraint.
        """
        if isinstance(value, str):
            return _normalize_string(self.config, option, name, value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return _normalize_number(self.config, option, name, value)
        if isinstance(value, (list, tuple)):
            values = [self.normalize(option, name, v) for v in value]
            return _normalize_array(self.config, option, name, values)
        return value

    def similar_names(self, name: str) -> List[str]:
        """Names similar to a given one, most similar first."""
        return find_similar_names(name, self.registry.names, self.config.similarity_threshold)

    def unknown_option(self, name: str) -> ErrorMessage:
        """Create an error for an unknown option name, suggesting similar names."""
        similar = self.similar_names(name)
        if similar:
            sep = self.config.connective(ConnectiveWord.option_sep)
            return self.error(
                ErrorItem.unknown_option,
                {"o1": name, "o2": similar},
                FormattingFlags(alt=1, sep=sep),
            )
        return self.error(ErrorItem.unknown_option, {"o": name}, FormattingFlags(alt=0))

    def format(
        self,
        kind: ErrorItem,
        args: Mapping[str, Any] | None = None,
        flags: FormattingFlags | None = None,
    ) -> TerminalString:
        """Create a message for some kind of error or warning."""
        return format_message(self.config, kind, args, flags)

    def error(
        self,
        kind: ErrorItem,
        args: Mapping[str, Any] | None = None,
        flags: FormattingFlags | None = None,
    ) -> ErrorMessage:
        return error_message(self.config, kind, args, flags)


def _validate(context: _ValidationContext) -> None:
    config, prefix = context.config, context.prefix
    names: Dict[str, str] = {}
    letters: Dict[str, str] = {}
    positional = ""
    for key, option in context.options.items():
        check_names(config, names, letters, key, prefix + key, option)
        _validate_option(context, key, option)
        if isinstance(option, ParamOption) and option.positional:
            if positional:
                args = {"o1": prefix + key, "o2": prefix + positional}
                raise error_message(config, ErrorItem.duplicate_positional_option, args)
            positional = key
    if context.flags.detect_naming_issues:
        _detect_naming_issues(context, list(names))


def _validate_option(context: _ValidationContext, key: str, option: Option) -> None:
    config = context.config
    prefixed_key = context.prefix + key
    _validate_constraints(config, prefixed_key, option)
    if isinstance(option, ValuedOption):
        _validate_value(config, prefixed_key, option, option.default)
    if isinstance(option, ParamOption):
        _validate_value(config, prefixed_key, option, option.example)
        _validate_value(config, prefixed_key, option, option.fallback)
    lo, hi = get_param_count(option)
    if lo < hi and option.cluster_letters:
        context.warnings.append(
            format_message(config, ErrorItem.variadic_with_cluster_letter, {"o": prefixed_key})
        )
    if isinstance(option, ValuedOption):
        if option.requires is not None:
            _validate_requirements(context, key, option.requires)
        if option.required_if is not None:
            _validate_requirements(context, key, option.required_if)
    if isinstance(option, VersionOption) and option.version == "":
        raise error_message(config, ErrorItem.invalid_version_definition, {"o": prefixed_key})
    if isinstance(option, CommandOption):
        resolved = option.resolve_options()
        if resolved is not None and id(resolved) not in context.visited:
            context.visited[id(resolved)] = resolved
            _validate(dataclasses.replace(context, options=resolved, prefix=prefixed_key + "."))


def _validate_constraints(config: ValidatorConfig, key: str, option: Option) -> None:
    """Check the sanity of an option's constraint definitions."""

    def check_range(rng: Range, kind: ErrorItem, check_min: bool = False) -> None:
        lo, hi = rng
        # Comparisons with NaN are false.
        if not (lo < hi) or (check_min and lo < 0):
            sep = config.connective(ConnectiveWord.number_sep)
            raise error_message(config, kind, {"o": key, "n": rng}, FormattingFlags(sep=sep))

    enums = (
        option.enums
        if isinstance(option, (StringOption, StringsOption, NumberOption, NumbersOption))
        else None
    )
    truth = option.truth_names if isinstance(option, BooleanOption) else None
    falsity = option.falsity_names if isinstance(option, BooleanOption) else None
    if any(values is not None and not values for values in (enums, truth, falsity)):
        raise error_message(config, ErrorItem.empty_enums_definition, {"o": key})
    seen = set()
    for value in (*(enums or ()), *(truth or ()), *(falsity or ())):
        if value in seen:
            number = isinstance(option, (NumberOption, NumbersOption))
            args = {"o": key, "n" if number else "s": value}
            raise error_message(
                config, ErrorItem.duplicate_enum_value, args, FormattingFlags(alt=int(number))
            )
        seen.add(value)
    if isinstance(option, (NumberOption, NumbersOption)) and option.range is not None:
        check_range(option.range, ErrorItem.invalid_numeric_range)
    if isinstance(option, FunctionOption) and isinstance(option.param_count, tuple):
        check_range(option.param_count, ErrorItem.invalid_param_count, check_min=True)


def _validate_value(config: ValidatorConfig, key: str, option: Option, value: Any) -> None:
    """Check a default, example, fallback or required value against an option's
    constraints. Callables are evaluated lazily, so they are not checked."""

    def expect(val: Any, types: type | tuple, type_name: str) -> None:
        if not isinstance(val, types) or (isinstance(val, bool) and bool not in _as_tuple(types)):
            args = {"o": key, "v": val, "s": type_name}
            raise error_message(config, ErrorItem.incompatible_required_value, args)

    if value is None or callable(value):
        return
    if isinstance(option, (FlagOption, BooleanOption)):
        expect(value, bool, "boolean")
    elif isinstance(option, StringOption):
        expect(value, str, "string")
        _normalize_string(config, option, key, value)
    elif isinstance(option, NumberOption):
        expect(value, (int, float), "number")
        _normalize_number(config, option, key, value)
    elif isinstance(option, StringsOption):
        expect(value, (list, tuple), "array")
        values = []
        for val in value:
            expect(val, str, "string")
            values.append(_normalize_string(config, option, key, val))
        _normalize_array(config, option, key, values)
    elif isinstance(option, NumbersOption):
        expect(value, (list, tuple), "array")
        values = []
        for val in value:
            expect(val, (int, float), "number")
            values.append(_normalize_number(config, option, key, val))
        _normalize_array(config, option, key, values)


def _as_tuple(types: type | tuple) -> tuple:
    return types if isinstance(types, tuple) else (types,)


def _validate_requirements(context: _ValidationContext, key: str, requires: Requires) -> None:
    def validate_items(req: RequiresAll | RequiresOne) -> None:
        for item in req.items:
            _validate_requirements(context, key, item)

    def validate_values(req: Mapping[str, Any]) -> None:
        for required_key, required_value in req.items():
            _validate_requirement(context, key, required_key, required_value)

    def validate_not(req: RequiresNot) -> None:
        _validate_requirements(context, key, req.item)

    visit_requirements(
        requires,
        lambda required_key: _validate_requirement(context, key, required_key),
        validate_not,
        validate_items,
        validate_items,
        validate_values,
        # Callbacks are opaque.
        lambda _: None,
    )


def _validate_requirement(
    context: _ValidationContext, key: str, required_key: str, required_value: Any = _PRESENT
) -> None:
    """Check one option reference of a requirement: a bare key, or a mapping entry
    whose value of `None` requires the option to be absent.

    Neither form may refer to an option that is always required or has a default,
    since such an option is always present."""
    config = context.config
    prefixed_key = context.prefix + required_key
    if required_key == key:
        raise error_message(config, ErrorItem.invalid_self_requirement, {"o": prefixed_key})
    if required_key not in context.options:
        raise error_message(config, ErrorItem.unknown_required_option, {"o": prefixed_key})
    option = context.options[required_key]
    if isinstance(option, MessageOption):
        raise error_message(config, ErrorItem.invalid_required_option, {"o": prefixed_key})
    if required_value is _PRESENT or required_value is None:
        assert isinstance(option, ValuedOption)
        if option.required or option.default is not None:
            raise error_message(config, ErrorItem.invalid_required_value, {"o": prefixed_key})
        return
    if is_unknown_valued(option):
        raise error_message(config, ErrorItem.invalid_required_option, {"o": prefixed_key})
    _validate_value(config, prefixed_key, option, required_value)


def _detect_naming_issues(context: _ValidationContext, names: Sequence[str]) -> None:
    config = context.config
    prefix = context.prefix[:-1]  # without the trailing dot
    option_sep = config.connective(ConnectiveWord.option_sep)
    reported = set()
    for name in names:
        if name in reported:
            continue
        similar = find_similar_names(name, names, config.naming_threshold)
        if similar:
            args = {"o": prefix, "s1": name, "s2": similar}
            context.warnings.append(
                format_message(
                    config, ErrorItem.too_similar_option_names, args, FormattingFlags(sep=option_sep)
                )
            )
            reported.update(similar)
    string_sep = config.connective(ConnectiveWord.string_sep)
    for i, slot in enumerate(_names_in_each_slot(context.options)):
        if not slot:
            continue
        for matched in match_naming_rules(slot, NAMING_CONVENTIONS).values():
            # A category with more than one matching rule is mixed.
            if len(matched) > 1:
                items = [f"{rule}: {name}" for rule, name in matched.items()]
                args = {"o": prefix, "n": i, "s": items}
                context.warnings.append(
                    format_message(
                        config, ErrorItem.mixed_naming_convention, args, FormattingFlags(sep=string_sep)
                    )
                )


def _names_in_each_slot(options: Options) -> List[List[str]]:
    result: List[List[str]] = []
    for option in options.values():
        for i, name in enumerate(option.names):
            while len(result) <= i:
                result.append([])
            if name:
                result[i].append(name)
    return result


# Normalization.


def _normalize_string(config: ValidatorConfig, option: Option, name: str, value: str) -> str:
    if not isinstance(option, (StringOption, StringsOption)):
        return value
    if option.trim:
        value = value.strip()
    if option.case:
        value = value.lower() if option.case == "lower" else value.upper()
    if option.enums is not None and value not in option.enums:
        sep = config.connective(ConnectiveWord.string_sep)
        args = {"o": name, "s1": value, "s2": list(option.enums)}
        raise error_message(
            config, ErrorItem.enums_constraint_violation, args, FormattingFlags(alt=0, sep=sep)
        )
    if option.regex is not None and not option.regex.search(value):
        args = {"o": name, "s": value, "r": option.regex}
        raise error_message(config, ErrorItem.regex_constraint_violation, args)
    return value


def _normalize_number(config: ValidatorConfig, option: Option, name: str, value: float) -> float:
    if not isinstance(option, (NumberOption, NumbersOption)):
        return value
    if option.conv and math.isfinite(value):
        value = _CONVERSIONS[option.conv](value)
    if option.enums is not None and value not in option.enums:
        sep = config.connective(ConnectiveWord.number_sep)
        args = {"o": name, "n1": value, "n2": list(option.enums)}
        raise error_message(
            config, ErrorItem.enums_constraint_violation, args, FormattingFlags(alt=1, sep=sep)
        )
    rng = option.range
    # Comparisons with NaN are false.
    if rng is not None and not (rng[0] <= value <= rng[1]):
        sep = config.connective(ConnectiveWord.number_sep)
        args = {"o": name, "n1": value, "n2": rng}
        raise error_message(
            config, ErrorItem.range_constraint_violation, args, FormattingFlags(sep=sep)
        )
    return value


def _normalize_array(config: ValidatorConfig, option: Option, name: str, value: List[Any]) -> List[Any]:
    if not isinstance(option, (StringsOption, NumbersOption)):
        return value
    if option.unique:
        value = list(dict.fromkeys(value))
    if option.limit is not None and len(value) > option.limit:
        args = {"o": name, "n1": len(value), "n2": option.limit}
        raise error_message(config, ErrorItem.limit_constraint_violation, args)
    return value
