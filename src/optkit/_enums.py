"""Identifiers for diagnostics, help description items and connective words."""

import enum


class ErrorItem(enum.IntEnum):
    """Kinds of error and warning messages."""

    parse_error = enum.auto()
    unknown_option = enum.auto()
    unsatisfied_requirement = enum.auto()
    missing_required_option = enum.auto()
    missing_parameter = enum.auto()
    empty_positional_marker = enum.auto()
    unnamed_option = enum.auto()
    invalid_option_name = enum.auto()
    invalid_version_definition = enum.auto()
    invalid_self_requirement = enum.auto()
    unknown_required_option = enum.auto()
    invalid_required_option = enum.auto()
    invalid_required_value = enum.auto()
    incompatible_required_value = enum.auto()
    empty_enums_definition = enum.auto()
    duplicate_option_name = enum.auto()
    duplicate_positional_option = enum.auto()
    duplicate_enum_value = enum.auto()
    enums_constraint_violation = enum.auto()
    regex_constraint_violation = enum.auto()
    range_constraint_violation = enum.auto()
    limit_constraint_violation = enum.auto()
    deprecated_option = enum.auto()
    unsatisfied_cond_requirement = enum.auto()
    duplicate_cluster_letter = enum.auto()
    invalid_cluster_option = enum.auto()
    invalid_cluster_letter = enum.auto()
    too_similar_option_names = enum.auto()
    mixed_naming_convention = enum.auto()
    invalid_numeric_range = enum.auto()
    invalid_param_count = enum.auto()
    variadic_with_cluster_letter = enum.auto()


class HelpItem(enum.IntEnum):
    """Items that can be shown in an option's description, in their default order."""

    synopsis = enum.auto()
    negation = enum.auto()
    separator = enum.auto()
    param_count = enum.auto()
    positional = enum.auto()
    append = enum.auto()
    trim = enum.auto()
    case = enum.auto()
    conv = enum.auto()
    enums = enum.auto()
    regex = enum.auto()
    range = enum.auto()
    unique = enum.auto()
    limit = enum.auto()
    requires = enum.auto()
    required = enum.auto()
    default = enum.auto()
    deprecated = enum.auto()
    link = enum.auto()
    env_var = enum.auto()
    required_if = enum.auto()
    cluster_letters = enum.auto()
    fallback = enum.auto()


class ConnectiveWord(enum.IntEnum):
    """Words and delimiters used to compose messages."""

    and_ = enum.auto()
    or_ = enum.auto()
    not_ = enum.auto()
    no = enum.auto()
    equals = enum.auto()
    not_equals = enum.auto()
    option_alt = enum.auto()
    option_sep = enum.auto()
    string_sep = enum.auto()
    number_sep = enum.auto()
    string_quote = enum.auto()
    array_sep = enum.auto()
    array_open = enum.auto()
    array_close = enum.auto()
    object_sep = enum.auto()
    object_open = enum.auto()
    object_close = enum.auto()
    value_sep = enum.auto()
    value_open = enum.auto()
    value_close = enum.auto()
    expr_open = enum.auto()
    expr_close = enum.auto()
