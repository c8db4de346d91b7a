import math
import re
from typing import Mapping

from optkit import (
    BooleanOption,
    CommandOption,
    FlagOption,
    FunctionOption,
    HelpFormatter,
    HelpItem,
    NumberOption,
    NumbersOption,
    Option,
    OptionStyles,
    OptionValidator,
    StringOption,
    StringsOption,
    fg,
    style,
    tf,
)
from optkit.conf import ColumnConfig, FormatterConfig, import_formatter_config


def _help(options: Mapping[str, Option], config: FormatterConfig | None = None) -> str:
    formatter = HelpFormatter(OptionValidator(options), config)
    return formatter.format_help().wrap(0, emit_styles=False)


def _descr(option: Option, *items: HelpItem) -> str:
    """Render only the description of an option."""
    config = FormatterConfig(
        names=ColumnConfig(hidden=True),
        param=ColumnConfig(hidden=True),
        descr=ColumnConfig(absolute=True, indent=0),
        items=items if items else tuple(HelpItem),
    )
    return _help({"opt": option}, config)


def test_names_only() -> None:
    assert _help({"flag": FlagOption(names=("-f", "--flag"))}) == "  -f, --flag\n"


def test_columns() -> None:
    options = {
        "flag": FlagOption(names=("-f", "--flag"), desc="A flag."),
        "str": StringOption(names=("-s", "--str"), desc="A string.", default="x"),
    }
    assert _help(options) == (
        "  -f, --flag            A flag.\n"
        "  -s, --str   <string>  A string. Defaults to 'x'.\n"
    )


def test_wrapped_description() -> None:
    options = {"flag": FlagOption(names=("-f",), desc="One two three four five.")}
    formatter = HelpFormatter(OptionValidator(options))
    assert formatter.format_help().wrap(20, emit_styles=False) == (
        "  -f    One two\n"
        "        three four\n"
        "        five.\n"
    )


def test_hidden_options() -> None:
    options = {
        "flag": FlagOption(names=("-f",)),
        "secret": FlagOption(names=("--secret-option",), hide=True),
    }
    assert _help(options) == "  -f\n"


def test_slotted_names() -> None:
    options = {
        "a": FlagOption(names=("-a", "--all")),
        "b": FlagOption(names=(None, "--bee")),
    }
    config = FormatterConfig(names=ColumnConfig(align="slot"))
    assert _help(options, config) == "  -a, --all\n      --bee\n"
    # Without slots, the remaining names are packed to the left.
    assert _help(options) == "  -a, --all\n  --bee\n"


def test_right_aligned_names() -> None:
    options = {
        "a": FlagOption(names=("-a", "--all")),
        "b": FlagOption(names=("-b",)),
    }
    config = FormatterConfig(names=ColumnConfig(align="right"))
    assert _help(options, config) == "  -a, --all\n         -b\n"


def test_right_aligned_params() -> None:
    options = {
        "s": StringOption(names=("-s",)),
        "n": NumberOption(names=("-n",), param_name="N"),
    }
    config = FormatterConfig(param=ColumnConfig(align="right"))
    assert _help(options, config) == "  -s  <string>\n  -n       <N>\n"


def test_hidden_names_column() -> None:
    options = {"s": StringOption(names=("-s",), desc="Text.")}
    config = FormatterConfig(names=ColumnConfig(hidden=True))
    assert _help(options, config) == "    <string>  Text.\n"


def test_absolute_description_column() -> None:
    options = {"s": StringOption(names=("-s",), desc="Text.")}
    config = FormatterConfig(descr=ColumnConfig(absolute=True, indent=20))
    assert _help(options, config) == "  -s  <string>" + " " * 6 + "Text.\n"


def test_line_breaks_before_columns() -> None:
    options = {"s": StringOption(names=("-s",), desc="Text.")}
    config = FormatterConfig(descr=ColumnConfig(breaks=1, absolute=True, indent=4))
    assert _help(options, config) == "  -s  <string>\n    Text.\n"


def test_parameters() -> None:
    options = {
        "cmd": CommandOption(names=("cmd",)),
        "fn": FunctionOption(names=("-f",), param_count=(0, 2)),
        "fn2": FunctionOption(names=("-g",), param_count=1, param_name="<arg>"),
        "strs": StringsOption(names=("-s",), fallback=[]),
        "bool": BooleanOption(names=("-b",)),
    }
    config = FormatterConfig(items=())
    assert _help(options, config) == (
        "  cmd  ...\n"
        "  -f   [<param>...]\n"
        "  -g   <arg>\n"
        "  -s   [<strings>...]\n"
        "  -b   <boolean>\n"
    )


def test_examples() -> None:
    options = {
        "s": StringOption(names=("-s",), example="abc"),
        "n": NumbersOption(names=("-n",), example=[1, 2]),
        "d": StringsOption(names=("-d",), separator=",", example=["a", "b"]),
    }
    config = FormatterConfig(items=())
    assert _help(options, config) == (
        "  -s  'abc'\n"
        "  -n  1 2\n"
        "  -d  'a,b'\n"
    )


def test_filters() -> None:
    options = {
        "flag": FlagOption(names=("-f",), desc="Some flag."),
        "str": StringOption(names=("--str",), desc="A string value.", env_var="STR_VALUE"),
    }
    config = FormatterConfig(items=(HelpItem.synopsis,), filters=(re.compile("string", re.I),))
    assert _help(options, config) == "  --str  <string>  A string value.\n"
    config = FormatterConfig(items=(HelpItem.synopsis,), filters=(re.compile("_VALUE"),))
    assert _help(options, config) == "  --str  <string>  A string value.\n"


def test_styles() -> None:
    options = {
        "flag": FlagOption(
            names=("-f",),
            desc="Flag.",
            styles=OptionStyles(names=style(fg.red), descr=style(fg.green)),
        ),
    }
    config = FormatterConfig(items=(HelpItem.synopsis,))
    formatter = HelpFormatter(OptionValidator(options), config)
    assert formatter.format_help().wrap(0, emit_styles=True) == (
        "\x1b[3G\x1b[31m-f\x1b[0m\x1b[9G\x1b[32mFlag.\x1b[0m\n\x1b[0m"
    )


def test_column_styles() -> None:
    imported = import_formatter_config(
        {"names": {"style": "bold"}, "descr": {"style": "green"}, "items": ["synopsis"]}
    )
    options = {
        "f": FlagOption(names=("-f",), desc="Flag."),
        # The option's own styles take precedence over the column styles.
        "g": FlagOption(names=("-g",), desc="Gee.", styles=OptionStyles(names=style(fg.red))),
    }
    formatter = HelpFormatter(OptionValidator(options), imported.format)
    assert formatter.format_help().wrap(0, emit_styles=True) == (
        "\x1b[3G\x1b[1m-f\x1b[0m\x1b[9G\x1b[32mFlag.\x1b[0m\n"
        "\x1b[3G\x1b[31m-g\x1b[0m\x1b[9G\x1b[32mGee.\x1b[0m\n\x1b[0m"
    )


def test_param_column_style() -> None:
    config = FormatterConfig(items=(), styles=OptionStyles(param=style(tf.italic)))
    options = {"s": StringOption(names=("-s",))}
    formatter = HelpFormatter(OptionValidator(options), config)
    assert formatter.format_help().wrap(0, emit_styles=True) == (
        "\x1b[3G\x1b[95m-s\x1b[0m\x1b[7G\x1b[3m<string>\x1b[0m\n\x1b[0m"
    )


def test_formatting_is_repeatable() -> None:
    options = {
        "flag": FlagOption(names=("-f", "--flag"), desc="A flag.", requires="str"),
        "str": StringOption(names=("-s", "--str"), desc="A string.", enums=("x", "y")),
    }
    validator = OptionValidator(options)
    first = HelpFormatter(validator).format_help()
    second = HelpFormatter(validator).format_help()
    for width in (0, 20):
        assert first.wrap(width, emit_styles=True) == second.wrap(width, emit_styles=True)
        assert first.wrap(width, emit_styles=False) == first.wrap(width, emit_styles=False)


def test_groups() -> None:
    options = {
        "a": FlagOption(names=("-a",)),
        "b": FlagOption(names=("--bee",), group="Other"),
    }
    formatter = HelpFormatter(OptionValidator(options))
    groups = formatter.format_groups()
    assert list(groups) == ["", "Other"]
    assert groups[""].wrap(0, emit_styles=False) == "  -a\n"
    other = formatter.format_group("Other")
    assert other is not None
    assert other.wrap(0, emit_styles=False) == "  --bee\n"
    assert formatter.format_group("Missing") is None


def test_help_without_default_group() -> None:
    options = {"a": FlagOption(names=("-a",), group="Other")}
    assert _help(options) == ""


def test_synopsis_paragraphs() -> None:
    option = StringOption(names=("-s",), desc="Some text.\n\n- item one\n- item two")
    assert _descr(option, HelpItem.synopsis) == "Some text.\n\n- item one\n- item two\n"


def test_default_items() -> None:
    option = StringOption(names=("-s",), desc="A string.", enums=("a",), required=True)
    assert _descr(option) == "A string. Values must be one of {'a'}. Always required.\n"


def test_custom_phrases() -> None:
    config = FormatterConfig(
        names=ColumnConfig(hidden=True),
        param=ColumnConfig(hidden=True),
        descr=ColumnConfig(absolute=True, indent=0),
        items=(HelpItem.synopsis, HelpItem.default),
        phrases={HelpItem.synopsis: "Synopsis: %t", HelpItem.default: "(%b|[%s])"},
    )
    options = {"f": FlagOption(names=("-f",), desc="Text.", default=True)}
    assert _help(options, config) == "Synopsis: Text. True\n"


def test_empty_description() -> None:
    assert _descr(StringOption(names=("-s",))) == "\n"


def test_negation_and_separator() -> None:
    option = FlagOption(names=("-f",), negation_names=("--no-f",))
    assert _descr(option, HelpItem.negation) == "Can be negated with --no-f.\n"
    option = StringsOption(names=("-s",), separator=",")
    assert _descr(option, HelpItem.separator) == "Values are delimited by ','.\n"
    option = StringsOption(names=("-s",), separator=re.compile(r"\s*,\s*"))
    assert _descr(option, HelpItem.separator) == "Values are delimited by \\s*,\\s*.\n"


def test_param_count() -> None:
    def count(option: Option) -> str:
        return _descr(option, HelpItem.param_count)

    assert count(StringsOption(names=("-s",))) == "Accepts multiple parameters.\n"
    assert count(FunctionOption(names=("-f",), param_count=2)) == "Accepts 2 parameters.\n"
    assert count(FunctionOption(names=("-f",), param_count=-1)) == "Accepts multiple parameters.\n"
    assert count(FunctionOption(names=("-f",), param_count=(0, 3))) == "Accepts at most 3 parameters.\n"
    assert (
        count(FunctionOption(names=("-f",), param_count=(2, math.inf)))
        == "Accepts at least 2 parameters.\n"
    )
    assert (
        count(FunctionOption(names=("-f",), param_count=(1, 3)))
        == "Accepts between 1 and 3 parameters.\n"
    )
    assert count(StringOption(names=("-s",))) == "\n"


def test_positional() -> None:
    option = StringOption(positional=True)
    assert _descr(option, HelpItem.positional) == "Accepts positional parameters.\n"
    option = StringOption(names=("-s",), positional="--")
    assert (
        _descr(option, HelpItem.positional)
        == "Accepts positional parameters that may be preceded by --.\n"
    )


def test_string_constraints() -> None:
    option = StringsOption(
        names=("-s",),
        append=True,
        trim=True,
        case="upper",
        enums=("A", "B"),
        regex=re.compile("^[AB]$"),
        unique=True,
        limit=3,
    )
    assert _descr(option) == (
        "Accepts multiple parameters. May be specified multiple times."
        " Values will be trimmed. Values will be converted to uppercase."
        " Values must be one of {'A', 'B'}. Values must match the regex ^[AB]$."
        " Duplicate values will be removed. Value count is limited to 3.\n"
    )


def test_number_constraints() -> None:
    option = NumberOption(names=("-n",), conv="floor", enums=(1, 2), range=(0, math.inf))
    assert _descr(option) == (
        "Values will be converted with math.floor. Values must be one of {1, 2}."
        " Values must be in the range [0, inf].\n"
    )


def test_default_values() -> None:
    def compute() -> None:
        pass

    assert _descr(FlagOption(names=("-f",), default=False), HelpItem.default) == "Defaults to False.\n"
    assert _descr(NumberOption(names=("-n",), default=1.5), HelpItem.default) == "Defaults to 1.5.\n"
    assert (
        _descr(StringsOption(names=("-s",), default=["a", "b"]), HelpItem.default)
        == "Defaults to ['a', 'b'].\n"
    )
    assert (
        _descr(NumbersOption(names=("-n",), default=[1, 2]), HelpItem.default)
        == "Defaults to [1, 2].\n"
    )
    assert (
        _descr(StringOption(names=("-s",), default=compute), HelpItem.default)
        == "Defaults to <compute>.\n"
    )
    assert (
        _descr(StringOption(names=("-s",), fallback="x"), HelpItem.fallback)
        == "Falls back to 'x' if specified without parameter.\n"
    )


def test_other_items() -> None:
    option = StringOption(
        names=("-s",),
        deprecated="some reason",
        link="https://example.com",
        env_var="MY_VAR",
        cluster_letters="sS",
    )
    assert _descr(option) == (
        "Deprecated for some reason. Refer to https://example.com for details."
        " Can be specified through the MY_VAR environment variable."
        " Can be clustered with 'sS'.\n"
    )
