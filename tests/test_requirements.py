from typing import Any, Dict

from optkit import (
    ErrorMessage,
    FlagOption,
    FunctionOption,
    HelpFormatter,
    HelpItem,
    HelpOption,
    NumbersOption,
    OptionValidator,
    Requires,
    StringOption,
    ValidationResult,
    all_of,
    not_,
    one_of,
)
from optkit.conf import ColumnConfig, FormatterConfig


def _options(requires: Requires, **others: Any) -> Dict[str, Any]:
    return {
        "opt": FlagOption(names=("-o",), requires=requires),
        "a": FlagOption(names=("-a",), hide=True),
        "b": StringOption(names=("-b",), enums=("x", "y"), hide=True),
        "c": NumbersOption(names=("-c",), hide=True),
        **others,
    }


def _error(requires: Requires, **others: Any) -> str:
    result = OptionValidator(_options(requires, **others)).validate()
    assert isinstance(result, ErrorMessage)
    return str(result)


def _render(requires: Requires, item: HelpItem = HelpItem.requires) -> str:
    options = _options(requires)
    if item == HelpItem.required_if:
        options["opt"] = FlagOption(names=("-o",), required_if=requires)
    config = FormatterConfig(
        names=ColumnConfig(hidden=True),
        param=ColumnConfig(hidden=True),
        descr=ColumnConfig(absolute=True, indent=0),
        items=(item,),
    )
    validator = OptionValidator(options)
    assert isinstance(validator.validate(), ValidationResult)
    return HelpFormatter(validator, config).format_help().wrap(0, emit_styles=False)


def check(values: Dict[str, Any]) -> bool:
    return True


def test_valid_requirements() -> None:
    for requires in (
        "a",
        not_("b"),
        all_of("a", one_of("b", not_({"c": [1]}))),
        {"a": True, "b": "x", "c": None},
        check,
    ):
        result = OptionValidator(_options(requires)).validate()
        assert isinstance(result, ValidationResult)


def test_always_present_options() -> None:
    message = (
        "Invalid required value for option d. Option is always required or has a default value.\n"
    )
    for option in (
        StringOption(names=("-d",), default="x"),
        StringOption(names=("-d",), required=True),
        FlagOption(names=("-d",), default=False),
    ):
        # Neither presence nor absence can be required of an option that is always present.
        assert _error("d", d=option) == message
        assert _error({"d": None}, d=option) == message
        assert _error(not_(one_of("a", "d")), d=option) == message
        # Specific values can still be required.
        value = "x" if option.kind == "string" else True
        validator = OptionValidator(_options({"d": value}, d=option))
        assert isinstance(validator.validate(), ValidationResult)


def test_self_requirement() -> None:
    assert _error(all_of("a", "opt")) == "Option opt requires itself.\n"


def test_unknown_requirement() -> None:
    assert _error(one_of("a", not_("zzz"))) == "Unknown option zzz in requirement.\n"


def test_invalid_required_option() -> None:
    others = {"h": HelpOption(names=("-h",)), "f": FunctionOption(names=("-f",))}
    assert _error("h", **others) == "Invalid option h in requirement.\n"
    assert _error({"f": 1}, **others) == "Invalid option f in requirement.\n"
    # Presence of an option with values of unknown type can be required.
    result = OptionValidator(_options("f", **others)).validate()
    assert isinstance(result, ValidationResult)


def test_incompatible_required_value() -> None:
    assert (
        _error({"b": 1}) == "Incompatible required value 1 for option b. Should be of type 'string'.\n"
    )
    assert (
        _error({"c": "1"}) == "Incompatible required value '1' for option c. Should be of type 'array'.\n"
    )
    assert _error({"b": "z"}) == "Invalid parameter to b: 'z'. Possible values are {'x', 'y'}.\n"


def test_required_if_is_validated() -> None:
    options = {"opt": FlagOption(names=("-o",), required_if="zzz")}
    result = OptionValidator(options).validate()
    assert isinstance(result, ErrorMessage)
    assert str(result) == "Unknown option zzz in requirement.\n"


def test_render_keys() -> None:
    assert _render("a") == "Requires -a.\n"
    assert _render(not_("a")) == "Requires no -a.\n"
    assert _render(not_(not_("a"))) == "Requires -a.\n"


def test_render_expressions() -> None:
    assert _render(all_of("a", "b")) == "Requires (-a and -b).\n"
    assert _render(one_of("a", not_("b"))) == "Requires (-a or no -b).\n"
    assert _render(all_of("a")) == "Requires -a.\n"
    # Negations are distributed over the items.
    assert _render(not_(all_of("a", "b"))) == "Requires (no -a or no -b).\n"
    assert _render(not_(one_of("a", "b"))) == "Requires (no -a and no -b).\n"
    assert (
        _render(all_of("a", one_of("b", "c")))
        == "Requires (-a and (-b or -c)).\n"
    )


def test_render_values() -> None:
    assert _render({"b": "x"}) == "Requires -b == 'x'.\n"
    assert _render({"b": None}) == "Requires no -b.\n"
    assert _render({"c": [1, 2]}) == "Requires -c == [1, 2].\n"
    assert _render({"b": "x", "a": True}) == "Requires (-b == 'x' and -a == True).\n"
    assert _render(not_({"b": "x", "a": True})) == "Requires (-b != 'x' or -a != True).\n"
    assert _render(not_({"b": None})) == "Requires -b.\n"


def test_render_callbacks() -> None:
    assert _render(check) == "Requires <check>.\n"
    assert _render(not_(check)) == "Requires not <check>.\n"


def test_render_required_if() -> None:
    assert _render(one_of("a", "b"), HelpItem.required_if) == "Required if (-a or -b).\n"
