"""Construction of formatter configurations from plain data, such as the contents of
a YAML or JSON document.

A document looks like this:

.. code-block:: yaml

    styles:
      option: [bold, bright_magenta]
      value: {fg8: 244}
    names: {align: slot, style: bold}
    descr: {indent: 4, style: [italic, on_black]}
    items: [synopsis, required, default]
    phrases:
      default: "Default: (%b|%s|%n|[%s]|[%n]|%v)."
    filters: ["^--"]

Styles are lists of attributes. Each attribute is a type face (`bold`), a foreground
color (`red`), a background color prefixed with `on_` (`on_red`), or a mapping with
an 8-bit color (`{fg8: 208}`, `{bg8: 17}`, `{ul8: 1}`). A single attribute may be
given without the list.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Any, Dict, List, Mapping, NamedTuple, Tuple

from .._enums import HelpItem
from .._fmtlib import MessageStyles
from .._options import OptionStyles
from .._sequences import Style, StyleAttr, bg, bg8, fg, fg8, style, tf, ul8
from ._confstruct import ColumnConfig, FormatterConfig

_EIGHT_BIT_COLORS = {"fg8": fg8, "bg8": bg8, "ul8": ul8}

_COLUMNS = ("names", "param", "descr")


class ImportedConfig(NamedTuple):
    format: FormatterConfig
    styles: MessageStyles
    """Message styles, with the defaults for the ones not given."""


def import_formatter_config(data: Mapping[str, Any]) -> ImportedConfig:
    """Convert plain data into a formatter configuration.

    Args:
        data: A mapping with the optional keys `styles`, `names`, `param`, `descr`,
            `items`, `phrases` and `filters`.

    Raises:
        ValueError: If a key, a style attribute or a help item is unknown, or a value
            has the wrong type.
    """
    _check_keys("formatter config", data, ("styles", "items", "phrases", "filters", *_COLUMNS))

    columns: Dict[str, ColumnConfig] = {}
    column_styles: Dict[str, Style | None] = {}
    for name in _COLUMNS:
        columns[name], column_styles[name] = _import_column(name, data.get(name, {}))

    format_kwargs: Dict[str, Any] = dict(columns, styles=OptionStyles(**column_styles))
    if "items" in data:
        format_kwargs["items"] = tuple(_help_item(item) for item in _as_list("items", data["items"]))
    if "phrases" in data:
        phrases = _as_mapping("phrases", data["phrases"])
        format_kwargs["phrases"] = {_help_item(k): str(v) for k, v in phrases.items()}
    if "filters" in data:
        format_kwargs["filters"] = tuple(
            re.compile(str(f), re.IGNORECASE) for f in _as_list("filters", data["filters"])
        )

    styles = _as_mapping("styles", data.get("styles", {}))
    fields = {field.name for field in dataclasses.fields(MessageStyles)}
    _check_keys("styles", styles, tuple(fields))
    message_styles = MessageStyles(
        **{key: import_style(value) for key, value in styles.items()}
    )
    return ImportedConfig(FormatterConfig(**format_kwargs), message_styles)


def load_formatter_config(text: str) -> ImportedConfig:
    """Parse a YAML (or JSON) document, and convert it with
    :func:`import_formatter_config`. An empty document gives the defaults."""
    import yaml

    data = yaml.safe_load(text)
    if data is None:
        data = {}
    return import_formatter_config(_as_mapping("document", data))


def import_style(value: Any) -> Style:
    """Convert a style attribute, or a list of them, into an SGR sequence."""
    attrs: List[StyleAttr] = [_style_attr(attr) for attr in _as_list("style", value)]
    return style(*attrs) if attrs else ""


def _style_attr(attr: Any) -> StyleAttr:
    if isinstance(attr, Mapping):
        if len(attr) != 1:
            raise ValueError(f"Expected a single 8-bit color, got {dict(attr)!r}")
        ((key, color),) = attr.items()
        if key not in _EIGHT_BIT_COLORS or not isinstance(color, int) or isinstance(color, bool):
            raise ValueError(f"Invalid 8-bit color: {key}: {color!r}")
        return _EIGHT_BIT_COLORS[key](color)
    if isinstance(attr, str):
        if attr.startswith("on_") and attr[3:] in bg.__members__:
            return bg[attr[3:]]
        if attr in fg.__members__:
            return fg[attr]
        if attr in tf.__members__:
            return tf[attr]
    raise ValueError(f"Unknown style attribute: {attr!r}")


def _import_column(name: str, data: Any) -> Tuple[ColumnConfig, Style | None]:
    data = _as_mapping(name, data)
    fields = [field.name for field in dataclasses.fields(ColumnConfig)]
    _check_keys(name, data, (*fields, "style"))
    kwargs = {key: value for key, value in data.items() if key != "style"}
    if kwargs.get("align", "left") not in ("left", "right", "slot"):
        raise ValueError(f"Invalid alignment for {name}: {kwargs['align']!r}")
    if name != "names" and kwargs.get("align") == "slot":
        raise ValueError(f"Only the names column can be aligned by slot, not {name}")
    column_style = import_style(data["style"]) if "style" in data else None
    return ColumnConfig(**kwargs), column_style


def _help_item(name: Any) -> HelpItem:
    if not isinstance(name, str) or name not in HelpItem.__members__:
        raise ValueError(f"Unknown help item: {name!r}")
    return HelpItem[name]


def _check_keys(what: str, data: Mapping[str, Any], allowed: Tuple[str, ...]) -> None:
    unknown = [key for key in data if key not in allowed]
    if unknown:
        raise ValueError(f"Unknown keys in {what}: {', '.join(map(str, unknown))}")


def _as_list(what: str, value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, (str, Mapping)):
        return [value]
    raise ValueError(f"Expected a list for {what}, got {value!r}")


def _as_mapping(what: str, value: Any) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected a mapping for {what}, got {value!r}")
    return value
