"""Indexing of option names and cluster letters."""

from __future__ import annotations

import dataclasses
import re
from typing import Dict, MutableMapping

from ._enums import ErrorItem
from ._messages import error_message
from ._options import Option, Options, ParamOption, get_option_names
from .conf._confstruct import ValidatorConfig

_INVALID_NAME_PATTERN = re.compile(r"[\s=]")


@dataclasses.dataclass(frozen=True)
class PositionalInfo:
    """The option that accepts positional arguments."""

    key: str
    name: str
    """Preferred name of the option, used in messages."""
    option: ParamOption
    marker: str | None
    """Marker after which all arguments are positional, if any."""


class NameRegistry:
    """Maps the names and cluster letters of an option set to option keys.

    Nested option sets are not included: each command has its own registry. The
    index is built without checks; see :func:`check_names`."""

    def __init__(self, options: Options) -> None:
        self.options = options
        self.names: Dict[str, str] = {}
        self.letters: Dict[str, str] = {}
        self.positional: PositionalInfo | None = None
        self._preferred: Dict[str, str] = {}
        for key, option in options.items():
            self._register(key, option)

    def _register(self, key: str, option: Option) -> None:
        names = get_option_names(option)
        for name in names:
            self.names[name] = key
        self._preferred[key] = names[0] if names else key
        for letter in option.cluster_letters or "":
            self.letters[letter] = key
        if isinstance(option, ParamOption) and option.positional:
            marker = option.positional if isinstance(option.positional, str) else None
            self.positional = PositionalInfo(key, self._preferred[key], option, marker)

    def preferred_name(self, key: str) -> str:
        """The first name of an option, or its key if it has no names."""
        return self._preferred.get(key, key)

    def key_of(self, name: str) -> str | None:
        return self.names.get(name)


def check_names(
    config: ValidatorConfig,
    name_to_key: MutableMapping[str, str],
    letter_to_key: MutableMapping[str, str],
    key: str,
    prefixed_key: str,
    option: Option,
) -> None:
    """Register the names and cluster letters of an option, checking them against the
    ones registered so far.

    Raises:
        ErrorMessage: On an empty positional marker, a non-positional option without
            names, an invalid name or cluster letter, or a duplicate name or letter.
    """
    positional = option.positional if isinstance(option, ParamOption) else False
    if positional == "":
        raise error_message(config, ErrorItem.empty_positional_marker, {"o": prefixed_key})
    names = get_option_names(option)
    if not positional and not names:
        raise error_message(config, ErrorItem.unnamed_option, {"o": prefixed_key})
    for name in names:
        if _INVALID_NAME_PATTERN.search(name):
            raise error_message(
                config, ErrorItem.invalid_option_name, {"o": prefixed_key, "s": name}
            )
        if name in name_to_key:
            raise error_message(
                config, ErrorItem.duplicate_option_name, {"o": prefixed_key, "s": name}
            )
        name_to_key[name] = key
    for letter in option.cluster_letters or "":
        if letter.isspace():
            raise error_message(
                config, ErrorItem.invalid_cluster_letter, {"o": prefixed_key, "s": letter}
            )
        if letter in letter_to_key:
            raise error_message(
                config, ErrorItem.duplicate_cluster_letter, {"o": prefixed_key, "s": letter}
            )
        letter_to_key[letter] = key
