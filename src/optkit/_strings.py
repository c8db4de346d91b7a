"""Utilities and constants for working with strings."""

from __future__ import annotations

import re
from typing import List, Tuple

PARAGRAPH_PATTERN = re.compile(r"(?:[ \t]*\r?\n){2,}")
"""Paragraphs are separated by one or more blank lines."""

LIST_ITEM_PATTERN = re.compile(r"^[ \t]*(-|\*|\d+\.) ", re.MULTILINE)
"""List items start with a dash, an asterisk or an ordinal, at the start of a line."""

WORD_PATTERN = re.compile(r"\s+")

FORMAT_SPEC_PATTERN = re.compile(r"(%[a-z][0-9]?)")
"""A format specifier: a percent sign, a letter and an optional digit."""

SGR_PATTERN = re.compile(r"\x1b\[[\d;]*m")

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_]\w*$")


def strip_styles(x: str) -> str:
    """Remove SGR sequences, keeping any other control sequence."""
    return SGR_PATTERN.sub("", x)


def visible_length(x: str) -> int:
    """Length of a word, ignoring SGR sequences embedded in it."""
    return len(x) - sum(len(m) for m in SGR_PATTERN.findall(x))


def select_alternative(phrase: str, alt: int = 0) -> str:
    """Select one alternative from each parenthesized `(a|b|...)` group of a phrase.

    Groups without a bar are kept as-is, including their parentheses. Nested
    parentheses are allowed inside an alternative.

    >>> select_alternative("Accepts (one|two) values (per option).", 1)
    'Accepts two values (per option).'
    """
    groups: List[Tuple[int, int]] = []
    start_indices: List[int] = []
    group_level = 0
    for i, c in enumerate(phrase):
        if c == "(":
            start_indices.append(i)
        elif start_indices:
            level = len(start_indices)
            if c == "|":
                if not group_level:
                    group_level = level
            elif c == ")":
                s = start_indices.pop()
                if group_level == level:
                    groups.append((s, i))
                    group_level = 0
    if not groups:
        return phrase

    parts: List[str] = []
    j = 0
    for s, e in groups:
        alternatives = _split_top_level(phrase[s + 1 : e])
        parts.append(phrase[j:s])
        parts.append(alternatives[alt] if 0 <= alt < len(alternatives) else "")
        j = e + 1
    parts.append(phrase[j:])
    return "".join(parts)


def _split_top_level(group: str) -> List[str]:
    """Split a group's contents by the bars that are not inside nested parentheses."""
    out: List[str] = []
    depth = 0
    current: List[str] = []
    for c in group:
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
        if c == "|" and depth == 0:
            out.append("".join(current))
            current = []
        else:
            current.append(c)
    out.append("".join(current))
    return out
