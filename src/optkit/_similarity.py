"""Name similarity based on Gestalt pattern matching, and naming-convention rules.

See https://en.wikipedia.org/wiki/Gestalt_pattern_matching."""

from __future__ import annotations

import functools
import re
import unicodedata
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple

NamingRule = Callable[[str, str, str], bool]
"""Checks a name, given its lowercase and uppercase versions."""

NamingRules = Mapping[str, Mapping[str, NamingRule]]
"""Named categories of named rules."""

NAMING_CONVENTIONS: NamingRules = {
    "cases": {
        # Each requires at least one cased letter.
        "lowercase": lambda name, lower, upper: name == lower and name != upper,
        "UPPERCASE": lambda name, lower, upper: name != lower and name == upper,
        "Capitalized": lambda name, lower, upper: name[:1] != lower[:1] and name != upper,
    },
    "dashes": {
        "noDash": lambda name, lower, upper: not name.startswith("-"),
        "-singleDash": lambda name, lower, upper: name.startswith("-") and not name.startswith("--"),
        "--doubleDash": lambda name, lower, upper: name.startswith("--"),
    },
    "delimiters": {
        "kebab-case": lambda name, lower, upper: re.search(r"[^-]+-[^-]+", name) is not None,
        "snake_case": lambda name, lower, upper: re.search(r"[^_]+_[^_]+", name) is not None,
        "colon:case": lambda name, lower, upper: re.search(r"[^:]+:[^:]+", name) is not None,
    },
}


def _longest_common_substrings(s: str, t: str) -> Tuple[int, List[Tuple[int, int]]]:
    """Length of the longest common substrings, and the start indices of every
    occurrence in both strings."""
    dp = [0] * (len(t) + 1)
    longest = 0
    indices: List[Tuple[int, int]] = []
    for i in range(1, len(s) + 1):
        prev = 0  # dp value at (i - 1, j - 1)
        for j in range(1, len(t) + 1):
            current = dp[j]
            if s[i - 1] == t[j - 1]:
                dp[j] = prev + 1
                if dp[j] > longest:
                    longest = dp[j]
                    indices = []
                if dp[j] == longest:
                    indices.append((i - longest, j - longest))
            else:
                dp[j] = 0
            prev = current
    return longest, indices


@functools.lru_cache(maxsize=1024)
def matching_characters(s: str, t: str) -> int:
    """Number of matching characters of two strings: a longest common substring plus,
    recursively, the matching characters on both of its sides. The maximum is taken
    over all occurrences of longest common substrings."""
    longest, indices = _longest_common_substrings(s, t)
    best = 0
    for i, j in indices:
        left = matching_characters(s[:i], t[:j])
        right = matching_characters(s[i + longest :], t[j + longest :])
        best = max(best, longest + left + right)
    return best


def gestalt_similarity(s: str, t: str) -> float:
    """Similarity of two strings, in the range [0, 1]. Two empty strings are
    considered identical."""
    total = len(s) + len(t)
    if total == 0:
        return 1.0
    return 2 * matching_characters(s, t) / total


def normalize_name(name: str) -> str:
    """Strip punctuation and fold case."""
    return "".join(c for c in name if not unicodedata.category(c).startswith("P")).lower()


def find_similar_names(name: str, names: Iterable[str], threshold: float = 0.0) -> List[str]:
    """Get the names that are similar to a given name, in decreasing order of similarity.

    The name itself is skipped. Ties keep the order of `names`."""
    search = normalize_name(name)
    scored: List[Tuple[str, float]] = []
    for other in names:
        if other == name:
            continue
        sim = gestalt_similarity(search, normalize_name(other))
        if sim >= threshold:
            scored.append((other, sim))
    scored.sort(key=lambda x: -x[1])
    return [other for other, _ in scored]


def match_naming_rules(names: Sequence[str], rules: NamingRules) -> Dict[str, Dict[str, str]]:
    """Match names against naming rules.

    Returns, for each category, a mapping from each matched rule to the first name that
    matched it."""
    result: Dict[str, Dict[str, str]] = {key: {} for key in rules}
    for name in names:
        lower = name.lower()
        upper = name.upper()
        for category, category_rules in rules.items():
            matched = result[category]
            for rule_name, rule in category_rules.items():
                if rule_name not in matched and rule(name, lower, upper):
                    matched[rule_name] = name
    return result
