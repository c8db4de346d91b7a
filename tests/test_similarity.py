import pytest

from optkit import _similarity
from optkit import find_similar_names, gestalt_similarity


def test_gestalt_similarity() -> None:
    assert gestalt_similarity("", "") == 1.0
    assert gestalt_similarity("abc", "") == 0.0
    assert gestalt_similarity("abc", "abc") == 1.0
    assert gestalt_similarity("abc", "xyz") == 0.0
    # "WIKIM" and "IA" match.
    assert gestalt_similarity("WIKIMEDIA", "WIKIMANIA") == pytest.approx(14 / 18)


def test_gestalt_similarity_is_symmetric() -> None:
    assert gestalt_similarity("flag", "flags") == gestalt_similarity("flags", "flag")
    assert gestalt_similarity("flag", "flags") == pytest.approx(8 / 9)


def test_normalize_name() -> None:
    assert _similarity.normalize_name("--Dry-Run") == "dryrun"
    assert _similarity.normalize_name("-f") == "f"


def test_find_similar_names() -> None:
    names = ["--verbose", "--version", "--value", "-v"]
    similar = find_similar_names("--verbos", names, threshold=0.6)
    assert similar[0] == "--verbose"
    assert "--version" in similar
    assert "-v" not in similar
    # The name itself is never suggested.
    assert "--verbose" not in find_similar_names("--verbose", names)


def test_find_similar_names_keeps_order_of_ties() -> None:
    assert find_similar_names("ab", ["xa", "ay", "ab"]) == ["xa", "ay"]


def test_match_naming_rules() -> None:
    matched = _similarity.match_naming_rules(
        ["-f", "--dry-run", "--Force", "NAME"], _similarity.NAMING_CONVENTIONS
    )
    assert matched["dashes"] == {
        "-singleDash": "-f",
        "--doubleDash": "--dry-run",
        "noDash": "NAME",
    }
    assert matched["cases"] == {"lowercase": "-f", "UPPERCASE": "NAME"}
    assert matched["delimiters"] == {"kebab-case": "--dry-run"}
