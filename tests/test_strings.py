from optkit import _strings


def test_select_alternative() -> None:
    assert _strings.select_alternative("Accepts (one|two) values.", 0) == "Accepts one values."
    assert _strings.select_alternative("Accepts (one|two) values.", 1) == "Accepts two values."
    # Out-of-range alternatives are removed.
    assert _strings.select_alternative("Accepts (one|two) values.", 2) == "Accepts  values."


def test_select_alternative_keeps_plain_parentheses() -> None:
    phrase = "Values (if any) are (trimmed|kept)."
    assert _strings.select_alternative(phrase, 1) == "Values (if any) are kept."
    assert _strings.select_alternative("No groups here.", 1) == "No groups here."


def test_select_alternative_nested() -> None:
    phrase = "Unknown option (%o|%o1).(| Similar names are: %o2.)"
    assert _strings.select_alternative(phrase, 0) == "Unknown option %o."
    assert (
        _strings.select_alternative(phrase, 1)
        == "Unknown option %o1. Similar names are: %o2."
    )
    assert _strings.select_alternative("Take ((a)|b).", 0) == "Take (a)."


def test_strip_styles() -> None:
    assert _strings.strip_styles("\x1b[1;31mbold\x1b[0m red") == "bold red"
    # Other control sequences are kept.
    assert _strings.strip_styles("\x1b[5Ga\x1b[m") == "\x1b[5Ga"


def test_visible_length() -> None:
    assert _strings.visible_length("\x1b[32m'abc'\x1b[0m") == 5
    assert _strings.visible_length("plain") == 5
    assert _strings.visible_length("") == 0


def test_format_spec_pattern() -> None:
    parts = _strings.FORMAT_SPEC_PATTERN.split("(%s1|%n2).")
    assert parts == ["(", "%s1", "|", "%n2", ")."]


def test_paragraph_and_list_patterns() -> None:
    assert _strings.PARAGRAPH_PATTERN.split("one\n\n  \ntwo") == ["one", "two"]
    assert _strings.LIST_ITEM_PATTERN.split("intro\n- a\n2. b") == ["intro\n", "-", "a\n", "2.", "b"]
