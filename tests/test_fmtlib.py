import re

import pytest

from optkit import (
    AnsiMessage,
    ConnectiveWord,
    ErrorMessage,
    FormattingFlags,
    MessageConfig,
    TerminalString,
    fg,
    style,
)


def _render(*strings: TerminalString, width: int = 0) -> str:
    return AnsiMessage(strings).wrap(width, emit_styles=False)


def _format(phrase: str, args: dict, flags: FormattingFlags | None = None) -> str:
    result = TerminalString().format(MessageConfig(), phrase, args, flags)
    return _render(result)


def test_wrap_words() -> None:
    string = TerminalString().split("The quick brown fox")
    assert _render(string, width=10) == "The quick\nbrown fox"
    assert _render(string) == "The quick brown fox"


def test_wrap_with_indent() -> None:
    string = TerminalString(4).split("aa bb cc")
    assert _render(string, width=10) == "    aa bb\n    cc"


@pytest.mark.parametrize("width", [10, 17, 23, 40])
def test_rewrap_wrapped_text(width: int) -> None:
    text = "The quick brown fox jumps over the lazy dog, then naps in the warm afternoon sun."
    wrapped = _render(TerminalString().split(text), width=width)
    assert all(len(line) <= width for line in wrapped.split("\n"))
    assert _render(TerminalString().split(wrapped), width=width) == wrapped


def test_wrap_is_repeatable() -> None:
    message = AnsiMessage(
        [
            TerminalString(2).styled(style(fg.red), "-f"),
            TerminalString(8).split("Some text that wraps."),
        ]
    )
    for emit_styles in (False, True):
        first = message.wrap(12, emit_styles=emit_styles)
        assert message.wrap(12, emit_styles=emit_styles) == first


def test_wrap_largest_word_does_not_fit() -> None:
    # Falls back to the first column.
    string = TerminalString(8).split("abcdefgh")
    assert _render(string, width=10) == "abcdefgh"


def test_wrap_right_aligned() -> None:
    string = TerminalString(0, righty=True).split("ab cd")
    assert _render(string, width=10) == "     ab cd"
    # No alignment without a width.
    assert _render(string) == "ab cd"


def test_wrap_backward_column_move() -> None:
    first = TerminalString().word("abcdef")
    second = TerminalString(2).word("x")
    assert _render(first, second) == "abcdef\n  x"


def test_wrap_emits_styles() -> None:
    string = TerminalString().styled(style(fg.red), "hi")
    assert AnsiMessage([string]).wrap(0, emit_styles=True) == "\x1b[31mhi\x1b[0m\x1b[0m"
    # Indentation becomes a cursor movement.
    string = TerminalString(2).word("x")
    assert AnsiMessage([string]).wrap(0, emit_styles=True) == "\x1b[3Gx\x1b[0m"


def test_paragraphs_and_list_items() -> None:
    assert _render(TerminalString().split("a\n\nb")) == "a\n\nb"
    assert _render(TerminalString().split("Items:\n- one\n- two")) == "Items:\n- one\n- two"


def test_merging() -> None:
    string = TerminalString().open("[").word("a").close("]").word("b")
    assert string.strings == ["[a]", "b"]
    assert string.length == 5


def test_length_ignores_sequences() -> None:
    string = TerminalString().seq("\x1b[1m").word("ab").word("c")
    assert string.length == 4
    assert string.count == 3


def test_copy_and_pop() -> None:
    string = TerminalString().word("a").word("b")
    copied = string.copy().pop()
    assert copied.count == 1
    assert string.count == 2


def test_format_scalars() -> None:
    assert _format("Value %s is %n.", {"s": "x", "n": 2.0}) == "Value 'x' is 2."
    assert _format("%n and %b", {"n": 2.5, "b": False}) == "2.5 and False"
    assert _format("Regex %r.", {"r": re.compile(r"^a+$")}) == "Regex ^a+$."
    assert _format("See %u", {"u": "https://example.com"}) == "See https://example.com"


def test_format_missing_argument() -> None:
    assert _format("Option %o is required.", {}) == "Option is required."


def test_format_alternatives() -> None:
    flags = FormattingFlags(alt=1)
    assert _format("Accepts (%n|none).", {"n": 1}, flags) == "Accepts none."
    assert _format("Accepts (%n|none).", {"n": 1}, FormattingFlags(alt=0)) == "Accepts 1."


def test_format_sequences() -> None:
    assert _format("Values: %s.", {"s": ["a", "b"]}) == "Values: 'a', 'b'."
    flags = FormattingFlags(sep="and", merge_prev=False)
    assert _format("Between %n.", {"n": (1, 3)}, flags) == "Between 1 and 3."
    flags = FormattingFlags(sep="|", merge_next=True)
    assert _format("(%o)", {"o": ["-a", "--all"]}, flags) == "(-a|--all)"


def test_format_values() -> None:
    assert _format("%v", {"v": [1, "a", True]}) == "[1, 'a', True]"
    assert _format("%v", {"v": {"a": 1, "b c": "x"}}) == "{a: 1, 'b c': 'x'}"

    def my_callback() -> None:
        pass

    assert _format("Got %v.", {"v": my_callback}) == "Got <my_callback>."


def test_format_nested_text() -> None:
    inner = TerminalString().split("two words")
    assert _format("[%t]", {"t": inner}) == "[two words]"
    assert _format("%t!", {"t": "some text"}) == "some text!"


def test_custom_connectives() -> None:
    config = MessageConfig(connectives={ConnectiveWord.string_quote: '"'})
    result = TerminalString().format(config, "%s", {"s": "x"})
    assert _render(result) == '"x"'
    # Words that are not given keep their defaults.
    assert config.connective(ConnectiveWord.and_) == "and"


def test_format_without_arguments() -> None:
    result = TerminalString().format(MessageConfig(), "Literal %s here.")
    assert _render(result) == "Literal %s here."


def test_message_width_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    message = AnsiMessage([TerminalString().split("The quick brown fox")])
    monkeypatch.setenv("FORCE_WIDTH", "10")
    monkeypatch.setenv("NO_COLOR", "1")
    assert str(message) == "The quick\nbrown fox"


def test_message_forced_colors(monkeypatch: pytest.MonkeyPatch) -> None:
    message = AnsiMessage([TerminalString().word("a")])
    monkeypatch.setenv("FORCE_WIDTH", "0")
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert str(message) == "a\x1b[0m"
    monkeypatch.delenv("FORCE_COLOR")
    assert str(message) == "a"


def test_error_message() -> None:
    error = ErrorMessage(TerminalString().word("boom"))
    assert str(error) == "boom"
    with pytest.raises(ErrorMessage, match="boom"):
        raise error
