from optkit import CLEAR, bg, bg8, cs, fg, fg8, seq, style, tf, ul, ul8


def test_seq() -> None:
    assert seq(cs.cha, 5) == "\x1b[5G"
    assert seq(cs.cuf, 3) == "\x1b[3C"
    assert seq(cs.sgr) == "\x1b[m"


def test_style() -> None:
    assert style(tf.bold, fg.red) == "\x1b[1;31m"
    assert style(bg.bright_white) == "\x1b[107m"
    assert style(ul.curly) == "\x1b[4;3m"
    assert CLEAR == "\x1b[0m"


def test_eight_bit_colors_are_clamped() -> None:
    assert style(fg8(208)) == "\x1b[38;5;208m"
    assert style(bg8(300)) == "\x1b[48;5;255m"
    assert style(ul8(-1)) == "\x1b[58;5;0m"
