"""Terminal control sequences and text styling attributes.

Styles are plain strings: a `Select Graphic Rendition` sequence such as ``"\\x1b[1;31m"``,
or the empty string for "no style". They are composed with :func:`style`, and can be
concatenated freely.
"""

from __future__ import annotations

import enum
from typing import Tuple, Union

from typing_extensions import TypeAlias


class cs(str, enum.Enum):
    """Control sequence introducer commands.

    See https://xtermjs.org/docs/api/vtfeatures/#csi for the semantics of each one."""

    cuu = "A"
    """Cursor up."""
    cud = "B"
    """Cursor down."""
    cuf = "C"
    """Cursor forward."""
    cub = "D"
    """Cursor backward."""
    cnl = "E"
    """Cursor next line."""
    cpl = "F"
    """Cursor previous line."""
    cha = "G"
    """Cursor horizontal absolute (1-based column)."""
    cht = "I"
    cbt = "Z"
    vpa = "d"
    vpr = "e"
    cup = "H"
    ed = "J"
    """Erase in display."""
    el = "K"
    """Erase in line."""
    il = "L"
    dl = "M"
    ich = "@"
    dch = "P"
    ech = "X"
    rch = "b"
    tbc = "g"
    su = "S"
    sd = "T"
    sgr = "m"
    """Select graphic rendition."""
    tbm = "r"
    sm = "h"
    rm = "l"
    dsr = "n"
    scp = "s"
    """Save cursor."""
    rcp = "u"
    """Restore cursor."""


class tf(enum.IntEnum):
    """Type faces."""

    clear = 0
    bold = 1
    faint = 2
    italic = 3
    underlined = 4
    slowly_blinking = 5
    rapidly_blinking = 6
    inverse = 7
    invisible = 8
    crossed_out = 9
    primary_font = 10
    fraktur = 20
    doubly_underlined = 21
    not_bold_or_faint = 22
    not_italic_nor_fraktur = 23
    not_underlined = 24
    not_blinking = 25
    proportional_spacing = 26
    not_inverse = 27
    not_invisible = 28
    not_crossed_out = 29
    not_proportional_spacing = 50
    framed = 51
    encircled = 52
    overlined = 53
    not_framed_or_encircled = 54
    not_overlined = 55
    superscript = 73
    subscript = 74
    not_superscript_or_subscript = 75


class fg(enum.IntEnum):
    """Foreground colors."""

    black = 30
    red = 31
    green = 32
    yellow = 33
    blue = 34
    magenta = 35
    cyan = 36
    white = 37
    default = 39
    bright_black = 90
    bright_red = 91
    bright_green = 92
    bright_yellow = 93
    bright_blue = 94
    bright_magenta = 95
    bright_cyan = 96
    bright_white = 97


class bg(enum.IntEnum):
    """Background colors."""

    black = 40
    red = 41
    green = 42
    yellow = 43
    blue = 44
    magenta = 45
    cyan = 46
    white = 47
    default = 49
    bright_black = 100
    bright_red = 101
    bright_green = 102
    bright_yellow = 103
    bright_blue = 104
    bright_magenta = 105
    bright_cyan = 106
    bright_white = 107


Style: TypeAlias = str
"""An SGR sequence, or the empty string."""

StyleAttr: TypeAlias = Union[int, Tuple[int, ...]]
"""A type face, a color, or a tuple of codes (8-bit colors, underline styles)."""


class ul:
    """Predefined underline styles."""

    none = (4, 0)
    single = (4, 1)
    double = (4, 2)
    curly = (4, 3)
    dotted = (4, 4)
    dashed = (4, 5)


def seq(cmd: cs, *params: int) -> str:
    """Create a control sequence from a command and its numeric parameters."""
    return "\x1b[" + ";".join(str(int(p)) for p in params) + cmd.value


def style(*attrs: StyleAttr) -> Style:
    """Create an SGR sequence from a list of styling attributes.

    >>> style(tf.bold, fg.red) == "\\x1b[1;31m"
    True
    """
    codes: list[int] = []
    for attr in attrs:
        if isinstance(attr, tuple):
            codes.extend(attr)
        else:
            codes.append(attr)
    return seq(cs.sgr, *codes)


def _clamp(color: int) -> int:
    return max(0, min(255, int(color)))


def fg8(color: int) -> Tuple[int, int, int]:
    """An 8-bit foreground color."""
    return (38, 5, _clamp(color))


def bg8(color: int) -> Tuple[int, int, int]:
    """An 8-bit background color."""
    return (48, 5, _clamp(color))


def ul8(color: int) -> Tuple[int, int, int]:
    """An 8-bit underline color."""
    return (58, 5, _clamp(color))


CLEAR: Style = style(tf.clear)
