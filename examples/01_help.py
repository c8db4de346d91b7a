"""Options are declared as a mapping from keys to option descriptors. After validation,
the same mapping can be rendered as a help message.

Usage:
`python ./01_help.py`
`FORCE_WIDTH=40 python ./01_help.py`
`NO_COLOR=1 python ./01_help.py`
"""

from __future__ import annotations

import math
import sys

import optkit

options = {
    "help": optkit.HelpOption(
        names=("-h", "--help"),
        desc="Print this help message.",
        sections=(
            optkit.conf.HelpText(text="A program that greets people."),
            optkit.conf.HelpUsage(title="Usage:", indent=2),
            optkit.conf.HelpGroups(title="Options:"),
        ),
    ),
    "verbose": optkit.FlagOption(
        names=("-v", "--verbose"),
        negation_names=("--quiet",),
        desc="Print more output.",
    ),
    "name": optkit.StringOption(
        names=("-n", "--name"),
        desc="Who to greet.",
        trim=True,
        default="world",
    ),
    "times": optkit.NumberOption(
        names=("-t", "--times"),
        desc="How often to greet.",
        range=(1, math.inf),
        conv="trunc",
        example=3,
        requires=optkit.not_({"verbose": False}),
    ),
    "tags": optkit.StringsOption(
        names=(None, "--tags"),
        desc="Tags to print after the greeting.",
        separator=",",
        unique=True,
        group="Formatting",
    ),
}


if __name__ == "__main__":
    validator = optkit.OptionValidator(options)
    result = validator.validate(optkit.conf.ValidationFlags(detect_naming_issues=True))
    if isinstance(result, optkit.ErrorMessage):
        print(result, file=sys.stderr)
        sys.exit(1)
    result.emit_warnings()
    print(optkit.format_help_message(validator, options["help"], prog_name="greet"))
