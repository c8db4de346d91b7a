"""Help layouts can be loaded from a YAML document, and unknown option names are
matched against the declared ones to suggest corrections.

Usage:
`python ./02_config_and_suggestions.py`
`python ./02_config_and_suggestions.py --verbos`
"""

from __future__ import annotations

import sys

import optkit

LAYOUT = """
names: {align: slot}
param: {align: right}
descr: {indent: 4}
items: [synopsis, default, required]
phrases:
  default: "Default: (%b|%s|%n|[%s]|[%n]|%v)."
"""

options = {
    "verbose": optkit.FlagOption(names=("-v", "--verbose"), desc="Print more output."),
    "version": optkit.VersionOption(names=(None, "--version"), version="0.1.0"),
    "output": optkit.StringOption(names=("-o", "--output"), desc="Output file.", required=True),
    "jobs": optkit.NumberOption(names=("-j", "--jobs"), desc="Worker count.", default=4),
}


if __name__ == "__main__":
    imported = optkit.conf.load_formatter_config(LAYOUT)
    validator = optkit.OptionValidator(options)
    result = validator.validate()
    assert isinstance(result, optkit.ValidationResult), str(result)

    for name in sys.argv[1:]:
        if name not in validator.names:
            print(validator.unknown_option(name), file=sys.stderr)
    print(optkit.HelpFormatter(validator, imported.format).format_help())
