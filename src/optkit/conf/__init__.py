"""The :mod:`optkit.conf` submodule contains the configuration records of the
validator and the help formatter, and helpers for building formatter configurations
from plain data.

Every record is a frozen dataclass with documented defaults. Phrases and connective
words that are not given fall back to the defaults one entry at a time, so a
configuration only needs to list what it changes:

.. code-block:: python

    config = optkit.conf.FormatterConfig(
        names=optkit.conf.ColumnConfig(align="slot"),
        items=(optkit.HelpItem.synopsis, optkit.HelpItem.default),
    )
"""

from ._confstruct import DEFAULT_ERROR_PHRASES as DEFAULT_ERROR_PHRASES
from ._confstruct import DEFAULT_HELP_PHRASES as DEFAULT_HELP_PHRASES
from ._confstruct import DEFAULT_SECTIONS as DEFAULT_SECTIONS
from ._confstruct import ColumnConfig as ColumnConfig
from ._confstruct import FormatterConfig as FormatterConfig
from ._confstruct import HelpGroups as HelpGroups
from ._confstruct import HelpSection as HelpSection
from ._confstruct import HelpText as HelpText
from ._confstruct import HelpUsage as HelpUsage
from ._confstruct import ValidationFlags as ValidationFlags
from ._confstruct import ValidatorConfig as ValidatorConfig
from ._importer import ImportedConfig as ImportedConfig
from ._importer import import_formatter_config as import_formatter_config
from ._importer import import_style as import_style
from ._importer import load_formatter_config as load_formatter_config
