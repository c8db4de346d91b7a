__version__ = "0.1.0"


from . import conf as conf
from ._enums import ConnectiveWord as ConnectiveWord
from ._enums import ErrorItem as ErrorItem
from ._enums import HelpItem as HelpItem
from ._fmtlib import AnsiMessage as AnsiMessage
from ._fmtlib import ErrorMessage as ErrorMessage
from ._fmtlib import FormattingFlags as FormattingFlags
from ._fmtlib import HelpMessage as HelpMessage
from ._fmtlib import MessageConfig as MessageConfig
from ._fmtlib import MessageStyles as MessageStyles
from ._fmtlib import TerminalString as TerminalString
from ._fmtlib import WarnMessage as WarnMessage
from ._formatter import HelpEntry as HelpEntry
from ._formatter import HelpFormatter as HelpFormatter
from ._formatter import format_help_message as format_help_message
from ._options import BooleanOption as BooleanOption
from ._options import CommandOption as CommandOption
from ._options import FlagOption as FlagOption
from ._options import FunctionOption as FunctionOption
from ._options import HelpOption as HelpOption
from ._options import NumberOption as NumberOption
from ._options import NumbersOption as NumbersOption
from ._options import Option as Option
from ._options import Options as Options
from ._options import OptionStyles as OptionStyles
from ._options import Requires as Requires
from ._options import RequiresAll as RequiresAll
from ._options import RequiresNot as RequiresNot
from ._options import RequiresOne as RequiresOne
from ._options import StringOption as StringOption
from ._options import StringsOption as StringsOption
from ._options import VersionOption as VersionOption
from ._options import all_of as all_of
from ._options import get_option_names as get_option_names
from ._options import get_param_count as get_param_count
from ._options import not_ as not_
from ._options import one_of as one_of
from ._sequences import CLEAR as CLEAR
from ._sequences import bg as bg
from ._sequences import bg8 as bg8
from ._sequences import cs as cs
from ._sequences import fg as fg
from ._sequences import fg8 as fg8
from ._sequences import seq as seq
from ._sequences import style as style
from ._sequences import tf as tf
from ._sequences import ul as ul
from ._sequences import ul8 as ul8
from ._similarity import find_similar_names as find_similar_names
from ._similarity import gestalt_similarity as gestalt_similarity
from ._validator import OptionValidator as OptionValidator
from ._validator import ValidationResult as ValidationResult
from ._warnings import OptkitWarning as OptkitWarning
