"""Custom warning category for optkit."""


class OptkitWarning(UserWarning):
    """Warning category for optkit-specific warnings.

    This can be used to filter validation warnings:
    >>> import warnings
    >>> warnings.filterwarnings("ignore", category=OptkitWarning)
    """

    pass
