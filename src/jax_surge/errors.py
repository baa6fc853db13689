"""Exceptions raised by the surge solvers and data utilities."""


class ConfigurationError(ValueError):
    """
    Invalid model set-up detected before a simulation starts.

    Examples: non-positive depth, mismatched `h`/`u`/`D` lengths, zero
    spatial step.
    """


class DataQualityError(ValueError):
    """
    Defective input data detected during normalization.

    Raised for NaN/Inf statistics and for protected columns that change.
    """
