"""
Exception classes for cscorrect.

All cscorrect exceptions inherit from CSCError,
making it easy to catch all library errors.

Example:
    >>> try:
    ...     corrector.correct("我买苹果")
    ... except cscorrect.InvalidPositionError as e:
    ...     print(f"Bad location: {e}")
    ... except cscorrect.CSCError as e:
    ...     print(f"cscorrect error: {e}")
"""


class CSCError(Exception):
    """
    Base exception for all cscorrect errors.

    Catch this to handle any cscorrect-specific error.
    """

    pass


class InvalidPositionError(CSCError, IndexError):
    """
    Raised when a sentence index is outside [0, len(sentence)).

    Locations are never clamped: a silently moved location would be
    scored against the wrong neighbours.

    Example:
        >>> Sentence.from_text("我买苹果").set_token(4, "卖")
        InvalidPositionError: location 4 out of range for sentence of length 4
    """

    pass


class ConfigurationError(CSCError, ValueError):
    """
    Raised for invalid configuration.

    Example:
        >>> CorrectionConfig(beam_width=0)
        ConfigurationError: beam_width must be >= 1, got 0
    """

    pass


class ResourceLoadError(CSCError):
    """
    Raised when a dictionary or confusion-set file cannot be loaded.

    Wraps the underlying OSError, YAML error or parse error.
    """

    pass
