"""
stormimpact/errors.py
---------------------
Error types raised by the StormImpact pipeline.
"""


class StormImpactError(Exception):
    """Base class for pipeline errors."""


class MalformedDateError(StormImpactError, ValueError):
    """
    A record's begin date could not be parsed.

    Recoverable: the normalizer drops the record and counts it.
    """

    def __init__(self, value, date_format: str):
        self.value = value
        self.date_format = date_format
        super().__init__(f"Cannot parse begin date {value!r} with format {date_format!r}")


class EmptyDomainError(StormImpactError):
    """
    No non-Convection record exists to anchor the analysis window.

    Fatal: the run cannot continue without a lower year bound.
    """
