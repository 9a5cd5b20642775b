"""
.. include:: ../README.md
"""

from .exceptions import TzFileError
from .model import MIN_INSTANT, LeapTransition, Timezone, Transition, TzFile
from .tzfile import read, read_tzfile

__all__ = [
    "MIN_INSTANT",
    "LeapTransition",
    "Timezone",
    "Transition",
    "TzFile",
    "TzFileError",
    "read",
    "read_tzfile",
    "config",
    "exceptions",
    "model",
    "reader",
    "search",
    "timezoneinfo",
]
