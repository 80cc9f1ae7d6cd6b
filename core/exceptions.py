"""
core/exceptions.py

Result codes and exceptions shared by the pipeline and the I/O helpers.

- ResultCode: outcome of a pipeline stage (ok / error / invalid_input)
- SpectralFilterError: base class for project errors
- ImageLoadError: an image file could not be opened or decoded
"""

from enum import Enum


class ResultCode(Enum):
    OK = "ok"
    ERROR = "error"
    INVALID_INPUT = "invalid_input"


class SpectralFilterError(Exception):
    """Base exception for the spectral filter project."""


class ImageLoadError(SpectralFilterError, IOError):
    """Raised when an image file cannot be read into a luminance matrix."""
