# visuals/__init__.py
"""
Visual helpers for the Fourier spectral filter project.
Provides plotting and export utilities used by the scripts.
"""
from .plots import (
    plot_magnitude_spectrum,
    plot_mask,
    plot_spectrogram,
    compare_and_save,
)
__all__ = [
    "plot_magnitude_spectrum",
    "plot_mask",
    "plot_spectrogram",
    "compare_and_save",
]
