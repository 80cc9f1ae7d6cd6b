"""
Core package init for the Fourier spectral filter project.
Exposes public modules for import in tests and scripts.
"""
__all__ = [
    "fft_engine",
    "filters",
    "resize",
    "noise",
    "display",
    "image",
    "exceptions",
    "pipeline",
]
