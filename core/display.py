"""
core/display.py

Display helpers consumed by visuals/plots.py:
- log_compress: log2(1 + |z|) for wide dynamic range spectra
- normalize: min-max scaling into [0, 1]
- magnitude_spectrum: |F| or its log-compressed form
"""

import numpy as np


def log_compress(matrix) -> np.ndarray:
    """Per-cell log2(1 + magnitude) of a complex (or real) matrix."""
    return np.log2(1.0 + np.abs(np.asarray(matrix)))


def normalize(matrix) -> np.ndarray:
    """
    Scale values into [0, 1] via (v - min) / (max - min).
    Complex input is normalized on magnitude. A constant matrix is returned
    unchanged (as a float copy).
    """
    a = np.asarray(matrix)
    if np.iscomplexobj(a):
        a = np.abs(a)
    a = a.astype(np.float64, copy=True)
    if a.size == 0:
        return a
    vmin = float(np.min(a))
    vmax = float(np.max(a))
    if vmax == vmin:
        return a
    return (a - vmin) / (vmax - vmin)


def magnitude_spectrum(F, log: bool = True) -> np.ndarray:
    """
    Return magnitude spectrum for visualization.
    If log is True, returns log_compress(F).
    """
    if log:
        return log_compress(F)
    return np.abs(np.asarray(F))
