"""
core/resize.py

Resampling of a real matrix to a new (height, width) canvas.

- ResizeMode.ZERO_PADDING: crop/pad, no interpolation
- ResizeMode.BILINEAR: bilinear sampling with neighbour indices clamped to
  the last valid row/column; values are truncated to integer grey levels
"""

from enum import Enum
from typing import Optional, Union

import numpy as np

from .image import as_matrix


class ResizeMode(Enum):
    ZERO_PADDING = "zero_padding"
    BILINEAR = "bilinear"

    @classmethod
    def parse(cls, value: Union["ResizeMode", str]) -> "ResizeMode":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        if key == "zeropadding":
            key = "zero_padding"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown resize mode '{value}'. Choose 'zero_padding' or 'bilinear'.") from None


def _zero_padding(src: np.ndarray, width: int, height: int) -> np.ndarray:
    out = np.zeros((height, width), dtype=np.float64)
    h = min(height, src.shape[0])
    w = min(width, src.shape[1])
    out[:h, :w] = src[:h, :w]
    return out


def _bilinear(src: np.ndarray, width: int, height: int) -> np.ndarray:
    src_h, src_w = src.shape
    dx = (src_w - 1.0) / float(width)
    dy = (src_h - 1.0) / float(height)

    x = np.arange(width, dtype=np.float64) * dx
    y = np.arange(height, dtype=np.float64) * dy
    x0 = np.floor(x).astype(int)
    y0 = np.floor(y).astype(int)
    xf = (x - x0).reshape(1, width)
    yf = (y - y0).reshape(height, 1)
    # clamp so a single-row/column source never indexes past its edge
    x1 = np.minimum(x0 + 1, src_w - 1)
    y1 = np.minimum(y0 + 1, src_h - 1)

    A = src[np.ix_(y0, x0)]
    B = src[np.ix_(y0, x1)]
    C = src[np.ix_(y1, x1)]
    D = src[np.ix_(y1, x0)]

    gray = A * (1 - xf) * (1 - yf) + B * xf * (1 - yf) + D * yf * (1 - xf) + C * xf * yf
    return np.trunc(gray)


def resize_matrix(
    source,
    width: int,
    height: int,
    mode: Union[ResizeMode, str] = ResizeMode.ZERO_PADDING,
) -> Optional[np.ndarray]:
    """
    Resize `source` to shape (height, width).
    Returns None (no-op) for non-positive target sizes or empty input.
    """
    mode = ResizeMode.parse(mode)
    src = as_matrix(source, dtype=np.float64)
    if width <= 0 or height <= 0 or src is None:
        return None
    width, height = int(width), int(height)
    if mode is ResizeMode.ZERO_PADDING:
        return _zero_padding(src, width, height)
    return _bilinear(src, width, height)
