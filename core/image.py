"""
core/image.py

GrayImage: a single-plane matrix holder used for every pipeline slot.
Each instance is bound to one dtype (float64 for real images, complex128 for
spectra) and offers get / set / reset. Stored matrices are private copies.
"""

from typing import Optional

import numpy as np

from .exceptions import ResultCode


class GrayImage:
    def __init__(self, dtype=np.float64):
        self.dtype = np.dtype(dtype)
        self._mat: Optional[np.ndarray] = None

    @property
    def empty(self) -> bool:
        return self._mat is None or self._mat.size == 0

    @property
    def shape(self):
        return None if self._mat is None else self._mat.shape

    def get(self) -> Optional[np.ndarray]:
        """Return a copy of the stored matrix, or None when empty."""
        if self.empty:
            return None
        return self._mat.copy()

    def set(self, mat) -> ResultCode:
        arr = np.array(mat, dtype=self.dtype)
        if arr.ndim != 2:
            return ResultCode.INVALID_INPUT
        self._mat = arr
        return ResultCode.OK

    def reset(self) -> ResultCode:
        self._mat = None
        return ResultCode.OK

    def __repr__(self) -> str:
        return f"GrayImage(dtype={self.dtype.name}, shape={self.shape})"


def as_matrix(source, dtype=np.float64) -> Optional[np.ndarray]:
    """
    Convert `source` to a 2D array of `dtype`.
    Returns None for None, empty, or non-2D input (stages treat that as a no-op).
    """
    if source is None:
        return None
    arr = np.asarray(source, dtype=dtype)
    if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
        return None
    return arr
