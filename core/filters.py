import numpy as np
from enum import Enum
from typing import Optional, Tuple, Union

from .image import as_matrix


class FilterPassMode(Enum):
    LOW = "low"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Union["FilterPassMode", str]) -> "FilterPassMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown pass mode '{value}'. Choose 'low' or 'high'.") from None


# --- Distance grid & helpers ---
def _squared_distance_grid(
        shape: Tuple[int, int],
        center: Optional[Tuple[int, int]] = None,
    ) -> np.ndarray:
    """
    Squared distance grid D2[row, col] from an integer center.
    Default center = (rows // 2, cols // 2), the centered spectrum's middle cell.
    """
    rows, cols = shape
    if center is None:
        r0, c0 = rows // 2, cols // 2
    else:
        r0, c0 = int(center[0]), int(center[1])
    r = np.arange(rows, dtype=np.float64).reshape(rows, 1) - r0
    c = np.arange(cols, dtype=np.float64).reshape(1, cols) - c0
    return r * r + c * c


def mask_radius(shape: Tuple[int, int], mask_size: float) -> int:
    """
    Radius in pixels for a relative mask size in [0, 1]:
    int(mask_size * sqrt(rows^2 + cols^2) / 2), truncated toward zero.
    """
    rows, cols = shape
    diagonal = np.sqrt(float(rows) * float(rows) + float(cols) * float(cols))
    return int(diagonal * float(mask_size) / 2.0)


# --- Masks ---
def generate_mask(
        width: int,
        height: int,
        radius: float,
        pass_mode: Union[FilterPassMode, str] = FilterPassMode.LOW,
    ) -> np.ndarray:
    """
    Ideal radial mask of shape (height, width) centered at (height//2, width//2).

    LOW keeps cells whose squared distance is strictly below radius^2; HIGH is
    its exact complement. Cells exactly on the boundary therefore belong to
    HIGH, and with radius 0 the LOW mask is empty (center included).
    """
    pass_mode = FilterPassMode.parse(pass_mode)
    D2 = _squared_distance_grid((height, width))
    inside = D2 < float(radius) * float(radius)
    if pass_mode is FilterPassMode.LOW:
        return inside.astype(np.float64)
    return (~inside).astype(np.float64)


def build_mask(
        shape: Tuple[int, int],
        mask_size: float,
        pass_mode: Union[FilterPassMode, str] = FilterPassMode.LOW,
    ) -> np.ndarray:
    """Mask for a spectrum of `shape` with a relative size in [0, 1]."""
    if not 0.0 <= float(mask_size) <= 1.0:
        raise ValueError("mask_size must lie in [0, 1].")
    rows, cols = shape
    return generate_mask(cols, rows, mask_radius(shape, mask_size), pass_mode)


def apply_mask(
        spectrum,
        mask_size: float,
        pass_mode: Union[FilterPassMode, str] = FilterPassMode.LOW,
    ) -> Optional[np.ndarray]:
    """
    Multiply a centered spectrum by the radial mask for `mask_size`.
    Returns None (no-op) for an empty spectrum or mask_size outside [0, 1].
    """
    F = as_matrix(spectrum, dtype=np.complex128)
    if F is None or not 0.0 <= float(mask_size) <= 1.0:
        return None
    mask = build_mask(F.shape, mask_size, pass_mode)
    return F * mask
