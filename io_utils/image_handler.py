# io_utils/image_handler.py
"""
Image read/write helpers using Pillow.

Functions:
- read_image(path) -> (array, meta); array is (H x W) or (H x W x 3), dtype preserved
- load_matrix(path) -> float64 luminance matrix (0.299 R + 0.587 G + 0.114 B)
- save_image(path, array) -> writes image
- save_matrix(path, matrix) -> min-max normalizes and writes an 8-bit grayscale image
- detect_is_color(array) -> bool
"""

import logging
from typing import Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError
import pillow_avif  # noqa: F401  (registers the AVIF decoder)

from core.display import normalize
from core.exceptions import ImageLoadError

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def read_image(path: str) -> Tuple[np.ndarray, dict]:
    """
    Read an image from `path` and return (array, meta).
    - Returns RGB arrays of shape (H,W,3) or grayscale (H,W).
    - Alpha is dropped; meta records whether it was present.
    Raises ImageLoadError if the file is missing or cannot be decoded.
    """
    try:
        img = Image.open(path)
        img.load()
    except (FileNotFoundError, UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"Failed to load image '{path}': {e}") from e

    mode = img.mode
    has_alpha = mode in ("RGBA", "LA") or ("transparency" in img.info)
    if mode in ("L", "I", "I;16", "F", "1"):
        arr = np.asarray(img)
        if mode == "1":
            arr = arr.astype(np.uint8) * 255
        meta = {"mode": "L", "size": img.size, "has_alpha": False}
        return arr, meta
    if mode == "LA":
        arr = np.asarray(img.convert("L"))
        meta = {"mode": "L", "size": img.size, "has_alpha": True}
        return arr, meta

    arr = np.asarray(img.convert("RGB"))
    meta = {"mode": "RGB", "size": img.size, "has_alpha": has_alpha}
    return arr, meta


def detect_is_color(array: np.ndarray) -> bool:
    return array.ndim == 3 and array.shape[2] == 3


def to_luminance(array: np.ndarray) -> np.ndarray:
    """Reduce an RGB array to float64 luminance; grayscale input is only cast."""
    arr = np.asarray(array, dtype=np.float64)
    if detect_is_color(arr):
        r, g, b = LUMA_WEIGHTS
        return r * arr[..., 0] + g * arr[..., 1] + b * arr[..., 2]
    if arr.ndim != 2:
        raise ValueError("to_luminance expects HxW or HxWx3 array.")
    return arr


def load_matrix(path: str) -> np.ndarray:
    """
    Decode `path` into a 2D float64 luminance matrix.
    Raises ImageLoadError when the file cannot be read or is empty.
    """
    arr, meta = read_image(path)
    mat = to_luminance(arr)
    if mat.size == 0:
        raise ImageLoadError(f"Image '{path}' has no pixels.")
    logger.debug("Decoded %s mode=%s size=%s", path, meta["mode"], meta["size"])
    return mat


def save_image(path: str, array: np.ndarray):
    """
    Save an image array to `path`. Accepts HxW (grayscale) or HxWx3 (RGB).
    Casts floats to uint8 by clipping to 0..255.
    """
    if not (array.ndim == 2 or (array.ndim == 3 and array.shape[2] == 3)):
        raise ValueError("save_image expects HxW or HxWx3 array.")

    if np.issubdtype(array.dtype, np.floating):
        arr = np.clip(array, 0.0, 255.0).astype(np.uint8)
    else:
        arr = array.astype(np.uint8)

    # uint8 HxW maps to mode L, HxWx3 to RGB
    img = Image.fromarray(arr)
    img.save(path)


def save_matrix(path: str, matrix) -> str:
    """
    Write a real (or complex, by magnitude) matrix as an 8-bit grayscale image.
    Values are min-max normalized first; a constant matrix is clipped as-is.
    """
    norm = normalize(matrix)
    if norm.ndim != 2 or norm.size == 0:
        raise ValueError("save_matrix expects a non-empty 2D matrix.")
    if float(np.max(norm)) == float(np.min(norm)):
        save_image(path, np.clip(norm, 0.0, 255.0))
    else:
        save_image(path, norm * 255.0)
    return path
