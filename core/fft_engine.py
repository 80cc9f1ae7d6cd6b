'''
FFT engine.

Functions:
- slow_dft: O(N^2) DFT for any length (in place)
- fft: recursive radix-2 FFT with slow_dft fallback on odd lengths (in place)
- fft2d: separable 2D transform, rows then columns (in place)
- compute_spectrogram / iter_spectrogram: sliding-window magnitude frames
- fft_shift / ifft_shift: quadrant swap placing DC at the matrix center and back

Direction convention: +1 is the forward transform and -1 the inverse.
Neither direction normalizes; callers divide by N after the inverse.
'''

from typing import Iterator, List

import numpy as np

FORWARD = 1
INVERSE = -1


def _check_direction(direction: int) -> int:
    if direction not in (FORWARD, INVERSE):
        raise ValueError(f"direction must be +1 or -1, got {direction!r}")
    return int(direction)


def _check_signal(data: np.ndarray, name: str) -> None:
    if data.ndim != 1:
        raise ValueError(f"{name} expects a 1D array.")
    if not np.iscomplexobj(data):
        raise ValueError(f"{name} works in place and needs a complex array.")


def slow_dft(data: np.ndarray, direction: int) -> np.ndarray:
    """
    Direct DFT of a 1D complex array, written back into `data`.
    X[k] = sum_n x[n] * exp(direction * 2j*pi*k*n / N)
    Returns `data` for convenience.
    """
    direction = _check_direction(direction)
    _check_signal(data, "slow_dft")
    size = data.shape[0]
    if size == 0:
        return data
    buf = data.copy()
    n = np.arange(size)
    for k in range(size):
        data[k] = np.sum(buf * np.exp(direction * 2j * np.pi * k * n / size))
    return data


def fft(data: np.ndarray, direction: int) -> np.ndarray:
    """
    Recursive decimation-in-time FFT, written back into `data`.

    Even lengths split into even/odd-indexed halves; any odd length
    (including odd factors reached during recursion) falls back to slow_dft.
    `data` must be a 1D complex array.
    """
    direction = _check_direction(direction)
    _check_signal(data, "fft")
    size = data.shape[0]
    if size <= 1:
        return data
    if size % 2 == 1:
        return slow_dft(data, direction)

    half = size // 2
    even = data[0::2].copy()
    odd = data[1::2].copy()
    fft(even, direction)
    fft(odd, direction)

    k = np.arange(half)
    twiddle = np.exp(direction * 2j * np.pi * k / size)
    data[:half] = even + twiddle * odd
    data[half:] = even - twiddle * odd
    return data


def fft2d(matrix: np.ndarray, direction: int) -> np.ndarray:
    """
    Separable 2D transform: fft on every row, then on every column.
    Operates in place on a 2D complex array and returns it.
    """
    direction = _check_direction(direction)
    if matrix.ndim != 2:
        raise ValueError("fft2d expects a 2D complex array.")
    if not np.iscomplexobj(matrix):
        raise ValueError("fft2d expects a complex-valued array (lift real input first).")
    rows, cols = matrix.shape
    for i in range(rows):
        row = matrix[i, :].copy()
        fft(row, direction)
        matrix[i, :] = row
    for j in range(cols):
        col = matrix[:, j].copy()
        fft(col, direction)
        matrix[:, j] = col
    return matrix


def iter_spectrogram(data, window_size: int, window_overlap: int) -> Iterator[np.ndarray]:
    """
    Yield magnitude frames of successive windows over `data`.

    Windows start at 0 and advance by window_size - window_overlap while the
    start offset is inside the input; samples past the end are zero-padded.
    Nothing is yielded when window_size <= window_overlap.
    """
    if window_size <= window_overlap or window_size <= 0:
        return
    samples = np.asarray(data, dtype=np.complex128).ravel()
    size = samples.shape[0]
    step = window_size - window_overlap
    start = 0
    while start < size:
        window = np.zeros(window_size, dtype=np.complex128)
        chunk = samples[start:start + window_size]
        window[:chunk.shape[0]] = chunk
        fft(window, FORWARD)
        yield np.abs(window)
        start += step


def compute_spectrogram(data, window_size: int, window_overlap: int) -> List[np.ndarray]:
    """List form of iter_spectrogram (one magnitude array per window)."""
    return list(iter_spectrogram(data, window_size, window_overlap))


# --- Spectrum centering ---
def fft_shift(matrix: np.ndarray) -> np.ndarray:
    """
    Move the zero-frequency term to the matrix center (returns a new array).

    The bottom-right block of size (rows - rows//2, cols - cols//2) becomes the
    top-left block, so on odd axes the extra row/column stays with the
    quadrant nearer the origin. Works for any dtype.
    """
    m = np.asarray(matrix)
    if m.ndim != 2:
        raise ValueError("fft_shift expects a 2D array.")
    rows, cols = m.shape
    y_half, x_half = rows // 2, cols // 2
    y_rest, x_rest = rows - y_half, cols - x_half
    out = np.empty_like(m)
    out[:y_rest, :x_rest] = m[y_half:, x_half:]
    out[y_rest:, x_rest:] = m[:y_half, :x_half]
    out[:y_rest, x_rest:] = m[y_half:, :x_half]
    out[y_rest:, :x_rest] = m[:y_half, x_half:]
    return out


def ifft_shift(matrix: np.ndarray) -> np.ndarray:
    """Exact inverse of fft_shift (center -> origin)."""
    m = np.asarray(matrix)
    if m.ndim != 2:
        raise ValueError("ifft_shift expects a 2D array.")
    rows, cols = m.shape
    y_half, x_half = rows // 2, cols // 2
    y_rest, x_rest = rows - y_half, cols - x_half
    out = np.empty_like(m)
    out[:y_half, :x_half] = m[y_rest:, x_rest:]
    out[y_half:, x_half:] = m[:y_rest, :x_rest]
    out[:y_half, x_half:] = m[y_rest:, :x_rest]
    out[y_half:, :x_half] = m[:y_rest, x_rest:]
    return out
