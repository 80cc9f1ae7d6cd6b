"""
visuals/plots.py

Rendering helpers for spectra, masks, spectrograms and before/after comparisons.

APIs:
- plot_magnitude_spectrum(F, out_path=None, is_shifted=True, log=True)
- plot_mask(mask, out_path=None)
- plot_spectrogram(frames, out_path=None, title=None, cmap="magma")
- compare_and_save(original, processed, noisy=None, out_path=None, titles=None)

Notes:
- Raw PNG output goes through core.display (log_compress / normalize) and Pillow.
- Figures use matplotlib. If out_path is None, functions return the normalized
  array or the matplotlib Figure so the caller can display it.
"""

from typing import Optional, Sequence
import os
import numpy as np
import matplotlib.pyplot as plt
from PIL import Image
from core.display import log_compress, normalize
from core.fft_engine import fft_shift


# Helper to ensure outdir exists
def _ensure_outdir(out_path: Optional[str]):
    if out_path is None:
        return None
    d = os.path.dirname(out_path)
    if d:
        os.makedirs(d, exist_ok=True)
    return out_path


def _save_raw_array_image(out_path: Optional[str], arr: np.ndarray, log_scale: bool = False):
    """
    Save a 2D numeric array as a grayscale PNG. No Matplotlib involved.
    Complex input is reduced to magnitude; log_scale applies log2(1 + |x|) first.
    """
    if out_path is None:
        return None

    _ensure_outdir(out_path)

    a = np.asarray(arr)
    if log_scale:
        a = log_compress(a)
    norm = normalize(a)

    # a constant array comes back unstretched; clip keeps it in range
    img_arr = (np.clip(np.squeeze(norm), 0.0, 1.0) * 255.0).astype(np.uint8)
    if img_arr.ndim != 2:
        raise ValueError("_save_raw_array_image expects a 2D array.")
    Image.fromarray(img_arr).save(out_path)
    return out_path


def _save_or_return(fig: plt.Figure, out_path: Optional[str]):
    if out_path is not None:
        _ensure_outdir(out_path)
        fig.savefig(out_path, bbox_inches="tight")
        plt.close(fig)
        return out_path
    else:
        return fig


def plot_magnitude_spectrum(
    F: np.ndarray,
    out_path: Optional[str] = None,
    is_shifted: bool = True,
    log: bool = True,
):
    """
    Save raw magnitude spectrum image when out_path is given (log2-compressed by default).
    Otherwise return the normalized 2D float array.
    """
    F_disp = F if is_shifted else fft_shift(F)

    if out_path is not None:
        return _save_raw_array_image(out_path, np.abs(F_disp), log_scale=bool(log))

    mag = log_compress(F_disp) if log else np.abs(F_disp)
    return normalize(mag)


def plot_mask(
    mask: np.ndarray,
    out_path: Optional[str] = None,
):
    """
    Save a radial mask as grayscale PNG (white = pass).
    Without out_path, returns the mask as float array.
    """
    if out_path is not None:
        return _save_raw_array_image(out_path, mask, log_scale=False)
    return np.asarray(mask, dtype=np.float64).copy()


def plot_spectrogram(
    frames: Sequence[np.ndarray],
    out_path: Optional[str] = None,
    title: Optional[str] = "Spectrogram",
    cmap: str = "magma",
    log: bool = True,
):
    """
    Draw spectrogram frames (one column per window, bins on the vertical axis).
    Returns out_path when saved, else the Figure.
    """
    if len(frames) == 0:
        raise ValueError("plot_spectrogram needs at least one frame.")
    data = np.stack([np.asarray(f, dtype=np.float64) for f in frames], axis=1)
    if log:
        data = log_compress(data)

    fig, ax = plt.subplots(figsize=(8, 4))
    im = ax.imshow(data, origin="lower", aspect="auto", cmap=cmap, interpolation="nearest")
    ax.set_xlabel("Window")
    ax.set_ylabel("Bin")
    if title:
        ax.set_title(title)
    fig.colorbar(im, ax=ax)
    return _save_or_return(fig, out_path)


def compare_and_save(
    original: np.ndarray,
    processed: np.ndarray,
    noisy: Optional[np.ndarray] = None,
    out_path: Optional[str] = None,
    titles: Optional[Sequence[str]] = None,
):
    """
    Original | (Noisy) | Processed side by side, each min-max normalized.
    """
    panels = [original] if noisy is None else [original, noisy]
    panels.append(processed)
    if titles is None:
        titles = ["Original", "Processed"] if noisy is None else ["Original", "Noisy", "Processed"]

    fig, axs = plt.subplots(1, len(panels), figsize=(6 * len(panels), 6))

    for ax, img, title in zip(axs, panels, titles):
        ax.imshow(normalize(img), cmap="gray", interpolation="nearest", vmin=0.0, vmax=1.0)
        ax.set_title(title)
        ax.axis("off")

    if out_path:
        _ensure_outdir(out_path)
        fig.savefig(out_path, dpi=200, bbox_inches="tight", pad_inches=0.05)
        plt.close(fig)
        return out_path
    else:
        return fig
