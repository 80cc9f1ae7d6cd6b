"""
Spectrogram demo on a synthetic chirp.
Writes results/demo_spectrogram/spectrogram.png.
Run from project root:
python -m scripts.demo_spectrogram
"""

import os
import numpy as np
from core.fft_engine import compute_spectrogram
from visuals.plots import plot_spectrogram

OUTDIR = "results/demo_spectrogram"
SAMPLES = 4096
WINDOW_SIZE = 128
WINDOW_OVERLAP = 64


def make_chirp(n: int = SAMPLES, f0: float = 0.01, f1: float = 0.4) -> np.ndarray:
    """Linear chirp sweeping from f0 to f1 cycles/sample."""
    t = np.arange(n)
    phase = 2 * np.pi * (f0 * t + (f1 - f0) * t * t / (2.0 * n))
    return np.sin(phase)


def demo(window_size: int = WINDOW_SIZE, window_overlap: int = WINDOW_OVERLAP):
    os.makedirs(OUTDIR, exist_ok=True)
    frames = compute_spectrogram(make_chirp(), window_size, window_overlap)
    # real input: upper half of each frame mirrors the lower half
    half = [f[: window_size // 2] for f in frames]
    out = plot_spectrogram(half, out_path=os.path.join(OUTDIR, "spectrogram.png"), title="Chirp spectrogram")
    print(f"{len(frames)} frames of {window_size} bins -> {out}")


if __name__ == "__main__":
    demo()
