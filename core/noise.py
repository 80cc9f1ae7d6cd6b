"""
core/noise.py

Additive Gaussian noise at a requested energy ratio.

The noise matrix is scaled so that sum(noise^2) == percent/100 * sum(source^2),
then the absolute value of the noisy sum is kept (intensities stay non-negative;
strongly negative excursions are reflected rather than clipped).
"""

from typing import Optional

import numpy as np

from .image import as_matrix


def noise_scaling_factor(signal: np.ndarray, noise: np.ndarray, percent: float) -> float:
    """k = sqrt((percent/100) * signal_energy / noise_energy); 0 when noise carries no energy."""
    signal_energy = float(np.sum(signal * signal))
    noise_energy = float(np.sum(noise * noise))
    if noise_energy == 0.0:
        return 0.0
    return float(np.sqrt((percent / 100.0) * signal_energy / noise_energy))


def inject_noise(
    source,
    percent: float,
    rng: Optional[np.random.Generator] = None,
) -> Optional[np.ndarray]:
    """
    Return |source + k * N(0,1)| with k chosen by noise_scaling_factor.
    Returns None (no-op) for empty input or a negative percent.
    """
    src = as_matrix(source, dtype=np.float64)
    if src is None or percent < 0:
        return None
    if rng is None:
        rng = np.random.default_rng()
    noise = rng.standard_normal(src.shape)
    k = noise_scaling_factor(src, noise, float(percent))
    return np.abs(src + k * noise)
