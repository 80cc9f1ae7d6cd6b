import os
import numpy as np
from core.fft_engine import compute_spectrogram
from visuals.plots import plot_mask, plot_magnitude_spectrum, plot_spectrogram, compare_and_save

def test_plot_mask(tmp_path):
    L = np.zeros((32, 24), dtype=float)
    L[16, 12] = 1.0
    p = os.path.join(str(tmp_path), "mask.png")
    assert plot_mask(L, out_path=p) == p
    assert os.path.exists(p)
    assert np.array_equal(plot_mask(L), L)

def test_plot_spectrum_and_compare(tmp_path):
    outdir = str(tmp_path / "spec")
    F = np.zeros((32, 32), dtype=complex)
    F[16, 16] = 1.0 + 0j
    p_spec = os.path.join(outdir, "spec.png")
    assert plot_magnitude_spectrum(F, out_path=p_spec) == p_spec
    disp = plot_magnitude_spectrum(F, is_shifted=False)
    assert disp.shape == (32, 32)
    assert disp.max() == 1.0

    orig = np.zeros((32, 32))
    processed = np.ones((32, 32)) * 10
    pm = os.path.join(outdir, "cmp.png")
    assert compare_and_save(orig, processed, noisy=orig + 1, out_path=pm) == pm
    assert os.path.exists(pm)

def test_plot_spectrogram(tmp_path):
    frames = compute_spectrogram(np.sin(np.arange(256) * 0.3), 32, 16)
    p = os.path.join(str(tmp_path), "sg.png")
    assert plot_spectrogram(frames, out_path=p) == p
    assert os.path.exists(p)
