import numpy as np
from core.exceptions import ResultCode
from core.pipeline import SpectralFilterPipeline, SLOT_ORDER
from io_utils.image_handler import load_matrix

def _loaded(img):
    p = SpectralFilterPipeline()
    assert p.load_matrix(img) is ResultCode.OK
    return p

def test_pipeline_constant_image_low_pass():
    img = np.full((16, 16), 100.0)
    p = _loaded(img)
    assert p.run(0.1, "low") is ResultCode.OK
    assert np.allclose(p.processed, img, atol=1e-9)

def test_pipeline_constant_image_high_pass_removes_dc():
    img = np.full((16, 16), 100.0)
    p = _loaded(img)
    assert p.run(0.1, "high") is ResultCode.OK
    assert np.allclose(p.processed, 0.0, atol=1e-9)
    assert np.all(p.processed >= 0)

def test_load_seeds_resized_and_noisy():
    img = np.arange(12, dtype=float).reshape(3, 4)
    p = _loaded(img)
    assert np.array_equal(p.original, img)
    assert np.array_equal(p.resized, img)
    assert np.array_equal(p.noisy, img)
    assert p.spectrum is None and p.masked_spectrum is None and p.processed is None

def test_stages_step_by_step():
    rng = np.random.default_rng(0)
    img = rng.random((8, 8)) * 255
    p = _loaded(img)
    assert p.resize(16, 16, "zero_padding") is ResultCode.OK
    assert p.resized.shape == (16, 16)
    assert p.add_noise(5.0, rng=np.random.default_rng(1)) is ResultCode.OK
    assert p.compute_fourier_transform() is ResultCode.OK
    assert p.spectrum.dtype == np.complex128
    assert p.log_spectrum.shape == (16, 16)
    assert p.apply_filter_mask(0.4, "low") is ResultCode.OK
    assert p.mask.shape == (16, 16)
    assert p.log_masked_spectrum is not None
    assert p.compute_inverse_fourier_transform() is ResultCode.OK
    assert p.processed.shape == (16, 16)
    assert np.all(p.processed >= 0)

def test_upstream_write_empties_downstream_slots():
    img = np.random.default_rng(3).random((8, 8))
    p = _loaded(img)
    assert p.run(0.5, "low") is ResultCode.OK
    assert all(not p.is_empty(name) for name in SLOT_ORDER)

    assert p.compute_fourier_transform() is ResultCode.OK
    assert p.masked_spectrum is None
    assert p.processed is None
    assert p.mask is None

    assert p.apply_filter_mask(0.5, "high") is ResultCode.OK
    assert p.compute_inverse_fourier_transform() is ResultCode.OK
    assert p.resize(4, 4, "bilinear") is ResultCode.OK
    assert p.spectrum is None and p.masked_spectrum is None and p.processed is None
    assert p.noisy.shape == (4, 4)

def test_stages_on_empty_pipeline_are_noops():
    p = SpectralFilterPipeline()
    assert p.resize(4, 4) is ResultCode.INVALID_INPUT
    assert p.add_noise(10.0) is ResultCode.INVALID_INPUT
    assert p.compute_fourier_transform() is ResultCode.INVALID_INPUT
    assert p.apply_filter_mask(0.5, "low") is ResultCode.INVALID_INPUT
    assert p.compute_inverse_fourier_transform() is ResultCode.INVALID_INPUT
    assert p.run(0.5) is ResultCode.INVALID_INPUT
    assert all(p.is_empty(name) for name in SLOT_ORDER)

def test_invalid_parameters_leave_state_untouched():
    img = np.ones((4, 4))
    p = _loaded(img)
    assert p.run(0.5, "low") is ResultCode.OK
    processed = p.processed
    assert p.resize(0, 4) is ResultCode.INVALID_INPUT
    assert p.apply_filter_mask(2.0, "low") is ResultCode.INVALID_INPUT
    assert np.array_equal(p.processed, processed)

def test_load_failure_keeps_slots(tmp_path):
    img = np.ones((4, 4))
    p = _loaded(img)
    assert p.load_from_file(str(tmp_path / "missing.png"), load_matrix) is ResultCode.ERROR
    assert np.array_equal(p.original, img)

def test_load_from_file_uses_given_loader():
    img = np.arange(6, dtype=float).reshape(2, 3)
    seen = []

    def loader(path):
        seen.append(path)
        return img

    p = SpectralFilterPipeline()
    assert p.load_from_file("cat.png", loader) is ResultCode.OK
    assert seen == ["cat.png"]
    assert np.array_equal(p.noisy, img)

def test_unknown_mode_strings_are_rejected_without_raising():
    img = np.ones((4, 4))
    p = _loaded(img)
    assert p.compute_fourier_transform() is ResultCode.OK
    spectrum = p.spectrum
    assert p.apply_filter_mask(0.5, "band") is ResultCode.INVALID_INPUT
    assert p.masked_spectrum is None
    assert np.array_equal(p.spectrum, spectrum)
    assert p.resize(4, 4, "bicubic") is ResultCode.INVALID_INPUT
    assert np.array_equal(p.resized, img)
    assert p.spectrum is not None
    assert p.run(0.5, "band") is ResultCode.INVALID_INPUT
    assert p.run(0.5, "low", width=4, height=4, resize_mode="bicubic") is ResultCode.INVALID_INPUT

    empty = SpectralFilterPipeline()
    assert empty.resize(4, 4, "bicubic") is ResultCode.INVALID_INPUT
    assert empty.apply_filter_mask(0.5, "band") is ResultCode.INVALID_INPUT

def test_run_without_noise_discards_previous_noise():
    img = np.full((8, 8), 50.0)
    p = _loaded(img)
    assert p.run(0.2, "low", noise_percent=10.0, rng=np.random.default_rng(0)) is ResultCode.OK
    assert not np.allclose(p.noisy, img)
    assert p.run(0.2, "low") is ResultCode.OK
    assert np.array_equal(p.noisy, img)

def test_slot_reads_are_copies():
    img = np.ones((4, 4))
    p = _loaded(img)
    r = p.resized
    r[0, 0] = 99
    assert p.resized[0, 0] == 1.0
