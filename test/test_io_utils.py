import os
import zipfile
import numpy as np
import pytest
from PIL import Image
from core.exceptions import ImageLoadError
from core.filters import FilterPassMode
from io_utils.image_handler import read_image, load_matrix, save_image, save_matrix, detect_is_color
from io_utils.file_utils import make_result_filename, save_parameters_txt, zip_results

def test_detect_is_color():
    assert detect_is_color(np.zeros((16, 16, 3)))
    assert not detect_is_color(np.zeros((16, 16)))

def test_save_and_read_roundtrip(tmp_path):
    arr = np.arange(100).reshape(10, 10).astype(np.uint8)
    p = tmp_path / "test.png"
    save_image(str(p), arr)
    out, meta = read_image(str(p))
    assert out.shape == arr.shape
    assert out.dtype == np.uint8
    assert meta["mode"] == "L"

def test_read_image_alpha(tmp_path):
    arr = np.zeros((10, 10, 4), dtype=np.uint8)
    p = tmp_path / "rgba.png"
    Image.fromarray(arr).save(p)
    rgb, meta = read_image(str(p))
    assert meta["has_alpha"]
    assert rgb.shape == (10, 10, 3)

def test_load_matrix_uses_luma_weights(tmp_path):
    arr = np.zeros((4, 6, 3), dtype=np.uint8)
    arr[..., 0] = 255          # pure red
    arr[:, 3:, 0] = 0
    arr[:, 3:, 2] = 100        # blue on the right half
    p = tmp_path / "rgb.png"
    Image.fromarray(arr).save(p)
    mat = load_matrix(str(p))
    assert mat.shape == (4, 6)
    assert mat.dtype == np.float64
    assert np.allclose(mat[:, :3], 0.299 * 255)
    assert np.allclose(mat[:, 3:], 0.114 * 100)

def test_load_matrix_grayscale_unchanged(tmp_path):
    arr = np.arange(20, dtype=np.uint8).reshape(4, 5)
    p = tmp_path / "gray.png"
    save_image(str(p), arr)
    assert np.array_equal(load_matrix(str(p)), arr.astype(float))

def test_load_matrix_errors(tmp_path):
    with pytest.raises(ImageLoadError):
        load_matrix(str(tmp_path / "nope.png"))
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"not an image")
    with pytest.raises(ImageLoadError):
        load_matrix(str(bad))

def test_save_matrix_normalizes(tmp_path):
    mat = np.array([[0.0, 0.5], [1.0, 2.0]])
    p = save_matrix(str(tmp_path / "m.png"), mat)
    out, _ = read_image(p)
    assert out[0, 0] == 0
    assert out[1, 1] == 255

def test_parameters_and_zip(tmp_path):
    outdir = tmp_path / "run"
    path = save_parameters_txt(str(outdir), {
        "mask_size": 0.2,
        "pass_mode": FilterPassMode.HIGH,
        "size": (96, 128),
        "seed": None,
    })
    with open(path, encoding="utf-8") as f:
        lines = f.read().splitlines()
    assert lines[0].startswith("# spectral filter run ")
    assert lines[1:] == ["mask_size: 0.2", "pass_mode: high", "size: 128x96", "seed: None"]

    (outdir / "notes.log").write_text("scratch")
    save_image(str(outdir / "processed.png"), np.zeros((2, 2), dtype=np.uint8))
    zp = zip_results(str(outdir), str(outdir / "run.zip"))
    with zipfile.ZipFile(zp) as zf:
        assert sorted(zf.namelist()) == ["parameters.txt", "processed.png"]

def test_make_result_filename(tmp_path):
    name = make_result_filename("spectral", "data/cat.png", "low", 0.25, 5.0, "processed", outdir=str(tmp_path))
    base = os.path.basename(name)
    assert base.startswith("spectral_cat_low_mask-0.25_noise-5_processed_")
    assert base.endswith(".png")
