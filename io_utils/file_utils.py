# io_utils/file_utils.py
"""
File naming, run-parameter recording, and zipping helpers.
"""

import os
import datetime
import zipfile
from enum import Enum
from typing import Dict, Iterable

RESULT_EXTENSIONS = (".png", ".jpg", ".txt")


def make_result_filename(
    projname: str,
    input_path: str,
    pass_mode: str,
    mask_size: float,
    noise_percent: float,
    desc: str,
    ext: str = "png",
    outdir: str = ".",
) -> str:
    base = os.path.splitext(os.path.basename(input_path))[0]
    timestamp = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
    safe_desc = str(desc).replace(" ", "_")
    fname = f"{projname}_{base}_{pass_mode}_mask-{mask_size:.2f}_noise-{noise_percent:g}_{safe_desc}_{timestamp}.{ext}"
    os.makedirs(outdir, exist_ok=True)
    return os.path.join(outdir, fname)


def _format_param(value) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        return f"{value:g}"
    if isinstance(value, tuple) and len(value) == 2:
        # (rows, cols) -> WxH, the way sizes are given on the command line
        return f"{value[1]}x{value[0]}"
    return str(value)


def save_parameters_txt(outdir: str, params: Dict) -> str:
    """
    Write `params` as `key: value` lines under a timestamped header.
    Enums are written by value, floats compactly, (rows, cols) shapes as WxH.
    """
    os.makedirs(outdir, exist_ok=True)
    path = os.path.join(outdir, "parameters.txt")
    stamp = datetime.datetime.now().isoformat(timespec="seconds")
    with open(path, "w", encoding="utf-8") as f:
        f.write(f"# spectral filter run {stamp}\n")
        for k, v in params.items():
            f.write(f"{k}: {_format_param(v)}\n")
    return path


def zip_results(dir_to_zip: str, zip_path: str, extensions: Iterable[str] = RESULT_EXTENSIONS) -> str:
    """Zip the stage outputs under `dir_to_zip`; other files and the archive itself are left out."""
    keep = tuple(e.lower() for e in extensions)
    target = os.path.abspath(zip_path)
    with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
        for root, _, files in os.walk(dir_to_zip):
            for file in sorted(files):
                full = os.path.join(root, file)
                if os.path.abspath(full) == target or not file.lower().endswith(keep):
                    continue
                zf.write(full, os.path.relpath(full, start=dir_to_zip))
    return zip_path
