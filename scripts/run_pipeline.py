"""
Run the spectral filtering pipeline on one image and write every stage output
into a results directory:
  noisy.png, spectrum_log.png, mask.png, masked_spectrum_log.png,
  processed.png, comparison.png, parameters.txt (and optionally a zip).

Usage (from project root):
python -m scripts.run_pipeline data/sample1.png --mask-size 0.1 --pass-mode low --noise 5
"""

import argparse
import logging
import os
import sys
from datetime import datetime

import numpy as np

from core.exceptions import ResultCode
from core.filters import FilterPassMode
from core.pipeline import SpectralFilterPipeline
from core.resize import ResizeMode
from io_utils.file_utils import make_result_filename, save_parameters_txt, zip_results
from io_utils.image_handler import load_matrix, save_matrix
from visuals.plots import compare_and_save, plot_magnitude_spectrum, plot_mask

PROJNAME = "spectral"
DEFAULT_MASK_SIZE = 0.1
DEFAULT_PASS_MODE = "low"
DEFAULT_NOISE_PERCENT = 0.0
DEFAULT_RESIZE_MODE = "zero_padding"
OUTDIR = "results"


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Frequency-domain radial filtering of a grayscale image.",
    )
    parser.add_argument("image", help="Input image (colour is reduced to luminance).")
    parser.add_argument("--mask-size", type=float, default=DEFAULT_MASK_SIZE,
                        help=f"Mask radius as a fraction of half the diagonal, 0..1 (default: {DEFAULT_MASK_SIZE}).")
    parser.add_argument("--pass-mode", choices=[m.value for m in FilterPassMode], default=DEFAULT_PASS_MODE,
                        help=f"Keep frequencies inside (low) or outside (high) the radius (default: {DEFAULT_PASS_MODE}).")
    parser.add_argument("--noise", type=float, default=DEFAULT_NOISE_PERCENT,
                        help="Noise energy as a percentage of signal energy (default: 0).")
    parser.add_argument("--width", type=int, default=None, help="Resize target width.")
    parser.add_argument("--height", type=int, default=None, help="Resize target height.")
    parser.add_argument("--resize-mode", choices=[m.value for m in ResizeMode], default=DEFAULT_RESIZE_MODE)
    parser.add_argument("--seed", type=int, default=None, help="Seed for the noise generator.")
    parser.add_argument("--outdir", default=None, help="Output directory (default: results/run_<timestamp>).")
    parser.add_argument("--zip", action="store_true", help="Also zip the output directory.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    outdir = args.outdir or os.path.join(OUTDIR, f"run_{datetime.now().strftime('%Y%m%dT%H%M%S')}")
    os.makedirs(outdir, exist_ok=True)

    pipeline = SpectralFilterPipeline()
    if pipeline.load_from_file(args.image, load_matrix) is not ResultCode.OK:
        print(f"Could not load {args.image}")
        return 1

    rng = np.random.default_rng(args.seed)
    code = pipeline.run(
        args.mask_size,
        args.pass_mode,
        width=args.width,
        height=args.height,
        resize_mode=args.resize_mode,
        noise_percent=args.noise,
        rng=rng,
    )
    if code is not ResultCode.OK:
        print(f"Pipeline stopped early ({code.value}); check --width/--height/--mask-size/--noise.")
        return 2

    save_matrix(os.path.join(outdir, "noisy.png"), pipeline.noisy)
    plot_magnitude_spectrum(pipeline.spectrum, out_path=os.path.join(outdir, "spectrum_log.png"))
    plot_mask(pipeline.mask, out_path=os.path.join(outdir, "mask.png"))
    plot_magnitude_spectrum(pipeline.masked_spectrum, out_path=os.path.join(outdir, "masked_spectrum_log.png"))
    processed_path = make_result_filename(
        PROJNAME, args.image, args.pass_mode, args.mask_size, args.noise, "processed", outdir=outdir
    )
    save_matrix(processed_path, pipeline.processed)
    compare_and_save(
        pipeline.resized,
        pipeline.processed,
        noisy=pipeline.noisy if args.noise > 0 else None,
        out_path=os.path.join(outdir, "comparison.png"),
    )
    save_parameters_txt(outdir, {
        "input": args.image,
        "size": pipeline.processed.shape,
        "mask_size": args.mask_size,
        "pass_mode": args.pass_mode,
        "noise_percent": args.noise,
        "resize": f"{args.width}x{args.height} ({args.resize_mode})" if args.width and args.height else "none",
        "seed": args.seed,
    })

    if args.zip:
        zip_results(outdir, outdir.rstrip(os.sep) + ".zip")
    print("Outputs written to:", outdir)
    return 0


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(run(args))
