"""
core/pipeline.py

Frequency-domain filtering pipeline for grayscale images.

Stages (each a pure function, also driven by SpectralFilterPipeline):
  1) resize_matrix                     (core.resize)
  2) inject_noise                      (core.noise)
  3) forward_transform_and_center      fft2d(+1) then fft_shift
  4) apply_mask                        (core.filters) radial low/high pass
  5) inverse_transform_and_normalize   ifft_shift, fft2d(-1), / (rows*cols),
                                       real part clamped at 0

SpectralFilterPipeline keeps one slot per stage output:
  original -> resized -> noisy -> spectrum -> masked_spectrum -> processed
Writing a slot empties every slot after it, so stale downstream results are
never readable. Stages run on an empty input slot are no-ops returning
ResultCode.INVALID_INPUT.
"""

import logging
from typing import Callable, Dict, Optional, Union

import numpy as np

from .display import log_compress
from .exceptions import ImageLoadError, ResultCode
from .fft_engine import FORWARD, INVERSE, fft2d, fft_shift, ifft_shift
from .filters import FilterPassMode, apply_mask, build_mask
from .image import GrayImage, as_matrix
from .noise import inject_noise
from .resize import ResizeMode, resize_matrix

# path -> 2D matrix; raises ImageLoadError on failure
MatrixLoader = Callable[[str], np.ndarray]

logger = logging.getLogger(__name__)

SLOT_ORDER = ("original", "resized", "noisy", "spectrum", "masked_spectrum", "processed")
_COMPLEX_SLOTS = ("spectrum", "masked_spectrum")


def forward_transform_and_center(source) -> Optional[np.ndarray]:
    """Lift a real matrix to complex, transform with direction +1 and center DC."""
    src = as_matrix(source, dtype=np.float64)
    if src is None:
        return None
    F = src.astype(np.complex128)
    fft2d(F, FORWARD)
    return fft_shift(F)


def inverse_transform_and_normalize(masked_spectrum) -> Optional[np.ndarray]:
    """
    Undo the centering, transform with direction -1, divide by rows*cols and
    keep the non-negative real part.
    """
    Fs = as_matrix(masked_spectrum, dtype=np.complex128)
    if Fs is None:
        return None
    G = ifft_shift(Fs)
    fft2d(G, INVERSE)
    rows, cols = G.shape
    G /= float(rows * cols)
    return np.maximum(0.0, np.real(G))


class SpectralFilterPipeline:
    """Stateful driver holding the output of every stage."""

    def __init__(self):
        self._slots: Dict[str, GrayImage] = {
            name: GrayImage(np.complex128 if name in _COMPLEX_SLOTS else np.float64)
            for name in SLOT_ORDER
        }
        self._mask: Optional[np.ndarray] = None

    # --- slot bookkeeping ---
    def _write(self, name: str, mat) -> ResultCode:
        """Store `mat` in slot `name` and empty every downstream slot."""
        code = self._slots[name].set(mat)
        if code is not ResultCode.OK:
            return code
        self.invalidate_after(name)
        logger.debug("Slot '%s' updated, shape=%s", name, self._slots[name].shape)
        return ResultCode.OK

    def invalidate_after(self, name: str) -> None:
        idx = SLOT_ORDER.index(name)
        for downstream in SLOT_ORDER[idx + 1:]:
            self._slots[downstream].reset()
        if idx < SLOT_ORDER.index("masked_spectrum"):
            self._mask = None

    def reset(self) -> None:
        for slot in self._slots.values():
            slot.reset()
        self._mask = None

    def slot(self, name: str) -> Optional[np.ndarray]:
        if name not in self._slots:
            raise KeyError(f"Unknown pipeline slot '{name}'. Known: {', '.join(SLOT_ORDER)}")
        return self._slots[name].get()

    def is_empty(self, name: str) -> bool:
        return self._slots[name].empty

    @property
    def original(self) -> Optional[np.ndarray]:
        return self.slot("original")

    @property
    def resized(self) -> Optional[np.ndarray]:
        return self.slot("resized")

    @property
    def noisy(self) -> Optional[np.ndarray]:
        return self.slot("noisy")

    @property
    def spectrum(self) -> Optional[np.ndarray]:
        return self.slot("spectrum")

    @property
    def masked_spectrum(self) -> Optional[np.ndarray]:
        return self.slot("masked_spectrum")

    @property
    def processed(self) -> Optional[np.ndarray]:
        return self.slot("processed")

    @property
    def mask(self) -> Optional[np.ndarray]:
        return None if self._mask is None else self._mask.copy()

    @property
    def log_spectrum(self) -> Optional[np.ndarray]:
        F = self.spectrum
        return None if F is None else log_compress(F)

    @property
    def log_masked_spectrum(self) -> Optional[np.ndarray]:
        G = self.masked_spectrum
        return None if G is None else log_compress(G)

    # --- loading ---
    def load_matrix(self, mat) -> ResultCode:
        """Use an in-memory matrix as the original image."""
        src = as_matrix(mat, dtype=np.float64)
        if src is None:
            logger.debug("load_matrix ignored: empty or non-2D input")
            return ResultCode.INVALID_INPUT
        self._write("original", src)
        # resized and noisy start as copies so later stages may be run directly
        self._write("resized", src)
        self._write("noisy", src)
        return ResultCode.OK

    def load_from_file(self, path: str, loader: MatrixLoader) -> ResultCode:
        """
        Read `path` with `loader` (e.g. io_utils.image_handler.load_matrix).
        On ImageLoadError the error is logged and ResultCode.ERROR returned;
        no slot is modified.
        """
        try:
            mat = loader(path)
        except ImageLoadError as e:
            logger.error("Failed to load image: %s", e)
            return ResultCode.ERROR
        logger.info("Loaded %s shape=%s", path, mat.shape)
        return self.load_matrix(mat)

    # --- stages ---
    def resize(
        self,
        width: int,
        height: int,
        mode: Union[ResizeMode, str] = ResizeMode.ZERO_PADDING,
    ) -> ResultCode:
        try:
            mode = ResizeMode.parse(mode)
        except ValueError as e:
            logger.debug("resize skipped: %s", e)
            return ResultCode.INVALID_INPUT
        out = resize_matrix(self._slots["original"].get(), width, height, mode)
        if out is None:
            logger.debug("resize(%s, %s) skipped: invalid size or no image", width, height)
            return ResultCode.INVALID_INPUT
        self._write("resized", out)
        self._write("noisy", out)
        return ResultCode.OK

    def add_noise(self, percent: float, rng: Optional[np.random.Generator] = None) -> ResultCode:
        out = inject_noise(self._slots["resized"].get(), percent, rng=rng)
        if out is None:
            logger.debug("add_noise(%s) skipped: no resized image or negative percent", percent)
            return ResultCode.INVALID_INPUT
        return self._write("noisy", out)

    def compute_fourier_transform(self) -> ResultCode:
        out = forward_transform_and_center(self._slots["noisy"].get())
        if out is None:
            logger.debug("compute_fourier_transform skipped: no noisy image")
            return ResultCode.INVALID_INPUT
        return self._write("spectrum", out)

    def apply_filter_mask(
        self,
        mask_size: float,
        pass_mode: Union[FilterPassMode, str] = FilterPassMode.LOW,
    ) -> ResultCode:
        try:
            pass_mode = FilterPassMode.parse(pass_mode)
        except ValueError as e:
            logger.debug("apply_filter_mask skipped: %s", e)
            return ResultCode.INVALID_INPUT
        F = self._slots["spectrum"].get()
        out = apply_mask(F, mask_size, pass_mode)
        if out is None:
            logger.debug("apply_filter_mask(%s) skipped: no spectrum or mask size outside [0, 1]", mask_size)
            return ResultCode.INVALID_INPUT
        code = self._write("masked_spectrum", out)
        self._mask = build_mask(F.shape, mask_size, pass_mode)
        return code

    def compute_inverse_fourier_transform(self) -> ResultCode:
        out = inverse_transform_and_normalize(self._slots["masked_spectrum"].get())
        if out is None:
            logger.debug("compute_inverse_fourier_transform skipped: no masked spectrum")
            return ResultCode.INVALID_INPUT
        return self._write("processed", out)

    def run(
        self,
        mask_size: float,
        pass_mode: Union[FilterPassMode, str] = FilterPassMode.LOW,
        *,
        width: Optional[int] = None,
        height: Optional[int] = None,
        resize_mode: Union[ResizeMode, str] = ResizeMode.ZERO_PADDING,
        noise_percent: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ) -> ResultCode:
        """
        Run every stage after loading. Resizing happens only when both width
        and height are given; noise only when noise_percent > 0.
        Stops at the first stage that does not return OK.
        """
        if self._slots["original"].empty:
            return ResultCode.INVALID_INPUT
        steps = []
        if width is not None and height is not None:
            steps.append(lambda: self.resize(width, height, resize_mode))
        if noise_percent > 0:
            steps.append(lambda: self.add_noise(noise_percent, rng=rng))
        else:
            # drop noise left over from an earlier run
            steps.append(lambda: self._write("noisy", self._slots["resized"].get()))
        steps.append(self.compute_fourier_transform)
        steps.append(lambda: self.apply_filter_mask(mask_size, pass_mode))
        steps.append(self.compute_inverse_fourier_transform)

        n = len(steps)
        for i, step in enumerate(steps):
            code = step()
            logger.debug("Pipeline step %d/%d -> %s", i + 1, n, code.value)
            if code is not ResultCode.OK:
                return code
        return ResultCode.OK

    def __repr__(self) -> str:
        filled = [name for name in SLOT_ORDER if not self._slots[name].empty]
        return f"SpectralFilterPipeline(filled={filled})"
