# io_utils/__init__.py
"""
I/O helpers package for the Fourier spectral filter project.
"""
from .image_handler import read_image, load_matrix, save_image, save_matrix, detect_is_color
from .file_utils import make_result_filename, save_parameters_txt, zip_results

__all__ = [
    "read_image",
    "load_matrix",
    "save_image",
    "save_matrix",
    "detect_is_color",
    "make_result_filename",
    "save_parameters_txt",
    "zip_results",
]
