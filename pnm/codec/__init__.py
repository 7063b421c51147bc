from pnm.codec.pixel_codec import (
    ascii_to_matrix,
    binary_to_matrix,
    byte_width,
    matrix_to_ascii,
    matrix_to_binary,
)

__all__ = [
    "ascii_to_matrix",
    "binary_to_matrix",
    "byte_width",
    "matrix_to_ascii",
    "matrix_to_binary",
]
