"""Matrix file formats, binary serialization, logging, indented output and thread banks."""

__version__ = "0.1.0"

__all__ = [
    "base",
    "binio",
    "log",
    "rstream",
    "threads",
    "matrix_file",
    "ascii_format",
    "boeing_format",
    "matlab_format",
]