from .matrix import matrix_tool
from .preprocess import parse_entry

__all__ = ["matrix_tool", "parse_entry"]
