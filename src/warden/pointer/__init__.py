from .core import FieldPointer, SEPARATOR, split_path

# The Global Root Pointer
F = FieldPointer()

__all__ = ["F", "FieldPointer", "SEPARATOR", "split_path"]
