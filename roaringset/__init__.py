"""Compressed sets of 32-bit unsigned integers using the Roaring bitmap scheme."""

__version__ = "0.1.0"
__all__ = ["algebra", "bitmap", "container", "iteration", "multiops", "ranges"]