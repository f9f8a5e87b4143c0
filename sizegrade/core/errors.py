"""
Exceptions raised by the grading engine.

Only an out-of-range target size is a request-time failure.  Everything
else (unknown category, unparsable base size, missing body measurements)
degrades to a documented default instead of raising.
"""

from __future__ import annotations


class SizeGradeError(Exception):
    """Base class for all engine errors."""


class SizeOutOfRangeError(SizeGradeError, ValueError):
    """A target size lies outside the category's declared size range."""

    def __init__(self, size_num: int, min_size: int, max_size: int):
        self.size_num = size_num
        self.min_size = min_size
        self.max_size = max_size
        super().__init__(
            f"Please enter a valid size between {min_size} and {max_size}"
        )


class CategoryConfigError(SizeGradeError):
    """Static category data is inconsistent (raised when a registry is built)."""
