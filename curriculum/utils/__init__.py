"""
Shared utilities for curriculum.

Common functionality used across contexts:
- Logger setup
- LaTeX text helpers
- Text normalization
- Timestamps
"""

from curriculum.utils.timestamp import now

__all__ = ["now"]
