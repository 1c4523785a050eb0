"""
Text processing utilities for formatting generated LaTeX.
"""

import re
from typing import Tuple


def count_group_delimiters(
    text: str,
    open_char: str = "{",
    close_char: str = "}",
    escape_char: str = "\\",
) -> Tuple[int, int]:
    """
    Count unescaped opening and closing delimiters.

    Escaped characters (e.g. \\{ or the second backslash of \\\\) are skipped,
    so LaTeX-escaped literal braces are not counted as groups.

    Args:
        text: Text to scan
        open_char: Opening delimiter character (default: '{')
        close_char: Closing delimiter character (default: '}')
        escape_char: Character used for escaping (default: '\\')

    Returns:
        (opening_count, closing_count)

    Example:
        >>> count_group_delimiters(r"\\cventry{2020}{A \\{ B}")
        (2, 2)
    """
    opening = 0
    closing = 0
    pos = 0

    while pos < len(text):
        char = text[pos]
        if char == escape_char:
            pos += 2
            continue
        if char == open_char:
            opening += 1
        elif char == close_char:
            closing += 1
        pos += 1

    return opening, closing


def is_balanced(text: str, open_char: str = "{", close_char: str = "}") -> bool:
    """
    Check that unescaped delimiters are balanced and never close before opening.

    Example:
        >>> is_balanced(r"\\item[{a}] {b}")
        True
        >>> is_balanced("}{")
        False
    """
    depth = 0
    pos = 0

    while pos < len(text):
        char = text[pos]
        if char == "\\":
            pos += 2
            continue
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth < 0:
                return False
        pos += 1

    return depth == 0


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Replaces runs of blank lines longer than max_consecutive with exactly
    max_consecutive blank lines.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines, 1 for standard
                        normalization (default: 1)

    Returns:
        Content with normalized blank lines

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=0)
        'text\\nmore'
    """
    if max_consecutive == 0:
        # Match ANY blank lines (1 or more)
        pattern = r"\n\s*\n(\s*\n)*"
    else:
        # Match 2+ consecutive blank lines only
        pattern = r"\n\s*\n(\s*\n)+"

    # max_consecutive=1 means "\n\n" which is 1 blank line
    replacement = "\n" * (max_consecutive + 1)

    return re.sub(pattern, replacement, content)
