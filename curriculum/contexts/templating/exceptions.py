"""Custom exceptions for templating context with template references."""

from pathlib import Path
from typing import Optional


class TemplateRenderError(Exception):
    """
    Exception raised when template rendering fails.

    Attributes:
        message: Error description
        type_name: Name of the type being rendered
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.type_name = type_name
        self.template_path = template_path
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if type_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Type: {type_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class PreambleEncodingError(ValueError):
    """
    Exception raised when the LaTeX preamble is not valid UTF-8 text.

    Attributes:
        message: Error description
        preamble_path: File the preamble was read from, if known
        original_error: The underlying UnicodeDecodeError
    """

    def __init__(
        self,
        message: str,
        preamble_path: Optional[Path] = None,
        original_error: Optional[UnicodeDecodeError] = None,
    ):
        self.message = message
        self.preamble_path = preamble_path
        self.original_error = original_error

        parts = [message]
        if preamble_path:
            parts.append(f"Preamble: {preamble_path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
