"""Custom exceptions for the intake context."""

from pathlib import Path
from typing import List, Optional, Tuple


class InvalidResumeStructureError(ValueError):
    """
    Exception raised when résumé input does not match the expected schema.

    Attributes:
        message: Error description
        errors: (field_path, problem) pairs, e.g. ("experiences.0.beginning", "...")
        source_path: File the input was read from, if any
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[Tuple[str, str]]] = None,
        source_path: Optional[Path] = None,
    ):
        self.message = message
        self.errors = errors or []
        self.source_path = source_path

        parts = [message]

        if source_path:
            parts.append(f"Source: {source_path}")

        for field_path, problem in self.errors:
            parts.append(f"  {field_path}: {problem}")

        super().__init__("\n".join(parts))

    @property
    def field_paths(self) -> List[str]:
        """Dotted paths of every offending field."""
        return [field_path for field_path, _ in self.errors]
