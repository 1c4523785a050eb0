"""
LaTeX Pattern Constants

Centralized LaTeX strings used for generation.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EntryPatterns:
    """
    moderncv entry commands.

    Used to count per-entry records in generated output.
    """

    CVENTRY: str = r"\cventry"


@dataclass(frozen=True)
class EnvironmentPatterns:
    """Environments used inside entry content."""

    # changepage package; shifts nested entries so date columns line up
    ADJUSTWIDTH: str = "adjustwidth"
