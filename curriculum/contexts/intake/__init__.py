"""
Intake Context

Responsibilities:
- Reads résumé descriptions from JSON or YAML files
- Validates them against the résumé schema
- Reports malformed input with the dotted path of every offending field

Owns: Input schema, file loading
Never: Computes durations or produces LaTeX
"""

from curriculum.contexts.intake.exceptions import InvalidResumeStructureError
from curriculum.contexts.intake.loader import load_curriculum, parse_curriculum

__all__ = ["InvalidResumeStructureError", "load_curriculum", "parse_curriculum"]
