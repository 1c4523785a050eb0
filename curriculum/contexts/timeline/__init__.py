"""
Timeline Context

Responsibilities:
- Represents résumé entries as an immutable, recursively nested tree
- Computes entry durations with the 365/30-day approximation
- Extracts categorized skills and aggregates skill durations across trees

Owns: Duration, SkillCategory, SkillSet, TimelineEntry
Never: Reads files or produces LaTeX
"""

from curriculum.contexts.timeline.duration import Duration, elapsed
from curriculum.contexts.timeline.skills import SkillCategory, SkillSet
from curriculum.contexts.timeline.timeline_entry import (
    EntryDescription,
    TimelineEntry,
    current_date,
    get_skills,
)

__all__ = [
    "Duration",
    "elapsed",
    "SkillCategory",
    "SkillSet",
    "EntryDescription",
    "TimelineEntry",
    "current_date",
    "get_skills",
]
