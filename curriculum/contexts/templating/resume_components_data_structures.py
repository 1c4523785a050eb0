"""
Resume Component Data Structures

Defines the document-level data classes: contact data, languages and the
complete curriculum. Timeline entries live in the timeline context.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from curriculum.contexts.timeline import SkillSet, TimelineEntry, get_skills


@dataclass(frozen=True)
class PersonalData:
    """
    Name and contact details shown in the document header.

    Attributes:
        name: Full name; the first word is the first name, the rest the family name
        title: Professional headline
        mobile: Phone numbers
        email: Email addresses
        github: GitHub handle
        gitlab: GitLab handle
        twitter: Twitter handle
        linkedin: LinkedIn handle
        webpage: (label, url) pairs
    """

    name: str
    title: Optional[str] = None
    mobile: Tuple[str, ...] = ()
    email: Tuple[str, ...] = ()
    github: Optional[str] = None
    gitlab: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    webpage: Tuple[Tuple[str, str], ...] = ()

    @property
    def first_name(self) -> str:
        names = self.name.split()
        return names[0] if names else ""

    @property
    def family_name(self) -> str:
        return " ".join(self.name.split()[1:])

    @property
    def socials(self) -> Tuple[Tuple[str, str], ...]:
        """(network, handle) pairs for every social account that is set."""
        accounts = (
            ("github", self.github),
            ("gitlab", self.gitlab),
            ("linkedin", self.linkedin),
            ("twitter", self.twitter),
        )
        return tuple((network, handle) for network, handle in accounts if handle)


@dataclass(frozen=True)
class LanguageSkill:
    """
    Spoken language entry.

    Attributes:
        language: Language name
        level: Proficiency level (e.g. "native", "C1")
        comment: Optional free-text comment
    """

    language: str
    level: str
    comment: str = ""


@dataclass(frozen=True)
class Curriculum:
    """
    Complete résumé document.

    Attributes:
        personal_data: Header contact data
        education: Top-level education entries
        experiences: Top-level professional experience entries
        languages: Spoken languages
    """

    personal_data: PersonalData
    education: Tuple[TimelineEntry, ...] = field(default_factory=tuple)
    experiences: Tuple[TimelineEntry, ...] = field(default_factory=tuple)
    languages: Tuple[LanguageSkill, ...] = field(default_factory=tuple)

    def get_skills(self, today: Optional[date] = None) -> SkillSet:
        """Skill durations aggregated over every professional experience."""
        return get_skills(self.experiences, today=today)

    def entry_count(self) -> int:
        """Number of timeline entries at any depth."""
        return sum(
            1 for top in self.education + self.experiences for _ in top.walk()
        )
