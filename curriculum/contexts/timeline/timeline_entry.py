"""
Timeline Entries

A TimelineEntry is one résumé record (a degree, a job, a role within a job)
with optional nested child entries. Entries are immutable once built.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from curriculum.contexts.timeline.duration import Duration, elapsed
from curriculum.contexts.timeline.logger import _log_debug
from curriculum.contexts.timeline.skills import SkillCategory, SkillSet

DATE_LABEL_FORMAT = "%Y"


def current_date() -> date:
    """Today's date in UTC, used as the end of ongoing entries."""
    return datetime.now(timezone.utc).date()


@dataclass(frozen=True)
class EntryDescription:
    """
    Free-text context plus categorized skill tags for one entry.

    Attributes:
        context: Free-text description
        programming: Programming languages
        version: Version control tools
        database: Databases
        cloud: Cloud platforms
        ci: CI/CD tooling
        other: Anything else
    """

    context: str = ""
    programming: Tuple[str, ...] = ()
    version: Tuple[str, ...] = ()
    database: Tuple[str, ...] = ()
    cloud: Tuple[str, ...] = ()
    ci: Tuple[str, ...] = ()
    other: Tuple[str, ...] = ()

    def skill_list(self, category: SkillCategory) -> Tuple[str, ...]:
        return getattr(self, category.field_name)

    def extract_skills(self) -> Dict[SkillCategory, List[str]]:
        """Non-empty skill lists keyed by category."""
        return {
            category: list(self.skill_list(category))
            for category in SkillCategory
            if self.skill_list(category)
        }


@dataclass(frozen=True)
class TimelineEntry:
    """
    One education or work experience record.

    Attributes:
        beginning: Start month (first day of the month), None if unknown
        end: End month, None for ongoing entries
        title: Degree or job title
        institution: School or company
        city: Optional location
        grade: Optional grade or contract type
        description: Optional context and skill tags
        children: Nested entries (e.g. successive roles at one employer)
    """

    beginning: Optional[date] = None
    end: Optional[date] = None
    title: str = ""
    institution: str = ""
    city: Optional[str] = None
    grade: Optional[str] = None
    description: Optional[EntryDescription] = None
    children: Tuple["TimelineEntry", ...] = field(default_factory=tuple)

    def date_labels(self) -> List[str]:
        """Years of the known boundary dates, beginning first."""
        return [d.strftime(DATE_LABEL_FORMAT) for d in (self.beginning, self.end) if d is not None]

    def date_label(self, separator: str = "--") -> str:
        """
        Year range shown in the date column, e.g. "2019--2023".

        Empty when neither date is known.
        """
        return separator.join(self.date_labels())

    def duration(self, today: Optional[date] = None) -> Optional[Duration]:
        """
        Elapsed time of this entry alone.

        Ongoing entries are measured up to today. Entries without a
        beginning have no duration.

        Args:
            today: Reference date for ongoing entries (default: current UTC date)
        """
        if self.beginning is None:
            return None
        end = self.end if self.end is not None else (today or current_date())
        return elapsed(self.beginning, end)

    def extract_skills(self) -> Dict[SkillCategory, List[str]]:
        """Skill names of this entry alone, keyed by non-empty category."""
        if self.description is None:
            return {}
        return self.description.extract_skills()

    def extract_skills_with_duration(self, today: Optional[date] = None) -> SkillSet:
        """
        Skills of this entry alone, each paired with the entry's duration.

        Entries without a beginning contribute their skills with a zero duration.
        """
        return SkillSet.from_skills(self.extract_skills(), self.duration(today) or Duration())

    def aggregate_skills(self, today: Optional[date] = None) -> SkillSet:
        """
        Skills of this entry and all of its descendants, durations summed.

        Args:
            today: Reference date for ongoing entries (default: current UTC date)
        """
        today = today or current_date()
        skills = self.extract_skills_with_duration(today)
        for child in self.children:
            skills = skills.merge(child.aggregate_skills(today))
        return skills

    def walk(self) -> Iterable["TimelineEntry"]:
        """Yield this entry and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


def get_skills(entries: Iterable[TimelineEntry], today: Optional[date] = None) -> SkillSet:
    """
    Aggregate skills across several entry trees.

    Args:
        entries: Top-level entries (e.g. every experience)
        today: Reference date for ongoing entries (default: current UTC date)

    Returns:
        SkillSet with durations summed across all entries and descendants
    """
    today = today or current_date()
    skills = SkillSet()
    for entry in entries:
        skills = skills.merge(entry.aggregate_skills(today))
    _log_debug(f"Aggregated skills in {len(skills)} categories as of {today}")
    return skills
