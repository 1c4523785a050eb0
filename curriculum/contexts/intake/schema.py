"""
Résumé input schema.

Pydantic models describing the JSON/YAML résumé format. Validation happens
here, before any timeline or templating code runs; validated models are then
converted into the immutable timeline and document data structures.
"""

import re
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from curriculum.contexts.templating.resume_components_data_structures import (
    Curriculum,
    LanguageSkill,
    PersonalData,
)
from curriculum.contexts.timeline import EntryDescription, TimelineEntry

# "2023-10", tolerating a trailing day ("2023-10-01") which is ignored
YEAR_MONTH_PATTERN = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{1,2})(?:-\d{1,2})?$")


def parse_year_month(value: Any) -> Optional[date]:
    """
    Parse a year-month value into the first day of that month.

    Args:
        value: "YYYY-MM" string, date, or None

    Returns:
        date on day 1 of the month, or None

    Raises:
        ValueError: If the value is not a valid year-month
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.replace(day=1)
    if not isinstance(value, str):
        raise ValueError(f"expected a 'YYYY-MM' string, got {type(value).__name__}")

    match = YEAR_MONTH_PATTERN.match(value.strip())
    if match is None:
        raise ValueError(f"expected a 'YYYY-MM' string, got '{value}'")

    month = int(match.group("month"))
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    return date(int(match.group("year")), month, 1)


class EntryDescriptionSchema(BaseModel):
    """Context text and the six skill lists of an entry."""

    context: str = ""
    programming: List[str] = Field(default_factory=list)
    version: List[str] = Field(default_factory=list)
    database: List[str] = Field(default_factory=list)
    cloud: List[str] = Field(default_factory=list)
    ci: List[str] = Field(default_factory=list)
    other: List[str] = Field(default_factory=list)

    def to_description(self) -> EntryDescription:
        return EntryDescription(
            context=self.context,
            programming=tuple(self.programming),
            version=tuple(self.version),
            database=tuple(self.database),
            cloud=tuple(self.cloud),
            ci=tuple(self.ci),
            other=tuple(self.other),
        )


class TimelineEntrySchema(BaseModel):
    """One education or experience entry, possibly with nested children."""

    beginning: Optional[date] = None
    end: Optional[date] = None
    title: str = Field(default="", validation_alias=AliasChoices("title", "degree"))
    institution: str = ""
    city: Optional[str] = None
    grade: Optional[str] = None
    description: Optional[EntryDescriptionSchema] = None
    children: List["TimelineEntrySchema"] = Field(default_factory=list)

    @field_validator("beginning", "end", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Optional[date]:
        return parse_year_month(value)

    def to_entry(self) -> TimelineEntry:
        return TimelineEntry(
            beginning=self.beginning,
            end=self.end,
            title=self.title,
            institution=self.institution,
            city=self.city,
            grade=self.grade,
            description=self.description.to_description() if self.description else None,
            children=tuple(child.to_entry() for child in self.children),
        )


TimelineEntrySchema.model_rebuild()


class PersonalDataSchema(BaseModel):
    """Name, headline and contact details."""

    name: str
    title: Optional[str] = None
    mobile: List[str] = Field(default_factory=list)
    email: List[str] = Field(default_factory=list)
    github: Optional[str] = None
    gitlab: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    # [(name, url), ...]
    webpage: List[Tuple[str, str]] = Field(default_factory=list)

    def to_personal_data(self) -> PersonalData:
        return PersonalData(
            name=self.name,
            title=self.title,
            mobile=tuple(self.mobile),
            email=tuple(self.email),
            github=self.github,
            gitlab=self.gitlab,
            twitter=self.twitter,
            linkedin=self.linkedin,
            webpage=tuple(self.webpage),
        )


class LanguageSchema(BaseModel):
    """Spoken language with proficiency level."""

    language: str
    level: str
    comment: str = ""

    def to_language_skill(self) -> LanguageSkill:
        return LanguageSkill(language=self.language, level=self.level, comment=self.comment)


class CurriculumSchema(BaseModel):
    """Top-level résumé document."""

    model_config = ConfigDict(populate_by_name=True)

    personal_data: PersonalDataSchema = Field(alias="personal data")
    education: List[TimelineEntrySchema] = Field(default_factory=list)
    experiences: List[TimelineEntrySchema] = Field(default_factory=list)
    languages: List[LanguageSchema] = Field(default_factory=list)

    def to_curriculum(self) -> Curriculum:
        return Curriculum(
            personal_data=self.personal_data.to_personal_data(),
            education=tuple(entry.to_entry() for entry in self.education),
            experiences=tuple(entry.to_entry() for entry in self.experiences),
            languages=tuple(language.to_language_skill() for language in self.languages),
        )
