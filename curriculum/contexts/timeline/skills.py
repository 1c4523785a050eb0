"""
Skill categories and skill/duration aggregates.

A SkillSet maps each SkillCategory to the skills seen under it and the
total time each skill was practised. Merging sums durations per skill.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from curriculum.contexts.timeline.duration import Duration


class SkillCategory(Enum):
    """
    The six fixed skill categories, in default display order.

    Each member carries its display label and the key used for its skill
    list inside an entry description.
    """

    PROGRAMMING = ("programming languages", "programming")
    VERSION_CONTROL = ("version control", "version")
    DATABASE = ("database", "database")
    CLOUD = ("cloud computing", "cloud")
    CI_CD = ("CI/CD", "ci")
    OTHER = ("other", "other")

    def __init__(self, label: str, field_name: str):
        self.label = label
        self.field_name = field_name

    @classmethod
    def from_label(cls, label: str) -> "SkillCategory":
        """
        Look up a category by display label.

        Raises:
            ValueError: If no category has this label
        """
        for category in cls:
            if category.label == label:
                return category
        valid = [category.label for category in cls]
        raise ValueError(f"Unknown skill category '{label}'. Valid categories: {valid}")


@dataclass(frozen=True)
class SkillSet:
    """
    Accumulated skill durations grouped by category.

    Categories with no skills are never stored, so an absent skill means
    "never seen" while a zero Duration means "seen for no measurable time".

    Attributes:
        categories: {category: {skill_name: Duration}}
    """

    categories: Mapping[SkillCategory, Mapping[str, Duration]] = field(default_factory=dict)

    @classmethod
    def from_skills(
        cls, skills: Mapping[SkillCategory, Iterable[str]], duration: Duration
    ) -> "SkillSet":
        """
        Pair every skill with the same duration.

        Repeated skill names within one category are counted once.
        """
        categories = {}
        for category, names in skills.items():
            names = list(names)
            if names:
                categories[category] = {name: duration for name in names}
        return cls(categories)

    def merge(self, other: "SkillSet") -> "SkillSet":
        """
        Combine two skill sets, summing durations of shared skills.

        Example:
            >>> git = SkillSet({SkillCategory.CI_CD: {"git": Duration(1, 0)}})
            >>> git.merge(git)[SkillCategory.CI_CD]["git"]
            Duration(years=2, months=0)
        """
        merged: Dict[SkillCategory, Dict[str, Duration]] = {
            category: dict(skills) for category, skills in self.categories.items()
        }
        for category, skills in other.categories.items():
            target = merged.setdefault(category, {})
            for name, duration in skills.items():
                target[name] = target[name] + duration if name in target else duration
        return SkillSet(merged)

    def __add__(self, other: "SkillSet") -> "SkillSet":
        if not isinstance(other, SkillSet):
            return NotImplemented
        return self.merge(other)

    def __getitem__(self, category: SkillCategory) -> Mapping[str, Duration]:
        return self.categories[category]

    def __contains__(self, category: object) -> bool:
        return category in self.categories

    def __iter__(self) -> Iterator[SkillCategory]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def get(self, category: SkillCategory, skill: str) -> Optional[Duration]:
        """Duration for one skill, or None if it was never seen."""
        return self.categories.get(category, {}).get(skill)

    def rounded(self) -> "SkillSet":
        """Copy with every duration passed through Duration.round()."""
        return SkillSet(
            {
                category: {name: duration.round() for name, duration in skills.items()}
                for category, skills in self.categories.items()
            }
        )

    def ordered(
        self, category_order: Iterable[SkillCategory] = tuple(SkillCategory)
    ) -> List[Tuple[SkillCategory, List[Tuple[str, Duration]]]]:
        """
        Categories in display order, skills sorted by longest duration then name.

        Categories missing from the set (or from category_order) are skipped.
        """
        result = []
        for category in category_order:
            skills = self.categories.get(category)
            if not skills:
                continue
            ranked = sorted(
                skills.items(), key=lambda item: (-item[1].years, -item[1].months, item[0])
            )
            result.append((category, ranked))
        return result

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, int]]]:
        """Plain nested dict keyed by category label, for serialization."""
        return {
            category.label: {
                name: {"years": duration.years, "months": duration.months}
                for name, duration in skills.items()
            }
            for category, skills in self.categories.items()
        }

