"""
Unit tests for TimelineEntry durations and skill aggregation.

Tests curriculum.contexts.timeline.timeline_entry.
"""

from datetime import date

import pytest

from curriculum.contexts.timeline import (
    Duration,
    EntryDescription,
    SkillCategory,
    TimelineEntry,
    get_skills,
)

CI = SkillCategory.CI_CD
CLOUD = SkillCategory.CLOUD
PROGRAMMING = SkillCategory.PROGRAMMING
TODAY = date(2024, 6, 1)


def make_entry(beginning=None, end=None, children=(), **skills):
    return TimelineEntry(
        beginning=beginning,
        end=end,
        title="Engineer",
        description=EntryDescription(context="some super context", **skills),
        children=tuple(children),
    )


class TestDuration:
    """Tests for the duration of a single entry."""

    @pytest.mark.unit
    def test_closed_entry(self):
        entry = make_entry(date(2023, 10, 1), date(2023, 12, 1))
        assert entry.duration() == Duration(0, 2)

    @pytest.mark.unit
    def test_long_entry(self):
        entry = make_entry(date(2013, 10, 1), date(2023, 12, 1))
        assert entry.duration() == Duration(10, 2)

    @pytest.mark.unit
    def test_same_month_is_zero_not_none(self):
        entry = make_entry(date(2023, 10, 1), date(2023, 10, 1))
        assert entry.duration() == Duration(0, 0)

    @pytest.mark.unit
    def test_no_beginning_has_no_duration(self):
        assert make_entry().duration() is None
        assert make_entry(end=date(2023, 10, 1)).duration() is None

    @pytest.mark.unit
    def test_ongoing_entry_measured_to_today(self):
        entry = make_entry(date(2023, 10, 1))
        assert entry.duration(today=TODAY) == Duration(0, 8)

    @pytest.mark.unit
    def test_ongoing_entry_defaults_to_current_date(self):
        entry = make_entry(date(2000, 1, 1))
        assert entry.duration().years >= 24


class TestDateLabel:
    """Tests for the year-range label."""

    @pytest.mark.unit
    def test_both_dates(self):
        entry = make_entry(date(2019, 1, 1), date(2023, 5, 1))
        assert entry.date_label() == "2019--2023"

    @pytest.mark.unit
    def test_custom_separator(self):
        entry = make_entry(date(2019, 1, 1), date(2023, 5, 1))
        assert entry.date_label(separator=" - ") == "2019 - 2023"

    @pytest.mark.unit
    def test_beginning_only(self):
        assert make_entry(date(2019, 1, 1)).date_label() == "2019"

    @pytest.mark.unit
    def test_no_dates(self):
        assert make_entry().date_label() == ""


class TestSkills:
    """Tests for skill extraction and aggregation."""

    @pytest.mark.unit
    def test_extract_skills(self):
        entry = make_entry(date(2023, 11, 1), ci=("git", "gitlab"))

        skills = entry.extract_skills()

        assert list(skills) == [CI]
        assert skills[CI] == ["git", "gitlab"]

    @pytest.mark.unit
    def test_extract_skills_without_description(self):
        assert TimelineEntry(title="Gap year").extract_skills() == {}

    @pytest.mark.unit
    def test_zero_duration_entry_contributes_present_skills(self):
        entry = make_entry(date(2023, 10, 1), date(2023, 10, 1), ci=("git",))

        skills = entry.aggregate_skills(today=TODAY)

        assert skills.get(CI, "git") == Duration(0, 0)

    @pytest.mark.unit
    def test_entry_without_beginning_contributes_zero(self):
        entry = make_entry(ci=("git",))

        assert entry.extract_skills_with_duration(TODAY).get(CI, "git") == Duration()

    @pytest.mark.unit
    def test_aggregate_sums_parent_and_children(self):
        child_a = make_entry(date(2016, 1, 1), date(2017, 1, 1), programming=("R",))
        child_b = make_entry(date(2019, 1, 1), date(2020, 1, 1), programming=("R", "Python"))
        parent = make_entry(
            date(2016, 1, 1), date(2020, 1, 1), children=[child_a, child_b], ci=("git",)
        )

        skills = parent.aggregate_skills(today=TODAY)

        assert skills.get(PROGRAMMING, "R") == Duration(2, 0)
        assert skills.get(PROGRAMMING, "Python") == Duration(1, 0)
        assert skills.get(CI, "git") == Duration(4, 0)

    @pytest.mark.unit
    def test_aggregate_independent_of_child_order(self):
        children = [
            make_entry(date(2016, 1, 1), date(2016, 12, 1), ci=("git",)),
            make_entry(date(2018, 3, 1), date(2019, 1, 1), ci=("git",), cloud=("azure",)),
            make_entry(date(2020, 1, 1), date(2020, 2, 1), ci=("gitlab",)),
        ]
        forward = make_entry(date(2016, 1, 1), children=children)
        backward = make_entry(date(2016, 1, 1), children=reversed(children))

        assert forward.aggregate_skills(TODAY) == backward.aggregate_skills(TODAY)

    @pytest.mark.unit
    def test_aggregate_deep_tree(self):
        leaf = make_entry(date(2020, 1, 1), date(2021, 1, 1), other=("LaTeX",))
        middle = make_entry(children=[leaf])
        root = make_entry(children=[middle])

        assert root.aggregate_skills(TODAY).get(SkillCategory.OTHER, "LaTeX") == Duration(1, 0)
        assert len(list(root.walk())) == 3


@pytest.mark.unit
def test_get_skills_across_experiences():
    """Two overlapping jobs: git counted twice, azure once."""
    first = make_entry(date(2022, 10, 1), date(2023, 11, 1), ci=("git", "gitlab"))
    second = make_entry(date(2022, 9, 1), date(2023, 7, 1), ci=("git", "gitlab"), cloud=("azure",))

    skills = get_skills([first, second], today=TODAY)

    assert skills.get(CI, "git") == Duration(1, 11)
    assert skills.get(CI, "gitlab") == Duration(1, 11)
    assert skills.get(CLOUD, "azure") == Duration(0, 10)


@pytest.mark.unit
def test_get_skills_empty():
    assert len(get_skills([], today=TODAY)) == 0
