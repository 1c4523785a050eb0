"""Unit tests for SkillCategory and SkillSet."""

import pytest

from curriculum.contexts.timeline import Duration, SkillCategory, SkillSet

CI = SkillCategory.CI_CD
CLOUD = SkillCategory.CLOUD
PROGRAMMING = SkillCategory.PROGRAMMING


@pytest.mark.unit
def test_category_labels_in_display_order():
    assert [category.label for category in SkillCategory] == [
        "programming languages",
        "version control",
        "database",
        "cloud computing",
        "CI/CD",
        "other",
    ]


@pytest.mark.unit
def test_category_from_label():
    assert SkillCategory.from_label("CI/CD") is CI
    with pytest.raises(ValueError, match="Unknown skill category"):
        SkillCategory.from_label("cooking")


@pytest.mark.unit
def test_from_skills_pairs_every_skill_with_duration():
    skills = SkillSet.from_skills({CI: ["git", "gitlab"], CLOUD: []}, Duration(0, 3))

    assert set(skills) == {CI}
    assert skills[CI] == {"git": Duration(0, 3), "gitlab": Duration(0, 3)}


@pytest.mark.unit
def test_merge_with_itself_doubles_durations():
    skills = SkillSet({CI: {"git": Duration(1, 7)}})

    merged = skills.merge(skills)

    assert merged.get(CI, "git") == Duration(3, 2)


@pytest.mark.unit
def test_merge_keeps_one_sided_skills():
    left = SkillSet({CI: {"git": Duration(1, 1)}})
    right = SkillSet({CI: {"gitlab": Duration(0, 10)}, CLOUD: {"azure": Duration(0, 10)}})

    merged = left + right

    assert merged.get(CI, "git") == Duration(1, 1)
    assert merged.get(CI, "gitlab") == Duration(0, 10)
    assert merged.get(CLOUD, "azure") == Duration(0, 10)
    assert len(merged) == 2


@pytest.mark.unit
def test_merge_does_not_mutate_operands():
    left = SkillSet({CI: {"git": Duration(1, 0)}})
    right = SkillSet({CI: {"git": Duration(1, 0)}})

    left.merge(right)

    assert left.get(CI, "git") == Duration(1, 0)
    assert right.get(CI, "git") == Duration(1, 0)


@pytest.mark.unit
def test_merge_is_order_independent():
    a = SkillSet({CI: {"git": Duration(0, 11)}})
    b = SkillSet({CI: {"git": Duration(1, 2)}, PROGRAMMING: {"Python": Duration(2, 0)}})

    assert a + b == b + a


@pytest.mark.unit
def test_zero_duration_skill_is_present():
    skills = SkillSet.from_skills({CI: ["git"]}, Duration())

    assert CI in skills
    assert skills.get(CI, "git") == Duration(0, 0)
    assert skills.get(CI, "svn") is None
    assert skills.get(CLOUD, "azure") is None


@pytest.mark.unit
def test_rounded():
    skills = SkillSet({CI: {"git": Duration(1, 11), "gitlab": Duration(0, 10)}})

    rounded = skills.rounded()

    assert rounded.get(CI, "git") == Duration(2, 0)
    assert rounded.get(CI, "gitlab") == Duration(0, 10)


@pytest.mark.unit
def test_ordered_sorts_by_duration_then_name():
    skills = SkillSet(
        {
            CI: {"gitlab": Duration(0, 10), "git": Duration(1, 11), "azure": Duration(0, 10)},
            PROGRAMMING: {"Python": Duration(3, 0)},
        }
    )

    ordered = skills.ordered()

    assert [category for category, _ in ordered] == [PROGRAMMING, CI]
    assert [name for name, _ in ordered[1][1]] == ["git", "azure", "gitlab"]


@pytest.mark.unit
def test_ordered_respects_category_order():
    skills = SkillSet({CI: {"git": Duration(1, 0)}, PROGRAMMING: {"Python": Duration(1, 0)}})

    ordered = skills.ordered(category_order=(CI,))

    assert [category for category, _ in ordered] == [CI]


@pytest.mark.unit
def test_to_dict():
    skills = SkillSet({CI: {"git": Duration(1, 11)}})

    assert skills.to_dict() == {"CI/CD": {"git": {"years": 1, "months": 11}}}
