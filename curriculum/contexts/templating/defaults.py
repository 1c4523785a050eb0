"""
Default values for curriculum rendering.

Used by config_resolver.py when a render config omits a field.
"""

from typing import Any, Dict

from curriculum.contexts.timeline import SkillCategory

DEFAULT_SECTION_TITLES = {
    "education": "Education",
    "experiences": "Professional experience",
    "languages": "Languages",
    "skills": "Skills",
}

# en-dash in LaTeX
DEFAULT_DATE_SEPARATOR = "--"

# Margin (in em) for a sibling group whose widest date label is one character.
# Wider labels get proportionally smaller margins.
DEFAULT_NESTED_MARGIN_SCALE = 9.0


def get_default_render_config() -> Dict[str, Any]:
    """
    Complete render config with every expected field.

    Returns:
        Dict matching the layout of render_config.yaml
    """
    return {
        "sections": DEFAULT_SECTION_TITLES.copy(),
        "category_order": [category.label for category in SkillCategory],
        "round_skill_durations": True,
        "include_skill_report": False,
        "escape_text": True,
        "date_separator": DEFAULT_DATE_SEPARATOR,
        "layout": {
            "nested_margin_scale": DEFAULT_NESTED_MARGIN_SCALE,
        },
    }
