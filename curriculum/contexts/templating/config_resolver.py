"""
Render Config Resolution

Loads the YAML render config, applies command-line style overrides and
resolves the result into a RenderConfig.

Examples:
    >>> config = load_render_config()
    >>> config = load_render_config(overrides=["include_skill_report=true"])
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from curriculum.contexts.templating.defaults import (
    DEFAULT_DATE_SEPARATOR,
    DEFAULT_NESTED_MARGIN_SCALE,
    DEFAULT_SECTION_TITLES,
    get_default_render_config,
)
from curriculum.contexts.timeline import SkillCategory

load_dotenv()
RENDER_CONFIG_PATH = Path(
    os.getenv("CURRICULUM_RENDER_CONFIG", Path(__file__).parent / "render_config.yaml")
)


@dataclass(frozen=True)
class RenderConfig:
    """
    Resolved rendering options.

    Attributes:
        section_titles: Heading per section key (education, experiences, languages, skills)
        category_order: Skill categories in display order
        round_skill_durations: Round durations to whole years in the skill report
        include_skill_report: Render a skills section after languages
        escape_text: Escape LaTeX special characters in free text
        date_separator: Separator between the years of a date label
        nested_margin_scale: Margin numerator for nested sibling groups (em x characters)
    """

    section_titles: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_SECTION_TITLES))
    category_order: Tuple[SkillCategory, ...] = tuple(SkillCategory)
    round_skill_durations: bool = True
    include_skill_report: bool = False
    escape_text: bool = True
    date_separator: str = DEFAULT_DATE_SEPARATOR
    nested_margin_scale: float = DEFAULT_NESTED_MARGIN_SCALE


def resolve_category_order(labels: List[str]) -> Tuple[SkillCategory, ...]:
    """
    Map category labels to SkillCategory members, preserving order.

    Raises:
        ValueError: If a label is unknown or repeated
    """
    categories = tuple(SkillCategory.from_label(label) for label in labels)
    if len(set(categories)) != len(categories):
        raise ValueError(f"Duplicate skill categories in category_order: {labels}")
    return categories


def build_render_config(data: Dict[str, Any]) -> RenderConfig:
    """
    Build a RenderConfig from a complete config dict.

    Raises:
        ValueError: On unknown keys or invalid values
    """
    defaults = get_default_render_config()
    unknown = set(data) - set(defaults)
    if unknown:
        raise ValueError(f"Unknown render config keys: {sorted(unknown)}. Valid keys: {sorted(defaults)}")

    unknown_layout = set(data["layout"]) - set(defaults["layout"])
    if unknown_layout:
        raise ValueError(
            f"Unknown layout keys: {sorted(unknown_layout)}. Valid keys: {sorted(defaults['layout'])}"
        )

    unknown_sections = set(data["sections"]) - set(DEFAULT_SECTION_TITLES)
    if unknown_sections:
        raise ValueError(
            f"Unknown sections: {sorted(unknown_sections)}. Valid sections: {sorted(DEFAULT_SECTION_TITLES)}"
        )

    try:
        margin_scale = float(data["layout"]["nested_margin_scale"])
    except (TypeError, ValueError) as e:
        raise ValueError(f"layout.nested_margin_scale must be a number: {e}") from e
    if margin_scale < 0:
        raise ValueError(f"layout.nested_margin_scale must not be negative, got {margin_scale}")

    return RenderConfig(
        section_titles={**DEFAULT_SECTION_TITLES, **data["sections"]},
        category_order=resolve_category_order(list(data["category_order"])),
        round_skill_durations=bool(data["round_skill_durations"]),
        include_skill_report=bool(data["include_skill_report"]),
        escape_text=bool(data["escape_text"]),
        date_separator=str(data["date_separator"]),
        nested_margin_scale=margin_scale,
    )


def load_render_config(
    config_path: Optional[Path] = None, overrides: Optional[List[str]] = None
) -> RenderConfig:
    """
    Load render config YAML and apply dotlist overrides.

    Precedence (later wins): built-in defaults, config file, overrides.

    Args:
        config_path: Optional path to a render config YAML (defaults to
            CURRICULUM_RENDER_CONFIG env variable or the packaged render_config.yaml)
        overrides: "key=value" strings, e.g. ["layout.nested_margin_scale=12"]

    Returns:
        Resolved RenderConfig

    Raises:
        ValueError: If an override is malformed or the config is invalid
    """
    if config_path is None:
        config_path = RENDER_CONFIG_PATH

    for override in overrides or []:
        if "=" not in override:
            raise ValueError(f"Override '{override}' must have the form KEY=VALUE")

    merged = OmegaConf.merge(
        OmegaConf.create(get_default_render_config()),
        OmegaConf.load(config_path),
        OmegaConf.from_dotlist(list(overrides or [])),
    )
    return build_render_config(OmegaConf.to_container(merged, resolve=True))
