"""
Templating Context

Responsibilities:
- Defines the document-level data structures (contact data, languages, curriculum)
- Generates moderncv LaTeX from timeline entry trees
- Manages the Jinja2 template system (template/) and render configuration
- Orchestrates résumé file -> .tex generation (converter.py)

Owns: Curriculum representation, LaTeX generation, templates, render config
Never: Computes durations or aggregates skills itself
"""

from curriculum.contexts.templating.config_resolver import RenderConfig, load_render_config
from curriculum.contexts.templating.exceptions import PreambleEncodingError, TemplateRenderError
from curriculum.contexts.templating.latex_generator import (
    CurriculumToLaTeXConverter,
    SiblingLayout,
)
from curriculum.contexts.templating.resume_components_data_structures import (
    Curriculum,
    LanguageSkill,
    PersonalData,
)

__all__ = [
    # Generation
    "CurriculumToLaTeXConverter",
    "SiblingLayout",
    # Configuration
    "RenderConfig",
    "load_render_config",
    # Errors
    "PreambleEncodingError",
    "TemplateRenderError",
    # Data structure classes
    "Curriculum",
    "LanguageSkill",
    "PersonalData",
]
