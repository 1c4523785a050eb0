"""
LaTeX Generator

Converts a Curriculum (timeline entry trees plus contact and language data)
into a moderncv LaTeX document.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Union

from jinja2 import Template, TemplateError

from curriculum.contexts.templating.config_resolver import RenderConfig
from curriculum.contexts.templating.exceptions import PreambleEncodingError, TemplateRenderError
from curriculum.contexts.templating.latex_patterns import EnvironmentPatterns
from curriculum.contexts.templating.logger import _log_debug, _log_warning
from curriculum.contexts.templating.registries import TemplateRegistry
from curriculum.contexts.templating.resume_components_data_structures import (
    Curriculum,
    LanguageSkill,
    PersonalData,
)
from curriculum.contexts.timeline import EntryDescription, SkillSet, TimelineEntry
from curriculum.utils.latex_tools import format_latex_environment, to_latex
from curriculum.utils.text_processing import (
    count_group_delimiters,
    is_balanced,
    set_max_consecutive_blank_lines,
)


@dataclass(frozen=True)
class SiblingLayout:
    """
    Shared layout of one group of sibling entries.

    Measured once over all siblings before any of them is rendered, so every
    sibling gets the same margin and their date columns line up.

    Attributes:
        max_label_width: Length of the widest date label in the group
        margin_scale: Margin numerator (em x characters)
    """

    max_label_width: int
    margin_scale: float

    @classmethod
    def measure(
        cls, entries: Iterable[TimelineEntry], separator: str, margin_scale: float
    ) -> "SiblingLayout":
        widths = [len(entry.date_label(separator)) for entry in entries]
        return cls(max_label_width=max(widths, default=0), margin_scale=margin_scale)

    @property
    def margin_em(self) -> float:
        """Negative left margin in em; wider date labels give smaller margins."""
        if self.max_label_width == 0:
            return 0.0
        return self.margin_scale / self.max_label_width

    def apply(self, rendered_entry: str) -> str:
        """Wrap a rendered sibling in the group's margin adjustment."""
        if self.margin_em == 0:
            return rendered_entry
        return format_latex_environment(
            EnvironmentPatterns.ADJUSTWIDTH,
            rendered_entry,
            mandatory_args=[f"-{self.margin_em:.2f}em", ""],
        )


def decode_preamble(preamble: Union[str, bytes], preamble_path: Optional[Path] = None) -> str:
    """
    Return the preamble as text.

    Raises:
        PreambleEncodingError: If preamble bytes are not valid UTF-8
    """
    if isinstance(preamble, str):
        return preamble
    try:
        return preamble.decode("utf-8")
    except UnicodeDecodeError as e:
        raise PreambleEncodingError(
            "Preamble is not valid UTF-8 text", preamble_path=preamble_path, original_error=e
        ) from e


class CurriculumToLaTeXConverter:
    """Converts curriculum data structures to LaTeX."""

    def __init__(
        self,
        template_registry: TemplateRegistry = None,
        config: RenderConfig = None,
    ):
        self.template_registry = template_registry or TemplateRegistry()
        self.config = config or RenderConfig()

    def _text(self, value: Optional[str]) -> str:
        """Free text as LaTeX, escaped unless escape_text is disabled."""
        if not value:
            return ""
        return to_latex(value) if self.config.escape_text else value

    def _render_template(
        self,
        name: str,
        load: Callable[[str], Template],
        template_path: Path,
        **context,
    ) -> str:
        """
        Load and render one template.

        Raises:
            TemplateRenderError: On any Jinja2 error, including syntax errors
                and missing files raised while loading
        """
        try:
            return load(name).render(**context).strip()
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render '{name}'",
                type_name=name,
                template_path=template_path,
                original_error=e,
            ) from e

    def _render(self, type_name: str, **context) -> str:
        registry = self.template_registry
        return self._render_template(
            type_name, registry.get_template, registry.get_template_path(type_name), **context
        )

    def _render_structure(self, name: str, **context) -> str:
        registry = self.template_registry
        return self._render_template(
            name,
            registry.get_structure_template,
            registry.get_structure_template_path(name),
            **context,
        )

    def convert_description(self, description: Optional[EntryDescription]) -> str:
        """
        Convert an entry description to LaTeX.

        Args:
            description: Context text and skill lists, or None

        Returns:
            Context line followed by a description list with one item per
            non-empty skill category, in configured order. Empty string if
            there is no description.
        """
        if description is None:
            return ""

        skills = description.extract_skills()
        skill_lines = [
            {
                "label": category.label,
                "skills": ", ".join(self._text(skill) for skill in skills[category]),
            }
            for category in self.config.category_order
            if category in skills
        ]
        rendered = self._render(
            "entry_description", context=self._text(description.context), skill_lines=skill_lines
        )
        # Blank lines would end the paragraph inside \cventry's argument
        return set_max_consecutive_blank_lines(rendered, max_consecutive=0)

    def convert_children(self, children: Sequence[TimelineEntry]) -> List[str]:
        """
        Convert one sibling group, all siblings sharing one margin.

        Returns:
            Rendered siblings in order, each wrapped in its margin adjustment
        """
        layout = SiblingLayout.measure(
            children, self.config.date_separator, self.config.nested_margin_scale
        )
        return [layout.apply(self.convert_entry(child)) for child in children]

    def convert_entry(self, entry: TimelineEntry) -> str:
        """
        Convert a timeline entry and its descendants to a \\cventry.

        Args:
            entry: Timeline entry

        Returns:
            \\cventry{dates}{title}{institution}{city}{grade}{content}, where
            content is the description block followed by every rendered child
        """
        parts = [self.convert_description(entry.description)]
        parts.extend(self.convert_children(entry.children))
        content = "\n".join(part for part in parts if part)

        return self._render(
            "cventry",
            dates=entry.date_label(self.config.date_separator),
            title=self._text(entry.title),
            institution=self._text(entry.institution),
            city=self._text(entry.city),
            grade=self._text(entry.grade),
            content=content,
        )

    def convert_entries(self, entries: Iterable[TimelineEntry]) -> str:
        """Convert top-level entries, separated by blank lines."""
        return "\n\n".join(self.convert_entry(entry) for entry in entries)

    def convert_personal_data(self, personal_data: PersonalData) -> str:
        """
        Convert contact data to moderncv header commands.

        Names and title are escaped; phone numbers, emails, handles and URLs
        are passed through verbatim.
        """
        return self._render(
            "personal_data",
            first_name=self._text(personal_data.first_name),
            family_name=self._text(personal_data.family_name),
            title=self._text(personal_data.title),
            mobile=personal_data.mobile,
            email=personal_data.email,
            socials=personal_data.socials,
            webpage=[(self._text(label), url) for label, url in personal_data.webpage],
        )

    def convert_languages(self, languages: Iterable[LanguageSkill]) -> str:
        """Convert languages to \\cvitemwithcomment lines."""
        return self._render(
            "languages",
            languages=[
                {
                    "language": self._text(language.language),
                    "level": self._text(language.level),
                    "comment": self._text(language.comment),
                }
                for language in languages
            ],
        )

    def convert_skill_report(self, skills: SkillSet) -> str:
        """
        Convert aggregated skills to one \\cvitem per non-empty category.

        Skills are listed longest first, each with its (optionally rounded)
        duration.
        """
        if self.config.round_skill_durations:
            skills = skills.rounded()

        categories = [
            {
                "label": category.label,
                "skills": ", ".join(
                    f"{self._text(name)} ({duration.format()})" for name, duration in ranked
                ),
            }
            for category, ranked in skills.ordered(self.config.category_order)
        ]
        return self._render("skill_report", categories=categories)

    def generate_section(self, section_key: str, content: str) -> str:
        """Wrap section content with its configured heading."""
        return self._render_structure(
            "section", title=self.config.section_titles[section_key], content=content
        )

    def generate_sections(self, curriculum: Curriculum, today: Optional[date] = None) -> List[str]:
        """
        Render every non-empty section in document order.

        Order: education, experiences, languages, then skills when
        include_skill_report is set.
        """
        sections = []

        if curriculum.education:
            sections.append(
                self.generate_section("education", self.convert_entries(curriculum.education))
            )
        if curriculum.experiences:
            sections.append(
                self.generate_section("experiences", self.convert_entries(curriculum.experiences))
            )
        if curriculum.languages:
            sections.append(
                self.generate_section("languages", self.convert_languages(curriculum.languages))
            )
        if self.config.include_skill_report:
            skills = curriculum.get_skills(today=today)
            if len(skills):
                sections.append(
                    self.generate_section("skills", self.convert_skill_report(skills))
                )

        _log_debug(f"Rendered {len(sections)} sections")
        return sections

    def generate_document(
        self,
        curriculum: Curriculum,
        preamble: Union[str, bytes],
        preamble_path: Optional[Path] = None,
        today: Optional[date] = None,
    ) -> str:
        """
        Generate the complete LaTeX document.

        Args:
            curriculum: Validated résumé
            preamble: Static preamble, emitted byte-for-byte ahead of the body
            preamble_path: Origin of the preamble, used in error messages
            today: Reference date for ongoing entries in the skill report

        Returns:
            Preamble, personal data, \\begin{document}, sections, \\end{document}

        Raises:
            PreambleEncodingError: If preamble bytes are not valid UTF-8
            TemplateRenderError: If a template fails to render
        """
        preamble_text = decode_preamble(preamble, preamble_path)

        body = self._render_structure(
            "document",
            personal_data=self.convert_personal_data(curriculum.personal_data),
            sections=self.generate_sections(curriculum, today=today),
        )
        # Only the generated body is normalized; the preamble stays untouched
        body = set_max_consecutive_blank_lines(body, max_consecutive=1).strip() + "\n"
        self._check_balance(body)

        if not preamble_text:
            return body
        # Blank line between preamble and body
        separator = "\n" if preamble_text.endswith("\n") else "\n\n"
        return preamble_text + separator + body

    def _check_balance(self, body: str) -> None:
        """Warn when raw (unescaped) text leaves unbalanced braces in the body."""
        if is_balanced(body):
            return
        opening, closing = count_group_delimiters(body)
        _log_warning(
            f"Generated body has unbalanced braces ({opening} opening, {closing} closing); "
            "check raw LaTeX in the input when escape_text is disabled"
        )
