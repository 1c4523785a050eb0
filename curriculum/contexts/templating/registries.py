"""
Templating Registries

Loads and caches the Jinja2 templates used for LaTeX generation.
"""

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

load_dotenv()
TEMPLATES_PATH = Path(
    os.getenv("CURRICULUM_TEMPLATES_PATH", Path(__file__).parent / "template")
)


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for LaTeX generation.

    Type templates are stored in template/types/{type_name}/template.tex.jinja,
    document-level templates in template/structure/{name}.tex.jinja. All use
    custom delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Base template directory. Defaults to
                           CURRICULUM_TEMPLATES_PATH from environment
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            # Custom delimiters to avoid LaTeX brace conflicts
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Block tags do not leave their own line behind
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )

    def get_template(self, type_name: str) -> Template:
        """
        Get a type template by name, loading and caching it if necessary.

        Args:
            type_name: Name of the type (e.g., 'cventry')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        return self._load(type_name, f"types/{type_name}/template.tex.jinja")

    def get_structure_template(self, name: str) -> Template:
        """
        Get a document-level template (e.g., 'document').

        Raises:
            TemplateNotFound: If template file doesn't exist
        """
        return self._load(f"structure:{name}", f"structure/{name}.tex.jinja")

    def _load(self, cache_key: str, relative_path: str) -> Template:
        if cache_key in self._cache:
            return self._cache[cache_key]

        try:
            template = self.env.get_template(relative_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found for '{cache_key}' at {self.templates_path / relative_path}"
            ) from e

        self._cache[cache_key] = template
        return template

    def get_template_path(self, type_name: str) -> Path:
        """
        Get the file path for a type's template.

        Args:
            type_name: Name of the type (e.g., 'cventry')

        Returns:
            Path to template file
        """
        return self.templates_path / "types" / type_name / "template.tex.jinja"

    def get_structure_template_path(self, name: str) -> Path:
        """Path to a document-level template (e.g. 'document')."""
        return self.templates_path / "structure" / f"{name}.tex.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, type_name: str) -> bool:
        """
        Check if a template is in the cache.

        Args:
            type_name: Name of the type

        Returns:
            True if cached, False otherwise
        """
        return type_name in self._cache
