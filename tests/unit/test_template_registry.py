"""Unit tests for TemplateRegistry class."""

import pytest
from pathlib import Path
from jinja2 import TemplateNotFound, UndefinedError

from curriculum.contexts.templating.registries import TemplateRegistry


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()
    assert registry.templates_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
def test_get_template_cventry():
    """Test loading cventry template."""
    registry = TemplateRegistry()
    template = registry.get_template("cventry")

    assert template is not None
    assert "cventry" in registry._cache


@pytest.mark.unit
def test_template_caching():
    """Test that templates are cached after first load."""
    registry = TemplateRegistry()

    template1 = registry.get_template("cventry")
    assert registry.is_cached("cventry")

    template2 = registry.get_template("cventry")
    assert template1 is template2


@pytest.mark.unit
def test_structure_templates_cached_separately():
    """Test that structure templates do not collide with type templates."""
    registry = TemplateRegistry()

    registry.get_structure_template("section")

    assert registry.is_cached("structure:section")
    assert not registry.is_cached("section")


@pytest.mark.unit
def test_get_template_not_found():
    """Test error handling for missing template."""
    registry = TemplateRegistry()

    with pytest.raises(TemplateNotFound, match="nonexistent_type"):
        registry.get_template("nonexistent_type")


@pytest.mark.unit
def test_get_template_path():
    """Test getting template file path."""
    registry = TemplateRegistry()
    path = registry.get_template_path("cventry")

    assert isinstance(path, Path)
    assert path.name == "template.tex.jinja"
    assert path.exists()


@pytest.mark.unit
def test_clear_cache():
    """Test cache clearing."""
    registry = TemplateRegistry()

    registry.get_template("cventry")
    assert len(registry._cache) == 1

    registry.clear_cache()
    assert len(registry._cache) == 0


@pytest.mark.unit
def test_template_rendering():
    """Test that loaded template renders with custom delimiters."""
    registry = TemplateRegistry()
    template = registry.get_template("cventry")

    result = template.render(
        dates="2019--2023",
        title="Engineer",
        institution="Acme",
        city="Brussels",
        grade="",
        content="",
    )

    assert result.strip() == r"\cventry{2019--2023}{Engineer}{Acme}{Brussels}{}{}"


@pytest.mark.unit
def test_template_strict_undefined():
    """Test that missing variables fail instead of rendering empty."""
    registry = TemplateRegistry()
    template = registry.get_template("cventry")

    with pytest.raises(UndefinedError):
        template.render(dates="2019")


@pytest.mark.unit
def test_custom_templates_path(tmp_path):
    """Test loading templates from an alternative directory."""
    type_dir = tmp_path / "types" / "greeting"
    type_dir.mkdir(parents=True)
    (type_dir / "template.tex.jinja").write_text(r"\textbf{<<< name >>>}")

    registry = TemplateRegistry(templates_path=tmp_path)

    assert registry.get_template("greeting").render(name="Ada") == r"\textbf{Ada}"


@pytest.mark.unit
def test_structure_template_path():
    """Test that structure template paths point at template/structure."""
    registry = TemplateRegistry()
    path = registry.get_structure_template_path("document")

    assert path == registry.templates_path / "structure" / "document.tex.jinja"
    assert path.exists()
