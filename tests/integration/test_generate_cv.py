"""
Integration tests for the generate_cv orchestration and its CLI.

Tests: résumé file -> .tex file, with logging, error reporting and an
optional pluggable PDF compiler.
"""

import importlib.util
import shutil
from datetime import date
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from curriculum.contexts.rendering import CompilationResult
from curriculum.contexts.templating import RenderConfig
from curriculum.contexts.templating.converter import generate_cv
from curriculum.contexts.templating.registries import TemplateRegistry

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"
SCRIPT_PATH = Path(__file__).parent.parent.parent / "scripts" / "generate_cv.py"
TODAY = date(2024, 6, 1)


@pytest.fixture(autouse=True)
def reset_logger():
    """generate_cv installs its own sinks; drop them after each test."""
    yield
    logger.remove()


@pytest.fixture
def resume_file(tmp_path):
    path = tmp_path / "cv.json"
    shutil.copy(FIXTURES_PATH / "cv_full.json", path)
    return path


@pytest.fixture
def cli_module():
    spec = importlib.util.spec_from_file_location("generate_cv_cli", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def cli_app(cli_module):
    return cli_module.app


class FakeCompiler:
    """Records calls and writes an empty PDF next to the .tex file."""

    def __init__(self, success=True):
        self.success = success
        self.calls = []

    def __call__(self, tex_file, compile_dir=None):
        self.calls.append((tex_file, compile_dir))
        if not self.success:
            return CompilationResult(success=False, errors=["Undefined control sequence"])
        pdf_path = Path(compile_dir) / f"{Path(tex_file).stem}.pdf"
        pdf_path.write_bytes(b"%PDF-1.5")
        return CompilationResult(success=True, pdf_path=pdf_path)


@pytest.mark.integration
def test_generate_cv_writes_tex(resume_file, tmp_path):
    result = generate_cv(resume_file, log_dir=tmp_path / "logs", today=TODAY)

    assert result.success, result.error
    assert result.output_path == resume_file.with_suffix(".tex")
    latex = result.output_path.read_text(encoding="utf-8")
    assert r"\section{Professional experience}" in latex
    assert latex.endswith("\\end{document}\n")
    assert result.pdf_path is None
    assert (tmp_path / "logs" / "template.log").exists()


@pytest.mark.integration
def test_generate_cv_yaml_with_config(tmp_path):
    resume = tmp_path / "cv.yaml"
    shutil.copy(FIXTURES_PATH / "cv_minimal.yaml", resume)
    output = tmp_path / "out" / "resume.tex"

    result = generate_cv(
        resume,
        output_path=output,
        config=RenderConfig(include_skill_report=True),
        log_dir=tmp_path / "logs",
        today=TODAY,
    )

    assert result.success, result.error
    latex = output.read_text(encoding="utf-8")
    assert r"\cvitem{cloud computing}{azure (10 months)}" in latex


@pytest.mark.integration
def test_generate_cv_invalid_input(tmp_path):
    resume = tmp_path / "cv.json"
    shutil.copy(FIXTURES_PATH / "cv_invalid.json", resume)

    result = generate_cv(resume, log_dir=tmp_path / "logs")

    assert not result.success
    assert "experiences.0.children.0.end" in result.error
    assert result.output_path is None
    assert not resume.with_suffix(".tex").exists()


@pytest.mark.integration
def test_generate_cv_bad_preamble(resume_file, tmp_path):
    preamble = tmp_path / "preamble.tex"
    preamble.write_bytes(b"\\documentclass{moderncv}\xff")

    result = generate_cv(resume_file, preamble_path=preamble, log_dir=tmp_path / "logs")

    assert not result.success
    assert "UTF-8" in result.error


@pytest.mark.integration
def test_generate_cv_broken_template(resume_file, tmp_path):
    templates = tmp_path / "template"
    shutil.copytree(TemplateRegistry().templates_path, templates)
    (templates / "types" / "cventry" / "template.tex.jinja").write_text("<%% if %%>", encoding="utf-8")

    result = generate_cv(
        resume_file, template_registry=TemplateRegistry(templates), log_dir=tmp_path / "logs"
    )

    assert not result.success
    assert "cventry" in result.error
    assert not resume_file.with_suffix(".tex").exists()


@pytest.mark.integration
def test_generate_cv_with_compiler(resume_file, tmp_path):
    compiler = FakeCompiler()

    result = generate_cv(resume_file, compiler=compiler, log_dir=tmp_path / "logs")

    assert result.success
    assert compiler.calls == [(resume_file.with_suffix(".tex"), resume_file.parent)]
    assert result.pdf_path == resume_file.with_suffix(".pdf")


@pytest.mark.integration
def test_generate_cv_compiler_failure(resume_file, tmp_path):
    result = generate_cv(
        resume_file, compiler=FakeCompiler(success=False), log_dir=tmp_path / "logs"
    )

    assert not result.success
    assert result.error == "Undefined control sequence"
    assert result.output_path.exists()


@pytest.mark.integration
def test_cli_generate(cli_app, resume_file, tmp_path, monkeypatch):
    monkeypatch.setattr("curriculum.contexts.templating.converter.LOGS_PATH", tmp_path / "logs")
    output = tmp_path / "cli.tex"

    result = CliRunner().invoke(
        cli_app, ["generate", str(resume_file), "--output", str(output), "--skills"]
    )

    assert result.exit_code == 0, result.output
    assert r"\section{Skills}" in output.read_text(encoding="utf-8")


@pytest.mark.integration
def test_cli_generate_bad_override(cli_app, resume_file):
    result = CliRunner().invoke(cli_app, ["generate", str(resume_file), "--set", "nonsense"])

    assert result.exit_code == 1


@pytest.mark.integration
def test_cli_skills(cli_app, resume_file):
    result = CliRunner().invoke(cli_app, ["skills", str(resume_file), "--exact"])

    assert result.exit_code == 0
    assert "programming languages" in result.output
    assert "6 years 7 months" in result.output


@pytest.mark.integration
def test_cli_skills_header_matches_aggregation_date(cli_module, tmp_path, monkeypatch):
    resume = tmp_path / "cv.yaml"
    resume.write_text(
        "personal data:\n"
        "  name: Jessica\n"
        "experiences:\n"
        "  - beginning: \"2029-01\"\n"
        "    title: Analyst\n"
        "    description:\n"
        "      ci: [git]\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(cli_module, "current_date", lambda: date(2030, 1, 1))

    result = CliRunner().invoke(cli_module.app, ["skills", str(resume), "--exact"])

    assert result.exit_code == 0, result.output
    assert "Skill durations as of 2030-01-01" in result.output
    # The ongoing entry is measured up to the same date
    assert "git" in result.output
    assert "1 year\n" in result.output
