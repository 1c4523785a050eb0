#!/usr/bin/env python3
"""
Curriculum Generation CLI

Generates moderncv LaTeX (and optionally PDF) from a JSON or YAML résumé,
and reports aggregated skill durations.

Commands:
    generate - Write a .tex document next to the input file (or to --output)
    skills   - Print skill durations aggregated over all experiences

Examples:\n

    generate_cv.py generate data/cv.json                      # Writes data/cv.tex

    generate_cv.py generate data/cv.yaml --pdf                # Also compiles to PDF

    generate_cv.py generate data/cv.json --set include_skill_report=true

    generate_cv.py skills data/cv.json --exact                # Unrounded durations
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from curriculum.contexts.intake import InvalidResumeStructureError, load_curriculum
from curriculum.contexts.rendering import compile_latex
from curriculum.contexts.templating import load_render_config
from curriculum.contexts.templating.converter import generate_cv
from curriculum.contexts.timeline import current_date

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", Path.cwd()))


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(PROJECT_ROOT.resolve()))
    except ValueError:
        return str(path)


app = typer.Typer(
    help="Generate moderncv LaTeX résumés from structured JSON/YAML descriptions",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("generate")
def generate_command(
    input_path: Annotated[
        Path,
        typer.Argument(help="Résumé description (.json, .yaml or .yml)", exists=True, dir_okay=False),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Destination .tex file (default: next to input)"),
    ] = None,
    preamble: Annotated[
        Optional[Path],
        typer.Option("--preamble", help="LaTeX preamble file inserted verbatim", exists=True),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Render config YAML", exists=True),
    ] = None,
    overrides: Annotated[
        Optional[List[str]],
        typer.Option("--set", "-s", help="Render config override KEY=VALUE (repeatable)"),
    ] = None,
    pdf: Annotated[
        bool,
        typer.Option("--pdf", help="Compile the generated .tex to PDF"),
    ] = False,
    num_passes: Annotated[
        int,
        typer.Option("--passes", "-p", help="Number of compiler passes", min=1, max=5),
    ] = 2,
    skills: Annotated[
        bool,
        typer.Option("--skills", help="Append the aggregated skills section"),
    ] = False,
):
    """
    Generate a LaTeX résumé, optionally compiled to PDF.

    Examples:\n

        $ generate_cv.py generate cv.json                   # Writes cv.tex

        $ generate_cv.py generate cv.json --pdf --passes 1  # Single-pass PDF build
    """
    overrides = list(overrides or [])
    if skills:
        overrides.append("include_skill_report=true")

    try:
        config = load_render_config(config_path, overrides=overrides)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    compiler = None
    if pdf:
        def compiler(tex_file, compile_dir=None):
            return compile_latex(tex_file, compile_dir=compile_dir, num_passes=num_passes)

    typer.secho(f"\nGenerating: {display_path(input_path)}", fg=typer.colors.BLUE, bold=True)

    result = generate_cv(
        input_path, output_path=output, preamble_path=preamble, config=config, compiler=compiler
    )

    typer.echo("")
    if result.success:
        typer.secho("✓ Generation succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  TeX: {display_path(result.output_path)}")
        if result.pdf_path:
            typer.echo(f"  PDF: {display_path(result.pdf_path)}")
    else:
        typer.secho("✗ Generation failed", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {result.error}", fg=typer.colors.RED)

    if result.log_dir:
        typer.echo(f"  Log: {display_path(result.log_dir / 'template.log')}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("skills")
def skills_command(
    input_path: Annotated[
        Path,
        typer.Argument(help="Résumé description (.json, .yaml or .yml)", exists=True, dir_okay=False),
    ],
    rounded: Annotated[
        bool,
        typer.Option("--round/--exact", help="Round durations to whole years"),
    ] = True,
):
    """
    Print skill durations aggregated over every experience.

    Examples:\n

        $ generate_cv.py skills cv.json            # Rounded to years

        $ generate_cv.py skills cv.json --exact    # Years and months
    """
    try:
        curriculum = load_curriculum(input_path)
    except (InvalidResumeStructureError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    as_of = current_date()
    skills = curriculum.get_skills(today=as_of)
    if rounded:
        skills = skills.rounded()

    if not len(skills):
        typer.secho("\nNo skills found.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=0)

    typer.echo(f"\nSkill durations as of {as_of.isoformat()}")
    for category, ranked in skills.ordered():
        typer.secho(f"\n{category.label}", fg=typer.colors.BLUE, bold=True)
        for name, duration in ranked:
            typer.echo(f"  {name:<30} {duration.format()}")
    typer.echo("")


if __name__ == "__main__":
    app()
