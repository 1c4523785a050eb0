"""
PDF Compilation

Runs an external LaTeX engine over a generated .tex document. Generation
never depends on this module: a missing engine yields a failed
CompilationResult, not an exception.
"""

import os
import re
import shutil
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol, Tuple

from dotenv import load_dotenv

from curriculum.contexts.rendering.logger import (
    _log_debug,
    _log_warning,
    log_compilation_result,
    log_compilation_start,
)

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
KEEP_LATEX_ARTIFACTS = os.getenv("KEEP_LATEX_ARTIFACTS", "false").lower() == "true"

# Auxiliary files written next to the PDF by every engine pass
AUXILIARY_SUFFIXES = (".aux", ".log", ".out", ".toc")

# Fatal lines in the engine log; "! ..." lines are collected separately
FATAL_LOG_MESSAGES = (
    "Undefined control sequence",
    "File ended while scanning use of",
    "Emergency stop",
)
ERROR_LINE = re.compile(r"^! (.+)$", re.MULTILINE)
WARNING_LINES = (
    re.compile(r"LaTeX Warning: (.+)"),
    re.compile(r"Package \w+ Warning: (.+)"),
    re.compile(r"Overfull \\hbox \((.+)\)"),
    re.compile(r"Underfull \\hbox \((.+)\)"),
)


@dataclass
class CompilationResult:
    """
    Outcome of one compile_latex() call.

    Attributes:
        success: PDF produced and no errors found in the engine log
        pdf_path: Generated PDF, None if there is none
        stdout: Engine output of all passes
        stderr: Engine error output of all passes
        errors: Error lines taken from the engine log
        warnings: Warning lines taken from the engine log
    """

    success: bool
    pdf_path: Optional[Path] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class DocumentCompiler(Protocol):
    """Anything that turns a .tex file into a PDF; compile_latex is the default."""

    def __call__(self, tex_file: Path, compile_dir: Optional[Path] = None) -> CompilationResult:
        ...


def _parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """
    Collect errors and warnings from an engine log.

    Returns:
        (errors, warnings)
    """
    errors = [match.group(1).strip() for match in ERROR_LINE.finditer(log_content)]

    for message in FATAL_LOG_MESSAGES:
        match = re.search(rf"({re.escape(message)}.*?)$", log_content, re.MULTILINE)
        if match and match.group(1) not in errors:
            errors.append(match.group(1))

    warnings = [
        match.group(1).strip()
        for pattern in WARNING_LINES
        for match in pattern.finditer(log_content)
    ]
    return errors, warnings


def _remove_artifacts(tex_path: Path) -> None:
    """Delete the auxiliary files belonging to tex_path."""
    for suffix in AUXILIARY_SUFFIXES:
        tex_path.with_suffix(suffix).unlink(missing_ok=True)


def _run_engine(compiler: str, tex_file: Path, num_passes: int) -> Tuple[List[str], List[str]]:
    """
    Run the engine up to num_passes times, stopping at the first failing pass.

    Returns:
        (stdout per pass, stderr per pass)
    """
    stdout, stderr = [], []
    for pass_number in range(1, num_passes + 1):
        completed = subprocess.run(
            [compiler, "-interaction=nonstopmode", "-file-line-error", tex_file.name],
            cwd=tex_file.parent,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        stdout.append(completed.stdout)
        stderr.append(completed.stderr)
        if completed.returncode != 0:
            _log_warning(f"Pass {pass_number} exited with status {completed.returncode}")
            break
    return stdout, stderr


def compile_latex(
    tex_file: Path,
    compile_dir: Optional[Path] = None,
    num_passes: int = 2,
    keep_artifacts: bool = KEEP_LATEX_ARTIFACTS,
    compiler: str = LATEX_COMPILER,
    verbose: bool = False,
) -> CompilationResult:
    """
    Compile a LaTeX file to PDF.

    Args:
        tex_file: Document to compile
        compile_dir: Where the PDF goes (default: next to tex_file). The
            source is copied there for the run and removed afterwards.
        num_passes: Engine passes; moderncv needs two for page references
        keep_artifacts: Keep .aux/.log files (default: KEEP_LATEX_ARTIFACTS env)
        compiler: Engine executable (default: LATEX_COMPILER env, else pdflatex)
        verbose: Log full engine output even on success

    Returns:
        CompilationResult with diagnostics from the engine log
    """
    source = Path(tex_file).resolve()
    if not source.exists():
        return CompilationResult(success=False, errors=[f"TeX file not found: {source}"])
    if shutil.which(compiler) is None:
        return CompilationResult(
            success=False, errors=[f"LaTeX compiler not found on PATH: {compiler}"]
        )

    compile_dir = Path(compile_dir).resolve() if compile_dir else source.parent
    compile_dir.mkdir(parents=True, exist_ok=True)
    working_copy = compile_dir / source.name
    if working_copy != source:
        shutil.copy2(source, working_copy)

    # Stale outputs would mask a failed run
    pdf_path = working_copy.with_suffix(".pdf")
    pdf_path.unlink(missing_ok=True)
    _remove_artifacts(working_copy)

    log_compilation_start(working_copy, num_passes, compile_dir)
    start_time = time.time()
    stdout, stderr = _run_engine(compiler, working_copy, num_passes)

    errors, warnings = [], []
    log_path = working_copy.with_suffix(".log")
    if log_path.exists():
        # Engine logs are latin-1, font metadata is not valid UTF-8
        errors, warnings = _parse_latex_log(log_path.read_text(encoding="latin-1"))

    if not pdf_path.exists() and not errors:
        errors.append("PDF file was not generated")

    if not keep_artifacts:
        _remove_artifacts(working_copy)
        _log_debug("Removed auxiliary files")
    if working_copy != source:
        working_copy.unlink()

    result = CompilationResult(
        success=pdf_path.exists() and not errors,
        pdf_path=pdf_path if pdf_path.exists() else None,
        stdout="\n".join(stdout),
        stderr="\n".join(stderr),
        errors=errors,
        warnings=warnings,
    )
    log_compilation_result(source.stem, result, time.time() - start_time, verbose=verbose)
    return result
