"""
Curriculum -> LaTeX Converter

Orchestration for turning a résumé file into a .tex document, optionally
compiled to PDF.

This module exports:
- Convenience function: curriculum_to_latex
- Orchestration function: generate_cv (with logging and optional compilation)
"""

import os
import time
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from curriculum.contexts.intake import load_curriculum
from curriculum.contexts.rendering import DocumentCompiler
from curriculum.contexts.templating.config_resolver import RenderConfig
from curriculum.contexts.templating.exceptions import TemplateRenderError
from curriculum.contexts.templating.latex_patterns import EntryPatterns
from curriculum.contexts.templating.latex_generator import CurriculumToLaTeXConverter
from curriculum.contexts.templating.logger import (
    _log_debug,
    _log_info,
    log_generation_result,
    log_generation_start,
    setup_templating_logger,
)
from curriculum.contexts.templating.registries import TemplateRegistry
from curriculum.contexts.templating.resume_components_data_structures import Curriculum
from curriculum.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
PREAMBLE_PATH = Path(
    os.getenv(
        "CURRICULUM_PREAMBLE_PATH", Path(__file__).parent / "template" / "structure" / "preamble.tex"
    )
)


@dataclass
class ConversionResult:
    """Result from generate_cv() orchestration function."""

    success: bool
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    pdf_path: Optional[Path] = None
    error: Optional[str] = None
    time_s: float = 0.0
    log_dir: Optional[Path] = None


def load_preamble(preamble_path: Optional[Path] = None) -> bytes:
    """
    Read the static preamble as raw bytes.

    Decoding happens in the generator so encoding problems surface as
    PreambleEncodingError.
    """
    return Path(preamble_path or PREAMBLE_PATH).read_bytes()


def curriculum_to_latex(
    curriculum: Curriculum,
    preamble: Union[str, bytes, None] = None,
    config: Optional[RenderConfig] = None,
    template_registry: Optional[TemplateRegistry] = None,
    today: Optional[date] = None,
) -> str:
    """
    Convert a Curriculum to a complete LaTeX document.

    Args:
        curriculum: Validated résumé
        preamble: Preamble text or bytes (default: packaged moderncv preamble)
        config: Render options (default: RenderConfig())
        template_registry: Template source (default: packaged templates)
        today: Reference date for ongoing entries

    Returns:
        LaTeX document string
    """
    preamble_path = None
    if preamble is None:
        preamble_path = PREAMBLE_PATH
        preamble = load_preamble(preamble_path)

    converter = CurriculumToLaTeXConverter(template_registry=template_registry, config=config)
    return converter.generate_document(
        curriculum, preamble, preamble_path=preamble_path, today=today
    )


def generate_cv(
    input_path: Path,
    output_path: Optional[Path] = None,
    preamble_path: Optional[Path] = None,
    config: Optional[RenderConfig] = None,
    compiler: Optional[DocumentCompiler] = None,
    log_dir: Optional[Path] = None,
    today: Optional[date] = None,
    template_registry: Optional[TemplateRegistry] = None,
) -> ConversionResult:
    """
    Generate a .tex document from a résumé file, optionally compiling it.

    Args:
        input_path: JSON or YAML résumé
        output_path: Destination .tex (default: input path with .tex suffix)
        preamble_path: Preamble file (default: CURRICULUM_PREAMBLE_PATH or packaged preamble)
        config: Render options (default: RenderConfig())
        compiler: Optional PDF compiler, e.g. compile_latex; no PDF when None
        log_dir: Directory for this session's log (default: LOGS_PATH/generate_<timestamp>)
        today: Reference date for ongoing entries
        template_registry: Template source (default: packaged templates)

    Returns:
        ConversionResult; failures are reported in result.error, not raised
    """
    input_path = Path(input_path)
    output_path = Path(output_path) if output_path else input_path.with_suffix(".tex")
    preamble_path = Path(preamble_path) if preamble_path else PREAMBLE_PATH
    log_dir = Path(log_dir) if log_dir else LOGS_PATH / f"generate_{now()}"

    log_file = setup_templating_logger(log_dir, phase="generate")
    log_generation_start(input_path.stem, input_path, log_file)

    start_time = time.time()
    result = ConversionResult(
        success=False, input_path=input_path, output_path=None, log_dir=log_dir
    )

    try:
        curriculum = load_curriculum(input_path)
        _log_info(f"Loaded {curriculum.entry_count()} timeline entries")

        converter = CurriculumToLaTeXConverter(template_registry=template_registry, config=config)
        latex = converter.generate_document(
            curriculum, load_preamble(preamble_path), preamble_path=preamble_path, today=today
        )

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(latex, encoding="utf-8")
        result.output_path = output_path
        _log_debug(
            f"Wrote {latex.count(EntryPatterns.CVENTRY + '{')} entries "
            f"({len(latex)} characters) to {output_path}"
        )

        result.success = True
        if compiler is not None:
            compilation = compiler(output_path, output_path.parent)
            result.pdf_path = compilation.pdf_path
            if not compilation.success:
                result.success = False
                result.error = "; ".join(compilation.errors) or "PDF compilation failed"

    except (TemplateRenderError, OSError, ValueError) as e:
        result.error = str(e)

    result.time_s = time.time() - start_time
    log_generation_result(input_path.stem, result, result.time_s)
    return result
