"""
Rendering Context

Responsibilities:
- Compiles generated LaTeX to PDF with an external engine
- Validates compilation success
- Handles LaTeX errors and provides diagnostic information

Owns: LaTeX compilation, PDF generation
Never: Modifies generated content
"""

from curriculum.contexts.rendering.compiler import (
    CompilationResult,
    DocumentCompiler,
    compile_latex,
)

__all__ = ["CompilationResult", "DocumentCompiler", "compile_latex"]
