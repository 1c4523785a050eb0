"""
Rendering context logger.

Logging interface for the rendering context with an automatic [render]
prefix. Compilation runs inside the session set up by the caller (see
templating.logger.setup_templating_logger), so no sinks are configured here.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[render]"

# Diagnostics shown per compilation, (normal, verbose)
ERROR_DISPLAY_LIMITS = (5, 10)
WARNING_DISPLAY_LIMITS = (3, 10)


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_limited(log, label: str, items, limit: int) -> None:
    """Log the first `limit` items, then a count of the rest."""
    for number, item in enumerate(items[:limit], 1):
        log(f"  {label} {number}: {item}")
    if len(items) > limit:
        log(f"  ... {len(items) - limit} more {label.lower()}s")


def log_compilation_start(tex_file: Path, num_passes: int, working_dir: Path) -> None:
    """Announce a compilation run."""
    _log_info(f"Compiling {tex_file.name} ({num_passes} passes) in {working_dir}")


def log_compilation_result(
    name: str,
    result,  # CompilationResult
    elapsed_time: float,
    verbose: bool = False,
) -> None:
    """
    Summarize a compilation, with engine output on failure or when verbose.

    Args:
        name: Document identifier
        result: CompilationResult from compile_latex()
        elapsed_time: Seconds spent in the engine
        verbose: Raise display limits and always dump engine output
    """
    if result.success:
        _log_success(f"{name}: PDF ready, {len(result.warnings)} warnings ({elapsed_time:.2f}s)")
        _log_debug(f"  PDF: {result.pdf_path}")
    else:
        _log_error(f"{name}: no PDF, {len(result.errors)} errors ({elapsed_time:.2f}s)")
        _log_limited(_log_error, "Error", result.errors, ERROR_DISPLAY_LIMITS[verbose])

    _log_limited(_log_debug, "Warning", result.warnings, WARNING_DISPLAY_LIMITS[verbose])

    if verbose or not result.success:
        for stream, text in (("STDOUT", result.stdout), ("STDERR", result.stderr)):
            if text:
                # raw keeps the engine's own line layout
                logger.opt(raw=True).debug(f"\n{'=' * 80}\nENGINE {stream}:\n{'=' * 80}\n{text}\n")
