"""
Session logging with loguru.

One generation run is one logging session: a directory holding
{context}.log (everything down to DEBUG) plus a console sink for INFO and
above. Context modules wrap this in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path

from loguru import logger

from curriculum import __version__

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = None,
    console_level: str = "INFO",
) -> Path:
    """
    Start a logging session for one context.

    Replaces any previously installed sinks, so each session logs to
    exactly one file.

    Args:
        context_name: Log file stem, e.g. "template"
        log_dir: Session directory, created if missing
        extra_provenance: Additional key-value pairs for the session header
        level_colors: Console colors per level, merged over LEVEL_COLORS
        console_level: Lowest level echoed to stdout

    Returns:
        Path to the session log file

    Example:
        log_file = setup_logger("template", Path("outs/logs/generate_20251114_123456"))
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """Write a header recording how and where this session was started."""
    header = {
        "curriculum": __version__,
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        **(extra_context or {}),
    }
    logger.info("=" * 80)
    for key, value in header.items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
