"""
Résumé Loader

Reads JSON or YAML résumé files and validates them into a Curriculum.
"""

import json
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pydantic import ValidationError

from curriculum.contexts.intake.exceptions import InvalidResumeStructureError
from curriculum.contexts.intake.logger import _log_debug, _log_error, _log_info, _log_warning
from curriculum.contexts.intake.schema import CurriculumSchema
from curriculum.contexts.templating.resume_components_data_structures import Curriculum
from curriculum.contexts.timeline import TimelineEntry

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")
DOCUMENT_ROOT = "<document>"


def format_field_path(loc: Iterable[Any]) -> str:
    """
    Join a pydantic error location into a dotted path.

    Example:
        >>> format_field_path(("experiences", 0, "children", 1, "beginning"))
        'experiences.0.children.1.beginning'
    """
    path = ".".join(str(part) for part in loc)
    return path or DOCUMENT_ROOT


def read_resume_data(path: Path) -> Any:
    """
    Read a résumé file into plain Python containers.

    Args:
        path: .json, .yaml or .yml file

    Returns:
        Parsed content (normally a dict)

    Raises:
        InvalidResumeStructureError: If the file cannot be parsed
        ValueError: If the file extension is not supported
    """
    path = Path(path)
    suffix = path.suffix.lower()

    try:
        if suffix in JSON_SUFFIXES:
            return json.loads(path.read_text(encoding="utf-8"))
        if suffix in YAML_SUFFIXES:
            return OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    except (json.JSONDecodeError, yaml.YAMLError, OmegaConfBaseException) as e:
        raise InvalidResumeStructureError(
            "Could not parse résumé file", errors=[(DOCUMENT_ROOT, str(e))], source_path=path
        ) from e

    raise ValueError(
        f"Unsupported résumé format '{suffix}'. Expected one of {JSON_SUFFIXES + YAML_SUFFIXES}"
    )


def parse_curriculum(data: Any, source_path: Optional[Path] = None) -> Curriculum:
    """
    Validate raw résumé data and build the Curriculum.

    Args:
        data: Parsed JSON/YAML content
        source_path: Origin of the data, used in error messages

    Returns:
        Curriculum with immutable timeline entries

    Raises:
        InvalidResumeStructureError: If data does not match the schema. Every
            offending field is reported with its dotted path.
    """
    try:
        schema = CurriculumSchema.model_validate(data)
    except ValidationError as e:
        errors = [(format_field_path(error["loc"]), error["msg"]) for error in e.errors()]
        _log_error(f"{len(errors)} validation errors in {source_path or 'résumé data'}")
        raise InvalidResumeStructureError(
            f"Résumé does not match the expected structure ({len(errors)} errors)",
            errors=errors,
            source_path=source_path,
        ) from e

    curriculum = schema.to_curriculum()
    _warn_on_date_anomalies(curriculum.education, "education")
    _warn_on_date_anomalies(curriculum.experiences, "experiences")
    _log_debug(f"Parsed {curriculum.entry_count()} timeline entries")
    return curriculum


def load_curriculum(path: Path) -> Curriculum:
    """Read and validate a résumé file."""
    path = Path(path)
    _log_info(f"Loading résumé from {path}")
    return parse_curriculum(read_resume_data(path), source_path=path)


def _warn_on_date_anomalies(entries: Iterable[TimelineEntry], path: str) -> None:
    """Log entries whose dates cannot yield a meaningful duration."""
    for index, entry in enumerate(entries):
        entry_path = f"{path}.{index}"
        if entry.beginning is None and entry.end is not None:
            _log_warning(f"{entry_path}: 'end' without 'beginning', entry has no duration")
        elif entry.beginning and entry.end and entry.end < entry.beginning:
            _log_warning(f"{entry_path}: 'end' precedes 'beginning', duration counts as zero")
        _warn_on_date_anomalies(entry.children, f"{entry_path}.children")
