import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from sunshine.errors import DatasetError
from sunshine.schemas.department import Department, DepartmentEntry
from sunshine.utils.slugify import assign_slugs

logger = logging.getLogger("sunshine.dataset")

_entries = TypeAdapter(dict[str, DepartmentEntry])


def parse_departments(data: bytes | str) -> dict[str, Department]:
    """Decode a ``{name: {email, contact_name, notes, url}}`` document.

    Returns departments keyed by name, in document order, each carrying a
    slug that is unique within the document.
    """
    try:
        entries = _entries.validate_json(data)
    except ValidationError as exc:
        raise DatasetError(f"unable to decode departments: {exc}") from exc

    for name in entries:
        if not name:
            raise DatasetError("department names must not be empty")

    slugs = assign_slugs(entries)
    return {
        name: Department(name=name, name_slug=slugs[name], **entry.model_dump())
        for name, entry in entries.items()
    }


def load_departments(path: Path) -> dict[str, Department]:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise DatasetError(f"unable to read {path}: {exc}") from exc
    departments = parse_departments(data)
    logger.info("Loaded %d departments from %s", len(departments), path)
    return departments
