"""
Dataset archive ingestion.

Turns an uploaded archive into the flat records the kernel installs.
Malformed entries are skipped with a warning; an archive that yields no
records at all is rejected.
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
import zlib
from typing import Any

from engine.kernel.errors import InvalidDatasetError
from engine.kernel.types import DATASET_KINDS

logger = logging.getLogger(__name__)

COURSES_FOLDER = "courses/"
OVERALL_SECTION = "overall"
OVERALL_YEAR = 1900

# record field → (source key, expected type)
COURSE_FIELDS: dict[str, tuple[str, type | tuple[type, ...]]] = {
    "dept": ("Subject", str),
    "id": ("Course", str),
    "avg": ("Avg", (int, float)),
    "instructor": ("Professor", str),
    "title": ("Title", str),
    "pass": ("Pass", int),
    "fail": ("Fail", int),
    "audit": ("Audit", int),
}

# Failures that skip one archive entry: corrupt or unsupported compression
# while reading, then bad JSON or a bad section while converting.
_ENTRY_ERRORS: tuple[type[Exception], ...] = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,
    ValueError,
    KeyError,
    TypeError,
)


def parse_dataset_archive(content: bytes, kind: str) -> list[dict[str, Any]]:
    """Dispatch on kind. Raises InvalidDatasetError if nothing can be installed."""
    if kind not in DATASET_KINDS:
        raise InvalidDatasetError(f"Unknown dataset kind: {kind!r}")

    parser = _PARSERS.get(kind)
    if parser is None:
        raise InvalidDatasetError(f"Dataset kind not supported for upload: {kind}")

    records = parser(content)
    if not records:
        raise InvalidDatasetError(f"Archive contains no valid {kind} records")
    return records


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------


def parse_courses_archive(content: bytes) -> list[dict[str, Any]]:
    try:
        archive = zipfile.ZipFile(io.BytesIO(content))
    except zipfile.BadZipFile as e:
        raise InvalidDatasetError(f"Not a zip archive: {e}") from e

    records: list[dict[str, Any]] = []
    with archive:
        for info in archive.infolist():
            if info.is_dir() or not info.filename.startswith(COURSES_FOLDER):
                continue
            try:
                records.extend(_parse_course_file(archive.read(info)))
            except _ENTRY_ERRORS as e:
                logger.warning("ingest: skipping malformed entry %s: %s", info.filename, e)

    logger.info("ingest: parsed %d course sections", len(records))
    return records


def _parse_course_file(raw: bytes) -> list[dict[str, Any]]:
    """All sections of one file, or raise so the whole file is skipped."""
    document = json.loads(raw.decode("utf-8"))
    sections = document["result"]
    if not isinstance(sections, list):
        raise TypeError("'result' must be an array")
    return [convert_section(section) for section in sections]


def convert_section(section: dict[str, Any]) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for name, (source, expected) in COURSE_FIELDS.items():
        value = section[source]
        if isinstance(value, bool) or not isinstance(value, expected):
            raise TypeError(f"{source} has unexpected type {type(value).__name__}")
        record[name] = value

    record["uuid"] = str(section["id"])
    if section.get("Section") == OVERALL_SECTION:
        record["year"] = OVERALL_YEAR
    else:
        record["year"] = int(section["Year"])
    return record


_PARSERS = {
    "courses": parse_courses_archive,
}
