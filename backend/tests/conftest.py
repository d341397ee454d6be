"""
Pytest configuration and fixtures for Insight service tests.
"""

from __future__ import annotations

import io
import json
import zipfile

import httpx
import pytest
import pytest_asyncio

from backend.main import app
from engine.kernel.facade import InsightFacade


def make_section(
    uuid=1,
    subject="cpsc",
    course="310",
    avg=78.5,
    professor="holmes, reid",
    title="softw eng",
    passed=100,
    failed=5,
    audit=1,
    year="2015",
    section="101",
):
    return {
        "id": uuid,
        "Subject": subject,
        "Course": course,
        "Avg": avg,
        "Professor": professor,
        "Title": title,
        "Pass": passed,
        "Fail": failed,
        "Audit": audit,
        "Year": year,
        "Section": section,
    }


def make_archive(files: dict[str, object]) -> bytes:
    """Zip {path: payload}. Dict/list payloads are JSON-encoded, bytes go in raw."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for path, payload in files.items():
            if isinstance(payload, (bytes, str)):
                archive.writestr(path, payload)
            else:
                archive.writestr(path, json.dumps(payload))
    return buffer.getvalue()


@pytest.fixture
def section_factory():
    return make_section


@pytest.fixture
def archive_factory():
    return make_archive


@pytest.fixture
def courses_zip():
    """Three sections across two files, one of them an 'overall' row."""
    return make_archive(
        {
            "courses/CPSC310": {
                "result": [
                    make_section(uuid=1, avg=78.5),
                    make_section(uuid=2, avg=95, section="overall"),
                ]
            },
            "courses/MATH200": {
                "result": [make_section(uuid=3, subject="math", course="200", avg=90, professor="")]
            },
        }
    )


@pytest_asyncio.fixture
async def async_client():
    """Async HTTP client against the ASGI app, with a fresh facade per test."""
    app.state.facade = InsightFacade()
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
