"""
Insight kernel test configuration.

Small in-memory datasets shaped like the courses and rooms data the
service ingests. Every fixture builds a fresh store so tests never share
state.
"""

import pytest

from engine.kernel.facade import InsightFacade
from engine.kernel.store import DatasetStore


def course(dept, number, avg, instructor="", year=2015, passed=10, failed=0, audit=0, uuid="0"):
    return {
        "dept": dept,
        "id": number,
        "avg": avg,
        "instructor": instructor,
        "title": f"{dept} {number}",
        "pass": passed,
        "fail": failed,
        "audit": audit,
        "uuid": uuid,
        "year": year,
    }


def room(shortname, number, seats, lat=49.26, lon=-123.25):
    return {
        "fullname": f"{shortname} Building",
        "shortname": shortname,
        "number": number,
        "name": f"{shortname}_{number}",
        "address": "2329 West Mall",
        "lat": lat,
        "lon": lon,
        "seats": seats,
        "type": "Tiered Large Group",
        "furniture": "Classroom-Fixed Tablets",
        "href": "",
    }


COURSES = [
    course("cpsc", "310", 78.5, "holmes, reid", uuid="1001"),
    course("cpsc", "110", 70, "kiczales, gregor", uuid="1002"),
    course("math", "200", 90, "", uuid="1003"),
    course("cpsc", "310", 95, "holmes, reid", year=1900, uuid="1004"),
    course("x-cpsc", "310", 60, "nobody", uuid="1005"),
    course("biol", "112", 84.25, "smith, jane", uuid="1006"),
]

ROOMS = [
    room("DMP", "310", 160),
    room("DMP", "110", 120),
    room("ANGU", "098", 260),
]


@pytest.fixture
def courses_records():
    return [dict(r) for r in COURSES]


@pytest.fixture
def rooms_records():
    return [dict(r) for r in ROOMS]


@pytest.fixture
def store(courses_records, rooms_records):
    s = DatasetStore()
    s.add("courses", "courses", courses_records)
    s.add("rooms", "rooms", rooms_records)
    return s


@pytest.fixture
def courses(store):
    return store.get("courses")


@pytest.fixture
def facade():
    return InsightFacade()
