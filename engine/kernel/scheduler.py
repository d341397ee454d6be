"""
Insight Kernel — Scheduler

Greedy room/section assignment over query-shaped records:

  sections: {"courses_dept", "courses_id", "courses_uuid",
             "courses_pass", "courses_fail", "courses_audit"}
  rooms:    {"rooms_shortname", "rooms_number", "rooms_seats",
             "rooms_lat", "rooms_lon"}

Each round tries every remaining room, fills it with the smallest
sections that fit, and keeps the room that raises the timetable score the
most. Stops when no room improves the score.

Score = 0.7 * E + 0.3 * (1 - D)
  E  fraction of all requested seats that were scheduled
  D  max pairwise distance between used rooms / 1372 m, capped at 1

Pure and synchronous. Inputs are never mutated.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from itertools import combinations
from typing import Any

MWF_SLOTS: list[str] = [f"MWF {h:02d}00-{h + 1:02d}00" for h in range(8, 17)]
TR_SLOTS: list[str] = [
    "TR 0800-0930",
    "TR 0930-1100",
    "TR 1100-1230",
    "TR 1230-1400",
    "TR 1400-1530",
    "TR 1530-1700",
]
TIME_SLOTS: list[str] = MWF_SLOTS + TR_SLOTS

ENROLMENT_WEIGHT = 0.7
DISTANCE_WEIGHT = 0.3
MAX_DISTANCE_METRES = 1372.0
EARTH_RADIUS_METRES = 6371e3


@dataclass(frozen=True)
class Plan:
    room: dict[str, Any]
    section: dict[str, Any]
    slot: str


@dataclass
class TimeTable:
    plans: list[Plan] = field(default_factory=list)

    def with_plans(self, plans: list[Plan]) -> TimeTable:
        return TimeTable(plans=self.plans + plans)

    def rooms(self) -> list[dict[str, Any]]:
        seen: dict[int, dict[str, Any]] = {}
        for plan in self.plans:
            seen.setdefault(id(plan.room), plan.room)
        return list(seen.values())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def schedule(
    sections: list[dict[str, Any]],
    rooms: list[dict[str, Any]],
) -> list[tuple[dict[str, Any], dict[str, Any], str]]:
    """Assign sections to (room, time slot) pairs. Returns (room, section, slot) triples."""
    calc = ScoreCalculator(sections)
    room_pool = list(rooms)
    section_pool = list(sections)
    table = TimeTable()

    while room_pool and section_pool:
        best = _take_best_room(table, room_pool, section_pool, calc)
        if best is None:
            break
        room_index, plans = best
        table = table.with_plans(plans)
        del room_pool[room_index]
        taken = {id(p.section) for p in plans}
        section_pool = [s for s in section_pool if id(s) not in taken]

    return [(p.room, p.section, p.slot) for p in table.plans]


def section_size(section: dict[str, Any]) -> int:
    return section["courses_pass"] + section["courses_fail"] + section["courses_audit"]


def fits(room: dict[str, Any], section: dict[str, Any]) -> bool:
    return section_size(section) < room["rooms_seats"]


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_METRES * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


class ScoreCalculator:
    def __init__(self, sections: list[dict[str, Any]]):
        self.total_seats = sum(section_size(s) for s in sections)

    def score(self, table: TimeTable) -> float:
        if not table.plans or self.total_seats == 0:
            return 0.0
        enrolled = sum(section_size(p.section) for p in table.plans) / self.total_seats
        return ENROLMENT_WEIGHT * enrolled + DISTANCE_WEIGHT * (1 - self.distance_penalty(table))

    def distance_penalty(self, table: TimeTable) -> float:
        furthest = 0.0
        for a, b in combinations(table.rooms(), 2):
            d = haversine(a["rooms_lat"], a["rooms_lon"], b["rooms_lat"], b["rooms_lon"])
            furthest = max(furthest, d)
        return min(furthest / MAX_DISTANCE_METRES, 1.0)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _room_plans(room: dict[str, Any], section_pool: list[dict[str, Any]]) -> list[Plan]:
    """Smallest fitting sections first, one per slot."""
    candidates = sorted((s for s in section_pool if fits(room, s)), key=section_size)
    return [
        Plan(room=room, section=section, slot=slot)
        for section, slot in zip(candidates, TIME_SLOTS)
    ]


def _take_best_room(
    table: TimeTable,
    room_pool: list[dict[str, Any]],
    section_pool: list[dict[str, Any]],
    calc: ScoreCalculator,
) -> tuple[int, list[Plan]] | None:
    current = calc.score(table)
    best: tuple[int, list[Plan]] | None = None
    best_score = 0.0

    for index, room in enumerate(room_pool):
        plans = _room_plans(room, section_pool)
        if not plans:
            continue
        score = calc.score(table.with_plans(plans))
        if score > current and score > best_score:
            best = (index, plans)
            best_score = score

    return best
