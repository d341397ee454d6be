"""
Insight Scheduler — Room/Section Assignment Tests
"""

import copy

import pytest

from engine.kernel.scheduler import (
    MAX_DISTANCE_METRES,
    TIME_SLOTS,
    Plan,
    ScoreCalculator,
    TimeTable,
    fits,
    haversine,
    schedule,
    section_size,
)


def section(uuid, size, dept="cpsc", number="310"):
    return {
        "courses_dept": dept,
        "courses_id": number,
        "courses_uuid": uuid,
        "courses_pass": size,
        "courses_fail": 0,
        "courses_audit": 0,
    }


def room(number, seats, lat=49.26, lon=-123.25, shortname="DMP"):
    return {
        "rooms_shortname": shortname,
        "rooms_number": number,
        "rooms_seats": seats,
        "rooms_lat": lat,
        "rooms_lon": lon,
    }


# ============================================================================
# Helpers
# ============================================================================


class TestHelpers:
    def test_fifteen_time_slots(self):
        assert len(TIME_SLOTS) == 15
        assert TIME_SLOTS[0] == "MWF 0800-0900"
        assert TIME_SLOTS[8] == "MWF 1600-1700"
        assert TIME_SLOTS[-1] == "TR 1530-1700"

    def test_section_size_counts_pass_fail_audit(self):
        s = {"courses_pass": 10, "courses_fail": 3, "courses_audit": 2}
        assert section_size(s) == 15

    def test_fits_is_strict(self):
        assert fits(room("1", 11), section("a", 10))
        assert not fits(room("1", 10), section("a", 10))

    def test_haversine_zero(self):
        assert haversine(49.26, -123.25, 49.26, -123.25) == 0

    def test_haversine_one_degree_latitude(self):
        assert haversine(0, 0, 1, 0) == pytest.approx(111195, rel=1e-3)


class TestScore:
    def test_empty_table_scores_zero(self):
        assert ScoreCalculator([section("a", 10)]).score(TimeTable()) == 0.0

    def test_single_room_full_enrolment(self):
        r = room("1", 50)
        s = section("a", 10)
        table = TimeTable([Plan(room=r, section=s, slot=TIME_SLOTS[0])])
        assert ScoreCalculator([s]).score(table) == pytest.approx(1.0)

    def test_far_rooms_cap_distance_penalty(self):
        near = room("1", 50)
        far = room("2", 50, lat=49.30)
        s1, s2 = section("a", 10), section("b", 10)
        table = TimeTable(
            [
                Plan(room=near, section=s1, slot=TIME_SLOTS[0]),
                Plan(room=far, section=s2, slot=TIME_SLOTS[0]),
            ]
        )
        calc = ScoreCalculator([s1, s2])
        assert calc.distance_penalty(table) == 1.0
        assert calc.score(table) == pytest.approx(0.7)

    def test_distance_penalty_scales_linearly(self):
        a = room("1", 50, lat=0.0, lon=0.0)
        b = room("2", 50, lat=0.005, lon=0.0)
        table = TimeTable(
            [
                Plan(room=a, section=section("a", 1), slot=TIME_SLOTS[0]),
                Plan(room=b, section=section("b", 1), slot=TIME_SLOTS[0]),
            ]
        )
        expected = haversine(0.0, 0.0, 0.005, 0.0) / MAX_DISTANCE_METRES
        assert ScoreCalculator([]).distance_penalty(table) == pytest.approx(expected)


# ============================================================================
# schedule()
# ============================================================================


class TestSchedule:
    def test_smallest_sections_take_earliest_slots(self):
        r = room("1", 50)
        big, small = section("big", 20), section("small", 10)
        result = schedule([big, small], [r])
        assert [(s["courses_uuid"], slot) for _, s, slot in result] == [
            ("small", TIME_SLOTS[0]),
            ("big", TIME_SLOTS[1]),
        ]

    def test_section_that_fits_nowhere_is_left_out(self):
        result = schedule([section("huge", 100)], [room("1", 50)])
        assert result == []

    def test_room_holds_at_most_one_section_per_slot(self):
        sections = [section(str(i), 1) for i in range(16)]
        result = schedule(sections, [room("1", 50)])
        assert len(result) == 15
        assert len({slot for _, _, slot in result}) == 15

    def test_nearby_second_room_takes_the_overflow(self):
        sections = [section(str(i), 1) for i in range(16)]
        rooms = [room("1", 50), room("2", 50)]
        result = schedule(sections, rooms)
        assert len(result) == 16
        assert {s["courses_uuid"] for _, s, _ in result} == {str(i) for i in range(16)}

    def test_far_second_room_is_not_worth_it(self):
        sections = [section(str(i), 1) for i in range(16)]
        rooms = [room("1", 50), room("2", 50, lat=49.30)]
        result = schedule(sections, rooms)
        assert len(result) == 15
        assert {r["rooms_number"] for r, _, _ in result} == {"1"}

    def test_each_section_scheduled_once(self):
        sections = [section(str(i), i + 1) for i in range(20)]
        rooms = [room("1", 10), room("2", 30), room("3", 5)]
        result = schedule(sections, rooms)
        uuids = [s["courses_uuid"] for _, s, _ in result]
        assert len(uuids) == len(set(uuids))
        for r, s, _ in result:
            assert fits(r, s)

    def test_no_rooms_or_no_sections(self):
        assert schedule([], [room("1", 50)]) == []
        assert schedule([section("a", 1)], []) == []

    def test_inputs_are_not_mutated(self):
        sections = [section("a", 5), section("b", 3)]
        rooms = [room("1", 50)]
        before = (copy.deepcopy(sections), copy.deepcopy(rooms))
        schedule(sections, rooms)
        assert (sections, rooms) == before
