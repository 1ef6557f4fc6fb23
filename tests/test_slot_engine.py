"""
Tests for the slot engine.
"""

import pytest

from specialist_booking.domain import (
    ExistingBooking, InvalidInput, LunchBreak, UnavailableReason,
    VacationRange, WeeklySchedule, WorkDay,
    available_dates, compute_available_slots, evaluate_day,
    format_time, intervals_overlap, parse_time, weekday_of,
)

MONDAY = "2024-11-25"
SUNDAY = "2024-11-24"


def make_schedule(work_days=None, vacations=(), enabled=True, booking_period_months=2):
    if work_days is None:
        work_days = [
            WorkDay(
                weekday=day,
                start_time="09:00",
                end_time="18:00",
                lunch_breaks=(LunchBreak(start_time="13:00", end_time="14:00"),),
            )
            for day in range(1, 6)
        ]
    return WeeklySchedule(
        specialist_id="spec-1",
        enabled=enabled,
        work_days=tuple(work_days),
        vacations=tuple(vacations),
        booking_period_months=booking_period_months,
    )


def booking(start, end, status="confirmed", date=MONDAY):
    return ExistingBooking(specialist_id="spec-1", date=date, start_time=start, end_time=end, status=status)


def starts(slots, available=None):
    return [
        slot.start for slot in slots
        if available is None or slot.is_available == available
    ]


class TestTimeHelpers:
    """Tests for time and date helpers."""

    def test_parse_and_format_time(self):
        assert parse_time("09:30") == 570
        assert format_time(570) == "09:30"
        assert format_time(0) == "00:00"

    @pytest.mark.parametrize("value", ["9h30", "25:00", "", "12:60", None])
    def test_malformed_time_raises(self, value):
        with pytest.raises(InvalidInput):
            parse_time(value)

    def test_weekday_sunday_is_zero(self):
        assert weekday_of(SUNDAY) == 0
        assert weekday_of(MONDAY) == 1
        assert weekday_of("2024-11-30") == 6

    def test_malformed_date_raises(self):
        with pytest.raises(InvalidInput, match="YYYY-MM-DD"):
            weekday_of("25.11.2024")

    def test_touching_intervals_do_not_overlap(self):
        assert not intervals_overlap(540, 600, 600, 660)
        assert not intervals_overlap(600, 660, 540, 600)
        assert intervals_overlap(570, 630, 600, 660)
        assert intervals_overlap(540, 720, 600, 660)


class TestComputeAvailableSlots:
    """Tests for compute_available_slots."""

    def test_lunch_and_booking_example(self):
        """09:00-18:00, lunch 13-14, booking 10-11, 60 min service, 30 min step."""
        slots = compute_available_slots(
            make_schedule(), None, None, [booking("10:00", "11:00")], MONDAY, 60,
        )

        assert len(slots) == 17
        assert slots[0].start == "09:00" and slots[0].end == "10:00"
        assert slots[-1].start == "17:00" and slots[-1].end == "18:00"
        assert starts(slots, available=True) == [
            "09:00", "11:00", "11:30", "12:00",
            "14:00", "14:30", "15:00", "15:30", "16:00", "16:30", "17:00",
        ]
        assert starts(slots, available=False) == [
            "09:30", "10:00", "10:30", "12:30", "13:00", "13:30",
        ]

    def test_slot_count_formula(self):
        """Candidates = floor((window - duration) / step) + 1."""
        work_day = WorkDay(weekday=1, start_time="09:00", end_time="12:00")
        for duration, step in [(60, 30), (45, 15), (50, 20), (180, 30)]:
            slots = compute_available_slots(
                make_schedule([work_day]), None, None, [], MONDAY, duration, step,
            )
            assert len(slots) == (180 - duration) // step + 1
            assert all(slot.is_available for slot in slots)

    def test_duration_longer_than_work_day_is_empty(self):
        work_day = WorkDay(weekday=1, start_time="09:00", end_time="10:00")
        assert compute_available_slots(make_schedule([work_day]), None, None, [], MONDAY, 120) == []

    def test_slot_fully_inside_booking_is_unavailable(self):
        slots = compute_available_slots(
            make_schedule(), None, None, [booking("09:00", "12:00")], MONDAY, 30, 30,
        )
        assert not any(slot.is_available for slot in slots if slot.start < "12:00")
        assert all(slot.is_available for slot in slots if "12:00" <= slot.start < "13:00")

    def test_multiple_breaks_and_bookings_all_checked(self):
        work_day = WorkDay(
            weekday=1,
            start_time="09:00",
            end_time="13:00",
            lunch_breaks=(
                LunchBreak(start_time="10:00", end_time="10:30"),
                LunchBreak(start_time="12:00", end_time="12:30"),
            ),
        )
        slots = compute_available_slots(
            make_schedule([work_day]), None, None,
            [booking("11:00", "11:30"), booking("09:00", "09:30")],
            MONDAY, 30, 30,
        )
        assert starts(slots, available=True) == ["09:30", "10:30", "11:30", "12:30"]

    def test_cancelled_and_archived_bookings_do_not_occupy(self):
        slots = compute_available_slots(
            make_schedule(), None, None,
            [booking("09:00", "10:00", status="cancelled"), booking("10:00", "11:00", status="Archived")],
            MONDAY, 60,
        )
        assert slots[0].is_available
        assert slots[2].start == "10:00" and slots[2].is_available

    def test_booking_on_another_date_is_ignored(self):
        slots = compute_available_slots(
            make_schedule(), None, None, [booking("09:00", "10:00", date="2024-11-26")], MONDAY, 60,
        )
        assert slots[0].is_available

    def test_disabled_lunch_break_is_ignored(self):
        work_day = WorkDay(
            weekday=1,
            start_time="12:00",
            end_time="15:00",
            lunch_breaks=(LunchBreak(start_time="13:00", end_time="14:00", enabled=False),),
        )
        slots = compute_available_slots(make_schedule([work_day]), None, None, [], MONDAY, 60)
        assert all(slot.is_available for slot in slots)

    def test_explicit_lunch_breaks_replace_work_day_breaks(self):
        slots = compute_available_slots(
            make_schedule(), None, [LunchBreak(start_time="09:00", end_time="10:00")], [], MONDAY, 60,
        )
        assert not slots[0].is_available
        assert all(slot.is_available for slot in slots if slot.start >= "10:00")

    def test_only_available_slots(self):
        slots = compute_available_slots(
            make_schedule(), None, None, [booking("10:00", "11:00")], MONDAY, 60,
            include_unavailable=False,
        )
        assert all(slot.is_available for slot in slots)
        assert "10:00" not in starts(slots)
        assert len(slots) == 11

    def test_identical_inputs_give_identical_output(self):
        args = (make_schedule(), None, None, [booking("10:00", "11:00")], MONDAY, 60)
        assert compute_available_slots(*args) == compute_available_slots(*args)


class TestDayOutcomes:
    """Tests for days with no slots."""

    def test_no_schedule(self):
        result = evaluate_day(None, None, None, [], MONDAY, 60)
        assert result.reason == UnavailableReason.NO_SCHEDULE
        assert result.status == "unavailable"
        assert result.slots == []

    def test_disabled_schedule(self):
        result = evaluate_day(make_schedule(enabled=False), None, None, [], MONDAY, 60)
        assert result.reason == UnavailableReason.SCHEDULE_DISABLED
        assert result.slots == []

    def test_day_without_work_day(self):
        result = evaluate_day(make_schedule(), None, None, [], SUNDAY, 60)
        assert result.reason == UnavailableReason.NOT_WORKING_DAY
        assert result.weekday == 0

    def test_inactive_work_day_ignores_everything_else(self):
        work_day = WorkDay(weekday=1, start_time="09:00", end_time="18:00", active=False)
        result = evaluate_day(make_schedule([work_day]), None, None, [booking("10:00", "11:00")], MONDAY, 60)
        assert result.reason == UnavailableReason.NOT_WORKING_DAY
        assert result.slots == []

    def test_vacation_covering_date(self):
        vacation = VacationRange(start_date="2024-11-20", end_date="2024-11-25")
        result = evaluate_day(make_schedule(vacations=[vacation]), None, None, [], MONDAY, 60)
        assert result.reason == UnavailableReason.VACATION
        assert result.slots == []

    def test_explicit_vacations_override_schedule_vacations(self):
        vacation = VacationRange(start_date=MONDAY, end_date=MONDAY)
        assert compute_available_slots(make_schedule(), [vacation], None, [], MONDAY, 60) == []
        assert compute_available_slots(make_schedule(vacations=[vacation]), [], None, [], MONDAY, 60) != []

    def test_disabled_vacation_does_not_block(self):
        vacation = VacationRange(start_date=MONDAY, end_date=MONDAY, enabled=False)
        result = evaluate_day(make_schedule(vacations=[vacation]), None, None, [], MONDAY, 60)
        assert result.reason is None
        assert result.status == "available"
        assert len(result.slots) == 17

    def test_vacation_ending_day_before_does_not_block(self):
        vacation = VacationRange(start_date="2024-11-18", end_date="2024-11-24")
        result = evaluate_day(make_schedule(vacations=[vacation]), None, None, [], MONDAY, 60)
        assert result.reason is None


class TestInvalidInput:
    """Tests for rejected input."""

    @pytest.mark.parametrize("duration", [0, -30])
    def test_non_positive_duration(self, duration):
        with pytest.raises(InvalidInput):
            compute_available_slots(make_schedule(), None, None, [], MONDAY, duration)

    def test_non_positive_step(self):
        with pytest.raises(InvalidInput):
            compute_available_slots(make_schedule(), None, None, [], MONDAY, 60, 0)

    def test_malformed_work_day_time(self):
        work_day = WorkDay(weekday=1, start_time="9 утра", end_time="18:00")
        with pytest.raises(InvalidInput):
            compute_available_slots(make_schedule([work_day]), None, None, [], MONDAY, 60)

    def test_work_day_ending_before_start(self):
        work_day = WorkDay(weekday=1, start_time="18:00", end_time="09:00")
        with pytest.raises(InvalidInput, match="раньше окончания"):
            compute_available_slots(make_schedule([work_day]), None, None, [], MONDAY, 60)

    def test_malformed_booking_time(self):
        with pytest.raises(InvalidInput):
            compute_available_slots(make_schedule(), None, None, [booking("10-00", "11:00")], MONDAY, 60)

    def test_duplicate_weekdays_rejected(self):
        day = WorkDay(weekday=1, start_time="09:00", end_time="18:00")
        with pytest.raises(InvalidInput, match="повторяются"):
            make_schedule([day, day])

    def test_weekday_out_of_range(self):
        with pytest.raises(InvalidInput):
            WorkDay(weekday=7, start_time="09:00", end_time="18:00")


class TestAvailableDates:
    """Tests for available_dates."""

    def test_working_days_in_week(self):
        dates = available_dates(make_schedule(), SUNDAY, "2024-11-30", today="2024-11-20")
        assert dates == ["2024-11-25", "2024-11-26", "2024-11-27", "2024-11-28", "2024-11-29"]

    def test_vacation_days_excluded(self):
        schedule = make_schedule(vacations=[VacationRange(start_date="2024-11-26", end_date="2024-11-27")])
        dates = available_dates(schedule, SUNDAY, "2024-11-30", today="2024-11-20")
        assert dates == ["2024-11-25", "2024-11-28", "2024-11-29"]

    def test_past_dates_excluded(self):
        dates = available_dates(make_schedule(), SUNDAY, "2024-11-30", today="2024-11-27")
        assert dates == ["2024-11-27", "2024-11-28", "2024-11-29"]

    def test_clipped_by_booking_period(self):
        schedule = make_schedule(booking_period_months=1)
        dates = available_dates(schedule, "2024-11-20", "2025-01-31", today="2024-11-20")
        assert dates[-1] == "2024-12-20"

    def test_no_schedule_or_disabled(self):
        assert available_dates(None, SUNDAY, "2024-11-30", today="2024-11-20") == []
        assert available_dates(make_schedule(enabled=False), SUNDAY, "2024-11-30", today="2024-11-20") == []

    def test_reversed_range_raises(self):
        with pytest.raises(InvalidInput):
            available_dates(make_schedule(), "2024-11-30", SUNDAY, today="2024-11-20")
