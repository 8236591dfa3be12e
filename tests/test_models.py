import unittest
from datetime import datetime, timedelta, timezone

from schedcore.errors import InvalidShiftTimes, MalformedTimestamp
from schedcore.models import (
    Employee, EmployeeColor, EmployeeLevel, Shift, ShiftMessage, ShiftRepeat,
    ViewConfig, parse_timestamp
)

PDT = timezone(timedelta(hours=-7))


def make_shift(**overrides):
    values = dict(
        id=3,
        supervisor_id=1,
        employee_id=0,
        start=datetime(2019, 6, 27, 8, 30, tzinfo=PDT),
        end=datetime(2019, 6, 27, 19, 0, tzinfo=PDT),
        repeat=ShiftRepeat.EVERY_WEEK,
        every_x=2,
        note="bring keys",
        on_call=True
    )
    values.update(overrides)
    return Shift(**values)


class TestShiftMessage(unittest.TestCase):
    def test_shift_survives_message_round_trip(self):
        shift = make_shift()
        self.assertEqual(Shift.from_message(shift.to_message()), shift)

    def test_unassigned_shift_round_trip_keeps_missing_employee(self):
        shift = make_shift(employee_id=None, note=None, every_x=None)
        back = Shift.from_message(shift.to_message())
        self.assertIsNone(back.employee_id)
        self.assertEqual(back, shift)

    def test_message_survives_shift_round_trip(self):
        message = ShiftMessage(
            id=1,
            supervisor_id=1,
            employee_id=1,
            start="2019-06-27T07:00:00-07:00",
            end="2019-06-27T17:00:00.250000+00:00",
        )
        self.assertEqual(message.to_shift().to_message(), message)

    def test_message_dict_uses_wire_names(self):
        data = make_shift().to_dict()
        self.assertEqual(data["start"], "2019-06-27T08:30:00-07:00")
        self.assertEqual(data["repeat"], "EveryWeek")
        self.assertTrue(data["on_call"])
        self.assertEqual(Shift.from_dict(data), make_shift())

    def test_unparseable_timestamp_raises(self):
        message = ShiftMessage(id=1, supervisor_id=1, start="yesterday-ish", end="2019-06-27T17:00:00-07:00")
        with self.assertRaises(MalformedTimestamp):
            message.to_shift()

    def test_naive_timestamp_is_rejected(self):
        with self.assertRaises(MalformedTimestamp):
            parse_timestamp("2019-06-27T08:30:00")

    def test_missing_timestamp_is_rejected(self):
        with self.assertRaises(MalformedTimestamp):
            parse_timestamp(None)

    def test_utc_designator_is_accepted(self):
        parsed = parse_timestamp("2019-06-27T15:30:00Z")
        self.assertEqual(parsed, datetime(2019, 6, 27, 8, 30, tzinfo=PDT))


class TestShiftValidation(unittest.TestCase):
    def test_end_before_start_is_invalid(self):
        shift = make_shift(end=datetime(2019, 6, 27, 8, 0, tzinfo=PDT))
        with self.assertRaises(InvalidShiftTimes):
            shift.validate()

    def test_zero_length_shift_is_valid(self):
        shift = make_shift(end=make_shift().start)
        shift.validate()


class TestEmployee(unittest.TestCase):
    def test_levels_are_ordered(self):
        self.assertTrue(EmployeeLevel.ADMIN.at_least(EmployeeLevel.SUPERVISOR))
        self.assertTrue(EmployeeLevel.SUPERVISOR.at_least(EmployeeLevel.SUPERVISOR))
        self.assertFalse(EmployeeLevel.READ.at_least(EmployeeLevel.SUPERVISOR))

    def test_from_dict_fills_defaults(self):
        emp = Employee.from_dict({"id": 4, "email": "a@b.c", "first": "Ann", "last": "Lee"})
        self.assertEqual(emp.level, EmployeeLevel.READ)
        self.assertEqual(emp.default_color, EmployeeColor.BLUE)
        self.assertIsNone(emp.active_config)

    def test_unknown_level_raises(self):
        with self.assertRaises(ValueError):
            Employee.from_dict({"id": 4, "level": "Owner"})


class TestViewConfig(unittest.TestCase):
    def test_duplicate_view_employees_are_dropped_in_order(self):
        config = ViewConfig(id=0, employee_id=0, view_employees=[1, 0, 1, 2, 0])
        self.assertEqual(config.view_employees, [1, 0, 2])

    def test_defaults(self):
        config = ViewConfig.from_dict({"id": 2, "employee_id": 1})
        self.assertEqual(config.config_name, "Default")
        self.assertTrue(config.show_shifts)
        self.assertFalse(config.show_minutes)
        self.assertEqual(config.view_employees, [])

    def test_shows_employee_ignores_unassigned(self):
        config = ViewConfig(id=0, employee_id=0, view_employees=[0])
        self.assertTrue(config.shows_employee(0))
        self.assertFalse(config.shows_employee(None))
        self.assertFalse(config.shows_employee(1))


if __name__ == "__main__":
    unittest.main(verbosity=2)
