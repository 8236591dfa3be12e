import unittest
from dataclasses import replace

from schedcore.calendar_day import EMPLOYEE_ERROR, CalendarDay
from schedcore.credentials import MockCredentials, resolve_active_config
from schedcore.day_filter import EMPLOYEE_NOT_FOUND
from schedcore.editor import CommitPolicy
from schedcore.models import LastNameStyle
from schedcore.sample_data import FIXTURE_DAY, FIXTURE_TZ, get_mock_stores, get_sample_employees
from schedcore.view_date import ViewDate


def make_calendar(me=None, policy=CommitPolicy.FAIL):
    employees, shifts, configs = get_mock_stores()
    me = me or get_sample_employees()[0]
    return CalendarDay(
        employees, shifts, configs,
        credentials=MockCredentials(me),
        view_date=ViewDate(start=FIXTURE_DAY, tz=FIXTURE_TZ),
        tz=FIXTURE_TZ,
        policy=policy
    )


class TestCalendarDay(unittest.TestCase):
    def setUp(self):
        self.calendar = make_calendar()

    def test_fixture_day_lines(self):
        self.assertEqual(self.calendar.lines(), ["Tim B. 7:00a - 5:00p", "Jeff W. 8:30a - 7:00p"])

    def test_session_is_checked_on_first_use(self):
        self.assertIsNone(self.calendar.credentials.get())
        self.assertEqual(self.calendar.current_employee().first, "Jeff")
        self.assertEqual(self.calendar.active_config().id, 0)

    def test_day_navigation(self):
        self.calendar.next_day()
        self.assertEqual(self.calendar.lines(), [])
        self.calendar.previous_day()
        self.assertEqual(len(self.calendar.lines()), 2)

    def test_view_config_changes_show_up(self):
        config = self.calendar.configs.find(0)
        self.calendar.configs.update(replace(config, last_name_style=LastNameStyle.FULL,
                                             show_minutes=False, view_employees=[0]))
        self.assertEqual(self.calendar.lines(), ["Jeff Wright 8a - 7p"])

    def test_removed_employee_renders_placeholder(self):
        tim = self.calendar.employees.find(1)
        self.calendar.employees.remove(tim)
        self.assertEqual(self.calendar.lines(), [EMPLOYEE_NOT_FOUND, "Jeff W. 8:30a - 7:00p"])

    def test_no_active_config_shows_nothing(self):
        nobody = replace(get_sample_employees()[0], active_config=None)
        calendar = make_calendar(me=nobody)
        self.assertEqual(calendar.lines(), [])
        self.assertEqual(calendar.employee_options(), [])

    def test_employee_options_follow_view_order(self):
        self.assertEqual(self.calendar.employee_options(), ["Jeff Wright", "Tim Baker"])
        config = self.calendar.configs.find(0)
        self.calendar.configs.update(replace(config, view_employees=[1, 7, 0]))
        self.assertEqual(self.calendar.employee_options(), ["Tim Baker", EMPLOYEE_ERROR, "Jeff Wright"])

    def test_select_opens_editor(self):
        ok, _ = self.calendar.select(1)
        self.assertTrue(ok)
        self.assertEqual(self.calendar.editor.active_shift.employee_id, 1)

        ok, message = self.calendar.select(99)
        self.assertFalse(ok)
        self.assertEqual(message, "Shift 99 not found")
        self.assertEqual(self.calendar.editor.active_shift.id, 1)

    def test_editor_commit_is_visible_in_lines(self):
        self.calendar.select(0)
        shift = self.calendar.editor.active_shift
        later = replace(shift, start=shift.start.replace(hour=6))
        ok, _ = self.calendar.editor.commit(later)
        self.assertTrue(ok)
        self.assertEqual(self.calendar.lines()[0], "Jeff W. 6:30a - 7:00p")


class TestCredentials(unittest.TestCase):
    def test_mock_credentials_session(self):
        jeff = get_sample_employees()[0]
        creds = MockCredentials(jeff)
        self.assertIsNone(creds.get())
        self.assertEqual(creds.login("anything", "anything"), jeff)
        self.assertEqual(creds.get(), jeff)
        creds.logout()
        self.assertIsNone(creds.get())

    def test_resolve_active_config(self):
        _, _, configs = get_mock_stores()
        tim = get_sample_employees()[1]
        self.assertEqual(resolve_active_config(tim, configs).id, 1)
        self.assertIsNone(resolve_active_config(None, configs))
        self.assertIsNone(resolve_active_config(replace(tim, active_config=5), configs))


if __name__ == "__main__":
    unittest.main(verbosity=2)
