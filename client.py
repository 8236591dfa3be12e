"""
Calendar client wired to a running scheduling service.

Usage: python client.py [--date YYYY-MM-DD] [--email ... --password ...]
"""

import argparse
import logging
from datetime import datetime
from typing import Optional

from config import get_config
from schedcore.calendar_day import CalendarDay
from schedcore.credentials import RemoteCredentials
from schedcore.editor import CommitPolicy
from schedcore.remote import UrllibTransport, remote_configs, remote_employees, remote_shifts
from schedcore.tz import resolve_tz
from schedcore.view_date import ViewDate, system_clock


def connect(settings=None, transport=None, clock=system_clock,
            start: Optional[datetime] = None) -> CalendarDay:
    """Build a CalendarDay whose stores and session live on the service."""
    settings = settings or get_config()
    transport = transport or UrllibTransport(settings.SCHED_API_URL)
    tz = resolve_tz(settings.SCHED_TIMEZONE)

    return CalendarDay(
        employees=remote_employees(transport),
        shifts=remote_shifts(transport),
        configs=remote_configs(transport),
        credentials=RemoteCredentials(transport),
        view_date=ViewDate(clock, tz=tz, start=start),
        tz=tz,
        policy=CommitPolicy(settings.SHIFT_COMMIT_POLICY)
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description='Print one day of the shift calendar.')
    parser.add_argument('--date', help='day to show (YYYY-MM-DD), defaults to today')
    parser.add_argument('--email', required=True)
    parser.add_argument('--password', required=True)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    settings = get_config()
    start = None
    if args.date:
        # Midnight in the calendar's own zone, so the day does not shift
        tz = resolve_tz(settings.SCHED_TIMEZONE)
        start = datetime.fromisoformat(args.date).replace(tzinfo=tz)
    calendar = connect(settings, start=start)
    if calendar.credentials.login(args.email, args.password) is None:
        print("Login failed.")
        return 1

    print(calendar.view_date.get().date().isoformat())
    for line in calendar.lines():
        print(f"  {line}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
