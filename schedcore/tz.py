"""Timezone resolution for day boundaries and display formatting."""

import datetime as dt
import os
import re
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_LOCALTIME = '/etc/localtime'


def _zone_from_name(name: Optional[str]) -> Optional[dt.tzinfo]:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def local_zone() -> dt.tzinfo:
    """The machine's zone with its DST rules.

    Looks at $TZ, then the /etc/localtime link. Falls back to the current
    fixed UTC offset when neither names a known zone.
    """
    zone = _zone_from_name(os.environ.get('TZ', '').lstrip(':'))
    if zone is not None:
        return zone

    if os.path.islink(_LOCALTIME):
        target = os.path.realpath(_LOCALTIME)
        marker = 'zoneinfo' + os.sep
        if marker in target:
            zone = _zone_from_name(target.split(marker, 1)[1])
            if zone is not None:
                return zone

    return dt.datetime.now().astimezone().tzinfo or dt.timezone.utc


def normalize_tz_name(name: Optional[str]) -> str:
    """Normalize a timezone identifier.

    None, "", "local" and "system" mean the machine's local zone;
    "UTC", "Z" and "GMT" mean UTC. Anything else is kept as given.
    """
    if name is None:
        return 'local'
    s = str(name).strip()
    if not s:
        return 'local'

    low = s.lower()
    if low in {'local', 'system'}:
        return 'local'
    if low in {'utc', 'z', 'gmt'}:
        return 'UTC'
    return s


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """Resolve a timezone name (IANA, fixed offset, UTC or local) into a tzinfo.

    Raises ValueError for identifiers that cannot be resolved.
    """
    tz_name = normalize_tz_name(name)

    if tz_name == 'UTC':
        return dt.timezone.utc

    if tz_name == 'local':
        return local_zone()

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh, mm = int(hh_s), int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f'Invalid timezone offset: {tz_name!r}')
        sign = 1 if sign_s == '+' else -1
        return dt.timezone(dt.timedelta(minutes=sign * (hh * 60 + mm)))

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f'Invalid timezone identifier: {tz_name!r}') from ex
