# week calendar helpers — iso-8601 week ids (YYYY-Www) and their date spans
# week 1 is the week containing the year's first thursday

import re
from datetime import date, datetime, timedelta, timezone

from app.exceptions import ValidationError

WEEK_ID_PATTERN = re.compile(r"^(\d{4})-W(\d{2})$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def week_id_for(day: date | datetime) -> str:
    """iso week id for a date. uses the iso year, so 2024-12-30 is 2025-W01"""
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def parse_week_id(week_id: str) -> tuple[int, int]:
    """split a week id into (iso_year, iso_week), rejecting weeks the year doesn't have"""
    match = WEEK_ID_PATTERN.match(week_id or "")
    if not match:
        raise ValidationError(f"Invalid week id '{week_id}', expected YYYY-Www")
    year, week = int(match.group(1)), int(match.group(2))
    try:
        date.fromisocalendar(year, week, 1)
    except ValueError:
        raise ValidationError(f"Week {week} does not exist in ISO year {year}")
    return year, week


def week_bounds(week_id: str) -> tuple[date, date]:
    """monday and sunday of an iso week"""
    year, week = parse_week_id(week_id)
    monday = date.fromisocalendar(year, week, 1)
    return monday, monday + timedelta(days=6)


def week_dates(week_id: str) -> list[str]:
    """the seven YYYY-MM-DD dates of a week, monday first"""
    monday, _ = week_bounds(week_id)
    return [(monday + timedelta(days=i)).isoformat() for i in range(7)]


def session_id_for(moment: datetime) -> str:
    """vent session id: {date}_{time}"""
    return f"{moment.date().isoformat()}_{moment.strftime('%H%M%S')}"


def to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def from_millis(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    """parse a stored iso timestamp, tolerating a trailing Z and naive values (assumed utc)"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
