"""
Working hours gate: decides whether the pointer may be moved right now.
Labels look like "09:00-17:00"; a start later than the end wraps past midnight.
"""

import logging
from datetime import datetime, time

logger = logging.getLogger(__name__)

ALWAYS = "Always"

# labels already reported as unparseable; repeats go to debug
_reported_labels: set[str] = set()


def _parse_clock(value: str) -> time:
    hours, minutes = value.strip().split(":")
    return time(int(hours), int(minutes))


def parse_working_hours(label: str) -> tuple[time, time]:
    """Returns (start, end) for a "HH:MM-HH:MM" label; raises ValueError otherwise."""
    try:
        start, end = label.split("-")
        return _parse_clock(start), _parse_clock(end)
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValueError(f"Malformed working hours label: {label!r}") from exc


def is_valid_label(label) -> bool:
    if label == ALWAYS:
        return True
    try:
        parse_working_hours(label)
    except ValueError:
        return False
    return True


def in_window(current: time, start: time, end: time) -> bool:
    if start <= end:
        return start <= current < end
    return current >= start or current < end


def is_movement_permitted(label: str, now: datetime | time | None = None) -> bool:
    if label == ALWAYS:
        return True
    try:
        start, end = parse_working_hours(label)
    except ValueError as exc:
        key = repr(label)
        if key in _reported_labels:
            logger.debug("%s; movement blocked", exc)
        else:
            _reported_labels.add(key)
            logger.warning("%s; movement blocked", exc)
        return False

    if now is None:
        now = datetime.now()
    current = now.time() if isinstance(now, datetime) else now
    return in_window(current.replace(tzinfo=None), start, end)
