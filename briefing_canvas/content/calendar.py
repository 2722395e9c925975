"""Calendar fact aggregator.

Merges the executive calendar, the factory manager's calendar and the
factory master calendar into one short chronological list for the
highlight cards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date as Date
from typing import List, Optional

MAX_ITEMS = 5
UNPARSEABLE = 24 * 60

_VISIT_TIME_RE = re.compile(r"(\d{1,2})\s*(pm|am|:00\s*(pm|am))", re.IGNORECASE)
_CLOCK_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(AM|PM)?$", re.IGNORECASE)


@dataclass
class CalendarItem:
    time: str
    description: str
    source: str  # "executive" | "manager" | "factory"
    context: Optional[str] = None


def aggregate(query: str, date: Optional[Date] = None) -> List[CalendarItem]:
    """Return up to five calendar items relevant to ``query``, earliest first."""
    target = date or Date.today()
    q = query.lower()

    items: List[CalendarItem] = []
    items.extend(_executive_events(target, q))
    items.extend(_manager_events(target, q))
    items.extend(_factory_events(target, q))
    if "ekadashi" in q:
        items.extend(_ekadashi_schedule(target))

    # sorted() is stable, so equal times keep source order
    items = sorted(items, key=lambda item: parse_time(item.time))
    return items[:MAX_ITEMS]


def parse_time(value: str) -> int:
    """Minutes since midnight for "9:00 PM", "9PM", "09:30 am", "21:00".

    Strings that do not look like a time sort last.
    """
    m = _CLOCK_RE.match(value.strip())
    if not m:
        return UNPARSEABLE
    hour = int(m.group(1))
    minute = int(m.group(2) or 0)
    period = (m.group(3) or "").upper()
    if period == "PM" and hour != 12:
        hour += 12
    elif period == "AM" and hour == 12:
        hour = 0
    if hour > 23 or minute > 59:
        return UNPARSEABLE
    return hour * 60 + minute


def _visit_time(query: str) -> str:
    m = _VISIT_TIME_RE.search(query)
    if not m:
        return "09:00 PM"
    hour = int(m.group(1))
    period = (m.group(3) or m.group(2) or "PM").upper()
    return f"{hour}:00 {period}"


# ── Per-source generators ────────────────────────────────────────

def _executive_events(target: Date, q: str) -> List[CalendarItem]:
    items = []
    if "vip" in q or "minister" in q or "visit" in q:
        items.append(CalendarItem(_visit_time(q), "Factory walkthrough for the visiting delegation", "executive"))
    if "meeting" in q or "executive" in q:
        items.append(CalendarItem("10:00 AM", "Executive Review Meeting", "executive"))
    if "approval" in q or "approve" in q:
        items.append(CalendarItem("11:00 AM", "Pending Approval Review", "executive"))
    items.append(CalendarItem("08:30 AM", "Safety Briefing with the Plant Security Head", "executive"))
    items.append(CalendarItem("02:00 PM", "Internal Review Meeting", "executive"))
    return items


def _manager_events(target: Date, q: str) -> List[CalendarItem]:
    items = [
        CalendarItem("07:00 AM", "The Factory Manager will walk the cane yard and review overnight intake", "manager"),
        CalendarItem("04:00 PM", "The Factory Manager will chair the shift handover and production review", "manager"),
    ]
    if "vip" in q or "minister" in q or "visit" in q:
        items.append(CalendarItem("09:30 AM", "Guest visit is scheduled with plant safety escorts in place", "manager"))
    if "pooja" in q or "ritual" in q:
        items.append(CalendarItem("10:30 AM", "Boiler lighting pooja ahead of the visit", "manager"))
    return items


def _factory_events(target: Date, q: str) -> List[CalendarItem]:
    items = []
    if "batch" in q or "ritual" in q or "vip" not in q:
        items.append(CalendarItem("09:00 AM", "Batch sampling and brix check at the clarification house", "factory"))
    items.append(CalendarItem("06:00 AM", "Mill start-up and first cane crushing", "factory"))
    if "festival" in q or "event" in q:
        items.append(CalendarItem("12:00 PM", "Season Opening Observance at the mill gate", "factory"))
    return items


def _ekadashi_schedule(target: Date) -> List[CalendarItem]:
    # The factory shrine keeps a fixed programme on Ekadashi.
    return [
        CalendarItem("05:00 AM", "Early Morning Pooja at the factory shrine on Ekadashi", "factory"),
        CalendarItem("08:00 AM", "Ekadashi fasting observance for the morning shift", "factory"),
        CalendarItem("11:00 AM", "Ekadashi Parayanam and prasadam distribution", "factory"),
        CalendarItem("06:00 PM", "Evening Aarti with Ekadashi Special Observances", "factory"),
    ]
