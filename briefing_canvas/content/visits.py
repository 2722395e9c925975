"""Visit parsing: pull visitor, date, time, location and protocol level out of a query.

The parsed record is what ``on_vip_visit_parsed`` receives.
"""

from __future__ import annotations

import re
from datetime import date as Date
from datetime import timedelta
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

PROTOCOL_LEVELS = ("standard", "medium", "high", "maximum")

# (keyword, visitor label, protocol level); first match wins, longest first
VISITOR_ROLES = [
    ("government auditor", "Government Auditor", "high"),
    ("district collector", "District Collector", "high"),
    ("minister", "Hon'ble Minister", "maximum"),
    ("governor", "Governor", "maximum"),
    ("auditor", "Auditor", "high"),
    ("inspector", "Inspector", "medium"),
    ("buyer", "Sugar Buyer", "medium"),
    ("supplier", "Supplier", "standard"),
    ("farmer", "Farmer Delegation", "standard"),
    ("delegation", "Delegation", "medium"),
]

LOCATIONS = [
    ("main gate", "Main Factory Entrance"),
    ("entrance", "Main Factory Entrance"),
    ("cane yard", "Cane Yard"),
    ("yard", "Cane Yard"),
    ("boiler", "Boiler House"),
    ("mill", "Mill House"),
    ("field", "Cane Field"),
    ("farm", "Cane Field"),
    ("lab", "Quality Lab"),
    ("office", "Factory Administrative Office"),
    ("warehouse", "Sugar Warehouse"),
]

DEFAULT_LOCATION = "Main Factory Entrance"
DEFAULT_TIME = "10:00"

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
MONTHS = ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"]

_NAME_RE = re.compile(r"\b(?:Mr|Mrs|Ms|Dr|Shri|Smt)\.?\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)")
_TIME_RE = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b", re.IGNORECASE)
_MONTH_DAY_RE = re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+(\d{1,2})(?:st|nd|rd|th)?\b")
_DAY_MONTH_RE = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)?\s+(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\b")


class ParsedVisit(BaseModel):
    """A visit record recovered from free text."""
    visitor: str
    title: Optional[str] = None
    date: Date
    time: str = DEFAULT_TIME  # 24h "HH:MM"
    location: str = DEFAULT_LOCATION
    protocol_level: str = "standard"
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)

    @field_validator("protocol_level")
    @classmethod
    def validate_level(cls, v):
        v = str(v).lower().strip()
        if v not in PROTOCOL_LEVELS:
            raise ValueError(f"Unknown protocol level: {v}")
        return v

    @property
    def display_time(self) -> str:
        hour, minute = (int(p) for p in self.time.split(":"))
        period = "PM" if hour >= 12 else "AM"
        return f"{(hour % 12) or 12}:{minute:02d} {period}"

    @property
    def display_date(self) -> str:
        return self.date.strftime("%A, %B %d, %Y")


def _parse_date(q: str, today: Date) -> Optional[Date]:
    if "day after tomorrow" in q:
        return today + timedelta(days=2)
    if "tomorrow" in q:
        return today + timedelta(days=1)
    if "today" in q or "tonight" in q:
        return today

    m = _MONTH_DAY_RE.search(q) or _DAY_MONTH_RE.search(q)
    if m:
        a, b = m.groups()
        month, day = (a, b) if a.isalpha() else (b, a)
        try:
            candidate = Date(today.year, MONTHS.index(month) + 1, int(day))
        except ValueError:
            return None
        if candidate < today:
            candidate = candidate.replace(year=today.year + 1)
        return candidate

    for i, name in enumerate(WEEKDAYS):
        if re.search(rf"\b{name}\b", q):
            ahead = (i - today.weekday()) % 7 or 7
            return today + timedelta(days=ahead)
    return None


def _parse_time(q: str) -> Optional[str]:
    m = _TIME_RE.search(q)
    if not m:
        return None
    hour = int(m.group(1))
    minute = int(m.group(2) or 0)
    period = m.group(3).lower()
    if hour > 12 or minute > 59:
        return None
    if period == "pm" and hour != 12:
        hour += 12
    elif period == "am" and hour == 12:
        hour = 0
    return f"{hour:02d}:{minute:02d}"


def parse_visit(query: str, today: Optional[Date] = None) -> Optional[ParsedVisit]:
    """Parse a visit out of ``query``; None when no visitor can be identified."""
    today = today or Date.today()
    q = query.lower()

    role = next(((label, level) for kw, label, level in VISITOR_ROLES if kw in q), None)
    name_match = _NAME_RE.search(query)
    if role is None and name_match is None:
        return None

    if name_match:
        visitor = name_match.group(1)
        title = role[0] if role else None
    else:
        visitor, title = role[0], None
    level = role[1] if role else "medium"

    visit_date = _parse_date(q, today)
    visit_time = _parse_time(q)
    location = next((name for kw, name in LOCATIONS if kw in q), DEFAULT_LOCATION)

    confidence = 0.5
    if visit_date is not None:
        confidence += 0.2
    if visit_time is not None:
        confidence += 0.2
    if name_match:
        confidence += 0.1

    return ParsedVisit(
        visitor=visitor,
        title=title,
        date=visit_date or today,
        time=visit_time or DEFAULT_TIME,
        location=location,
        protocol_level=level,
        confidence=min(confidence, 1.0),
    )


def visit_planner_actions(visit: ParsedVisit) -> List[str]:
    """Inspection-visit checklist, longer for higher protocol levels."""
    actions = [
        f"Confirm {visit.visitor} arrival at {visit.location} ({visit.display_time})",
        "Brief quality control staff on visit agenda",
        "Prepare production and quality reports for review",
    ]
    if visit.protocol_level in ("medium", "high", "maximum"):
        actions += [
            "Assign plant safety escort from entry",
            "Reserve executive conference room for the debrief",
        ]
    if visit.protocol_level in ("high", "maximum"):
        actions += [
            "Confirm compliance documentation is ready at the main gate",
            "Coordinate with local authorities for access and parking",
        ]
    if visit.protocol_level == "maximum":
        actions.append("Escalate to the Managing Director for the welcome")
    return [f"[·] {a}" for a in actions]
