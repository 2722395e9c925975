"""Static record registry and the scored lookup over it.

Handlers use ``search`` to decide whether a query refers to something the
factory already tracks. Anything under ``MIN_CONFIDENCE`` is reported as
the sentinel ``record=None``, which renders as "New / Unregistered".
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date as Date
from datetime import timedelta
from typing import List, Optional

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.3
UNREGISTERED = "New / Unregistered"

LOCATION_KEYWORDS = ["mill", "yard", "boiler", "lab", "gate", "warehouse", "office", "hall"]

TYPE_KEYWORDS = [
    "visit", "visiting", "visitor", "meeting", "appointment", "inspection",
    "audit", "batch", "maintenance", "supplier", "expense", "payment",
    "task", "project", "employee", "shift", "vip", "minister",
]

STATUS_KEYWORDS = ["pending", "scheduled", "completed", "active", "inactive"]

_TIME_RE = re.compile(r"\d{1,2}\s*(?:am|pm)", re.IGNORECASE)


@dataclass
class SystemRecord:
    id: str
    record_type: str
    name: str = ""
    title: str = ""
    date: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None
    assigned_roles: Optional[str] = None
    department: Optional[str] = None
    keywords: List[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return self.name or self.title or self.id


@dataclass
class SearchResult:
    record: Optional[SystemRecord]
    confidence: float
    match_type: str  # "exact" | "partial" | "fuzzy" | "none"
    matched_fields: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.record is not None


NOT_FOUND = SearchResult(record=None, confidence=0.0, match_type="none")


def _iso(offset_days: int) -> str:
    return (Date.today() + timedelta(days=offset_days)).isoformat()


def all_records() -> List[SystemRecord]:
    """The registry. Dates are relative to today so "today"/"tomorrow" match."""
    return [
        SystemRecord("EMP-001", "employee", name="Ravi Kulkarni", title="Factory Manager",
                     department="Production", status="active", keywords=["manager"]),
        SystemRecord("EMP-002", "employee", name="Meena Patil", title="Chief Chemist",
                     department="Quality", status="active", keywords=["chemist", "lab"]),
        SystemRecord("EMP-003", "employee", name="Suresh Gowda", title="Cane Development Officer",
                     department="Procurement", status="active", keywords=["cane", "farmer"]),
        SystemRecord("EMP-004", "employee", name="Anita Rao", title="Finance Controller",
                     department="Finance", status="active", keywords=["finance", "payment"]),
        SystemRecord("VIS-101", "visit", title="Supplier Visit - Shree Cane Growers Cooperative",
                     date=_iso(1), time="11:00 AM", location="Main Office", status="scheduled",
                     assigned_roles="Cane Development Officer", keywords=["supplier", "cooperative"]),
        SystemRecord("VIS-102", "inspection", title="Boiler Inspection by State Boiler Directorate",
                     date=_iso(0), time="3 PM", location="Boiler House", status="scheduled",
                     assigned_roles="Chief Engineer", keywords=["boiler", "inspector"]),
        SystemRecord("BAT-2201", "batch", title="Production Batch 2201 - Refined S-30",
                     date=_iso(0), location="Pan Floor", status="active",
                     assigned_roles="Pan Supervisor", keywords=["refined", "s-30"]),
        SystemRecord("MNT-330", "maintenance", title="Mill Roller Re-shelling",
                     date=_iso(2), location="Mill House", status="pending",
                     assigned_roles="Maintenance Engineer", keywords=["roller", "mill"]),
        SystemRecord("PAY-550", "payment", title="Cane Payment Release - Fortnight 12",
                     date=_iso(0), status="pending", assigned_roles="Finance Controller",
                     keywords=["cane payment", "fortnight"]),
        SystemRecord("TSK-900", "task", title="Molasses tank cleaning",
                     status="pending", location="Warehouse", keywords=["molasses"]),
        SystemRecord("MTG-012", "meeting", title="Weekly Production Review",
                     date=_iso(1), time="10 AM", location="Conference Hall", status="scheduled",
                     assigned_roles="Factory Manager", keywords=["review", "production"]),
    ]


def _extract_terms(query: str) -> dict:
    lowered = query.lower()
    dates = []
    if "tomorrow" in lowered:
        dates.append(_iso(1))
    if "today" in lowered:
        dates.append(_iso(0))
    return {
        "names": [w.lower().strip("?,.!") for w in query.split() if len(w) > 2 and w[0].isupper()],
        "dates": dates,
        "times": [t.lower() for t in _TIME_RE.findall(query)],
        "locations": [loc for loc in LOCATION_KEYWORDS if loc in lowered],
        "keywords": [kw for kw in TYPE_KEYWORDS if kw in lowered],
    }


def _score(record: SystemRecord, terms: dict, lowered: str) -> SearchResult:
    confidence = 0.0
    matched: List[str] = []
    match_type = "none"

    label = record.label.lower()
    for name in terms["names"]:
        if name in label:
            confidence += 0.4
            matched.append("name")
            match_type = "exact" if label == name else "partial"

    for d in terms["dates"]:
        if record.date == d:
            confidence += 0.3
            matched.append("date")
            if match_type == "none":
                match_type = "exact"

    if record.time:
        record_time = record.time.lower().replace(":00", "")
        for t in terms["times"]:
            if t.replace(" ", "") == record_time.replace(" ", ""):
                confidence += 0.2
                matched.append("time")
                if match_type == "none":
                    match_type = "partial"

    if record.location:
        for loc in terms["locations"]:
            if loc in record.location.lower():
                confidence += 0.2
                matched.append("location")
                if match_type == "none":
                    match_type = "partial"

    for kw in terms["keywords"]:
        if kw in record.record_type or record.record_type in kw:
            confidence += 0.15
            matched.append("type")
            if match_type == "none":
                match_type = "fuzzy"

    for kw in record.keywords:
        if kw in lowered:
            confidence += 0.15
            matched.append("keyword")
            if match_type == "none":
                match_type = "fuzzy"

    if record.status:
        for status in STATUS_KEYWORDS:
            if status in lowered and status in record.status.lower():
                confidence += 0.1
                matched.append("status")

    return SearchResult(
        record=record,
        confidence=min(confidence, 1.0),
        match_type="fuzzy" if match_type == "none" else match_type,
        matched_fields=list(dict.fromkeys(matched)),
    )


def has_lookup_terms(query: str) -> bool:
    """True when the query names anything the registry could be searched by."""
    return any(_extract_terms(query).values())


def search(query: str, records: Optional[List[SystemRecord]] = None) -> SearchResult:
    """Best-scoring record for ``query``, or ``NOT_FOUND`` below the threshold."""
    terms = _extract_terms(query)
    lowered = query.lower()
    best: Optional[SearchResult] = None
    for record in records if records is not None else all_records():
        result = _score(record, terms, lowered)
        if best is None or result.confidence > best.confidence:
            best = result

    if best is None or best.confidence < MIN_CONFIDENCE:
        logger.debug("No record above %.1f for %r", MIN_CONFIDENCE, query)
        return NOT_FOUND
    logger.debug("Matched %s (%.2f, %s)", best.record.id, best.confidence, best.match_type)
    return best


def describe(result: SearchResult, query: str = "") -> str:
    """Sentence-form info card text for a search result."""
    if not result.found:
        return f"Record type: {UNREGISTERED}. Status: Not yet created."

    r = result.record
    parts = [f"{r.label} is a {r.record_type} record with status {r.status or 'Unknown'}."]
    if r.date or r.time:
        when = " at ".join(p for p in (r.date, r.time) if p)
        parts.append(f"It is set for {when}.")
    if r.location:
        parts.append(f"Location: {r.location}.")
    if r.assigned_roles:
        parts.append(f"Assigned to: {r.assigned_roles}.")

    missing = []
    if r.record_type == "task" and not r.assigned_roles:
        missing.append("No assignee")
    if r.record_type in ("meeting", "visit") and not r.time:
        missing.append("Time not specified")
    if missing:
        parts.append(f"Missing: {', '.join(missing)}.")
    return " ".join(parts)
