"""Query normalization and intent predicates.

Everything here is a pure keyword/regex test over the raw query text.
Predicates do not rank against each other; a query may satisfy several
and the handler chain decides which one wins.
"""

from __future__ import annotations

import re
from typing import List, NamedTuple, Optional

REC_MARKER = "[REC] "


class NormalizedQuery(NamedTuple):
    clean_query: str
    is_recommendation: bool


def normalize(query: str) -> NormalizedQuery:
    """Strip the recommendation marker prefix, if present."""
    if query.startswith(REC_MARKER):
        return NormalizedQuery(query[len(REC_MARKER):], True)
    return NormalizedQuery(query, False)


# ── Keyword sets ─────────────────────────────────────────────────

INFO_KEYWORDS = {
    "what", "who", "when", "where", "how", "tell me", "show", "list",
    "display", "get", "find", "about", "information", "details",
    "look like", "looks like",
}

SCHEDULE_INFO_KEYWORDS = {"what", "show", "look like", "information"}

# Named subjects that are always treated as information requests unless
# the query is phrased as an action.
FACTORY_SUBJECTS = {
    "factory", "managing director", "md", "mill", "crushing", "ekadashi",
    "sugar", "cane",
}

SUMMARY_KEYWORDS = {"progress", "summary", "status", "update"}

PLANNER_KEYWORDS = {"plan", "planner", "action", "task", "todo", "step", "schedule"}

INFORMATIONAL_PREFIXES = ("who ", "what ", "when ", "how ", "is ", "should ")


def _has_any(text: str, keywords) -> bool:
    return any(kw in text for kw in keywords)


def _has_word(text: str, word: str) -> bool:
    return re.search(rf"\b{re.escape(word)}\b", text) is not None


def is_info_query(query: str) -> bool:
    q = query.lower()
    if _has_any(q, INFO_KEYWORDS):
        return True
    if ("schedule" in q or "timetable" in q) and _has_any(q, SCHEDULE_INFO_KEYWORDS):
        return True
    subject = any(_has_word(q, s) for s in FACTORY_SUBJECTS)
    return (
        subject
        and "plan" not in q
        and not q.startswith(("schedule", "create", "add"))
    )


def is_summary_query(query: str) -> bool:
    q = query.lower()
    return _has_any(q, SUMMARY_KEYWORDS) or ("how" in q and "is" in q and "preparation" in q)


def is_planner_request(query: str) -> bool:
    q = query.lower()
    if _has_any(q, PLANNER_KEYWORDS):
        return True
    if "add" in q and ("to" in q or "in" in q):
        return True
    return "create" in q and _has_any(q, ("plan", "action", "step"))


def is_informational_query(query: str) -> bool:
    """Question-shaped queries: who/what/when/how/is/should or a '?'."""
    return query.lower().startswith(INFORMATIONAL_PREFIXES) or "?" in query


# ══════════════════════════════════════════════════════════════════
# Anchored "simple" queries: plan / summary / complete info / next
# ══════════════════════════════════════════════════════════════════

SIMPLE_PATTERNS = {
    "plan": [
        r"^plan$", r"^show\s+plan$", r"^my\s+plan$", r"^planner$",
        r"^planner\s+actions?$", r"^plan\s+for\s+", r"^planning\s+for\s+",
        r"^create\s+plan\s+for\s+", r"^show\s+plan\s+for\s+",
    ],
    "summary": [
        r"^summary$", r"^show\s+summary$", r"^give\s+me\s+summary$",
        r"^brief\s+summary$", r"^summary\s+of\s+", r"^summarize\s+",
        r"^give\s+me\s+summary\s+of\s+", r"^show\s+summary\s+of\s+",
    ],
    "complete": [
        r"^complete\s+information$", r"^full\s+information$",
        r"^all\s+information$", r"^complete\s+details?$", r"^full\s+details?$",
        r"^complete\s+information\s+about\s+", r"^full\s+information\s+about\s+",
        r"^all\s+information\s+about\s+", r"^complete\s+details?\s+about\s+",
        r"^full\s+details?\s+about\s+",
    ],
    "next": [
        r"^next\s+information$", r"^what'?s\s+next$", r"^next$", r"^upcoming$",
        r"^next\s+steps?$", r"^what\s+comes\s+next$",
        r"^next\s+information\s+for\s+", r"^what'?s\s+next\s+for\s+",
        r"^next\s+steps?\s+for\s+",
    ],
}

SUBJECT_PATTERNS = {
    "plan": [
        r"plan\s+for\s+(.+)", r"planning\s+for\s+(.+)",
        r"create\s+plan\s+for\s+(.+)", r"show\s+plan\s+for\s+(.+)",
    ],
    "summary": [
        r"summary\s+of\s+(.+)", r"summarize\s+(.+)",
        r"give\s+me\s+summary\s+of\s+(.+)", r"show\s+summary\s+of\s+(.+)",
    ],
    "complete": [
        r"complete\s+information\s+about\s+(.+)", r"full\s+information\s+about\s+(.+)",
        r"all\s+information\s+about\s+(.+)", r"complete\s+details?\s+about\s+(.+)",
        r"full\s+details?\s+about\s+(.+)",
    ],
    "next": [
        r"next\s+information\s+for\s+(.+)", r"what'?s\s+next\s+for\s+(.+)",
        r"next\s+steps?\s+for\s+(.+)",
    ],
}

_SIMPLE = {
    intent: [re.compile(p, re.IGNORECASE) for p in patterns]
    for intent, patterns in SIMPLE_PATTERNS.items()
}
_SUBJECT = {
    intent: [re.compile(p, re.IGNORECASE) for p in patterns]
    for intent, patterns in SUBJECT_PATTERNS.items()
}


def simple_intent(query: str) -> Optional[str]:
    """Return "plan", "summary", "complete" or "next" for anchored simple queries."""
    trimmed = query.strip().lower()
    for intent, patterns in _SIMPLE.items():
        if any(p.search(trimmed) for p in patterns):
            return intent
    return None


def extract_subject(query: str, intent: str) -> Optional[str]:
    """Pull the subject out of "plan for X", "summary of X" and similar."""
    for pattern in _SUBJECT.get(intent, []):
        m = pattern.search(query)
        if m and m.group(1).strip():
            return m.group(1).strip()
    return None


# ══════════════════════════════════════════════════════════════════
# Action-item parsing
# ══════════════════════════════════════════════════════════════════

_ACTION_PREFIXES = [
    re.compile(r"^(add|create|make|plan|schedule|set)\s+(planner|plan|action|task|item|todo|step)s?\b", re.IGNORECASE),
    re.compile(r"^(add|create|make|plan|schedule|set)\s+(to|in)\s+(planner|plan)\b", re.IGNORECASE),
]
_NUMBERED = re.compile(r"\d+[.)]\s*([^\d,]+)")
_BULLETED = re.compile(r"[-•*]\s*([^-,]+)")
_CONJUNCTIONS = (" and ", " then ", " also ", " plus ")


def parse_actions_from_query(query: str) -> List[str]:
    """Split a free-form request into individual action items.

    Tries, in order: numbered items, bullets, comma separation, a
    conjunction split, and finally the whole (cleaned) query as one item.
    """
    clean = query
    for prefix in _ACTION_PREFIXES:
        clean = prefix.sub("", clean)
    clean = clean.strip().lstrip(":").strip()

    numbered = [m.group(1).strip() for m in _NUMBERED.finditer(clean)]
    if numbered:
        return [a for a in numbered if a]

    bulleted = [m.group(1).strip() for m in _BULLETED.finditer(clean)]
    if bulleted:
        return [a for a in bulleted if a]

    if "," in clean:
        parts = [p.strip() for p in clean.split(",") if p.strip()]
        if len(parts) > 1:
            return parts

    lowered = clean.lower()
    for conj in _CONJUNCTIONS:
        if conj in lowered:
            parts = re.split(re.escape(conj), clean, flags=re.IGNORECASE)
            return [p.strip() for p in parts if p.strip()]

    return [clean] if clean else []
