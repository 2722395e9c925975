"""Decision-level action generators for the planner checklist.

``generate_actions`` picks one canned bundle by coarse topic. The
procurement helpers are the only randomised content in the package and
always take an explicit ``random.Random``.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from briefing_canvas.core.models import BULLET

MAX_ACTIONS = 10

# ══════════════════════════════════════════════════════════════════
# Topic bundles
# ══════════════════════════════════════════════════════════════════

VISIT_ACTIONS = [
    "Approve visit protocol arrangements",
    "Assign plant safety escorts for the visiting delegation",
    "Review boiler house and mill floor access permissions",
    "Direct protocol team coordination",
    "Confirm refreshment and sample pack arrangements",
    "Request local police coordination for the convoy",
    "Decide on media coverage scope",
    "Escalate to the Managing Director for the welcome address",
    "Approve walkthrough timing around shift change",
    "Review executive schedule conflicts",
]

PLAN_ACTIONS = [
    "Approve strategic plan priorities",
    "Assign department heads to key initiatives",
    "Review resource allocation decisions",
    "Direct coordination between departments",
    "Confirm timeline and milestones",
    "Request status updates from teams",
    "Decide on budget approvals",
    "Escalate critical blockers",
    "Approve delegation of operational tasks",
    "Review risk mitigation strategies",
]

SUMMARY_ACTIONS = [
    "Review current operational status",
    "Approve recommended next steps",
    "Assign follow-up responsibilities",
    "Direct priority adjustments",
    "Confirm key decisions",
    "Request detailed reports",
    "Decide on resource reallocation",
    "Escalate critical issues",
    "Approve action plan",
    "Review stakeholder communications",
]

APPROVAL_ACTIONS = [
    "Approve pending payment requests",
    "Review approval workflow status",
    "Assign approval authority",
    "Direct approval process improvements",
    "Confirm approval criteria",
    "Request additional documentation",
    "Decide on exception approvals",
    "Escalate high-value approvals",
    "Approve delegation of routine approvals",
    "Review approval audit trail",
]

SCHEDULE_ACTIONS = [
    "Approve schedule adjustments",
    "Assign scheduling coordination",
    "Review calendar conflicts",
    "Direct schedule optimization",
    "Confirm priority scheduling",
    "Request availability updates",
    "Decide on schedule changes",
    "Escalate scheduling conflicts",
    "Approve special event scheduling",
    "Review resource scheduling",
]

GENERAL_ACTIONS = [
    "Approve strategic initiatives",
    "Assign key responsibilities",
    "Review operational priorities",
    "Direct team coordination",
    "Confirm resource allocation",
    "Request status updates",
    "Decide on critical matters",
    "Escalate important decisions",
    "Approve delegation of tasks",
    "Review overall factory operations",
]


def _bulleted(actions: List[str]) -> List[str]:
    return [f"{BULLET} {a}" for a in actions]


def generate_actions(query: str, context: Optional[dict] = None) -> List[str]:
    """Return at most ten ``"[·] <verb phrase>"`` items for ``query``."""
    q = query.lower()
    if "vip" in q or "minister" in q or "visit" in q:
        bundle = VISIT_ACTIONS
    elif "plan" in q:
        bundle = PLAN_ACTIONS
    elif "summary" in q or "status" in q:
        bundle = SUMMARY_ACTIONS
    elif "approval" in q or "approve" in q:
        bundle = APPROVAL_ACTIONS
    elif "schedule" in q or "when" in q or "time" in q:
        bundle = SCHEDULE_ACTIONS
    else:
        bundle = GENERAL_ACTIONS
    return _bulleted(bundle)[:MAX_ACTIONS]


def generate_follow_up_actions(query: str, query_type: str = "general") -> List[str]:
    """Short follow-up checklist for info and summary answers.

    ``query_type`` is one of "info", "summary" or "general".
    """
    q = query.lower()
    actions: List[str] = []

    if query_type == "info":
        if "employee" in q or "staff" in q or "who" in q:
            actions += ["Review staff assignments and shift availability", "Update staff records if needed"]
        elif "inventory" in q or "stock" in q:
            actions += ["Review inventory levels and reorder if needed", "Update inventory records"]
        elif "location" in q or "where" in q:
            actions += ["Verify location availability", "Coordinate location access if needed"]
        elif "farmer" in q or "supplier" in q:
            actions += ["Review supplier records", "Update supplier information if needed"]
        else:
            actions += ["Review the information provided", "Take necessary follow-up actions"]
    else:
        if "progress" in q or "status" in q:
            actions += [
                "Review current progress and status",
                "Identify any blockers or issues",
                "Update progress tracking",
            ]
        elif "season" in q or "crushing" in q:
            actions += [
                "Review crushing season preparation status",
                "Address any pending items",
                "Coordinate with relevant departments",
            ]
        else:
            actions += ["Review the information", "Plan next steps based on the data"]

    if "check" in q or "verify" in q:
        actions += ["Verify the information is accurate", "Update records if discrepancies found"]
    if "show" in q or "display" in q or "list" in q:
        actions += ["Review the displayed information", "Take action based on the findings"]

    return _bulleted(actions)


# ══════════════════════════════════════════════════════════════════
# Procurement progress
# ══════════════════════════════════════════════════════════════════

RISK_LEVELS = ("Low", "Medium", "High")

# Procured-percentage band per risk tier, inclusive.
_RISK_BANDS = {"Low": (75, 85), "Medium": (60, 74), "High": (45, 59)}


@dataclass
class ProcurementSnapshot:
    risk_level: str
    procured_percentage: int
    target_tons: int

    @property
    def procured_tons(self) -> int:
        return self.target_tons * self.procured_percentage // 100

    @property
    def remaining_tons(self) -> int:
        return self.target_tons - self.procured_tons

    @property
    def remaining_percentage(self) -> int:
        return 100 - self.procured_percentage

    def lines(self) -> List[str]:
        return [
            f"Season procurement target: {self.target_tons:,} tons",
            f"Procured till date: {self.procured_percentage}%",
            f"Overall procurement risk level: {self.risk_level}",
            f"Remaining procurement required: {self.remaining_tons:,} tons ({self.remaining_percentage}%)",
        ]


def generate_procurement_snapshot(rng: random.Random) -> ProcurementSnapshot:
    risk = rng.choice(RISK_LEVELS)
    low, high = _RISK_BANDS[risk]
    return ProcurementSnapshot(
        risk_level=risk,
        procured_percentage=rng.randint(low, high),
        target_tons=rng.randint(50_000, 74_999),
    )


def procurement_actions(snapshot: ProcurementSnapshot) -> List[str]:
    """Immediate, short-term and mitigation actions branched on the risk tier."""
    risk = snapshot.risk_level
    actions = [
        "Review current supplier delivery schedules and confirm next batch arrivals",
        "Verify storage capacity availability for incoming cane deliveries",
    ]
    if risk == "High" or snapshot.remaining_percentage > 30:
        actions.append("Escalate procurement shortfall status to factory management")
    else:
        actions.append("Coordinate with quality control team on incoming cane inspection protocols")

    actions += [
        "Contact alternate suppliers to secure additional cane quantities",
        "Assess logistics capacity for increased procurement volume",
        "Review payment terms with existing suppliers to expedite deliveries",
    ]
    if risk in ("Medium", "High"):
        actions.append("Schedule emergency procurement meeting with procurement team")
    else:
        actions.append("Update procurement forecast based on current delivery trends")

    if risk == "High":
        actions += [
            "Activate contingency procurement plan and engage backup suppliers",
            "Implement daily procurement tracking dashboard for management review",
            "Coordinate with finance team to release advance payments for priority suppliers",
        ]
    elif risk == "Medium":
        actions += [
            "Increase monitoring frequency of supplier delivery commitments",
            "Prepare risk mitigation report for management review",
        ]
    else:
        actions += [
            "Maintain current procurement pace and monitor for any delivery delays",
            "Review supplier performance metrics and identify optimization opportunities",
        ]
    return _bulleted(actions)
