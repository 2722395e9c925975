"""Module-switch handler: "open finance module", "go to assets"."""

from __future__ import annotations

import logging
import re
from typing import Optional

from briefing_canvas.handlers.base import HandlerResult, QueryContext

logger = logging.getLogger(__name__)

MODULES = {
    "assets": "Assets",
    "finance": "Finance",
    "production": "Production",
    "procurement": "Procurement",
    "inventory": "Inventory",
    "quality": "Quality",
    "hr": "HR",
    "human resources": "HR",
    "maintenance": "Maintenance",
}

ASSET_SUBMODULES = [
    "Asset Registry",
    "Classification & Tagging",
    "Onboarding & Acquisition",
    "Security & Custody",
    "Movement Tracking",
    "Maintenance & Preservation",
    "Audit & Verification",
    "Valuation & Finance",
    "Compliance & Legal",
    "Retirement & Disposal",
]

_NAMES = "|".join(sorted((re.escape(k) for k in MODULES), key=len, reverse=True))
_SWITCH_PATTERNS = [
    re.compile(rf"^(?:open|switch\s+to|go\s+to|navigate\s+to|take\s+me\s+to)\s+(?:the\s+)?({_NAMES})(?:\s+module)?\s*$"),
    re.compile(rf"^({_NAMES})\s+module\s*$"),
]


def detect_module(query: str) -> Optional[str]:
    q = query.lower().strip().rstrip(".!")
    for pattern in _SWITCH_PATTERNS:
        m = pattern.match(q)
        if m:
            return MODULES[m.group(1)]
    return None


def matches(ctx: QueryContext) -> bool:
    return detect_module(ctx.query) is not None


def produce(ctx: QueryContext) -> HandlerResult:
    module = detect_module(ctx.query)
    logger.debug("Module switch -> %s", module)
    if module == "Assets":
        listing = "\n".join(f"{i}. {name}" for i, name in enumerate(ASSET_SUBMODULES, 1))
        message = f"Switching to {module} module.\n\nAvailable sub-modules:\n{listing}"
    else:
        message = f"Switching to {module} module..."
    return HandlerResult(handled=True, module=module, message=message, needs_async_processing=True)
