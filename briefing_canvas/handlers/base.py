"""Handler protocol: what a handler sees and what it hands back."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date as Date
from typing import Callable, List, Optional

from briefing_canvas.content.visits import ParsedVisit
from briefing_canvas.core.models import Section


@dataclass
class QueryContext:
    """Everything a handler may read. Handlers never mutate it."""

    query: str  # marker stripped
    is_recommendation: bool = False
    sections: List[Section] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random)
    today: Date = field(default_factory=Date.today)

    @property
    def lowered(self) -> str:
        return self.query.lower()


@dataclass
class HandlerResult:
    handled: bool = False
    sections: List[Section] = field(default_factory=list)
    message: Optional[str] = None
    vip_visit: Optional[ParsedVisit] = None
    module: Optional[str] = None
    # Effects land after the handler's delay instead of synchronously.
    needs_async_processing: bool = False


DECLINED = HandlerResult()


@dataclass
class Handler:
    """One (predicate, producer) pair in the dispatch chain.

    ``delay`` names the ``EngineSettings`` field that sets how long the
    engine waits before applying the result; None applies it at once.
    """

    name: str
    matches: Callable[[QueryContext], bool]
    produce: Callable[[QueryContext], HandlerResult]
    delay: Optional[str] = "thinking_delay"
