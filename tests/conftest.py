"""Shared fixtures: a manual clock, default settings and a seeded engine."""

import random
from datetime import date

import pytest

from briefing_canvas.config import EngineSettings
from briefing_canvas.core.clock import ManualClock
from briefing_canvas.core.engine import CanvasEngine

# A Wednesday.
TODAY = date(2026, 1, 14)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def settings():
    return EngineSettings()


@pytest.fixture
def engine(clock, settings):
    return CanvasEngine(clock=clock, settings=settings, rng=random.Random(42), today=TODAY)
