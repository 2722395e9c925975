"""Briefing canvas: routes free-text queries to canned briefs and reveals
them progressively, as if generated live."""

__version__ = "0.1.0"
