"""Incremental search."""

from .session import Direction, SearchHit, SearchOverlay, SearchSession, SearchStep

__all__ = ["Direction", "SearchHit", "SearchOverlay", "SearchSession", "SearchStep"]
