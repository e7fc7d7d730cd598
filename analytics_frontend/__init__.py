"""Rendering layer for analytics query results: charts, HTML tables and spreadsheets."""

from __future__ import annotations

__version__ = "0.3.0"
