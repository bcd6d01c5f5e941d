"""Reporting helpers.

Thin wrappers that turn the pipeline's monthly frames into summary dicts and
CSV-friendly tables.
"""

from .tables import participant_summary, platform_summary, yearly_table

__all__ = [
    "participant_summary",
    "platform_summary",
    "yearly_table",
]
