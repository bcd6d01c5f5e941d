"""Cohort subpackage.

- Participant-growth timeline (linear / exponential monthly joiners)
- Cohort composition: one accumulation series per joining month
"""

from .timeline import ParticipantTimeline, build_participant_timeline, round_preserving_total
from .composer import Cohort, build_cohort_set, build_timeline

__all__ = [
    "ParticipantTimeline",
    "build_participant_timeline",
    "round_preserving_total",
    "Cohort",
    "build_timeline",
    "build_cohort_set",
]
