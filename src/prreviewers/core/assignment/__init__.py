"""Reviewer selection, reassignment, batch deactivation and statistics."""
from .candidates import eligible_reviewers
from .deactivation import BatchDeactivationOrchestrator
from .engine import AssignmentEngine
from .selector import choose, choose_one, pick_indices
from .statistics import StatisticsAggregator

__all__ = [
    "AssignmentEngine",
    "BatchDeactivationOrchestrator",
    "StatisticsAggregator",
    "choose",
    "choose_one",
    "eligible_reviewers",
    "pick_indices",
]
