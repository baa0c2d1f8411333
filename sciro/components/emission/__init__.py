"""
Emission policy component - Evaluation throttling and notify decisions.
"""

from .component import cooldown_elapsed, decide, record_emission, record_evaluation, run
from .models import EmissionDecision, EmissionReason, EmissionState

__all__ = [
    # Component entry point
    "run",
    # Pure functions
    "cooldown_elapsed",
    "decide",
    "record_emission",
    "record_evaluation",
    # Models
    "EmissionDecision",
    "EmissionReason",
    "EmissionState",
]
