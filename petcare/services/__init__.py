"""
Core services for the application.

This package contains the state and alert engine: the pet registry, the
daily reset scheduler, the action processor, the alert evaluator and the
service that ties them together.
"""

from .action_processor import ActionProcessor
from .alert_evaluator import ALERT_MESSAGES, AlertThresholds, evaluate
from .care_service import PetCareService
from .registry import PetRegistry
from .reset_scheduler import ResetScheduler
from .result import Result

__all__ = [
    "ALERT_MESSAGES",
    "ActionProcessor",
    "AlertThresholds",
    "PetCareService",
    "PetRegistry",
    "ResetScheduler",
    "Result",
    "evaluate",
]
