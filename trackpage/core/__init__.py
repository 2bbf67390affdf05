"""
Core application engine.

The `ReachabilityChecker` fans one probe out per track URL, joins them all,
and folds the outcomes into a single `CheckReport`.
"""

from .checker import ReachabilityChecker, run_check

__all__ = ["ReachabilityChecker", "run_check"]
