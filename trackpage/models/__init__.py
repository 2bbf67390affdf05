"""
Data Models Layer.

This package contains the Pydantic models and dataclasses that define the core
data structures used throughout the application: the track manifest, the
reachability check settings and the check report.
"""

from .config import CheckConfig
from .manifest import Manifest, Track
from .report import CheckOutcome, CheckReport, CheckResult, Verdict

__all__ = [
    "CheckConfig",
    "CheckOutcome",
    "CheckReport",
    "CheckResult",
    "Manifest",
    "Track",
    "Verdict",
]
