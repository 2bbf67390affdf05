"""
Result types produced by the reachability checker.
"""

from dataclasses import dataclass, field
from enum import Enum

from trackpage.exceptions import TrackUnreachableError


class CheckOutcome(Enum):
    """Outcome of probing a single URL."""

    SUCCESS = "success"
    FAILURE = "failure"


class Verdict(Enum):
    """Aggregate verdict of a whole check run."""

    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class CheckResult:
    """The outcome of a single reachability probe."""

    name: str
    url: str
    outcome: CheckOutcome
    status: int | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is CheckOutcome.SUCCESS

    @classmethod
    def success(cls, name: str, url: str, status: int) -> "CheckResult":
        return cls(name=name, url=url, outcome=CheckOutcome.SUCCESS, status=status)

    @classmethod
    def failure(
        cls, name: str, url: str, reason: str, status: int | None = None
    ) -> "CheckResult":
        return cls(
            name=name,
            url=url,
            outcome=CheckOutcome.FAILURE,
            status=status,
            reason=reason,
        )


@dataclass
class CheckReport:
    """Aggregated results of one check run, in input order."""

    results: list[CheckResult] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def overall(self) -> Verdict:
        return Verdict.FAIL if self.failures else Verdict.PASS

    @property
    def failures(self) -> list[CheckResult]:
        return [r for r in self.results if not r.ok]

    @property
    def passed(self) -> list[CheckResult]:
        return [r for r in self.results if r.ok]

    def raise_for_failures(self) -> None:
        """Raises TrackUnreachableError if any track failed its check."""
        if failures := self.failures:
            raise TrackUnreachableError(failures)
