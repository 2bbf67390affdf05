"""
Concurrent reachability checker for the URLs linked from a manifest.

Every track URL gets its own task. All tasks are started before any is
awaited and the run waits for every one of them, so a slow or dead host only
ever costs its own timeout. Network problems become failed results; a task
that dies for any other reason means the check itself could not be carried
out and aborts the run.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Sequence

import aiohttp

from trackpage.exceptions import CheckInfrastructureError
from trackpage.models.config import CheckConfig
from trackpage.models.manifest import Manifest
from trackpage.models.report import CheckReport, CheckResult
from trackpage.utils.urls import resolve_tracks

log = logging.getLogger(__name__)

# Servers that refuse HEAD are asked again with GET
HEAD_FALLBACK_STATUSES = frozenset({405, 501})

ResultCallback = Callable[[CheckResult], None]


class ReachabilityChecker:
    """Probes track URLs over HTTP concurrently and aggregates the outcomes."""

    def __init__(
        self,
        config: CheckConfig | None = None,
        session: aiohttp.ClientSession | None = None,
        on_result: ResultCallback | None = None,
    ):
        """
        Args:
            config: Timeout, concurrency bound and request method. Defaults apply
                when omitted.
            session: An existing session to reuse. When omitted the checker
                creates one per run and closes it afterwards.
            on_result: Optional callback invoked as each probe completes, in
                completion order.
        """
        self.config = config or CheckConfig()
        self._session = session
        self._on_result = on_result

    def _create_session(self) -> aiohttp.ClientSession:
        connector = aiohttp.TCPConnector(
            # 0 disables the pool limit so unbounded fan-out is not capped at 100
            limit=self.config.max_concurrent or 0,
            ttl_dns_cache=300,
        )
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        return aiohttp.ClientSession(
            connector=connector,
            timeout=timeout,
            headers={"User-Agent": self.config.user_agent},
        )

    async def check(self, targets: Sequence[tuple[str, str]]) -> CheckReport:
        """
        Checks every (name, url) pair and returns the report in input order.

        Raises:
            CheckInfrastructureError: If a probe task was cancelled or crashed with
            something other than a network error.
        """
        targets = list(targets)
        if not targets:
            log.debug("No tracks to check.")
            return CheckReport()

        start_time = time.monotonic()
        owns_session = self._session is None or self._session.closed
        session = self._create_session() if owns_session else self._session
        semaphore = (
            asyncio.Semaphore(self.config.max_concurrent)
            if self.config.max_concurrent
            else None
        )

        log.debug(
            f"Dispatching {len(targets)} checks "
            f"(method={self.config.method}, timeout={self.config.timeout}s, "
            f"max_concurrent={self.config.max_concurrent or 'unbounded'})."
        )
        try:
            tasks = [
                asyncio.create_task(
                    self._check_one(session, name, url, semaphore),
                    name=f"check-{index}",
                )
                for index, (name, url) in enumerate(targets)
            ]
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        finally:
            if owns_session:
                await session.close()

        results: list[CheckResult] = []
        crashed: list[tuple[str, BaseException]] = []
        for (_, url), outcome in zip(targets, outcomes):
            if isinstance(outcome, BaseException):
                crashed.append((url, outcome))
            else:
                results.append(outcome)

        if crashed:
            url, first_error = crashed[0]
            for crashed_url, error in crashed:
                log.debug(
                    f"Check task for '{crashed_url}' did not complete: "
                    f"{type(error).__name__}: {error}"
                )
            raise CheckInfrastructureError(
                f"Failed to join the check tasks: {len(crashed)} of {len(targets)} "
                f"did not complete (first: '{url}': {type(first_error).__name__}"
                f"{': ' + str(first_error) if str(first_error) else ''})"
            ) from first_error

        report = CheckReport(results=results, elapsed=time.monotonic() - start_time)
        log.debug(
            f"Checked {len(results)} URLs in {report.elapsed:.2f}s, "
            f"{len(report.failures)} failed."
        )
        return report

    async def check_manifest(self, manifest: Manifest) -> CheckReport:
        """Resolves every track URL in the manifest and checks them."""
        return await self.check(resolve_tracks(manifest))

    async def _check_one(
        self,
        session: aiohttp.ClientSession,
        name: str,
        url: str,
        semaphore: asyncio.Semaphore | None,
    ) -> CheckResult:
        if semaphore is None:
            result = await self._probe(session, name, url)
        else:
            async with semaphore:
                result = await self._probe(session, name, url)
        if self._on_result:
            self._on_result(result)
        return result

    async def _probe(
        self, session: aiohttp.ClientSession, name: str, url: str
    ) -> CheckResult:
        """Performs a single probe and classifies the outcome."""
        log.debug(f"Checking {url}")
        try:
            # One deadline covers the HEAD request and any GET fallback
            status, reason = await asyncio.wait_for(
                self._request(session, url), timeout=self.config.timeout
            )
        except asyncio.TimeoutError:
            log.debug(f"Check for '{url}' timed out after {self.config.timeout}s.")
            return CheckResult.failure(name, url, "timeout")
        except aiohttp.ClientError as e:
            log.debug(f"Check for '{url}' failed: {type(e).__name__}: {e}")
            return CheckResult.failure(name, url, str(e) or type(e).__name__)
        except ValueError as e:
            # Hosts that cannot be IDNA encoded, e.g. a label over 63 characters
            log.debug(f"Check for '{url}' failed: invalid URL: {e}")
            return CheckResult.failure(name, url, str(e) or type(e).__name__)

        if 200 <= status < 300:
            return CheckResult.success(name, url, status)
        return CheckResult.failure(
            name, url, f"HTTP {status} {reason}".rstrip(), status=status
        )

    async def _request(
        self, session: aiohttp.ClientSession, url: str
    ) -> tuple[int, str]:
        """Issues the request, following redirects, and returns the final status."""
        method = self.config.method
        async with session.request(method, url, allow_redirects=True) as response:
            status, reason = response.status, response.reason or ""

        if method == "HEAD" and status in HEAD_FALLBACK_STATUSES:
            log.debug(f"HEAD not allowed for '{url}' (HTTP {status}), retrying as GET.")
            async with session.get(url, allow_redirects=True) as response:
                status, reason = response.status, response.reason or ""

        return status, reason


def run_check(
    targets: Sequence[tuple[str, str]],
    config: CheckConfig | None = None,
    on_result: ResultCallback | None = None,
) -> CheckReport:
    """Synchronous entry point: runs a full check on a fresh event loop."""
    checker = ReachabilityChecker(config, on_result=on_result)
    return asyncio.run(checker.check(targets))
