# src/revision_kit/citations/verification.py

import asyncio
import logging
import re
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from time import monotonic
from typing import Literal

from revision_kit.observability import names
from revision_kit.observability.base import MetricsHook, NoOpMetricsHook

from .providers import BibliographicProvider

logger = logging.getLogger(__name__)

MAX_QUERY_CHARS = 150
_BRACKETS = re.compile(r"[()\[\]]")

Sleeper = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class VerificationConfig:
    """How existence checks are scheduled across providers.

    ``parallel`` fans out every provider for every citation at once.
    ``serial`` issues one request at a time, sleeping ``request_interval``
    seconds between requests. A lone provider with a ``min_interval`` is always
    checked serially, paced at the larger of the two intervals.
    """

    policy: Literal["parallel", "serial"] = "parallel"
    request_interval: float = 1.1
    provider_timeout: float = 10.0
    max_citations: int = 10

    def __post_init__(self) -> None:
        if self.policy not in ("parallel", "serial"):
            raise ValueError(f"Unknown verification policy: {self.policy}")
        if self.request_interval < 0:
            raise ValueError("request_interval must be >= 0")
        if self.provider_timeout <= 0:
            raise ValueError("provider_timeout must be > 0")
        if self.max_citations <= 0:
            raise ValueError("max_citations must be > 0")


@dataclass(frozen=True)
class CitationVerificationResult:
    verified: list[str] = field(default_factory=list)
    unverified: list[str] = field(default_factory=list)


def citation_query(citation: str) -> str:
    return _BRACKETS.sub("", citation)[:MAX_QUERY_CHARS].strip()


class CitationVerifier:
    """Existence layer of the citation cascade.

    A citation is verified when any provider reports a match. A provider
    that errors or times out counts as "no match" for that citation only.
    """

    def __init__(
        self,
        providers: Sequence[BibliographicProvider],
        config: VerificationConfig = VerificationConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self._providers = list(providers)
        self._config = config
        self._sleep = sleep
        self.metrics_hook = metrics_hook
        self._policy = config.policy
        self._interval = config.request_interval

        for provider in self._providers:
            too_fast = config.request_interval < provider.min_interval
            if config.policy == "serial" and too_fast:
                raise ValueError(
                    f"request_interval {config.request_interval}s is below "
                    f"{provider.name} minimum of {provider.min_interval}s"
                )

        lone = self._providers[0] if len(self._providers) == 1 else None
        if config.policy == "parallel" and lone is not None and lone.min_interval:
            # A single rate-limited provider is never fanned out.
            self._policy = "serial"
            self._interval = max(config.request_interval, lone.min_interval)
            logger.warning(
                "Provider %s is rate limited (%.1fs); checking serially",
                lone.name,
                lone.min_interval,
            )
        elif config.policy == "parallel":
            for provider in self._providers:
                if provider.min_interval > 0:
                    logger.warning(
                        "Provider %s is rate limited (%.1fs) but policy is parallel",
                        provider.name,
                        provider.min_interval,
                    )

        logger.info(
            "Citation verification via %s (policy=%s)",
            ", ".join(p.name for p in self._providers) or "no providers",
            self._policy,
        )

    def is_configured(self) -> bool:
        return bool(self._providers)

    async def check_citations_exist(
        self, citations: Sequence[str]
    ) -> CitationVerificationResult:
        to_check = list(citations)[: self._config.max_citations]
        if not to_check or not self._providers:
            return CitationVerificationResult(verified=[], unverified=list(to_check))

        start = monotonic()
        logger.info("Starting citation check for %d citation(s)", len(to_check))

        if self._policy == "serial":
            found = await self._check_serial(to_check)
        else:
            found = await asyncio.gather(*(self._check_parallel(c) for c in to_check))

        verified = [c for c, ok in zip(to_check, found) if ok]
        unverified = [c for c, ok in zip(to_check, found) if not ok]

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.CITATION_CHECK_DURATION, elapsed_ms)
        self.metrics_hook.increment(names.CITATION_CHECKS_TOTAL, len(to_check))
        self.metrics_hook.increment(names.CITATION_VERIFIED_TOTAL, len(verified))
        self.metrics_hook.increment(names.CITATION_UNVERIFIED_TOTAL, len(unverified))
        logger.info(
            "Citation check done: verified=%d, unverified=%d, latency=%.0fms",
            len(verified),
            len(unverified),
            elapsed_ms,
        )
        return CitationVerificationResult(verified=verified, unverified=unverified)

    async def _check_parallel(self, citation: str) -> bool:
        query = citation_query(citation)
        results = await asyncio.gather(
            *(self._query_provider(p, query) for p in self._providers)
        )
        self._log_result(citation, results)
        return any(results)

    async def _check_serial(self, citations: list[str]) -> list[bool]:
        found: list[bool] = []
        first_request = True
        for citation in citations:
            query = citation_query(citation)
            results: list[bool] = []
            for provider in self._providers:
                if not first_request:
                    await self._sleep(self._interval)
                first_request = False
                results.append(await self._query_provider(provider, query))
                if results[-1]:
                    break
            self._log_result(citation, results)
            found.append(any(results))
        return found

    async def _query_provider(
        self, provider: BibliographicProvider, query: str
    ) -> bool:
        try:
            return await asyncio.wait_for(
                provider.exists(query), timeout=self._config.provider_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "%s timed out after %.1fs",
                provider.name,
                self._config.provider_timeout,
            )
        except Exception as e:
            logger.warning("%s lookup failed: %s", provider.name, e)
        self.metrics_hook.increment(
            names.CITATION_PROVIDER_ERRORS_TOTAL, labels={"provider": provider.name}
        )
        return False

    def _log_result(self, citation: str, results: list[bool]) -> None:
        logger.debug(
            "Checked %.80s: %s",
            citation,
            ", ".join(
                f"{p.name}={'yes' if ok else 'no'}"
                for p, ok in zip(self._providers, results)
            ),
        )
