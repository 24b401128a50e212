# src/revision_kit/citations/providers.py

import logging
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

DEFAULT_CONTACT = "support@revision-kit.dev"

CROSSREF_URL = "https://api.crossref.org/works"
OPENALEX_URL = "https://api.openalex.org/works"
SEMANTIC_SCHOLAR_URL = "https://api.semanticscholar.org/graph/v1/paper/search"


class BibliographicProvider(Protocol):
    """External search that answers "does a work matching this query exist?".

    Implementations may raise on transport errors; the verifier isolates them.
    """

    name: str
    # Minimum seconds between two requests; 0 means unrestricted.
    min_interval: float

    async def exists(self, query: str) -> bool: ...


class HttpBibliographicProvider:
    name = "http"
    min_interval = 0.0

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def exists(self, query: str) -> bool:
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            res = await client.get(
                self._url, params=self._params(query), headers=self._headers()
            )

        if res.status_code != 200:
            logger.warning("%s.bad_status %d", self.name, res.status_code)
            return False

        found = self._has_match(res.json())
        logger.debug("%s.lookup found=%s query=%.80s", self.name, found, query)
        return found

    def _params(self, query: str) -> dict[str, str]:
        raise NotImplementedError

    def _headers(self) -> dict[str, str]:
        return {}

    def _has_match(self, payload: Any) -> bool:
        raise NotImplementedError


class CrossRefProvider(HttpBibliographicProvider):
    name = "crossref"

    def __init__(
        self,
        contact_email: str = DEFAULT_CONTACT,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(CROSSREF_URL, timeout=timeout, transport=transport)
        self._contact_email = contact_email

    def _params(self, query: str) -> dict[str, str]:
        return {"query": query, "rows": "1", "select": "DOI"}

    def _headers(self) -> dict[str, str]:
        # Identified requests are routed to CrossRef's polite pool.
        return {"User-Agent": f"revision-kit/0.1 (mailto:{self._contact_email})"}

    def _has_match(self, payload: Any) -> bool:
        return bool((payload.get("message") or {}).get("items"))


class OpenAlexProvider(HttpBibliographicProvider):
    name = "openalex"

    def __init__(
        self,
        api_key: str | None = None,
        contact_email: str = DEFAULT_CONTACT,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(OPENALEX_URL, timeout=timeout, transport=transport)
        self._api_key = api_key
        self._contact_email = contact_email
        logger.info(
            "OpenAlex provider %s",
            "authenticated" if api_key else "using polite pool",
        )

    def _params(self, query: str) -> dict[str, str]:
        params = {"search": query, "per-page": "1"}
        if self._api_key:
            params["api_key"] = self._api_key
        else:
            params["mailto"] = self._contact_email
        return params

    def _has_match(self, payload: Any) -> bool:
        return bool(payload.get("results"))


class SemanticScholarProvider(HttpBibliographicProvider):
    name = "semanticscholar"
    # Unauthenticated Graph API allows roughly one request per second.
    min_interval = 1.1

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(SEMANTIC_SCHOLAR_URL, timeout=timeout, transport=transport)
        self._api_key = api_key

    def _params(self, query: str) -> dict[str, str]:
        return {"query": query, "limit": "1", "fields": "title,year"}

    def _headers(self) -> dict[str, str]:
        return {"x-api-key": self._api_key} if self._api_key else {}

    def _has_match(self, payload: Any) -> bool:
        return bool(payload.get("data"))
