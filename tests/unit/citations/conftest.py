import asyncio

import pytest


class FakeProvider:
    """In-memory provider: matches queries containing any of ``known``."""

    def __init__(
        self,
        name: str,
        known: tuple[str, ...] = (),
        min_interval: float = 0.0,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.name = name
        self.min_interval = min_interval
        self._known = known
        self._error = error
        self._delay = delay
        self.queries: list[str] = []

    async def exists(self, query: str) -> bool:
        self.queries.append(query)
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return any(k in query for k in self._known)


@pytest.fixture
def fake_provider() -> type[FakeProvider]:
    return FakeProvider
