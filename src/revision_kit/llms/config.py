# src/revision_kit/llms/config.py

import re
from dataclasses import dataclass
from typing import Literal
from urllib.parse import unquote, urlsplit

_DEPLOYMENT_IN_PATH = re.compile(r"/openai/deployments/([^/]+)", re.IGNORECASE)


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for LLM clients.

    Immutable. Explicit. No magic defaults from environment.
    """

    provider: Literal["openai", "azure", "anthropic"]
    model: str
    api_key: str | None = None  # Falls back to provider's env var
    base_url: str | None = None  # Required for azure
    timeout: float = 30.0
    max_retries: int = 3
    temperature: float = 0.7


@dataclass(frozen=True)
class AzureEndpoint:
    base_url: str | None
    deployment: str | None


def resolve_azure_openai_endpoint(
    endpoint: str | None, deployment: str | None = None
) -> AzureEndpoint:
    """Map an Azure OpenAI endpoint to an OpenAI-compatible /openai/v1/ base URL.

    Accepts a bare resource URL, a /openai/v1 URL, or a full
    /openai/deployments/<name>/... URL. An explicit deployment wins over one
    found in the path.
    """
    endpoint = (endpoint or "").strip()
    explicit = (deployment or "").strip() or None
    if not endpoint:
        return AzureEndpoint(base_url=None, deployment=explicit)

    parts = urlsplit(endpoint)
    if not parts.scheme or not parts.netloc:
        return AzureEndpoint(base_url=endpoint, deployment=explicit)

    match = _DEPLOYMENT_IN_PATH.search(parts.path or "/")
    from_path = unquote(match.group(1)) if match else None
    return AzureEndpoint(
        base_url=f"{parts.scheme}://{parts.netloc}/openai/v1/",
        deployment=explicit or from_path,
    )
