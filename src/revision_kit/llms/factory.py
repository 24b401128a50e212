# src/revision_kit/llms/factory.py

import logging

from revision_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient
from .config import LLMConfig, resolve_azure_openai_endpoint

logger = logging.getLogger(__name__)


def create_llm_client(
    config: LLMConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LLMClient:
    """Create an LLM client from config.

    For ``azure`` the ``base_url`` may be any Azure OpenAI endpoint form (bare
    resource, ``/openai/v1/`` or a full deployment URL); it is rewritten to the
    OpenAI-compatible base URL. An empty ``model`` takes the deployment name
    found in the URL.

    Raises:
        ValueError: If provider is unknown, or azure is missing its base_url.

    Example:
        >>> config = LLMConfig(provider="azure", model="", base_url=endpoint)
        >>> client = create_llm_client(config)
    """
    if config.provider in ("openai", "azure"):
        from .openai import OpenAILLMClient

        base_url, model = config.base_url, config.model
        if config.provider == "azure":
            endpoint = resolve_azure_openai_endpoint(config.base_url, config.model)
            if not endpoint.base_url or not endpoint.deployment:
                raise ValueError("Azure provider requires base_url and a deployment")
            base_url, model = endpoint.base_url, endpoint.deployment
            logger.debug("Resolved Azure deployment %s at %s", model, base_url)

        return OpenAILLMClient(
            api_key=config.api_key,
            model=model,
            base_url=base_url,
            timeout=config.timeout,
            max_retries=config.max_retries,
            provider=config.provider,
            metrics_hook=metrics_hook,
        )

    if config.provider == "anthropic":
        from .anthropic import AnthropicLLMClient

        return AnthropicLLMClient(
            api_key=config.api_key,
            model=config.model,
            timeout=config.timeout,
            max_retries=config.max_retries,
            metrics_hook=metrics_hook,
        )

    raise ValueError(f"Unknown LLM provider: {config.provider}")
