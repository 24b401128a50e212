# tests/unit/llms/test_factory.py

from unittest.mock import patch

import pytest

from revision_kit.llms import (
    LLMConfig,
    create_llm_client,
    resolve_azure_openai_endpoint,
)
from revision_kit.llms.anthropic import AnthropicLLMClient
from revision_kit.llms.openai import OpenAILLMClient


class TestFactory:
    def test_create_openai_client(self) -> None:
        """Test creating OpenAI client."""
        with patch("revision_kit.llms.openai.AsyncOpenAI"):
            config = LLMConfig(provider="openai", model="gpt-4o", api_key="test")
            client = create_llm_client(config)
            assert isinstance(client, OpenAILLMClient)

    def test_create_azure_client(self) -> None:
        """Test that azure builds an OpenAI-compatible client."""
        with patch("revision_kit.llms.openai.AsyncOpenAI") as mock_openai:
            config = LLMConfig(
                provider="azure",
                model="thesis-gpt4o",
                api_key="test",
                base_url="https://res.openai.azure.com/openai/v1/",
            )
            client = create_llm_client(config)

            assert isinstance(client, OpenAILLMClient)
            assert client._provider == "azure"
            assert mock_openai.call_args.kwargs["base_url"] == (
                "https://res.openai.azure.com/openai/v1/"
            )

    def test_azure_deployment_url_supplies_model(self) -> None:
        """An empty model takes the deployment named in the endpoint URL."""
        with patch("revision_kit.llms.openai.AsyncOpenAI") as mock_openai:
            config = LLMConfig(
                provider="azure",
                model="",
                base_url=(
                    "https://res.openai.azure.com/openai/deployments/thesis/"
                    "chat/completions?api-version=2024-02-01"
                ),
            )
            client = create_llm_client(config)

            assert client._model == "thesis"
            assert mock_openai.call_args.kwargs["base_url"] == (
                "https://res.openai.azure.com/openai/v1/"
            )

    def test_azure_without_deployment_raises(self) -> None:
        config = LLMConfig(
            provider="azure", model="", base_url="https://res.openai.azure.com"
        )
        with pytest.raises(ValueError, match="deployment"):
            create_llm_client(config)

    def test_azure_without_base_url_raises(self) -> None:
        config = LLMConfig(provider="azure", model="thesis-gpt4o")
        with pytest.raises(ValueError, match="requires base_url"):
            create_llm_client(config)

    def test_create_anthropic_client(self) -> None:
        """Test creating Anthropic client."""
        with patch("revision_kit.llms.anthropic.AsyncAnthropic"):
            config = LLMConfig(
                provider="anthropic", model="claude-sonnet-4-20250514", api_key="test"
            )
            client = create_llm_client(config)
            assert isinstance(client, AnthropicLLMClient)

    def test_unknown_provider_raises(self) -> None:
        """Test that unknown provider raises ValueError."""
        config = LLMConfig(provider="unknown", model="model")  # type: ignore
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            create_llm_client(config)

    def test_config_values_passed_through(self) -> None:
        """Test that config values are passed to client."""
        with patch("revision_kit.llms.openai.AsyncOpenAI") as mock_openai:
            config = LLMConfig(
                provider="openai",
                model="gpt-4-turbo",
                api_key="my-key",
                timeout=60.0,
                max_retries=5,
            )
            client = create_llm_client(config)

            assert client._model == "gpt-4-turbo"
            assert client._max_retries == 5
            mock_openai.assert_called_once_with(
                api_key="my-key", base_url=None, timeout=60.0
            )


class TestResolveAzureEndpoint:
    def test_bare_resource_url(self) -> None:
        result = resolve_azure_openai_endpoint("https://res.openai.azure.com", "gpt4o")

        assert result.base_url == "https://res.openai.azure.com/openai/v1/"
        assert result.deployment == "gpt4o"

    def test_deployment_taken_from_path(self) -> None:
        """A full deployment URL yields both the base URL and the deployment."""
        result = resolve_azure_openai_endpoint(
            "https://res.openai.azure.com/openai/deployments/thesis%20model/"
            "chat/completions?api-version=2024-02-01"
        )

        assert result.base_url == "https://res.openai.azure.com/openai/v1/"
        assert result.deployment == "thesis model"

    def test_explicit_deployment_wins(self) -> None:
        result = resolve_azure_openai_endpoint(
            "https://res.openai.azure.com/openai/deployments/old/", "new"
        )

        assert result.deployment == "new"

    def test_missing_endpoint(self) -> None:
        result = resolve_azure_openai_endpoint(None, " ")

        assert result.base_url is None
        assert result.deployment is None
