# src/revision_kit/llms/__init__.py

"""Generative collaborator layer for revision-kit.

Provides a thin, stateless abstraction over LLM providers plus the
fail-soft ``GenerativeService`` the analysis pipeline talks to.

Example:
    >>> from revision_kit.llms import GenerativeService, LLMConfig, create_llm_client
    >>>
    >>> config = LLMConfig(provider="openai", model="gpt-4o")
    >>> service = GenerativeService(create_llm_client(config))
    >>> reply = await service.chat([Message(role=Role.USER, content="Hello!")])
"""

from .base import LLMClient, LLMResponse, Message, Role, Usage
from .config import AzureEndpoint, LLMConfig, resolve_azure_openai_endpoint
from .factory import create_llm_client
from .service import GenerativeService, strip_code_fences

__all__ = [
    # Factory
    "create_llm_client",
    # Protocol
    "LLMClient",
    # Facade
    "GenerativeService",
    "strip_code_fences",
    # Config
    "LLMConfig",
    "AzureEndpoint",
    "resolve_azure_openai_endpoint",
    # Types
    "Message",
    "Role",
    "LLMResponse",
    "Usage",
]
