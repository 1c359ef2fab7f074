# src/llm/client_factory.py — v5
"""Oracle client construction.

Adapters are listed by dotted class path and imported only when selected.
The process entry point builds one client from ORACLE_* settings and hands
it to the AnalysisDispatcher.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from truthgen.config.settings import Settings
from truthgen.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

_PROVIDER_REGISTRY: dict[str, str] = {
    "openai": "truthgen.llm.adapters.openai_adapter.OpenAIAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: Any,
) -> BaseLLMClient:
    """Build the adapter registered under ``provider``.

    ``api_key``, ``base_url`` and ``timeout`` come from settings unless
    passed explicitly in ``kwargs``.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    class_path = _PROVIDER_REGISTRY.get(provider)
    if class_path is None:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    init_kwargs: dict[str, Any] = {"model": model}
    if settings is not None:
        init_kwargs.update(
            api_key=settings.oracle_api_key,
            base_url=settings.oracle_base_url,
            timeout=settings.oracle_timeout_seconds,
        )
    init_kwargs.update(kwargs)

    adapter_cls = _import_class(class_path)
    logger.debug("Creating oracle client: provider=%s, model=%s", provider, model)
    return adapter_cls(**init_kwargs)


def create_oracle_client(settings: Settings) -> BaseLLMClient:
    """Client described by ORACLE_PROVIDER / ORACLE_MODEL."""
    return create_llm_client(
        settings.oracle_provider, settings.oracle_model, settings=settings,
    )


def _import_class(class_path: str) -> type:
    module_path, class_name = class_path.rsplit(".", 1)
    return getattr(importlib.import_module(module_path), class_name)
