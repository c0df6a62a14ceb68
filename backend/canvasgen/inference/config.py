from typing import Optional

from canvasgen import config
from canvasgen.inference.base import ProviderClient
from canvasgen.inference.chat_completions_client import (
    AnthropicMessagesClient,
    ChatCompletionsClient,
    CustomEndpointClient,
)
from canvasgen.ir.errors import ProviderConfigError

DEFAULT_MODELS = {
    "anthropic": "claude-3-5-sonnet-20241022",
    "openai": "gpt-4",
}

DEFAULT_BASE_URLS = {
    "anthropic": "https://api.anthropic.com/v1",
    "openai": "https://api.openai.com/v1",
}


def get_provider_client(
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> ProviderClient:
    provider = (provider or config.LLM_PROVIDER).lower()
    api_key = api_key or config.LLM_API_KEY
    model = model or config.LLM_MODEL or DEFAULT_MODELS.get(provider, "")
    base_url = base_url or config.LLM_BASE_URL or DEFAULT_BASE_URLS.get(provider)
    timeout = timeout if timeout is not None else config.LLM_TIMEOUT

    if provider == "anthropic":
        return AnthropicMessagesClient(api_key=api_key, model=model, base_url=base_url, timeout=timeout)

    if provider == "openai":
        if not api_key:
            raise ProviderConfigError("OpenAI API key not configured")
        return ChatCompletionsClient(base_url=base_url, model=model, api_key=api_key, timeout=timeout)

    if provider == "custom":
        return CustomEndpointClient(endpoint=base_url, api_key=api_key, timeout=timeout)

    raise ProviderConfigError(f"Unknown AI provider: {provider}")
