import logging
from typing import Any, Dict, List, Optional

import requests

from canvasgen.inference.base import (
    ProviderClient,
    ProviderContext,
    ProviderResponse,
)
from canvasgen.inference.prompt import build_user_content
from canvasgen.ir.errors import ProviderConfigError, UpstreamProviderError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60


def post_json(
    provider: str,
    url: str,
    payload: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Dict[str, Any]:
    """Single POST, no retry. Every transport or HTTP failure becomes UpstreamProviderError."""
    try:
        response = requests.post(url, json=payload, headers=headers, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        reason = e.response.reason if e.response is not None else str(e)
        logger.error("%s API error: %s %s", provider, status, reason)
        raise UpstreamProviderError(f"{provider} API error: {status} {reason}", status_code=status) from e
    except requests.Timeout as e:
        logger.error("%s API timed out after %ss", provider, timeout)
        raise UpstreamProviderError(f"{provider} API timed out after {timeout}s") from e
    except requests.RequestException as e:
        logger.error("%s API request failed: %s", provider, e)
        raise UpstreamProviderError(f"{provider} API request failed: {e}") from e
    except ValueError as e:
        # body was not JSON
        raise UpstreamProviderError(f"{provider} API returned invalid JSON") from e


class ChatCompletionsClient(ProviderClient):
    """OpenAI-compatible `/chat/completions` endpoint."""

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: Optional[str] = None,
        temperature: float = 0.7,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.timeout = timeout

    def send_message(self, text: str, context: ProviderContext) -> ProviderResponse:
        messages: List[Dict[str, str]] = []
        if context.system_prompt:
            messages.append({"role": "system", "content": context.system_prompt})
        messages.extend(m.to_dict() for m in context.history)
        messages.append({"role": "user", "content": build_user_content(text, context.canvas_summary)})

        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else None

        data = post_json(
            "OpenAI",
            f"{self.base_url}/chat/completions",
            {
                "model": self.model,
                "messages": messages,
                "temperature": self.temperature,
            },
            headers=headers,
            timeout=self.timeout,
        )

        try:
            content = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise UpstreamProviderError("OpenAI API returned an unexpected payload") from e

        return ProviderResponse(message=content)


class AnthropicMessagesClient(ProviderClient):
    """Anthropic `/v1/messages` endpoint."""

    API_VERSION = "2023-06-01"
    MAX_TOKENS = 4096

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str = "https://api.anthropic.com/v1",
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if not api_key:
            raise ProviderConfigError("Anthropic API key not configured")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def send_message(self, text: str, context: ProviderContext) -> ProviderResponse:
        messages = [m.to_dict() for m in context.history if m.role != "system"]
        messages.append({"role": "user", "content": build_user_content(text, context.canvas_summary)})

        data = post_json(
            "Anthropic",
            f"{self.base_url}/messages",
            {
                "model": self.model,
                "max_tokens": self.MAX_TOKENS,
                "system": context.system_prompt,
                "messages": messages,
            },
            headers={
                "x-api-key": self.api_key,
                "anthropic-version": self.API_VERSION,
            },
            timeout=self.timeout,
        )

        blocks = data.get("content") if isinstance(data, dict) else None
        if not isinstance(blocks, list):
            raise UpstreamProviderError("Anthropic API response has no content blocks")

        content = "".join(
            b.get("text", "") for b in blocks if isinstance(b, dict) and b.get("type", "text") == "text"
        )
        return ProviderResponse(message=content)


class CustomEndpointClient(ProviderClient):
    """
    Any endpoint accepting `{message, canvasContext, history}` and answering
    `{message, actions?}`.
    """

    def __init__(self, endpoint: Optional[str], api_key: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT):
        if not endpoint:
            raise ProviderConfigError("Custom API endpoint not configured")
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout

    def send_message(self, text: str, context: ProviderContext) -> ProviderResponse:
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else None

        data = post_json(
            "Custom",
            self.endpoint,
            {
                "message": text,
                "canvasContext": context.canvas_summary,
                "history": [m.to_dict() for m in context.history],
            },
            headers=headers,
            timeout=self.timeout,
        )

        if not isinstance(data, dict) or not isinstance(data.get("message"), str):
            raise UpstreamProviderError("Custom API response has no message")

        actions = data.get("actions") or []
        return ProviderResponse(message=data["message"], actions=list(actions))
