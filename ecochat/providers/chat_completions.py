from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import httpx
from langchain_core.messages import BaseMessage

from ecochat.core.prompt import to_wire_messages
from ecochat.providers.base import (
    GenerationProvider,
    ProviderChoice,
    ProviderConfigurationError,
    ProviderError,
)


logger = logging.getLogger(__name__)


def _extract_content(data: Any) -> str:
    if not isinstance(data, dict):
        raise ProviderError("Provider returned a non-object payload")
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        raise ProviderError("Provider returned no choices")
    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content.strip():
        raise ProviderError("Provider returned an empty completion")
    return content


class ChatCompletionsProvider(GenerationProvider):
    """Provider reached through an OpenAI-compatible ``/chat/completions`` API.

    One request per call, no retries. Every failure is raised as
    ``ProviderError`` so the router can substitute a fallback reply.
    """

    def __init__(
        self,
        name: ProviderChoice,
        base_url: str,
        model: str,
        api_key: Optional[str],
        temperature: float,
        max_tokens: int = 300,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.name = name
        self.endpoint = base_url.rstrip("/") + "/chat/completions"
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._transport = transport

    def requires_credential(self) -> bool:
        return True

    def has_credential(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, messages: Sequence[BaseMessage]) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": to_wire_messages(messages),
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    async def dispatch(self, messages: Sequence[BaseMessage]) -> str:
        if not self.api_key:
            raise ProviderConfigurationError(f"{self.credential_name} not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.endpoint, json=self.build_payload(messages), headers=headers
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                f"{self.name.value} API returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"{self.name.value} API call failed: {exc}") from exc
        except ValueError as exc:
            raise ProviderError(f"{self.name.value} API returned invalid JSON") from exc

        content = _extract_content(data)
        logger.info("%s replied with %s chars", self.name.value, len(content))
        return content
