from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Sequence

import httpx
from langchain_core.messages import BaseMessage

from config.settings import Settings
from ecochat.core.fallback import FallbackResponder
from ecochat.core.prompt import split_messages
from ecochat.providers.base import (
    GenerationProvider,
    ProviderChoice,
    ProviderConfigurationError,
    ProviderError,
    ProviderReply,
)
from ecochat.providers.chat_completions import ChatCompletionsProvider
from ecochat.providers.offline import OfflineProvider


logger = logging.getLogger(__name__)

DEGRADED_NOTE = " (Note: Using fallback due to API issues)"


class ProviderRouter:
    """Selects a provider variant and turns runtime failures into fallbacks.

    A missing credential is raised as ``ProviderConfigurationError`` before
    anything is sent; it is never masked by a fallback reply.
    """

    def __init__(
        self,
        providers: Mapping[ProviderChoice, GenerationProvider],
        responder: FallbackResponder,
    ) -> None:
        self.providers: Dict[ProviderChoice, GenerationProvider] = dict(providers)
        self.responder = responder

    def get(self, choice: ProviderChoice) -> GenerationProvider:
        provider = self.providers.get(choice)
        if provider is None:
            raise ProviderConfigurationError(f"No provider registered for {choice.value}")
        return provider

    def fallback(self, messages: Sequence[BaseMessage]) -> str:
        message, history = split_messages(messages)
        return self.responder.respond(message, history)

    async def dispatch(
        self, messages: Sequence[BaseMessage], choice: ProviderChoice
    ) -> ProviderReply:
        provider = self.get(choice)
        if provider.requires_credential() and not provider.has_credential():
            raise ProviderConfigurationError(f"{provider.credential_name} not configured")

        try:
            text = await provider.dispatch(messages)
        except ProviderError as exc:
            logger.warning("%s failed, using fallback reply: %s", choice.value, exc)
            return ProviderReply(
                text=self.fallback(messages) + DEGRADED_NOTE,
                provider=choice,
                degraded=True,
            )
        return ProviderReply(text=text, provider=choice)


def build_providers(
    settings: Settings,
    responder: FallbackResponder,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[ProviderChoice, GenerationProvider]:
    return {
        ProviderChoice.GROQ: ChatCompletionsProvider(
            name=ProviderChoice.GROQ,
            base_url=settings.groq_base_url,
            model=settings.groq_model,
            api_key=settings.groq_api_key,
            temperature=settings.groq_temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.request_timeout,
            transport=transport,
        ),
        ProviderChoice.OPENAI: ChatCompletionsProvider(
            name=ProviderChoice.OPENAI,
            base_url=settings.openai_base_url,
            model=settings.openai_model,
            api_key=settings.openai_api_key,
            temperature=settings.openai_temperature,
            max_tokens=settings.max_tokens,
            timeout=settings.request_timeout,
            transport=transport,
        ),
        ProviderChoice.HUGGINGFACE: OfflineProvider(ProviderChoice.HUGGINGFACE, responder),
        ProviderChoice.MOCK: OfflineProvider(ProviderChoice.MOCK, responder),
    }
