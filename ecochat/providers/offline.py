from __future__ import annotations

from typing import Sequence

from langchain_core.messages import BaseMessage

from ecochat.core.fallback import FallbackResponder
from ecochat.core.prompt import split_messages
from ecochat.providers.base import GenerationProvider, ProviderChoice


class OfflineProvider(GenerationProvider):
    """Answers from the rule-based responder without touching the network.

    Backs MOCK, and HUGGINGFACE whose text models don't hold conversational
    context well enough to be used upstream.
    """

    def __init__(self, name: ProviderChoice, responder: FallbackResponder) -> None:
        self.name = name
        self.responder = responder

    async def dispatch(self, messages: Sequence[BaseMessage]) -> str:
        message, history = split_messages(messages)
        return self.responder.respond(message, history)
