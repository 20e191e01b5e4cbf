from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from config.settings import Settings, get_settings
from ecochat.core.fallback import FallbackResponder
from ecochat.core.formatting import normalize
from ecochat.core.memory import DEFAULT_SESSION_ID, ChatTurn, InMemorySessionStore, SessionStore
from ecochat.core.prompt import PromptAssembler
from ecochat.providers import ProviderChoice, ProviderRouter, build_providers


logger = logging.getLogger(__name__)


class MissingMessageError(ValueError):
    """The inbound turn carried no message text."""


@dataclass(frozen=True)
class ChatResult:
    reply: str
    api_used: str
    session_id: str
    conversation_length: int
    degraded: bool = False


class ChatAgent:
    """Runs one user turn end to end.

    Session lookup, prompt assembly, provider dispatch, normalization and the
    final append happen in that order. The history snapshot is taken before
    the upstream call and nothing is locked across it, so two concurrent
    turns on one session may interleave their appends.
    """

    def __init__(
        self,
        store: SessionStore,
        router: ProviderRouter,
        assembler: PromptAssembler,
        choice: ProviderChoice,
        settings: Optional[Settings] = None,
    ) -> None:
        self.store = store
        self.router = router
        self.assembler = assembler
        self.choice = choice
        self.settings = settings or get_settings()

    @property
    def responder(self) -> FallbackResponder:
        return self.router.responder

    async def send(self, message: Optional[str], session_id: Optional[str] = None) -> ChatResult:
        if not message:
            raise MissingMessageError("⚠️ No message provided")
        session_id = session_id or DEFAULT_SESSION_ID

        history = self.store.history(session_id)
        logger.info(
            "Incoming chat: session_id=%s history_turns=%s mode=%s",
            session_id,
            len(history),
            self.choice.value,
        )
        messages = self.assembler.assemble(history, message)
        result = await self.router.dispatch(messages, self.choice)
        reply = normalize(result.text)

        self.store.append(session_id, ChatTurn(role="user", content=message))
        self.store.append(session_id, ChatTurn(role="assistant", content=reply))

        return ChatResult(
            reply=reply,
            api_used=self.choice.value,
            session_id=session_id,
            conversation_length=len(self.store.get_or_create(session_id)),
            degraded=result.degraded,
        )

    def fallback_reply(self, message: Optional[str]) -> str:
        return normalize(self.responder.respond(message or "Hello", []))

    def clear(self, session_id: Optional[str] = None) -> str:
        session_id = session_id or DEFAULT_SESSION_ID
        self.store.clear(session_id)
        logger.info("Session cleared: %s", session_id)
        return session_id

    def debug_info(self) -> Dict[str, Any]:
        return {
            "api_choice": self.choice.value,
            "active_conversations": self.store.session_count(),
            "hf_key_present": bool(self.settings.hf_api_key),
            "openai_key_present": bool(self.settings.openai_api_key),
            "groq_key_present": bool(self.settings.groq_api_key),
            "environment": self.settings.app_env,
        }


def resolve_choice(value: Optional[str]) -> ProviderChoice:
    choice = ProviderChoice.parse(value)
    if choice is None:
        logger.warning("Unknown API_CHOICE %r, using MOCK responses", value)
        return ProviderChoice.MOCK
    return choice


def build_agent(
    settings: Optional[Settings] = None,
    store: Optional[SessionStore] = None,
    rng: Optional[random.Random] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ChatAgent:
    settings = settings or get_settings()
    responder = FallbackResponder(rng=rng)
    router = ProviderRouter(build_providers(settings, responder, transport=transport), responder)
    return ChatAgent(
        store=store if store is not None else InMemorySessionStore(window=settings.session_window),
        router=router,
        assembler=PromptAssembler(window=settings.session_window),
        choice=resolve_choice(settings.api_choice),
        settings=settings,
    )
