from ecochat.core.fallback import FallbackResponder
from ecochat.core.formatting import normalize
from ecochat.core.memory import ChatTurn, InMemorySessionStore, Session, SessionStore
from ecochat.core.prompt import SYSTEM_PROMPT, PromptAssembler

__all__ = [
    "ChatTurn",
    "FallbackResponder",
    "InMemorySessionStore",
    "PromptAssembler",
    "SYSTEM_PROMPT",
    "Session",
    "SessionStore",
    "normalize",
]
