"""Server-side conversation memory.

Each session is a short, append-only list of turns keyed by the client's
session id. Only the most recent turns are kept so upstream payloads stay
inside provider token limits. Memory lives for the life of the process;
swap in another ``SessionStore`` for persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_SESSION_ID = "default"
DEFAULT_WINDOW = 10


class ChatTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant", "system"] = Field(
        ..., description="'user', 'assistant' or 'system'"
    )
    content: str


@dataclass
class Session:
    session_id: str
    turns: List[ChatTurn] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.turns)


class SessionStore(ABC):
    @abstractmethod
    def get_or_create(self, session_id: str) -> Session: ...

    @abstractmethod
    def append(self, session_id: str, turn: ChatTurn) -> None: ...

    @abstractmethod
    def clear(self, session_id: str) -> None: ...

    @abstractmethod
    def session_count(self) -> int: ...

    def history(self, session_id: str) -> List[ChatTurn]:
        """Snapshot of a session's turns, safe to hold across an await."""
        return list(self.get_or_create(session_id).turns)


class InMemorySessionStore(SessionStore):
    """Process-wide session map with FIFO eviction past ``window`` turns."""

    def __init__(self, window: int = DEFAULT_WINDOW) -> None:
        if window < 1:
            raise ValueError("window must be at least 1")
        self.window = window
        self._sessions: Dict[str, Session] = {}

    def get_or_create(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            session = Session(session_id=session_id)
            self._sessions[session_id] = session
        return session

    def history(self, session_id: str) -> List[ChatTurn]:
        session = self._sessions.get(session_id)
        return list(session.turns) if session is not None else []

    def append(self, session_id: str, turn: ChatTurn) -> None:
        turns = self.get_or_create(session_id).turns
        turns.append(turn)
        overflow = len(turns) - self.window
        if overflow > 0:
            del turns[:overflow]

    def clear(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def session_count(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
