from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from langchain_core.messages import BaseMessage


class ProviderChoice(str, Enum):
    GROQ = "GROQ"
    OPENAI = "OPENAI"
    HUGGINGFACE = "HUGGINGFACE"
    MOCK = "MOCK"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ProviderChoice"]:
        try:
            return cls((value or "").strip().upper())
        except ValueError:
            return None


CREDENTIAL_NAMES = {
    ProviderChoice.GROQ: "GROQ_API_KEY",
    ProviderChoice.OPENAI: "OPENAI_API_KEY",
    ProviderChoice.HUGGINGFACE: "HF_API_KEY",
}


class ProviderError(RuntimeError):
    """A reachable provider failed at runtime; callers degrade to fallback."""


class ProviderConfigurationError(RuntimeError):
    """The selected provider cannot be called because it lacks a credential."""


@dataclass(frozen=True)
class ProviderReply:
    text: str
    provider: ProviderChoice
    degraded: bool = False


class GenerationProvider(ABC):
    name: ProviderChoice

    @abstractmethod
    async def dispatch(self, messages: Sequence[BaseMessage]) -> str: ...

    def requires_credential(self) -> bool:
        return False

    def has_credential(self) -> bool:
        return True

    @property
    def credential_name(self) -> str:
        return CREDENTIAL_NAMES.get(self.name, f"{self.name.value}_API_KEY")
