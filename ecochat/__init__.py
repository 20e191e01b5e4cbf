"""EcoChat conversation orchestration."""

from ecochat.agent import ChatAgent, ChatResult, MissingMessageError, build_agent

__all__ = ["ChatAgent", "ChatResult", "MissingMessageError", "build_agent"]
