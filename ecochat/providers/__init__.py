from ecochat.providers.base import (
    GenerationProvider,
    ProviderChoice,
    ProviderConfigurationError,
    ProviderError,
    ProviderReply,
)
from ecochat.providers.chat_completions import ChatCompletionsProvider
from ecochat.providers.offline import OfflineProvider
from ecochat.providers.router import DEGRADED_NOTE, ProviderRouter, build_providers

__all__ = [
    "ChatCompletionsProvider",
    "DEGRADED_NOTE",
    "GenerationProvider",
    "OfflineProvider",
    "ProviderChoice",
    "ProviderConfigurationError",
    "ProviderError",
    "ProviderReply",
    "ProviderRouter",
    "build_providers",
]
