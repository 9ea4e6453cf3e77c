"""AI Providers — one-shot chat completions against OpenAI and Anthropic.

Invariants:
    - A provider without an API key is skipped (returns None, no network call)
    - Provider failures and empty completions return None and are logged; the caller
      decides whether to fall back or fail
    - Clients are built per call from admin-managed keys and closed afterwards

Design Decisions:
    - No retry/backoff: one attempt per provider, the fallback chain is the resilience
    - Keys are read per request from ai_settings, so no process-wide client is cached
"""

import logging

import anthropic
import openai

from app.core.ai_messages import ProviderConfig

logger = logging.getLogger(__name__)


class AIProviders:
    """Completion calls used by the chat proxy and the prompt improver."""

    def __init__(self, timeout_seconds: float = 60.0):
        self.timeout_seconds = timeout_seconds

    async def openai_complete(
        self,
        config: ProviderConfig,
        messages: list[dict],
        *,
        max_tokens: int,
        temperature: float,
    ) -> str | None:
        if not config.api_key:
            return None
        try:
            async with openai.AsyncOpenAI(
                api_key=config.api_key, timeout=self.timeout_seconds,
            ) as client:
                response = await client.chat.completions.create(
                    model=config.model,
                    messages=messages,
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
        except openai.OpenAIError as e:
            logger.warning(
                f"OpenAI completion failed: {e}",
                extra={"provider": "openai", "model": config.model},
            )
            return None

        content = response.choices[0].message.content if response.choices else None
        return content.strip() if content and content.strip() else None

    async def anthropic_complete(
        self,
        config: ProviderConfig,
        system: str,
        messages: list[dict],
        *,
        max_tokens: int,
    ) -> str | None:
        if not config.api_key:
            return None
        kwargs = {"system": system} if system else {}
        try:
            async with anthropic.AsyncAnthropic(
                api_key=config.api_key, timeout=self.timeout_seconds,
            ) as client:
                response = await client.messages.create(
                    model=config.model,
                    max_tokens=max_tokens,
                    messages=messages,
                    **kwargs,
                )
        except anthropic.AnthropicError as e:
            logger.warning(
                f"Anthropic completion failed: {e}",
                extra={"provider": "anthropic", "model": config.model},
            )
            return None

        text = "".join(
            block.text for block in response.content if block.type == "text"
        ).strip()
        return text or None
