"""AI Assistant — chat proxy with provider fallback, prompt improvement, admin settings.

Invariants:
    - Settings are read from ai_settings on every call (admins can rotate keys live)
    - OpenAI is tried first; Anthropic only when OpenAI yields nothing
    - No provider answer → AIServiceUnavailableError (503)
    - Replies have **bold** markers removed before they leave the service
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.ai_messages import (
    CHAT_MAX_TOKENS, CHAT_TEMPERATURE, PROMPT_MAX_TOKENS, anthropic_config,
    build_chat_messages, improve_prompt_messages, map_settings, openai_config,
    split_for_anthropic, strip_bold, system_prompt,
)
from app.core.errors import (
    AIProviderError, AIServiceUnavailableError, ErrorContext, RequestRejectedError,
)
from app.infrastructure.ai_providers import AIProviders
from app.models import AISetting

logger = logging.getLogger(__name__)


async def load_settings(db: AsyncSession) -> dict[str, str]:
    result = await db.execute(select(AISetting.setting_key, AISetting.setting_value))
    return map_settings(result.all())


async def chat(
    db: AsyncSession,
    providers: AIProviders,
    message: str,
    history: list[dict],
) -> tuple[str, str]:
    """One chat turn; returns (reply, provider name)."""
    settings = await load_settings(db)
    prompt = system_prompt(settings)
    messages = build_chat_messages(prompt, history, message)

    reply = await providers.openai_complete(
        openai_config(settings), messages,
        max_tokens=CHAT_MAX_TOKENS, temperature=CHAT_TEMPERATURE,
    )
    provider = "openai"
    if not reply:
        system, conversation = split_for_anthropic(messages, prompt)
        reply = await providers.anthropic_complete(
            anthropic_config(settings), system, conversation,
            max_tokens=CHAT_MAX_TOKENS,
        )
        provider = "anthropic"
    if not reply:
        logger.error("No AI provider produced a reply")
        raise AIServiceUnavailableError()

    logger.info("AI chat answered", extra={"provider": provider})
    return strip_bold(reply), provider


async def improve_prompt(db: AsyncSession, providers: AIProviders, prompt: str) -> str:
    settings = await load_settings(db)
    config = openai_config(settings)
    if not config.api_key:
        raise RequestRejectedError("OpenAI API key not configured")

    improved = await providers.openai_complete(
        config, improve_prompt_messages(prompt),
        max_tokens=PROMPT_MAX_TOKENS, temperature=CHAT_TEMPERATURE,
    )
    if not improved:
        raise AIProviderError(
            "Failed to generate improved prompt", ErrorContext(provider="openai"),
        )
    return improved


# ─── Admin settings ──────────────────────────────────────────────

async def list_settings(db: AsyncSession) -> list[AISetting]:
    result = await db.execute(select(AISetting).order_by(AISetting.setting_key))
    return list(result.scalars().all())


async def upsert_setting(
    db: AsyncSession, key: str, value: str, description: str | None,
) -> AISetting:
    setting = await db.get(AISetting, key)
    if setting is None:
        setting = AISetting(setting_key=key, setting_value=value, description=description)
        db.add(setting)
    else:
        setting.setting_value = value
        if description is not None:
            setting.description = description
    await db.flush()
    logger.info(f"AI setting '{key}' updated")
    return setting
